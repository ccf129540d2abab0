import pydantic
import pytest

from specguard.parser.base import (
    Action,
    ApiKeyAuth,
    BearerAuth,
    CanonicalAPI,
    Field,
    NoAuth,
    OAuth2Auth,
    ParseFailure,
)


class TestField:
    def test_create_minimal_field(self):
        f = Field(key="name", label="Name", type="string", required=True)
        assert f.key == "name"
        assert f.properties is None
        assert f.items is None

    def test_rejects_unknown_type(self):
        with pytest.raises(pydantic.ValidationError):
            Field(key="id", label="Id", type="integer", required=False)

    def test_nested_field_serializes_without_empty_keys(self):
        f = Field(
            key="owner",
            label="Owner",
            type="object",
            required=False,
            properties=[Field(key="name", label="Name", type="string", required=True)],
        )
        data = f.to_json_dict()
        assert data["properties"][0] == {"key": "name", "label": "Name", "type": "string", "required": True}
        assert "items" not in data

    def test_fields_are_frozen(self):
        f = Field(key="name", label="Name", type="string", required=True)
        with pytest.raises(pydantic.ValidationError):
            f.required = False


class TestAction:
    def test_key_is_method_and_path(self):
        a = Action(slug="getpet", label="Get pet", description="", method="GET", path="/pets/{petId}")
        assert a.key == "GET /pets/{petId}"
        assert a.path_params == []
        assert a.tags is None

    def test_rejects_unsupported_method(self):
        with pytest.raises(pydantic.ValidationError):
            Action(slug="x", label="X", description="", method="HEAD", path="/x")

    def test_serializes_with_camel_case_keys(self):
        a = Action(slug="listpets", label="List pets", description="", method="GET", path="/pets")
        data = a.to_json_dict()
        assert set(data) >= {"pathParams", "queryParams", "bodySchema", "responseSchema"}


class TestAuthDescriptor:
    def test_api_key_location_serialized_as_in(self):
        auth = ApiKeyAuth(name="X-API-Key", location="header")
        assert auth.to_json_dict() == {"type": "apiKey", "name": "X-API-Key", "in": "header"}

    def test_oauth2_serialization(self):
        auth = OAuth2Auth(authorization_url="https://a", token_url="https://t", scopes={"read": "Read"})
        assert auth.to_json_dict() == {
            "type": "oauth2",
            "authorizationUrl": "https://a",
            "tokenUrl": "https://t",
            "scopes": {"read": "Read"},
        }

    def test_api_defaults_to_no_auth(self):
        api = CanonicalAPI(name="x", description="", base_url="https://api.example.com")
        assert isinstance(api.auth, NoAuth)
        assert api.auth.type == "none"

    def test_round_trip_restores_auth_variant(self):
        api = CanonicalAPI(
            name="x",
            description="",
            base_url="https://api.example.com",
            auth=BearerAuth(scheme="basic"),
        )
        restored = CanonicalAPI.model_validate(api.to_json_dict())
        assert isinstance(restored.auth, BearerAuth)
        assert restored.auth.scheme == "basic"
        assert restored.base_url == "https://api.example.com"


class TestParseFailure:
    def test_defaults(self):
        failure = ParseFailure(error="Failed to parse specification")
        assert failure.success is False
        assert failure.details is None
        assert failure.reason == "parse-error"
