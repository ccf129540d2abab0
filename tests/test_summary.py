from specguard.parser.base import Action, CanonicalAPI, OAuth2Auth
from specguard.parser.normalize import normalize
from specguard.summary import build_summary


def _action(method: str, path: str, tags=None, deprecated=None) -> Action:
    return Action(slug=path, label=path, description="", method=method, path=path, tags=tags, deprecated=deprecated)


class TestBuildSummary:
    def test_petstore_counts(self, petstore):
        summary = build_summary(normalize(petstore).api)

        assert summary.title == "Petstore"
        assert summary.version == "1.0.0"
        assert summary.base_url == "https://petstore.swagger.io/v2"
        assert summary.auth_type == "bearer"
        assert summary.endpoint_count == 4
        assert summary.endpoints_by_method == {"GET": 2, "POST": 1, "DELETE": 1}
        assert summary.tags == ["Pets"]
        assert summary.errors == []
        assert summary.deprecated == 0

    def test_tags_sorted_and_deprecated_counted(self):
        api = CanonicalAPI(
            name="Shop",
            description="",
            base_url="https://shop.example.com",
            auth=OAuth2Auth(),
            actions=[
                _action("GET", "/orders", tags=["orders", "admin"]),
                _action("DELETE", "/orders/{id}", tags=["orders"], deprecated=True),
                _action("PATCH", "/carts/{id}", deprecated=False),
            ],
            warnings=["Failed to parse PUT /x: boom"],
        )
        summary = build_summary(api, errors=["[strict] Failed to parse PUT /x: boom"])

        assert summary.version == "unknown"
        assert summary.auth_type == "oauth2"
        assert summary.tags == ["admin", "orders"]
        assert summary.deprecated == 1
        assert summary.endpoints_by_method == {"GET": 1, "DELETE": 1, "PATCH": 1}
        assert summary.warnings == ["Failed to parse PUT /x: boom"]
        assert summary.errors == ["[strict] Failed to parse PUT /x: boom"]

    def test_json_shape(self, petstore):
        data = build_summary(normalize(petstore).api).to_json_dict()
        assert set(data) == {
            "title",
            "version",
            "baseUrl",
            "authType",
            "endpointCount",
            "endpointsByMethod",
            "tags",
            "errors",
            "warnings",
            "deprecated",
        }
