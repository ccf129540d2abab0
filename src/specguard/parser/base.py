"""Canonical data models for normalized API documents.

Both extractors (OpenAPI 3.x and Swagger 2.0) convert their input into these
models, so the diff engine and the summary builder never see dialect details.
Models serialize with camelCase keys (``baseUrl``, ``pathParams``, ...).
"""

from typing import Annotated, Any, Literal, Union

import pydantic
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

FieldType = Literal["string", "number", "boolean", "array", "object"]
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]


class CanonicalModel(BaseModel):
    """Shared config: camelCase aliases, populated by attribute name, frozen."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Field(CanonicalModel):
    """A single schema property or parameter, possibly nested."""

    key: str
    label: str
    type: FieldType
    required: bool
    description: str | None = None
    enum: list[Any] | None = None
    format: str | None = None
    default: Any = None
    example: Any = None
    properties: list["Field"] | None = None
    items: "Field | None" = None


class ApiKeyAuth(CanonicalModel):
    type: Literal["apiKey"] = "apiKey"
    name: str
    location: Literal["header", "query"] = pydantic.Field(alias="in")


class BearerAuth(CanonicalModel):
    type: Literal["bearer"] = "bearer"
    scheme: str = "bearer"


class OAuth2Auth(CanonicalModel):
    type: Literal["oauth2"] = "oauth2"
    authorization_url: str = ""
    token_url: str = ""
    scopes: dict[str, str] = {}


class NoAuth(CanonicalModel):
    type: Literal["none"] = "none"


AuthDescriptor = Annotated[
    Union[ApiKeyAuth, BearerAuth, OAuth2Auth, NoAuth],
    pydantic.Field(discriminator="type"),
]


class Action(CanonicalModel):
    """One endpoint. Compared across documents by (method, path)."""

    slug: str
    label: str
    description: str
    method: HttpMethod
    path: str  # /pets/{petId}
    path_params: list[Field] = []
    query_params: list[Field] = []
    body_schema: list[Field] = []
    response_schema: list[Field] = []
    tags: list[str] | None = None
    deprecated: bool | None = None

    @property
    def key(self) -> str:
        return f"{self.method} {self.path}"


class Contact(CanonicalModel):
    name: str | None = None
    email: str | None = None
    url: str | None = None


class CanonicalAPI(CanonicalModel):
    """A fully normalized API document."""

    name: str
    description: str
    base_url: str
    auth: AuthDescriptor = NoAuth()
    actions: list[Action] = []
    warnings: list[str] = []
    version: str | None = None
    provider: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None


class ParseSuccess(CanonicalModel):
    success: Literal[True] = True
    api: CanonicalAPI


class ParseFailure(CanonicalModel):
    success: Literal[False] = False
    error: str
    details: str | None = None
    reason: Literal["invalid-spec", "unsupported-version", "parse-error"] = "parse-error"


ParseResult = Union[ParseSuccess, ParseFailure]
