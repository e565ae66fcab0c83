"""
OpenAPI 3 Document Model

Defines the node types of an OpenAPI 3.0 specification tree as frozen
dataclasses. These are the shapes the accessor registry is generated from:
every dataclass field becomes a field label, every sum-type variant a prism
label.

Two kinds of entity:
    - Products: frozen dataclasses with named fields, some Optional
    - Sums: an empty base class whose variants are frozen dataclasses
      carrying exactly one payload field

Recursive members (a Schema containing Schemas) are always held through
Referenced, tuples or InsOrdMap, never embedded by value.

ARCHITECTURAL RULE:
    These objects:
        - Know nothing about optics, encoding or validation
        - Are immutable (update them through accessors or dataclasses.replace)
        - Represent structure, not behavior

Field naming: Python snake_case. A field whose name would be a Python
keyword carries a trailing underscore (in_, not_); its label drops it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, Optional, Tuple, TypeVar

from openapi_optics.insord import InsOrdMap


T = TypeVar("T")
P = TypeVar("P")

HttpStatusCode = int


# ============================================================================
# REFERENCES
# ============================================================================

@dataclass(frozen=True)
class Reference:
    """
    Name of a reusable component, e.g. Reference("User").

    The component section the name lives in (schemas, responses, ...) is
    implied by where the reference is used.
    """

    ref: str


class Referenced(Generic[T]):
    """
    Sum type: either a reference to a component or an inline value.

    Variants:
        Ref(reference)  -- points into Components
        Inline(value)   -- carries the value itself
    """

    __slots__ = ()


@dataclass(frozen=True)
class Ref(Referenced[T]):
    reference: Reference


@dataclass(frozen=True)
class Inline(Referenced[T]):
    value: T


# ============================================================================
# ENUMERATIONS
# ============================================================================

class OpenApiType(Enum):
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class ParamLocation(Enum):
    QUERY = "query"
    HEADER = "header"
    PATH = "path"
    COOKIE = "cookie"


class ApiKeyLocation(Enum):
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


class Style(Enum):
    FORM = "form"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"
    SIMPLE = "simple"
    LABEL = "label"
    MATRIX = "matrix"


# ============================================================================
# METADATA
# ============================================================================

@dataclass(frozen=True)
class Contact:
    name: Optional[str] = None
    url: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class License:
    name: str = ""
    url: Optional[str] = None


@dataclass(frozen=True)
class Info:
    """
    API metadata.

    Properties:
        title: API title (required by OpenAPI, may be empty)
        version: API version string (required by OpenAPI, may be empty)
    """

    title: str = ""
    description: Optional[str] = None
    terms_of_service: Optional[str] = None
    contact: Optional[Contact] = None
    license: Optional[License] = None
    version: str = ""


@dataclass(frozen=True)
class ExternalDocs:
    description: Optional[str] = None
    url: str = ""


@dataclass(frozen=True)
class Tag:
    name: str = ""
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = None


@dataclass(frozen=True)
class ServerVariable:
    enum: Optional[Tuple[str, ...]] = None
    default: str = ""
    description: Optional[str] = None


@dataclass(frozen=True)
class Server:
    url: str = ""
    description: Optional[str] = None
    variables: InsOrdMap[str, ServerVariable] = field(default_factory=InsOrdMap)


# ============================================================================
# SCHEMAS
# ============================================================================

@dataclass(frozen=True)
class Xml:
    name: Optional[str] = None
    namespace: Optional[str] = None
    prefix: Optional[str] = None
    attribute: Optional[bool] = None
    wrapped: Optional[bool] = None


@dataclass(frozen=True)
class Discriminator:
    property_name: str = ""
    mapping: InsOrdMap[str, str] = field(default_factory=InsOrdMap)


class OpenApiItems:
    """
    Sum type for the `items` keyword of an array schema.

    Variants:
        OpenApiItemsObject(schema)   -- every element has the same schema
        OpenApiItemsArray(schemas)   -- one schema per position (tuple form)

    Only the construct direction is labelled for these variants.
    """

    __slots__ = ()


@dataclass(frozen=True)
class OpenApiItemsObject(OpenApiItems):
    schema: Referenced[Schema]


@dataclass(frozen=True)
class OpenApiItemsArray(OpenApiItems):
    schemas: Tuple[Referenced[Schema], ...]


@dataclass(frozen=True)
class Schema:
    """
    A JSON Schema object as used by OpenAPI 3.0.

    Constraint keywords (type, format, maximum, pattern, ...) are also
    reachable from NamedSchema, Param and Header through virtual accessors.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    required: Tuple[str, ...] = ()
    nullable: Optional[bool] = None
    all_of: Optional[Tuple[Referenced[Schema], ...]] = None
    one_of: Optional[Tuple[Referenced[Schema], ...]] = None
    any_of: Optional[Tuple[Referenced[Schema], ...]] = None
    not_: Optional[Referenced[Schema]] = None
    properties: InsOrdMap[str, Referenced[Schema]] = field(default_factory=InsOrdMap)
    additional_properties: Optional[Referenced[Schema]] = None
    discriminator: Optional[Discriminator] = None
    read_only: Optional[bool] = None
    write_only: Optional[bool] = None
    xml: Optional[Xml] = None
    external_docs: Optional[ExternalDocs] = None
    example: Optional[Any] = None
    deprecated: Optional[bool] = None
    max_properties: Optional[int] = None
    min_properties: Optional[int] = None
    default: Optional[Any] = None
    type: Optional[OpenApiType] = None
    format: Optional[str] = None
    items: Optional[OpenApiItems] = None
    maximum: Optional[float] = None
    exclusive_maximum: Optional[bool] = None
    minimum: Optional[float] = None
    exclusive_minimum: Optional[bool] = None
    max_length: Optional[int] = None
    min_length: Optional[int] = None
    pattern: Optional[str] = None
    max_items: Optional[int] = None
    min_items: Optional[int] = None
    unique_items: Optional[bool] = None
    enum: Optional[Tuple[Any, ...]] = None
    multiple_of: Optional[float] = None


@dataclass(frozen=True)
class NamedSchema:
    """A schema together with the component name it is published under."""

    name: Optional[str] = None
    schema: Schema = field(default_factory=Schema)


# ============================================================================
# PARAMETERS, BODIES, RESPONSES
# ============================================================================

@dataclass(frozen=True)
class Example:
    summary: Optional[str] = None
    description: Optional[str] = None
    value: Optional[Any] = None
    external_value: Optional[str] = None


@dataclass(frozen=True)
class Header:
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    allow_empty_value: Optional[bool] = None
    explode: Optional[bool] = None
    example: Optional[Any] = None
    examples: InsOrdMap[str, Referenced[Example]] = field(default_factory=InsOrdMap)
    schema: Optional[Referenced[Schema]] = None


@dataclass(frozen=True)
class Param:
    """
    An operation parameter.

    Properties:
        name: Parameter name, case sensitive
        in_: Where the parameter lives (label "in")
        schema: Optional schema; its constraints are reachable directly
            from the parameter through virtual accessors
    """

    name: str = ""
    description: Optional[str] = None
    required: Optional[bool] = None
    deprecated: Optional[bool] = None
    in_: ParamLocation = ParamLocation.QUERY
    allow_empty_value: Optional[bool] = None
    allow_reserved: Optional[bool] = None
    schema: Optional[Referenced[Schema]] = None
    style: Optional[Style] = None
    explode: Optional[bool] = None
    example: Optional[Any] = None
    examples: InsOrdMap[str, Referenced[Example]] = field(default_factory=InsOrdMap)


@dataclass(frozen=True)
class Encoding:
    content_type: Optional[str] = None
    headers: InsOrdMap[str, Referenced[Header]] = field(default_factory=InsOrdMap)
    style: Optional[Style] = None
    explode: Optional[bool] = None
    allow_reserved: Optional[bool] = None


@dataclass(frozen=True)
class MediaTypeObject:
    schema: Optional[Referenced[Schema]] = None
    example: Optional[Any] = None
    examples: InsOrdMap[str, Referenced[Example]] = field(default_factory=InsOrdMap)
    encoding: InsOrdMap[str, Encoding] = field(default_factory=InsOrdMap)


@dataclass(frozen=True)
class RequestBody:
    description: Optional[str] = None
    content: InsOrdMap[str, MediaTypeObject] = field(default_factory=InsOrdMap)
    required: Optional[bool] = None


@dataclass(frozen=True)
class Link:
    operation_ref: Optional[str] = None
    operation_id: Optional[str] = None
    parameters: InsOrdMap[str, Any] = field(default_factory=InsOrdMap)
    request_body: Optional[Any] = None
    description: Optional[str] = None
    server: Optional[Server] = None


@dataclass(frozen=True)
class Response:
    """
    A single response of an operation.

    Properties:
        description: Required short description (may be empty)
        content: Media type name -> MediaTypeObject, e.g. "application/json"
    """

    description: str = ""
    headers: InsOrdMap[str, Referenced[Header]] = field(default_factory=InsOrdMap)
    content: InsOrdMap[str, MediaTypeObject] = field(default_factory=InsOrdMap)
    links: InsOrdMap[str, Referenced[Link]] = field(default_factory=InsOrdMap)


@dataclass(frozen=True)
class Responses:
    """
    Responses of an operation, keyed by HTTP status code.

    Insertion order of status codes is preserved. Both Responses and
    Operation expose keyed at/ix access to these entries.
    """

    default: Optional[Referenced[Response]] = None
    responses: InsOrdMap[HttpStatusCode, Referenced[Response]] = field(default_factory=InsOrdMap)


# ============================================================================
# OPERATIONS AND PATHS
# ============================================================================

@dataclass(frozen=True)
class Operation:
    tags: Tuple[str, ...] = ()
    summary: Optional[str] = None
    description: Optional[str] = None
    external_docs: Optional[ExternalDocs] = None
    operation_id: Optional[str] = None
    parameters: Tuple[Referenced[Param], ...] = ()
    request_body: Optional[Referenced[RequestBody]] = None
    responses: Responses = field(default_factory=Responses)
    deprecated: Optional[bool] = None
    security: Tuple[InsOrdMap[str, Tuple[str, ...]], ...] = ()
    servers: Tuple[Server, ...] = ()


@dataclass(frozen=True)
class PathItem:
    summary: Optional[str] = None
    description: Optional[str] = None
    get: Optional[Operation] = None
    put: Optional[Operation] = None
    post: Optional[Operation] = None
    delete: Optional[Operation] = None
    options: Optional[Operation] = None
    head: Optional[Operation] = None
    patch: Optional[Operation] = None
    trace: Optional[Operation] = None
    servers: Tuple[Server, ...] = ()
    parameters: Tuple[Referenced[Param], ...] = ()


# ============================================================================
# SECURITY
# ============================================================================

@dataclass(frozen=True)
class ApiKeyParams:
    name: str = ""
    in_: ApiKeyLocation = ApiKeyLocation.HEADER


@dataclass(frozen=True)
class OAuth2ImplicitFlow:
    authorization_url: str = ""


@dataclass(frozen=True)
class OAuth2PasswordFlow:
    token_url: str = ""


@dataclass(frozen=True)
class OAuth2ClientCredentialsFlow:
    token_url: str = ""


@dataclass(frozen=True)
class OAuth2AuthorizationCodeFlow:
    authorization_url: str = ""
    token_url: str = ""


@dataclass(frozen=True)
class OAuth2Flow(Generic[P]):
    """One OAuth2 flow; `params` holds the flow-specific URLs."""

    params: P
    refresh_url: Optional[str] = None
    scopes: InsOrdMap[str, str] = field(default_factory=InsOrdMap)


@dataclass(frozen=True)
class OAuth2Flows:
    implicit: Optional[OAuth2Flow[OAuth2ImplicitFlow]] = None
    password: Optional[OAuth2Flow[OAuth2PasswordFlow]] = None
    client_credentials: Optional[OAuth2Flow[OAuth2ClientCredentialsFlow]] = None
    authorization_code: Optional[OAuth2Flow[OAuth2AuthorizationCodeFlow]] = None


class SecuritySchemeType:
    """
    Sum type of the security scheme kinds.

    Variants:
        SecuritySchemeHttp(scheme)          -- "basic", "bearer", ...
        SecuritySchemeApiKey(params)
        SecuritySchemeOAuth2(flows)
        SecuritySchemeOpenIdConnect(url)
    """

    __slots__ = ()


@dataclass(frozen=True)
class SecuritySchemeHttp(SecuritySchemeType):
    scheme: str


@dataclass(frozen=True)
class SecuritySchemeApiKey(SecuritySchemeType):
    params: ApiKeyParams


@dataclass(frozen=True)
class SecuritySchemeOAuth2(SecuritySchemeType):
    flows: OAuth2Flows


@dataclass(frozen=True)
class SecuritySchemeOpenIdConnect(SecuritySchemeType):
    url: str


@dataclass(frozen=True)
class SecurityScheme:
    type: SecuritySchemeType = field(default_factory=lambda: SecuritySchemeHttp("basic"))
    description: Optional[str] = None


# ============================================================================
# ROOT
# ============================================================================

@dataclass(frozen=True)
class Components:
    schemas: InsOrdMap[str, Schema] = field(default_factory=InsOrdMap)
    responses: InsOrdMap[str, Referenced[Response]] = field(default_factory=InsOrdMap)
    parameters: InsOrdMap[str, Referenced[Param]] = field(default_factory=InsOrdMap)
    examples: InsOrdMap[str, Referenced[Example]] = field(default_factory=InsOrdMap)
    request_bodies: InsOrdMap[str, Referenced[RequestBody]] = field(default_factory=InsOrdMap)
    headers: InsOrdMap[str, Referenced[Header]] = field(default_factory=InsOrdMap)
    security_schemes: InsOrdMap[str, SecurityScheme] = field(default_factory=InsOrdMap)
    links: InsOrdMap[str, Referenced[Link]] = field(default_factory=InsOrdMap)


@dataclass(frozen=True)
class OpenApi:
    """
    Root of an OpenAPI 3.0 document.

    This is THE document the accessors navigate. Every other entity is
    reachable from here.

    Properties:
        openapi: OpenAPI version string, "3.0.0"
        info: API metadata
        paths: URL template -> PathItem, in declaration order
        components: Reusable schemas, responses, parameters, ...
    """

    openapi: str = "3.0.0"
    info: Info = field(default_factory=Info)
    servers: Tuple[Server, ...] = ()
    paths: InsOrdMap[str, PathItem] = field(default_factory=InsOrdMap)
    components: Components = field(default_factory=Components)
    security: Tuple[InsOrdMap[str, Tuple[str, ...]], ...] = ()
    tags: Tuple[Tag, ...] = ()
    external_docs: Optional[ExternalDocs] = None
