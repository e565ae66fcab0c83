"""
Accessor labels for the OpenAPI document model.

Builds the process-wide LABELS registry once, at import:

    - a lens for every field of every product entity
    - a prism for every variant of Referenced and SecuritySchemeType
    - review-only labels for the OpenApiItems variants
    - virtual schema-constraint accessors on NamedSchema, Param and Header
    - keyed at/ix access on Responses and Operation

Example:
    >>> from openapi_optics.labels import label, at
    >>> from openapi_optics.model import Operation, Response, Inline
    >>> op = at(Operation, 404).set(Operation(), Inline(Response(description="Not found")))
    >>> label(Operation, "responses").view(op).responses[404].value.description
    'Not found'

Same name, different entities:
    label(Response, "description")   # Response.description, a str
    label(Schema, "description")     # Schema.description, Optional[str]
"""

from __future__ import annotations

from typing import Any, Optional

from openapi_optics.indexed import IndexedContainer, register_indexed
from openapi_optics.model import (
    ApiKeyParams,
    Components,
    Contact,
    Discriminator,
    Encoding,
    Example,
    ExternalDocs,
    Header,
    Info,
    Inline,
    License,
    Link,
    MediaTypeObject,
    NamedSchema,
    OAuth2AuthorizationCodeFlow,
    OAuth2ClientCredentialsFlow,
    OAuth2Flow,
    OAuth2Flows,
    OAuth2ImplicitFlow,
    OAuth2PasswordFlow,
    OpenApi,
    OpenApiItems,
    OpenApiItemsArray,
    OpenApiItemsObject,
    Operation,
    Param,
    PathItem,
    Ref,
    Reference,
    Referenced,
    RequestBody,
    Response,
    Responses,
    Schema,
    SecurityScheme,
    SecuritySchemeApiKey,
    SecuritySchemeHttp,
    SecuritySchemeOAuth2,
    SecuritySchemeOpenIdConnect,
    SecuritySchemeType,
    Server,
    ServerVariable,
    Tag,
    Xml,
)
from openapi_optics.optics import Optic
from openapi_optics.registry import EntityLabels, LabelRegistry
from openapi_optics.virtual import VirtualAccessor, VirtualAccessorLayer


# Product entities: one lens per dataclass field
ENTITIES = (
    OpenApi,
    Components,
    Server,
    ServerVariable,
    RequestBody,
    MediaTypeObject,
    Info,
    Contact,
    License,
    PathItem,
    Tag,
    Operation,
    Param,
    Header,
    Schema,
    NamedSchema,
    Xml,
    Responses,
    Response,
    SecurityScheme,
    ApiKeyParams,
    OAuth2ImplicitFlow,
    OAuth2PasswordFlow,
    OAuth2ClientCredentialsFlow,
    OAuth2AuthorizationCodeFlow,
    OAuth2Flow,
    OAuth2Flows,
    ExternalDocs,
    Encoding,
    Example,
    Discriminator,
    Link,
    Reference,
)

# Sum entities: one prism per variant
SUMS = (
    (SecuritySchemeType, (
        SecuritySchemeHttp,
        SecuritySchemeApiKey,
        SecuritySchemeOAuth2,
        SecuritySchemeOpenIdConnect,
    )),
    (Referenced, (Ref, Inline)),
)

# Sum entities exposed in the construct direction only
REVIEWS = (
    (OpenApiItems, (OpenApiItemsArray, OpenApiItemsObject)),
)

SCHEMA_CONSTRAINTS = (
    "type",
    "default",
    "format",
    "items",
    "maximum",
    "exclusive_maximum",
    "minimum",
    "exclusive_minimum",
    "max_length",
    "min_length",
    "pattern",
    "max_items",
    "min_items",
    "unique_items",
    "enum",
    "multiple_of",
)

VIRTUAL_ACCESSORS = tuple(
    VirtualAccessor(parent, name, through="schema", inner=Schema)
    for parent in (NamedSchema, Param, Header)
    for name in SCHEMA_CONSTRAINTS
)

# Hosts with keyed at/ix access, and the label path to their container
INDEXED_HOSTS = (
    (Responses, ("responses",)),
    (Operation, ("responses", "responses")),
)


def build_registry(name: str = "openapi") -> LabelRegistry:
    """Build and freeze a registry holding every OpenAPI accessor."""
    registry = LabelRegistry(name=name, unwrap={Referenced: "_Inline"})

    for entity in ENTITIES:
        registry.register_fields(entity)
    for base, variants in SUMS:
        registry.register_variants(base, *variants)
    for base, variants in REVIEWS:
        registry.register_reviews(base, *variants)

    VirtualAccessorLayer(registry).install_all(VIRTUAL_ACCESSORS)

    for host, path in INDEXED_HOSTS:
        register_indexed(registry, host, *path)

    return registry.freeze()


LABELS = build_registry()


def label(entity: Any, name: str) -> Optic:
    """The accessor `name` of `entity`."""
    return LABELS.lookup(entity, name)


def labels_for(entity: Any) -> EntityLabels:
    return LABELS.labels_for(entity)


def indexed(host: Any) -> IndexedContainer:
    return LABELS.container(host)


def at(host: Any, key: Any) -> Optic:
    """Lens onto the optional entry `key` of `host`'s keyed container."""
    return LABELS.container(host).at(key)


def ix(host: Any, key: Any) -> Optic:
    """Affine traversal onto the existing entry `key` of `host`'s keyed container."""
    return LABELS.container(host).ix(key)


def contains(host: Any, subject: Any, key: Any) -> bool:
    return LABELS.container(host).contains(subject, key)


def get(host: Any, subject: Any, key: Any) -> Optional[Any]:
    return LABELS.container(host).get(subject, key)
