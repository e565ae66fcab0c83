"""
Rendering helpers for OpenAPI documents (OpenApi, Schema, Operation, etc.).

Encode-only: turns a document value into the plain dict form of the
OpenAPI 3.0 JSON/YAML layout, then into JSON or YAML text. Decoding is
not provided.

Layout rules:
    - Keys are camelCase (`external_docs` -> `externalDocs`, `in_` -> `in`)
    - Unset optionals and empty containers are omitted
    - Ref(Reference("User")) renders as {"$ref": "#/components/schemas/User"},
      the section chosen from the static type of the referencing field
    - Responses renders as a status-code keyed object next to `default`
"""
from __future__ import annotations

import dataclasses
import json
import typing
from enum import Enum
from typing import Any, Dict, Union

import yaml

from openapi_optics.insord import InsOrdMap
from openapi_optics.model import (
    Example,
    Header,
    Inline,
    Link,
    OAuth2Flow,
    OpenApiItems,
    OpenApiItemsArray,
    OpenApiItemsObject,
    Param,
    Ref,
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
)
from openapi_optics.registry import label_name


COMPONENT_SECTIONS = {
    Schema: "schemas",
    Response: "responses",
    Param: "parameters",
    Example: "examples",
    RequestBody: "requestBodies",
    Header: "headers",
    Link: "links",
    SecurityScheme: "securitySchemes",
}

# Fields whose rendered object is merged into the parent object
_FLATTENED = {(OAuth2Flow, "params"), (SecurityScheme, "type")}


def camel_case(field_name: str) -> str:
    head, *rest = label_name(field_name).split("_")
    return head + "".join(part.capitalize() for part in rest)


def _strip_optional(hint: Any) -> Any:
    if typing.get_origin(hint) is Union:
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _is_empty(rendered: Any) -> bool:
    return rendered is None or rendered == {} or rendered == []


def reference_to_dict(value: Ref, hint: Any) -> Dict[str, str]:
    args = typing.get_args(_strip_optional(hint))
    section = COMPONENT_SECTIONS.get(args[0]) if args else None
    if section is None:
        raise TypeError(f"Cannot render reference {value.reference.ref!r} without its component type")
    return {"$ref": f"#/components/{section}/{value.reference.ref}"}


def scheme_type_to_dict(value: SecuritySchemeType) -> Dict[str, Any]:
    if isinstance(value, SecuritySchemeHttp):
        return {"type": "http", "scheme": value.scheme}
    if isinstance(value, SecuritySchemeApiKey):
        return {"type": "apiKey", **object_to_dict(value.params)}
    if isinstance(value, SecuritySchemeOAuth2):
        return {"type": "oauth2", "flows": object_to_dict(value.flows)}
    if isinstance(value, SecuritySchemeOpenIdConnect):
        return {"type": "openIdConnect", "openIdConnectUrl": value.url}
    raise TypeError(f"Unsupported security scheme type: {type(value)}")


def items_to_dict(value: OpenApiItems) -> Any:
    hint = Referenced[Schema]
    if isinstance(value, OpenApiItemsObject):
        return to_dict(value.schema, hint)
    if isinstance(value, OpenApiItemsArray):
        return [to_dict(s, hint) for s in value.schemas]
    raise TypeError(f"Unsupported items type: {type(value)}")


def responses_to_dict(value: Responses) -> Dict[str, Any]:
    hint = Referenced[Response]
    d = {}
    if value.default is not None:
        d["default"] = to_dict(value.default, hint)
    for code, response in value.responses.items():
        d[str(code)] = to_dict(response, hint)
    return d


def object_to_dict(value: Any) -> Dict[str, Any]:
    cls = type(value)
    hints = typing.get_type_hints(cls)
    d = {}
    for f in dataclasses.fields(value):
        rendered = to_dict(getattr(value, f.name), hints[f.name])
        if (cls, f.name) in _FLATTENED:
            d.update(rendered)
        elif not _is_empty(rendered):
            d[camel_case(f.name)] = rendered
    return d


def to_dict(value: Any, hint: Any = None) -> Any:
    """
    Render a document value to plain dicts, lists and scalars.

    `hint` is the static type of the value; it is needed to render a bare
    Ref whose component section cannot be recovered from the value alone.
    """
    if hint is None:
        hint = type(value)
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Ref):
        return reference_to_dict(value, hint)
    if isinstance(value, Inline):
        args = typing.get_args(_strip_optional(hint))
        return to_dict(value.value, args[0] if args else type(value.value))
    if isinstance(value, SecuritySchemeType):
        return scheme_type_to_dict(value)
    if isinstance(value, OpenApiItems):
        return items_to_dict(value)
    if isinstance(value, Responses):
        return responses_to_dict(value)
    if isinstance(value, InsOrdMap):
        args = typing.get_args(_strip_optional(hint))
        value_hint = args[1] if len(args) == 2 else Any
        return {str(k): to_dict(v, value_hint) for k, v in value.items()}
    if isinstance(value, tuple):
        args = typing.get_args(_strip_optional(hint))
        item_hint = args[0] if args else Any
        return [to_dict(v, item_hint) for v in value]
    if dataclasses.is_dataclass(value):
        return object_to_dict(value)
    if isinstance(value, (str, int, float, bool, list, dict)):
        return value
    raise TypeError(f"Unsupported value type: {type(value)}")


def to_json(value: Any, indent: int | None = None) -> str:
    return json.dumps(to_dict(value), sort_keys=True, indent=indent)


def to_yaml(value: Any) -> str:
    return yaml.safe_dump(to_dict(value))
