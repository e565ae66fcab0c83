"""
Example document builders.

build_user_api() assembles a small API with one schema and one path
entirely through accessors, starting from empty values:

    components.schemas["User"]       a string schema
    paths["/user"].get.responses     200 -> JSON body referencing User
                                     404 -> "User info not found"
"""
from openapi_optics.insord import InsOrdMap, at_key
from openapi_optics.labels import at, label
from openapi_optics.model import (
    Components,
    Inline,
    MediaTypeObject,
    OpenApi,
    OpenApiType,
    Operation,
    PathItem,
    Ref,
    Reference,
    Referenced,
    Response,
    Schema,
)
from openapi_optics.optics import compose


def build_user_schema() -> Schema:
    return label(Schema, "type").set(Schema(), OpenApiType.STRING)


def build_user_operation() -> Operation:
    json_body = label(MediaTypeObject, "schema").set(MediaTypeObject(), Ref(Reference("User")))

    # Inline(Response("OK")) with content["application/json"] set through _Inline
    ok_content = compose(
        label(Referenced, "_Inline"),
        label(Response, "content"),
        at_key("application/json"),
    )
    ok = ok_content.set(Inline(Response(description="OK")), json_body)

    op = Operation()
    op = at(Operation, 200).set(op, ok)
    op = at(Operation, 404).set(op, Inline(Response(description="User info not found")))
    return op


def build_user_api() -> OpenApi:
    api = OpenApi()
    api = compose(label(OpenApi, "components"), label(Components, "schemas")).set(
        api, InsOrdMap([("User", build_user_schema())])
    )
    path_item = label(PathItem, "get").set(PathItem(), build_user_operation())
    api = label(OpenApi, "paths").set(api, InsOrdMap([("/user", path_item)]))
    return api
