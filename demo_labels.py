#!/usr/bin/env python3
"""
Demo: build an OpenAPI document through accessors and print it.

Shows:
1. Building the example user API from empty values
2. One accessor name resolving per entity type
3. Virtual accessors through a plain and an optional field
4. Keyed access to responses on Operation
"""

from openapi_optics.examples import build_user_api
from openapi_optics.labels import at, indexed, label
from openapi_optics.model import Inline, NamedSchema, OpenApiType, Operation, Param, Response, Schema
from openapi_optics.serialization import to_json, to_yaml


def main():
    print("=" * 70)
    print("1. EXAMPLE USER API")
    print("=" * 70)
    api = build_user_api()
    print(to_yaml(api))

    print("=" * 70)
    print("2. OVERLOADED NAMES")
    print("=" * 70)
    print(to_json(label(Response, "description").set(Response(), "No content")))
    print(to_json(label(Schema, "description").set(Schema(), "To be or not to be")))
    print()

    print("=" * 70)
    print("3. VIRTUAL ACCESSORS")
    print("=" * 70)
    named = label(NamedSchema, "type").set(NamedSchema(name="Flag"), OpenApiType.BOOLEAN)
    print(f"   NamedSchema.type  ({label(NamedSchema, 'type').kind.value}): {named.schema.type}")
    param = Param(name="id")
    unchanged = label(Param, "type").set(param, OpenApiType.INTEGER)
    print(f"   Param.type        ({label(Param, 'type').kind.value}): unchanged without schema: {unchanged == param}")
    print()

    print("=" * 70)
    print("4. KEYED RESPONSES")
    print("=" * 70)
    op = at(Operation, 200).set(Operation(), Inline(Response(description="OK")))
    op = at(Operation, 404).set(op, Inline(Response(description="Not found")))
    print(f"   Keys:               {indexed(Operation).keys(op)}")
    print(f"   After deleting 200: {indexed(Operation).keys(at(Operation, 200).set(op, None))}")


if __name__ == "__main__":
    main()
