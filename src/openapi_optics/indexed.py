"""
Keyed access to containers embedded in host entities.

Responses keeps its entries in Responses.responses, while Operation keeps
them one level deeper in Operation.responses.responses. An IndexedContainer
hides the difference: both hosts answer the same contains/get/at/ix calls.

    ok = indexed(Operation).at(200)       # Lens Operation -> Optional[Referenced[Response]]
    op = ok.set(Operation(), Inline(Response(description="OK")))

at(key) writes:
    value -> insert, or overwrite in place
    None  -> delete (no-op when missing)

ix(key) reads and overwrites an existing entry only; it never inserts or
deletes. No write touches any other key or changes its position.
"""

from __future__ import annotations

import dataclasses
import typing
from typing import Any, List, Optional

from openapi_optics.errors import CompositionError
from openapi_optics.insord import InsOrdMap, at_key, ix_key
from openapi_optics.optics import Kind, Optic, compose, type_name
from openapi_optics.registry import LabelRegistry, entity_key


class IndexedContainer:
    """
    Keyed view of the InsOrdMap a host reaches through `container`.

    Properties:
        host: Host entity type
        container: Optic from host to the InsOrdMap (Lens, or
            AffineTraversal when an intermediate field is optional)
        key_type, value_type: Declared key and value types of the map
    """

    def __init__(self, host: type, container: Optic):
        if entity_key(container.target) is not InsOrdMap:
            raise CompositionError(
                f"Keyed container of {host.__name__} must focus on an InsOrdMap, "
                f"not {type_name(container.target)}"
            )
        if container.kind not in (Kind.ISO, Kind.LENS, Kind.AFFINE_TRAVERSAL):
            raise CompositionError(
                f"Keyed container of {host.__name__} must be readable and writable, "
                f"got {container.kind.value}"
            )
        self.host = host
        self.container = container
        args = typing.get_args(container.target)
        self.key_type, self.value_type = args if len(args) == 2 else (Any, Any)

    def __repr__(self) -> str:
        return f"IndexedContainer({self.host.__name__}, {self.container.name})"

    def _map(self, subject: Any) -> Optional[InsOrdMap]:
        found = self.container.preview(subject)
        return None if found is None else found.value

    def contains(self, subject: Any, key: Any) -> bool:
        m = self._map(subject)
        return m is not None and key in m

    def get(self, subject: Any, key: Any) -> Optional[Any]:
        """Value under `key`, or None."""
        m = self._map(subject)
        return None if m is None else m.get(key)

    def keys(self, subject: Any) -> List[Any]:
        """Keys in enumeration (first-insertion) order."""
        m = self._map(subject)
        return [] if m is None else list(m)

    def at(self, key: Any) -> Optic:
        optic = compose(self.container, at_key(key, self.value_type))
        return dataclasses.replace(optic, name=f"{self.host.__name__}.at({key!r})")

    def ix(self, key: Any) -> Optic:
        optic = compose(self.container, ix_key(key, self.value_type))
        return dataclasses.replace(optic, name=f"{self.host.__name__}.ix({key!r})")


def register_indexed(registry: LabelRegistry, host: type, *path: str) -> IndexedContainer:
    """
    Give `host` keyed access to the container at the end of the label `path`.

    Example:
        register_indexed(registry, Operation, "responses", "responses")
    """
    container = compose(*registry.path(host, *path))
    return registry.register_container(host, IndexedContainer(host, container))
