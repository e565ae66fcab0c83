"""
Insertion-ordered keyed container.

InsOrdMap is the KeyedContainer of the document model: every keyed field
(paths, responses, properties, content, ...) holds one.

Ordering rules:
    - Iteration follows first-insertion order of the keys currently present
    - Overwriting a present key keeps its position
    - Deleting and re-inserting a key moves it to the end

Equality ignores order, like dict equality, so that writing a key back
after deleting it yields an equal map.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar, Union

from openapi_optics.optics import Optic, Present, affine, lens


K = TypeVar("K")
V = TypeVar("V")


class InsOrdMap(Mapping[K, V]):
    """
    Immutable, insertion-ordered mapping.

    Every update returns a new map; the receiver is never modified.

    Example:
        >>> m = InsOrdMap([(200, "OK"), (404, "Not found")])
        >>> list(m.delete(200))
        [404]
    """

    __slots__ = ("_data",)

    def __init__(self, items: Union[Mapping[K, V], Iterable[Tuple[K, V]]] = ()):
        data = {}
        pairs = items.items() if isinstance(items, Mapping) else items
        for key, value in pairs:
            data[key] = value
        self._data = data

    @classmethod
    def _wrap(cls, data: dict) -> InsOrdMap:
        new = cls.__new__(cls)
        new._data = data
        return new

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __repr__(self) -> str:
        return f"InsOrdMap({list(self._data.items())!r})"

    def insert(self, key: K, value: V) -> InsOrdMap:
        """Insert or overwrite `key`. An overwritten key keeps its position."""
        data = dict(self._data)
        data[key] = value
        return self._wrap(data)

    def delete(self, key: K) -> InsOrdMap:
        """Remove `key`. Returns the same map when the key is missing."""
        if key not in self._data:
            return self
        data = dict(self._data)
        del data[key]
        return self._wrap(data)

    def alter(self, key: K, value: Optional[V]) -> InsOrdMap:
        """Insert/overwrite when `value` is not None, delete otherwise."""
        if value is None:
            return self.delete(key)
        return self.insert(key, value)


def at_key(key: Any, value_type: Any = Any) -> Optic:
    """
    Lens from an InsOrdMap to the optional value stored under `key`.

    Viewing yields None when the key is missing. Setting a value inserts or
    overwrites; setting None deletes.
    """
    return lens(
        InsOrdMap, Optional[value_type],
        get=lambda m: m.get(key),
        put=lambda m, v: m.alter(key, v),
        name=f"at({key!r})",
    )


def ix_key(key: Any, value_type: Any = Any) -> Optic:
    """Affine traversal to the value under `key`; cannot insert or delete."""
    return affine(
        InsOrdMap, value_type,
        match=lambda m: Present(m[key]) if key in m else None,
        put=lambda m, v: m.insert(key, v),
        name=f"ix({key!r})",
    )
