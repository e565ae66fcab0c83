"""
Label Registry — static binding of accessor names to optics.

A label is a name scoped by the entity type it applies to. The pair
(entity type, name) selects exactly one optic, so the same name can mean
different accessors on different entities:

    registry.lookup(Response, "description")   # Lens Response -> str
    registry.lookup(Schema, "description")     # Lens Schema -> Optional[str]

Resolution always starts from a type supplied by the caller, never from
inspecting a runtime value.

Lifecycle:
    1. Create a LabelRegistry
    2. Register field lenses, variant prisms, reviews, virtual accessors
       and keyed containers
    3. freeze() it; from then on it is read-only and safe to share

IMPORTANT:
    Every error raised here is a wiring error and surfaces during setup.
"""

from __future__ import annotations

import dataclasses
import keyword
import logging
import operator
import typing
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from openapi_optics.errors import (
    AmbiguousAccessorError,
    CompositionError,
    FrozenRegistryError,
    UnknownAccessorError,
)
from openapi_optics.optics import (
    Optic,
    Present,
    accepts,
    just,
    lens,
    prism,
    review,
    type_name,
)


logger = logging.getLogger(__name__)


def label_name(field_name: str) -> str:
    """Label of a dataclass field: `in_` -> `in`, anything else unchanged."""
    if field_name.endswith("_") and keyword.iskeyword(field_name[:-1]):
        return field_name[:-1]
    return field_name


def entity_key(entity: Any) -> type:
    """Registry key of an entity type; generic aliases resolve to their origin."""
    return typing.get_origin(entity) or entity


def _is_optional(tp: Any) -> bool:
    return typing.get_origin(tp) is Union and type(None) in typing.get_args(tp)


def _strip_optional(tp: Any) -> Any:
    args = tuple(a for a in typing.get_args(tp) if a is not type(None))
    return args[0] if len(args) == 1 else Union[args]


# ============================================================================
# DERIVED OPTICS
# ============================================================================

def field_lens(entity: type, field_name: str, target: Any) -> Optic:
    """Lens onto one dataclass field; writes go through dataclasses.replace."""
    return lens(
        entity, target,
        get=operator.attrgetter(field_name),
        put=lambda s, v: dataclasses.replace(s, **{field_name: v}),
        name=f"{entity.__name__}.{label_name(field_name)}",
    )


def _payload_field(base: type, variant: type) -> Tuple[str, Any]:
    if not (dataclasses.is_dataclass(variant) and issubclass(variant, base)):
        raise CompositionError(f"{variant.__name__} is not a dataclass variant of {base.__name__}")
    fields = dataclasses.fields(variant)
    if len(fields) != 1:
        raise CompositionError(
            f"Variant {variant.__name__} must carry exactly one payload field, has {len(fields)}"
        )
    hints = typing.get_type_hints(variant)
    return fields[0].name, hints[fields[0].name]


def variant_prism(base: type, variant: type) -> Optic:
    """Prism from the sum type `base` onto the payload of `variant`."""
    payload, target = _payload_field(base, variant)

    def match(s):
        if type(s) is variant:
            return Present(getattr(s, payload))
        return None

    return prism(
        base, target,
        match=match,
        build=lambda v: variant(**{payload: v}),
        name=f"{base.__name__}._{variant.__name__}",
    )


def variant_review(base: type, variant: type) -> Optic:
    """Construct-only optic for `variant`."""
    payload, target = _payload_field(base, variant)
    return review(
        base, target,
        build=lambda v: variant(**{payload: v}),
        name=f"{base.__name__}._{variant.__name__}",
    )


# ============================================================================
# REGISTRY
# ============================================================================

class EntityLabels:
    """
    Accessor namespace of one entity type.

    Supports item and attribute access:
        labels_for(Schema)["description"]
        labels_for(Schema).description
    """

    __slots__ = ("_entity", "_optics")

    def __init__(self, entity: type, optics: Mapping[str, Optic]):
        self._entity = entity
        self._optics = optics

    def __getitem__(self, name: str) -> Optic:
        try:
            return self._optics[name]
        except KeyError:
            raise UnknownAccessorError(
                f"No accessor {name!r} registered for {self._entity.__name__}"
            ) from None

    def __getattr__(self, name: str) -> Optic:
        if name.startswith("__") or name in EntityLabels.__slots__:
            raise AttributeError(name)
        try:
            return self[name]
        except UnknownAccessorError as e:
            raise AttributeError(str(e)) from None

    def __contains__(self, name: object) -> bool:
        return name in self._optics

    def __iter__(self) -> Iterator[str]:
        return iter(self._optics)

    def __len__(self) -> int:
        return len(self._optics)

    def __repr__(self) -> str:
        return f"EntityLabels({self._entity.__name__}, {sorted(self._optics)})"


class LabelRegistry:
    """
    Binds (entity type, name) pairs to optics.

    Properties:
        name: Registry name, used in log messages
        unwrap: Sum types that static path descent may look through, mapped
            to the prism label that unwraps them (e.g. Referenced -> "_Inline")
    """

    def __init__(self, name: str = "labels", unwrap: Optional[Mapping[type, str]] = None):
        self.name = name
        self.unwrap = dict(unwrap or {})
        self._optics: Dict[type, Dict[str, Optic]] = {}
        self._containers: Dict[type, Any] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_open(self, what: str) -> None:
        if self._frozen:
            raise FrozenRegistryError(f"Registry {self.name!r} is frozen; cannot register {what}")

    # ---- registration -----------------------------------------------------

    def register(self, entity: Any, name: str, optic: Optic) -> Optic:
        """
        Bind `name` on `entity` to `optic`.

        Raises:
            AmbiguousAccessorError: if the pair is already bound
            CompositionError: if the optic does not apply to `entity`
            FrozenRegistryError: after freeze()
        """
        key = entity_key(entity)
        self._check_open(f"{key.__name__}.{name}")
        if not accepts(key, entity_key(optic.source)):
            raise CompositionError(
                f"Accessor {name!r} for {key.__name__} has source {type_name(optic.source)}"
            )
        table = self._optics.setdefault(key, {})
        if name in table:
            raise AmbiguousAccessorError(
                f"Ambiguous accessor: {key.__name__}.{name} is already registered"
            )
        table[name] = optic
        logger.debug("Registered %s.%s as %s", key.__name__, name, optic.kind.value)
        return optic

    def register_fields(self, entity: type) -> List[str]:
        """Register one lens per dataclass field of `entity`. Returns the labels."""
        if not dataclasses.is_dataclass(entity):
            raise CompositionError(f"{entity.__name__} is not a dataclass")
        hints = typing.get_type_hints(entity)
        names = []
        for f in dataclasses.fields(entity):
            name = label_name(f.name)
            self.register(entity, name, field_lens(entity, f.name, hints[f.name]))
            names.append(name)
        return names

    def register_variants(self, base: type, *variants: type) -> List[str]:
        """Register a prism `_<Variant>` on `base` for each variant."""
        names = []
        for variant in variants:
            name = f"_{variant.__name__}"
            self.register(base, name, variant_prism(base, variant))
            names.append(name)
        return names

    def register_reviews(self, base: type, *variants: type) -> List[str]:
        """Register construct-only labels `_<Variant>` on `base`."""
        names = []
        for variant in variants:
            name = f"_{variant.__name__}"
            self.register(base, name, variant_review(base, variant))
            names.append(name)
        return names

    def register_container(self, host: Any, container: Any) -> Any:
        """Attach a keyed-container adapter to `host` (see indexed.py)."""
        key = entity_key(host)
        self._check_open(f"keyed container of {key.__name__}")
        if key in self._containers:
            raise AmbiguousAccessorError(
                f"Ambiguous accessor: {key.__name__} already has a keyed container"
            )
        self._containers[key] = container
        logger.debug("Registered keyed container for %s", key.__name__)
        return container

    def freeze(self) -> LabelRegistry:
        """Make the registry read-only. Returns self."""
        if self._frozen:
            return self
        self._optics = MappingProxyType({k: MappingProxyType(v) for k, v in self._optics.items()})
        self._containers = MappingProxyType(dict(self._containers))
        self._frozen = True
        logger.debug(
            "Froze registry %r: %d entities, %d accessors",
            self.name, len(self._optics), sum(len(v) for v in self._optics.values()),
        )
        return self

    # ---- resolution -------------------------------------------------------

    def lookup(self, entity: Any, name: str) -> Optic:
        """
        The optic bound to (entity, name).

        Raises:
            UnknownAccessorError: if nothing is bound
        """
        key = entity_key(entity)
        try:
            return self._optics[key][name]
        except KeyError:
            raise UnknownAccessorError(
                f"No accessor {name!r} registered for {type_name(entity)}"
            ) from None

    def has(self, entity: Any, name: str) -> bool:
        return name in self._optics.get(entity_key(entity), {})

    def entities(self) -> List[type]:
        return list(self._optics)

    def names(self, entity: Any) -> List[str]:
        return list(self._optics.get(entity_key(entity), {}))

    def labels_for(self, entity: Any) -> EntityLabels:
        key = entity_key(entity)
        return EntityLabels(key, self._optics.get(key, MappingProxyType({})))

    def container(self, host: Any) -> Any:
        key = entity_key(host)
        try:
            return self._containers[key]
        except KeyError:
            raise UnknownAccessorError(f"No keyed container registered for {type_name(host)}") from None

    def descend(self, target: Any) -> Tuple[List[Optic], Any]:
        """
        Optics that step from a focus of type `target` down to the entity it holds.

        Optional[X] is stepped through with just(); a registered unwrap type
        (e.g. Referenced[X]) with its prism. Returns the optics and the type
        reached.
        """
        steps: List[Optic] = []
        tp = target
        while True:
            if _is_optional(tp):
                tp = _strip_optional(tp)
                steps.append(just(tp))
            elif entity_key(tp) in self.unwrap and typing.get_args(tp):
                steps.append(self.lookup(entity_key(tp), self.unwrap[entity_key(tp)]))
                tp = typing.get_args(tp)[0]
            else:
                return steps, tp

    def path(self, entity: Any, *names: str) -> List[Optic]:
        """
        The optics of a label path starting at `entity`.

        Each label after the first is resolved on the entity the previous
        label's focus holds, as found by descend(). The final focus is not
        descended into.
        """
        if not names:
            raise UnknownAccessorError(f"Empty label path on {type_name(entity)}")
        optics: List[Optic] = []
        current = entity
        for i, name in enumerate(names):
            step = self.lookup(current, name)
            optics.append(step)
            if i < len(names) - 1:
                bridge, current = self.descend(step.target)
                optics.extend(bridge)
        return optics
