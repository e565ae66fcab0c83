"""
Virtual accessors — names that reach through one field into another entity.

A virtual accessor presents a field of a nested entity as if it belonged
to the parent. For example NamedSchema has no `type` field, but

    VirtualAccessor(NamedSchema, "type", through="schema", inner=Schema)

registers NamedSchema.type as NamedSchema.schema composed with Schema.type.

Capability of the result:
    - through a plain field: the inner capability (Lens stays Lens)
    - through an Optional or Referenced field: AffineTraversal

Writes through an absent intermediate are strict no-ops: a missing
intermediate is never fabricated. Reads through it are absent (None).

ORDERING RULE:
    The inner accessor must already be registered when a declaration is
    installed, so virtual accessors built on other virtual accessors must
    be declared after them.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from openapi_optics.errors import CompositionError
from openapi_optics.optics import Optic, accepts, compose, type_name
from openapi_optics.registry import LabelRegistry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VirtualAccessor:
    """
    Declaration of one virtual accessor.

    Properties:
        parent: Entity the new name is registered on
        name: The new accessor name
        through: Label on `parent` whose focus holds the inner entity
        inner: Entity reached through `through`
        inner_name: Label on `inner` to expose; defaults to `name`
    """

    parent: type
    name: str
    through: str
    inner: type
    inner_name: Optional[str] = None

    @property
    def target_name(self) -> str:
        return self.inner_name or self.name


class VirtualAccessorLayer:
    """Installs virtual accessor declarations into a registry."""

    def __init__(self, registry: LabelRegistry):
        self.registry = registry

    def compose_virtual(self, decl: VirtualAccessor) -> Optic:
        """
        Build the optic for `decl` without registering it.

        Raises:
            UnknownAccessorError: if `through` or the inner accessor is not registered yet
            CompositionError: if the through field does not hold `inner`
        """
        through = self.registry.lookup(decl.parent, decl.through)
        bridge, reached = self.registry.descend(through.target)
        if not accepts(reached, decl.inner):
            raise CompositionError(
                f"{decl.parent.__name__}.{decl.through} holds {type_name(reached)}, "
                f"not {decl.inner.__name__}"
            )
        inner = self.registry.lookup(decl.inner, decl.target_name)
        optic = compose(through, *bridge, inner)
        return dataclasses.replace(optic, name=f"{decl.parent.__name__}.{decl.name}")

    def install(self, decl: VirtualAccessor) -> Optic:
        optic = self.registry.register(decl.parent, decl.name, self.compose_virtual(decl))
        logger.debug(
            "Installed virtual accessor %s.%s -> %s.%s (%s)",
            decl.parent.__name__, decl.name, decl.inner.__name__, decl.target_name, optic.kind.value,
        )
        return optic

    def install_all(self, decls: Iterable[VirtualAccessor]) -> List[Optic]:
        """Install declarations in order."""
        return [self.install(decl) for decl in decls]
