"""
Optic Algebra for openapi_optics

An optic is an immutable, typed accessor from a source type to a target
type. Each optic carries a capability tag (Kind) and the operations that
capability permits:

    ISO               view, preview, set, build
    LENS              view, preview, set
    PRISM             preview, set, build
    AFFINE_TRAVERSAL  preview, set
    GETTER            view, preview
    AFFINE_FOLD       preview
    REVIEW            build

Composition intersects capability sets, which yields the greatest lower
bound of the two inputs:

    Lens ∘ Lens            = Lens
    Lens ∘ Prism           = AffineTraversal
    Prism ∘ Prism          = Prism
    X ∘ AffineTraversal    = AffineTraversal
    Iso ∘ X = X ∘ Iso      = X

An empty intersection (e.g. Lens ∘ Review) is rejected when the optics are
composed, never when they are applied.

ARCHITECTURAL RULE:
    Applying an optic never mutates its subject.
    Writes return a new subject; reads return a value or a Present/None.
"""

from __future__ import annotations

import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, FrozenSet, Generic, Optional, TypeVar

from openapi_optics.errors import CapabilityError, CompositionError


T = TypeVar("T")


class Capability(Enum):
    """Individual operations an optic may support."""
    VIEW = "view"
    PREVIEW = "preview"
    SET = "set"
    BUILD = "build"


class Kind(Enum):
    """Capability tags of the optic hierarchy."""
    ISO = "iso"
    LENS = "lens"
    PRISM = "prism"
    AFFINE_TRAVERSAL = "affine_traversal"
    GETTER = "getter"
    AFFINE_FOLD = "affine_fold"
    REVIEW = "review"


_VIEW, _PREVIEW, _SET, _BUILD = Capability.VIEW, Capability.PREVIEW, Capability.SET, Capability.BUILD

CAPABILITIES: typing.Dict[Kind, FrozenSet[Capability]] = {
    Kind.ISO: frozenset({_VIEW, _PREVIEW, _SET, _BUILD}),
    Kind.LENS: frozenset({_VIEW, _PREVIEW, _SET}),
    Kind.PRISM: frozenset({_PREVIEW, _SET, _BUILD}),
    Kind.AFFINE_TRAVERSAL: frozenset({_PREVIEW, _SET}),
    Kind.GETTER: frozenset({_VIEW, _PREVIEW}),
    Kind.AFFINE_FOLD: frozenset({_PREVIEW}),
    Kind.REVIEW: frozenset({_BUILD}),
}

_KIND_OF = {caps: kind for kind, caps in CAPABILITIES.items()}


def join(outer: Kind, inner: Kind) -> Kind:
    """
    Capability of the composition of two optics.

    Raises:
        CompositionError: if the two capabilities share no common kind
    """
    kind = _KIND_OF.get(CAPABILITIES[outer] & CAPABILITIES[inner])
    if kind is None:
        raise CompositionError(
            f"Cannot compose {outer.value} with {inner.value}: no common capability"
        )
    return kind


@dataclass(frozen=True)
class Present(Generic[T]):
    """
    A value found by a partial read.

    preview() returns Present(value) when the focus exists and None when it
    does not. The wrapped value may itself be None (an unset optional field),
    which is distinct from absence.
    """

    value: T


def accepts(target: Any, source: Any) -> bool:
    """
    Can an optic focusing on `target` feed an optic whose source is `source`?

    Any and type variables match everything. Classes match by subclassing,
    generic aliases by origin and then argument-wise. Optional[X] only
    matches Optional[X]; unwrapping it requires the just() prism.
    """
    if target is Any or source is Any or target == source:
        return True
    if isinstance(target, TypeVar) or isinstance(source, TypeVar):
        return True

    t_origin = typing.get_origin(target) or target
    s_origin = typing.get_origin(source) or source
    if not (isinstance(t_origin, type) and isinstance(s_origin, type)):
        return False
    if not issubclass(t_origin, s_origin):
        return False

    t_args, s_args = typing.get_args(target), typing.get_args(source)
    if not t_args or not s_args:
        return True
    return len(t_args) == len(s_args) and all(accepts(a, b) for a, b in zip(t_args, s_args))


def type_name(tp: Any) -> str:
    """Readable name of a type or type hint."""
    if isinstance(tp, type) and not typing.get_args(tp):
        return tp.__name__
    return repr(tp).replace("typing.", "")


@dataclass(frozen=True, eq=False)
class Optic:
    """
    A capability-tagged accessor from `source` to `target`.

    Build optics with the constructor functions below (lens, prism, ...)
    rather than directly. Equality is identity: two separately built optics
    are never equal even if they behave the same.

    Properties:
        kind: Capability tag
        source: Type the optic is applied to
        target: Type of the focus
        name: Human-readable path, used in error messages and repr
    """

    kind: Kind
    source: Any
    target: Any
    name: str = ""
    _view: Optional[Callable[[Any], Any]] = field(default=None, repr=False)
    _preview: Optional[Callable[[Any], Optional[Present]]] = field(default=None, repr=False)
    _set: Optional[Callable[[Any, Any], Any]] = field(default=None, repr=False)
    _build: Optional[Callable[[Any], Any]] = field(default=None, repr=False)

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return CAPABILITIES[self.kind]

    def supports(self, capability: Capability) -> bool:
        return capability in CAPABILITIES[self.kind]

    def _require(self, capability: Capability) -> None:
        if capability not in CAPABILITIES[self.kind]:
            raise CapabilityError(
                f"{self.kind.value} optic {self.name or '<anonymous>'} does not support {capability.value}"
            )

    def view(self, subject: Any) -> Any:
        """Total read. Only Iso, Lens and Getter support it."""
        self._require(_VIEW)
        return self._view(subject)

    def preview(self, subject: Any) -> Optional[Present]:
        """Partial read: Present(focus) or None when the focus is absent."""
        self._require(_PREVIEW)
        return self._preview(subject)

    def matches(self, subject: Any) -> bool:
        return self.preview(subject) is not None

    def set(self, subject: Any, value: Any) -> Any:
        """
        Replace the focus with `value`.

        Total for Iso and Lens. For Prism and AffineTraversal the subject is
        returned unchanged when the focus does not exist.
        """
        self._require(_SET)
        return self._set(subject, value)

    def over(self, subject: Any, fn: Callable[[Any], Any]) -> Any:
        """Apply `fn` to the focus, if there is one."""
        self._require(_SET)
        found = self._preview(subject)
        if found is None:
            return subject
        return self._set(subject, fn(found.value))

    def build(self, value: Any) -> Any:
        """Construct a subject from a focus value. Always succeeds."""
        self._require(_BUILD)
        return self._build(value)

    def then(self, inner: Optic) -> Optic:
        return compose(self, inner)

    def __truediv__(self, inner: Optic) -> Optic:
        return compose(self, inner)


def lens(source: Any, target: Any, get: Callable[[Any], Any],
         put: Callable[[Any, Any], Any], name: str = "") -> Optic:
    return Optic(
        kind=Kind.LENS, source=source, target=target, name=name,
        _view=get,
        _preview=lambda s: Present(get(s)),
        _set=put,
    )


def prism(source: Any, target: Any, match: Callable[[Any], Optional[Present]],
          build: Callable[[Any], Any], name: str = "") -> Optic:
    """
    Build a prism from a matcher and a constructor.

    `match` returns Present(payload) when the subject is the variant the
    prism focuses on, None otherwise.
    """
    def _set(s, v):
        return build(v) if match(s) is not None else s

    return Optic(
        kind=Kind.PRISM, source=source, target=target, name=name,
        _preview=match, _set=_set, _build=build,
    )


def affine(source: Any, target: Any, match: Callable[[Any], Optional[Present]],
           put: Callable[[Any, Any], Any], name: str = "") -> Optic:
    """
    Build an affine traversal.

    `put` is only called when `match` found a focus, so it may assume the
    focus exists.
    """
    def _set(s, v):
        return put(s, v) if match(s) is not None else s

    return Optic(
        kind=Kind.AFFINE_TRAVERSAL, source=source, target=target, name=name,
        _preview=match, _set=_set,
    )


def getter(source: Any, target: Any, get: Callable[[Any], Any], name: str = "") -> Optic:
    return Optic(
        kind=Kind.GETTER, source=source, target=target, name=name,
        _view=get,
        _preview=lambda s: Present(get(s)),
    )


def affine_fold(source: Any, target: Any, match: Callable[[Any], Optional[Present]],
                name: str = "") -> Optic:
    return Optic(kind=Kind.AFFINE_FOLD, source=source, target=target, name=name, _preview=match)


def review(source: Any, target: Any, build: Callable[[Any], Any], name: str = "") -> Optic:
    return Optic(kind=Kind.REVIEW, source=source, target=target, name=name, _build=build)


def iso(source: Any, target: Any, forward: Callable[[Any], Any],
        backward: Callable[[Any], Any], name: str = "") -> Optic:
    return Optic(
        kind=Kind.ISO, source=source, target=target, name=name,
        _view=forward,
        _preview=lambda s: Present(forward(s)),
        _set=lambda s, v: backward(v),
        _build=backward,
    )


def _same(value: Any) -> Any:
    return value


def identity(tp: Any = Any) -> Optic:
    """The neutral element of composition."""
    return iso(tp, tp, _same, _same, name="identity")


def _is_identity(optic: Optic) -> bool:
    return optic.kind is Kind.ISO and optic._view is _same and optic._build is _same


def just(tp: Any = Any) -> Optic:
    """Prism from Optional[tp] to tp, matching when the value is not None."""
    return prism(
        Optional[tp], tp,
        match=lambda s: None if s is None else Present(s),
        build=lambda v: v,
        name="just",
    )


def _compose2(outer: Optic, inner: Optic) -> Optic:
    if not accepts(outer.target, inner.source):
        raise CompositionError(
            f"Cannot compose {outer.name or outer.kind.value} "
            f"(focus {type_name(outer.target)}) with {inner.name or inner.kind.value} "
            f"(source {type_name(inner.source)})"
        )
    if _is_identity(inner):
        return outer
    if _is_identity(outer):
        return inner
    kind = join(outer.kind, inner.kind)
    caps = CAPABILITIES[kind]

    def _view(s):
        return inner._view(outer._view(s))

    def _preview(s):
        found = outer._preview(s)
        if found is None:
            return None
        return inner._preview(found.value)

    def _set(s, v):
        found = outer._preview(s)
        if found is None:
            return s
        return outer._set(s, inner._set(found.value, v))

    def _build(v):
        return outer._build(inner._build(v))

    return Optic(
        kind=kind,
        source=outer.source,
        target=inner.target,
        name=" % ".join(n for n in (outer.name, inner.name) if n),
        _view=_view if _VIEW in caps else None,
        _preview=_preview if _PREVIEW in caps else None,
        _set=_set if _SET in caps else None,
        _build=_build if _BUILD in caps else None,
    )


def compose(*optics: Optic) -> Optic:
    """
    Compose optics left to right: compose(a, b, c) focuses through a, then b, then c.

    Composition is associative and identity() is neutral. The result's
    capability is the greatest lower bound of the inputs.

    Raises:
        CompositionError: on a capability mismatch or when an optic's focus
            type does not fit the next optic's source type
    """
    if not optics:
        return identity()
    result = optics[0]
    for inner in optics[1:]:
        result = _compose2(result, inner)
    return result
