"""
Tests for the optic algebra.

These tests verify:
    - Capability tags and the composition table
    - Identity and associativity of composition
    - Partial reads and no-op writes
    - Setup-time rejection of bad compositions
"""

from dataclasses import dataclass, replace
from typing import Optional

import pytest

from openapi_optics.errors import CapabilityError, CompositionError
from openapi_optics.optics import (
    Capability,
    Kind,
    Present,
    accepts,
    compose,
    getter,
    identity,
    join,
    just,
    lens,
    prism,
    review,
)


@dataclass(frozen=True)
class Box:
    content: Optional[int] = None


@dataclass(frozen=True)
class Pair:
    left: Box
    right: int = 0


BOX_CONTENT = lens(Box, Optional[int], lambda b: b.content, lambda b, v: replace(b, content=v), name="content")
PAIR_LEFT = lens(Pair, Box, lambda p: p.left, lambda p, v: replace(p, left=v), name="left")
POSITIVE = prism(
    int, int,
    match=lambda n: Present(n) if n > 0 else None,
    build=lambda n: n,
    name="positive",
)


class TestJoin:
    """Test the capability lattice."""

    @pytest.mark.parametrize("outer, inner, expected", [
        (Kind.LENS, Kind.LENS, Kind.LENS),
        (Kind.LENS, Kind.PRISM, Kind.AFFINE_TRAVERSAL),
        (Kind.PRISM, Kind.LENS, Kind.AFFINE_TRAVERSAL),
        (Kind.PRISM, Kind.PRISM, Kind.PRISM),
        (Kind.LENS, Kind.AFFINE_TRAVERSAL, Kind.AFFINE_TRAVERSAL),
        (Kind.PRISM, Kind.AFFINE_TRAVERSAL, Kind.AFFINE_TRAVERSAL),
        (Kind.AFFINE_TRAVERSAL, Kind.LENS, Kind.AFFINE_TRAVERSAL),
        (Kind.ISO, Kind.PRISM, Kind.PRISM),
        (Kind.LENS, Kind.ISO, Kind.LENS),
        (Kind.PRISM, Kind.REVIEW, Kind.REVIEW),
        (Kind.GETTER, Kind.LENS, Kind.GETTER),
        (Kind.GETTER, Kind.PRISM, Kind.AFFINE_FOLD),
    ])
    def test_join_table(self, outer, inner, expected):
        """Composite capability is the greatest lower bound."""
        assert join(outer, inner) is expected

    @pytest.mark.parametrize("outer, inner", [
        (Kind.LENS, Kind.REVIEW),
        (Kind.REVIEW, Kind.AFFINE_TRAVERSAL),
        (Kind.GETTER, Kind.REVIEW),
    ])
    def test_join_without_common_capability(self, outer, inner):
        """Kinds with no shared capability cannot be composed."""
        with pytest.raises(CompositionError):
            join(outer, inner)


class TestLens:
    """Test plain lenses."""

    def test_view_and_set(self):
        """Should read and replace the focus."""
        box = Box(content=3)
        assert BOX_CONTENT.view(box) == 3
        assert BOX_CONTENT.set(box, 5) == Box(content=5)
        assert box == Box(content=3)

    def test_preview_of_lens_is_present(self):
        """A lens always finds its focus, even when the focus is None."""
        assert BOX_CONTENT.preview(Box()) == Present(None)

    def test_over(self):
        """Should modify the focus with a function."""
        assert BOX_CONTENT.over(Box(content=2), lambda n: n * 10) == Box(content=20)

    def test_lens_cannot_build(self):
        """Lenses have no construct direction."""
        with pytest.raises(CapabilityError):
            BOX_CONTENT.build(1)


class TestPrism:
    """Test prisms and reviews."""

    def test_preview_match_and_mismatch(self):
        """Mismatch is absent, not an error."""
        assert POSITIVE.preview(4) == Present(4)
        assert POSITIVE.preview(-4) is None
        assert POSITIVE.matches(4)
        assert not POSITIVE.matches(0)

    def test_set_on_mismatch_is_noop(self):
        """Writing through a non-matching prism leaves the subject unchanged."""
        assert POSITIVE.set(-1, 7) == -1
        assert POSITIVE.set(1, 7) == 7

    def test_prism_cannot_view(self):
        """Total reads are not available on a prism."""
        with pytest.raises(CapabilityError):
            POSITIVE.view(1)

    def test_review_only_builds(self):
        """A review supports build and nothing else."""
        wrap = review(Box, int, lambda n: Box(content=n), name="wrap")
        assert wrap.build(2) == Box(content=2)
        assert not wrap.supports(Capability.PREVIEW)
        with pytest.raises(CapabilityError):
            wrap.set(Box(), 1)

    def test_just(self):
        """just() matches any value but None."""
        j = just(int)
        assert j.preview(None) is None
        assert j.preview(0) == Present(0)
        assert j.build(5) == 5


class TestComposition:
    """Test composition of optics."""

    def test_lens_lens_is_lens(self):
        """Lens ∘ Lens stays total."""
        left_content = compose(PAIR_LEFT, BOX_CONTENT)
        assert left_content.kind is Kind.LENS
        pair = Pair(left=Box(content=1))
        assert left_content.view(pair) == 1
        assert left_content.set(pair, 9) == Pair(left=Box(content=9))

    def test_lens_prism_is_affine(self):
        """Lens ∘ Prism downgrades to an affine traversal."""
        right_positive = compose(
            lens(Pair, int, lambda p: p.right, lambda p, v: replace(p, right=v), name="right"),
            POSITIVE,
        )
        assert right_positive.kind is Kind.AFFINE_TRAVERSAL
        assert right_positive.preview(Pair(left=Box(), right=0)) is None
        assert right_positive.set(Pair(left=Box(), right=0), 5) == Pair(left=Box(), right=0)
        assert right_positive.set(Pair(left=Box(), right=2), 5) == Pair(left=Box(), right=5)

    def test_through_optional_with_just(self):
        """Optional focus is unwrapped with just(); absent stays absent."""
        content_positive = compose(BOX_CONTENT, just(int), POSITIVE)
        assert content_positive.kind is Kind.AFFINE_TRAVERSAL
        assert content_positive.preview(Box()) is None
        assert content_positive.set(Box(), 3) == Box()
        assert content_positive.set(Box(content=1), 3) == Box(content=3)

    def test_identity_is_neutral(self):
        """Composing with identity changes nothing."""
        assert compose(identity(), BOX_CONTENT) is BOX_CONTENT
        assert compose(BOX_CONTENT, identity()) is BOX_CONTENT
        assert compose().kind is Kind.ISO

    def test_associativity(self):
        """(a ∘ b) ∘ c behaves like a ∘ (b ∘ c)."""
        left_assoc = compose(compose(PAIR_LEFT, BOX_CONTENT), just(int))
        right_assoc = compose(PAIR_LEFT, compose(BOX_CONTENT, just(int)))
        assert left_assoc.kind is right_assoc.kind
        for pair in (Pair(left=Box()), Pair(left=Box(content=4))):
            assert left_assoc.preview(pair) == right_assoc.preview(pair)
            assert left_assoc.set(pair, 8) == right_assoc.set(pair, 8)

    def test_type_mismatch_rejected(self):
        """Focus type must fit the next source type."""
        with pytest.raises(CompositionError):
            compose(BOX_CONTENT, BOX_CONTENT)

    def test_optional_needs_just(self):
        """Optional[int] does not feed an int optic directly."""
        with pytest.raises(CompositionError):
            compose(BOX_CONTENT, POSITIVE)

    def test_capability_mismatch_rejected(self):
        """Lens ∘ Review has no common capability."""
        with pytest.raises(CompositionError):
            compose(PAIR_LEFT, review(Box, int, lambda n: Box(content=n)))

    def test_getter_composition_is_read_only(self):
        """Getter ∘ Lens can read but not write."""
        size = compose(getter(Pair, Box, lambda p: p.left), BOX_CONTENT)
        assert size.kind is Kind.GETTER
        assert size.view(Pair(left=Box(content=2))) == 2
        with pytest.raises(CapabilityError):
            size.set(Pair(left=Box()), 1)

    def test_composite_name(self):
        """Composite optics describe their path."""
        assert compose(PAIR_LEFT, BOX_CONTENT).name == "left % content"

    def test_truediv_composes(self):
        """`/` is shorthand for then()."""
        assert (PAIR_LEFT / BOX_CONTENT).view(Pair(left=Box(content=6))) == 6


class TestAccepts:
    """Test static type compatibility."""

    def test_subclass_accepted(self):
        assert accepts(bool, int)

    def test_unrelated_rejected(self):
        assert not accepts(str, int)

    def test_optional_only_matches_optional(self):
        assert accepts(Optional[int], Optional[int])
        assert not accepts(Optional[int], int)
