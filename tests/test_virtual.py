"""
Tests for virtual accessors.

These tests verify:
    - Reading a virtual accessor equals reading through its parts
    - Lens capability through plain fields, affine through optional ones
    - Writes through an absent intermediate are no-ops
    - Declaration ordering and shape errors
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from openapi_optics.errors import AmbiguousAccessorError, CompositionError, UnknownAccessorError
from openapi_optics.labels import SCHEMA_CONSTRAINTS, label
from openapi_optics.model import (
    Header,
    Inline,
    NamedSchema,
    OpenApiType,
    Param,
    Ref,
    Reference,
    Schema,
)
from openapi_optics.optics import Kind, Present
from openapi_optics.registry import LabelRegistry
from openapi_optics.virtual import VirtualAccessor, VirtualAccessorLayer


@dataclass(frozen=True)
class Limits:
    low: int = 0
    high: int = 10


@dataclass(frozen=True)
class Gauge:
    label: str = ""
    limits: Optional[Limits] = None


@dataclass(frozen=True)
class Panel:
    gauge: Gauge = Gauge()


def _gauge_registry() -> LabelRegistry:
    registry = LabelRegistry()
    for entity in (Limits, Gauge, Panel):
        registry.register_fields(entity)
    return registry


class TestNamedSchemaVirtuals:
    """Test constraint accessors on NamedSchema (through a plain field)."""

    @pytest.mark.parametrize("name", SCHEMA_CONSTRAINTS)
    def test_lens_capability(self, name):
        assert label(NamedSchema, name).kind is Kind.LENS

    def test_view_equals_view_through_schema(self):
        """view(virtual) == view(inner, view(through))"""
        named = NamedSchema(name="Age", schema=Schema(type=OpenApiType.INTEGER, minimum=0.0))
        for name in ("type", "minimum", "maximum"):
            expected = label(Schema, name).view(label(NamedSchema, "schema").view(named))
            assert label(NamedSchema, name).view(named) == expected

    def test_set_writes_into_schema(self):
        named = label(NamedSchema, "pattern").set(NamedSchema(name="Code"), "^[A-Z]+$")
        assert named == NamedSchema(name="Code", schema=Schema(pattern="^[A-Z]+$"))


class TestOptionalIntermediate:
    """Test constraint accessors on Param and Header (through an optional schema)."""

    @pytest.mark.parametrize("parent", [Param, Header])
    def test_affine_capability(self, parent):
        assert label(parent, "type").kind is Kind.AFFINE_TRAVERSAL

    def test_unset_intermediate_is_absent(self):
        """No schema: reads are absent."""
        assert label(Param, "type").preview(Param(name="id")) is None

    def test_set_through_unset_intermediate_is_noop(self):
        """Setting a virtual field without a schema leaves the entity unchanged."""
        param = Param(name="id")
        assert label(Param, "type").set(param, OpenApiType.INTEGER) == param

    def test_set_after_setting_intermediate(self):
        """Setting the schema first, then the virtual field, succeeds."""
        param = label(Param, "schema").set(Param(name="id"), Inline(Schema()))
        param = label(Param, "type").set(param, OpenApiType.INTEGER)
        assert label(Param, "type").preview(param) == Present(OpenApiType.INTEGER)
        assert param.schema == Inline(Schema(type=OpenApiType.INTEGER))

    def test_present_schema_with_unset_field(self):
        """Present(None) is a present schema without the field, not absence."""
        header = Header(schema=Inline(Schema()))
        assert label(Header, "format").preview(header) == Present(None)

    def test_referenced_schema_is_not_followed(self):
        """A $ref schema has no inline constraints to edit."""
        param = Param(name="id", schema=Ref(Reference("Id")))
        assert label(Param, "max_length").preview(param) is None
        assert label(Param, "max_length").set(param, 5) == param

    def test_equivalence_when_present(self):
        """Through a present schema the virtual read equals the two-step read."""
        schema = Schema(type=OpenApiType.STRING, max_length=8)
        header = Header(schema=Inline(schema))
        assert label(Header, "max_length").preview(header) == Present(label(Schema, "max_length").view(schema))


class TestVirtualAccessorLayer:
    """Test installing declarations."""

    def test_install_through_optional(self):
        registry = _gauge_registry()
        optic = VirtualAccessorLayer(registry).install(VirtualAccessor(Gauge, "high", "limits", Limits))
        assert optic.kind is Kind.AFFINE_TRAVERSAL
        assert registry.lookup(Gauge, "high") is optic
        assert optic.set(Gauge(), 5) == Gauge()
        assert optic.set(Gauge(limits=Limits()), 5) == Gauge(limits=Limits(high=5))

    def test_inner_name(self):
        """The exposed name may differ from the inner label."""
        registry = _gauge_registry()
        optic = VirtualAccessorLayer(registry).install(
            VirtualAccessor(Gauge, "ceiling", "limits", Limits, inner_name="high")
        )
        assert optic.preview(Gauge(limits=Limits(high=3))) == Present(3)

    def test_virtual_on_virtual(self):
        """A virtual accessor may build on one declared before it."""
        registry = _gauge_registry()
        layer = VirtualAccessorLayer(registry)
        layer.install_all([
            VirtualAccessor(Gauge, "high", "limits", Limits),
            VirtualAccessor(Panel, "high", "gauge", Gauge),
        ])
        panel = Panel(gauge=Gauge(limits=Limits()))
        assert registry.lookup(Panel, "high").preview(panel) == Present(10)
        assert registry.lookup(Panel, "high").kind is Kind.AFFINE_TRAVERSAL

    def test_dependency_must_come_first(self):
        """Declaring a virtual accessor before its dependency fails at setup."""
        registry = _gauge_registry()
        with pytest.raises(UnknownAccessorError):
            VirtualAccessorLayer(registry).install_all([
                VirtualAccessor(Panel, "high", "gauge", Gauge),
                VirtualAccessor(Gauge, "high", "limits", Limits),
            ])

    def test_through_field_must_hold_inner(self):
        registry = _gauge_registry()
        with pytest.raises(CompositionError):
            VirtualAccessorLayer(registry).install(VirtualAccessor(Panel, "low", "gauge", Limits))

    def test_clash_with_field_is_ambiguous(self):
        """A virtual name may not shadow a real field."""
        registry = _gauge_registry()
        with pytest.raises(AmbiguousAccessorError):
            VirtualAccessorLayer(registry).install(
                VirtualAccessor(Gauge, "label", "limits", Limits, inner_name="low")
            )
