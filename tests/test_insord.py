"""
Tests for the insertion-ordered keyed container.
"""

from openapi_optics.insord import InsOrdMap, at_key, ix_key
from openapi_optics.optics import Kind, Present


class TestInsOrdMap:
    """Test ordering and immutability."""

    def test_enumeration_follows_insertion(self):
        """Keys enumerate in first-insertion order."""
        m = InsOrdMap([(404, "missing"), (200, "ok"), (500, "error")])
        assert list(m) == [404, 200, 500]

    def test_delete_keeps_remaining_order(self):
        """Entries for 200 then 404; deleting 200 leaves [404]."""
        m = InsOrdMap().insert(200, "OK").insert(404, "Not found")
        assert list(m.delete(200)) == [404]

    def test_overwrite_keeps_position(self):
        """Overwriting a present key does not move it."""
        m = InsOrdMap([("a", 1), ("b", 2)]).insert("a", 10)
        assert list(m.items()) == [("a", 10), ("b", 2)]

    def test_reinsert_moves_to_end(self):
        """Delete then insert places the key last."""
        m = InsOrdMap([("a", 1), ("b", 2)]).delete("a").insert("a", 1)
        assert list(m) == ["b", "a"]

    def test_updates_do_not_mutate(self):
        """insert/delete return new maps."""
        m = InsOrdMap([("a", 1)])
        m.insert("b", 2)
        m.delete("a")
        assert list(m.items()) == [("a", 1)]

    def test_delete_missing_returns_same_map(self):
        m = InsOrdMap([("a", 1)])
        assert m.delete("zzz") is m

    def test_equality_ignores_order(self):
        """Maps with the same entries are equal whatever their order."""
        assert InsOrdMap([("a", 1), ("b", 2)]) == InsOrdMap([("b", 2), ("a", 1)])
        assert InsOrdMap([("a", 1)]) != InsOrdMap([("a", 2)])

    def test_alter(self):
        """None deletes, a value inserts."""
        m = InsOrdMap([("a", 1)])
        assert "a" not in m.alter("a", None)
        assert m.alter("b", 2)["b"] == 2

    def test_build_from_mapping(self):
        assert InsOrdMap({"x": 1}) == InsOrdMap([("x", 1)])


class TestKeyOptics:
    """Test at_key and ix_key."""

    def test_at_key_is_lens_over_optional(self):
        """at_key views None for a missing key."""
        optic = at_key("a")
        assert optic.kind is Kind.LENS
        assert optic.view(InsOrdMap()) is None
        assert optic.view(InsOrdMap([("a", 1)])) == 1

    def test_at_key_inserts_and_deletes(self):
        m = InsOrdMap([("a", 1)])
        assert at_key("b").set(m, 2) == InsOrdMap([("a", 1), ("b", 2)])
        assert at_key("a").set(m, None) == InsOrdMap()
        assert at_key("zzz").set(m, None) == m

    def test_ix_key_cannot_insert(self):
        """ix_key only rewrites an existing entry."""
        m = InsOrdMap([("a", 1)])
        assert ix_key("a").preview(m) == Present(1)
        assert ix_key("b").preview(m) is None
        assert ix_key("b").set(m, 5) == m
        assert ix_key("a").set(m, 5) == InsOrdMap([("a", 5)])
