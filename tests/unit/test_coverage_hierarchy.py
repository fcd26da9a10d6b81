"""Tests for the coverage hierarchy closure."""

import pytest

from partner_coverage.coverage.hierarchy import CoverageHierarchy, HierarchyCycleError
from partner_coverage.coverage.schemas import CoverageCode

ALL_CODES = {code.value for code in CoverageCode}


@pytest.fixture(scope="module")
def hierarchy():
    return CoverageHierarchy()


class TestClosure:
    """Transitive closure of the built-in hierarchy."""

    def test_belgium_all_covers_everything_else(self, hierarchy):
        assert hierarchy.closure("belgium_all") == ALL_CODES - {"belgium_all"}

    def test_belgium_fr(self, hierarchy):
        assert hierarchy.closure(CoverageCode.BELGIUM_FR) == {"wallonia_fr", "brussels_fr"}

    def test_belgium_nl(self, hierarchy):
        assert hierarchy.closure("belgium_nl") == {"flanders_nl", "brussels_nl"}

    def test_brussels_bilingual(self, hierarchy):
        assert hierarchy.closure("brussels_bilingual") == {"brussels_fr", "brussels_nl"}

    @pytest.mark.parametrize("leaf", ["wallonia_fr", "flanders_nl", "brussels_fr", "brussels_nl"])
    def test_leaf_codes_cover_nothing(self, hierarchy, leaf):
        assert hierarchy.closure(leaf) == frozenset()

    def test_unknown_code(self, hierarchy):
        assert hierarchy.closure("netherlands_nl") == frozenset()

    def test_closure_excludes_self(self, hierarchy):
        for code in ALL_CODES:
            assert code not in hierarchy.closure(code)


class TestCanCover:
    """Tests for CoverageHierarchy.can_cover."""

    def test_direct_match(self, hierarchy):
        assert hierarchy.can_cover(["wallonia_fr"], "wallonia_fr") is True

    def test_broader_code_covers_narrower(self, hierarchy):
        assert hierarchy.can_cover(["belgium_fr"], "wallonia_fr") is True
        assert hierarchy.can_cover(["brussels_bilingual"], "brussels_nl") is True
        assert hierarchy.can_cover(["belgium_all"], "brussels_fr") is True

    def test_narrower_code_does_not_cover_broader(self, hierarchy):
        """The relation is one-way: wallonia_fr does not cover belgium_fr."""
        assert hierarchy.can_cover(["wallonia_fr"], "belgium_fr") is False
        assert hierarchy.can_cover(["brussels_fr", "brussels_nl"], "brussels_bilingual") is False

    def test_wrong_language(self, hierarchy):
        assert hierarchy.can_cover(["belgium_nl"], "wallonia_fr") is False

    def test_empty_partner(self, hierarchy):
        assert hierarchy.can_cover([], "belgium_all") is False

    def test_accepts_enum_members(self, hierarchy):
        assert hierarchy.can_cover([CoverageCode.BELGIUM_NL], CoverageCode.FLANDERS_NL) is True


class TestCoveringCodes:
    """Reverse lookup of which codes subsume a code."""

    def test_brussels_fr(self, hierarchy):
        assert hierarchy.covering_codes("brussels_fr") == {
            "belgium_all",
            "belgium_fr",
            "brussels_bilingual",
        }

    def test_belgium_all_is_covered_by_nothing(self, hierarchy):
        assert hierarchy.covering_codes("belgium_all") == frozenset()


class TestCustomTables:
    """Hierarchies built from configured tables."""

    def test_custom_table(self):
        hierarchy = CoverageHierarchy({"a": ["b"], "b": ["c"]})
        assert hierarchy.closure("a") == {"b", "c"}
        assert hierarchy.table == {"a": frozenset({"b"}), "b": frozenset({"c"})}

    def test_cycle_rejected(self):
        with pytest.raises(HierarchyCycleError, match="cycle"):
            CoverageHierarchy({"a": ["b"], "b": ["c"], "c": ["a"]})

    def test_self_cycle_rejected(self):
        with pytest.raises(HierarchyCycleError):
            CoverageHierarchy({"a": ["a"]})

    def test_cycle_error_is_value_error(self):
        assert issubclass(HierarchyCycleError, ValueError)
