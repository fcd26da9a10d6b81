"""Coverage hierarchy: which coverage codes subsume which.

The relation is a small directed acyclic graph stored as an adjacency table
(code -> codes it covers directly). Closures are computed once at
construction and shared by every lookup.
"""

import logging
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set

from partner_coverage.coverage.schemas import CoverageCode, code_value

logger = logging.getLogger(__name__)

DEFAULT_HIERARCHY: Dict[str, List[str]] = {
    CoverageCode.BELGIUM_ALL.value: [
        CoverageCode.BELGIUM_FR.value,
        CoverageCode.BELGIUM_NL.value,
        CoverageCode.BRUSSELS_BILINGUAL.value,
    ],
    CoverageCode.BELGIUM_FR.value: [
        CoverageCode.WALLONIA_FR.value,
        CoverageCode.BRUSSELS_FR.value,
    ],
    CoverageCode.BELGIUM_NL.value: [
        CoverageCode.FLANDERS_NL.value,
        CoverageCode.BRUSSELS_NL.value,
    ],
    CoverageCode.BRUSSELS_BILINGUAL.value: [
        CoverageCode.BRUSSELS_FR.value,
        CoverageCode.BRUSSELS_NL.value,
    ],
}


class HierarchyCycleError(ValueError):
    """Raised when a covering table is not acyclic."""

    pass


class CoverageHierarchy:
    """Transitive covering relation over coverage codes.

    Usage:
        hierarchy = CoverageHierarchy()
        hierarchy.closure("belgium_fr")        # {"wallonia_fr", "brussels_fr"}
        hierarchy.can_cover(["belgium_fr"], "wallonia_fr")  # True
    """

    def __init__(self, table: Optional[Mapping[str, Iterable[str]]] = None):
        """Build the hierarchy.

        Args:
            table: Adjacency table (code -> directly covered codes). Uses the
                built-in Belgian hierarchy if not provided.

        Raises:
            HierarchyCycleError: If the table contains a cycle.
        """
        source = DEFAULT_HIERARCHY if table is None else table
        self._direct: Dict[str, FrozenSet[str]] = {
            code_value(code): frozenset(code_value(c) for c in covered)
            for code, covered in source.items()
        }
        self._closures: Dict[str, FrozenSet[str]] = {}
        for code in self._direct:
            self._closures[code] = self._walk(code, [])
        logger.debug(f"Built coverage hierarchy over {len(self._direct)} parent codes")

    def _walk(self, code: str, path: List[str]) -> FrozenSet[str]:
        if code in self._closures:
            return self._closures[code]
        if code in path:
            cycle = " -> ".join(path[path.index(code):] + [code])
            raise HierarchyCycleError(f"Coverage hierarchy contains a cycle: {cycle}")

        covered: Set[str] = set()
        for child in self._direct.get(code, ()):
            covered.add(child)
            covered |= self._walk(child, path + [code])
        result = frozenset(covered)
        self._closures[code] = result
        return result

    @property
    def table(self) -> Dict[str, FrozenSet[str]]:
        """Direct covering table (read-only copy)."""
        return dict(self._direct)

    def closure(self, code: str) -> FrozenSet[str]:
        """Every code transitively covered by ``code``, excluding itself."""
        return self._closures.get(code_value(code), frozenset())

    def can_cover(self, partner_codes: Iterable[str], required: str) -> bool:
        """Whether any of ``partner_codes`` is or subsumes ``required``."""
        required = code_value(required)
        for code in partner_codes:
            code = code_value(code)
            if code == required or required in self.closure(code):
                return True
        return False

    def covering_codes(self, required: str) -> FrozenSet[str]:
        """Codes whose closure contains ``required`` (reverse lookup)."""
        required = code_value(required)
        return frozenset(
            code for code, covered in self._closures.items() if required in covered
        )
