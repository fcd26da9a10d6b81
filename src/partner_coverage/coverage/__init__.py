"""Coverage matching module for partner/project service coverage.

Architecture:
    postal code -> [RegionResolver] -> LocationInference
                                              |
    partner + project -> [CoverageMatcher] <--+--> [CoverageHierarchy]
                                |
                                v
                    MatchResult / CheckResult / CoverageReport
"""

from partner_coverage.coverage.schemas import (
    CheckResult,
    CheckStatus,
    Confidence,
    CoverageCode,
    CoverageReport,
    Location,
    LocationInference,
    MatchResult,
    MatchType,
    Partner,
    PostalCodeRange,
    Project,
    Region,
    ServeVerdict,
)
from partner_coverage.coverage.hierarchy import CoverageHierarchy, HierarchyCycleError
from partner_coverage.coverage.regions import RegionProfile, RegionResolver
from partner_coverage.coverage.matcher import CoverageMatcher, MatchMode
from partner_coverage.coverage.report import build_coverage_report

__all__ = [
    "CheckResult",
    "CheckStatus",
    "Confidence",
    "CoverageCode",
    "CoverageReport",
    "Location",
    "LocationInference",
    "MatchResult",
    "MatchType",
    "Partner",
    "PostalCodeRange",
    "Project",
    "Region",
    "ServeVerdict",
    "CoverageHierarchy",
    "HierarchyCycleError",
    "RegionProfile",
    "RegionResolver",
    "CoverageMatcher",
    "MatchMode",
    "build_coverage_report",
]
