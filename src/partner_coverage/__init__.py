"""
Partner Coverage - service coverage matching for a channel-partner network.

Decides whether a partner can service a project from the partner's declared
coverage and languages and the project's explicit requirements or Belgian
postal code.
"""

__version__ = "0.1.0"

from partner_coverage.coverage.matcher import CoverageMatcher, MatchMode
from partner_coverage.coverage.schemas import (
    CheckStatus,
    Confidence,
    CoverageCode,
    MatchResult,
    MatchType,
    Region,
    ServeVerdict,
)
from partner_coverage.service import (
    build_coverage_report,
    check_coverage_match,
    check_language_match,
    check_partner_service_match,
    infer_service_requirements,
    resolve_region,
)

__all__ = [
    "CoverageMatcher",
    "MatchMode",
    "CheckStatus",
    "Confidence",
    "CoverageCode",
    "MatchResult",
    "MatchType",
    "Region",
    "ServeVerdict",
    "build_coverage_report",
    "check_coverage_match",
    "check_language_match",
    "check_partner_service_match",
    "infer_service_requirements",
    "resolve_region",
]
