"""Module-level coverage API backed by one shared matcher.

The matcher is built from the active coverage config the first time it is
needed and reused for every later call.
"""

import logging
from typing import Any, Mapping, Optional, Union

from partner_coverage.config.coverage_config import (
    CoverageConfig,
    get_coverage_config,
    set_coverage_config,
)
from partner_coverage.coverage.matcher import (
    CoverageMatcher,
    MatchMode,
    PartnerLike,
    ProjectLike,
)
from partner_coverage.coverage.report import build_coverage_report as _build_report
from partner_coverage.coverage.schemas import (
    CheckResult,
    CoverageReport,
    Location,
    LocationInference,
    MatchResult,
    Region,
)

logger = logging.getLogger(__name__)

_matcher: Optional[CoverageMatcher] = None


def get_matcher() -> CoverageMatcher:
    """Shared matcher built from the active coverage config."""
    global _matcher
    if _matcher is None:
        _matcher = CoverageMatcher.from_config(get_coverage_config())
    return _matcher


def configure(config: CoverageConfig) -> CoverageMatcher:
    """Switch the shared matcher to ``config`` and return it."""
    global _matcher
    set_coverage_config(config)
    _matcher = CoverageMatcher.from_config(config)
    logger.debug(f"Coverage matcher reconfigured (config v{config.version})")
    return _matcher


def reset() -> None:
    """Drop the shared matcher so the next call rebuilds it from config."""
    global _matcher
    _matcher = None


def resolve_region(postal_code: Union[str, int, None]) -> Optional[Region]:
    """Map a Belgian postal code to its region, or None."""
    return get_matcher().resolver.resolve_region(postal_code)


def infer_service_requirements(
    location: Union[Location, Mapping[str, Any], None],
) -> LocationInference:
    """Suggest coverage and language for a project location."""
    return get_matcher().resolver.infer_service_requirements(location)


def check_partner_service_match(
    partner: PartnerLike,
    project: ProjectLike,
    mode: MatchMode = MatchMode.FAST,
) -> MatchResult:
    """Decide whether a partner can serve a project."""
    return get_matcher().check_partner_service_match(partner, project, mode=mode)


def check_coverage_match(partner: PartnerLike, project: ProjectLike) -> CheckResult:
    """Hierarchy-aware full/partial/mismatch coverage check."""
    return get_matcher().check_coverage_match(partner, project)


def check_language_match(partner: PartnerLike, project: ProjectLike) -> CheckResult:
    """Project language versus partner language preferences."""
    return get_matcher().check_language_match(partner, project)


def build_coverage_report(
    partner: PartnerLike,
    project: ProjectLike,
    mode: MatchMode = MatchMode.FAST,
) -> CoverageReport:
    """Coverage report labelled with the active config's coverage labels."""
    return _build_report(
        get_matcher(),
        partner,
        project,
        labels=get_coverage_config().coverage_labels,
        mode=mode,
    )
