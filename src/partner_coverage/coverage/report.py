"""Coverage report for the partner/project coverage badge view.

Bundles the quick verdict, the detailed coverage and language checks, the
location inference and labelled code lists into one value a view can
render without further logic.
"""

import logging
from typing import Iterable, List, Mapping, Optional

from partner_coverage.coverage.matcher import (
    CoverageMatcher,
    MatchMode,
    PartnerLike,
    ProjectLike,
    as_partner,
    as_project,
)
from partner_coverage.coverage.schemas import (
    CheckStatus,
    CoverageReport,
    ServeVerdict,
    code_value,
)

logger = logging.getLogger(__name__)

_BADGE_BY_VERDICT = {
    ServeVerdict.SERVES: CheckStatus.MATCH,
    ServeVerdict.DOES_NOT_SERVE: CheckStatus.MISMATCH,
    ServeVerdict.UNCLEAR: CheckStatus.PARTIAL,
}


def label_codes(codes: Iterable, labels: Optional[Mapping[str, str]] = None) -> List[str]:
    """Display labels for coverage codes, falling back to the raw code."""
    labels = labels or {}
    result = []
    for code in codes:
        value = code_value(code)
        result.append(labels.get(value, value))
    return result


def build_coverage_report(
    matcher: CoverageMatcher,
    partner: PartnerLike,
    project: ProjectLike,
    labels: Optional[Mapping[str, str]] = None,
    mode: MatchMode = MatchMode.FAST,
) -> CoverageReport:
    """Assemble the coverage report for one partner/project pair.

    Args:
        matcher: Matcher holding the region and hierarchy tables.
        partner: Partner snapshot.
        project: Project snapshot.
        labels: Coverage code -> display label table.
        mode: Match mode used for the verdict and badge.

    Returns:
        CoverageReport with the verdict and its badge status.
    """
    partner = as_partner(partner)
    project = as_project(project)

    verdict = matcher.check_partner_service_match(partner, project, mode=mode)

    location = project.project_location
    inference = None
    location_title = None
    if location is not None and location.postal_code not in (None, ""):
        inference = matcher.resolver.infer_service_requirements(location)
        if inference.region is not None:
            location_title = location.city or inference.region.value

    report = CoverageReport(
        verdict=verdict,
        badge_status=_BADGE_BY_VERDICT[verdict.verdict],
        coverage=matcher.check_coverage_match(partner, project),
        language=matcher.check_language_match(partner, project),
        location_inference=inference,
        location_title=location_title,
        required_labels=label_codes(project.required_service_coverage, labels),
        inferred_labels=label_codes(inference.suggested_coverage if inference else [], labels),
        partner_labels=label_codes(partner.service_coverage, labels),
    )
    logger.debug(
        f"Coverage report: {verdict.match_type.value} / {report.coverage.status.value} "
        f"/ language {report.language.status.value}"
    )
    return report
