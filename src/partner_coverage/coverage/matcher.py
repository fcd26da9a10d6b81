"""Partner/project service coverage matching.

Verdict precedence for check_partner_service_match:
1. Partner has no coverage          -> DOES_NOT_SERVE (no_coverage, none)
2. Explicit project requirements    -> SERVES (explicit, high) on a hit
3. Region inferred from postal code -> SERVES / DOES_NOT_SERVE (medium)
4. Nothing to go on                 -> UNCLEAR (unclear, low)

Step 2 has two modes. FAST only credits a literal code match or the
universal belgium_all code. THOROUGH walks the coverage hierarchy, which
is the rule check_coverage_match always uses. FAST is the default.

Nothing in this module raises on malformed records: unreadable fields are
logged and treated as missing data, while the rest of the record is kept.
"""

import logging
from enum import Enum
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from partner_coverage.coverage.hierarchy import CoverageHierarchy
from partner_coverage.coverage.regions import RegionResolver
from partner_coverage.coverage.schemas import (
    CheckResult,
    CheckStatus,
    Confidence,
    CoverageCode,
    MatchResult,
    MatchType,
    Partner,
    Project,
    ProjectLanguage,
    ServeVerdict,
)

logger = logging.getLogger(__name__)

PartnerLike = Union[Partner, Mapping[str, Any], None]
ProjectLike = Union[Project, Mapping[str, Any], None]


class MatchMode(str, Enum):
    """How explicit coverage requirements are checked."""

    FAST = "fast"  # Literal match or belgium_all only
    THOROUGH = "thorough"  # Full hierarchy closure


def as_partner(partner: PartnerLike) -> Partner:
    """Coerce a partner snapshot.

    Unreadable fields are dropped one by one by the model; only a record that
    is not a mapping at all becomes an empty partner.
    """
    if isinstance(partner, Partner):
        return partner
    if partner is None:
        return Partner()
    try:
        return Partner.model_validate(partner)
    except ValidationError as e:
        logger.warning(f"Treating unreadable partner record as empty: {e.error_count()} errors")
        return Partner()


def as_project(project: ProjectLike) -> Project:
    """Coerce a project snapshot; only a non-mapping record becomes an empty project."""
    if isinstance(project, Project):
        return project
    if project is None:
        return Project()
    try:
        return Project.model_validate(project)
    except ValidationError as e:
        logger.warning(f"Treating unreadable project record as empty: {e.error_count()} errors")
        return Project()


class CoverageMatcher:
    """Decide whether a partner can service a project.

    Usage:
        matcher = CoverageMatcher()
        result = matcher.check_partner_service_match(partner, project)
        if result.verdict == ServeVerdict.UNCLEAR:
            ...  # needs a human
    """

    def __init__(
        self,
        resolver: Optional[RegionResolver] = None,
        hierarchy: Optional[CoverageHierarchy] = None,
    ):
        """Initialize the matcher.

        Args:
            resolver: Region resolver. Uses the built-in Belgian tables if not provided.
            hierarchy: Coverage hierarchy. Uses the built-in hierarchy if not provided.
        """
        self.resolver = resolver or RegionResolver()
        self.hierarchy = hierarchy or CoverageHierarchy()

    @classmethod
    def from_config(cls, config) -> "CoverageMatcher":
        """Create a matcher from a CoverageConfig."""
        return cls(
            resolver=RegionResolver.from_config(config),
            hierarchy=CoverageHierarchy(config.hierarchy),
        )

    def _meets_requirement(self, partner: Partner, required: str, mode: MatchMode) -> bool:
        if mode == MatchMode.THOROUGH:
            return self.hierarchy.can_cover(partner.service_coverage, required)
        return (
            required in partner.service_coverage
            or CoverageCode.BELGIUM_ALL.value in partner.service_coverage
        )

    def check_partner_service_match(
        self,
        partner: PartnerLike,
        project: ProjectLike,
        mode: MatchMode = MatchMode.FAST,
    ) -> MatchResult:
        """Produce a serve/does-not-serve/unclear verdict for a partner and project.

        Args:
            partner: Partner snapshot (model or mapping with service_coverage).
            project: Project snapshot (model or mapping with
                required_service_coverage and/or project_location).
            mode: How explicit requirements are matched against the partner.

        Returns:
            MatchResult describing the verdict, the branch that produced it,
            and its confidence.
        """
        partner = as_partner(partner)
        project = as_project(project)

        if not partner.service_coverage:
            return MatchResult(
                verdict=ServeVerdict.DOES_NOT_SERVE,
                match_type=MatchType.NO_COVERAGE,
                confidence=Confidence.NONE,
                reason="Partner has no service coverage defined",
            )

        if project.required_service_coverage:
            hit = any(
                self._meets_requirement(partner, required, mode)
                for required in project.required_service_coverage
            )
            if hit:
                return MatchResult(
                    verdict=ServeVerdict.SERVES,
                    match_type=MatchType.EXPLICIT,
                    confidence=Confidence.HIGH,
                    reason="Partner explicitly covers required regions",
                )
            logger.debug(
                f"No explicit coverage hit ({mode.value}) for "
                f"{project.required_service_coverage}, trying location"
            )

        location = project.project_location
        if location is not None and location.postal_code not in (None, ""):
            inference = self.resolver.infer_service_requirements(location)
            if inference.region is not None:
                region = inference.region.value
                covered = any(
                    code.value in partner.service_coverage
                    for code in inference.suggested_coverage
                )
                if covered:
                    return MatchResult(
                        verdict=ServeVerdict.SERVES,
                        match_type=MatchType.INFERRED,
                        confidence=Confidence.MEDIUM,
                        reason=(
                            f"Partner covers {region} region "
                            f"(inferred from {location.city or 'location'})"
                        ),
                    )
                return MatchResult(
                    verdict=ServeVerdict.DOES_NOT_SERVE,
                    match_type=MatchType.INFERRED_MISMATCH,
                    confidence=Confidence.MEDIUM,
                    reason=f"Project location in {region}, but partner doesn't cover this region",
                )

        return MatchResult(
            verdict=ServeVerdict.UNCLEAR,
            match_type=MatchType.UNCLEAR,
            confidence=Confidence.LOW,
            reason="No location or coverage specified - cannot determine match",
        )

    def check_coverage_match(self, partner: PartnerLike, project: ProjectLike) -> CheckResult:
        """Grade how much of the project's required coverage the partner holds.

        Every required code is checked against the full hierarchy, so a
        partner with belgium_fr covers a wallonia_fr requirement here even
        though the FAST verdict would not credit it.
        """
        partner = as_partner(partner)
        project = as_project(project)

        if not project.required_service_coverage:
            return CheckResult(status=CheckStatus.UNKNOWN, message="No coverage requirements specified")
        if not partner.service_coverage:
            return CheckResult(status=CheckStatus.MISMATCH, message="Partner has no coverage defined")

        coverable = [
            self.hierarchy.can_cover(partner.service_coverage, required)
            for required in project.required_service_coverage
        ]
        if all(coverable):
            return CheckResult(status=CheckStatus.MATCH, message="Full coverage match")
        if any(coverable):
            return CheckResult(status=CheckStatus.PARTIAL, message="Partial coverage match")
        return CheckResult(status=CheckStatus.MISMATCH, message="No coverage match")

    def check_language_match(self, partner: PartnerLike, project: ProjectLike) -> CheckResult:
        """Compare the project language with the partner's language preferences."""
        partner = as_partner(partner)
        project = as_project(project)

        if not project.project_language:
            return CheckResult(status=CheckStatus.UNKNOWN, message="No language specified")
        if not partner.language_preferences:
            return CheckResult(status=CheckStatus.UNKNOWN, message="No languages specified")

        languages = partner.language_preferences
        if project.project_language == ProjectLanguage.BILINGUAL.value:
            if ProjectLanguage.NL.value in languages and ProjectLanguage.FR.value in languages:
                return CheckResult(status=CheckStatus.MATCH, message="Bilingual capable")
            return CheckResult(status=CheckStatus.PARTIAL, message="Not fully bilingual")

        if project.project_language in languages:
            return CheckResult(status=CheckStatus.MATCH, message="Language match")
        return CheckResult(status=CheckStatus.MISMATCH, message="Language mismatch")
