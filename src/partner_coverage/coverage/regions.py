"""Belgian region and language inference from postal codes.

Resolution order for a postal code:
1. Brussels Capital Region codes (literal set) -> BRUSSELS
2. Wallonia ranges -> WALLONIA
3. Flanders ranges -> FLANDERS

Brussels must win because its codes sit inside the 1000-1299 band that is
also listed as Flemish. Wallonia is checked before Flanders because its
ranges are the narrower ones.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from pydantic import ValidationError

from partner_coverage.coverage.schemas import (
    CoverageCode,
    Location,
    LocationInference,
    PostalCodeRange,
    ProjectLanguage,
    Region,
    code_value,
)

logger = logging.getLogger(__name__)

SUPPORTED_COUNTRY = "Belgium"

UNRESOLVED_REGION_NOTE = "Could not determine region"

DEFAULT_BRUSSELS_POSTAL_CODES: Tuple[int, ...] = (
    1000, 1020, 1030, 1040, 1050, 1060, 1070, 1080, 1081, 1082,
    1083, 1090, 1120, 1130, 1140, 1150, 1160, 1170, 1180, 1190, 1200, 1210,
)

DEFAULT_POSTAL_CODE_RANGES: Tuple[PostalCodeRange, ...] = (
    PostalCodeRange(min=1300, max=1499, region=Region.WALLONIA),  # Walloon Brabant
    PostalCodeRange(min=4000, max=4999, region=Region.WALLONIA),  # Liège
    PostalCodeRange(min=5000, max=5999, region=Region.WALLONIA),  # Namur
    PostalCodeRange(min=6000, max=6599, region=Region.WALLONIA),  # Hainaut
    PostalCodeRange(min=6600, max=6999, region=Region.WALLONIA),  # Luxembourg
    PostalCodeRange(min=7000, max=7999, region=Region.WALLONIA),  # Hainaut
    PostalCodeRange(min=1000, max=1299, region=Region.FLANDERS),  # Brussels periphery
    PostalCodeRange(min=1500, max=1999, region=Region.FLANDERS),  # Flemish Brabant
    PostalCodeRange(min=2000, max=2999, region=Region.FLANDERS),  # Antwerp
    PostalCodeRange(min=3000, max=3499, region=Region.FLANDERS),  # Flemish Brabant
    PostalCodeRange(min=8000, max=8999, region=Region.FLANDERS),  # West Flanders
    PostalCodeRange(min=9000, max=9999, region=Region.FLANDERS),  # East Flanders
)

# Range lookup order after the Brussels literal set
RANGE_PRECEDENCE: Tuple[Region, ...] = (Region.WALLONIA, Region.FLANDERS, Region.BRUSSELS)

REGION_LABELS: Dict[str, str] = {
    Region.FLANDERS.value: "Flanders",
    Region.WALLONIA.value: "Wallonia",
    Region.BRUSSELS.value: "Brussels Capital Region",
}

LANGUAGE_LABELS: Dict[str, str] = {
    "nl": "Dutch",
    "fr": "French",
    "en": "English",
    "bilingual": "Bilingual (NL/FR)",
}

_LEADING_INTEGER = re.compile(r"^[+-]?\d+")


@dataclass(frozen=True)
class RegionProfile:
    """Coverage and language a region calls for."""

    suggested_coverage: Tuple[CoverageCode, ...]
    primary_language: ProjectLanguage
    notes: str = ""


DEFAULT_REGION_PROFILES: Dict[Region, RegionProfile] = {
    Region.WALLONIA: RegionProfile(
        suggested_coverage=(CoverageCode.WALLONIA_FR, CoverageCode.BELGIUM_ALL),
        primary_language=ProjectLanguage.FR,
        notes="Wallonia region - French language support highly recommended",
    ),
    Region.FLANDERS: RegionProfile(
        suggested_coverage=(CoverageCode.FLANDERS_NL, CoverageCode.BELGIUM_ALL),
        primary_language=ProjectLanguage.NL,
        notes="Flanders region - Dutch language support highly recommended",
    ),
    Region.BRUSSELS: RegionProfile(
        suggested_coverage=(CoverageCode.BRUSSELS_BILINGUAL, CoverageCode.BELGIUM_ALL),
        primary_language=ProjectLanguage.BILINGUAL,
        notes=(
            "Brussels region - Bilingual support required. "
            "Consider: NL for administration, FR for on-site services"
        ),
    ),
}


def parse_postal_code(postal_code: Any) -> Optional[int]:
    """Read a postal code as an integer, or None if it has no leading digits.

    Strings are read from their leading digits ("1000abc" -> 1000), floats
    are truncated, and booleans are rejected.
    """
    if postal_code is None or isinstance(postal_code, bool):
        return None
    if isinstance(postal_code, int):
        return postal_code or None
    if isinstance(postal_code, float):
        if math.isnan(postal_code) or math.isinf(postal_code):
            return None
        return int(postal_code) or None

    match = _LEADING_INTEGER.match(str(postal_code).strip())
    if not match:
        return None
    return int(match.group()) or None


def as_location(location: Union[Location, Mapping[str, Any], None]) -> Optional[Location]:
    """Coerce a location snapshot, returning None when it cannot be read."""
    if location is None or isinstance(location, Location):
        return location
    try:
        return Location.model_validate(location)
    except ValidationError as e:
        logger.warning(f"Ignoring unreadable project location: {e.error_count()} errors")
        return None


def region_label(region: Union[Region, str, None]) -> Optional[str]:
    """Human-readable region name; unknown values are returned unchanged."""
    if region is None:
        return None
    value = code_value(region)
    return REGION_LABELS.get(value, value)


def language_label(language: Union[ProjectLanguage, str, None]) -> Optional[str]:
    """Human-readable language name; unknown values are returned unchanged."""
    if language is None:
        return None
    value = code_value(language)
    return LANGUAGE_LABELS.get(value, value)


@dataclass
class RegionResolver:
    """Resolve postal codes to regions and regions to service requirements.

    The tables are read-only once built, so a single resolver can be shared
    across every call.
    """

    brussels_postal_codes: Iterable[int] = DEFAULT_BRUSSELS_POSTAL_CODES
    postal_code_ranges: Iterable[PostalCodeRange] = DEFAULT_POSTAL_CODE_RANGES
    region_profiles: Mapping[Region, RegionProfile] = field(
        default_factory=lambda: dict(DEFAULT_REGION_PROFILES)
    )

    def __post_init__(self):
        self.brussels_postal_codes = frozenset(self.brussels_postal_codes)
        # Pre-sort ranges by region precedence; order within a region is kept
        ranges = list(self.postal_code_ranges)
        self._ordered_ranges: List[PostalCodeRange] = [
            r for region in RANGE_PRECEDENCE for r in ranges if r.region == region
        ]
        self.postal_code_ranges = tuple(ranges)

    @classmethod
    def from_config(cls, config) -> "RegionResolver":
        """Create a resolver from a CoverageConfig."""
        return cls(
            brussels_postal_codes=config.brussels_postal_codes,
            postal_code_ranges=config.postal_code_ranges,
            region_profiles=config.region_profiles,
        )

    def resolve_region(self, postal_code: Union[str, int, None]) -> Optional[Region]:
        """Map a postal code to its region.

        Args:
            postal_code: Postal code as string or integer; may be malformed.

        Returns:
            The Region, or None if the code is missing, unparseable, or
            outside every known band.
        """
        code = parse_postal_code(postal_code)
        if code is None:
            return None

        if code in self.brussels_postal_codes:
            return Region.BRUSSELS

        for postal_range in self._ordered_ranges:
            if postal_range.contains(code):
                return postal_range.region

        logger.debug(f"Postal code {code} is outside all known regions")
        return None

    def infer_service_requirements(
        self, location: Union[Location, Mapping[str, Any], None]
    ) -> LocationInference:
        """Suggest coverage and language for a project location.

        Only Belgian locations are supported. Any other country yields an
        empty inference rather than a guessed region.
        """
        loc = as_location(location)
        if loc is None or loc.country != SUPPORTED_COUNTRY:
            return LocationInference()

        region = self.resolve_region(loc.postal_code)
        if region is None:
            return LocationInference(notes=UNRESOLVED_REGION_NOTE)

        profile = self.region_profiles.get(region)
        if profile is None:
            logger.warning(f"No service profile configured for region '{region.value}'")
            return LocationInference(region=region)

        logger.debug(
            f"Inferred {region.value} from postal code {loc.postal_code}: "
            f"{[c.value for c in profile.suggested_coverage]}"
        )
        return LocationInference(
            region=region,
            suggested_coverage=list(profile.suggested_coverage),
            primary_language=profile.primary_language,
            notes=profile.notes,
        )
