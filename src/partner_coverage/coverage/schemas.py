"""Pydantic schemas for region inference and partner/project coverage matching.

Partner and Project are read-only snapshots handed in by the partner and
project management screens. Everything else here is a computed value that
lives only for the duration of one evaluation call.
"""

import logging
from enum import Enum
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)


class Region(str, Enum):
    """Belgian region inferred from a postal code."""

    FLANDERS = "flanders"
    WALLONIA = "wallonia"
    BRUSSELS = "brussels"


class CoverageCode(str, Enum):
    """Service coverage areas a partner can declare or a project can require."""

    WALLONIA_FR = "wallonia_fr"
    FLANDERS_NL = "flanders_nl"
    BRUSSELS_FR = "brussels_fr"
    BRUSSELS_NL = "brussels_nl"
    BRUSSELS_BILINGUAL = "brussels_bilingual"
    BELGIUM_FR = "belgium_fr"
    BELGIUM_NL = "belgium_nl"
    BELGIUM_ALL = "belgium_all"


class Language(str, Enum):
    """Languages a partner can work in."""

    NL = "nl"
    FR = "fr"
    EN = "en"


class ProjectLanguage(str, Enum):
    """Language a project is run in."""

    NL = "nl"
    FR = "fr"
    EN = "en"
    BILINGUAL = "bilingual"


class ServeVerdict(str, Enum):
    """Whether a partner can serve a project.

    UNCLEAR means there was not enough information to decide. It is not a
    soft "no" and callers must handle it explicitly.
    """

    SERVES = "serves"
    DOES_NOT_SERVE = "does_not_serve"
    UNCLEAR = "unclear"


class MatchType(str, Enum):
    """Which branch of the matching policy produced a verdict."""

    EXPLICIT = "explicit"  # Project lists required coverage codes
    INFERRED = "inferred"  # Region inferred from project postal code
    INFERRED_MISMATCH = "inferred_mismatch"
    NO_COVERAGE = "no_coverage"  # Partner declares nothing
    UNCLEAR = "unclear"


class Confidence(str, Enum):
    """Qualitative strength of a verdict."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


class CheckStatus(str, Enum):
    """Outcome of a detailed coverage or language check."""

    MATCH = "match"
    PARTIAL = "partial"
    MISMATCH = "mismatch"
    UNKNOWN = "unknown"


class PostalCodeRange(BaseModel):
    """Closed postal code interval [min, max] tagged with a region."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    min_code: int = Field(..., alias="min", description="Lowest postal code (inclusive)")
    max_code: int = Field(..., alias="max", description="Highest postal code (inclusive)")
    region: Region

    @field_validator("max_code")
    @classmethod
    def validate_bounds(cls, v: int, info) -> int:
        """Reject inverted ranges."""
        low = info.data.get("min_code")
        if low is not None and v < low:
            raise ValueError(f"Postal code range max {v} is below min {low}")
        return v

    def contains(self, code: int) -> bool:
        return self.min_code <= code <= self.max_code


def _string_list(v: Any, field_name: str) -> List[str]:
    """Read a list-valued field, keeping only its string entries."""
    if v is None:
        return []
    if not isinstance(v, (list, tuple)):
        logger.warning(f"Ignoring unreadable {field_name}: expected a list, got {type(v).__name__}")
        return []
    kept = [code_value(item) for item in v if isinstance(item, str)]
    if len(kept) != len(v):
        logger.warning(f"Dropped {len(v) - len(kept)} non-string entries from {field_name}")
    return kept


def _optional_string(v: Any, field_name: str) -> Optional[str]:
    """Read a text field; anything that is not a string reads as missing."""
    if v is None or isinstance(v, str):
        return v
    logger.warning(f"Ignoring unreadable {field_name}: {v!r}")
    return None


class Location(BaseModel):
    """Project location as entered on the project form.

    Fields are read one by one: an unreadable street, city or country is
    dropped without losing the rest of the location. postal_code is kept
    as given and parsed by the region resolver.
    """

    model_config = ConfigDict(extra="ignore")

    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Any = None
    country: Optional[str] = None

    @field_validator("street", "city", "country", mode="before")
    @classmethod
    def coerce_text(cls, v: Any, info) -> Optional[str]:
        return _optional_string(v, info.field_name)


class Partner(BaseModel):
    """The slice of a partner record the matcher reads."""

    model_config = ConfigDict(extra="ignore")

    service_coverage: List[str] = Field(
        default_factory=list, description="Coverage codes the partner declares"
    )
    language_preferences: List[str] = Field(
        default_factory=list, description="Languages the partner works in (nl, fr, en)"
    )

    @field_validator("service_coverage", "language_preferences", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any, info) -> List[str]:
        """Treat a missing list as empty and drop entries that are not codes."""
        return _string_list(v, info.field_name)


class Project(BaseModel):
    """The slice of a project record the matcher reads."""

    model_config = ConfigDict(extra="ignore")

    required_service_coverage: List[str] = Field(
        default_factory=list, description="Coverage codes the project explicitly requires"
    )
    project_language: Optional[str] = Field(
        None, description="nl, fr, en or bilingual"
    )
    project_location: Optional[Location] = None

    @field_validator("required_service_coverage", mode="before")
    @classmethod
    def coerce_lists(cls, v: Any, info) -> List[str]:
        """Treat a missing list as empty and drop entries that are not codes."""
        return _string_list(v, info.field_name)

    @field_validator("project_language", mode="before")
    @classmethod
    def coerce_language(cls, v: Any, info) -> Optional[str]:
        return _optional_string(v, info.field_name)

    @field_validator("project_location", mode="before")
    @classmethod
    def coerce_location(cls, v: Any) -> Any:
        """An unreadable location reads as missing."""
        if v is None or isinstance(v, (Location, Mapping)):
            return v
        logger.warning(f"Ignoring unreadable project_location: expected a mapping, got {type(v).__name__}")
        return None


class MatchResult(BaseModel):
    """Verdict on whether a partner can serve a project."""

    verdict: ServeVerdict
    match_type: MatchType
    confidence: Confidence
    reason: str = Field(..., description="Human-readable explanation of the verdict")

    @property
    def can_serve(self) -> Optional[bool]:
        """Three-valued view of the verdict: True, False, or None when unclear."""
        if self.verdict == ServeVerdict.SERVES:
            return True
        if self.verdict == ServeVerdict.DOES_NOT_SERVE:
            return False
        return None


class LocationInference(BaseModel):
    """Coverage and language suggested by a project location."""

    region: Optional[Region] = None
    suggested_coverage: List[CoverageCode] = Field(default_factory=list)
    primary_language: Optional[ProjectLanguage] = Field(
        None, description="nl, fr or bilingual"
    )
    notes: Optional[str] = None


class CheckResult(BaseModel):
    """Status and message for a detailed coverage or language check."""

    status: CheckStatus
    message: str


class CoverageReport(BaseModel):
    """Everything the coverage badge view shows for one partner/project pair."""

    verdict: MatchResult
    badge_status: CheckStatus = Field(
        ..., description="match, mismatch, or partial when the verdict is unclear"
    )
    coverage: CheckResult
    language: CheckResult
    location_inference: Optional[LocationInference] = Field(
        None, description="Only present when the project location has a postal code"
    )
    location_title: Optional[str] = None
    required_labels: List[str] = Field(default_factory=list)
    inferred_labels: List[str] = Field(default_factory=list)
    partner_labels: List[str] = Field(default_factory=list)


def code_value(code: Any) -> str:
    """Plain string value of a code, whether given as an Enum member or a str."""
    if isinstance(code, Enum):
        return str(code.value)
    return str(code)
