"""Coverage configuration schema and loader.

The built-in tables describe Belgium: the Brussels Capital Region postal
codes, the Wallonia and Flanders postal ranges, the per-region service
profiles, the coverage hierarchy and the coverage display labels. A YAML
file can replace any of these top-level sections; sections it leaves out
keep their built-in values.

The active file is taken from the PARTNER_COVERAGE_CONFIG environment
variable (a .env file is honored). Without it the built-in tables are used.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, model_validator

from partner_coverage.coverage.hierarchy import DEFAULT_HIERARCHY, CoverageHierarchy
from partner_coverage.coverage.regions import (
    DEFAULT_BRUSSELS_POSTAL_CODES,
    DEFAULT_POSTAL_CODE_RANGES,
    DEFAULT_REGION_PROFILES,
    RegionProfile,
)
from partner_coverage.coverage.schemas import CoverageCode, PostalCodeRange, Region

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PARTNER_COVERAGE_CONFIG"

DEFAULT_COVERAGE_LABELS: Dict[str, str] = {
    CoverageCode.WALLONIA_FR.value: "Wallonia (FR)",
    CoverageCode.FLANDERS_NL.value: "Flanders (NL)",
    CoverageCode.BRUSSELS_FR.value: "Brussels (FR)",
    CoverageCode.BRUSSELS_NL.value: "Brussels (NL)",
    CoverageCode.BRUSSELS_BILINGUAL.value: "Brussels (Bilingual)",
    CoverageCode.BELGIUM_FR.value: "Belgium - French speaking",
    CoverageCode.BELGIUM_NL.value: "Belgium - Dutch speaking",
    CoverageCode.BELGIUM_ALL.value: "All of Belgium",
}


class CoverageConfigError(ValueError):
    """Raised when a coverage configuration file cannot be loaded or is invalid."""

    pass


class CoverageConfig(BaseModel):
    """Region, hierarchy and label tables used by the coverage matcher.

    Attributes:
        version: Config version for audit/tracking.
        brussels_postal_codes: Literal Brussels Capital Region codes, checked first.
        postal_code_ranges: Region ranges, checked Wallonia before Flanders.
        region_profiles: Suggested coverage, language and notes per region.
        hierarchy: Coverage code -> codes it covers directly.
        coverage_labels: Coverage code -> display label (rendering only).
    """

    version: str = Field(default="1.0", description="Config version")
    brussels_postal_codes: List[int] = Field(
        default_factory=lambda: list(DEFAULT_BRUSSELS_POSTAL_CODES),
        description="Brussels Capital Region postal codes",
    )
    postal_code_ranges: List[PostalCodeRange] = Field(
        default_factory=lambda: list(DEFAULT_POSTAL_CODE_RANGES),
        description="Postal code ranges per region",
    )
    region_profiles: Dict[Region, RegionProfile] = Field(
        default_factory=lambda: dict(DEFAULT_REGION_PROFILES),
        description="Service requirements suggested for each region",
    )
    hierarchy: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_HIERARCHY.items()},
        description="Coverage covering relation (must be acyclic)",
    )
    coverage_labels: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_COVERAGE_LABELS),
        description="Display labels for coverage codes",
    )

    @model_validator(mode="after")
    def validate_hierarchy(self) -> "CoverageConfig":
        """Reject cyclic hierarchies."""
        CoverageHierarchy(self.hierarchy)
        return self

    @classmethod
    def default(cls) -> "CoverageConfig":
        """Create the built-in Belgian configuration."""
        return cls()

    def label_for(self, code: str) -> str:
        """Display label for a coverage code, or the code itself."""
        return self.coverage_labels.get(code, code)


def load_coverage_config(config_path: Union[str, Path]) -> CoverageConfig:
    """Load coverage configuration from a YAML file.

    Args:
        config_path: Path to the YAML file.

    Returns:
        CoverageConfig with file values layered over the built-in defaults.

    Raises:
        CoverageConfigError: If the file is missing, is not valid YAML, or
            fails validation.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise CoverageConfigError(f"Coverage config not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CoverageConfigError(f"Invalid YAML in coverage config {config_path}: {e}") from e

    if data is None:
        logger.warning(f"Empty coverage config at {config_path}, using defaults")
        return CoverageConfig.default()
    if not isinstance(data, dict):
        raise CoverageConfigError(
            f"Coverage config {config_path} must be a mapping, got {type(data).__name__}"
        )

    try:
        config = CoverageConfig.model_validate(data)
    except ValidationError as e:
        raise CoverageConfigError(f"Invalid coverage config {config_path}: {e}") from e

    logger.info(f"Loaded coverage config v{config.version} from {config_path}")
    return config


# Cached coverage config (loaded once per process)
_cached_config: Optional[CoverageConfig] = None


def get_coverage_config(force_reload: bool = False) -> CoverageConfig:
    """Get the active coverage configuration (cached).

    Args:
        force_reload: If True, reload even if cached.

    Returns:
        The config named by PARTNER_COVERAGE_CONFIG, or the built-in default.
    """
    global _cached_config

    if force_reload or _cached_config is None:
        load_dotenv()
        config_path = os.getenv(CONFIG_ENV_VAR)
        if config_path:
            _cached_config = load_coverage_config(config_path)
        else:
            logger.debug(f"{CONFIG_ENV_VAR} not set, using built-in coverage tables")
            _cached_config = CoverageConfig.default()

    return _cached_config


def set_coverage_config(config: CoverageConfig) -> None:
    """Make ``config`` the active coverage configuration."""
    global _cached_config
    _cached_config = config


def reset_coverage_config_cache() -> None:
    """Reset the coverage config cache so the next lookup reloads it."""
    global _cached_config
    _cached_config = None
