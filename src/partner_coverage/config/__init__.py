"""Coverage configuration management."""

from partner_coverage.config.coverage_config import (
    CoverageConfig,
    CoverageConfigError,
    get_coverage_config,
    load_coverage_config,
    reset_coverage_config_cache,
)

__all__ = [
    "CoverageConfig",
    "CoverageConfigError",
    "get_coverage_config",
    "load_coverage_config",
    "reset_coverage_config_cache",
]
