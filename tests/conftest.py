"""
Pytest fixtures and configuration for partner coverage tests.
Keeps the process-wide coverage config and shared matcher isolated per test.
"""

import pytest

from partner_coverage import service
from partner_coverage.config.coverage_config import CONFIG_ENV_VAR, reset_coverage_config_cache


@pytest.fixture(autouse=True)
def isolated_coverage_config(monkeypatch):
    """Start every test from the built-in tables with no config file."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    reset_coverage_config_cache()
    service.reset()
    yield
    reset_coverage_config_cache()
    service.reset()
