"""Tests for coverage configuration loading."""

import pytest
import yaml

from partner_coverage.config.coverage_config import (
    CONFIG_ENV_VAR,
    CoverageConfig,
    CoverageConfigError,
    get_coverage_config,
    load_coverage_config,
    reset_coverage_config_cache,
)
from partner_coverage.coverage.matcher import CoverageMatcher
from partner_coverage.coverage.schemas import CoverageCode, ProjectLanguage, Region


def _write_yaml(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestDefaultConfig:
    """Built-in Belgian tables."""

    def test_defaults(self):
        config = CoverageConfig.default()
        assert 1000 in config.brussels_postal_codes
        assert len(config.brussels_postal_codes) == 22
        assert set(config.region_profiles) == {Region.FLANDERS, Region.WALLONIA, Region.BRUSSELS}
        assert config.hierarchy["belgium_all"] == ["belgium_fr", "belgium_nl", "brussels_bilingual"]
        assert set(config.coverage_labels) == {c.value for c in CoverageCode}

    def test_label_for(self):
        config = CoverageConfig.default()
        assert config.label_for("belgium_all") == "All of Belgium"
        assert config.label_for("unknown_code") == "unknown_code"

    def test_defaults_are_not_shared(self):
        """Mutating one config's tables does not leak into the next default."""
        first = CoverageConfig.default()
        first.brussels_postal_codes.append(9999)
        assert 9999 not in CoverageConfig.default().brussels_postal_codes


class TestLoadCoverageConfig:
    """Loading YAML overrides."""

    def test_partial_override_keeps_defaults(self, tmp_path):
        path = _write_yaml(
            tmp_path / "coverage.yaml",
            {"version": "2.0", "coverage_labels": {"belgium_all": "Heel België"}},
        )
        config = load_coverage_config(path)
        assert config.version == "2.0"
        assert config.label_for("belgium_all") == "Heel België"
        assert config.label_for("wallonia_fr") == "wallonia_fr"
        assert 1050 in config.brussels_postal_codes

    def test_region_profiles_from_yaml(self, tmp_path):
        path = _write_yaml(
            tmp_path / "coverage.yaml",
            {
                "region_profiles": {
                    "flanders": {
                        "suggested_coverage": ["flanders_nl"],
                        "primary_language": "nl",
                        "notes": "Dutch only",
                    }
                }
            },
        )
        config = load_coverage_config(path)
        profile = config.region_profiles[Region.FLANDERS]
        assert profile.suggested_coverage == (CoverageCode.FLANDERS_NL,)
        assert profile.primary_language == ProjectLanguage.NL

        matcher = CoverageMatcher.from_config(config)
        inference = matcher.resolver.infer_service_requirements({"country": "Belgium", "postal_code": "9000"})
        assert inference.suggested_coverage == [CoverageCode.FLANDERS_NL]
        assert inference.notes == "Dutch only"

    def test_postal_ranges_from_yaml(self, tmp_path):
        path = _write_yaml(
            tmp_path / "coverage.yaml",
            {"postal_code_ranges": [{"min": 3500, "max": 3999, "region": "flanders"}]},
        )
        matcher = CoverageMatcher.from_config(load_coverage_config(path))
        assert matcher.resolver.resolve_region(3600) == Region.FLANDERS
        assert matcher.resolver.resolve_region(9000) is None

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "coverage.yaml"
        path.write_text("", encoding="utf-8")
        assert load_coverage_config(path) == CoverageConfig.default()

    def test_missing_file(self, tmp_path):
        with pytest.raises(CoverageConfigError, match="not found"):
            load_coverage_config(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "coverage.yaml"
        path.write_text("hierarchy: [unclosed", encoding="utf-8")
        with pytest.raises(CoverageConfigError, match="Invalid YAML"):
            load_coverage_config(path)

    def test_non_mapping(self, tmp_path):
        path = _write_yaml(tmp_path / "coverage.yaml", ["belgium_all"])
        with pytest.raises(CoverageConfigError, match="must be a mapping"):
            load_coverage_config(path)

    def test_inverted_range(self, tmp_path):
        path = _write_yaml(
            tmp_path / "coverage.yaml",
            {"postal_code_ranges": [{"min": 2999, "max": 2000, "region": "flanders"}]},
        )
        with pytest.raises(CoverageConfigError, match="below min"):
            load_coverage_config(path)

    def test_unknown_region(self, tmp_path):
        path = _write_yaml(
            tmp_path / "coverage.yaml",
            {"postal_code_ranges": [{"min": 1, "max": 2, "region": "luxembourg"}]},
        )
        with pytest.raises(CoverageConfigError):
            load_coverage_config(path)

    def test_cyclic_hierarchy(self, tmp_path):
        path = _write_yaml(
            tmp_path / "coverage.yaml",
            {"hierarchy": {"belgium_all": ["belgium_fr"], "belgium_fr": ["belgium_all"]}},
        )
        with pytest.raises(CoverageConfigError, match="cycle"):
            load_coverage_config(path)


class TestGetCoverageConfig:
    """Cached accessor driven by the environment."""

    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
        reset_coverage_config_cache()
        assert get_coverage_config() == CoverageConfig.default()

    def test_env_path_is_loaded_and_cached(self, tmp_path, monkeypatch):
        path = _write_yaml(tmp_path / "coverage.yaml", {"version": "3.1"})
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        reset_coverage_config_cache()

        config = get_coverage_config()
        assert config.version == "3.1"

        path.write_text(yaml.safe_dump({"version": "3.2"}), encoding="utf-8")
        assert get_coverage_config() is config
        assert get_coverage_config(force_reload=True).version == "3.2"

    def test_bad_env_path_raises(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "nope.yaml"))
        reset_coverage_config_cache()
        with pytest.raises(CoverageConfigError):
            get_coverage_config()
