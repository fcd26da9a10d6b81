"""Tests for the module-level coverage API."""

import partner_coverage
from partner_coverage import service
from partner_coverage.config.coverage_config import CoverageConfig, reset_coverage_config_cache
from partner_coverage.coverage.matcher import MatchMode
from partner_coverage.coverage.schemas import CheckStatus, CoverageCode, MatchType, Region
from coverage_test_helpers import make_partner, make_project


class TestModuleFunctions:
    """Behavior of the public functions exported by the package."""

    def test_resolve_region(self):
        assert partner_coverage.resolve_region(1050) == Region.BRUSSELS
        assert partner_coverage.resolve_region("2000") == Region.FLANDERS
        assert partner_coverage.resolve_region(None) is None

    def test_infer_service_requirements(self):
        inference = partner_coverage.infer_service_requirements({"country": "Belgium", "postal_code": "5000"})
        assert inference.region == Region.WALLONIA
        assert inference.suggested_coverage == [CoverageCode.WALLONIA_FR, CoverageCode.BELGIUM_ALL]

    def test_check_partner_service_match_modes(self):
        partner = make_partner(coverage=["belgium_fr"])
        project = make_project(required=["wallonia_fr"])
        fast = partner_coverage.check_partner_service_match(partner, project)
        thorough = partner_coverage.check_partner_service_match(partner, project, mode=MatchMode.THOROUGH)
        assert fast.match_type == MatchType.UNCLEAR
        assert thorough.match_type == MatchType.EXPLICIT

    def test_detail_checks(self):
        partner = make_partner(coverage=["belgium_all"], languages=["nl"])
        project = make_project(required=["brussels_fr"], language="bilingual")
        assert partner_coverage.check_coverage_match(partner, project).status == CheckStatus.MATCH
        assert partner_coverage.check_language_match(partner, project).status == CheckStatus.PARTIAL

    def test_report_uses_configured_labels(self):
        report = partner_coverage.build_coverage_report(
            make_partner(coverage=["belgium_all"]), make_project(required=["wallonia_fr"])
        )
        assert report.partner_labels == ["All of Belgium"]
        assert report.required_labels == ["Wallonia (FR)"]


class TestSharedMatcher:
    """The shared matcher is built once and can be reconfigured."""

    def test_matcher_is_reused(self):
        assert service.get_matcher() is service.get_matcher()

    def test_configure_switches_tables(self):
        config = CoverageConfig(coverage_labels={"belgium_all": "Belgique"}, brussels_postal_codes=[])
        service.configure(config)

        assert service.resolve_region(1000) == Region.FLANDERS
        report = service.build_coverage_report(make_partner(coverage=["belgium_all"]), make_project())
        assert report.partner_labels == ["Belgique"]

    def test_reset_rebuilds_from_active_config(self):
        service.configure(CoverageConfig(brussels_postal_codes=[]))
        service.reset()
        reset_coverage_config_cache()
        assert service.resolve_region(1000) == Region.BRUSSELS
