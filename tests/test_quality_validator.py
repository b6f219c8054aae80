"""Tests for content validation and extraction monitoring."""

import pytest

from hig_docs.engine.processing.content_processor import ContentProcessor
from hig_docs.engine.processing.quality_validator import (
    EMPTY_CONTENT_ISSUE,
    FALLBACK_ISSUE,
    QualityThresholds,
    QualityValidator,
)

from .conftest import BUTTONS_CONTENT, FALLBACK_CONTENT, make_section


@pytest.fixture
def processor():
    return ContentProcessor()


@pytest.fixture
def validator(processor):
    return QualityValidator(processor)


@pytest.fixture
def good_section(processor):
    return processor.process_section(make_section("buttons", "Buttons", BUTTONS_CONTENT))


@pytest.fixture
def fallback_section(processor):
    return processor.process_section(make_section("fallback", "Fallback", FALLBACK_CONTENT))


class TestValidateContent:
    def test_good_content_passes(self, validator, good_section):
        result = validator.validate_content(good_section.content, good_section)
        assert result.is_valid
        assert result.issues == []
        assert result.score == good_section.quality.score

    def test_fallback_content_fails(self, validator, fallback_section):
        result = validator.validate_content(fallback_section.content, fallback_section)
        assert not result.is_valid
        assert FALLBACK_ISSUE in result.issues
        assert "Enable JavaScript execution and review SPA loading" in result.recommendations

    def test_empty_content(self, validator, good_section):
        result = validator.validate_content("  ", good_section)
        assert not result.is_valid
        assert result.issues == [EMPTY_CONTENT_ISSUE]
        assert result.score == 0.0

    def test_raw_section_is_processed_for_metrics(self, validator):
        raw = make_section("buttons", "Buttons", BUTTONS_CONTENT)
        result = validator.validate_content(raw.content, raw)
        assert result.is_valid

    def test_thresholds_are_configurable(self, processor, good_section):
        strict = QualityValidator(processor, QualityThresholds(min_content_length=5000))
        result = strict.validate_content(good_section.content, good_section)
        assert not result.is_valid
        assert any(issue.startswith("Content too short") for issue in result.issues)


class TestMonitoring:
    def test_empty_statistics(self, validator):
        stats = validator.get_statistics()
        assert stats.total_sections == 0
        assert stats.extraction_success_rate == 0.0
        assert stats.fallback_rate == 0.0
        assert validator.is_sla_met()

    def test_statistics_track_fallback_rate(self, validator, good_section, fallback_section):
        for section in (good_section, fallback_section):
            validation = validator.validate_content(section.content, section)
            validator.record_extraction(section, section.quality, validation)

        stats = validator.get_statistics()
        assert stats.total_sections == 2
        assert stats.fallback_sections == 1
        assert stats.fallback_rate == pytest.approx(50.0)
        assert stats.extraction_success_rate == pytest.approx(50.0)
        assert not validator.is_sla_met()

    def test_sla_met_without_fallbacks(self, validator, good_section):
        validator.record_extraction(good_section, good_section.quality)
        assert validator.is_sla_met()
        assert validator.get_statistics().extraction_success_rate == pytest.approx(100.0)

    def test_reset(self, validator, fallback_section):
        validator.record_extraction(fallback_section, fallback_section.quality)
        validator.reset()
        assert validator.get_statistics().total_sections == 0


class TestReport:
    def test_report_lists_fallback_issue(self, validator, good_section, fallback_section):
        for section in (good_section, fallback_section):
            validation = validator.validate_content(section.content, section)
            validator.record_extraction(section, section.quality, validation)

        report = validator.generate_report()
        assert report.startswith("Content Quality Validation Report")
        assert "SLA Compliance: NOT MET" in report
        assert "Extraction Success Rate: 50.0%" in report
        assert "High Priority Issues:" in report
        assert f"fallback: {FALLBACK_ISSUE}" in report
        assert "  - Passed Validation: 1" in report

    def test_report_for_clean_run(self, validator, good_section):
        validation = validator.validate_content(good_section.content, good_section)
        validator.record_extraction(good_section, good_section.quality, validation)

        report = validator.generate_report()
        assert "SLA Compliance: MET" in report
        assert "Extraction Success Rate: 100.0%" in report
        assert "High Priority Issues" not in report

    def test_report_is_deterministic(self, validator, good_section):
        validator.record_extraction(good_section, good_section.quality)
        assert validator.generate_report() == validator.generate_report()
