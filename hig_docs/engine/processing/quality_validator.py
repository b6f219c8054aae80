"""Content quality validation and extraction monitoring.

The validator checks one section's quality metrics against configurable
floors and keeps an explicit ``ExtractionStatisticsAccumulator`` for the
corpus-wide fallback-rate SLA.
"""

import logging
from dataclasses import dataclass, field

from ...models.enums import IssuePriority
from ..core.section import QualityMetrics, RawSection, ValidationResult
from .content_processor import ContentProcessor, is_fallback_content

logger = logging.getLogger(__name__)

EMPTY_CONTENT_ISSUE = "Content is empty"
FALLBACK_ISSUE = "Content appears to be fallback/placeholder content"
LOW_AVERAGE_QUALITY = 0.7


@dataclass(frozen=True)
class QualityThresholds:
    """Acceptance floors for extracted content."""

    min_quality_score: float = 0.5
    min_confidence: float = 0.4
    min_content_length: int = 200
    min_structure_score: float = 0.2
    min_apple_terms_score: float = 0.1
    max_fallback_rate: float = 5.0  # percent of recorded sections

    @classmethod
    def from_settings(cls, settings) -> "QualityThresholds":
        return cls(
            min_quality_score=settings.min_quality_score,
            min_confidence=settings.min_confidence,
            min_content_length=settings.min_content_length,
            min_structure_score=settings.min_structure_score,
            min_apple_terms_score=settings.min_apple_terms_score,
            max_fallback_rate=settings.max_fallback_rate,
        )


@dataclass(frozen=True)
class ExtractionStatistics:
    """Snapshot of extraction bookkeeping (rates are percentages)."""

    total_sections: int = 0
    fallback_sections: int = 0
    average_quality: float = 0.0
    average_confidence: float = 0.0
    extraction_success_rate: float = 0.0
    fallback_rate: float = 0.0


@dataclass
class ExtractionStatisticsAccumulator:
    """Append-only counters behind ``ExtractionStatistics``."""

    total: int = 0
    fallback: int = 0
    score_sum: float = 0.0
    confidence_sum: float = 0.0

    def record(self, metrics: QualityMetrics) -> None:
        self.total += 1
        if metrics.is_fallback_content:
            self.fallback += 1
        self.score_sum += metrics.score
        self.confidence_sum += metrics.confidence

    def snapshot(self) -> ExtractionStatistics:
        if self.total == 0:
            return ExtractionStatistics()
        return ExtractionStatistics(
            total_sections=self.total,
            fallback_sections=self.fallback,
            average_quality=self.score_sum / self.total,
            average_confidence=self.confidence_sum / self.total,
            extraction_success_rate=(self.total - self.fallback) / self.total * 100,
            fallback_rate=self.fallback / self.total * 100,
        )

    def reset(self) -> None:
        self.total = 0
        self.fallback = 0
        self.score_sum = 0.0
        self.confidence_sum = 0.0


@dataclass
class _IssueLog:
    high: list[str] = field(default_factory=list)
    medium: list[str] = field(default_factory=list)
    low: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    validated: int = 0
    passed: int = 0

    def bucket(self, priority: IssuePriority) -> list[str]:
        return {
            IssuePriority.HIGH: self.high,
            IssuePriority.MEDIUM: self.medium,
            IssuePriority.LOW: self.low,
        }[priority]


class QualityValidator:
    """Validate extracted content and monitor the fallback-rate SLA."""

    def __init__(
        self,
        processor: ContentProcessor | None = None,
        thresholds: QualityThresholds | None = None,
    ):
        self.processor = processor or ContentProcessor()
        self.thresholds = thresholds or QualityThresholds()
        self.statistics = ExtractionStatisticsAccumulator()
        self._issues = _IssueLog()

    def validate_content(self, text: str, section: RawSection) -> ValidationResult:
        """Check content against every quality floor.

        Uses the section's own metrics when it carries them, otherwise
        processes ``text`` to compute them.

        Args:
            text: Content to validate.
            section: The section the content belongs to.

        Returns:
            ValidationResult; ``is_valid`` is False if any floor is violated.
        """
        if not text or not text.strip():
            return ValidationResult(
                is_valid=False,
                score=0.0,
                confidence=0.0,
                issues=[EMPTY_CONTENT_ISSUE],
                recommendations=["Verify complete content extraction or check source availability"],
            )

        quality = getattr(section, "quality", None)
        if quality is None:
            quality = self.processor.process_content(text, section.url).quality_metrics

        t = self.thresholds
        issues: list[str] = []
        recommendations: list[str] = []

        if quality.score < t.min_quality_score:
            issues.append(f"Quality score too low: {quality.score:.2f} (min: {t.min_quality_score})")
            recommendations.append("Review content extraction patterns and selectors")
        if quality.confidence < t.min_confidence:
            issues.append(f"Confidence too low: {quality.confidence:.2f} (min: {t.min_confidence})")
            recommendations.append("Improve extraction accuracy or review source content")
        if quality.length < t.min_content_length:
            issues.append(
                f"Content too short: {quality.length} characters (min: {t.min_content_length})"
            )
            recommendations.append("Verify complete content extraction or check source availability")
        if quality.structure_score < t.min_structure_score:
            issues.append(
                f"Poor content structure: {quality.structure_score:.2f} (min: {t.min_structure_score})"
            )
            recommendations.append("Review heading extraction and content organization")
        if quality.apple_terms_score < t.min_apple_terms_score:
            issues.append(
                f"Insufficient Apple-specific content: {quality.apple_terms_score:.2f} "
                f"(min: {t.min_apple_terms_score})"
            )
            recommendations.append("Verify extraction from correct Apple HIG pages")
        if quality.is_fallback_content or is_fallback_content(text):
            issues.append(FALLBACK_ISSUE)
            recommendations.append("Enable JavaScript execution and review SPA loading")

        return ValidationResult(
            is_valid=not issues,
            score=quality.score,
            confidence=quality.confidence,
            issues=issues,
            recommendations=recommendations,
        )

    # ============ MONITORING ============

    def record_extraction(
        self,
        section: RawSection,
        metrics: QualityMetrics,
        validation: ValidationResult | None = None,
    ) -> None:
        """Record one extraction for the statistics and the report."""
        self.statistics.record(metrics)
        if validation is None:
            return

        self._issues.validated += 1
        if validation.is_valid:
            self._issues.passed += 1
            return

        for issue in validation.issues:
            self._issues.bucket(_priority_for(issue)).append(f"{section.id}: {issue}")
        for recommendation in validation.recommendations:
            if recommendation not in self._issues.recommendations:
                self._issues.recommendations.append(recommendation)

    def get_statistics(self) -> ExtractionStatistics:
        return self.statistics.snapshot()

    def is_sla_met(self) -> bool:
        """True while the live fallback rate stays within the configured ceiling."""
        return self.get_statistics().fallback_rate <= self.thresholds.max_fallback_rate

    def reset(self) -> None:
        """Clear statistics and recorded issues."""
        self.statistics.reset()
        self._issues = _IssueLog()

    def generate_report(self) -> str:
        """Render a deterministic plain-text quality report."""
        stats = self.get_statistics()
        sla_met = self.is_sla_met()
        log = self._issues

        high = list(log.high)
        medium = list(log.medium)
        recommendations = list(log.recommendations)

        if not sla_met:
            high.insert(
                0,
                f"High fallback usage: {stats.fallback_rate:.1f}% "
                f"(max: {self.thresholds.max_fallback_rate}%)",
            )
            _add_unique(recommendations, "Investigate JavaScript execution and page loading issues")
        if stats.total_sections and stats.average_quality < LOW_AVERAGE_QUALITY:
            medium.insert(0, f"Low average quality score: {stats.average_quality:.3f}")
            _add_unique(recommendations, "Optimize content extraction selectors")

        lines = [
            "Content Quality Validation Report",
            "=================================",
            "",
            f"SLA Compliance: {'MET' if sla_met else 'NOT MET'}",
            f"Extraction Success Rate: {stats.extraction_success_rate:.1f}%",
            f"Fallback Rate: {stats.fallback_rate:.1f}% (max: {self.thresholds.max_fallback_rate}%)",
            f"Average Quality Score: {stats.average_quality:.3f}",
            f"Average Confidence: {stats.average_confidence:.3f}",
            f"Total Sections: {stats.total_sections}",
            f"Fallback Sections: {stats.fallback_sections}",
            "",
            "Validation Summary:",
            f"  - Total Validated: {log.validated}",
            f"  - Passed Validation: {log.passed}",
            f"  - Failed Validation: {log.validated - log.passed}",
        ]

        for title, issues in (
            ("High Priority Issues", high),
            ("Medium Priority Issues", medium),
            ("Low Priority Issues", log.low),
            ("Recommendations", recommendations),
        ):
            if issues:
                lines.append("")
                lines.append(f"{title}:")
                lines.extend(f"  - {issue}" for issue in issues)

        return "\n".join(lines) + "\n"


def _priority_for(issue: str) -> IssuePriority:
    if issue == FALLBACK_ISSUE:
        return IssuePriority.HIGH
    if issue.startswith(("Quality score", "Confidence")):
        return IssuePriority.MEDIUM
    return IssuePriority.LOW


def _add_unique(items: list[str], item: str) -> None:
    if item not in items:
        items.append(item)
