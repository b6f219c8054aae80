"""Content processing and quality validation."""

from .content_processor import (
    ContentProcessor,
    ProcessedContent,
    clean_markdown,
    extract_examples,
    extract_guidelines,
    extract_specifications,
    html_to_text,
    is_fallback_content,
    looks_like_html,
)
from .quality_validator import (
    ExtractionStatistics,
    ExtractionStatisticsAccumulator,
    QualityThresholds,
    QualityValidator,
)

__all__ = [
    "ContentProcessor",
    "ProcessedContent",
    "clean_markdown",
    "extract_examples",
    "extract_guidelines",
    "extract_specifications",
    "html_to_text",
    "is_fallback_content",
    "looks_like_html",
    "ExtractionStatistics",
    "ExtractionStatisticsAccumulator",
    "QualityThresholds",
    "QualityValidator",
]
