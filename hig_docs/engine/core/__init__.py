"""Core data structures for the HIG relevance engine."""

from .section import (
    ProcessedSection,
    QualityMetrics,
    RawSection,
    StructuredContent,
    ValidatedSection,
    ValidationResult,
)
from .tokens import count_payload_tokens, count_tokens

__all__ = [
    "ProcessedSection",
    "QualityMetrics",
    "RawSection",
    "StructuredContent",
    "ValidatedSection",
    "ValidationResult",
    "count_payload_tokens",
    "count_tokens",
]
