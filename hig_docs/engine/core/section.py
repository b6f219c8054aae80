"""Section data structures for the HIG relevance engine.

Sections move through three explicit pipeline stages:

- RawSection: metadata plus raw markup, as loaded or scraped
- ProcessedSection: cleaned text, structured content and quality metrics
- ValidatedSection: a processed section carrying its validation verdict

Records are frozen; re-processing produces a new record via
``dataclasses.replace`` instead of mutating an indexed one.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from ...models.enums import Category, ExtractionMethod, Platform


@dataclass(frozen=True)
class StructuredContent:
    """Content extracted by heading-label heuristics.

    Attributes:
        overview: Leading paragraph(s) before the first heading
        guidelines: List items under a "Guidelines"-style heading
        examples: List items under an "Examples"-style heading
        specifications: ``Label: value`` pairs and measurements
        related_concepts: Component vocabulary and "See also" items
    """

    overview: str = ""
    guidelines: list[str] = field(default_factory=list)
    examples: list[str] = field(default_factory=list)
    specifications: dict[str, str] = field(default_factory=dict)
    related_concepts: list[str] = field(default_factory=list)

    @property
    def has_guidelines(self) -> bool:
        return bool(self.guidelines)

    @property
    def has_examples(self) -> bool:
        return bool(self.examples)

    @property
    def has_specifications(self) -> bool:
        return bool(self.specifications)

    @property
    def is_empty(self) -> bool:
        return not (
            self.overview
            or self.guidelines
            or self.examples
            or self.specifications
            or self.related_concepts
        )


@dataclass(frozen=True)
class QualityMetrics:
    """Derived quality signals for a piece of content.

    ``score`` and ``confidence`` are always within [0, 1].
    """

    score: float
    length: int
    structure_score: float
    apple_terms_score: float
    code_examples_count: int
    image_references_count: int
    headings_count: int
    is_fallback_content: bool
    extraction_method: ExtractionMethod
    confidence: float

    def __post_init__(self) -> None:
        for name in ("score", "confidence", "structure_score", "apple_terms_score"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"QualityMetrics.{name} must be within [0, 1], got {value}")


@dataclass(frozen=True)
class ValidationResult:
    """Verdict of the quality validator for one section."""

    is_valid: bool
    score: float
    confidence: float
    issues: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RawSection:
    """A documentation section as loaded from a content source.

    Attributes:
        id: Unique identifier within the corpus
        title: Section heading (non-empty)
        url: Source URL
        platform: Platform enumeration member
        category: Category enumeration member
        content: Raw HTML or markdown
        last_updated: When the source was last refreshed
    """

    id: str
    title: str
    url: str
    platform: Platform
    category: Category
    content: str = ""
    last_updated: datetime | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Section id is required")
        if not self.title or not self.title.strip():
            raise ValueError("Section title is required")
        # Frozen dataclass: coerce through object.__setattr__.
        object.__setattr__(self, "platform", _coerce(Platform, self.platform, "platform"))
        object.__setattr__(self, "category", _coerce(Category, self.category, "category"))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RawSection":
        """Build a section from a content-bundle record."""
        last_updated = data.get("last_updated") or data.get("lastUpdated")
        if isinstance(last_updated, str):
            last_updated = datetime.fromisoformat(last_updated.replace("Z", "+00:00"))
        return cls(
            id=data.get("id", ""),
            title=data.get("title", ""),
            url=data.get("url", ""),
            platform=data.get("platform", ""),
            category=data.get("category", ""),
            content=data.get("content") or "",
            last_updated=last_updated,
        )


@dataclass(frozen=True)
class ProcessedSection(RawSection):
    """A section after content processing (``content`` holds cleaned text)."""

    structured_content: StructuredContent = field(default_factory=StructuredContent)
    quality: QualityMetrics | None = None
    keywords: list[str] = field(default_factory=list)
    snippet: str = ""


@dataclass(frozen=True)
class ValidatedSection(ProcessedSection):
    """A processed section with its validation verdict attached."""

    validation: ValidationResult | None = None

    @property
    def accepted(self) -> bool:
        return self.validation is None or self.validation.is_valid


def _coerce(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(
            f"Invalid section {field_name}: {value!r}. Must be one of: {allowed}"
        ) from None
