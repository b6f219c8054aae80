"""Content processing for HIG documentation.

Turns raw scraped HTML or markdown into normalized markdown-like text,
extracts structured content (overview, guidelines, examples,
specifications, related concepts) and computes quality metrics.

HTML is parsed with BeautifulSoup; everything downstream works on the
normalized text form:

- ``# Heading`` lines
- ``- item`` / ``1. item`` list lines
- fenced code blocks
- ``| a | b |`` table rows
- ``term: definition`` lines
- ``> quote`` lines
"""

import logging
import re
from collections import Counter
from dataclasses import dataclass, fields
from typing import Iterator

from bs4 import BeautifulSoup, Comment, NavigableString, Tag

from ...models.enums import ExtractionMethod
from ..core.section import ProcessedSection, QualityMetrics, RawSection, StructuredContent
from ..scoring.constants import STOP_WORDS
from .constants import (
    APPLE_TERM_PATTERNS,
    APPLE_TERMS_TARGET,
    APPLE_TERMS_WEIGHT,
    CODE_FENCE,
    CODE_WEIGHT,
    COMPONENT_CONCEPTS,
    CONFIDENCE_WEIGHT,
    EXAMPLE_HEADINGS,
    EXAMPLE_PHRASES,
    FALLBACK_CONFIDENCE,
    FALLBACK_INDICATORS,
    FALLBACK_SCORE_CAP,
    GUIDELINE_HEADINGS,
    GUIDELINE_SENTENCE,
    HEADING_LINE,
    HEADING_TAGS,
    HEADINGS_TARGET,
    HTML_BLOCK_PATTERN,
    IMAGE_REFERENCE,
    KEYWORD_PATTERN,
    LENGTH_WEIGHT,
    LIST_ITEM_LINE,
    LIST_ITEMS_TARGET,
    MARKDOWN_COMMENT,
    MARKDOWN_IMAGE,
    MAX_EXTRACTED_EXAMPLES,
    MAX_EXTRACTED_GUIDELINES,
    MAX_KEYWORDS,
    MEASUREMENT_PATTERNS,
    METHOD_CONFIDENCE,
    MIN_KEYWORD_LENGTH,
    NOSCRIPT_TEXT_LIMIT,
    OVERVIEW_HEADINGS,
    RELATED_HEADINGS,
    REMOVED_TAGS,
    SNIPPET_LENGTH,
    SPECIFICATION_HEADINGS,
    SPECIFICATION_LINE,
    STRUCTURE_WEIGHT,
    STYLE_ONLY_MIN_HTML_LENGTH,
    STYLE_ONLY_TEXT_LIMIT,
    TARGET_CONTENT_LENGTH,
    TOUCH_TARGET_PATTERN,
    TOUCH_TARGET_VALUE,
)

logger = logging.getLogger(__name__)

_BLOCK_CHILD_TAGS = [
    "p", "div", "section", "article", "ul", "ol", "table", "pre", "dl", "blockquote", *HEADING_TAGS,
]
_SENTENCE_END = re.compile(r"[.!?](?=\s|$)")
_MARKDOWN_MARKERS = re.compile(r"^\s*(?:#{1,6}\s+|>\s?|[-*+•]\s+|\d+[.)]\s+)", re.MULTILINE)
_INLINE_MARKERS = re.compile(r"\*\*|__|`")


@dataclass(frozen=True)
class ProcessedContent:
    """Output of ``ContentProcessor.process_content``."""

    cleaned_text: str
    structured_content: StructuredContent
    quality_metrics: QualityMetrics


class ContentProcessor:
    """Clean, structure and score raw HIG content."""

    def process_content(self, raw: str, source_url: str = "") -> ProcessedContent:
        """Process raw HTML or markdown.

        Never raises: unparseable input degrades to fallback content.

        Args:
            raw: Raw HTML or markdown.
            source_url: Where the content came from (used in log messages).

        Returns:
            ProcessedContent with cleaned text, structure and metrics.
        """
        if not raw or not raw.strip():
            return ProcessedContent("", StructuredContent(), self._empty_metrics())

        is_html = looks_like_html(raw)
        try:
            cleaned = html_to_text(raw) if is_html else clean_markdown(raw)
            if is_fallback_content(raw):
                logger.debug(f"Fallback content detected: {source_url or '<inline>'}")
                return self._fallback_result(cleaned or _plain_text(raw))

            structured = self.extract_structured_content(cleaned)
            if structured.guidelines or structured.examples or structured.specifications:
                method = ExtractionMethod.STRUCTURED
            else:
                method = ExtractionMethod.HTML if is_html else ExtractionMethod.MARKDOWN
            metrics = self.calculate_quality_metrics(
                cleaned,
                method,
                image_references=len(IMAGE_REFERENCE.findall(raw)),
            )
            return ProcessedContent(cleaned, structured, metrics)
        except Exception as e:
            logger.warning(f"Content processing failed for {source_url or '<inline>'}: {e}")
            return self._fallback_result(_plain_text(raw))

    def process_section(self, raw: RawSection) -> ProcessedSection:
        """Process a raw section into a ProcessedSection.

        Raises:
            ValueError: If the section has no content.
        """
        if not raw.content or not raw.content.strip():
            raise ValueError(f"No content available for section: {raw.title}")

        processed = self.process_content(raw.content, raw.url)
        base = {f.name: getattr(raw, f.name) for f in fields(RawSection)}
        base["content"] = processed.cleaned_text
        return ProcessedSection(
            **base,
            structured_content=processed.structured_content,
            quality=processed.quality_metrics,
            keywords=self.extract_keywords(processed.cleaned_text, raw),
            snippet=self.extract_snippet(
                processed.structured_content.overview or processed.cleaned_text
            ),
        )

    # ============ STRUCTURED EXTRACTION ============

    def extract_structured_content(self, text: str) -> StructuredContent:
        """Route normalized lines into structured content by heading label.

        Args:
            text: Normalized text (see module docstring).

        Returns:
            StructuredContent (fields empty when nothing was found).
        """
        leading: list[str] = []
        overview_section: list[str] = []
        guidelines: list[str] = []
        examples: list[str] = []
        related: list[str] = []
        specifications: dict[str, str] = {}

        seen_heading = False
        route = "other"

        for line in _content_lines(text):
            heading = HEADING_LINE.match(line)
            if heading:
                seen_heading = True
                route = _route_for_heading(heading.group(2))
                continue

            item_match = LIST_ITEM_LINE.match(line)
            item = item_match.group(1).strip() if item_match else None

            spec_source = item if (item and route == "specifications") else (None if item else line)
            if spec_source:
                spec = SPECIFICATION_LINE.match(spec_source)
                if spec and not spec_source.startswith("|"):
                    specifications.setdefault(spec.group(1).strip(), spec.group(2).strip())

            if not seen_heading:
                if item is None and not line.startswith("|"):
                    leading.append(line)
            elif route == "overview":
                overview_section.append(item or line)
            elif route == "guidelines" and item:
                guidelines.append(item)
            elif route == "examples" and item:
                examples.append(item)
            elif route == "related" and item:
                related.append(item)

        for key, value in extract_specifications(text).items():
            specifications.setdefault(key, value)

        for concept in _component_concepts(text):
            if concept not in related:
                related.append(concept)

        overview = " ".join(leading) or " ".join(overview_section)
        return StructuredContent(
            overview=overview,
            guidelines=guidelines,
            examples=examples,
            specifications=specifications,
            related_concepts=related,
        )

    # ============ QUALITY METRICS ============

    def calculate_quality_metrics(
        self,
        text: str,
        method: ExtractionMethod,
        is_fallback: bool = False,
        image_references: int = 0,
    ) -> QualityMetrics:
        """Compute quality metrics for normalized text.

        The score blends structure, domain vocabulary, length, code presence
        and extraction confidence. Fallback content is capped below every
        acceptance floor.

        Args:
            text: Normalized text.
            method: How the text was extracted.
            is_fallback: Whether the text is placeholder content.
            image_references: Image references seen in the raw markup.

        Returns:
            QualityMetrics with score and confidence in [0, 1].
        """
        headings = 0
        list_items = 0
        for line in _content_lines(text):
            if HEADING_LINE.match(line):
                headings += 1
            elif LIST_ITEM_LINE.match(line):
                list_items += 1

        structure_score = 0.5 * min(headings / HEADINGS_TARGET, 1.0) + 0.5 * min(
            list_items / LIST_ITEMS_TARGET, 1.0
        )
        term_occurrences = sum(len(p.findall(text)) for p in APPLE_TERM_PATTERNS)
        apple_terms_score = min(term_occurrences / APPLE_TERMS_TARGET, 1.0)
        length_score = min(len(text) / TARGET_CONTENT_LENGTH, 1.0)
        code_blocks = text.count(CODE_FENCE) // 2
        code_score = 1.0 if code_blocks else 0.0

        if is_fallback:
            method = ExtractionMethod.FALLBACK
        confidence = METHOD_CONFIDENCE[method] * (0.5 + 0.5 * length_score)

        score = (
            STRUCTURE_WEIGHT * structure_score
            + APPLE_TERMS_WEIGHT * apple_terms_score
            + LENGTH_WEIGHT * length_score
            + CODE_WEIGHT * code_score
            + CONFIDENCE_WEIGHT * confidence
        )

        if is_fallback:
            score = min(score, FALLBACK_SCORE_CAP)
            confidence = FALLBACK_CONFIDENCE

        return QualityMetrics(
            score=min(score, 1.0),
            length=len(text),
            structure_score=structure_score,
            apple_terms_score=apple_terms_score,
            code_examples_count=code_blocks,
            image_references_count=image_references,
            headings_count=headings,
            is_fallback_content=is_fallback,
            extraction_method=method,
            confidence=min(confidence, 1.0),
        )

    # ============ KEYWORDS AND SNIPPETS ============

    def extract_keywords(self, text: str, section: RawSection | None = None) -> list[str]:
        """Extract search keywords.

        Section metadata (platform, category, title words) comes first,
        then content words by descending frequency. Stop words and words
        shorter than three characters are dropped.

        Args:
            text: Cleaned content.
            section: Section whose metadata seeds the list.

        Returns:
            Up to 50 lowercase, de-duplicated keywords.
        """
        keywords: list[str] = []
        seen: set[str] = set()

        def add(word: str) -> None:
            if word in seen or len(word) < MIN_KEYWORD_LENGTH or word in STOP_WORDS:
                return
            seen.add(word)
            keywords.append(word)

        if section is not None:
            add(section.platform.value.lower())
            add(section.category.value)
            for word in KEYWORD_PATTERN.findall(section.title.lower()):
                add(word)

        # most_common is stable: ties keep first-occurrence order
        counts = Counter(KEYWORD_PATTERN.findall(text.lower()))
        for word, _ in counts.most_common():
            if len(keywords) >= MAX_KEYWORDS:
                break
            add(word)

        return keywords[:MAX_KEYWORDS]

    def extract_snippet(self, text: str, max_length: int = SNIPPET_LENGTH) -> str:
        """Extract a display snippet of at most ``max_length`` characters.

        Cuts at the last sentence end past half the budget, otherwise at a
        word boundary with a trailing ``...``.
        """
        plain = _INLINE_MARKERS.sub("", _MARKDOWN_MARKERS.sub("", text.replace(CODE_FENCE, "")))
        plain = " ".join(plain.split())
        if len(plain) <= max_length:
            return plain

        window = plain[:max_length]
        ends = [m.start() for m in _SENTENCE_END.finditer(window)]
        if ends and ends[-1] >= max_length // 2:
            return window[: ends[-1] + 1]

        head = plain[: max(max_length - 3, 0)]
        space = head.rfind(" ")
        if space > 0:
            head = head[:space]
        return head.rstrip(" ,;:") + "..."

    # ============ HELPERS ============

    def _fallback_result(self, text: str) -> ProcessedContent:
        metrics = self.calculate_quality_metrics(text, ExtractionMethod.FALLBACK, is_fallback=True)
        return ProcessedContent(
            cleaned_text=text,
            structured_content=StructuredContent(overview=self.extract_snippet(text)),
            quality_metrics=metrics,
        )

    def _empty_metrics(self) -> QualityMetrics:
        return QualityMetrics(
            score=0.0,
            length=0,
            structure_score=0.0,
            apple_terms_score=0.0,
            code_examples_count=0,
            image_references_count=0,
            headings_count=0,
            is_fallback_content=False,
            extraction_method=ExtractionMethod.NONE,
            confidence=0.0,
        )


# ============ DETECTION ============


def looks_like_html(raw: str) -> bool:
    """True if the text contains block-level HTML tags."""
    return HTML_BLOCK_PATTERN.search(raw) is not None


def is_fallback_content(raw: str) -> bool:
    """Detect placeholder pages ("requires JavaScript", templated fallbacks).

    Args:
        raw: Raw HTML or markdown.

    Returns:
        True when a known signature is present, or when the only readable
        text is a ``<noscript>`` notice or a sliver next to a stylesheet.
    """
    lowered = raw.lower()
    if any(indicator in lowered for indicator in FALLBACK_INDICATORS):
        return True
    if "<noscript" not in lowered and "<style" not in lowered:
        return False

    soup = BeautifulSoup(raw, "html.parser")
    has_noscript = soup.find("noscript") is not None
    has_style = soup.find("style") is not None
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()
    plain = soup.get_text(" ", strip=True)

    if has_noscript and len(plain) < NOSCRIPT_TEXT_LIMIT:
        return True
    return (
        has_style
        and len(plain) < STYLE_ONLY_TEXT_LIMIT
        and len(raw) > STYLE_ONLY_MIN_HTML_LENGTH
    )


# ============ CLEANING ============


def html_to_text(html: str) -> str:
    """Convert HTML into normalized markdown-like text.

    Args:
        html: Raw HTML.

    Returns:
        Normalized text; the element's plain text when the block walk
        yields nothing.
    """
    soup = BeautifulSoup(html, "html.parser")
    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()
    for tag in soup.find_all(list(REMOVED_TAGS)):
        tag.decompose()

    root = soup.find("main") or soup.find("article") or soup.body or soup
    blocks: list[str] = []
    _render_blocks(root, blocks)
    text = "\n\n".join(b for b in blocks if b.strip())
    if not text.strip():
        text = root.get_text("\n", strip=True)
    return clean_markdown(text)


def clean_markdown(markdown: str) -> str:
    """Strip comments and images, trailing whitespace and blank-line runs."""
    text = MARKDOWN_COMMENT.sub("", markdown)
    text = MARKDOWN_IMAGE.sub("", text)
    text = re.sub(r"Skip Navigation\s*", "", text, flags=re.IGNORECASE)
    text = "\n".join(line.rstrip() for line in text.splitlines())
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _render_blocks(element: Tag, blocks: list[str]) -> None:
    for child in element.children:
        if isinstance(child, NavigableString):
            # Doctype, CData and friends are NavigableString subclasses
            if type(child) is NavigableString:
                text = " ".join(child.split())
                if text:
                    blocks.append(text)
            continue
        if not isinstance(child, Tag):
            continue

        name = child.name
        if name in HEADING_TAGS:
            text = _inline_text(child)
            if text:
                blocks.append(f"{'#' * int(name[1])} {text}")
        elif name == "p":
            text = _inline_text(child)
            if text:
                blocks.append(text)
        elif name in ("ul", "ol"):
            rendered = _render_list(child)
            if rendered:
                blocks.append(rendered)
        elif name == "pre":
            code = child.get_text().strip("\n")
            blocks.append(f"{CODE_FENCE}\n{code}\n{CODE_FENCE}")
        elif name == "table":
            rows = []
            for tr in child.find_all("tr"):
                cells = [c.get_text(" ", strip=True) for c in tr.find_all(["th", "td"])]
                if cells:
                    rows.append("| " + " | ".join(cells) + " |")
            if rows:
                blocks.append("\n".join(rows))
        elif name == "dl":
            rendered = _render_definitions(child)
            if rendered:
                blocks.append(rendered)
        elif name == "blockquote":
            inner: list[str] = []
            _render_blocks(child, inner)
            lines = [f"> {line}" for block in inner for line in block.splitlines()]
            if lines:
                blocks.append("\n".join(lines))
        elif child.find(_BLOCK_CHILD_TAGS) is not None:
            _render_blocks(child, blocks)
        else:
            text = _inline_text(child)
            if text:
                blocks.append(text)


def _render_list(tag: Tag, depth: int = 0) -> str:
    ordered = tag.name == "ol"
    indent = "  " * depth
    lines: list[str] = []
    for number, li in enumerate(tag.find_all("li", recursive=False), start=1):
        parts: list[str] = []
        nested: list[str] = []
        for child in li.children:
            if isinstance(child, Tag) and child.name in ("ul", "ol"):
                nested.append(_render_list(child, depth + 1))
            elif isinstance(child, Tag):
                parts.append(child.get_text(" ", strip=True))
            elif type(child) is NavigableString:
                parts.append(child.strip())
        text = " ".join(" ".join(p for p in parts if p).split())
        if text:
            marker = f"{number}." if ordered else "-"
            lines.append(f"{indent}{marker} {text}")
        lines.extend(n for n in nested if n)
    return "\n".join(lines)


def _render_definitions(tag: Tag) -> str:
    lines: list[str] = []
    term: str | None = None
    for item in tag.find_all(["dt", "dd"]):
        text = item.get_text(" ", strip=True)
        if item.name == "dt":
            term = text
        elif text:
            lines.append(f"{term}: {text}" if term else text)
    return "\n".join(lines)


def _inline_text(tag: Tag) -> str:
    return " ".join(tag.get_text(" ", strip=True).split())


def _plain_text(raw: str) -> str:
    return " ".join(BeautifulSoup(raw, "html.parser").get_text(" ").split())


# ============ LINE-LEVEL EXTRACTION ============


def _content_lines(text: str) -> Iterator[str]:
    """Yield stripped non-empty lines outside fenced code blocks."""
    in_code = False
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(CODE_FENCE):
            in_code = not in_code
            continue
        if in_code or not line:
            continue
        yield line


def _route_for_heading(label: str) -> str:
    label = label.strip().strip("*").strip()
    if OVERVIEW_HEADINGS.match(label):
        return "overview"
    if GUIDELINE_HEADINGS.match(label):
        return "guidelines"
    if EXAMPLE_HEADINGS.match(label):
        return "examples"
    if RELATED_HEADINGS.match(label):
        return "related"
    if SPECIFICATION_HEADINGS.match(label):
        return "specifications"
    return "other"


def _component_concepts(text: str) -> list[str]:
    concepts: list[str] = []
    for pattern in COMPONENT_CONCEPTS:
        for match in pattern.finditer(text):
            concept = match.group(0).lower()
            if concept not in concepts:
                concepts.append(concept)
    return concepts


# ============ FREE-TEXT EXTRACTION ============


def extract_guidelines(content: str) -> list[str]:
    """Pull up to five guideline-like lines from unstructured text.

    List items come first, then "should/must/avoid/ensure" sentences.
    """
    guidelines: list[str] = []

    def add(text: str) -> None:
        cleaned = text.strip()
        if 10 < len(cleaned) < 200 and cleaned not in guidelines:
            guidelines.append(cleaned)

    for line in _content_lines(content):
        item = LIST_ITEM_LINE.match(line)
        if item:
            add(item.group(1))
    for match in GUIDELINE_SENTENCE.finditer(content):
        add(match.group(0))

    return guidelines[:MAX_EXTRACTED_GUIDELINES]


def extract_examples(content: str) -> list[str]:
    """Pull up to three example phrases ("for example", "such as")."""
    examples: list[str] = []
    for pattern in EXAMPLE_PHRASES:
        for match in pattern.finditer(content):
            cleaned = " ".join(match.group(1).split()).strip(" ,.;:")
            if 5 < len(cleaned) < 100 and cleaned not in examples:
                examples.append(cleaned)
    return examples[:MAX_EXTRACTED_EXAMPLES]


def extract_specifications(content: str) -> dict[str, str]:
    """Extract measurement specifications (height, width, minimumSize, touchTarget)."""
    specs: dict[str, str] = {}
    for key, pattern in MEASUREMENT_PATTERNS.items():
        match = pattern.search(content)
        if match:
            specs[key] = f"{match.group(1)}pt"
    if TOUCH_TARGET_PATTERN.search(content):
        specs["touchTarget"] = TOUCH_TARGET_VALUE
    return specs
