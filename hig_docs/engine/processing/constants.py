"""Content processing constants.

This module contains the constants used by content processing and
quality validation:
- Fallback/placeholder signatures
- Tags stripped from scraped HTML
- Heading labels that route structured extraction
- Apple domain vocabulary for the domain-terms signal
- Quality-score weights and targets
"""

import re

from ...models.enums import ExtractionMethod

# ---------------------------------------------------------------------------
# Fallback / placeholder detection (matched case-insensitively)
# ---------------------------------------------------------------------------
FALLBACK_INDICATORS = (
    "please turn on javascript in your browser and refresh the page",
    "this page requires javascript",
    "javascript is required to view this content",
    "enable javascript and refresh",
    "content extraction failed",
    "fallback information",
    "please visit the official documentation",
)

# A page whose readable text is only a <noscript> notice stays under this.
NOSCRIPT_TEXT_LIMIT = 150
# Large pages made mostly of inline CSS with almost no readable text.
STYLE_ONLY_TEXT_LIMIT = 100
STYLE_ONLY_MIN_HTML_LENGTH = 1000


# ---------------------------------------------------------------------------
# HTML cleaning
# ---------------------------------------------------------------------------
REMOVED_TAGS = (
    "script", "style", "noscript", "nav", "header", "footer",
    "img", "svg", "picture", "iframe", "button", "input", "form",
    "meta", "link",
)

HTML_BLOCK_PATTERN = re.compile(
    r"<\s*(html|body|main|article|section|div|p|h[1-6]|ul|ol|li|table|pre|dl|blockquote)\b",
    re.IGNORECASE,
)

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")


# ---------------------------------------------------------------------------
# Markdown structure
# ---------------------------------------------------------------------------
HEADING_LINE = re.compile(r"^(#{1,6})\s+(.+?)\s*#*$")
LIST_ITEM_LINE = re.compile(r"^(?:[-*+•]|\d+[.)])\s+(.+)$")
SPECIFICATION_LINE = re.compile(r"^\**([A-Za-z][A-Za-z0-9 /-]{1,40}?)\**\s*:\s+(.{1,120})$")
CODE_FENCE = "```"

MARKDOWN_COMMENT = re.compile(r"<!--.*?-->", re.DOTALL)
MARKDOWN_IMAGE = re.compile(r"!\[[^\]]*\]\([^)]*\)")
IMAGE_REFERENCE = re.compile(r"!\[[^\]]*\]\([^)]*\)|<img\b", re.IGNORECASE)

OVERVIEW_HEADINGS = re.compile(r"^(overview|summary|introduction|about)\b", re.IGNORECASE)
GUIDELINE_HEADINGS = re.compile(
    r"^(guidelines?|best practices?|do'?s|don'?ts|do's and don'ts|recommendations?)\b",
    re.IGNORECASE,
)
EXAMPLE_HEADINGS = re.compile(r"^(examples?|usage|use cases?|for example)\b", re.IGNORECASE)
RELATED_HEADINGS = re.compile(r"^(related|see also)\b", re.IGNORECASE)
SPECIFICATION_HEADINGS = re.compile(r"^(specifications?|dimensions|measurements)\b", re.IGNORECASE)

COMPONENT_CONCEPTS = (
    re.compile(r"\b(buttons?|navigation bars?|tab bars?|toolbars?|alerts?|action sheets?)\b", re.IGNORECASE),
    re.compile(r"\b(pickers?|text fields?|switches|toggles?|sliders?|steppers?)\b", re.IGNORECASE),
    re.compile(r"\b(color|typography|layout|spacing|accessibility)\b", re.IGNORECASE),
)

# Free-text extraction used when a component has no structured content
GUIDELINE_SENTENCE = re.compile(
    r"\b(?:consider|should|must|avoid|ensure|prefer)\s+[^.!\n]+[.!]?",
    re.IGNORECASE,
)
EXAMPLE_PHRASES = (
    re.compile(r"\bexamples?[:\s]+(.+?)(?:\n\n|$)", re.IGNORECASE | re.DOTALL),
    re.compile(r"\bfor example[,\s]+(.+?)(?:[.!]|$)", re.IGNORECASE),
    re.compile(r"\bsuch as[:\s]+(.+?)(?:[.!]|$)", re.IGNORECASE),
)
MEASUREMENT_PATTERNS = {
    "height": re.compile(r"\bheight[:\s]+(?:of\s+)?(\d+(?:\.\d+)?)\s*(?:pt|points)\b", re.IGNORECASE),
    "width": re.compile(r"\bwidth[:\s]+(?:of\s+)?(\d+(?:\.\d+)?)\s*(?:pt|points)\b", re.IGNORECASE),
    "minimumSize": re.compile(r"\bminimum[:\s]+(?:of\s+)?(\d+(?:\.\d+)?)\s*(?:pt|points)\b", re.IGNORECASE),
}
TOUCH_TARGET_PATTERN = re.compile(r"touch target|\b44\s*(?:pt|points|x)", re.IGNORECASE)
TOUCH_TARGET_VALUE = "44pt x 44pt"

MAX_EXTRACTED_GUIDELINES = 5
MAX_EXTRACTED_EXAMPLES = 3


# ---------------------------------------------------------------------------
# Keywords and snippets
# ---------------------------------------------------------------------------
KEYWORD_PATTERN = re.compile(r"[a-z][a-z0-9]+")
MAX_KEYWORDS = 50
MIN_KEYWORD_LENGTH = 3
SNIPPET_LENGTH = 200


# ---------------------------------------------------------------------------
# Quality scoring
# ---------------------------------------------------------------------------
APPLE_TERMS = (
    "iOS", "macOS", "watchOS", "tvOS", "visionOS", "iPadOS",
    "SwiftUI", "UIKit", "AppKit",
    "Human Interface Guidelines", "HIG",
    "accessibility", "VoiceOver", "Dynamic Type",
    "design system", "interface", "touch target", "SF Symbols",
)
APPLE_TERM_PATTERNS = tuple(
    re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE) for term in APPLE_TERMS
)
APPLE_TERMS_TARGET = 5

TARGET_CONTENT_LENGTH = 500
HEADINGS_TARGET = 3
LIST_ITEMS_TARGET = 5

STRUCTURE_WEIGHT = 0.2
APPLE_TERMS_WEIGHT = 0.2
LENGTH_WEIGHT = 0.3
CODE_WEIGHT = 0.1
CONFIDENCE_WEIGHT = 0.2

METHOD_CONFIDENCE = {
    ExtractionMethod.STRUCTURED: 0.9,
    ExtractionMethod.HTML: 0.85,
    ExtractionMethod.MARKDOWN: 0.8,
    ExtractionMethod.FALLBACK: 0.1,
    ExtractionMethod.NONE: 0.0,
}

FALLBACK_SCORE_CAP = 0.2
FALLBACK_CONFIDENCE = 0.1
