"""Scoring constants for the HIG relevance engine.

This module contains all constants used by keyword and semantic scoring:
- Stop words for keyword filtering
- Tiered match weights and bonuses
- The bidirectional synonym table
- Guideline-intent trigger phrases
- Relevance threshold and fallback sizing
"""

# ---------------------------------------------------------------------------
# Stop words: dropped from keyword extraction and cross-reference tokens.
# ---------------------------------------------------------------------------
STOP_WORDS = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "nor", "so", "yet",
        "is", "are", "was", "were", "be", "been", "being", "am",
        "have", "has", "had", "do", "does", "did", "done",
        "will", "would", "could", "should", "may", "might", "must", "can", "shall",
        "to", "of", "in", "for", "on", "with", "at", "by", "from", "as", "into",
        "about", "over", "under", "between", "through", "during", "before", "after",
        "above", "below", "up", "down", "out", "off", "again", "further",
        "then", "once", "here", "there", "when", "where", "why", "how", "what", "which",
        "who", "whom", "this", "that", "these", "those", "it", "its", "they", "them",
        "their", "you", "your", "we", "our", "us", "he", "she", "his", "her", "i", "me", "my",
        "all", "any", "both", "each", "few", "more", "most", "other", "some", "such",
        "no", "not", "only", "own", "same", "than", "too", "very", "also", "just",
        "if", "because", "while", "until", "although", "whether",
        "use", "using", "used", "make", "makes", "let", "lets", "people", "app", "apps",
    }
)


# ---------------------------------------------------------------------------
# Tiered match weights
# ---------------------------------------------------------------------------
# Title matches dominate; URL/id matches are a weaker echo of the title;
# body matches only nudge the ranking.
TITLE_EXACT_BONUS = 2.0
TITLE_PHRASE_BONUS = 1.5  # query appears inside a longer title
TITLE_TERM_BONUS = 0.8
URL_WEIGHT = 0.6
CONTENT_WEIGHT = 0.3
CONTENT_EXACT_BONUS = 1.0

# Structural bonuses, applied only to guideline-intent queries.
GUIDELINES_BONUS = 0.2
SPECIFICATIONS_BONUS = 0.15
EXAMPLES_BONUS = 0.1

# Exact platform/category filter match (not via "universal").
PLATFORM_MATCH_BONUS = 0.1
CATEGORY_MATCH_BONUS = 0.1

# Query terms of this length or shorter are ignored.
MIN_TERM_LENGTH = 3


# ---------------------------------------------------------------------------
# Threshold and fallback list
# ---------------------------------------------------------------------------
# A single content-term hit (0.24) clears the floor; incidental matches
# of expansion terms alone usually do not.
MINIMUM_RELEVANCE_SCORE = 0.2
FALLBACK_RESULT_LIMIT = 3
FALLBACK_MAX_SCORE = 0.1
FALLBACK_MIN_SCORE = 0.01


# ---------------------------------------------------------------------------
# Semantic blend (defaults; overridable from settings)
# ---------------------------------------------------------------------------
SEMANTIC_WEIGHT = 0.4
KEYWORD_WEIGHT = 0.3
STRUCTURE_WEIGHT = 0.2
CONTEXT_WEIGHT = 0.1

# Section text fed to the embedder: title plus leading content.
EMBEDDING_CONTENT_CHARS = 500


# ---------------------------------------------------------------------------
# Guideline intent: queries asking "how should I..." favour sections
# carrying guidelines/examples/specifications.
# ---------------------------------------------------------------------------
GUIDELINE_INTENT_TRIGGERS = (
    "guideline",
    "best practice",
    "how to",
    "how do",
    "how should",
    "should i",
    "recommend",
    "do's",
    "don'ts",
)


# ---------------------------------------------------------------------------
# Synonym table: each group lists interchangeable terms. The map built
# from it is bidirectional: any member expands to every other member.
# ---------------------------------------------------------------------------
SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    ("search", "searching", "search field", "search bar", "find", "lookup"),
    ("guidelines", "best practices", "recommendations", "guidance"),
    ("button", "buttons", "btn"),
    ("toggle", "toggles", "switch", "switches"),
    ("picker", "pickers", "selector", "chooser"),
    ("slider", "sliders", "scrubber"),
    ("stepper", "steppers", "increment control"),
    ("navigation", "navigation bar", "nav bar", "navigate"),
    ("tab", "tabs", "tab bar", "tab view"),
    ("activity indicator", "spinner", "loading", "progress indicator", "progress"),
    ("chart", "charts", "graph", "data visualization"),
    ("gauge", "gauges", "meter", "dial"),
    ("alert", "alerts", "dialog"),
    ("action sheet", "action sheets", "confirmation dialog"),
    ("popover", "popovers", "popup", "tooltip", "callout"),
    ("sheet", "sheets", "modal"),
    ("text field", "text fields", "text input", "input field", "form field"),
    ("notification", "notifications", "push notification"),
    ("onboarding", "first launch", "welcome screen"),
    ("rating", "ratings", "reviews"),
    ("accessibility", "a11y", "voiceover", "assistive"),
    ("color", "colour", "colors"),
    ("typography", "font", "fonts", "typeface"),
    ("icon", "icons", "sf symbols", "symbols"),
    ("dark mode", "dark appearance"),
    ("menu", "menus", "context menu", "contextual menu"),
)


def _build_synonym_map(groups: tuple[tuple[str, ...], ...]) -> dict[str, tuple[str, ...]]:
    synonyms: dict[str, list[str]] = {}
    for group in groups:
        for term in group:
            targets = synonyms.setdefault(term, [])
            for other in group:
                if other != term and other not in targets:
                    targets.append(other)
    return {term: tuple(targets) for term, targets in synonyms.items()}


SYNONYMS: dict[str, tuple[str, ...]] = _build_synonym_map(SYNONYM_GROUPS)


# ---------------------------------------------------------------------------
# Unified search fusion
# ---------------------------------------------------------------------------
CROSS_REFERENCE_BOOST = 0.2
COMBINED_RESULT_BONUS = 0.3
# Token Jaccard overlap needed before a design/technical pair is merged
COMBINED_MIN_OVERLAP = 0.5

SOURCE_DESIGN_GUIDELINES = "design-guidelines"
SOURCE_TECHNICAL_DOCUMENTATION = "technical-documentation"
