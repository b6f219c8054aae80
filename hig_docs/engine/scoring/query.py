"""Query parsing, synonym expansion and title tokenization.

Queries are parsed once per search into a ParsedQuery that every scorer
strategy consumes, so tokenization rules live in exactly one place.
"""

import logging
import re
import string
from dataclasses import dataclass

from .constants import (
    GUIDELINE_INTENT_TRIGGERS,
    MIN_TERM_LENGTH,
    STOP_WORDS,
    SYNONYMS,
)
from .stemmer import stem_keyword

logger = logging.getLogger(__name__)

# Split points inside identifiers: "UIButton" -> "UI Button", "tabBar" -> "tab Bar"
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_WORD = re.compile(r"[a-z0-9]+")


@dataclass(frozen=True)
class ParsedQuery:
    """A query prepared for scoring.

    Attributes:
        raw: Query exactly as received
        normalized: Lowercased, whitespace-collapsed query
        terms: Significant query terms (length > 2, stop words removed)
        expansions: Synonym targets not already covered by ``terms``
        guideline_intent: Query asks for guidance ("guidelines for", "how to")
    """

    raw: str
    normalized: str
    terms: tuple[str, ...]
    expansions: tuple[str, ...]
    guideline_intent: bool

    @property
    def is_empty(self) -> bool:
        return not self.normalized


def parse_query(query: str) -> ParsedQuery:
    """Parse a raw query string.

    Args:
        query: The search query string.

    Returns:
        ParsedQuery with terms, synonym expansions and intent flag.
    """
    normalized = " ".join(query.lower().split())
    terms = extract_query_terms(normalized)
    expansions = expand_synonyms(normalized, terms)
    intent = has_guideline_intent(normalized)
    return ParsedQuery(
        raw=query,
        normalized=normalized,
        terms=tuple(terms),
        expansions=tuple(expansions),
        guideline_intent=intent,
    )


def extract_query_terms(normalized: str) -> list[str]:
    """Split on whitespace, trim punctuation, drop short terms and stop words."""
    terms: list[str] = []
    for raw_term in normalized.split():
        term = raw_term.strip(string.punctuation)
        if len(term) < MIN_TERM_LENGTH or term in STOP_WORDS:
            continue
        if term not in terms:
            terms.append(term)
    return terms


def expand_synonyms(normalized: str, terms: list[str]) -> list[str]:
    """Look up synonym targets for every mapped term or phrase in the query.

    Targets whose stem matches an existing query term are skipped so a
    query is never rewarded twice for the same word.

    Args:
        normalized: Normalized query text.
        terms: Query terms already extracted.

    Returns:
        Ordered, de-duplicated expansion targets.
    """
    if not normalized:
        return []

    covered = {stem_keyword(t) for t in terms}
    expansions: list[str] = []
    for source, targets in SYNONYMS.items():
        if not re.search(rf"\b{re.escape(source)}\b", normalized):
            continue
        for target in targets:
            if target in normalized or target in expansions:
                continue
            if " " not in target and stem_keyword(target) in covered:
                continue
            expansions.append(target)

    if expansions:
        logger.debug(f"Query expansion: '{normalized}' → {expansions}")
    return expansions


def has_guideline_intent(normalized: str) -> bool:
    """True if the query asks for guidance rather than a plain lookup."""
    return any(trigger in normalized for trigger in GUIDELINE_INTENT_TRIGGERS)


def normalize_title_tokens(title: str) -> set[str]:
    """Normalize a title into comparable tokens.

    Splits identifiers on case boundaries, lowercases, strips punctuation,
    drops stop words and tokens of two characters or fewer, and stems.
    ``"UIButton"`` and ``"Buttons"`` both yield ``{"button"}``.

    Args:
        title: Section title or symbol name.

    Returns:
        Set of stemmed tokens.
    """
    split = _CAMEL_BOUNDARY.sub(" ", title)
    return {
        stem_keyword(word)
        for word in _WORD.findall(split.lower())
        if len(word) >= MIN_TERM_LENGTH and word not in STOP_WORDS
    }
