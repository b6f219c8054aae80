"""Keyword scoring for the HIG relevance engine.

This module provides the ``Scorer`` strategy protocol and its pure-keyword
implementation. Scoring factors:
- Exact full-query match in title, URL/id and body (tiered weights)
- Per-term partial matches, stem-aware, with the same tiers
- Synonym expansion targets scored with the same tiers
- Structural bonus for guideline-intent queries
- Exact platform/category filter bonus
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, Sequence

from ...models.enums import Category, Platform
from .constants import (
    CATEGORY_MATCH_BONUS,
    CONTENT_EXACT_BONUS,
    CONTENT_WEIGHT,
    EXAMPLES_BONUS,
    GUIDELINES_BONUS,
    PLATFORM_MATCH_BONUS,
    SPECIFICATIONS_BONUS,
    TITLE_EXACT_BONUS,
    TITLE_PHRASE_BONUS,
    TITLE_TERM_BONUS,
    URL_WEIGHT,
)
from .query import ParsedQuery
from .stemmer import stem_keyword

if TYPE_CHECKING:
    from ...models.index import IndexEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoringFilters:
    """Filters a search was issued with (used for the exact-match bonus)."""

    platform: Platform | None = None
    category: Category | None = None


@dataclass(frozen=True)
class ScoreBreakdown:
    """Keyword score split into its signals.

    Attributes:
        textual: Title/URL/content matches including synonym expansions
        structural: Guideline-intent bonus for structured sections
        context: Exact platform/category filter bonus
    """

    textual: float = 0.0
    structural: float = 0.0
    context: float = 0.0

    @property
    def total(self) -> float:
        return self.textual + self.structural + self.context


class Scorer(Protocol):
    """Relevance scoring strategy.

    ``prepare`` runs once per search before any ``score`` call so a strategy
    can do per-query work (e.g. embedding the query) a single time.
    ``reset`` drops any per-corpus state when the index is cleared.
    """

    name: str

    def prepare(self, query: ParsedQuery, entries: Sequence["IndexEntry"]) -> None: ...

    def reset(self) -> None: ...

    def score(
        self,
        query: ParsedQuery,
        entry: "IndexEntry",
        filters: ScoringFilters,
    ) -> float: ...


class KeywordScorer:
    """Pure-keyword scorer."""

    name = "keyword"

    def prepare(self, query: ParsedQuery, entries: Sequence["IndexEntry"]) -> None:
        return None

    def reset(self) -> None:
        return None

    def score(self, query: ParsedQuery, entry: "IndexEntry", filters: ScoringFilters) -> float:
        return self.breakdown(query, entry, filters).total

    def breakdown(
        self,
        query: ParsedQuery,
        entry: "IndexEntry",
        filters: ScoringFilters,
    ) -> ScoreBreakdown:
        """Compute the keyword score of one entry, split by signal.

        Args:
            query: Parsed query.
            entry: Indexed section to score.
            filters: Filters the search was issued with.

        Returns:
            ScoreBreakdown (all zero when nothing textual matches).
        """
        if query.is_empty:
            return ScoreBreakdown()

        title = entry.title.lower()
        locator = f"{entry.id} {entry.url}".lower()
        content = entry.content.lower()
        keywords = set(entry.keywords)

        textual = 0.0

        # Exact full-query matches (whole title beats a phrase inside it)
        if query.normalized == title:
            textual += TITLE_EXACT_BONUS
        elif query.normalized in title:
            textual += TITLE_PHRASE_BONUS
        if query.normalized in locator:
            textual += TITLE_EXACT_BONUS * URL_WEIGHT
        if query.normalized in content:
            textual += CONTENT_EXACT_BONUS

        # Per-term and synonym matches share the tiers
        for term in query.terms:
            textual += calculate_term_score(term, title, locator, content, keywords)
        for expansion in query.expansions:
            textual += calculate_term_score(expansion, title, locator, content, keywords)

        if textual <= 0:
            return ScoreBreakdown()

        structural = 0.0
        if query.guideline_intent:
            structural = calculate_structural_bonus(entry)

        context = 0.0
        if filters.platform is not None and entry.platform == filters.platform:
            context += PLATFORM_MATCH_BONUS
        if filters.category is not None and entry.category == filters.category:
            context += CATEGORY_MATCH_BONUS

        return ScoreBreakdown(textual=textual, structural=structural, context=context)


def calculate_term_score(
    term: str,
    title: str,
    locator: str,
    content: str,
    keywords: set[str],
) -> float:
    """Score one query term (or synonym target) against the tiered fields.

    Title matches fall back to the stem so "button" finds "Buttons".

    Args:
        term: Lowercase term or phrase.
        title: Lowercase title.
        locator: Lowercase id + URL.
        content: Lowercase body text.
        keywords: The entry's keyword set.

    Returns:
        Sum of title, URL and content tier bonuses for this term.
    """
    stem = stem_keyword(term) if " " not in term else term
    score = 0.0
    if term in title or (stem != term and stem in title):
        score += TITLE_TERM_BONUS
    if term in locator or (stem != term and stem in locator):
        score += TITLE_TERM_BONUS * URL_WEIGHT
    if term in content or term in keywords or (stem != term and stem in keywords):
        score += TITLE_TERM_BONUS * CONTENT_WEIGHT
    return score


def calculate_structural_bonus(entry: "IndexEntry") -> float:
    """Bonus for sections carrying guidelines/specifications/examples."""
    bonus = 0.0
    if entry.has_guidelines:
        bonus += GUIDELINES_BONUS
    if entry.has_specifications:
        bonus += SPECIFICATIONS_BONUS
    if entry.has_examples:
        bonus += EXAMPLES_BONUS
    return bonus
