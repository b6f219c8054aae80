"""Relevance scoring for the HIG relevance engine.

This package provides the scoring strategies and query handling:
- Query parsing with stop-word filtering and synonym expansion
- Keyword scoring with tiered title/URL/content weights
- Keyword + embedding blended scoring
- Fusion of design-guideline and technical-documentation results
- Wildcard pattern matching over titles and symbol names

Usage:
    from hig_docs.engine.scoring import (
        KeywordScorer,
        parse_query,
        UnifiedQueryFuser,
    )
"""

from .constants import (
    FALLBACK_MAX_SCORE,
    FALLBACK_RESULT_LIMIT,
    MINIMUM_RELEVANCE_SCORE,
    STOP_WORDS,
    SYNONYM_GROUPS,
    SYNONYMS,
)
from .fusion import UnifiedQueryFuser, filter_by_platform, pair_results, to_cross_reference
from .keyword_scorer import (
    KeywordScorer,
    ScoreBreakdown,
    Scorer,
    ScoringFilters,
    calculate_structural_bonus,
    calculate_term_score,
)
from .query import (
    ParsedQuery,
    expand_synonyms,
    extract_query_terms,
    has_guideline_intent,
    normalize_title_tokens,
    parse_query,
)
from .semantic_scorer import BlendWeights, KeywordSemanticScorer
from .stemmer import stem_keyword
from .wildcard import (
    WildcardMatch,
    WildcardPattern,
    compile_pattern,
    has_wildcards,
    match_fields,
    pattern_suggestions,
)

__all__ = [
    # Constants
    "FALLBACK_MAX_SCORE",
    "FALLBACK_RESULT_LIMIT",
    "MINIMUM_RELEVANCE_SCORE",
    "STOP_WORDS",
    "SYNONYM_GROUPS",
    "SYNONYMS",
    # Stemmer
    "stem_keyword",
    # Query
    "ParsedQuery",
    "expand_synonyms",
    "extract_query_terms",
    "has_guideline_intent",
    "normalize_title_tokens",
    "parse_query",
    # Keyword scorer
    "KeywordScorer",
    "ScoreBreakdown",
    "Scorer",
    "ScoringFilters",
    "calculate_structural_bonus",
    "calculate_term_score",
    # Semantic scorer
    "BlendWeights",
    "KeywordSemanticScorer",
    # Fusion
    "UnifiedQueryFuser",
    "filter_by_platform",
    "pair_results",
    "to_cross_reference",
    # Wildcard
    "WildcardMatch",
    "WildcardPattern",
    "compile_pattern",
    "has_wildcards",
    "match_fields",
    "pattern_suggestions",
]
