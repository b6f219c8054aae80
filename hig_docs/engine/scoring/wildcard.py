"""Wildcard pattern matching for titles and symbols.

``*`` matches any run of characters and ``?`` a single character. A pattern
with wildcards must match the whole field; a plain pattern matches as a
substring. With ``whole_word`` the pattern must cover complete words
instead, and wildcards stay inside a word.
"""

import re
from dataclasses import dataclass, field

WILDCARD_CHARS = "*?"

# Plain-pattern tiers
EXACT_MATCH_SCORE = 1.0
PREFIX_MATCH_SCORE = 0.9
CONTAINS_MATCH_SCORE = 0.7
WORD_MATCH_SCORE = 0.5

# Wildcard tiers
WILDCARD_BASE_SCORE = 0.6
SPECIFICITY_STEP = 0.1
SPECIFICITY_FREE_WILDCARDS = 5
LENGTH_STEP = 0.01
LENGTH_BONUS_CAP = 0.2
LOOSE_MATCH_PENALTY = 0.1
MIN_WILDCARD_SCORE = 0.1


@dataclass(frozen=True)
class WildcardPattern:
    """A compiled search pattern."""

    original: str
    regex: re.Pattern[str]
    is_wildcard: bool
    case_sensitive: bool = False


@dataclass(frozen=True)
class WildcardMatch:
    """Best match of a pattern over a record's fields."""

    score: float
    text: str
    segments: list[str] = field(default_factory=list)


def has_wildcards(pattern: str) -> bool:
    return any(c in pattern for c in WILDCARD_CHARS)


def compile_pattern(
    pattern: str,
    case_sensitive: bool = False,
    whole_word: bool = False,
) -> WildcardPattern:
    """Compile a user pattern into a regex.

    Args:
        pattern: Pattern with optional ``*`` and ``?`` wildcards.
        case_sensitive: Match case exactly.
        whole_word: Match complete words only.

    Returns:
        WildcardPattern ready for ``match_fields``
    """
    pattern = pattern.strip()
    wildcard = has_wildcards(pattern)
    any_run, any_char = (r"\w*", r"\w") if whole_word else (".*", ".")

    body = "".join(
        any_run if c == "*" else any_char if c == "?" else re.escape(c) for c in pattern
    )
    if whole_word:
        source = rf"(?<!\w){body}(?!\w)"
    elif wildcard:
        source = rf"^{body}$"
    else:
        source = body

    flags = 0 if case_sensitive else re.IGNORECASE
    return WildcardPattern(
        original=pattern,
        regex=re.compile(source, flags | re.DOTALL),
        is_wildcard=wildcard,
        case_sensitive=case_sensitive,
    )


def static_parts(pattern: str) -> list[str]:
    """Literal runs between wildcards."""
    return [part for part in re.split(r"[*?]+", pattern) if part]


def score_match(text: str, pattern: WildcardPattern) -> float:
    """Score one field against a pattern; 0.0 when it does not match."""
    if not pattern.regex.search(text):
        return 0.0

    if not pattern.is_wildcard:
        haystack = text if pattern.case_sensitive else text.lower()
        needle = pattern.original if pattern.case_sensitive else pattern.original.lower()
        if haystack == needle:
            return EXACT_MATCH_SCORE
        if haystack.startswith(needle):
            return PREFIX_MATCH_SCORE
        if needle in haystack:
            return CONTAINS_MATCH_SCORE
        return WORD_MATCH_SCORE

    wildcard_count = sum(pattern.original.count(c) for c in WILDCARD_CHARS)
    score = WILDCARD_BASE_SCORE
    score += max(0, SPECIFICITY_FREE_WILDCARDS - wildcard_count) * SPECIFICITY_STEP
    score += min(LENGTH_BONUS_CAP, len(pattern.original) * LENGTH_STEP)
    # Broad patterns hitting long text are weak evidence
    if wildcard_count >= 2 and len(text) > len(pattern.original) * 3:
        score -= LOOSE_MATCH_PENALTY
    return round(min(1.0, max(MIN_WILDCARD_SCORE, score)), 4)


def matched_segments(text: str, pattern: WildcardPattern) -> list[str]:
    """Parts of the pattern found in the text."""
    if not pattern.is_wildcard:
        found = pattern.regex.search(text)
        return [found.group(0)] if found else []
    lowered = text.lower()
    return [part for part in static_parts(pattern.original) if part.lower() in lowered]


def match_fields(fields: list[str], pattern: WildcardPattern) -> WildcardMatch | None:
    """Best-scoring field of a record, or None if no field matches."""
    best: WildcardMatch | None = None
    for text in fields:
        if not text:
            continue
        score = score_match(text, pattern)
        if score > 0 and (best is None or score > best.score):
            best = WildcardMatch(score=score, text=text, segments=matched_segments(text, pattern))
    return best


def pattern_suggestions(pattern: str, result_count: int) -> list[str]:
    """Hints for broadening or narrowing a pattern."""
    suggestions: list[str] = []
    wildcard = has_wildcards(pattern)

    if result_count == 0:
        suggestions.append("Try using wildcards like * or ? to broaden your search")
        suggestions.append("Check spelling of your search pattern")
        if not wildcard:
            suggestions.append(f'Try "{pattern}*" to find items starting with "{pattern}"')
            suggestions.append(f'Try "*{pattern}*" to find items containing "{pattern}"')
    elif result_count < 3 and "*" not in pattern:
        suggestions.append(f'Try "*{pattern}*" for broader results')

    if result_count > 50:
        suggestions.append("Try making your pattern more specific")
        if pattern.count("*") > 2:
            suggestions.append("Try using fewer wildcards for more specific results")

    if "**" in pattern:
        suggestions.append('Use single "*" instead of "**", they have the same effect')
    return suggestions
