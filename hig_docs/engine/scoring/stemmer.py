"""Suffix stemmer for keyword and title-token matching.

Good enough to fold plurals and common inflections ("buttons" -> "button",
"settings" -> "sett" == "setting" -> "sett") without pulling in NLTK.
"""

# Endings that take "es" in the plural (switch -> switches, box -> boxes).
_ES_PLURAL_STEMS = ("sh", "ch", "x", "ss", "z")

# (suffix, minimum word length, excluded ending). Longer suffixes first.
_INFLECTION_RULES: tuple[tuple[str, int, str | None], ...] = (
    ("ation", 8, None),
    ("ment", 8, None),
    ("ness", 7, None),
    ("ing", 6, None),
    ("ed", 5, "eed"),
)


def _strip_plural(word: str) -> str:
    if len(word) > 4 and word.endswith("ies"):
        return word[:-3] + "y"
    if len(word) > 4 and word.endswith("es") and word[:-2].endswith(_ES_PLURAL_STEMS):
        return word[:-2]
    if len(word) > 3 and word.endswith("s") and not word.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def stem_keyword(word: str) -> str:
    """Strip a plural ending, then at most one inflection suffix.

    Minimum-length guards stop short words from collapsing into
    meaningless stems ("bars" -> "bar", but "is" stays "is").

    Args:
        word: The word to stem.

    Returns:
        The stemmed word (lowercased).
    """
    word = _strip_plural(word.lower())
    for suffix, min_length, excluded in _INFLECTION_RULES:
        if len(word) < min_length or not word.endswith(suffix):
            continue
        if excluded and word.endswith(excluded):
            continue
        return word[: -len(suffix)]
    return word
