"""Tests for query parsing, stemming and the keyword/semantic scorers."""

import numpy as np
import pytest

from hig_docs.engine.scoring import (
    SYNONYMS,
    BlendWeights,
    KeywordScorer,
    KeywordSemanticScorer,
    ScoringFilters,
    calculate_structural_bonus,
    has_guideline_intent,
    normalize_title_tokens,
    parse_query,
    stem_keyword,
)
from hig_docs.models.enums import Category, Platform
from hig_docs.models.index import IndexEntry
from hig_docs.services.embeddings import cosine_similarity


def make_entry(**overrides) -> IndexEntry:
    data = {
        "id": "buttons",
        "title": "Buttons",
        "platform": Platform.IOS,
        "category": Category.VISUAL_DESIGN,
        "url": "https://developer.apple.com/design/human-interface-guidelines/buttons",
        "keywords": ["ios", "buttons", "button", "tap"],
        "content": "Buttons initiate actions. Make every button easy to tap.",
    }
    data.update(overrides)
    return IndexEntry(**data)


class KeywordEmbedder:
    """Two-dimensional embedder: axis 0 for button text, axis 1 otherwise."""

    def encode(self, texts):
        if isinstance(texts, str):
            return self._vector(texts)
        return np.array([self._vector(t) for t in texts])

    def cosine_similarity(self, query_embedding, embeddings):
        return cosine_similarity(query_embedding, embeddings)

    def warmup(self):
        return None

    @staticmethod
    def _vector(text):
        return np.array([1.0, 0.0]) if "button" in text.lower() else np.array([0.0, 1.0])


class FailingEmbedder(KeywordEmbedder):
    def encode(self, texts):
        raise RuntimeError("model not installed")


class TestStemmer:
    @pytest.mark.parametrize(
        "word,stem",
        [
            ("buttons", "button"),
            ("switches", "switch"),
            ("categories", "category"),
            ("bars", "bar"),
            ("settings", "sett"),
            ("setting", "sett"),
            ("is", "is"),
            ("Buttons", "button"),
        ],
    )
    def test_stem_keyword(self, word, stem):
        assert stem_keyword(word) == stem


class TestQueryParsing:
    def test_terms_drop_stop_words_and_punctuation(self):
        parsed = parse_query("How to use the Buttons?")
        assert parsed.normalized == "how to use the buttons?"
        assert parsed.terms == ("buttons",)
        assert parsed.guideline_intent

    def test_expansion_skips_words_already_in_query(self):
        parsed = parse_query("buttons")
        assert "btn" in parsed.expansions
        assert "button" not in parsed.expansions

    def test_toggle_expands_to_switch(self):
        parsed = parse_query("toggle")
        assert "switch" in parsed.expansions
        assert "toggles" not in parsed.expansions

    def test_synonyms_are_bidirectional(self):
        assert "toggle" in SYNONYMS["switch"]
        assert "switch" in SYNONYMS["toggle"]
        assert "accessibility" in SYNONYMS["a11y"]
        assert "a11y" in SYNONYMS["accessibility"]

    def test_empty_query(self):
        parsed = parse_query("   ")
        assert parsed.is_empty
        assert parsed.terms == ()
        assert parsed.expansions == ()

    def test_guideline_intent(self):
        assert has_guideline_intent("button best practices")
        assert not has_guideline_intent("button")


class TestTitleTokens:
    def test_identifier_and_title_agree(self):
        assert normalize_title_tokens("UIButton") == {"button"}
        assert normalize_title_tokens("Buttons") == {"button"}
        assert normalize_title_tokens("NSButton") == {"button"}

    def test_multi_word_titles(self):
        assert normalize_title_tokens("UINavigationBar") == normalize_title_tokens("Navigation Bars")

    def test_short_and_stop_words_dropped(self):
        assert normalize_title_tokens("The UI") == set()


class TestKeywordScorer:
    def test_exact_title_match_dominates(self):
        scorer = KeywordScorer()
        entry = make_entry()
        exact = scorer.score(parse_query("buttons"), entry, ScoringFilters())
        partial = scorer.score(parse_query("tap"), entry, ScoringFilters())
        assert exact > 2.0
        assert exact > partial

    def test_no_textual_match_scores_zero(self):
        scorer = KeywordScorer()
        breakdown = scorer.breakdown(
            parse_query("typography"), make_entry(), ScoringFilters(platform=Platform.IOS)
        )
        assert breakdown.total == 0.0
        assert breakdown.context == 0.0

    def test_platform_and_category_bonus(self):
        scorer = KeywordScorer()
        filters = ScoringFilters(platform=Platform.IOS, category=Category.VISUAL_DESIGN)
        breakdown = scorer.breakdown(parse_query("buttons"), make_entry(), filters)
        assert breakdown.context == pytest.approx(0.2)

    def test_structural_bonus_only_for_guideline_queries(self):
        scorer = KeywordScorer()
        entry = make_entry(has_guidelines=True, has_specifications=True)
        plain = scorer.breakdown(parse_query("buttons"), entry, ScoringFilters())
        intent = scorer.breakdown(parse_query("buttons guidelines"), entry, ScoringFilters())
        assert plain.structural == 0.0
        assert intent.structural == pytest.approx(0.35)

    def test_structural_bonus(self):
        entry = make_entry(has_guidelines=True, has_specifications=True, has_examples=True)
        assert calculate_structural_bonus(entry) == pytest.approx(0.45)


class TestKeywordSemanticScorer:
    def test_semantic_similarity_contributes(self):
        scorer = KeywordSemanticScorer(KeywordEmbedder())
        entries = [make_entry(), make_entry(id="layout", title="Layout", content="Margins.", keywords=[])]
        parsed = parse_query("button")
        scorer.prepare(parsed, entries)

        keyword = KeywordScorer().breakdown(parsed, entries[0], ScoringFilters())
        expected = 0.4 * 1.0 + 0.3 * keyword.textual
        assert scorer.available
        assert scorer.score(parsed, entries[0], ScoringFilters()) == pytest.approx(expected)
        assert set(scorer.embeddings) == {"buttons", "layout"}

    def test_failure_moves_weight_to_keywords(self):
        scorer = KeywordSemanticScorer(FailingEmbedder())
        entry = make_entry()
        parsed = parse_query("buttons")
        scorer.prepare(parsed, [entry])

        keyword = KeywordScorer().breakdown(parsed, entry, ScoringFilters())
        assert not scorer.available
        assert scorer.score(parsed, entry, ScoringFilters()) == pytest.approx(0.7 * keyword.textual)

    def test_without_semantic(self):
        weights = BlendWeights().without_semantic()
        assert weights.semantic == 0.0
        assert weights.keyword == pytest.approx(0.7)

    def test_reset_drops_embeddings(self):
        scorer = KeywordSemanticScorer(KeywordEmbedder())
        scorer.prepare(parse_query("button"), [make_entry()])
        scorer.reset()
        assert scorer.embeddings == {}
