"""
Tests for mentor_recs/recommendations/explain.py.

What we test
------------
- Candidate sets interpolate the level adjective and path phrase.
- Every chooser returns a member of its candidate set.
- book_challenge_text() falls back to the book's daily action.
- personalized_reason_candidates() adds genre / focus-area sentences only
  when the profile supports them.
- estimate_reading_time() is words // 200 with a floor of 1.
- format_recommendations() sets priority and a reason on fresh objects.
"""

from __future__ import annotations

import random

import pytest

from mentor_recs.models.context import ReadingProfile
from mentor_recs.recommendations.explain import (
    book_challenge_text,
    daily_insight_candidates,
    daily_insight_text,
    deep_dive_candidates,
    deep_dive_question,
    estimate_reading_time,
    format_recommendations,
    personalized_reason,
    personalized_reason_candidates,
    reason_candidates,
    recommendation_reason,
)
from mentor_recs.recommendations.ranker import ScoredTemplate
from mentor_recs.taxonomy.path_taxonomy import BookGenre, TrainingPath, UserLevel


class TestCandidates:
    def test_reason_candidates_interpolate(self):
        candidates = reason_candidates(UserLevel.BEGINNER, TrainingPath.DISCIPLINE)
        assert len(candidates) == 4
        assert "foundational" in candidates[0]
        assert TrainingPath.DISCIPLINE.context_phrase in candidates[0]

    def test_daily_insight_candidates_quote_key_insight(self, make_book):
        book = make_book(key_insight="Systems beat goals.").to_recommendation(TrainingPath.DISCIPLINE)
        for text in daily_insight_candidates(book, TrainingPath.DISCIPLINE):
            assert "Systems beat goals." in text

    def test_deep_dive_mentions_path(self):
        candidates = deep_dive_candidates(TrainingPath.CLARITY)
        assert any("clarity" in c for c in candidates)


class TestChoosers:
    @pytest.mark.parametrize("seed", range(5))
    def test_reason_is_a_candidate(self, seed):
        rng = random.Random(seed)
        text = recommendation_reason(rng, UserLevel.ADVANCED, TrainingPath.PURPOSE)
        assert text in reason_candidates(UserLevel.ADVANCED, TrainingPath.PURPOSE)

    def test_stub_picks_first(self, stub_rng, make_book):
        book = make_book().to_recommendation(TrainingPath.DISCIPLINE)
        assert daily_insight_text(stub_rng, book, TrainingPath.DISCIPLINE) == (
            daily_insight_candidates(book, TrainingPath.DISCIPLINE)[0]
        )
        assert deep_dive_question(stub_rng, TrainingPath.DISCIPLINE) == (
            deep_dive_candidates(TrainingPath.DISCIPLINE)[0]
        )

    def test_book_challenge_picks_from_challenges(self, stub_rng, make_book):
        book = make_book().to_recommendation(TrainingPath.DISCIPLINE)
        assert book_challenge_text(stub_rng, book, ["Make Your Bed", "Walk"]) == "Make Your Bed"

    def test_book_challenge_falls_back_to_daily_action(self, stub_rng, make_book):
        book = make_book(daily_action="Read ten pages.").to_recommendation(TrainingPath.DISCIPLINE)
        assert book_challenge_text(stub_rng, book, []) == "Read ten pages."
        assert stub_rng.choices == 0


class TestPersonalizedReason:
    def test_base_candidates_only(self, make_book):
        candidates = personalized_reason_candidates(make_book(), ReadingProfile())
        assert len(candidates) == 2

    def test_genre_and_focus_sentences(self, make_book):
        profile = ReadingProfile(
            preferred_genres=(BookGenre.SELF_HELP,), focus_areas=("habits",),
        )
        candidates = personalized_reason_candidates(make_book(), profile)
        assert len(candidates) == 4
        assert any("self-help" in c for c in candidates)
        assert any("'habits'" in c for c in candidates)

    def test_chooser_returns_candidate(self, make_book):
        profile = ReadingProfile(focus_areas=("habits",))
        text = personalized_reason(random.Random(3), make_book(), profile)
        assert text in personalized_reason_candidates(make_book(), profile)


class TestReadingTime:
    @pytest.mark.parametrize(
        "words,expected", [(0, 1), (10, 1), (199, 1), (400, 2), (1000, 5)]
    )
    def test_estimate(self, words, expected):
        assert estimate_reading_time(" ".join(["word"] * words)) == expected


class TestFormatRecommendations:
    def test_sets_priority_and_reason(self, make_book, stub_rng):
        scored = [
            ScoredTemplate(template=make_book(title="A"), score=1.4),
            ScoredTemplate(template=make_book(title="B"), score=0.5),
        ]
        recs = format_recommendations(scored, TrainingPath.DISCIPLINE, UserLevel.BEGINNER, stub_rng)
        assert [r.title for r in recs] == ["A", "B"]
        assert [r.priority_level for r in recs] == [5, 3]
        expected = reason_candidates(UserLevel.BEGINNER, TrainingPath.DISCIPLINE)[0]
        assert all(r.recommendation_reason == expected for r in recs)
        assert all(r.path is TrainingPath.DISCIPLINE for r in recs)

    def test_empty(self, stub_rng):
        assert format_recommendations([], TrainingPath.DISCIPLINE, UserLevel.BEGINNER, stub_rng) == []
