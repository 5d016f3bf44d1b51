"""
Explanation text for recommendations.

Every sentence is drawn from a small fixed set of candidates. The choice is
made through an injected random source (anything with a ``choice(seq)``
method, normally ``random.Random``), so tests can pass a seeded or stubbed
source and assert "result is one of the candidates".

The ``*_candidates`` functions expose the fixed sets themselves.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar

from mentor_recs.models.book import BookRecommendation, BookTemplate
from mentor_recs.models.context import ReadingProfile
from mentor_recs.recommendations.ranker import ScoredTemplate
from mentor_recs.recommendations.scorer import priority_level
from mentor_recs.taxonomy.path_taxonomy import TrainingPath, UserLevel

_T = TypeVar("_T")

WORDS_PER_MINUTE = 200


class RandomSource(Protocol):
    def choice(self, seq: Sequence[_T]) -> _T: ...


# ── Candidate sets ────────────────────────────────────────────────────────────

def reason_candidates(level: UserLevel, path: TrainingPath) -> list[str]:
    adjective = level.explanation_adjective
    context = path.context_phrase
    return [
        f"This book offers {adjective} insights perfect for your current {context} journey.",
        f"Based on your focus on {context}, this author's approach will resonate with your goals.",
        f"The practical strategies in this book align perfectly with {adjective} {context} development.",
        f"This book's unique perspective on {context} makes it ideal for your current growth stage.",
    ]


def daily_insight_candidates(book: BookRecommendation, path: TrainingPath) -> list[str]:
    path_name = path.display_name.lower()
    return [
        f"Today's wisdom from {book.title}: {book.key_insight}",
        f"Key insight: {book.key_insight} - Apply this to your {path_name} practice today.",
        f"{book.author} reminds us: {book.key_insight}",
        f"From {book.title}: {book.key_insight} - Perfect for your {path_name} journey.",
    ]


def deep_dive_candidates(path: TrainingPath) -> list[str]:
    path_name = path.display_name.lower()
    return [
        f"How can you apply this insight to overcome your biggest {path_name} challenge?",
        "What would change in your life if you fully embraced this principle?",
        f"How does this insight challenge your current approach to {path_name}?",
        "What's one specific action you can take today to embody this wisdom?",
    ]


def personalized_reason_candidates(
    template: BookTemplate,
    profile:  ReadingProfile,
) -> list[str]:
    level_word = profile.level.value
    candidates = [
        f"Matched to your {level_word} reading level and recent interests.",
        f"Something new for you: {template.author} takes a fresh angle on topics you keep returning to.",
    ]
    if template.genre in profile.preferred_genres:
        genre_word = template.genre.value.replace("_", "-")
        candidates.append(f"You read a lot of {genre_word}; this one is a standout in the genre.")
    if profile.focus_areas:
        candidates.append(
            f"Builds on themes from your recent reading like '{profile.focus_areas[0]}'."
        )
    return candidates


# ── Choosers ──────────────────────────────────────────────────────────────────

def recommendation_reason(rng: RandomSource, level: UserLevel, path: TrainingPath) -> str:
    return rng.choice(reason_candidates(level, path))


def daily_insight_text(rng: RandomSource, book: BookRecommendation, path: TrainingPath) -> str:
    return rng.choice(daily_insight_candidates(book, path))


def book_challenge_text(
    rng:        RandomSource,
    book:       BookRecommendation,
    challenges: Sequence[str],
) -> str:
    """Pick a path challenge; fall back to the book's own daily action."""
    if not challenges:
        return book.daily_action
    return rng.choice(challenges)


def deep_dive_question(rng: RandomSource, path: TrainingPath) -> str:
    return rng.choice(deep_dive_candidates(path))


def personalized_reason(
    rng:      RandomSource,
    template: BookTemplate,
    profile:  ReadingProfile,
) -> str:
    return rng.choice(personalized_reason_candidates(template, profile))


def estimate_reading_time(text: str) -> int:
    """Minutes to read ``text`` at 200 words per minute, at least 1."""
    return max(1, len(text.split()) // WORDS_PER_MINUTE)


# ── Selector / formatter ──────────────────────────────────────────────────────

def format_recommendations(
    scored: Sequence[ScoredTemplate],
    path:   TrainingPath,
    level:  UserLevel,
    rng:    RandomSource,
) -> list[BookRecommendation]:
    """Project already-selected scored templates into recommendations.

    Each recommendation gets ``priority_level = clamp(round(score * 5), 1, 5)``
    and a reason sentence chosen from ``reason_candidates(level, path)``.
    """
    return [
        st.template.to_recommendation(path).model_copy(
            update={
                "priority_level": priority_level(st.score),
                "recommendation_reason": recommendation_reason(rng, level, path),
            }
        )
        for st in scored
    ]
