"""
Recommendation scoring: pure functions from (template, context, date) to scores.

Score formula (additive heuristic, no normalization, unbounded above)
---------------------------------------------------------------------
    total = (
        base_score                               # editorial quality, 0–1
        + level_bonus                            # 0.3 exact / 0.1 adjacent
        + streak_bonus                           # 0.2 per satisfied condition
        + challenge_bonus                        # 0.15 per matching recent tag
        + seasonal_bonus                         # 0.1 in-season
    )

Every bonus is non-negative, so ``total >= base_score`` always holds.

Component explanations
----------------------
level_bonus:
    ``level_exact`` when the book's recommended level equals the reader's;
    ``level_adjacent`` when the ordinal distance is exactly 1.

streak_bonus:
    ``streak_bonus`` if streak > ``streak_high`` and the book is tagged
    "advanced"; ``streak_bonus`` if streak < ``streak_low`` and the book is
    tagged "beginner-friendly". Both are checked independently.

challenge_bonus:
    ``challenge_match`` for every recent-challenge tag the book carries.
    Repeated tags compound.

seasonal_bonus:
    ``seasonal`` when the season of the scoring date is in the book's
    seasonal relevance set.

Auxiliary scores
----------------
similarity_score      : overlap between a reference book and a candidate, 0–1.
search_relevance      : how well a book answers a text query, 0–1.
compatibility_score,
novelty_score,
goal_alignment_score  : personalized-ranking components, each 0–1.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from mentor_recs.config import ScoringConfig
from mentor_recs.models.book import (
    ADVANCED_TAG,
    BEGINNER_FRIENDLY_TAG,
    BookRecommendation,
    BookTemplate,
)
from mentor_recs.models.context import ReadingProfile, UserContext
from mentor_recs.taxonomy.path_taxonomy import UserLevel
from mentor_recs.utils.time_utils import season_on

_DEFAULT_WEIGHTS = ScoringConfig()

# Search field weights: the best matching field wins
_TITLE_MATCH = 1.0
_AUTHOR_MATCH = 0.8
_TAG_MATCH = 0.6
_SUMMARY_MATCH = 0.4


@dataclass
class ScoreComponents:
    """All components of a recommendation score.

    Attributes:
        base:      Template base score.
        level:     Level-fit bonus.
        streak:    Streak bonus.
        challenge: Recent-challenge tag bonus.
        seasonal:  In-season bonus.
    """

    base:      float
    level:     float
    streak:    float
    challenge: float
    seasonal:  float

    @property
    def total(self) -> float:
        return self.base + self.level + self.streak + self.challenge + self.seasonal


def compute_score(
    template: BookTemplate,
    context:  UserContext,
    on_date:  date,
    weights:  ScoringConfig = _DEFAULT_WEIGHTS,
) -> ScoreComponents:
    """Compute every score component of ``template`` for ``context``.

    Args:
        template: Catalog book; expected to apply to ``context.path``.
        context:  Requesting user's level, streak and recent challenge tags.
        on_date:  Calendar date that decides the current season.
        weights:  Bonus sizes and streak thresholds.

    Returns:
        ScoreComponents; ``.total`` is the ranking score.
    """
    # ── Level fit ─────────────────────────────────────────────────────────────
    distance = template.recommended_level.distance(context.level)
    if distance == 0:
        level_bonus = weights.level_exact
    elif distance == 1:
        level_bonus = weights.level_adjacent
    else:
        level_bonus = 0.0

    # ── Streak ────────────────────────────────────────────────────────────────
    streak_bonus = 0.0
    if context.current_streak > weights.streak_high and template.has_tag(ADVANCED_TAG):
        streak_bonus += weights.streak_bonus
    if context.current_streak < weights.streak_low and template.has_tag(BEGINNER_FRIENDLY_TAG):
        streak_bonus += weights.streak_bonus

    # ── Recent challenges ─────────────────────────────────────────────────────
    matches = sum(1 for tag in context.recent_challenge_tags if template.has_tag(tag))
    challenge_bonus = weights.challenge_match * matches

    # ── Season ────────────────────────────────────────────────────────────────
    seasonal_bonus = (
        weights.seasonal if season_on(on_date) in template.seasonal_relevance else 0.0
    )

    return ScoreComponents(
        base=template.base_score,
        level=level_bonus,
        streak=streak_bonus,
        challenge=challenge_bonus,
        seasonal=seasonal_bonus,
    )


def score(
    template: BookTemplate,
    context:  UserContext,
    on_date:  date,
    weights:  ScoringConfig = _DEFAULT_WEIGHTS,
) -> float:
    """Shorthand for ``compute_score(...).total``."""
    return compute_score(template, context, on_date, weights).total


def priority_level(score_value: float) -> int:
    """Map a score to a 1–5 priority: ``clamp(round(score * 5), 1, 5)``.

    Rounds half up (2.5 → 3) rather than to even.
    """
    return int(_clamp(math.floor(score_value * 5 + 0.5), 1, 5))


# ── Similarity ────────────────────────────────────────────────────────────────

def similarity_score(reference: BookRecommendation, template: BookTemplate) -> float:
    """Heuristic overlap between ``reference`` and a candidate, in [0, 1].

        0.4 × path fit   (1.0 primary path match, 0.5 secondary match)
      + 0.4 × tag Jaccard overlap
      + 0.1 × same genre
      + 0.1 × same author
    """
    if template.primary_path == reference.path:
        path_fit = 1.0
    elif reference.path in template.secondary_paths:
        path_fit = 0.5
    else:
        path_fit = 0.0

    tag_overlap = _jaccard(reference.tags, template.tags)
    same_genre = 1.0 if template.genre == reference.genre else 0.0
    same_author = 1.0 if template.author.casefold() == reference.author.casefold() else 0.0

    total = 0.4 * path_fit + 0.4 * tag_overlap + 0.1 * same_genre + 0.1 * same_author
    return _clamp(total, 0.0, 1.0)


# ── Search ────────────────────────────────────────────────────────────────────

def matches_query(template: BookTemplate, query: str) -> bool:
    """Case-insensitive substring match on title, author, summary or any tag.

    A blank query matches every template.
    """
    q = query.strip().casefold()
    if not q:
        return True
    return (
        q in template.title.casefold()
        or q in template.author.casefold()
        or q in template.summary.casefold()
        or any(q in tag for tag in template.tags)
    )


def search_relevance(template: BookTemplate, query: str, level: UserLevel) -> float:
    """Relevance of ``template`` to ``query`` for a reader at ``level``, in [0, 1].

        0.7 × best field match (title 1.0, author 0.8, tag 0.6, summary 0.4;
              a blank query counts as a title match)
      + 0.2 × level fit (1.0 exact, 0.5 adjacent)
      + 0.1 × base score
    """
    q = query.strip().casefold()
    if not q or q in template.title.casefold():
        field = _TITLE_MATCH
    elif q in template.author.casefold():
        field = _AUTHOR_MATCH
    elif any(q in tag for tag in template.tags):
        field = _TAG_MATCH
    elif q in template.summary.casefold():
        field = _SUMMARY_MATCH
    else:
        field = 0.0

    total = 0.7 * field + 0.2 * _level_fit(template.recommended_level, level) + 0.1 * template.base_score
    return _clamp(total, 0.0, 1.0)


# ── Personalized ranking ──────────────────────────────────────────────────────

def compatibility_score(template: BookTemplate, profile: ReadingProfile) -> float:
    """How well ``template`` suits the reader, in [0, 1].

        0.5 × level fit
      + 0.3 × genre is one of the preferred genres
      + 0.2 × inspiration (if the reader rates highly, avg >= 4) else practicality
    """
    genre_fit = 1.0 if template.genre in profile.preferred_genres else 0.0
    if profile.average_rating >= 4.0:
        style_fit = template.inspiration_score
    else:
        style_fit = template.practicality_score
    total = (
        0.5 * _level_fit(template.recommended_level, profile.level)
        + 0.3 * genre_fit
        + 0.2 * style_fit
    )
    return _clamp(total, 0.0, 1.0)


def novelty_score(template: BookTemplate, history: Iterable[BookRecommendation]) -> float:
    """1.0 for something new, 0.0 for a book already in ``history``.

    Otherwise ``1 - max tag overlap`` with any book in the history.
    """
    max_overlap = 0.0
    folded_title = template.title.casefold()
    for book in history:
        if book.title.casefold() == folded_title:
            return 0.0
        max_overlap = max(max_overlap, _jaccard(book.tags, template.tags))
    return 1.0 - max_overlap


def goal_alignment_score(template: BookTemplate, goals: Iterable[str]) -> float:
    """Fraction of ``goals`` mentioned in the template's tags or summary."""
    folded = [g.strip().casefold() for g in goals if g.strip()]
    if not folded:
        return 0.0
    summary = template.summary.casefold()
    hits = sum(
        1 for g in folded
        if g in summary or any(g in tag for tag in template.tags)
    )
    return hits / len(folded)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _level_fit(book_level: UserLevel, reader_level: UserLevel) -> float:
    distance = book_level.distance(reader_level)
    if distance == 0:
        return 1.0
    if distance == 1:
        return 0.5
    return 0.0


def _jaccard(a: Iterable[str], b: Iterable[str]) -> float:
    set_a, set_b = set(a), set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
