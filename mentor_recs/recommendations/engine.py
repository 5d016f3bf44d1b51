"""
Book recommendation engine: the public function-call API over a catalog.

``BookRecommender`` wires the catalog, the scorer, the ranker and the text
formatter together. It holds no mutable state besides the injected random
source; every call builds fresh ``BookRecommendation`` objects.

Operations
----------
generate_recommendations : weighted-sum score → stable sort → top N.
get_featured_item        : date-stable book of the day with insight + challenge.
search                   : query / filter match ranked by search relevance.
get_similar              : "if you liked X, try Y" by similarity > threshold.
get_trending             : popular or in-season books by trending score.
get_personalized         : compatibility / novelty / goal-alignment blend.
daily_book_insight       : path insight of the day attached to the featured book.

Focus areas and reader levels may be passed as enum members or as their
string values. An unrecognised string, or a path with no catalog content,
yields ``[]`` / ``None`` and a warning; the engine never raises for
"nothing to recommend".
"""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Callable, Optional, Sequence

from mentor_recs.catalog.store import Catalog
from mentor_recs.config import AppConfig
from mentor_recs.models.book import BookFilters, BookRecommendation, BookTemplate
from mentor_recs.models.context import UserContext
from mentor_recs.models.insight import DailyBookInsight
from mentor_recs.recommendations.daily import insight_of_the_day, select_of_the_day
from mentor_recs.recommendations.explain import (
    RandomSource,
    book_challenge_text,
    daily_insight_text,
    deep_dive_question,
    estimate_reading_time,
    format_recommendations,
    personalized_reason,
    recommendation_reason,
)
from mentor_recs.recommendations.profile import analyze_reading_profile
from mentor_recs.recommendations.ranker import rank, score_templates, score_with, top_n
from mentor_recs.recommendations.scorer import (
    compatibility_score,
    compute_score,
    goal_alignment_score,
    matches_query,
    novelty_score,
    priority_level,
    search_relevance,
    similarity_score,
)
from mentor_recs.taxonomy.path_taxonomy import TrainingPath, UserLevel
from mentor_recs.utils.time_utils import day_of_year, season_on, today

logger = logging.getLogger(__name__)

PathLike = TrainingPath | str
LevelLike = UserLevel | str


class BookRecommender:
    """Recommendation operations over one read-only catalog.

    Args:
        catalog: Loaded content catalog.
        config:  Application config; defaults to ``AppConfig()``.
        rng:     Random source for explanation text; defaults to a fresh
                 ``random.Random()``. Pass a seeded instance for repeatable text.
        clock:   Callable returning "today"; defaults to the local date.
    """

    def __init__(
        self,
        catalog: Catalog,
        config:  AppConfig | None = None,
        rng:     RandomSource | None = None,
        clock:   Callable[[], date] | None = None,
    ) -> None:
        self.catalog = catalog
        self.config = config or AppConfig()
        self.rng: RandomSource = rng or random.Random()
        self.clock = clock or today

    # ── Ranked recommendations ────────────────────────────────────────────────

    def generate_recommendations(
        self,
        path:        PathLike,
        level:       LevelLike = UserLevel.BEGINNER,
        streak:      int = 0,
        recent_tags: Sequence[str] = (),
        count:       Optional[int] = None,
    ) -> list[BookRecommendation]:
        """Return up to ``count`` books for ``path``, highest score first.

        ``len(result) == min(count, books applying to path)``; ``count <= 0``
        returns ``[]``. Equal scores keep catalog order.
        """
        focus = self._resolve_path(path)
        reader = self._resolve_level(level)
        if focus is None or reader is None:
            return []
        if count is None:
            count = self.config.ranking.default_count

        templates = self._books_for(focus)
        if not templates:
            return []

        context = UserContext(
            path=focus,
            level=reader,
            current_streak=streak,
            recent_challenge_tags=tuple(recent_tags),
        )
        scored = score_templates(templates, context, self.clock(), self.config.scoring)
        selected = top_n(rank(scored), count)

        logger.debug(
            "Recommendations ranked for %s: %d of %d",
            focus, len(selected), len(templates),
            extra={
                "operation":    "recommend",
                "path":         focus.value,
                "user_level":   reader.value,
                "streak":       streak,
                "streak_level": context.streak_level.value,
                "candidates":   len(templates),
                "selected":     len(selected),
            },
        )
        return format_recommendations(selected, focus, reader, self.rng)

    def get_featured_item(
        self,
        path:  PathLike,
        level: LevelLike = UserLevel.BEGINNER,
    ) -> Optional[BookRecommendation]:
        """Book of the day for ``path``: the same book all day for a fixed catalog."""
        focus = self._resolve_path(path)
        reader = self._resolve_level(level)
        if focus is None or reader is None:
            return None

        on_date = self.clock()
        template = select_of_the_day(self._books_for(focus), day_of_year(on_date))
        if template is None:
            return None

        context = UserContext(path=focus, level=reader)
        book = template.to_recommendation(focus)
        return book.model_copy(
            update={
                "priority_level": priority_level(
                    compute_score(template, context, on_date, self.config.scoring).total
                ),
                "recommendation_reason": recommendation_reason(self.rng, reader, focus),
                "daily_insight": daily_insight_text(self.rng, book, focus),
                "todays_challenge": book_challenge_text(
                    self.rng, book, self.catalog.book_challenges_for_path(focus)
                ),
            }
        )

    # ── Discovery ─────────────────────────────────────────────────────────────

    def search(
        self,
        path:    PathLike,
        query:   str,
        level:   LevelLike = UserLevel.BEGINNER,
        filters: BookFilters | None = None,
    ) -> list[BookRecommendation]:
        """Books for ``path`` matching ``query`` and ``filters``, most relevant first."""
        focus = self._resolve_path(path)
        reader = self._resolve_level(level)
        if focus is None or reader is None:
            return []
        filters = filters or BookFilters()

        candidates = self.catalog.books_for_path(focus)
        matching = [t for t in candidates if matches_query(t, query) and filters.matches(t)]
        ranked = rank(score_with(matching, lambda t: search_relevance(t, query, reader)))

        logger.debug(
            "Search %r on %s: %d result(s)",
            query, focus, len(ranked),
            extra={
                "operation":  "search",
                "path":       focus.value,
                "query":      query,
                "candidates": len(candidates),
                "selected":   len(ranked),
            },
        )
        return [
            st.template.to_recommendation(focus).model_copy(
                update={
                    "search_relevance_score": st.score,
                    "priority_level": priority_level(st.score),
                }
            )
            for st in ranked
        ]

    def get_similar(
        self,
        reference: BookRecommendation,
        count:     Optional[int] = None,
    ) -> list[BookRecommendation]:
        """Catalog books resembling ``reference``, projected onto its path."""
        if count is None:
            count = self.config.ranking.similar_count
        threshold = self.config.ranking.similarity_threshold

        ref_title = reference.title.casefold()
        candidates = [b for b in self.catalog.books if b.title.casefold() != ref_title]
        scored = [
            st for st in score_with(candidates, lambda t: similarity_score(reference, t))
            if st.score > threshold
        ]
        selected = top_n(rank(scored), count)

        return [
            st.template.to_recommendation(reference.path).model_copy(
                update={"priority_level": priority_level(st.score)}
            )
            for st in selected
        ]

    def get_trending(
        self,
        path:  PathLike,
        count: Optional[int] = None,
    ) -> list[BookRecommendation]:
        """Popular or in-season books for ``path``, by trending score."""
        focus = self._resolve_path(path)
        if focus is None:
            return []
        if count is None:
            count = self.config.ranking.trending_count

        season = season_on(self.clock())
        threshold = self.config.ranking.trending_threshold
        trending = [
            t for t in self.catalog.books_for_path(focus)
            if t.trending_score > threshold or season in t.seasonal_relevance
        ]
        selected = top_n(rank(score_with(trending, lambda t: t.trending_score)), count)

        return [
            st.template.to_recommendation(focus).model_copy(
                update={"priority_level": priority_level(st.score)}
            )
            for st in selected
        ]

    def get_personalized(
        self,
        path:        PathLike,
        read_books:  Sequence[BookRecommendation],
        saved_books: Sequence[BookRecommendation] = (),
        goals:       Sequence[str] = (),
        count:       Optional[int] = None,
    ) -> list[BookRecommendation]:
        """Books for ``path`` fitted to the reader's history and goals.

        Score = compatibility_weight × compatibility
              + novelty_weight       × novelty (against read + saved books)
              + goal_alignment_weight × goal alignment
        """
        focus = self._resolve_path(path)
        if focus is None:
            return []
        if count is None:
            count = self.config.ranking.personalized_count

        templates = self._books_for(focus)
        if not templates:
            return []

        profile = analyze_reading_profile(read_books, saved_books)
        history = [*read_books, *saved_books]
        ranking = self.config.ranking

        def _blend(template: BookTemplate) -> float:
            return (
                ranking.compatibility_weight * compatibility_score(template, profile)
                + ranking.novelty_weight * novelty_score(template, history)
                + ranking.goal_alignment_weight * goal_alignment_score(template, goals)
            )

        selected = top_n(rank(score_with(templates, _blend)), count)
        logger.debug(
            "Personalized picks for %s: %d of %d",
            focus, len(selected), len(templates),
            extra={
                "operation":  "personalized",
                "path":       focus.value,
                "user_level": profile.level.value,
                "read":       len(read_books),
                "saved":      len(saved_books),
                "candidates": len(templates),
                "selected":   len(selected),
            },
        )
        return [
            st.template.to_recommendation(focus).model_copy(
                update={
                    "priority_level": priority_level(st.score),
                    "recommendation_reason": personalized_reason(self.rng, st.template, profile),
                }
            )
            for st in selected
        ]

    def daily_book_insight(
        self,
        path:  PathLike,
        level: LevelLike = UserLevel.BEGINNER,
    ) -> Optional[DailyBookInsight]:
        """Path insight of the day, attached to the featured book."""
        focus = self._resolve_path(path)
        reader = self._resolve_level(level)
        if focus is None or reader is None:
            return None

        featured = self.get_featured_item(focus, reader)
        if featured is None:
            return None

        insight = insight_of_the_day(
            self.catalog.insights_for_path(focus), day_of_year(self.clock())
        )
        if insight is None:
            logger.warning("No insights in catalog for path '%s'.", focus)
            return None

        return DailyBookInsight(
            content=insight.content,
            book_title=featured.title,
            category=focus.display_name,
            action_item=insight.action_item,
            deep_dive=deep_dive_question(self.rng, focus),
            reading_time_minutes=estimate_reading_time(insight.content),
        )

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _books_for(self, path: TrainingPath) -> list[BookTemplate]:
        templates = self.catalog.books_for_path(path)
        if not templates:
            logger.warning("No books in catalog for path '%s'.", path)
        return templates

    @staticmethod
    def _resolve_path(path: PathLike) -> Optional[TrainingPath]:
        if isinstance(path, TrainingPath):
            return path
        try:
            return TrainingPath(str(path).strip().lower())
        except ValueError:
            logger.warning("Unrecognised focus area '%s'; returning no results.", path)
            return None

    @staticmethod
    def _resolve_level(level: LevelLike) -> Optional[UserLevel]:
        if isinstance(level, UserLevel):
            return level
        try:
            return UserLevel(str(level).strip().lower())
        except ValueError:
            logger.warning("Unrecognised reader level '%s'; returning no results.", level)
            return None
