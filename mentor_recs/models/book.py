"""
Book catalog and recommendation models.

``BookTemplate`` is a static, author-defined catalog record. It is created
once when the catalog is loaded and never mutated afterwards.

``BookRecommendation`` is the user-facing projection of a template for one
focus area, plus the context-dependent fields filled in by the engine
(priority, explanation text, daily insight/challenge). Every engine call
builds fresh recommendation objects; nothing is shared across calls.

Both models are frozen; use ``model_copy(update=...)`` to derive variants.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from mentor_recs.taxonomy.path_taxonomy import (
    BookGenre,
    BookRating,
    Season,
    TrainingPath,
    UserLevel,
)

ADVANCED_TAG = "advanced"
BEGINNER_FRIENDLY_TAG = "beginner-friendly"


class BookTemplate(BaseModel):
    """A catalog book eligible for recommendation.

    Attributes:
        title: Book title; unique within a catalog.
        author: Author display name.
        summary: One-paragraph synopsis.
        key_insight: The single most quotable idea of the book.
        daily_action: A small action the reader can take today.
        cover_image_url: Optional cover art URL.
        purchase_url: Optional store URL.
        primary_path: Focus area the book was written for.
        secondary_paths: Other focus areas it also serves.
        recommended_level: Reader level the book suits best.
        genre: Catalog genre.
        tags: Free-form tags, case-folded at construction.
        base_score: Editorial quality score in [0, 1].
        trending_score: Current popularity in [0, 1].
        seasonal_relevance: Seasons in which the book gets a boost.
        estimated_reading_minutes: Time to read cover to cover.
        difficulty_rating: 1 (easy) to 5 (dense).
        practicality_score: How actionable the book is, in [0, 1].
        inspiration_score: How motivating the book is, in [0, 1].
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    summary: str
    key_insight: str
    daily_action: str
    cover_image_url: Optional[str] = None
    purchase_url: Optional[str] = None
    primary_path: TrainingPath
    secondary_paths: tuple[TrainingPath, ...] = ()
    recommended_level: UserLevel = UserLevel.BEGINNER
    genre: BookGenre = BookGenre.SELF_HELP
    tags: tuple[str, ...] = ()
    base_score: float = Field(ge=0.0, le=1.0)
    trending_score: float = Field(default=0.0, ge=0.0, le=1.0)
    seasonal_relevance: frozenset[Season] = frozenset()
    estimated_reading_minutes: int = Field(default=300, gt=0)
    difficulty_rating: int = Field(default=3, ge=1, le=5)
    practicality_score: float = Field(default=0.5, ge=0.0, le=1.0)
    inspiration_score: float = Field(default=0.5, ge=0.0, le=1.0)

    @field_validator("tags")
    @classmethod
    def casefold_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip().casefold() for t in v if t.strip())

    @model_validator(mode="after")
    def validate_secondary_paths(self) -> "BookTemplate":
        if self.primary_path in self.secondary_paths:
            raise ValueError(
                f"primary_path '{self.primary_path}' must not be repeated in secondary_paths."
            )
        return self

    def applies_to(self, path: TrainingPath) -> bool:
        """Return ``True`` if the book serves ``path`` as primary or secondary."""
        return path == self.primary_path or path in self.secondary_paths

    def has_tag(self, tag: str) -> bool:
        return tag.casefold() in self.tags

    def to_recommendation(self, path: TrainingPath) -> "BookRecommendation":
        """Project this template into a fresh recommendation for ``path``."""
        return BookRecommendation(
            title=self.title,
            author=self.author,
            path=path,
            summary=self.summary,
            key_insight=self.key_insight,
            daily_action=self.daily_action,
            cover_image_url=self.cover_image_url,
            purchase_url=self.purchase_url,
            genre=self.genre,
            tags=self.tags,
            estimated_reading_minutes=self.estimated_reading_minutes,
        )


class BookRecommendation(BaseModel):
    """A book recommended to a user on one focus area.

    Reader-state fields (``is_saved``, ``is_read``, ``date_read``,
    ``user_rating``) default to a fresh, unread book; callers that pass a
    reading history build recommendations with these set.

    Attributes:
        priority_level: 1 (low) to 5 (high) once ranked; 0 means unranked.
        recommendation_reason: Generated explanation text (may be empty).
        daily_insight: Featured-book insight text, or ``None``.
        todays_challenge: Featured-book challenge text, or ``None``.
        search_relevance_score: Relevance in [0, 1] for search results.
    """

    model_config = ConfigDict(frozen=True)

    title: str
    author: str
    path: TrainingPath
    summary: str
    key_insight: str
    daily_action: str
    cover_image_url: Optional[str] = None
    purchase_url: Optional[str] = None
    genre: BookGenre = BookGenre.SELF_HELP
    tags: tuple[str, ...] = ()
    estimated_reading_minutes: int = 300

    priority_level: int = Field(default=0, ge=0, le=5)
    recommendation_reason: str = ""
    daily_insight: Optional[str] = None
    todays_challenge: Optional[str] = None
    search_relevance_score: Optional[float] = None

    is_saved: bool = False
    is_read: bool = False
    date_read: Optional[date] = None
    user_rating: BookRating = BookRating.UNRATED


class BookFilters(BaseModel):
    """Optional constraints applied to search results."""

    model_config = ConfigDict(frozen=True)

    genre: Optional[BookGenre] = None
    level: Optional[UserLevel] = None
    max_reading_minutes: Optional[int] = Field(default=None, gt=0)

    def matches(self, template: BookTemplate) -> bool:
        if self.genre is not None and template.genre != self.genre:
            return False
        if self.level is not None and template.recommended_level != self.level:
            return False
        if (
            self.max_reading_minutes is not None
            and template.estimated_reading_minutes > self.max_reading_minutes
        ):
            return False
        return True
