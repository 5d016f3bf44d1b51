"""
Per-request user context models.

``UserContext`` is what the caller knows about the user at recommendation
time. It is supplied per request and never owned or cached by the scorer.

``ReadingProfile`` is derived from a reading history by
``mentor_recs.recommendations.profile.analyze_reading_profile`` and drives
personalized ranking.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mentor_recs.taxonomy.path_taxonomy import BookGenre, StreakLevel, TrainingPath, UserLevel


class UserContext(BaseModel):
    """Scoring inputs describing the requesting user.

    Attributes:
        path: Selected focus area.
        level: Reader proficiency.
        current_streak: Consecutive active days; must be non-negative.
        recent_challenge_tags: Tags of recently completed challenges,
            case-folded at construction. Duplicates are kept (each match
            contributes its own bonus).
    """

    model_config = ConfigDict(frozen=True)

    path: TrainingPath
    level: UserLevel = UserLevel.BEGINNER
    current_streak: int = Field(default=0, ge=0)
    recent_challenge_tags: tuple[str, ...] = ()

    @field_validator("recent_challenge_tags")
    @classmethod
    def casefold_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip().casefold() for t in v)

    @property
    def streak_level(self) -> StreakLevel:
        return StreakLevel.from_streak(self.current_streak)


class ReadingProfile(BaseModel):
    """Summary of a reader's history.

    Attributes:
        level: Inferred level from the number of books read.
        average_rating: Mean rating of rated books (0.0 when none are rated).
        preferred_genres: Up to three most-read genres, most frequent first.
        reading_velocity: Books finished per month.
        focus_areas: Up to five recurring words from titles and summaries.
    """

    model_config = ConfigDict(frozen=True)

    level: UserLevel = UserLevel.BEGINNER
    average_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    preferred_genres: tuple[BookGenre, ...] = ()
    reading_velocity: float = Field(default=1.0, ge=0.0)
    focus_areas: tuple[str, ...] = ()
