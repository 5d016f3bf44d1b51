"""
Daily challenge models.

``ChallengeTemplate`` is the static catalog record; ``DailyChallenge`` is the
instance handed to a user for a specific date. ``DailyChallenge`` is the
only challenge model that is NOT frozen: completion state and effort are
recorded on it after the fact.

``ChallengeStats`` carries the per-user history signals the selector uses;
``ChallengeValidationResult`` and ``ChallengeAnalytics`` are read-only
reports.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mentor_recs.taxonomy.path_taxonomy import (
    ChallengeCategory,
    ChallengeDifficulty,
    TrainingPath,
)


class ChallengeTemplate(BaseModel):
    """A catalog challenge.

    Attributes:
        priority: Editorial priority; higher is more important.
        is_active: Inactive templates are never selected.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    description: str
    path: TrainingPath
    difficulty: ChallengeDifficulty
    category: ChallengeCategory = ChallengeCategory.GENERAL
    estimated_time_minutes: int = Field(default=5, ge=0)
    tags: tuple[str, ...] = ()
    priority: int = 1
    is_active: bool = True

    @field_validator("tags")
    @classmethod
    def casefold_tags(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t.strip().casefold() for t in v if t.strip())


class DailyChallenge(BaseModel):
    """A challenge assigned to a user for one day."""

    # Completion and effort are filled in later
    model_config = ConfigDict(frozen=False)

    title: str
    description: str
    path: TrainingPath
    difficulty: ChallengeDifficulty
    challenge_date: date
    category: ChallengeCategory = ChallengeCategory.GENERAL
    estimated_time_minutes: int = 5
    tags: tuple[str, ...] = ()
    is_completed: bool = False
    effort_level: Optional[int] = Field(default=None, ge=1, le=5)


class ChallengeStats(BaseModel):
    """History signals used when choosing between challenge templates.

    Attributes:
        category_success_rates: Completion rate (0-1) per category.
        days_since_last_category: Days since a challenge of each category.
        weekday_preferences: ISO weekday (1 = Monday) → multiplier.
    """

    model_config = ConfigDict(frozen=True)

    category_success_rates: dict[ChallengeCategory, float] = {}
    days_since_last_category: dict[ChallengeCategory, int] = {}
    weekday_preferences: dict[int, float] = {}
    preferred_difficulty: ChallengeDifficulty = ChallengeDifficulty.STANDARD


class ChallengeValidationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    issues: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()


class StreakAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    average_streak_length: float = 0.0
    longest_streak: int = 0
    total_streaks: int = 0


class ChallengeAnalytics(BaseModel):
    """Completion summary over a window of past challenges."""

    model_config = ConfigDict(frozen=True)

    completion_rate: float
    average_effort: float
    preferred_categories: dict[ChallengeCategory, float]
    optimal_difficulty: ChallengeDifficulty
    streak_data: StreakAnalysis
