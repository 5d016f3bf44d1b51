"""
Taxonomy for the mentor content catalog.

Two orthogonal dimensions describe every recommendation request:
  - ``TrainingPath`` — the *what*: which personal-growth focus area?
  - ``UserLevel``    — the *who*:  how experienced is the reader?

``Season`` buckets the calendar for seasonal relevance, ``BookGenre`` and
``BookRating`` classify catalog books, and the challenge enums
(``ChallengeCategory``, ``ChallengeDifficulty``) classify daily challenges.
``CheckInTime`` and ``MoodRating`` describe a journaling check-in.

Usage example::

    from mentor_recs.taxonomy.path_taxonomy import TrainingPath, UserLevel

    path  = TrainingPath.DISCIPLINE
    level = UserLevel.INTERMEDIATE

This module has NO imports from any other ``mentor_recs`` package.
"""

from enum import IntEnum, StrEnum
from typing import Optional


class TrainingPath(StrEnum):
    """Personal-growth focus area a user selects during onboarding."""

    DISCIPLINE = "discipline"
    """Consistency, willpower and routines."""

    CLARITY = "clarity"
    """Mindfulness, emotional regulation and focus."""

    CONFIDENCE = "confidence"
    """Social leadership, voice and inner courage."""

    PURPOSE = "purpose"
    """Values, long-term thinking and direction."""

    AUTHENTICITY = "authenticity"
    """Vulnerability, truth and genuine self-expression."""

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def context_phrase(self) -> str:
        """Short phrase describing the path, used in explanation sentences."""
        return _PATH_CONTEXT[self]


_PATH_CONTEXT: dict[TrainingPath, str] = {
    TrainingPath.DISCIPLINE:   "building consistent habits and mental toughness",
    TrainingPath.CLARITY:      "developing focus and emotional regulation",
    TrainingPath.CONFIDENCE:   "strengthening self-assurance and leadership",
    TrainingPath.PURPOSE:      "finding meaning and direction",
    TrainingPath.AUTHENTICITY: "embracing genuine self-expression",
}


class UserLevel(StrEnum):
    """Ordinal reader proficiency: beginner < intermediate < advanced."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        """1-based ordinal position (beginner = 1)."""
        return _LEVEL_RANK[self]

    def distance(self, other: "UserLevel") -> int:
        """Absolute ordinal distance between two levels (0, 1 or 2)."""
        return abs(self.rank - other.rank)

    @property
    def explanation_adjective(self) -> str:
        return _LEVEL_ADJECTIVE[self]


_LEVEL_RANK: dict[UserLevel, int] = {
    UserLevel.BEGINNER:     1,
    UserLevel.INTERMEDIATE: 2,
    UserLevel.ADVANCED:     3,
}

_LEVEL_ADJECTIVE: dict[UserLevel, str] = {
    UserLevel.BEGINNER:     "foundational",
    UserLevel.INTERMEDIATE: "practical",
    UserLevel.ADVANCED:     "advanced",
}


class Season(StrEnum):
    """Calendar-quarter bucket used for seasonal relevance."""

    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


def season_for_month(month: int) -> Season:
    """Map a calendar month (1-12) to its season.

    Mar–May → spring, Jun–Aug → summer, Sep–Nov → fall, everything else
    (Dec, Jan, Feb) → winter.

    Raises:
        ValueError: If ``month`` is outside 1-12.
    """
    if not 1 <= month <= 12:
        raise ValueError(f"month must be in [1, 12], got {month}.")
    if 3 <= month <= 5:
        return Season.SPRING
    if 6 <= month <= 8:
        return Season.SUMMER
    if 9 <= month <= 11:
        return Season.FALL
    return Season.WINTER


class BookGenre(StrEnum):
    """Catalog genre of a book."""

    SELF_HELP = "self_help"
    PSYCHOLOGY = "psychology"
    PHILOSOPHY = "philosophy"
    BIOGRAPHY = "biography"
    BUSINESS = "business"
    SPIRITUALITY = "spirituality"
    SCIENCE = "science"
    FICTION = "fiction"


class BookRating(IntEnum):
    """Reader's star rating for a finished book. ``UNRATED`` carries no value."""

    UNRATED = 0
    POOR = 1
    FAIR = 2
    GOOD = 3
    VERY_GOOD = 4
    EXCELLENT = 5

    @property
    def numeric_value(self) -> Optional[float]:
        if self is BookRating.UNRATED:
            return None
        return float(self.value)


class InsightDepth(StrEnum):
    """How deep a path insight goes."""

    SURFACE = "surface"
    PRACTICAL = "practical"
    PHILOSOPHICAL = "philosophical"


class ChallengeCategory(StrEnum):
    """Kind of activity a daily challenge asks for."""

    PHYSICAL = "physical"
    MENTAL = "mental"
    SOCIAL = "social"
    SPIRITUAL = "spiritual"
    DIGITAL = "digital"
    CREATIVE = "creative"
    GENERAL = "general"


class ChallengeDifficulty(StrEnum):
    """Effort tier of a daily challenge."""

    MICRO = "micro"
    STANDARD = "standard"
    ADVANCED = "advanced"
    CUSTOM = "custom"

    @property
    def estimated_minutes(self) -> int:
        """Typical time commitment for this tier."""
        return _DIFFICULTY_MINUTES[self]


_DIFFICULTY_MINUTES: dict[ChallengeDifficulty, int] = {
    ChallengeDifficulty.MICRO:    5,
    ChallengeDifficulty.STANDARD: 15,
    ChallengeDifficulty.ADVANCED: 30,
    ChallengeDifficulty.CUSTOM:   10,
}


class CheckInTime(StrEnum):
    """When in the day a journaling check-in happens."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    CUSTOM = "custom"

    @property
    def display_name(self) -> str:
        return _CHECKIN_DISPLAY[self]

    @property
    def prompt_period(self) -> "CheckInTime":
        """Morning or evening: whose prompt and response sets apply.

        Afternoon check-ins still look ahead at the day; custom ones look back.
        """
        if self in (CheckInTime.MORNING, CheckInTime.AFTERNOON):
            return CheckInTime.MORNING
        return CheckInTime.EVENING


_CHECKIN_DISPLAY: dict[CheckInTime, str] = {
    CheckInTime.MORNING:   "Morning Reflection",
    CheckInTime.AFTERNOON: "Midday Check-in",
    CheckInTime.EVENING:   "Evening Review",
    CheckInTime.CUSTOM:    "Custom Check-in",
}


class MoodRating(StrEnum):
    """Self-reported mood attached to a check-in, worst to best."""

    TERRIBLE = "terrible"
    LOW = "low"
    NEUTRAL = "neutral"
    GOOD = "good"
    GREAT = "great"
    EXCELLENT = "excellent"


class StreakLevel(StrEnum):
    """Named tier for a run of consecutive active days."""

    BEGINNER = "beginner"
    DEVELOPING = "developing"
    CONSISTENT = "consistent"
    STRONG = "strong"
    CHAMPION = "champion"
    LEGENDARY = "legendary"

    @classmethod
    def from_streak(cls, streak: int) -> "StreakLevel":
        if streak <= 2:
            return cls.BEGINNER
        if streak <= 6:
            return cls.DEVELOPING
        if streak <= 20:
            return cls.CONSISTENT
        if streak <= 49:
            return cls.STRONG
        if streak <= 99:
            return cls.CHAMPION
        return cls.LEGENDARY
