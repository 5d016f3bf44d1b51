"""
Daily challenge generation, validation and analytics.

Selection flow
--------------
1. Templates for (path, difficulty) that are active. Without an explicit
   difficulty the user's ``ChallengeStats.preferred_difficulty`` is used.
2. Drop titles the user did recently, unless that leaves fewer than
   ``MIN_FRESH_OPTIONS`` templates (then keep them all).
3. Score every remaining template with ``challenge_score``; equal scores
   go to the higher editorial ``priority``, then to catalog order.
4. 70 % of the time take the best; otherwise a random pick from the top 3.
5. Personalise the description for the time of day, season and weekday.

Challenge score (multiplicative, starts at 1.0)
------------------------------------------------
    × (0.5 + success rate)           if the category has a recorded rate
    × min(days since category / 7, 1)  default 7 days → no penalty
    × weekday preference             if one is recorded for today
    × 0.7                            after 19:00 for challenges > 15 min
"""

from __future__ import annotations

import logging
import random
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional, Sequence

from mentor_recs.catalog.store import Catalog
from mentor_recs.models.challenge import (
    ChallengeAnalytics,
    ChallengeStats,
    ChallengeTemplate,
    ChallengeValidationResult,
    DailyChallenge,
    StreakAnalysis,
)
from mentor_recs.taxonomy.path_taxonomy import (
    ChallengeCategory,
    ChallengeDifficulty,
    Season,
    TrainingPath,
    season_for_month,
)

logger = logging.getLogger(__name__)

MIN_FRESH_OPTIONS = 3
TOP_PICK_PROBABILITY = 0.7
VARIETY_WINDOW_DAYS = 7
EVENING_HOUR = 19
EVENING_PENALTY = 0.7
EVENING_LONG_MINUTES = 15


class NoChallengeAvailable(LookupError):
    """No active challenge template matches the requested path and difficulty."""


# ── Keyword tables for custom challenges ─────────────────────────────────────

_CATEGORY_KEYWORDS: list[tuple[ChallengeCategory, tuple[str, ...]]] = [
    (ChallengeCategory.PHYSICAL,  ("exercise", "workout", "run")),
    (ChallengeCategory.MENTAL,    ("meditate", "think", "focus")),
    (ChallengeCategory.SOCIAL,    ("talk", "call", "meet")),
    (ChallengeCategory.DIGITAL,   ("phone", "social media", "screen")),
    (ChallengeCategory.CREATIVE,  ("create", "write", "draw")),
    (ChallengeCategory.SPIRITUAL, ("nature", "gratitude", "values")),
]

_TAG_KEYWORDS: dict[str, tuple[str, ...]] = {
    "morning":     ("morning", "early"),
    "evening":     ("evening", "night"),
    "quick":       ("quick", "fast", "short"),
    "challenging": ("hard", "difficult", "challenging"),
    "outdoor":     ("outside", "outdoor", "nature"),
    "indoor":      ("inside", "indoor", "home"),
    "social":      ("friends", "family", "people", "social"),
    "solo":        ("alone", "solo", "personal", "individual"),
}

_PATH_CHALLENGE_CONTEXT: dict[TrainingPath, str] = {
    TrainingPath.DISCIPLINE:   "Focus on building consistency and willpower through this action.",
    TrainingPath.CLARITY:      "Use this practice to develop greater mental clarity and focus.",
    TrainingPath.CONFIDENCE:   "Step into this challenge to build your inner confidence and courage.",
    TrainingPath.PURPOSE:      "Engage with this activity to connect with your deeper sense of purpose.",
    TrainingPath.AUTHENTICITY: "Practice being true to yourself through this authentic expression.",
}


def infer_category(prompt: str) -> ChallengeCategory:
    """First category whose keywords appear in ``prompt``; ``general`` otherwise."""
    text = prompt.lower()
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(k in text for k in keywords):
            return category
    return ChallengeCategory.GENERAL


def extract_tags(prompt: str) -> tuple[str, ...]:
    text = prompt.lower()
    return tuple(
        tag for tag, keywords in _TAG_KEYWORDS.items()
        if any(k in text for k in keywords)
    )


# ── Scoring ───────────────────────────────────────────────────────────────────

def challenge_score(
    template: ChallengeTemplate,
    stats:    ChallengeStats,
    now:      datetime,
) -> float:
    """Preference score for ``template`` given the user's history at ``now``."""
    value = 1.0

    rate = stats.category_success_rates.get(template.category)
    if rate is not None:
        value *= 0.5 + rate

    days_since = stats.days_since_last_category.get(template.category, VARIETY_WINDOW_DAYS)
    value *= min(days_since / VARIETY_WINDOW_DAYS, 1.0)

    weekday_pref = stats.weekday_preferences.get(now.isoweekday())
    if weekday_pref is not None:
        value *= weekday_pref

    if now.hour >= EVENING_HOUR and template.estimated_time_minutes > EVENING_LONG_MINUTES:
        value *= EVENING_PENALTY

    return value


# ── Personalisation ───────────────────────────────────────────────────────────

def personalize_description(challenge: DailyChallenge, now: datetime) -> str:
    """Return ``challenge.description`` with time-of-day context appended."""
    text = challenge.description
    if now.hour < 12:
        text += _morning_context(challenge, now)
    if now.hour >= 18:
        text += _evening_context(challenge)
    return text


def _morning_context(challenge: DailyChallenge, now: datetime) -> str:
    parts: list[str] = []
    physical = challenge.category == ChallengeCategory.PHYSICAL

    season = season_for_month(now.month)
    if season == Season.WINTER and physical:
        parts.append(" Embrace the energy that comes from moving in colder weather.")
    elif season == Season.SUMMER and physical and challenge.estimated_time_minutes > 20:
        parts.append(" Stay hydrated and find shade when needed.")
    elif season in (Season.SPRING, Season.FALL) and physical:
        parts.append(" Take advantage of the perfect weather for outdoor activities.")

    weekend = now.isoweekday() >= 6
    if not weekend and challenge.estimated_time_minutes > 30:
        parts.append(" Perfect for your focused weekday routine.")
    elif weekend and challenge.category == ChallengeCategory.SOCIAL:
        parts.append(" Weekends are perfect for connecting with others.")

    if challenge.path == TrainingPath.DISCIPLINE and physical:
        parts.append(" Start your day with intention and energy.")
    elif challenge.path == TrainingPath.CLARITY and challenge.category == ChallengeCategory.MENTAL:
        parts.append(" Begin your day with clarity and focus.")

    return "".join(parts)


def _evening_context(challenge: DailyChallenge) -> str:
    if challenge.category == ChallengeCategory.PHYSICAL:
        return " Wind down your day with purposeful movement."
    if challenge.category == ChallengeCategory.MENTAL:
        return " Reflect on your day and prepare for tomorrow."
    return ""


# ── Generator ─────────────────────────────────────────────────────────────────

class ChallengeGenerator:
    """Builds daily challenges from a catalog's challenge templates.

    Args:
        catalog: Loaded content catalog.
        rng:     Random source for tie-breaking picks and option shuffles.
    """

    def __init__(self, catalog: Catalog, rng: random.Random | None = None) -> None:
        self.catalog = catalog
        self.rng = rng or random.Random()

    def generate_daily_challenge(
        self,
        path:          TrainingPath,
        difficulty:    Optional[ChallengeDifficulty] = None,
        now:           Optional[datetime] = None,
        recent_titles: Iterable[str] = (),
        stats:         Optional[ChallengeStats] = None,
    ) -> DailyChallenge:
        """Choose and personalise today's challenge.

        Raises:
            NoChallengeAvailable: If no active template matches.
        """
        now = now or datetime.now()
        stats = stats or ChallengeStats()
        difficulty = difficulty or stats.preferred_difficulty

        available = self._available_templates(path, difficulty, recent_titles)
        ranked = sorted(available, key=lambda t: (-challenge_score(t, stats, now), -t.priority))

        if len(ranked) == 1 or self.rng.random() < TOP_PICK_PROBABILITY:
            chosen = ranked[0]
        else:
            chosen = self.rng.choice(ranked[:3])

        logger.debug(
            "Daily challenge for %s: %r",
            path, chosen.title,
            extra={
                "operation":  "challenge",
                "path":       path.value,
                "difficulty": difficulty.value,
                "candidates": len(ranked),
                "chosen":     chosen.title,
            },
        )
        return self._create_challenge(chosen, now)

    def generate_challenge_options(
        self,
        path:          TrainingPath,
        difficulty:    Optional[ChallengeDifficulty] = None,
        count:         int = 3,
        now:           Optional[datetime] = None,
        recent_titles: Iterable[str] = (),
        stats:         Optional[ChallengeStats] = None,
    ) -> list[DailyChallenge]:
        """Up to ``count`` distinct challenges in random order.

        ``difficulty`` defaults to ``stats.preferred_difficulty``; ``[]`` when
        nothing matches.
        """
        if count <= 0:
            return []
        now = now or datetime.now()
        difficulty = difficulty or (stats or ChallengeStats()).preferred_difficulty
        try:
            available = self._available_templates(path, difficulty, recent_titles)
        except NoChallengeAvailable:
            return []
        picked = self.rng.sample(available, k=min(count, len(available)))
        return [self._create_challenge(t, now) for t in picked]

    def generate_custom_challenge(
        self,
        path:       TrainingPath,
        prompt:     str,
        difficulty: ChallengeDifficulty = ChallengeDifficulty.CUSTOM,
        now:        Optional[datetime] = None,
    ) -> DailyChallenge:
        """Turn a free-text prompt into a challenge for ``path``."""
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("Custom challenge prompt must not be blank.")
        now = now or datetime.now()

        template = ChallengeTemplate(
            title=f"Custom: {prompt[:30]}...",
            description=f"{prompt}. {_PATH_CHALLENGE_CONTEXT[path]}",
            path=path,
            difficulty=difficulty,
            category=infer_category(prompt),
            estimated_time_minutes=difficulty.estimated_minutes,
            tags=extract_tags(prompt),
        )
        return self._create_challenge(template, now)

    # ── internals ─────────────────────────────────────────────────────────────

    def _available_templates(
        self,
        path:          TrainingPath,
        difficulty:    ChallengeDifficulty,
        recent_titles: Iterable[str],
    ) -> list[ChallengeTemplate]:
        templates = [
            t for t in self.catalog.challenges_for_path(path)
            if t.difficulty == difficulty and t.is_active
        ]
        if not templates:
            raise NoChallengeAvailable(
                f"No active '{difficulty}' challenge templates for path '{path}'."
            )

        recent = {title.casefold() for title in recent_titles}
        fresh = [t for t in templates if t.title.casefold() not in recent]
        return fresh if len(fresh) >= MIN_FRESH_OPTIONS else templates

    @staticmethod
    def _create_challenge(template: ChallengeTemplate, now: datetime) -> DailyChallenge:
        challenge = DailyChallenge(
            title=template.title,
            description=template.description,
            path=template.path,
            difficulty=template.difficulty,
            challenge_date=now.date(),
            category=template.category,
            estimated_time_minutes=template.estimated_time_minutes,
            tags=template.tags,
        )
        challenge.description = personalize_description(challenge, now)
        return challenge


# ── Validation ────────────────────────────────────────────────────────────────

def validate_challenge(challenge: DailyChallenge) -> ChallengeValidationResult:
    """Check a challenge for blocking issues and soft suggestions."""
    issues: list[str] = []
    suggestions: list[str] = []

    if len(challenge.title) < 5:
        issues.append("Title is too short")
    elif len(challenge.title) > 100:
        issues.append("Title is too long")

    if len(challenge.description) < 20:
        issues.append("Description needs more detail")
    elif len(challenge.description) > 500:
        suggestions.append("Consider shortening the description")

    minutes = challenge.estimated_time_minutes
    if minutes < 1:
        issues.append("Time estimate is too low")
    elif minutes > 120:
        suggestions.append("Very long challenge - consider breaking it down")

    if minutes > challenge.difficulty.estimated_minutes * 2:
        suggestions.append(
            f"Time estimate seems high for {challenge.difficulty.value} difficulty"
        )

    return ChallengeValidationResult(
        is_valid=not issues,
        issues=tuple(issues),
        suggestions=tuple(suggestions),
    )


# ── Analytics ─────────────────────────────────────────────────────────────────

def analyze_challenge_performance(challenges: Sequence[DailyChallenge]) -> ChallengeAnalytics:
    """Summarise completion behaviour over ``challenges``."""
    total = len(challenges)
    completed = [c for c in challenges if c.is_completed]
    completion_rate = len(completed) / total if total else 0.0

    efforts = [c.effort_level for c in completed if c.effort_level is not None]
    average_effort = sum(efforts) / len(efforts) if efforts else 0.0

    return ChallengeAnalytics(
        completion_rate=completion_rate,
        average_effort=average_effort,
        preferred_categories=_completion_rates(challenges, key=lambda c: c.category),
        optimal_difficulty=_optimal_difficulty(challenges),
        streak_data=_streak_patterns(challenges),
    )


def _completion_rates(challenges: Sequence[DailyChallenge], key) -> dict:
    groups: dict = defaultdict(list)
    for c in challenges:
        groups[key(c)].append(c)
    return {
        k: sum(1 for c in members if c.is_completed) / len(members)
        for k, members in groups.items()
    }


def _optimal_difficulty(challenges: Sequence[DailyChallenge]) -> ChallengeDifficulty:
    """Difficulty with the highest completion rate; ``standard`` if none completed."""
    best_rate = 0.0
    best = ChallengeDifficulty.STANDARD
    for difficulty, rate in _completion_rates(challenges, key=lambda c: c.difficulty).items():
        if rate > best_rate:
            best_rate = rate
            best = difficulty
    return best


def _streak_patterns(challenges: Sequence[DailyChallenge]) -> StreakAnalysis:
    runs: list[int] = []
    current = 0
    for c in sorted(challenges, key=lambda c: c.challenge_date):
        if c.is_completed:
            current += 1
        elif current:
            runs.append(current)
            current = 0
    if current:
        runs.append(current)

    return StreakAnalysis(
        average_streak_length=sum(runs) / len(runs) if runs else 0.0,
        longest_streak=max(runs, default=0),
        total_streaks=len(runs),
    )
