"""
Shared pytest fixtures for the mentor recommender test suite.

Provides:
  - ``make_book``: factory for valid ``BookTemplate`` objects with overrides.
  - ``make_challenge_template``: factory for ``ChallengeTemplate`` objects.
  - ``scenario_catalog``: the two-book catalog used by the ranking scenarios.
  - ``sample_catalog``: a small multi-path catalog with insights and challenges.
  - ``fixed_date`` / ``summer_date``: dates with a known season.
  - ``stub_rng``: a deterministic random source that always picks the first
    option, so explanation text is predictable.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Callable

import pytest

from mentor_recs.catalog.store import Catalog
from mentor_recs.models.book import BookTemplate
from mentor_recs.models.challenge import ChallengeTemplate
from mentor_recs.models.insight import PathInsight
from mentor_recs.taxonomy.path_taxonomy import (
    ChallengeCategory,
    ChallengeDifficulty,
    InsightDepth,
    TrainingPath,
)


# ── Deterministic random source ───────────────────────────────────────────────

class FirstChoiceRandom:
    """Random-source stand-in: always the first option, always 0.0."""

    def __init__(self, value: float = 0.0) -> None:
        self.value = value
        self.choices = 0

    def choice(self, seq):
        self.choices += 1
        return seq[0]

    def random(self) -> float:
        return self.value

    def sample(self, population, k):
        return list(population)[:k]


@pytest.fixture
def stub_rng() -> FirstChoiceRandom:
    return FirstChoiceRandom()


@pytest.fixture
def stub_rng_factory() -> Callable[..., FirstChoiceRandom]:
    """Build a ``FirstChoiceRandom`` whose ``random()`` returns ``value``."""
    return FirstChoiceRandom


# ── Dates ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def fixed_date() -> date:
    """A winter date (January 15)."""
    return date(2025, 1, 15)


@pytest.fixture
def summer_date() -> date:
    return date(2025, 7, 4)


# ── Factories ─────────────────────────────────────────────────────────────────

def _book_kwargs(**overrides: Any) -> dict[str, Any]:
    kwargs: dict[str, Any] = dict(
        title="Sample Book",
        author="Sample Author",
        summary="A sample summary about building habits.",
        key_insight="Small steps compound.",
        daily_action="Take one small step today.",
        primary_path=TrainingPath.DISCIPLINE,
        base_score=0.5,
    )
    kwargs.update(overrides)
    return kwargs


@pytest.fixture
def make_book() -> Callable[..., BookTemplate]:
    """Return a factory: ``make_book(title="X", base_score=0.9, ...)``."""
    def _make(**overrides: Any) -> BookTemplate:
        return BookTemplate(**_book_kwargs(**overrides))
    return _make


@pytest.fixture
def make_challenge_template() -> Callable[..., ChallengeTemplate]:
    def _make(**overrides: Any) -> ChallengeTemplate:
        kwargs: dict[str, Any] = dict(
            title="Sample Challenge",
            description="Do the sample challenge with full attention today.",
            path=TrainingPath.DISCIPLINE,
            difficulty=ChallengeDifficulty.STANDARD,
            category=ChallengeCategory.GENERAL,
            estimated_time_minutes=10,
        )
        kwargs.update(overrides)
        return ChallengeTemplate(**kwargs)
    return _make


# ── Catalogs ──────────────────────────────────────────────────────────────────

@pytest.fixture
def scenario_catalog(make_book) -> Catalog:
    """Beginner-friendly book first, advanced book second, both on discipline."""
    return Catalog(
        books=(
            make_book(
                title="Beginner Book",
                base_score=0.9,
                recommended_level="beginner",
                tags=["beginner-friendly"],
            ),
            make_book(
                title="Advanced Book",
                base_score=0.85,
                recommended_level="intermediate",
                tags=["advanced"],
            ),
        )
    )


@pytest.fixture
def sample_catalog(make_book, make_challenge_template) -> Catalog:
    books = (
        make_book(
            title="Atomic Habits",
            author="James Clear",
            summary="Tiny changes in habits deliver remarkable results.",
            primary_path="discipline",
            secondary_paths=["clarity"],
            recommended_level="beginner",
            genre="self_help",
            tags=["habits", "systems", "beginner-friendly"],
            base_score=0.9,
            trending_score=0.95,
            seasonal_relevance=["winter"],
            estimated_reading_minutes=320,
        ),
        make_book(
            title="Can't Hurt Me",
            author="David Goggins",
            summary="Mastering your mind through mental toughness.",
            primary_path="discipline",
            secondary_paths=["confidence"],
            recommended_level="intermediate",
            genre="biography",
            tags=["mental toughness", "advanced"],
            base_score=0.85,
            trending_score=0.8,
            seasonal_relevance=["fall"],
            estimated_reading_minutes=420,
        ),
        make_book(
            title="The Compound Effect",
            author="Darren Hardy",
            summary="Small choices and consistency compound over time.",
            primary_path="discipline",
            recommended_level="beginner",
            genre="self_help",
            tags=["habits", "consistency"],
            base_score=0.75,
            trending_score=0.5,
            seasonal_relevance=["summer"],
            estimated_reading_minutes=240,
        ),
        make_book(
            title="Mindset",
            author="Carol Dweck",
            summary="Growth and fixed mindsets shape achievement.",
            primary_path="clarity",
            recommended_level="beginner",
            genre="psychology",
            tags=["growth", "learning"],
            base_score=0.86,
            trending_score=0.4,
            estimated_reading_minutes=300,
        ),
    )
    insights = (
        PathInsight(
            path=TrainingPath.DISCIPLINE,
            content="Discipline is showing up consistently.",
            action_item="Do one small action every day this week.",
            category="Consistency",
        ),
        PathInsight(
            path=TrainingPath.DISCIPLINE,
            content="Small daily habits compound.",
            action_item="Add a 2-minute habit to your morning.",
            category="Habits",
            depth=InsightDepth.SURFACE,
        ),
    )
    challenges = (
        make_challenge_template(
            title="Make Your Bed",
            difficulty=ChallengeDifficulty.MICRO,
            estimated_time_minutes=3,
        ),
        make_challenge_template(
            title="Cold Shower Finish",
            difficulty=ChallengeDifficulty.MICRO,
            category=ChallengeCategory.PHYSICAL,
            estimated_time_minutes=1,
        ),
        make_challenge_template(
            title="20-Minute Walk",
            category=ChallengeCategory.PHYSICAL,
            estimated_time_minutes=20,
        ),
        make_challenge_template(
            title="Most Important Task First",
            category=ChallengeCategory.MENTAL,
            estimated_time_minutes=45,
        ),
        make_challenge_template(
            title="No Social Media Until Noon",
            category=ChallengeCategory.DIGITAL,
            estimated_time_minutes=15,
        ),
        make_challenge_template(
            title="Retired Challenge",
            is_active=False,
        ),
    )
    return Catalog(books=books, insights=insights, challenge_templates=challenges)


# ── Catalog files ─────────────────────────────────────────────────────────────

@pytest.fixture
def catalog_dir(tmp_path: Path, sample_catalog: Catalog) -> Path:
    """Write ``sample_catalog`` to books/insights/challenges.json under tmp_path."""
    directory = tmp_path / "catalog"
    directory.mkdir()
    for name, records in (
        ("books.json", sample_catalog.books),
        ("insights.json", sample_catalog.insights),
        ("challenges.json", sample_catalog.challenge_templates),
    ):
        payload = [r.model_dump(mode="json") for r in records]
        (directory / name).write_text(json.dumps(payload), encoding="utf-8")
    return directory
