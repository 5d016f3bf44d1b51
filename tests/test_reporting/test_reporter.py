"""Tests for mentor_recs.reporting.reporter."""

from __future__ import annotations

import csv
import json
from datetime import date
from pathlib import Path

import pytest

from mentor_recs.models.book import BookRecommendation
from mentor_recs.reporting.reporter import (
    SCHEMA_VERSION,
    write_recommendation_csv,
    write_recommendation_json,
)
from mentor_recs.taxonomy.path_taxonomy import TrainingPath

RUN_DATE = date(2025, 1, 15)


@pytest.fixture
def recs(sample_catalog) -> list[BookRecommendation]:
    first = sample_catalog.find_book("Atomic Habits").to_recommendation(TrainingPath.DISCIPLINE)
    second = sample_catalog.find_book("Can't Hurt Me").to_recommendation(TrainingPath.DISCIPLINE)
    return [
        first.model_copy(update={"priority_level": 5, "recommendation_reason": "Great start."}),
        second.model_copy(update={"priority_level": 4, "search_relevance_score": 0.123456}),
    ]


# ── CSV ───────────────────────────────────────────────────────────────────────


def test_csv_filename_and_rows(tmp_path: Path, recs) -> None:
    """File is named {kind}_{path}_{date}.csv and rows follow rank order."""
    out = write_recommendation_csv(recs, tmp_path, TrainingPath.DISCIPLINE, run_date=RUN_DATE)

    assert out == tmp_path / "recommendations_discipline_2025-01-15.csv"
    with out.open(encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert [r["rank"] for r in rows] == ["1", "2"]
    assert rows[0]["title"] == "Atomic Habits"
    assert rows[0]["tags"] == "habits|systems|beginner-friendly"
    assert rows[0]["search_relevance_score"] == ""
    assert rows[1]["search_relevance_score"] == "0.1235"
    assert rows[1]["genre"] == "biography"


def test_csv_creates_output_dir(tmp_path: Path, recs) -> None:
    out_dir = tmp_path / "nested" / "reports"
    out = write_recommendation_csv(
        recs, out_dir, TrainingPath.DISCIPLINE, run_date=RUN_DATE, kind="trending",
    )
    assert out.parent == out_dir
    assert out.name == "trending_discipline_2025-01-15.csv"


def test_csv_empty_list_writes_header_only(tmp_path: Path) -> None:
    out = write_recommendation_csv([], tmp_path, TrainingPath.PURPOSE, run_date=RUN_DATE)
    with out.open(encoding="utf-8") as f:
        lines = f.read().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("rank,title,author")


# ── JSON ──────────────────────────────────────────────────────────────────────


def test_json_payload(tmp_path: Path, recs) -> None:
    out = write_recommendation_json(recs, tmp_path, TrainingPath.DISCIPLINE, run_date=RUN_DATE)

    assert out.name == "recommendations_discipline_2025-01-15.json"
    payload = json.loads(out.read_text(encoding="utf-8"))
    assert payload["schema_version"] == SCHEMA_VERSION
    assert payload["kind"] == "recommendations"
    assert payload["path"] == "discipline"
    assert payload["generated_at"] == "2025-01-15"
    assert payload["count"] == 2
    first = payload["recommendations"][0]
    assert first["rank"] == 1
    assert first["title"] == "Atomic Habits"
    assert first["path"] == "discipline"
    assert first["user_rating"] == 0
    assert first["date_read"] is None


def test_json_kind_label(tmp_path: Path, recs) -> None:
    out = write_recommendation_json(
        recs, tmp_path, TrainingPath.CLARITY, run_date=RUN_DATE, kind="search",
    )
    assert out.name == "search_clarity_2025-01-15.json"
    assert json.loads(out.read_text(encoding="utf-8"))["kind"] == "search"
