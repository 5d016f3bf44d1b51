"""
Recommendation report writer: CSV and JSON output for recommendation lists.

All functions are pure I/O. They consume in-memory ``BookRecommendation``
lists (already ranked by the engine) and write human-readable +
machine-readable files.

Output files
------------
  data/outputs/recommendations/
    {kind}_{path}_{date}.csv   -- one row per recommendation, rank order
    {kind}_{path}_{date}.json  -- same data, structured JSON

``kind`` is the ranking variant: ``recommendations``, ``trending``,
``search``, ``similar`` or ``personalized``.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

from mentor_recs.models.book import BookRecommendation
from mentor_recs.taxonomy.path_taxonomy import TrainingPath

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "v1.0.0"

_CSV_FIELDS = [
    "rank", "title", "author", "path", "genre", "priority_level",
    "estimated_reading_minutes", "search_relevance_score", "tags",
    "recommendation_reason",
]


def _report_stem(kind: str, path: TrainingPath, run_date: date) -> str:
    return f"{kind}_{path.value}_{run_date.isoformat()}"


def write_recommendation_csv(
    recs:       Sequence[BookRecommendation],
    output_dir: Path,
    path:       TrainingPath,
    run_date:   date | None = None,
    kind:       str = "recommendations",
) -> Path:
    """Write a ranked recommendation list to a CSV file.

    Columns: rank, title, author, path, genre, priority_level,
             estimated_reading_minutes, search_relevance_score, tags
             (``|``-joined), recommendation_reason.

    Args:
        recs:       Recommendations in rank order.
        output_dir: Directory to write the file (created if missing).
        path:       Focus area (used in filename).
        run_date:   Date label for the filename. Defaults to today.
        kind:       Ranking variant label (used in filename).

    Returns:
        Path to the written CSV file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"{_report_stem(kind, path, run_date)}.csv"

    with csv_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_FIELDS)
        writer.writeheader()
        for rank, rec in enumerate(recs, start=1):
            writer.writerow(
                {
                    "rank":                      rank,
                    "title":                     rec.title,
                    "author":                    rec.author,
                    "path":                      rec.path.value,
                    "genre":                     rec.genre.value,
                    "priority_level":            rec.priority_level,
                    "estimated_reading_minutes": rec.estimated_reading_minutes,
                    "search_relevance_score": (
                        round(rec.search_relevance_score, 4)
                        if rec.search_relevance_score is not None else ""
                    ),
                    "tags":                      "|".join(rec.tags),
                    "recommendation_reason":     rec.recommendation_reason,
                }
            )

    logger.info("Recommendation CSV written: %s (%d rows)", csv_path, len(recs))
    return csv_path


def write_recommendation_json(
    recs:       Sequence[BookRecommendation],
    output_dir: Path,
    path:       TrainingPath,
    run_date:   date | None = None,
    kind:       str = "recommendations",
) -> Path:
    """Write a ranked recommendation list to a structured JSON file.

    Args:
        recs:       Recommendations in rank order.
        output_dir: Target directory.
        path:       Focus area (filename + metadata).
        run_date:   Date label. Defaults to today.
        kind:       Ranking variant label.

    Returns:
        Path to the written JSON file.
    """
    if run_date is None:
        run_date = date.today()

    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"{_report_stem(kind, path, run_date)}.json"

    payload: dict = {
        "schema_version": SCHEMA_VERSION,
        "kind":           kind,
        "path":           path.value,
        "generated_at":   run_date.isoformat(),
        "count":          len(recs),
        "recommendations": [
            {"rank": rank, **rec.model_dump(mode="json")}
            for rank, rec in enumerate(recs, start=1)
        ],
    }

    with json_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, default=str)

    logger.info("Recommendation JSON written: %s", json_path)
    return json_path
