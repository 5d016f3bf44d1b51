"""
Tests for mentor_recs/catalog/loader.py.

What we test
------------
- A catalog written to disk loads back with the same books, insights and
  challenges, in file order.
- Missing books file → FileNotFoundError.
- Missing insights / challenges files → empty collections.
- Malformed JSON, undecodable bytes, non-array payload and non-object
  records → CatalogError.
- Invalid records are reported with their index; at most five are listed.
- Duplicate book titles (case-insensitive) → CatalogError.
- Duplicate challenge titles on the same path → CatalogError; the same
  title on different paths is allowed.
- The shipped config/catalog files load and cover every path.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mentor_recs.catalog.loader import CatalogError, load_catalog, load_catalog_from_config
from mentor_recs.config import AppConfig
from mentor_recs.taxonomy.path_taxonomy import TrainingPath


def _book_record(title: str, **overrides) -> dict:
    record = {
        "title": title,
        "author": "Author",
        "summary": "Summary",
        "key_insight": "Insight",
        "daily_action": "Action",
        "primary_path": "discipline",
        "base_score": 0.5,
    }
    record.update(overrides)
    return record


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestLoadCatalog:
    def test_round_trip_from_directory(self, catalog_dir, sample_catalog):
        catalog = load_catalog(
            catalog_dir / "books.json",
            catalog_dir / "insights.json",
            catalog_dir / "challenges.json",
        )
        assert [b.title for b in catalog.books] == [b.title for b in sample_catalog.books]
        assert len(catalog.insights) == len(sample_catalog.insights)
        assert len(catalog.challenge_templates) == len(sample_catalog.challenge_templates)

    def test_missing_books_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_catalog(tmp_path / "nope.json")

    def test_missing_optional_files_give_empty(self, tmp_path):
        books = _write(tmp_path / "books.json", [_book_record("Only Book")])
        catalog = load_catalog(books, tmp_path / "missing.json", tmp_path / "missing2.json")
        assert len(catalog) == 1
        assert catalog.insights == ()
        assert catalog.challenge_templates == ()

    def test_optional_paths_default_to_none(self, tmp_path):
        books = _write(tmp_path / "books.json", [_book_record("Only Book")])
        catalog = load_catalog(books)
        assert catalog.insights == ()


class TestMalformedFiles:
    def test_invalid_json(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="invalid JSON"):
            load_catalog(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "books.json"
        path.write_bytes(b'[{"title": "\xff\xfe bad"}]')
        with pytest.raises(CatalogError, match="not valid UTF-8"):
            load_catalog(path)

    def test_non_array_payload(self, tmp_path):
        path = _write(tmp_path / "books.json", {"title": "x"})
        with pytest.raises(CatalogError, match="JSON array"):
            load_catalog(path)

    def test_non_object_record(self, tmp_path):
        path = _write(tmp_path / "books.json", [_book_record("A"), "B"])
        with pytest.raises(CatalogError, match="index 1"):
            load_catalog(path)

    def test_invalid_record_reports_index(self, tmp_path):
        path = _write(
            tmp_path / "books.json",
            [_book_record("A"), _book_record("B", base_score=1.5)],
        )
        with pytest.raises(CatalogError, match="book #1"):
            load_catalog(path)

    def test_many_errors_are_truncated(self, tmp_path):
        records = [_book_record(f"Book {i}", base_score=2.0) for i in range(8)]
        path = _write(tmp_path / "books.json", records)
        with pytest.raises(CatalogError) as exc_info:
            load_catalog(path)
        message = str(exc_info.value)
        assert message.startswith("8 book record(s)")
        assert "... and 3 more." in message


class TestDuplicates:
    def test_duplicate_book_titles_case_insensitive(self, tmp_path):
        path = _write(
            tmp_path / "books.json",
            [_book_record("Atomic Habits"), _book_record("atomic habits")],
        )
        with pytest.raises(CatalogError, match="Duplicate book title"):
            load_catalog(path)

    def test_duplicate_challenge_on_same_path(self, tmp_path):
        books = _write(tmp_path / "books.json", [_book_record("A")])
        challenge = {
            "title": "Make Your Bed",
            "description": "Make it.",
            "path": "discipline",
            "difficulty": "micro",
        }
        challenges = _write(tmp_path / "challenges.json", [challenge, dict(challenge)])
        with pytest.raises(CatalogError, match="Duplicate challenge title"):
            load_catalog(books, challenges_path=challenges)

    def test_same_challenge_title_on_different_paths_ok(self, tmp_path):
        books = _write(tmp_path / "books.json", [_book_record("A")])
        first = {
            "title": "Journal",
            "description": "Write.",
            "path": "clarity",
            "difficulty": "micro",
        }
        second = dict(first, path="purpose")
        challenges = _write(tmp_path / "challenges.json", [first, second])
        catalog = load_catalog(books, challenges_path=challenges)
        assert len(catalog.challenge_templates) == 2


class TestShippedCatalog:
    def test_default_config_catalog_loads(self):
        catalog = load_catalog_from_config(AppConfig())
        assert len(catalog) > 0
        for path in TrainingPath:
            assert catalog.books_for_path(path), path
            assert catalog.insights_for_path(path), path
            assert catalog.book_challenges_for_path(path), path
