"""
Tests for mentor_recs/catalog/store.py.

What we test
------------
- books_for_path() includes secondary-path books and keeps catalog order.
- insights_for_path() / challenges_for_path() filter by path.
- book_challenges_for_path() returns active micro challenge titles only.
- find_book() is case-insensitive and returns None when missing.
- Catalog.empty() has no content; the catalog is immutable.
"""

from __future__ import annotations

import dataclasses

import pytest

from mentor_recs.catalog.store import Catalog
from mentor_recs.taxonomy.path_taxonomy import TrainingPath


class TestCatalogLookups:
    def test_books_for_path_keeps_order(self, sample_catalog):
        titles = [b.title for b in sample_catalog.books_for_path(TrainingPath.DISCIPLINE)]
        assert titles == ["Atomic Habits", "Can't Hurt Me", "The Compound Effect"]

    def test_books_for_path_includes_secondary(self, sample_catalog):
        titles = [b.title for b in sample_catalog.books_for_path(TrainingPath.CLARITY)]
        assert titles == ["Atomic Habits", "Mindset"]

    def test_books_for_unused_path_empty(self, sample_catalog):
        assert sample_catalog.books_for_path(TrainingPath.AUTHENTICITY) == []

    def test_insights_for_path(self, sample_catalog):
        assert len(sample_catalog.insights_for_path(TrainingPath.DISCIPLINE)) == 2
        assert sample_catalog.insights_for_path(TrainingPath.CLARITY) == []

    def test_book_challenges_are_active_micro_titles(self, sample_catalog):
        assert sample_catalog.book_challenges_for_path(TrainingPath.DISCIPLINE) == [
            "Make Your Bed",
            "Cold Shower Finish",
        ]

    def test_find_book_case_insensitive(self, sample_catalog):
        assert sample_catalog.find_book("mindset").title == "Mindset"

    def test_find_book_missing(self, sample_catalog):
        assert sample_catalog.find_book("Unknown") is None


class TestCatalogContainer:
    def test_empty(self):
        catalog = Catalog.empty()
        assert len(catalog) == 0
        assert catalog.books_for_path(TrainingPath.DISCIPLINE) == []

    def test_frozen(self, sample_catalog):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_catalog.books = ()

    def test_len_counts_books(self, sample_catalog):
        assert len(sample_catalog) == 4
