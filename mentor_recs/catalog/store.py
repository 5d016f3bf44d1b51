"""
Immutable in-memory content catalog.

A ``Catalog`` is built once (by ``mentor_recs.catalog.loader``) and is
read-only for the lifetime of the process. All collections are tuples and
the dataclass is frozen, so the catalog can be shared freely between
concurrent callers.

Catalog order is meaningful: score ties are broken by it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mentor_recs.models.book import BookTemplate
from mentor_recs.models.challenge import ChallengeTemplate
from mentor_recs.models.insight import PathInsight
from mentor_recs.taxonomy.path_taxonomy import ChallengeDifficulty, TrainingPath


@dataclass(frozen=True)
class Catalog:
    """Books, path insights and challenge templates.

    Attributes:
        books:               Book templates in catalog order.
        insights:            Path insights in catalog order.
        challenge_templates: Daily challenge templates in catalog order.
    """

    books: tuple[BookTemplate, ...] = ()
    insights: tuple[PathInsight, ...] = ()
    challenge_templates: tuple[ChallengeTemplate, ...] = ()

    @classmethod
    def empty(cls) -> "Catalog":
        return cls()

    def books_for_path(self, path: TrainingPath) -> list[BookTemplate]:
        """Books whose primary or secondary paths include ``path``, in catalog order."""
        return [b for b in self.books if b.applies_to(path)]

    def insights_for_path(self, path: TrainingPath) -> list[PathInsight]:
        return [i for i in self.insights if i.path == path]

    def challenges_for_path(self, path: TrainingPath) -> list[ChallengeTemplate]:
        return [c for c in self.challenge_templates if c.path == path]

    def book_challenges_for_path(self, path: TrainingPath) -> list[str]:
        """Titles of the path's micro challenges, quick tasks to pair with a book."""
        return [
            c.title for c in self.challenges_for_path(path)
            if c.is_active and c.difficulty == ChallengeDifficulty.MICRO
        ]

    def find_book(self, title: str) -> Optional[BookTemplate]:
        """Look up a book by title (case-insensitive)."""
        folded = title.casefold()
        for book in self.books:
            if book.title.casefold() == folded:
                return book
        return None

    def __len__(self) -> int:
        return len(self.books)
