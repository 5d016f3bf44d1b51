"""
Reading-profile analysis for personalized recommendations.

``analyze_reading_profile(read_books, saved_books)`` condenses a reader's
history into a ``ReadingProfile``:

    level            : < 3 books read → beginner, < 10 → intermediate,
                       otherwise advanced
    average_rating   : mean of the rated read books (unrated are skipped)
    preferred_genres : top-3 genres among read books (ties: first seen)
    reading_velocity : dated reads / max(1, whole months first→last read);
                       1.0 when no read book carries a date
    focus_areas      : up to five words longer than three letters that
                       occur more than once across titles and summaries
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Sequence

from mentor_recs.models.book import BookRecommendation
from mentor_recs.models.context import ReadingProfile
from mentor_recs.taxonomy.path_taxonomy import UserLevel
from mentor_recs.utils.time_utils import whole_months_between

_WORD_SPLIT = re.compile(r"[^\w]+")


def analyze_reading_profile(
    read_books:  Sequence[BookRecommendation],
    saved_books: Sequence[BookRecommendation] = (),
) -> ReadingProfile:
    """Build a ``ReadingProfile`` from finished and saved books."""
    total = len(read_books)
    if total < 3:
        level = UserLevel.BEGINNER
    elif total < 10:
        level = UserLevel.INTERMEDIATE
    else:
        level = UserLevel.ADVANCED

    ratings = [
        b.user_rating.numeric_value for b in read_books
        if b.user_rating.numeric_value is not None
    ]
    average_rating = sum(ratings) / len(ratings) if ratings else 0.0

    genre_counts = Counter(b.genre for b in read_books)
    preferred = tuple(g for g, _ in genre_counts.most_common(3))

    return ReadingProfile(
        level=level,
        average_rating=average_rating,
        preferred_genres=preferred,
        reading_velocity=reading_velocity(read_books),
        focus_areas=tuple(extract_focus_areas([*read_books, *saved_books])),
    )


def reading_velocity(books: Sequence[BookRecommendation]) -> float:
    """Books finished per month across the dated reads."""
    dates = sorted(b.date_read for b in books if b.date_read is not None)
    if not dates:
        return 1.0
    months = whole_months_between(dates[0], dates[-1])
    return len(dates) / max(1, months)


def extract_focus_areas(books: Sequence[BookRecommendation], limit: int = 5) -> list[str]:
    """Most frequent repeated words (> 3 letters) in titles and summaries."""
    text = " ".join(f"{b.title} {b.summary}" for b in books).lower()
    words = [w for w in _WORD_SPLIT.split(text) if len(w) > 3]
    counts = Counter(words)
    # most_common keeps first-seen order among equal counts
    return [w for w, n in counts.most_common() if n > 1][:limit]
