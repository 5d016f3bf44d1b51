"""
Recommendation ranker: scores catalog templates for a user context, sorts
them, and slices the top N.

Usage flow
----------
1. score_templates(templates, context, on_date, weights)
   -> list[ScoredTemplate]  (one per template, catalog order)

2. rank(scored)
   -> list[ScoredTemplate]  (score descending; ties keep catalog order)

3. top_n(ranked, n)
   -> list[ScoredTemplate]  (at most n; n <= 0 gives [])

Python's sort is stable, so sorting on ``-score`` alone is enough to keep
equal-scoring templates in the order the catalog lists them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable, Iterable

from mentor_recs.config import ScoringConfig
from mentor_recs.models.book import BookTemplate
from mentor_recs.models.context import UserContext
from mentor_recs.recommendations.scorer import ScoreComponents, compute_score


@dataclass
class ScoredTemplate:
    """Transient pairing of a catalog template with its score for one request.

    Attributes:
        template:   The catalog book.
        score:      Ranking score (meaning depends on the ranking mode).
        components: Score breakdown; only set by ``score_templates``.
    """

    template:   BookTemplate
    score:      float
    components: ScoreComponents | None = None


def score_templates(
    templates: Iterable[BookTemplate],
    context:   UserContext,
    on_date:   date,
    weights:   ScoringConfig | None = None,
) -> list[ScoredTemplate]:
    """Score every template against ``context`` with the main heuristic."""
    weights = weights or ScoringConfig()
    scored: list[ScoredTemplate] = []
    for template in templates:
        components = compute_score(template, context, on_date, weights)
        scored.append(
            ScoredTemplate(template=template, score=components.total, components=components)
        )
    return scored


def score_with(
    templates: Iterable[BookTemplate],
    scorer:    Callable[[BookTemplate], float],
) -> list[ScoredTemplate]:
    """Score every template with an arbitrary scoring function."""
    return [ScoredTemplate(template=t, score=scorer(t)) for t in templates]


def rank(scored: Iterable[ScoredTemplate]) -> list[ScoredTemplate]:
    """Sort by score descending; equal scores keep their input order."""
    return sorted(scored, key=lambda s: -s.score)


def top_n(ranked: list[ScoredTemplate], n: int) -> list[ScoredTemplate]:
    """Return the first ``n`` entries; ``n <= 0`` yields an empty list."""
    if n <= 0:
        return []
    return ranked[:n]
