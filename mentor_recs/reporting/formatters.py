"""
ASCII terminal formatters for CLI commands.

All formatters accept models returned by the engine or the challenge and
check-in generators, and return plain multi-line strings for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

import textwrap
from typing import Sequence

from mentor_recs.models.book import BookRecommendation
from mentor_recs.models.challenge import DailyChallenge
from mentor_recs.models.checkin import CheckInReply
from mentor_recs.models.insight import DailyBookInsight
from mentor_recs.taxonomy.path_taxonomy import CheckInTime, TrainingPath

_WRAP = 76


def _wrapped(label: str, text: str) -> list[str]:
    prefix = f"  {label} " if label else "  "
    indent = " " * len(prefix)
    return [textwrap.fill(text, width=_WRAP, initial_indent=prefix, subsequent_indent=indent)]


# ── Recommendation lists ──────────────────────────────────────────────────────


def format_recommendation_table(
    recs:  Sequence[BookRecommendation],
    title: str = "Recommendations",
) -> str:
    """Format a ranked list as an ASCII table.

        Rank  Title                           Author                Prio  Minutes
        -------------------------------------------------------------------------
           1  Atomic Habits                   James Clear              5      320

    A ``search_relevance_score`` column is added when any row carries one.
    """
    lines: list[str] = ["", f"=== {title} ==="]
    if not recs:
        lines.append("")
        lines.append("  (no books match)")
        return "\n".join(lines)

    with_relevance = any(r.search_relevance_score is not None for r in recs)
    header = f"  {'Rank':>4}  {'Title':<30}  {'Author':<20}  {'Prio':>4}  {'Minutes':>7}"
    if with_relevance:
        header += f"  {'Relevance':>9}"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, rec in enumerate(recs, start=1):
        row = (
            f"  {rank:>4}  {rec.title[:30]:<30}  {rec.author[:20]:<20}  "
            f"{rec.priority_level:>4}  {rec.estimated_reading_minutes:>7}"
        )
        if with_relevance:
            rel = rec.search_relevance_score
            row += f"  {rel:>9.2f}" if rel is not None else f"  {'':>9}"
        lines.append(row)

    reasons = [(i, r.recommendation_reason) for i, r in enumerate(recs, 1) if r.recommendation_reason]
    if reasons:
        lines.append("")
        for rank, reason in reasons:
            lines.extend(_wrapped(f"{rank}.", reason))
    return "\n".join(lines)


# ── Featured book / daily insight ─────────────────────────────────────────────


def format_featured_book(rec: BookRecommendation | None) -> str:
    if rec is None:
        return "\n=== Book of the Day ===\n\n  (no book available for this path)"

    lines = [
        "",
        "=== Book of the Day ===",
        f"  {rec.title} by {rec.author}",
        f"  Path: {rec.path.display_name}  |  Priority: {rec.priority_level}/5"
        f"  |  ~{rec.estimated_reading_minutes} min",
        "",
    ]
    lines.extend(_wrapped("Why:      ", rec.recommendation_reason))
    if rec.daily_insight:
        lines.extend(_wrapped("Insight:  ", rec.daily_insight))
    if rec.todays_challenge:
        lines.extend(_wrapped("Challenge:", rec.todays_challenge))
    return "\n".join(lines)


def format_daily_insight(insight: DailyBookInsight | None) -> str:
    if insight is None:
        return "\n=== Daily Insight ===\n\n  (no insight available for this path)"

    lines = [
        "",
        f"=== Daily Insight: {insight.category} ===",
        f"  From today's book: {insight.book_title}  (~{insight.reading_time_minutes} min read)",
        "",
    ]
    lines.extend(_wrapped("", insight.content))
    lines.append("")
    lines.extend(_wrapped("Action:   ", insight.action_item))
    lines.extend(_wrapped("Reflect:  ", insight.deep_dive))
    return "\n".join(lines)


# ── Challenges ────────────────────────────────────────────────────────────────


def format_challenge(challenge: DailyChallenge) -> str:
    tags = ", ".join(challenge.tags) if challenge.tags else "-"
    lines = [
        "",
        f"=== Today's Challenge ({challenge.challenge_date.isoformat()}) ===",
        f"  {challenge.title}",
        f"  {challenge.path.display_name} | {challenge.difficulty.value} | "
        f"{challenge.category.value} | ~{challenge.estimated_time_minutes} min",
        f"  Tags: {tags}",
        "",
    ]
    lines.extend(_wrapped("", challenge.description))
    return "\n".join(lines)


# ── Check-ins ─────────────────────────────────────────────────────────────────


def format_checkin_prompt(path: TrainingPath, time_of_day: CheckInTime, prompt: str) -> str:
    lines = ["", f"=== {time_of_day.display_name}: {path.display_name} ===", ""]
    lines.extend(_wrapped("", prompt))
    return "\n".join(lines)


def format_checkin_reply(reply: CheckInReply) -> str:
    lines = ["", "=== Mentor ==="]
    if reply.mood is not None:
        lines.append(f"  Mood: {reply.mood.value}")
    lines.extend(_wrapped("You:      ", reply.user_response))
    lines.extend(_wrapped("Mentor:   ", reply.reply))
    lines.extend(_wrapped("Next:     ", reply.follow_up))
    return "\n".join(lines)
