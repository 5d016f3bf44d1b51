"""
Mentor Recommender CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the content catalog.
  4. Execute the engine / generator call.
  5. Report the result to stdout; list commands also write JSON + CSV
     reports with --write-reports or --output-dir.

Install and run::

    pip install -e .
    mentor-recs --help
    mentor-recs validate-config
    mentor-recs validate-catalog
    mentor-recs recommend --path discipline --level intermediate --streak 12
    mentor-recs recommend --path discipline --write-reports
    mentor-recs personalized --path discipline --read "Atomic Habits" --goal focus
    mentor-recs book-of-the-day --path clarity
    mentor-recs search --path confidence --query habits
    mentor-recs challenge --path purpose --difficulty micro
    mentor-recs checkin --path clarity --time evening --response "..." --mood good
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer

from mentor_recs.taxonomy.path_taxonomy import (
    BookGenre,
    ChallengeDifficulty,
    CheckInTime,
    MoodRating,
    TrainingPath,
    UserLevel,
)

app = typer.Typer(
    name="mentor-recs",
    help="Personal mentor recommender: books, daily insights, challenges and check-ins.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from mentor_recs.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from mentor_recs.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_catalog_or_exit(config):
    """Load the content catalog, printing a friendly error and exiting on failure."""
    from mentor_recs.catalog.loader import CatalogError, load_catalog_from_config

    try:
        return load_catalog_from_config(config)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] Catalog file not found: {exc}", err=True)
        raise typer.Exit(code=1)
    except CatalogError as exc:
        typer.echo(f"[ERROR] Catalog validation failed:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _build_engine(config_path: Optional[str]):
    from mentor_recs.recommendations.engine import BookRecommender

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    catalog = _load_catalog_or_exit(config)
    return config, BookRecommender(catalog, config=config)


def _report_dir(config, write_reports: bool, output_dir: Optional[str]) -> Optional[Path]:
    """``--output-dir`` wins; ``--write-reports`` alone uses ``[output] output_dir``."""
    from mentor_recs.config import resolve_path

    if output_dir is not None:
        return Path(output_dir)
    if write_reports:
        return resolve_path(config.output.output_dir)
    return None


def _write_reports(recs, target: Optional[Path], path: TrainingPath, run_date, kind: str) -> None:
    """Write JSON + CSV reports for ``recs`` when a target directory is set."""
    if target is None:
        return
    from mentor_recs.reporting.reporter import (
        write_recommendation_csv,
        write_recommendation_json,
    )

    json_path = write_recommendation_json(recs, target, path, run_date, kind=kind)
    csv_path = write_recommendation_csv(recs, target, path, run_date, kind=kind)
    typer.echo("")
    typer.echo(f"  JSON: {json_path}")
    typer.echo(f"  CSV:  {csv_path}")


def _catalog_books_or_exit(engine, titles: List[str], path: TrainingPath, **flags):
    """Look up catalog books by title and project them onto ``path``."""
    books = []
    for title in titles:
        template = engine.catalog.find_book(title)
        if template is None:
            typer.echo(f"[ERROR] No book titled '{title}' in the catalog.", err=True)
            raise typer.Exit(code=1)
        books.append(template.to_recommendation(path).model_copy(update=flags))
    return books


_CONFIG_OPTION_HELP = "Path to TOML config file (default: config/default.toml)."
_WRITE_REPORTS_HELP = "Also write JSON + CSV reports to [output] output_dir."
_OUTPUT_DIR_HELP = "Write JSON + CSV reports to this directory instead (implies --write-reports)."


# ── Config / catalog ──────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Books file:        {config.catalog.books_file}")
    typer.echo(f"  Insights file:     {config.catalog.insights_file}")
    typer.echo(f"  Challenges file:   {config.catalog.challenges_file}")
    typer.echo(f"  Default count:     {config.ranking.default_count}")
    typer.echo(f"  Output dir:        {config.output.output_dir}")
    typer.echo(f"  Log level:         {config.logging.level}")
    typer.echo(f"  Debug mode:        {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("validate-catalog")
def validate_catalog(
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Load and validate the content catalog; print per-path counts."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    catalog = _load_catalog_or_exit(config)

    typer.echo("Catalog validated successfully.")
    typer.echo("")
    typer.echo(f"  {'Path':<14}  {'Books':>5}  {'Insights':>8}  {'Challenges':>10}")
    for path in TrainingPath:
        typer.echo(
            f"  {path.value:<14}  {len(catalog.books_for_path(path)):>5}  "
            f"{len(catalog.insights_for_path(path)):>8}  "
            f"{len(catalog.challenges_for_path(path)):>10}"
        )
    typer.echo("")
    typer.echo(
        f"  Totals: {len(catalog.books)} books, {len(catalog.insights)} insights, "
        f"{len(catalog.challenge_templates)} challenge templates."
    )
    typer.echo("[OK] Catalog valid.")


# ── Recommendations ───────────────────────────────────────────────────────────

@app.command("recommend")
def recommend(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    level: UserLevel = typer.Option(UserLevel.BEGINNER, "--level", help="Reader level."),
    streak: int = typer.Option(0, "--streak", min=0, help="Current streak in days."),
    tags: Optional[List[str]] = typer.Option(
        None,
        "--tag",
        help="Tag of a recently completed challenge. Repeatable.",
    ),
    count: Optional[int] = typer.Option(
        None, "--count", help="Number of books (default: config ranking.default_count)."
    ),
    write_reports: bool = typer.Option(False, "--write-reports", help=_WRITE_REPORTS_HELP),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help=_OUTPUT_DIR_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Rank books for a focus area and explain each pick."""
    from mentor_recs.reporting.formatters import format_recommendation_table

    config, engine = _build_engine(config_path)
    recs = engine.generate_recommendations(
        path, level=level, streak=streak, recent_tags=tags or (), count=count
    )
    typer.echo(format_recommendation_table(recs, title=f"Recommendations: {path.display_name}"))
    _write_reports(
        recs, _report_dir(config, write_reports, output_dir), path, engine.clock(),
        kind="recommendations",
    )


@app.command("book-of-the-day")
def book_of_the_day(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    level: UserLevel = typer.Option(UserLevel.BEGINNER, "--level", help="Reader level."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Show today's featured book with its insight and challenge."""
    from mentor_recs.reporting.formatters import format_featured_book

    _, engine = _build_engine(config_path)
    typer.echo(format_featured_book(engine.get_featured_item(path, level)))


@app.command("daily-insight")
def daily_insight(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    level: UserLevel = typer.Option(UserLevel.BEGINNER, "--level", help="Reader level."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Show the path insight of the day alongside the featured book."""
    from mentor_recs.reporting.formatters import format_daily_insight

    _, engine = _build_engine(config_path)
    typer.echo(format_daily_insight(engine.daily_book_insight(path, level)))


@app.command("search")
def search(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    query: str = typer.Option("", "--query", "-q", help="Text to match; blank matches all."),
    level: UserLevel = typer.Option(UserLevel.BEGINNER, "--level", help="Reader level."),
    genre: Optional[BookGenre] = typer.Option(None, "--genre", help="Only this genre."),
    only_level: bool = typer.Option(
        False, "--only-level", help="Only books recommended for --level."
    ),
    max_minutes: Optional[int] = typer.Option(
        None, "--max-minutes", min=1, help="Maximum estimated reading time."
    ),
    write_reports: bool = typer.Option(False, "--write-reports", help=_WRITE_REPORTS_HELP),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help=_OUTPUT_DIR_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Search books for a focus area, most relevant first."""
    from mentor_recs.models.book import BookFilters
    from mentor_recs.reporting.formatters import format_recommendation_table

    config, engine = _build_engine(config_path)
    filters = BookFilters(
        genre=genre,
        level=level if only_level else None,
        max_reading_minutes=max_minutes,
    )
    recs = engine.search(path, query, level=level, filters=filters)
    typer.echo(format_recommendation_table(recs, title=f"Search: {query!r}"))
    _write_reports(
        recs, _report_dir(config, write_reports, output_dir), path, engine.clock(), kind="search",
    )


@app.command("similar")
def similar(
    title: str = typer.Option(..., "--title", help="Title of a catalog book."),
    path: Optional[TrainingPath] = typer.Option(
        None, "--path", help="Focus area to project onto (default: the book's primary path)."
    ),
    count: Optional[int] = typer.Option(None, "--count", help="Number of books."),
    write_reports: bool = typer.Option(False, "--write-reports", help=_WRITE_REPORTS_HELP),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help=_OUTPUT_DIR_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Books similar to a given catalog book."""
    from mentor_recs.reporting.formatters import format_recommendation_table

    config, engine = _build_engine(config_path)
    template = engine.catalog.find_book(title)
    if template is None:
        typer.echo(f"[ERROR] No book titled '{title}' in the catalog.", err=True)
        raise typer.Exit(code=1)

    reference = template.to_recommendation(path or template.primary_path)
    recs = engine.get_similar(reference, count=count)
    typer.echo(format_recommendation_table(recs, title=f"Similar to {template.title}"))
    _write_reports(
        recs, _report_dir(config, write_reports, output_dir), reference.path, engine.clock(),
        kind="similar",
    )


@app.command("trending")
def trending(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    count: Optional[int] = typer.Option(None, "--count", help="Number of books."),
    write_reports: bool = typer.Option(False, "--write-reports", help=_WRITE_REPORTS_HELP),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help=_OUTPUT_DIR_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Popular and in-season books for a focus area."""
    from mentor_recs.reporting.formatters import format_recommendation_table

    config, engine = _build_engine(config_path)
    recs = engine.get_trending(path, count=count)
    typer.echo(format_recommendation_table(recs, title=f"Trending: {path.display_name}"))
    _write_reports(
        recs, _report_dir(config, write_reports, output_dir), path, engine.clock(),
        kind="trending",
    )


@app.command("personalized")
def personalized(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    read: Optional[List[str]] = typer.Option(
        None, "--read", help="Title of a catalog book you have read. Repeatable."
    ),
    saved: Optional[List[str]] = typer.Option(
        None, "--saved", help="Title of a catalog book you have saved. Repeatable."
    ),
    goals: Optional[List[str]] = typer.Option(
        None, "--goal", help="A personal goal keyword, e.g. 'habits'. Repeatable."
    ),
    count: Optional[int] = typer.Option(None, "--count", help="Number of books."),
    write_reports: bool = typer.Option(False, "--write-reports", help=_WRITE_REPORTS_HELP),
    output_dir: Optional[str] = typer.Option(None, "--output-dir", help=_OUTPUT_DIR_HELP),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Books fitted to your reading history and goals."""
    from mentor_recs.reporting.formatters import format_recommendation_table

    config, engine = _build_engine(config_path)
    read_books = _catalog_books_or_exit(engine, read or [], path, is_read=True)
    saved_books = _catalog_books_or_exit(engine, saved or [], path, is_saved=True)

    recs = engine.get_personalized(
        path, read_books, saved_books, goals=goals or (), count=count
    )
    typer.echo(format_recommendation_table(recs, title=f"For You: {path.display_name}"))
    _write_reports(
        recs, _report_dir(config, write_reports, output_dir), path, engine.clock(),
        kind="personalized",
    )


# ── Challenges ────────────────────────────────────────────────────────────────

@app.command("challenge")
def challenge(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    difficulty: ChallengeDifficulty = typer.Option(
        ChallengeDifficulty.STANDARD, "--difficulty", help="Challenge tier."
    ),
    recent: Optional[List[str]] = typer.Option(
        None, "--recent", help="Title of a recently done challenge. Repeatable."
    ),
    custom: Optional[str] = typer.Option(
        None, "--custom", help="Build a custom challenge from this prompt instead."
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Generate today's challenge for a focus area."""
    from mentor_recs.challenges.generator import (
        ChallengeGenerator,
        NoChallengeAvailable,
        validate_challenge,
    )
    from mentor_recs.reporting.formatters import format_challenge

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    generator = ChallengeGenerator(_load_catalog_or_exit(config))

    try:
        if custom is not None:
            result = generator.generate_custom_challenge(path, custom)
        else:
            result = generator.generate_daily_challenge(
                path, difficulty, recent_titles=recent or ()
            )
    except (NoChallengeAvailable, ValueError) as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_challenge(result))

    check = validate_challenge(result)
    for issue in check.issues:
        typer.echo(f"  [WARN] {issue}")
    for suggestion in check.suggestions:
        typer.echo(f"  [HINT] {suggestion}")


# ── Check-ins ─────────────────────────────────────────────────────────────────

@app.command("checkin")
def checkin(
    path: TrainingPath = typer.Option(..., "--path", help="Focus area."),
    time_of_day: CheckInTime = typer.Option(
        CheckInTime.MORNING, "--time", help="When the check-in happens."
    ),
    response: Optional[str] = typer.Option(
        None, "--response", help="Your answer; prints the mentor's reply and a follow-up."
    ),
    mood: Optional[MoodRating] = typer.Option(None, "--mood", help="How you feel right now."),
    config_path: Optional[str] = typer.Option(None, "--config", help=_CONFIG_OPTION_HELP),
) -> None:
    """Print a journaling prompt, or reply to your check-in answer."""
    import random

    from mentor_recs.checkins.generator import checkin_prompt, reply_to_checkin
    from mentor_recs.reporting.formatters import format_checkin_prompt, format_checkin_reply

    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    rng = random.Random()

    typer.echo(format_checkin_prompt(path, time_of_day, checkin_prompt(rng, path, time_of_day)))
    if response is None:
        return

    try:
        reply = reply_to_checkin(rng, path, time_of_day, response, mood=mood)
    except ValueError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_checkin_reply(reply))


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
