"""
Catalog loader: JSON files → validated, immutable ``Catalog``.

Responsibilities
----------------
1. Read ``config/catalog/books.json`` (required), ``insights.json`` and
   ``challenges.json`` (both optional).
2. Validate every record through its pydantic model.
3. Reject structural problems the models cannot see on their own.

Validation rules
----------------
- Each file must be UTF-8 and contain a JSON array of objects.
- Duplicate book titles (case-insensitive) are rejected.
- Duplicate challenge titles within the same path are rejected.
- Any model validation error is reported with the record index.

Usage
-----
    from mentor_recs.catalog.loader import load_catalog

    catalog = load_catalog(
        books_path=Path("config/catalog/books.json"),
        insights_path=Path("config/catalog/insights.json"),
        challenges_path=Path("config/catalog/challenges.json"),
    )
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from mentor_recs.catalog.store import Catalog
from mentor_recs.config import AppConfig, resolve_path
from mentor_recs.models.book import BookTemplate
from mentor_recs.models.challenge import ChallengeTemplate
from mentor_recs.models.insight import PathInsight

log = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class CatalogError(ValueError):
    """Raised when a catalog file is malformed or fails validation."""


# ── Raw file reading ──────────────────────────────────────────────────────────

def _read_records(path: Path) -> list[dict[str, Any]]:
    """Read a JSON array of objects from ``path``."""
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except UnicodeDecodeError as exc:
        raise CatalogError(
            f"{path}: file is not valid UTF-8 ({exc.reason} at byte {exc.start})."
        ) from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"{path}: invalid JSON ({exc}).") from exc

    if not isinstance(payload, list):
        raise CatalogError(f"{path}: catalog file must contain a JSON array.")
    for i, rec in enumerate(payload):
        if not isinstance(rec, dict):
            raise CatalogError(f"{path}: record at index {i} is not an object.")
    return payload


def _parse_records(
    records: list[dict[str, Any]],
    model: type[_ModelT],
    source: str,
) -> list[_ModelT]:
    """Validate raw records, collecting every failure before raising."""
    parsed: list[_ModelT] = []
    errors: list[str] = []
    for i, rec in enumerate(records):
        try:
            parsed.append(model.model_validate(rec))
        except ValidationError as exc:
            errors.append(f"  {source} #{i}: {exc.error_count()} error(s): {exc.errors()[0]['msg']}")

    if errors:
        shown = errors[:5]
        if len(errors) > 5:
            shown.append(f"  ... and {len(errors) - 5} more.")
        raise CatalogError(
            f"{len(errors)} {source} record(s) failed validation:\n" + "\n".join(shown)
        )
    return parsed


# ── Validation ────────────────────────────────────────────────────────────────

def _validate_books(books: list[BookTemplate]) -> None:
    """Raise CatalogError on duplicate titles."""
    seen: set[str] = set()
    for i, book in enumerate(books):
        key = book.title.casefold()
        if key in seen:
            raise CatalogError(f"Duplicate book title '{book.title}' at index {i}.")
        seen.add(key)


def _validate_challenges(challenges: list[ChallengeTemplate]) -> None:
    """Raise CatalogError on duplicate (path, title) pairs."""
    seen: set[tuple[str, str]] = set()
    for i, ch in enumerate(challenges):
        key = (ch.path.value, ch.title.casefold())
        if key in seen:
            raise CatalogError(
                f"Duplicate challenge title '{ch.title}' for path '{ch.path}' at index {i}."
            )
        seen.add(key)


# ── Public API ────────────────────────────────────────────────────────────────

def load_books(path: Path) -> list[BookTemplate]:
    """Load and validate book templates.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        CatalogError: On malformed JSON, invalid records or duplicate titles.
    """
    if not path.exists():
        raise FileNotFoundError(f"Books catalog not found: {path}")
    books = _parse_records(_read_records(path), BookTemplate, "book")
    _validate_books(books)
    return books


def load_insights(path: Optional[Path]) -> list[PathInsight]:
    """Load path insights; a missing file yields an empty list."""
    if path is None or not path.exists():
        log.info("No insights file at %s; daily insights disabled.", path)
        return []
    return _parse_records(_read_records(path), PathInsight, "insight")


def load_challenges(path: Optional[Path]) -> list[ChallengeTemplate]:
    """Load challenge templates; a missing file yields an empty list."""
    if path is None or not path.exists():
        log.info("No challenges file at %s; challenge generation disabled.", path)
        return []
    challenges = _parse_records(_read_records(path), ChallengeTemplate, "challenge")
    _validate_challenges(challenges)
    return challenges


def load_catalog(
    books_path: Path,
    insights_path: Optional[Path] = None,
    challenges_path: Optional[Path] = None,
) -> Catalog:
    """Load all catalog files into an immutable ``Catalog``.

    Args:
        books_path:      Required books JSON file.
        insights_path:   Optional insights JSON file.
        challenges_path: Optional challenge templates JSON file.

    Returns:
        Validated ``Catalog``.

    Raises:
        FileNotFoundError: If ``books_path`` does not exist.
        CatalogError: If any file is malformed or fails validation.
    """
    books = load_books(books_path)
    insights = load_insights(insights_path)
    challenges = load_challenges(challenges_path)

    log.info(
        "Catalog loaded: %d books, %d insights, %d challenge templates",
        len(books), len(insights), len(challenges),
    )
    return Catalog(
        books=tuple(books),
        insights=tuple(insights),
        challenge_templates=tuple(challenges),
    )


def load_catalog_from_config(config: AppConfig) -> Catalog:
    """Load the catalog from the paths configured in ``config.catalog``."""
    return load_catalog(
        books_path=resolve_path(config.catalog.books_file),
        insights_path=resolve_path(config.catalog.insights_file),
        challenges_path=resolve_path(config.catalog.challenges_file),
    )
