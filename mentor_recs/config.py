"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local env overrides (gitignored)
  4. Environment variables        — ``MENTOR_RECS_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

The engine, the challenge generator and every CLI command receive an
``AppConfig`` instance, never raw dicts or scattered env var lookups.
Scoring weights are hand-tuned constants; they live here as fixed
configuration so they can be inspected and overridden without code changes.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

# ── Sub-config models ─────────────────────────────────────────────────────────


class CatalogConfig(BaseModel):
    """Locations of the static catalog files (relative to the project root)."""

    model_config = ConfigDict(frozen=True)

    books_file: str = "config/catalog/books.json"
    insights_file: str = "config/catalog/insights.json"
    challenges_file: str = "config/catalog/challenges.json"


class ScoringConfig(BaseModel):
    """Additive bonuses applied on top of a book's base score."""

    model_config = ConfigDict(frozen=True)

    level_exact: float = 0.3
    level_adjacent: float = 0.1
    streak_bonus: float = 0.2
    streak_high: int = 30          # streak above this favours "advanced" books
    streak_low: int = 7            # streak below this favours "beginner-friendly"
    challenge_match: float = 0.15  # per matching recent-challenge tag
    seasonal: float = 0.1

    @model_validator(mode="after")
    def validate_bonuses(self) -> "ScoringConfig":
        for name in ("level_exact", "level_adjacent", "streak_bonus",
                     "challenge_match", "seasonal"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}.")
        if self.streak_low > self.streak_high:
            raise ValueError(
                f"streak_low ({self.streak_low}) must be <= streak_high ({self.streak_high})."
            )
        return self


class RankingConfig(BaseModel):
    """Result sizes and thresholds for the ranking variants."""

    model_config = ConfigDict(frozen=True)

    default_count: int = 3
    similar_count: int = 3
    trending_count: int = 5
    personalized_count: int = 5
    similarity_threshold: float = 0.3
    trending_threshold: float = 0.7
    compatibility_weight: float = 0.4
    novelty_weight: float = 0.3
    goal_alignment_weight: float = 0.3

    @field_validator("similarity_threshold", "trending_threshold")
    @classmethod
    def validate_threshold(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"thresholds must be in [0.0, 1.0], got {v}.")
        return v


class OutputConfig(BaseModel):
    """Where report files are written."""

    model_config = ConfigDict(frozen=True)

    output_dir: str = "data/outputs/recommendations"


class LoggingConfig(BaseModel):
    """Logging output settings."""

    model_config = ConfigDict(frozen=True)

    level: str = "INFO"
    log_file: str = ""
    json_format: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"Log level must be one of {sorted(valid)}, got '{v}'.")
        return v.upper()


class AppConfig(BaseModel):
    """Complete application configuration.

    Constructed by ``load_config()`` which merges TOML + .env + env vars.
    ``AppConfig()`` with no arguments gives the built-in defaults, which is
    what library callers get when they do not pass a config.
    """

    model_config = ConfigDict(frozen=True)

    catalog: CatalogConfig = CatalogConfig()
    scoring: ScoringConfig = ScoringConfig()
    ranking: RankingConfig = RankingConfig()
    output: OutputConfig = OutputConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


def resolve_path(raw_path: str) -> Path:
    """Resolve a config path; relative paths are anchored at the project root."""
    path = Path(raw_path)
    if path.is_absolute():
        return path
    return find_project_root() / path


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load and merge application configuration.

    Args:
        config_path: Explicit path to a TOML config file. Defaults to
            ``<project_root>/config/default.toml``.

    Returns:
        Fully validated ``AppConfig`` instance.

    Raises:
        FileNotFoundError: If the specified ``config_path`` does not exist.
        pydantic.ValidationError: If merged config values fail validation.
    """
    root = find_project_root()

    # 1. Load .env file (silently skip if missing)
    dotenv_path = root / ".env"
    load_dotenv(dotenv_path=dotenv_path, override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config explicitly."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists() and local_config_path != config_path:
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply MENTOR_RECS_* environment variable overrides
    raw = _apply_env_overrides(raw)

    # 4. Build and validate AppConfig
    return _build_app_config(raw)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge ``override`` into ``base``."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    """Apply MENTOR_RECS_* env vars to the raw config dict.

    Supported overrides:
      MENTOR_RECS_CATALOG_DIR  → directory holding books/insights/challenges.json
      MENTOR_RECS_OUTPUT_DIR   → raw["output"]["output_dir"]
      MENTOR_RECS_LOG_LEVEL    → raw["logging"]["level"]
      MENTOR_RECS_DEBUG        → raw["debug"]
    """
    if catalog_dir := os.environ.get("MENTOR_RECS_CATALOG_DIR"):
        catalog = raw.setdefault("catalog", {})
        catalog["books_file"] = str(Path(catalog_dir) / "books.json")
        catalog["insights_file"] = str(Path(catalog_dir) / "insights.json")
        catalog["challenges_file"] = str(Path(catalog_dir) / "challenges.json")

    if output_dir := os.environ.get("MENTOR_RECS_OUTPUT_DIR"):
        raw.setdefault("output", {})["output_dir"] = output_dir

    if log_level := os.environ.get("MENTOR_RECS_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("MENTOR_RECS_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    # Flatten top-level keys that may be nested under [project]
    project = raw.pop("project", {})

    return AppConfig(
        catalog=CatalogConfig(**raw.get("catalog", {})),
        scoring=ScoringConfig(**raw.get("scoring", {})),
        ranking=RankingConfig(**raw.get("ranking", {})),
        output=OutputConfig(**raw.get("output", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
