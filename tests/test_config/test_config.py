"""
Tests for mentor_recs/config.py.

What we test
------------
- AppConfig() defaults match the documented scoring constants.
- load_config() reads an explicit TOML file; missing file → FileNotFoundError.
- local.toml beside the config file is deep-merged over it.
- MENTOR_RECS_* environment variables override TOML values.
- Invalid values (negative bonus, bad log level, threshold > 1) are rejected.
- resolve_path() anchors relative paths at the project root.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from mentor_recs.config import (
    AppConfig,
    LoggingConfig,
    RankingConfig,
    ScoringConfig,
    find_project_root,
    load_config,
    resolve_path,
)


@pytest.fixture(autouse=True)
def _clear_env(monkeypatch):
    for name in (
        "MENTOR_RECS_CATALOG_DIR",
        "MENTOR_RECS_OUTPUT_DIR",
        "MENTOR_RECS_LOG_LEVEL",
        "MENTOR_RECS_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)


def _write_toml(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


class TestDefaults:
    def test_scoring_defaults(self):
        scoring = AppConfig().scoring
        assert scoring.level_exact == pytest.approx(0.3)
        assert scoring.level_adjacent == pytest.approx(0.1)
        assert scoring.streak_bonus == pytest.approx(0.2)
        assert scoring.streak_high == 30
        assert scoring.streak_low == 7
        assert scoring.challenge_match == pytest.approx(0.15)
        assert scoring.seasonal == pytest.approx(0.1)

    def test_ranking_defaults(self):
        ranking = AppConfig().ranking
        assert ranking.default_count == 3
        assert ranking.similarity_threshold == pytest.approx(0.3)
        assert ranking.trending_threshold == pytest.approx(0.7)

    def test_shipped_default_toml_loads(self):
        config = load_config()
        assert config.scoring == ScoringConfig()
        assert config.ranking == RankingConfig()


class TestLoadConfig:
    def test_explicit_file(self, tmp_path):
        path = _write_toml(
            tmp_path / "custom.toml",
            "[ranking]\ndefault_count = 7\n\n[logging]\nlevel = \"debug\"\n",
        )
        config = load_config(path)
        assert config.ranking.default_count == 7
        assert config.logging.level == "DEBUG"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_local_toml_is_merged(self, tmp_path):
        path = _write_toml(
            tmp_path / "custom.toml",
            "[ranking]\ndefault_count = 7\ntrending_count = 4\n",
        )
        _write_toml(tmp_path / "local.toml", "[ranking]\ndefault_count = 2\n")
        config = load_config(path)
        assert config.ranking.default_count == 2
        assert config.ranking.trending_count == 4

    def test_project_debug_flag(self, tmp_path):
        path = _write_toml(tmp_path / "custom.toml", "[project]\ndebug = true\n")
        assert load_config(path).debug is True


class TestEnvOverrides:
    def test_catalog_dir(self, tmp_path, monkeypatch):
        path = _write_toml(tmp_path / "custom.toml", "")
        monkeypatch.setenv("MENTOR_RECS_CATALOG_DIR", str(tmp_path / "cat"))
        config = load_config(path)
        assert config.catalog.books_file == str(tmp_path / "cat" / "books.json")
        assert config.catalog.challenges_file == str(tmp_path / "cat" / "challenges.json")

    def test_output_dir_and_log_level(self, tmp_path, monkeypatch):
        path = _write_toml(tmp_path / "custom.toml", "")
        monkeypatch.setenv("MENTOR_RECS_OUTPUT_DIR", "/tmp/reports")
        monkeypatch.setenv("MENTOR_RECS_LOG_LEVEL", "warning")
        config = load_config(path)
        assert config.output.output_dir == "/tmp/reports"
        assert config.logging.level == "WARNING"

    @pytest.mark.parametrize("value,expected", [("1", True), ("yes", True), ("0", False)])
    def test_debug(self, tmp_path, monkeypatch, value, expected):
        path = _write_toml(tmp_path / "custom.toml", "")
        monkeypatch.setenv("MENTOR_RECS_DEBUG", value)
        assert load_config(path).debug is expected


class TestValidation:
    def test_negative_bonus_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            ScoringConfig(seasonal=-0.1)

    def test_streak_bounds_ordered(self):
        with pytest.raises(ValidationError, match="streak_low"):
            ScoringConfig(streak_low=40, streak_high=30)

    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_threshold_range(self):
        with pytest.raises(ValidationError):
            RankingConfig(similarity_threshold=1.5)

    def test_frozen(self):
        with pytest.raises(ValidationError):
            AppConfig().debug = True


class TestResolvePath:
    def test_relative_anchored_at_root(self):
        assert resolve_path("config/default.toml") == find_project_root() / "config/default.toml"

    def test_absolute_untouched(self, tmp_path):
        assert resolve_path(str(tmp_path)) == tmp_path
