"""
Tests for mentor_recs/utils/logging.py.

What we test
------------
- record_fields() returns only what was passed through ``extra=``.
- configure_logging() installs a stderr handler plus an optional file
  handler (parent dirs created) and replaces earlier handlers.
- JSON lines carry ts/level/logger/msg and the engine's request fields.
- The text format leaves request fields out.
"""

from __future__ import annotations

import json
import logging
import sys

import pytest

from mentor_recs.config import LoggingConfig
from mentor_recs.recommendations.engine import BookRecommender
from mentor_recs.taxonomy.path_taxonomy import TrainingPath
from mentor_recs.utils.logging import configure_logging, record_fields


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra) -> logging.LogRecord:
    logger = logging.getLogger("mentor_recs.test")
    return logger.makeRecord(
        logger.name, logging.INFO, __file__, 1, "hello %s", ("world",), None, extra=extra
    )


def _flush_root() -> None:
    for handler in logging.getLogger().handlers:
        handler.flush()


class TestRecordFields:
    def test_only_extra_fields(self):
        assert record_fields(_record(path="discipline", selected=3)) == {
            "path": "discipline",
            "selected": 3,
        }

    def test_no_extra(self):
        assert record_fields(_record()) == {}


class TestConfigureLogging:
    def test_stderr_handler_only_by_default(self):
        configure_logging(LoggingConfig(level="WARNING"))
        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert handlers[0].stream is sys.stderr
        assert logging.getLogger().level == logging.WARNING

    def test_file_handler_creates_parent_dirs(self, tmp_path):
        log_file = tmp_path / "logs" / "nested" / "run.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
        assert len(logging.getLogger().handlers) == 2
        assert log_file.parent.is_dir()

    def test_reconfigure_replaces_handlers(self):
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert len(logging.getLogger().handlers) == 1


class TestJsonLines:
    def test_engine_request_fields(self, tmp_path, sample_catalog, stub_rng, fixed_date):
        log_file = tmp_path / "run.log"
        configure_logging(
            LoggingConfig(level="DEBUG", log_file=str(log_file), json_format=True)
        )
        engine = BookRecommender(sample_catalog, rng=stub_rng, clock=lambda: fixed_date)
        engine.generate_recommendations(TrainingPath.DISCIPLINE, streak=3, count=2)
        _flush_root()

        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        entry = next(e for e in lines if e.get("operation") == "recommend")
        assert entry["level"] == "DEBUG"
        assert entry["logger"] == "mentor_recs.recommendations.engine"
        assert entry["msg"] == "Recommendations ranked for discipline: 2 of 3"
        assert entry["path"] == "discipline"
        assert entry["user_level"] == "beginner"
        assert entry["streak"] == 3
        assert entry["candidates"] == 3
        assert entry["selected"] == 2
        assert entry["ts"].endswith("Z")

    def test_text_format_omits_fields(self, tmp_path):
        log_file = tmp_path / "run.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))
        logging.getLogger("mentor_recs.test").info("Picked %d", 2, extra={"path": "clarity"})
        _flush_root()

        line = log_file.read_text(encoding="utf-8").strip()
        assert line.endswith("[INFO] mentor_recs.test: Picked 2")
        assert "clarity" not in line
