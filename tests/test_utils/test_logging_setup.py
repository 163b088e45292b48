"""Tests for utils/logging.py — level resolution, handlers, JSON decision records."""

from __future__ import annotations

import json
import logging

import pytest

from trade_confidence.config import LoggingConfig
from trade_confidence.utils.logging import (
    JsonLineFormatter,
    configure_logging,
    resolve_level,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "trade_confidence.scoring.engine", logging.DEBUG, __file__, 1, "Evaluated event %s", ("evt-1",), None,
    )
    for key, val in extra.items():
        setattr(record, key, val)
    return record


class TestResolveLevel:
    def test_from_config(self):
        assert resolve_level(LoggingConfig(level="warning")) == logging.WARNING

    def test_debug_flag_forces_debug(self):
        assert resolve_level(LoggingConfig(level="ERROR"), debug=True) == logging.DEBUG


class TestJsonLineFormatter:
    def test_base_fields(self):
        payload = json.loads(JsonLineFormatter().format(_record()))
        assert payload["level"] == "DEBUG"
        assert payload["logger"] == "trade_confidence.scoring.engine"
        assert payload["msg"] == "Evaluated event evt-1"
        assert payload["ts"].endswith("Z")

    def test_decision_fields_lifted_in_order(self):
        record = _record(custom="x", grade="B", signal="BUY", overall=79)
        payload = json.loads(JsonLineFormatter().format(record))
        extras = [key for key in payload if key not in {"ts", "level", "logger", "msg"}]
        assert extras == ["signal", "overall", "grade", "custom"]


class TestConfigureLogging:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "engine.log"
        configure_logging(LoggingConfig(level="INFO", log_file=str(log_file)))

        logging.getLogger("trade_confidence.test").info("hello file")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert log_file.exists()
        assert "hello file" in log_file.read_text(encoding="utf-8")

    def test_engine_decision_record(self, tmp_path, long_read, as_of):
        from trade_confidence.scoring.engine import ConfidenceEngine

        log_file = tmp_path / "decisions.log"
        configure_logging(LoggingConfig(level="WARNING", log_file=str(log_file), json_format=True), debug=True)

        ConfidenceEngine(model_version=2).evaluate(None, long_read, as_of=as_of)
        for handler in logging.getLogger().handlers:
            handler.flush()

        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        decision = next(r for r in records if r["logger"] == "trade_confidence.scoring.engine")
        assert decision["signal"] == "BUY"
        assert decision["rule"] == "direction"
        assert decision["model_version"] == 2
        assert decision["avoid_code"] is None
