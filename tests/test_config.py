"""
Tests for config.py — TOML loading, local overrides, env overrides, validation.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from trade_confidence.config import (
    AppConfig,
    EngineConfig,
    LoggingConfig,
    MarketConfig,
    load_config,
)

_ENV_VARS = (
    "TRADE_CONFIDENCE_MODEL_VERSION",
    "TRADE_CONFIDENCE_LOCALE",
    "TRADE_CONFIDENCE_LOG_LEVEL",
    "TRADE_CONFIDENCE_DEBUG",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def _write_config(directory: Path, body: str) -> Path:
    path = directory / "app.toml"
    path.write_text(body, encoding="utf-8")
    return path


class TestLoadConfig:
    def test_default_config_file_loads(self):
        config = load_config()
        assert config.engine.model_version >= 1
        assert config.engine.default_locale in {"en", "tr"}

    def test_explicit_file(self, tmp_path):
        path = _write_config(
            tmp_path,
            """
[engine]
model_version = 2
default_locale = "tr"

[market]
atr_period = 10
min_bars = 11

[logging]
level = "debug"
""",
        )
        config = load_config(path)
        assert config.engine.model_version == 2
        assert config.engine.default_locale == "tr"
        assert config.market.atr_period == 10
        assert config.logging.level == "DEBUG"
        assert config.data.pattern_history_file == "data/pattern_history.json"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_local_toml_overrides(self, tmp_path):
        path = _write_config(tmp_path, "[engine]\nmodel_version = 1\n")
        (tmp_path / "local.toml").write_text("[engine]\nmodel_version = 5\n", encoding="utf-8")
        assert load_config(path).engine.model_version == 5

    def test_env_overrides(self, tmp_path, monkeypatch):
        path = _write_config(tmp_path, "[engine]\nmodel_version = 1\n")
        monkeypatch.setenv("TRADE_CONFIDENCE_MODEL_VERSION", "4")
        monkeypatch.setenv("TRADE_CONFIDENCE_LOCALE", "TR")
        monkeypatch.setenv("TRADE_CONFIDENCE_LOG_LEVEL", "warning")
        monkeypatch.setenv("TRADE_CONFIDENCE_DEBUG", "true")

        config = load_config(path)
        assert config.engine.model_version == 4
        assert config.engine.default_locale == "tr"
        assert config.logging.level == "WARNING"
        assert config.debug is True

    def test_invalid_model_version(self, tmp_path):
        path = _write_config(tmp_path, "[engine]\nmodel_version = 0\n")
        with pytest.raises(ValidationError):
            load_config(path)


class TestModels:
    def test_defaults(self):
        config = AppConfig()
        assert config.engine.model_version == 1
        assert config.market.min_bars == 15
        assert config.logging.json_format is False

    def test_unsupported_locale(self):
        with pytest.raises(ValidationError):
            EngineConfig(default_locale="de")

    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")

    def test_non_positive_bar_counts(self):
        with pytest.raises(ValidationError):
            MarketConfig(atr_period=0)

    def test_frozen(self):
        config = AppConfig()
        with pytest.raises(ValidationError):
            config.debug = True  # type: ignore[misc]
