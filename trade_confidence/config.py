"""
Application configuration management.

Load order (each layer overrides the previous):
  1. ``config/default.toml``      — committed static defaults
  2. ``config/local.toml``        — optional local overrides (gitignored)
  3. ``.env``                     — local secrets and env overrides (gitignored)
  4. Environment variables        — ``TRADE_CONFIDENCE_*`` prefix

Entry point: ``load_config(config_path=None) -> AppConfig``

Configuration is read once at process start. The engine receives its
``model_version`` through ``ConfidenceEngine.from_config(config)``, never
through env var lookups scattered through the codebase.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

SUPPORTED_LOCALES: frozenset[str] = frozenset({"en", "tr"})

# ── Sub-config models ─────────────────────────────────────────────────────────


class EngineConfig(BaseModel):
    """Scoring model identity and presentation defaults."""

    model_config = ConfigDict(frozen=True)

    model_version: int = 1
    default_locale: str = "en"

    @field_validator("model_version")
    @classmethod
    def validate_model_version(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"model_version must be >= 1, got {v}.")
        return v

    @field_validator("default_locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        v = v.lower()
        if v not in SUPPORTED_LOCALES:
            raise ValueError(f"default_locale must be one of {sorted(SUPPORTED_LOCALES)}, got '{v}'.")
        return v


class DataConfig(BaseModel):
    """Filesystem paths for reference data."""

    model_config = ConfigDict(frozen=True)

    pattern_history_file: str = "data/pattern_history.json"


class MarketConfig(BaseModel):
    """Parameters for deriving market risk stats from daily bars."""

    model_config = ConfigDict(frozen=True)

    atr_period: int = 14
    min_bars: int = 15

    @field_validator("atr_period", "min_bars")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"Bar counts must be >= 1, got {v}.")
        return v


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
    """Complete application configuration, the single source of truth.

    Constructed by ``load_config()`` which merges TOML + .env + environment.
    """

    model_config = ConfigDict(frozen=True)

    engine: EngineConfig = EngineConfig()
    data: DataConfig = DataConfig()
    market: MarketConfig = MarketConfig()
    logging: LoggingConfig = LoggingConfig()
    debug: bool = False


# ── Loader ────────────────────────────────────────────────────────────────────

_PROJECT_ROOT = Path(__file__).parent.parent


def _find_project_root() -> Path:
    """Walk up from this file to find the project root (contains pyproject.toml)."""
    candidate = Path(__file__).parent
    for _ in range(5):
        if (candidate / "pyproject.toml").exists():
            return candidate
        candidate = candidate.parent
    return _PROJECT_ROOT


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
    root = _find_project_root()

    # 1. Load .env file (silently skip if missing)
    load_dotenv(dotenv_path=root / ".env", override=False)

    # 2. Load TOML config
    if config_path is None:
        config_path = root / "config" / "default.toml"

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Create config/default.toml or pass --config."
        )

    with open(config_path, "rb") as f:
        raw: dict[str, Any] = tomllib.load(f)

    # Also merge local.toml if present (gitignored local overrides)
    local_config_path = config_path.parent / "local.toml"
    if local_config_path.exists():
        with open(local_config_path, "rb") as f:
            local_raw: dict[str, Any] = tomllib.load(f)
        raw = _deep_merge(raw, local_raw)

    # 3. Apply TRADE_CONFIDENCE_* environment variable overrides
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
    """Apply TRADE_CONFIDENCE_* env vars to the raw config dict.

    Supported overrides:
      TRADE_CONFIDENCE_MODEL_VERSION  → raw["engine"]["model_version"]
      TRADE_CONFIDENCE_LOCALE         → raw["engine"]["default_locale"]
      TRADE_CONFIDENCE_LOG_LEVEL      → raw["logging"]["level"]
      TRADE_CONFIDENCE_DEBUG          → raw["debug"]
    """
    if model_version := os.environ.get("TRADE_CONFIDENCE_MODEL_VERSION"):
        raw.setdefault("engine", {})["model_version"] = model_version

    if locale := os.environ.get("TRADE_CONFIDENCE_LOCALE"):
        raw.setdefault("engine", {})["default_locale"] = locale

    if log_level := os.environ.get("TRADE_CONFIDENCE_LOG_LEVEL"):
        raw.setdefault("logging", {})["level"] = log_level

    if debug := os.environ.get("TRADE_CONFIDENCE_DEBUG"):
        raw["debug"] = debug.lower() in ("1", "true", "yes")

    return raw


def _build_app_config(raw: dict[str, Any]) -> AppConfig:
    """Map raw TOML dict to ``AppConfig`` model structure."""
    project = raw.pop("project", {})

    return AppConfig(
        engine=EngineConfig(**raw.get("engine", {})),
        data=DataConfig(**raw.get("data", {})),
        market=MarketConfig(**raw.get("market", {})),
        logging=LoggingConfig(**raw.get("logging", {})),
        debug=raw.get("debug", project.get("debug", False)),
    )
