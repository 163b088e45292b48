"""
Logging setup for the trade confidence engine.

``configure_logging(config, debug=...)`` is called once by each CLI command
after the config is loaded. Library modules only ever do
``logger = logging.getLogger(__name__)``; they never configure handlers.

Records go to stderr (stdout is reserved for command output such as
``evaluate --format json``) and, when ``log_file`` is set, to a file.

Decision records
----------------
The engine logs one DEBUG record per evaluation and attaches the decision
as ``extra=`` fields (see ``DECISION_FIELDS``). The text format shows only
the message; the JSON format lifts those fields to the top level::

    {"ts": "2025-01-06T15:00:00Z", "level": "DEBUG",
     "logger": "trade_confidence.scoring.engine", "msg": "Evaluated event evt-1",
     "event_id": "evt-1", "signal": "BUY", "overall": 79, "grade": "B",
     "rule": "direction", "model_version": 1}
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from trade_confidence.config import LoggingConfig

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# extra= keys the engine attaches to its per-evaluation record.
DECISION_FIELDS: tuple[str, ...] = (
    "event_id",
    "signal",
    "avoid_code",
    "overall",
    "grade",
    "rule",
    "model_version",
)

_BUILTIN_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Return the ``extra=`` fields of ``record``, decision fields first."""
    extras = {
        key: val
        for key, val in record.__dict__.items()
        if key not in _BUILTIN_RECORD_ATTRS and not key.startswith("_")
    }
    ordered = {key: extras.pop(key) for key in DECISION_FIELDS if key in extras}
    ordered.update(extras)
    return ordered


class JsonLineFormatter(logging.Formatter):
    """One JSON object per record: ``ts``, ``level``, ``logger``, ``msg`` + extras."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).strftime(TIMESTAMP_FORMAT),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def resolve_level(config: "LoggingConfig", debug: bool = False) -> int:
    """Numeric level for ``config``; ``debug`` forces DEBUG."""
    if debug:
        return logging.DEBUG
    return logging.getLevelName(config.level.upper())


def configure_logging(config: "LoggingConfig", debug: bool = False) -> None:
    """Install stderr (and optional file) handlers on the root logger.

    Args:
        config: ``[logging]`` section of ``AppConfig``.
        debug: ``AppConfig.debug``; when set, per-evaluation decision
            records are emitted regardless of ``config.level``.
    """
    level = resolve_level(config, debug)
    formatter: logging.Formatter = (
        JsonLineFormatter()
        if config.json_format
        else logging.Formatter(TEXT_FORMAT, datefmt=TIMESTAMP_FORMAT)
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    logging.basicConfig(level=level, handlers=handlers, force=True)
