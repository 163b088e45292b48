"""
Trade confidence engine CLI entry point (manual analysis and calibration).

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Validate inputs.
  4. Execute action (evaluate a request, build context, measure an outcome,
     print calibration).
  5. Report result to stdout.

Nothing is persisted; results go to stdout only.

Install and run::

    pip install -e .
    trade-confidence --help
    trade-confidence validate-config
    trade-confidence show-calibration
    trade-confidence evaluate request.json --as-of 2025-01-06T15:00:00Z
    trade-confidence evaluate request.json --format json
    trade-confidence build-context context.json
    trade-confidence outcome outcome.json
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import typer

app = typer.Typer(
    name="trade-confidence",
    help="Deterministic trade confidence engine: manual analysis CLI.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from trade_confidence.config import load_config

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
    """Set up logging from config (``debug = true`` surfaces decision records)."""
    from trade_confidence.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _read_json_or_exit(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        typer.echo(f"[ERROR] Input file not found: {path}", err=True)
        raise typer.Exit(code=1)
    except json.JSONDecodeError as exc:
        typer.echo(f"[ERROR] Invalid JSON in {path}: {exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
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
    typer.echo(f"  Model version:    {config.engine.model_version}")
    typer.echo(f"  Default locale:   {config.engine.default_locale}")
    typer.echo(f"  Pattern history:  {config.data.pattern_history_file}")
    typer.echo(f"  ATR period:       {config.market.atr_period}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")


@app.command("show-calibration")
def show_calibration(
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Print the calibration constants behind the configured model version."""
    from trade_confidence.scoring.calibration import describe

    config = _load_config_or_exit(config_path)
    payload = {"model_version": config.engine.model_version, **describe()}
    typer.echo(json.dumps(payload, indent=2, default=str))


@app.command("evaluate")
def evaluate(
    input_path: Path = typer.Argument(..., help="JSON request file (event, qualitative_read, ...)."),
    as_of: Optional[str] = typer.Option(
        None,
        "--as-of",
        help="Evaluation time (ISO-8601, UTC). Defaults to now.",
    ),
    locale: Optional[str] = typer.Option(
        None,
        "--locale",
        help="Locale for explanation notes (default from config).",
    ),
    output_format: str = typer.Option(
        "text",
        "--format",
        help="Output format: 'text' or 'json'.",
    ),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Run the engine on one request and print the decision."""
    from pydantic import ValidationError

    from trade_confidence.models.request import EvaluationRequest
    from trade_confidence.reporting.formatters import format_decision
    from trade_confidence.reporting.i18n import CATALOGS
    from trade_confidence.scoring.engine import ConfidenceEngine
    from trade_confidence.utils.time_utils import parse_iso_datetime

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    if output_format not in ("text", "json"):
        typer.echo(f"[ERROR] --format must be 'text' or 'json', got '{output_format}'.", err=True)
        raise typer.Exit(code=1)

    note_locale = (locale or config.engine.default_locale).lower()
    if note_locale not in CATALOGS:
        typer.echo(f"[ERROR] Unsupported locale '{note_locale}'.", err=True)
        raise typer.Exit(code=1)

    evaluated_at = None
    if as_of:
        try:
            evaluated_at = parse_iso_datetime(as_of)
        except ValueError:
            typer.echo(f"[ERROR] Invalid --as-of timestamp: {as_of!r}", err=True)
            raise typer.Exit(code=1)

    raw = _read_json_or_exit(input_path)
    try:
        request = EvaluationRequest.model_validate(raw)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid request: {exc}", err=True)
        raise typer.Exit(code=1)

    engine = ConfidenceEngine.from_config(config)
    result = engine.evaluate(
        request.event,
        request.qualitative_read,
        pattern_context=request.pattern_context,
        market_stats=request.market_stats,
        as_of=evaluated_at,
    )

    if output_format == "json":
        typer.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    else:
        typer.echo(format_decision(result, note_locale))


@app.command("build-context")
def build_context(
    input_path: Path = typer.Argument(..., help="JSON file with 'sectors' and optional 'bars'."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Derive pattern context and market stats for an event, printed as JSON.

    The output's ``pattern_context`` and ``market_stats`` fields can be pasted
    into an ``evaluate`` request.
    """
    from pydantic import ValidationError

    from trade_confidence.context.market_stats import (
        build_market_risk_stats,
        select_representative_ticker,
    )
    from trade_confidence.context.pattern_context import (
        build_pattern_context,
        load_pattern_history,
    )
    from trade_confidence.models.request import ContextRequest

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    raw = _read_json_or_exit(input_path)
    try:
        request = ContextRequest.model_validate(raw)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid context request: {exc}", err=True)
        raise typer.Exit(code=1)

    try:
        history = load_pattern_history(Path(config.data.pattern_history_file))
    except (ValueError, json.JSONDecodeError) as exc:
        typer.echo(f"[ERROR] Could not load pattern history: {exc}", err=True)
        raise typer.Exit(code=1)

    pattern = build_pattern_context(request.sectors, history)

    symbol = request.symbol or select_representative_ticker(request.sectors)
    market = None
    if request.bars:
        market = build_market_risk_stats(
            request.bars,
            period=config.market.atr_period,
            min_bars=config.market.min_bars,
            symbol=symbol,
        )

    payload = {
        "symbol": symbol,
        "pattern_context": pattern.model_dump(mode="json") if pattern else None,
        "market_stats": market.model_dump(mode="json") if market else None,
    }
    typer.echo(json.dumps(payload, indent=2))


@app.command("outcome")
def outcome(
    input_path: Path = typer.Argument(..., help="JSON file: event_id, symbol, ts, direction, stop_distance_pct, bars."),
    config_path: Optional[str] = typer.Option(None, "--config", help="Path to TOML config file."),
) -> None:
    """Measure 1D/3D/5D returns and stop-outs of a past decision, printed as JSON.

    Exits with code 1 when the bars contain no day-0 bar or no later bar.
    """
    from pydantic import ValidationError

    from trade_confidence.context.outcome import build_outcome_record, build_signal_id
    from trade_confidence.models.request import OutcomeRequest

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    raw = _read_json_or_exit(input_path)
    try:
        request = OutcomeRequest.model_validate(raw)
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid outcome request: {exc}", err=True)
        raise typer.Exit(code=1)

    signal_id = build_signal_id(config.engine.model_version, request.event_id, request.symbol)
    record = build_outcome_record(
        signal_id=signal_id,
        ts=request.ts,
        direction=request.direction,
        bars=request.bars,
        stop_distance_pct=request.stop_distance_pct,
        symbol=request.symbol,
    )
    if record is None:
        typer.echo(f"[ERROR] Not enough bars to measure the outcome of {signal_id}.", err=True)
        raise typer.Exit(code=1)

    typer.echo(json.dumps(record.model_dump(mode="json"), indent=2))


if __name__ == "__main__":
    app()
