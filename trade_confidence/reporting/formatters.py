"""
ASCII terminal formatters for CLI output.

All formatters accept engine result objects and return plain multi-line
strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

from trade_confidence.models.result import ComponentScores, DecisionResult
from trade_confidence.reporting.i18n import render_notes

_COMPONENT_LABELS: tuple[tuple[str, str], ...] = (
    ("echo_edge",     "Echo edge"),
    ("event_clarity", "Event clarity"),
    ("regime_vol",    "Regime vol"),
    ("gap_risk",      "Gap risk"),
    ("freshness",     "Freshness"),
)


def _bar(score: int, width: int = 20) -> str:
    filled = round(score / 100 * width)
    return "#" * filled + "." * (width - filled)


def format_components(components: ComponentScores) -> str:
    """One line per component: label, score, ASCII bar."""
    lines = []
    for field_name, label in _COMPONENT_LABELS:
        score = getattr(components, field_name)
        lines.append(f"  {label:<14} {score:>3}  [{_bar(score)}]")
    return "\n".join(lines)


def format_decision(result: DecisionResult, locale: str = "en") -> str:
    """Render a full ``DecisionResult`` as a readable text block.

    Args:
        result: Engine output.
        locale: Locale for explanation notes.

    Returns:
        Multi-line string.
    """
    conf = result.confidence
    hint = result.sizing_hint

    header = f"  Signal: {result.signal}"
    if result.avoid_code is not None:
        header += f"  ({result.avoid_code})"

    lines = [
        header,
        f"  Confidence: {conf.overall}/100  Grade {conf.grade}",
        "",
        format_components(conf.components),
        "",
        f"  Risk per trade:  {hint.risk_per_trade_pct:.2f}%",
        f"  Position size:   {hint.suggested_position_pct:.1f}% "
        f"(cap {hint.caps.max_position_pct:.0f}%)",
        f"  Stop distance:   {hint.stop_distance_pct:.1f}%",
    ]

    explain = render_notes(result.explain, locale)
    if explain:
        lines.append("")
        lines.append("  Why:")
        lines.extend(f"    - {line}" for line in explain)

    notes = render_notes(conf.notes, locale)
    if notes:
        lines.append("")
        lines.append("  Notes:")
        lines.extend(f"    - {line}" for line in notes)

    meta = result.meta
    lines.append("")
    lines.append(
        f"  model v{meta.model_version}  echo_used={meta.echo_used}  "
        f"market_stats_used={meta.market_stats_used}"
    )
    return "\n".join(lines)
