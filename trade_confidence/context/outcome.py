"""
Outcome measurement: how a decision played out on later daily bars.

Given the bars of the traded symbol around and after the signal time,
computes for each horizon ``h`` (trading days after day 0)::

    raw_return_pct     = (close[t0 + h] − close[t0]) / close[t0] × 100
    signed_return_pct  = raw (LONG), −raw (SHORT), 0 (NONE)
    worst_adverse_pct  = (min low − close[t0]) / close[t0] × 100       LONG
                         (close[t0] − max high) / close[t0] × 100      SHORT
                         over bars t0..t0+h inclusive
    stopped_out        = worst_adverse_pct <= −stop_distance_pct

Day 0 is the bar dated on the signal's UTC date (``same_day_close``); if
that day has no bar, the last earlier bar (``prev_available``). Percentages
are rounded half-up to 2 decimals; the stop check uses the unrounded value.

Signal ids key outcomes back to the decision that produced them:
``"{model_version}:{event_id}:{SYMBOL}"``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from trade_confidence.models.market import PriceBar
from trade_confidence.models.outcome import HorizonOutcome, OutcomeRecord
from trade_confidence.models.result import DecisionResult
from trade_confidence.taxonomy.signal_taxonomy import Direction, Signal
from trade_confidence.utils.numeric import round_half_up
from trade_confidence.utils.time_utils import ensure_utc, utcnow

logger = logging.getLogger(__name__)

HORIZONS: tuple[int, ...] = (1, 3, 5)
UNKNOWN_SYMBOL = "UNKNOWN"


def build_signal_id(model_version: Optional[int], event_id: str, symbol: Optional[str]) -> str:
    """Stable id for one decision: ``"{model_version}:{event_id}:{SYMBOL}"``.

    A missing ``model_version`` counts as 1; a missing symbol as ``UNKNOWN``.
    """
    version = model_version if model_version is not None else 1
    sym = (symbol or UNKNOWN_SYMBOL).upper()
    return f"{version}:{event_id}:{sym}"


def direction_for_signal(signal: Signal) -> Direction:
    if signal is Signal.BUY:
        return Direction.LONG
    if signal is Signal.SELL:
        return Direction.SHORT
    return Direction.NONE


@dataclass(frozen=True)
class ResolvedCloses:
    """Day-0 bar and, per horizon, the exit bar and the bars in between."""

    t0_index: int
    t0_bar: PriceBar
    t0_rule: str
    horizon_bars: dict[int, Optional[PriceBar]] = field(default_factory=dict)
    window_bars: dict[int, Optional[list[PriceBar]]] = field(default_factory=dict)

    @property
    def has_any_horizon(self) -> bool:
        return any(bar is not None for bar in self.horizon_bars.values())


def resolve_closes(
    bars: list[PriceBar],
    ts: datetime,
    horizons: tuple[int, ...] = HORIZONS,
) -> Optional[ResolvedCloses]:
    """Locate day 0 and the horizon bars for a signal at ``ts``.

    Args:
        bars: Daily bars in any order; sorted by date before use.
        ts: Signal time. Naive values are taken as UTC.
        horizons: Trading-day offsets from day 0.

    Returns:
        ``ResolvedCloses``, or ``None`` when no bar is dated on or before
        the signal date.
    """
    ordered = sorted(bars, key=lambda b: b.day)
    signal_day = ensure_utc(ts).date()

    t0_index: Optional[int] = None
    t0_rule = "same_day_close"
    for i, bar in enumerate(ordered):
        if bar.day == signal_day:
            t0_index = i
            break
    if t0_index is None:
        earlier = [i for i, bar in enumerate(ordered) if bar.day < signal_day]
        if not earlier:
            return None
        t0_index = earlier[-1]
        t0_rule = "prev_available"

    horizon_bars: dict[int, Optional[PriceBar]] = {}
    window_bars: dict[int, Optional[list[PriceBar]]] = {}
    for h in horizons:
        target = t0_index + h
        if target < len(ordered):
            horizon_bars[h] = ordered[target]
            window_bars[h] = ordered[t0_index:target + 1]
        else:
            horizon_bars[h] = None
            window_bars[h] = None

    return ResolvedCloses(
        t0_index=t0_index,
        t0_bar=ordered[t0_index],
        t0_rule=t0_rule,
        horizon_bars=horizon_bars,
        window_bars=window_bars,
    )


def compute_raw_return(t0_close: float, exit_close: float) -> float:
    if not t0_close:
        return 0.0
    return (exit_close - t0_close) / t0_close * 100


def compute_signed_return(raw_return: float, direction: Direction) -> float:
    if direction is Direction.LONG:
        return raw_return
    if direction is Direction.SHORT:
        return -raw_return
    return 0.0


def compute_worst_adverse(window: list[PriceBar], t0_close: float, direction: Direction) -> float:
    """Deepest move against the position over ``window``, in percent (<= 0 when adverse)."""
    if not window or not t0_close:
        return 0.0
    if direction is Direction.LONG:
        return (min(b.low for b in window) - t0_close) / t0_close * 100
    if direction is Direction.SHORT:
        return (t0_close - max(b.high for b in window)) / t0_close * 100
    return 0.0


def is_stopped_out(worst_adverse_pct: float, stop_distance_pct: Optional[float]) -> bool:
    if stop_distance_pct is None or stop_distance_pct <= 0:
        return False
    return worst_adverse_pct <= -stop_distance_pct


def compute_outcome(
    resolved: ResolvedCloses,
    direction: Direction,
    stop_distance_pct: Optional[float],
) -> dict[int, HorizonOutcome]:
    """Per-horizon outcome for a position opened at the day-0 close."""
    t0_close = resolved.t0_bar.close
    outcomes: dict[int, HorizonOutcome] = {}

    for h, exit_bar in resolved.horizon_bars.items():
        if exit_bar is None:
            outcomes[h] = HorizonOutcome()
            continue
        raw = compute_raw_return(t0_close, exit_bar.close)
        adverse = compute_worst_adverse(resolved.window_bars[h] or [], t0_close, direction)
        outcomes[h] = HorizonOutcome(
            raw_return_pct=round_half_up(raw, 2),
            signed_return_pct=round_half_up(compute_signed_return(raw, direction), 2),
            worst_adverse_pct=round_half_up(adverse, 2),
            stopped_out=is_stopped_out(adverse, stop_distance_pct),
        )

    return outcomes


def build_outcome_record(
    signal_id: str,
    ts: datetime,
    direction: Direction,
    bars: list[PriceBar],
    stop_distance_pct: Optional[float] = None,
    symbol: Optional[str] = None,
    computed_at: Optional[datetime] = None,
) -> Optional[OutcomeRecord]:
    """Measure one signal's outcome.

    Returns:
        ``OutcomeRecord``, or ``None`` (logged at WARNING) when there is no
        day-0 bar or not a single horizon bar yet.
    """
    resolved = resolve_closes(bars, ts)
    if resolved is None:
        logger.warning("No day-0 bar for signal %s at %s", signal_id, ts)
        return None
    if not resolved.has_any_horizon:
        logger.warning("Insufficient future bars for signal %s", signal_id)
        return None

    return OutcomeRecord(
        signal_id=signal_id,
        symbol=symbol,
        ts=ensure_utc(ts),
        direction=direction,
        t0_close=resolved.t0_bar.close,
        t0_rule=resolved.t0_rule,
        horizons=compute_outcome(resolved, direction, stop_distance_pct),
        stop_distance_pct_used=stop_distance_pct,
        computed_at=ensure_utc(computed_at) if computed_at is not None else utcnow(),
    )


def build_outcome_for_result(
    result: DecisionResult,
    event_id: str,
    ts: datetime,
    bars: list[PriceBar],
    symbol: Optional[str] = None,
    computed_at: Optional[datetime] = None,
) -> Optional[OutcomeRecord]:
    """``build_outcome_record`` for an engine result.

    The position side comes from the signal (BUY long, SELL short, anything
    else flat), the stop from ``sizing_hint.stop_distance_pct`` and the id
    from ``meta.model_version``.
    """
    return build_outcome_record(
        signal_id=build_signal_id(result.meta.model_version, event_id, symbol),
        ts=ts,
        direction=direction_for_signal(result.signal),
        bars=bars,
        stop_distance_pct=result.sizing_hint.stop_distance_pct,
        symbol=symbol.upper() if symbol else None,
        computed_at=computed_at,
    )
