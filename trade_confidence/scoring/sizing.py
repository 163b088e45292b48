"""
Position sizing: grade + stop distance → bounded position-size suggestion.

    risk_per_trade_pct     = table[grade]            (A 1.0, B 0.5, C 0.25, D 0)
    stop_distance_pct      = |invalidation − entry| / entry × 100
                             else ATR% × 1.0
                             else 3.0
    suggested_position_pct = 0                                    if AVOID / WAIT
                             clamp(risk / stop × 10, 1, 15)       otherwise

The suggestion is always reported alongside the 15% cap it was clamped to.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from trade_confidence.models.market import MarketRiskStats
from trade_confidence.models.note import Note, NoteCode, note
from trade_confidence.models.read import QualitativeRead
from trade_confidence.models.result import SizingCaps, SizingHint
from trade_confidence.scoring import calibration as cal
from trade_confidence.taxonomy.signal_taxonomy import FLAT_SIGNALS, Grade, Signal
from trade_confidence.utils.numeric import clamp, round_half_up


@dataclass
class SizingResult:
    hint: SizingHint
    notes: list[Note] = field(default_factory=list)


def compute_stop_distance(
    read: Optional[QualitativeRead],
    market: Optional[MarketRiskStats],
) -> tuple[float, list[Note]]:
    """Return ``(stop_distance_pct, notes)`` using the first usable tier.

    Tiers: price levels from the read, then ATR, then a fixed default.
    Levels produce no note; each fallback tier notes which one was used.
    """
    entry = read.entry.level if read is not None else None
    invalidation = read.invalidation.level if read is not None else None

    if entry is not None and entry > 0 and invalidation is not None and invalidation > 0:
        distance = abs((invalidation - entry) / entry) * 100
        if distance > 0:
            return distance, []

    if market is not None and market.atr_pct:
        return market.atr_pct * cal.ATR_STOP_MULTIPLE, [note(NoteCode.STOP_FROM_ATR)]

    return cal.DEFAULT_STOP_DISTANCE_PCT, [note(NoteCode.STOP_DEFAULTED)]


def compute_sizing_hint(
    grade: Grade,
    signal: Signal,
    read: Optional[QualitativeRead] = None,
    market: Optional[MarketRiskStats] = None,
) -> SizingResult:
    """Build the sizing hint for a decided signal.

    Args:
        grade: Confidence grade from the aggregator.
        signal: Final signal after the rule cascade.
        read: Qualitative read (for entry / invalidation levels).
        market: Market risk stats (for the ATR stop fallback).

    Returns:
        ``SizingResult`` with the hint and any fallback notes.
    """
    risk_pct = cal.RISK_PER_TRADE_BY_GRADE[grade]
    stop_pct, notes = compute_stop_distance(read, market)

    if signal in FLAT_SIGNALS:
        position_pct = 0.0
    elif stop_pct > 0:
        position_pct = clamp(
            (risk_pct / stop_pct) * cal.POSITION_SCALE,
            cal.MIN_POSITION_PCT,
            cal.MAX_POSITION_PCT,
        )
    else:
        position_pct = cal.DEFAULT_POSITION_PCT
        notes.append(note(NoteCode.POSITION_DEFAULTED))

    hint = SizingHint(
        risk_per_trade_pct=round_half_up(risk_pct, 2),
        suggested_position_pct=round_half_up(position_pct, 1),
        stop_distance_pct=round_half_up(stop_pct, 1),
        caps=SizingCaps(max_position_pct=cal.MAX_POSITION_PCT),
    )
    return SizingResult(hint=hint, notes=notes)
