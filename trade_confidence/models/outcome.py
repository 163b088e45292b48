"""
Realized outcome of a decision, measured on daily bars after the fact.

An ``OutcomeRecord`` answers "what happened after we said BUY/SELL?" for
the 1, 3 and 5 trading-day horizons. Returns are measured from the day-0
close (the close of the signal's own trading day, or the last earlier bar
when that day has no bar). A horizon whose bar has not printed yet is
present with all values ``None``.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from trade_confidence.taxonomy.signal_taxonomy import Direction


class HorizonOutcome(BaseModel):
    """Outcome at one horizon.

    Attributes:
        raw_return_pct: Close-to-close move in percent, direction ignored.
        signed_return_pct: ``raw_return_pct`` from the position's side
            (negated for SHORT, 0 for NONE).
        worst_adverse_pct: Deepest move against the position over the
            window, in percent; 0 or negative.
        stopped_out: ``True`` when that adverse move reached the stop.
    """

    model_config = ConfigDict(frozen=True)

    raw_return_pct: Optional[float] = None
    signed_return_pct: Optional[float] = None
    worst_adverse_pct: Optional[float] = None
    stopped_out: bool = False

    @property
    def available(self) -> bool:
        return self.raw_return_pct is not None


class OutcomeRecord(BaseModel):
    """Outcome of one signal across all horizons."""

    model_config = ConfigDict(frozen=True)

    signal_id: str
    symbol: Optional[str] = None
    ts: datetime
    direction: Direction
    t0_close: float
    t0_rule: str
    horizons: dict[int, HorizonOutcome]
    stop_distance_pct_used: Optional[float] = None
    computed_at: datetime

    @field_validator("t0_rule")
    @classmethod
    def validate_t0_rule(cls, v: str) -> str:
        if v not in ("same_day_close", "prev_available"):
            raise ValueError(f"Unknown t0_rule '{v}'.")
        return v
