"""
Engine output models.

``DecisionResult`` is the only object callers receive. It nests the
confidence breakdown (components, overall, grade, notes), the sizing hint
and run metadata. Every model here is frozen: once the engine returns a
result, nothing about it changes, and two results built from identical
inputs dump to identical JSON.

Range invariants (components and overall in [0, 100], suggested position
within the cap) are enforced by validators so that an engine bug surfaces
as a ``ValidationError`` instead of a silently out-of-range number.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from trade_confidence.models.note import Note
from trade_confidence.taxonomy.signal_taxonomy import (
    FLAT_SIGNALS,
    AvoidCode,
    Grade,
    Signal,
)


def _check_score(v: int) -> int:
    if not 0 <= v <= 100:
        raise ValueError(f"Scores must be in [0, 100], got {v}.")
    return v


class ComponentScores(BaseModel):
    """The five component scores, each an integer 0–100."""

    model_config = ConfigDict(frozen=True)

    echo_edge: int
    event_clarity: int
    regime_vol: int
    gap_risk: int
    freshness: int

    @field_validator("echo_edge", "event_clarity", "regime_vol", "gap_risk", "freshness")
    @classmethod
    def validate_range(cls, v: int) -> int:
        return _check_score(v)


class ConfidenceBreakdown(BaseModel):
    """Overall confidence with its components and ordered notes."""

    model_config = ConfigDict(frozen=True)

    overall: int
    grade: Grade
    components: ComponentScores
    notes: list[Note] = []

    @field_validator("overall")
    @classmethod
    def validate_overall(cls, v: int) -> int:
        return _check_score(v)


class SizingCaps(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_position_pct: float


class SizingHint(BaseModel):
    """Bounded position-size suggestion and its basis.

    Attributes:
        risk_per_trade_pct: Account risk budget for the trade, from grade.
        suggested_position_pct: Position size as percent of account.
        stop_distance_pct: Distance to the stop as percent of entry.
        caps: Hard limits the suggestion was clamped to.
    """

    model_config = ConfigDict(frozen=True)

    risk_per_trade_pct: float
    suggested_position_pct: float
    stop_distance_pct: float
    caps: SizingCaps

    @model_validator(mode="after")
    def validate_within_cap(self) -> "SizingHint":
        if not 0.0 <= self.suggested_position_pct <= self.caps.max_position_pct:
            raise ValueError(
                f"suggested_position_pct ({self.suggested_position_pct}) must be in "
                f"[0, {self.caps.max_position_pct}]."
            )
        return self


class ResultMeta(BaseModel):
    """Versioning and input-availability flags.

    ``model_version`` identifies the calibration set; callers key caches on it.
    """

    model_config = ConfigDict(frozen=True)

    model_version: int
    echo_used: bool
    market_stats_used: bool


class DecisionResult(BaseModel):
    """Top-level engine output."""

    model_config = ConfigDict(frozen=True)

    signal: Signal
    avoid_code: Optional[AvoidCode] = None
    explain: list[Note] = []
    confidence: ConfidenceBreakdown
    sizing_hint: SizingHint
    meta: ResultMeta

    @model_validator(mode="after")
    def validate_flat_signal_has_no_position(self) -> "DecisionResult":
        if self.signal in FLAT_SIGNALS and self.sizing_hint.suggested_position_pct != 0:
            raise ValueError(
                f"{self.signal} must not carry a position, got "
                f"{self.sizing_hint.suggested_position_pct}%."
            )
        return self
