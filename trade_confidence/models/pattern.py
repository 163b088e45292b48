"""
Historical pattern context — the statistical trigger→echo relationship.

A ``HistoricalPatternContext`` summarizes how reliably a move in a trigger
instrument (e.g. AMD earnings) has historically echoed into a target
instrument (e.g. NVDA). It is optional input: most events match no known
pair, and absence is a normal state rather than an error.

Statistics are stored the way the pattern-history job produces them:
``accuracy`` as a percentage, ``average_move`` as a signed percent move.
Values outside their nominal range are accepted and clamped by the echo
edge scorer; only ``sample_size`` is validated here because a negative
count has no meaning. NaN and infinity are rejected outright.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from trade_confidence.taxonomy.signal_taxonomy import Alignment


class HistoricalPatternContext(BaseModel):
    """Statistics for one trigger→echo pair, aligned against an event.

    Attributes:
        accuracy: Directional hit rate in percent (nominally 0–100).
            ``None`` when the pattern job could not compute it.
        correlation: Pearson correlation of trigger and echo moves
            (nominally −1..1).
        average_move: Average echo move in signed percent.
        sample_size: Number of historical trigger events observed.
        alignment: How the event's sector direction lines up with the pair.
        pair_id: Canonical pair identifier, e.g. ``"AMD_NVDA"``.
        trigger: Trigger ticker, e.g. ``"AMD"``.
        echo: Echo ticker, e.g. ``"NVDA"``.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    accuracy: Optional[float] = None
    correlation: Optional[float] = None
    average_move: Optional[float] = None
    sample_size: Optional[int] = None
    alignment: Alignment = Alignment.NEUTRAL
    pair_id: Optional[str] = None
    trigger: Optional[str] = None
    echo: Optional[str] = None

    @field_validator("sample_size")
    @classmethod
    def validate_sample_size(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError(f"sample_size must be >= 0, got {v}.")
        return v
