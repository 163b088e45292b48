"""
Request envelopes for the manual analysis CLI.

``EvaluationRequest`` mirrors the engine's entry point one-to-one so a
request file can be replayed against any model version::

    {
      "event": {"event_id": "evt-1", "published_at": "2025-01-06T14:00:00Z",
                "independent_updates_count": 3},
      "qualitative_read": {"direction": "LONG", "ambiguity": 0.1,
                           "entry": {"type": "market"}},
      "pattern_context": null,
      "market_stats": {"atr_pct": 3.0, "gap_pct": 1.5}
    }
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from trade_confidence.models.event import EventMeta, EventSector
from trade_confidence.models.market import MarketRiskStats, PriceBar
from trade_confidence.models.pattern import HistoricalPatternContext
from trade_confidence.models.read import QualitativeRead
from trade_confidence.taxonomy.signal_taxonomy import Direction


class EvaluationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    event: EventMeta = EventMeta()
    qualitative_read: QualitativeRead
    pattern_context: Optional[HistoricalPatternContext] = None
    market_stats: Optional[MarketRiskStats] = None


class ContextRequest(BaseModel):
    """Raw material for the context builders."""

    model_config = ConfigDict(frozen=True)

    sectors: list[EventSector] = []
    bars: list[PriceBar] = []
    symbol: Optional[str] = None


class OutcomeRequest(BaseModel):
    """A past decision plus the daily bars printed since.

    ``signal_id`` is rebuilt from the configured model version, ``event_id``
    and ``symbol``.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    event_id: str
    symbol: Optional[str] = None
    ts: datetime
    direction: Direction
    stop_distance_pct: Optional[float] = None
    bars: list[PriceBar]

    @field_validator("stop_distance_pct")
    @classmethod
    def validate_stop(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError(f"stop_distance_pct must be >= 0, got {v}.")
        return v
