"""
Event metadata — the triggering news item as the engine sees it.

Only two fields feed the score: ``published_at`` (recency) and
``independent_updates_count`` (corroboration). ``sectors`` is carried for
the context builders, which match tickers and sector direction against the
pattern history; the engine itself never reads it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from trade_confidence.utils.time_utils import ensure_utc


class EventSector(BaseModel):
    """One sector call from the event analysis."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    direction: Optional[str] = None
    example_tickers: list[str] = []


class EventMeta(BaseModel):
    """Metadata of the triggering event.

    Attributes:
        event_id: Caller's identifier for the event, if any.
        headline: Headline text, for display only.
        published_at: Publication time. Naive datetimes are taken as UTC.
            ``None`` disables the age penalty.
        independent_updates_count: Number of independent sources that
            reported the event (defaults to 1, the event itself).
        sectors: Sector calls from the event analysis.
    """

    model_config = ConfigDict(frozen=True)

    event_id: Optional[str] = None
    headline: Optional[str] = None
    published_at: Optional[datetime] = None
    independent_updates_count: int = 1
    sectors: list[EventSector] = []

    @field_validator("independent_updates_count")
    @classmethod
    def validate_updates(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"independent_updates_count must be >= 0, got {v}.")
        return v

    @field_validator("published_at")
    @classmethod
    def normalize_published_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v is not None else None
