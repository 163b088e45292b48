"""
Market risk models.

``PriceBar`` is one daily OHLC bar as delivered by the market data vendor.
``MarketRiskStats`` is the short-term risk summary the engine scores:
ATR as a percent of price and the most recent open-vs-previous-close gap.

Either stat may be ``None`` independently (e.g. enough bars for a gap but
not for ATR); each scorer falls back on its own. Non-finite numbers are
rejected in both models.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class PriceBar(BaseModel):
    """One daily OHLC bar."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    day: date
    open: float
    high: float
    low: float
    close: float

    @model_validator(mode="after")
    def validate_range(self) -> "PriceBar":
        if self.low > self.high:
            raise ValueError(f"low ({self.low}) must be <= high ({self.high}).")
        return self


class MarketRiskStats(BaseModel):
    """Short-term volatility and gap metrics for the target instrument.

    Attributes:
        atr_pct: Average true range as a percent of the last close.
        gap_pct: Absolute open-vs-previous-close gap of the latest bar, percent.
        symbol: Ticker the stats were computed for, when known.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    atr_pct: Optional[float] = None
    gap_pct: Optional[float] = None
    symbol: Optional[str] = None

    @field_validator("atr_pct", "gap_pct")
    @classmethod
    def validate_non_negative(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError(f"Risk percentages must be non-negative, got {v}.")
        return v
