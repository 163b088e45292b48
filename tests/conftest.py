"""
Shared pytest fixtures for the trade confidence engine test suite.

Provides:
  - ``as_of``: A fixed evaluation time so freshness scores are reproducible.
  - Sample input factories (event, reads, pattern contexts, market stats)
    used across the scoring, engine and CLI tests.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from trade_confidence.models.event import EventMeta, EventSector
from trade_confidence.models.market import MarketRiskStats, PriceBar
from trade_confidence.models.pattern import HistoricalPatternContext
from trade_confidence.models.read import EntryPlan, QualitativeRead
from trade_confidence.taxonomy.signal_taxonomy import Alignment, Direction

AS_OF = datetime(2025, 1, 6, 15, 0, 0, tzinfo=timezone.utc)


# ── Time ──────────────────────────────────────────────────────────────────────

@pytest.fixture
def as_of() -> datetime:
    """Fixed evaluation time: 2025-01-06 15:00 UTC."""
    return AS_OF


# ── Inputs ────────────────────────────────────────────────────────────────────

@pytest.fixture
def single_source_event() -> EventMeta:
    """One source, no publication time: freshness scores exactly 60."""
    return EventMeta(event_id="evt-single", independent_updates_count=1)


@pytest.fixture
def corroborated_event() -> EventMeta:
    """Four sources, published one hour before ``AS_OF``: freshness 80."""
    return EventMeta(
        event_id="evt-corroborated",
        headline="AMD beats on datacenter revenue",
        published_at=AS_OF - timedelta(hours=1),
        independent_updates_count=4,
        sectors=[
            EventSector(name="Semiconductors", direction="bullish", example_tickers=["AMD", "NVDA"]),
        ],
    )


@pytest.fixture
def long_read() -> QualitativeRead:
    """Clear LONG read (ambiguity 0.1, not hedged), market entry."""
    return QualitativeRead(
        direction=Direction.LONG,
        ambiguity=0.1,
        hedged=False,
        entry=EntryPlan(type="market"),
    )


@pytest.fixture
def strong_pattern() -> HistoricalPatternContext:
    """Pattern whose four sub-scores all saturate: echo edge 100."""
    return HistoricalPatternContext(
        accuracy=80.0,
        correlation=0.6,
        average_move=3.5,
        sample_size=50,
        alignment=Alignment.TAILWIND,
        pair_id="AMD_NVDA",
        trigger="AMD",
        echo="NVDA",
    )


@pytest.fixture
def calm_market() -> MarketRiskStats:
    """ATR 2% and gap 1%: regime and gap risk both score 100."""
    return MarketRiskStats(atr_pct=2.0, gap_pct=1.0, symbol="NVDA")


@pytest.fixture
def moderate_market() -> MarketRiskStats:
    """ATR 3% and gap 1.5%: regime 83, gap risk 92."""
    return MarketRiskStats(atr_pct=3.0, gap_pct=1.5, symbol="SPY")


# ── Bars ──────────────────────────────────────────────────────────────────────

def make_flat_bars(count: int, start_day: int = 1) -> list[PriceBar]:
    """``count`` identical daily bars: open = close = 100, range 99–101."""
    return [
        PriceBar(day=date(2024, 12, start_day + i), open=100.0, high=101.0, low=99.0, close=100.0)
        for i in range(count)
    ]


@pytest.fixture
def flat_bars() -> list[PriceBar]:
    """20 flat bars: ATR 2.0 on a 100 close, zero gap."""
    return make_flat_bars(20)
