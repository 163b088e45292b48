"""
Tests for context/market_stats.py.

Covers:
  - True range and ATR over a bar history (minimum length enforced).
  - Gap percent of the latest bar, zero gap kept as a real value.
  - build_market_risk_stats: ordering, rounding, unusable histories.
  - select_representative_ticker: ETF → mega-cap → first ticker → SPY.
"""

from __future__ import annotations

from datetime import date

import pytest

from trade_confidence.context.market_stats import (
    build_market_risk_stats,
    compute_atr,
    compute_gap_pct,
    compute_true_range,
    select_representative_ticker,
)
from trade_confidence.models.event import EventSector
from trade_confidence.models.market import PriceBar


def _with_gap_bar(bars: list[PriceBar]) -> list[PriceBar]:
    """Replace the last bar with one that opens 3% above the previous close."""
    last = PriceBar(day=bars[-1].day, open=103.0, high=104.0, low=102.0, close=103.0)
    return [*bars[:-1], last]


class TestTrueRange:
    def test_without_previous_close(self):
        bar = PriceBar(day=date(2025, 1, 2), open=10, high=12, low=9, close=11)
        assert compute_true_range(bar, None) == pytest.approx(3.0)

    def test_gap_extends_range(self):
        bar = PriceBar(day=date(2025, 1, 2), open=14, high=15, low=13.5, close=14.5)
        assert compute_true_range(bar, 10.0) == pytest.approx(5.0)


class TestAtr:
    def test_flat_history(self, flat_bars):
        assert compute_atr(flat_bars, period=14) == pytest.approx(2.0)

    def test_needs_period_plus_one_bars(self, flat_bars):
        assert compute_atr(flat_bars[:14], period=14) is None
        assert compute_atr(flat_bars[:15], period=14) == pytest.approx(2.0)

    def test_uses_only_recent_ranges(self, flat_bars):
        bars = _with_gap_bar(flat_bars)
        # 13 ranges of 2 and one of 4
        assert compute_atr(bars, period=14) == pytest.approx(30 / 14)


class TestGap:
    def test_zero_gap(self, flat_bars):
        assert compute_gap_pct(flat_bars) == pytest.approx(0.0)

    def test_gap_up(self, flat_bars):
        assert compute_gap_pct(_with_gap_bar(flat_bars)) == pytest.approx(3.0)

    def test_single_bar(self, flat_bars):
        assert compute_gap_pct(flat_bars[:1]) is None


class TestBuildMarketRiskStats:
    def test_flat_history(self, flat_bars):
        stats = build_market_risk_stats(flat_bars, symbol="SPY")
        assert stats is not None
        assert stats.atr_pct == pytest.approx(2.0)
        assert stats.gap_pct == 0.0
        assert stats.symbol == "SPY"

    def test_rounded_to_two_decimals(self, flat_bars):
        stats = build_market_risk_stats(_with_gap_bar(flat_bars))
        assert stats.atr_pct == pytest.approx(2.08)
        assert stats.gap_pct == pytest.approx(3.0)

    def test_unordered_bars_are_sorted(self, flat_bars):
        bars = _with_gap_bar(flat_bars)
        assert build_market_risk_stats(list(reversed(bars))) == build_market_risk_stats(bars)

    def test_short_history_returns_none(self, flat_bars):
        assert build_market_risk_stats(flat_bars[:10]) is None

    def test_non_positive_last_close_returns_none(self, flat_bars):
        last = PriceBar(day=date(2024, 12, 31), open=0.0, high=0.0, low=0.0, close=0.0)
        assert build_market_risk_stats([*flat_bars, last]) is None

    def test_atr_missing_when_period_exceeds_history(self, flat_bars):
        stats = build_market_risk_stats(flat_bars, period=30, min_bars=15)
        assert stats.atr_pct is None
        assert stats.gap_pct == 0.0


class TestRepresentativeTicker:
    def test_prefers_etf(self):
        sectors = [EventSector(example_tickers=["NVDA", "xlk"])]
        assert select_representative_ticker(sectors) == "XLK"

    def test_falls_back_to_mega_cap(self):
        sectors = [EventSector(example_tickers=["AMD", "NVDA"])]
        assert select_representative_ticker(sectors) == "NVDA"

    def test_searches_later_sectors(self):
        sectors = [EventSector(example_tickers=["ABC"]), EventSector(example_tickers=["QQQ"])]
        assert select_representative_ticker(sectors) == "QQQ"

    def test_first_ticker_when_nothing_major(self):
        sectors = [EventSector(example_tickers=["abc", "def"])]
        assert select_representative_ticker(sectors) == "ABC"

    def test_spy_when_sectors_have_no_tickers(self):
        assert select_representative_ticker([EventSector(name="Macro")]) == "SPY"

    def test_none_without_sectors(self):
        assert select_representative_ticker([]) is None
