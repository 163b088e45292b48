"""
Market risk stats from daily bars.

Computes the two metrics the engine scores from a vendor's daily OHLC
history (fetching the bars is the caller's job):

    true_range = max(high − low, |high − prev_close|, |low − prev_close|)
    atr        = simple mean of the last ``period`` true ranges
    atr_pct    = atr / last_close × 100
    gap_pct    = |last_open − prev_close| / prev_close × 100

Both values are rounded to 2 decimals. A history shorter than ``min_bars``
or with a non-positive last close yields ``None`` so the engine falls back
to its documented neutral scores.
"""

from __future__ import annotations

import logging
from typing import Optional

from trade_confidence.models.event import EventSector
from trade_confidence.models.market import MarketRiskStats, PriceBar
from trade_confidence.utils.numeric import round_half_up

logger = logging.getLogger(__name__)

MAJOR_ETFS: tuple[str, ...] = (
    "SPY", "QQQ", "XLE", "XLF", "XLK", "XLV", "XLI", "XLU", "XLP", "XLY", "GLD", "TLT",
)
MAJOR_STOCKS: tuple[str, ...] = (
    "AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "META", "TSLA", "JPM", "XOM", "CVX",
)
FALLBACK_TICKER = "SPY"


def compute_true_range(bar: PriceBar, prev_close: Optional[float]) -> float:
    if prev_close is None:
        return bar.high - bar.low
    return max(
        bar.high - bar.low,
        abs(bar.high - prev_close),
        abs(bar.low - prev_close),
    )


def compute_atr(bars: list[PriceBar], period: int = 14) -> Optional[float]:
    """Simple-average true range over the last ``period`` bars.

    Returns ``None`` unless there are at least ``period + 1`` bars (each
    true range needs the previous close).
    """
    if len(bars) < period + 1:
        return None
    true_ranges = [
        compute_true_range(bar, prev.close) for prev, bar in zip(bars, bars[1:])
    ]
    recent = true_ranges[-period:]
    return sum(recent) / period


def compute_gap_pct(bars: list[PriceBar]) -> Optional[float]:
    """Open-vs-previous-close gap of the latest bar, in percent."""
    if len(bars) < 2:
        return None
    prev_close = bars[-2].close
    if prev_close <= 0:
        return None
    return abs(bars[-1].open - prev_close) / prev_close * 100


def select_representative_ticker(sectors: list[EventSector]) -> Optional[str]:
    """Pick the most liquid ticker mentioned by the event.

    Per sector, in order: a major ETF, then a mega-cap stock. If no sector
    names one, the first ticker of the first sector is used, and ``SPY``
    when sectors exist but list no tickers. ``None`` when there are no
    sectors at all.
    """
    if not sectors:
        return None

    for sector in sectors:
        upper = [str(t).upper() for t in sector.example_tickers]
        for ticker in upper:
            if ticker in MAJOR_ETFS:
                return ticker
        for ticker in upper:
            if ticker in MAJOR_STOCKS:
                return ticker

    first = sectors[0].example_tickers
    if first:
        return str(first[0]).upper()
    return FALLBACK_TICKER


def build_market_risk_stats(
    bars: list[PriceBar],
    period: int = 14,
    min_bars: int = 15,
    symbol: Optional[str] = None,
) -> Optional[MarketRiskStats]:
    """Summarize a daily bar history as ``MarketRiskStats``.

    Args:
        bars: Daily bars in any order; sorted by date before use.
        period: ATR look-back in bars.
        min_bars: Minimum history length to produce stats at all.
        symbol: Ticker the bars belong to (carried into the result).

    Returns:
        ``MarketRiskStats`` (either field may be ``None`` individually), or
        ``None`` when the history is unusable.
    """
    if len(bars) < min_bars:
        logger.warning(
            "Insufficient price history for %s: %d bars (need %d)",
            symbol or "<unknown>", len(bars), min_bars,
        )
        return None

    ordered = sorted(bars, key=lambda b: b.day)
    last_close = ordered[-1].close
    if last_close <= 0:
        logger.warning("Non-positive last close for %s, skipping market stats", symbol or "<unknown>")
        return None

    atr = compute_atr(ordered, period)
    gap = compute_gap_pct(ordered)

    atr_pct = round_half_up(atr / last_close * 100, 2) if atr is not None else None
    gap_pct = round_half_up(gap, 2) if gap is not None else None

    return MarketRiskStats(atr_pct=atr_pct, gap_pct=gap_pct, symbol=symbol)
