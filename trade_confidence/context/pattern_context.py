"""
Historical pattern context builder.

Matches an event's tickers against a small set of canonical trigger→echo
pairs and, when one matches, packages its price-echo statistics as a
``HistoricalPatternContext`` for the engine.

Pattern history file format (produced by the offline pattern-history job)::

    {
      "AMD_NVDA": {
        "priceEcho":       {"stats": {"accuracy": 72, "correlation": 0.41,
                                      "avgEchoMove": 1.8, "sampleSize": 24}},
        "fundamentalEcho": {"stats": {"directionAgreement": 75, "avgGapDays": 2}}
      },
      ...
    }

Matching rules
--------------
- A pair matches when ANY of its tickers appears in any sector's
  ``example_tickers`` (case-insensitive) and the history has an entry for it.
- Multiple matches: highest price-echo accuracy wins, ties broken by the
  larger sample size.
- Alignment: the first sector mentioning the trigger or echo ticker with a
  ``bullish``/``bearish`` direction sets tailwind/headwind; otherwise neutral.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from trade_confidence.models.event import EventSector
from trade_confidence.models.pattern import HistoricalPatternContext
from trade_confidence.taxonomy.signal_taxonomy import Alignment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CanonicalPair:
    trigger: str
    echo: str

    @property
    def tickers(self) -> tuple[str, str]:
        return (self.trigger, self.echo)


CANONICAL_PAIRS: dict[str, CanonicalPair] = {
    "AMD_NVDA":  CanonicalPair(trigger="AMD",  echo="NVDA"),
    "JPM_BAC":   CanonicalPair(trigger="JPM",  echo="BAC"),
    "TSLA_F":    CanonicalPair(trigger="TSLA", echo="F"),
    "AAPL_MSFT": CanonicalPair(trigger="AAPL", echo="MSFT"),
    "XOM_CVX":   CanonicalPair(trigger="XOM",  echo="CVX"),
}


@dataclass(frozen=True)
class PairMatch:
    """A canonical pair found in the event, with its raw statistics."""

    pair_id: str
    trigger: str
    echo: str
    price_stats: dict[str, Any]

    @property
    def accuracy(self) -> float:
        return self.price_stats.get("accuracy") or 0.0

    @property
    def sample_size(self) -> int:
        return self.price_stats.get("sampleSize") or 0


def load_pattern_history(path: Path) -> dict[str, Any]:
    """Load the pattern history JSON file.

    A missing file is not an error: it yields an empty history and every
    event evaluates without a pattern context.

    Raises:
        ValueError: If the file exists but is not a JSON object.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Pattern history file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Pattern history must be a JSON object keyed by pair id: {path}")
    return data


def extract_event_tickers(sectors: list[EventSector]) -> set[str]:
    """Return the set of upper-cased tickers mentioned across all sectors."""
    tickers: set[str] = set()
    for sector in sectors:
        for ticker in sector.example_tickers:
            normalized = str(ticker).upper().strip()
            if normalized:
                tickers.add(normalized)
    return tickers


def _price_echo_stats(pair_id: str, pair_data: Any) -> Optional[dict[str, Any]]:
    """Return ``priceEcho.stats`` for one history entry, ``None`` if malformed."""
    node: Any = pair_data
    for key in ("priceEcho", "stats"):
        node = (node.get(key) or {}) if isinstance(node, dict) else None
    if not isinstance(node, dict):
        logger.warning("Skipping malformed pattern history entry %s", pair_id)
        return None
    return node


def find_matching_pair(
    event_tickers: set[str],
    pattern_history: dict[str, Any],
) -> Optional[PairMatch]:
    """Return the best canonical pair present in the event, or ``None``."""
    matches: list[PairMatch] = []

    for pair_id, pair in CANONICAL_PAIRS.items():
        if not any(t in event_tickers for t in pair.tickers):
            continue
        pair_data = pattern_history.get(pair_id)
        if not pair_data:
            continue
        price_stats = _price_echo_stats(pair_id, pair_data)
        if price_stats is None:
            continue
        matches.append(
            PairMatch(
                pair_id=pair_id,
                trigger=pair.trigger,
                echo=pair.echo,
                price_stats=price_stats,
            )
        )

    if not matches:
        return None

    matches.sort(key=lambda m: (m.accuracy, m.sample_size), reverse=True)
    return matches[0]


def determine_alignment(
    sectors: list[EventSector],
    trigger: str,
    echo: str,
) -> Alignment:
    """Derive tailwind/headwind from the first decisive sector mentioning the pair."""
    for sector in sectors:
        tickers = {str(t).upper() for t in sector.example_tickers}
        if trigger not in tickers and echo not in tickers:
            continue
        direction = (sector.direction or "").lower()
        if direction == "bullish":
            return Alignment.TAILWIND
        if direction == "bearish":
            return Alignment.HEADWIND
    return Alignment.NEUTRAL


def build_pattern_context(
    sectors: list[EventSector],
    pattern_history: dict[str, Any],
) -> Optional[HistoricalPatternContext]:
    """Build the engine's pattern context for an event, if any pair matches.

    Args:
        sectors: Sector calls from the event analysis.
        pattern_history: Parsed pattern history (see module docstring).

    Returns:
        ``HistoricalPatternContext`` or ``None`` when the history is empty,
        the event has no tickers, or no canonical pair matches.
    """
    if not pattern_history:
        logger.info("Pattern history is empty, skipping pattern context")
        return None

    tickers = extract_event_tickers(sectors)
    if not tickers:
        logger.info("No tickers found in event, skipping pattern context")
        return None

    match = find_matching_pair(tickers, pattern_history)
    if match is None:
        logger.info("No canonical pair matches tickers %s", sorted(tickers))
        return None

    alignment = determine_alignment(sectors, match.trigger, match.echo)
    logger.info("Matched pair %s (alignment=%s)", match.pair_id, alignment)

    stats = match.price_stats
    return HistoricalPatternContext(
        accuracy=stats.get("accuracy"),
        correlation=stats.get("correlation"),
        average_move=stats.get("avgEchoMove"),
        sample_size=stats.get("sampleSize"),
        alignment=alignment,
        pair_id=match.pair_id,
        trigger=match.trigger,
        echo=match.echo,
    )
