"""
Signal taxonomy for the trade confidence engine.

Two groups of enums describe every evaluation:
  - Inputs:  ``Direction`` (qualitative read) and ``Alignment`` (historical
    pattern).
  - Outputs: ``Signal``, ``Grade`` and ``AvoidCode``.

Usage example::

    from trade_confidence.taxonomy.signal_taxonomy import Direction, Signal

    direction = Direction.LONG
    signal    = Signal.BUY

This module has NO imports from any other ``trade_confidence`` package.
"""

from enum import StrEnum


class Direction(StrEnum):
    """Directional read of an event produced by the external language model."""

    LONG = "LONG"
    """Buy exposure to the instrument that benefits from the event."""

    SHORT = "SHORT"
    """Sell exposure to the instrument hurt by the event."""

    NONE = "NONE"
    """No directional conviction; the event is noise or already priced in."""


class Alignment(StrEnum):
    """How the historical trigger→echo pattern lines up with the event."""

    TAILWIND = "tailwind"
    """Event sector is bullish for the pair; pattern implies LONG."""

    HEADWIND = "headwind"
    """Event sector is bearish for the pair; pattern implies SHORT."""

    NEUTRAL = "neutral"
    """No directional hint from the pattern."""

    @property
    def implied_direction(self) -> Direction | None:
        """Direction implied by this alignment, or ``None`` for neutral."""
        if self is Alignment.TAILWIND:
            return Direction.LONG
        if self is Alignment.HEADWIND:
            return Direction.SHORT
        return None


class Signal(StrEnum):
    """Final trade decision."""

    BUY = "BUY"
    SELL = "SELL"
    WAIT = "WAIT"
    AVOID = "AVOID"


class Grade(StrEnum):
    """Letter summary of overall confidence (A best, D worst)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"


class AvoidCode(StrEnum):
    """Machine-readable reason attached to AVOID and WAIT signals."""

    AVOID_LOW_CONFIDENCE = "AVOID_LOW_CONFIDENCE"
    """Overall confidence below the tradeable threshold."""

    AVOID_NO_EDGE = "AVOID_NO_EDGE"
    """Historical pattern exists but is too thin or too inaccurate."""

    AVOID_CONFLICT = "AVOID_CONFLICT"
    """Strong pattern and strong read point in opposite directions."""

    AVOID_TOO_VOLATILE = "AVOID_TOO_VOLATILE"
    """Volatility regime too hostile for a position."""

    AVOID_GAP_RISK = "AVOID_GAP_RISK"
    """Recent overnight gaps too large."""

    AVOID_NO_DIRECTION = "AVOID_NO_DIRECTION"
    """No rule fired but the read carries no direction."""

    WAIT_FOR_LEVEL = "WAIT_FOR_LEVEL"
    """Thesis is tradeable but entry should wait for a level or stability."""


# Signals that never carry a position.
FLAT_SIGNALS: frozenset[Signal] = frozenset({Signal.AVOID, Signal.WAIT})
