"""
Small numeric helpers shared by the scorers.

``round_half_up`` exists because Python's built-in ``round`` uses banker's
rounding (``round(72.5) == 72``); every calibrated threshold in the model
was set against half-up rounding (``72.5 → 73``).
"""

from __future__ import annotations

import math


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` decimals, ties toward +infinity.

    Args:
        value: Number to round.
        digits: Decimal places to keep (0 for whole numbers).

    Returns:
        The rounded value as a float.
    """
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_score(value: float) -> int:
    """Round a 0–100 score to the nearest integer (half up) and clamp it."""
    return int(clamp(round_half_up(value), 0, 100))
