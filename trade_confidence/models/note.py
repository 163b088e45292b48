"""
Explanation notes — parameterized codes instead of prose.

Scorers, rules and the sizing calculator never emit human-readable strings.
They emit ``Note(code, params)`` values; ``reporting.i18n`` turns them into
text for a given locale. This keeps the scoring core independent of the
presentation language and makes notes assertable in tests::

    Note(code=NoteCode.ECHO_SMALL_SAMPLE_PENALTY,
         params={"sample_size": 14, "penalty": 8})

``params`` values are restricted to JSON scalars so a ``DecisionResult``
stays serializable byte-for-byte.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Union

from pydantic import BaseModel, ConfigDict

NoteParam = Union[int, float, str, None]


class NoteCode(StrEnum):
    """Every explanation the engine can emit."""

    # ── Component notes ───────────────────────────────────────────────────────
    ECHO_DATA_MISSING = "ECHO_DATA_MISSING"
    ECHO_SMALL_SAMPLE_PENALTY = "ECHO_SMALL_SAMPLE_PENALTY"
    ECHO_VERY_SMALL_SAMPLE_PENALTY = "ECHO_VERY_SMALL_SAMPLE_PENALTY"
    CLARITY_HEDGED_PENALTY = "CLARITY_HEDGED_PENALTY"
    CLARITY_HIGH_AMBIGUITY = "CLARITY_HIGH_AMBIGUITY"
    MARKET_STATS_MISSING = "MARKET_STATS_MISSING"
    VOLATILITY_ELEVATED = "VOLATILITY_ELEVATED"
    GAP_DATA_MISSING = "GAP_DATA_MISSING"
    GAP_LARGE = "GAP_LARGE"
    NEWS_AGED_PENALTY = "NEWS_AGED_PENALTY"

    # ── Sizing notes ──────────────────────────────────────────────────────────
    STOP_FROM_ATR = "STOP_FROM_ATR"
    STOP_DEFAULTED = "STOP_DEFAULTED"
    POSITION_DEFAULTED = "POSITION_DEFAULTED"

    # ── Rule explanations ─────────────────────────────────────────────────────
    LOW_CONFIDENCE = "LOW_CONFIDENCE"
    WEAK_COMPONENTS = "WEAK_COMPONENTS"
    ECHO_SAMPLE_TOO_SMALL = "ECHO_SAMPLE_TOO_SMALL"
    INSUFFICIENT_HISTORY = "INSUFFICIENT_HISTORY"
    ECHO_ACCURACY_TOO_LOW = "ECHO_ACCURACY_TOO_LOW"
    PATTERN_UNRELIABLE = "PATTERN_UNRELIABLE"
    DIRECTION_CONFLICT = "DIRECTION_CONFLICT"
    CONFLICT_DIRECTIONS = "CONFLICT_DIRECTIONS"
    CONFLICT_STRONG_BOTH_SIDES = "CONFLICT_STRONG_BOTH_SIDES"
    VOLATILITY_TOO_HIGH = "VOLATILITY_TOO_HIGH"
    UNFAVORABLE_CONDITIONS = "UNFAVORABLE_CONDITIONS"
    GAP_RISK_TOO_HIGH = "GAP_RISK_TOO_HIGH"
    OVERNIGHT_GAP_RISK = "OVERNIGHT_GAP_RISK"
    MARGINAL_CONFIDENCE = "MARGINAL_CONFIDENCE"
    TARGET_ENTRY_LEVEL = "TARGET_ENTRY_LEVEL"
    TARGET_ENTRY_PULLBACK = "TARGET_ENTRY_PULLBACK"
    STRONG_THESIS_GAP_RISK = "STRONG_THESIS_GAP_RISK"
    WAIT_FOR_STABILITY = "WAIT_FOR_STABILITY"
    NO_DIRECTION = "NO_DIRECTION"


class Note(BaseModel):
    """One explanation code plus the values it should be rendered with."""

    model_config = ConfigDict(frozen=True)

    code: NoteCode
    params: dict[str, NoteParam] = {}


def note(code: NoteCode, **params: NoteParam) -> Note:
    """Shorthand constructor: ``note(NoteCode.GAP_LARGE, gap_pct=3.4)``."""
    return Note(code=code, params=params)
