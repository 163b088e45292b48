"""
Calibration constants for confidence model version 1.

Every literal the scorers, aggregator, rule cascade and sizing calculator
use lives here. They are versioned configuration, not tunables: changing
any value requires bumping ``engine.model_version`` so downstream caches
keyed on result shape are invalidated.

Weight sets
-----------
    echo used      E .40  C .20  R .15  G .15  F .10
    echo missing   E .15  C .30  R .20  G .20  F .15

Each set must sum to exactly 1.0; ``WeightSet`` refuses to construct
otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from trade_confidence.taxonomy.signal_taxonomy import Grade


@dataclass(frozen=True)
class WeightSet:
    """Aggregation weights for the five components."""

    echo_edge: float
    event_clarity: float
    regime_vol: float
    gap_risk: float
    freshness: float

    def __post_init__(self) -> None:
        total = math.fsum(self.as_tuple())
        if total != 1.0:
            raise ValueError(f"Weights must sum to exactly 1.0, got {total!r}.")

    def as_tuple(self) -> tuple[float, float, float, float, float]:
        return (
            self.echo_edge,
            self.event_clarity,
            self.regime_vol,
            self.gap_risk,
            self.freshness,
        )


WEIGHTS_WITH_ECHO = WeightSet(
    echo_edge=0.40, event_clarity=0.20, regime_vol=0.15, gap_risk=0.15, freshness=0.10,
)
WEIGHTS_WITHOUT_ECHO = WeightSet(
    echo_edge=0.15, event_clarity=0.30, regime_vol=0.20, gap_risk=0.20, freshness=0.15,
)

# ── Grade thresholds (inclusive lower bounds, best first) ─────────────────────
GRADE_THRESHOLDS: tuple[tuple[int, Grade], ...] = (
    (85, Grade.A),
    (70, Grade.B),
    (55, Grade.C),
)

# ── Echo edge ─────────────────────────────────────────────────────────────────
ECHO_FALLBACK_SCORE = 50
ECHO_DEFAULT_ACCURACY_PCT = 50.0
ECHO_ACCURACY_FLOOR = 0.5        # decimal accuracy mapped to 0
ECHO_ACCURACY_SPAN = 0.3         # 0.5 → 0, 0.8 → 100
ECHO_CORRELATION_FULL = 0.6      # |corr| at which the sub-score saturates
ECHO_SAMPLE_FLOOR = 10
ECHO_SAMPLE_SPAN = 40            # saturates at n >= 50
ECHO_MOVE_FLOOR = 0.5
ECHO_MOVE_SPAN = 3.0
ECHO_SUB_WEIGHTS = (0.45, 0.25, 0.20, 0.10)   # accuracy, correlation, sample, move
ECHO_SMALL_SAMPLE_MAX = 20       # 10 <= n < 20 → small
ECHO_VERY_SMALL_SAMPLE_MAX = 10  # n < 10 → very small
ECHO_SMALL_SAMPLE_PENALTY = 8
ECHO_VERY_SMALL_SAMPLE_PENALTY = 15

# ── Event clarity ─────────────────────────────────────────────────────────────
CLARITY_DEFAULT_AMBIGUITY = 0.3
CLARITY_HEDGED_PENALTY = 10
CLARITY_HIGH_AMBIGUITY = 0.6

# ── Regime volatility ─────────────────────────────────────────────────────────
REGIME_FALLBACK_SCORE = 60
REGIME_ATR_FLOOR = 2.0           # 2% ATR → 100
REGIME_ATR_SPAN = 6.0            # 8% ATR → 0
REGIME_ATR_ELEVATED = 5.0

# ── Gap risk ──────────────────────────────────────────────────────────────────
GAP_FALLBACK_SCORE = 65
GAP_FLOOR = 1.0                  # 1% gap → 100
GAP_SPAN = 6.0                   # 7% gap → 0
GAP_LARGE = 3.0

# ── Freshness ─────────────────────────────────────────────────────────────────
FRESHNESS_BASE = 60
FRESHNESS_DEFAULT_UPDATES = 1
FRESHNESS_UPDATE_BONUSES: tuple[tuple[int, int], ...] = ((4, 20), (2, 10))
FRESHNESS_CAP = 90
FRESHNESS_GRACE_HOURS = 24.0
FRESHNESS_DECAY_STEP_HOURS = 12.0
FRESHNESS_DECAY_PER_STEP = 5
FRESHNESS_MAX_AGE_PENALTY = 20
FRESHNESS_FLOOR = 30

# ── Rule cascade ──────────────────────────────────────────────────────────────
RULE_MIN_OVERALL = 55
RULE_MIN_SAMPLE_SIZE = 10
RULE_MIN_ACCURACY = 0.55
RULE_CONFLICT_MIN_SCORE = 75
RULE_MIN_REGIME_VOL = 35
RULE_MIN_GAP_RISK = 35
RULE_MARGINAL_OVERALL_MAX = 70
RULE_WAIT_GAP_RISK_MAX = 50
RULE_WAIT_MIN_CLARITY = 70

# ── Sizing ────────────────────────────────────────────────────────────────────
RISK_PER_TRADE_BY_GRADE: dict[Grade, float] = {
    Grade.A: 1.0,
    Grade.B: 0.5,
    Grade.C: 0.25,
    Grade.D: 0.0,
}
MAX_POSITION_PCT = 15.0
MIN_POSITION_PCT = 1.0
POSITION_SCALE = 10.0
DEFAULT_POSITION_PCT = 3.0
ATR_STOP_MULTIPLE = 1.0
DEFAULT_STOP_DISTANCE_PCT = 3.0


def describe() -> dict[str, object]:
    """Return the calibration set as a plain dict (for ``show-calibration``)."""
    return {
        "weights_with_echo": WEIGHTS_WITH_ECHO.__dict__,
        "weights_without_echo": WEIGHTS_WITHOUT_ECHO.__dict__,
        "grade_thresholds": {str(g): t for t, g in GRADE_THRESHOLDS},
        "fallback_scores": {
            "echo_edge": ECHO_FALLBACK_SCORE,
            "regime_vol": REGIME_FALLBACK_SCORE,
            "gap_risk": GAP_FALLBACK_SCORE,
        },
        "risk_per_trade_by_grade": {str(g): r for g, r in RISK_PER_TRADE_BY_GRADE.items()},
        "max_position_pct": MAX_POSITION_PCT,
        "default_stop_distance_pct": DEFAULT_STOP_DISTANCE_PCT,
    }
