"""
Aggregation: five component scores → overall confidence and grade.

    overall = round_half_up(wE·E + wC·C + wR·R + wG·G + wF·F)

The weight set depends on whether a historical pattern was usable. Without
one, the echo edge is only a neutral prior, so its weight drops from 0.40
to 0.15 and the remaining components absorb the difference.
"""

from __future__ import annotations

from trade_confidence.models.result import ComponentScores
from trade_confidence.scoring.calibration import (
    GRADE_THRESHOLDS,
    WEIGHTS_WITH_ECHO,
    WEIGHTS_WITHOUT_ECHO,
    WeightSet,
)
from trade_confidence.taxonomy.signal_taxonomy import Grade
from trade_confidence.utils.numeric import round_score


def select_weights(echo_used: bool) -> WeightSet:
    return WEIGHTS_WITH_ECHO if echo_used else WEIGHTS_WITHOUT_ECHO


def compute_overall(components: ComponentScores, echo_used: bool) -> int:
    """Weighted overall confidence in [0, 100]."""
    w = select_weights(echo_used)
    total = (
        w.echo_edge * components.echo_edge
        + w.event_clarity * components.event_clarity
        + w.regime_vol * components.regime_vol
        + w.gap_risk * components.gap_risk
        + w.freshness * components.freshness
    )
    return round_score(total)


def grade_for(overall: int) -> Grade:
    """Map an overall score to its letter grade (A ≥ 85, B ≥ 70, C ≥ 55, else D)."""
    for threshold, grade in GRADE_THRESHOLDS:
        if overall >= threshold:
            return grade
    return Grade.D


def compute_overall_confidence(
    components: ComponentScores,
    echo_used: bool,
) -> tuple[int, Grade]:
    """Return ``(overall, grade)`` for a set of component scores."""
    overall = compute_overall(components, echo_used)
    return overall, grade_for(overall)
