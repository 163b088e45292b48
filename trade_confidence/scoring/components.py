"""
Component scorers: each maps one input slice to a 0–100 score plus notes.

Component explanations
----------------------
echo_edge (E):
    Strength of the historical trigger→echo pattern. Weighted blend of
    accuracy, |correlation|, sample size and |average move| sub-scores,
    minus a small-sample penalty. No pattern → neutral prior 50.

event_clarity (C):
    How unambiguous the model's read is: (1 − ambiguity) × 100, −10 if the
    read was hedged.

regime_vol (R):
    Volatility regime from ATR%: 2% → 100, 8%+ → 0, linear between.
    No ATR → 60.

gap_risk (G):
    Overnight gap risk from gap%: 1% → 100, 7%+ → 0. No gap data → 65.

freshness (F):
    Base 60, corroboration bonus (+10 / +20), capped at 90, then an age
    penalty of 5 per 12h beyond the first 24h (max 20, floor 30).

All scorers are pure functions; ``score_freshness`` takes the evaluation
time as an argument instead of reading the clock.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from trade_confidence.models.event import EventMeta
from trade_confidence.models.market import MarketRiskStats
from trade_confidence.models.note import Note, NoteCode, note
from trade_confidence.models.pattern import HistoricalPatternContext
from trade_confidence.models.read import QualitativeRead
from trade_confidence.scoring import calibration as cal
from trade_confidence.utils.numeric import clamp, clamp01, round_half_up, round_score
from trade_confidence.utils.time_utils import hours_between


@dataclass
class ComponentResult:
    """One scorer's output.

    Attributes:
        score: Integer score in [0, 100].
        notes: Explanation notes, in emission order.
        used: ``False`` when the source data was missing and a fallback
            score was returned.
    """

    score: int
    notes: list[Note] = field(default_factory=list)
    used: bool = True


# ── Echo edge ─────────────────────────────────────────────────────────────────

def score_echo_edge(context: Optional[HistoricalPatternContext]) -> ComponentResult:
    """Score the historical pattern, or return the neutral prior when absent."""
    if context is None:
        return ComponentResult(
            score=cal.ECHO_FALLBACK_SCORE,
            notes=[note(NoteCode.ECHO_DATA_MISSING)],
            used=False,
        )

    notes: list[Note] = []

    accuracy = context.accuracy if context.accuracy is not None else cal.ECHO_DEFAULT_ACCURACY_PCT
    correlation = context.correlation or 0.0
    sample_size = context.sample_size or 0
    average_move = context.average_move or 0.0

    acc_score = clamp01((accuracy / 100.0 - cal.ECHO_ACCURACY_FLOOR) / cal.ECHO_ACCURACY_SPAN) * 100
    corr_score = clamp01(abs(correlation) / cal.ECHO_CORRELATION_FULL) * 100
    sample_score = clamp01((sample_size - cal.ECHO_SAMPLE_FLOOR) / cal.ECHO_SAMPLE_SPAN) * 100
    move_score = clamp01((abs(average_move) - cal.ECHO_MOVE_FLOOR) / cal.ECHO_MOVE_SPAN) * 100

    w_acc, w_corr, w_sample, w_move = cal.ECHO_SUB_WEIGHTS
    score = w_acc * acc_score + w_corr * corr_score + w_sample * sample_score + w_move * move_score

    if cal.ECHO_VERY_SMALL_SAMPLE_MAX <= sample_size < cal.ECHO_SMALL_SAMPLE_MAX:
        penalty = cal.ECHO_SMALL_SAMPLE_PENALTY
        score = max(0.0, score - penalty)
        notes.append(note(NoteCode.ECHO_SMALL_SAMPLE_PENALTY, sample_size=sample_size, penalty=penalty))
    elif sample_size < cal.ECHO_VERY_SMALL_SAMPLE_MAX:
        penalty = cal.ECHO_VERY_SMALL_SAMPLE_PENALTY
        score = max(0.0, score - penalty)
        notes.append(
            note(NoteCode.ECHO_VERY_SMALL_SAMPLE_PENALTY, sample_size=sample_size, penalty=penalty)
        )

    return ComponentResult(score=round_score(score), notes=notes, used=True)


# ── Event clarity ─────────────────────────────────────────────────────────────

def score_event_clarity(read: Optional[QualitativeRead]) -> ComponentResult:
    """Score how unambiguous the qualitative read is.

    A missing read, or one without ``ambiguity``/``hedged``, is scored as
    moderately ambiguous and unhedged.
    """
    notes: list[Note] = []
    ambiguity = cal.CLARITY_DEFAULT_AMBIGUITY
    hedged = False
    if read is not None:
        if read.ambiguity is not None:
            ambiguity = read.ambiguity
        hedged = bool(read.hedged)

    score = (1.0 - ambiguity) * 100

    if hedged:
        penalty = cal.CLARITY_HEDGED_PENALTY
        score = max(0.0, score - penalty)
        notes.append(note(NoteCode.CLARITY_HEDGED_PENALTY, penalty=penalty))

    if ambiguity >= cal.CLARITY_HIGH_AMBIGUITY:
        notes.append(note(NoteCode.CLARITY_HIGH_AMBIGUITY, ambiguity=round_half_up(ambiguity, 2)))

    return ComponentResult(score=round_score(score), notes=notes)


# ── Regime volatility ─────────────────────────────────────────────────────────

def score_regime_vol(stats: Optional[MarketRiskStats]) -> ComponentResult:
    """Score the volatility regime from ATR%."""
    if stats is None or stats.atr_pct is None:
        return ComponentResult(
            score=cal.REGIME_FALLBACK_SCORE,
            notes=[note(NoteCode.MARKET_STATS_MISSING)],
            used=False,
        )

    atr_pct = stats.atr_pct
    score = 100 - clamp01((atr_pct - cal.REGIME_ATR_FLOOR) / cal.REGIME_ATR_SPAN) * 100

    notes: list[Note] = []
    if atr_pct >= cal.REGIME_ATR_ELEVATED:
        notes.append(note(NoteCode.VOLATILITY_ELEVATED, atr_pct=round_half_up(atr_pct, 1)))

    return ComponentResult(score=round_score(score), notes=notes)


# ── Gap risk ──────────────────────────────────────────────────────────────────

def score_gap_risk(stats: Optional[MarketRiskStats]) -> ComponentResult:
    """Score overnight gap risk from the latest gap%."""
    if stats is None or stats.gap_pct is None:
        return ComponentResult(
            score=cal.GAP_FALLBACK_SCORE,
            notes=[note(NoteCode.GAP_DATA_MISSING)],
            used=False,
        )

    gap_pct = stats.gap_pct
    score = 100 - clamp01((gap_pct - cal.GAP_FLOOR) / cal.GAP_SPAN) * 100

    notes: list[Note] = []
    if gap_pct >= cal.GAP_LARGE:
        notes.append(note(NoteCode.GAP_LARGE, gap_pct=round_half_up(gap_pct, 1)))

    return ComponentResult(score=round_score(score), notes=notes)


# ── Freshness ─────────────────────────────────────────────────────────────────

def score_freshness(event: Optional[EventMeta], as_of: datetime) -> ComponentResult:
    """Score recency and corroboration of the triggering event.

    Args:
        event: Event metadata; ``None`` scores as a single-source event with
            no publication time.
        as_of: Evaluation time the event age is measured against.
    """
    notes: list[Note] = []
    score = float(cal.FRESHNESS_BASE)

    updates = event.independent_updates_count if event is not None else cal.FRESHNESS_DEFAULT_UPDATES
    for min_updates, bonus in cal.FRESHNESS_UPDATE_BONUSES:
        if updates >= min_updates:
            score += bonus
            break

    score = min(float(cal.FRESHNESS_CAP), score)

    if event is not None and event.published_at is not None:
        age_hours = hours_between(event.published_at, as_of)
        if age_hours > cal.FRESHNESS_GRACE_HOURS:
            steps = math.floor((age_hours - cal.FRESHNESS_GRACE_HOURS) / cal.FRESHNESS_DECAY_STEP_HOURS)
            penalty = min(cal.FRESHNESS_MAX_AGE_PENALTY, steps * cal.FRESHNESS_DECAY_PER_STEP)
            score = max(float(cal.FRESHNESS_FLOOR), score - penalty)
            notes.append(
                note(
                    NoteCode.NEWS_AGED_PENALTY,
                    age_hours=int(round_half_up(age_hours)),
                    penalty=penalty,
                )
            )

    return ComponentResult(score=round_score(clamp(score, 0, 100)), notes=notes)
