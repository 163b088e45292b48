"""
Signal rule cascade: ordered AVOID/WAIT overrides, first match wins.

Rules (evaluated in order; the first matching rule decides):
    1. low_confidence          overall < 55                         → AVOID_LOW_CONFIDENCE
    2. small_sample            pattern present, sample_size < 10     → AVOID_NO_EDGE
       low_accuracy            pattern present, accuracy < 55%       → AVOID_NO_EDGE
    3. direction_conflict      pattern vs read disagree, E>75, C>75  → AVOID_CONFLICT
    4. too_volatile            regime_vol < 35                       → AVOID_TOO_VOLATILE
    5. gap_risk                gap_risk < 35                         → AVOID_GAP_RISK
    6. marginal_confidence     55 <= overall < 70 with an entry plan → WAIT_FOR_LEVEL
    7. gap_risk_strong_thesis  gap_risk < 50 and clarity > 70        → WAIT_FOR_LEVEL

If no rule matches, ``resolve_direction`` maps the read's direction to
BUY/SELL, or AVOID_NO_DIRECTION when the read has none.

The order is the contract: the edge checks (1–2) run before the market
checks (3–5), and no WAIT rule is reached once any AVOID rule matched.
Each rule is an independent ``SignalRule`` so it can be tested in isolation
via ``rule.matches(ctx)``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Optional

from trade_confidence.models.market import MarketRiskStats
from trade_confidence.models.note import Note, NoteCode, note
from trade_confidence.models.pattern import HistoricalPatternContext
from trade_confidence.models.read import QualitativeRead
from trade_confidence.models.result import ComponentScores
from trade_confidence.scoring import calibration as cal
from trade_confidence.taxonomy.signal_taxonomy import (
    AvoidCode,
    Direction,
    Signal,
)


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at."""

    components: ComponentScores
    overall: int
    pattern: Optional[HistoricalPatternContext] = None
    read: Optional[QualitativeRead] = None
    market: Optional[MarketRiskStats] = None


@dataclass(frozen=True)
class SignalOutcome:
    """Decision produced by a rule or by the directional fallback."""

    signal: Signal
    avoid_code: Optional[AvoidCode]
    explain: list[Note] = field(default_factory=list)
    rule_name: Optional[str] = None


@dataclass(frozen=True)
class SignalRule:
    """One predicate → outcome entry in the cascade."""

    name: str
    signal: Signal
    avoid_code: AvoidCode
    predicate: Callable[[RuleContext], bool]
    explain: Callable[[RuleContext], list[Note]]

    def matches(self, ctx: RuleContext) -> bool:
        return self.predicate(ctx)

    def outcome(self, ctx: RuleContext) -> SignalOutcome:
        return SignalOutcome(
            signal=self.signal,
            avoid_code=self.avoid_code,
            explain=self.explain(ctx),
            rule_name=self.name,
        )


# ── Predicates ────────────────────────────────────────────────────────────────

def _sample_size(ctx: RuleContext) -> int:
    return (ctx.pattern.sample_size or 0) if ctx.pattern is not None else 0


def _accuracy_pct(ctx: RuleContext) -> float:
    if ctx.pattern is None or ctx.pattern.accuracy is None:
        return 0.0
    return ctx.pattern.accuracy


def _conflicting_directions(ctx: RuleContext) -> Optional[tuple[Direction, Direction]]:
    """Return ``(pattern_direction, read_direction)`` when they disagree."""
    if ctx.pattern is None or ctx.read is None:
        return None
    pattern_direction = ctx.pattern.alignment.implied_direction
    read_direction = ctx.read.direction
    if pattern_direction is None or read_direction is Direction.NONE:
        return None
    if pattern_direction == read_direction:
        return None
    return pattern_direction, read_direction


def _entry_level(ctx: RuleContext) -> Optional[float]:
    return ctx.read.entry.level if ctx.read is not None else None


def _has_entry_plan(ctx: RuleContext) -> bool:
    if ctx.read is None:
        return False
    level = ctx.read.entry.level
    return ctx.read.entry.is_wait or (level is not None and level > 0)


def _is_conflict(ctx: RuleContext) -> bool:
    return (
        _conflicting_directions(ctx) is not None
        and ctx.components.echo_edge > cal.RULE_CONFLICT_MIN_SCORE
        and ctx.components.event_clarity > cal.RULE_CONFLICT_MIN_SCORE
    )


def _conflict_notes(ctx: RuleContext) -> list[Note]:
    directions = _conflicting_directions(ctx)
    if directions is None:
        return [note(NoteCode.DIRECTION_CONFLICT)]
    pattern_direction, read_direction = directions
    return [
        note(NoteCode.DIRECTION_CONFLICT),
        note(
            NoteCode.CONFLICT_DIRECTIONS,
            pattern_direction=str(pattern_direction),
            read_direction=str(read_direction),
        ),
        note(NoteCode.CONFLICT_STRONG_BOTH_SIDES),
    ]


def _marginal_notes(ctx: RuleContext) -> list[Note]:
    level = _entry_level(ctx)
    target = (
        note(NoteCode.TARGET_ENTRY_LEVEL, level=level)
        if level
        else note(NoteCode.TARGET_ENTRY_PULLBACK)
    )
    return [note(NoteCode.MARGINAL_CONFIDENCE, overall=ctx.overall), target]


# ── The cascade ───────────────────────────────────────────────────────────────

SIGNAL_RULES: tuple[SignalRule, ...] = (
    SignalRule(
        name="low_confidence",
        signal=Signal.AVOID,
        avoid_code=AvoidCode.AVOID_LOW_CONFIDENCE,
        predicate=lambda ctx: ctx.overall < cal.RULE_MIN_OVERALL,
        explain=lambda ctx: [
            note(NoteCode.LOW_CONFIDENCE, overall=ctx.overall),
            note(NoteCode.WEAK_COMPONENTS),
        ],
    ),
    SignalRule(
        name="small_sample",
        signal=Signal.AVOID,
        avoid_code=AvoidCode.AVOID_NO_EDGE,
        predicate=lambda ctx: ctx.pattern is not None and _sample_size(ctx) < cal.RULE_MIN_SAMPLE_SIZE,
        explain=lambda ctx: [
            note(NoteCode.ECHO_SAMPLE_TOO_SMALL, sample_size=_sample_size(ctx)),
            note(NoteCode.INSUFFICIENT_HISTORY),
        ],
    ),
    SignalRule(
        name="low_accuracy",
        signal=Signal.AVOID,
        avoid_code=AvoidCode.AVOID_NO_EDGE,
        predicate=lambda ctx: (
            ctx.pattern is not None and _accuracy_pct(ctx) / 100.0 < cal.RULE_MIN_ACCURACY
        ),
        explain=lambda ctx: [
            note(NoteCode.ECHO_ACCURACY_TOO_LOW, accuracy=_accuracy_pct(ctx)),
            note(NoteCode.PATTERN_UNRELIABLE),
        ],
    ),
    SignalRule(
        name="direction_conflict",
        signal=Signal.AVOID,
        avoid_code=AvoidCode.AVOID_CONFLICT,
        predicate=_is_conflict,
        explain=_conflict_notes,
    ),
    SignalRule(
        name="too_volatile",
        signal=Signal.AVOID,
        avoid_code=AvoidCode.AVOID_TOO_VOLATILE,
        predicate=lambda ctx: ctx.components.regime_vol < cal.RULE_MIN_REGIME_VOL,
        explain=lambda ctx: [
            note(NoteCode.VOLATILITY_TOO_HIGH, regime_vol=ctx.components.regime_vol),
            note(NoteCode.UNFAVORABLE_CONDITIONS),
        ],
    ),
    SignalRule(
        name="gap_risk",
        signal=Signal.AVOID,
        avoid_code=AvoidCode.AVOID_GAP_RISK,
        predicate=lambda ctx: ctx.components.gap_risk < cal.RULE_MIN_GAP_RISK,
        explain=lambda ctx: [
            note(NoteCode.GAP_RISK_TOO_HIGH, gap_risk=ctx.components.gap_risk),
            note(NoteCode.OVERNIGHT_GAP_RISK),
        ],
    ),
    SignalRule(
        name="marginal_confidence",
        signal=Signal.WAIT,
        avoid_code=AvoidCode.WAIT_FOR_LEVEL,
        predicate=lambda ctx: (
            cal.RULE_MIN_OVERALL <= ctx.overall < cal.RULE_MARGINAL_OVERALL_MAX
            and _has_entry_plan(ctx)
        ),
        explain=_marginal_notes,
    ),
    SignalRule(
        name="gap_risk_strong_thesis",
        signal=Signal.WAIT,
        avoid_code=AvoidCode.WAIT_FOR_LEVEL,
        predicate=lambda ctx: (
            ctx.components.gap_risk < cal.RULE_WAIT_GAP_RISK_MAX
            and ctx.components.event_clarity > cal.RULE_WAIT_MIN_CLARITY
        ),
        explain=lambda ctx: [
            note(NoteCode.STRONG_THESIS_GAP_RISK),
            note(NoteCode.WAIT_FOR_STABILITY),
        ],
    ),
)


def evaluate_signal_rules(
    ctx: RuleContext,
    rules: tuple[SignalRule, ...] = SIGNAL_RULES,
) -> Optional[SignalOutcome]:
    """Return the outcome of the first matching rule, or ``None`` if none match."""
    for rule in rules:
        if rule.matches(ctx):
            return rule.outcome(ctx)
    return None


def resolve_direction(read: Optional[QualitativeRead]) -> SignalOutcome:
    """Fallback when no rule fired: trade the read's direction, if any."""
    direction = read.direction if read is not None else Direction.NONE
    if direction is Direction.LONG:
        return SignalOutcome(signal=Signal.BUY, avoid_code=None)
    if direction is Direction.SHORT:
        return SignalOutcome(signal=Signal.SELL, avoid_code=None)
    return SignalOutcome(
        signal=Signal.AVOID,
        avoid_code=AvoidCode.AVOID_NO_DIRECTION,
        explain=[note(NoteCode.NO_DIRECTION)],
    )


def decide_signal(ctx: RuleContext) -> SignalOutcome:
    """Run the cascade, falling back to the read's direction."""
    outcome = evaluate_signal_rules(ctx)
    if outcome is not None:
        return outcome
    return resolve_direction(ctx.read)
