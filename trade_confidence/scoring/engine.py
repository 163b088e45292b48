"""
Confidence engine: the single entry point external callers use.

Data flows one way::

    inputs ─► 5 component scorers ─► aggregator ─► rule cascade ─► sizing ─► DecisionResult

``ConfidenceEngine`` holds only immutable configuration (the calibration
``model_version``), so one instance can serve concurrent callers on any
number of threads. Evaluation time is an argument: pass ``as_of`` to get
reproducible freshness scores.

Usage::

    engine = ConfidenceEngine.from_config(load_config())
    result = engine.evaluate(event, read, pattern_context=ctx, market_stats=stats,
                             as_of=datetime(2025, 1, 6, 15, tzinfo=timezone.utc))
    result.signal            # Signal.BUY
    result.confidence.grade  # Grade.B
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from trade_confidence.models.event import EventMeta
from trade_confidence.models.market import MarketRiskStats
from trade_confidence.models.pattern import HistoricalPatternContext
from trade_confidence.models.read import QualitativeRead
from trade_confidence.models.result import (
    ComponentScores,
    ConfidenceBreakdown,
    DecisionResult,
    ResultMeta,
)
from trade_confidence.scoring.aggregate import compute_overall_confidence
from trade_confidence.scoring.components import (
    score_echo_edge,
    score_event_clarity,
    score_freshness,
    score_gap_risk,
    score_regime_vol,
)
from trade_confidence.scoring.rules import RuleContext, decide_signal
from trade_confidence.scoring.sizing import compute_sizing_hint
from trade_confidence.utils.time_utils import ensure_utc, utcnow

if TYPE_CHECKING:
    from trade_confidence.config import AppConfig

logger = logging.getLogger(__name__)


class ConfidenceEngine:
    """Deterministic signal → decision transformer.

    Args:
        model_version: Calibration version threaded into every result's
            ``meta.model_version``. Must be >= 1.
    """

    def __init__(self, model_version: int = 1) -> None:
        if model_version < 1:
            raise ValueError(f"model_version must be >= 1, got {model_version}.")
        self._model_version = model_version

    @classmethod
    def from_config(cls, config: "AppConfig") -> "ConfidenceEngine":
        return cls(model_version=config.engine.model_version)

    @property
    def model_version(self) -> int:
        return self._model_version

    def evaluate(
        self,
        event: Optional[EventMeta],
        qualitative_read: QualitativeRead,
        pattern_context: Optional[HistoricalPatternContext] = None,
        market_stats: Optional[MarketRiskStats] = None,
        as_of: Optional[datetime] = None,
    ) -> DecisionResult:
        """Score the inputs and decide a signal.

        Args:
            event: Triggering event metadata (``None`` = single source,
                unknown publication time).
            qualitative_read: The model's read of the event. Required.
            pattern_context: Historical pattern statistics, if a pair matched.
            market_stats: ATR% / gap% for the target instrument, if available.
            as_of: Evaluation time for the freshness age. Defaults to now.

        Returns:
            Immutable ``DecisionResult``.

        Raises:
            ValueError: If ``qualitative_read`` is ``None``.
        """
        if qualitative_read is None:
            raise ValueError("qualitative_read is required; validate inputs before evaluating.")

        evaluated_at = ensure_utc(as_of) if as_of is not None else utcnow()

        echo = score_echo_edge(pattern_context)
        clarity = score_event_clarity(qualitative_read)
        regime = score_regime_vol(market_stats)
        gap = score_gap_risk(market_stats)
        freshness = score_freshness(event, evaluated_at)

        components = ComponentScores(
            echo_edge=echo.score,
            event_clarity=clarity.score,
            regime_vol=regime.score,
            gap_risk=gap.score,
            freshness=freshness.score,
        )
        notes = [
            *echo.notes,
            *clarity.notes,
            *regime.notes,
            *gap.notes,
            *freshness.notes,
        ]

        overall, grade = compute_overall_confidence(components, echo.used)

        outcome = decide_signal(
            RuleContext(
                components=components,
                overall=overall,
                pattern=pattern_context,
                read=qualitative_read,
                market=market_stats,
            )
        )

        sizing = compute_sizing_hint(grade, outcome.signal, qualitative_read, market_stats)
        notes.extend(sizing.notes)

        event_id = event.event_id if event is not None else None
        rule = outcome.rule_name or "direction"
        logger.debug(
            "Evaluated event %s: signal=%s overall=%d grade=%s rule=%s",
            event_id, outcome.signal, overall, grade, rule,
            extra={
                "event_id": event_id,
                "signal": str(outcome.signal),
                "avoid_code": str(outcome.avoid_code) if outcome.avoid_code else None,
                "overall": overall,
                "grade": str(grade),
                "rule": rule,
                "model_version": self._model_version,
            },
        )

        return DecisionResult(
            signal=outcome.signal,
            avoid_code=outcome.avoid_code,
            explain=list(outcome.explain),
            confidence=ConfidenceBreakdown(
                overall=overall,
                grade=grade,
                components=components,
                notes=notes,
            ),
            sizing_hint=sizing.hint,
            meta=ResultMeta(
                model_version=self._model_version,
                echo_used=echo.used,
                market_stats_used=regime.used,
            ),
        )


def build_confidence_breakdown(
    event: Optional[EventMeta],
    pattern_context: Optional[HistoricalPatternContext],
    qualitative_read: QualitativeRead,
    market_stats: Optional[MarketRiskStats] = None,
    *,
    model_version: int = 1,
    as_of: Optional[datetime] = None,
) -> DecisionResult:
    """Functional form of ``ConfidenceEngine(model_version).evaluate(...)``."""
    return ConfidenceEngine(model_version=model_version).evaluate(
        event,
        qualitative_read,
        pattern_context=pattern_context,
        market_stats=market_stats,
        as_of=as_of,
    )
