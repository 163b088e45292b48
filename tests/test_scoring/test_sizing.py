"""
Tests for stop distance tiers and position sizing.

Covers:
  - Stop tiers: price levels → ATR → default, with the notes each fallback adds.
  - Risk budget per grade; flat signals always size to 0.
  - Position clamped to [1, 15] and rounded half up to 1 decimal.
"""

from __future__ import annotations

import pytest

from trade_confidence.models.market import MarketRiskStats
from trade_confidence.models.note import NoteCode
from trade_confidence.models.read import EntryPlan, Invalidation, QualitativeRead
from trade_confidence.scoring.sizing import compute_sizing_hint, compute_stop_distance
from trade_confidence.taxonomy.signal_taxonomy import Direction, Grade, Signal


def _read(entry: float | None = None, stop: float | None = None) -> QualitativeRead:
    return QualitativeRead(
        direction=Direction.LONG,
        entry=EntryPlan(level=entry),
        invalidation=Invalidation(level=stop),
    )


class TestStopDistance:
    def test_from_price_levels(self):
        pct, notes = compute_stop_distance(_read(100.0, 95.0), MarketRiskStats(atr_pct=3.0))
        assert pct == pytest.approx(5.0)
        assert notes == []

    def test_levels_above_entry_use_magnitude(self):
        pct, _ = compute_stop_distance(_read(100.0, 104.0), None)
        assert pct == pytest.approx(4.0)

    def test_from_atr(self):
        pct, notes = compute_stop_distance(_read(), MarketRiskStats(atr_pct=3.0))
        assert pct == pytest.approx(3.0)
        assert [n.code for n in notes] == [NoteCode.STOP_FROM_ATR]

    def test_default(self):
        pct, notes = compute_stop_distance(_read(), None)
        assert pct == pytest.approx(3.0)
        assert [n.code for n in notes] == [NoteCode.STOP_DEFAULTED]

    def test_equal_levels_fall_through_to_atr(self):
        pct, notes = compute_stop_distance(_read(100.0, 100.0), MarketRiskStats(atr_pct=2.5))
        assert pct == pytest.approx(2.5)
        assert [n.code for n in notes] == [NoteCode.STOP_FROM_ATR]

    def test_zero_atr_falls_through_to_default(self):
        _, notes = compute_stop_distance(_read(), MarketRiskStats(atr_pct=0.0))
        assert [n.code for n in notes] == [NoteCode.STOP_DEFAULTED]

    def test_entry_without_stop_uses_atr(self):
        _, notes = compute_stop_distance(_read(entry=100.0), MarketRiskStats(atr_pct=2.0))
        assert [n.code for n in notes] == [NoteCode.STOP_FROM_ATR]

    def test_missing_read(self):
        pct, _ = compute_stop_distance(None, None)
        assert pct == pytest.approx(3.0)


class TestSizingHint:
    @pytest.mark.parametrize(
        "grade, risk",
        [(Grade.A, 1.0), (Grade.B, 0.5), (Grade.C, 0.25), (Grade.D, 0.0)],
    )
    def test_risk_per_grade(self, grade, risk):
        hint = compute_sizing_hint(grade, Signal.AVOID).hint
        assert hint.risk_per_trade_pct == pytest.approx(risk)

    @pytest.mark.parametrize("signal", [Signal.AVOID, Signal.WAIT])
    def test_flat_signals_size_to_zero(self, signal):
        hint = compute_sizing_hint(Grade.A, signal, _read(100.0, 98.0)).hint
        assert hint.suggested_position_pct == 0.0
        assert hint.stop_distance_pct == pytest.approx(2.0)

    def test_grade_a_two_percent_stop(self):
        hint = compute_sizing_hint(Grade.A, Signal.BUY, _read(100.0, 98.0)).hint
        assert hint.suggested_position_pct == pytest.approx(5.0)

    def test_tight_stop_clamps_to_cap(self):
        hint = compute_sizing_hint(Grade.A, Signal.BUY, _read(100.0, 99.5)).hint
        assert hint.suggested_position_pct == pytest.approx(15.0)
        assert hint.caps.max_position_pct == pytest.approx(15.0)

    def test_small_position_clamps_to_floor(self):
        hint = compute_sizing_hint(Grade.C, Signal.SELL, _read(100.0, 105.0)).hint
        assert hint.suggested_position_pct == pytest.approx(1.0)

    def test_grade_d_directional_still_floors_at_one(self):
        hint = compute_sizing_hint(Grade.D, Signal.BUY, _read(100.0, 95.0)).hint
        assert hint.suggested_position_pct == pytest.approx(1.0)

    def test_rounds_half_up_to_one_decimal(self):
        # 0.25 / 2.0 * 10 = 1.25
        hint = compute_sizing_hint(Grade.C, Signal.BUY, _read(), MarketRiskStats(atr_pct=2.0)).hint
        assert hint.suggested_position_pct == pytest.approx(1.3)

    def test_atr_fallback_note_propagates(self):
        result = compute_sizing_hint(Grade.B, Signal.BUY, _read(), MarketRiskStats(atr_pct=3.0))
        assert result.hint.suggested_position_pct == pytest.approx(1.7)
        assert [n.code for n in result.notes] == [NoteCode.STOP_FROM_ATR]

    def test_stop_rounded_to_one_decimal(self):
        hint = compute_sizing_hint(Grade.B, Signal.BUY, _read(150.0, 146.0)).hint
        # 4 / 150 * 100 = 2.666...
        assert hint.stop_distance_pct == pytest.approx(2.7)
