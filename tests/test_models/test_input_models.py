"""Tests for engine input models — validation and normalization."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from trade_confidence.models.event import EventMeta
from trade_confidence.models.market import MarketRiskStats, PriceBar
from trade_confidence.models.pattern import HistoricalPatternContext
from trade_confidence.models.read import EntryPlan, QualitativeRead
from trade_confidence.models.request import ContextRequest, EvaluationRequest
from trade_confidence.taxonomy.signal_taxonomy import Alignment, Direction


class TestEventMeta:
    def test_defaults(self):
        event = EventMeta()
        assert event.independent_updates_count == 1
        assert event.published_at is None
        assert event.sectors == []

    def test_negative_updates_rejected(self):
        with pytest.raises(ValidationError):
            EventMeta(independent_updates_count=-1)

    def test_naive_published_at_becomes_utc(self):
        event = EventMeta(published_at=datetime(2025, 1, 6, 12, 0))
        assert event.published_at == datetime(2025, 1, 6, 12, 0, tzinfo=timezone.utc)

    def test_offset_published_at_converted_to_utc(self):
        plus_three = timezone(timedelta(hours=3))
        event = EventMeta(published_at=datetime(2025, 1, 6, 15, 0, tzinfo=plus_three))
        assert event.published_at.tzinfo == timezone.utc
        assert event.published_at.hour == 12

    def test_iso_string_with_z_suffix(self):
        event = EventMeta.model_validate({"published_at": "2025-01-06T14:00:00Z"})
        assert event.published_at == datetime(2025, 1, 6, 14, 0, tzinfo=timezone.utc)


class TestHistoricalPatternContext:
    def test_all_fields_optional(self):
        ctx = HistoricalPatternContext()
        assert ctx.accuracy is None
        assert ctx.alignment == Alignment.NEUTRAL

    def test_negative_sample_size_rejected(self):
        with pytest.raises(ValidationError):
            HistoricalPatternContext(sample_size=-3)

    def test_out_of_range_accuracy_accepted(self):
        assert HistoricalPatternContext(accuracy=140.0).accuracy == 140.0

    def test_alignment_from_string(self):
        ctx = HistoricalPatternContext.model_validate({"alignment": "headwind"})
        assert ctx.alignment.implied_direction == Direction.SHORT


class TestMarketModels:
    def test_negative_atr_rejected(self):
        with pytest.raises(ValidationError):
            MarketRiskStats(atr_pct=-0.1)

    def test_negative_gap_rejected(self):
        with pytest.raises(ValidationError):
            MarketRiskStats(gap_pct=-2.0)

    def test_zero_values_accepted(self):
        stats = MarketRiskStats(atr_pct=0.0, gap_pct=0.0)
        assert stats.atr_pct == 0.0
        assert stats.gap_pct == 0.0

    def test_bar_low_above_high_rejected(self):
        with pytest.raises(ValidationError, match="must be <= high"):
            PriceBar(day=date(2025, 1, 2), open=10, high=9, low=11, close=10)


class TestQualitativeRead:
    def test_defaults(self):
        read = QualitativeRead()
        assert read.direction == Direction.NONE
        assert read.ambiguity is None
        assert read.entry.level is None
        assert read.invalidation.level is None

    def test_parses_nested_payload(self):
        read = QualitativeRead.model_validate(
            {
                "direction": "SHORT",
                "ambiguity": 0.2,
                "hedged": True,
                "entry": {"type": "limit", "level": 41.5},
                "invalidation": {"level": 43.0},
            }
        )
        assert read.direction == Direction.SHORT
        assert read.entry.type == "limit"
        assert read.invalidation.level == 43.0

    def test_unknown_direction_rejected(self):
        with pytest.raises(ValidationError):
            QualitativeRead.model_validate({"direction": "SIDEWAYS"})


class TestRequests:
    def test_evaluation_request_requires_read(self):
        with pytest.raises(ValidationError):
            EvaluationRequest.model_validate({"event": {}})

    def test_evaluation_request_minimal(self):
        request = EvaluationRequest.model_validate({"qualitative_read": {"direction": "LONG"}})
        assert request.event.independent_updates_count == 1
        assert request.pattern_context is None
        assert request.market_stats is None

    def test_context_request_parses_bars(self):
        request = ContextRequest.model_validate(
            {
                "sectors": [{"name": "Energy", "direction": "bearish", "example_tickers": ["XOM"]}],
                "bars": [{"day": "2025-01-02", "open": 1, "high": 2, "low": 0.5, "close": 1.5}],
            }
        )
        assert request.sectors[0].example_tickers == ["XOM"]
        assert request.bars[0].day == date(2025, 1, 2)


class TestNonFiniteNumbers:
    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_read_ambiguity_rejected(self, value):
        with pytest.raises(ValidationError, match="finite number"):
            QualitativeRead(direction=Direction.LONG, ambiguity=value)

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_entry_and_invalidation_levels_rejected(self, value):
        with pytest.raises(ValidationError):
            QualitativeRead.model_validate({"entry": {"level": value}})
        with pytest.raises(ValidationError):
            QualitativeRead.model_validate({"invalidation": {"level": value}})

    @pytest.mark.parametrize("field", ["atr_pct", "gap_pct"])
    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_market_stats_rejected(self, field, value):
        with pytest.raises(ValidationError, match="finite number"):
            MarketRiskStats(**{field: value})

    @pytest.mark.parametrize("field", ["accuracy", "correlation", "average_move"])
    def test_pattern_stats_rejected(self, field):
        with pytest.raises(ValidationError, match="finite number"):
            HistoricalPatternContext(**{field: float("nan")})

    def test_bar_prices_rejected(self):
        with pytest.raises(ValidationError):
            PriceBar(day=date(2025, 1, 2), open=10, high=float("inf"), low=9, close=10)

    def test_json_nan_token_rejected(self):
        with pytest.raises(ValidationError):
            EvaluationRequest.model_validate_json(
                '{"qualitative_read": {"direction": "LONG", "ambiguity": NaN}}'
            )


class TestEntryType:
    def test_free_text_type_accepted(self):
        read = QualitativeRead.model_validate({"entry": {"type": "breakout", "level": 12.0}})
        assert read.entry.type == "breakout"
        assert not read.entry.is_wait

    @pytest.mark.parametrize("raw", ["wait", "WAIT", " Wait "])
    def test_wait_matched_case_insensitively(self, raw):
        assert EntryPlan(type=raw).is_wait

    def test_missing_type_is_not_wait(self):
        assert not EntryPlan().is_wait
