"""
Qualitative read — the language model's classification of one event.

The engine consumes ``direction`` exactly as given and never infers it.
``ambiguity`` and ``hedged`` may be missing on partial reads; the event
clarity scorer applies its own defaults rather than rejecting the read.

``entry.type`` is free text from the model (``"market"``, ``"limit"``,
``"breakout"``, ...). Only ``"wait"`` changes a decision, matched
case-insensitively. NaN and infinite numbers are rejected.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict

from trade_confidence.taxonomy.signal_taxonomy import Direction

WAIT_ENTRY = "wait"


class EntryPlan(BaseModel):
    """Suggested entry: style and (optionally) a price level."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    type: Optional[str] = None
    level: Optional[float] = None

    @property
    def is_wait(self) -> bool:
        return self.type is not None and self.type.strip().lower() == WAIT_ENTRY


class Invalidation(BaseModel):
    """Price level at which the thesis is wrong (the stop)."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    level: Optional[float] = None


class QualitativeRead(BaseModel):
    """Model output for one event.

    Attributes:
        direction: ``LONG``, ``SHORT`` or ``NONE``.
        ambiguity: 0 (crystal clear) to 1 (pure noise); ``None`` when the
            model omitted it.
        hedged: ``True`` when the model hedged its language.
        entry: Suggested entry style and level.
        invalidation: Stop level for the thesis.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    direction: Direction = Direction.NONE
    ambiguity: Optional[float] = None
    hedged: Optional[bool] = None
    entry: EntryPlan = EntryPlan()
    invalidation: Invalidation = Invalidation()
