"""
Scoring core: converts event, pattern, read and market inputs into a
BUY/SELL/WAIT/AVOID decision with an explainable confidence breakdown.

Modules
-------
calibration : Versioned constants — weight sets, thresholds, sizing table.
components  : The five component scorers — pure functions, no I/O.
aggregate   : compute_overall_confidence() + grade_for().
rules       : SIGNAL_RULES ordered cascade + decide_signal().
sizing      : compute_sizing_hint() — stop distance tiers and position cap.
engine      : ConfidenceEngine + build_confidence_breakdown() — the entry point.
"""
