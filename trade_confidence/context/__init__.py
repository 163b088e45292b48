"""
Context builders: prepare optional engine inputs from raw reference data,
and measure decisions against the bars that followed.

Modules
-------
pattern_context : CANONICAL_PAIRS + build_pattern_context() — matches event
                  tickers against the pattern history file.
market_stats    : build_market_risk_stats() — ATR% and gap% from daily bars,
                  plus select_representative_ticker().
outcome         : build_outcome_record() — 1D/3D/5D returns, worst adverse
                  excursion and stop-outs of a signal, keyed by build_signal_id().

None of these modules performs network I/O; callers supply the history and bars.
"""
