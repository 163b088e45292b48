"""
Presentation layer: turns engine results into text.

Modules
-------
i18n       : Per-locale note catalogs + render_note() / render_notes().
formatters : format_decision() — ASCII block for CLI output.
"""
