"""Centralized threshold and magic number configuration.

This module contains the heuristic constants used by the layout engine
and the cross-reference scorer. Having these in one place makes tuning
easier without touching the control flow that consumes them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class HeightEstimationThresholds:
    """Line-count model used to estimate block heights."""

    points_per_inch: float = 72.0
    glyph_width_factor: float = 0.6  # Average glyph width as a fraction of font size
    avg_chars_per_line: int = 80  # Approximate for academic prose

    heading_lines: float = 1.0
    inline_formula_lines: float = 1.5
    display_formula_lines: float = 3.0  # Multi-line environments (\begin{...})
    min_example_lines: int = 3  # Worked examples never shorter than this
    list_item_lines: float = 1.2  # Slightly more than one line per item

    display_block_marker: str = "\\begin{"
    high_overflow_risk: float = 0.95  # Warn when a column is this close to capacity


@dataclass(frozen=True)
class ConfidenceWeights:
    """Score weights for textual reference matching."""

    exact_title: float = 0.8
    title_words: float = 0.4  # Scaled by the fraction of title words found
    min_title_word_length: int = 3  # Words must be longer than this to count
    formula_keyword: float = 0.3
    example_keyword: float = 0.3
    section_keyword: float = 0.2
    math_indicator: float = 0.2  # equation/formula/identity/law near a formula
    context_fallback_chars: int = 100


# Global instances for easy import
HEIGHT_THRESHOLDS = HeightEstimationThresholds()
CONFIDENCE_WEIGHTS = ConfidenceWeights()
