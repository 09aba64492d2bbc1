"""
Module: layout.geometry

Purpose:
    Deterministic page/column arithmetic for a CompactLayoutConfig.
    Character-density figures use a fixed average glyph width
    (font size x 0.6), an approximation rather than real text metrics.

Key Functions:
    - calculate_layout(): Derive a LayoutCalculation from a config
    - line_height_inches(): Effective line height in inches

Used By:
    - layout.engine
    - layout.estimator
"""

from __future__ import annotations

import math

from compact_study.common.thresholds import HEIGHT_THRESHOLDS

from .config import CompactLayoutConfig, TypographyConfig
from .models import LayoutCalculation


def line_height_inches(typography: TypographyConfig) -> float:
    """Font size x line height, converted from points to inches."""
    return typography.font_size_pt * typography.line_height / HEIGHT_THRESHOLDS.points_per_inch


def calculate_layout(config: CompactLayoutConfig) -> LayoutCalculation:
    """
    Calculate layout dimensions for a configuration.

    Args:
        config: Validated layout configuration

    Returns:
        LayoutCalculation with all lengths in inches

    Example:
        >>> layout = calculate_layout(CompactLayoutConfig())
        >>> layout.column_count
        2
    """
    page_width, page_height = config.paper_size.dimensions
    margins = config.margins
    typography = config.typography
    columns = config.columns

    content_width = page_width - margins.left - margins.right
    content_height = page_height - margins.top - margins.bottom

    total_column_gaps = (columns - 1) * margins.column_gap
    column_width = (content_width - total_column_gaps) / columns

    effective_line_height = line_height_inches(typography)
    lines_per_column = math.floor(content_height / effective_line_height)

    avg_char_width_pt = typography.font_size_pt * HEIGHT_THRESHOLDS.glyph_width_factor
    column_width_pt = column_width * HEIGHT_THRESHOLDS.points_per_inch
    characters_per_line = math.floor(column_width_pt / avg_char_width_pt)

    total_characters = lines_per_column * columns * characters_per_line
    estimated_content_density = total_characters / (page_width * page_height)

    return LayoutCalculation(
        page_width=page_width,
        page_height=page_height,
        content_width=content_width,
        content_height=content_height,
        column_width=column_width,
        column_count=columns,
        effective_line_height=effective_line_height,
        lines_per_column=lines_per_column,
        characters_per_line=characters_per_line,
        estimated_content_density=estimated_content_density,
    )
