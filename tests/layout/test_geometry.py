"""
Unit Tests for Layout Geometry

Tests for calculate_layout arithmetic.
"""

import math

import pytest

from compact_study.layout.config import CompactLayoutConfig, PaperSize, TypographyConfig
from compact_study.layout.geometry import calculate_layout, line_height_inches


class TestLineHeight:
    def test_line_height_when_default_typography_then_points_to_inches(self):
        assert line_height_inches(TypographyConfig()) == pytest.approx(10.5 * 1.2 / 72)


class TestCalculateLayout:
    """Tests for calculate_layout function."""

    def test_layout_when_letter_two_columns_then_expected_geometry(self):
        layout = calculate_layout(CompactLayoutConfig(paper_size=PaperSize.LETTER))

        assert layout.page_width == pytest.approx(8.5)
        assert layout.page_height == pytest.approx(11.0)
        assert layout.content_width == pytest.approx(7.0)
        assert layout.content_height == pytest.approx(9.5)
        assert layout.column_width == pytest.approx(3.375)
        assert layout.column_count == 2
        assert layout.effective_line_height == pytest.approx(0.175)
        assert layout.lines_per_column == 54
        assert layout.characters_per_line == 38

    def test_layout_when_a4_default_then_expected_line_counts(self):
        layout = calculate_layout(CompactLayoutConfig())

        assert layout.lines_per_column == 58
        assert layout.characters_per_line == 37

    @pytest.mark.parametrize("columns", [1, 2, 3])
    @pytest.mark.parametrize("paper_size", list(PaperSize))
    def test_layout_when_any_config_then_columns_and_gaps_fill_content_width(self, columns, paper_size):
        config = CompactLayoutConfig(paper_size=paper_size, columns=columns)
        layout = calculate_layout(config)

        total = columns * layout.column_width + (columns - 1) * config.margins.column_gap
        assert total == pytest.approx(layout.content_width)

    def test_layout_when_single_column_then_column_is_content_width(self):
        layout = calculate_layout(CompactLayoutConfig(columns=1))

        assert layout.column_width == pytest.approx(layout.content_width)

    def test_layout_when_computed_then_density_matches_character_budget(self):
        layout = calculate_layout(CompactLayoutConfig(columns=3))

        expected = (
            layout.lines_per_column * layout.column_count * layout.characters_per_line
        ) / (layout.page_width * layout.page_height)
        assert layout.estimated_content_density == pytest.approx(expected)

    def test_layout_when_smaller_font_then_more_lines(self):
        small = calculate_layout(CompactLayoutConfig(typography=TypographyConfig(font_size_pt=8)))
        large = calculate_layout(CompactLayoutConfig(typography=TypographyConfig(font_size_pt=14)))

        assert small.lines_per_column > large.lines_per_column
        assert small.characters_per_line > large.characters_per_line

    def test_layout_when_called_twice_then_identical(self):
        config = CompactLayoutConfig()

        assert calculate_layout(config) == calculate_layout(config)

    def test_lines_per_column_when_computed_then_floor_of_ratio(self):
        layout = calculate_layout(CompactLayoutConfig(paper_size=PaperSize.LEGAL))

        assert layout.lines_per_column == math.floor(layout.content_height / layout.effective_line_height)
