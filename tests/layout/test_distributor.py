"""
Unit Tests for Column Distribution

Tests for priority placement, overflow splitting and distribution metrics.
"""

import logging

import pytest

from compact_study.layout.distributor import distribute_content, sort_by_priority
from compact_study.layout.errors import LayoutError, LayoutErrorCode
from compact_study.layout.models import BlockType
from compact_study.layout.splitter import split_content_block_at_words


def _ids(distribution):
    return [[b.id for b in column.blocks] for column in distribution.columns]


class TestOverflowScenario:
    """Three 5-unit blocks into two columns of capacity 8."""

    def test_distribute_when_third_block_breakable_then_split_across_columns(self, make_block):
        blocks = [make_block(f"b{i}", 5.0) for i in (1, 2, 3)]

        dist = distribute_content(blocks, column_count=2, capacity=8.0)

        assert _ids(dist) == [["b1", "b3_part1"], ["b2", "b3_part2"]]
        assert [c.estimated_height for c in dist.columns] == pytest.approx([8.0, 7.0])
        assert dist.total_height == pytest.approx(8.0)

    def test_distribute_when_split_then_parts_partition_original(self, make_block):
        blocks = [make_block(f"b{i}", 5.0) for i in (1, 2, 3)]

        dist = distribute_content(blocks, column_count=2, capacity=8.0)

        placed = {b.id: b for column in dist.columns for b in column.blocks}
        assert placed["b3_part1"].content + placed["b3_part2"].content == blocks[2].content
        assert placed["b3_part1"].estimated_height + placed["b3_part2"].estimated_height == pytest.approx(5.0)

    def test_distribute_when_third_block_not_breakable_then_column_overflow(self, make_block):
        blocks = [make_block(f"b{i}", 5.0, breakable=False) for i in (1, 2, 3)]

        with pytest.raises(LayoutError) as exc_info:
            distribute_content(blocks, column_count=2, capacity=8.0)

        assert exc_info.value.code == LayoutErrorCode.COLUMN_OVERFLOW
        assert exc_info.value.block_id == "b3"
        assert exc_info.value.content_type == "text"
        assert exc_info.value.suggestion


class TestPlacement:
    """Tests for priority ordering and column choice."""

    def test_distribute_when_single_block_then_first_column(self, make_block):
        dist = distribute_content([make_block("only", 1.0)], column_count=3, capacity=8.0)

        assert _ids(dist) == [["only"], [], []]

    def test_distribute_when_mixed_priorities_then_higher_placed_first(self, make_block):
        blocks = [
            make_block("text", 1.0, priority=5),
            make_block("heading", 1.0, priority=10, block_type=BlockType.HEADING),
        ]

        dist = distribute_content(blocks, column_count=2, capacity=8.0)

        assert _ids(dist) == [["heading"], ["text"]]

    def test_distribute_when_equal_priorities_then_input_order_kept(self, make_block):
        blocks = [make_block(name, 1.0) for name in ("a", "b", "c", "d")]

        dist = distribute_content(blocks, column_count=2, capacity=8.0)

        assert _ids(dist) == [["a", "c"], ["b", "d"]]

    def test_distribute_when_columns_differ_then_least_filled_fitting_column_chosen(self, make_block):
        blocks = [
            make_block("tall", 6.0, breakable=False, priority=9),
            make_block("short", 1.0, breakable=False, priority=8),
            make_block("mid", 6.5, breakable=False, priority=7),
        ]

        dist = distribute_content(blocks, column_count=2, capacity=8.0)

        assert _ids(dist) == [["tall"], ["short", "mid"]]
        assert dist.column_of("mid") == 1

    def test_sort_by_priority_when_ties_then_stable(self, make_block):
        blocks = [make_block("x", 1, priority=5), make_block("y", 1, priority=9), make_block("z", 1, priority=5)]

        assert [b.id for b in sort_by_priority(blocks)] == ["y", "x", "z"]


class TestInvariants:
    """Tests for capacity, determinism and input validation."""

    @pytest.fixture
    def mixed_blocks(self, make_block):
        heights = [0.8, 2.4, 1.1, 3.3, 0.4, 2.9, 1.7, 0.6, 2.2, 1.5]
        return [
            make_block(f"blk{i}", h, breakable=(i % 3 == 0), priority=(10 - i % 4))
            for i, h in enumerate(heights)
        ]

    def test_distribute_when_placed_then_no_column_exceeds_capacity(self, mixed_blocks):
        dist = distribute_content(mixed_blocks, column_count=3, capacity=6.0)

        for column in dist.columns:
            assert column.estimated_height <= 6.0 + 1e-9
            assert column.estimated_height == pytest.approx(sum(b.estimated_height for b in column.blocks))

    def test_distribute_when_called_twice_then_identical(self, mixed_blocks):
        first = distribute_content(mixed_blocks, column_count=3, capacity=6.0)
        second = distribute_content(list(mixed_blocks), column_count=3, capacity=6.0)

        assert first == second

    def test_distribute_when_no_split_needed_then_every_block_placed_once(self, mixed_blocks):
        dist = distribute_content(mixed_blocks, column_count=3, capacity=8.0)

        placed = sorted(b.id for column in dist.columns for b in column.blocks)
        assert placed == sorted(b.id for b in mixed_blocks)

    def test_distribute_when_zero_columns_then_value_error(self, make_block):
        with pytest.raises(ValueError):
            distribute_content([make_block("a", 1.0)], column_count=0, capacity=8.0)

    def test_distribute_when_non_positive_capacity_then_value_error(self, make_block):
        with pytest.raises(ValueError):
            distribute_content([make_block("a", 1.0)], column_count=2, capacity=0.0)

    def test_distribute_when_block_taller_than_column_then_overflow(self, make_block):
        with pytest.raises(LayoutError) as exc_info:
            distribute_content([make_block("huge", 10.0, breakable=False)], column_count=2, capacity=8.0)

        assert exc_info.value.block_id == "huge"

    def test_distribute_when_breakable_block_exceeds_all_columns_then_overflow(self, make_block):
        with pytest.raises(LayoutError) as exc_info:
            distribute_content([make_block("big", 20.0)], column_count=2, capacity=8.0)

        assert exc_info.value.code == LayoutErrorCode.COLUMN_OVERFLOW
        assert exc_info.value.block_id.startswith("big_part2")


class TestMetrics:
    """Tests for balance score and overflow risk."""

    def test_metrics_when_no_blocks_then_balanced_and_empty(self):
        dist = distribute_content([], column_count=2, capacity=8.0)

        assert dist.balance_score == 1.0
        assert dist.overflow_risk == 0.0
        assert dist.total_height == 0.0
        assert all(c.is_empty for c in dist.columns)
        assert dist.capacity == 8.0

    def test_metrics_when_equal_columns_then_perfect_balance(self, make_block):
        dist = distribute_content([make_block("a", 2.0), make_block("b", 2.0)], column_count=2, capacity=8.0)

        assert dist.balance_score == pytest.approx(1.0)
        assert dist.overflow_risk == pytest.approx(0.25)

    def test_metrics_when_uneven_columns_then_one_minus_variation(self, make_block):
        blocks = [make_block(f"b{i}", 5.0) for i in (1, 2, 3)]

        dist = distribute_content(blocks, column_count=2, capacity=8.0)

        assert dist.balance_score == pytest.approx(1 - 0.5 / 7.5)
        assert dist.overflow_risk == pytest.approx(1.0)

    def test_metrics_when_one_column_used_then_balance_floored_at_zero(self, make_block):
        dist = distribute_content([make_block("a", 1.0, breakable=False)], column_count=3, capacity=8.0)

        assert dist.balance_score == 0.0

    def test_metrics_when_nearly_full_then_warning_logged(self, make_block, caplog):
        blocks = [make_block(f"b{i}", 5.0) for i in (1, 2, 3)]

        with caplog.at_level(logging.WARNING, logger="compact_study.layout.distributor"):
            distribute_content(blocks, column_count=2, capacity=8.0)

        assert "nearly full" in caplog.text


class TestCustomSplitter:
    def test_distribute_when_word_splitter_then_parts_start_on_words(self, make_block):
        content = " ".join(["word"] * 31)
        blocks = [
            make_block("a", 5.0, breakable=False),
            make_block("b", 5.0, breakable=False),
            make_block("prose", 5.0, content=content),
        ]

        dist = distribute_content(blocks, column_count=2, capacity=8.0, splitter=split_content_block_at_words)

        placed = {b.id: b for column in dist.columns for b in column.blocks}
        assert placed["prose_part1"].content.endswith(" ")
        assert placed["prose_part2"].content.startswith("word")
        assert placed["prose_part1"].content + placed["prose_part2"].content == content
