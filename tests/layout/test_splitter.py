"""
Unit Tests for Block Splitting

Tests for character and word-boundary splitting of breakable blocks.
"""

import pytest

from compact_study.layout.models import BlockType
from compact_study.layout.splitter import split_content_block, split_content_block_at_words


class TestSplitContentBlock:
    """Tests for split_content_block function."""

    def test_split_when_overflowing_then_partition_by_height_ratio(self, make_block):
        block = make_block("b1", 5.0, content="a" * 50 + "b" * 50)

        result = split_content_block(block, 2.5)

        assert result.did_split
        assert result.first.id == "b1_part1"
        assert result.first.content == "a" * 50
        assert result.first.estimated_height == pytest.approx(2.5)
        assert result.remaining.id == "b1_part2"
        assert result.remaining.content == "b" * 50
        assert result.remaining.estimated_height == pytest.approx(2.5)

    def test_split_when_split_then_content_and_fields_preserved(self, make_block):
        block = make_block("b1", 5.0, priority=7, block_type=BlockType.LIST, content="- item\n" * 20)

        result = split_content_block(block, 2.0)

        assert result.first.content + result.remaining.content == block.content
        for part in (result.first, result.remaining):
            assert part.type == BlockType.LIST
            assert part.priority == 7
            assert part.breakable is True

    def test_split_when_not_breakable_then_unchanged(self, make_block):
        block = make_block("b1", 5.0, breakable=False)

        result = split_content_block(block, 3.0)

        assert not result.did_split
        assert result.first is block
        assert result.remaining is None

    def test_split_when_no_space_then_unchanged(self, make_block):
        assert not split_content_block(make_block("b1", 5.0), 0.0).did_split

    def test_split_when_block_fits_then_unchanged(self, make_block):
        assert not split_content_block(make_block("b1", 2.0), 3.0).did_split

    def test_split_when_split_point_empty_then_unchanged(self, make_block):
        block = make_block("b1", 5.0, content="ab")

        assert not split_content_block(block, 1.0).did_split


class TestSplitAtWords:
    """Tests for split_content_block_at_words function."""

    def test_split_when_mid_word_then_backs_off_to_whitespace(self, make_block):
        block = make_block("w", 4.0, content="aaaa bbbbbbbb cccccc")

        result = split_content_block_at_words(block, 2.0)

        assert result.did_split
        assert result.first.content == "aaaa "
        assert result.remaining.content == "bbbbbbbb cccccc"
        assert result.first.estimated_height == pytest.approx(1.0)
        assert result.remaining.estimated_height == pytest.approx(3.0)

    def test_split_when_at_whitespace_then_keeps_character_point(self, make_block):
        block = make_block("w", 4.0, content="aaaa bbbb")

        result = split_content_block_at_words(block, 2.0)

        assert result.first.content == "aaaa"
        assert result.remaining.content == " bbbb"

    def test_split_when_no_whitespace_then_unchanged(self, make_block):
        block = make_block("w", 4.0, content="abcdefghij")

        assert not split_content_block_at_words(block, 2.0).did_split

    def test_split_when_split_then_first_height_within_available(self, make_block):
        block = make_block("w", 6.0, content="lorem ipsum dolor sit amet consectetur adipiscing")

        result = split_content_block_at_words(block, 2.5)

        assert result.did_split
        assert result.first.estimated_height <= 2.5
        assert result.first.content + result.remaining.content == block.content
