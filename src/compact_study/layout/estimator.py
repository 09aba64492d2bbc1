"""
Module: layout.estimator

Purpose:
    Estimate the physical height of content and build ContentBlocks.
    Heights come from a line-count model per block type multiplied by the
    effective line height. All functions here are pure.

Key Functions:
    - estimate_lines(): Estimated line count for content of a given type
    - estimate_content_height(): Estimated height in inches
    - default_priority() / default_breakable(): Per-type defaults
    - create_content_block(): Build a ContentBlock with defaults applied

Used By:
    - layout.engine
    - layout.blocks
"""

from __future__ import annotations

import math
import re
from typing import Optional

from compact_study.common.thresholds import HEIGHT_THRESHOLDS

from .config import TypographyConfig
from .geometry import line_height_inches
from .models import BlockType, ContentBlock

# One list item per line starting with a bullet marker
_LIST_ITEM_RE = re.compile(r"^\s*[-*+•]\s", re.MULTILINE)

_DEFAULT_PRIORITIES = {
    BlockType.HEADING: 10,
    BlockType.FORMULA: 9,
    BlockType.EXAMPLE: 8,
    BlockType.LIST: 6,
    BlockType.TEXT: 5,
}


def estimate_lines(content: str, block_type: BlockType) -> float:
    """
    Estimate how many lines a block occupies.

    - heading: 1 line
    - formula: 1.5 lines, 3 for multi-line display environments
    - example: max(3, ceil(len / 80))
    - list: item markers x 1.2
    - text: ceil(len / 80)
    """
    t = HEIGHT_THRESHOLDS
    block_type = BlockType(block_type)

    if block_type == BlockType.HEADING:
        return t.heading_lines
    if block_type == BlockType.FORMULA:
        if t.display_block_marker in content:
            return t.display_formula_lines
        return t.inline_formula_lines
    if block_type == BlockType.EXAMPLE:
        return max(t.min_example_lines, math.ceil(len(content) / t.avg_chars_per_line))
    if block_type == BlockType.LIST:
        return len(_LIST_ITEM_RE.findall(content)) * t.list_item_lines
    return math.ceil(len(content) / t.avg_chars_per_line)


def estimate_content_height(
    content: str,
    block_type: BlockType,
    typography: TypographyConfig,
) -> float:
    """
    Estimate the physical height of content in inches.

    Args:
        content: Raw block text
        block_type: Block type driving the line model
        typography: Font size and line height

    Returns:
        Estimated lines x effective line height
    """
    return estimate_lines(content, block_type) * line_height_inches(typography)


def default_priority(block_type: BlockType) -> int:
    """Placement priority: heading 10, formula 9, example 8, list 6, text 5."""
    return _DEFAULT_PRIORITIES[BlockType(block_type)]


def default_breakable(block_type: BlockType) -> bool:
    """Only prose and lists may be split across columns."""
    return BlockType(block_type) in (BlockType.TEXT, BlockType.LIST)


def create_content_block(
    block_id: str,
    content: str,
    block_type: BlockType,
    typography: TypographyConfig,
    *,
    breakable: Optional[bool] = None,
    priority: Optional[int] = None,
) -> ContentBlock:
    """
    Create a content block with estimated height and per-type defaults.

    Args:
        block_id: Unique ID within the layout pass
        content: Raw text
        block_type: Block type (enum or its string value)
        typography: Typography used for height estimation
        breakable: Override default breakability
        priority: Override default priority

    Returns:
        New ContentBlock
    """
    block_type = BlockType(block_type)
    return ContentBlock(
        id=block_id,
        type=block_type,
        content=content,
        estimated_height=estimate_content_height(content, block_type, typography),
        breakable=default_breakable(block_type) if breakable is None else breakable,
        priority=default_priority(block_type) if priority is None else priority,
    )
