"""
Module: layout.splitter

Purpose:
    Split breakable content blocks so the first part fills the space left
    in a column.

    The default strategy is a character-count split: the split point is
    proportional to the fraction of the block's height that fits, and may
    fall mid-word. split_content_block_at_words() is an explicit
    alternative that backs off to the preceding whitespace.

    Both are content-preserving partitions:
        first.content + remaining.content == block.content

Key Functions:
    - split_content_block(): Character-count split
    - split_content_block_at_words(): Word-boundary split

Used By:
    - layout.distributor: Overflow handling
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Callable, Optional

from .models import ContentBlock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SplitResult:
    """
    Outcome of a split attempt.

    Attributes:
        first: Part that fills the available height (the original block if unsplit)
        remaining: Deferred remainder, or None when nothing is left over
        did_split: False when the block was returned unchanged
    """
    first: ContentBlock
    remaining: Optional[ContentBlock] = None
    did_split: bool = False


Splitter = Callable[[ContentBlock, float], SplitResult]


def _character_split_point(block: ContentBlock, available_height: float) -> int:
    split_ratio = available_height / block.estimated_height
    return math.floor(len(block.content) * split_ratio)


def _can_split(block: ContentBlock, available_height: float) -> bool:
    return (
        block.breakable
        and available_height > 0
        and block.estimated_height > available_height
    )


def _partition(
    block: ContentBlock,
    split_point: int,
    first_height: float,
) -> SplitResult:
    first = replace(
        block,
        id=f"{block.id}_part1",
        content=block.content[:split_point],
        estimated_height=first_height,
    )
    rest = block.content[split_point:]
    remaining = None
    if rest:
        remaining = replace(
            block,
            id=f"{block.id}_part2",
            content=rest,
            estimated_height=max(0.0, block.estimated_height - first_height),
        )
    logger.debug(
        f"Split {block.id} at char {split_point}/{len(block.content)} "
        f"({first_height:.3f}in + {block.estimated_height - first_height:.3f}in)"
    )
    return SplitResult(first=first, remaining=remaining, did_split=True)


def split_content_block(block: ContentBlock, available_height: float) -> SplitResult:
    """
    Split a block by character count so the first part fills available_height.

    split_point = floor(len(content) x available_height / estimated_height).
    The first part is assigned exactly available_height; the remainder gets
    the rest of the estimated height.

    Args:
        block: Block to split (must be breakable)
        available_height: Space left in the target column (inches)

    Returns:
        SplitResult; did_split is False (block unchanged) when the block is
        not breakable, there is no space, the block already fits, or the
        split point would be empty. The caller must then treat the block
        as non-fitting.
    """
    if not _can_split(block, available_height):
        return SplitResult(first=block)

    split_point = _character_split_point(block, available_height)
    if split_point <= 0:
        return SplitResult(first=block)

    return _partition(block, split_point, available_height)


def split_content_block_at_words(block: ContentBlock, available_height: float) -> SplitResult:
    """
    Split a block at the last whitespace before the character split point.

    The first part's height is scaled by the characters it keeps, so it
    never exceeds available_height. Falls back to no split when the first
    word alone does not fit.

    Args:
        block: Block to split (must be breakable)
        available_height: Space left in the target column (inches)

    Returns:
        SplitResult (see split_content_block)
    """
    if not _can_split(block, available_height):
        return SplitResult(first=block)

    char_point = _character_split_point(block, available_height)
    if char_point <= 0:
        return SplitResult(first=block)

    content = block.content
    if char_point < len(content) and not content[char_point].isspace():
        boundary = max(content.rfind(" ", 0, char_point), content.rfind("\n", 0, char_point))
        if boundary <= 0:
            return SplitResult(first=block)
        # Keep the whitespace with the first part so the remainder starts on a word
        split_point = boundary + 1
    else:
        split_point = char_point

    first_height = block.estimated_height * split_point / len(content)
    return _partition(block, split_point, min(first_height, available_height))
