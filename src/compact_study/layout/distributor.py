"""
Module: layout.distributor

Purpose:
    Distribute content blocks into a fixed number of equal-capacity columns.

Algorithm:
    Greedy balancing with a work queue:
    1. Stable-sort blocks by priority (descending); ties keep input order.
    2. Pop the next block. Place it in the least-filled column that still
       has room for it.
    3. If no column has room:
       - breakable: split it so the first part fills the least-filled
         column exactly, and append the remainder to the back of the queue
         (it is reconsidered against every column, not pinned to one);
       - otherwise (or when the split yields nothing): search the columns
         in order for room and raise COLUMN_OVERFLOW if there is none.
    4. Compute total height, balance score and overflow risk.

    Remainders go through an explicit queue rather than recursion, so
    pathological inputs cannot exhaust the stack.

Key Functions:
    - distribute_content(): Main distribution function
    - sort_by_priority(): Stable priority ordering

Used By:
    - layout.engine: CompactLayoutEngine.distribute_content
"""

from __future__ import annotations

import logging
import statistics
from collections import deque
from typing import Iterable, List, Optional

from compact_study.common.thresholds import HEIGHT_THRESHOLDS

from .errors import LayoutError, LayoutErrorCode
from .models import ColumnContent, ColumnDistribution, ContentBlock
from .splitter import Splitter, split_content_block

logger = logging.getLogger(__name__)


class _ColumnState:
    """Mutable per-pass accumulator, frozen into a ColumnContent at the end."""

    __slots__ = ("index", "blocks", "height")

    def __init__(self, index: int) -> None:
        self.index = index
        self.blocks: List[ContentBlock] = []
        self.height = 0.0

    def fits(self, block: ContentBlock, capacity: float) -> bool:
        return self.height + block.estimated_height <= capacity

    def place(self, block: ContentBlock) -> None:
        self.blocks.append(block)
        self.height += block.estimated_height

    def freeze(self) -> ColumnContent:
        return ColumnContent(
            column_index=self.index,
            blocks=tuple(self.blocks),
            estimated_height=self.height,
        )


def sort_by_priority(blocks: Iterable[ContentBlock]) -> List[ContentBlock]:
    """Stable sort by priority, highest first."""
    return sorted(blocks, key=lambda b: -b.priority)


def distribute_content(
    blocks: Iterable[ContentBlock],
    column_count: int,
    capacity: float,
    *,
    splitter: Splitter = split_content_block,
) -> ColumnDistribution:
    """
    Distribute blocks into columns of equal capacity.

    Args:
        blocks: Blocks to place (any order)
        column_count: Number of columns (>= 1)
        capacity: Height available in each column (inches)
        splitter: Split strategy for breakable blocks

    Returns:
        ColumnDistribution with balance and overflow metrics

    Raises:
        LayoutError: COLUMN_OVERFLOW when a block cannot be placed anywhere;
            carries the block's id and type
        ValueError: If column_count < 1 or capacity <= 0

    Example:
        >>> dist = distribute_content(blocks, column_count=2, capacity=8.0)
        >>> [c.estimated_height for c in dist.columns]
        [5.0, 5.0]
    """
    if column_count < 1:
        raise ValueError(f"column_count must be >= 1: {column_count}")
    if capacity <= 0:
        raise ValueError(f"capacity must be positive: {capacity}")

    columns = [_ColumnState(i) for i in range(column_count)]
    queue = deque(sort_by_priority(blocks))
    split_count = 0

    while queue:
        block = queue.popleft()

        target = _least_filled(c for c in columns if c.fits(block, capacity))
        if target is not None:
            target.place(block)
            logger.debug(f"Placed {block.id} ({block.type}) in column {target.index}")
            continue

        if block.breakable:
            target = _least_filled(columns)
            split = splitter(block, capacity - target.height)
            if split.did_split:
                target.place(split.first)
                split_count += 1
                if split.remaining is not None:
                    queue.append(split.remaining)
                continue

        fallback = _next_available(columns, block, capacity)
        if fallback is None:
            raise LayoutError(
                f'Content block "{block.id}" cannot fit in available space',
                LayoutErrorCode.COLUMN_OVERFLOW,
                block_id=block.id,
                content_type=str(block.type),
                suggestion="Consider reducing content or increasing page size",
            )
        fallback.place(block)

    distribution = _summarize(columns, capacity)

    logger.info(
        f"Distributed {distribution.block_count} blocks into {column_count} columns "
        f"({split_count} splits, balance={distribution.balance_score:.3f}, "
        f"overflow_risk={distribution.overflow_risk:.3f})"
    )
    if distribution.overflow_risk >= HEIGHT_THRESHOLDS.high_overflow_risk:
        logger.warning(
            f"Columns are nearly full (overflow risk {distribution.overflow_risk:.2f})"
        )
    return distribution


def _least_filled(candidates: Iterable[_ColumnState]) -> Optional[_ColumnState]:
    """Column with the least height; the lowest index wins ties."""
    best: Optional[_ColumnState] = None
    for column in candidates:
        if best is None or column.height < best.height:
            best = column
    return best


def _next_available(
    columns: List[_ColumnState],
    block: ContentBlock,
    capacity: float,
) -> Optional[_ColumnState]:
    """First column, in column order, with room for the block."""
    for column in columns:
        if column.fits(block, capacity):
            return column
    return None


def _summarize(columns: List[_ColumnState], capacity: float) -> ColumnDistribution:
    heights = [c.height for c in columns]
    mean_height = statistics.fmean(heights)

    if mean_height > 0:
        balance_score = max(0.0, 1 - statistics.pstdev(heights) / mean_height)
    else:
        # Nothing placed: all columns are equally (empty) balanced
        balance_score = 1.0

    overflow_risk = max(min(1.0, h / capacity) for h in heights)

    return ColumnDistribution(
        columns=tuple(c.freeze() for c in columns),
        total_height=max(heights),
        balance_score=balance_score,
        overflow_risk=overflow_risk,
        capacity=capacity,
    )
