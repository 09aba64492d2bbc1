"""
Module: layout.models

Purpose:
    Data models for compact layout.
    Immutable dataclasses representing content blocks, per-column content,
    the final column distribution and derived page geometry.

Key Classes:
    - BlockType: Kind of content block
    - ContentBlock: Placeable unit with estimated height
    - ColumnContent: Blocks assigned to one column
    - ColumnDistribution: All columns plus balance/overflow metrics
    - LayoutCalculation: Geometry derived from a CompactLayoutConfig

Dependencies:
    - dataclasses (std)

Used By:
    - layout.estimator: Creates ContentBlocks
    - layout.distributor: Creates ColumnDistributions
    - layout.geometry: Creates LayoutCalculations
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class BlockType(str, Enum):
    """Type of content block."""
    HEADING = "heading"
    FORMULA = "formula"
    EXAMPLE = "example"
    LIST = "list"
    TEXT = "text"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ContentBlock:
    """
    Placeable unit of document content (immutable).

    Created on demand for one layout pass; never persisted.

    Attributes:
        id: Unique within one layout pass
        type: Block type
        content: Raw text
        estimated_height: Physical height in inches
        breakable: Whether the block may be split across columns
        priority: Placement priority (higher placed first)

    Example:
        >>> block = engine.create_content_block("f1", "E = mc^2", BlockType.FORMULA)
        >>> block.breakable, block.priority
        (False, 9)
    """
    id: str
    type: BlockType
    content: str
    estimated_height: float
    breakable: bool
    priority: int

    def __post_init__(self) -> None:
        if self.estimated_height < 0:
            raise ValueError(f"estimated_height must be non-negative: {self.estimated_height}")


@dataclass(frozen=True)
class ColumnContent:
    """
    Blocks assigned to a single column, in placement order.

    Attributes:
        column_index: 0-based column index
        blocks: Ordered blocks
        estimated_height: Sum of block heights (inches)
    """
    column_index: int
    blocks: Tuple[ContentBlock, ...]
    estimated_height: float

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def is_empty(self) -> bool:
        return len(self.blocks) == 0


@dataclass(frozen=True)
class ColumnDistribution:
    """
    Result of distributing blocks into columns.

    Attributes:
        columns: One ColumnContent per configured column
        total_height: Height of the tallest column
        balance_score: 1 - coefficient of variation of column heights, floored at 0
        overflow_risk: Largest column height / capacity ratio, capped at 1
        capacity: Column capacity used for the pass (inches)
    """
    columns: Tuple[ColumnContent, ...]
    total_height: float
    balance_score: float
    overflow_risk: float
    capacity: float

    @property
    def block_count(self) -> int:
        """Total number of placed blocks across columns."""
        return sum(c.block_count for c in self.columns)

    def column_of(self, block_id: str) -> int:
        """
        Find the column a block was placed in.

        Raises:
            KeyError: If no placed block has that id
        """
        for column in self.columns:
            if any(b.id == block_id for b in column.blocks):
                return column.column_index
        raise KeyError(block_id)


@dataclass(frozen=True)
class LayoutCalculation:
    """
    Geometry derived from a CompactLayoutConfig (all lengths in inches).

    Attributes:
        page_width, page_height: Paper dimensions
        content_width, content_height: Page minus margins
        column_width: (content width - gaps) / columns
        column_count: Number of columns
        effective_line_height: font size x line height, in inches
        lines_per_column: floor(content height / effective line height)
        characters_per_line: floor(column width in points / (font size x 0.6))
        estimated_content_density: Characters per square inch of paper
    """
    page_width: float
    page_height: float
    content_width: float
    content_height: float
    column_width: float
    column_count: int
    effective_line_height: float
    lines_per_column: int
    characters_per_line: int
    estimated_content_density: float
