"""
Module: layout

Purpose:
    Compact multi-column layout planning.
    Computes page geometry from a validated configuration, estimates block
    heights, and distributes content blocks into balanced columns.

Key Functions:
    - calculate_layout(): Page/column geometry
    - estimate_content_height(): Height model per block type
    - distribute_content(): Column balancing with overflow splitting
    - blocks_from_document(): Blocks for an AcademicDocument

Key Classes:
    - CompactLayoutEngine: Config-bound facade
    - CompactLayoutConfig: Validated configuration
    - ContentBlock, ColumnDistribution, LayoutCalculation: Models
    - LayoutError: INVALID_CONFIG / COLUMN_OVERFLOW failures

Dependencies:
    - reportlab: Paper dimensions
"""

from .config import CompactLayoutConfig, PaperSize, merge_config
from .errors import LayoutError, LayoutErrorCode
from .models import (
    BlockType,
    ContentBlock,
    ColumnContent,
    ColumnDistribution,
    LayoutCalculation,
)
from .geometry import calculate_layout
from .estimator import create_content_block, estimate_content_height
from .splitter import SplitResult, split_content_block, split_content_block_at_words
from .distributor import distribute_content
from .engine import CompactLayoutEngine
from .blocks import blocks_from_document

__all__ = [
    # Config
    "CompactLayoutConfig",
    "PaperSize",
    "merge_config",
    # Errors
    "LayoutError",
    "LayoutErrorCode",
    # Models
    "BlockType",
    "ContentBlock",
    "ColumnContent",
    "ColumnDistribution",
    "LayoutCalculation",
    # Functions
    "calculate_layout",
    "create_content_block",
    "estimate_content_height",
    "SplitResult",
    "split_content_block",
    "split_content_block_at_words",
    "distribute_content",
    "blocks_from_document",
    # Engine
    "CompactLayoutEngine",
]
