"""
Module: layout.engine

Purpose:
    Facade over the layout functions, bound to one validated configuration.
    One engine instance should serve one generation request; the config can
    be swapped with update_config(), which re-validates.

Key Classes:
    - CompactLayoutEngine: Config holder exposing geometry, estimation,
      splitting and distribution

Used By:
    - compact_study.controller: plan_document()
    - layout.blocks: Building blocks from documents
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Union

from .config import CompactLayoutConfig, merge_config
from .distributor import distribute_content
from .estimator import create_content_block, estimate_content_height
from .geometry import calculate_layout
from .models import BlockType, ColumnDistribution, ContentBlock, LayoutCalculation
from .splitter import SplitResult, Splitter, split_content_block

logger = logging.getLogger(__name__)

ConfigInput = Union[CompactLayoutConfig, Mapping[str, Any], None]


class CompactLayoutEngine:
    """
    Compact multi-column layout engine.

    Construction merges a partial configuration over the defaults
    (10.5pt, 1.2 line height, 0.3em paragraph, 0.2em list spacing, A4,
    two columns) and fails with LayoutError(INVALID_CONFIG) if the result
    violates a compactness constraint.

    Example:
        >>> engine = CompactLayoutEngine({"columns": 3, "paper_size": "letter"})
        >>> layout = engine.calculate_layout()
        >>> dist = engine.distribute_content(blocks)
    """

    def __init__(self, config: ConfigInput = None) -> None:
        self._config = _resolve(CompactLayoutConfig(), config)
        logger.debug(
            f"Layout engine ready: {self._config.paper_size}, {self._config.columns} columns, "
            f"{self._config.typography.font_size_pt}pt"
        )

    @property
    def config(self) -> CompactLayoutConfig:
        return self._config

    def get_config(self) -> CompactLayoutConfig:
        """Current configuration (immutable, safe to share)."""
        return self._config

    def update_config(self, overrides: ConfigInput) -> None:
        """
        Merge overrides into the current configuration.

        Raises:
            LayoutError: INVALID_CONFIG; the current config is kept
        """
        self._config = _resolve(self._config, overrides)

    def calculate_layout(self) -> LayoutCalculation:
        return calculate_layout(self._config)

    def estimate_content_height(self, content: str, block_type: BlockType) -> float:
        return estimate_content_height(content, block_type, self._config.typography)

    def create_content_block(
        self,
        block_id: str,
        content: str,
        block_type: BlockType,
        *,
        breakable: Optional[bool] = None,
        priority: Optional[int] = None,
    ) -> ContentBlock:
        return create_content_block(
            block_id,
            content,
            block_type,
            self._config.typography,
            breakable=breakable,
            priority=priority,
        )

    def split_content_block(self, block: ContentBlock, available_height: float) -> SplitResult:
        return split_content_block(block, available_height)

    def distribute_content(
        self,
        blocks: Iterable[ContentBlock],
        *,
        splitter: Splitter = split_content_block,
    ) -> ColumnDistribution:
        """
        Distribute blocks into this configuration's columns.

        Column capacity is the content height from calculate_layout().

        Raises:
            LayoutError: COLUMN_OVERFLOW if a block cannot be placed
        """
        layout = self.calculate_layout()
        return distribute_content(
            blocks,
            layout.column_count,
            layout.content_height,
            splitter=splitter,
        )


def _resolve(base: CompactLayoutConfig, config: ConfigInput) -> CompactLayoutConfig:
    if isinstance(config, CompactLayoutConfig):
        return config
    return merge_config(base, config)
