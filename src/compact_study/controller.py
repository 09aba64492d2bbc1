"""
Module: controller

Purpose:
    Orchestrate one planning request for a document.
    Document → Blocks → Column distribution
    Document → Cross-references → Validation report

Key Functions:
    - plan_document(): Main entry point for planning a document

Key Classes:
    - PlanResult: Complete planning result

Dependencies:
    - compact_study.layout: Geometry, blocks and distribution
    - compact_study.references: Cross-reference generation

Used By:
    - compact_study.cli
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Tuple, Union

from compact_study import __version__
from compact_study.core.models import AcademicDocument
from compact_study.layout import (
    ColumnDistribution,
    CompactLayoutConfig,
    CompactLayoutEngine,
    ContentBlock,
    LayoutCalculation,
    blocks_from_document,
)
from compact_study.references import (
    CrossReference,
    CrossReferenceConfig,
    ValidationResult,
    create_cross_reference_system,
)

logger = logging.getLogger(__name__)

LayoutConfigInput = Union[CompactLayoutConfig, Mapping[str, Any], None]
ReferenceConfigInput = Union[CrossReferenceConfig, Mapping[str, Any], None]


@dataclass(frozen=True)
class PlanResult:
    """
    Complete planning result (immutable).

    Attributes:
        layout: Page and column geometry
        blocks: Blocks built from the document, in document order
        distribution: Blocks placed into columns
        references: Generated cross-references
        validation_results: Integrity findings (empty if validation disabled)
        metadata: Planning metadata dictionary
        elapsed_seconds: Wall-clock time for the request

    Example:
        >>> result = plan_document(document, {"columns": 3})
        >>> print(f"{result.distribution.block_count} blocks, balance {result.distribution.balance_score:.2f}")
    """
    layout: LayoutCalculation
    blocks: Tuple[ContentBlock, ...]
    distribution: ColumnDistribution
    references: Tuple[CrossReference, ...]
    validation_results: Tuple[ValidationResult, ...]
    metadata: dict
    elapsed_seconds: float

    @property
    def invalid_reference_count(self) -> int:
        return sum(1 for r in self.validation_results if not r.is_valid)

    def to_dict(self) -> dict:
        """JSON-ready plan summary (block content omitted)."""
        return {
            "metadata": self.metadata,
            "layout": {
                "pageWidth": self.layout.page_width,
                "pageHeight": self.layout.page_height,
                "contentWidth": self.layout.content_width,
                "contentHeight": self.layout.content_height,
                "columnWidth": self.layout.column_width,
                "columnCount": self.layout.column_count,
                "effectiveLineHeight": self.layout.effective_line_height,
                "linesPerColumn": self.layout.lines_per_column,
                "charactersPerLine": self.layout.characters_per_line,
                "estimatedContentDensity": self.layout.estimated_content_density,
            },
            "distribution": {
                "totalHeight": self.distribution.total_height,
                "balanceScore": self.distribution.balance_score,
                "overflowRisk": self.distribution.overflow_risk,
                "capacity": self.distribution.capacity,
                "columns": [
                    {
                        "columnIndex": column.column_index,
                        "estimatedHeight": column.estimated_height,
                        "blocks": [
                            {
                                "id": block.id,
                                "type": block.type.value,
                                "estimatedHeight": block.estimated_height,
                            }
                            for block in column.blocks
                        ],
                    }
                    for column in self.distribution.columns
                ],
            },
            "references": [ref.to_dict() for ref in self.references],
            "validation": [result.to_dict() for result in self.validation_results],
        }


def plan_document(
    document: AcademicDocument,
    layout_config: LayoutConfigInput = None,
    reference_config: ReferenceConfigInput = None,
) -> PlanResult:
    """
    Plan the compact layout and cross-references for a document.

    Pipeline:
    1. Validate configuration (engine and reference system construction)
    2. Build content blocks
    3. Distribute blocks into columns
    4. Generate and validate cross-references

    Each call uses a fresh engine and reference system, so concurrent calls
    share no state.

    Args:
        document: Source document (read-only)
        layout_config: Full or partial layout configuration
        reference_config: Full or partial cross-reference configuration

    Returns:
        PlanResult

    Raises:
        LayoutError: INVALID_CONFIG for bad layout config, COLUMN_OVERFLOW
            when a block cannot be placed
        ValueError: Invalid cross-reference configuration
        DuplicateItemError: If the document reuses an item ID
    """
    start_time = time.perf_counter()
    logger.info(f"Planning '{document.title}'")

    # 1. Configuration
    engine = CompactLayoutEngine(layout_config)
    reference_system = create_cross_reference_system(reference_config)
    layout = engine.calculate_layout()
    logger.info(
        f"Layout: {engine.config.paper_size}, {layout.column_count} columns "
        f"of {layout.column_width:.2f}in, {layout.lines_per_column} lines each"
    )

    # 2. Blocks
    blocks = blocks_from_document(document, engine)

    # 3. Distribution
    distribution = engine.distribute_content(blocks)

    # 4. References
    references = reference_system.generate_cross_references(document)
    validation_results = reference_system.get_validation_results()

    elapsed = time.perf_counter() - start_time
    invalid = sum(1 for r in validation_results if not r.is_valid)
    logger.info(
        f"Planned '{document.title}' in {elapsed:.3f}s: {distribution.block_count} blocks, "
        f"{len(references)} references ({invalid} invalid)"
    )

    metadata = {
        "title": document.title,
        "generatedAt": datetime.now(timezone.utc).isoformat(),
        "toolVersion": __version__,
        "config": engine.config.to_dict(),
        "partCount": len(document.parts),
        "formulaCount": document.formula_count,
        "exampleCount": document.example_count,
    }

    return PlanResult(
        layout=layout,
        blocks=tuple(blocks),
        distribution=distribution,
        references=tuple(references),
        validation_results=tuple(validation_results),
        metadata=metadata,
        elapsed_seconds=elapsed,
    )
