"""
Module: layout.blocks

Purpose:
    Turn an AcademicDocument into ContentBlocks for one layout pass.

    Emits, in document order: a heading per part; per section (recursing
    into subsections) a heading, the prose body (as a list block when every
    line is a bullet item), definitions, theorems, formulas and worked
    examples.

Key Functions:
    - blocks_from_document(): All blocks for a document
    - blocks_from_section(): Blocks for one section subtree

Used By:
    - compact_study.controller: plan_document()
"""

from __future__ import annotations

import logging
import re
from typing import List

from compact_study.core.models import AcademicDocument, AcademicSection, WorkedExample

from .engine import CompactLayoutEngine
from .models import BlockType, ContentBlock

logger = logging.getLogger(__name__)

_BULLET_LINE_RE = re.compile(r"^\s*[-*+•]\s")


def blocks_from_document(
    document: AcademicDocument,
    engine: CompactLayoutEngine,
) -> List[ContentBlock]:
    """
    Build content blocks for an entire document.

    Args:
        document: Source document
        engine: Engine whose typography drives height estimates

    Returns:
        Blocks in document order (distribution re-sorts by priority)
    """
    blocks: List[ContentBlock] = []
    for part in document.parts:
        blocks.append(engine.create_content_block(
            f"part-{part.part_number}-heading",
            f"Part {part.part_number}: {part.title}",
            BlockType.HEADING,
        ))
        for section in part.sections:
            blocks.extend(blocks_from_section(section, engine))

    logger.info(f"Built {len(blocks)} content blocks from '{document.title}'")
    return blocks


def blocks_from_section(
    section: AcademicSection,
    engine: CompactLayoutEngine,
) -> List[ContentBlock]:
    """Build blocks for a section and all of its subsections."""
    blocks: List[ContentBlock] = []
    for node in section.iter_all():
        prefix = f"section-{node.section_number}"
        blocks.append(engine.create_content_block(
            f"{prefix}-heading",
            f"{node.section_number} {node.title}",
            BlockType.HEADING,
        ))

        if node.content.strip():
            body_type = BlockType.LIST if _is_bullet_list(node.content) else BlockType.TEXT
            blocks.append(engine.create_content_block(f"{prefix}-body", node.content, body_type))

        for definition in node.definitions:
            blocks.append(engine.create_content_block(
                definition.id,
                f"{definition.term}: {definition.definition}",
                BlockType.TEXT,
                breakable=False,
            ))
        for theorem in node.theorems:
            blocks.append(engine.create_content_block(
                theorem.id,
                f"{theorem.name}: {theorem.statement}",
                BlockType.TEXT,
                breakable=False,
            ))
        for formula in node.formulas:
            blocks.append(engine.create_content_block(formula.id, formula.latex, BlockType.FORMULA))
        for example in node.examples:
            blocks.append(engine.create_content_block(
                example.id,
                _example_text(example),
                BlockType.EXAMPLE,
            ))
    return blocks


def _is_bullet_list(content: str) -> bool:
    lines = [line for line in content.splitlines() if line.strip()]
    return bool(lines) and all(_BULLET_LINE_RE.match(line) for line in lines)


def _example_text(example: WorkedExample) -> str:
    lines = [example.title, example.problem]
    for step in example.solution:
        line = f"Step {step.step_number}: {step.description}"
        if step.formula:
            line += f" {step.formula}"
        lines.append(line)
    return "\n".join(line for line in lines if line)
