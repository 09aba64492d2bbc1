"""
Module: references.index

Purpose:
    Build the flat index of referenceable items for a document.
    Walks parts -> sections -> (definitions, theorems, formulas, examples)
    and adds one synthetic item per part ("part-<n>") and per section
    (keyed by its section number). Subsections are not indexed.

Key Functions:
    - extract_referenceable_items(): ID -> ReferenceableItem, in document order

Key Classes:
    - DuplicateItemError: Two items share an ID

Used By:
    - references.system: Candidate discovery and validation
"""

from __future__ import annotations

import logging
from typing import Dict

from compact_study.core.models import AcademicDocument

from .models import ItemLocation, ReferenceableItem, ReferenceType

logger = logging.getLogger(__name__)


class DuplicateItemError(ValueError):
    """Two referenceable items in one document share an ID."""

    def __init__(self, item_id: str):
        super().__init__(f"Duplicate referenceable item id: {item_id!r}")
        self.item_id = item_id


def part_item_id(part_number: int) -> str:
    return f"part-{part_number}"


def extract_referenceable_items(document: AcademicDocument) -> Dict[str, ReferenceableItem]:
    """
    Extract every referenceable item from a document.

    Args:
        document: Source document

    Returns:
        Dict mapping item ID -> ReferenceableItem, in document order

    Raises:
        DuplicateItemError: If two items share an ID
    """
    items: Dict[str, ReferenceableItem] = {}

    def add(item: ReferenceableItem) -> None:
        if item.id in items:
            raise DuplicateItemError(item.id)
        items[item.id] = item

    for part_index, part in enumerate(document.parts):
        add(ReferenceableItem(
            id=part_item_id(part.part_number),
            type=ReferenceType.SECTION,
            title=part.title,
            content="",
            location=ItemLocation(part_index, -1),
            section_number=str(part.part_number),
        ))

        for section_index, section in enumerate(part.sections):
            location = ItemLocation(part_index, section_index)
            number = section.section_number

            add(ReferenceableItem(
                id=number,
                type=ReferenceType.SECTION,
                title=section.title,
                content=section.content,
                location=location,
                section_number=number,
            ))
            for definition in section.definitions:
                add(ReferenceableItem(
                    id=definition.id,
                    type=ReferenceType.DEFINITION,
                    title=definition.term,
                    content=definition.definition,
                    location=location,
                    section_number=number,
                ))
            for theorem in section.theorems:
                add(ReferenceableItem(
                    id=theorem.id,
                    type=ReferenceType.THEOREM,
                    title=theorem.name,
                    content=theorem.statement,
                    location=location,
                    section_number=number,
                ))
            for formula in section.formulas:
                add(ReferenceableItem(
                    id=formula.id,
                    type=ReferenceType.FORMULA,
                    title=formula.context,
                    content=formula.latex,
                    location=location,
                    section_number=number,
                ))
            for example in section.examples:
                add(ReferenceableItem(
                    id=example.id,
                    type=ReferenceType.EXAMPLE,
                    title=example.title,
                    content=example.problem,
                    location=location,
                    section_number=number,
                ))

    logger.debug(f"Indexed {len(items)} referenceable items")
    return items
