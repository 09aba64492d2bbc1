"""
Module: references.models

Purpose:
    Data models for cross-reference generation.

Key Classes:
    - ReferenceType: Kind of referenceable item
    - ItemLocation: (part index, section index) structural position
    - ReferenceableItem: Indexed target of a reference
    - ReferenceCandidate: Scored, not yet deduplicated link
    - CrossReference: Final directed link with display text
    - ValidationResult: Per-reference integrity finding
    - ReferenceTracker: Forward map + reverse index for one generation run

Dependencies:
    - dataclasses (std)

Used By:
    - references.index, references.scoring, references.validation,
      references.system
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class ReferenceType(str, Enum):
    """Type of referenceable item."""
    SECTION = "section"
    FORMULA = "formula"
    EXAMPLE = "example"
    THEOREM = "theorem"
    DEFINITION = "definition"

    def __str__(self) -> str:
        return self.value


class ValidationErrorType(str, Enum):
    """Category of an invalid reference."""
    BROKEN_LINK = "broken_link"
    CIRCULAR_REFERENCE = "circular_reference"
    INVALID_FORMAT = "invalid_format"
    MISSING_TARGET = "missing_target"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ItemLocation:
    """
    Structural position of an item.

    Attributes:
        part_index: 0-based index of the part
        section_index: 0-based section index within the part; -1 for the part itself
    """
    part_index: int
    section_index: int


@dataclass(frozen=True)
class ReferenceableItem:
    """
    Document element that can be the target of a cross-reference.

    Attributes:
        id: Stable ID (formula/example ID, section number, or "part-<n>")
        type: Item type
        title: Text matched against source prose
        content: Content snippet
        location: Structural position
        section_number: Number of the enclosing section (part number for parts)
    """
    id: str
    type: ReferenceType
    title: str
    content: str
    location: ItemLocation
    section_number: str


@dataclass(frozen=True)
class ReferenceCandidate:
    """
    Scored link found in source text, before deduplication.

    Attributes:
        source_id: ID of the section/example whose text mentions the target
        target_id: Referenced item ID
        type: Target item type
        confidence: Heuristic score in [0, 1]
        context: Sentence of the source text mentioning the target
        distance: Structural distance between source and target
    """
    source_id: str
    target_id: str
    type: ReferenceType
    confidence: float
    context: str
    distance: int


@dataclass(frozen=True)
class CrossReference:
    """
    Directed link from a source location to a referenceable item.

    Attributes:
        id: Sequential ID ("ref-1", "ref-2", ...)
        type: Target type
        source_id: Where the display text is spliced in
        target_id: Referenced item ID
        display_text: Formatted label, e.g. "see Ex. 1.2.3"

    Invariants:
        - source_id != target_id
    """
    id: str
    type: ReferenceType
    source_id: str
    target_id: str
    display_text: str

    def __post_init__(self) -> None:
        if self.source_id == self.target_id:
            raise ValueError(f"Self-reference not allowed: {self.source_id!r}")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "sourceId": self.source_id,
            "targetId": self.target_id,
            "displayText": self.display_text,
        }


@dataclass(frozen=True)
class ValidationResult:
    """
    Integrity finding for one reference. Findings are collected, never raised.

    Attributes:
        reference_id: Reference checked
        is_valid: True when no check failed
        error_type: First failing check, None when valid
        message: Human readable explanation
        confidence: Certainty of the finding
    """
    reference_id: str
    is_valid: bool
    message: str
    confidence: float
    error_type: Optional[ValidationErrorType] = None

    def to_dict(self) -> dict:
        d = {
            "referenceId": self.reference_id,
            "isValid": self.is_valid,
            "message": self.message,
            "confidence": self.confidence,
        }
        if self.error_type is not None:
            d["errorType"] = self.error_type.value
        return d


@dataclass
class ReferenceTracker:
    """
    Per-run reference bookkeeping.

    Mutable; scoped to a single generation run and reset at the start of
    every run.

    Attributes:
        references: reference id -> CrossReference, in creation order
        reverse_index: target id -> reference ids pointing at it
        validation_results: Results of the last validation
    """
    references: Dict[str, CrossReference] = field(default_factory=dict)
    reverse_index: Dict[str, List[str]] = field(default_factory=dict)
    validation_results: List[ValidationResult] = field(default_factory=list)

    def reset(self) -> None:
        self.references.clear()
        self.reverse_index.clear()
        self.validation_results = []

    def add(self, reference: CrossReference) -> None:
        """Register a reference in the forward map and the reverse index."""
        self.references[reference.id] = reference
        self.reverse_index.setdefault(reference.target_id, []).append(reference.id)

    def references_to(self, target_id: str) -> List[CrossReference]:
        """All references whose target is target_id, in creation order."""
        return [self.references[ref_id] for ref_id in self.reverse_index.get(target_id, [])]
