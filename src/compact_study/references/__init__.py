"""
Module: references

Purpose:
    Automatic cross-referencing for academic documents.
    Indexes referenceable items, scores textual mentions, deduplicates them
    into CrossReferences with formatted display text, and validates the
    resulting reference set.

Key Functions:
    - build_reference_report(): Pure generation + validation
    - extract_referenceable_items(): Item index for a document
    - calculate_reference_confidence(): Heuristic mention score

Key Classes:
    - CrossReferenceSystem: Request-scoped facade with reverse lookup
    - CrossReferenceConfig, ReferenceFormats: Configuration
    - CrossReference, ValidationResult, ReferenceableItem: Models
"""

from .config import CrossReferenceConfig, ReferenceFormats, merge_reference_config
from .models import (
    CrossReference,
    ItemLocation,
    ReferenceableItem,
    ReferenceCandidate,
    ReferenceTracker,
    ReferenceType,
    ValidationErrorType,
    ValidationResult,
)
from .index import DuplicateItemError, extract_referenceable_items
from .scoring import calculate_distance, calculate_reference_confidence, find_reference_candidates
from .formatting import extract_display_id, format_display_text
from .validation import validate_references
from .system import (
    CrossReferenceSystem,
    ReferenceReport,
    build_reference_report,
    create_cross_reference_system,
)

__all__ = [
    # Config
    "CrossReferenceConfig",
    "ReferenceFormats",
    "merge_reference_config",
    # Models
    "CrossReference",
    "ItemLocation",
    "ReferenceableItem",
    "ReferenceCandidate",
    "ReferenceTracker",
    "ReferenceType",
    "ValidationErrorType",
    "ValidationResult",
    # Functions
    "DuplicateItemError",
    "extract_referenceable_items",
    "calculate_distance",
    "calculate_reference_confidence",
    "find_reference_candidates",
    "extract_display_id",
    "format_display_text",
    "validate_references",
    "build_reference_report",
    # System
    "CrossReferenceSystem",
    "ReferenceReport",
    "create_cross_reference_system",
]
