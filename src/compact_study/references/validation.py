"""
Module: references.validation

Purpose:
    Integrity checks over a generated reference set. Findings are collected
    as ValidationResults, never raised.

Checks (short-circuit on the first failure):
    1. missing_target: target ID is not in the item index
    2. circular_reference: another reference points straight back
       (target -> source). One hop only; longer cycles are not detected.
    3. invalid_format: display text does not match the type's template

Key Functions:
    - validate_single_reference()
    - validate_references()
    - has_circular_reference()
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping

from .config import ReferenceFormats
from .formatting import format_pattern
from .models import (
    CrossReference,
    ReferenceableItem,
    ReferenceTracker,
    ValidationErrorType,
    ValidationResult,
)

logger = logging.getLogger(__name__)


def has_circular_reference(reference: CrossReference, tracker: ReferenceTracker) -> bool:
    """True if some tracked reference goes from this target back to this source."""
    return any(
        other.source_id == reference.target_id
        for other in tracker.references_to(reference.source_id)
    )


def is_valid_format(reference: CrossReference, formats: ReferenceFormats) -> bool:
    pattern = format_pattern(formats.template_for(reference.type))
    return pattern.fullmatch(reference.display_text) is not None


def validate_single_reference(
    reference: CrossReference,
    items: Mapping[str, ReferenceableItem],
    formats: ReferenceFormats,
    tracker: ReferenceTracker,
) -> ValidationResult:
    """Run the checks for one reference; the first failure wins."""
    if reference.target_id not in items:
        return ValidationResult(
            reference_id=reference.id,
            is_valid=False,
            error_type=ValidationErrorType.MISSING_TARGET,
            message=f"Reference target '{reference.target_id}' not found",
            confidence=1.0,
        )

    if has_circular_reference(reference, tracker):
        return ValidationResult(
            reference_id=reference.id,
            is_valid=False,
            error_type=ValidationErrorType.CIRCULAR_REFERENCE,
            message=(
                f"Circular reference detected between '{reference.source_id}' "
                f"and '{reference.target_id}'"
            ),
            confidence=0.9,
        )

    if not is_valid_format(reference, formats):
        return ValidationResult(
            reference_id=reference.id,
            is_valid=False,
            error_type=ValidationErrorType.INVALID_FORMAT,
            message=f"Invalid reference format: '{reference.display_text}'",
            confidence=0.8,
        )

    return ValidationResult(
        reference_id=reference.id,
        is_valid=True,
        message="Reference is valid",
        confidence=1.0,
    )


def validate_references(
    references: Iterable[CrossReference],
    items: Mapping[str, ReferenceableItem],
    formats: ReferenceFormats,
    tracker: ReferenceTracker,
) -> List[ValidationResult]:
    """
    Validate every reference.

    Args:
        references: References to check, in order
        items: Referenceable item index
        formats: Templates used for the format check
        tracker: Reverse index used for the circular check

    Returns:
        One ValidationResult per reference, in input order
    """
    results = [validate_single_reference(ref, items, formats, tracker) for ref in references]

    invalid = [r for r in results if not r.is_valid]
    for result in invalid:
        logger.warning(f"{result.reference_id}: {result.error_type} - {result.message}")
    logger.info(f"Validated {len(results)} references ({len(invalid)} invalid)")
    return results
