"""
Module: references.system

Purpose:
    Generate, track and validate cross-references for an AcademicDocument.

    Pipeline:
    1. Extract referenceable items (references.index)
    2. Find scored candidates in section and example text (references.scoring)
    3. Deduplicate by (source, target), highest confidence first, and build
       CrossReferences with sequential ids and formatted display text
    4. Validate, if enabled (references.validation)

Key Functions:
    - build_reference_report(): Pure (document, config) -> ReferenceReport
    - create_cross_references(): Deduplicate candidates into references

Key Classes:
    - ReferenceReport: References, validation results, item index, tracker
    - CrossReferenceSystem: Stateful facade scoped to one generation request

Used By:
    - compact_study.controller: plan_document()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from compact_study.core.models import AcademicDocument

from .config import CrossReferenceConfig, ReferenceFormats, merge_reference_config
from .formatting import format_display_text
from .index import extract_referenceable_items
from .models import (
    CrossReference,
    ReferenceableItem,
    ReferenceCandidate,
    ReferenceTracker,
    ValidationResult,
)
from .scoring import find_reference_candidates
from .validation import validate_references

logger = logging.getLogger(__name__)

ConfigInput = Union[CrossReferenceConfig, Mapping[str, Any], None]


@dataclass(frozen=True)
class ReferenceReport:
    """
    Result of one cross-reference generation run.

    Attributes:
        references: Deduplicated references, in id order
        validation_results: One per reference when validation ran, else empty
        items: Referenceable item index used for the run
        tracker: Forward map and reverse index for the run
    """
    references: Tuple[CrossReference, ...]
    validation_results: Tuple[ValidationResult, ...]
    items: Mapping[str, ReferenceableItem]
    tracker: ReferenceTracker

    @property
    def invalid_results(self) -> Tuple[ValidationResult, ...]:
        return tuple(r for r in self.validation_results if not r.is_valid)

    def references_to(self, target_id: str) -> List[CrossReference]:
        return self.tracker.references_to(target_id)


def create_cross_references(
    candidates: Iterable[ReferenceCandidate],
    formats: ReferenceFormats,
    tracker: ReferenceTracker,
) -> List[CrossReference]:
    """
    Deduplicate candidates and materialize CrossReferences.

    Candidates are stable-sorted by confidence (descending), so ties keep
    first-seen order. The first candidate for each (source, target) pair
    wins; ids are assigned sequentially from "ref-1".

    Args:
        candidates: Scored candidates
        formats: Display templates
        tracker: Receives every created reference

    Returns:
        References in id order
    """
    ordered = sorted(candidates, key=lambda c: -c.confidence)
    seen: set[Tuple[str, str]] = set()
    references: List[CrossReference] = []

    for candidate in ordered:
        key = (candidate.source_id, candidate.target_id)
        if key in seen:
            continue
        seen.add(key)

        reference = CrossReference(
            id=f"ref-{len(references) + 1}",
            type=candidate.type,
            source_id=candidate.source_id,
            target_id=candidate.target_id,
            display_text=format_display_text(candidate.type, candidate.target_id, formats),
        )
        references.append(reference)
        tracker.add(reference)
        logger.debug(
            f"{reference.id}: {reference.source_id} -> {reference.target_id} "
            f"({candidate.confidence:.2f}, '{candidate.context}')"
        )

    return references


def build_reference_report(
    document: AcademicDocument,
    config: CrossReferenceConfig,
    tracker: Optional[ReferenceTracker] = None,
) -> ReferenceReport:
    """
    Generate and validate cross-references for a document.

    Args:
        document: Source document (read-only)
        config: Generation configuration
        tracker: Tracker to fill; reset first. A new one is created if None.

    Returns:
        ReferenceReport

    Raises:
        DuplicateItemError: If the document reuses an item ID
    """
    tracker = tracker if tracker is not None else ReferenceTracker()
    tracker.reset()

    if not config.enable_auto_generation:
        logger.info("Cross-reference generation disabled")
        return ReferenceReport(references=(), validation_results=(), items={}, tracker=tracker)

    items = extract_referenceable_items(document)
    candidates = find_reference_candidates(document, items, config)
    references = create_cross_references(candidates, config.reference_formats, tracker)

    results: List[ValidationResult] = []
    if config.validation_enabled:
        results = validate_references(references, items, config.reference_formats, tracker)
        tracker.validation_results = list(results)

    logger.info(
        f"Generated {len(references)} cross-references from {len(candidates)} candidates "
        f"over {len(items)} items"
    )
    return ReferenceReport(
        references=tuple(references),
        validation_results=tuple(results),
        items=items,
        tracker=tracker,
    )


class CrossReferenceSystem:
    """
    Stateful cross-reference facade.

    Holds a ReferenceTracker that is reset at the start of every
    generate_cross_references() call. Not safe to share across concurrent
    requests; use one instance per generation request.

    Example:
        >>> system = CrossReferenceSystem({"confidence_threshold": 0.6})
        >>> refs = system.generate_cross_references(document)
        >>> system.find_references_to_target("Ex.1.1.1")
        [CrossReference(id='ref-1', ...)]
    """

    def __init__(self, config: ConfigInput = None) -> None:
        self._config = _resolve(CrossReferenceConfig(), config)
        self._tracker = ReferenceTracker()
        self._last_report: Optional[ReferenceReport] = None

    @property
    def config(self) -> CrossReferenceConfig:
        return self._config

    @property
    def last_report(self) -> Optional[ReferenceReport]:
        """Report from the most recent generation run."""
        return self._last_report

    def update_config(self, overrides: ConfigInput) -> None:
        """Merge overrides into the current configuration (re-validated)."""
        self._config = _resolve(self._config, overrides)

    def generate_cross_references(self, document: AcademicDocument) -> List[CrossReference]:
        """Generate (and, if enabled, validate) references for a document."""
        report = build_reference_report(document, self._config, self._tracker)
        self._last_report = report
        return list(report.references)

    def format_reference(self, reference: CrossReference) -> str:
        """Re-derive display text from the current format configuration."""
        return format_display_text(reference.type, reference.target_id, self._config.reference_formats)

    def validate_references(
        self,
        references: Iterable[CrossReference],
        items: Mapping[str, ReferenceableItem],
    ) -> List[ValidationResult]:
        """Validate references against an item index; results are also stored."""
        results = validate_references(references, items, self._config.reference_formats, self._tracker)
        self._tracker.validation_results = list(results)
        return results

    def get_validation_results(self) -> List[ValidationResult]:
        return list(self._tracker.validation_results)

    def is_valid_target(self, target_id: str, items: Mapping[str, ReferenceableItem]) -> bool:
        return target_id in items

    def find_references_to_target(self, target_id: str) -> List[CrossReference]:
        """References from the last run whose target is target_id."""
        return self._tracker.references_to(target_id)


def create_cross_reference_system(config: ConfigInput = None) -> CrossReferenceSystem:
    """Factory for a fresh, request-scoped CrossReferenceSystem."""
    return CrossReferenceSystem(config)


def _resolve(base: CrossReferenceConfig, config: ConfigInput) -> CrossReferenceConfig:
    if isinstance(config, CrossReferenceConfig):
        return config
    return merge_reference_config(base, config)
