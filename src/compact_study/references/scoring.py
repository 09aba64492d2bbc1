"""
Module: references.scoring

Purpose:
    Heuristic, purely syntactic matching of source text against
    referenceable items, plus candidate discovery over a document.

Scoring (weights in common.thresholds.ConfidenceWeights):
    + 0.8  item title appears verbatim (case-insensitive)
    + 0.4  x fraction of title words (> 3 chars) found in the text
    + 0.3  "formula" in text and item is a formula (0.3 example, 0.2 section)
    + 0.2  item is a formula and text mentions equation/formula/identity/law
    Clamped to [0, 1].

Key Functions:
    - calculate_reference_confidence()
    - calculate_distance()
    - extract_context()
    - find_candidates_in_text()
    - find_reference_candidates()

Used By:
    - references.system
"""

from __future__ import annotations

import logging
import re
from typing import Dict, List, Mapping, Optional, Tuple

from compact_study.common.thresholds import CONFIDENCE_WEIGHTS, ConfidenceWeights
from compact_study.core.models import AcademicDocument

from .config import CrossReferenceConfig
from .models import ItemLocation, ReferenceableItem, ReferenceCandidate, ReferenceType

logger = logging.getLogger(__name__)

_MATH_INDICATOR_RE = re.compile(r"\b(equation|formula|identity|law)\b", re.IGNORECASE)
_SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def _type_keyword(item_type: ReferenceType, weights: ConfidenceWeights) -> Optional[Tuple[str, float]]:
    """Keyword that hints at an item's type, with its bonus weight."""
    if item_type == ReferenceType.FORMULA:
        return "formula", weights.formula_keyword
    if item_type == ReferenceType.EXAMPLE:
        return "example", weights.example_keyword
    if item_type == ReferenceType.SECTION:
        return "section", weights.section_keyword
    return None


def calculate_reference_confidence(
    text: str,
    item: ReferenceableItem,
    weights: ConfidenceWeights = CONFIDENCE_WEIGHTS,
) -> float:
    """
    Score how likely text refers to item.

    Items with an empty title get no title-based score.

    Args:
        text: Source text
        item: Candidate target
        weights: Score weights

    Returns:
        Confidence in [0, 1]
    """
    lower_text = text.lower()
    lower_title = item.title.strip().lower()
    confidence = 0.0

    if lower_title:
        if lower_title in lower_text:
            confidence += weights.exact_title

        title_words = [w for w in lower_title.split() if len(w) > weights.min_title_word_length]
        if title_words:
            matching = sum(1 for w in title_words if w in lower_text)
            confidence += matching / len(title_words) * weights.title_words

    keyword = _type_keyword(item.type, weights)
    if keyword is not None:
        word, weight = keyword
        if word in lower_text:
            confidence += weight

    if item.type == ReferenceType.FORMULA and _MATH_INDICATOR_RE.search(text):
        confidence += weights.math_indicator

    return min(max(confidence, 0.0), 1.0)


def calculate_distance(source: ItemLocation, target: ItemLocation) -> int:
    """
    Structural distance: parts apart x 10, plus sections apart within a part.
    """
    part_distance = abs(source.part_index - target.part_index)
    section_distance = 0
    if source.part_index == target.part_index:
        section_distance = abs(source.section_index - target.section_index)
    return part_distance * 10 + section_distance


def extract_context(
    text: str,
    item: ReferenceableItem,
    weights: ConfidenceWeights = CONFIDENCE_WEIGHTS,
) -> str:
    """Sentence of text containing the item title, else the opening characters."""
    lower_title = item.title.strip().lower()
    if lower_title:
        for sentence in _SENTENCE_SPLIT_RE.split(text):
            if lower_title in sentence.lower():
                return sentence.strip()
    return text[:weights.context_fallback_chars]


def find_candidates_in_text(
    text: str,
    source_id: str,
    source_location: ItemLocation,
    items: Mapping[str, ReferenceableItem],
    config: CrossReferenceConfig,
) -> List[ReferenceCandidate]:
    """
    Score text against every item other than its own source.

    Keeps candidates with confidence >= threshold and distance <= max_distance.
    """
    candidates: List[ReferenceCandidate] = []
    for item_id, item in items.items():
        if item_id == source_id:
            continue

        confidence = calculate_reference_confidence(text, item)
        if confidence < config.confidence_threshold:
            continue

        distance = calculate_distance(source_location, item.location)
        if distance > config.max_distance:
            continue

        candidates.append(ReferenceCandidate(
            source_id=source_id,
            target_id=item_id,
            type=item.type,
            confidence=confidence,
            context=extract_context(text, item),
            distance=distance,
        ))
    return candidates


def find_reference_candidates(
    document: AcademicDocument,
    items: Dict[str, ReferenceableItem],
    config: CrossReferenceConfig,
) -> List[ReferenceCandidate]:
    """
    Find candidates in every section body and every worked example.

    Example text is the problem followed by the solution step descriptions.

    Returns:
        Candidates in document order (sections before their examples)
    """
    candidates: List[ReferenceCandidate] = []

    for part_index, section_index, section in document.iter_sections():
        location = ItemLocation(part_index, section_index)
        candidates.extend(find_candidates_in_text(
            section.content, section.section_number, location, items, config,
        ))
        for example in section.examples:
            example_text = f"{example.problem} {example.solution_text}"
            candidates.extend(find_candidates_in_text(
                example_text, example.id, location, items, config,
            ))

    logger.debug(f"Found {len(candidates)} reference candidates")
    return candidates
