"""
Unit Tests for Reference Scoring

Tests for confidence scoring, structural distance and candidate discovery.
"""

import pytest

from compact_study.common.thresholds import ConfidenceWeights
from compact_study.references import (
    CrossReferenceConfig,
    ItemLocation,
    ReferenceableItem,
    ReferenceType,
    calculate_distance,
    calculate_reference_confidence,
    extract_referenceable_items,
    find_reference_candidates,
)
from compact_study.references.scoring import extract_context, find_candidates_in_text


def _item(title, item_type=ReferenceType.FORMULA, item_id="t", location=ItemLocation(0, 0)):
    return ReferenceableItem(
        id=item_id,
        type=item_type,
        title=title,
        content="",
        location=location,
        section_number="1.1",
    )


class TestCalculateReferenceConfidence:
    """Tests for calculate_reference_confidence function."""

    def test_confidence_when_title_verbatim_then_at_least_point_eight(self):
        item = _item("Union Probability Calculation", ReferenceType.EXAMPLE)

        confidence = calculate_reference_confidence(
            "see the Union Probability Calculation example", item
        )

        assert confidence >= 0.8

    def test_confidence_when_title_words_scattered_then_word_fraction(self):
        item = _item("Addition Rule", ReferenceType.SECTION)

        assert calculate_reference_confidence("the rule of addition", item) == pytest.approx(0.4)

    def test_confidence_when_half_title_words_then_half_weight(self):
        item = _item("Bayes Theorem", ReferenceType.THEOREM)

        assert calculate_reference_confidence("bayes was a minister", item) == pytest.approx(0.2)

    def test_confidence_when_short_words_then_ignored(self):
        item = _item("Law of Sines", ReferenceType.SECTION)

        assert calculate_reference_confidence("sines appear here", item) == pytest.approx(0.4)

    def test_confidence_when_formula_keyword_then_type_bonus_and_math_indicator(self):
        item = _item("Zzzz Qqqq", ReferenceType.FORMULA)

        assert calculate_reference_confidence("use this formula", item) == pytest.approx(0.5)

    def test_confidence_when_math_indicator_only_then_point_two(self):
        item = _item("Zzzz Qqqq", ReferenceType.FORMULA)

        assert calculate_reference_confidence("by the distributive law", item) == pytest.approx(0.2)

    def test_confidence_when_example_keyword_then_point_three(self):
        item = _item("Zzzz Qqqq", ReferenceType.EXAMPLE)

        assert calculate_reference_confidence("another example", item) == pytest.approx(0.3)

    def test_confidence_when_section_keyword_then_point_two(self):
        item = _item("Zzzz Qqqq", ReferenceType.SECTION)

        assert calculate_reference_confidence("next section", item) == pytest.approx(0.2)

    def test_confidence_when_custom_weights_then_type_bonus_follows_them(self):
        weights = ConfidenceWeights(formula_keyword=0.1, example_keyword=0.25, section_keyword=0.5)

        assert calculate_reference_confidence(
            "next section", _item("Zzzz Qqqq", ReferenceType.SECTION), weights
        ) == pytest.approx(0.5)
        assert calculate_reference_confidence(
            "another example", _item("Zzzz Qqqq", ReferenceType.EXAMPLE), weights
        ) == pytest.approx(0.25)

    def test_confidence_when_keyword_but_other_type_then_no_bonus(self):
        item = _item("Zzzz Qqqq", ReferenceType.DEFINITION)

        assert calculate_reference_confidence("formula example section", item) == 0.0

    def test_confidence_when_everything_matches_then_clamped_to_one(self):
        item = _item("Addition Rule", ReferenceType.FORMULA)

        assert calculate_reference_confidence("the addition rule formula", item) == 1.0

    def test_confidence_when_empty_title_then_no_title_score(self):
        item = _item("", ReferenceType.FORMULA)

        assert calculate_reference_confidence("plain words", item) == 0.0

    def test_confidence_when_case_differs_then_still_matches(self):
        item = _item("Sample Space", ReferenceType.DEFINITION)

        assert calculate_reference_confidence("THE SAMPLE SPACE IS", item) == pytest.approx(1.0)


class TestCalculateDistance:
    @pytest.mark.parametrize("source, target, expected", [
        (ItemLocation(0, 0), ItemLocation(0, 0), 0),
        (ItemLocation(0, 0), ItemLocation(0, 2), 2),
        (ItemLocation(0, 3), ItemLocation(0, 1), 2),
        (ItemLocation(0, 1), ItemLocation(1, 0), 10),
        (ItemLocation(2, 5), ItemLocation(0, 0), 20),
        (ItemLocation(0, 0), ItemLocation(0, -1), 1),
    ])
    def test_distance_when_locations_then_parts_times_ten_plus_sections(self, source, target, expected):
        assert calculate_distance(source, target) == expected


class TestExtractContext:
    def test_context_when_title_in_sentence_then_that_sentence(self):
        text = "First sentence. Then see the Addition Rule here! Last one?"

        assert extract_context(text, _item("addition rule")) == "Then see the Addition Rule here"

    def test_context_when_title_absent_then_opening_characters(self):
        text = "y" * 150

        assert extract_context(text, _item("Missing")) == "y" * 100


class TestFindCandidates:
    """Tests for candidate discovery."""

    def test_candidates_when_text_mentions_item_then_candidate_with_context(self):
        items = {"1.1.1": _item("Addition Rule", item_id="1.1.1", location=ItemLocation(0, 1))}

        candidates = find_candidates_in_text(
            "Recall the addition rule. It is useful.",
            "1.2",
            ItemLocation(0, 0),
            items,
            CrossReferenceConfig(),
        )

        assert len(candidates) == 1
        assert candidates[0].target_id == "1.1.1"
        assert candidates[0].context == "Recall the addition rule"
        assert candidates[0].distance == 1

    def test_candidates_when_source_is_item_then_skipped(self):
        items = {"1.1": _item("Basic Rules", ReferenceType.SECTION, item_id="1.1")}

        candidates = find_candidates_in_text(
            "Basic rules apply", "1.1", ItemLocation(0, 0), items, CrossReferenceConfig()
        )

        assert candidates == []

    def test_candidates_when_below_threshold_then_dropped(self):
        items = {"f": _item("Addition Rule", item_id="f")}
        config = CrossReferenceConfig(confidence_threshold=0.5)

        candidates = find_candidates_in_text("the rule of addition", "s", ItemLocation(0, 0), items, config)

        assert candidates == []

    def test_candidates_when_too_far_then_dropped(self):
        items = {"f": _item("Addition Rule", item_id="f", location=ItemLocation(1, 0))}

        candidates = find_candidates_in_text(
            "the addition rule", "s", ItemLocation(0, 0), items, CrossReferenceConfig()
        )

        assert candidates == []

    def test_candidates_when_sample_document_then_sections_and_examples_scanned(self, sample_document):
        items = extract_referenceable_items(sample_document)

        candidates = find_reference_candidates(sample_document, items, CrossReferenceConfig())

        assert [(c.source_id, c.target_id) for c in candidates] == [
            ("1.1", "1.1.1"),
            ("1.1", "Ex.1.2.1"),
            ("Ex.1.2.1", "1.1.1"),
        ]
        assert all(c.confidence == 1.0 for c in candidates)
