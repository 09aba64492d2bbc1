import copy
import json
import sys
from pathlib import Path

import pytest

# Add src to sys.path so we can import compact_study
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from compact_study.core.models import AcademicDocument  # noqa: E402
from compact_study.layout.models import BlockType, ContentBlock  # noqa: E402


SAMPLE_DOCUMENT = {
    "title": "Probability Essentials",
    "metadata": {"source": "lecture-notes.pdf"},
    "parts": [
        {
            "partNumber": 1,
            "title": "Foundations",
            "sections": [
                {
                    "sectionNumber": "1.1",
                    "title": "Basic Rules",
                    "content": (
                        "Probabilities lie between zero and one. "
                        "The addition rule combines events. "
                        "Work through the Union Probability Calculation example to practise."
                    ),
                    "formulas": [
                        {
                            "id": "1.1.1",
                            "latex": "P(A \\cup B) = P(A) + P(B) - P(A \\cap B)",
                            "context": "Addition Rule",
                            "type": "display",
                            "isKeyFormula": True,
                        }
                    ],
                    "examples": [],
                    "definitions": [
                        {"id": "def-1", "term": "Sample Space", "definition": "The set of all outcomes."}
                    ],
                    "subsections": [],
                },
                {
                    "sectionNumber": "1.2",
                    "title": "Worked Problems",
                    "content": "",
                    "formulas": [],
                    "examples": [
                        {
                            "id": "Ex.1.2.1",
                            "title": "Union Probability Calculation",
                            "problem": "Given P(A) = 0.5, P(B) = 0.4 and P(A and B) = 0.2, find P(A or B).",
                            "solution": [
                                {
                                    "stepNumber": 1,
                                    "description": "Apply the addition rule",
                                    "formula": "P(A \\cup B) = 0.7",
                                    "explanation": "Subtract the overlap once.",
                                }
                            ],
                            "subtopic": "unions",
                        }
                    ],
                    "subsections": [],
                },
            ],
        },
        {
            "partNumber": 2,
            "title": "Distributions",
            "sections": [
                {
                    "sectionNumber": "2.1",
                    "title": "Binomial Distribution",
                    "content": (
                        "- Fixed number of trials\n"
                        "- Independent trials\n"
                        "- Constant success probability"
                    ),
                    "formulas": [],
                    "examples": [],
                    "subsections": [
                        {
                            "sectionNumber": "2.1.1",
                            "title": "Mean and Variance",
                            "content": "The mean is np.",
                        }
                    ],
                }
            ],
        },
    ],
}


@pytest.fixture
def sample_document_data() -> dict:
    """Fresh copy of the sample document JSON."""
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def sample_document(sample_document_data) -> AcademicDocument:
    return AcademicDocument.from_dict(sample_document_data)


@pytest.fixture
def sample_document_path(tmp_path: Path, sample_document_data) -> Path:
    """Sample document written to a JSON file."""
    path = tmp_path / "probability.json"
    path.write_text(json.dumps(sample_document_data), encoding="utf-8")
    return path


@pytest.fixture
def make_block():
    """Factory for text blocks with an explicit height."""
    def _make(block_id, height, *, breakable=True, priority=5, block_type=BlockType.TEXT, content=None):
        return ContentBlock(
            id=block_id,
            type=block_type,
            content=content if content is not None else "x" * 100,
            estimated_height=height,
            breakable=breakable,
            priority=priority,
        )
    return _make
