"""
Module: document

Purpose:
    Provides the AcademicDocument model tree - the read-only input shared by
    the layout engine and the cross-reference system. Produced upstream by
    the extraction pipeline as JSON (camelCase keys) and deserialized here.

Key Classes:
    - AcademicDocument: Title, parts and free-form metadata
    - DocumentPart: Numbered part holding sections
    - AcademicSection: Numbered section with prose, formulas, examples
    - Formula, WorkedExample, SolutionStep: Extracted mathematical content
    - Definition, Theorem: Optional named statements inside a section

Dependencies:
    - dataclasses (std)
    - typing (std)

Used By:
    - core.schemas.validator
    - layout.blocks: Building content blocks from sections
    - references.index: Extracting referenceable items
    - loading.loader
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Optional, Tuple


class FormulaKind(str, Enum):
    """How a formula is typeset."""
    INLINE = "inline"
    DISPLAY = "display"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Formula:
    """
    Extracted formula (immutable).

    Attributes:
        id: Globally unique ID assigned upstream (e.g. "1.1.1")
        latex: LaTeX source
        context: Short description used as the formula's title
        type: Inline or display
        is_key_formula: Flagged as important by the extractor
    """
    id: str
    latex: str
    context: str = ""
    type: FormulaKind = FormulaKind.DISPLAY
    is_key_formula: bool = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "latex": self.latex,
            "context": self.context,
            "type": self.type.value,
            "isKeyFormula": self.is_key_formula,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Formula:
        return cls(
            id=data["id"],
            latex=data.get("latex", ""),
            context=data.get("context", ""),
            type=FormulaKind(data.get("type", FormulaKind.DISPLAY.value)),
            is_key_formula=bool(data.get("isKeyFormula", False)),
        )


@dataclass(frozen=True, slots=True)
class SolutionStep:
    """Single step of a worked example solution."""
    step_number: int
    description: str
    explanation: str = ""
    formula: Optional[str] = None

    def to_dict(self) -> dict:
        d = {
            "stepNumber": self.step_number,
            "description": self.description,
            "explanation": self.explanation,
        }
        if self.formula is not None:
            d["formula"] = self.formula
        return d

    @classmethod
    def from_dict(cls, data: dict) -> SolutionStep:
        return cls(
            step_number=int(data["stepNumber"]),
            description=data.get("description", ""),
            explanation=data.get("explanation", ""),
            formula=data.get("formula"),
        )


@dataclass(frozen=True, slots=True)
class WorkedExample:
    """
    Worked example with a problem statement and ordered solution steps.

    Attributes:
        id: Globally unique ID assigned upstream (e.g. "Ex.1.1.1")
        title: Human readable title, used for reference matching
        problem: Problem statement
        solution: Ordered solution steps
        subtopic: Sub-topic label from the extractor
    """
    id: str
    title: str
    problem: str
    solution: Tuple[SolutionStep, ...] = ()
    subtopic: str = ""

    @property
    def solution_text(self) -> str:
        """Step descriptions joined with spaces."""
        return " ".join(step.description for step in self.solution)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "problem": self.problem,
            "solution": [step.to_dict() for step in self.solution],
            "subtopic": self.subtopic,
        }

    @classmethod
    def from_dict(cls, data: dict) -> WorkedExample:
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            problem=data.get("problem", ""),
            solution=tuple(SolutionStep.from_dict(s) for s in data.get("solution", [])),
            subtopic=data.get("subtopic", ""),
        )


@dataclass(frozen=True, slots=True)
class Definition:
    """Named definition inside a section."""
    id: str
    term: str
    definition: str

    def to_dict(self) -> dict:
        return {"id": self.id, "term": self.term, "definition": self.definition}

    @classmethod
    def from_dict(cls, data: dict) -> Definition:
        return cls(id=data["id"], term=data.get("term", ""), definition=data.get("definition", ""))


@dataclass(frozen=True, slots=True)
class Theorem:
    """Named theorem inside a section."""
    id: str
    name: str
    statement: str

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "statement": self.statement}

    @classmethod
    def from_dict(cls, data: dict) -> Theorem:
        return cls(id=data["id"], name=data.get("name", ""), statement=data.get("statement", ""))


@dataclass(frozen=True, slots=True)
class AcademicSection:
    """
    Numbered section of a document part (immutable tree node).

    Attributes:
        section_number: Dotted number like "1.1" - doubles as the section's ID
        title: Section heading
        content: Prose body
        formulas: Formulas extracted from this section
        examples: Worked examples from this section
        subsections: Nested sections (rendered, not indexed for references)
        definitions: Optional definitions
        theorems: Optional theorems
    """
    section_number: str
    title: str
    content: str = ""
    formulas: Tuple[Formula, ...] = ()
    examples: Tuple[WorkedExample, ...] = ()
    subsections: Tuple[AcademicSection, ...] = ()
    definitions: Tuple[Definition, ...] = ()
    theorems: Tuple[Theorem, ...] = ()

    def iter_all(self) -> Iterator[AcademicSection]:
        """
        Iterate over this section and all nested subsections (pre-order).

        Yields:
            This section, then all descendants in document order
        """
        yield self
        for child in self.subsections:
            yield from child.iter_all()

    def to_dict(self) -> dict:
        d: Dict[str, Any] = {
            "sectionNumber": self.section_number,
            "title": self.title,
            "content": self.content,
            "formulas": [f.to_dict() for f in self.formulas],
            "examples": [e.to_dict() for e in self.examples],
            "subsections": [s.to_dict() for s in self.subsections],
        }
        if self.definitions:
            d["definitions"] = [x.to_dict() for x in self.definitions]
        if self.theorems:
            d["theorems"] = [x.to_dict() for x in self.theorems]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> AcademicSection:
        return cls(
            section_number=str(data["sectionNumber"]),
            title=data.get("title", ""),
            content=data.get("content", ""),
            formulas=tuple(Formula.from_dict(f) for f in data.get("formulas", [])),
            examples=tuple(WorkedExample.from_dict(e) for e in data.get("examples", [])),
            subsections=tuple(cls.from_dict(s) for s in data.get("subsections", [])),
            definitions=tuple(Definition.from_dict(x) for x in data.get("definitions", [])),
            theorems=tuple(Theorem.from_dict(x) for x in data.get("theorems", [])),
        )


@dataclass(frozen=True, slots=True)
class DocumentPart:
    """Top-level numbered part of a document."""
    part_number: int
    title: str
    sections: Tuple[AcademicSection, ...] = ()

    def to_dict(self) -> dict:
        return {
            "partNumber": self.part_number,
            "title": self.title,
            "sections": [s.to_dict() for s in self.sections],
        }

    @classmethod
    def from_dict(cls, data: dict) -> DocumentPart:
        return cls(
            part_number=int(data["partNumber"]),
            title=data.get("title", ""),
            sections=tuple(AcademicSection.from_dict(s) for s in data.get("sections", [])),
        )


@dataclass(frozen=True)
class AcademicDocument:
    """
    Structured academic document (immutable).

    The shared input of both the layout engine and the cross-reference
    system. Treated as read-only; extraction quality is the extractor's
    responsibility.

    Example:
        >>> doc = AcademicDocument.from_dict(json.loads(path.read_text()))
        >>> doc.formula_count
        12
    """
    title: str
    parts: Tuple[DocumentPart, ...] = ()
    metadata: Dict[str, Any] = field(default_factory=dict)

    def iter_sections(self) -> Iterator[Tuple[int, int, AcademicSection]]:
        """
        Iterate over top-level sections with their structural indices.

        Yields:
            (part_index, section_index, section) tuples in document order
        """
        for part_index, part in enumerate(self.parts):
            for section_index, section in enumerate(part.sections):
                yield part_index, section_index, section

    @property
    def formula_count(self) -> int:
        return sum(len(s.formulas) for _, _, top in self.iter_sections() for s in top.iter_all())

    @property
    def example_count(self) -> int:
        return sum(len(s.examples) for _, _, top in self.iter_sections() for s in top.iter_all())

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "parts": [p.to_dict() for p in self.parts],
            "metadata": dict(self.metadata),
        }

    @classmethod
    def from_dict(cls, data: dict) -> AcademicDocument:
        return cls(
            title=data.get("title", ""),
            parts=tuple(DocumentPart.from_dict(p) for p in data.get("parts", [])),
            metadata=dict(data.get("metadata") or {}),
        )
