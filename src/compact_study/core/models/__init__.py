"""
Core Models Package

Immutable data models for the structured academic document consumed by
both the layout engine and the cross-reference system.

All models in this package are frozen dataclasses. A generation request
never mutates its input document.
"""

from .document import (
    AcademicDocument,
    DocumentPart,
    AcademicSection,
    Formula,
    FormulaKind,
    WorkedExample,
    SolutionStep,
    Definition,
    Theorem,
)

__all__ = [
    "AcademicDocument",
    "DocumentPart",
    "AcademicSection",
    "Formula",
    "FormulaKind",
    "WorkedExample",
    "SolutionStep",
    "Definition",
    "Theorem",
]
