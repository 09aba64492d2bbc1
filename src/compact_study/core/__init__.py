"""
Compact Study Core Package

Shared document models and input validation used by the layout engine
and the cross-reference system.
"""

from .models import AcademicDocument, DocumentPart, AcademicSection, Formula, WorkedExample
from .schemas import ValidationError, validate_document

__all__ = [
    "AcademicDocument",
    "DocumentPart",
    "AcademicSection",
    "Formula",
    "WorkedExample",
    "ValidationError",
    "validate_document",
]
