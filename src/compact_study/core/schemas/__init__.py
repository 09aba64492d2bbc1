"""Schema validation for documents handed over by the extraction pipeline."""

from .validator import DOCUMENT_SCHEMA_NAME, ValidationError, validate_document

__all__ = ["DOCUMENT_SCHEMA_NAME", "ValidationError", "validate_document"]
