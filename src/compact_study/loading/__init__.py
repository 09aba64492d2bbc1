"""Document loading from the extraction pipeline's JSON output."""

from .loader import LoaderError, load_document, parse_document

__all__ = ["LoaderError", "load_document", "parse_document"]
