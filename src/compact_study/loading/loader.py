"""
Module: loading.loader

Purpose:
    Load an AcademicDocument from a JSON file written by the extraction
    pipeline, validating it before deserialization.

Key Functions:
    - load_document(): Load and validate a document file
    - parse_document(): Validate and deserialize an already-parsed dict

Key Classes:
    - LoaderError: Exception for loading failures

Dependencies:
    - json (std)
    - compact_study.core.schemas: Validation

Used By:
    - compact_study.cli
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from compact_study.core.models import AcademicDocument
from compact_study.core.schemas import ValidationError, validate_document

logger = logging.getLogger(__name__)


class LoaderError(Exception):
    """Error loading a document."""
    pass


def parse_document(data: dict[str, Any], *, strict: bool = True) -> AcademicDocument:
    """
    Validate and deserialize document data.

    Args:
        data: Parsed JSON object
        strict: Also run full JSON schema validation

    Returns:
        AcademicDocument

    Raises:
        LoaderError: If the data is invalid
    """
    try:
        validate_document(data, strict=strict)
    except ValidationError as e:
        location = f" at {e.path}" if e.path else ""
        raise LoaderError(f"Invalid document{location}: {e}") from e

    try:
        return AcademicDocument.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise LoaderError(f"Could not build document: {e}") from e


def load_document(path: Path, *, strict: bool = True) -> AcademicDocument:
    """
    Load a document from a JSON file.

    Args:
        path: JSON file path
        strict: Also run full JSON schema validation

    Returns:
        AcademicDocument

    Raises:
        LoaderError: If the file cannot be read, parsed or validated

    Example:
        >>> doc = load_document(Path("probability.json"))
        >>> len(doc.parts)
        2
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise LoaderError(f"Cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise LoaderError(f"Invalid JSON in {path}: {e}") from e

    document = parse_document(data, strict=strict)
    logger.info(
        f"Loaded '{document.title}' from {path.name}: {len(document.parts)} parts, "
        f"{document.formula_count} formulas, {document.example_count} examples"
    )
    return document
