"""
Schema Validation Utilities

Validates AcademicDocument JSON handed over by the extraction pipeline.

Two levels:
- Basic checks (always): required fields, list shapes, and identifier
  uniqueness across the whole document. Cross-references key items by ID,
  so a duplicate would silently merge two different targets. Subsection
  numbers are not reference targets; they only need to be unique among
  section numbers.
- Strict mode: full JSON Schema validation via jsonschema.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import jsonschema


DOCUMENT_SCHEMA_NAME = "document"

# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when document data fails validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_document(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate AcademicDocument data.

    Args:
        data: Document dictionary (camelCase keys, as produced upstream)
        strict: If True, also validate against the JSON schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Document must be a JSON object")

    missing = [f for f in ("title", "parts") if f not in data]
    if missing:
        raise ValidationError(
            f"Missing required fields: {missing}",
            path="",
            errors=[f"Missing field: {f}" for f in missing]
        )

    parts = data["parts"]
    if not isinstance(parts, list):
        raise ValidationError("parts must be a list", path="parts")

    seen: Dict[str, str] = {}
    headings: Dict[str, str] = {}
    for i, part in enumerate(parts):
        _validate_part(part, f"parts[{i}]", seen, headings)

    if strict:
        schema = _load_schema(DOCUMENT_SCHEMA_NAME)
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message]
            ) from e


def _validate_part(data: Any, path: str, seen: Dict[str, str], headings: Dict[str, str]) -> None:
    """Validate a document part and its sections."""
    if not isinstance(data, dict):
        raise ValidationError("Part must be an object", path=path)

    part_number = data.get("partNumber")
    if not isinstance(part_number, int) or isinstance(part_number, bool):
        raise ValidationError(
            f"Invalid partNumber: {part_number!r} (must be an integer)",
            path=f"{path}.partNumber"
        )
    _claim_id(f"part-{part_number}", f"{path}.partNumber", seen)

    sections = data.get("sections", [])
    if not isinstance(sections, list):
        raise ValidationError("sections must be a list", path=f"{path}.sections")
    for i, section in enumerate(sections):
        _validate_section(section, f"{path}.sections[{i}]", seen, headings)


def _validate_section(
    data: Any,
    path: str,
    seen: Dict[str, str],
    headings: Dict[str, str],
    *,
    top_level: bool = True,
) -> None:
    """
    Validate a section recursively, claiming every identifier it carries.

    Top-level section numbers are reference targets and share the item ID
    namespace. Subsection numbers are only checked against other section
    numbers.
    """
    if not isinstance(data, dict):
        raise ValidationError("Section must be an object", path=path)

    number = data.get("sectionNumber")
    if not isinstance(number, str) or not number:
        raise ValidationError(
            f"Invalid sectionNumber: {number!r} (must be a non-empty string)",
            path=f"{path}.sectionNumber"
        )
    _claim_id(number, f"{path}.sectionNumber", headings)
    if top_level:
        _claim_id(number, f"{path}.sectionNumber", seen)

    for key in ("formulas", "examples", "definitions", "theorems"):
        items = data.get(key, [])
        if not isinstance(items, list):
            raise ValidationError(f"{key} must be a list", path=f"{path}.{key}")
        for i, item in enumerate(items):
            item_path = f"{path}.{key}[{i}]"
            item_id = item.get("id") if isinstance(item, dict) else None
            if not isinstance(item_id, str) or not item_id:
                raise ValidationError(
                    f"Missing id in {key} entry",
                    path=f"{item_path}.id",
                    errors=["Missing field: id"]
                )
            _claim_id(item_id, f"{item_path}.id", seen)

    subsections = data.get("subsections", [])
    if not isinstance(subsections, list):
        raise ValidationError("subsections must be a list", path=f"{path}.subsections")
    for i, child in enumerate(subsections):
        _validate_section(child, f"{path}.subsections[{i}]", seen, headings, top_level=False)


def _claim_id(item_id: str, path: str, seen: Dict[str, str]) -> None:
    """Register an identifier, failing if it is already used elsewhere."""
    if item_id in seen:
        raise ValidationError(
            f"Duplicate identifier {item_id!r} (first used at {seen[item_id]})",
            path=path,
            errors=[f"Duplicate id: {item_id}"]
        )
    seen[item_id] = path

