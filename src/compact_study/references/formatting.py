"""
Module: references.formatting

Purpose:
    Display text for cross-references.

Key Functions:
    - extract_display_id(): Strip known ID prefixes ("Ex.", "part-")
    - format_display_text(): Substitute the display ID into a type's template
    - format_pattern(): Regex matching any text produced by a template
"""

from __future__ import annotations

import re
from functools import lru_cache

from .config import ID_PLACEHOLDER, ReferenceFormats
from .models import ReferenceType

_DISPLAY_PREFIXES = ("Ex.", "part-")


def extract_display_id(target_id: str) -> str:
    """
    Display-friendly form of an item ID.

    Example:
        >>> extract_display_id("Ex.1.1.1")
        '1.1.1'
        >>> extract_display_id("part-2")
        '2'
        >>> extract_display_id("1.3")
        '1.3'
    """
    for prefix in _DISPLAY_PREFIXES:
        if target_id.startswith(prefix):
            return target_id[len(prefix):]
    return target_id


def format_display_text(
    reference_type: ReferenceType,
    target_id: str,
    formats: ReferenceFormats,
) -> str:
    """Fill the type's template with the display ID of target_id."""
    template = formats.template_for(reference_type)
    return template.replace(ID_PLACEHOLDER, extract_display_id(target_id))


@lru_cache(maxsize=64)
def format_pattern(template: str) -> re.Pattern:
    """Template with its literal text escaped and {id} as a wildcard."""
    pieces = (re.escape(piece) for piece in template.split(ID_PLACEHOLDER))
    return re.compile(".*".join(pieces), re.DOTALL)
