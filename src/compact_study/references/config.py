"""
Module: references.config

Purpose:
    Configuration for cross-reference generation.

Key Classes:
    - ReferenceFormats: Display template per reference type
    - CrossReferenceConfig: Immutable, validated configuration

Key Functions:
    - merge_reference_config(): Apply a partial (nested mapping) config

Used By:
    - references.system
    - compact_study.cli
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Optional

from .models import ReferenceType

ID_PLACEHOLDER = "{id}"


@dataclass(frozen=True)
class ReferenceFormats:
    """
    Display templates, each containing an ``{id}`` placeholder.

    Example:
        >>> ReferenceFormats().template_for(ReferenceType.EXAMPLE)
        'see Ex. {id}'
    """
    example: str = "see Ex. {id}"
    formula: str = "see Formula {id}"
    section: str = "see Section {id}"
    theorem: str = "see Theorem {id}"
    definition: str = "see Definition {id}"

    def __post_init__(self) -> None:
        for f in fields(self):
            template = getattr(self, f.name)
            if ID_PLACEHOLDER not in template:
                raise ValueError(f"Reference format for {f.name!r} must contain {ID_PLACEHOLDER}: {template!r}")

    def template_for(self, reference_type: ReferenceType) -> str:
        return getattr(self, ReferenceType(reference_type).value)


@dataclass(frozen=True)
class CrossReferenceConfig:
    """
    Configuration for cross-reference generation (immutable).

    Attributes:
        enable_auto_generation: Master switch; when off, no references are produced
        reference_formats: Display template per type
        validation_enabled: Run integrity checks after generation
        max_distance: Maximum structural distance for auto-linking
        confidence_threshold: Minimum score in [0, 1] to accept a candidate
    """
    enable_auto_generation: bool = True
    reference_formats: ReferenceFormats = field(default_factory=ReferenceFormats)
    validation_enabled: bool = True
    max_distance: int = 3
    confidence_threshold: float = 0.7

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(f"confidence_threshold must be in [0, 1]: {self.confidence_threshold}")
        if self.max_distance < 0:
            raise ValueError(f"max_distance must be non-negative: {self.max_distance}")


def merge_reference_config(
    base: CrossReferenceConfig,
    overrides: Optional[Mapping[str, Any]],
) -> CrossReferenceConfig:
    """
    Merge a partial configuration over a base configuration.

    ``reference_formats`` may be given as a mapping of type -> template;
    unspecified types keep the base template.

    Raises:
        ValueError: Unknown key or invalid merged configuration
    """
    if not overrides:
        return base

    known = {f.name for f in fields(base)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in known:
            raise ValueError(f"Unknown cross-reference configuration key: {key!r}")
        if key == "reference_formats" and isinstance(value, Mapping):
            format_keys = {f.name for f in fields(ReferenceFormats)}
            unknown = set(value) - format_keys
            if unknown:
                raise ValueError(f"Unknown reference format types: {sorted(unknown)}")
            value = replace(base.reference_formats, **value)
        changes[key] = value
    return replace(base, **changes)
