"""
Module: layout.config

Purpose:
    Configuration for the compact layout engine.
    Defines paper size, column count, typography, spacing, margins and math
    rendering options, validated against compactness constraints.

Key Classes:
    - CompactLayoutConfig: Immutable, validated layout configuration
    - PaperSize: Supported paper sizes with physical dimensions

Key Functions:
    - merge_config(): Apply a partial (nested mapping) config over a base

Dependencies:
    - reportlab.lib.pagesizes: Physical paper dimensions
    - dataclasses (std)

Used By:
    - layout.engine: CompactLayoutEngine construction and update_config
    - layout.geometry: calculate_layout
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields, is_dataclass, replace
from enum import Enum
from typing import Any, Mapping, Optional, Tuple

from reportlab.lib.pagesizes import A4, LEGAL, LETTER
from reportlab.lib.units import inch

from .errors import LayoutError


# Compactness limits
MIN_FONT_SIZE_PT = 8.0
MAX_FONT_SIZE_PT = 14.0
MIN_LINE_HEIGHT = 1.0
MAX_LINE_HEIGHT = 2.0
MAX_PARAGRAPH_SPACING_EM = 0.35
MAX_LIST_SPACING_EM = 0.25
MIN_COLUMNS = 1
MAX_COLUMNS = 3


class PaperSize(str, Enum):
    """Supported paper sizes."""
    A4 = "a4"
    LETTER = "letter"
    LEGAL = "legal"

    def __str__(self) -> str:
        return self.value

    @property
    def dimensions(self) -> Tuple[float, float]:
        """(width, height) in inches."""
        width_pt, height_pt = _PAGE_SIZES_PT[self]
        return width_pt / inch, height_pt / inch


_PAGE_SIZES_PT = {
    PaperSize.A4: A4,
    PaperSize.LETTER: LETTER,
    PaperSize.LEGAL: LEGAL,
}


@dataclass(frozen=True)
class FontFamilies:
    """CSS-style font stacks handed through to renderers."""
    body: str = 'Times, "Times New Roman", serif'
    heading: str = 'Arial, "Helvetica Neue", sans-serif'
    math: str = 'Computer Modern, "Latin Modern Math", serif'
    code: str = 'Consolas, "Courier New", monospace'


@dataclass(frozen=True)
class TypographyConfig:
    """Font size (points), unitless line-height multiplier and font stacks."""
    font_size_pt: float = 10.5
    line_height: float = 1.2
    font_families: FontFamilies = field(default_factory=FontFamilies)


@dataclass(frozen=True)
class HeadingMargins:
    """Space around headings in em."""
    top: float = 0.5
    bottom: float = 0.3


@dataclass(frozen=True)
class SpacingConfig:
    """Vertical rhythm in em units."""
    paragraph_spacing_em: float = 0.3
    list_spacing_em: float = 0.2
    section_spacing_em: float = 0.8
    heading_margins: HeadingMargins = field(default_factory=HeadingMargins)


@dataclass(frozen=True)
class MarginConfig:
    """Page margins and inter-column gap in inches."""
    top: float = 0.75
    bottom: float = 0.75
    left: float = 0.75
    right: float = 0.75
    column_gap: float = 0.25


@dataclass(frozen=True)
class DisplayEquationConfig:
    centered: bool = True
    numbered: bool = True
    full_width: bool = True  # May span all columns when a formula overflows one


@dataclass(frozen=True)
class InlineEquationConfig:
    preserve_inline: bool = True
    max_height_em: float = 1.5


@dataclass(frozen=True)
class MathRenderingConfig:
    display_equations: DisplayEquationConfig = field(default_factory=DisplayEquationConfig)
    inline_equations: InlineEquationConfig = field(default_factory=InlineEquationConfig)


@dataclass(frozen=True)
class CompactLayoutConfig:
    """
    Configuration for compact layout (immutable).

    Construction fails with LayoutError(INVALID_CONFIG) when any
    compactness constraint is violated.

    Attributes:
        paper_size: Paper size
        columns: Column count (1-3)
        typography: Font size 8-14pt, line height 1.0-2.0
        spacing: Paragraph spacing <= 0.35em, list spacing <= 0.25em
        margins: Page margins and column gap (inches)
        math_rendering: Display/inline equation options

    Example:
        >>> config = CompactLayoutConfig(columns=3)
        >>> config.content_width
        6.767...  # A4 width minus 0.75in margins
    """

    paper_size: PaperSize = PaperSize.A4
    columns: int = 2
    typography: TypographyConfig = field(default_factory=TypographyConfig)
    spacing: SpacingConfig = field(default_factory=SpacingConfig)
    margins: MarginConfig = field(default_factory=MarginConfig)
    math_rendering: MathRenderingConfig = field(default_factory=MathRenderingConfig)

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.paper_size, PaperSize):
            raise LayoutError.invalid_config(
                f"Unsupported paper size {self.paper_size!r}",
                "layout",
                "Use one of: a4, letter, legal",
            )

        _require_section(self.typography, TypographyConfig, "typography")
        _require_section(self.spacing, SpacingConfig, "spacing")
        _require_section(self.margins, MarginConfig, "margins")
        _require_section(self.math_rendering, MathRenderingConfig, "math_rendering")

        typography = self.typography
        _require_number(typography.font_size_pt, "Font size", "typography")
        _require_number(typography.line_height, "Line height", "typography")
        spacing = self.spacing
        _require_number(spacing.paragraph_spacing_em, "Paragraph spacing", "spacing")
        _require_number(spacing.list_spacing_em, "List spacing", "spacing")
        _require_number(spacing.section_spacing_em, "Section spacing", "spacing")
        margins = self.margins
        for value in (margins.top, margins.bottom, margins.left, margins.right, margins.column_gap):
            _require_number(value, "Margin", "margins")

        font_size = typography.font_size_pt
        if not MIN_FONT_SIZE_PT <= font_size <= MAX_FONT_SIZE_PT:
            raise LayoutError.invalid_config(
                f"Font size {font_size}pt is outside recommended range (8-14pt)",
                "typography",
                "Use font size between 8-14pt for readability",
            )

        line_height = typography.line_height
        if not MIN_LINE_HEIGHT <= line_height <= MAX_LINE_HEIGHT:
            raise LayoutError.invalid_config(
                f"Line height {line_height} is outside valid range (1.0-2.0)",
                "typography",
                "Use line height between 1.0-2.0",
            )

        if spacing.paragraph_spacing_em > MAX_PARAGRAPH_SPACING_EM:
            raise LayoutError.invalid_config(
                f"Paragraph spacing {spacing.paragraph_spacing_em}em exceeds compact limit (<=0.35em)",
                "spacing",
                "Reduce paragraph spacing to <=0.35em for compact layout",
            )
        if spacing.list_spacing_em > MAX_LIST_SPACING_EM:
            raise LayoutError.invalid_config(
                f"List spacing {spacing.list_spacing_em}em exceeds compact limit (<=0.25em)",
                "spacing",
                "Reduce list spacing to <=0.25em for compact layout",
            )
        if min(spacing.paragraph_spacing_em, spacing.list_spacing_em, spacing.section_spacing_em) < 0:
            raise LayoutError.invalid_config(
                "Spacing values must be non-negative",
                "spacing",
                "Use spacing values >= 0em",
            )

        if (
            isinstance(self.columns, bool)
            or not isinstance(self.columns, int)
            or not MIN_COLUMNS <= self.columns <= MAX_COLUMNS
        ):
            raise LayoutError.invalid_config(
                f"Column count {self.columns} is outside supported range (1-3)",
                "layout",
                "Use 1-3 columns for optimal readability",
            )

        if min(margins.top, margins.bottom, margins.left, margins.right, margins.column_gap) < 0:
            raise LayoutError.invalid_config(
                "Margins must be non-negative",
                "margins",
                "Use margins >= 0in",
            )
        if self.content_width <= 0:
            raise LayoutError.invalid_config(
                "Margins exceed page width", "margins", "Reduce left/right margins"
            )
        if self.content_height <= 0:
            raise LayoutError.invalid_config(
                "Margins exceed page height", "margins", "Reduce top/bottom margins"
            )
        if self.content_width - (self.columns - 1) * margins.column_gap <= 0:
            raise LayoutError.invalid_config(
                "Column gaps leave no room for columns",
                "margins",
                "Reduce column_gap or the column count",
            )

    @property
    def content_width(self) -> float:
        """Width available for content (excluding margins), inches."""
        page_width, _ = self.paper_size.dimensions
        return page_width - self.margins.left - self.margins.right

    @property
    def content_height(self) -> float:
        """Height available for content (excluding margins), inches."""
        _, page_height = self.paper_size.dimensions
        return page_height - self.margins.top - self.margins.bottom

    def to_dict(self) -> dict:
        """Serialize to a plain nested dictionary (enums as values)."""
        return _to_plain(self)


def merge_config(
    base: CompactLayoutConfig,
    overrides: Optional[Mapping[str, Any]],
) -> CompactLayoutConfig:
    """
    Merge a partial configuration over a base configuration.

    Nested mappings are merged field by field, so
    ``{"typography": {"font_size_pt": 10}}`` keeps the base line height.

    Args:
        base: Fully populated configuration
        overrides: Nested mapping of field names to new values

    Returns:
        New validated CompactLayoutConfig

    Raises:
        LayoutError: INVALID_CONFIG for unknown keys, unknown paper size,
            or any constraint violation in the merged result
    """
    if not overrides:
        return base
    return _merge_dataclass(base, overrides, "config")


def _merge_dataclass(obj: Any, overrides: Mapping[str, Any], path: str) -> Any:
    known = {f.name for f in fields(obj)}
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in known:
            raise LayoutError.invalid_config(
                f"Unknown configuration key {path}.{key}",
                path,
                f"Valid keys: {', '.join(sorted(known))}",
            )
        current = getattr(obj, key)
        if is_dataclass(current) and isinstance(value, Mapping):
            changes[key] = _merge_dataclass(current, value, f"{path}.{key}")
        elif is_dataclass(current) and not isinstance(value, type(current)):
            raise LayoutError.invalid_config(
                f"{path}.{key} must be a mapping, got {type(value).__name__}",
                key,
                f"Pass {key} as a mapping of field names to values",
            )
        elif isinstance(current, PaperSize):
            changes[key] = _coerce_paper_size(value)
        else:
            changes[key] = value
    return replace(obj, **changes)


def _require_section(value: Any, expected: type, area: str) -> None:
    if not isinstance(value, expected):
        raise LayoutError.invalid_config(
            f"{area} must be a {expected.__name__}, got {type(value).__name__}",
            area,
            f"Pass {area} as a {expected.__name__} or a mapping",
        )


def _require_number(value: Any, label: str, area: str) -> None:
    """Reject bools, non-numbers and non-finite floats before range checks."""
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
    ):
        raise LayoutError.invalid_config(
            f"{label} must be a finite number, got {value!r}",
            area,
            "Use a plain int or float value",
        )


def _coerce_paper_size(value: Any) -> PaperSize:
    try:
        return PaperSize(str(value).lower())
    except ValueError as e:
        raise LayoutError.invalid_config(
            f"Unsupported paper size {value!r}",
            "layout",
            "Use one of: a4, letter, legal",
        ) from e


def _to_plain(obj: Any) -> Any:
    if is_dataclass(obj):
        return {f.name: _to_plain(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, Enum):
        return obj.value
    return obj
