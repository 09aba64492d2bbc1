"""
Module: layout.errors

Purpose:
    Error taxonomy for the compact layout engine.

Key Classes:
    - LayoutErrorCode: Machine-readable failure category
    - LayoutError: Raised for invalid configuration and column overflow

Used By:
    - layout.config: INVALID_CONFIG on construction
    - layout.distributor: COLUMN_OVERFLOW during distribution
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class LayoutErrorCode(str, Enum):
    """Category of a layout failure."""
    INVALID_CONFIG = "INVALID_CONFIG"
    COLUMN_OVERFLOW = "COLUMN_OVERFLOW"

    def __str__(self) -> str:
        return self.value


class LayoutError(Exception):
    """
    Fatal layout failure.

    Configuration errors mean the caller must not proceed with that config.
    Overflow errors carry the offending block's id and type so the caller can
    add pages/columns or drop content deliberately.

    Attributes:
        code: Failure category
        block_id: ID of the block that could not be placed (overflow only)
        content_type: Block type, or the config area for INVALID_CONFIG
        suggestion: Human readable remedy
    """

    def __init__(
        self,
        message: str,
        code: LayoutErrorCode,
        *,
        block_id: Optional[str] = None,
        content_type: Optional[str] = None,
        suggestion: Optional[str] = None,
    ):
        super().__init__(message)
        self.code = code
        self.block_id = block_id
        self.content_type = content_type
        self.suggestion = suggestion

    @classmethod
    def invalid_config(cls, message: str, area: str, suggestion: str) -> LayoutError:
        return cls(
            message,
            LayoutErrorCode.INVALID_CONFIG,
            content_type=area,
            suggestion=suggestion,
        )
