"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .thresholds import (
    HeightEstimationThresholds,
    ConfidenceWeights,
    HEIGHT_THRESHOLDS,
    CONFIDENCE_WEIGHTS,
)

__all__ = [
    "HeightEstimationThresholds",
    "ConfidenceWeights",
    "HEIGHT_THRESHOLDS",
    "CONFIDENCE_WEIGHTS",
]
