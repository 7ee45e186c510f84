"""Utility functions and helpers."""

from pid_playground.utils.validators import (
    ValidationError,
    validate_finite,
    validate_positive,
    validate_non_negative,
    validate_range,
)
from pid_playground.utils.math_utils import clamp, symmetric_clamp

__all__ = [
    "ValidationError",
    "validate_finite",
    "validate_positive",
    "validate_non_negative",
    "validate_range",
    "clamp",
    "symmetric_clamp",
]
