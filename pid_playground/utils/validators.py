"""
Validation utilities for simulation configuration.
Rejects values that would let inf/NaN reach the integrator.
"""

from typing import Optional
import math
import numbers


class ValidationError(ValueError):
    """Raised when a configuration value is invalid."""
    pass


def validate_finite(value: float, name: str) -> float:
    """
    Validate that a value is a finite real number.

    Args:
        value: The value to validate
        name: Parameter name for error messages

    Returns:
        The value as float

    Raises:
        ValidationError: If value is not a real number or is inf/NaN
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise ValidationError(f"{name} must be a real number, got {type(value).__name__}")
    value = float(value)
    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")
    return value


def validate_positive(value: float, name: str) -> float:
    """
    Validate that a value is finite and strictly positive.

    Raises:
        ValidationError: If value is not positive
    """
    value = validate_finite(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")
    return value


def validate_non_negative(value: float, name: str) -> float:
    """Validate that a value is finite and >= 0."""
    value = validate_finite(value, name)
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")
    return value


def validate_range(
    value: float,
    name: str,
    min_val: Optional[float] = None,
    max_val: Optional[float] = None
) -> float:
    """
    Validate that a value falls within an inclusive range.

    Args:
        value: The value to validate
        name: Parameter name for error messages
        min_val: Minimum allowed value (None for no lower bound)
        max_val: Maximum allowed value (None for no upper bound)

    Returns:
        The validated value

    Raises:
        ValidationError: If value is outside the range
    """
    value = validate_finite(value, name)
    if min_val is not None and value < min_val:
        raise ValidationError(f"{name} must be >= {min_val}, got {value}")
    if max_val is not None and value > max_val:
        raise ValidationError(f"{name} must be <= {max_val}, got {value}")
    return value
