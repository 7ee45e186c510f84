"""
Mathematical helpers for the simulation core.
"""

from typing import Optional
import numpy as np


def clamp(value: float, min_val: Optional[float], max_val: Optional[float]) -> float:
    """Clamp a value between minimum and maximum bounds."""
    if min_val is None and max_val is None:
        return value
    return float(np.clip(value, min_val, max_val))


def symmetric_clamp(value: float, limit: float) -> float:
    """Clamp a value to [-limit, +limit]."""
    return clamp(value, -limit, limit)
