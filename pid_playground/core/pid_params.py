"""
PID gain configuration.
Holds the three tunable gains in a validated, copyable structure.
"""

from dataclasses import dataclass
from typing import Dict, Any

from pid_playground.utils.validators import validate_finite


@dataclass
class PIDGains:
    """
    Tunable gains of a PID controller.

    Gains are unconstrained: negative values are allowed so the playground
    can show what a wrongly-signed term does. They must be finite.
    """

    kp: float = 0.0  # Proportional gain
    ki: float = 0.0  # Integral gain
    kd: float = 0.0  # Derivative gain

    def __post_init__(self):
        """Validate parameters after initialization."""
        self.kp = validate_finite(self.kp, "kp")
        self.ki = validate_finite(self.ki, "ki")
        self.kd = validate_finite(self.kd, "kd")

    def copy(self, **changes) -> 'PIDGains':
        """
        Create a copy with optional gain changes.

        Args:
            **changes: Gains to override

        Returns:
            New PIDGains instance
        """
        params = self.to_dict()
        params.update(changes)
        return PIDGains(**params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            'kp': self.kp,
            'ki': self.ki,
            'kd': self.kd,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PIDGains':
        """Create from dictionary."""
        return cls(**data)

    def __str__(self) -> str:
        return f"PIDGains(Kp={self.kp:.4f}, Ki={self.ki:.4f}, Kd={self.kd:.4f})"
