"""
Shared simulation environment.

The environment is an immutable, validated value. The registry replaces it
wholesale on every edit and passes it explicitly into each step, so models
never read shared mutable state.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, Tuple

from pid_playground.utils.validators import (
    validate_finite,
    validate_non_negative,
    validate_positive,
    validate_range,
)

# Integration timestep bounds; values outside would stall or explode the
# Euler integrator.
MIN_TIMESTEP = 0.001
MAX_TIMESTEP = 1.0

# Recommended input ranges for the presentation layer.
PARAMETER_RANGES: Dict[str, Tuple[float, float]] = {
    'damping': (0.0, 100.0),
    'applied_force': (-10.0, 10.0),
    'timestep': (MIN_TIMESTEP, MAX_TIMESTEP),
    'setpoint': (0.0, 150.0),
    'max_accel': (0.1, 50.0),
}


@dataclass(frozen=True)
class Environment:
    """
    Physical and numerical settings shared by every model of a registry.

    Owns the setpoint and the default acceleration limit; a model may
    override the limit for itself.

    Example:
        >>> env = Environment()
        >>> slower = env.copy(timestep=0.05)
    """

    damping: float = 0.5         # Viscous damping coefficient
    applied_force: float = 0.0   # Constant external force
    timestep: float = 0.016      # Fixed integration step (s)
    setpoint: float = 100.0      # Target value
    max_accel: float = 10.0      # Default controller output clamp

    def __post_init__(self):
        """Validate and normalise all fields to float."""
        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, 'damping', validate_non_negative(self.damping, "damping"))
        object.__setattr__(self, 'applied_force', validate_finite(self.applied_force, "applied_force"))
        object.__setattr__(self, 'timestep', validate_range(
            self.timestep, "timestep", MIN_TIMESTEP, MAX_TIMESTEP
        ))
        object.__setattr__(self, 'setpoint', validate_finite(self.setpoint, "setpoint"))
        object.__setattr__(self, 'max_accel', validate_positive(self.max_accel, "max_accel"))

    def copy(self, **changes) -> 'Environment':
        """
        Create a validated copy with optional field changes.

        Raises:
            TypeError: If a change names an unknown field
            ValidationError: If a changed value is invalid
        """
        params = self.to_dict()
        params.update(changes)
        return Environment(**params)

    def diff(self, other: 'Environment') -> Tuple[str, ...]:
        """Names of fields whose values differ from ``other``."""
        mine = self.to_dict()
        theirs = other.to_dict()
        return tuple(name for name in mine if mine[name] != theirs[name])

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Environment':
        """Create from dictionary."""
        return cls(**data)

    def __str__(self) -> str:
        return (
            f"Environment(damping={self.damping:.3f}, force={self.applied_force:.3f}, "
            f"dt={self.timestep:.4f}s, setpoint={self.setpoint:.2f}, "
            f"max_accel={self.max_accel:.2f})"
        )
