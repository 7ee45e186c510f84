"""
Damped, force-driven point mass.
Equation of motion: a = u - b*v + F
"""

from typing import Dict, Any, TYPE_CHECKING

from pid_playground.plants.base_plant import BasePlant

if TYPE_CHECKING:
    from pid_playground.simulation.environment import Environment


class DampedMassPlant(BasePlant):
    """
    Unit point mass with viscous damping and a constant external force.

    Where:
        - u: clamped controller command (acceleration)
        - b: damping coefficient (environment)
        - F: applied force (environment)

    Integrated with fixed-step semi-implicit Euler:
        v += a*dt
        x += v*dt

    Example:
        >>> plant = DampedMassPlant()
        >>> value = plant.update(10.0, Environment(), 0.016)
    """

    def __init__(self):
        super().__init__()
        self._acceleration: float = 0.0
        self._velocity: float = 0.0
        self._command: float = 0.0

    def update(self, command: float, environment: 'Environment', dt: float) -> float:
        """
        Integrate one step.

        Args:
            command: Clamped controller output
            environment: Supplies damping and applied force
            dt: Step size in seconds

        Returns:
            New position value
        """
        self._command = command
        self._acceleration = (
            command
            - self._velocity * environment.damping
            + environment.applied_force
        )

        self._velocity += self._acceleration * dt
        self._output += self._velocity * dt
        self._time += dt

        return self._output

    def reset(self) -> None:
        """Zero acceleration, velocity, value and elapsed time."""
        self._acceleration = 0.0
        self._velocity = 0.0
        self._output = 0.0
        self._command = 0.0
        self._time = 0.0

    def get_state(self) -> Dict[str, Any]:
        """Get current plant state as dictionary."""
        state = super().get_state()
        state.update({
            'acceleration': self._acceleration,
            'velocity': self._velocity,
            'command': self._command,
        })
        return state

    def get_info(self) -> Dict[str, Any]:
        """Get plant information."""
        return {
            'type': 'DampedMassPlant',
            'mass': 1.0,
            'integrator': 'semi-implicit euler',
        }

    @property
    def acceleration(self) -> float:
        """Acceleration applied during the last step."""
        return self._acceleration

    @property
    def velocity(self) -> float:
        """Current velocity."""
        return self._velocity

    @property
    def value(self) -> float:
        """Current position."""
        return self._output

    @property
    def command(self) -> float:
        """Clamped command used by the last step."""
        return self._command
