"""
Tunable model: one PID controller driving one plant.
"""

from typing import List, Optional, Tuple

from pid_playground.core.pid_controller import PIDController
from pid_playground.core.pid_params import PIDGains
from pid_playground.plants.damped_mass import DampedMassPlant
from pid_playground.simulation.environment import Environment
from pid_playground.utils.math_utils import symmetric_clamp
from pid_playground.utils.validators import validate_positive

Sample = Tuple[float, float]


class Model:
    """
    A controller + plant pair with presentation metadata.

    The identity is assigned by the owning registry and never changes.
    ``max_accel`` overrides the environment's acceleration limit when set.

    Example:
        >>> model = Model(1, "Model 1", gains=PIDGains(kp=2.0))
        >>> trajectory = model.evaluate(20.0, Environment())
    """

    def __init__(
        self,
        identity: int,
        name: str,
        gains: Optional[PIDGains] = None,
        max_accel: Optional[float] = None
    ):
        """
        Initialize model with zeroed physical and controller state.

        Args:
            identity: Unique identity within the owning registry
            name: Display name
            gains: Controller gains (zero if None)
            max_accel: Per-model acceleration limit (None uses the environment's)
        """
        self._identity = identity
        self.name = name
        self._max_accel: Optional[float] = None
        self.max_accel = max_accel

        self._controller = PIDController(gains)
        self._plant = DampedMassPlant()

    @property
    def identity(self) -> int:
        return self._identity

    @property
    def controller(self) -> PIDController:
        return self._controller

    @property
    def plant(self) -> DampedMassPlant:
        return self._plant

    @property
    def gains(self) -> PIDGains:
        return self._controller.gains

    @property
    def max_accel(self) -> Optional[float]:
        """Per-model acceleration limit, or None to use the environment's."""
        return self._max_accel

    @max_accel.setter
    def max_accel(self, value: Optional[float]) -> None:
        self._max_accel = None if value is None else validate_positive(value, "max_accel")

    def accel_limit(self, environment: Environment) -> float:
        """Acceleration limit in effect under ``environment``."""
        return self._max_accel if self._max_accel is not None else environment.max_accel

    @property
    def value(self) -> float:
        return self._plant.value

    @property
    def velocity(self) -> float:
        return self._plant.velocity

    @property
    def acceleration(self) -> float:
        return self._plant.acceleration

    @property
    def elapsed_time(self) -> float:
        return self._plant.time

    @elapsed_time.setter
    def elapsed_time(self, value: float) -> None:
        self._plant.time = value

    def step(self, environment: Environment, dt: float) -> None:
        """
        Advance controller and plant by one step.

        Args:
            environment: Shared environment (read only)
            dt: Step size in seconds, must be positive

        Raises:
            ValidationError: If dt is not positive
        """
        raw = self._controller.update(environment.setpoint, self._plant.value, dt)
        command = symmetric_clamp(raw, self.accel_limit(environment))
        self._plant.update(command, environment, dt)

    def evaluate(self, horizon: float, environment: Environment) -> List[Sample]:
        """
        Compute a trajectory with the environment's fixed timestep.

        Steps from the current elapsed time and records ``(time, value)``
        after every step until more than ``horizon`` has elapsed.

        Args:
            horizon: Simulated duration to cover
            environment: Shared environment (read only)

        Returns:
            Ordered list of (time, value) samples
        """
        horizon = validate_positive(horizon, "horizon")
        dt = environment.timestep
        start_time = self._plant.time
        samples: List[Sample] = []

        while True:
            self.step(environment, dt)
            samples.append((self._plant.time, self._plant.value))
            if self._plant.time - start_time > horizon:
                break

        return samples

    def reset(self) -> None:
        """Zero plant and controller error state; keep tuning and identity."""
        self._controller.reset()
        self._plant.reset()

    def clone(self, identity: int, name: Optional[str] = None) -> 'Model':
        """
        Copy tuning into a fresh model with a new identity.

        Only gains and the acceleration limit are copied; physical state
        starts from zero.
        """
        return Model(
            identity,
            name if name is not None else self.name,
            gains=self.gains.copy(),
            max_accel=self._max_accel
        )

    def __repr__(self) -> str:
        return f"Model(id={self._identity}, name={self.name!r}, {self.gains})"
