"""
PID Controller Implementation.

The textbook parallel form used by the playground:
- Proportional term on the raw error
- Integral term with unbounded accumulation (no anti-windup)
- Derivative term as the backward difference of the error
- Optional buffered CSV logging of every update
"""

from typing import Optional, Dict, Any
from dataclasses import dataclass

from pid_playground.core.pid_params import PIDGains
from pid_playground.logging.csv_logger import CSVLogger
from pid_playground.utils.validators import validate_positive


@dataclass
class PIDState:
    """Snapshot of the PID controller after its last update."""
    setpoint: float = 0.0
    measurement: float = 0.0
    error: float = 0.0

    # Component outputs
    p_term: float = 0.0
    i_term: float = 0.0
    d_term: float = 0.0

    output: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary."""
        return {
            'setpoint': self.setpoint,
            'measurement': self.measurement,
            'error': self.error,
            'p_term': self.p_term,
            'i_term': self.i_term,
            'd_term': self.d_term,
            'output': self.output,
        }


class PIDController:
    """
    Stateful PID law.

    Computes a command from the setpoint/measurement error and keeps the
    previous error and the integral accumulator between calls. Both are
    zeroed together by ``reset()``.

    Example:
        >>> pid = PIDController(PIDGains(kp=2.0))
        >>> pid.update(setpoint=100.0, measurement=80.0, dt=0.016)
        40.0
    """

    def __init__(
        self,
        gains: Optional[PIDGains] = None,
        csv_path: Optional[str] = None
    ):
        """
        Initialize PID controller.

        Args:
            gains: PID gains (all zero if None)
            csv_path: Path for CSV logging (no logging if None)
        """
        self._gains = gains if gains is not None else PIDGains()

        self._state = PIDState()
        self._prev_error: float = 0.0
        self._integral: float = 0.0
        self._iteration: int = 0

        self._logger: Optional[CSVLogger] = None
        if csv_path is not None:
            self._logger = CSVLogger(
                csv_path,
                columns=[
                    'iteration', 'dt', 'setpoint', 'measurement', 'error',
                    'p_term', 'i_term', 'd_term', 'output', 'integral'
                ]
            )

    @property
    def gains(self) -> PIDGains:
        """Get current gains."""
        return self._gains

    @property
    def kp(self) -> float:
        return self._gains.kp

    @property
    def ki(self) -> float:
        return self._gains.ki

    @property
    def kd(self) -> float:
        return self._gains.kd

    @property
    def state(self) -> PIDState:
        """Get state after the last update."""
        return self._state

    @property
    def output(self) -> float:
        """Get last output."""
        return self._state.output

    @property
    def integral(self) -> float:
        """Get current integral accumulator."""
        return self._integral

    @property
    def prev_error(self) -> float:
        """Get error seen by the last update."""
        return self._prev_error

    def update(self, setpoint: float, measurement: float, dt: float) -> float:
        """
        Update controller with a new setpoint and measurement.

        Args:
            setpoint: Desired value
            measurement: Actual measured value
            dt: Time since the previous update, must be positive

        Returns:
            Control output

        Raises:
            ValidationError: If dt is not a positive finite number
        """
        dt = validate_positive(dt, "dt")

        error = setpoint - measurement
        derivative = (error - self._prev_error) / dt

        self._prev_error = error
        self._integral += error * dt

        p_term = self._gains.kp * error
        i_term = self._gains.ki * self._integral
        d_term = self._gains.kd * derivative
        output = p_term + i_term + d_term

        self._state = PIDState(
            setpoint=setpoint,
            measurement=measurement,
            error=error,
            p_term=p_term,
            i_term=i_term,
            d_term=d_term,
            output=output
        )

        if self._logger is not None:
            self._logger.log({
                'iteration': self._iteration,
                'dt': dt,
                'setpoint': setpoint,
                'measurement': measurement,
                'error': error,
                'p_term': p_term,
                'i_term': i_term,
                'd_term': d_term,
                'output': output,
                'integral': self._integral,
            })

        self._iteration += 1
        return output

    def set_gains(
        self,
        kp: Optional[float] = None,
        ki: Optional[float] = None,
        kd: Optional[float] = None
    ) -> None:
        """
        Update individual gains. Error state is left untouched.

        Args:
            kp: New proportional gain (None to keep current)
            ki: New integral gain (None to keep current)
            kd: New derivative gain (None to keep current)
        """
        self._gains = self._gains.copy(
            kp=kp if kp is not None else self._gains.kp,
            ki=ki if ki is not None else self._gains.ki,
            kd=kd if kd is not None else self._gains.kd
        )

    def reset(self) -> None:
        """Reset error state. Gains are kept."""
        self._state = PIDState()
        self._prev_error = 0.0
        self._integral = 0.0
        self._iteration = 0

    def flush_log(self) -> None:
        """Flush any buffered log data to disk."""
        if self._logger is not None:
            self._logger.flush()

    def close(self) -> None:
        """Close controller and flush logs."""
        if self._logger is not None:
            self._logger.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def __repr__(self) -> str:
        return f"PIDController({self._gains})"
