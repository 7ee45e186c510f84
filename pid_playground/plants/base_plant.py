"""
Base plant model abstract class.
Defines the interface for plants driven by the playground models.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from pid_playground.simulation.environment import Environment


class BasePlant(ABC):
    """
    Abstract base class for plant models.

    A plant integrates its state forward by ``dt`` given an already
    clamped command and the shared environment.
    """

    def __init__(self):
        self._output: float = 0.0
        self._time: float = 0.0

    @abstractmethod
    def update(self, command: float, environment: 'Environment', dt: float) -> float:
        """
        Advance plant state by one step.

        Args:
            command: Clamped controller output
            environment: Shared environment (read only)
            dt: Step size in seconds

        Returns:
            Plant output (value)
        """
        pass

    @abstractmethod
    def reset(self) -> None:
        """Reset plant to its zeroed initial state."""
        pass

    @property
    def output(self) -> float:
        """Current plant output."""
        return self._output

    @property
    def time(self) -> float:
        """Elapsed simulated time."""
        return self._time

    @time.setter
    def time(self, value: float) -> None:
        """Overwrite elapsed time (used by the sliding window)."""
        self._time = float(value)

    def get_state(self) -> Dict[str, Any]:
        """Get current plant state as dictionary."""
        return {
            'output': self._output,
            'time': self._time,
        }

    @abstractmethod
    def get_info(self) -> Dict[str, Any]:
        """Get plant information."""
        pass
