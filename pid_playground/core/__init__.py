"""Core PID controller components."""

from pid_playground.core.pid_controller import PIDController, PIDState
from pid_playground.core.pid_params import PIDGains

__all__ = [
    "PIDController",
    "PIDState",
    "PIDGains",
]
