"""
PID Playground
==============

An interactive tuning sandbox for PID loops driving a damped point mass:
- PID controller with plain parallel form
- Damped, force-driven plant integrated with fixed-step Euler
- Registry of independently tuned models compared side by side
- Driver for batch pre-computation and real-time stepping
"""

from pid_playground.core.pid_controller import PIDController
from pid_playground.core.pid_params import PIDGains
from pid_playground.plants.damped_mass import DampedMassPlant
from pid_playground.simulation.environment import Environment
from pid_playground.simulation.model import Model
from pid_playground.simulation.registry import ModelRegistry
from pid_playground.simulation.driver import SimulationDriver, DriverConfig

__version__ = "1.0.0"
__all__ = [
    "PIDController",
    "PIDGains",
    "DampedMassPlant",
    "Environment",
    "Model",
    "ModelRegistry",
    "SimulationDriver",
    "DriverConfig",
]
