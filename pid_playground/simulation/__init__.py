"""Simulation framework: environment, models, registry and driver."""

from pid_playground.simulation.environment import Environment, PARAMETER_RANGES
from pid_playground.simulation.history import History
from pid_playground.simulation.model import Model
from pid_playground.simulation.changes import Change, ChangeSet, ChangeTarget, plan_recompute
from pid_playground.simulation.registry import ModelRegistry
from pid_playground.simulation.driver import (
    SimulationDriver,
    DriverConfig,
    DriverState,
    TickResult,
    PlotFrame,
    SeriesFrame,
    SimulationStateError,
)
from pid_playground.simulation.animated import AnimatedPlayground

__all__ = [
    "Environment",
    "PARAMETER_RANGES",
    "History",
    "Model",
    "Change",
    "ChangeSet",
    "ChangeTarget",
    "plan_recompute",
    "ModelRegistry",
    "SimulationDriver",
    "DriverConfig",
    "DriverState",
    "TickResult",
    "PlotFrame",
    "SeriesFrame",
    "SimulationStateError",
    "AnimatedPlayground",
]
