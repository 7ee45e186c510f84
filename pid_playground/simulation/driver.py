"""
Simulation driver.

Decides, once per host tick, whether to batch-evaluate stale models
(paused), advance every model one fixed step (running), or do nothing.
The host must keep calling ``tick()`` at a steady cadence while running;
the driver never waits for the next tick itself.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Any, List, Optional, Tuple
import logging
import numpy as np

from pid_playground.simulation.changes import ChangeSet, plan_recompute
from pid_playground.simulation.history import History
from pid_playground.simulation.model import Model
from pid_playground.simulation.registry import ModelRegistry
from pid_playground.utils.validators import validate_positive

logger = logging.getLogger(__name__)


class SimulationStateError(RuntimeError):
    """Raised when an action is not valid in the driver's current state."""
    pass


class DriverState(Enum):
    """Observable driver states."""
    PAUSED_CLEAN = "paused_clean"
    PAUSED_DIRTY = "paused_dirty"
    RUNNING = "running"


@dataclass
class DriverConfig:
    """
    Driver configuration.

    ``horizon`` is both the batch evaluation length and the width of the
    real-time sliding window.
    """
    horizon: float = 20.0

    def __post_init__(self):
        self.horizon = validate_positive(self.horizon, "horizon")

    def copy(self, **changes) -> 'DriverConfig':
        params = self.to_dict()
        params.update(changes)
        return DriverConfig(**params)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DriverConfig':
        return cls(**data)


@dataclass
class TickResult:
    """What a tick did."""
    state: DriverState
    recomputed: List[int] = field(default_factory=list)
    stepped: bool = False
    request_next_tick: bool = False

    @property
    def changed(self) -> bool:
        """True if any history changed and the frame should be redrawn."""
        return self.stepped or bool(self.recomputed)


@dataclass
class SeriesFrame:
    """Plot data of one model."""
    identity: int
    name: str
    times: np.ndarray
    values: np.ndarray


@dataclass
class PlotFrame:
    """Everything the presentation layer needs to draw one frame."""
    setpoint: float
    series: List[SeriesFrame]
    running: bool = False

    def by_identity(self) -> Dict[int, Tuple[np.ndarray, np.ndarray]]:
        return {s.identity: (s.times, s.values) for s in self.series}


class SimulationDriver:
    """
    Per-tick orchestration of batch and real-time simulation.

    Real-time stepping uses the environment's fixed timestep, the same step
    batch evaluation uses, so a history never mixes step sizes.

    Example:
        >>> registry = ModelRegistry()
        >>> registry.add("Model 1")
        >>> driver = SimulationDriver(registry)
        >>> driver.tick().recomputed
        [1]
    """

    def __init__(self, registry: ModelRegistry, config: Optional[DriverConfig] = None):
        """
        Initialize driver.

        Args:
            registry: Models and environment to drive
            config: Driver configuration (defaults if None)
        """
        self._registry = registry
        self._config = config if config is not None else DriverConfig()
        self._running = False

    @property
    def registry(self) -> ModelRegistry:
        return self._registry

    @property
    def config(self) -> DriverConfig:
        return self._config

    @property
    def horizon(self) -> float:
        return self._config.horizon

    @property
    def running(self) -> bool:
        return self._running

    @property
    def state(self) -> DriverState:
        if self._running:
            return DriverState.RUNNING
        if self._registry.has_pending_changes:
            return DriverState.PAUSED_DIRTY
        return DriverState.PAUSED_CLEAN

    # ------------------------------------------------------------------
    # Host-facing controls
    # ------------------------------------------------------------------

    def set_running(self, running: bool) -> None:
        """
        Toggle real-time mode.

        Entering real-time mode fits the existing histories into the
        sliding window. Leaving it keeps histories and model state as is.
        """
        running = bool(running)
        if running == self._running:
            return
        self._running = running
        if running:
            for model in self._registry:
                self._fit_window(model, self._registry.history(model.identity))
        logger.info("Simulation %s", "running" if running else "paused")

    def reset_simulation(self) -> None:
        """
        Restart every model from rest with empty histories.

        Raises:
            SimulationStateError: If the driver is not running
        """
        if not self._running:
            logger.warning("Reset requested while paused")
            raise SimulationStateError("reset_simulation is only valid while running")
        self._restart_all()
        logger.info("Simulation reset")

    def tick(self) -> TickResult:
        """
        Do one tick's worth of work.

        Returns:
            TickResult describing what changed
        """
        if self._running:
            return self._tick_running()
        return self._tick_paused()

    def plot_frame(self) -> PlotFrame:
        """Collect current histories and the setpoint for drawing."""
        series = []
        for model in self._registry:
            history = self._registry.history(model.identity)
            series.append(SeriesFrame(
                identity=model.identity,
                name=model.name,
                times=history.times(),
                values=history.values()
            ))
        return PlotFrame(
            setpoint=self._registry.setpoint,
            series=series,
            running=self._running
        )

    # ------------------------------------------------------------------
    # Tick implementations
    # ------------------------------------------------------------------

    def _tick_paused(self) -> TickResult:
        if not self._registry.has_pending_changes:
            return TickResult(state=DriverState.PAUSED_CLEAN)

        changes = self._registry.drain_changes()
        recomputed = plan_recompute(changes, self._registry.ids)
        environment = self._registry.environment

        for identity in recomputed:
            model = self._registry.get(identity)
            model.reset()
            self._registry.history(identity).replace(
                model.evaluate(self._config.horizon, environment)
            )

        logger.debug("Recomputed %d model(s): %s", len(recomputed), recomputed)
        return TickResult(state=DriverState.PAUSED_CLEAN, recomputed=recomputed)

    def _tick_running(self) -> TickResult:
        changes = self._registry.drain_changes()
        if self._timestep_changed(changes):
            logger.debug("Timestep changed while running; restarting models")
            self._restart_all()

        environment = self._registry.environment
        dt = environment.timestep
        for model in self._registry:
            self._advance(model, self._registry.history(model.identity), dt)

        return TickResult(
            state=DriverState.RUNNING,
            stepped=len(self._registry) > 0,
            request_next_tick=True
        )

    def _advance(self, model: Model, history: History, dt: float) -> None:
        """Step one model and append to its windowed history."""
        model.step(self._registry.environment, dt)
        if model.elapsed_time > self._config.horizon:
            model.elapsed_time = self._config.horizon
            history.shift(dt)
        history.append(model.elapsed_time, model.value)

    def _fit_window(self, model: Model, history: History) -> None:
        history.trim_after(self._config.horizon)
        if model.elapsed_time > self._config.horizon:
            model.elapsed_time = self._config.horizon

    def _restart_all(self) -> None:
        for model in self._registry:
            model.reset()
            self._registry.history(model.identity).clear()

    @staticmethod
    def _timestep_changed(changes: ChangeSet) -> bool:
        return 'timestep' in changes.environment_fields

    def __repr__(self) -> str:
        return f"SimulationDriver(state={self.state.value}, horizon={self._config.horizon})"
