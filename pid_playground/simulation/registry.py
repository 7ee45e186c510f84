"""
Registry of models sharing one environment.
"""

from typing import Dict, Iterator, List, Optional
import itertools
import logging

from pid_playground.core.pid_params import PIDGains
from pid_playground.simulation.changes import Change, ChangeSet
from pid_playground.simulation.environment import Environment
from pid_playground.simulation.history import History
from pid_playground.simulation.model import Model

logger = logging.getLogger(__name__)


class ModelRegistry:
    """
    Ordered collection of models plus one history buffer per model.

    List order is the display order (later models plot on top). Identities
    come from a monotonic counter and are never reused. Every mutation that
    makes a history stale is recorded in a pending ``ChangeSet`` which the
    driver drains once per tick.

    Example:
        >>> registry = ModelRegistry()
        >>> first = registry.add("Model 1")
        >>> registry.set_gains(first, kp=2.0)
        >>> second = registry.duplicate(first)
    """

    def __init__(self, environment: Optional[Environment] = None):
        """
        Initialize an empty registry.

        Args:
            environment: Shared environment (defaults if None)
        """
        self._environment = environment if environment is not None else Environment()
        self._models: List[Model] = []
        self._histories: Dict[int, History] = {}
        self._ids = itertools.count(1)
        self._changes = ChangeSet()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def environment(self) -> Environment:
        return self._environment

    @property
    def setpoint(self) -> float:
        """Current setpoint, for the reference line."""
        return self._environment.setpoint

    @property
    def models(self) -> List[Model]:
        """Models in display order (a copy of the internal list)."""
        return list(self._models)

    @property
    def ids(self) -> List[int]:
        return [model.identity for model in self._models]

    def get(self, identity: int) -> Model:
        """
        Look up a model.

        Raises:
            KeyError: If no model has this identity
        """
        for model in self._models:
            if model.identity == identity:
                return model
        raise KeyError(f"No model with identity {identity}")

    def history(self, identity: int) -> Optional[History]:
        """History of a model, or None if it has no data."""
        return self._histories.get(identity)

    def __contains__(self, identity: int) -> bool:
        return identity in self._histories

    def __iter__(self) -> Iterator[Model]:
        return iter(list(self._models))

    def __len__(self) -> int:
        return len(self._models)

    # ------------------------------------------------------------------
    # Model lifecycle
    # ------------------------------------------------------------------

    def add(
        self,
        name: Optional[str] = None,
        gains: Optional[PIDGains] = None,
        max_accel: Optional[float] = None
    ) -> int:
        """
        Create a model at the top of the display order.

        Args:
            name: Display name ("Model <id>" if None)
            gains: Initial gains (zero if None)
            max_accel: Per-model acceleration limit

        Returns:
            Identity of the new model
        """
        identity = next(self._ids)
        model = Model(
            identity,
            name if name is not None else f"Model {identity}",
            gains=gains,
            max_accel=max_accel
        )
        self._insert(model)
        logger.info("Added model %d (%s)", identity, model.name)
        return identity

    def duplicate(self, identity: int) -> int:
        """
        Copy a model's tuning into a new model.

        The copy gets a new identity and an empty history, and is marked
        for recompute before it is first displayed.

        Raises:
            KeyError: If the source identity is unknown
        """
        source = self.get(identity)
        new_identity = next(self._ids)
        model = source.clone(new_identity, f"{source.name} (copy)")
        self._insert(model)
        logger.info("Duplicated model %d as %d", identity, new_identity)
        return new_identity

    def remove(self, identity: int) -> None:
        """Remove a model and its history. Unknown identities are ignored."""
        if identity not in self._histories:
            logger.debug("Ignoring removal of unknown model %d", identity)
            return
        self._models = [m for m in self._models if m.identity != identity]
        del self._histories[identity]
        logger.info("Removed model %d", identity)

    def _insert(self, model: Model) -> None:
        self._models.append(model)
        self._histories[model.identity] = History()
        self._changes.record(Change.model(model.identity, ("created",)))

    # ------------------------------------------------------------------
    # Tuning
    # ------------------------------------------------------------------

    def set_gains(
        self,
        identity: int,
        kp: Optional[float] = None,
        ki: Optional[float] = None,
        kd: Optional[float] = None
    ) -> None:
        """
        Update gains of one model.

        Only gains that actually change are recorded.

        Raises:
            KeyError: If the identity is unknown
            ValidationError: If a gain is not finite
        """
        model = self.get(identity)
        before = model.gains.to_dict()
        model.controller.set_gains(kp=kp, ki=ki, kd=kd)
        after = model.gains.to_dict()
        changed = [name for name in before if before[name] != after[name]]
        if changed:
            self._changes.record(Change.model(identity, changed))

    def set_max_accel(self, identity: int, value: Optional[float]) -> None:
        """
        Set or clear (None) a model's acceleration limit override.

        Raises:
            KeyError: If the identity is unknown
            ValidationError: If value is not positive
        """
        model = self.get(identity)
        if model.max_accel == value:
            return
        model.max_accel = value
        self._changes.record(Change.model(identity, ("max_accel",)))

    def rename(self, identity: int, name: str) -> None:
        """Change a display name. Histories stay valid."""
        self.get(identity).name = name

    def update_environment(self, **changes) -> Environment:
        """
        Replace the shared environment with a modified copy.

        Args:
            **changes: Environment fields to change

        Returns:
            The new environment

        Raises:
            ValidationError: If a value is invalid; the current
                environment is kept
        """
        new_environment = self._environment.copy(**changes)
        changed = new_environment.diff(self._environment)
        self._environment = new_environment
        if changed:
            self._changes.record(Change.environment(changed))
            logger.debug("Environment changed: %s", ", ".join(changed))
        return new_environment

    # ------------------------------------------------------------------
    # Change tracking
    # ------------------------------------------------------------------

    @property
    def has_pending_changes(self) -> bool:
        return len(self._changes) > 0

    def is_dirty(self, identity: int) -> bool:
        """True if the model's history is stale relative to its tuning."""
        return identity in self._histories and self._changes.touches(identity)

    def drain_changes(self) -> ChangeSet:
        """Hand the pending changes to the caller and clear them."""
        return self._changes.drain()

    def __repr__(self) -> str:
        return f"ModelRegistry({len(self._models)} models, {self._environment})"
