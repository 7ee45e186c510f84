"""
Change records that replace per-entity dirty flags.

Every mutation that invalidates a computed history appends a ``Change``
naming the entity and the fields touched. The driver drains the pending
set once per tick and decides what to recompute from it alone.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, Optional, Sequence


class ChangeTarget(Enum):
    """Kind of entity a change applies to."""
    ENVIRONMENT = "environment"
    MODEL = "model"


@dataclass(frozen=True)
class Change:
    """A single recorded mutation."""
    target: ChangeTarget
    fields: FrozenSet[str]
    model_id: Optional[int] = None

    @classmethod
    def environment(cls, fields: Iterable[str]) -> 'Change':
        return cls(ChangeTarget.ENVIRONMENT, frozenset(fields))

    @classmethod
    def model(cls, model_id: int, fields: Iterable[str]) -> 'Change':
        return cls(ChangeTarget.MODEL, frozenset(fields), model_id)


class ChangeSet:
    """Ordered collection of pending changes."""

    def __init__(self, changes: Iterable[Change] = ()):
        self._changes: List[Change] = list(changes)

    def record(self, change: Change) -> None:
        self._changes.append(change)

    def drain(self) -> 'ChangeSet':
        """Return the pending changes and start a new, empty set."""
        drained = ChangeSet(self._changes)
        self._changes = []
        return drained

    @property
    def environment_changed(self) -> bool:
        return any(c.target is ChangeTarget.ENVIRONMENT for c in self._changes)

    @property
    def environment_fields(self) -> FrozenSet[str]:
        """Union of environment fields touched."""
        return frozenset().union(*(
            c.fields for c in self._changes if c.target is ChangeTarget.ENVIRONMENT
        ))

    @property
    def model_ids(self) -> FrozenSet[int]:
        return frozenset(
            c.model_id for c in self._changes if c.target is ChangeTarget.MODEL
        )

    def touches(self, model_id: int) -> bool:
        """True if ``model_id``'s history is stale under these changes."""
        return self.environment_changed or model_id in self.model_ids

    def __iter__(self) -> Iterator[Change]:
        return iter(self._changes)

    def __len__(self) -> int:
        return len(self._changes)

    def __repr__(self) -> str:
        return f"ChangeSet({self._changes!r})"


def plan_recompute(changes: ChangeSet, model_ids: Sequence[int]) -> List[int]:
    """
    Select the models whose histories must be recomputed.

    Args:
        changes: Drained change set
        model_ids: Identities currently in the registry, in display order

    Returns:
        Affected identities in display order. Changes for identities no
        longer present are ignored.
    """
    if changes.environment_changed:
        return list(model_ids)
    touched = changes.model_ids
    return [model_id for model_id in model_ids if model_id in touched]
