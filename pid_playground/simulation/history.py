"""
Per-model (time, value) history buffer.
"""

from typing import Iterable, Iterator, List, Tuple
from collections import deque
import numpy as np

Sample = Tuple[float, float]


class History:
    """
    Ordered (time, value) samples plotted for one model.

    Batch evaluation replaces the whole buffer; real-time stepping appends
    and evicts through ``shift``.
    """

    def __init__(self, samples: Iterable[Sample] = ()):
        self._samples: deque = deque(samples)

    def append(self, time: float, value: float) -> None:
        self._samples.append((time, value))

    def replace(self, samples: Iterable[Sample]) -> None:
        """Discard all samples and store ``samples`` instead."""
        self._samples = deque(samples)

    def clear(self) -> None:
        self._samples.clear()

    def shift(self, dt: float) -> None:
        """
        Move every sample back in time by ``dt``.

        Samples whose shifted time is <= 0 are dropped. Times are
        non-decreasing, so eviction only happens at the front.
        """
        self._samples = deque((t - dt, v) for t, v in self._samples)
        while self._samples and self._samples[0][0] <= 0.0:
            self._samples.popleft()

    def trim_after(self, time: float) -> None:
        """Drop samples later than ``time``."""
        while self._samples and self._samples[-1][0] > time:
            self._samples.pop()

    def times(self) -> np.ndarray:
        return np.array([t for t, _ in self._samples], dtype=float)

    def values(self) -> np.ndarray:
        return np.array([v for _, v in self._samples], dtype=float)

    def as_list(self) -> List[Sample]:
        return list(self._samples)

    @property
    def last(self) -> Sample:
        """Most recent sample."""
        if not self._samples:
            raise IndexError("history is empty")
        return self._samples[-1]

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __repr__(self) -> str:
        return f"History({len(self._samples)} samples)"
