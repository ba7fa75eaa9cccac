"""Per-round shared storage for partial estimates."""

import math
import threading

import numpy as np

from .errors import ComputationError


class SharedResultTable:
    """Fixed-size table with one partial-estimate slot per worker index.

    All writes go through a single lock guarding the whole table. Each slot
    is written exactly once by its owning worker and read only after every
    worker of the round has been joined. A table lives for one round.

    Parameters
    ----------
    size : int
        Number of workers in the round.
    """

    def __init__(self, size: int):
        self._slots = np.full(size, np.nan, dtype=np.float64)
        self._written = np.zeros(size, dtype=bool)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return self._slots.size

    def write(self, index: int, value: float):
        """Store ``value`` in slot ``index``. A slot accepts one write only."""
        with self._lock:
            if self._written[index]:
                raise ComputationError(f"Slot {index} written more than once")
            self._slots[index] = value
            self._written[index] = True

    def values(self) -> np.ndarray:
        """Copy of all partial estimates. Every slot must have been written."""
        with self._lock:
            missing = np.flatnonzero(~self._written)
            if missing.size:
                raise ComputationError(f"Slots never written: {missing.tolist()}")
            return self._slots.copy()

    def aggregate(self) -> float:
        """Equal-weight mean of the partial estimates.

        Computed as an offset from the first slot, so a table holding a
        single repeated value returns exactly that value.
        """
        values = self.values()
        pivot = float(values[0])
        return pivot + math.fsum(values - pivot) / values.size
