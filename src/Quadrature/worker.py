"""Worker unit: one private sampling loop per thread."""

import logging
from typing import Optional

import numpy as np

from .errors import ComputationError
from .results import SharedResultTable

log = logging.getLogger(__name__)

# Upper bound on abscissas held in memory at once by a worker
DEFAULT_CHUNK_SIZE = 1 << 16


class WorkerUnit:
    """Monte Carlo sampler for one worker index.

    Draws ``n_samples`` uniform abscissas from its own generator, averages
    the scaled integrand over them and writes the mean into ``table[index]``.

    Draws are half-open, ``[lower_bound, upper_bound)``, as
    ``Generator.uniform`` produces them. Both bounds are nonzero, so
    admitting the lower endpoint never evaluates the integrand at zero and
    changes nothing about the estimate.

    Parameters
    ----------
    index : int
        Slot in the round's result table.
    n_samples : int
        Samples assigned to this worker.
    lower_bound, upper_bound : float
        Sampling interval.
    table : SharedResultTable
        Result table of the current round.
    rng : numpy.random.Generator
        Random stream owned by this worker only.
    kernel : NumPyKernel or NumbaKernel
        Batch evaluator for the integrand.
    chunk_size : int
        Maximum batch size per kernel call.
    """

    def __init__(
        self,
        index: int,
        n_samples: int,
        lower_bound: float,
        upper_bound: float,
        table: SharedResultTable,
        rng: np.random.Generator,
        kernel,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.index = index
        self.n_samples = n_samples
        self.lower_bound = lower_bound
        self.upper_bound = upper_bound
        self.table = table
        self.rng = rng
        self.kernel = kernel
        self.chunk_size = chunk_size

        # Set when run() fails inside a thread; re-raised by the controller
        self.exception: Optional[BaseException] = None

    def run(self) -> float:
        """Sample, average and publish this worker's partial estimate."""
        if self.n_samples == 0:
            raise ComputationError(
                f"Worker {self.index} was assigned zero samples (division by zero)"
            )

        width = float(self.upper_bound - self.lower_bound)
        total = 0.0
        remaining = self.n_samples
        while remaining > 0:
            n = min(remaining, self.chunk_size)
            x = self.rng.uniform(self.lower_bound, self.upper_bound, size=n)
            total += self.kernel.area_sum(x, width)
            remaining -= n

        mean = total / self.n_samples
        self.table.write(self.index, mean)
        return mean

    def __call__(self):
        """Thread target: run and keep any exception for the joining thread."""
        try:
            self.run()
        except Exception as e:
            log.debug(f"Worker {self.index} failed: {e}")
            self.exception = e
