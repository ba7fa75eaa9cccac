"""Split a sample budget across workers.

Every worker gets ``total_samples // worker_count`` samples. The remainder
of the integer division is dropped, so the realized total can be smaller
than the requested budget.
"""

from typing import List

from .errors import InvalidRequestError


def samples_per_worker(total_samples: int, worker_count: int) -> int:
    """Uniform per-worker share of the sample budget."""
    if worker_count < 1:
        raise InvalidRequestError(f"worker_count must be at least 1, got {worker_count}")
    return total_samples // worker_count


def partition(total_samples: int, worker_count: int) -> List[int]:
    """Per-worker sample counts, indexed by worker.

    Examples
    --------
    >>> partition(101, 4)
    [25, 25, 25, 25]
    """
    return [samples_per_worker(total_samples, worker_count)] * worker_count


def realized_samples(total_samples: int, worker_count: int) -> int:
    """Number of samples actually drawn across all workers of a round."""
    return samples_per_worker(total_samples, worker_count) * worker_count
