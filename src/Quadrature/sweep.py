"""Sweep controller: sampling rounds over a range of worker counts."""

import logging
import threading
import time
from typing import List, Optional, Tuple

import numpy as np

from .datastructures import IntegrationRequest, SweepRecord
from .kernels import get_kernel
from .partition import partition, realized_samples
from .recorder import MetricsRecorder
from .results import SharedResultTable
from .worker import DEFAULT_CHUNK_SIZE, WorkerUnit

log = logging.getLogger(__name__)


class SweepController:
    """Run one sampling round per sweep step and derive scaling metrics.

    Each round builds a fresh result table, starts one thread per worker,
    joins them all, and aggregates the partial estimates. The first
    round's elapsed time is the baseline for speedup. Rounds run strictly
    one after another.

    Parameters
    ----------
    request : IntegrationRequest
        Validated sweep configuration.
    kernel : str
        Integrand kernel, "numpy" or "numba" (default: "numpy").
    seed : int, optional
        Root seed. Worker streams are spawned from it, so equal seeds give
        equal estimates. None draws fresh OS entropy.
    recorder : MetricsRecorder, optional
        Receives one record per step (default: recorder without sinks).
    chunk_size : int
        Maximum abscissas per kernel call inside a worker.

    Examples
    --------
    >>> request = IntegrationRequest(1, 10, 100_000, 4, profile=True)
    >>> records = SweepController(request, seed=42).run()
    >>> [r.worker_count for r in records]
    [1, 2, 3, 4]
    """

    def __init__(
        self,
        request: IntegrationRequest,
        kernel: str = "numpy",
        seed: Optional[int] = None,
        recorder: Optional[MetricsRecorder] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self.request = request
        self.kernel = get_kernel(kernel)
        self.seed_sequence = np.random.SeedSequence(seed)
        self.recorder = recorder if recorder is not None else MetricsRecorder()
        self.chunk_size = chunk_size

        self.baseline_time: Optional[float] = None

    def warmup(self):
        """Warmup kernel (trigger Numba JIT if used)."""
        self.kernel.warmup()

    def _spawn_streams(self, n_workers: int) -> List[np.random.Generator]:
        """Independent generators for the workers of one round."""
        return [np.random.default_rng(s) for s in self.seed_sequence.spawn(n_workers)]

    def run_round(self, n_workers: int) -> Tuple[float, float]:
        """Run one round with ``n_workers`` threads.

        Returns
        -------
        tuple
            (elapsed time in microseconds, integral estimate)
        """
        req = self.request
        table = SharedResultTable(n_workers)
        counts = partition(req.total_samples, n_workers)
        log.debug(
            f"{n_workers} workers x {counts[0]} samples "
            f"({realized_samples(req.total_samples, n_workers)} of {req.total_samples})"
        )

        units = [
            WorkerUnit(
                index=i,
                n_samples=counts[i],
                lower_bound=req.lower_bound,
                upper_bound=req.upper_bound,
                table=table,
                rng=rng,
                kernel=self.kernel,
                chunk_size=self.chunk_size,
            )
            for i, rng in enumerate(self._spawn_streams(n_workers))
        ]
        threads = [
            threading.Thread(target=unit, name=f"quadrature-worker-{unit.index}")
            for unit in units
        ]

        t_start = time.perf_counter()
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        elapsed = (time.perf_counter() - t_start) * 1e6

        for unit in units:
            if unit.exception is not None:
                raise unit.exception

        return elapsed, table.aggregate()

    def run(self) -> List[SweepRecord]:
        """Execute the full sweep. Returns the emitted records in order.

        A fault in any round propagates; records emitted by earlier rounds
        stay with the sinks, which are flushed either way.
        """
        steps = self.request.sweep_steps()
        self.baseline_time = None
        self.warmup()

        records = []
        self.recorder.start()
        try:
            for n_workers in steps:
                elapsed, estimate = self.run_round(n_workers)
                if self.baseline_time is None:
                    self.baseline_time = elapsed

                speedup = self.baseline_time / elapsed
                record = SweepRecord(
                    worker_count=n_workers,
                    elapsed_time=elapsed,
                    speedup=speedup,
                    efficiency=speedup / n_workers,
                    integral_estimate=estimate,
                )
                log.info(
                    f"threads={n_workers}, time={elapsed:.0f}us, speedup={speedup:.3f}, "
                    f"efficiency={record.efficiency:.3f}, integral={estimate:.6f}"
                )
                self.recorder.record(record)
                records.append(record)
        finally:
            self.recorder.finish()

        return records
