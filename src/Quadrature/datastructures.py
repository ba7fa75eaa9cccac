"""Data structures for sweep configuration and results.

Architecture: Params vs Metrics

                 Params (input/config)         Metrics (output/results)
                 ─────────────────────         ────────────────────────
Sweep            IntegrationRequest            SweepRecord
                 bounds, total_samples,        worker_count, elapsed_time,
                 max_workers, profile          speedup, efficiency, integral

The request is validated once and is immutable thereafter. One record is
produced per sweep step, in sweep order.
"""

from __future__ import annotations

import numbers
from dataclasses import asdict, dataclass, fields
from typing import List, Tuple

from .errors import InvalidRequestError


# ============================================================================
# Params
# ============================================================================


@dataclass(frozen=True)
class IntegrationRequest:
    """Sweep configuration - validated on construction, logged to MLflow as params.

    Parameters
    ----------
    lower_bound, upper_bound : float
        Integration interval. Both must be nonzero and ``lower < upper``.
    total_samples : int
        Sample budget shared by the workers of one round.
    max_workers : int
        Largest worker count in the sweep.
    profile : bool
        Sweep every worker count in ``1..max_workers`` instead of only
        ``max_workers``.
    """

    lower_bound: float
    upper_bound: float
    total_samples: int
    max_workers: int
    profile: bool = False

    def __post_init__(self):
        """Reject requests that no round could run with."""
        if self.lower_bound == 0 or self.upper_bound == 0:
            raise InvalidRequestError(
                f"Invalid value of a or b: zero not allowed "
                f"(a={self.lower_bound}, b={self.upper_bound})"
            )
        if not self.lower_bound < self.upper_bound:
            raise InvalidRequestError(
                f"Invalid limits: a={self.lower_bound} must be less than b={self.upper_bound}"
            )
        for name in ("total_samples", "max_workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise InvalidRequestError(
                    f"{name} must be an integer, got {value!r}"
                )
        if self.total_samples < 1:
            raise InvalidRequestError(
                f"total_samples must be at least 1, got {self.total_samples}"
            )
        if self.max_workers < 1:
            raise InvalidRequestError(
                f"max_workers must be at least 1, got {self.max_workers}"
            )

    @property
    def width(self) -> float:
        """Interval width ``b - a``."""
        return float(self.upper_bound - self.lower_bound)

    def sweep_steps(self) -> List[int]:
        """Worker counts to evaluate, in execution order.

        Step 1 comes first in profile mode because its timing is the
        speedup baseline.
        """
        if self.profile:
            return list(range(1, self.max_workers + 1))
        return [self.max_workers]

    def to_mlflow(self) -> dict:
        """Convert to MLflow-compatible params dict (bools as int)."""
        return {
            k: (int(v) if isinstance(v, bool) else v)
            for k, v in asdict(self).items()
        }


# ============================================================================
# Metrics
# ============================================================================


@dataclass(frozen=True)
class SweepRecord:
    """Result of one sweep step. Immutable once emitted.

    ``elapsed_time`` is wall-clock time in microseconds.
    ``speedup`` is relative to the first step of the sweep and
    ``efficiency = speedup / worker_count``.
    """

    worker_count: int
    elapsed_time: float
    speedup: float
    efficiency: float
    integral_estimate: float

    def as_row(self) -> Tuple[int, float, float, float, float]:
        """Ordered field values, matching ``COLUMNS``."""
        return tuple(getattr(self, f.name) for f in fields(self))

    def to_mlflow(self) -> dict:
        """Metrics dict for step-based MLflow logging (worker_count is the step)."""
        return {k: float(v) for k, v in asdict(self).items() if k != "worker_count"}


# Field names in output order
FIELDS = tuple(f.name for f in fields(SweepRecord))

# Header row written by tabular sinks
COLUMNS = ("num_threads", "time", "speedup", "efficiency", "integral")
