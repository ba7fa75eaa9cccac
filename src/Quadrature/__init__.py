"""Monte Carlo quadrature thread-scaling package.

Estimates the integral of sin(x)/x over [a, b] by uniform random sampling,
splitting a fixed sample budget across worker threads, and measures how
elapsed time, speedup and efficiency change with the number of threads.

Components
----------
- kernels: integrand evaluation (NumPy and Numba batch kernels)
- partition: per-worker sample counts
- results: locked per-round table of partial estimates
- worker: per-thread sampling loop
- sweep: SweepController running one round per thread count
- recorder: MetricsRecorder and output sinks (CSV, DataFrame, MLflow)
"""

from pathlib import Path

from .datastructures import COLUMNS, FIELDS, IntegrationRequest, SweepRecord
from .errors import ComputationError, InvalidRequestError, QuadratureError
from .kernels import NumbaKernel, NumPyKernel, get_kernel, sinc_area
from .partition import partition, realized_samples, samples_per_worker
from .recorder import CsvSink, DataFrameSink, MetricsRecorder, MlflowSink, OutputSink
from .results import SharedResultTable
from .sweep import SweepController
from .worker import WorkerUnit

__all__ = [
    # Data structures
    "IntegrationRequest",
    "SweepRecord",
    "COLUMNS",
    "FIELDS",
    # Errors
    "QuadratureError",
    "InvalidRequestError",
    "ComputationError",
    # Kernels
    "sinc_area",
    "NumPyKernel",
    "NumbaKernel",
    "get_kernel",
    # Partitioning
    "samples_per_worker",
    "partition",
    "realized_samples",
    # Workers and sweep
    "SharedResultTable",
    "WorkerUnit",
    "SweepController",
    # Output
    "OutputSink",
    "CsvSink",
    "DataFrameSink",
    "MlflowSink",
    "MetricsRecorder",
    # Utilities
    "get_project_root",
]


def get_project_root() -> Path:
    """Get project root directory.

    Returns
    -------
    Path
        Project root directory (contains pyproject.toml).
    """
    current = Path(__file__).resolve().parent
    while current != current.parent:
        if (current / "pyproject.toml").exists():
            return current
        current = current.parent

    # Fallback: assume standard src layout
    return Path(__file__).resolve().parent.parent.parent
