"""Sampling kernels for the sin(x)/x integrand.

Simple kernel implementations - random draws and bookkeeping are handled
by the worker.
"""

import math

import numpy as np
from numba import njit

from .errors import InvalidRequestError


def sinc_area(x: float, lower: float, upper: float) -> float:
    """Integrand value at ``x`` scaled by the interval width.

    ``x`` must not be zero.
    """
    return math.sin(x) / x * (upper - lower)


@njit(nogil=True, error_model="numpy")
def _area_sum_numba(x: np.ndarray, width: float) -> float:
    """Numba JIT implementation of the batch area sum."""
    total = 0.0
    for i in range(x.shape[0]):
        total += math.sin(x[i]) / x[i]
    return total * width


class NumPyKernel:
    """NumPy-based sampling kernel."""

    name = "numpy"

    def area_sum(self, x: np.ndarray, width: float) -> float:
        """Sum of ``sin(x)/x * width`` over a batch of abscissas."""
        return float(np.sum(np.sin(x) / x) * width)

    def warmup(self, warmup_size: int = 10):
        """No-op for NumPy kernel."""
        pass


class NumbaKernel:
    """Numba JIT-compiled sampling kernel.

    Compiled with ``nogil=True`` so that worker threads evaluate their
    batches concurrently.
    """

    name = "numba"

    def area_sum(self, x: np.ndarray, width: float) -> float:
        """Sum of ``sin(x)/x * width`` over a batch of abscissas."""
        return float(_area_sum_numba(x, width))

    def warmup(self, warmup_size: int = 10):
        """Trigger JIT compilation with a small batch."""
        x = np.linspace(1.0, 2.0, warmup_size)
        _area_sum_numba(x, 1.0)


KERNELS = {
    NumPyKernel.name: NumPyKernel,
    NumbaKernel.name: NumbaKernel,
}


def get_kernel(name: str):
    """Instantiate a kernel by name ("numpy" or "numba")."""
    try:
        return KERNELS[name]()
    except KeyError:
        raise InvalidRequestError(
            f"Unknown kernel '{name}'. Available: {sorted(KERNELS)}"
        ) from None
