"""Tests for the sin(x)/x sampling kernels."""

import math

import numpy as np
import pytest
from Quadrature import InvalidRequestError, NumbaKernel, NumPyKernel, get_kernel, sinc_area


def test_sinc_area_scalar():
    """Scalar evaluator scales sin(x)/x by the interval width."""
    assert sinc_area(math.pi, 1, 10) == pytest.approx(0.0, abs=1e-15)
    assert sinc_area(1.0, 1, 10) == pytest.approx(9 * math.sin(1.0))
    assert sinc_area(-2.0, -3, -1) == pytest.approx(2 * math.sin(2.0) / 2.0)


def test_kernels_produce_identical_results():
    """NumPy and Numba kernels should produce identical results."""
    rng = np.random.default_rng(7)
    x = rng.uniform(1.0, 10.0, size=10_000)

    numba_kernel = NumbaKernel()
    numba_kernel.warmup()

    assert np.isclose(NumPyKernel().area_sum(x, 9.0), numba_kernel.area_sum(x, 9.0), rtol=1e-10)


@pytest.mark.parametrize("kernel", [NumPyKernel(), NumbaKernel()])
def test_kernel_matches_scalar_evaluator(kernel):
    """Batch sum equals the sum of scalar evaluations."""
    x = np.array([1.0, 2.5, 4.0, 9.5])
    expected = sum(sinc_area(v, 1, 10) for v in x)
    assert kernel.area_sum(x, 9.0) == pytest.approx(expected)


class TestKernelSelection:
    """Tests for kernel lookup by name."""

    @pytest.mark.parametrize("name, cls", [("numpy", NumPyKernel), ("numba", NumbaKernel)])
    def test_known_kernels(self, name, cls):
        kernel = get_kernel(name)
        assert isinstance(kernel, cls)
        assert kernel.name == name

    def test_unknown_kernel_rejected(self):
        with pytest.raises(InvalidRequestError):
            get_kernel("cuda")
