"""Tests for the per-round shared result table."""

import threading

import numpy as np
import pytest
from Quadrature import ComputationError, SharedResultTable


class TestSharedResultTable:
    """Tests for slot ownership and aggregation."""

    def test_concurrent_writes_to_disjoint_slots(self):
        """Every thread's write lands in its own slot."""
        n = 32
        table = SharedResultTable(n)
        threads = [threading.Thread(target=table.write, args=(i, float(i))) for i in range(n)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert np.array_equal(table.values(), np.arange(n, dtype=float))

    def test_slot_written_once(self):
        """A second write to the same slot is a fault."""
        table = SharedResultTable(2)
        table.write(0, 1.0)
        with pytest.raises(ComputationError):
            table.write(0, 2.0)

    def test_unwritten_slot_detected(self):
        """Reading before every worker has written is a fault."""
        table = SharedResultTable(3)
        table.write(0, 1.0)
        table.write(2, 1.0)
        with pytest.raises(ComputationError, match=r"\[1\]"):
            table.values()

    @pytest.mark.parametrize("n", [1, 2, 3, 7, 10, 64])
    @pytest.mark.parametrize("c", [0.1, 1.3941, -2.5e-3])
    def test_constant_partials_aggregate_exactly(self, n, c):
        """Equal partial estimates aggregate to exactly that value."""
        table = SharedResultTable(n)
        for i in range(n):
            table.write(i, c)
        assert table.aggregate() == c

    def test_equal_weight_mean(self):
        """Aggregate is the plain mean of the slots."""
        table = SharedResultTable(4)
        for i, v in enumerate([1.0, 2.0, 3.0, 6.0]):
            table.write(i, v)
        assert table.aggregate() == pytest.approx(3.0)
        assert len(table) == 4
