"""Tests for the command-line entry point."""

import pandas as pd
import pytest
from Quadrature import COLUMNS
from Quadrature.cli import main, parse_request


class TestArgumentParsing:
    """Tests for turning arguments into a request."""

    def test_default_mode(self):
        request, args = parse_request(["1", "10", "1000", "4"])
        assert (request.lower_bound, request.upper_bound) == (1, 10)
        assert request.total_samples == 1000
        assert request.max_workers == 4
        assert not request.profile
        assert args.kernel == "numpy"

    def test_profile_flag(self):
        request, _ = parse_request(["1", "10", "1000", "4", "profile", "--kernel", "numba"])
        assert request.profile

    @pytest.mark.parametrize(
        "argv",
        [
            ["1", "10", "1000"],
            ["a", "10", "1000", "2"],
            ["10", "1", "1000", "2"],
            ["5", "5", "1000", "2"],
            ["0", "10", "1000", "2"],
            ["-3", "0", "1000", "2"],
            ["1", "10", "1000", "0"],
            ["1", "10", "1000", "2", "fast"],
        ],
    )
    def test_invalid_input_exits_before_computation(self, argv, capsys):
        """Invalid input reports an error and produces no output rows."""
        with pytest.raises(SystemExit) as exc:
            main(argv)

        assert exc.value.code == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err


class TestMain:
    """End-to-end runs writing CSV."""

    def test_single_round_to_stdout(self, capsys):
        assert main(["1", "10", "20000", "2", "--seed", "1"]) == 0

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == ",".join(COLUMNS)
        assert len(lines) == 2
        assert lines[1].split(",")[0] == "2"

    def test_profile_to_file(self, tmp_path):
        output = tmp_path / "scaling.csv"
        assert main(["1", "10", "30000", "3", "profile", "--seed", "1", "--output", str(output)]) == 0

        df = pd.read_csv(output)
        assert df["num_threads"].tolist() == [1, 2, 3]
        assert df["speedup"].iloc[0] == 1.0

    def test_fault_exits_nonzero_keeping_prior_rows(self, capsys):
        """Zero samples per worker aborts with status 1 after the rows already written."""
        assert main(["1", "10", "2", "4", "profile"]) == 1

        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 3  # header + rounds 1 and 2
