"""Tests for the metrics recorder and output sinks."""

import io

import pandas as pd
import pytest
from Quadrature import COLUMNS, CsvSink, DataFrameSink, MetricsRecorder, SweepRecord

RECORDS = [
    SweepRecord(1, 2000.0, 1.0, 1.0, 0.7121),
    SweepRecord(2, 1000.0, 2.0, 1.0, 0.7125),
    SweepRecord(3, 800.0, 2.5, 2.5 / 3, 0.7119),
]


def record_all(*sinks):
    recorder = MetricsRecorder(*sinks)
    recorder.start()
    for r in RECORDS:
        recorder.record(r)
    recorder.finish()
    return recorder


class TestCsvSink:
    """Tests for streamed CSV output."""

    def test_header_then_rows(self):
        """Header precedes one row per record, in order."""
        stream = io.StringIO()
        record_all(CsvSink(stream))

        lines = stream.getvalue().splitlines()
        assert lines[0] == ",".join(COLUMNS)
        assert len(lines) == 1 + len(RECORDS)
        assert [int(line.split(",")[0]) for line in lines[1:]] == [1, 2, 3]

    def test_defaults_to_stdout(self, capsys):
        """Without a stream the sink writes to standard output."""
        record_all(CsvSink())

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == ",".join(COLUMNS)
        assert len(lines) == 1 + len(RECORDS)

    def test_csv_roundtrips_through_pandas(self):
        """Written CSV reads back into the same values."""
        stream = io.StringIO()
        record_all(CsvSink(stream))
        stream.seek(0)

        df = pd.read_csv(stream)
        assert list(df.columns) == list(COLUMNS)
        assert df["integral"].tolist() == pytest.approx([r.integral_estimate for r in RECORDS])

    def test_rows_streamed_before_flush(self):
        """Each row is written as soon as it is recorded."""
        stream = io.StringIO()
        recorder = MetricsRecorder(CsvSink(stream))
        recorder.start()
        recorder.record(RECORDS[0])
        assert len(stream.getvalue().splitlines()) == 2


class TestMetricsRecorder:
    """Tests for forwarding to several sinks."""

    def test_forwards_unchanged_to_every_sink(self):
        a, b = DataFrameSink(), DataFrameSink()
        recorder = record_all(a, b)

        assert recorder.records == RECORDS
        pd.testing.assert_frame_equal(a.frame, b.frame)
        assert a.frame["num_threads"].tolist() == [1, 2, 3]

    def test_empty_frame_has_columns(self):
        """A sink with no records still exposes the five columns."""
        assert list(DataFrameSink().frame.columns) == list(COLUMNS)
