"""Metrics recording and output sinks.

The recorder forwards each sweep record, unchanged and in sweep order, to
one or more sinks:

- CsvSink: streams rows as CSV (stdout or a file)
- DataFrameSink: collects rows into a pandas DataFrame
- MlflowSink: logs each row as step metrics on the active MLflow run
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, TextIO

import pandas as pd

from .datastructures import COLUMNS, SweepRecord


class OutputSink(ABC):
    """Abstract destination for sweep records."""

    @abstractmethod
    def write_header(self, columns: Sequence[str]):
        """Receive the column names before any record."""
        pass

    @abstractmethod
    def write_record(self, record: SweepRecord):
        """Receive one record."""
        pass

    def flush(self):
        """Commit everything received so far. No-op by default."""
        pass


class CsvSink(OutputSink):
    """Stream records as CSV rows.

    Parameters
    ----------
    stream : text stream, optional
        Destination (default: ``sys.stdout``).
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream if stream is not None else sys.stdout
        self._columns = list(COLUMNS)

    def write_header(self, columns: Sequence[str]):
        self._columns = list(columns)
        pd.DataFrame(columns=self._columns).to_csv(self.stream, index=False)

    def write_record(self, record: SweepRecord):
        row = pd.DataFrame([record.as_row()], columns=self._columns)
        row.to_csv(self.stream, header=False, index=False)

    def flush(self):
        self.stream.flush()


class DataFrameSink(OutputSink):
    """Collect records in memory and expose them as a DataFrame."""

    def __init__(self):
        self._columns = list(COLUMNS)
        self._rows: List[tuple] = []

    def write_header(self, columns: Sequence[str]):
        self._columns = list(columns)

    def write_record(self, record: SweepRecord):
        self._rows.append(record.as_row())

    @property
    def frame(self) -> pd.DataFrame:
        """All collected records, one row per sweep step."""
        return pd.DataFrame(self._rows, columns=self._columns)


class MlflowSink(OutputSink):
    """Log each record as step metrics (step = worker count) on the active run."""

    def write_header(self, columns: Sequence[str]):
        pass

    def write_record(self, record: SweepRecord):
        from utils.mlflow.io import log_metrics_dict

        log_metrics_dict(record.to_mlflow(), step=record.worker_count)


class MetricsRecorder:
    """Forward sweep records to the output sinks.

    Parameters
    ----------
    *sinks : OutputSink
        Destinations, written in the given order.
    """

    def __init__(self, *sinks: OutputSink):
        self.sinks = list(sinks)
        self.records: List[SweepRecord] = []

    def start(self, columns: Sequence[str] = COLUMNS):
        """Send the header row to every sink."""
        for sink in self.sinks:
            sink.write_header(columns)

    def record(self, record: SweepRecord):
        """Forward one record unchanged."""
        self.records.append(record)
        for sink in self.sinks:
            sink.write_record(record)

    def finish(self):
        """Flush every sink after the last record."""
        for sink in self.sinks:
            sink.flush()
