"""Snapshot and summary outputs."""

from .snapshot import SnapshotWriter, format_snapshot, read_snapshot
from .summary import (
    SummarySink,
    FileSummarySink,
    SyslogSummarySink,
    format_summary_line,
)

__all__ = [
    "SnapshotWriter",
    "format_snapshot",
    "read_snapshot",
    "SummarySink",
    "FileSummarySink",
    "SyslogSummarySink",
    "format_summary_line",
]
