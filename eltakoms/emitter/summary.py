"""Sinks for window summary records."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from eltakoms.shared.logging import make_syslog_handler
from eltakoms.shared.models import SummaryRecord

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
SYSLOG_TAG = "ELTAKO-MS"


def format_summary_line(record: SummaryRecord) -> str:
    """``2008-04-03 17:03:20 t+07.6s01w63e00od999v01.2r``"""
    return f"{record.timestamp.strftime(DATE_FORMAT)} {record.compact()}"


class SummarySink(ABC):
    """Destination for summary records."""

    @abstractmethod
    def emit(self, record: SummaryRecord) -> None:
        """Write one summary record."""
        pass

    def close(self) -> None:
        pass


class FileSummarySink(SummarySink):
    """Appends one timestamped line per summary to a log file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def check_writable(self) -> None:
        """Open the log for append once.

        Raises:
            OSError: If the file cannot be opened for appending.
        """
        with open(self.path, "a"):
            pass

    def emit(self, record: SummaryRecord) -> None:
        with open(self.path, "a") as f:
            f.write(format_summary_line(record) + "\n")


class SyslogSummarySink(SummarySink):
    """Sends one ``ELTAKO-MS: <compact>`` message per summary to syslog."""

    def __init__(
        self,
        address: str = "/dev/log",
        facility: str = "local5",
        handler: Optional[logging.Handler] = None,
    ):
        if handler is None:
            handler = make_syslog_handler(address, facility)
        self.handler = handler
        self.logger = logging.getLogger("eltakoms.summary")
        self.logger.setLevel(logging.INFO)
        self.logger.addHandler(handler)
        # Summaries must not reach the root handlers a second time
        self.logger.propagate = False

    def emit(self, record: SummaryRecord) -> None:
        self.logger.info(f"{SYSLOG_TAG}: {record.compact()}")

    def close(self) -> None:
        self.logger.removeHandler(self.handler)
        self.handler.close()
