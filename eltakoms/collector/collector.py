"""Per-telegram decode, aggregate and emit pipeline."""

import logging
import time
from typing import Optional

from eltakoms.aggregator.window import AggregationWindow
from eltakoms.emitter.snapshot import SnapshotWriter
from eltakoms.emitter.summary import SummarySink
from eltakoms.shared.exceptions import TelegramError
from eltakoms.shared.models import Reading, SummaryRecord
from eltakoms.telegram.decoder import parse_telegram
from eltakoms.telegram.frame import RawFrame

logger = logging.getLogger(__name__)


class TelegramCollector:
    """Processes one frame at a time through validation, aggregation and output.

    Rejected frames are logged and never reach the window, the snapshot or
    the summary sink.
    """

    def __init__(
        self,
        window: AggregationWindow,
        summary_sink: SummarySink,
        snapshot: Optional[SnapshotWriter] = None,
    ):
        self.window = window
        self.summary_sink = summary_sink
        self.snapshot = snapshot
        self.accepted = 0
        self.rejected = 0

    def process_frame(
        self, frame: RawFrame, timestamp: Optional[float] = None
    ) -> Optional[Reading]:
        """Run one frame through the pipeline.

        Args:
            frame: Raw frame from the reader.
            timestamp: Unix time of arrival, defaults to now.

        Returns:
            The decoded reading, or None if the frame was rejected.
        """
        if timestamp is None:
            timestamp = time.time()

        try:
            reading = parse_telegram(frame)
        except TelegramError as e:
            self.rejected += 1
            logger.warning(f"ELTAKO-MS: {e}")
            return None

        self.accepted += 1
        self.window.accumulate(reading)

        if self.snapshot is not None:
            try:
                self.snapshot.write(reading)
            except OSError as e:
                logger.error(f"Failed to write snapshot {self.snapshot.path}: {e}")

        if self.window.should_close(timestamp):
            record = self.window.finalize(timestamp)
            if record is not None:
                self._emit_summary(record)

        return reading

    def _emit_summary(self, record: SummaryRecord) -> None:
        try:
            self.summary_sink.emit(record)
            logger.debug(f"Summary of {record.sample_count} readings: {record.compact()}")
        except OSError as e:
            logger.error(f"Failed to write summary {record.compact()}: {e}")

    def discard(self) -> None:
        """Drop the open window on shutdown without emitting a partial summary."""
        if self.window.count:
            logger.info(f"Discarding {self.window.count} readings of the unfinished window")
        self.window.reset()
