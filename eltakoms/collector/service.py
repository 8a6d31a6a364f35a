"""Collector service - reads the multisensor serial line and logs summaries."""

import logging
import signal
from typing import Optional

import serial

from eltakoms.aggregator.window import AggregationWindow
from eltakoms.emitter.snapshot import SnapshotWriter
from eltakoms.emitter.summary import FileSummarySink, SummarySink, SyslogSummarySink
from eltakoms.telegram.frame import ByteSource, FrameReader
from .collector import TelegramCollector
from .config.settings import Config
from .lockfile import UUCPLock

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = (signal.SIGTERM, signal.SIGINT, signal.SIGHUP, signal.SIGQUIT)


def open_serial(config: Config) -> serial.Serial:
    """Open the sensor line: 8N1 with hardware flow control.

    Raises:
        serial.SerialException: If the device cannot be opened.
    """
    return serial.Serial(
        port=config.device,
        baudrate=config.baudrate,
        bytesize=serial.EIGHTBITS,
        parity=serial.PARITY_NONE,
        stopbits=serial.STOPBITS_ONE,
        rtscts=config.rtscts,
        timeout=config.read_timeout,
    )


def build_summary_sink(config: Config) -> SummarySink:
    if config.use_syslog:
        return SyslogSummarySink(
            address=config.syslog_address,
            facility=config.syslog_facility,
        )
    sink = FileSummarySink(config.log_path)
    sink.check_writable()
    return sink


class CollectorService:
    """Owns the serial line, the lock and the outputs around a TelegramCollector."""

    def __init__(
        self,
        config: Config,
        summary_sink: Optional[SummarySink] = None,
    ):
        self.config = config
        self.summary_sink = summary_sink or build_summary_sink(config)
        self.collector = TelegramCollector(
            window=AggregationWindow(config.interval),
            summary_sink=self.summary_sink,
            snapshot=SnapshotWriter(config.snapshot_path),
        )
        self._running = False

    def _setup_signal_handlers(self):
        """Set up signal handlers for graceful shutdown."""
        def signal_handler(signum, frame):
            signame = signal.Signals(signum).name
            logger.info(f"Received {signame}, shutting down...")
            self._running = False

        for signum in SHUTDOWN_SIGNALS:
            signal.signal(signum, signal_handler)

    def stop(self) -> None:
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def process_stream(self, stream: ByteSource) -> None:
        """Read and process frames until stopped.

        Shutdown is checked between frames, so a window is either flushed
        or discarded as a whole.
        """
        self._running = True
        reader = FrameReader(stream, should_stop=lambda: not self._running)
        try:
            for frame in reader:
                self.collector.process_frame(frame)
                if not self._running:
                    break
        finally:
            self.collector.discard()
            logger.info(
                f"Processed {self.collector.accepted} telegrams, "
                f"rejected {self.collector.rejected}"
            )

    def run(self) -> None:
        """Run the collector (blocking) until a shutdown signal arrives.

        Raises:
            LockError: If another process holds the device lock.
            serial.SerialException: If the device cannot be opened.
        """
        self._setup_signal_handlers()

        sink_name = "syslog" if self.config.use_syslog else str(self.config.log_path)
        logger.info(f"startup, reading from {self.config.device} into {sink_name}")

        try:
            with UUCPLock(self.config.lock_path):
                with open_serial(self.config) as line:
                    self.process_stream(line)
        finally:
            self.summary_sink.close()
            logger.info("Collector stopped")
