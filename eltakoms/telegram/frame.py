"""Frame extraction from the raw serial byte stream."""

import logging
from dataclasses import dataclass
from typing import BinaryIO, Callable, Iterator, Optional, Union

import serial

logger = logging.getLogger(__name__)

TERMINATOR = 0x03
MAX_FRAME_LENGTH = 150

ByteSource = Union[serial.Serial, BinaryIO]


@dataclass(frozen=True)
class RawFrame:
    """Bytes of one transmission, including the terminator if one was seen."""
    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    @property
    def terminated(self) -> bool:
        return bool(self.data) and self.data[-1] == TERMINATOR

    @property
    def text(self) -> str:
        """Printable rendering for diagnostics, without the terminator."""
        body = self.data[:-1] if self.terminated else self.data
        return body.decode("ascii", errors="backslashreplace")


class FrameReader:
    """Reads terminator-delimited frames from a blocking byte source.

    The source only needs a ``read(size)`` method, so a ``serial.Serial``
    or any binary file object works. An empty read (serial timeout) is
    retried; when ``should_stop`` returns True at that point the reader
    gives up and returns None.
    """

    def __init__(
        self,
        stream: ByteSource,
        max_length: int = MAX_FRAME_LENGTH,
        terminator: int = TERMINATOR,
        should_stop: Optional[Callable[[], bool]] = None,
    ):
        self.stream = stream
        self.max_length = max_length
        self.terminator = terminator
        self.should_stop = should_stop or (lambda: False)

    def _read_byte(self) -> Optional[bytes]:
        """Read one byte, retrying on empty reads until data or cancellation."""
        while True:
            try:
                chunk = self.stream.read(1)
            except InterruptedError:
                continue
            if chunk:
                return chunk
            if self.should_stop():
                return None

    def read_frame(self) -> Optional[RawFrame]:
        """Block until one frame has been read.

        Returns:
            The frame, ending with the terminator or cut at max_length bytes.
            None if cancellation was requested while waiting for input.
        """
        buf = bytearray()
        while len(buf) < self.max_length:
            chunk = self._read_byte()
            if chunk is None:
                if buf:
                    logger.debug(f"Discarding {len(buf)} buffered bytes on shutdown")
                return None
            buf += chunk
            if chunk[0] == self.terminator:
                break
        else:
            logger.debug(f"Frame reached {self.max_length} bytes without terminator")

        return RawFrame(bytes(buf))

    def __iter__(self) -> Iterator[RawFrame]:
        while True:
            frame = self.read_frame()
            if frame is None:
                return
            yield frame
