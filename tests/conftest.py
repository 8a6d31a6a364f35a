"""Shared fixtures for eltakoms tests."""

from __future__ import annotations

from typing import Callable, Iterable, List, Optional, Union

import pytest

from eltakoms.emitter.summary import SummarySink
from eltakoms.shared.models import SummaryRecord

EXAMPLE_TELEGRAM = b"W+07.6016300N99901.2N?151515151515?1889\x03"


def build_telegram(
    temp: str = "+07.6",
    south: str = "01",
    west: str = "63",
    east: str = "00",
    obscure: str = "N",
    dawn: str = "999",
    wind: str = "01.2",
    rain: str = "N",
    checksum: Optional[str] = None,
) -> bytes:
    body = f"W{temp}{south}{west}{east}{obscure}{dawn}{wind}{rain}?151515151515?".encode("ascii")
    if checksum is None:
        checksum = f"{sum(body):04d}"
    return body + checksum.encode("ascii") + b"\x03"


class FakeSerial:
    """Scripted byte source standing in for serial.Serial.

    Each script item is either bytes (served in ``read`` sized pieces), an
    empty bytes object (one timed out read) or an exception instance to raise.
    When the script runs out ``on_exhausted`` is called and reads return b"".
    """

    def __init__(
        self,
        script: Iterable[Union[bytes, Exception]],
        on_exhausted: Optional[Callable[[], None]] = None,
    ):
        self._pending: List[Union[bytes, Exception]] = list(script)
        self.on_exhausted = on_exhausted
        self.reads = 0

    def read(self, size: int = 1) -> bytes:
        self.reads += 1
        if not self._pending:
            if self.on_exhausted is not None:
                self.on_exhausted()
            return b""
        item = self._pending[0]
        if isinstance(item, Exception):
            self._pending.pop(0)
            raise item
        if not item:
            self._pending.pop(0)
            return b""
        chunk, rest = item[:size], item[size:]
        if rest:
            self._pending[0] = rest
        else:
            self._pending.pop(0)
        return chunk


class RecordingSink(SummarySink):
    def __init__(self):
        self.records: List[SummaryRecord] = []
        self.closed = False

    def emit(self, record: SummaryRecord) -> None:
        self.records.append(record)

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def telegram() -> Callable[..., bytes]:
    """Builder for telegrams with a correct checksum unless one is given."""
    return build_telegram


@pytest.fixture()
def fake_serial() -> type:
    return FakeSerial


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()
