"""Re-aggregate a summary log into coarser windows as rrdtool update data."""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Iterator, Optional, Tuple

from eltakoms.aggregator.window import AggregationWindow
from eltakoms.shared.models import Reading, SummaryRecord, format_tenths, parse_compact

logger = logging.getLogger(__name__)

SUMMARY_LINE = re.compile(
    r"^(?P<stamp>\d{4}-\d\d-\d\d \d\d:\d\d:\d\d) (?P<compact>\S+)$"
)


@dataclass
class RollupStats:
    lines: int = 0
    skipped: int = 0
    records: int = 0


def parse_summary_line(line: str) -> Optional[Tuple[float, Reading]]:
    """Split ``2008-04-03 17:03:20 t+07.6s01w63e00od999v01.2r``.

    Returns:
        (unix time in local time, reading), or None for malformed lines.
    """
    match = SUMMARY_LINE.match(line.strip())
    if match is None:
        return None
    reading = parse_compact(match["compact"])
    if reading is None:
        return None
    stamp = datetime.strptime(match["stamp"], "%Y-%m-%d %H:%M:%S")
    return stamp.timestamp(), reading


def format_rrd_update(epoch: int, record: SummaryRecord) -> str:
    """``epoch:temp:wind:rain:sunE:sunS:sunW:dawn:obsc`` for ``rrdtool update``."""
    return (
        f"{epoch}:{format_tenths(record.temperature_tenths, signed=True)}"
        f":{format_tenths(record.wind_tenths)}"
        f":{int(record.raining)}"
        f":{record.sun_east:02d}:{record.sun_south:02d}:{record.sun_west:02d}"
        f":{record.dawn:03d}"
        f":{int(record.obscure)}"
    )


def rollup(
    lines: Iterable[str],
    interval: int = 300,
    stats: Optional[RollupStats] = None,
) -> Iterator[str]:
    """Yield one rrdtool update string per closed window of ``interval`` seconds.

    The trailing, unfinished window is not emitted.
    """
    stats = stats if stats is not None else RollupStats()
    window = AggregationWindow(interval)

    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        stats.lines += 1
        parsed = parse_summary_line(line)
        if parsed is None:
            stats.skipped += 1
            logger.warning(f"Skipping malformed line {number}: {line.rstrip()!r}")
            continue

        epoch, reading = parsed
        window.accumulate(reading)
        if window.should_close(epoch):
            record = window.finalize(epoch)
            if record is not None:
                stats.records += 1
                yield format_rrd_update(int(epoch), record)
