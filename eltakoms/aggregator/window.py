"""Rolling aggregation window over accepted readings.

The sensor sends one telegram per second with no window markers. A window
closes when the phase of a reading (its timestamp modulo the interval) is
smaller than the phase of the previous reading, i.e. the wall clock has
crossed an interval boundary since the last reading. Readings must arrive
in increasing time order; a clock stepping backwards can close a window
early.
"""

import logging
from datetime import datetime
from typing import Optional

from eltakoms.shared.models import Reading, SummaryRecord

logger = logging.getLogger(__name__)

MIN_INTERVAL = 10
# Summaries closed this early in a new window are stamped with the boundary.
SNAP_FRACTION = 0.05


def round_half_away(total: int, count: int) -> int:
    """Integer average of total/count, rounding .5 away from zero."""
    quotient, remainder = divmod(abs(total), count)
    if 2 * remainder >= count:
        quotient += 1
    return -quotient if total < 0 else quotient


class AggregationWindow:
    """Running sums, maxima and sticky flags for one interval."""

    def __init__(self, interval_seconds: int = 60):
        if interval_seconds < MIN_INTERVAL:
            raise ValueError(
                f"Interval must be at least {MIN_INTERVAL} seconds, got {interval_seconds}"
            )
        self.interval_seconds = interval_seconds
        self.previous_phase = -1
        self.previous_timestamp: Optional[int] = None
        # interval used by the last should_close, for the summary timestamp
        self.last_interval = interval_seconds
        self.reset()

    def reset(self) -> None:
        """Clear the accumulators; closure tracking is kept."""
        self.count = 0
        self.temperature_sum = 0
        self.dawn_sum = 0
        self.sun_south_sum = 0
        self.sun_west_sum = 0
        self.sun_east_sum = 0
        self.wind_max = 0
        self.raining = False
        self.obscure = False

    def accumulate(self, reading: Reading) -> None:
        self.temperature_sum += reading.temperature_tenths
        self.dawn_sum += reading.dawn
        self.sun_south_sum += reading.sun_south
        self.sun_west_sum += reading.sun_west
        self.sun_east_sum += reading.sun_east
        if reading.wind_tenths > self.wind_max:
            self.wind_max = reading.wind_tenths
        self.raining = self.raining or reading.raining
        self.obscure = self.obscure or reading.obscure
        self.count += 1

    def should_close(self, timestamp: float, interval_seconds: Optional[int] = None) -> bool:
        """Decide whether the reading at ``timestamp`` ends the current window.

        The phase is recorded whatever the outcome. Besides the phase wrap,
        a gap of a whole interval or more since the previous reading also
        closes the window, since the wrap alone cannot see it.

        Args:
            timestamp: Unix time of the reading just accumulated.
            interval_seconds: Overrides the window's configured interval.
        """
        interval = interval_seconds or self.interval_seconds
        now = int(timestamp)
        phase = now % interval

        closed = phase < self.previous_phase
        if self.previous_timestamp is not None and now - self.previous_timestamp >= interval:
            closed = True
        if self.previous_timestamp is not None and now < self.previous_timestamp:
            logger.warning(
                f"Clock went backwards by {self.previous_timestamp - now}s, window timing unreliable"
            )

        self.previous_phase = phase
        self.previous_timestamp = now
        self.last_interval = interval
        return closed

    def summary_time(self, timestamp: float) -> datetime:
        """Timestamp for a summary closed at ``timestamp``.

        Within the first 5% of a new interval the boundary itself is used.
        The interval is the one the last should_close() call worked with.
        """
        interval = self.last_interval
        now = int(timestamp)
        phase = now % interval
        if phase <= interval * SNAP_FRACTION:
            now -= phase
        return datetime.fromtimestamp(now)

    def finalize(self, timestamp: float) -> Optional[SummaryRecord]:
        """Close the window and reset it.

        Returns:
            The summary, or None if no reading was accumulated since the
            last reset.
        """
        if self.count == 0:
            logger.debug("Window closed without readings, nothing to summarize")
            return None

        count = self.count
        record = SummaryRecord(
            timestamp=self.summary_time(timestamp),
            temperature_tenths=round_half_away(self.temperature_sum, count),
            sun_south=round_half_away(self.sun_south_sum, count),
            sun_west=round_half_away(self.sun_west_sum, count),
            sun_east=round_half_away(self.sun_east_sum, count),
            obscure=self.obscure,
            dawn=round_half_away(self.dawn_sum, count),
            wind_tenths=self.wind_max,
            raining=self.raining,
            sample_count=count,
        )
        self.reset()
        return record
