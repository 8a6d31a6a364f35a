"""Core data models for multisensor readings and summaries."""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


COMPACT_PATTERN = re.compile(
    r"^t(?P<temp>[+-]\d\d\.\d)"
    r"s(?P<sun_south>\d\d)"
    r"w(?P<sun_west>\d\d)"
    r"e(?P<sun_east>\d\d)"
    r"(?P<obscure>[oO])"
    r"d(?P<dawn>\d\d\d)"
    r"v(?P<wind>\d\d\.\d)"
    r"(?P<rain>[rR])$"
)


def format_tenths(value: int, signed: bool = False) -> str:
    """Render an integer count of tenths as ``DD.D``.

    Args:
        value: Value in tenths (e.g. 76 for 7.6).
        signed: Prefix an explicit ``+`` or ``-``.

    Returns:
        Zero padded fixed point string, e.g. ``+07.6`` or ``01.2``.
    """
    sign = "-" if value < 0 else "+"
    whole, tenth = divmod(abs(value), 10)
    text = f"{whole:02d}.{tenth}"
    return f"{sign}{text}" if signed else text


def _parse_tenths(text: str) -> int:
    negative = text.startswith("-")
    digits = text.lstrip("+-").replace(".", "")
    value = int(digits)
    return -value if negative else value


@dataclass(frozen=True)
class Reading:
    """Physical values decoded from one accepted telegram.

    Temperature and wind speed are held as integer tenths so that long
    aggregation windows do not accumulate floating point error.
    """
    temperature_tenths: int
    sun_south: int
    sun_west: int
    sun_east: int
    obscure: bool
    dawn: int
    wind_tenths: int
    raining: bool

    @property
    def temperature(self) -> float:
        """Temperature in degrees Celsius."""
        return self.temperature_tenths / 10

    @property
    def wind_speed(self) -> float:
        """Wind speed in metres per second."""
        return self.wind_tenths / 10

    def compact(self) -> str:
        """Render as ``t+07.6s01w63e00od999v01.2r``."""
        return (
            f"t{format_tenths(self.temperature_tenths, signed=True)}"
            f"s{self.sun_south:02d}"
            f"w{self.sun_west:02d}"
            f"e{self.sun_east:02d}"
            f"{'O' if self.obscure else 'o'}"
            f"d{self.dawn:03d}"
            f"v{format_tenths(self.wind_tenths)}"
            f"{'R' if self.raining else 'r'}"
        )


@dataclass(frozen=True)
class SummaryRecord:
    """Aggregated values for one closed window.

    Averages are rounded half away from zero; wind is the window maximum;
    obscure and raining are true if any reading in the window was.
    """
    timestamp: datetime
    temperature_tenths: int
    sun_south: int
    sun_west: int
    sun_east: int
    obscure: bool
    dawn: int
    wind_tenths: int
    raining: bool
    sample_count: int

    def as_reading(self) -> Reading:
        return Reading(
            temperature_tenths=self.temperature_tenths,
            sun_south=self.sun_south,
            sun_west=self.sun_west,
            sun_east=self.sun_east,
            obscure=self.obscure,
            dawn=self.dawn,
            wind_tenths=self.wind_tenths,
            raining=self.raining,
        )

    def compact(self) -> str:
        return self.as_reading().compact()


def parse_compact(line: str) -> Optional[Reading]:
    """Parse a compact line back into a Reading.

    Args:
        line: Text such as ``t+07.6s01w63e00od999v01.2r``.

    Returns:
        The Reading, or None if the line does not match the format.
    """
    match = COMPACT_PATTERN.match(line.strip())
    if match is None:
        return None
    return Reading(
        temperature_tenths=_parse_tenths(match["temp"]),
        sun_south=int(match["sun_south"]),
        sun_west=int(match["sun_west"]),
        sun_east=int(match["sun_east"]),
        obscure=match["obscure"] == "O",
        dawn=int(match["dawn"]),
        wind_tenths=_parse_tenths(match["wind"]),
        raining=match["rain"] == "R",
    )
