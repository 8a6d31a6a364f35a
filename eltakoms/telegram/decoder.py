"""Field extraction from validated telegrams."""

from eltakoms.shared.exceptions import TelegramError
from eltakoms.shared.models import Reading
from .frame import RawFrame
from .validator import describe, validate


def _tenths(field: bytes) -> int:
    """'DD.D' -> integer tenths, read straight from the digit characters."""
    return int(field[0:2] + field[3:4])


def decode(frame: RawFrame) -> Reading:
    """Convert an already validated telegram into a Reading.

    Slices are taken from the immutable frame, so the raw bytes stay
    available for diagnostics. The frame must have passed validate().
    """
    data = frame.data
    temperature = _tenths(data[2:6])
    if data[1:2] == b"-":
        temperature = -temperature

    return Reading(
        temperature_tenths=temperature,
        sun_south=int(data[6:8]),
        sun_west=int(data[8:10]),
        sun_east=int(data[10:12]),
        obscure=data[12:13] == b"J",
        dawn=int(data[13:16]),
        wind_tenths=_tenths(data[16:20]),
        raining=data[20:21] == b"J",
    )


def parse_telegram(frame: RawFrame) -> Reading:
    """Validate a frame and decode it.

    Raises:
        TelegramError: If any grammar rule or the checksum fails. The
            error mask is available as ``exc.errors``.
    """
    errors = validate(frame)
    if errors:
        raise TelegramError(
            f"Error 0x{errors:04x} ({describe(errors)}) reading sensordata: {frame.text}",
            errors=errors,
        )
    return decode(frame)
