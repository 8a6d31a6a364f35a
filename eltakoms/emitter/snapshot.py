"""Latest-reading snapshot for pickup by other programs (snmp agents, rrdtool)."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from eltakoms.shared.models import Reading, parse_compact

logger = logging.getLogger(__name__)


def format_snapshot(reading: Reading) -> str:
    """Compact line followed by seven labeled lines."""
    return (
        f"{reading.compact()}\n"
        f"Temperature : {reading.temperature_tenths / 10:+.1f}\n"
        f"Sun South   : {reading.sun_south}\n"
        f"Sun West    : {reading.sun_west}\n"
        f"Sun East    : {reading.sun_east}\n"
        f"Obscure     : {'O' if reading.obscure else 'o'}\n"
        f"Dawn        : {reading.dawn}\n"
        f"Wind        : {reading.wind_tenths / 10:.1f}\n"
        f"Rain        : {'R' if reading.raining else 'r'}\n"
    )


class SnapshotWriter:
    """Overwrites one file with the most recent reading.

    The file is replaced atomically, so readers see either the previous or
    the new snapshot, never a partial one.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def write(self, reading: Reading) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            tmp.write_text(format_snapshot(reading), encoding="ascii")
            os.replace(tmp, self.path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise


def read_snapshot(path: Union[str, Path]) -> Optional[Reading]:
    """Read back the reading stored in a snapshot file.

    Returns:
        The reading, or None if the file is missing or malformed.
    """
    try:
        with open(path, "r", encoding="ascii") as f:
            first_line = f.readline()
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Snapshot {path} not readable: {e}")
        return None
    return parse_compact(first_line)
