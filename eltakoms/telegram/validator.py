"""Positional grammar and checksum validation of multisensor telegrams.

A telegram is exactly 40 bytes including the 0x03 terminator, e.g.
``W+07.6016300N99901.2N?151515151515?1889``::

    offset  content
    0       W
    1       temperature sign + or -
    2-5     temperature DD.D, degrees C
    6-11    sun exposure south, west, east, DD each
    12      obscurity J/N
    13-15   dawn DDD
    16-19   wind speed DD.D, m/s
    20      rain J/N
    21-34   fixed pattern ?151515151515?
    35-38   checksum, decimal sum of the byte values at offsets 0-34
"""

from enum import IntFlag
from typing import Callable, Optional, Tuple

from .frame import RawFrame

TELEGRAM_LENGTH = 40
PATTERN = b"?151515151515?"
PATTERN_OFFSET = 21
CHECKSUM_OFFSET = 35
CHECKSUM_DIGITS = 4


class ErrorFlag(IntFlag):
    """Independent defects found in a telegram."""
    NONE = 0
    LENGTH = 0x0001
    PREFIX = 0x0002
    SIGN = 0x0004
    TEMPERATURE = 0x0008
    SUN_SOUTH = 0x0010
    SUN_WEST = 0x0020
    SUN_EAST = 0x0040
    OBSCURITY = 0x0080
    DAWN = 0x0100
    WIND = 0x0200
    RAIN = 0x0400
    PATTERN = 0x0800
    CHECKSUM_DIGITS = 0x1000
    CHECKSUM = 0x2000


def describe(errors: int) -> str:
    """Comma separated flag names, e.g. 'SIGN,CHECKSUM'."""
    names = [flag.name for flag in ErrorFlag if flag and errors & flag]
    return ",".join(names) or "NONE"


def _is_digit(value: Optional[int]) -> bool:
    return value is not None and 0x30 <= value <= 0x39


def _one_of(*chars: str) -> Callable[[Optional[int]], bool]:
    allowed = {ord(c) for c in chars}
    return lambda value: value in allowed


_is_sign = _one_of("+", "-")
_is_flag = _one_of("J", "N")
_is_point = _one_of(".")
_is_prefix = _one_of("W")


def _decimal(flag: ErrorFlag) -> Tuple[Tuple[Callable, ...], ErrorFlag]:
    return (_is_digit, _is_digit, _is_point, _is_digit), flag


# (offset, checks for consecutive bytes, flag set when any check fails)
RULES = (
    (0, (_is_prefix,), ErrorFlag.PREFIX),
    (1, (_is_sign,), ErrorFlag.SIGN),
    (2, *_decimal(ErrorFlag.TEMPERATURE)),
    (6, (_is_digit, _is_digit), ErrorFlag.SUN_SOUTH),
    (8, (_is_digit, _is_digit), ErrorFlag.SUN_WEST),
    (10, (_is_digit, _is_digit), ErrorFlag.SUN_EAST),
    (12, (_is_flag,), ErrorFlag.OBSCURITY),
    (13, (_is_digit,) * 3, ErrorFlag.DAWN),
    (16, *_decimal(ErrorFlag.WIND)),
    (20, (_is_flag,), ErrorFlag.RAIN),
    (CHECKSUM_OFFSET, (_is_digit,) * CHECKSUM_DIGITS, ErrorFlag.CHECKSUM_DIGITS),
)


def checksum(data: bytes) -> int:
    """Plain sum of the byte values covered by the checksum (offsets 0-34)."""
    return sum(data[:CHECKSUM_OFFSET])


def validate(frame: RawFrame) -> ErrorFlag:
    """Apply every grammar rule to the frame.

    All rules are evaluated so one frame can report several defects. Bytes
    missing from a short frame fail their rule.

    Returns:
        ErrorFlag.NONE if the telegram is acceptable, otherwise the union
        of all failed rules.
    """
    data = frame.data
    errors = ErrorFlag.NONE

    def byte_at(offset: int) -> Optional[int]:
        return data[offset] if offset < len(data) else None

    if len(data) != TELEGRAM_LENGTH:
        errors |= ErrorFlag.LENGTH

    for offset, checks, flag in RULES:
        for position, check in enumerate(checks, start=offset):
            if not check(byte_at(position)):
                errors |= flag

    if data[PATTERN_OFFSET:PATTERN_OFFSET + len(PATTERN)] != PATTERN:
        errors |= ErrorFlag.PATTERN

    if errors & ErrorFlag.CHECKSUM_DIGITS:
        errors |= ErrorFlag.CHECKSUM
    else:
        expected = int(data[CHECKSUM_OFFSET:CHECKSUM_OFFSET + CHECKSUM_DIGITS])
        if checksum(data) != expected:
            errors |= ErrorFlag.CHECKSUM

    return errors

