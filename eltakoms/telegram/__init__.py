"""Telegram framing, validation and decoding."""

from .frame import FrameReader, RawFrame, TERMINATOR, MAX_FRAME_LENGTH
from .validator import ErrorFlag, validate, describe, checksum
from .decoder import decode, parse_telegram

__all__ = [
    "FrameReader",
    "RawFrame",
    "TERMINATOR",
    "MAX_FRAME_LENGTH",
    "ErrorFlag",
    "validate",
    "describe",
    "checksum",
    "decode",
    "parse_telegram",
]
