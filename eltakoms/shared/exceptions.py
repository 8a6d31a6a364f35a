"""Exceptions raised by eltakoms."""


class EltakoError(Exception):
    """Base class for all eltakoms errors."""

    pass


class TelegramError(EltakoError):
    """Raised when a telegram that failed validation is decoded."""

    def __init__(self, message: str, errors: int = 0):
        super().__init__(message)
        self.errors = errors


class ConfigError(EltakoError):
    """Raised for invalid configuration values."""

    pass


class LockError(EltakoError):
    """Raised when the serial device is locked by a live process."""

    def __init__(self, message: str, pid: int):
        super().__init__(message)
        self.pid = pid
