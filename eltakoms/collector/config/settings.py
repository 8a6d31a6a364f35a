"""Configuration loading for the collector service."""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from eltakoms.aggregator.window import MIN_INTERVAL
from eltakoms.shared.config import get_config_path, load_yaml_config
from eltakoms.shared.exceptions import ConfigError
from eltakoms.shared.logging import get_syslog_facility

logger = logging.getLogger(__name__)

PROGRAM = "eltakoms"


@dataclass
class Config:
    """Collector configuration.

    log_file, when unset, is derived from log_dir and the device name.
    """

    # Serial line
    device: str = "/dev/ttyS1"
    baudrate: int = 19200
    rtscts: bool = True
    read_timeout: Optional[float] = 1.0  # seconds, None blocks forever

    # Aggregation
    interval: int = 60  # seconds

    # Outputs
    use_syslog: bool = False
    log_file: Optional[str] = None
    log_dir: str = "/usb/log"
    snapshot_dir: str = "/dev/shm"
    lock_dir: str = "/var/lock"
    syslog_address: str = "/dev/log"
    syslog_facility: str = "local5"

    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create config from dictionary.

        Raises:
            ConfigError: If a value cannot be converted to its field type.
        """
        read_timeout = None
        if data.get("read_timeout", 1.0) is not None:
            read_timeout = _convert(float, data, "read_timeout", 1.0)
        return cls(
            device=str(data.get("device", "/dev/ttyS1")),
            baudrate=_convert(int, data, "baudrate", 19200),
            rtscts=bool(data.get("rtscts", True)),
            read_timeout=read_timeout,
            interval=_convert(int, data, "interval", 60),
            use_syslog=bool(data.get("use_syslog", False)),
            log_file=data.get("log_file"),
            log_dir=data.get("log_dir", "/usb/log"),
            snapshot_dir=data.get("snapshot_dir", "/dev/shm"),
            lock_dir=data.get("lock_dir", "/var/lock"),
            syslog_address=data.get("syslog_address", "/dev/log"),
            syslog_facility=data.get("syslog_facility", "local5"),
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    @property
    def tty(self) -> str:
        """Basename of the serial device, e.g. 'ttyS1'."""
        return Path(self.device).name

    @property
    def log_path(self) -> Path:
        if self.log_file:
            return Path(self.log_file)
        return Path(self.log_dir) / f"{PROGRAM}-{self.tty}.log"

    @property
    def snapshot_path(self) -> Path:
        return Path(self.snapshot_dir) / f"{PROGRAM}-{self.tty}"

    @property
    def lock_path(self) -> Path:
        return Path(self.lock_dir) / f"LCK..{self.tty}"

    def validate(self) -> None:
        """Raise ConfigError for values the collector cannot run with."""
        if self.interval < MIN_INTERVAL:
            raise ConfigError(
                f"Interval too short: {self.interval}s (minimum {MIN_INTERVAL}s)"
            )
        if self.read_timeout is not None and self.read_timeout <= 0:
            raise ConfigError(f"read_timeout must be positive, got {self.read_timeout}")
        try:
            get_syslog_facility(self.syslog_facility)
        except ValueError as e:
            raise ConfigError(str(e)) from None


def _convert(kind: type, data: dict, key: str, default):
    value = data.get(key, default)
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid value for {key}: {value!r}") from None


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_config(config_path: Optional[str] = None, validate: bool = True) -> Config:
    """Load configuration from YAML file and environment variables.

    Args:
        config_path: Path to YAML config file. If not provided, looks for
            ELTAKOMS_CONFIG, then config-{env}.yaml in the search directories.
            Without any file the defaults are used.
        validate: Check the result. Callers that apply further overrides
            pass False and call Config.validate() themselves.

    Returns:
        Config with environment overrides applied.

    Raises:
        FileNotFoundError: If an explicitly given config file is missing.
        ConfigError: If a value is out of range.
    """
    if config_path is None:
        config_path = os.environ.get("ELTAKOMS_CONFIG")

    if config_path is not None:
        config = Config.from_dict(load_yaml_config(config_path))
    else:
        default_path = get_config_path()
        if default_path.exists():
            config = Config.from_dict(load_yaml_config(default_path))
        else:
            logger.debug(f"No config file at {default_path}, using defaults")
            load_dotenv()
            config = Config()

    # Environment variable overrides
    if device := os.environ.get("ELTAKOMS_DEVICE"):
        config.device = device
    if interval := os.environ.get("ELTAKOMS_INTERVAL"):
        try:
            config.interval = int(interval)
        except ValueError:
            raise ConfigError(f"ELTAKOMS_INTERVAL is not an integer: {interval!r}") from None
    if use_syslog := os.environ.get("ELTAKOMS_SYSLOG"):
        config.use_syslog = _env_flag(use_syslog)
    if log_file := os.environ.get("ELTAKOMS_LOG_FILE"):
        config.log_file = log_file
    if log_level := os.environ.get("LOG_LEVEL"):
        config.log_level = log_level.upper()

    if validate:
        config.validate()
    return config
