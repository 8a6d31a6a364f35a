"""Shared utilities for eltakoms services."""

from .models import Reading, SummaryRecord, parse_compact
from .config import load_yaml_config, get_config_path
from .exceptions import EltakoError, TelegramError, ConfigError, LockError
from .logging import setup_logging

__all__ = [
    "Reading",
    "SummaryRecord",
    "parse_compact",
    "load_yaml_config",
    "get_config_path",
    "EltakoError",
    "TelegramError",
    "ConfigError",
    "LockError",
    "setup_logging",
]
