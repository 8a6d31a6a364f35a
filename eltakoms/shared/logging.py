"""Diagnostic logging for the eltakoms programs.

Diagnostics go to stderr, and to syslog as well when the collector runs
with ``-s``. Window summaries use their own sinks in eltakoms.emitter.
"""

import logging
import logging.handlers
from typing import Iterable, Optional

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
SYSLOG_FORMAT = "%(name)s[%(process)d]: %(message)s"

# pyserial logs every port reconfiguration at DEBUG
NOISY_LOGGERS = ("serial",)


def get_syslog_facility(name: str) -> int:
    """Map a facility name such as 'local5' to its SysLogHandler code.

    Raises:
        ValueError: If the name is not a known syslog facility.
    """
    try:
        return logging.handlers.SysLogHandler.facility_names[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown syslog facility: {name}") from None


def make_syslog_handler(address: str, facility: str) -> logging.Handler:
    """SysLogHandler on a unix socket path such as /dev/log.

    Raises:
        OSError: If the socket cannot be reached.
    """
    handler = logging.handlers.SysLogHandler(
        address=address,
        facility=get_syslog_facility(facility),
    )
    handler.setFormatter(logging.Formatter(SYSLOG_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    syslog_address: Optional[str] = None,
    syslog_facility: str = "local5",
    quiet_loggers: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger.

    Args:
        level: Log level name; unknown names fall back to INFO.
        syslog_address: Also log to the syslog socket at this path.
        syslog_facility: Facility name used with syslog_address.
        quiet_loggers: Loggers held at WARNING whatever the level.
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=CONSOLE_FORMAT,
    )

    if syslog_address:
        logging.getLogger().addHandler(
            make_syslog_handler(syslog_address, syslog_facility)
        )

    for name in quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)
