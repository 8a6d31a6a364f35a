"""Multisensor collector service."""

import argparse
import logging
import sys
from typing import List, Optional

import serial

from .collector import TelegramCollector
from .service import CollectorService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="eltakoms",
        description="Decode and log the Eltako Multisensor RS485 datastream.",
    )
    parser.add_argument("-f", dest="device", metavar="DEVICE",
                        help="serial device (default: /dev/ttyS1)")
    parser.add_argument("-l", dest="log_file", metavar="LOGFILE",
                        help="append summaries to LOGFILE instead of syslog")
    parser.add_argument("-i", dest="interval", metavar="INTERVAL", type=int,
                        help="logging interval in seconds, at least 10")
    parser.add_argument("-s", dest="use_syslog", action="store_true",
                        help="use syslog instead of a logfile")
    parser.add_argument("-c", dest="config", metavar="CONFIG",
                        help="YAML configuration file")
    parser.add_argument("-V", action="version", version=f"%(prog)s {_version()}")
    return parser


def _version() -> str:
    from eltakoms import __version__
    return __version__


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the collector service."""
    from eltakoms.shared.exceptions import ConfigError, LockError
    from eltakoms.shared.logging import setup_logging
    from .config.settings import load_config

    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config, validate=False)
        if args.device:
            config.device = args.device
        if args.interval is not None:
            config.interval = args.interval
        if args.use_syslog:
            config.use_syslog = True
        if args.log_file:
            # an explicit logfile wins over syslog
            config.log_file = args.log_file
            config.use_syslog = False
        config.validate()
    except (ConfigError, FileNotFoundError) as e:
        print(f"{e}", file=sys.stderr)
        return 1

    try:
        setup_logging(
            config.log_level,
            syslog_address=config.syslog_address if config.use_syslog else None,
            syslog_facility=config.syslog_facility,
        )
    except OSError as e:
        print(f"cannot connect to syslog at {config.syslog_address}: {e}", file=sys.stderr)
        return 1

    try:
        service = CollectorService(config)
    except OSError as e:
        target = "syslog" if config.use_syslog else config.log_path
        logger.error(f"cannot open {target} for logging: {e}")
        return 1

    try:
        service.run()
    except LockError as e:
        logger.error(str(e))
        return 2
    except serial.SerialException as e:
        logger.error(f"cannot open {config.device}: {e}")
        return 1
    except OSError as e:
        # lockfile errors name the lock path
        logger.error(str(e))
        return 1
    return 0


__all__ = ["TelegramCollector", "CollectorService", "main"]
