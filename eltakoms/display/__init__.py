"""Live terminal view of the collector's snapshot file."""

import argparse
from typing import List, Optional

from .terminal_monitor import TerminalMonitor


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for eltakoms-display.

    Without an argument the snapshot path is derived from the collector
    configuration, so both programs agree on the device name.
    """
    from eltakoms.collector.config.settings import load_config
    from eltakoms.shared.exceptions import ConfigError
    from eltakoms.shared.logging import setup_logging

    parser = argparse.ArgumentParser(
        prog="eltakoms-display",
        description="Show the latest Eltako Multisensor reading.",
    )
    parser.add_argument("snapshot", nargs="?",
                        help="snapshot file (default: from the collector config)")
    parser.add_argument("-r", dest="refresh", type=float, default=1.0,
                        help="refresh interval in seconds (default: 1)")
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except (ConfigError, FileNotFoundError) as e:
        parser.error(str(e))
    setup_logging(config.log_level)

    monitor = TerminalMonitor(
        args.snapshot or config.snapshot_path,
        refresh_interval=args.refresh,
    )
    try:
        monitor.run()
    except KeyboardInterrupt:
        pass
    return 0


__all__ = ["TerminalMonitor", "main"]
