"""Summary log rollup into rrdtool update data."""

import argparse
import logging
from typing import List, Optional

from .rollup import RollupStats, format_rrd_update, parse_summary_line, rollup


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the rollup tool.

    Prints one ``epoch:temp:wind:rain:sunE:sunS:sunW:dawn:obsc`` line per
    window, ready for ``xargs -n1 rrdtool update weather.rrd``.
    """
    from eltakoms.aggregator.window import MIN_INTERVAL
    from eltakoms.shared.logging import setup_logging

    parser = argparse.ArgumentParser(
        prog="eltakoms-rollup",
        description="Re-aggregate an eltakoms summary log into coarser windows.",
    )
    parser.add_argument("logfile", nargs="?", default="eltako.log",
                        help="summary log to read (default: eltako.log)")
    parser.add_argument("-i", "--interval", type=int, default=300,
                        help="window length in seconds (default: 300)")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger("eltakoms.rollup")

    if args.interval < MIN_INTERVAL:
        parser.error(f"interval must be at least {MIN_INTERVAL} seconds")

    stats = RollupStats()
    try:
        with open(args.logfile, "r") as f:
            for update in rollup(f, interval=args.interval, stats=stats):
                print(update)
    except OSError as e:
        logger.error(f"Cannot read {args.logfile}: {e}")
        return 1

    logger.info(
        f"Read {stats.lines} lines, skipped {stats.skipped}, wrote {stats.records} updates"
    )
    return 0


__all__ = ["RollupStats", "format_rrd_update", "parse_summary_line", "rollup", "main"]
