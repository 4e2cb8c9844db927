#!/usr/bin/env python3
"""
check_rados_latency

Nagios/Icinga plugin that measures Ceph pool write latency with
`rados bench` and compares the max latency against thresholds.

Usage:
    check_rados_latency -p <pool> [-W <warning ms>] [-C <critical ms>]

Exit codes:
    0 = OK
    1 = WARNING
    2 = CRITICAL
    3 = UNKNOWN
"""

import argparse
import logging
import sys
from typing import List, Optional

from rados_probe.config import get_settings
from rados_probe.models.rados import Status, Thresholds
from rados_probe.services import rados_monitor
from rados_probe.services.preflight import PreflightError, run_preflight

logger = logging.getLogger(__name__)


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with the UNKNOWN plugin code on usage errors."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        self.exit(Status.UNKNOWN, f"{self.prog}: error: {message}\n")


def _pool_name(value: str) -> str:
    if not value.strip():
        raise argparse.ArgumentTypeError("pool name must not be empty")
    return value


def setup_logging(level_name: str) -> logging.Logger:
    package_logger = logging.getLogger("rados_probe")

    level = logging.getLevelName(level_name.upper())
    package_logger.setLevel(level if isinstance(level, int) else logging.WARNING)

    # stdout carries the plugin output, so logs only ever go to stderr
    if package_logger.handlers:
        return package_logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    package_logger.addHandler(handler)
    return package_logger


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = PluginArgumentParser(
        prog="check_rados_latency",
        description="Check write latency of a Ceph pool using rados bench.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-p",
        "--pool",
        required=True,
        type=_pool_name,
        help="Name of the pool to benchmark",
    )
    parser.add_argument(
        "-W",
        "--warning",
        type=int,
        help="Warning threshold for the max latency in ms",
    )
    parser.add_argument(
        "-C",
        "--critical",
        type=int,
        help="Critical threshold for the max latency in ms",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    settings = get_settings()
    setup_logging(settings.log_level)

    try:
        run_preflight(settings)
    except PreflightError as exc:
        print(f"UNKNOWN: {exc}", file=sys.stderr)
        return int(Status.UNKNOWN)

    args = parse_args(argv)
    thresholds = Thresholds(warning=args.warning, critical=args.critical)
    if (
        thresholds.warning is not None
        and thresholds.critical is not None
        and thresholds.warning >= thresholds.critical
    ):
        logger.warning(
            "Warning threshold %sms is not below critical threshold %sms",
            thresholds.warning,
            thresholds.critical,
        )

    result = rados_monitor.get_rados_latency(args.pool, thresholds, settings)
    print(result.render())
    return int(result.status)


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
