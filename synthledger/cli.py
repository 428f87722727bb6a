"""Command-line interface for synthledger."""
from __future__ import annotations

import argparse
import asyncio
import sys

from . import constants
from .config import load_config
from .logging_setup import configure_logging
from .services import FeedService


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="synthledger",
        description="Overcollateralized synthetic-unit ledger tooling",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("feeds", help="Refresh price feeds once and show trusted prices")
    sub.add_parser("constants", help="Print protocol constants")

    watch_parser = sub.add_parser("watch", help="Refresh price feeds continuously")
    watch_parser.add_argument(
        "interval",
        nargs="?",
        type=int,
        default=None,
        help="Refresh interval in seconds (overrides config)",
    )

    return parser


def format_constants() -> str:
    return "\n".join(
        [
            f"PRECISION                 {constants.PRECISION}",
            f"ADDITIONAL_FEED_PRECISION {constants.ADDITIONAL_FEED_PRECISION}",
            f"LIQUIDATION_THRESHOLD     {constants.LIQUIDATION_THRESHOLD}%",
            f"LIQUIDATION_BONUS         {constants.LIQUIDATION_BONUS}%",
            f"MIN_HEALTH_FACTOR         {constants.MIN_HEALTH_FACTOR}",
            f"TIMEOUT                   {constants.TIMEOUT}s",
        ]
    )


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)

    if args.command == "constants":
        print(format_constants())
        return

    config = load_config(args.config)
    service = FeedService(config)

    if args.command == "feeds":
        for line in await service.check():
            print(line)
    elif args.command == "watch":
        await service.run_continuous(args.interval)
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    asyncio.run(_run(args))
