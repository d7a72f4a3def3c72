from __future__ import annotations

import argparse
import logging
import sys

from walk_sizer.sizer import Sizer
from walk_sizer.sizerconfig import SizerConfig
from walk_sizer.sizerconfig import write_new_config
from walk_sizer.sizerreport import UNITS
from walk_sizer.sizerreport import get_unit

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger("walk_sizer")


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Count files by size range, total their size and list the largest.",
    )
    parser.add_argument(
        "root",
        type=str,
        nargs="?",
        default=None,
        help="The path to walk. Default: the path of this program.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="The path to an optional configuration file.",
    )
    parser.add_argument(
        "--make-config",
        type=str,
        default=None,
        metavar="PATH",
        help="Create a default configuration file at PATH and exit.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Number of largest files to list. Default: 10.",
    )
    parser.add_argument(
        "--no-top",
        help="Do not rank the largest files.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--unit",
        type=str.upper,
        choices=list(UNITS),
        default=None,
        help="Unit for the total and ranked sizes. Default: B.",
    )
    parser.add_argument(
        "--follow-links",
        help="Descend into symlinked directories.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--debug",
        help="Enable debug logging.",
        default=False,
        action="store_true",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write debug logging to this file.",
    )
    return parser.parse_args(args)


def add_file_handler_to_logging(log_filepath: str) -> None:
    """Add a file handler to the root logger at the path provided."""
    file_handler = logging.FileHandler(log_filepath)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logging.getLogger().addHandler(file_handler)


def apply_overrides(config: SizerConfig, args: argparse.Namespace) -> None:
    """Apply command line flags on top of the loaded configuration."""
    if args.top is not None:
        config.set_option("report", "top_count", str(args.top))

    if args.no_top:
        config.set_option("report", "show_top", "false")

    if args.unit is not None:
        config.set_option("report", "unit", args.unit)

    if args.follow_links:
        config.set_option("walk", "follow_links", "true")


def main(*, cli_args: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(cli_args)

    if args.make_config:
        write_new_config(args.make_config)
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
    )

    if args.log_file:
        add_file_handler_to_logging(args.log_file)

    # Without an argument the program walks its own path, not the cwd
    root = args.root if args.root is not None else sys.argv[0]

    try:
        config = SizerConfig(args.config)
        apply_overrides(config, args)
        get_unit(config.unit)

        if config.top_count < 0:
            raise ValueError(f"Top count cannot be negative: {config.top_count}")

        Sizer(config).run_once(root)

    except (OSError, ValueError) as error:
        logger.error("walk-sizer failed: %s", error)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
