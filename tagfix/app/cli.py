#!/usr/bin/env python3
"""
Command line entry point.

Usage:
    tagfix --file <mp3 file or directory> [--dry-run] [--no-backup] [-v]
"""

import argparse
import sys
from typing import List, Optional

from .exceptions import ConfigurationError
from .handler import FileHandler
from .utils.config import RunConfig, load_config
from .utils.logger import get_logger, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tagfix",
        description="Convert Windows-1252 mojibake in MP3 tags back to Cyrillic.",
    )
    parser.add_argument("--file", required=True, metavar="FILE",
                        help="single file or root directory for processing")
    parser.add_argument("--dry-run", action="store_true", help="do not actually change files")
    parser.add_argument("--no-backup", action="store_true",
                        help="do not make a copy of a file before processing")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every changed field")
    parser.add_argument("--config", metavar="PATH", default=None,
                        help="TOML configuration file (default: $TAGFIX_CONFIG or tagfix.toml)")
    return parser


def run_config_from_args(args: argparse.Namespace) -> RunConfig:
    return RunConfig(
        file=args.file,
        dry_run=args.dry_run,
        no_backup=args.no_backup,
        verbose=args.verbose,
    )


def build_run_config(argv: List[str]) -> RunConfig:
    return run_config_from_args(build_parser().parse_args(argv))


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        # logging is not configured yet; the record falls through to stderr
        get_logger("cli").error(f"Unable to load configuration: {e}")
        return 1
    logger = setup_logging(verbose=args.verbose)

    try:
        run_config = run_config_from_args(args)
    except ConfigurationError as e:
        logger.error(f"Unable to parse program options: {e}")
        return 1

    logger.debug(f"do not actually change files: {run_config.dry_run}")
    logger.debug(f"do not make a copy of a file before processing: {run_config.no_backup}")
    logger.debug(f"single file or root directory for processing: {run_config.file}")

    report = FileHandler(run_config, config.processing).handle()
    logger.info(
        f"Done: {report.changed} changed, {report.skipped} skipped, {report.failed} failed"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
