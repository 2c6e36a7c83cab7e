"""
Main entry point for sage_ini.
Usage: python -m sage_ini [PATH] [--export FILE] [--profile NAME] [--settings FILE] [-v]
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .game_data import GameDataLoadError, GameDataService, LoadReport
from .settings import AppSettings, ConfigError
from .utils.logging_config import setup_logging


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sage_ini",
        description="Load SAGE-style INI game data and report what was found.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="INI file or directory (defaults to the configured data path)",
    )
    parser.add_argument("--export", metavar="FILE", help="write resolved records as JSON")
    parser.add_argument("--profile", default="default", help="settings profile name")
    parser.add_argument(
        "--settings", metavar="FILE", help="read settings from an INI file instead of the user store"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log at DEBUG level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def log_report(logger: logging.Logger, service: GameDataService, report: LoadReport) -> None:
    """Log the load summary and a per-kind record count."""
    logger.info(report.summary())
    for kind, count in service.repository.counts().items():
        logger.info(f"  {kind}: {count}")
    if report.diagnostics:
        logger.warning(f"{len(report.diagnostics)} diagnostic(s) reported while loading")


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = build_arg_parser().parse_args(argv)
    logger = logging.getLogger(f"{__name__}.main")

    if args.settings:
        try:
            settings = AppSettings.from_file(args.settings, profile=args.profile)
        except ConfigError as e:
            print(f"sage_ini: {e}", file=sys.stderr)
            return 1
    else:
        settings = AppSettings(profile=args.profile)
    setup_logging(settings, console_level="DEBUG" if args.verbose else None)
    logger.info(f"Configuration loaded from {settings.get_settings_file_path()}")

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"  {warning}")
    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    target = Path(args.path) if args.path else settings.data_path
    if target is None:
        logger.error("No input given and no data path configured")
        return 1

    service = GameDataService(settings=settings)
    try:
        if target.is_dir():
            report = service.load_directory(
                target,
                progress=lambda index, total, source: logger.debug(
                    f"[{index}/{total}] {source}"
                ),
            )
        else:
            report = service.load_file(target)
    except GameDataLoadError as e:
        logger.error(f"Load failed: {e}")
        return 1

    log_report(logger, service, report)

    if args.export:
        service.export_json(args.export)

    return 0


if __name__ == "__main__":
    sys.exit(main())
