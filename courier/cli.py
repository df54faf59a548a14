from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from .app import CourierApp
from .config import DEFAULT_TIMEOUT
from .logging_setup import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Terminal HTTP request composer.")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging to http_courier.log in the current directory.",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Do not verify TLS certificates.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT:g}).",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Path of the environments database.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    log_path = configure_logging(args.debug)
    if args.debug and log_path is None:
        logger.warning("Debug logging requested but log file could not be created.")
    CourierApp(db_path=args.db, verify_tls=not args.insecure, timeout=args.timeout).run()
