from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

DEFAULT_LOG_FILENAME = "http_courier.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Libraries that log every connection or statement at DEBUG.
CHATTY_LOGGERS = ("httpcore", "sqlalchemy.engine", "asyncio")


def _resolve_log_path(log_path: Path | None = None) -> Path:
    if log_path is None:
        return Path.cwd() / DEFAULT_LOG_FILENAME
    return Path(log_path).expanduser().resolve()


def _handler_uses_path(handler: logging.Handler, path: Path) -> bool:
    file_name = getattr(handler, "baseFilename", None)
    if not file_name:
        return False
    try:
        return Path(file_name).resolve() == path
    except OSError:
        return False


def _quiet(names: Iterable[str]) -> None:
    for name in names:
        logging.getLogger(name).setLevel(logging.WARNING)


def configure_logging(
    debug_enabled: bool,
    log_path: Path | None = None,
    *,
    quiet: Iterable[str] = CHATTY_LOGGERS,
) -> Path | None:
    """Write DEBUG records from the request pipeline to a log file.

    The terminal belongs to the UI, so nothing is logged unless debugging is
    requested. Returns the log file path, or None when logging stays off or the
    file cannot be opened. Calling it twice with the same path adds no second
    handler.
    """
    if not debug_enabled:
        return None

    path = _resolve_log_path(log_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if any(_handler_uses_path(existing, path) for existing in root.handlers):
        handler.close()
    else:
        root.addHandler(handler)
    _quiet(quiet)

    logging.getLogger(__name__).debug("Debug logging enabled. Writing to %s", path)
    return path
