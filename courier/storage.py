import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .models import RequestDraft

logger = logging.getLogger(__name__)

APP_DIR_NAME = "http_courier"
CONFIG_FILE_NAME = "state.json"
DRAFT_SECTION = "request"


def _config_dir() -> Path:
    override = os.environ.get("HTTP_COURIER_CONFIG_DIR")
    if override:
        return Path(override)
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def _config_path() -> Path:
    return _config_dir() / CONFIG_FILE_NAME


def load_draft(default: RequestDraft) -> RequestDraft:
    """Load the last saved request, merging onto defaults."""
    path = _config_path()
    if not path.exists():
        return default
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("Ignoring unreadable state file %s: %s", path, exc)
        return default
    payload = data.get(DRAFT_SECTION) if isinstance(data, dict) else None
    if not isinstance(payload, dict):
        return default
    merged = asdict(default)
    merged.update({k: v for k, v in payload.items() if k in merged})
    merged["headers"] = _pairs(merged["headers"])
    merged["params"] = _pairs(merged["params"])
    return RequestDraft(**merged)


def save_draft(draft: RequestDraft) -> None:
    """Persist the request fields; other sections of the file are preserved."""
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    existing: dict[str, Any] = {}
    if path.exists():
        try:
            existing_data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(existing_data, dict):
                existing = existing_data
        except ValueError:
            existing = {}
    existing[DRAFT_SECTION] = asdict(draft)
    path.write_text(json.dumps(existing, indent=2), encoding="utf-8")


def _pairs(raw: Any) -> list[tuple[str, str]]:
    if not isinstance(raw, list):
        return []
    return [(str(item[0]), str(item[1])) for item in raw if isinstance(item, (list, tuple)) and len(item) == 2]
