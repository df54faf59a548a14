import inspect
import logging
import shutil
import subprocess
from typing import Any

logger = logging.getLogger(__name__)


async def copy_text(app: Any, text: str) -> bool:
    """Put ``text`` on the clipboard through Textual, falling back to ``pbcopy``."""
    if not text.strip():
        return False
    try:
        result = app.copy_to_clipboard(text)
        if inspect.isawaitable(result):
            await result
    except Exception as exc:  # pragma: no cover - runtime-only clipboard failure
        logger.debug("Textual clipboard copy failed: %s", exc)
    else:
        return True

    pbcopy_path = shutil.which("pbcopy")
    if not pbcopy_path:
        return False
    try:
        subprocess.run(  # noqa: S603 - local clipboard binary with trusted input
            [pbcopy_path],
            input=text,
            text=True,
            check=True,
            timeout=2,
        )
    except (subprocess.SubprocessError, OSError) as exc:  # pragma: no cover - runtime-only clipboard failure
        logger.debug("pbcopy execution failed: %s", exc)
        return False
    return True
