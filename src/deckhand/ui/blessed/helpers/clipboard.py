"""System clipboard access for the open-path prompt."""

from typing import Optional

import pyperclip
from loguru import logger


def read_clipboard() -> Optional[str]:
    """Return the clipboard text, or None when there is none or no clipboard."""
    try:
        text = pyperclip.paste()
    except pyperclip.PyperclipException as e:
        logger.warning(f"Clipboard unavailable: {e}")
        return None
    return text.strip("\r\n") or None
