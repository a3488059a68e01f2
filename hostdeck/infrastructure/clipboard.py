"""
System clipboard through the platform's copy command
"""
import os
import shutil
import subprocess
import sys
from typing import List

from ..core.exceptions import ClipboardError
from ..core.interfaces import Clipboard
from ..core.logging import get_logger

logger = get_logger(__name__)


def clipboard_commands() -> List[List[str]]:
    """Candidate copy commands for this platform, in preference order"""
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


class CommandClipboard(Clipboard):
    """Pipe text into the first available clipboard command"""

    def copy(self, text: str) -> None:
        tried = []
        for command in clipboard_commands():
            if shutil.which(command[0]) is None:
                continue
            tried.append(command[0])
            try:
                proc = subprocess.run(command, input=text, text=True, check=False, timeout=5)
            except (OSError, subprocess.SubprocessError) as e:
                logger.debug("%s failed: %s", command[0], e)
                continue
            if proc.returncode == 0:
                return
        if not tried:
            raise ClipboardError("no clipboard command found")
        raise ClipboardError(f"{', '.join(tried)} failed")
