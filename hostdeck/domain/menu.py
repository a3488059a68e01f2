"""
SSH / SFTP mode selection menu
"""
from enum import Enum
from typing import Optional

from .events import DOWN_KEYS, UP_KEYS
from .selection import move_index


class SessionMode(Enum):
    SSH = "ssh"
    SFTP = "sftp"

    @property
    def description(self) -> str:
        if self is SessionMode.SSH:
            return "Interactive terminal session"
        return "Browse and manage remote files"


class ModeSelectionMenu:
    """Pick how to open a connection"""

    OPTIONS = (SessionMode.SSH, SessionMode.SFTP)

    def __init__(self):
        self.selected = 0
        self.chosen: Optional[SessionMode] = None
        self.cancelled = False

    @property
    def is_done(self) -> bool:
        return self.chosen is not None or self.cancelled

    def update(self, key: str) -> "ModeSelectionMenu":
        if self.is_done:
            return self

        if key in UP_KEYS:
            self.selected = move_index(self.selected, -1, len(self.OPTIONS))
        elif key in DOWN_KEYS:
            self.selected = move_index(self.selected, 1, len(self.OPTIONS))
        elif key in ("enter", "l", "right"):
            self.chosen = self.OPTIONS[self.selected]
        elif key == "s":
            self.chosen = SessionMode.SSH
        elif key == "f":
            self.chosen = SessionMode.SFTP
        elif key in ("esc", "h", "left"):
            self.cancelled = True
        return self
