"""
Single-line editable text buffer
"""
from typing import Optional


class TextInput:
    """Text with a cursor, edited one key at a time"""

    def __init__(self, value: str = "", placeholder: str = "", masked: bool = False,
                 char_limit: Optional[int] = None):
        self.value = value
        self.cursor = len(value)
        self.placeholder = placeholder
        self.masked = masked
        self.char_limit = char_limit

    def set_value(self, value: str) -> None:
        self.value = value
        self.cursor = len(value)

    @property
    def display_value(self) -> str:
        return "•" * len(self.value) if self.masked else self.value

    def handle_key(self, key: str) -> bool:
        """
        Apply an editing key.

        Returns:
            True if the key was consumed
        """
        if key in ("left", "ctrl+b"):
            self.cursor = max(0, self.cursor - 1)
        elif key in ("right", "ctrl+f"):
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in ("home", "ctrl+a"):
            self.cursor = 0
        elif key in ("end", "ctrl+e"):
            self.cursor = len(self.value)
        elif key == "backspace":
            if self.cursor > 0:
                self.value = self.value[:self.cursor - 1] + self.value[self.cursor:]
                self.cursor -= 1
        elif key == "delete":
            self.value = self.value[:self.cursor] + self.value[self.cursor + 1:]
        elif key == "ctrl+k":
            self.value = self.value[:self.cursor]
        elif key == "ctrl+u":
            self.value = self.value[self.cursor:]
            self.cursor = 0
        elif key == "ctrl+w":
            head = self.value[:self.cursor].rstrip()
            cut = head.rfind(" ") + 1 if " " in head else 0
            self.value = self.value[:cut] + self.value[self.cursor:]
            self.cursor = cut
        elif len(key) == 1 and key.isprintable():
            if self.char_limit is not None and len(self.value) >= self.char_limit:
                return True
            self.value = self.value[:self.cursor] + key + self.value[self.cursor:]
            self.cursor += 1
        else:
            return False
        return True
