"""
Raw terminal input: puts the tty in raw mode and decodes key presses
into the names the views understand ("up", "ctrl+u", "shift+tab", ...)
"""
import os
import select
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

# Time to wait for the rest of an escape sequence before treating ESC as a key
ESCAPE_TIMEOUT = 0.05

ESCAPE_SEQUENCES = {
    "[A": "up",
    "[B": "down",
    "[C": "right",
    "[D": "left",
    "[H": "home",
    "[F": "end",
    "OA": "up",
    "OB": "down",
    "OC": "right",
    "OD": "left",
    "OH": "home",
    "OF": "end",
    "[1~": "home",
    "[7~": "home",
    "[4~": "end",
    "[8~": "end",
    "[2~": "insert",
    "[3~": "delete",
    "[5~": "pgup",
    "[6~": "pgdown",
    "[Z": "shift+tab",
}

CONTROL_KEYS = {
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x1b": "esc",
    "\x00": "ctrl+space",
}


def decode_key(data: str) -> str:
    """
    Name a raw key read from the terminal.

    Args:
        data: One complete key as read (a character or an escape sequence)

    Returns:
        Key name; printable characters are returned unchanged
    """
    if data in CONTROL_KEYS:
        return CONTROL_KEYS[data]
    if data.startswith("\x1b"):
        tail = data[1:]
        if tail in ESCAPE_SEQUENCES:
            return ESCAPE_SEQUENCES[tail]
        if len(tail) == 1:
            return f"alt+{decode_key(tail)}"
        return "unknown"
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return f"ctrl+{chr(ord(data) + 96)}"
    return data


def _sequence_complete(seq: bytes) -> bool:
    if not seq:
        return False
    if seq[:1] == b"[":
        return len(seq) > 1 and 0x40 <= seq[-1] <= 0x7E
    if seq[:1] == b"O":
        return len(seq) == 2
    return True


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class RawTerminal:
    """Context manager owning raw mode on an input tty"""

    def __init__(self, stream: TextIO = sys.stdin):
        self.fd = stream.fileno()
        self._saved = None

    def __enter__(self) -> "RawTerminal":
        self._saved = termios.tcgetattr(self.fd)
        tty.setraw(self.fd)
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.restore()

    def restore(self) -> None:
        if self._saved is not None:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._saved)

    @contextmanager
    def cooked(self) -> Iterator[None]:
        """Temporarily hand the terminal back in its original mode"""
        self.restore()
        try:
            yield
        finally:
            tty.setraw(self.fd)

    def _ready(self, timeout: Optional[float]) -> bool:
        readable, _, _ = select.select([self.fd], [], [], timeout)
        return bool(readable)

    def read_key(self, timeout: Optional[float] = None) -> Optional[str]:
        """
        Read one key.

        Returns:
            The decoded key name, or None if ``timeout`` expired
        """
        if not self._ready(timeout):
            return None

        data = os.read(self.fd, 1)
        if not data:
            return None

        if data == b"\x1b":
            seq = b""
            while not _sequence_complete(seq) and self._ready(ESCAPE_TIMEOUT):
                seq += os.read(self.fd, 1)
            return decode_key("\x1b" + seq.decode("utf-8", errors="ignore"))

        expected = _utf8_length(data[0])
        while len(data) < expected:
            chunk = os.read(self.fd, expected - len(data))
            if not chunk:
                break
            data += chunk
        return decode_key(data.decode("utf-8", errors="replace"))
