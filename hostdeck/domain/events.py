"""
Input events delivered to the view router
"""
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class KeyPress:
    """
    A decoded key.

    Printable keys carry the character itself ("q", "G", "~"); special keys
    use lower-case names such as "up", "enter", "esc", "shift+tab",
    "backspace", "ctrl+u".
    """
    key: str


@dataclass(frozen=True)
class Resize:
    """Terminal size changed"""
    width: int
    height: int


Event = Union[KeyPress, Resize]

# Key groups shared by several views
UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")
QUIT_KEYS = ("q", "ctrl+c")
CANCEL_KEYS = ("esc", "ctrl+c")
