"""
Generic yes/no confirmation dialog
"""
from enum import Enum


class ModalResult(Enum):
    OPEN = "open"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


YES = 0
NO = 1


class ConfirmationModal:
    """
    Binary choice with "No" selected initially.

    The modal knows nothing about what it confirms; its owner keeps the
    pending action and runs it only when ``is_confirmed``.
    """

    def __init__(self, title: str, message: str):
        self.title = title
        self.message = message
        self.selected = NO
        self.result = ModalResult.OPEN

    @property
    def is_open(self) -> bool:
        return self.result == ModalResult.OPEN

    @property
    def is_confirmed(self) -> bool:
        return self.result == ModalResult.CONFIRMED

    @property
    def is_cancelled(self) -> bool:
        return self.result == ModalResult.CANCELLED

    def update(self, key: str) -> "ConfirmationModal":
        if not self.is_open:
            return self

        if key in ("left", "h"):
            self.selected = YES
        elif key in ("right", "l"):
            self.selected = NO
        elif key in ("tab", "shift+tab"):
            self.selected = NO if self.selected == YES else YES
        elif key == "enter":
            self.result = ModalResult.CONFIRMED if self.selected == YES else ModalResult.CANCELLED
        elif key in ("esc", "ctrl+c", "q"):
            self.result = ModalResult.CANCELLED
        return self
