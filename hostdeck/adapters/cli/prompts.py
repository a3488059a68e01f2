"""
Line-mode prompts and notices, used while the full-screen UI is suspended
and by the plain subcommands
"""
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt
from rich.text import Text

from ...core.interfaces import PromptProvider
from ...core.logging import get_stdout_console


class RichPromptProvider(PromptProvider):
    """
    PromptProvider on a rich console.

    Notices are built as ``Text`` so remote paths and hostnames that
    contain brackets are printed literally instead of parsed as markup.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or get_stdout_console()

    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> str:
        options = {"console": self.console, "password": password}
        if default is not None:
            options["default"] = default
        return Prompt.ask(Text(message), **options)

    def _notice(self, symbol: str, style: str, message: str) -> None:
        line = Text(f"{symbol} ", style=style)
        line.append(message)
        self.console.print(line)

    def info(self, message: str) -> None:
        self._notice("ℹ", "cyan", message)

    def error(self, message: str) -> None:
        self._notice("✗", "bold red", message)
