"""
Logging on top of rich

Two sinks: a RichHandler on stderr for the plain subcommands, and a plain
file for the interactive UI, which owns the terminal while it runs.
"""
import sys
import logging
from typing import Optional
from pathlib import Path

from rich.logging import RichHandler
from rich.console import Console
from rich.traceback import install as install_traceback

FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Third-party loggers that are noisy below WARNING
QUIET_LOGGERS = ("paramiko", "keyring")

_stdout_console = Console(file=sys.stdout)
_stderr_console = Console(file=sys.stderr)

install_traceback(console=_stderr_console, show_locals=False, width=120)


def _rich_handler(level: int, rich_tracebacks: bool) -> logging.Handler:
    handler = RichHandler(
        console=_stderr_console,
        show_time=True,
        show_path=level <= logging.DEBUG,
        rich_tracebacks=rich_tracebacks,
        markup=False,
    )
    handler.setLevel(level)
    return handler


def _file_handler(level: int, log_file: Path) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    stream: bool = True,
    rich_tracebacks: bool = True,
) -> None:
    """
    Configure the root logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Also append records to this file
        stream: Attach the stderr RichHandler; pass False while the UI runs
        rich_tracebacks: Render exceptions in log records with rich
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    if stream:
        root_logger.addHandler(_rich_handler(log_level, rich_tracebacks))
    if log_file:
        root_logger.addHandler(_file_handler(log_file=log_file, level=log_level))
    if not root_logger.handlers:
        # keep records away from logging.lastResort, which writes to stderr
        root_logger.addHandler(logging.NullHandler())

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    """Module logger; call with ``__name__``"""
    return logging.getLogger(name)


def get_stdout_console() -> Console:
    """Console for user-facing output"""
    return _stdout_console
