"""
Core infrastructure layer
"""
from .client import RemoteClient, ClientConfig
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console
from .interfaces import (
    SecretKind,
    SecretStore,
    ConnectionStore,
    RemoteSession,
    Clipboard,
    PromptProvider,
)
from .utils import (
    format_size,
    join_remote,
    parent_remote,
    unique_local_path,
    resolve_editor,
    split_command,
)

__all__ = [
    "RemoteClient",
    "ClientConfig",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "SecretKind",
    "SecretStore",
    "ConnectionStore",
    "RemoteSession",
    "Clipboard",
    "PromptProvider",
    "format_size",
    "join_remote",
    "parent_remote",
    "unique_local_path",
    "resolve_editor",
    "split_command",
]
