"""
hostdeck - terminal manager for SSH and SFTP connections

Keeps a list of named hosts and shared credentials, and opens either an
interactive remote shell or a remote file browser on any of them:
- Connection and credential management (secrets kept in the OS keyring)
- Interactive SSH sessions with terminal resize forwarding
- SFTP browsing: create, rename, delete, download, edit in a local editor
"""

__version__ = "0.1.0"

from .domain.models import (
    AppConfig,
    AuthType,
    Connection,
    Credential,
    RemoteEntry,
    Settings,
)
from .domain.router import Router

__all__ = [
    "__version__",
    "AppConfig",
    "AuthType",
    "Connection",
    "Credential",
    "RemoteEntry",
    "Settings",
    "Router",
]
