"""
Infrastructure layer: concrete stores, remote sessions and OS integration
"""
from .store import JsonConnectionStore, default_config_dir
from .secrets import KeyringSecretStore
from .sftp import SftpSession
from .clipboard import CommandClipboard
from .editor import edit_remote_file
from .sessions import lookup_password, open_client

__all__ = [
    "JsonConnectionStore",
    "default_config_dir",
    "KeyringSecretStore",
    "SftpSession",
    "CommandClipboard",
    "edit_remote_file",
    "lookup_password",
    "open_client",
]
