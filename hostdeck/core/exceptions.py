"""
Exception hierarchy; every error hostdeck raises derives from HostdeckError
"""


class HostdeckError(Exception):
    """Base exception class"""
    pass


class ConfigError(HostdeckError):
    """Configuration load/save error"""
    pass


class ConnectionError(HostdeckError):
    """Connection or authentication error"""
    pass


class ValidationError(HostdeckError):
    """Form validation error"""
    pass


class RemoteOperationError(HostdeckError):
    """Remote file operation error"""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path


class SecretStoreError(HostdeckError):
    """Secret store error"""
    pass


class SecretNotFoundError(SecretStoreError):
    """Secret does not exist"""
    pass


class ClipboardError(HostdeckError):
    """Clipboard error"""
    pass


class EditorError(HostdeckError):
    """External editor error"""
    pass
