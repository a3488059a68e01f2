"""
Core interfaces for dependency injection
"""
from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..domain.models import AppConfig, RemoteEntry


class SecretKind(str, Enum):
    """Namespace of a stored secret"""
    CONNECTION = "conn"
    CREDENTIAL = "cred"


class SecretStore(ABC):
    """Secret storage interface, keyed by (kind, record id)"""

    @abstractmethod
    def get(self, kind: SecretKind, record_id: str) -> Optional[str]:
        """Return the secret, or None when nothing is stored"""
        pass

    @abstractmethod
    def set(self, kind: SecretKind, record_id: str, secret: str) -> None:
        """Store or overwrite a secret"""
        pass

    @abstractmethod
    def delete(self, kind: SecretKind, record_id: str) -> None:
        """Delete a secret"""
        pass


class ConnectionStore(ABC):
    """Persisted connection/credential store interface"""

    @abstractmethod
    def load(self) -> "AppConfig":
        """Load the persisted configuration"""
        pass

    @abstractmethod
    def save(self, config: "AppConfig") -> None:
        """Persist the configuration, replacing what was stored"""
        pass


class RemoteSession(ABC):
    """File operations against one connected remote host"""

    @abstractmethod
    def home_directory(self) -> str:
        """Absolute path of the login directory"""
        pass

    @abstractmethod
    def normalize(self, path: str) -> str:
        """Resolve a path to an absolute remote path"""
        pass

    @abstractmethod
    def stat(self, path: str) -> "RemoteEntry":
        """Describe a single remote path"""
        pass

    @abstractmethod
    def list_dir(self, path: str) -> List["RemoteEntry"]:
        """List a remote directory"""
        pass

    @abstractmethod
    def create_file(self, path: str) -> None:
        """Create an empty remote file"""
        pass

    @abstractmethod
    def create_directory(self, path: str) -> None:
        """Create a remote directory"""
        pass

    @abstractmethod
    def remove_file(self, path: str) -> None:
        """Remove a remote file"""
        pass

    @abstractmethod
    def remove_directory(self, path: str) -> None:
        """Remove a remote directory and everything below it"""
        pass

    @abstractmethod
    def rename(self, old_path: str, new_path: str) -> None:
        """Rename or move a remote path"""
        pass

    @abstractmethod
    def download(self, remote_path: str, local_path: Path) -> None:
        """Copy a remote file to a local path"""
        pass

    @abstractmethod
    def upload(self, local_path: Path, remote_path: str) -> None:
        """Copy a local file to a remote path"""
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the session"""
        pass


class Clipboard(ABC):
    """System clipboard interface"""

    @abstractmethod
    def copy(self, text: str) -> None:
        """Place text on the clipboard"""
        pass


class PromptProvider(ABC):
    """User prompt interface"""

    @abstractmethod
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> str:
        """Prompt user for input"""
        pass

    @abstractmethod
    def info(self, message: str) -> None:
        """Display info message"""
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        """Display error message"""
        pass
