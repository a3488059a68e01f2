"""
Domain models for connections, credentials and remote entries
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from ..core.constants import CONFIG_VERSION, DEFAULT_EDITOR, DEFAULT_SSH_PORT
from ..core.utils import format_size, is_valid_port


class AuthType(str, Enum):
    """How a connection authenticates"""
    PASSWORD = "password"
    CREDENTIAL = "credential"


class Icon(str, Enum):
    """Icon shown next to a connection label"""
    APPLE = "apple"
    LINUX = "linux"
    WINDOWS = "windows"
    SERVER = "server"

    @property
    def glyph(self) -> str:
        return _ICON_GLYPHS[self]

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


_ICON_GLYPHS = {
    Icon.APPLE: "\uf179",
    Icon.LINUX: "\uf17c",
    Icon.WINDOWS: "\uf17a",
    Icon.SERVER: "\uf233",
}

DEFAULT_ICON = Icon.SERVER


@dataclass(frozen=True)
class Credential:
    """A named, reusable username; its secret lives in the secret store"""
    id: str
    label: str
    username: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {"id": self.id, "label": self.label, "username": self.username}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Credential":
        """Create from dictionary"""
        return cls(
            id=data["id"],
            label=data.get("label", ""),
            username=data.get("username", ""),
        )


@dataclass(frozen=True)
class Connection:
    """A named target host plus the auth method used to reach it"""
    id: str
    label: str
    host: str
    port: int = DEFAULT_SSH_PORT
    username: str = ""
    auth_type: AuthType = AuthType.PASSWORD
    credential_id: Optional[str] = None
    icon: Icon = DEFAULT_ICON

    @property
    def uses_credential(self) -> bool:
        return self.auth_type == AuthType.CREDENTIAL

    @property
    def address(self) -> str:
        user = f"{self.username}@" if self.username else ""
        port = f":{self.port}" if self.port != DEFAULT_SSH_PORT else ""
        return f"{user}{self.host}{port}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data: Dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "icon": self.icon.value,
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "auth_type": self.auth_type.value,
        }
        if self.credential_id:
            data["credential_id"] = self.credential_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Connection":
        """Create from dictionary"""
        try:
            icon = Icon(data.get("icon") or DEFAULT_ICON.value)
        except ValueError:
            icon = DEFAULT_ICON
        return cls(
            id=data["id"],
            label=data.get("label", ""),
            host=data["host"],
            port=int(data.get("port", DEFAULT_SSH_PORT)),
            username=data.get("username", ""),
            auth_type=AuthType(data.get("auth_type", AuthType.PASSWORD.value)),
            credential_id=data.get("credential_id"),
            icon=icon,
        )


@dataclass(frozen=True)
class Settings:
    """User settings"""
    editor: str = DEFAULT_EDITOR
    show_hidden_files: bool = False
    default_port: int = DEFAULT_SSH_PORT
    downloads_dir: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        data: Dict[str, Any] = {
            "editor": self.editor,
            "show_hidden_files": self.show_hidden_files,
            "default_port": self.default_port,
        }
        if self.downloads_dir:
            data["downloads_dir"] = self.downloads_dir
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """
        Create from dictionary, ignoring unknown keys.

        Raises:
            ValueError: If default_port is not a usable port number
        """
        default_port = int(data.get("default_port", DEFAULT_SSH_PORT))
        if not is_valid_port(default_port):
            raise ValueError(f"default_port out of range: {default_port}")
        return cls(
            editor=data.get("editor") or DEFAULT_EDITOR,
            show_hidden_files=bool(data.get("show_hidden_files", False)),
            default_port=default_port,
            downloads_dir=data.get("downloads_dir"),
        )


@dataclass(frozen=True)
class AppConfig:
    """
    Everything the connection store persists.

    Mutators return a new instance; callers commit it only once the
    store has accepted it.
    """
    settings: Settings = field(default_factory=Settings)
    connections: List[Connection] = field(default_factory=list)
    credentials: List[Credential] = field(default_factory=list)
    version: int = CONFIG_VERSION

    # --------------------
    # Lookups
    # --------------------
    def get_connection(self, connection_id: str) -> Optional[Connection]:
        return next((c for c in self.connections if c.id == connection_id), None)

    def get_credential(self, credential_id: Optional[str]) -> Optional[Credential]:
        if not credential_id:
            return None
        return next((c for c in self.credentials if c.id == credential_id), None)

    def connections_using(self, credential_id: str) -> List[Connection]:
        return [c for c in self.connections if c.credential_id == credential_id and c.uses_credential]

    # --------------------
    # Mutators
    # --------------------
    def with_connection(self, connection: Connection) -> "AppConfig":
        """Add the connection, or replace the one with the same id"""
        return replace(self, connections=_upsert(self.connections, connection))

    def without_connection(self, connection_id: str) -> "AppConfig":
        return replace(self, connections=[c for c in self.connections if c.id != connection_id])

    def with_credential(self, credential: Credential) -> "AppConfig":
        """Add the credential, or replace the one with the same id"""
        credentials = _upsert(self.credentials, credential)
        # usernames of dependent connections follow the credential
        connections = [
            replace(c, username=credential.username)
            if c.uses_credential and c.credential_id == credential.id else c
            for c in self.connections
        ]
        return replace(self, credentials=credentials, connections=connections)

    def without_credential(self, credential_id: str) -> "AppConfig":
        return replace(self, credentials=[c for c in self.credentials if c.id != credential_id])

    # --------------------
    # Serialization
    # --------------------
    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "version": self.version,
            "settings": self.settings.to_dict(),
            "connections": [c.to_dict() for c in self.connections],
            "credentials": [c.to_dict() for c in self.credentials],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create from dictionary"""
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            settings=Settings.from_dict(data.get("settings") or {}),
            connections=[Connection.from_dict(c) for c in data.get("connections") or []],
            credentials=[Credential.from_dict(c) for c in data.get("credentials") or []],
        )


def _upsert(items: list, item) -> list:
    result = list(items)
    for index, existing in enumerate(result):
        if existing.id == item.id:
            result[index] = item
            return result
    result.append(item)
    return result


@dataclass(frozen=True)
class RemoteEntry:
    """One entry of a remote directory listing"""
    name: str
    size: int
    permissions: str
    is_dir: bool
    modified: datetime

    @property
    def display_size(self) -> str:
        if self.is_dir:
            return "-"
        return format_size(self.size)

    @property
    def display_modified(self) -> str:
        return self.modified.strftime("%Y-%m-%d %H:%M")
