"""In-memory stand-ins for the external capabilities."""
import posixpath
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from hostdeck.core.exceptions import (
    ClipboardError,
    ConfigError,
    RemoteOperationError,
    SecretNotFoundError,
    SecretStoreError,
)
from hostdeck.core.interfaces import (
    Clipboard,
    ConnectionStore,
    RemoteSession,
    SecretKind,
    SecretStore,
)
from hostdeck.domain.models import AppConfig, RemoteEntry

MTIME = datetime(2024, 1, 2, 3, 4)


class FakeRemoteSession(RemoteSession):
    def __init__(self, home: str = "/home/u"):
        self.home = home
        self.dirs = {"/"}
        self.files: Dict[str, bytes] = {}
        self.failures: Dict[str, RemoteOperationError] = {}
        self.calls: List[tuple] = []
        self.closed = False
        self.add_dir(home)

    # helpers
    def add_dir(self, path: str) -> None:
        while path not in self.dirs:
            self.dirs.add(path)
            path = posixpath.dirname(path)

    def add_file(self, path: str, content: bytes = b"") -> None:
        self.add_dir(posixpath.dirname(path))
        self.files[path] = content

    def fail(self, method: str, message: str = "permission denied") -> None:
        self.failures[method] = RemoteOperationError(message)

    def _record(self, method: str, *args) -> None:
        self.calls.append((method,) + args)
        if method in self.failures:
            raise self.failures[method]

    def _exists(self, path: str) -> bool:
        return path in self.dirs or path in self.files

    def _entry(self, path: str) -> RemoteEntry:
        name = posixpath.basename(path) or "/"
        if path in self.dirs:
            return RemoteEntry(name, 4096, "drwxr-xr-x", True, MTIME)
        return RemoteEntry(name, len(self.files[path]), "-rw-r--r--", False, MTIME)

    # RemoteSession
    def home_directory(self) -> str:
        self._record("home_directory")
        return self.home

    def normalize(self, path: str) -> str:
        self._record("normalize", path)
        return posixpath.normpath(path)

    def stat(self, path: str) -> RemoteEntry:
        self._record("stat", path)
        if not self._exists(path):
            raise RemoteOperationError("failed to stat: file or directory not found")
        return self._entry(path)

    def list_dir(self, path: str) -> List[RemoteEntry]:
        self._record("list_dir", path)
        if path not in self.dirs:
            raise RemoteOperationError("failed to read directory: file or directory not found")
        children = [p for p in self.dirs | set(self.files) if p != "/" and posixpath.dirname(p) == path]
        return [self._entry(p) for p in children]

    def create_file(self, path: str) -> None:
        self._record("create_file", path)
        if self._exists(path):
            raise RemoteOperationError("failed to create file: file already exists")
        self.files[path] = b""

    def create_directory(self, path: str) -> None:
        self._record("create_directory", path)
        if self._exists(path):
            raise RemoteOperationError("failed to create directory: file already exists")
        self.dirs.add(path)

    def remove_file(self, path: str) -> None:
        self._record("remove_file", path)
        if path not in self.files:
            raise RemoteOperationError("failed to delete: file or directory not found")
        del self.files[path]

    def remove_directory(self, path: str) -> None:
        self._record("remove_directory", path)
        prefix = path.rstrip("/") + "/"
        self.dirs = {d for d in self.dirs if d != path and not d.startswith(prefix)}
        self.files = {f: c for f, c in self.files.items() if not f.startswith(prefix)}

    def rename(self, old_path: str, new_path: str) -> None:
        self._record("rename", old_path, new_path)
        if old_path in self.files:
            self.files[new_path] = self.files.pop(old_path)
        elif old_path in self.dirs:
            self.dirs.discard(old_path)
            self.dirs.add(new_path)
        else:
            raise RemoteOperationError("failed to rename: file or directory not found")

    def download(self, remote_path: str, local_path: Path) -> None:
        self._record("download", remote_path, local_path)
        Path(local_path).write_bytes(self.files[remote_path])

    def upload(self, local_path: Path, remote_path: str) -> None:
        self._record("upload", local_path, remote_path)
        self.files[remote_path] = Path(local_path).read_bytes()

    def close(self) -> None:
        self.closed = True


class FakeSecretStore(SecretStore):
    def __init__(self, journal: Optional[list] = None):
        self.secrets: Dict[tuple, str] = {}
        self.journal = journal if journal is not None else []
        self.fail_set = False
        self.fail_get = False
        self.fail_delete = False

    def get(self, kind: SecretKind, record_id: str) -> Optional[str]:
        if self.fail_get:
            raise SecretStoreError("keyring locked")
        return self.secrets.get((kind, record_id))

    def set(self, kind: SecretKind, record_id: str, secret: str) -> None:
        self.journal.append(("secret.set", kind, record_id))
        if self.fail_set:
            raise SecretStoreError("keyring locked")
        self.secrets[(kind, record_id)] = secret

    def delete(self, kind: SecretKind, record_id: str) -> None:
        self.journal.append(("secret.delete", kind, record_id))
        if self.fail_delete:
            raise SecretStoreError("keyring locked")
        if (kind, record_id) not in self.secrets:
            raise SecretNotFoundError(record_id)
        del self.secrets[(kind, record_id)]


class FakeConnectionStore(ConnectionStore):
    def __init__(self, config: Optional[AppConfig] = None, journal: Optional[list] = None):
        self.config = config or AppConfig()
        self.journal = journal if journal is not None else []
        self.saves: List[AppConfig] = []
        self.fail_save = False

    def load(self) -> AppConfig:
        return self.config

    def save(self, config: AppConfig) -> None:
        self.journal.append(("store.save", len(config.connections), len(config.credentials)))
        if self.fail_save:
            raise ConfigError("disk is read-only")
        self.saves.append(config)
        self.config = config


class FakeClipboard(Clipboard):
    def __init__(self, fail: bool = False):
        self.copied: List[str] = []
        self.fail = fail

    def copy(self, text: str) -> None:
        if self.fail:
            raise ClipboardError("no clipboard command found")
        self.copied.append(text)
