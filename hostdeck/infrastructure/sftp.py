"""
SFTP-backed remote session
"""
import errno
import posixpath
import stat as stat_mod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import paramiko

from ..core.client import RemoteClient
from ..core.exceptions import RemoteOperationError
from ..core.interfaces import RemoteSession
from ..core.logging import get_logger
from ..core.utils import join_remote
from ..domain.models import RemoteEntry

logger = get_logger(__name__)


# ============================================================
# Error Translation
# ============================================================

_ERRNO_MESSAGES = {
    errno.ENOENT: "file or directory not found",
    errno.EACCES: "permission denied",
    errno.EPERM: "permission denied",
    errno.ENOSPC: "no space left on server",
    errno.EEXIST: "file already exists",
    errno.ENOTDIR: "not a directory",
    errno.ENOTEMPTY: "directory not empty",
}

GENERIC_SERVER_ERROR = "server error (disk full, permissions, or other server issue)"


def translate_error(error: Exception, context: str, path: str = "") -> RemoteOperationError:
    """
    Map an SFTP failure to a user-facing ``RemoteOperationError``.

    Args:
        error: Exception raised by paramiko
        context: What was being attempted, e.g. "failed to create directory"
        path: Remote path involved
    """
    reason = None
    if isinstance(error, OSError) and error.errno in _ERRNO_MESSAGES:
        reason = _ERRNO_MESSAGES[error.errno]
    else:
        text = str(error).lower()
        if "no space" in text or "quota" in text:
            reason = _ERRNO_MESSAGES[errno.ENOSPC]
        elif "permission" in text:
            reason = _ERRNO_MESSAGES[errno.EACCES]
        elif "no such file" in text:
            reason = _ERRNO_MESSAGES[errno.ENOENT]
        elif isinstance(error, paramiko.SSHException):
            reason = f"connection error: {error}"
        else:
            reason = GENERIC_SERVER_ERROR
    return RemoteOperationError(f"{context}: {reason}", path=path)


def entry_from_attributes(
    name: str, attrs: paramiko.SFTPAttributes, is_dir: Optional[bool] = None
) -> RemoteEntry:
    mode = attrs.st_mode or 0
    if is_dir is None:
        is_dir = stat_mod.S_ISDIR(mode)
    return RemoteEntry(
        name=name,
        size=attrs.st_size or 0,
        permissions=stat_mod.filemode(mode),
        is_dir=is_dir,
        modified=datetime.fromtimestamp(attrs.st_mtime or 0),
    )


class SftpSession(RemoteSession):
    """RemoteSession over a connected ``RemoteClient``"""

    def __init__(self, client: RemoteClient):
        self.client = client
        self.sftp = client.open_sftp()

    # --------------------
    # Queries
    # --------------------
    def home_directory(self) -> str:
        return self.normalize(".")

    def normalize(self, path: str) -> str:
        try:
            return self.sftp.normalize(path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to resolve path", path) from e

    def stat(self, path: str) -> RemoteEntry:
        try:
            attrs = self.sftp.stat(path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to stat", path) from e
        return entry_from_attributes(posixpath.basename(path.rstrip("/")) or "/", attrs)

    def list_dir(self, path: str) -> List[RemoteEntry]:
        try:
            listing = self.sftp.listdir_attr(path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to read directory", path) from e

        entries = []
        for attrs in listing:
            is_dir = None
            if stat_mod.S_ISLNK(attrs.st_mode or 0):
                is_dir = self._link_is_dir(join_remote(path, attrs.filename))
            entries.append(entry_from_attributes(attrs.filename, attrs, is_dir))
        return entries

    def _link_is_dir(self, path: str) -> bool:
        try:
            return stat_mod.S_ISDIR(self.sftp.stat(path).st_mode or 0)
        except (OSError, paramiko.SSHException):
            # dangling link
            return False

    # --------------------
    # Mutations
    # --------------------
    def create_file(self, path: str) -> None:
        try:
            with self.sftp.open(path, "wx"):
                pass
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to create file", path) from e
        logger.info("Created remote file %s", path)

    def create_directory(self, path: str) -> None:
        try:
            self.sftp.mkdir(path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to create directory", path) from e
        logger.info("Created remote directory %s", path)

    def remove_file(self, path: str) -> None:
        try:
            self.sftp.remove(path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to delete", path) from e
        logger.info("Deleted remote file %s", path)

    def remove_directory(self, path: str) -> None:
        try:
            self._remove_tree(path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to delete", path) from e
        logger.info("Deleted remote directory %s", path)

    def _remove_tree(self, path: str) -> None:
        for attrs in self.sftp.listdir_attr(path):
            child = join_remote(path, attrs.filename)
            if stat_mod.S_ISDIR(attrs.st_mode or 0):
                self._remove_tree(child)
            else:
                self.sftp.remove(child)
        self.sftp.rmdir(path)

    def rename(self, old_path: str, new_path: str) -> None:
        try:
            self.sftp.rename(old_path, new_path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to rename", old_path) from e
        logger.info("Renamed %s -> %s", old_path, new_path)

    # --------------------
    # Transfers
    # --------------------
    def download(self, remote_path: str, local_path: Path) -> None:
        try:
            self.sftp.get(remote_path, str(local_path))
        except (OSError, paramiko.SSHException) as e:
            try:
                local_path.unlink(missing_ok=True)
            except OSError as cleanup_error:
                logger.warning("Could not remove partial download %s: %s", local_path, cleanup_error)
            raise translate_error(e, "failed to download", remote_path) from e
        logger.info("Downloaded %s -> %s", remote_path, local_path)

    def upload(self, local_path: Path, remote_path: str) -> None:
        try:
            self.sftp.put(str(local_path), remote_path)
        except (OSError, paramiko.SSHException) as e:
            raise translate_error(e, "failed to upload", remote_path) from e
        logger.info("Uploaded %s -> %s", local_path, remote_path)

    def close(self) -> None:
        self.client.close()
