import errno
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import paramiko

from hostdeck.core.exceptions import RemoteOperationError
from hostdeck.infrastructure.sftp import (
    GENERIC_SERVER_ERROR,
    SftpSession,
    entry_from_attributes,
    translate_error,
)


def attributes(name: str, mode: int, size: int = 0, mtime: int = 1700000000) -> paramiko.SFTPAttributes:
    attrs = paramiko.SFTPAttributes()
    attrs.filename = name
    attrs.st_mode = mode
    attrs.st_size = size
    attrs.st_mtime = mtime
    return attrs


DIR_MODE = stat.S_IFDIR | 0o755
FILE_MODE = stat.S_IFREG | 0o644
LINK_MODE = stat.S_IFLNK | 0o777


class TestTranslateError(unittest.TestCase):
    def test_errno_mapping(self) -> None:
        error = translate_error(IOError(errno.ENOENT, "No such file"), "failed to read directory", "/x")
        self.assertEqual(str(error), "failed to read directory: file or directory not found")
        self.assertEqual(error.path, "/x")

        error = translate_error(PermissionError(errno.EACCES, "denied"), "failed to delete")
        self.assertEqual(str(error), "failed to delete: permission denied")

    def test_text_fallbacks(self) -> None:
        error = translate_error(IOError("Disk quota exceeded"), "failed to upload")
        self.assertEqual(str(error), "failed to upload: no space left on server")
        error = translate_error(IOError("Permission denied"), "failed to rename")
        self.assertEqual(str(error), "failed to rename: permission denied")

    def test_connection_and_generic(self) -> None:
        error = translate_error(paramiko.SSHException("Server connection dropped"), "failed to stat")
        self.assertEqual(str(error), "failed to stat: connection error: Server connection dropped")
        error = translate_error(IOError("Failure"), "failed to create directory")
        self.assertEqual(str(error), f"failed to create directory: {GENERIC_SERVER_ERROR}")


class TestEntryFromAttributes(unittest.TestCase):
    def test_directory_and_file(self) -> None:
        directory = entry_from_attributes("logs", attributes("logs", DIR_MODE, 4096))
        self.assertTrue(directory.is_dir)
        self.assertEqual(directory.display_size, "-")
        self.assertEqual(directory.permissions, "drwxr-xr-x")

        regular = entry_from_attributes("a.txt", attributes("a.txt", FILE_MODE, 2048))
        self.assertFalse(regular.is_dir)
        self.assertEqual(regular.display_size, "2.0 KB")
        self.assertEqual(regular.permissions, "-rw-r--r--")


class TestSftpSession(unittest.TestCase):
    def setUp(self) -> None:
        self.client = mock.MagicMock()
        self.sftp = self.client.open_sftp.return_value
        self.session = SftpSession(self.client)

    def test_home_directory_normalizes_dot(self) -> None:
        self.sftp.normalize.return_value = "/home/u"
        self.assertEqual(self.session.home_directory(), "/home/u")
        self.sftp.normalize.assert_called_once_with(".")

    def test_list_dir_resolves_symlinks(self) -> None:
        self.sftp.listdir_attr.return_value = [
            attributes("data", LINK_MODE),
            attributes("broken", LINK_MODE),
            attributes("file.txt", FILE_MODE, 10),
        ]

        def fake_stat(path):
            if path == "/srv/data":
                return attributes("data", DIR_MODE)
            raise IOError(errno.ENOENT, "No such file")

        self.sftp.stat.side_effect = fake_stat
        entries = {e.name: e for e in self.session.list_dir("/srv")}
        self.assertTrue(entries["data"].is_dir)
        self.assertFalse(entries["broken"].is_dir)
        self.assertFalse(entries["file.txt"].is_dir)

    def test_list_dir_error(self) -> None:
        self.sftp.listdir_attr.side_effect = IOError(errno.EACCES, "denied")
        with self.assertRaises(RemoteOperationError) as ctx:
            self.session.list_dir("/root")
        self.assertEqual(str(ctx.exception), "failed to read directory: permission denied")

    def test_create_file_is_exclusive(self) -> None:
        self.session.create_file("/tmp/new.txt")
        self.sftp.open.assert_called_once_with("/tmp/new.txt", "wx")

    def test_remove_directory_is_recursive(self) -> None:
        listings = {
            "/d": [attributes("sub", DIR_MODE), attributes("a", FILE_MODE)],
            "/d/sub": [attributes("b", FILE_MODE)],
        }
        self.sftp.listdir_attr.side_effect = lambda path: listings[path]
        self.session.remove_directory("/d")

        self.assertEqual(
            [c.args[0] for c in self.sftp.remove.call_args_list], ["/d/sub/b", "/d/a"]
        )
        self.assertEqual([c.args[0] for c in self.sftp.rmdir.call_args_list], ["/d/sub", "/d"])

    def test_failed_download_removes_partial_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            local = Path(tmp) / "big.iso"

            def partial_get(remote, local_name):
                Path(local_name).write_bytes(b"half")
                raise IOError("Failure")

            self.sftp.get.side_effect = partial_get
            with self.assertRaises(RemoteOperationError):
                self.session.download("/big.iso", local)
            self.assertFalse(local.exists())

    def test_failed_cleanup_keeps_download_error(self) -> None:
        self.sftp.get.side_effect = IOError(errno.EACCES, "denied")
        with mock.patch.object(Path, "unlink", side_effect=PermissionError("busy")):
            with self.assertRaises(RemoteOperationError) as ctx:
                self.session.download("/secret.txt", Path("/nonexistent/secret.txt"))
        self.assertEqual(str(ctx.exception), "failed to download: permission denied")

    def test_close_closes_client(self) -> None:
        self.session.close()
        self.client.close.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
