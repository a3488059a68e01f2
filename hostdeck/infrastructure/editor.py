"""
Edit a remote file with a local editor: download, edit, upload
"""
import posixpath
import subprocess
import tempfile
from pathlib import Path
from typing import Callable

from ..core.exceptions import EditorError
from ..core.interfaces import RemoteSession
from ..core.logging import get_logger
from ..core.utils import split_command

logger = get_logger(__name__)


def edit_remote_file(
    session: RemoteSession,
    remote_path: str,
    editor: str,
    runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
) -> bool:
    """
    Round-trip a remote file through a local editor.

    The file is downloaded into a private temporary directory, the editor
    runs in the foreground, and the file is uploaded again only if it was
    modified. The temporary copy is always removed.

    Args:
        session: Open remote session
        remote_path: Absolute remote path of the file
        editor: Editor command line, e.g. "code --wait"
        runner: Process runner (subprocess.run)

    Returns:
        True if the file changed and was uploaded

    Raises:
        RemoteOperationError: If the download or upload fails
        EditorError: If the editor cannot be started or exits non-zero
    """
    with tempfile.TemporaryDirectory(prefix="hostdeck-") as tmp_dir:
        local_path = Path(tmp_dir) / posixpath.basename(remote_path)
        session.download(remote_path, local_path)
        before = local_path.stat().st_mtime_ns

        argv = split_command(editor) + [str(local_path)]
        logger.info("Editing %s with %s", remote_path, argv[0])
        try:
            proc = runner(argv, check=False)
        except OSError as e:
            raise EditorError(f"failed to run {argv[0]}: {e}") from e
        if proc.returncode != 0:
            raise EditorError(f"{argv[0]} exited with status {proc.returncode}")

        if local_path.stat().st_mtime_ns == before:
            logger.info("%s unchanged, skipping upload", remote_path)
            return False

        session.upload(local_path, remote_path)
        return True
