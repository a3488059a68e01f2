"""
Core utility functions
"""
import os
import posixpath
import shlex
from pathlib import Path
from typing import List, Optional

from .constants import EDITOR_ENV, FALLBACK_EDITOR, MAX_PORT, MIN_PORT, ROOT_PATH


# ============================================================
# Sizes
# ============================================================

_SIZE_UNITS = "KMGTPE"


def format_size(size_bytes: int) -> str:
    """
    Format bytes to human-readable size string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string like "512 B", "1.5 KB", "3.0 GB"
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"

    value = float(size_bytes)
    unit = ""
    for unit in _SIZE_UNITS:
        value /= 1024
        if value < 1024:
            break
    return f"{value:.1f} {unit}B"


def is_valid_port(port: int) -> bool:
    return MIN_PORT <= port <= MAX_PORT


# ============================================================
# Remote Paths
# ============================================================

def join_remote(directory: str, name: str) -> str:
    """Join a remote directory and an entry name (POSIX semantics)"""
    return posixpath.join(directory, name)


def parent_remote(path: str) -> str:
    """Parent of a remote path; the root is its own parent"""
    if path == ROOT_PATH:
        return ROOT_PATH
    parent = posixpath.dirname(path.rstrip("/"))
    return parent or ROOT_PATH


# ============================================================
# Local Paths
# ============================================================

def unique_local_path(path: Path) -> Path:
    """
    Return ``path`` if free, otherwise the first free ``stem (N)suffix``.

    Args:
        path: Desired destination

    Returns:
        A path that does not exist yet
    """
    if not path.exists():
        return path

    stem, suffix = path.stem, path.suffix
    counter = 1
    while True:
        candidate = path.with_name(f"{stem} ({counter}){suffix}")
        if not candidate.exists():
            return candidate
        counter += 1


# ============================================================
# Editor
# ============================================================

def resolve_editor(configured: Optional[str] = None) -> str:
    """Editor command: $EDITOR, then the configured one, then nano"""
    return os.environ.get(EDITOR_ENV) or configured or FALLBACK_EDITOR


def split_command(command: str) -> List[str]:
    """Split an editor command such as ``code --wait`` into argv"""
    try:
        parts = shlex.split(command)
    except ValueError:
        parts = []
    return parts or [FALLBACK_EDITOR]
