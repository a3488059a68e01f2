"""
Remote file browser

A sub-state-machine over one connected remote session. ``Browsing`` is the
resting state; every other state holds the data it edits and returns to
``Browsing`` on submit or cancel.
"""
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..core.constants import (
    BROWSER_RESERVED_LINES,
    DEFAULT_DOWNLOADS_DIR,
    HIDDEN_MARKER,
    MIN_VISIBLE_ROWS,
    ROOT_PATH,
)
from ..core.exceptions import ClipboardError, RemoteOperationError
from ..core.interfaces import Clipboard, RemoteSession
from ..core.logging import get_logger
from ..core.utils import join_remote, parent_remote, unique_local_path
from .events import CANCEL_KEYS, DOWN_KEYS, UP_KEYS
from .models import RemoteEntry
from .selection import clamp_index, clamp_scroll
from .text_input import TextInput

logger = get_logger(__name__)


# ============================================================
# Browser States
# ============================================================

@dataclass
class Browsing:
    pass


@dataclass
class GoToPath:
    input: TextInput


@dataclass
class CreateFile:
    input: TextInput


@dataclass
class CreateDir:
    input: TextInput


@dataclass
class Rename:
    input: TextInput
    entry: RemoteEntry


@dataclass
class DeleteConfirm:
    entry: RemoteEntry


BrowserState = Union[Browsing, GoToPath, CreateFile, CreateDir, Rename, DeleteConfirm]


def sort_entries(entries: List[RemoteEntry]) -> List[RemoteEntry]:
    """Directories first, then case-insensitive by name"""
    return sorted(entries, key=lambda e: (not e.is_dir, e.name.lower()))


class RemoteBrowser:
    """
    Navigate and mutate one remote directory tree.

    Every mutation is followed by a full reload of the current directory,
    so the listing always reflects the last completed operation.
    """

    def __init__(
        self,
        session: RemoteSession,
        clipboard: Optional[Clipboard] = None,
        show_hidden: bool = False,
        downloads_dir: Optional[Path] = None,
        height: int = 24,
        start_path: Optional[str] = None,
    ):
        self.session = session
        self.clipboard = clipboard
        self.show_hidden = show_hidden
        self.downloads_dir = Path(downloads_dir or DEFAULT_DOWNLOADS_DIR).expanduser()
        self.height = height

        self.entries: List[RemoteEntry] = []
        self.selected = 0
        self.scroll_offset = 0
        self.state: BrowserState = Browsing()
        self.error: Optional[str] = None
        self.status: Optional[str] = None
        self.edit_request: Optional[str] = None
        self.closed = False

        self.home = self._resolve_home()
        self.current_path = start_path or self.home
        self.load_directory()

    def _resolve_home(self) -> str:
        try:
            return self.session.home_directory()
        except RemoteOperationError as e:
            logger.warning("Could not resolve remote home directory: %s", e)
            self.error = str(e)
            return ROOT_PATH

    # --------------------
    # Viewport
    # --------------------
    @property
    def visible_count(self) -> int:
        return max(MIN_VISIBLE_ROWS, self.height - BROWSER_RESERVED_LINES)

    @property
    def visible_entries(self) -> List[RemoteEntry]:
        return self.entries[self.scroll_offset:self.scroll_offset + self.visible_count]

    @property
    def selected_entry(self) -> Optional[RemoteEntry]:
        if not self.entries:
            return None
        return self.entries[self.selected]

    def selected_path(self) -> Optional[str]:
        entry = self.selected_entry
        return join_remote(self.current_path, entry.name) if entry else None

    def resize(self, height: int) -> None:
        self.height = height
        self._adjust_scroll()

    def _adjust_scroll(self) -> None:
        self.scroll_offset = clamp_scroll(self.selected, self.scroll_offset, self.visible_count)

    def _select(self, index: int) -> None:
        self.selected = clamp_index(index, len(self.entries))
        self._adjust_scroll()

    # --------------------
    # Loading
    # --------------------
    def _list(self, path: str) -> List[RemoteEntry]:
        entries = self.session.list_dir(path)
        if not self.show_hidden:
            entries = [e for e in entries if not e.name.startswith(HIDDEN_MARKER)]
        return sort_entries(entries)

    def load_directory(self) -> bool:
        """
        Reload the current directory.

        Selection falls back to the top when it no longer fits and the
        scroll offset restarts from zero. On failure the previous listing
        is kept and ``error`` is set.
        """
        try:
            entries = self._list(self.current_path)
        except RemoteOperationError as e:
            logger.debug("Listing %s failed: %s", self.current_path, e)
            self.error = str(e)
            return False

        self.entries = entries
        if self.selected >= len(self.entries):
            self.selected = 0
        self.scroll_offset = 0
        self._adjust_scroll()
        return True

    def navigate(self, path: str, select_name: Optional[str] = None) -> bool:
        """List ``path`` and make it current; nothing changes on failure"""
        try:
            entries = self._list(path)
        except RemoteOperationError as e:
            self.error = str(e)
            return False

        self.current_path = path
        self.entries = entries
        self.scroll_offset = 0
        names = [e.name for e in entries]
        self._select(names.index(select_name) if select_name in names else 0)
        return True

    # --------------------
    # Keys
    # --------------------
    def update(self, key: str) -> "RemoteBrowser":
        if isinstance(self.state, Browsing):
            self._update_browsing(key)
        elif isinstance(self.state, DeleteConfirm):
            self._update_delete_confirm(key)
        else:
            self._update_text(key)
        return self

    def _update_browsing(self, key: str) -> None:
        self.error = None
        self.status = None
        entry = self.selected_entry
        half_page = max(1, self.visible_count // 2)

        if key in UP_KEYS:
            self._select(self.selected - 1)
        elif key in DOWN_KEYS:
            self._select(self.selected + 1)
        elif key == "ctrl+u":
            self._select(self.selected - half_page)
        elif key == "ctrl+d":
            self._select(self.selected + half_page)
        elif key == "pgup":
            self._select(self.selected - self.visible_count)
        elif key == "pgdown":
            self._select(self.selected + self.visible_count)
        elif key in ("G", "end"):
            self._select(len(self.entries) - 1)
        elif key == "home":
            self._select(0)
        elif key in ("enter", "l", "right"):
            if entry is not None and entry.is_dir:
                self.navigate(join_remote(self.current_path, entry.name))
        elif key in ("h", "left", "backspace"):
            self.go_parent()
        elif key in ("g", "tab"):
            self.state = GoToPath(TextInput(self.current_path))
        elif key == "n":
            self.state = CreateFile(TextInput(placeholder="filename.txt"))
        elif key == "N":
            self.state = CreateDir(TextInput(placeholder="directory"))
        elif key == "d":
            if entry is not None:
                self.state = DeleteConfirm(entry)
        elif key == "r":
            if entry is not None:
                self.state = Rename(TextInput(entry.name), entry)
        elif key == "y":
            self.copy_path()
        elif key == ".":
            self.show_hidden = not self.show_hidden
            self.load_directory()
        elif key == "~":
            self.navigate(self.home)
        elif key == "R":
            self.load_directory()
        elif key == "e":
            if entry is not None:
                if entry.is_dir:
                    self.error = "cannot edit directories"
                else:
                    self.edit_request = join_remote(self.current_path, entry.name)
        elif key == "D":
            if entry is not None:
                if entry.is_dir:
                    self.error = "cannot download directories"
                else:
                    self.download_selected()
        elif key in ("q", "esc"):
            self.closed = True

    def _update_delete_confirm(self, key: str) -> None:
        entry = self.state.entry
        self.state = Browsing()
        if key not in ("y", "Y"):
            return

        path = join_remote(self.current_path, entry.name)
        remove = self.session.remove_directory if entry.is_dir else self.session.remove_file
        self._apply(lambda: remove(path), f"Deleted: {entry.name}")

    def _update_text(self, key: str) -> None:
        state = self.state
        if key in CANCEL_KEYS:
            self.state = Browsing()
            return
        if key != "enter":
            state.input.handle_key(key)
            return

        value = state.input.value.strip()
        self.state = Browsing()
        self.error = None
        self.status = None
        if not value:
            return

        if isinstance(state, GoToPath):
            self.go_to(value)
        elif isinstance(state, CreateFile):
            path = join_remote(self.current_path, value)
            self._apply(lambda: self.session.create_file(path), f"Created file: {value}")
        elif isinstance(state, CreateDir):
            path = join_remote(self.current_path, value)
            self._apply(lambda: self.session.create_directory(path), f"Created directory: {value}")
        elif isinstance(state, Rename):
            if value == state.entry.name:
                return
            old_path = join_remote(self.current_path, state.entry.name)
            new_path = join_remote(self.current_path, value)
            self._apply(lambda: self.session.rename(old_path, new_path), f"Renamed to: {value}")

    def _apply(self, action: Callable[[], None], success_message: str) -> None:
        try:
            action()
        except RemoteOperationError as e:
            logger.info("Remote operation failed: %s", e)
            self.load_directory()
            self.error = str(e)
            self.status = None
            return
        if self.load_directory():
            self.status = success_message

    # --------------------
    # Operations
    # --------------------
    def go_parent(self) -> None:
        if self.current_path == ROOT_PATH:
            return
        left = posixpath.basename(self.current_path.rstrip("/"))
        self.navigate(parent_remote(self.current_path), select_name=left)

    def go_to(self, raw_path: str) -> None:
        if raw_path == "~" or raw_path.startswith("~/"):
            raw_path = self.home + raw_path[1:]
        elif not raw_path.startswith("/"):
            raw_path = join_remote(self.current_path, raw_path)
        try:
            path = self.session.normalize(raw_path)
        except RemoteOperationError as e:
            self.error = str(e)
            return
        self.navigate(path)

    def copy_path(self) -> None:
        path = self.selected_path()
        if path is None:
            return
        if self.clipboard is None:
            self.error = "clipboard is not available"
            return
        try:
            self.clipboard.copy(path)
        except ClipboardError as e:
            self.error = f"failed to copy to clipboard: {e}"
            return
        self.status = "Path copied to clipboard"

    def download_selected(self) -> Optional[Path]:
        """Download the selected file into the downloads folder without overwriting"""
        entry = self.selected_entry
        if entry is None or entry.is_dir:
            return None

        try:
            self.downloads_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.error = f"failed to create downloads directory: {e}"
            return None

        local_path = unique_local_path(self.downloads_dir / entry.name)
        try:
            self.session.download(join_remote(self.current_path, entry.name), local_path)
        except RemoteOperationError as e:
            self.error = f"download failed: {e}"
            return None

        self.status = f"Downloaded: {local_path.name}"
        return local_path

    def complete_edit(self, error: Optional[str] = None, changed: bool = True) -> None:
        """Called by the application once an edit round trip has finished"""
        name = posixpath.basename(self.edit_request or "")
        self.edit_request = None
        if error:
            self.load_directory()
            self.error = error
            return
        if self.load_directory():
            self.status = f"Saved: {name}" if changed else f"No changes: {name}"
