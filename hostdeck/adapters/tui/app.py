"""
Full-screen application loop

Reads one key at a time, hands it to the router, services whatever the
router asked for (start a session, edit a file) and redraws.
"""
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.control import Control
from rich.screen import Screen

from ...core.exceptions import ConnectionError, EditorError, RemoteOperationError
from ...core.interfaces import Clipboard, PromptProvider, SecretStore
from ...core.logging import get_logger
from ...core.utils import resolve_editor
from ...domain.browser import RemoteBrowser
from ...domain.events import KeyPress, Resize
from ...domain.menu import SessionMode
from ...domain.models import Settings
from ...domain.router import Router, SessionRequest
from ...infrastructure.editor import edit_remote_file
from ...infrastructure.sessions import lookup_password, open_client
from ...infrastructure.sftp import SftpSession
from ...infrastructure.shell import run_shell
from .render import render
from .terminal import RawTerminal

logger = get_logger(__name__)

# Poll interval used to notice terminal resizes between key presses
POLL_INTERVAL = 0.25


class TuiApp:
    """Drive a ``Router`` on a real terminal"""

    def __init__(
        self,
        router: Router,
        secrets: SecretStore,
        settings: Settings,
        console: Console,
        prompts: PromptProvider,
        clipboard: Optional[Clipboard] = None,
    ):
        self.router = router
        self.secrets = secrets
        self.settings = settings
        self.console = console
        self.prompts = prompts
        self.clipboard = clipboard
        self._terminal: Optional[RawTerminal] = None
        self._size = (console.width, console.height)

    # --------------------
    # Screen handling
    # --------------------
    def _enter_screen(self) -> None:
        self.console.set_alt_screen(True)
        self.console.show_cursor(False)

    def _leave_screen(self) -> None:
        self.console.show_cursor(True)
        self.console.set_alt_screen(False)

    def _draw(self) -> None:
        self.console.control(Control.home())
        # application mode emits "\n\r"; the tty is raw so "\n" alone would not return
        self.console.print(Screen(render(self.router), application_mode=True), end="")

    @contextmanager
    def _suspended(self) -> Iterator[None]:
        """Give the terminal back to the user (shell, editor, prompts)"""
        self._leave_screen()
        with self._terminal.cooked():
            try:
                yield
            finally:
                self._enter_screen()

    def _poll_resize(self) -> None:
        size = (self.console.width, self.console.height)
        if size != self._size:
            self._size = size
            self.router.handle(Resize(width=size[0], height=size[1]))

    # --------------------
    # Main loop
    # --------------------
    def run(self) -> None:
        self.router.handle(Resize(width=self._size[0], height=self._size[1]))
        with RawTerminal() as terminal:
            self._terminal = terminal
            self._enter_screen()
            try:
                while not self.router.quitting:
                    self._draw()
                    key = terminal.read_key(timeout=POLL_INTERVAL)
                    self._poll_resize()
                    if key is None:
                        continue
                    self.router.handle(KeyPress(key))
                    self._service_requests()
            finally:
                self._leave_screen()
                self._close_open_browser()
                self._terminal = None

    def _service_requests(self) -> None:
        request = self.router.take_session_request()
        if request is not None:
            with self._suspended():
                self._start_session(request)

        browser = self.router.browser
        if browser is not None and browser.edit_request:
            with self._suspended():
                self._edit(browser)

    def _close_open_browser(self) -> None:
        if self.router.browser is not None:
            self.router.close_browser()

    # --------------------
    # Sessions
    # --------------------
    def _start_session(self, request: SessionRequest) -> None:
        connection = request.connection
        password = lookup_password(connection, self.secrets)
        if password is None:
            try:
                password = self.prompts.prompt(f"Password for {connection.address}", password=True)
            except (KeyboardInterrupt, EOFError):
                self.router.end_session(status="Connection cancelled")
                return

        self.prompts.info(f"Connecting to {connection.label} ({connection.address})...")
        try:
            client = open_client(connection, password or None)
        except ConnectionError as e:
            logger.error("Connection to %s failed: %s", connection.label, e)
            self.router.end_session(error=str(e))
            return

        if request.mode == SessionMode.SSH:
            self._run_shell(client, connection.label)
        else:
            self._open_browser(client)

    def _run_shell(self, client, label: str) -> None:
        error = None
        try:
            run_shell(client)
        except (ConnectionError, OSError) as e:
            logger.error("Shell session on %s failed: %s", label, e)
            error = str(e)
        finally:
            client.close()
        self.prompts.info("Disconnected...")
        self.router.end_session(error=error, status=f"Disconnected from {label}")

    def _open_browser(self, client) -> None:
        try:
            session = SftpSession(client)
        except ConnectionError as e:
            client.close()
            self.router.end_session(error=str(e))
            return

        browser = RemoteBrowser(
            session,
            clipboard=self.clipboard,
            show_hidden=self.settings.show_hidden_files,
            downloads_dir=self.settings.downloads_dir,
            height=self.console.height,
        )
        self.router.open_browser(browser, session)

    def _edit(self, browser: RemoteBrowser) -> None:
        editor = resolve_editor(self.settings.editor)
        try:
            changed = edit_remote_file(browser.session, browser.edit_request, editor)
        except (RemoteOperationError, EditorError) as e:
            logger.error("Editing %s failed: %s", browser.edit_request, e)
            browser.complete_edit(error=str(e))
            return
        browser.complete_edit(changed=changed)
