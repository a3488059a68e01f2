import unittest

from rich.console import Console

from hostdeck.adapters.cli.app import connections_table
from hostdeck.adapters.tui.render import render
from hostdeck.adapters.tui.styles import THEME
from hostdeck.domain.browser import RemoteBrowser
from hostdeck.domain.events import KeyPress
from hostdeck.domain.models import AppConfig, AuthType, Connection, Credential
from hostdeck.domain.router import Router

from fakes import FakeConnectionStore, FakeRemoteSession, FakeSecretStore


def screen_text(renderable) -> str:
    console = Console(theme=THEME, width=120, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def make_router(config: AppConfig) -> Router:
    store = FakeConnectionStore(config)
    return Router(config, store, FakeSecretStore(), height=30)


CONFIG = AppConfig(
    connections=[
        Connection("a", "alpha", "alpha.local", 2222, "root"),
        Connection("b", "beta", "beta.local", username="bob",
                   auth_type=AuthType.CREDENTIAL, credential_id="k1"),
    ],
    credentials=[Credential("k1", "Shared", "bob")],
)


class TestRender(unittest.TestCase):
    def test_empty_list(self) -> None:
        text = screen_text(render(make_router(AppConfig())))
        self.assertIn("No connections yet", text)
        self.assertIn("0 connection(s)", text)

    def test_connection_list(self) -> None:
        text = screen_text(render(make_router(CONFIG)))
        self.assertIn("root@alpha.local:2222", text)
        self.assertIn("credential: Shared", text)
        self.assertIn("quit", text)

    def test_delete_modal(self) -> None:
        router = make_router(CONFIG)
        router.handle(KeyPress("d"))
        text = screen_text(render(router))
        self.assertIn("Delete Connection", text)
        self.assertIn("Delete 'alpha'? This cannot be undone.", text)

    def test_form_masks_password_and_shows_error(self) -> None:
        router = make_router(CONFIG)
        for key in ("e", "tab", "tab", "tab", "tab", "tab"):
            router.handle(KeyPress(key))
        for char in "pw":
            router.handle(KeyPress(char))
        text = screen_text(render(router))
        self.assertIn("Edit Connection", text)
        self.assertIn("••", text)
        self.assertNotIn("pw", text)

    def test_mode_menu(self) -> None:
        router = make_router(CONFIG)
        router.handle(KeyPress("enter"))
        text = screen_text(render(router))
        self.assertIn("Connect to alpha", text)
        self.assertIn("SFTP", text)

    def test_browser(self) -> None:
        session = FakeRemoteSession()
        session.add_dir("/home/u/logs")
        session.add_file("/home/u/notes.txt", b"x" * 2048)
        router = make_router(CONFIG)
        router.open_browser(RemoteBrowser(session), session)
        router.handle(KeyPress("d"))

        text = screen_text(render(router))
        self.assertIn("/home/u", text)
        self.assertIn("logs/", text)
        self.assertIn("2.0 KB", text)
        self.assertIn("Delete directory 'logs'? (y/N)", text)


class TestConnectionsTable(unittest.TestCase):
    def test_rows(self) -> None:
        text = screen_text(connections_table(CONFIG))
        self.assertIn("alpha", text)
        self.assertIn("credential (Shared)", text)


if __name__ == "__main__":
    unittest.main()
