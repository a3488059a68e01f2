"""
Top-level view router

Owns the persisted configuration, the connection list selection and the
single active view. It is the only component that writes to the
connection store or the secret store.
"""
from dataclasses import dataclass
from typing import Optional, Union

from ..core.exceptions import ConfigError, SecretNotFoundError, SecretStoreError
from ..core.interfaces import ConnectionStore, RemoteSession, SecretKind, SecretStore
from ..core.logging import get_logger
from .actions import DeleteConnection, DeleteCredential, PendingAction, SaveCredential, StoreMutation
from .browser import RemoteBrowser
from .credentials import CredentialsManager
from .events import DOWN_KEYS, QUIT_KEYS, UP_KEYS, Event, Resize
from .forms import ConnectionForm, ConnectionFormResult, FormMode
from .menu import ModeSelectionMenu, SessionMode
from .modal import ConfirmationModal
from .models import AppConfig, Connection, Settings
from .selection import clamp_index, move_index

logger = get_logger(__name__)


# ============================================================
# View States
# ============================================================

@dataclass
class ConnectionListView:
    pass


@dataclass
class ConnectionFormView:
    form: ConnectionForm


@dataclass
class CredentialManagerView:
    manager: CredentialsManager


@dataclass
class ModeMenuView:
    menu: ModeSelectionMenu
    connection: Connection


@dataclass
class BrowserView:
    browser: RemoteBrowser
    session: RemoteSession


ViewState = Union[
    ConnectionListView,
    ConnectionFormView,
    CredentialManagerView,
    ModeMenuView,
    BrowserView,
]


@dataclass(frozen=True)
class SessionRequest:
    """Raised by the router; the loop suspends the UI and starts the session"""
    connection: Connection
    mode: SessionMode


class Router:
    """Dispatch key events to the active view"""

    def __init__(
        self,
        config: AppConfig,
        store: ConnectionStore,
        secrets: SecretStore,
        settings: Optional[Settings] = None,
        width: int = 80,
        height: int = 24,
    ):
        self.config = config
        self.store = store
        self.secrets = secrets
        # effective settings; may differ from the persisted ones via env/CLI
        self.settings = settings or config.settings
        self.width = width
        self.height = height

        self.view: ViewState = ConnectionListView()
        self.selected = 0
        self.modal: Optional[ConfirmationModal] = None
        self.pending: Optional[PendingAction] = None
        self.session_request: Optional[SessionRequest] = None
        self.quitting = False
        self.error: Optional[str] = None
        self.status: Optional[str] = None

    # --------------------
    # Accessors
    # --------------------
    @property
    def connections(self):
        return self.config.connections

    @property
    def selected_connection(self) -> Optional[Connection]:
        if not self.connections:
            return None
        return self.connections[self.selected]

    @property
    def browser(self) -> Optional[RemoteBrowser]:
        return self.view.browser if isinstance(self.view, BrowserView) else None

    # --------------------
    # Dispatch
    # --------------------
    def handle(self, event: Event) -> "Router":
        if isinstance(event, Resize):
            self.width, self.height = event.width, event.height
            if isinstance(self.view, BrowserView):
                self.view.browser.resize(event.height)
            return self

        key = event.key
        self.error = None
        self.status = None

        if self.modal is not None:
            self._handle_modal(key)
            return self

        view = self.view
        if isinstance(view, (ConnectionListView, ModeMenuView)) and key in QUIT_KEYS:
            self.quitting = True
            return self

        if isinstance(view, ConnectionListView):
            self._handle_list(key)
        elif isinstance(view, ConnectionFormView):
            self._handle_form(view.form, key)
        elif isinstance(view, CredentialManagerView):
            self._handle_credentials(view.manager, key)
        elif isinstance(view, ModeMenuView):
            self._handle_menu(view, key)
        elif isinstance(view, BrowserView):
            self._handle_browser(view, key)
        return self

    # --------------------
    # Connection list
    # --------------------
    def _handle_list(self, key: str) -> None:
        connection = self.selected_connection

        if key in UP_KEYS:
            self.selected = move_index(self.selected, -1, len(self.connections))
        elif key in DOWN_KEYS:
            self.selected = move_index(self.selected, 1, len(self.connections))
        elif key in ("enter", "l", "right"):
            if connection is not None:
                self.view = ModeMenuView(ModeSelectionMenu(), connection)
        elif key == "a":
            self.view = ConnectionFormView(ConnectionForm(
                FormMode.ADD,
                credentials=self.config.credentials,
                secrets=self.secrets,
                default_port=self.settings.default_port,
            ))
        elif key == "e":
            if connection is not None:
                self.view = ConnectionFormView(ConnectionForm(
                    FormMode.EDIT,
                    connection=connection,
                    credentials=self.config.credentials,
                    secrets=self.secrets,
                    default_port=self.settings.default_port,
                ))
        elif key == "d":
            if connection is not None:
                self.pending = DeleteConnection(connection.id)
                self.modal = ConfirmationModal(
                    "Delete Connection",
                    f"Delete '{connection.label}'? This cannot be undone.",
                )
        elif key == "c":
            self.view = CredentialManagerView(
                CredentialsManager(self.config.credentials, secrets=self.secrets)
            )

    def _handle_modal(self, key: str) -> None:
        self.modal.update(key)
        if self.modal.is_open:
            return
        pending = self.pending if self.modal.is_confirmed else None
        self.modal = None
        self.pending = None
        if isinstance(pending, DeleteConnection):
            self._delete_connection(pending.connection_id)

    # --------------------
    # Forms
    # --------------------
    def _handle_form(self, form: ConnectionForm, key: str) -> None:
        form.update(key)
        if form.is_cancelled:
            self.view = ConnectionListView()
        elif form.is_submitted:
            self._submit_connection(form, form.value())

    def _submit_connection(self, form: ConnectionForm, result: ConnectionFormResult) -> None:
        connection = result.connection
        if result.password:
            try:
                self.secrets.set(SecretKind.CONNECTION, connection.id, result.password)
            except SecretStoreError as e:
                logger.error("Saving password for %s failed: %s", connection.label, e)
                form.fail(f"failed to save password: {e}")
                return

        error = self._persist(self.config.with_connection(connection))
        if error:
            form.fail(error)
            return

        if connection.uses_credential and form.original is not None and not form.original.uses_credential:
            self._forget_secret(SecretKind.CONNECTION, connection.id)

        ids = [c.id for c in self.connections]
        self.selected = clamp_index(ids.index(connection.id), len(ids))
        self.view = ConnectionListView()
        self.status = f"Saved: {connection.label}"

    def _delete_connection(self, connection_id: str) -> None:
        connection = self.config.get_connection(connection_id)
        if connection is None:
            return
        # an orphaned secret is harmless; a stale record is not
        self._forget_secret(SecretKind.CONNECTION, connection_id)
        error = self._persist(self.config.without_connection(connection_id))
        if error:
            self.error = f"failed to delete connection: {error}"
            return
        self.status = f"Deleted: {connection.label}"

    # --------------------
    # Credentials
    # --------------------
    def _handle_credentials(self, manager: CredentialsManager, key: str) -> None:
        manager.update(key)
        mutation = manager.take_mutation()
        if mutation is not None:
            self._apply_credential_mutation(manager, mutation)
        if manager.done:
            self.view = ConnectionListView()

    def _apply_credential_mutation(self, manager: CredentialsManager, mutation: StoreMutation) -> None:
        if isinstance(mutation, SaveCredential):
            credential = mutation.credential
            if mutation.password:
                try:
                    self.secrets.set(SecretKind.CREDENTIAL, credential.id, mutation.password)
                except SecretStoreError as e:
                    logger.error("Saving secret for credential %s failed: %s", credential.label, e)
                    manager.fail(f"failed to save password: {e}")
                    return
            error = self._persist(self.config.with_credential(credential))
            if error:
                manager.fail(error)
                return
            manager.apply(self.config.credentials, status=f"Saved: {credential.label}")

        elif isinstance(mutation, DeleteCredential):
            credential = self.config.get_credential(mutation.credential_id)
            if credential is None:
                return
            users = self.config.connections_using(credential.id)
            if users:
                manager.fail(f"credential is used by {len(users)} connection(s)")
                return
            self._forget_secret(SecretKind.CREDENTIAL, credential.id)
            error = self._persist(self.config.without_credential(credential.id))
            if error:
                manager.fail(f"failed to delete credential: {error}")
                return
            manager.apply(self.config.credentials, status=f"Deleted: {credential.label}")

    # --------------------
    # Sessions
    # --------------------
    def _handle_menu(self, view: ModeMenuView, key: str) -> None:
        view.menu.update(key)
        if view.menu.cancelled:
            self.view = ConnectionListView()
        elif view.menu.chosen is not None:
            self.session_request = SessionRequest(view.connection, view.menu.chosen)
            self.view = ConnectionListView()

    def _handle_browser(self, view: BrowserView, key: str) -> None:
        view.browser.update(key)
        if view.browser.closed:
            self.close_browser()

    def take_session_request(self) -> Optional[SessionRequest]:
        request, self.session_request = self.session_request, None
        return request

    def open_browser(self, browser: RemoteBrowser, session: RemoteSession) -> None:
        """Hand an opened SFTP session to a browser view"""
        browser.resize(self.height)
        self.view = BrowserView(browser, session)

    def close_browser(self) -> None:
        if not isinstance(self.view, BrowserView):
            return
        self.view.session.close()
        self.view = ConnectionListView()
        self.status = "Disconnected"

    def end_session(self, error: Optional[str] = None, status: Optional[str] = None) -> None:
        """Return to the connection list after an external session"""
        self.session_request = None
        self.view = ConnectionListView()
        self.error = error
        self.status = None if error else status

    # --------------------
    # Store helpers
    # --------------------
    def _persist(self, new_config: AppConfig) -> Optional[str]:
        """Save and commit ``new_config``; on failure keep the old one and return the message"""
        try:
            self.store.save(new_config)
        except ConfigError as e:
            logger.error("Saving configuration failed: %s", e)
            return str(e)
        self.config = new_config
        self.selected = clamp_index(self.selected, len(self.connections))
        return None

    def _forget_secret(self, kind: SecretKind, record_id: str) -> None:
        try:
            self.secrets.delete(kind, record_id)
        except SecretNotFoundError:
            pass
        except SecretStoreError as e:
            logger.warning("Leaving orphaned %s secret for %s: %s", kind.value, record_id, e)
