"""
Connection and credential entry forms

Each form keeps an explicit ordered list of the fields that currently
apply, so focus traversal is a plain index walk. The list is rebuilt
whenever the auth type changes.
"""
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..core.constants import DEFAULT_SSH_PORT
from ..core.exceptions import SecretStoreError, ValidationError
from ..core.interfaces import SecretKind, SecretStore
from ..core.logging import get_logger
from ..core.utils import is_valid_port
from .events import CANCEL_KEYS
from .models import AuthType, Connection, Credential, DEFAULT_ICON, Icon
from .text_input import TextInput

logger = get_logger(__name__)

NO_CREDENTIALS_MESSAGE = "no credentials available - create one first with 'c'"


class FormMode(Enum):
    ADD = "add"
    EDIT = "edit"


class FormStatus(Enum):
    EDITING = "editing"
    SUBMITTED = "submitted"
    CANCELLED = "cancelled"


class Field(Enum):
    LABEL = "Label"
    HOST = "Host"
    PORT = "Port"
    AUTH = "Auth"
    CREDENTIAL = "Credential"
    USERNAME = "Username"
    PASSWORD = "Password"
    ICON = "Icon"
    SUBMIT = "Submit"
    CANCEL = "Cancel"


BUTTONS = (Field.SUBMIT, Field.CANCEL)


@dataclass(frozen=True)
class ConnectionFormResult:
    connection: Connection
    password: Optional[str] = None


@dataclass(frozen=True)
class CredentialFormResult:
    credential: Credential
    password: Optional[str] = None


def _load_secret(secrets: Optional[SecretStore], kind: SecretKind, record_id: str) -> str:
    if secrets is None:
        return ""
    try:
        return secrets.get(kind, record_id) or ""
    except SecretStoreError as e:
        logger.warning("Could not load %s secret for %s: %s", kind.value, record_id, e)
        return ""


class _Form:
    """Focus traversal, status and error handling shared by both forms"""

    SELECTORS: Sequence[Field] = ()

    def __init__(self, mode: FormMode):
        self.mode = mode
        self.status = FormStatus.EDITING
        self.error: Optional[str] = None
        self.inputs: Dict[Field, TextInput] = {}
        self.fields: List[Field] = []
        self.focus = 0

    # --------------------
    # Status
    # --------------------
    @property
    def is_submitted(self) -> bool:
        return self.status == FormStatus.SUBMITTED

    @property
    def is_cancelled(self) -> bool:
        return self.status == FormStatus.CANCELLED

    @property
    def focused(self) -> Field:
        return self.fields[self.focus]

    def fail(self, message: str) -> None:
        """Reopen a submitted form with an error (e.g. the store rejected it)"""
        self.status = FormStatus.EDITING
        self.error = message

    # --------------------
    # Traversal
    # --------------------
    def _applicable_fields(self) -> List[Field]:
        raise NotImplementedError

    def _refresh_fields(self) -> None:
        current = self.fields[self.focus] if self.fields else None
        self.fields = self._applicable_fields()
        self.focus = self.fields.index(current) if current in self.fields else 0

    def next_field(self) -> None:
        self.focus = (self.focus + 1) % len(self.fields)

    def prev_field(self) -> None:
        self.focus = (self.focus - 1) % len(self.fields)

    # --------------------
    # Keys
    # --------------------
    def update(self, key: str) -> "_Form":
        if self.status != FormStatus.EDITING:
            return self

        if key in CANCEL_KEYS:
            self.status = FormStatus.CANCELLED
        elif key in ("tab", "down"):
            self.next_field()
        elif key in ("shift+tab", "up"):
            self.prev_field()
        elif key == "enter":
            if self.focused == Field.SUBMIT:
                self.submit()
            elif self.focused == Field.CANCEL:
                self.status = FormStatus.CANCELLED
            else:
                self.next_field()
        elif key in ("left", "right") and self.focused in self.SELECTORS:
            self._cycle(self.focused, 1 if key == "right" else -1)
        elif self.focused in self.inputs:
            self.inputs[self.focused].handle_key(key)
        return self

    def _cycle(self, field: Field, step: int) -> None:
        pass

    def submit(self) -> None:
        try:
            self.result = self._build()
        except ValidationError as e:
            self.error = str(e)
            return
        self.error = None
        self.status = FormStatus.SUBMITTED

    def _build(self):
        raise NotImplementedError

    def _text(self, field: Field) -> str:
        return self.inputs[field].value.strip()


class ConnectionForm(_Form):
    """Add or edit a connection"""

    SELECTORS = (Field.AUTH, Field.CREDENTIAL, Field.ICON)

    def __init__(
        self,
        mode: FormMode,
        connection: Optional[Connection] = None,
        credentials: Sequence[Credential] = (),
        secrets: Optional[SecretStore] = None,
        default_port: int = DEFAULT_SSH_PORT,
    ):
        super().__init__(mode)
        if mode == FormMode.EDIT and connection is None:
            raise ValueError("edit mode needs an existing connection")

        self.original = connection
        self.credentials = list(credentials)
        self.default_port = default_port
        self.result: Optional[ConnectionFormResult] = None

        self.inputs = {
            Field.LABEL: TextInput(placeholder="My Server"),
            Field.HOST: TextInput(placeholder="192.168.1.100 or example.com"),
            Field.PORT: TextInput(placeholder=str(default_port), char_limit=5),
            Field.USERNAME: TextInput(placeholder="root"),
            Field.PASSWORD: TextInput(placeholder="password", masked=True),
        }
        self.auth_type = AuthType.PASSWORD
        self.credential_index = 0
        self.icon = DEFAULT_ICON

        if connection is not None:
            self._populate(connection, secrets)
        self._refresh_fields()

    def _populate(self, connection: Connection, secrets: Optional[SecretStore]) -> None:
        self.inputs[Field.LABEL].set_value(connection.label)
        self.inputs[Field.HOST].set_value(connection.host)
        self.inputs[Field.PORT].set_value(str(connection.port))
        self.auth_type = connection.auth_type
        self.icon = connection.icon

        if connection.uses_credential:
            ids = [c.id for c in self.credentials]
            if connection.credential_id in ids:
                self.credential_index = ids.index(connection.credential_id)
        else:
            self.inputs[Field.USERNAME].set_value(connection.username)
            self.inputs[Field.PASSWORD].set_value(
                _load_secret(secrets, SecretKind.CONNECTION, connection.id)
            )

    def _applicable_fields(self) -> List[Field]:
        fields = [Field.LABEL, Field.HOST, Field.PORT, Field.AUTH]
        if self.auth_type == AuthType.CREDENTIAL:
            fields.append(Field.CREDENTIAL)
        else:
            fields.extend([Field.USERNAME, Field.PASSWORD])
        fields.append(Field.ICON)
        fields.extend(BUTTONS)
        return fields

    @property
    def selected_credential(self) -> Optional[Credential]:
        if not self.credentials:
            return None
        return self.credentials[self.credential_index]

    def _cycle(self, field: Field, step: int) -> None:
        if field == Field.AUTH:
            self.auth_type = (
                AuthType.CREDENTIAL if self.auth_type == AuthType.PASSWORD else AuthType.PASSWORD
            )
            self._refresh_fields()
        elif field == Field.CREDENTIAL and self.credentials:
            self.credential_index = (self.credential_index + step) % len(self.credentials)
        elif field == Field.ICON:
            icons = list(Icon)
            self.icon = icons[(icons.index(self.icon) + step) % len(icons)]

    def _parse_port(self) -> int:
        raw = self._text(Field.PORT)
        try:
            port = int(raw) if raw else self.default_port
        except ValueError:
            raise ValidationError("invalid port number")
        if not is_valid_port(port):
            raise ValidationError("invalid port number")
        return port

    def _build(self) -> ConnectionFormResult:
        label = self._text(Field.LABEL)
        host = self._text(Field.HOST)
        if not label:
            raise ValidationError("label is required")
        if not host:
            raise ValidationError("host is required")
        port = self._parse_port()

        connection_id = self.original.id if self.original else str(uuid.uuid4())

        if self.auth_type == AuthType.CREDENTIAL:
            credential = self.selected_credential
            if credential is None:
                raise ValidationError(NO_CREDENTIALS_MESSAGE)
            connection = Connection(
                id=connection_id,
                label=label,
                host=host,
                port=port,
                username=credential.username,
                auth_type=AuthType.CREDENTIAL,
                credential_id=credential.id,
                icon=self.icon,
            )
            return ConnectionFormResult(connection=connection, password=None)

        connection = Connection(
            id=connection_id,
            label=label,
            host=host,
            port=port,
            username=self._text(Field.USERNAME),
            auth_type=AuthType.PASSWORD,
            icon=self.icon,
        )
        password = self.inputs[Field.PASSWORD].value
        return ConnectionFormResult(connection=connection, password=password or None)

    def value(self) -> Optional[ConnectionFormResult]:
        return self.result if self.is_submitted else None


class CredentialForm(_Form):
    """Add or edit a shared credential"""

    def __init__(
        self,
        mode: FormMode,
        credential: Optional[Credential] = None,
        secrets: Optional[SecretStore] = None,
    ):
        super().__init__(mode)
        if mode == FormMode.EDIT and credential is None:
            raise ValueError("edit mode needs an existing credential")

        self.original = credential
        self.result: Optional[CredentialFormResult] = None
        self.inputs = {
            Field.LABEL: TextInput(placeholder="Work Account"),
            Field.USERNAME: TextInput(placeholder="username"),
            Field.PASSWORD: TextInput(placeholder="password", masked=True),
        }
        if credential is not None:
            self.inputs[Field.LABEL].set_value(credential.label)
            self.inputs[Field.USERNAME].set_value(credential.username)
            self.inputs[Field.PASSWORD].set_value(
                _load_secret(secrets, SecretKind.CREDENTIAL, credential.id)
            )
        self._refresh_fields()

    def _applicable_fields(self) -> List[Field]:
        return [Field.LABEL, Field.USERNAME, Field.PASSWORD, *BUTTONS]

    def _build(self) -> CredentialFormResult:
        label = self._text(Field.LABEL)
        username = self._text(Field.USERNAME)
        password = self.inputs[Field.PASSWORD].value
        if not label:
            raise ValidationError("label is required")
        if not username:
            raise ValidationError("username is required")
        if self.mode == FormMode.ADD and not password:
            raise ValidationError("password is required for new credential")

        credential_id = self.original.id if self.original else str(uuid.uuid4())
        credential = Credential(id=credential_id, label=label, username=username)
        return CredentialFormResult(credential=credential, password=password or None)

    def value(self) -> Optional[CredentialFormResult]:
        return self.result if self.is_submitted else None
