"""
Credential manager view: list, form and delete confirmation for
shared credentials
"""
from typing import List, Optional, Sequence

from ..core.interfaces import SecretStore
from .actions import DeleteCredential, SaveCredential, StoreMutation
from .events import DOWN_KEYS, UP_KEYS
from .forms import CredentialForm, FormMode
from .modal import ConfirmationModal
from .models import Credential
from .selection import clamp_index, move_index


class CredentialsManager:
    """
    Browse, add, edit and delete credentials.

    The manager never writes to a store. Confirmed changes are exposed as
    a ``StoreMutation`` through ``take_mutation()``; the router performs
    it and reports back with ``apply()`` or ``fail()``.
    """

    def __init__(self, credentials: Sequence[Credential], secrets: Optional[SecretStore] = None):
        self.credentials: List[Credential] = list(credentials)
        self.secrets = secrets
        self.selected = 0
        self.form: Optional[CredentialForm] = None
        self.modal: Optional[ConfirmationModal] = None
        self.pending: Optional[DeleteCredential] = None
        self.error: Optional[str] = None
        self.status: Optional[str] = None
        self.done = False
        self._mutation: Optional[StoreMutation] = None

    @property
    def current(self) -> Optional[Credential]:
        if not self.credentials:
            return None
        return self.credentials[self.selected]

    def take_mutation(self) -> Optional[StoreMutation]:
        mutation, self._mutation = self._mutation, None
        return mutation

    # --------------------
    # Router callbacks
    # --------------------
    def apply(self, credentials: Sequence[Credential], status: Optional[str] = None) -> None:
        """The router committed the last mutation"""
        self.credentials = list(credentials)
        self.selected = clamp_index(self.selected, len(self.credentials))
        self.form = None
        self.error = None
        self.status = status

    def fail(self, message: str) -> None:
        """The router rejected the last mutation"""
        if self.form is not None:
            self.form.fail(message)
        else:
            self.error = message

    # --------------------
    # Keys
    # --------------------
    def update(self, key: str) -> "CredentialsManager":
        if self.modal is not None:
            self._update_modal(key)
        elif self.form is not None:
            self._update_form(key)
        else:
            self._update_list(key)
        return self

    def _update_modal(self, key: str) -> None:
        self.modal.update(key)
        if self.modal.is_open:
            return
        if self.modal.is_confirmed and self.pending is not None:
            self._mutation = self.pending
        self.modal = None
        self.pending = None

    def _update_form(self, key: str) -> None:
        self.form.update(key)
        if self.form.is_cancelled:
            self.form = None
        elif self.form.is_submitted:
            result = self.form.value()
            self._mutation = SaveCredential(credential=result.credential, password=result.password)

    def _update_list(self, key: str) -> None:
        self.error = None
        self.status = None

        if key in UP_KEYS:
            self.selected = move_index(self.selected, -1, len(self.credentials))
        elif key in DOWN_KEYS:
            self.selected = move_index(self.selected, 1, len(self.credentials))
        elif key == "a":
            self.form = CredentialForm(FormMode.ADD, secrets=self.secrets)
        elif key == "e" and self.current is not None:
            self.form = CredentialForm(FormMode.EDIT, credential=self.current, secrets=self.secrets)
        elif key == "d" and self.current is not None:
            self.pending = DeleteCredential(self.current.id)
            self.modal = ConfirmationModal(
                "Delete Credential",
                f"Delete '{self.current.label}'? This cannot be undone.",
            )
        elif key in ("esc", "q", "ctrl+c"):
            self.done = True
