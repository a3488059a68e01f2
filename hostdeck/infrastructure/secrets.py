"""
OS keyring backed secret storage
"""
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from ..core.constants import KEYRING_SERVICE
from ..core.exceptions import SecretNotFoundError, SecretStoreError
from ..core.interfaces import SecretKind, SecretStore
from ..core.logging import get_logger

logger = get_logger(__name__)


def secret_key(kind: SecretKind, record_id: str) -> str:
    """Keyring account name, e.g. ``conn-<id>`` or ``cred-<id>``"""
    return f"{kind.value}-{record_id}"


class KeyringSecretStore(SecretStore):
    """
    Secrets stored in the platform keyring (macOS Keychain, Secret Service,
    Windows Credential Locker) under a single service name.
    """

    def __init__(self, service: str = KEYRING_SERVICE):
        self.service = service

    def _backend_name(self) -> str:
        try:
            return type(keyring.get_keyring()).__name__
        except KeyringError:
            return "unknown"

    def get(self, kind: SecretKind, record_id: str) -> Optional[str]:
        try:
            secret = keyring.get_password(self.service, secret_key(kind, record_id))
        except KeyringError as e:
            raise SecretStoreError(f"failed to read secret: {e}") from e
        logger.debug("Secret %s %s via %s", secret_key(kind, record_id),
                     "found" if secret is not None else "missing", self._backend_name())
        return secret

    def set(self, kind: SecretKind, record_id: str, secret: str) -> None:
        try:
            keyring.set_password(self.service, secret_key(kind, record_id), secret)
        except KeyringError as e:
            raise SecretStoreError(f"failed to store secret: {e}") from e
        logger.debug("Secret %s stored via %s", secret_key(kind, record_id), self._backend_name())

    def delete(self, kind: SecretKind, record_id: str) -> None:
        try:
            keyring.delete_password(self.service, secret_key(kind, record_id))
        except PasswordDeleteError as e:
            raise SecretNotFoundError(f"no secret stored for {secret_key(kind, record_id)}") from e
        except KeyringError as e:
            raise SecretStoreError(f"failed to delete secret: {e}") from e
        logger.debug("Secret %s deleted", secret_key(kind, record_id))
