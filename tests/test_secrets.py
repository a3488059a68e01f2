import unittest
from unittest import mock

from keyring.errors import KeyringError, PasswordDeleteError

from hostdeck.core.exceptions import SecretNotFoundError, SecretStoreError
from hostdeck.core.interfaces import SecretKind
from hostdeck.domain.models import AuthType, Connection
from hostdeck.infrastructure.secrets import KeyringSecretStore, secret_key
from hostdeck.infrastructure.sessions import lookup_password

from fakes import FakeSecretStore


class TestKeyringSecretStore(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("hostdeck.infrastructure.secrets.keyring")
        self.keyring = patcher.start()
        self.addCleanup(patcher.stop)
        self.store = KeyringSecretStore(service="hostdeck-test")

    def test_key_format(self) -> None:
        self.assertEqual(secret_key(SecretKind.CONNECTION, "abc"), "conn-abc")
        self.assertEqual(secret_key(SecretKind.CREDENTIAL, "abc"), "cred-abc")

    def test_get_set_delete_use_service_and_account(self) -> None:
        self.keyring.get_password.return_value = "pw"
        self.assertEqual(self.store.get(SecretKind.CONNECTION, "a"), "pw")
        self.keyring.get_password.assert_called_once_with("hostdeck-test", "conn-a")

        self.store.set(SecretKind.CREDENTIAL, "k", "s3cret")
        self.keyring.set_password.assert_called_once_with("hostdeck-test", "cred-k", "s3cret")

        self.store.delete(SecretKind.CONNECTION, "a")
        self.keyring.delete_password.assert_called_once_with("hostdeck-test", "conn-a")

    def test_missing_secret_on_delete(self) -> None:
        self.keyring.delete_password.side_effect = PasswordDeleteError("not found")
        with self.assertRaises(SecretNotFoundError):
            self.store.delete(SecretKind.CONNECTION, "a")

    def test_backend_failures(self) -> None:
        self.keyring.set_password.side_effect = KeyringError("locked")
        with self.assertRaises(SecretStoreError):
            self.store.set(SecretKind.CONNECTION, "a", "pw")

        self.keyring.get_password.side_effect = KeyringError("locked")
        with self.assertRaises(SecretStoreError):
            self.store.get(SecretKind.CONNECTION, "a")


class TestLookupPassword(unittest.TestCase):
    def test_connection_secret(self) -> None:
        secrets = FakeSecretStore()
        secrets.secrets[(SecretKind.CONNECTION, "a")] = "own"
        connection = Connection("a", "alpha", "alpha.local")
        self.assertEqual(lookup_password(connection, secrets), "own")

    def test_credential_secret(self) -> None:
        secrets = FakeSecretStore()
        secrets.secrets[(SecretKind.CREDENTIAL, "k1")] = "shared"
        connection = Connection("a", "alpha", "alpha.local",
                                auth_type=AuthType.CREDENTIAL, credential_id="k1")
        self.assertEqual(lookup_password(connection, secrets), "shared")

    def test_store_failure_means_no_password(self) -> None:
        secrets = FakeSecretStore()
        secrets.fail_get = True
        self.assertIsNone(lookup_password(Connection("a", "alpha", "alpha.local"), secrets))


if __name__ == "__main__":
    unittest.main()
