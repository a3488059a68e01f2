"""
Opening SSH clients for stored connections
"""
from typing import Optional

from ..core.client import RemoteClient
from ..core.exceptions import SecretStoreError
from ..core.interfaces import SecretKind, SecretStore
from ..core.logging import get_logger
from ..domain.models import Connection

logger = get_logger(__name__)


def lookup_password(connection: Connection, secrets: SecretStore) -> Optional[str]:
    """
    Find the stored secret for a connection.

    Credential-based connections use the shared credential's secret;
    the others use their own. Store failures are logged and treated as
    "no password stored".
    """
    if connection.uses_credential:
        kind, record_id = SecretKind.CREDENTIAL, connection.credential_id
    else:
        kind, record_id = SecretKind.CONNECTION, connection.id
    if not record_id:
        return None
    try:
        return secrets.get(kind, record_id)
    except SecretStoreError as e:
        logger.warning("Password lookup for %s failed: %s", connection.label, e)
        return None


def open_client(connection: Connection, password: Optional[str]) -> RemoteClient:
    """
    Connect to ``connection``.

    Raises:
        ConnectionError: If the host is unreachable or rejects the login
    """
    client = RemoteClient(
        host=connection.host,
        user=connection.username,
        port=connection.port,
        password=password,
    )
    try:
        client.connect()
    except Exception:
        client.close()
        raise
    return client
