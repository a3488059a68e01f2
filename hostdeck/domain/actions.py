"""
Deferred actions held next to an open confirmation modal, plus the
store mutations sub-views hand to the router
"""
from dataclasses import dataclass
from typing import Optional, Union

from .models import Credential


@dataclass(frozen=True)
class DeleteConnection:
    connection_id: str


@dataclass(frozen=True)
class DeleteCredential:
    credential_id: str


@dataclass(frozen=True)
class SaveCredential:
    credential: Credential
    password: Optional[str] = None


PendingAction = Union[DeleteConnection, DeleteCredential]
StoreMutation = Union[SaveCredential, DeleteCredential]
