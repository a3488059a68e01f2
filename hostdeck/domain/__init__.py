"""
Domain layer: models and the view state machines
"""
from .models import AppConfig, AuthType, Connection, Credential, Icon, RemoteEntry, Settings
from .events import KeyPress, Resize
from .modal import ConfirmationModal
from .forms import ConnectionForm, CredentialForm, FormMode
from .menu import ModeSelectionMenu, SessionMode
from .credentials import CredentialsManager
from .browser import RemoteBrowser
from .router import Router, SessionRequest

__all__ = [
    "AppConfig",
    "AuthType",
    "Connection",
    "Credential",
    "Icon",
    "RemoteEntry",
    "Settings",
    "KeyPress",
    "Resize",
    "ConfirmationModal",
    "ConnectionForm",
    "CredentialForm",
    "FormMode",
    "ModeSelectionMenu",
    "SessionMode",
    "CredentialsManager",
    "RemoteBrowser",
    "Router",
    "SessionRequest",
]
