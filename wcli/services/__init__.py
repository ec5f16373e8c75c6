"""
WCLI Services Layer

Credential loading and the remote connector.
"""

from .credential_store import CredentialStore
from .ssh_service import Session, SSHService

__all__ = [
    "CredentialStore",
    "Session",
    "SSHService",
]
