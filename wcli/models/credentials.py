"""
Credential Models

Dataclass models for the static credential triple and the remote target.
"""

import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_SSH_PORT = 22
REDACTED = "****"
# shorter passwords are only masked where they are piped into sudo
MIN_REDACT_LENGTH = 4


@dataclass(frozen=True)
class Credentials:
    """Sudo password, ``user@host`` target and private key path."""

    password: str = field(repr=False)
    host: str
    key_path: str

    @property
    def key_path_expanded(self) -> Path:
        """Get expanded key path (resolves ~)."""
        return Path(self.key_path).expanduser()

    @property
    def target(self) -> "SSHTarget":
        """Get the parsed connection target."""
        return SSHTarget.parse(self.host)

    def redact(self, text: str) -> str:
        """Mask the password, raw or shell-quoted, wherever it appears in ``text``."""
        if not self.password:
            return text
        quoted = shlex.quote(self.password)
        text = text.replace(f"echo {quoted} |", f"echo {REDACTED} |")
        if len(self.password) < MIN_REDACT_LENGTH:
            return text
        return text.replace(quoted, REDACTED).replace(self.password, REDACTED)


@dataclass(frozen=True)
class SSHTarget:
    """SSH connection details for the single host."""

    user: str
    hostname: str
    port: int = DEFAULT_SSH_PORT

    @classmethod
    def parse(cls, host: str) -> "SSHTarget":
        """
        Parse ``user@host[:port]``.

        Raises:
            ValueError: If the string is not of that form
        """
        user, sep, address = host.partition("@")
        if not sep or not user or not address:
            raise ValueError(f"expected user@host, got '{host}'")

        port: Optional[int] = None
        hostname = address
        if address.count(":") == 1:
            hostname, port_str = address.split(":")
            if not port_str.isdigit():
                raise ValueError(f"invalid port '{port_str}'")
            port = int(port_str)
            if not 1 <= port <= 65535:
                raise ValueError(f"port must be 1-65535, got {port}")

        if not hostname:
            raise ValueError(f"expected user@host, got '{host}'")

        return cls(user=user, hostname=hostname, port=port or DEFAULT_SSH_PORT)

    @property
    def connection_string(self) -> str:
        """Get SSH connection string (user@host)."""
        return f"{self.user}@{self.hostname}"

    def __repr__(self) -> str:
        return f"SSHTarget(host={self.hostname}, user={self.user}, port={self.port})"
