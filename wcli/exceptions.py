"""
WCLI Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from enum import Enum
from typing import Optional


class ConfigFailure(Enum):
    """Why the credential source was rejected."""

    SOURCE_NOT_FOUND = "SourceNotFound"
    MISSING_FIELD = "MissingField"
    MALFORMED_FIELD = "MalformedField"
    KEY_FILE_NOT_FOUND = "KeyFileNotFound"
    KEY_FILE_PERMISSION_DENIED = "KeyFilePermissionDenied"


class ConnectFailure(Enum):
    """Why the connection to the host could not be opened."""

    TIMEOUT = "Timeout"
    AUTH_REJECTED = "AuthRejected"
    HOST_UNREACHABLE = "HostUnreachable"
    KEY_INVALID = "KeyInvalid"


class ExecFailure(Enum):
    """Why a relayed command did not produce a result."""

    TIMEOUT = "Timeout"
    DISCONNECTED = "Disconnected"
    MULTILINE_NOT_SUPPORTED = "MultilineNotSupported"
    REMOTE_NON_ZERO_EXIT = "RemoteNonZeroExit"


class WcliError(Exception):
    """Base exception for all WCLI errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(WcliError):
    """Raised when the credential configuration is invalid or missing."""

    def __init__(
        self,
        reason: ConfigFailure,
        message: str,
        field: Optional[str] = None,
        context: Optional[str] = None,
    ):
        self.reason = reason
        self.field = field
        super().__init__(message, context)


class ConnectError(WcliError):
    """Raised when the remote session cannot be established."""

    def __init__(self, reason: ConnectFailure, message: str, context: Optional[str] = None):
        self.reason = reason
        super().__init__(message, context)


class ExecError(WcliError):
    """Raised when a remote command cannot be relayed."""

    def __init__(
        self,
        reason: ExecFailure,
        message: str,
        exit_code: Optional[int] = None,
        context: Optional[str] = None,
    ):
        self.reason = reason
        self.exit_code = exit_code
        super().__init__(message, context)


class MissingFieldError(ConfigurationError):
    """Raised when a required key is absent or blank."""

    def __init__(self, field: str, source: str):
        message = f"'{field}' is not set"
        context = f"Add {field}=... to {source}"
        super().__init__(ConfigFailure.MISSING_FIELD, message, field=field, context=context)


class MultilineNotSupportedError(ExecError):
    """Raised when a payload contains a line terminator in the middle."""

    def __init__(self, command: str):
        self.command = command
        message = "Multi-line commands are not supported"
        context = "Each command must fit on one line, join steps with '&&'"
        super().__init__(ExecFailure.MULTILINE_NOT_SUPPORTED, message, context=context)
