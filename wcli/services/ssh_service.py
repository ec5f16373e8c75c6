"""SSH service for executing commands on the remote host."""

import socket
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import paramiko
from paramiko.pkey import UnknownKeyType

from wcli.constants import (
    CHANNEL_POLL_INTERVAL,
    CHANNEL_READ_SIZE,
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
)
from wcli.exceptions import (
    ConnectError,
    ConnectFailure,
    ExecError,
    ExecFailure,
    MultilineNotSupportedError,
)
from wcli.logger import SessionLogger
from wcli.models.credentials import Credentials
from wcli.models.results import CommandResult


@dataclass
class Session:
    """The single authenticated connection for this process."""

    client: Any = None
    connected: bool = False
    stale: bool = False
    last_error: Optional[str] = None
    reconnects: int = 0

    @property
    def is_active(self) -> bool:
        """Check if the underlying transport is still up."""
        if not self.connected or self.client is None:
            return False
        transport = self.client.get_transport()
        return transport is not None and transport.is_active()


def validate_command_line(command: str) -> str:
    """
    Strip one trailing line terminator and reject any other.

    Raises:
        MultilineNotSupportedError: If a terminator remains inside the text
    """
    line = command.rstrip("\r\n")
    if "\n" in line or "\r" in line:
        raise MultilineNotSupportedError(command)
    return line


class SSHService:
    """
    Remote connector owning one long-lived paramiko connection.

    Features:
    - Private key authentication against a single host
    - One command per line, stdout/stderr/exit status per call
    - One silent reconnect when the connection drops
    """

    def __init__(
        self,
        credentials: Credentials,
        command_timeout: float = DEFAULT_COMMAND_TIMEOUT,
        connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
        logger: Optional[SessionLogger] = None,
        client_factory: Callable[[], Any] = paramiko.SSHClient,
        key_loader: Callable[..., Any] = paramiko.PKey.from_path,
    ):
        """
        Initialize SSH service.

        Args:
            credentials: Credential triple, kept for reconnects
            command_timeout: Default seconds to wait for a command
            connect_timeout: Seconds to wait for TCP connect and handshake
            logger: Session logger
            client_factory: Builds the SSH client (replaced in tests)
            key_loader: Loads the private key (replaced in tests)
        """
        self.credentials = credentials
        self.command_timeout = command_timeout
        self.connect_timeout = connect_timeout
        self.logger = logger or SessionLogger(redact=credentials.redact)
        self.client_factory = client_factory
        self.key_loader = key_loader

    def connect(self) -> Session:
        """
        Open the authenticated connection.

        Returns:
            A connected Session

        Raises:
            ConnectError: Timeout, AuthRejected, HostUnreachable or KeyInvalid
        """
        session = Session()
        self._open(session)
        return session

    def execute(
        self, session: Session, command: str, timeout: Optional[float] = None
    ) -> CommandResult:
        """
        Execute one command line on the remote host.

        A non-zero exit status is returned in the result, not raised.

        Args:
            session: Session returned by connect()
            command: A single line of shell text
            timeout: Seconds to wait (defaults to command_timeout)

        Returns:
            CommandResult with stdout, stderr and exit code

        Raises:
            ExecError: Timeout, Disconnected or MultilineNotSupported
        """
        line = validate_command_line(command)
        timeout = timeout or self.command_timeout

        try:
            return self._run(session, line, timeout)
        except ExecError as e:
            if e.reason is not ExecFailure.DISCONNECTED:
                raise
            first_error = e

        self.logger.warning("Connection lost, reconnecting once")
        try:
            self._reopen(session)
            return self._run(session, line, timeout)
        except ExecError as e:
            if e.reason is not ExecFailure.DISCONNECTED:
                raise
            error = e
        except ConnectError as e:
            error = e

        session.last_error = str(error)
        self.logger.log(f"Reconnect failed: {error.message}", "ERROR")
        raise ExecError(
            ExecFailure.DISCONNECTED,
            "Connection to the host was lost",
            context=first_error.context or error.message,
        ) from error

    def close(self, session: Session) -> None:
        """Release the connection (safe to call more than once)."""
        if session.client is not None:
            try:
                session.client.close()
            finally:
                session.client = None
                if session.connected:
                    self.logger.log("Connection closed")
        session.connected = False
        session.stale = False

    def _open(self, session: Session) -> None:
        target = self.credentials.target
        pkey = self._load_key()

        client = self.client_factory()
        client.load_system_host_keys()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())

        where = f"{target.connection_string}:{target.port}"
        self.logger.log(f"Connecting to {where}")
        try:
            client.connect(
                hostname=target.hostname,
                port=target.port,
                username=target.user,
                pkey=pkey,
                timeout=self.connect_timeout,
                banner_timeout=self.connect_timeout,
                auth_timeout=self.connect_timeout,
                allow_agent=False,
                look_for_keys=False,
            )
        except socket.timeout as e:
            raise self._connect_failed(client, session, ConnectFailure.TIMEOUT,
                                       f"Timed out connecting to {where}", e)
        except paramiko.AuthenticationException as e:
            raise self._connect_failed(client, session, ConnectFailure.AUTH_REJECTED,
                                       f"Authentication rejected by {where}", e)
        except (paramiko.SSHException, OSError) as e:
            raise self._connect_failed(client, session, ConnectFailure.HOST_UNREACHABLE,
                                       f"Host unreachable: {where}", e)

        session.client = client
        session.connected = True
        session.stale = False
        session.last_error = None
        self.logger.success(f"Connected to {where}")

    def _connect_failed(
        self,
        client: Any,
        session: Session,
        reason: ConnectFailure,
        message: str,
        error: Exception,
    ) -> ConnectError:
        client.close()
        session.connected = False
        session.last_error = f"{reason.value}: {error}"
        self.logger.log(f"{message} ({error})", "ERROR")
        return ConnectError(reason, message, context=str(error) or None)

    def _load_key(self) -> Any:
        key_path = str(self.credentials.key_path_expanded)
        try:
            try:
                return self.key_loader(key_path)
            except paramiko.PasswordRequiredException:
                # Encrypted key: PASS doubles as the passphrase
                return self.key_loader(key_path, passphrase=self.credentials.password)
        except (paramiko.SSHException, ValueError, OSError) as e:
            raise ConnectError(
                ConnectFailure.KEY_INVALID,
                f"Private key could not be loaded: {key_path}",
                context=str(e) or None,
            )
        except UnknownKeyType as e:
            raise ConnectError(
                ConnectFailure.KEY_INVALID,
                f"Unsupported private key type: {key_path}",
                context=str(e) or None,
            )

    def _reopen(self, session: Session) -> None:
        self.close(session)
        session.reconnects += 1
        self._open(session)

    def _run(self, session: Session, line: str, timeout: float) -> CommandResult:
        if session.stale and session.is_active:
            session.stale = False
        if not session.is_active:
            raise ExecError(ExecFailure.DISCONNECTED, "Not connected to the host")

        self.logger.log_command(line)
        start_time = time.monotonic()
        try:
            channel = session.client.get_transport().open_session(timeout=timeout)
            channel.exec_command(line)
        except (paramiko.SSHException, EOFError, OSError) as e:
            session.stale = True
            raise ExecError(ExecFailure.DISCONNECTED, "Connection to the host was lost",
                            context=str(e) or None)

        try:
            stdout, stderr, exit_code = self._collect(channel, start_time + timeout)
        except socket.timeout:
            session.stale = True
            raise ExecError(
                ExecFailure.TIMEOUT,
                f"Command timed out after {timeout:g}s",
                context=line,
            )
        except KeyboardInterrupt:
            session.stale = True
            raise
        except (paramiko.SSHException, EOFError, OSError) as e:
            session.stale = True
            raise ExecError(ExecFailure.DISCONNECTED, "Connection to the host was lost",
                            context=str(e) or None)
        finally:
            channel.close()

        duration = time.monotonic() - start_time
        result = CommandResult(
            stdout=stdout,
            stderr=stderr,
            exit_code=exit_code,
            command=line,
            duration_seconds=duration,
        )
        self.logger.log_output(result.stdout, "stdout")
        self.logger.log_output(result.stderr, "stderr")
        self.logger.log(f"Exit code {exit_code} in {duration:.2f}s")
        return result

    @staticmethod
    def _collect(channel: Any, deadline: float):
        """Drain both streams until the command exits or the deadline passes."""
        stdout_chunks = []
        stderr_chunks = []

        while True:
            if channel.recv_ready():
                stdout_chunks.append(channel.recv(CHANNEL_READ_SIZE))
                continue
            if channel.recv_stderr_ready():
                stderr_chunks.append(channel.recv_stderr(CHANNEL_READ_SIZE))
                continue
            if channel.exit_status_ready():
                break
            if channel.closed:
                raise EOFError("channel closed before the command exited")
            if time.monotonic() >= deadline:
                raise socket.timeout()
            time.sleep(CHANNEL_POLL_INTERVAL)

        exit_code = channel.recv_exit_status()
        # exit status can arrive ahead of the last output
        while channel.recv_ready():
            stdout_chunks.append(channel.recv(CHANNEL_READ_SIZE))
        while channel.recv_stderr_ready():
            stderr_chunks.append(channel.recv_stderr(CHANNEL_READ_SIZE))

        return (
            b"".join(stdout_chunks).decode("utf-8", errors="replace"),
            b"".join(stderr_chunks).decode("utf-8", errors="replace"),
            exit_code,
        )
