"""
Logging system for WCLI
Writes session events to an optional log file with clean console output
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from wcli.constants import LOG_DATE_FORMAT, LOG_TIME_FORMAT, VERSION

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class SessionLogger:
    """
    Manages logging for one interactive session
    - Writes events to a log file when a log directory is configured
    - Mirrors events to the console when verbose
    - Always shows errors on the console
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        verbose: bool = False,
        console: Optional[Console] = None,
        redact: Optional[Callable[[str], str]] = None,
    ):
        """
        Initialize logger

        Args:
            log_dir: Root directory for log files (None disables the file)
            verbose: If True, show all log lines in console
            console: Rich Console to print to
            redact: Masks secrets before anything is written
        """
        self.verbose = verbose
        self.console = console if console is not None else Console()
        self.redact = redact or (lambda text: text)
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.has_errors = False

        if log_dir is not None:
            # Structure: {log_dir}/{date}/{time}_session.log
            now = datetime.now()
            session_dir = Path(log_dir) / now.strftime(LOG_DATE_FORMAT)
            session_dir.mkdir(parents=True, exist_ok=True)

            self.log_path = session_dir / f"{now.strftime(LOG_TIME_FORMAT)}_session.log"
            self.log_file = open(self.log_path, "w", buffering=1)
            self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
WCLI Session Log
{"=" * 80}
Version: {VERSION}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        message = self.redact(message)
        timestamp = datetime.now().strftime("%H:%M:%S")

        if self.log_file:
            self.log_file.write(f"[{timestamp}] [{level}] {message}\n")
            self.log_file.flush()

        if self.verbose:
            text = escape(message)
            if level == "ERROR":
                self.console.print(f"[red]{text}[/red]")
            elif level == "WARNING":
                self.console.print(f"[yellow]{text}[/yellow]")
            else:
                self.console.print(f"[dim]{text}[/dim]")

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output to the file only

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output or not self.log_file:
            return

        clean_output = self.redact(_ANSI_ESCAPE.sub("", output))
        for line in clean_output.splitlines():
            self.log_file.write(f"  [{stream}] {line}\n")
        self.log_file.flush()

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context and show it on the console

        Args:
            error: Error message
            context: Additional context (e.g., command that failed)
        """
        self.has_errors = True
        error = self.redact(error)
        context = self.redact(context) if context else None

        if self.log_file:
            error_block = f"\n{'!' * 80}\nERROR\n{'!' * 80}\n{error}\n"
            if context:
                error_block += f"\nContext: {context}\n"
            error_block += f"{'!' * 80}\n\n"
            self.log_file.write(error_block)
            self.log_file.flush()

        self.console.print(f"[bold red]✗ {escape(error)}[/bold red]")
        if context:
            self.console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

    def warning(self, message: str):
        """Log a warning message and show it on the console"""
        self.log(message, "WARNING")

        if not self.verbose:
            self.console.print(f"[yellow]⚠[/yellow] [dim]{escape(self.redact(message))}[/dim]")

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type not in (SystemExit, KeyboardInterrupt):
            self.log_error(
                str(exc_val) if exc_val else "Session failed",
                context=f"{exc_type.__name__}",
            )
        self.close()
        return False
