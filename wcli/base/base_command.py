"""
Base Command Class

Abstract base for WCLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from typing import Optional

from rich.console import Console
from rich.markup import escape

from wcli.constants import (
    EXIT_CONFIG_INVALID,
    EXIT_INTERRUPTED,
    EXIT_OK,
)
from wcli.exceptions import ConfigurationError
from wcli.logger import SessionLogger


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Console and logger
    - Error handling with consistent exit codes
    - Common print helpers
    """

    def __init__(self, verbose: bool = False, console: Optional[Console] = None):
        self.verbose = verbose
        self.console = console or Console()
        self.logger: Optional[SessionLogger] = None

    def print_error(self, message: str) -> None:
        """Print error message."""
        self.console.print(f"[red]✗ {escape(message)}[/red]")

    def print_dim(self, message: str) -> None:
        """Print dim message."""
        self.console.print(f"[dim]{escape(message)}[/dim]")

    def handle_error(self, error: Exception, context: Optional[str] = None) -> None:
        """
        Handle error with consistent formatting.

        Args:
            error: Exception object
            context: Optional context message
        """
        message = getattr(error, "message", None) or str(error)
        context = context or getattr(error, "context", None)
        if self.logger:
            self.logger.log_error(message, context=context)
        else:
            self.print_error(message)
            if context:
                self.print_dim(f"Context: {context}")

    @abstractmethod
    def execute(self, **kwargs) -> int:
        """
        Execute command logic and return the exit code.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Raises:
            SystemExit: With the command's exit code when it is non-zero
        """
        try:
            code = self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Cancelled by user[/yellow]")
            raise SystemExit(EXIT_INTERRUPTED)
        except SystemExit:
            raise
        except ConfigurationError as e:
            self.console.print("\n[bold red]✗ Invalid configuration[/bold red]")
            self.handle_error(e)
            raise SystemExit(EXIT_CONFIG_INVALID)
        except ValueError as e:
            self.console.print(f"\n[bold red]✗ Invalid value:[/bold red] {escape(str(e))}\n")
            raise SystemExit(EXIT_CONFIG_INVALID)

        if code != EXIT_OK:
            raise SystemExit(code)
