"""
Session Command

Load credentials, connect to the host and run the interactive shell.
"""

import sys
from typing import Optional

from rich.console import Console

from wcli.base import BaseCommand
from wcli.constants import EXIT_CONNECT_FAILED
from wcli.core import ModeController, Repl
from wcli.exceptions import ConnectError, ExecError
from wcli.logger import SessionLogger
from wcli.services import CredentialStore, SSHService
from wcli.settings import RuntimeSettings
from wcli.ui_components import show_banner
from wcli.utils import capitalise, check_name


def _lossy_stdin() -> None:
    """Decode undecodable input bytes as U+FFFD instead of raising."""
    reconfigure = getattr(sys.stdin, "reconfigure", None)
    if reconfigure is not None:
        reconfigure(errors="replace")


class SessionCommand(BaseCommand):
    """
    Interactive session against the configured EC2 host.

    Features:
    - Credential validation before any network access
    - Startup connection probe
    - Root prompt with cmd/git/sql/test sub-shells
    """

    def __init__(
        self,
        env_file: Optional[str] = None,
        settings: Optional[RuntimeSettings] = None,
        console: Optional[Console] = None,
        connector_factory=SSHService,
    ):
        """
        Initialize session command.

        Args:
            env_file: Credential file path (None searches default locations)
            settings: Runtime settings (read from the environment when None)
            console: Rich Console for all output
            connector_factory: Builds the remote connector
        """
        super().__init__(console=console)
        self.settings = settings
        self.env_file = env_file
        self.connector_factory = connector_factory

    def execute(self) -> int:
        """Execute session command."""
        if self.settings is None:
            self.settings = RuntimeSettings.from_env()
        self.verbose = self.settings.verbose
        _lossy_stdin()

        store = CredentialStore(self.env_file)
        credentials = store.load()

        user = check_name()
        show_banner(capitalise(user), console=self.console)
        self.print_dim(f"Loaded: {store.source_name}")

        with SessionLogger(
            log_dir=self.settings.log_dir,
            verbose=self.verbose,
            console=self.console,
            redact=credentials.redact,
        ) as logger:
            self.logger = logger
            logger.log(f"Credentials loaded from {store.source_name}")

            connector = self.connector_factory(
                credentials,
                command_timeout=self.settings.command_timeout,
                connect_timeout=self.settings.connect_timeout,
                logger=logger,
            )
            controller = ModeController(
                connector,
                credentials.password,
                console=self.console,
                logger=logger,
            )
            try:
                try:
                    controller.open()
                except (ConnectError, ExecError) as e:
                    self.console.print("\n[bold red]✗ Unable to connect to EC2[/bold red]")
                    self.handle_error(e)
                    return EXIT_CONNECT_FAILED
                return Repl(controller, user, console=self.console).run()
            finally:
                controller.close()
