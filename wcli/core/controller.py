"""
Mode Controller

State machine behind the prompt. ROOT only switches modes; every other mode
turns payload lines into remote commands through the translator and relays
them over the single session.
"""

from datetime import datetime
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape

from wcli.constants import CONNECTED_DATE_FORMAT, PROBE_COMMAND
from wcli.core import translator
from wcli.exceptions import ExecError, ExecFailure, WcliError
from wcli.logger import SessionLogger
from wcli.models.modes import (
    GitContext,
    Mode,
    ModeState,
    ShellContext,
    SqlContext,
    TestContext,
)
from wcli.models.results import CommandResult, TestSummary
from wcli.services.ssh_service import Session, SSHService
from wcli.ui_components import (
    print_result,
    print_sql_table,
    print_test_summary,
    show_help,
)
from wcli.utils import clear_terminal, format_elapsed

USAGE_HINT = "invalid command, run 'help' for commands"


class ModeController:
    """
    Dispatches one input line at a time.

    The controller owns the mode state and the session handle; the
    connector owns the connection itself.
    """

    def __init__(
        self,
        connector: SSHService,
        password: str,
        console: Optional[Console] = None,
        ask: Optional[Callable[[str], str]] = None,
        logger: Optional[SessionLogger] = None,
    ):
        """
        Initialize mode controller.

        Args:
            connector: Remote connector used for every relayed command
            password: Sudo password for root-level commands
            console: Rich Console for output
            ask: Reads one answer for a labelled prompt (raises EOFError)
            logger: Session logger
        """
        self.connector = connector
        self.password = password
        self.console = console or Console()
        self.ask = ask or self._console_ask
        self.logger = logger or connector.logger
        self.session: Optional[Session] = None
        self.state = ModeState.root()

    @property
    def mode(self) -> Mode:
        return self.state.mode

    def open(self) -> CommandResult:
        """
        Connect and probe the host once.

        Raises:
            ConnectError: If the connection cannot be established
            ExecError: If the probe command fails
        """
        result = self._relay(PROBE_COMMAND).check()
        when = datetime.now().strftime(CONNECTED_DATE_FORMAT)
        self.console.print(
            f"[green]Connected[/green] to EC2 on {when} in "
            f"{format_elapsed(result.duration_seconds)}\n"
        )
        return result

    def close(self) -> None:
        """Tear the session down (safe to call more than once)."""
        if self.session is not None:
            self.connector.close(self.session)
            self.session = None

    def handle(self, line: str) -> bool:
        """
        Process one input line.

        Returns:
            False when the process should terminate, True otherwise
        """
        word = line.strip()
        if not word:
            return True

        if word == "help":
            show_help(self.mode, self.console)
            return True
        if word == "clear":
            clear_terminal(self.console)
            return True

        if self.state.is_root:
            return self._handle_root(word)

        if word == "exit":
            self._leave()
            return True

        try:
            self._dispatch(line.rstrip("\r\n"))
        except WcliError as e:
            self.logger.log_error(e.message, e.context)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Interrupted[/yellow]")
            self.logger.log("Interrupted while waiting for the host", "WARNING")
        return True

    # ── transitions ───────────────────────────────────────────────────────────

    def _handle_root(self, word: str) -> bool:
        if word == "exit":
            return False

        mode = Mode.from_keyword(word)
        if mode is None:
            self.console.print(USAGE_HINT)
            return True

        try:
            self._enter(mode)
        except WcliError as e:
            self.logger.log_error(e.message, e.context)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]Interrupted[/yellow]")
        return True

    def _enter(self, mode: Mode) -> None:
        if mode is Mode.SHELL:
            context = ShellContext()
        elif mode is Mode.GIT:
            context = self._prompt_git()
        elif mode is Mode.SQL:
            context = self._prompt_sql()
        else:
            context = self._prompt_test()

        self.state = ModeState(mode=mode, context=context)
        self.logger.log(f"Entered {mode.keyword} mode")
        self.console.print("Run 'help' for commands\n")
        if mode is Mode.TEST:
            self._run_tests()

    def _leave(self) -> None:
        self.logger.log(f"Left {self.mode.keyword} mode")
        self.state = ModeState.root()

    # ── prompts ───────────────────────────────────────────────────────────────

    def _console_ask(self, label: str) -> str:
        return self.console.input(f"{label}: ", markup=False)

    def _ask_field(self, label: str) -> str:
        """Ask until a non-blank answer is given."""
        while True:
            answer = self.ask(label).strip()
            if answer:
                return answer
            self.console.print(f"[yellow]{label} is required[/yellow]")

    def _prompt_git(self) -> GitContext:
        return GitContext(repo_path=self._ask_field("Repo path"))

    def _prompt_sql(self) -> SqlContext:
        result = self._relay(translator.sql_probe_command(self.password))
        if result.is_failure:
            raise ExecError(
                ExecFailure.REMOTE_NON_ZERO_EXIT,
                "Unable to connect to mariadb",
                exit_code=result.exit_code,
                context=result.stderr.strip() or None,
            )
        self.console.print(
            f"[green]Connected[/green] to mariadb in "
            f"{format_elapsed(result.duration_seconds)}\n"
        )
        database = self._ask_field("Database")
        return SqlContext(database=database, latency_seconds=result.duration_seconds)

    def _prompt_test(self) -> TestContext:
        return TestContext(
            repo_path=self._ask_field("Repo path"),
            venv_name=self._ask_field("venv name"),
            tests_path=self._ask_field("Tests path"),
        )

    # ── payload ───────────────────────────────────────────────────────────────

    def _dispatch(self, line: str) -> None:
        mode = self.mode
        if mode is Mode.SHELL:
            self._shell(line)
        elif mode is Mode.GIT:
            self._git(line)
        elif mode is Mode.SQL:
            self._sql(line)
        elif mode is Mode.TEST:
            self._test(line)

    def _shell(self, line: str) -> None:
        word = line.strip()
        first = word.split(maxsplit=1)[0]

        if first in translator.PACKAGE_ACTIONS:
            # `install docker` names the package; bare `install` asks for it
            package = word[len(first):].strip() or self._ask_field("Package")
            command = translator.package_command(first, package, self.password)
        elif first == "sudo":
            command = translator.sudo_command(word, self.password)
        else:
            command = translator.translate_shell(line)

        if command is not None:
            print_result(self._relay(command), self.console)

    def _git(self, line: str) -> None:
        if line.strip() == "change":
            self.state = ModeState(mode=Mode.GIT, context=self._prompt_git())
            return

        command = translator.translate_git(self.state.context, line)
        if command is not None:
            print_result(self._relay(command), self.console)

    def _sql(self, line: str) -> None:
        context: SqlContext = self.state.context
        word = line.strip()

        if word == "database":
            self.console.print(
                f"In database: [cyan]{escape(context.database)}[/cyan] "
                f"[dim](connected in {format_elapsed(context.latency_seconds)})[/dim]"
            )
            return
        if word == "change":
            database = self._ask_field("Database")
            self.state = ModeState(
                mode=Mode.SQL,
                context=SqlContext(database=database, latency_seconds=context.latency_seconds),
            )
            return

        command = translator.translate_sql(context, line, self.password)
        if command is None:
            return
        result = self._relay(command)
        if result.is_failure:
            print_result(result, self.console)
            return
        header, rows = translator.parse_batch_table(result.stdout)
        print_sql_table(header, rows, self.console)

    def _test(self, line: str) -> None:
        if line.strip() == "change":
            self.state = ModeState(mode=Mode.TEST, context=self._prompt_test())
        self._run_tests()

    def _run_tests(self) -> None:
        result = self._relay(translator.translate_test(self.state.context))
        summary = TestSummary.from_result(result)
        self.logger.log(summary.headline)
        print_test_summary(summary, self.console)

    # ── connector ─────────────────────────────────────────────────────────────

    def _session(self) -> Session:
        if self.session is None:
            self.session = self.connector.connect()
        return self.session

    def _relay(self, command: str) -> CommandResult:
        session = self._session()
        with self.console.status("[dim]running…[/dim]", spinner="dots"):
            return self.connector.execute(session, command)
