"""Interactive read-dispatch loop."""

from typing import Callable, Optional

from rich.console import Console

from wcli.constants import EXIT_OK, MODE_PROMPT, ROOT_PROMPT
from wcli.core.controller import ModeController


class Repl:
    """Reads one line at a time and hands it to the controller until exit/EOF."""

    def __init__(
        self,
        controller: ModeController,
        user: str,
        console: Optional[Console] = None,
        read_line: Optional[Callable[[str], str]] = None,
    ):
        self.controller = controller
        self.user = user
        self.console = console or controller.console
        self.read_line = read_line or self._console_read

    def _console_read(self, prompt: str) -> str:
        return self.console.input(prompt, markup=False)

    @property
    def prompt(self) -> str:
        if self.controller.state.is_root:
            return ROOT_PROMPT.format(user=self.user)
        return MODE_PROMPT

    def run(self) -> int:
        """Loop until ``exit`` at the root prompt or end of input."""
        while True:
            try:
                line = self.read_line(self.prompt)
            except EOFError:
                self.console.print()
                return EXIT_OK
            except KeyboardInterrupt:
                # Ctrl-C at the prompt discards the line
                self.console.print()
                continue
            except UnicodeDecodeError:
                self._reject_input()
                continue

            try:
                if not self.controller.handle(line):
                    return EXIT_OK
            except EOFError:
                # input ended while a mode was prompting for a field
                self.console.print()
                return EXIT_OK
            except UnicodeDecodeError:
                self._reject_input()

    def _reject_input(self) -> None:
        self.controller.logger.log_error("Input is not valid UTF-8, line ignored")
