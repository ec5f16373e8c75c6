"""Tests for the read-dispatch loop."""

from conftest import ScriptedInput, output_of
from wcli.core.controller import ModeController
from wcli.core.repl import Repl
from wcli.models.modes import Mode


class ScriptedLines:
    """Feeds input lines and records the prompt shown for each."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        line = self.lines.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line


def make_repl(connector, console, logger, lines, answers=()):
    controller = ModeController(
        connector, "s3cret", console=console, ask=ScriptedInput(answers), logger=logger
    )
    reader = ScriptedLines(lines)
    return Repl(controller, "josh", console=console, read_line=reader), reader


def test_exit_from_root_returns_zero(connector, console, logger):
    repl, _ = make_repl(connector, console, logger, ["exit"])

    assert repl.run() == 0


def test_eof_returns_zero(connector, console, logger):
    repl, _ = make_repl(connector, console, logger, [])

    assert repl.run() == 0


def test_prompts_follow_mode(connector, console, logger):
    repl, reader = make_repl(connector, console, logger, ["cmd", "exit", "exit"])

    repl.run()

    assert reader.prompts == ["[josh@wcli ~]$ ", ">>> ", "[josh@wcli ~]$ "]


def test_exit_inside_mode_returns_to_root(connector, console, logger, host):
    repl, _ = make_repl(connector, console, logger, ["cmd", "uptime", "exit"])

    assert repl.run() == 0

    assert repl.controller.mode is Mode.ROOT
    assert host.commands == ["uptime"]


def test_ctrl_c_at_prompt_continues(connector, console, logger):
    repl, reader = make_repl(connector, console, logger, [KeyboardInterrupt(), "exit"])

    assert repl.run() == 0
    assert len(reader.prompts) == 2


def test_eof_while_prompting_for_field_ends_cleanly(connector, console, logger):
    repl, _ = make_repl(connector, console, logger, ["git"], answers=[])

    assert repl.run() == 0
    assert repl.controller.mode is Mode.ROOT


def test_bad_commands_never_end_the_session(connector, console, logger, host):
    host.respond("false", exit_code=1)
    lines = ["foobar", "cmd", "false", "a\nb", "exit", "exit"]
    repl, reader = make_repl(connector, console, logger, lines)

    assert repl.run() == 0
    assert len(reader.prompts) == len(lines)
    assert "exit code 1" in output_of(console)


def test_undecodable_line_is_reported_and_loop_continues(connector, console, logger, host):
    bad = UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")
    repl, _ = make_repl(connector, console, logger, ["cmd", bad, "uptime", "exit", "exit"])

    assert repl.run() == 0

    assert "Input is not valid UTF-8" in output_of(console)
    assert host.commands == ["uptime"]
