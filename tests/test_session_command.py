"""Tests for the session command and the click entry point."""

import builtins
import io
import sys

import pytest
from click.testing import CliRunner

from conftest import output_of
from wcli.commands import session as session_module
from wcli.commands.session import SessionCommand
from wcli.main import cli
from wcli.settings import RuntimeSettings


@pytest.fixture
def env_file(tmp_path, key_file):
    path = tmp_path / "wcli.env"
    path.write_text(f"PASS='s3cret'\nEC2='ec2-user@host'\nPEM='{key_file}'\n")
    return path


@pytest.fixture(autouse=True)
def local_user(monkeypatch):
    monkeypatch.setattr(session_module, "check_name", lambda: "josh")


def scripted_stdin(monkeypatch, lines):
    lines = list(lines)

    def fake_input(prompt=""):
        if not lines:
            raise EOFError
        return lines.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)


def make_command(env_file, console, connector_factory, **settings):
    return SessionCommand(
        env_file=str(env_file),
        settings=RuntimeSettings(**settings),
        console=console,
        connector_factory=connector_factory,
    )


def test_session_runs_until_exit(env_file, console, connector_factory, host, monkeypatch):
    host.respond("ls -l", stdout="total 16\n")
    scripted_stdin(monkeypatch, ["cmd", "ls -l", "exit", "exit"])

    make_command(env_file, console, connector_factory).run()

    out = output_of(console)
    assert "Welcome to WCLI Josh" in out
    assert "Connected to EC2" in out
    assert "total 16" in out
    assert host.commands == ["echo test", "ls -l"]
    assert host.client.closed


def test_session_ends_on_eof(env_file, console, connector_factory, host, monkeypatch):
    scripted_stdin(monkeypatch, [])

    make_command(env_file, console, connector_factory).run()

    assert host.client.closed


def test_config_error_exits_2_without_connecting(tmp_path, console, connector_factory, host):
    env = tmp_path / ".env"
    env.write_text("PASS='x'\nEC2='ec2-user@host'\n")

    with pytest.raises(SystemExit) as excinfo:
        make_command(env, console, connector_factory).run()

    assert excinfo.value.code == 2
    assert host.connects == 0
    assert "PEM" in output_of(console)


def test_connect_failure_exits_1(env_file, console, connector_factory, host, monkeypatch):
    host.connect_errors = [ConnectionRefusedError("refused")]
    scripted_stdin(monkeypatch, ["exit"])

    with pytest.raises(SystemExit) as excinfo:
        make_command(env_file, console, connector_factory).run()

    assert excinfo.value.code == 1
    assert "Unable to connect to EC2" in output_of(console)


def test_session_log_written(env_file, console, connector_factory, host, monkeypatch, tmp_path):
    log_dir = tmp_path / "logs"
    scripted_stdin(monkeypatch, ["cmd", "sudo ls /root", "exit", "exit"])

    make_command(env_file, console, connector_factory, log_dir=log_dir).run()

    (log_file,) = log_dir.glob("*/*_session.log")
    text = log_file.read_text()
    assert "echo **** | sudo -S ls /root" in text
    assert "s3cret" not in text


def test_cli_missing_config_file(tmp_path):
    result = CliRunner().invoke(cli, [str(tmp_path / "missing.env")])

    assert result.exit_code == 2
    assert "Configuration file not found" in result.output


def test_cli_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_undecodable_input_does_not_end_session(
    env_file, console, connector_factory, host, monkeypatch
):
    stdin = io.TextIOWrapper(io.BytesIO(b"cmd\n\xff\xfe ls\nuptime\nexit\nexit\n"), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stdin)
    monkeypatch.setattr(builtins, "input", lambda prompt="": _read_line(stdin))

    make_command(env_file, console, connector_factory).run()

    assert host.commands == ["echo test", "\ufffd\ufffd ls", "uptime"]
    assert host.client.closed


def _read_line(stream):
    line = stream.readline()
    if not line:
        raise EOFError
    return line.rstrip("\n")
