"""Tests for the session logger."""

from conftest import output_of
from wcli.core import translator
from wcli.logger import SessionLogger
from wcli.models.credentials import Credentials


def test_no_file_without_log_dir(console):
    logger = SessionLogger(console=console)

    logger.log("hello")
    logger.close()

    assert logger.log_path is None
    assert output_of(console) == ""


def test_writes_file_with_header_and_footer(tmp_path, console):
    with SessionLogger(log_dir=tmp_path, console=console) as logger:
        logger.log("Connecting to ec2-user@host:22")
        logger.log_output("line one\nline two", "stdout")

    text = logger.log_path.read_text()
    assert logger.log_path.parent.parent == tmp_path
    assert logger.log_path.name.endswith("_session.log")
    assert "WCLI Session Log" in text
    assert "[INFO] Connecting to ec2-user@host:22" in text
    assert "  [stdout] line two" in text
    assert "Status: SUCCESS" in text


def test_password_is_redacted(tmp_path, console, credentials):
    with SessionLogger(log_dir=tmp_path, console=console, redact=credentials.redact) as logger:
        logger.log_command("echo s3cret | sudo -S ls")
        logger.log_error("failed: s3cret", context="s3cret")

    text = logger.log_path.read_text()
    assert "s3cret" not in text
    assert "echo **** | sudo -S ls" in text
    assert "s3cret" not in output_of(console)
    assert "Status: FAILED" in text


def test_errors_always_reach_console(console):
    logger = SessionLogger(console=console)

    logger.log_error("Connection to the host was lost", context="EOF")

    out = output_of(console)
    assert "Connection to the host was lost" in out
    assert "EOF" in out


def test_verbose_mirrors_to_console(console):
    logger = SessionLogger(console=console, verbose=True)

    logger.log("Entered git mode")

    assert "Entered git mode" in output_of(console)


def test_ansi_codes_stripped_from_file(tmp_path, console):
    with SessionLogger(log_dir=tmp_path, console=console) as logger:
        logger.log_output("\x1b[32mgreen\x1b[0m")

    assert "\x1b" not in logger.log_path.read_text()


def test_quoted_password_is_redacted(tmp_path, console, key_file):
    creds = Credentials(password="it's", host="ec2-user@host", key_path=str(key_file))

    with SessionLogger(log_dir=tmp_path, console=console, redact=creds.redact) as logger:
        logger.log_command(translator.sudo_command("sudo ls /root", creds.password))

    text = logger.log_path.read_text()
    assert "it'\"'\"'s" not in text
    assert "Executing: echo **** | sudo -S ls /root" in text


def test_short_password_only_masked_in_sudo_pipe(tmp_path, console, key_file):
    creds = Credentials(password="x", host="ec2-user@host", key_path=str(key_file))

    with SessionLogger(log_dir=tmp_path, console=console, redact=creds.redact) as logger:
        logger.log_command(translator.package_command("install", "xz", creds.password))
        logger.log("Connecting to ec2-user@box")

    text = logger.log_path.read_text()
    assert "Executing: echo **** | sudo -S yum install -y xz" in text
    assert "Connecting to ec2-user@box" in text


def test_warning_is_shown_without_verbose(console):
    logger = SessionLogger(console=console)

    logger.warning("Connection lost, reconnecting once")

    assert "Connection lost, reconnecting once" in output_of(console)
