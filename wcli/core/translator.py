"""
Command Translator

Pure functions mapping a mode context and an input line to the command
string run on the remote host. Every function returns None for blank input
so callers can skip the round trip.
"""

import shlex
from typing import List, Optional, Tuple

from wcli.constants import PACKAGE_MANAGER, SQL_CLIENT, SQL_USER, TEST_RUNNER
from wcli.models.modes import GitContext, SqlContext, TestContext

PACKAGE_ACTIONS = ("install", "remove")


def _as_root(command: str, password: str) -> str:
    """Pipe the password into ``sudo -S`` so ``command`` runs as root."""
    return f"echo {shlex.quote(password)} | sudo -S {command}"


def translate_shell(line: str) -> Optional[str]:
    """Raw shell: the line is the command."""
    if not line.strip():
        return None
    return line


def translate_git(context: GitContext, line: str) -> Optional[str]:
    """Run the payload with the repository as working directory."""
    if not line.strip():
        return None
    return f"cd {context.repo_path} && {line}"


def sudo_command(line: str, password: str) -> Optional[str]:
    """
    Run a ``sudo ...`` line non-interactively.

    Example:
        sudo yum update -y  ->  echo 'pw' | sudo -S yum update -y
    """
    line = line.strip()
    if not line:
        return None
    if line == "sudo" or line.startswith("sudo "):
        line = line[len("sudo"):].strip()
    if not line:
        return None
    return _as_root(line, password)


def package_command(action: str, package: str, password: str) -> Optional[str]:
    """Install or remove a package with the system package manager."""
    if action not in PACKAGE_ACTIONS:
        raise ValueError(f"action must be one of {PACKAGE_ACTIONS}, got '{action}'")
    package = package.strip()
    if not package:
        return None
    return _as_root(f"{PACKAGE_MANAGER} {action} -y {package}", password)


def sql_probe_command(password: str) -> str:
    """Check the SQL server answers before the SQL shell opens."""
    return _as_root(f"{SQL_CLIENT} --batch -u {SQL_USER} -e 'SELECT 1'", password)


def translate_sql(context: SqlContext, line: str, password: str) -> Optional[str]:
    """Send one statement to the SQL server in the selected database."""
    if not line.strip():
        return None
    statement = f"USE {context.database}; {line.strip()}"
    return _as_root(
        f"{SQL_CLIENT} --batch -u {SQL_USER} -e {shlex.quote(statement)}", password
    )


def translate_test(context: TestContext) -> str:
    """Activate the venv inside the repository and run the unittest suite."""
    return (
        f"cd {context.repo_path} && "
        f"source {context.venv_name}/bin/activate && "
        f"{TEST_RUNNER} {context.tests_path}"
    )


def parse_batch_table(output: str) -> Tuple[List[str], List[List[str]]]:
    """
    Split the SQL client's batch output into header and rows.

    Batch mode prints one tab-separated line per row with the column names
    first. Statements without a result set print nothing.
    """
    lines = [line for line in output.splitlines() if line]
    if not lines:
        return [], []
    header = lines[0].split("\t")
    rows = [_unescape_cells(line.split("\t")) for line in lines[1:]]
    return header, rows


def _unescape_cells(cells: List[str]) -> List[str]:
    return [
        cell.replace("\\t", "\t").replace("\\n", "\n").replace("\\\\", "\\")
        for cell in cells
    ]
