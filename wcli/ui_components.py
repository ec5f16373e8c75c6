"""
WCLI - UI Components & Branding
Banner, help tables and result rendering
"""

from typing import Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from wcli.constants import TITLE, VERSION, WEBSITE
from wcli.models.modes import Mode
from wcli.models.results import CommandResult, TestSummary

LOGO = r"""
                 _  _
                | |(_)
 __      __ ___ | | _   {title}
 \ \ /\ / // __|| || |  Version {version}
  \ V  V /| (__ | || |
   \_/\_/  \___||_||_|  {website}
"""

# Color scheme
BRAND_COLOR = "magenta"
SUCCESS_COLOR = "green"
ERROR_COLOR = "red"

HELP_ENTRIES: Dict[Mode, List[tuple]] = {
    Mode.ROOT: [
        ("cmd", "run a Linux command"),
        ("git", "run a git command in a repository"),
        ("sql", "run a sql query"),
        ("test", "run Python unit tests"),
        ("clear", "clear the terminal"),
        ("exit", "exit wcli"),
    ],
    Mode.SHELL: [
        ("any", "run a Linux cmd, ensure syntax is correct"),
        ("sudo <cmd>", "run a Linux cmd as root"),
        ("install", "install a package"),
        ("remove", "uninstall a package"),
        ("clear", "clear the terminal"),
        ("exit", "exit cmd"),
    ],
    Mode.GIT: [
        ("any", "run a git command, ensure syntax is correct"),
        ("change", "change git directory"),
        ("clear", "clear the terminal"),
        ("exit", "exit git"),
    ],
    Mode.SQL: [
        ("any", "run a sql query, ensure syntax is correct"),
        ("database", "show current database"),
        ("change", "change database"),
        ("clear", "clear the terminal"),
        ("exit", "exit sql"),
    ],
    Mode.TEST: [
        ("any", "run the unit tests again"),
        ("change", "change repository, venv and tests path"),
        ("clear", "clear the terminal"),
        ("exit", "exit test"),
    ],
}


def show_banner(user: str, console: Optional[Console] = None) -> None:
    """Display the logo and a welcome line."""
    if console is None:
        console = Console()

    logo = LOGO.format(title=TITLE, version=VERSION, website=WEBSITE)
    console.print(Text(logo, style=f"bold {BRAND_COLOR}"))
    console.print(f"Welcome to WCLI [bold]{escape(user)}[/bold]! Run 'help' for commands\n")


def show_help(mode: Mode, console: Console) -> None:
    """Print the commands recognised in ``mode``."""
    table = Table(
        title="COMMANDS",
        title_justify="left",
        box=None,
        show_header=False,
        padding=(0, 2),
    )
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Description", style="dim")
    for command, description in HELP_ENTRIES[mode]:
        table.add_row(f"'{command}'", description)

    console.print()
    console.print(table)
    console.print()


def print_result(result: CommandResult, console: Console) -> None:
    """Print stdout on success, stderr plus the exit code on failure."""
    if result.is_success:
        if result.stdout:
            console.print(Text.from_ansi(result.stdout.rstrip("\n")))
        return

    text = result.stderr or result.stdout
    if text:
        console.print(Text.from_ansi(text.rstrip("\n")))
    console.print(f"[dim]exit code {result.exit_code}[/dim]")


def print_sql_table(header: List[str], rows: List[List[str]], console: Console) -> None:
    """Render a result set as an aligned table with a header row."""
    if not header:
        console.print(f"[{SUCCESS_COLOR}]Query OK[/{SUCCESS_COLOR}]")
        return

    table = Table(box=box.SIMPLE_HEAD, header_style="bold cyan")
    for column in header:
        table.add_column(escape(column))
    for row in rows:
        table.add_row(*(escape(cell) for cell in row))

    console.print(table)
    noun = "row" if len(rows) == 1 else "rows"
    console.print(f"[dim]{len(rows)} {noun} in set[/dim]")


def print_test_summary(summary: TestSummary, console: Console) -> None:
    """Print the pass/fail headline; show the runner output on failure."""
    color = SUCCESS_COLOR if summary.passed else ERROR_COLOR
    console.print(f"\n[bold {color}]{escape(summary.headline)}[/bold {color}]")
    if not summary.passed and summary.output:
        console.print(Text.from_ansi(summary.output))
