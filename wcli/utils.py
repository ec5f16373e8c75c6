"""
WCLI Utilities

Local helpers: who is running wcli, clearing the screen, formatting times.
"""

import subprocess
from datetime import timedelta

from rich.console import Console

from wcli.constants import FALLBACK_USER


def check_name() -> str:
    """Get the local username with ``whoami`` (falls back to 'user')."""
    try:
        result = subprocess.run(
            ["whoami"], capture_output=True, text=True, check=True, timeout=5
        )
    except (subprocess.SubprocessError, OSError):
        return FALLBACK_USER
    name = result.stdout.strip()
    return name or FALLBACK_USER


def capitalise(name: str) -> str:
    """Upper-case the first letter only."""
    return name[:1].upper() + name[1:]


def clear_terminal(console: Console) -> None:
    """Clear the local terminal."""
    console.clear()


def format_elapsed(seconds: float) -> str:
    """Short human readable duration (e.g. 850ms, 1.42s, 0:02:05)."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    return str(timedelta(seconds=round(seconds)))
