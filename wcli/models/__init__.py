"""
WCLI Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .credentials import (
    Credentials,
    SSHTarget,
)
from .modes import (
    Mode,
    ModeState,
    ModeContext,
    ShellContext,
    GitContext,
    SqlContext,
    TestContext,
)
from .results import (
    CommandResult,
    TestSummary,
)

__all__ = [
    # Credentials
    "Credentials",
    "SSHTarget",
    # Modes
    "Mode",
    "ModeState",
    "ModeContext",
    "ShellContext",
    "GitContext",
    "SqlContext",
    "TestContext",
    # Results
    "CommandResult",
    "TestSummary",
]
