"""
Mode Models

The sub-shell states and the context each one carries.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Mode(Enum):
    """Sub-shell state of the controller."""

    ROOT = "root"
    SHELL = "cmd"
    GIT = "git"
    SQL = "sql"
    TEST = "test"

    @property
    def keyword(self) -> str:
        """Word typed at the root prompt to enter this mode."""
        return self.value

    @classmethod
    def from_keyword(cls, word: str) -> Optional["Mode"]:
        """Look up a mode by its root keyword (never returns ROOT)."""
        for mode in cls:
            if mode is not cls.ROOT and mode.value == word:
                return mode
        return None


@dataclass(frozen=True)
class ShellContext:
    """Raw shell mode needs no context."""


@dataclass(frozen=True)
class GitContext:
    """Repository every git payload runs in."""

    repo_path: str


@dataclass(frozen=True)
class SqlContext:
    """Database selected for every statement."""

    database: str
    latency_seconds: float = 0.0


@dataclass(frozen=True)
class TestContext:
    """Where and how to run the remote unittest suite."""

    __test__ = False

    repo_path: str
    venv_name: str
    tests_path: str


ModeContext = Union[ShellContext, GitContext, SqlContext, TestContext]


@dataclass(frozen=True)
class ModeState:
    """Current controller state: a mode plus its context."""

    mode: Mode = Mode.ROOT
    context: Optional[ModeContext] = None

    @property
    def is_root(self) -> bool:
        return self.mode is Mode.ROOT

    @classmethod
    def root(cls) -> "ModeState":
        return cls()
