"""
Result Models

Dataclass models for relayed command results.
"""

import re
from dataclasses import dataclass
from typing import Optional

from wcli.exceptions import ExecError, ExecFailure

_RAN_RE = re.compile(r"^Ran (\d+) tests? in", re.MULTILINE)
_FAILED_RE = re.compile(r"^FAILED \((.+)\)\s*$", re.MULTILINE)


@dataclass(frozen=True)
class CommandResult:
    """Result of one command executed on the remote host."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0
    command: str = ""
    duration_seconds: float = 0.0

    @property
    def is_success(self) -> bool:
        """Check if the remote command exited with status 0."""
        return self.exit_code == 0

    @property
    def is_failure(self) -> bool:
        """Check if the remote command exited with a non-zero status."""
        return self.exit_code != 0

    @property
    def output(self) -> str:
        """Get combined output (stdout + stderr)."""
        return f"{self.stdout}\n{self.stderr}".strip()

    def check(self) -> "CommandResult":
        """
        Return self if the command succeeded.

        Raises:
            ExecError: RemoteNonZeroExit carrying the exit code
        """
        if self.is_failure:
            raise ExecError(
                ExecFailure.REMOTE_NON_ZERO_EXIT,
                f"Remote command exited with status {self.exit_code}",
                exit_code=self.exit_code,
                context=self.stderr.strip() or None,
            )
        return self

    def __repr__(self) -> str:
        return f"CommandResult(exit_code={self.exit_code}, duration={self.duration_seconds:.2f}s)"


@dataclass(frozen=True)
class TestSummary:
    """Pass/fail reduction of a remote unittest run."""

    __test__ = False

    passed: bool
    elapsed_seconds: float
    tests_run: Optional[int] = None
    details: Optional[str] = None
    output: str = ""

    @classmethod
    def from_result(cls, result: CommandResult) -> "TestSummary":
        """Build a summary from the unittest runner's output."""
        # unittest reports on stderr
        text = result.output
        ran = _RAN_RE.search(text)
        failed = _FAILED_RE.search(text)
        return cls(
            passed=result.is_success,
            elapsed_seconds=result.duration_seconds,
            tests_run=int(ran.group(1)) if ran else None,
            details=failed.group(1) if failed else None,
            output=text,
        )

    @property
    def headline(self) -> str:
        """One-line pass/fail summary."""
        elapsed = f"{self.elapsed_seconds:.0f}s"
        count = f" ({self.tests_run} run)" if self.tests_run is not None else ""
        if self.passed:
            return f"All tests passed in {elapsed}{count}"
        reason = f": {self.details}" if self.details else ""
        return f"Tests failed after {elapsed}{count}{reason}"
