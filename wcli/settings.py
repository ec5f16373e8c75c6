"""
Runtime Settings

Timeouts and logging switches read from the environment. The credential
file is reserved for PASS/EC2/PEM.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from wcli.constants import (
    DEFAULT_COMMAND_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    ENV_CONNECT_TIMEOUT,
    ENV_LOG_DIR,
    ENV_TIMEOUT,
    ENV_VERBOSE,
)

_TRUTHY = {"1", "true", "yes", "on"}


def _float_setting(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got '{raw}'")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got '{raw}'")
    return value


@dataclass(frozen=True)
class RuntimeSettings:
    """Tunables for one wcli process."""

    command_timeout: float = DEFAULT_COMMAND_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    log_dir: Optional[Path] = None
    verbose: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RuntimeSettings":
        """
        Build settings from environment variables.

        Raises:
            ValueError: If a timeout is not a positive number
        """
        environ = os.environ if environ is None else environ
        log_dir = environ.get(ENV_LOG_DIR, "").strip()
        return cls(
            command_timeout=_float_setting(environ, ENV_TIMEOUT, DEFAULT_COMMAND_TIMEOUT),
            connect_timeout=_float_setting(
                environ, ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT
            ),
            log_dir=Path(log_dir).expanduser() if log_dir else None,
            verbose=environ.get(ENV_VERBOSE, "").strip().lower() in _TRUTHY,
        )
