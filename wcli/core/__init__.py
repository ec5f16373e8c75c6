"""
WCLI Core

Mode state machine, command translation and the interactive loop.
"""

from .controller import ModeController
from .repl import Repl

__all__ = [
    "ModeController",
    "Repl",
]
