"""
WCLI Commands
"""

from .session import SessionCommand

__all__ = [
    "SessionCommand",
]
