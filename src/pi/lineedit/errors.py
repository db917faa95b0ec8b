"""Exceptions raised by the line editor."""

from __future__ import annotations


class LineEditorError(Exception):
    """Base class for line editor failures."""


class EndOfFileError(LineEditorError, EOFError):
    """The user asked to end input (Ctrl-D)."""

    def __init__(self, message: str = "End Of File") -> None:
        super().__init__(message)


class TerminalError(LineEditorError, OSError):
    """The terminal could not switch modes, be read from, or be written to."""
