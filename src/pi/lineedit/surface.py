"""Display changes sent to a terminal and their ANSI encoding."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_RESET_ATTRIBUTES = "\x1b[0m"
_CLEAR_FROM_CURSOR = "\x1b[0J"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_CURSOR_COLUMN_FMT = "\x1b[{}G"
_SGR_FMT = "\x1b[{}m"


# ---------------------------------------------------------------------------
# Change values
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class Attribute:
    """An SGR attribute change, e.g. ``"1"`` for bold or ``"38;5;2"`` for green."""

    sgr: str


@dataclass(frozen=True)
class AllAttributes:
    """Reset every display attribute to the default."""


@dataclass(frozen=True)
class CursorPosition:
    """Move the cursor to column *x* (zero-based) on the current row."""

    x: int


@dataclass(frozen=True)
class ClearToEndOfScreen:
    pass


@dataclass(frozen=True)
class ClearScreen:
    pass


Change = Union[Text, Attribute, AllAttributes, CursorPosition, ClearToEndOfScreen, ClearScreen]


def change_to_ansi(change: Change) -> str:
    """Encode a single change as an escape sequence (or plain text)."""
    if isinstance(change, Text):
        return change.text
    if isinstance(change, Attribute):
        return _SGR_FMT.format(change.sgr)
    if isinstance(change, AllAttributes):
        return _RESET_ATTRIBUTES
    if isinstance(change, CursorPosition):
        return _CURSOR_COLUMN_FMT.format(change.x + 1)
    if isinstance(change, ClearToEndOfScreen):
        return _CLEAR_FROM_CURSOR
    if isinstance(change, ClearScreen):
        return _CLEAR_SCREEN
    raise TypeError(f"Unknown change: {change!r}")


def changes_to_ansi(changes: Sequence[Change]) -> str:
    return "".join(change_to_ansi(change) for change in changes)
