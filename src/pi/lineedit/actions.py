"""Semantic editing actions and cursor movements.

An input event resolves to at most one :data:`Action`; movements carry a
repeat count and are evaluated by :func:`pi.lineedit.movement.eval_movement`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

# ---------------------------------------------------------------------------
# Movements
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BackwardChar:
    count: int = 1


@dataclass(frozen=True)
class ForwardChar:
    count: int = 1


@dataclass(frozen=True)
class BackwardWord:
    count: int = 1


@dataclass(frozen=True)
class ForwardWord:
    count: int = 1


@dataclass(frozen=True)
class StartOfLine:
    pass


@dataclass(frozen=True)
class EndOfLine:
    pass


Movement = Union[BackwardChar, ForwardChar, BackwardWord, ForwardWord, StartOfLine, EndOfLine]

# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cancel:
    """Abandon the line; ``read_line`` returns ``None``."""


@dataclass(frozen=True)
class AcceptLine:
    """Finish editing and return the current line."""


@dataclass(frozen=True)
class EndOfFile:
    """Finish editing with an end-of-file condition."""


@dataclass(frozen=True)
class Kill:
    """Delete the text between the cursor and where *movement* would land."""

    movement: Movement


@dataclass(frozen=True)
class Move:
    movement: Movement


@dataclass(frozen=True)
class InsertChar:
    count: int
    char: str


@dataclass(frozen=True)
class InsertText:
    count: int
    text: str


@dataclass(frozen=True)
class Repaint:
    """Clear the screen and draw the prompt and line again."""


@dataclass(frozen=True)
class HistoryPrevious:
    pass


@dataclass(frozen=True)
class HistoryNext:
    pass


@dataclass(frozen=True)
class Complete:
    """Start completion, or cycle to the next candidate."""


Action = Union[
    Cancel,
    AcceptLine,
    EndOfFile,
    Kill,
    Move,
    InsertChar,
    InsertText,
    Repaint,
    HistoryPrevious,
    HistoryNext,
    Complete,
]
