"""Cursor movement evaluation.

Character movement steps over extended grapheme clusters. Word movement
scans individual code points and only looks at whitespace, so a word boundary
may fall inside a grapheme cluster that starts with a combining mark.
"""

from __future__ import annotations

from pi.lineedit.actions import (
    BackwardChar,
    BackwardWord,
    EndOfLine,
    ForwardChar,
    ForwardWord,
    Movement,
    StartOfLine,
)
from pi.lineedit.utils import (
    is_whitespace_char,
    next_grapheme_boundary,
    prev_grapheme_boundary,
)


def eval_movement(line: str, cursor: int, movement: Movement) -> int:
    """Return the cursor position that applying *movement* would produce.

    The result is always within ``0..len(line)``.
    """
    if isinstance(movement, BackwardChar):
        return _backward_char(line, cursor, movement.count)
    if isinstance(movement, ForwardChar):
        return _forward_char(line, cursor, movement.count)
    if isinstance(movement, BackwardWord):
        return _backward_word(line, cursor, movement.count)
    if isinstance(movement, ForwardWord):
        return _forward_word(line, cursor, movement.count)
    if isinstance(movement, StartOfLine):
        return 0
    if isinstance(movement, EndOfLine):
        return len(line)
    raise TypeError(f"Unknown movement: {movement!r}")


def _backward_char(line: str, cursor: int, count: int) -> int:
    position = min(cursor, len(line))
    for _ in range(count):
        prev = prev_grapheme_boundary(line, position)
        if prev is None:
            break
        position = prev
    return position


def _forward_char(line: str, cursor: int, count: int) -> int:
    position = min(cursor, len(line))
    for _ in range(count):
        nxt = next_grapheme_boundary(line, position)
        if nxt is None:
            break
        position = nxt
    return position


def _backward_word(line: str, cursor: int, count: int) -> int:
    if not line:
        return cursor

    # At end of line the scan starts from the last character.
    position = cursor if cursor < len(line) else len(line) - 1

    for _ in range(count):
        if position == 0:
            break
        found = 0
        for prev in range(position - 2, -1, -1):
            if is_whitespace_char(line[prev]):
                found = prev + 1
                break
        position = found

    return position


def _forward_word(line: str, cursor: int, count: int) -> int:
    if not line:
        return cursor

    position = min(cursor, len(line))
    for _ in range(count):
        while position < len(line) and not is_whitespace_char(line[position]):
            position += 1
        while position < len(line) and is_whitespace_char(line[position]):
            position += 1
    return position
