"""The line being edited and its cursor."""

from __future__ import annotations

from pi.lineedit.actions import Movement
from pi.lineedit.movement import eval_movement
from pi.lineedit.utils import next_grapheme_boundary


class LineBuffer:
    """Owns the line text and the insertion point.

    ``cursor`` indexes into ``line`` and is never past its end.
    """

    def __init__(self, line: str = "", cursor: int | None = None) -> None:
        self.line: str = line
        self.cursor: int = len(line) if cursor is None else min(cursor, len(line))

    def clear(self) -> None:
        self.line = ""
        self.cursor = 0

    def set_line(self, line: str) -> None:
        """Replace the whole line and put the cursor at its end."""
        self.line = line
        self.cursor = len(line)

    def insert_char(self, count: int, char: str) -> None:
        """Insert *char* *count* times, moving past each resulting grapheme.

        The cursor lands on the next grapheme boundary after the insertion
        point, so a combining mark typed after its base character extends
        that cluster.
        """
        for _ in range(count):
            self.line = self.line[: self.cursor] + char + self.line[self.cursor :]
            nxt = next_grapheme_boundary(self.line, self.cursor)
            if nxt is not None:
                self.cursor = nxt

    def insert_text(self, count: int, text: str) -> None:
        """Insert *text* *count* times, advancing by its length each time."""
        for _ in range(count):
            self.line = self.line[: self.cursor] + text + self.line[self.cursor :]
            self.cursor += len(text)

    def move(self, movement: Movement) -> None:
        self.cursor = eval_movement(self.line, self.cursor, movement)

    def kill(self, movement: Movement) -> None:
        """Delete between the cursor and the *movement* target."""
        new_cursor = eval_movement(self.line, self.cursor, movement)
        lower, upper = sorted((new_cursor, self.cursor))
        self.line = self.line[:lower] + self.line[upper:]
        # A kill to end of line would otherwise leave the cursor past the end.
        self.cursor = min(new_cursor, len(self.line))

    def __repr__(self) -> str:
        return f"LineBuffer(line={self.line!r}, cursor={self.cursor})"
