"""Split raw terminal input into complete key sequences.

Reads from a terminal arrive in arbitrary chunks, so an escape sequence can
straddle two reads. ``StdinBuffer`` holds on to an unfinished sequence until
the rest arrives, and gathers bracketed paste content into a single string.

The buffer never waits on its own: the owner decides when a held lone ``ESC``
has waited long enough and calls :meth:`StdinBuffer.flush`.
"""

from __future__ import annotations

from typing import Callable

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

# X10 mouse report: ESC [ M followed by three raw bytes
_X10_MOUSE_LENGTH = 6


def _is_final_byte(ch: str) -> bool:
    return 0x40 <= ord(ch) <= 0x7E


def sequence_end(data: str, start: int = 0) -> int | None:
    """Return the index just past the escape sequence at *start*.

    ``None`` means the sequence is not finished yet.
    """
    if start + 1 >= len(data):
        return None

    introducer = data[start + 1]
    pos = start + 2

    if introducer == "[":
        if data.startswith("M", pos):
            end = start + _X10_MOUSE_LENGTH
            return end if end <= len(data) else None
        while pos < len(data):
            if _is_final_byte(data[pos]):
                return pos + 1
            pos += 1
        return None

    if introducer == "]":
        while pos < len(data):
            if data[pos] == "\x07":
                return pos + 1
            if data.startswith(ESC + "\\", pos):
                return pos + 2
            pos += 1
        return None

    if introducer == "O":
        # SS3, optionally with a modifier parameter: ESC O 5 P
        while pos < len(data) and data[pos].isdigit():
            pos += 1
        return pos + 1 if pos < len(data) else None

    # ESC followed by one character is an Alt chord
    return start + 2


def split_sequences(data: str) -> tuple[list[str], str]:
    """Cut *data* into complete sequences.

    Returns the sequences and the unfinished tail.
    """
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        if data[pos] != ESC:
            sequences.append(data[pos])
            pos += 1
            continue
        end = sequence_end(data, pos)
        if end is None:
            return sequences, data[pos:]
        sequences.append(data[pos:end])
        pos = end
    return sequences, ""


class StdinBuffer:
    """Turns chunks of input into complete sequences and paste strings.

    *on_data* receives each key sequence, *on_paste* the text between the
    bracketed paste markers.
    """

    def __init__(
        self,
        on_data: Callable[[str], None] | None = None,
        on_paste: Callable[[str], None] | None = None,
    ) -> None:
        self.on_data = on_data
        self.on_paste = on_paste
        self._pending = ""
        # Paste text gathered so far, None outside a paste
        self._paste: str | None = None

    @property
    def in_paste(self) -> bool:
        return self._paste is not None

    @property
    def pending(self) -> str:
        """Input held back while waiting for the rest of a sequence."""
        return self._pending

    def process(self, data: str) -> None:
        """Feed a chunk of input."""
        self._pending += data

        while self._pending:
            if self._paste is not None:
                self._paste += self._pending
                self._pending = ""
                end = self._paste.find(BRACKETED_PASTE_END)
                if end == -1:
                    return
                text = self._paste[:end]
                self._pending = self._paste[end + len(BRACKETED_PASTE_END) :]
                self._paste = None
                self._emit_paste(text)
                continue

            start = self._pending.find(BRACKETED_PASTE_START)
            if start == -1:
                sequences, self._pending = split_sequences(self._pending)
                self._emit_data(sequences)
                return

            sequences, tail = split_sequences(self._pending[:start])
            if tail:
                sequences.append(tail)
            self._emit_data(sequences)
            self._pending = self._pending[start + len(BRACKETED_PASTE_START) :]
            self._paste = ""

    def flush(self) -> list[str]:
        """Stop waiting for the rest of a held sequence and emit it as-is."""
        if not self._pending:
            return []
        held = [self._pending]
        self._pending = ""
        self._emit_data(held)
        return held

    def clear(self) -> None:
        self._pending = ""
        self._paste = None

    def _emit_data(self, sequences: list[str]) -> None:
        if self.on_data is None:
            return
        for sequence in sequences:
            self.on_data(sequence)

    def _emit_paste(self, text: str) -> None:
        if self.on_paste is not None:
            self.on_paste(text)
