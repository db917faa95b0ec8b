"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, bracketed paste and blocking input
polling on the process's own stdin/stdout.
"""

from __future__ import annotations

import codecs
import collections
import logging
import os
import select
import sys
import termios
import tty
from typing import Protocol, Sequence, TextIO

from pi.lineedit.errors import EndOfFileError, TerminalError
from pi.lineedit.input import InputEvent, PasteEvent
from pi.lineedit.keys import parse_input_event
from pi.lineedit.stdin_buffer import StdinBuffer
from pi.lineedit.surface import Change, changes_to_ansi

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"

# How long a lone ESC waits for the rest of a sequence before it counts as
# the Escape key.
_ESCAPE_TIMEOUT = 0.01


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations used by the line editor."""

    def set_raw_mode(self) -> None: ...

    def set_cooked_mode(self) -> None: ...

    def poll_input(self, timeout: float | None = None) -> InputEvent | None:
        """Wait for the next input event.

        ``None`` as *timeout* waits indefinitely. Returns ``None`` only when
        the timeout expires. Raises :class:`EndOfFileError` once the input
        stream has ended and every event read before that was delivered.
        """
        ...

    def render(self, changes: Sequence[Change]) -> None: ...

    def flush(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Manages raw mode via :mod:`tty` and :mod:`termios` and bracketed paste
    mode. Output is buffered until :meth:`flush`.
    """

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        *,
        bracketed_paste: bool = True,
        write_log_path: str = "",
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._bracketed_paste = bracketed_paste
        self._write_log_path = write_log_path
        self._original_termios: list | None = None
        self._pending: collections.deque[InputEvent] = collections.deque()
        self._eof = False
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

        self._stdin_buffer = StdinBuffer(on_data=self._on_buffer_data, on_paste=self._on_buffer_paste)

    # -- raw / cooked mode --------------------------------------------------

    def set_raw_mode(self) -> None:
        """Save the current terminal attributes and switch to raw mode."""
        fd = self._stdin.fileno()
        try:
            if self._original_termios is None:
                self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError) as e:
            raise TerminalError(f"Failed to enter raw mode: {e}") from e

        if self._bracketed_paste:
            self.render_raw(_BRACKETED_PASTE_ENABLE)
            self.flush()

    def set_cooked_mode(self) -> None:
        """Restore the terminal attributes saved by :meth:`set_raw_mode`."""
        if self._bracketed_paste:
            self.render_raw(_BRACKETED_PASTE_DISABLE)
            self.flush()

        if self._original_termios is None:
            return
        fd = self._stdin.fileno()
        try:
            termios.tcsetattr(fd, termios.TCSADRAIN, self._original_termios)
        except (termios.error, OSError) as e:
            raise TerminalError(f"Failed to restore terminal mode: {e}") from e
        self._original_termios = None
        self._stdin_buffer.clear()

    # -- input --------------------------------------------------------------

    def poll_input(self, timeout: float | None = None) -> InputEvent | None:
        while not self._pending:
            if self._eof:
                raise EndOfFileError("Terminal input stream closed")
            if not self._read_chunk(timeout):
                return None
        return self._pending.popleft()

    def _read_chunk(self, timeout: float | None) -> bool:
        """Read once from stdin into the buffer. Returns ``False`` on timeout."""
        fd = self._stdin.fileno()
        # A partial escape sequence only waits briefly before being flushed.
        wait = _ESCAPE_TIMEOUT if self._stdin_buffer.pending else timeout
        try:
            readable, _, _ = select.select([fd], [], [], wait)
            if not readable:
                if self._stdin_buffer.pending:
                    self._stdin_buffer.flush()
                    return True
                return False
            raw = os.read(fd, 4096)
        except InterruptedError:
            return True
        except OSError as e:
            raise TerminalError(f"Failed to read terminal input: {e}") from e

        if not raw:
            logger.debug("stdin reached end of input")
            self._stdin_buffer.process(self._decoder.decode(b"", final=True))
            self._stdin_buffer.flush()
            self._eof = True
            return True

        self._stdin_buffer.process(self._decoder.decode(raw))
        return True

    def _on_buffer_data(self, data: str) -> None:
        event = parse_input_event(data)
        if event is None:
            logger.debug("Ignoring unrecognised input %r", data)
            return
        self._pending.append(event)

    def _on_buffer_paste(self, data: str) -> None:
        self._pending.append(PasteEvent(data))

    # -- output -------------------------------------------------------------

    def render(self, changes: Sequence[Change]) -> None:
        self.render_raw(changes_to_ansi(changes))

    def render_raw(self, data: str) -> None:
        """Queue *data* for output, and append it to the write log if set."""
        try:
            self._stdout.write(data)
        except OSError as e:
            raise TerminalError(f"Failed to write to terminal: {e}") from e

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.warning("Could not append to write log %s", self._write_log_path)

    def flush(self) -> None:
        try:
            self._stdout.flush()
        except OSError as e:
            raise TerminalError(f"Failed to flush terminal output: {e}") from e
