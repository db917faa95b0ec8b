"""The ``LineEditor`` reads a single line with shell-like editing.

Key bindings (defaults, see :mod:`pi.lineedit.keybindings`):

=====================  ================================================
Keystroke              Action
=====================  ================================================
Ctrl-A, Home           Move cursor to the beginning of the line
Ctrl-E, End            Move cursor to the end of the line
Ctrl-B, Left           Move cursor one grapheme to the left
Ctrl-F, Right          Move cursor one grapheme to the right
Alt-b, Alt-Left        Move cursor backwards one word
Alt-f, Alt-Right       Move cursor forwards one word
Ctrl-C                 Cancel; ``read_line`` returns ``None``
Ctrl-D                 Raise :class:`~pi.lineedit.errors.EndOfFileError`
Ctrl-H, Backspace      Delete the grapheme left of the cursor
Ctrl-J, Ctrl-M, Enter  Accept the current line
Ctrl-K                 Delete from cursor to end of line
Ctrl-L                 Clear the screen and repaint
Ctrl-W                 Delete the word leading up to the cursor
Ctrl-P, Up             Previous history entry
Ctrl-N, Down           Next history entry
Tab                    Complete, or cycle to the next completion
=====================  ================================================
"""

from __future__ import annotations

import logging

from pi.lineedit.actions import (
    AcceptLine,
    Action,
    Cancel,
    Complete,
    EndOfFile,
    HistoryNext,
    HistoryPrevious,
    InsertChar,
    InsertText,
    Kill,
    Move,
    Repaint,
)
from pi.lineedit.buffer import LineBuffer
from pi.lineedit.completion import CompletionState
from pi.lineedit.config import LineEditorConfig
from pi.lineedit.errors import EndOfFileError
from pi.lineedit.history import HistoryNavigator
from pi.lineedit.host import LineEditorHost
from pi.lineedit.keybindings import KeybindingsManager
from pi.lineedit.resolver import resolve_action
from pi.lineedit.surface import (
    AllAttributes,
    Change,
    ClearScreen,
    ClearToEndOfScreen,
    CursorPosition,
    Text,
)
from pi.lineedit.terminal import ProcessTerminal, Terminal
from pi.lineedit.utils import column_width

logger = logging.getLogger(__name__)


class LineEditor:
    """Line editing facilities similar to those of a unix shell.

    One editor may read many lines; the line, completion state and history
    position are reset at the start of every :meth:`read_line` call.
    """

    def __init__(self, terminal: Terminal, config: LineEditorConfig | None = None) -> None:
        self.config = config or LineEditorConfig()
        self.terminal = terminal
        self.prompt: str = self.config.prompt
        self.keybindings = KeybindingsManager(self.config.keybindings)

        self.buffer = LineBuffer()
        self.navigator = HistoryNavigator()
        self.completion: CompletionState | None = None

    def set_prompt(self, prompt: str) -> None:
        self.prompt = prompt

    # -- session ------------------------------------------------------------

    def read_line(self, host: LineEditorHost) -> str | None:
        """Read a line, returning it once accepted.

        Control does not return until the line is accepted, the edit is
        cancelled (``None``), or an error occurs. Ctrl-D and a closed input
        stream raise :class:`EndOfFileError`; terminal failures raise
        :class:`~pi.lineedit.errors.TerminalError`. The terminal is put back
        into cooked mode on every exit path.
        """
        self.terminal.set_raw_mode()
        logger.debug("read_line started with prompt %r", self.prompt)
        try:
            result = self._read_line_impl(host)
        finally:
            try:
                self.terminal.set_cooked_mode()
            finally:
                self.terminal.render([Text("\r\n")])
                self.terminal.flush()
        logger.debug("read_line finished: %s", "cancelled" if result is None else "accepted")
        return result

    def _read_line_impl(self, host: LineEditorHost) -> str | None:
        self.buffer.clear()
        self.navigator.reset()
        self._clear_completion()

        self._render(host)
        while True:
            event = self.terminal.poll_input(None)
            if event is None:
                continue

            action = resolve_action(event, self.keybindings)
            if action is None:
                logger.debug("No action for %r", event)
            else:
                logger.debug("Resolved %r to %r", event, action)

            if isinstance(action, Cancel):
                return None
            if isinstance(action, AcceptLine):
                break
            if isinstance(action, EndOfFile):
                raise EndOfFileError()
            if action is not None:
                self.apply_action(action, host)

            self._render(host)

        return self.buffer.line

    # -- dispatch -----------------------------------------------------------

    def apply_action(self, action: Action, host: LineEditorHost) -> None:
        """Apply an editing action to the line.

        Session-ending actions (cancel, accept, end-of-file) are handled by
        :meth:`read_line` and have no effect here.
        """
        if isinstance(action, Complete):
            self._complete(host)
            return

        self._clear_completion()

        if isinstance(action, Kill):
            self.buffer.kill(action.movement)
        elif isinstance(action, Move):
            self.buffer.move(action.movement)
        elif isinstance(action, InsertChar):
            self.buffer.insert_char(action.count, action.char)
        elif isinstance(action, InsertText):
            self.buffer.insert_text(action.count, action.text)
        elif isinstance(action, Repaint):
            self.terminal.render([ClearScreen()])
        elif isinstance(action, HistoryPrevious):
            line = self.navigator.previous(host.history(), self.buffer.line)
            if line is not None:
                self.buffer.set_line(line)
        elif isinstance(action, HistoryNext):
            line = self.navigator.next(host.history())
            if line is not None:
                self.buffer.set_line(line)

    def _complete(self, host: LineEditorHost) -> None:
        if self.completion is None:
            candidates = host.complete(self.buffer.line, self.buffer.cursor)
            if not candidates:
                return
            self.completion = CompletionState(
                candidates=tuple(candidates),
                original_line=self.buffer.line,
                original_cursor=self.buffer.cursor,
            )
            logger.debug("Completion started with %d candidates", len(self.completion.candidates))
        else:
            self.completion.next()

        line, cursor = self.completion.current()
        self.buffer.line = line
        self.buffer.cursor = cursor

    def _clear_completion(self) -> None:
        self.completion = None

    # -- rendering ----------------------------------------------------------

    def _render(self, host: LineEditorHost) -> None:
        changes: list[Change] = [
            CursorPosition(0),
            ClearToEndOfScreen(),
            AllAttributes(),
        ]

        prompt_width = 0
        for element in host.render_prompt(self.prompt):
            if isinstance(element, Text):
                prompt_width += column_width(element.text)
            changes.append(element)
        changes.append(AllAttributes())

        elements, cursor_column = host.highlight_line(self.buffer.line, self.buffer.cursor)
        changes.extend(elements)
        changes.append(CursorPosition(prompt_width + cursor_column))

        self.terminal.render(changes)
        self.terminal.flush()


def line_editor(config: LineEditorConfig | None = None) -> LineEditor:
    """Create a :class:`LineEditor` on the process's terminal."""
    config = config or LineEditorConfig.from_env()
    terminal = ProcessTerminal(
        bracketed_paste=config.bracketed_paste,
        write_log_path=config.write_log_path,
    )
    return LineEditor(terminal, config)
