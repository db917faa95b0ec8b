"""Tests for pi.lineedit.editor.LineEditor driven through a VirtualTerminal."""

from __future__ import annotations

import logging

import pytest

from pi.lineedit.actions import BackwardChar, InsertChar, Kill, Move, StartOfLine
from pi.lineedit.config import LineEditorConfig
from pi.lineedit.editor import LineEditor, line_editor
from pi.lineedit.errors import EndOfFileError, TerminalError
from pi.lineedit.history import BasicHistory
from pi.lineedit.host import CommandCompletionHost, NopLineEditorHost
from pi.lineedit.input import KeyCode, KeyEvent, Modifiers, PasteEvent
from pi.lineedit.surface import (
    AllAttributes,
    Attribute,
    ClearScreen,
    ClearToEndOfScreen,
    CursorPosition,
    Text,
)
from pi.lineedit.terminal import ProcessTerminal

from .virtual_terminal import VirtualTerminal

CTRL = Modifiers.CTRL
ALT = Modifiers.ALT

ENTER = KeyEvent(KeyCode.ENTER)
TAB = KeyEvent(KeyCode.TAB)
UP = KeyEvent(KeyCode.UP)
DOWN = KeyEvent(KeyCode.DOWN)
LEFT = KeyEvent(KeyCode.LEFT)
BACKSPACE = KeyEvent(KeyCode.BACKSPACE)


def typed(text: str) -> list[KeyEvent]:
    return [KeyEvent(ch) for ch in text]


def run(*events, host=None, config=None) -> tuple[str | None, VirtualTerminal]:
    terminal = VirtualTerminal(events)
    editor = LineEditor(terminal, config)
    return editor.read_line(host or NopLineEditorHost()), terminal


class TestSessionOutcome:
    """How read_line ends."""

    def test_accept_returns_line(self) -> None:
        line, _ = run(*typed("hello"), ENTER)
        assert line == "hello"

    @pytest.mark.parametrize("accept", [ENTER, KeyEvent("J", CTRL), KeyEvent("M", CTRL)])
    def test_every_accept_key(self, accept: KeyEvent) -> None:
        line, _ = run(*typed("ok"), accept)
        assert line == "ok"

    def test_accept_empty_line(self) -> None:
        line, _ = run(ENTER)
        assert line == ""

    def test_cancel_returns_none(self) -> None:
        line, _ = run(*typed("discard me"), KeyEvent("C", CTRL))
        assert line is None

    def test_ctrl_d_raises_end_of_file(self) -> None:
        terminal = VirtualTerminal([*typed("abc"), KeyEvent("D", CTRL)])
        editor = LineEditor(terminal)
        with pytest.raises(EndOfFileError):
            editor.read_line(NopLineEditorHost())

    def test_end_of_file_is_an_eof_error(self) -> None:
        terminal = VirtualTerminal([KeyEvent("D", CTRL)])
        with pytest.raises(EOFError, match="End Of File"):
            LineEditor(terminal).read_line(NopLineEditorHost())

    def test_closed_input_raises_instead_of_accepting(self) -> None:
        terminal = VirtualTerminal(typed("partial"))
        with pytest.raises(EndOfFileError):
            LineEditor(terminal).read_line(NopLineEditorHost())
        assert terminal.mode_log == ["raw", "cooked"]
        assert terminal.last_render == [Text("\r\n")]

    def test_input_after_accept_is_not_consumed(self) -> None:
        terminal = VirtualTerminal([*typed("one"), ENTER, *typed("two"), ENTER])
        editor = LineEditor(terminal)
        host = NopLineEditorHost()
        assert editor.read_line(host) == "one"
        assert editor.read_line(host) == "two"


class TestTerminalModes:
    """Raw mode for the session, cooked mode on every exit path."""

    def test_accept_restores_cooked_mode(self) -> None:
        _, terminal = run(ENTER)
        assert terminal.mode_log == ["raw", "cooked"]
        assert not terminal.raw

    def test_cancel_restores_cooked_mode(self) -> None:
        _, terminal = run(KeyEvent("C", CTRL))
        assert terminal.mode_log == ["raw", "cooked"]

    def test_end_of_file_restores_cooked_mode(self) -> None:
        terminal = VirtualTerminal([KeyEvent("D", CTRL)])
        with pytest.raises(EndOfFileError):
            LineEditor(terminal).read_line(NopLineEditorHost())
        assert terminal.mode_log == ["raw", "cooked"]

    def test_terminal_failure_restores_cooked_mode(self) -> None:
        terminal = VirtualTerminal(typed("abc"), fail_poll_after=2)
        with pytest.raises(TerminalError):
            LineEditor(terminal).read_line(NopLineEditorHost())
        assert terminal.mode_log == ["raw", "cooked"]

    def test_newline_is_written_on_exit(self) -> None:
        _, terminal = run(*typed("x"), ENTER)
        assert terminal.last_render == [Text("\r\n")]
        assert terminal.output.endswith("\r\n")

    def test_newline_is_written_on_failure(self) -> None:
        terminal = VirtualTerminal(fail_poll_after=0)
        with pytest.raises(TerminalError):
            LineEditor(terminal).read_line(NopLineEditorHost())
        assert terminal.last_render == [Text("\r\n")]

    def test_newline_is_written_when_mode_restore_fails(self) -> None:
        terminal = VirtualTerminal([ENTER], fail_cooked_mode=True)
        with pytest.raises(TerminalError, match="mode restore"):
            LineEditor(terminal).read_line(NopLineEditorHost())
        assert terminal.mode_log == ["raw", "cooked"]
        assert terminal.last_render == [Text("\r\n")]
        assert terminal.flush_count >= 1
        assert terminal.output.endswith("\r\n")


class TestEditing:
    """Keystrokes edit the line."""

    def test_insert_in_middle(self) -> None:
        line, _ = run(*typed("ac"), LEFT, KeyEvent("b"), ENTER)
        assert line == "abc"

    def test_backspace(self) -> None:
        line, _ = run(*typed("abcd"), BACKSPACE, BACKSPACE, ENTER)
        assert line == "ab"

    def test_backspace_at_start_is_noop(self) -> None:
        line, _ = run(*typed("ab"), KeyEvent("A", CTRL), BACKSPACE, ENTER)
        assert line == "ab"

    def test_kill_word_backward(self) -> None:
        line, _ = run(*typed("hello world"), KeyEvent("W", CTRL), ENTER)
        assert line == "hello "

    def test_kill_to_end_of_line(self) -> None:
        events = [*typed("hello world"), *[KeyEvent("B", CTRL)] * 6, KeyEvent("K", CTRL), ENTER]
        line, _ = run(*events)
        assert line == "hello"

    def test_word_movement(self) -> None:
        events = [*typed("one three"), KeyEvent("b", ALT), *typed("two "), ENTER]
        line, _ = run(*events)
        assert line == "one two three"

    def test_word_movement_with_arrow_keys(self) -> None:
        events = [
            *typed("one three"),
            KeyEvent(KeyCode.HOME),
            KeyEvent(KeyCode.RIGHT, ALT),
            *typed("two "),
            ENTER,
        ]
        line, _ = run(*events)
        assert line == "one two three"

    def test_paste_is_inserted_literally(self) -> None:
        line, _ = run(*typed("say: "), PasteEvent("ctrl-c is \x03 not a key"), ENTER)
        assert line == "say: ctrl-c is \x03 not a key"

    def test_unbound_keys_are_ignored(self) -> None:
        events = [
            *typed("ab"),
            KeyEvent(KeyCode.F5),
            KeyEvent(KeyCode.ESCAPE),
            KeyEvent("Z", CTRL),
            KeyEvent(KeyCode.DELETE),
            ENTER,
        ]
        line, terminal = run(*events)
        assert line == "ab"
        # Ignored keys still repaint
        assert len(terminal.renders) == 1 + 6 + 1

    def test_configured_keybindings(self) -> None:
        config = LineEditorConfig(keybindings={"acceptLine": "ctrl+x"})
        line, _ = run(*typed("ab"), ENTER, *typed("c"), KeyEvent("X", CTRL), config=config)
        assert line == "abc"

    def test_line_is_reset_between_reads(self) -> None:
        terminal = VirtualTerminal([*typed("first"), KeyEvent("C", CTRL), ENTER])
        editor = LineEditor(terminal)
        host = NopLineEditorHost()
        assert editor.read_line(host) is None
        assert editor.read_line(host) == ""


class TestApplyAction:
    """apply_action works without a running session."""

    def test_edits_buffer(self) -> None:
        editor = LineEditor(VirtualTerminal())
        host = NopLineEditorHost()
        for ch in "world":
            editor.apply_action(InsertChar(1, ch), host)
        editor.apply_action(Move(StartOfLine()), host)
        editor.apply_action(InsertChar(1, " "), host)
        editor.apply_action(Move(StartOfLine()), host)
        for ch in "hello":
            editor.apply_action(InsertChar(1, ch), host)
        assert editor.buffer.line == "hello world"
        assert editor.buffer.cursor == 5

    def test_kill(self) -> None:
        editor = LineEditor(VirtualTerminal())
        editor.buffer.set_line("abc")
        editor.apply_action(Kill(BackwardChar(1)), NopLineEditorHost())
        assert editor.buffer.line == "ab"


class TestRepaint:
    def test_ctrl_l_clears_screen(self) -> None:
        line, terminal = run(*typed("ab"), KeyEvent("L", CTRL), ENTER)
        assert line == "ab"
        assert [ClearScreen()] in terminal.renders
        # The line is redrawn after the clear
        index = terminal.renders.index([ClearScreen()])
        assert Text("ab") in terminal.renders[index + 1]

    def test_repaint_keeps_completion_cycle_closed(self) -> None:
        host = CommandCompletionHost(["alpha", "alpine"])
        line, _ = run(*typed("al"), TAB, KeyEvent("L", CTRL), TAB, ENTER, host=host)
        # The second Tab starts a new completion of "alpha", which has no
        # candidates beyond itself.
        assert line == "alpha"


class TestRendering:
    """Each redraw repaints the prompt and line and places the cursor."""

    def test_initial_render(self) -> None:
        _, terminal = run(ENTER)
        assert terminal.renders[0] == [
            CursorPosition(0),
            ClearToEndOfScreen(),
            AllAttributes(),
            Text("> "),
            AllAttributes(),
            Text(""),
            CursorPosition(2),
        ]

    def test_cursor_column_follows_cursor(self) -> None:
        _, terminal = run(*typed("abc"), LEFT, ENTER)
        assert terminal.renders[-2][-2:] == [Text("abc"), CursorPosition(4)]

    def test_wide_characters_take_two_columns(self) -> None:
        _, terminal = run(KeyEvent("\u65e5"), KeyEvent("\u672c"), ENTER)
        assert terminal.renders[-2][-1] == CursorPosition(2 + 4)

    def test_combining_mark_takes_no_column(self) -> None:
        _, terminal = run(KeyEvent("e"), KeyEvent("\u0301"), ENTER)
        assert terminal.renders[-2][-1] == CursorPosition(2 + 1)

    def test_styled_prompt_width_ignores_attributes(self) -> None:
        host = CommandCompletionHost([], prompt_sgr="1;32")
        _, terminal = run(*typed("x"), ENTER, host=host)
        render = terminal.renders[-2]
        assert render[3:5] == [Attribute("1;32"), Text("> ")]
        assert render[-1] == CursorPosition(3)

    def test_custom_prompt(self) -> None:
        terminal = VirtualTerminal([ENTER])
        editor = LineEditor(terminal)
        editor.set_prompt("$$$ ")
        editor.read_line(NopLineEditorHost())
        assert Text("$$$ ") in terminal.renders[0]
        assert terminal.renders[0][-1] == CursorPosition(4)

    def test_render_count_and_flushes(self) -> None:
        _, terminal = run(*typed("hi"), ENTER)
        # Initial draw, one per keystroke, then the final newline
        assert len(terminal.renders) == 4
        assert terminal.flush_count == 4

    def test_ansi_output(self) -> None:
        _, terminal = run(KeyEvent("a"), ENTER)
        assert terminal.output.startswith("\x1b[1G\x1b[0J\x1b[0m> \x1b[0m\x1b[3G")
        assert "\x1b[1G\x1b[0J\x1b[0m> \x1b[0ma\x1b[4G" in terminal.output


class TestCompletion:
    """Tab completion through the host."""

    WORDS = ["checkout", "cherry-pick", "commit"]

    def test_first_tab_applies_first_candidate(self) -> None:
        host = CommandCompletionHost(self.WORDS)
        line, terminal = run(*typed("git ch"), TAB, ENTER, host=host)
        assert line == "git checkout"
        assert terminal.renders[-2][-1] == CursorPosition(2 + len("git checkout"))

    def test_tab_cycles_and_wraps(self) -> None:
        host = CommandCompletionHost(self.WORDS)
        results = []
        for tabs in range(1, 4):
            line, _ = run(*typed("ch"), *[TAB] * tabs, ENTER, host=host)
            results.append(line)
        assert results == ["checkout", "cherry-pick", "checkout"]

    def test_no_candidates_leaves_line(self) -> None:
        host = CommandCompletionHost(self.WORDS)
        line, _ = run(*typed("xyz"), TAB, TAB, ENTER, host=host)
        assert line == "xyz"

    def test_nop_host_never_completes(self) -> None:
        line, _ = run(*typed("ch"), TAB, ENTER)
        assert line == "ch"

    def test_completion_in_middle_of_line(self) -> None:
        host = CommandCompletionHost(self.WORDS)
        events = [*typed("git co main"), *[LEFT] * 5, TAB, ENTER]
        line, _ = run(*events, host=host)
        assert line == "git commit main"

    def test_other_action_ends_cycle(self) -> None:
        host = CommandCompletionHost(self.WORDS)
        # After the edit, Tab completes "checkou" afresh instead of cycling
        line, _ = run(*typed("ch"), TAB, BACKSPACE, TAB, ENTER, host=host)
        assert line == "checkout"

    def test_cycle_state_cleared_by_typing(self) -> None:
        terminal = VirtualTerminal([*typed("ch"), TAB, KeyEvent(" "), ENTER])
        editor = LineEditor(terminal)
        editor.read_line(CommandCompletionHost(self.WORDS))
        assert editor.completion is None

    def test_cycle_state_reset_between_reads(self) -> None:
        terminal = VirtualTerminal([*typed("ch"), TAB, KeyEvent("C", CTRL)])
        editor = LineEditor(terminal)
        host = CommandCompletionHost(self.WORDS)
        assert editor.read_line(host) is None
        assert editor.completion is not None
        terminal.feed(*typed("ch"), TAB, ENTER)
        assert editor.read_line(host) == "checkout"


class TestHistory:
    """Browsing history with Up/Down and Ctrl-P/Ctrl-N."""

    def make_host(self) -> NopLineEditorHost:
        return NopLineEditorHost(BasicHistory(["one", "two", "three"]))

    def test_up_recalls_newest(self) -> None:
        line, _ = run(UP, ENTER, host=self.make_host())
        assert line == "three"

    def test_up_saturates_at_oldest(self) -> None:
        line, _ = run(*[UP] * 10, ENTER, host=self.make_host())
        assert line == "one"

    def test_down_restores_typed_line(self) -> None:
        events = [*typed("draft"), UP, UP, DOWN, DOWN, ENTER]
        line, _ = run(*events, host=self.make_host())
        assert line == "draft"

    def test_ctrl_p_and_ctrl_n(self) -> None:
        events = [KeyEvent("P", CTRL), KeyEvent("P", CTRL), KeyEvent("N", CTRL), ENTER]
        line, _ = run(*events, host=self.make_host())
        assert line == "three"

    def test_down_without_browsing_is_noop(self) -> None:
        line, _ = run(*typed("draft"), DOWN, ENTER, host=self.make_host())
        assert line == "draft"

    def test_empty_history(self) -> None:
        line, _ = run(*typed("draft"), UP, ENTER)
        assert line == "draft"

    def test_recalled_entry_can_be_edited(self) -> None:
        line, _ = run(UP, BACKSPACE, *typed("ee"), ENTER, host=self.make_host())
        assert line == "threee"

    def test_recall_puts_cursor_at_end(self) -> None:
        _, terminal = run(UP, ENTER, host=self.make_host())
        assert terminal.renders[-2][-1] == CursorPosition(2 + len("three"))

    def test_browse_position_reset_between_reads(self) -> None:
        terminal = VirtualTerminal([UP, UP, ENTER, UP, ENTER])
        editor = LineEditor(terminal)
        host = self.make_host()
        assert editor.read_line(host) == "two"
        assert editor.read_line(host) == "three"


class TestLogging:
    def test_session_is_logged_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="pi.lineedit.editor"):
            run(KeyEvent(KeyCode.F5), ENTER)
        messages = [r.getMessage() for r in caplog.records]
        assert any("read_line started" in m for m in messages)
        assert any("No action for" in m for m in messages)
        assert any("accepted" in m for m in messages)


class TestLineEditorFactory:
    def test_builds_process_terminal(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PI_LINEEDIT_PROMPT", "% ")
        editor = line_editor()
        assert isinstance(editor.terminal, ProcessTerminal)
        assert editor.prompt == "% "

    def test_explicit_config(self) -> None:
        editor = line_editor(LineEditorConfig(prompt=">> ", bracketed_paste=False))
        assert editor.prompt == ">> "
