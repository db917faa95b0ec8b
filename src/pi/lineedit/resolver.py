"""Map input events to editing actions."""

from __future__ import annotations

from pi.lineedit.actions import (
    AcceptLine,
    Action,
    BackwardChar,
    BackwardWord,
    Cancel,
    Complete,
    EndOfFile,
    EndOfLine,
    ForwardChar,
    ForwardWord,
    HistoryNext,
    HistoryPrevious,
    InsertChar,
    InsertText,
    Kill,
    Move,
    Repaint,
    StartOfLine,
)
from pi.lineedit.input import InputEvent, KeyEvent, Modifiers, PasteEvent
from pi.lineedit.keybindings import Binding, KeybindingsManager, get_keybindings

BINDING_ACTIONS: dict[Binding, Action] = {
    "cancel": Cancel(),
    "endOfFile": EndOfFile(),
    "complete": Complete(),
    "acceptLine": AcceptLine(),
    "deleteCharBackward": Kill(BackwardChar(1)),
    "historyPrevious": HistoryPrevious(),
    "historyNext": HistoryNext(),
    "cursorLeft": Move(BackwardChar(1)),
    "deleteWordBackward": Kill(BackwardWord(1)),
    "cursorWordLeft": Move(BackwardWord(1)),
    "cursorWordRight": Move(ForwardWord(1)),
    "cursorLineStart": Move(StartOfLine()),
    "cursorLineEnd": Move(EndOfLine()),
    "cursorRight": Move(ForwardChar(1)),
    "repaint": Repaint(),
    "deleteToLineEnd": Kill(EndOfLine()),
}

_INSERTABLE_MODIFIERS = (Modifiers.NONE, Modifiers.SHIFT)


def resolve_action(
    event: InputEvent, keybindings: KeybindingsManager | None = None
) -> Action | None:
    """Return the action *event* stands for, or ``None`` to ignore it."""
    if isinstance(event, PasteEvent):
        return InsertText(1, event.text)

    if not isinstance(event, KeyEvent):
        return None

    kb = keybindings or get_keybindings()
    binding = kb.lookup(event)
    if binding is not None:
        return BINDING_ACTIONS[binding]

    if (
        isinstance(event.key, str)
        and event.modifiers in _INSERTABLE_MODIFIERS
        and event.key.isprintable()
    ):
        return InsertChar(1, event.key)

    return None
