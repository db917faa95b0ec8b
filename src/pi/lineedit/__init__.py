"""pi-lineedit: Shell-style single line editor for raw terminals."""

# Actions and movements
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
    Movement,
    Repaint,
    StartOfLine,
)

# Text buffer
from pi.lineedit.buffer import LineBuffer

# Completion
from pi.lineedit.completion import CompletionCandidate, CompletionState

# Configuration
from pi.lineedit.config import LineEditorConfig

# Editor
from pi.lineedit.editor import LineEditor, line_editor

# Errors
from pi.lineedit.errors import EndOfFileError, LineEditorError, TerminalError

# History
from pi.lineedit.history import BasicHistory, History, HistoryNavigator

# Host callbacks
from pi.lineedit.host import (
    CommandCompletionHost,
    LineEditorHost,
    NopLineEditorHost,
    OutputElement,
)

# Input events
from pi.lineedit.input import InputEvent, KeyCode, KeyEvent, Modifiers, PasteEvent

# Keybindings
from pi.lineedit.keybindings import (
    DEFAULT_KEYBINDINGS,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)

# Key decoding
from pi.lineedit.keys import key_id, parse_input_event

# Movement
from pi.lineedit.movement import eval_movement

# Action resolution
from pi.lineedit.resolver import resolve_action

# Display changes
from pi.lineedit.surface import (
    AllAttributes,
    Attribute,
    Change,
    ClearScreen,
    ClearToEndOfScreen,
    CursorPosition,
    Text,
    changes_to_ansi,
)

# Terminal
from pi.lineedit.terminal import ProcessTerminal, Terminal

__all__ = [
    # Actions
    "AcceptLine",
    "Action",
    "BackwardChar",
    "BackwardWord",
    "Cancel",
    "Complete",
    "EndOfFile",
    "EndOfLine",
    "ForwardChar",
    "ForwardWord",
    "HistoryNext",
    "HistoryPrevious",
    "InsertChar",
    "InsertText",
    "Kill",
    "Move",
    "Movement",
    "Repaint",
    "StartOfLine",
    # Buffer
    "LineBuffer",
    # Completion
    "CompletionCandidate",
    "CompletionState",
    # Config
    "LineEditorConfig",
    # Editor
    "LineEditor",
    "line_editor",
    # Errors
    "EndOfFileError",
    "LineEditorError",
    "TerminalError",
    # History
    "BasicHistory",
    "History",
    "HistoryNavigator",
    # Host
    "CommandCompletionHost",
    "LineEditorHost",
    "NopLineEditorHost",
    "OutputElement",
    # Input
    "InputEvent",
    "KeyCode",
    "KeyEvent",
    "Modifiers",
    "PasteEvent",
    # Keybindings
    "DEFAULT_KEYBINDINGS",
    "KeybindingsManager",
    "get_keybindings",
    "set_keybindings",
    # Keys
    "key_id",
    "parse_input_event",
    # Movement
    "eval_movement",
    # Resolver
    "resolve_action",
    # Surface
    "AllAttributes",
    "Attribute",
    "Change",
    "ClearScreen",
    "ClearToEndOfScreen",
    "CursorPosition",
    "Text",
    "changes_to_ansi",
    # Terminal
    "ProcessTerminal",
    "Terminal",
]
