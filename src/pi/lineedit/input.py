"""Input events delivered by a terminal transport."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Union


class Modifiers(enum.IntFlag):
    """Modifier keys held while a key was pressed."""

    NONE = 0
    SHIFT = 1
    ALT = 2
    CTRL = 4
    SUPER = 8


class KeyCode(enum.Enum):
    """Keys that do not produce a character."""

    ENTER = "enter"
    TAB = "tab"
    BACKSPACE = "backspace"
    ESCAPE = "escape"
    DELETE = "delete"
    INSERT = "insert"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageUp"
    PAGE_DOWN = "pageDown"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    F1 = "f1"
    F2 = "f2"
    F3 = "f3"
    F4 = "f4"
    F5 = "f5"
    F6 = "f6"
    F7 = "f7"
    F8 = "f8"
    F9 = "f9"
    F10 = "f10"
    F11 = "f11"
    F12 = "f12"


@dataclass(frozen=True)
class KeyEvent:
    """A key press.

    ``key`` is either a :class:`KeyCode` or a single character. Control
    letters arrive as the upper-case letter with :attr:`Modifiers.CTRL`.
    """

    key: KeyCode | str
    modifiers: Modifiers = Modifiers.NONE


@dataclass(frozen=True)
class PasteEvent:
    """Text delivered in one piece by bracketed paste."""

    text: str


InputEvent = Union[KeyEvent, PasteEvent]
