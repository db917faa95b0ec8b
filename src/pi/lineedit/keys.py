"""Keyboard input decoding for terminal applications.

Turns one complete input sequence (as split by
:class:`pi.lineedit.stdin_buffer.StdinBuffer`) into a :class:`KeyEvent`, and
names key events with the ``"ctrl+a"`` / ``"alt+left"`` key-id vocabulary used
by keybinding configuration.
"""

from __future__ import annotations

import re

from pi.lineedit.input import InputEvent, KeyCode, KeyEvent, Modifiers

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Legacy escape sequences -> key codes
LEGACY_KEY_SEQUENCES: dict[str, KeyCode] = {
    "\x1b[A": KeyCode.UP,
    "\x1b[B": KeyCode.DOWN,
    "\x1b[C": KeyCode.RIGHT,
    "\x1b[D": KeyCode.LEFT,
    "\x1b[H": KeyCode.HOME,
    "\x1b[F": KeyCode.END,
    "\x1bOA": KeyCode.UP,
    "\x1bOB": KeyCode.DOWN,
    "\x1bOC": KeyCode.RIGHT,
    "\x1bOD": KeyCode.LEFT,
    "\x1bOH": KeyCode.HOME,
    "\x1bOF": KeyCode.END,
    "\x1b[2~": KeyCode.INSERT,
    "\x1b[3~": KeyCode.DELETE,
    "\x1b[5~": KeyCode.PAGE_UP,
    "\x1b[6~": KeyCode.PAGE_DOWN,
    "\x1bOP": KeyCode.F1,
    "\x1bOQ": KeyCode.F2,
    "\x1bOR": KeyCode.F3,
    "\x1bOS": KeyCode.F4,
    "\x1b[15~": KeyCode.F5,
    "\x1b[17~": KeyCode.F6,
    "\x1b[18~": KeyCode.F7,
    "\x1b[19~": KeyCode.F8,
    "\x1b[20~": KeyCode.F9,
    "\x1b[21~": KeyCode.F10,
    "\x1b[23~": KeyCode.F11,
    "\x1b[24~": KeyCode.F12,
    "\x1b[1~": KeyCode.HOME,
    "\x1b[4~": KeyCode.END,
    "\x1b[7~": KeyCode.HOME,
    "\x1b[8~": KeyCode.END,
}

# Letter-terminated CSI: \x1b[1;<modifier>[ABCDHFPQRS]
_CSI_LETTER_KEYS: dict[str, KeyCode] = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
    "P": KeyCode.F1,
    "Q": KeyCode.F2,
    "R": KeyCode.F3,
    "S": KeyCode.F4,
}

# Tilde-terminated CSI: \x1b[<number>;<modifier>~
_CSI_TILDE_KEYS: dict[int, KeyCode] = {
    1: KeyCode.HOME,
    2: KeyCode.INSERT,
    3: KeyCode.DELETE,
    4: KeyCode.END,
    5: KeyCode.PAGE_UP,
    6: KeyCode.PAGE_DOWN,
    15: KeyCode.F5,
    17: KeyCode.F6,
    18: KeyCode.F7,
    19: KeyCode.F8,
    20: KeyCode.F9,
    21: KeyCode.F10,
    23: KeyCode.F11,
    24: KeyCode.F12,
}

_CSI_MODIFIED_LETTER_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHFPQRS])$")
_CSI_MODIFIED_TILDE_RE = re.compile(r"^\x1b\[(\d+);(\d+)~$")
_SS3_MODIFIED_RE = re.compile(r"^\x1bO(\d+)([PQRS])$")

LOCK_MASK = 64 + 128


def _decode_modifier(param: str) -> Modifiers:
    """Convert an xterm modifier parameter (1 + bitmask) to :class:`Modifiers`."""
    mod = (int(param) - 1) & ~LOCK_MASK
    return Modifiers(mod & (Modifiers.SHIFT | Modifiers.ALT | Modifiers.CTRL | Modifiers.SUPER))


def _control_key(ch: str, modifiers: Modifiers = Modifiers.NONE) -> KeyEvent | None:
    """Decode a single C0 control character or DEL."""
    if ch == "\r":
        return KeyEvent(KeyCode.ENTER, modifiers)
    if ch == "\t":
        return KeyEvent(KeyCode.TAB, modifiers)
    if ch == "\x7f":
        return KeyEvent(KeyCode.BACKSPACE, modifiers)
    if ch == "\x1b":
        return KeyEvent(KeyCode.ESCAPE, modifiers)
    if ch == "\x00":
        return KeyEvent(" ", modifiers | Modifiers.CTRL)
    code = ord(ch)
    if 1 <= code <= 26 or 28 <= code <= 31:
        # Ctrl-J, Ctrl-H and friends keep their letter
        return KeyEvent(chr(code + 0x40), modifiers | Modifiers.CTRL)
    return None


# ---------------------------------------------------------------------------
# parse_input_event: determine what key was pressed from raw input
# ---------------------------------------------------------------------------


def parse_input_event(data: str) -> InputEvent | None:
    """Parse one complete input sequence into a key event, or ``None``.

    Unrecognised escape sequences (mouse reports, focus events, ...) yield
    ``None`` and are dropped by the caller.
    """
    if not data:
        return None

    code = LEGACY_KEY_SEQUENCES.get(data)
    if code is not None:
        return KeyEvent(code)

    if data == "\x1b[Z":
        return KeyEvent(KeyCode.TAB, Modifiers.SHIFT)

    m = _CSI_MODIFIED_LETTER_RE.match(data)
    if m:
        return KeyEvent(_CSI_LETTER_KEYS[m.group(2)], _decode_modifier(m.group(1)))

    m = _CSI_MODIFIED_TILDE_RE.match(data)
    if m:
        tilde_code = _CSI_TILDE_KEYS.get(int(m.group(1)))
        if tilde_code is None:
            return None
        return KeyEvent(tilde_code, _decode_modifier(m.group(2)))

    m = _SS3_MODIFIED_RE.match(data)
    if m:
        return KeyEvent(_CSI_LETTER_KEYS[m.group(2)], _decode_modifier(m.group(1)))

    if len(data) == 1:
        control = _control_key(data)
        if control is not None:
            return control
        if data.isprintable():
            return KeyEvent(data)
        return None

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        control = _control_key(ch, Modifiers.ALT)
        if control is not None:
            return control
        if ch.isprintable():
            modifiers = Modifiers.ALT | Modifiers.SHIFT if ch.isupper() else Modifiers.ALT
            return KeyEvent(ch, modifiers)
        return None

    return None


# ---------------------------------------------------------------------------
# Key ids
# ---------------------------------------------------------------------------


def key_id(event: KeyEvent) -> KeyId:
    """Name *event* in key-id form, e.g. ``"ctrl+c"``, ``"alt+left"``, ``"a"``.

    Modifier prefixes appear in the order ``ctrl+shift+alt+super+``. Letters
    carrying ``ctrl`` or ``alt`` are lower-cased so that ``KeyEvent("C", CTRL)``
    is ``"ctrl+c"``.
    """
    mods = event.modifiers
    prefix = ""
    if mods & Modifiers.CTRL:
        prefix += "ctrl+"
    if mods & Modifiers.SHIFT:
        prefix += "shift+"
    if mods & Modifiers.ALT:
        prefix += "alt+"
    if mods & Modifiers.SUPER:
        prefix += "super+"

    if isinstance(event.key, KeyCode):
        return prefix + event.key.value

    name = event.key
    if name == " ":
        name = "space"
    elif mods & (Modifiers.CTRL | Modifiers.ALT):
        name = name.lower()
    return prefix + name


def normalize_key_id(key: KeyId) -> KeyId:
    """Put the modifiers of a configured key id into canonical order.

    ``"alt+ctrl+x"`` and ``"ctrl+alt+x"`` both become ``"ctrl+alt+x"``.
    """
    parts = key.split("+")
    # "ctrl++" names the plus key
    if key.endswith("++"):
        parts = parts[:-2] + ["+"]
    base = parts[-1]
    mods = {p.lower() for p in parts[:-1]}
    prefix = "".join(f"{m}+" for m in ("ctrl", "shift", "alt", "super") if m in mods)
    if base.lower() in {c.value.lower() for c in KeyCode}:
        base = next(c.value for c in KeyCode if c.value.lower() == base.lower())
    elif mods & {"ctrl", "alt"}:
        base = base.lower()
    return prefix + base
