"""Keyboard input matching for raw terminal data.

Maps raw input strings (legacy VT sequences, control bytes and kitty CSI-u
sequences) onto named key identifiers such as ``"up"``, ``"ctrl+c"`` or
``"enter"``.
"""

from __future__ import annotations

import re

KeyId = str


class Key:
    """Named key constants."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

CODEPOINTS: dict[str, int] = {
    "escape": 27,
    "tab": 9,
    "enter": 13,
    "space": 32,
    "backspace": 127,
}

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

# Modified arrows: ESC [ 1 ; <mod+1> <A-D>
_MODIFIED_CSI_RE = re.compile(r"^\x1b\[1;(\d+)([ABCD])$")
_CSI_FINAL_KEYS = {"A": "up", "B": "down", "C": "right", "D": "left"}

# Kitty keyboard protocol: ESC [ <codepoint> [:shifted] [; <mod+1>] u
_KITTY_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::\d*)?(?::\d+)?(?:;(\d+))?(?::\d+)?u$")


_KEY_ALIASES: dict[str, str] = {"return": "enter", "esc": "escape"}


def parse_key_id(key_id: str) -> tuple[str, int] | None:
    """Split ``"ctrl+shift+a"`` into ``("a", modifier_bits)``."""
    if not key_id:
        return None
    parts = key_id.split("+")
    # "ctrl++" style ids bind the plus key itself
    if key_id.endswith("++"):
        parts = [*key_id[:-2].split("+"), "+"]
    key = parts[-1]
    if not key:
        return None
    mods = 0
    for part in parts[:-1]:
        bit = MODIFIERS.get(part.lower())
        if bit is None:
            return None
        mods |= bit
    if len(key) > 1:
        key = _KEY_ALIASES.get(key.lower(), key.lower())
    return key, mods


def _parse_kitty(data: str) -> tuple[int, int] | None:
    m = _KITTY_CSI_U_RE.match(data)
    if not m:
        return None
    codepoint = int(m.group(1))
    mod_value = int(m.group(2)) if m.group(2) else 1
    return codepoint, max(0, mod_value - 1) & 0b111


def _matches_kitty(data: str, codepoint: int, mods: int) -> bool:
    parsed = _parse_kitty(data)
    return parsed is not None and parsed == (codepoint, mods)


def matches_key(data: str, key_id: KeyId) -> bool:  # noqa: C901
    """Return ``True`` if *data* (raw terminal input) matches the named *key_id*."""
    parsed = parse_key_id(key_id)
    if parsed is None:
        return False
    key, mods = parsed
    has_ctrl = bool(mods & MODIFIERS["ctrl"])
    has_shift = bool(mods & MODIFIERS["shift"])
    has_alt = bool(mods & MODIFIERS["alt"])
    no_mods = mods == 0

    if key in CODEPOINTS and _matches_kitty(data, CODEPOINTS[key], mods):
        return True

    if key == "escape":
        if no_mods:
            return data == "\x1b"
        return has_alt and not has_ctrl and not has_shift and data == "\x1b\x1b"

    if key == "enter":
        if no_mods:
            return data in ("\r", "\n")
        return has_alt and not has_ctrl and not has_shift and data in ("\x1b\r", "\x1b\n")

    if key == "tab":
        if no_mods:
            return data == "\t"
        return has_shift and not has_ctrl and not has_alt and data == "\x1b[Z"

    if key == "space":
        if no_mods:
            return data == " "
        if has_ctrl and not has_shift and not has_alt:
            return data == "\x00"
        return has_alt and not has_ctrl and not has_shift and data == "\x1b "

    if key == "backspace":
        if no_mods:
            return data in ("\x7f", "\x08")
        return has_alt and not has_ctrl and not has_shift and data in ("\x1b\x7f", "\x1b\x08")

    if key in _CSI_FINAL_KEYS.values():
        if no_mods:
            return LEGACY_KEY_SEQUENCES.get(data) == key
        m = _MODIFIED_CSI_RE.match(data)
        if m is None:
            return False
        return _CSI_FINAL_KEYS[m.group(2)] == key and int(m.group(1)) - 1 == mods

    if len(key) != 1:
        return False

    # Single character keys
    if no_mods:
        return data == key
    if has_shift and not has_ctrl and not has_alt:
        return data == key.upper() and key.upper() != key
    if has_ctrl and not has_shift and not has_alt:
        code = ord(key.lower())
        if ord("a") <= code <= ord("z"):
            if data == chr(code - 96):
                return True
        return _matches_kitty(data, code, mods)
    if has_alt and not has_ctrl and not has_shift:
        return data == f"\x1b{key}"
    return _matches_kitty(data, ord(key.lower()), mods)

