"""Word-fragment detection left of the cursor.

A fragment is the maximal run of word characters ending exactly at the
cursor. The word-character policy is supplied by the host.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from lineprompt.buffer import LineBuffer

IsWordCharFn = Callable[[str], bool]


def default_is_word_char(char: str) -> bool:
    """Letters, digits, underscore and period count as word characters."""
    return char.isalpha() or char.isdecimal() or char in ("_", ".")


def fragment_start(line: str, col: int, is_word_char: IsWordCharFn) -> int:
    """Scan left from *col* and return the column where the word run begins."""
    start = max(0, min(col, len(line)))
    while start > 0 and is_word_char(line[start - 1]):
        start -= 1
    return start


def fragment_at(line: str, col: int, is_word_char: IsWordCharFn) -> str:
    """Return the word fragment ending at *col* in *line*, or ``""``."""
    if col <= 0 or col > len(line):
        return ""
    if not is_word_char(line[col - 1]):
        return ""
    return line[fragment_start(line, col, is_word_char) : col]


def current_fragment(buffer: LineBuffer, is_word_char: IsWordCharFn) -> str:
    """Return the fragment immediately left of *buffer*'s cursor."""
    if not 0 <= buffer.cursor_row < len(buffer.lines):
        return ""
    return fragment_at(buffer.lines[buffer.cursor_row], buffer.cursor_col, is_word_char)
