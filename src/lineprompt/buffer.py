"""Line buffer: ordered text lines plus a (row, column) cursor.

Columns count codepoints, which is what Python ``str`` indexing measures, so
multi-byte text needs no special handling. Out-of-range conditions are
clamped, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

Direction = Literal["up", "down", "left", "right"]


def _is_blank(line: str) -> bool:
    return line.strip() == ""


def join_non_blank_lines(lines: list[str]) -> str:
    """Join *lines* with newlines after dropping trailing whitespace-only lines."""
    end = len(lines)
    while end > 0 and _is_blank(lines[end - 1]):
        end -= 1
    return "\n".join(lines[:end])


@dataclass
class LineBuffer:
    """Mutable multi-line text with a cursor.

    ``lines`` is never empty; ``cursor_row`` indexes it and ``cursor_col``
    lies in ``[0, len(lines[cursor_row])]``.
    """

    lines: list[str] = field(default_factory=lambda: [""])
    cursor_row: int = 0
    cursor_col: int = 0

    def __post_init__(self) -> None:
        if not self.lines:
            self.lines = [""]
        self.clamp_cursor()

    # -- State helpers -------------------------------------------------------

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor_row] if self.cursor_row < len(self.lines) else ""

    @property
    def cursor(self) -> tuple[int, int]:
        return (self.cursor_row, self.cursor_col)

    def is_empty(self) -> bool:
        return len(self.lines) == 1 and self.lines[0] == ""

    def clamp_cursor(self) -> None:
        """Pull the cursor back inside the buffer after an external mutation."""
        if not self.lines:
            self.lines = [""]
        self.cursor_row = max(0, min(self.cursor_row, len(self.lines) - 1))
        self.cursor_col = max(0, min(self.cursor_col, len(self.lines[self.cursor_row])))

    def reset(self) -> None:
        """Return to a single empty line with the cursor at the origin."""
        self.lines = [""]
        self.cursor_row = 0
        self.cursor_col = 0

    def load(self, text: str) -> None:
        """Replace the content with *text*, cursor at the end of the last line."""
        self.lines = text.split("\n")
        self.cursor_row = len(self.lines) - 1
        self.cursor_col = len(self.lines[self.cursor_row])

    # -- Editing -------------------------------------------------------------

    def insert_text(self, text: str) -> int:
        """Insert *text* at the cursor, dropping control characters.

        Returns the number of codepoints inserted. Callers are responsible for
        cancelling any history browse when this is non-zero.
        """
        printable = "".join(ch for ch in text if ord(ch) >= 32)
        if not printable:
            return 0

        self.clamp_cursor()
        line = self.lines[self.cursor_row]
        self.lines[self.cursor_row] = line[: self.cursor_col] + printable + line[self.cursor_col :]
        self.cursor_col += len(printable)
        return len(printable)

    def delete_before_cursor(self) -> None:
        """Backspace: delete one codepoint, or merge onto the previous line."""
        self.clamp_cursor()
        if self.cursor_col > 0:
            line = self.lines[self.cursor_row]
            self.lines[self.cursor_row] = line[: self.cursor_col - 1] + line[self.cursor_col :]
            self.cursor_col -= 1
        elif self.cursor_row > 0:
            previous_line = self.lines[self.cursor_row - 1]
            self.lines[self.cursor_row - 1] = previous_line + self.lines[self.cursor_row]
            del self.lines[self.cursor_row]
            self.cursor_row -= 1
            self.cursor_col = len(previous_line)

    def insert_newline(self) -> None:
        """Split the current line at the cursor and move to the new line."""
        self.clamp_cursor()
        line = self.lines[self.cursor_row]
        before = line[: self.cursor_col]
        after = line[self.cursor_col :]

        self.lines[self.cursor_row] = before
        self.lines.insert(self.cursor_row + 1, after)
        self.cursor_row += 1
        self.cursor_col = 0

        self.cleanup_trailing_blank_lines()

        # Cleanup may have removed the row the cursor moved to
        if not self.lines:
            self.reset()
        elif self.cursor_row >= len(self.lines):
            self.cursor_row = len(self.lines) - 1
            self.cursor_col = min(self.cursor_col, len(self.lines[self.cursor_row]))

    def cleanup_trailing_blank_lines(self) -> None:
        """Collapse runs of whitespace-only lines at the end to a single one."""
        while len(self.lines) > 1 and _is_blank(self.lines[-1]) and _is_blank(self.lines[-2]):
            self.lines.pop()

    # -- Navigation ----------------------------------------------------------

    def move_cursor(self, direction: Direction) -> None:
        self.clamp_cursor()
        if direction == "up":
            if self.cursor_row > 0:
                self.cursor_row -= 1
                self.cursor_col = min(self.cursor_col, len(self.lines[self.cursor_row]))
        elif direction == "down":
            if self.cursor_row < len(self.lines) - 1:
                self.cursor_row += 1
                self.cursor_col = min(self.cursor_col, len(self.lines[self.cursor_row]))
        elif direction == "left":
            if self.cursor_col > 0:
                self.cursor_col -= 1
            elif self.cursor_row > 0:
                # Wrap to end of previous line
                self.cursor_row -= 1
                self.cursor_col = len(self.lines[self.cursor_row])
        elif direction == "right":
            if self.cursor_col < len(self.lines[self.cursor_row]):
                self.cursor_col += 1
            elif self.cursor_row < len(self.lines) - 1:
                # Wrap to start of next line
                self.cursor_row += 1
                self.cursor_col = 0

    # -- Read-only views -----------------------------------------------------

    def text_before_cursor(self) -> str:
        """All text from the start of the buffer up to the cursor."""
        if not 0 <= self.cursor_row < len(self.lines):
            return ""
        above = "".join(line + "\n" for line in self.lines[: self.cursor_row])
        col = max(0, min(self.cursor_col, len(self.lines[self.cursor_row])))
        return above + self.lines[self.cursor_row][:col]

    def joined_non_blank_content(self) -> str:
        return join_non_blank_lines(self.lines)

    def get_text(self) -> str:
        return "\n".join(self.lines)
