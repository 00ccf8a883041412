"""Append-only command history with a browse cursor."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

NOT_BROWSING = -1


class HistoryLog:
    """Submitted inputs, oldest first, plus the index being browsed.

    Browsing methods return the text the caller should load into the line
    buffer, or ``None`` when nothing changes. Leaving history past the newest
    entry returns ``""``, which loads as a single empty line.
    """

    def __init__(self) -> None:
        self._entries: list[str] = []
        self.browse_index: int = NOT_BROWSING

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def length(self) -> int:
        return len(self._entries)

    def is_browsing(self) -> bool:
        return self.browse_index != NOT_BROWSING

    def stop_browsing(self) -> None:
        self.browse_index = NOT_BROWSING

    def record(self, text: str) -> bool:
        """Append *text* unless it is whitespace-only. Returns whether it was added."""
        if not text.strip():
            return False
        self._entries.append(text)
        logger.debug("Recorded history entry #%d (%d chars)", len(self._entries), len(text))
        return True

    def browse_up(self) -> str | None:
        """Step to the previous (older) entry."""
        if not self._entries:
            return None

        if self.browse_index == NOT_BROWSING:
            self.browse_index = len(self._entries) - 1
        elif self.browse_index > 0:
            self.browse_index -= 1
        else:
            # Already at the oldest entry
            return None

        return self._current()

    def browse_down(self) -> str | None:
        """Step to the next (newer) entry, or leave browsing past the newest."""
        if self.browse_index == NOT_BROWSING:
            return None

        if self.browse_index < len(self._entries) - 1:
            self.browse_index += 1
            return self._current()

        self.browse_index = NOT_BROWSING
        logger.debug("Left history browsing")
        return ""

    def _current(self) -> str:
        logger.debug("Browsing history entry %d/%d", self.browse_index + 1, len(self._entries))
        return self._entries[self.browse_index]
