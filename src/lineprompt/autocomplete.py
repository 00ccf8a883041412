"""Autocomplete engine: suggestion list, selection and scroll window.

The engine owns the suggestions produced for the word fragment left of the
cursor. It regenerates them only when the fragment changes, keeps the
selected index inside a fixed-height scroll window, and writes a chosen
suggestion back into the buffer.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Callable, NamedTuple, Union

from lineprompt.buffer import LineBuffer
from lineprompt.fragment import IsWordCharFn, current_fragment, fragment_start

if TYPE_CHECKING:
    from lineprompt.config import PromptConfig


class Suggestion(NamedTuple):
    """A single autocomplete suggestion: the text to insert and a hint."""

    text: str
    description: str = ""


SuggestionLike = Union[Suggestion, tuple[str, str], tuple[str]]

SuggestionProvider = Callable[[str, str], Iterable[SuggestionLike]]
"""``(text_before_cursor, fragment) -> suggestions`` in display order."""


def _to_suggestions(results: Iterable[SuggestionLike] | None) -> list[Suggestion]:
    if not results:
        return []
    return [item if isinstance(item, Suggestion) else Suggestion(*item) for item in results]


class AutocompleteEngine:
    """Tracks suggestions for the current fragment.

    ``selected_index`` always stays within
    ``[scroll_offset, scroll_offset + max_visible - 1]`` after navigation.
    Suggestion order is exactly the provider's order.

    The provider, word-character predicate and window height are read from
    *config* on each use.
    """

    def __init__(self, config: PromptConfig) -> None:
        self.config = config

        self.items: list[Suggestion] = []
        self.visible: bool = False
        self.selected_index: int = 0
        self.scroll_offset: int = 0
        self.source_fragment: str = ""

    # -- Settings ------------------------------------------------------------

    @property
    def provider(self) -> SuggestionProvider | None:
        return self.config.autocomplete_fn

    @property
    def is_word_char(self) -> IsWordCharFn:
        return self.config.is_word_char_fn

    @property
    def max_visible(self) -> int:
        return max(1, self.config.popup_max_height)

    # -- State ---------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self.visible and len(self.items) > 0

    def clear(self) -> None:
        self.items = []
        self.visible = False
        self.selected_index = 0
        self.scroll_offset = 0
        self.source_fragment = ""

    def get_selected_item(self) -> Suggestion | None:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index]
        return None

    def visible_range(self) -> tuple[int, int]:
        """Return the ``[start, end)`` item range of the scroll window."""
        start = self.scroll_offset
        if start >= len(self.items):
            start = max(0, len(self.items) - 1)
        return start, min(start + self.max_visible, len(self.items))

    # -- Regeneration --------------------------------------------------------

    def update(self, buffer: LineBuffer) -> None:
        """React to a content or cursor change in *buffer*."""
        fragment = current_fragment(buffer, self.is_word_char)
        line = buffer.current_line
        col = buffer.cursor_col

        if (
            not fragment
            or col <= 0
            or col > len(line)
            or not self.is_word_char(line[col - 1])
        ):
            self.clear()
            return

        if fragment != self.source_fragment:
            self.selected_index = 0
            self.scroll_offset = 0
            if self.provider is not None:
                self.items = _to_suggestions(self.provider(buffer.text_before_cursor(), fragment))
            else:
                self.items = []
            self.visible = len(self.items) > 0
            self.source_fragment = fragment
        elif not self.items:
            self.visible = False

    # -- Navigation ----------------------------------------------------------

    def select_previous(self) -> None:
        if not self.is_active:
            return
        self.selected_index -= 1
        if self.selected_index < 0:
            self.selected_index = len(self.items) - 1
            self.scroll_offset = max(0, len(self.items) - self.max_visible)
        elif self.selected_index < self.scroll_offset:
            self.scroll_offset = self.selected_index

    def select_next(self) -> None:
        if not self.is_active:
            return
        self.selected_index += 1
        if self.selected_index >= len(self.items):
            self.selected_index = 0
            self.scroll_offset = 0
        elif self.selected_index >= self.scroll_offset + self.max_visible:
            self.scroll_offset = self.selected_index - self.max_visible + 1

    # -- Application ---------------------------------------------------------

    def apply_selected(self, buffer: LineBuffer) -> bool:
        """Replace the fragment left of the cursor with the selected item.

        The fragment start is re-scanned rather than taken from
        ``source_fragment`` since the cursor may have moved since generation.
        Returns ``True`` when a suggestion was applied.
        """
        selected = self.get_selected_item()
        if not self.is_active or selected is None:
            return False

        buffer.clamp_cursor()
        line = buffer.lines[buffer.cursor_row]
        col = buffer.cursor_col
        start = fragment_start(line, col, self.is_word_char)

        buffer.lines[buffer.cursor_row] = line[:start] + selected.text + line[col:]
        buffer.cursor_col = start + len(selected.text)

        self.clear()
        return True
