"""Suggestion popup: renders the scroll window of an AutocompleteEngine."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from lineprompt.utils import pad_to_width, take_columns, visible_width

if TYPE_CHECKING:
    from lineprompt.autocomplete import AutocompleteEngine, Suggestion
    from lineprompt.config import PromptConfig

_DESCRIPTION_GAP = "  "


def _normalize_to_single_line(text: str) -> str:
    return re.sub(r"[\r\n]+", " ", text).strip()


class SuggestionPopup:
    """Draws the visible slice of suggestions as a padded box.

    Item texts are padded to the widest visible text so descriptions line up.
    Theme and ``show_description`` are read from *config* on each render.
    """

    def __init__(self, engine: AutocompleteEngine, config: PromptConfig) -> None:
        self._engine = engine
        self._config = config

    def invalidate(self) -> None:
        pass

    def _layout_row(self, item: Suggestion, text_width: int, columns: int) -> tuple[str, str]:
        """Split a row into its text part and description, cut to *columns*."""
        text = take_columns(pad_to_width(item.text, text_width), columns)
        description = ""
        if self._config.show_description and item.description:
            room = columns - visible_width(text) - len(_DESCRIPTION_GAP)
            if room > 0:
                description = take_columns(_normalize_to_single_line(item.description), room)
        return text, description

    def render(self, width: int) -> list[str]:
        engine = self._engine
        if not engine.is_active or width <= 0:
            return []

        theme = self._config.theme
        # One column of padding each side, dropped when there is no room
        padding = " " if width >= 3 else ""
        columns = width - 2 * len(padding)

        start_index, end_index = engine.visible_range()
        items = engine.items[start_index:end_index]
        text_width = max(visible_width(item.text) for item in items)

        rows = [self._layout_row(item, text_width, columns) for item in items]
        box_width = max(
            visible_width(text) + (len(_DESCRIPTION_GAP) + visible_width(desc) if desc else 0)
            for text, desc in rows
        )

        lines: list[str] = []
        for offset, (text, description) in enumerate(rows):
            row = text
            row_width = visible_width(text)
            if description:
                row += _DESCRIPTION_GAP + theme.description(description)
                row_width += len(_DESCRIPTION_GAP) + visible_width(description)
            row += " " * (box_width - row_width)

            is_selected = start_index + offset == engine.selected_index
            style = theme.selected_item if is_selected else theme.unselected_item
            lines.append(theme.popup_box(f"{padding}{style(row)}{padding}"))
        return lines
