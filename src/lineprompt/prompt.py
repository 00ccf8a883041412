"""Multi-line prompt with history, autocomplete and completeness-gated submit.

``PromptModel`` wires a LineBuffer, HistoryLog and AutocompleteEngine
together. Hosts either feed raw terminal input to ``handle_input`` or call
the editing methods directly, then draw the result of ``render``.
"""

from __future__ import annotations

import logging
from typing import Callable

import grapheme as _grapheme

from lineprompt.autocomplete import AutocompleteEngine, Suggestion
from lineprompt.buffer import Direction, LineBuffer
from lineprompt.components.suggestion_popup import SuggestionPopup
from lineprompt.config import PromptConfig
from lineprompt.history import HistoryLog
from lineprompt.keybindings import get_prompt_keybindings

logger = logging.getLogger(__name__)

NO_EXECUTE_FN_OUTPUT = "--- No execute function configured ---"

# Bare statement terminator; complete-looking but carries no command
_BARE_TERMINATOR = ";"


class PromptModel:
    """Interactive multi-line input component.

    Implements the Component interface (``render``/``handle_input``/
    ``invalidate``) for TUI integration.
    """

    def __init__(self, config: PromptConfig | None = None) -> None:
        if config is None:
            config = PromptConfig()
        self.config = config

        self._buffer = LineBuffer()
        self._history = HistoryLog()
        self._autocomplete = AutocompleteEngine(config)
        self._popup = SuggestionPopup(self._autocomplete, config)

        # Output of the last execution, cleared on the next edit. The flags
        # record whether a result is pending and whether it came from the
        # execute function or is the no-executor placeholder.
        self.last_output: str = ""
        self._has_output = False
        self._output_is_placeholder = False

        # Public callbacks
        self.on_submit: Callable[[str, str], None] | None = None
        self.on_exit: Callable[[], None] | None = None

    # -- Read-only state -----------------------------------------------------

    @property
    def lines(self) -> list[str]:
        return list(self._buffer.lines)

    @property
    def cursor(self) -> tuple[int, int]:
        return self._buffer.cursor

    @property
    def suggestions(self) -> list[Suggestion]:
        return list(self._autocomplete.items)

    @property
    def show_popup(self) -> bool:
        return self._autocomplete.visible

    @property
    def selected_suggestion_index(self) -> int:
        return self._autocomplete.selected_index

    @property
    def popup_scroll_offset(self) -> int:
        return self._autocomplete.scroll_offset

    @property
    def popup_max_height(self) -> int:
        return self._autocomplete.max_visible

    @property
    def history(self) -> tuple[str, ...]:
        return self._history.entries

    @property
    def history_index(self) -> int:
        return self._history.browse_index

    def get_input(self) -> str:
        """The buffer joined with newlines, trailing blank lines removed."""
        return self._buffer.joined_non_blank_content()

    def _clear_output(self) -> None:
        self.last_output = ""
        self._has_output = False
        self._output_is_placeholder = False

    # -- Editing operations --------------------------------------------------

    def insert_text(self, text: str) -> None:
        """Type *text* at the cursor and refresh suggestions."""
        self._clear_output()
        if self._buffer.insert_text(text):
            # Typing leaves history browsing
            self._history.stop_browsing()
        self._autocomplete.update(self._buffer)

    def delete_before_cursor(self) -> None:
        self._clear_output()
        self._buffer.delete_before_cursor()
        self._autocomplete.update(self._buffer)

    def move_cursor(self, direction: Direction) -> None:
        """Move the cursor; horizontal movement cancels autocomplete."""
        self._clear_output()
        self._buffer.move_cursor(direction)
        if direction in ("left", "right"):
            self._autocomplete.clear()

    def apply_suggestion(self) -> bool:
        return self._autocomplete.apply_selected(self._buffer)

    def select_previous_suggestion(self) -> None:
        self._autocomplete.select_previous()

    def select_next_suggestion(self) -> None:
        self._autocomplete.select_next()

    def clear_autocomplete(self) -> None:
        self._autocomplete.clear()

    # -- History -------------------------------------------------------------

    def history_up(self) -> None:
        self._load_history_entry(self._history.browse_up())

    def history_down(self) -> None:
        self._load_history_entry(self._history.browse_down())

    def _load_history_entry(self, text: str | None) -> None:
        if text is None:
            return
        self._buffer.load(text)
        self._autocomplete.clear()

    # -- Arrow key dispatch --------------------------------------------------

    def handle_up(self) -> None:
        """Up arrow: suggestions first, then history at the top row, else cursor."""
        self._clear_output()
        if self._autocomplete.visible:
            self._autocomplete.select_previous()
        elif self._buffer.cursor_row == 0:
            self.history_up()
        else:
            self._buffer.move_cursor("up")

    def handle_down(self) -> None:
        """Down arrow: suggestions first, then history while browsing, else cursor."""
        self._clear_output()
        if self._autocomplete.visible:
            self._autocomplete.select_next()
        elif self._history.is_browsing():
            self.history_down()
        else:
            self._buffer.move_cursor("down")

    # -- Submission ----------------------------------------------------------

    def submit(self) -> bool:
        """Execute the input if complete, otherwise continue on a new line.

        Returns ``True`` when the input was executed.
        """
        text = self._buffer.joined_non_blank_content()
        is_complete = self.config.is_complete_fn(text)

        if not is_complete or text.strip() == _BARE_TERMINATOR:
            self._buffer.insert_newline()
            self._autocomplete.clear()
            return False

        if self.config.execute_fn is not None:
            logger.debug("Executing input (%d lines)", text.count("\n") + 1)
            output = self.config.execute_fn(text)
            self._output_is_placeholder = False
        else:
            logger.debug("Submit with no execute function configured")
            output = NO_EXECUTE_FN_OUTPUT
            self._output_is_placeholder = True
        self.last_output = output
        self._has_output = True

        self._history.record(text)
        self._buffer.reset()
        self._history.stop_browsing()
        self._autocomplete.clear()

        if self.on_submit:
            self.on_submit(text, output)
        return True

    # -- Component interface -------------------------------------------------

    def invalidate(self) -> None:
        """No cached state to invalidate currently."""

    def handle_input(self, data: str) -> None:
        if not data:
            return
        kb = get_prompt_keybindings()

        if kb.matches(data, "exit"):
            if self.on_exit:
                self.on_exit()
            return

        if kb.matches(data, "submit"):
            self.submit()
            return

        if kb.matches(data, "deleteCharBackward"):
            self.delete_before_cursor()
            return

        if kb.matches(data, "applySuggestion"):
            self.apply_suggestion()
            return

        if kb.matches(data, "cursorUp"):
            self.handle_up()
            return
        if kb.matches(data, "cursorDown"):
            self.handle_down()
            return
        if kb.matches(data, "cursorLeft"):
            self.move_cursor("left")
            return
        if kb.matches(data, "cursorRight"):
            self.move_cursor("right")
            return

        # Regular characters (including space)
        if ord(data[0]) >= 32:
            self.insert_text(data)

    def render(self, width: int) -> list[str]:
        theme = self.config.theme
        result: list[str] = []

        if self._has_output:
            output = self.last_output.rstrip("\n")
            if self._output_is_placeholder:
                result.append(output)
            else:
                result.append("--- Executing ---")
                result.extend(output.split("\n"))
                result.append("-----------------")

        row, col = self._buffer.cursor
        for i, line in enumerate(self._buffer.lines):
            prefix = theme.prompt(self.config.prompt_primary if i == 0 else self.config.prompt_secondary)
            if i != row:
                result.append(prefix + line)
                continue

            before = line[:col]
            after = line[col:]
            if after:
                # Highlight the whole grapheme under the cursor
                under_cursor = next(_grapheme.graphemes(after))
                result.append(prefix + before + theme.cursor(under_cursor) + after[len(under_cursor) :])
            else:
                result.append(prefix + before + theme.cursor(" "))

        result.extend(self._popup.render(width))
        return result
