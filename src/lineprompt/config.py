"""Prompt configuration and the default completeness policy."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable

from lineprompt.autocomplete import SuggestionProvider
from lineprompt.fragment import IsWordCharFn, default_is_word_char
from lineprompt.theme import PromptTheme, default_prompt_theme

ExecuteFn = Callable[[str], str]
IsCompleteFn = Callable[[str], bool]

DEFAULT_POPUP_MAX_HEIGHT = 6


def default_is_complete(text: str) -> bool:
    """Input is complete when it ends with a semicolon, ignoring whitespace."""
    return text.strip().endswith(";")


@dataclass
class PromptConfig:
    """Settings for a PromptModel.

    Passing ``None`` for a predicate or the theme selects the default, and a
    non-positive ``popup_max_height`` falls back to 6. The model reads these
    fields on every call, so changes made after construction take effect on
    the next keystroke.
    """

    prompt_primary: str = "> "
    prompt_secondary: str = ". "
    autocomplete_fn: SuggestionProvider | None = None
    execute_fn: ExecuteFn | None = None
    is_complete_fn: IsCompleteFn = default_is_complete
    is_word_char_fn: IsWordCharFn = default_is_word_char
    theme: PromptTheme = field(default_factory=default_prompt_theme)
    show_description: bool = False
    popup_max_height: int = DEFAULT_POPUP_MAX_HEIGHT

    def __post_init__(self) -> None:
        if self.is_complete_fn is None:
            self.is_complete_fn = default_is_complete
        if self.is_word_char_fn is None:
            self.is_word_char_fn = default_is_word_char
        if self.theme is None:
            self.theme = default_prompt_theme()
        if not math.isfinite(self.popup_max_height) or self.popup_max_height <= 0:
            self.popup_max_height = DEFAULT_POPUP_MAX_HEIGHT
        self.popup_max_height = int(self.popup_max_height)


def new_prompt_config(
    primary: str,
    secondary: str,
    autocomplete_fn: SuggestionProvider | None,
    execute_fn: ExecuteFn | None,
) -> PromptConfig:
    """Build a config with the given prompts and callbacks, defaults elsewhere."""
    return PromptConfig(
        prompt_primary=primary,
        prompt_secondary=secondary,
        autocomplete_fn=autocomplete_fn,
        execute_fn=execute_fn,
    )
