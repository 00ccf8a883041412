"""Styling callables for prompt rendering."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

StyleFn = Callable[[str], str]

_RESET = "\x1b[0m"


def fg256(color: int) -> StyleFn:
    """Return a style that sets a 256-colour foreground."""
    return lambda text: f"\x1b[38;5;{color}m{text}{_RESET}"


def bg256(color: int, fg: int | None = None) -> StyleFn:
    """Return a style that sets a 256-colour background (and optional foreground)."""
    fg_code = f"\x1b[38;5;{fg}m" if fg is not None else ""
    return lambda text: f"\x1b[48;5;{color}m{fg_code}{text}{_RESET}"


def plain(text: str) -> str:
    return text


@dataclass
class PromptTheme:
    """Styles applied to each rendered part of the prompt."""

    prompt: StyleFn = plain
    cursor: StyleFn = plain
    popup_box: StyleFn = plain
    selected_item: StyleFn = plain
    unselected_item: StyleFn = plain
    description: StyleFn = plain


def default_prompt_theme() -> PromptTheme:
    return PromptTheme(
        prompt=fg256(212),
        cursor=bg256(240),
        popup_box=bg256(237, fg=252),
        selected_item=bg256(60, fg=255),
        unselected_item=plain,
        description=fg256(242),
    )
