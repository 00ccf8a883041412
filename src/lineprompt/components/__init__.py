"""Prompt rendering components."""

from lineprompt.components.suggestion_popup import SuggestionPopup

__all__ = [
    "SuggestionPopup",
]
