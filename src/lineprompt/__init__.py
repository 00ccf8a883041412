"""lineprompt: multi-line terminal prompt with history and autocomplete."""

# Autocomplete support
from lineprompt.autocomplete import (
    AutocompleteEngine,
    Suggestion,
    SuggestionProvider,
)

# Line buffer
from lineprompt.buffer import LineBuffer, join_non_blank_lines

# Components
from lineprompt.components import SuggestionPopup

# Configuration
from lineprompt.config import (
    ExecuteFn,
    IsCompleteFn,
    PromptConfig,
    default_is_complete,
    new_prompt_config,
)

# Word fragments
from lineprompt.fragment import (
    IsWordCharFn,
    current_fragment,
    default_is_word_char,
    fragment_at,
    fragment_start,
)

# History
from lineprompt.history import NOT_BROWSING, HistoryLog

# Keybindings
from lineprompt.keybindings import (
    DEFAULT_PROMPT_KEYBINDINGS,
    PromptAction,
    PromptKeybindingsManager,
    get_prompt_keybindings,
    set_prompt_keybindings,
)

# Keyboard input handling
from lineprompt.keys import Key, KeyId, matches_key

# Prompt
from lineprompt.prompt import NO_EXECUTE_FN_OUTPUT, PromptModel

# Theme
from lineprompt.theme import PromptTheme, default_prompt_theme

# Utilities
from lineprompt.utils import visible_width

__all__ = [
    # Autocomplete
    "AutocompleteEngine",
    "Suggestion",
    "SuggestionProvider",
    # Buffer
    "LineBuffer",
    "join_non_blank_lines",
    # Components
    "SuggestionPopup",
    # Config
    "ExecuteFn",
    "IsCompleteFn",
    "PromptConfig",
    "default_is_complete",
    "new_prompt_config",
    # Fragments
    "IsWordCharFn",
    "current_fragment",
    "default_is_word_char",
    "fragment_at",
    "fragment_start",
    # History
    "NOT_BROWSING",
    "HistoryLog",
    # Keybindings
    "DEFAULT_PROMPT_KEYBINDINGS",
    "PromptAction",
    "PromptKeybindingsManager",
    "get_prompt_keybindings",
    "set_prompt_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    # Prompt
    "NO_EXECUTE_FN_OUTPUT",
    "PromptModel",
    # Theme
    "PromptTheme",
    "default_prompt_theme",
    # Utilities
    "visible_width",
]
