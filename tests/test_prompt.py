"""Tests for lineprompt.prompt.PromptModel -- submission, history and key dispatch."""

from __future__ import annotations

from lineprompt.autocomplete import Suggestion
from lineprompt.config import PromptConfig
from lineprompt.history import NOT_BROWSING
from lineprompt.prompt import NO_EXECUTE_FN_OUTPUT, PromptModel
from lineprompt.theme import PromptTheme

# Raw escape codes for key sequences
KEY_UP = "\x1b[A"
KEY_DOWN = "\x1b[B"
KEY_LEFT = "\x1b[D"
KEY_RIGHT = "\x1b[C"
KEY_ENTER = "\r"
KEY_TAB = "\t"
KEY_ESCAPE = "\x1b"
KEY_CTRL_C = "\x03"
KEY_BACKSPACE = "\x7f"

SQL_WORDS = ["FROM", "FULL", "SELECT", "SET", "UPDATE", "USING", "WHERE"]


class _Executor:
    """Execute callback recording every input it receives."""

    def __init__(self, output: str = "ok") -> None:
        self.output = output
        self.calls: list[str] = []

    def __call__(self, text: str) -> str:
        self.calls.append(text)
        return self.output


def _sql_suggestions(text_before_cursor: str, fragment: str) -> list[tuple[str, str]]:
    return [(word, f"keyword {word}") for word in SQL_WORDS if word.startswith(fragment.upper())]


def _model(**overrides: object) -> tuple[PromptModel, _Executor]:
    executor = _Executor()
    options: dict[str, object] = {
        "prompt_primary": "sql> ",
        "prompt_secondary": "...> ",
        "autocomplete_fn": _sql_suggestions,
        "execute_fn": executor,
        "theme": PromptTheme(),
    }
    options.update(overrides)
    return PromptModel(PromptConfig(**options)), executor  # type: ignore[arg-type]


def _type(model: PromptModel, text: str) -> None:
    for ch in text:
        model.handle_input(ch)


class TestPromptInitialState:
    def test_starts_empty(self) -> None:
        model, _ = _model()
        assert model.lines == [""]
        assert model.cursor == (0, 0)
        assert model.history == ()
        assert model.history_index == NOT_BROWSING
        assert not model.show_popup
        assert model.last_output == ""

    def test_default_config(self) -> None:
        model = PromptModel()
        assert model.popup_max_height == 6
        assert model.config.is_word_char_fn is not None


class TestPromptSubmit:
    """Enter executes complete input and otherwise inserts a newline."""

    def test_incomplete_input_inserts_newline(self) -> None:
        model, executor = _model()
        _type(model, "SELECT 1")
        model.handle_input(KEY_ENTER)
        assert model.lines == ["SELECT 1", ""]
        assert model.cursor == (1, 0)
        assert executor.calls == []
        assert model.history == ()

    def test_complete_input_executes_once(self) -> None:
        model, executor = _model()
        _type(model, "SELECT 1;")
        assert model.submit()
        assert executor.calls == ["SELECT 1;"]
        assert model.history == ("SELECT 1;",)
        assert model.lines == [""]
        assert model.cursor == (0, 0)
        assert model.last_output == "ok"

    def test_multiline_input_is_joined_without_trailing_blank_lines(self) -> None:
        model, executor = _model()
        _type(model, "SELECT *")
        model.handle_input(KEY_ENTER)
        _type(model, "FROM t;")
        model.handle_input(KEY_ENTER)
        assert executor.calls == ["SELECT *\nFROM t;"]
        assert model.history == ("SELECT *\nFROM t;",)

    def test_bare_terminator_is_not_executed(self) -> None:
        model, executor = _model()
        _type(model, " ;")
        assert not model.submit()
        assert executor.calls == []
        assert model.history == ()
        assert model.lines == [" ;", ""]

    def test_whitespace_only_complete_input_is_not_recorded(self) -> None:
        model, executor = _model(is_complete_fn=lambda text: True)
        _type(model, "   ")
        assert model.submit()
        # Trailing whitespace-only lines are dropped before execution
        assert executor.calls == [""]
        assert model.history == ()

    def test_missing_execute_fn_shows_placeholder(self) -> None:
        model, _ = _model(execute_fn=None)
        _type(model, "SELECT 1;")
        model.submit()
        assert model.last_output == NO_EXECUTE_FN_OUTPUT
        assert model.history == ("SELECT 1;",)

    def test_on_submit_callback(self) -> None:
        model, _ = _model()
        seen: list[tuple[str, str]] = []
        model.on_submit = lambda text, output: seen.append((text, output))
        _type(model, "SELECT 1;")
        model.submit()
        assert seen == [("SELECT 1;", "ok")]

    def test_submit_leaves_history_browsing(self) -> None:
        model, _ = _model()
        _type(model, "SELECT 1;")
        model.submit()
        model.handle_input(KEY_UP)
        assert model.history_index == 0
        model.submit()
        assert model.history_index == NOT_BROWSING
        assert model.history == ("SELECT 1;", "SELECT 1;")

    def test_last_output_cleared_on_next_edit(self) -> None:
        model, _ = _model()
        _type(model, "SELECT 1;")
        model.submit()
        model.handle_input("x")
        assert model.last_output == ""


class TestPromptHistoryNavigation:
    """Up/down arrows browse history when no suggestions are shown."""

    def _with_history(self) -> PromptModel:
        model, _ = _model()
        for statement in ("SELECT 1;", "SELECT 2;"):
            _type(model, statement)
            model.submit()
        return model

    def test_browse_scenario(self) -> None:
        model = self._with_history()
        model.handle_input(KEY_UP)
        assert model.lines == ["SELECT 2;"]
        assert model.cursor == (0, 9)
        model.handle_input(KEY_UP)
        assert model.lines == ["SELECT 1;"]
        model.handle_input(KEY_DOWN)
        assert model.lines == ["SELECT 2;"]
        model.handle_input(KEY_DOWN)
        assert model.lines == [""]
        assert model.cursor == (0, 0)
        assert model.history_index == NOT_BROWSING

    def test_multiline_entry_loads_with_cursor_at_end(self) -> None:
        model, _ = _model()
        _type(model, "SELECT *")
        model.handle_input(KEY_ENTER)
        _type(model, "FROM t;")
        model.handle_input(KEY_ENTER)
        model.handle_input(KEY_UP)
        assert model.lines == ["SELECT *", "FROM t;"]
        assert model.cursor == (1, 7)

    def test_typing_cancels_browsing(self) -> None:
        model = self._with_history()
        model.handle_input(KEY_UP)
        model.handle_input(" ")
        assert model.history_index == NOT_BROWSING
        model.handle_input(KEY_DOWN)
        assert model.lines == ["SELECT 2; "]

    def test_up_moves_cursor_when_not_on_first_row(self) -> None:
        model, _ = _model()
        _type(model, "SELECT 1")
        model.handle_input(KEY_ENTER)
        _type(model, "x")
        model.handle_input(KEY_UP)
        assert model.cursor == (0, 1)
        assert model.history_index == NOT_BROWSING

    def test_down_moves_cursor_when_not_browsing(self) -> None:
        model, _ = _model()
        _type(model, "ab")
        model.handle_input(KEY_ENTER)
        _type(model, "cd")
        model.move_cursor("up")
        model.handle_input(KEY_DOWN)
        assert model.cursor == (1, 2)

    def test_up_with_empty_history_is_noop(self) -> None:
        model, _ = _model()
        model.handle_input(KEY_UP)
        assert model.lines == [""]
        assert model.history_index == NOT_BROWSING


class TestPromptAutocomplete:
    """Typing drives suggestions; arrows and tab operate the popup."""

    def test_typing_scenario(self) -> None:
        model, _ = _model(theme=PromptTheme())
        _type(model, "SELECT ")
        assert not model.show_popup
        _type(model, "FR")
        assert model.suggestions == [Suggestion("FROM", "keyword FROM")]
        assert model.show_popup
        model.handle_input(KEY_TAB)
        assert model.lines == ["SELECT FROM"]
        assert model.cursor == (0, 11)
        assert not model.show_popup

    def test_arrows_navigate_suggestions_instead_of_history(self) -> None:
        model, _ = _model()
        _type(model, "SELECT 1;")
        model.submit()
        _type(model, "S")
        assert [s.text for s in model.suggestions] == ["SELECT", "SET"]
        model.handle_input(KEY_DOWN)
        assert model.selected_suggestion_index == 1
        model.handle_input(KEY_UP)
        assert model.selected_suggestion_index == 0
        assert model.history_index == NOT_BROWSING
        assert model.lines == ["S"]

    def test_horizontal_movement_cancels_suggestions(self) -> None:
        model, _ = _model()
        _type(model, "SE")
        assert model.show_popup
        model.handle_input(KEY_LEFT)
        assert not model.show_popup
        assert model.cursor == (0, 1)
        model.handle_input(KEY_RIGHT)
        assert not model.show_popup

    def test_backspace_refreshes_suggestions(self) -> None:
        model, _ = _model()
        _type(model, "SEL")
        assert [s.text for s in model.suggestions] == ["SELECT"]
        model.handle_input(KEY_BACKSPACE)
        assert [s.text for s in model.suggestions] == ["SELECT", "SET"]

    def test_enter_clears_suggestions(self) -> None:
        model, _ = _model()
        _type(model, "SE")
        model.handle_input(KEY_ENTER)
        assert not model.show_popup
        assert model.lines == ["SE", ""]

    def test_tab_without_suggestions_is_noop(self) -> None:
        model, _ = _model()
        _type(model, "SELECT ")
        model.handle_input(KEY_TAB)
        assert model.lines == ["SELECT "]

    def test_popup_window_uses_configured_height(self) -> None:
        model, _ = _model(popup_max_height=2)
        _type(model, "S")
        model.handle_input(KEY_DOWN)
        model.handle_input(KEY_DOWN)
        assert model.selected_suggestion_index == 0
        assert model.popup_scroll_offset == 0
        model.handle_input(KEY_UP)
        assert model.selected_suggestion_index == 1
        assert model.popup_scroll_offset == 0


class TestPromptHandleInput:
    def test_exit_keys_call_on_exit(self) -> None:
        model, _ = _model()
        exits: list[bool] = []
        model.on_exit = lambda: exits.append(True)
        model.handle_input(KEY_ESCAPE)
        model.handle_input(KEY_CTRL_C)
        assert exits == [True, True]

    def test_unknown_control_input_is_ignored(self) -> None:
        model, _ = _model()
        model.handle_input("\x1b[15~")
        model.handle_input("\x02")
        assert model.lines == [""]

    def test_pasted_text_is_inserted(self) -> None:
        model, _ = _model()
        model.handle_input("select 42")
        assert model.lines == ["select 42"]
        assert model.cursor == (0, 9)

    def test_empty_input_is_ignored(self) -> None:
        model, _ = _model()
        model.handle_input("")
        assert model.lines == [""]


class TestPromptRender:
    """render() draws output, prompts, cursor and popup as plain lines."""

    def test_render_empty_prompt(self) -> None:
        model, _ = _model()
        assert model.render(40) == ["sql>  "]

    def test_render_continuation_prompt(self) -> None:
        model, _ = _model()
        _type(model, "SELECT 1")
        model.handle_input(KEY_ENTER)
        assert model.render(40) == ["sql> SELECT 1", "...>  "]

    def test_cursor_highlights_character_under_it(self) -> None:
        model, _ = _model(theme=PromptTheme(cursor=lambda s: f"[{s}]"))
        _type(model, "abc")
        model.move_cursor("left")
        assert model.render(40) == ["sql> ab[c]"]

    def test_render_output_banner(self) -> None:
        model, _ = _model()
        _type(model, "SELECT 1;")
        model.submit()
        assert model.render(40) == ["--- Executing ---", "ok", "-----------------", "sql>  "]

    def test_render_placeholder_without_banner(self) -> None:
        model, _ = _model(execute_fn=None)
        _type(model, "SELECT 1;")
        model.submit()
        assert model.render(40)[0] == NO_EXECUTE_FN_OUTPUT

    def test_render_includes_popup(self) -> None:
        model, _ = _model()
        _type(model, "S")
        lines = model.render(40)
        assert lines[0] == "sql> S "
        assert lines[1:] == [" SELECT ", " SET    "]

    def test_empty_execute_result_still_draws_banner(self) -> None:
        model, _ = _model(execute_fn=_Executor(output=""))
        _type(model, "SELECT 1;")
        assert model.submit()
        assert model.render(40) == ["--- Executing ---", "", "-----------------", "sql>  "]

    def test_empty_result_banner_cleared_by_next_edit(self) -> None:
        model, _ = _model(execute_fn=_Executor(output=""))
        _type(model, "SELECT 1;")
        model.submit()
        _type(model, "x")
        assert model.render(40) == ["sql> x "]

    def test_result_matching_placeholder_text_is_bannered(self) -> None:
        model, _ = _model(execute_fn=_Executor(output=NO_EXECUTE_FN_OUTPUT))
        _type(model, "SELECT 1;")
        model.submit()
        assert model.render(40)[:3] == ["--- Executing ---", NO_EXECUTE_FN_OUTPUT, "-----------------"]


class TestPromptConfigChanges:
    """Changes to model.config take effect on the next operation."""

    def test_provider_set_after_construction(self) -> None:
        model, _ = _model(autocomplete_fn=None)
        model.config.autocomplete_fn = lambda before, fragment: [("FROM", "")]
        model.insert_text("FR")
        assert model.show_popup
        assert model.suggestions == [Suggestion("FROM", "")]

    def test_popup_height_set_after_construction(self) -> None:
        model, _ = _model()
        model.config.popup_max_height = 1
        _type(model, "S")
        assert model.popup_max_height == 1
        assert model.render(40)[1:] == [" SELECT "]

    def test_show_description_set_after_construction(self) -> None:
        model, _ = _model()
        model.config.show_description = True
        _type(model, "W")
        assert model.render(40)[1:] == [" WHERE  keyword WHERE "]

    def test_execute_fn_set_after_construction(self) -> None:
        model, _ = _model(execute_fn=None)
        executor = _Executor(output="ran")
        model.config.execute_fn = executor
        _type(model, "SELECT 1;")
        model.submit()
        assert executor.calls == ["SELECT 1;"]
        assert model.last_output == "ran"
