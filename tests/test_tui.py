"""
Tests for readmewizard.tui module.

Tests key translation and the pure view-composition helpers; nothing here
needs a real terminal.
"""

import curses

import pytest

from readmewizard.state import FormState, InputMode, Key, KeyEvent
from readmewizard.tui import (
    EMPTY_MARK,
    EMPTY_VALUE,
    FILLED_MARK,
    field_rows,
    help_text,
    license_line,
    preview_renderer,
    progress_marks,
    clip_to_width,
    display_width,
    init_palette,
    right_panel,
    translate_key,
    visible_tail,
    wrap_text,
)
from readmewizard.variants import MINIMAL


@pytest.fixture
def state():
    return FormState(MINIMAL.create_fields(), MINIMAL.create_licenses())


class TestTranslateKey:
    """Tests for mapping curses input to key events."""

    @pytest.mark.parametrize(
        "raw, key",
        [
            (curses.KEY_UP, Key.UP),
            (curses.KEY_DOWN, Key.DOWN),
            (curses.KEY_LEFT, Key.LEFT),
            (curses.KEY_RIGHT, Key.RIGHT),
            (curses.KEY_ENTER, Key.ENTER),
            (curses.KEY_BACKSPACE, Key.BACKSPACE),
            ("\n", Key.ENTER),
            ("\r", Key.ENTER),
            ("\t", Key.TAB),
            ("\x1b", Key.ESCAPE),
            ("\x7f", Key.BACKSPACE),
            ("\x08", Key.BACKSPACE),
        ],
    )
    def test_special_keys(self, raw, key):
        assert translate_key(raw) == KeyEvent(key)

    @pytest.mark.parametrize("char", ["a", "q", " ", ";", "é", "/"])
    def test_printable_characters(self, char):
        assert translate_key(char) == KeyEvent(Key.CHAR, char)

    def test_ignored_keys(self):
        assert translate_key(curses.KEY_RESIZE) is None
        assert translate_key(curses.KEY_F1) is None
        assert translate_key("\x01") is None


class TestViewComposition:
    """Tests for what each part of the screen shows."""

    def test_help_text_per_mode(self):
        navigation = "".join(text for text, _ in help_text(InputMode.NAVIGATION))
        editing = "".join(text for text, _ in help_text(InputMode.EDITING))

        assert "Enter to edit" in navigation
        assert "q to quit" in navigation
        assert "Tab to finish" in navigation
        assert editing == "Press Enter to save and continue, Esc to cancel"

    def test_progress_marks(self, state):
        state.fields[1].value = "desc"
        state.current_field_index = 2

        assert progress_marks(state) == [
            (EMPTY_MARK, "empty"),
            (FILLED_MARK, "filled"),
            (FILLED_MARK, "current"),
            (EMPTY_MARK, "empty"),
            (EMPTY_MARK, "empty"),
        ]

    def test_field_rows(self, state):
        state.fields[0].value = "me/proj"
        rows = field_rows(state)

        assert len(rows) == 5
        assert rows[0] == [("Repository Name", "current"), (": ", "normal"), ("me/proj", "normal")]
        assert rows[1] == [("Project Description", "normal"), (": ", "normal"), (EMPTY_VALUE, "empty")]

    def test_right_panel_shows_description_until_filled(self, state):
        render = preview_renderer()
        state.current_field_index = 3

        title, text = right_panel(state, render)
        assert title == "Description"
        assert text == "How to use your project, with examples"

        for field in state.fields:
            field.value = "x"
        title, text = right_panel(state, render)
        assert title == "README Preview"
        assert text.startswith("# x\n")

    def test_pinned_preview_uses_placeholders(self, state):
        for field in state.fields:
            field.value = "x"
        state.fields[0].value = ""
        state.preview_pinned = True

        title, text = right_panel(state, preview_renderer())
        assert title == "README Preview"
        assert text.startswith("# <Repository Name>")
        assert "github/stars" not in text

    def test_license_line(self, state):
        assert license_line(state) == "License: MIT License  (←/→ to change)"
        state.handle(KeyEvent(Key.ENTER))
        assert license_line(state) == "License: MIT License"


class TestTextHelpers:
    """Tests for wrapping and clipping helpers."""

    def test_wrap_keeps_line_breaks(self):
        assert wrap_text("# title\n\nsome words here", 8) == ["# title", "", "some", "words", "here"]

    def test_wrap_zero_width(self):
        assert wrap_text("anything", 0) == []

    def test_visible_tail(self):
        assert visible_tail("abcdef", 3) == "def"
        assert visible_tail("ab", 5) == "ab"
        assert visible_tail("ab", 0) == ""

    def test_display_width_counts_wide_characters(self):
        assert display_width("abc") == 3
        assert display_width("日本語") == 6
        assert display_width("é") == 1

    def test_clip_to_width_by_columns(self):
        assert clip_to_width("日本語", 4) == "日本"
        assert clip_to_width("日本語", 5) == "日本"
        assert clip_to_width("a日本", 2) == "a"
        assert clip_to_width("abc", 10) == "abc"
        assert clip_to_width("abc", 0) == ""

    def test_visible_tail_by_columns(self):
        assert visible_tail("ab日本", 4) == "日本"
        assert visible_tail("ab日本", 5) == "b日本"
        assert visible_tail("日本", 3) == "本"
        assert display_width(visible_tail("x日本語", 5)) <= 5


class TestPalette:
    """Tests for style tag to attribute mapping."""

    def test_monochrome_palette_covers_every_tag(self, state, monkeypatch):
        monkeypatch.setattr(curses, "has_colors", lambda: False)
        palette = init_palette()

        assert palette["progress"] == curses.A_BOLD | curses.A_REVERSE
        tags = {tag for _, tag in help_text(InputMode.NAVIGATION)}
        tags |= {tag for _, tag in progress_marks(state)}
        tags |= {tag for row in field_rows(state) for _, tag in row}
        tags |= {"progress", "editing"}
        assert tags <= set(palette)
