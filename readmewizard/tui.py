"""
curses front end for the README wizard.

The screen is redrawn from FormState after every key press:

    +- Help -------------------------------------------------+
    | Press ↑↓ to move, Enter to edit, ...                   |
    +- Progress ---------------------------------------------+
    |                 ● ● ● ○ ○ ○   3/13                     |
    +- README Sections ----------+- Description -------------+
    | Repository Name: me/proj   | Key features, separated   |
    | Features: <empty>          | by ';'                    |
    +----------------------------+---------------------------+
      License: MIT License  (←/→ to change)
    +- Editing: Features ------------------------------------+
    | fast; small_                                           |
    +--------------------------------------------------------+

The view owns no state of its own. The functions that decide *what* to show
(help_text, progress_marks, field_rows, right_panel, wrap_text) are pure so
they can be tested without a terminal; the draw_* functions only place their
output on screen.
"""

import curses
import textwrap
import unicodedata
from typing import Callable, Optional, Union

from readmewizard.renderer import RenderOptions, render_readme
from readmewizard.state import FormState, InputMode, Key, KeyEvent, Outcome

# Segment = (text, style tag); tags are mapped to curses attributes when drawn
Segment = tuple[str, str]

MARGIN = 1
BOX_HEIGHT = 3
MIN_HEIGHT = 16
MIN_WIDTH = 40
ESCAPE_DELAY_MS = 25

FILLED_MARK = "●"
EMPTY_MARK = "○"
EMPTY_VALUE = "<empty>"

_KEY_CODES = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.ENTER,
    curses.KEY_BACKSPACE: Key.BACKSPACE,
}

_CONTROL_CHARS = {
    "\n": Key.ENTER,
    "\r": Key.ENTER,
    "\t": Key.TAB,
    "\x1b": Key.ESCAPE,
    "\x7f": Key.BACKSPACE,
    "\x08": Key.BACKSPACE,
}


def translate_key(raw: Union[int, str]) -> Optional[KeyEvent]:
    """
    Map a value from ``window.get_wch()`` to a KeyEvent.

    Returns None for keys the wizard ignores (function keys, resize, ...).
    """
    if isinstance(raw, str):
        if raw in _CONTROL_CHARS:
            return KeyEvent(_CONTROL_CHARS[raw])
        if raw.isprintable():
            return KeyEvent.of(raw)
        return None

    key = _KEY_CODES.get(raw)
    if key is None:
        return None
    return KeyEvent(key)


# -- View composition -------------------------------------------------------

def help_text(mode: InputMode) -> list[Segment]:
    """Key hints for the current mode; key names are tagged 'bold'."""
    if mode is InputMode.EDITING:
        return [
            ("Press ", "normal"),
            ("Enter", "bold"),
            (" to save and continue, ", "normal"),
            ("Esc", "bold"),
            (" to cancel", "normal"),
        ]
    return [
        ("Press ", "normal"),
        ("↑↓", "bold"),
        (" to move, ", "normal"),
        ("Enter", "bold"),
        (" to edit, ", "normal"),
        ("←→", "bold"),
        (" for license, ", "normal"),
        ("p", "bold"),
        (" to preview, ", "normal"),
        ("Tab", "bold"),
        (" to finish, ", "normal"),
        ("q", "bold"),
        (" to quit", "normal"),
    ]


def progress_marks(state: FormState) -> list[Segment]:
    """One mark per field: the active one, filled ones and empty ones."""
    marks: list[Segment] = []
    for i, field in enumerate(state.fields):
        if i == state.current_field_index:
            marks.append((FILLED_MARK, "current"))
        elif field.is_filled():
            marks.append((FILLED_MARK, "filled"))
        else:
            marks.append((EMPTY_MARK, "empty"))
    return marks


def field_rows(state: FormState) -> list[list[Segment]]:
    """One row per field: 'Name: value', or a dim '<empty>' marker."""
    rows = []
    for i, field in enumerate(state.fields):
        name_tag = "current" if i == state.current_field_index else "normal"
        if field.is_filled():
            value: Segment = (field.value, "normal")
        else:
            value = (EMPTY_VALUE, "empty")
        rows.append([(field.name, name_tag), (": ", "normal"), value])
    return rows


def right_panel(
    state: FormState,
    render: Callable[[FormState], str],
) -> tuple[str, str]:
    """
    Title and text for the right-hand panel.

    Shows the live preview once every field is filled (or the user pinned
    it with 'p'), otherwise the active field's description.
    """
    if state.shows_preview():
        return "README Preview", render(state)
    return "Description", state.current_field.description


def license_line(state: FormState) -> str:
    line = f"License: {state.licenses.selected}"
    if state.input_mode is InputMode.NAVIGATION and len(state.licenses) > 1:
        line += "  (←/→ to change)"
    return line


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text to width, keeping explicit line breaks and blank lines."""
    if width <= 0:
        return []
    lines: list[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(textwrap.wrap(paragraph, width, replace_whitespace=False) or [""])
    return lines


def char_width(ch: str) -> int:
    """Terminal columns taken by one character."""
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    return 1


def display_width(text: str) -> int:
    return sum(char_width(ch) for ch in text)


def clip_to_width(text: str, width: int) -> str:
    """The longest prefix of text that fits in ``width`` columns."""
    used = 0
    for i, ch in enumerate(text):
        used += char_width(ch)
        if used > width:
            return text[:i]
    return text


def visible_tail(text: str, width: int) -> str:
    """The longest suffix fitting in ``width`` columns, so the end of a long buffer stays visible."""
    used = 0
    for i in range(len(text) - 1, -1, -1):
        used += char_width(text[i])
        if used > width:
            return text[i + 1:]
    return text


def preview_renderer(options: Optional[RenderOptions] = None) -> Callable[[FormState], str]:
    """Render callback used for the live preview panel."""
    def render(state: FormState) -> str:
        return render_readme(state.fields, state.licenses.selected, final=False, options=options)
    return render


# -- Drawing ----------------------------------------------------------------

def init_palette() -> dict[str, int]:
    """Map style tags to curses attributes, falling back to plain bold/dim."""
    palette = {
        "normal": curses.A_NORMAL,
        "bold": curses.A_BOLD,
        "filled": curses.A_NORMAL,
        "empty": curses.A_DIM,
        "current": curses.A_BOLD | curses.A_REVERSE,
        "progress": curses.A_BOLD | curses.A_REVERSE,
        "editing": curses.A_BOLD,
    }
    if not curses.has_colors():
        return palette

    curses.start_color()
    try:
        curses.use_default_colors()
        background = -1
    except curses.error:
        background = curses.COLOR_BLACK
    curses.init_pair(1, curses.COLOR_GREEN, background)
    curses.init_pair(2, curses.COLOR_YELLOW, background)
    palette["current"] = curses.color_pair(2) | curses.A_BOLD
    palette["progress"] = curses.color_pair(1) | curses.A_BOLD
    palette["editing"] = curses.color_pair(2)
    return palette


def safe_addstr(
    win: "curses._CursesWindow", y: int, x: int, text: str, attr: int = curses.A_NORMAL
) -> int:
    """Write text clipped to the window; returns the column after the text."""
    height, width = win.getmaxyx()
    if not (0 <= y < height and 0 <= x < width):
        return x
    clipped = clip_to_width(text, width - x)
    try:
        win.addstr(y, x, clipped, attr)
    except curses.error:
        # Writing the bottom-right cell raises even though the text is drawn
        pass
    return x + display_width(clipped)


def draw_segments(
    win: "curses._CursesWindow",
    y: int,
    x: int,
    segments: list[Segment],
    palette: dict[str, int],
    max_x: int,
) -> None:
    for text, tag in segments:
        if x >= max_x:
            break
        text = clip_to_width(text.replace("\n", " "), max_x - x)
        x = safe_addstr(win, y, x, text, palette.get(tag, curses.A_NORMAL))


def draw_box(
    stdscr: "curses._CursesWindow", y: int, x: int, height: int, width: int, title: str
) -> "curses._CursesWindow":
    """Draw a bordered, titled box and return it as a sub-window."""
    win = stdscr.derwin(height, width, y, x)
    win.box()
    safe_addstr(win, 0, 2, clip_to_width(f" {title} ", max(0, width - 4)), curses.A_BOLD)
    return win


def draw_frame(
    stdscr: "curses._CursesWindow",
    state: FormState,
    palette: dict[str, int],
    render: Callable[[FormState], str],
) -> None:
    """Redraw the whole screen from the current state."""
    stdscr.erase()
    height, width = stdscr.getmaxyx()

    if height < MIN_HEIGHT or width < MIN_WIDTH:
        safe_addstr(stdscr, 0, 0, f"Terminal too small ({width}x{height}), need {MIN_WIDTH}x{MIN_HEIGHT}")
        safe_addstr(stdscr, 1, 0, "Resize the window, or press q to quit.")
        stdscr.refresh()
        return

    inner_width = width - 2 * MARGIN
    y = MARGIN

    help_box = draw_box(stdscr, y, MARGIN, BOX_HEIGHT, inner_width, "Help")
    draw_segments(help_box, 1, 2, help_text(state.input_mode), palette, inner_width - 2)
    y += BOX_HEIGHT

    progress_box = draw_box(stdscr, y, MARGIN, BOX_HEIGHT, inner_width, "Progress")
    marks = progress_marks(state)
    segments: list[Segment] = []
    for text, tag in marks:
        segments.append((text, "progress" if tag == "current" else tag))
        segments.append((" ", "normal"))
    segments.append((f"  {state.fields.filled_count()}/{len(state.fields)}", "normal"))
    line_width = sum(display_width(text) for text, _ in segments)
    start_x = max(2, (inner_width - line_width) // 2)
    draw_segments(progress_box, 1, start_x, segments, palette, inner_width - 2)
    y += BOX_HEIGHT

    input_y = height - MARGIN - BOX_HEIGHT
    license_y = input_y - 1
    main_height = license_y - y
    left_width = inner_width // 2
    right_width = inner_width - left_width

    fields_box = draw_box(stdscr, y, MARGIN, main_height, left_width, "README Sections")
    for row_index, row in enumerate(field_rows(state)[: main_height - 2]):
        draw_segments(fields_box, 1 + row_index, 2, row, palette, left_width - 2)

    title, text = right_panel(state, render)
    panel = draw_box(stdscr, y, MARGIN + left_width, main_height, right_width, title)
    for row_index, line in enumerate(wrap_text(text, right_width - 4)[: main_height - 2]):
        safe_addstr(panel, 1 + row_index, 2, clip_to_width(line, right_width - 4))

    safe_addstr(stdscr, license_y, MARGIN + 2, license_line(state), palette["bold"])

    editing = state.input_mode is InputMode.EDITING
    input_box = draw_box(
        stdscr, input_y, MARGIN, BOX_HEIGHT, inner_width, f"Editing: {state.current_field.name}"
    )
    shown = visible_tail(state.edit_buffer, inner_width - 4)
    safe_addstr(input_box, 1, 2, shown, palette["editing"] if editing else curses.A_NORMAL)

    set_cursor_visible(editing)
    if editing:
        stdscr.move(input_y + 1, MARGIN + 2 + display_width(shown))
    stdscr.refresh()


def set_cursor_visible(visible: bool) -> None:
    try:
        curses.curs_set(1 if visible else 0)
    except curses.error:
        # Some terminals cannot change cursor visibility
        pass


def run_wizard(state: FormState, options: Optional[RenderOptions] = None) -> Outcome:
    """
    Run the interactive session until the user quits or completes.

    curses.wrapper puts the terminal in raw mode on the alternate screen and
    restores it on the way out, including when an exception propagates.
    Ctrl-C is treated as quitting.

    Returns:
        Outcome.COMPLETE if the final document should be written,
        Outcome.ABORT otherwise
    """
    render = preview_renderer(options)

    def curses_main(stdscr: "curses._CursesWindow") -> Outcome:
        curses.set_escdelay(ESCAPE_DELAY_MS)
        stdscr.keypad(True)
        stdscr.nodelay(False)
        palette = init_palette()

        while True:
            draw_frame(stdscr, state, palette, render)
            event = translate_key(stdscr.get_wch())
            if event is None:
                continue
            outcome = state.handle(event)
            if outcome is not None:
                return outcome

    try:
        return curses.wrapper(curses_main)
    except KeyboardInterrupt:
        return Outcome.ABORT
