"""
README Wizard Form State Machine

This module owns everything the wizard knows while it runs: the fields, the
license selection, which field is active and whether the user is navigating
between fields or typing into one.

Modes:
    Navigating  - arrow keys move between fields, Enter starts editing,
                  Tab completes once every field is filled, q quits
    Editing     - printable keys go to an edit buffer; Enter commits and
                  moves on to the next field, Esc throws the buffer away

The mode is a tagged variant: ``Navigating`` carries nothing and
``Editing`` carries the in-progress text. Committed field values only change
when an edit is committed with Enter.

Every transition is total. Indices are kept in range by guarded
increments, so no input sequence can raise.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Union

from readmewizard.schema import Field, FieldRegistry, LicenseCatalog


QUIT_CHAR = "q"
PREVIEW_CHAR = "p"


class Key(Enum):
    """Input vocabulary understood by the state machine."""
    CHAR = auto()
    UP = auto()
    DOWN = auto()
    LEFT = auto()
    RIGHT = auto()
    ENTER = auto()
    TAB = auto()
    BACKSPACE = auto()
    ESCAPE = auto()


@dataclass(frozen=True)
class KeyEvent:
    """
    A single input event.

    Attributes:
        key: What kind of key was pressed
        char: The typed character, for Key.CHAR events only
    """
    key: Key
    char: Optional[str] = None

    @classmethod
    def of(cls, char: str) -> "KeyEvent":
        """Shorthand for a printable character event."""
        return cls(Key.CHAR, char)


class InputMode(Enum):
    NAVIGATION = "navigation"
    EDITING = "editing"


class Outcome(Enum):
    """Signals that end the interactive session."""
    ABORT = "abort"          # User quit; no document is written
    COMPLETE = "complete"    # All fields filled; write the final document


@dataclass(frozen=True)
class Navigating:
    """Moving between fields."""


@dataclass(frozen=True)
class Editing:
    """Typing into the active field; ``buffer`` is not yet committed."""
    buffer: str = ""


Mode = Union[Navigating, Editing]


class FormState:
    """
    The wizard's mutable state and its transition function.

    Usage:
        state = FormState(EXTENDED.create_fields(), EXTENDED.create_licenses())
        outcome = state.handle(KeyEvent(Key.ENTER))
        for ch in "me/proj":
            state.handle(KeyEvent.of(ch))
        state.handle(KeyEvent(Key.ENTER))  # commits and moves to field 1

    ``handle`` returns None while the session continues, or an Outcome
    once the user quits or completes.
    """

    def __init__(self, fields: FieldRegistry, licenses: LicenseCatalog):
        self.fields = fields
        self.licenses = licenses
        self.mode: Mode = Navigating()
        self.current_field_index = 0
        self.preview_pinned = False

    # -- Derived state ------------------------------------------------------

    @property
    def input_mode(self) -> InputMode:
        if isinstance(self.mode, Editing):
            return InputMode.EDITING
        return InputMode.NAVIGATION

    @property
    def edit_buffer(self) -> str:
        if isinstance(self.mode, Editing):
            return self.mode.buffer
        return ""

    @property
    def current_field(self) -> Field:
        return self.fields[self.current_field_index]

    @property
    def is_last_field(self) -> bool:
        return self.current_field_index == len(self.fields) - 1

    def all_fields_filled(self) -> bool:
        return self.fields.all_fields_filled()

    def shows_preview(self) -> bool:
        """Whether the side panel shows the live preview instead of help."""
        return self.preview_pinned or self.all_fields_filled()

    # -- Transitions --------------------------------------------------------

    def handle(self, event: KeyEvent) -> Optional[Outcome]:
        """Apply one input event and return an Outcome if the session ends."""
        if isinstance(self.mode, Editing):
            self.mode = self._handle_editing(self.mode, event)
            return None
        return self._handle_navigation(event)

    def _handle_navigation(self, event: KeyEvent) -> Optional[Outcome]:
        key = event.key

        if key is Key.CHAR:
            if event.char == QUIT_CHAR:
                return Outcome.ABORT
            if event.char == PREVIEW_CHAR:
                self.preview_pinned = not self.preview_pinned
        elif key is Key.DOWN:
            if self.current_field_index < len(self.fields) - 1:
                self.current_field_index += 1
        elif key is Key.UP:
            if self.current_field_index > 0:
                self.current_field_index -= 1
        elif key is Key.RIGHT:
            self.licenses.select_next()
        elif key is Key.LEFT:
            self.licenses.select_previous()
        elif key is Key.ENTER:
            self.mode = Editing(self.current_field.value)
        elif key is Key.TAB:
            # The license is never required to move off its default
            if self.all_fields_filled():
                return Outcome.COMPLETE

        return None

    def _handle_editing(self, mode: Editing, event: KeyEvent) -> Mode:
        key = event.key

        if key is Key.ENTER:
            self.current_field.value = mode.buffer
            if self.is_last_field:
                return Navigating()
            self.current_field_index += 1
            return Editing(self.current_field.value)

        if key is Key.CHAR and event.char:
            return Editing(mode.buffer + event.char)

        if key is Key.BACKSPACE:
            return Editing(mode.buffer[:-1])

        if key is Key.ESCAPE:
            return Navigating()

        return mode
