"""
README Wizard Data Model

This module defines the data structures the wizard collects and the renderer
consumes: labeled fields, the fixed-shape registry that holds them, and the
catalog of selectable licenses.

Design Principles:
    1. Fixed shape: the number, order and names of fields never change
       after startup, so a field's index is its identity
    2. Free-form values: any string is accepted, including the empty string
    3. Explicit kinds: each field declares how the renderer should format it
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Sequence, Union


class FieldKind(Enum):
    """
    How a field's raw value is turned into Markdown.

    Multi-valued kinds (LIST, STEPS, TECHNOLOGIES) split their raw value on
    the list delimiter; scalar kinds are inserted verbatim.
    """
    TEXT = "text"                   # Inserted verbatim
    CODE = "code"                   # Inserted verbatim inside a fenced block
    LIST = "list"                   # Bulleted list
    STEPS = "steps"                 # Numbered list
    TECHNOLOGIES = "technologies"   # One badge per token

    @property
    def is_multi_valued(self) -> bool:
        return self in (FieldKind.LIST, FieldKind.STEPS, FieldKind.TECHNOLOGIES)

    def __str__(self) -> str:
        return self.value


@dataclass
class Field:
    """
    One labeled piece of project metadata.

    Attributes:
        name: Display name, also used as the lookup key
        description: Help text shown while the field is active
        kind: How the renderer formats the value
        placeholder: Token shown in previews while the value is empty
        value: The committed value (empty until the user commits an edit)

    Example:
        >>> usage = Field(
        ...     name="Usage",
        ...     description="How to use your project, with examples",
        ...     kind=FieldKind.CODE,
        ...     placeholder="<Usage Instructions>",
        ... )
    """
    name: str
    description: str
    kind: FieldKind = FieldKind.TEXT
    placeholder: Optional[str] = None
    value: str = ""

    def __post_init__(self) -> None:
        if self.placeholder is None:
            self.placeholder = f"<{self.name}>"

    def is_filled(self) -> bool:
        """Returns True if the field holds a non-empty value."""
        return self.value != ""


class FieldRegistry:
    """
    Ordered, fixed-length collection of fields.

    Fields can be read and their values changed, but none can be added or
    removed once the registry exists.

    Usage:
        registry = FieldRegistry([Field("Repository Name", "owner/repo")])
        registry[0].value = "me/proj"
        registry.value_of("Repository Name")  # "me/proj"
    """

    def __init__(self, fields: Sequence[Field]):
        if not fields:
            raise ValueError("A field registry needs at least one field")
        names = [f.name for f in fields]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate field names: {names}")
        self._fields: tuple[Field, ...] = tuple(fields)
        self._index = {f.name: i for i, f in enumerate(self._fields)}

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __getitem__(self, index: int) -> Field:
        return self._fields[index]

    @property
    def names(self) -> list[str]:
        return [f.name for f in self._fields]

    def index_of(self, name: str) -> int:
        """Return the position of the named field (KeyError if unknown)."""
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"Unknown field: {name}") from None

    def get(self, name: str) -> Field:
        return self._fields[self.index_of(name)]

    def value_of(self, name: str) -> str:
        return self.get(name).value

    def set_value(self, name: str, value: str) -> None:
        """Set a field's value by name. Used to seed values outside the wizard."""
        self.get(name).value = value

    def all_fields_filled(self) -> bool:
        """Returns True if every field holds a non-empty value."""
        return all(f.is_filled() for f in self._fields)

    def missing_fields(self) -> list[str]:
        """Returns the names of fields that are still empty."""
        return [f.name for f in self._fields if not f.is_filled()]

    def filled_count(self) -> int:
        return sum(1 for f in self._fields if f.is_filled())


class LicenseCatalog:
    """
    Fixed, ordered set of license names with exactly one selected entry.

    The selection defaults to the first entry, so a license is always
    available to the renderer.
    """

    def __init__(self, options: Sequence[str], selected_index: int = 0):
        if not options:
            raise ValueError("A license catalog needs at least one license")
        self._options: tuple[str, ...] = tuple(options)
        self._selected = 0
        self.select(selected_index)

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[str]:
        return iter(self._options)

    @property
    def options(self) -> tuple[str, ...]:
        return self._options

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def selected(self) -> str:
        """Display name of the selected license."""
        return self._options[self._selected]

    def select_next(self) -> None:
        if self._selected < len(self._options) - 1:
            self._selected += 1

    def select_previous(self) -> None:
        if self._selected > 0:
            self._selected -= 1

    def select(self, choice: Union[int, str]) -> None:
        """
        Select a license by index or by name.

        Names match case-insensitively.

        Raises:
            ValueError: If the index is out of range or the name is unknown
        """
        if isinstance(choice, int):
            if not 0 <= choice < len(self._options):
                raise ValueError(
                    f"License index {choice} out of range (0-{len(self._options) - 1})"
                )
            self._selected = choice
            return

        wanted = choice.strip().lower()
        for i, option in enumerate(self._options):
            if option.lower() == wanted:
                self._selected = i
                return
        raise ValueError(
            f"Unknown license: {choice!r} (choose from: {', '.join(self._options)})"
        )
