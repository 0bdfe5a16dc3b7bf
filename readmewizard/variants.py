"""
Built-in field layouts.

Two layouts ship with the wizard:

    minimal   - the five classic README sections
    extended  - thirteen sections including technologies, features,
                test steps, roadmap and author/contact details

A layout is a blueprint; ``create_fields`` and ``create_licenses`` build
fresh, empty instances for each session so no state leaks between runs.
"""

from dataclasses import dataclass

from readmewizard.schema import Field, FieldKind, FieldRegistry, LicenseCatalog


@dataclass(frozen=True)
class FieldSpec:
    """Static definition of a field; instantiated into a Field per session."""
    name: str
    description: str
    kind: FieldKind = FieldKind.TEXT
    placeholder: str = ""

    def build(self) -> Field:
        return Field(
            name=self.name,
            description=self.description,
            kind=self.kind,
            placeholder=self.placeholder or None,
        )


@dataclass(frozen=True)
class Variant:
    """A named field layout together with its license catalog."""
    name: str
    title: str
    fields: tuple[FieldSpec, ...]
    licenses: tuple[str, ...]

    def create_fields(self) -> FieldRegistry:
        return FieldRegistry([spec.build() for spec in self.fields])

    def create_licenses(self) -> LicenseCatalog:
        return LicenseCatalog(self.licenses)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)


# Field names shared by both layouts
REPOSITORY_NAME = "Repository Name"
PROJECT_DESCRIPTION = "Project Description"
INSTALLATION = "Installation"
USAGE = "Usage"
CONTRIBUTORS = "Contributors"

# Extended-only field names
TECHNOLOGIES = "Technologies"
FEATURES = "Features"
PREREQUISITES = "Prerequisites"
TESTS = "Running Tests"
ROADMAP = "Roadmap"
CONTRIBUTING = "Contributing"
ACKNOWLEDGMENTS = "Acknowledgments"
AUTHOR = "Author"

BASE_LICENSES = (
    "MIT License",
    "Apache License 2.0",
    "GNU General Public License v3.0",
)

MINIMAL = Variant(
    name="minimal",
    title="Classic README",
    fields=(
        FieldSpec(REPOSITORY_NAME, "The name of your project/repository"),
        FieldSpec(PROJECT_DESCRIPTION, "A brief description of what your project does"),
        FieldSpec(
            INSTALLATION,
            "Steps required to install your project",
            FieldKind.CODE,
            "<Installation Instructions>",
        ),
        FieldSpec(
            USAGE,
            "How to use your project, with examples",
            FieldKind.CODE,
            "<Usage Instructions>",
        ),
        FieldSpec(CONTRIBUTORS, "List of contributors and how to contribute"),
    ),
    licenses=BASE_LICENSES,
)

EXTENDED = Variant(
    name="extended",
    title="Extended README",
    fields=(
        FieldSpec(
            REPOSITORY_NAME,
            "The GitHub path of your repository, e.g. owner/project. "
            "Used for the title, badges and repository links.",
        ),
        FieldSpec(PROJECT_DESCRIPTION, "A brief description of what your project does"),
        FieldSpec(
            TECHNOLOGIES,
            "Languages, frameworks and tools, separated by ';' (e.g. Python; Flask; Docker)",
            FieldKind.TECHNOLOGIES,
        ),
        FieldSpec(
            FEATURES,
            "Key features, separated by ';'",
            FieldKind.LIST,
        ),
        FieldSpec(
            PREREQUISITES,
            "What must be installed first, separated by ';'",
            FieldKind.LIST,
        ),
        FieldSpec(
            INSTALLATION,
            "Installation steps in order, separated by ';'",
            FieldKind.STEPS,
            "<Installation Steps>",
        ),
        FieldSpec(
            USAGE,
            "How to use your project, with examples",
            FieldKind.CODE,
            "<Usage Instructions>",
        ),
        FieldSpec(
            TESTS,
            "Steps to run the test suite, separated by ';'",
            FieldKind.STEPS,
            "<Test Steps>",
        ),
        FieldSpec(
            ROADMAP,
            "Planned work, separated by ';'",
            FieldKind.LIST,
        ),
        FieldSpec(
            CONTRIBUTING,
            "How others can contribute (issues, pull requests, code style)",
        ),
        FieldSpec(
            CONTRIBUTORS,
            "People who worked on the project, separated by ';'",
            FieldKind.LIST,
        ),
        FieldSpec(
            ACKNOWLEDGMENTS,
            "Credits, inspirations and resources, separated by ';'",
            FieldKind.LIST,
        ),
        FieldSpec(
            AUTHOR,
            "Your name and how to reach you (e.g. Alice - alice@example.com)",
        ),
    ),
    licenses=BASE_LICENSES + (
        "BSD 3-Clause License",
        "Mozilla Public License 2.0",
        "The Unlicense",
    ),
)

VARIANTS: dict[str, Variant] = {v.name: v for v in (MINIMAL, EXTENDED)}
DEFAULT_VARIANT = EXTENDED.name


def get_variant(name: str) -> Variant:
    """
    Look up a built-in layout by name.

    Raises:
        ValueError: If no layout has that name
    """
    try:
        return VARIANTS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown variant: {name!r} (choose from: {', '.join(VARIANTS)})"
        ) from None


def is_minimal_layout(fields: FieldRegistry) -> bool:
    """Returns True if the registry has exactly the minimal layout's fields."""
    return tuple(fields.names) == MINIMAL.field_names
