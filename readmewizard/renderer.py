"""
README Wizard Markdown Renderer

This module turns the wizard's fields and the selected license into README
content. The same code produces the live preview shown while the user is
still typing and the final document written at the end of the session.

Design Principles:
    1. Pure: output depends only on the field values, the license and the
       options, so rendering twice gives byte-identical text
    2. Visible gaps: empty fields render as bracketed placeholders such as
       ``<Repository Name>`` instead of empty headings
    3. Static service data: badge URLs are format strings, not logic

Formatting by field kind:
    TEXT          inserted verbatim
    CODE          inserted verbatim inside a fenced code block
    LIST          "a; b ;c"  ->  "- a\\n- b\\n- c"
    STEPS         "a; b ;c"  ->  "1. a\\n2. b\\n3. c"
    TECHNOLOGIES  "Python; Flask"  ->  one shields.io badge per token

Layouts:
    The five-field minimal registry renders the classic layout; any other
    registry renders the extended layout, where each field becomes its own
    section in registry order.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

from readmewizard import variants
from readmewizard.schema import Field, FieldKind, FieldRegistry


# shields.io badge templates keyed by badge kind; {repo} is "owner/name"
BADGE_TEMPLATES: dict[str, str] = {
    "stars": (
        "[![GitHub stars](https://img.shields.io/github/stars/{repo})]"
        "(https://github.com/{repo}/stargazers)"
    ),
    "forks": (
        "[![GitHub forks](https://img.shields.io/github/forks/{repo})]"
        "(https://github.com/{repo}/network/members)"
    ),
    "issues": (
        "[![GitHub issues](https://img.shields.io/github/issues/{repo})]"
        "(https://github.com/{repo}/issues)"
    ),
    "license": (
        "[![GitHub license](https://img.shields.io/github/license/{repo})]"
        "(https://github.com/{repo}/blob/master/LICENSE)"
    ),
}

REPOSITORY_BADGES = ("stars", "forks", "issues", "license")

TECHNOLOGY_BADGE_TEMPLATE = (
    "![{name}](https://img.shields.io/badge/-{label}-informational"
    "?style=flat&logo={logo}&logoColor=white)"
)

REPOSITORY_URL_TEMPLATE = "https://github.com/{repo}"

# Extended-layout fields that are placed by the layout itself rather than
# rendered as ordinary sections
_LAYOUT_FIELDS = (
    variants.REPOSITORY_NAME,
    variants.PROJECT_DESCRIPTION,
    variants.TECHNOLOGIES,
    variants.AUTHOR,
)


@dataclass
class RenderOptions:
    """
    Configuration options for README rendering.

    Attributes:
        include_badges: Add repository badges (stars, forks, issues, license)
        include_toc: Add a table of contents to the final document
        include_generation_notice: Add a short "generated with" footer
        list_delimiter: Separator between items of multi-valued fields
        bullet: Marker for unordered list items
    """
    include_badges: bool = True
    include_toc: bool = True
    include_generation_notice: bool = False
    list_delimiter: str = ";"
    bullet: str = "-"


def split_items(raw: str, delimiter: str = ";") -> list[str]:
    """
    Split a multi-valued field into trimmed items.

    An empty raw value has no items. Items that are blank after trimming
    are dropped.

    Example:
        >>> split_items("a; b ;c")
        ['a', 'b', 'c']
    """
    if raw == "":
        return []
    items = [item.strip() for item in raw.split(delimiter)]
    return [item for item in items if item]


def format_bullets(items: list[str], bullet: str = "-") -> str:
    return "\n".join(f"{bullet} {item}" for item in items)


def format_steps(items: list[str]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def repository_badges(repo: str, kinds: tuple[str, ...] = REPOSITORY_BADGES) -> list[str]:
    """Build the shields.io badges for a repository; none for an empty name."""
    if not repo:
        return []
    return [BADGE_TEMPLATES[kind].format(repo=repo) for kind in kinds]


def technology_badge(token: str) -> str:
    """
    Build a badge image for one technology.

    The token is lower-cased; dashes are doubled and other characters
    URL-encoded as shields.io expects in badge labels.
    """
    name = token.lower()
    label = quote(name.replace("-", "--"), safe="")
    logo = quote(name.replace(" ", ""), safe="")
    return TECHNOLOGY_BADGE_TEMPLATE.format(name=name, label=label, logo=logo)


def _with_article(license_name: str) -> str:
    """Prefix 'the' unless the name already starts with it."""
    if license_name.lower().startswith("the "):
        return license_name
    return f"the {license_name}"


def _anchor(heading: str) -> str:
    """GitHub-style anchor for a heading."""
    slug = "".join(ch for ch in heading.lower() if ch.isalnum() or ch in " -")
    return "#" + slug.replace(" ", "-")


class ReadmeRenderer:
    """
    Renders wizard fields into Markdown README content.

    Usage:
        renderer = ReadmeRenderer(fields, "MIT License")
        preview = renderer.render()

        # Final document, once every field is filled
        renderer = ReadmeRenderer(fields, "MIT License", final=True)
        readme_content = renderer.render()

    The preview omits the table of contents and the link sections of the
    final document; both use placeholders for empty fields.
    """

    def __init__(
        self,
        fields: FieldRegistry,
        license_name: str,
        final: bool = False,
        options: Optional[RenderOptions] = None,
    ):
        self.fields = fields
        self.license_name = license_name
        self.final = final
        self.options = options or RenderOptions()
        self._sections: list[str] = []

    def render(self) -> str:
        """
        Generate the complete README content.

        Returns:
            The rendered README as a Markdown string
        """
        self._sections = []

        if variants.is_minimal_layout(self.fields):
            self._render_minimal()
        else:
            self._render_extended()

        return "\n".join(self._sections)

    # -- Helpers ------------------------------------------------------------

    def _add_section(self, content: str) -> None:
        """Add a section to the output."""
        if content.strip():
            self._sections.append(content)

    def _has(self, name: str) -> bool:
        return name in self.fields.names

    def _value(self, name: str) -> str:
        if not self._has(name):
            return ""
        return self.fields.value_of(name)

    def _scalar(self, field: Field) -> str:
        """Field value, or its placeholder when empty."""
        return field.value if field.value else field.placeholder

    def _format_body(self, field: Field) -> str:
        """Format a field's value according to its kind."""
        if field.kind is FieldKind.CODE:
            return f"```\n{self._scalar(field)}\n```"

        if not field.kind.is_multi_valued:
            return self._scalar(field)

        items = split_items(field.value, self.options.list_delimiter)
        if not items:
            return field.placeholder
        if field.kind is FieldKind.STEPS:
            return format_steps(items)
        if field.kind is FieldKind.TECHNOLOGIES:
            return " ".join(technology_badge(item) for item in items)
        return format_bullets(items, self.options.bullet)

    def _repo_badges(self, kinds: tuple[str, ...] = REPOSITORY_BADGES) -> str:
        if not self.options.include_badges:
            return ""
        return " ".join(repository_badges(self._value(variants.REPOSITORY_NAME), kinds))

    # -- Minimal layout -----------------------------------------------------

    def _render_minimal(self) -> None:
        repo_field = self.fields.get(variants.REPOSITORY_NAME)
        desc_field = self.fields.get(variants.PROJECT_DESCRIPTION)

        self._add_section(f"# {self._scalar(repo_field)}\n{self._scalar(desc_field)}\n")

        if self.final:
            self._add_minimal_toc()
        else:
            # Preview shows only the stars badge, and only for a named repository
            badge = self._repo_badges(("stars",))
            if badge:
                self._add_section(badge + "\n")

        for name in (variants.INSTALLATION, variants.USAGE, variants.CONTRIBUTORS):
            field = self.fields.get(name)
            self._add_section(f"## {field.name}\n{self._format_body(field)}\n")

        self._add_minimal_license()

        if self.final:
            badges = self._repo_badges()
            if badges:
                self._add_section(f"## Badges\n{badges}\n")
            self._add_repository_link("## GitHub Repository\n[Link to GitHub repository]({url})\n")

    def _add_minimal_toc(self) -> None:
        if not self.options.include_toc:
            return
        headings = ["Installation", "Usage", "Contributors", "License"]
        if self.options.include_badges:
            headings.append("Badges")
        headings.append("GitHub Repository")
        items = [f"- [{h}]({_anchor(h)})" for h in headings]
        self._add_section("## Table of Contents\n" + "\n".join(items) + "\n")

    def _add_minimal_license(self) -> None:
        if self.final:
            line = (
                f"This project is licensed under the {self.license_name} - "
                "see the [LICENSE](LICENSE) file for details."
            )
        else:
            line = (
                f"This project is licensed under the {self.license_name} - "
                "see the LICENSE file for details."
            )
        self._add_section(f"## License\n{line}\n")

    def _add_repository_link(self, template: str) -> None:
        repo = self._value(variants.REPOSITORY_NAME)
        if repo:
            self._add_section(template.format(url=REPOSITORY_URL_TEMPLATE.format(repo=repo)))

    # -- Extended layout ----------------------------------------------------

    def _section_fields(self) -> list[Field]:
        """Fields rendered as ordinary '## Name' sections, in registry order."""
        return [f for f in self.fields if f.name not in _LAYOUT_FIELDS]

    def _render_extended(self) -> None:
        self._add_title_section()
        self._add_badges_section()
        self._add_description_section()
        self._add_technologies_section()
        self._add_toc_section()

        for field in self._section_fields():
            self._add_section(f"## {field.name}\n\n{self._format_body(field)}\n")

        self._add_license_section()
        self._add_author_section()
        self._add_generation_notice()

    def _add_title_section(self) -> None:
        if self._has(variants.REPOSITORY_NAME):
            title = self._scalar(self.fields.get(variants.REPOSITORY_NAME))
        else:
            title = "<Project Title>"
        self._add_section(f"# {title}\n")

    def _add_badges_section(self) -> None:
        # Unnamed repositories render an empty string, which adds nothing
        badges = self._repo_badges()
        self._add_section(f"{badges}\n" if badges else "")

    def _add_description_section(self) -> None:
        if self._has(variants.PROJECT_DESCRIPTION):
            self._add_section(f"{self._scalar(self.fields.get(variants.PROJECT_DESCRIPTION))}\n")

    def _add_technologies_section(self) -> None:
        if self._has(variants.TECHNOLOGIES):
            body = self._format_body(self.fields.get(variants.TECHNOLOGIES))
            self._add_section(f"## Built With\n\n{body}\n")

    def _add_toc_section(self) -> None:
        """Add table of contents to the final document if enabled."""
        if not (self.final and self.options.include_toc):
            return

        headings = [f.name for f in self._section_fields()]
        headings.append("License")
        if self._has(variants.AUTHOR):
            headings.append("Author")

        toc_items = [f"- [{h}]({_anchor(h)})" for h in headings]
        self._add_section("## Table of Contents\n\n" + "\n".join(toc_items) + "\n")

    def _add_license_section(self) -> None:
        section = "## License\n\n"
        section += f"Distributed under {_with_article(self.license_name)}. "
        section += "See [LICENSE](LICENSE) for more information.\n"
        self._add_section(section)

    def _add_author_section(self) -> None:
        if not self._has(variants.AUTHOR):
            return

        section = "## Author\n\n"
        section += f"{self._scalar(self.fields.get(variants.AUTHOR))}\n"

        repo = self._value(variants.REPOSITORY_NAME)
        if self.final and repo:
            url = REPOSITORY_URL_TEMPLATE.format(repo=repo)
            section += f"\nProject Link: [{url}]({url})\n"

        self._add_section(section)

    def _add_generation_notice(self) -> None:
        if not self.options.include_generation_notice:
            return
        self._add_section("---\n\n*This README was generated with readme-wizard.*\n")


def render_readme(
    fields: FieldRegistry,
    license_name: str,
    final: bool = False,
    options: Optional[RenderOptions] = None,
) -> str:
    """
    Convenience function to render a README from wizard fields.

    Args:
        fields: The field registry holding the user's values
        license_name: Display name of the selected license
        final: Render the final document rather than the preview
        options: Optional rendering options

    Returns:
        Rendered README as a Markdown string

    Example:
        fields = MINIMAL.create_fields()
        fields.set_value("Repository Name", "me/proj")
        print(render_readme(fields, "MIT License"))
    """
    renderer = ReadmeRenderer(fields, license_name, final, options)
    return renderer.render()
