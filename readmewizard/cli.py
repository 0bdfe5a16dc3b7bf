"""
README Wizard Command-Line Interface

This module provides the CLI entry point. It orchestrates the session:
configuration -> interactive wizard -> final render -> output.

Usage:
    readme-wizard
    readme-wizard --variant minimal
    readme-wizard --license "Apache License 2.0" --output docs/README.md
    readme-wizard --dry-run

Design Principles:
    1. Sensible defaults: writes README.md in the current directory
    2. Transparency: progress on stderr, details with --verbose
    3. Safety: --dry-run prints the document instead of writing it
"""

import argparse
import curses
import sys
from pathlib import Path
from typing import Callable, Optional

from readmewizard import __version__
from readmewizard.renderer import RenderOptions, render_readme
from readmewizard.state import FormState, Outcome
from readmewizard.tui import run_wizard
from readmewizard.variants import DEFAULT_VARIANT, VARIANTS, Variant, get_variant

DEFAULT_OUTPUT = "README.md"

# The interactive session; replaced in tests
SessionRunner = Callable[[FormState, Optional[RenderOptions]], Outcome]


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="readme-wizard",
        description=(
            "README Wizard: build a README.md step by step in your terminal.\n\n"
            "Fill in each section, watch the live preview, and press Tab once "
            "every section is filled to write the document."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Keys:\n"
            "  Up/Down     move between sections\n"
            "  Enter       edit the section (Enter again saves and moves on)\n"
            "  Esc         cancel the current edit\n"
            "  Left/Right  choose a license\n"
            "  p           toggle the live preview\n"
            "  Tab         finish and write the README (all sections filled)\n"
            "  q           quit without writing\n"
            "\n"
            "Multi-valued sections (features, steps, technologies, ...) take\n"
            "items separated by ';'.\n"
        ),
    )

    parser.add_argument(
        "--variant",
        choices=sorted(VARIANTS),
        default=DEFAULT_VARIANT,
        help=f"Which set of sections to fill in (default: {DEFAULT_VARIANT})",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=DEFAULT_OUTPUT,
        help=f"Output file path, overwritten if it exists (default: {DEFAULT_OUTPUT})",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated README to stdout instead of writing a file",
    )

    parser.add_argument(
        "--license",
        type=str,
        default=None,
        help="Preselect a license by name (e.g. \"Apache License 2.0\")",
    )

    # Content options
    parser.add_argument(
        "--no-badges",
        action="store_true",
        help="Exclude the shields.io repository badges",
    )

    parser.add_argument(
        "--no-toc",
        action="store_true",
        help="Exclude the table of contents",
    )

    # Verbosity
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed progress information",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def log(message: str, quiet: bool = False) -> None:
    """
    Print a status message to stderr.

    Args:
        message: The message to print
        quiet: If True, suppress the message
    """
    if quiet:
        return
    print(f"[readme-wizard] {message}", file=sys.stderr)


def log_verbose(message: str, verbose: bool, quiet: bool) -> None:
    """Print a message only in verbose mode."""
    if verbose and not quiet:
        print(f"  {message}", file=sys.stderr)


def error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def create_state(variant: Variant, license_choice: Optional[str] = None) -> FormState:
    """
    Build a fresh session state for a layout.

    Raises:
        ValueError: If license_choice does not name a license of the layout
    """
    licenses = variant.create_licenses()
    if license_choice:
        licenses.select(license_choice)
    return FormState(variant.create_fields(), licenses)


def write_readme(content: str, output_path: Path) -> None:
    """
    Write the final document, replacing any existing file.

    Raises:
        OSError: If the file cannot be written
    """
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(content)


def run_session(
    state: FormState,
    output_path: Path,
    options: RenderOptions,
    dry_run: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    runner: SessionRunner = run_wizard,
) -> int:
    """
    Run the interactive session and emit the final document.

    Args:
        state: Fresh session state
        output_path: Where to write the README
        options: Rendering options
        dry_run: If True, print to stdout instead of writing
        verbose: If True, show detailed progress
        quiet: If True, suppress non-error output
        runner: The interactive session (the curses wizard by default)

    Returns:
        Exit code (0 = completed or quit, non-zero = error)
    """
    log_verbose(f"Sections: {len(state.fields)}", verbose, quiet)
    log_verbose(f"License: {state.licenses.selected}", verbose, quiet)

    # Step 1: Interactive session
    try:
        outcome = runner(state, options)
    except curses.error as e:
        error(f"terminal failure: {e}")
        return 1

    if outcome is Outcome.ABORT:
        log("Quit without writing a README.", quiet=quiet)
        return 0

    # Step 2: Final render
    readme_content = render_readme(
        state.fields, state.licenses.selected, final=True, options=options
    )
    log_verbose(f"Rendered {len(readme_content.splitlines())} lines", verbose, quiet)

    # Step 3: Output
    if dry_run:
        print(readme_content)
        log("(Dry run - no file written)", quiet=quiet)
        return 0

    try:
        write_readme(readme_content, output_path)
    except OSError as e:
        error(f"could not write {output_path}: {e}")
        return 1

    log(f"{output_path.name} generated successfully! ({output_path})", quiet=quiet)
    return 0


def main(argv: Optional[list[str]] = None, runner: SessionRunner = run_wizard) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        runner: The interactive session (the curses wizard by default)

    Returns:
        Exit code (0 = success, non-zero = error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    output_path = Path(args.output)
    if not output_path.is_absolute():
        output_path = Path.cwd() / output_path

    try:
        variant = get_variant(args.variant)
        state = create_state(variant, args.license)
    except ValueError as e:
        error(str(e))
        return 1

    log_verbose(f"Variant: {variant.name} ({variant.title})", args.verbose, args.quiet)
    log_verbose(f"Output: {output_path}", args.verbose, args.quiet)

    render_options = RenderOptions(
        include_badges=not args.no_badges,
        include_toc=not args.no_toc,
    )

    return run_session(
        state=state,
        output_path=output_path,
        options=render_options,
        dry_run=args.dry_run,
        verbose=args.verbose,
        quiet=args.quiet,
        runner=runner,
    )


if __name__ == "__main__":
    sys.exit(main())
