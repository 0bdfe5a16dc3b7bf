"""
README Wizard - Build a README.md interactively in the terminal.

A guided, visual alternative to hand-writing a project README: fill in
labeled sections, watch the live preview, and write the finished document.
"""

__version__ = "0.1.0"
