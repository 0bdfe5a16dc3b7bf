"""
Entry point for running README Wizard as a module.

Usage:
    python -m readmewizard [options]
"""

import sys

from readmewizard.cli import main

if __name__ == "__main__":
    sys.exit(main())
