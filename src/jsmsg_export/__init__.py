"""
jsmsg-export - Extract goog.getMsg() messages from JavaScript and export
them as a PHP translations array.
"""

import sys

from .main import main as run_main


def main() -> None:
    """Console script entry point."""
    sys.exit(run_main())


__all__ = ["main"]
