"""CLI facade for project-updater.

Keeps the console-script target small: argument parsing and the run loop
live in :mod:`project_updater.main_flow`.
"""

import sys

from .impl import parse_args, main, info, ok, warn, err


def run() -> None:
    """Console-script entry point; exits with the code returned by ``main``."""
    try:
        code = main()
    except KeyboardInterrupt:
        # interrupted outside the update flow (e.g. while parsing arguments)
        print()
        code = 1
    sys.exit(code)


__all__ = ["parse_args", "main", "run", "info", "ok", "warn", "err"]
