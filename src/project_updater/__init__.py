"""Local project updater.

Checks a version service for the latest release of a package, installs it
into the current directory with ``git clone`` plus an overlay copy, and keeps
a small state file so interrupted downloads can be resumed.
"""

__all__ = ["main"]


def main() -> int:
    """Run the updater and return its exit code."""
    from .main_flow import main as _main

    return _main()
