"""Argument parsing.

Flags override environment variables, which override the built-in defaults
in :mod:`project_updater.defaults`. Option groups mirror the concerns of the
tool: what to update, where, and how to log.
"""

from __future__ import annotations
import argparse
import sys
from typing import List, Optional

from .defaults import (
    DEFAULT_API_URL,
    DEFAULT_LANGUAGE,
    DEFAULT_TIMEOUT,
    ENV_API_URL,
    ENV_LANGUAGE,
    env_default,
)


def _add_target_args(p: argparse.ArgumentParser) -> None:
    target = p.add_argument_group("Target")
    target.add_argument(
        "package",
        nargs="?",
        default="",
        help="Package to install or update (asked for when not installable)",
    )
    target.add_argument(
        "current_version",
        nargs="?",
        default="",
        help="Currently installed version (defaults to the one in the state file)",
    )
    target.add_argument(
        "-u",
        "--api-url",
        default=env_default(ENV_API_URL, DEFAULT_API_URL),
        help=f"Version service endpoint (env {ENV_API_URL})",
    )
    target.add_argument(
        "-t",
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT,
        help="Network timeout in seconds",
    )


def _add_location_args(p: argparse.ArgumentParser) -> None:
    location = p.add_argument_group("Location")
    location.add_argument(
        "-C",
        "--project-root",
        help="Directory the release is installed into (default: current directory)",
    )
    location.add_argument(
        "-s",
        "--state-file",
        help="Path of the state file (default: <project root>/updater_config.json)",
    )
    location.add_argument(
        "--strict-state",
        action="store_true",
        help="Fail instead of starting fresh when the state file is unreadable",
    )


def _add_general_args(p: argparse.ArgumentParser) -> None:
    general = p.add_argument_group("General")
    general.add_argument(
        "-l",
        "--lang",
        default=env_default(ENV_LANGUAGE, DEFAULT_LANGUAGE),
        help=f"Message language, e.g. en or es (env {ENV_LANGUAGE})",
    )
    general.add_argument(
        "-Q",
        "--yes",
        action="store_true",
        help="Answer yes to every confirmation",
    )
    general.add_argument(
        "-V", "--version", action="store_true", help="Print the tool version and exit"
    )
    general.add_argument(
        "-v", "--verbose", action="store_true", help="Enable INFO/DEBUG logging"
    )
    general.add_argument(
        "-ll",
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        help="Explicit log level (overrides --verbose)",
    )
    general.add_argument("-f", "--log-file", help="Write logs to a file")
    general.add_argument(
        "-J", "--log-json", action="store_true", help="Also log JSON to stdout"
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments (defaults to ``sys.argv[1:]``)."""
    p = argparse.ArgumentParser(
        prog="project-updater",
        description="Install or update a project release in the current directory",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    _add_target_args(p)
    _add_location_args(p)
    _add_general_args(p)
    if argv is None:
        argv = sys.argv[1:]
    ns = p.parse_args(argv)
    ns.package = (ns.package or "").strip()
    ns.current_version = (ns.current_version or "").strip()
    return ns


__all__ = ["parse_args"]
