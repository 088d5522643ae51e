"""Interactive prompts used by the update flow.

Provides dependency-free helpers:
- ``prompt_yes_no`` for confirmations with a default answer
- ``prompt_choice`` for a numbered menu
- ``select_package`` to pick an installable package by name

All of them read through ``_safe_input`` so Ctrl-C propagates as
``KeyboardInterrupt`` and callers decide what an interruption means.
"""

from __future__ import annotations

import os
from typing import List, Sequence

from .ui import err, c, BOLD, CYAN, supports_color


def _safe_input(prompt: str) -> str:
    """input() that propagates Ctrl-C so callers can decide behavior."""
    try:
        return input(prompt)
    except KeyboardInterrupt:
        print()
        raise


def prompt_choice(prompt: str, options: List[str]) -> int:
    """Print a numbered list of ``options`` and return the selected index."""
    print(c(prompt, BOLD))
    use_color = supports_color() and not os.environ.get("NO_COLOR")
    for i, opt in enumerate(options, 1):
        line = f"  {i}. {opt}"
        print(c(line, CYAN) if use_color else line)
    while True:
        s = _safe_input(f"{prompt} [1-{len(options)}]: ").strip()
        if s.isdigit() and 1 <= int(s) <= len(options):
            return int(s) - 1
        # exact names are accepted too
        if s in options:
            return options.index(s)
        err("Invalid choice.")


def prompt_yes_no(question: str, default: bool = True) -> bool:
    """Prompt a yes/no question with a default, normalizing answers."""
    suffix = "[Y/n]" if default else "[y/N]"
    while True:
        s = _safe_input(f"{question} {suffix} ").strip().lower()
        if not s:
            return default
        if s in ("y", "yes", "s", "si", "sí"):
            return True
        if s in ("n", "no"):
            return False
        err("Please answer y or n.")


def select_package(packages: Sequence[str], prompt: str) -> str:
    """Ask the user to pick one of ``packages`` and return its name."""
    options = list(packages)
    return options[prompt_choice(prompt, options)]


__all__ = ["prompt_choice", "prompt_yes_no", "select_package"]
