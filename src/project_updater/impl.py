"""Public facade that re-exports the updater building blocks.

Collects the commonly used symbols from the submodules in one flat namespace
so the root launcher script and tests can import everything from a single
place while the package stays modular internally.
"""

from __future__ import annotations

import subprocess
import urllib.request

from .args import parse_args
from .changelog import ChangeKind, ChangeRecord, parse as parse_changelog, split_segments
from .controller import (
    Outcome,
    UpdateContext,
    UpdateController,
    build_context,
    resolve_package,
)
from .downloader import Downloader
from .errors import (
    BackupError,
    ConfigReadError,
    DownloadError,
    ResolutionError,
    UnrecognizedPackage,
    UpdaterError,
    UserCancelled,
)
from .io_safe import atomic_write, default_state_path, empty_dir, overlay_copy, remove_tree
from .logging_utils import configure_logging, log_event
from .main_flow import main
from .messages import Messages, fill_placeholders, load_messages
from .prompts import prompt_choice, prompt_yes_no, select_package
from .render import render_changelog
from .resolver import ReleaseInfo, VersionResolver
from .state import UpdaterState, mark_interrupted, save_state
from .ui import c, err, info, ok, supports_color, title, warn
from .utils import find_git_cmd, get_version, git_clone, http_get_json, pkg_version

__all__ = [
    "parse_args",
    "ChangeKind",
    "ChangeRecord",
    "parse_changelog",
    "split_segments",
    "Outcome",
    "UpdateContext",
    "UpdateController",
    "build_context",
    "resolve_package",
    "Downloader",
    "BackupError",
    "ConfigReadError",
    "DownloadError",
    "ResolutionError",
    "UnrecognizedPackage",
    "UpdaterError",
    "UserCancelled",
    "atomic_write",
    "default_state_path",
    "empty_dir",
    "overlay_copy",
    "remove_tree",
    "configure_logging",
    "log_event",
    "main",
    "Messages",
    "fill_placeholders",
    "load_messages",
    "prompt_choice",
    "prompt_yes_no",
    "select_package",
    "render_changelog",
    "ReleaseInfo",
    "VersionResolver",
    "UpdaterState",
    "mark_interrupted",
    "save_state",
    "c",
    "err",
    "info",
    "ok",
    "supports_color",
    "title",
    "warn",
    "find_git_cmd",
    "get_version",
    "git_clone",
    "http_get_json",
    "pkg_version",
    "subprocess",
    "urllib",
]
