#!/usr/bin/env python3
"""Launcher and compatibility shim for the project updater.

Keeps a single-file UX (``python project-updater.py <package> <version>``)
working from a source checkout as well as from an installed package.

 - Prefer a static import of ``project_updater`` so packagers can see it.
 - Fall back to adding ``./src`` to ``sys.path`` when running the repository
   directly.
 - Re-export the public surface from :mod:`project_updater.impl` so tests
   and scripts can patch collaborators (``http_get_json``, ``git_clone``,
   ``find_git_cmd``) on this module.
"""

import importlib
import os as _os
import sys
from pathlib import Path


def _load_impl():
    """Import and return :mod:`project_updater.impl`.

    Tries the installed package first, then the ``./src`` tree next to this
    file (also exported through ``PYTHONPATH`` for child processes).
    """
    try:
        from project_updater import impl as _impl  # type: ignore

        return _impl
    except ImportError:
        pass

    _src = Path(__file__).resolve().parent / "src"
    if _src.exists():
        src_str = str(_src)
        if src_str not in sys.path:
            sys.path.insert(0, src_str)
        env_path = _os.environ.get("PYTHONPATH")
        if env_path:
            paths = env_path.split(_os.pathsep)
            if src_str not in paths:
                _os.environ["PYTHONPATH"] = _os.pathsep.join([src_str, env_path])
        else:
            _os.environ["PYTHONPATH"] = src_str

    return importlib.import_module("project_updater.impl")


_impl = _load_impl()

parse_args = _impl.parse_args
configure_logging = _impl.configure_logging
log_event = _impl.log_event
ChangeKind = _impl.ChangeKind
ChangeRecord = _impl.ChangeRecord
parse_changelog = _impl.parse_changelog
split_segments = _impl.split_segments
render_changelog = _impl.render_changelog
Outcome = _impl.Outcome
UpdateContext = _impl.UpdateContext
UpdateController = _impl.UpdateController
build_context = _impl.build_context
resolve_package = _impl.resolve_package
Downloader = _impl.Downloader
UpdaterError = _impl.UpdaterError
ResolutionError = _impl.ResolutionError
UnrecognizedPackage = _impl.UnrecognizedPackage
BackupError = _impl.BackupError
DownloadError = _impl.DownloadError
UserCancelled = _impl.UserCancelled
ConfigReadError = _impl.ConfigReadError
UpdaterState = _impl.UpdaterState
save_state = _impl.save_state
mark_interrupted = _impl.mark_interrupted
ReleaseInfo = _impl.ReleaseInfo
VersionResolver = _impl.VersionResolver
Messages = _impl.Messages
fill_placeholders = _impl.fill_placeholders
load_messages = _impl.load_messages
prompt_choice = _impl.prompt_choice
prompt_yes_no = _impl.prompt_yes_no
select_package = _impl.select_package
atomic_write = _impl.atomic_write
default_state_path = _impl.default_state_path
overlay_copy = _impl.overlay_copy
empty_dir = _impl.empty_dir
remove_tree = _impl.remove_tree
c = _impl.c
info = _impl.info
ok = _impl.ok
warn = _impl.warn
err = _impl.err
title = _impl.title
supports_color = _impl.supports_color
get_version = _impl.get_version
pkg_version = _impl.pkg_version
http_get_json = _impl.http_get_json
find_git_cmd = _impl.find_git_cmd
git_clone = _impl.git_clone
subprocess = _impl.subprocess
urllib = _impl.urllib
main = _impl.main

__all__ = [name for name in dir() if not name.startswith("_") and name not in ("importlib", "sys", "Path")]


if __name__ == "__main__":  # pragma: no cover
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        try:
            warn("Aborted by user.")
        except Exception:
            pass
        sys.exit(1)
