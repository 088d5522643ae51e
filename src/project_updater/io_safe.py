"""Safe I/O helpers (atomic writes, tree copies, and well-known paths).

Small, dependency-free filesystem utilities used by the state store and the
downloader:
 - The default state file location (project root or ``PROJECT_UPDATER_STATE``)
 - Atomic text writes with fsync so an interrupted save never leaves a
   half-written record
 - Overlay tree copies that replace matching files but never delete extras
 - Emptying and removing directories

Errors propagate to callers; the downloader maps them to its own error types.
"""

from __future__ import annotations
import os
import shutil
import stat
import sys
import tempfile
from pathlib import Path
from typing import Iterable, Optional

from .defaults import ENV_STATE_FILE, STATE_FILENAME


def default_state_path(project_root: Path) -> Path:
    """Return the state file path, honoring ``PROJECT_UPDATER_STATE``."""
    override = os.environ.get(ENV_STATE_FILE, "").strip()
    if override:
        return Path(override)
    return project_root / STATE_FILENAME


def atomic_write(path: Path, text: str) -> None:
    """Atomically write UTF-8 text to ``path`` with fsync.

    Writes to a temporary file in the same directory, then renames into place.
    The temporary file is removed if anything fails and the error propagates.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmppath = tempfile.mkstemp(
        prefix=path.name + ".", suffix=".tmp", dir=str(path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
            f.flush()
            try:
                os.fsync(f.fileno())
            except OSError:  # pragma: no cover
                pass
        os.replace(tmppath, path)
    except Exception:
        try:
            os.remove(tmppath)
        except OSError:  # pragma: no cover
            pass
        raise


def overlay_copy(src: Path, dest: Path, exclude: Optional[Iterable[str]] = None) -> None:
    """Copy the contents of ``src`` on top of ``dest``.

    Files present in both are replaced, files only in ``dest`` are kept.
    Top-level entries of ``src`` named in ``exclude`` are skipped.
    """
    skip = set(exclude or ())
    dest.mkdir(parents=True, exist_ok=True)
    for entry in src.iterdir():
        if entry.name in skip:
            continue
        target = dest / entry.name
        if entry.is_dir() and not entry.is_symlink():
            if target.exists() and not target.is_dir():
                target.unlink()
            shutil.copytree(entry, target, symlinks=True, dirs_exist_ok=True)
        else:
            if target.is_dir() and not target.is_symlink():
                remove_tree(target)
            shutil.copy2(entry, target, follow_symlinks=False)


def empty_dir(path: Path) -> None:
    """Ensure ``path`` exists and contains nothing."""
    if not path.exists():
        path.mkdir(parents=True)
        return
    for entry in path.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            remove_tree(entry)
        else:
            entry.unlink()


def _make_writable_and_retry(func, path, _exc):
    # git marks pack files read-only, which blocks deletion on Windows
    os.chmod(path, stat.S_IWRITE)
    func(path)


def remove_tree(path: Path) -> None:
    """Delete a directory tree, clearing read-only bits where needed."""
    if path.exists():
        if sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=_make_writable_and_retry)
        else:  # pragma: no cover
            shutil.rmtree(path, onerror=_make_writable_and_retry)


__all__ = [
    "default_state_path",
    "atomic_write",
    "overlay_copy",
    "empty_dir",
    "remove_tree",
]
