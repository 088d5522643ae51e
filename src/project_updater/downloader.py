"""Release download protocol: backup, clone, overlay, cleanup.

:meth:`Downloader.install` performs the side effects of an install or
update inside the project root:

1. optionally mirror the current tree into ``backup/`` (emptied first)
2. clone the release into ``temp-download/``
3. copy the clone over the project root (additive overlay, nothing deleted)
4. remove ``temp-download/``

A failed backup raises :class:`BackupError` before anything is touched. A
failure in steps 2-4 raises :class:`DownloadError`; the caller records the
interruption so the next run re-offers the whole operation. The overlay copy
is not transactional, so an interruption mid-copy can leave a mix of old and
new files.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Optional

from .defaults import BACKUP_DIRNAME, TEMP_DIRNAME
from .errors import BackupError, DownloadError
from .io_safe import empty_dir, overlay_copy, remove_tree
from .logging_utils import log_event
from .utils import git_clone

Clone = Callable[[str, Path], None]
Announce = Callable[[str, str], None]


class Downloader:
    """Installs releases into ``project_root``.

    ``clone`` fetches a source URL into a destination directory; it defaults
    to ``git clone``. ``announce`` receives ``(message_key, url)`` for
    progress lines and is a no-op unless the caller wires it to the UI.
    """

    def __init__(
        self,
        project_root: Path,
        clone: Optional[Clone] = None,
        announce: Optional[Announce] = None,
        backup_dirname: str = BACKUP_DIRNAME,
        temp_dirname: str = TEMP_DIRNAME,
    ) -> None:
        self.project_root = Path(project_root).resolve()
        self.clone = clone or git_clone
        self.announce = announce or (lambda key, url: None)
        self.backup_dir = self.project_root / backup_dirname
        self.temp_dir = self.project_root / temp_dirname

    def install(self, source_url: str, has_existing_install: bool) -> None:
        if has_existing_install:
            self.announce("creatingBackup", source_url)
            self.create_backup()
            self.announce("backupSuccess", source_url)
        self.announce("downloading", source_url)
        try:
            remove_tree(self.temp_dir)
            log_event("clone_started", url=source_url, path=str(self.temp_dir))
            self.clone(source_url, self.temp_dir)
            # the clone's history must not replace the project's own .git
            overlay_copy(self.temp_dir, self.project_root, exclude=(".git",))
            remove_tree(self.temp_dir)
        except subprocess.CalledProcessError as e:
            stderr = e.stderr or b""
            if isinstance(stderr, bytes):
                stderr = stderr.decode("utf-8", "replace")
            stderr = stderr.strip()
            raise DownloadError(f"git clone exited with {e.returncode}: {stderr}") from e
        except OSError as e:
            raise DownloadError(str(e)) from e
        log_event("release_installed", url=source_url, path=str(self.project_root))

    def has_backup(self) -> bool:
        """True when the backup directory exists and holds at least one entry."""
        return self.backup_dir.is_dir() and any(self.backup_dir.iterdir())

    def create_backup(self) -> None:
        """Replace the contents of the backup directory with the current tree."""
        try:
            empty_dir(self.backup_dir)
            overlay_copy(
                self.project_root,
                self.backup_dir,
                exclude=(self.backup_dir.name, self.temp_dir.name),
            )
        except OSError as e:
            raise BackupError(str(e)) from e
        log_event("backup_created", path=str(self.backup_dir))


__all__ = ["Downloader"]
