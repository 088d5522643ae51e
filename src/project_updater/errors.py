"""Error taxonomy for the updater.

Every failure the updater can report is a subclass of :class:`UpdaterError`.
Each carries a message-catalog key (resolved against the active language by
``main_flow``) and the process exit code to use when it reaches the top level.
The underlying cause, when there is one, is kept in ``detail`` for logs.
"""

from __future__ import annotations

from typing import Optional


class UpdaterError(Exception):
    """Base class for updater failures that terminate the run."""

    message_key = "unexpectedError"
    exit_code = 1

    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(detail or self.message_key)
        self.detail = detail or ""


class ResolutionError(UpdaterError):
    """Listing packages or resolving the latest release failed."""

    message_key = "apiError"


class UnrecognizedPackage(UpdaterError):
    """The startup package name is not installable; recovered by re-selection."""

    message_key = "unknownPackage"


class BackupError(UpdaterError):
    """Creating or populating the backup directory failed."""

    message_key = "backupError"


class DownloadError(UpdaterError):
    """Cloning the release or copying it over the project root failed."""

    message_key = "downloadError"


class UserCancelled(UpdaterError):
    """The run was interrupted by the user (Ctrl-C or SIGTERM)."""

    message_key = "userCancelled"


class ConfigReadError(UpdaterError):
    """The state file exists but cannot be read or decoded."""

    message_key = "configReadError"


__all__ = [
    "UpdaterError",
    "ResolutionError",
    "UnrecognizedPackage",
    "BackupError",
    "DownloadError",
    "UserCancelled",
    "ConfigReadError",
]
