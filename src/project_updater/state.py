"""Persisted updater state (one record, one JSON file).

:class:`UpdaterState` describes the local install status that drives the
update state machine: which package is tracked, the version recorded at the
last operation, whether any install has completed, and whether the last
download was interrupted.

Design notes:
 - The record is overwritten wholesale on every save; nothing already in the
   file is merged back in. Callers pass every field they intend to persist.
 - Saves go through :func:`io_safe.atomic_write` so an interruption mid-save
   cannot leave a half-written file.
 - A missing file yields the default record. A present but unreadable file
   is reported and reset to defaults, or raises :class:`ConfigReadError` when
   ``strict`` is requested.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigReadError
from .io_safe import atomic_write
from .ui import warn

# On-disk key for each dataclass field.
_JSON_KEYS = {
    "package_name": "packageName",
    "version": "version",
    "initialized": "initialized",
    "interrupted": "interrupted",
}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpdaterState:
    """Install status loaded from or written to the state file."""

    package_name: str = ""
    version: str = ""
    initialized: bool = False
    interrupted: bool = False

    def to_json(self) -> dict:
        return {key: getattr(self, attr) for attr, key in _JSON_KEYS.items()}

    def save(self, path: Path) -> None:
        """Overwrite ``path`` with this record as indented JSON."""
        atomic_write(path, json.dumps(self.to_json(), indent=2) + "\n")
        logger.debug("Saved state to %s: %s", path, self.to_json())

    @classmethod
    def load(cls, path: Path, strict: bool = False) -> "UpdaterState":
        """Load state from ``path``; defaults when the file does not exist."""
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            return cls._unreadable(path, str(e), strict)
        if not isinstance(data, dict):
            return cls._unreadable(path, "invalid format", strict)
        return cls(
            package_name=str(data.get("packageName") or ""),
            version=str(data.get("version") or ""),
            initialized=bool(data.get("initialized", False)),
            interrupted=bool(data.get("interrupted", False)),
        )

    @classmethod
    def _unreadable(cls, path: Path, reason: str, strict: bool) -> "UpdaterState":
        if strict:
            raise ConfigReadError(f"{path}: {reason}")
        warn(f"Could not load state from {path} ({reason}); starting fresh.")
        logger.warning("Ignoring unreadable state file %s: %s", path, reason)
        return cls()


def save_state(
    path: Path,
    package_name: str,
    version: str,
    initialized: bool,
    interrupted: bool,
) -> UpdaterState:
    """Persist a complete record and return it."""
    state = UpdaterState(
        package_name=package_name,
        version=version,
        initialized=initialized,
        interrupted=interrupted,
    )
    state.save(path)
    return state


def mark_interrupted(path: Path, package_name: str = "", version: str = "") -> UpdaterState:
    """Flag the record at ``path`` as interrupted, keeping everything else.

    Used when the run is cancelled before a full context exists. Saved fields
    win over ``package_name``/``version``, which only fill blanks.
    """
    current = UpdaterState.load(path)
    return save_state(
        path,
        current.package_name or package_name,
        current.version or version,
        current.initialized,
        True,
    )


__all__ = ["UpdaterState", "save_state", "mark_interrupted"]
