"""Built-in defaults and environment overrides.

Values here are the lowest configuration layer; environment variables override
them and command-line flags override both.
"""

from __future__ import annotations

import os

DEFAULT_API_URL = "https://api.omenlist.xyz/version/check"
DEFAULT_LANGUAGE = "en"
DEFAULT_TIMEOUT = 10.0
STATE_FILENAME = "updater_config.json"
BACKUP_DIRNAME = "backup"
TEMP_DIRNAME = "temp-download"

ENV_API_URL = "PROJECT_UPDATER_API"
ENV_STATE_FILE = "PROJECT_UPDATER_STATE"
ENV_LANGUAGE = "PROJECT_UPDATER_LANG"


def env_default(name: str, fallback: str) -> str:
    """Return the environment value for ``name`` or ``fallback`` when unset/blank."""
    value = os.environ.get(name, "").strip()
    return value or fallback


__all__ = [
    "DEFAULT_API_URL",
    "DEFAULT_LANGUAGE",
    "DEFAULT_TIMEOUT",
    "STATE_FILENAME",
    "BACKUP_DIRNAME",
    "TEMP_DIRNAME",
    "ENV_API_URL",
    "ENV_STATE_FILE",
    "ENV_LANGUAGE",
    "env_default",
]
