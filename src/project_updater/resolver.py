"""Release resolution against the remote version service.

The service exposes two reads on one base URL:

- ``GET <base>`` returns ``[{"name": ...}, ...]``, the installable packages
- ``GET <base>?package=<name>`` returns ``{"version", "url", "news"}``

Both calls are single attempts. Any transport error, non-2xx status or
unexpected payload raises :class:`ResolutionError`; the updater is
interactive and infrequent, so failures are surfaced instead of retried.
"""

from __future__ import annotations

import logging
import sys
import urllib.parse
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from .defaults import DEFAULT_API_URL, DEFAULT_TIMEOUT
from .errors import ResolutionError
from .logging_utils import log_event
from .utils import http_get_json


@dataclass(frozen=True)
class ReleaseInfo:
    """Latest release of a package as published by the service."""

    version: str
    source_url: str
    changelog_text: str = ""


class VersionResolver:
    """Client for the version service."""

    def __init__(self, api_url: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.api_url = api_url
        self.timeout = timeout

    def _get(self, url: str) -> Any:
        mod = sys.modules.get("project_updater_cli")
        fetch = getattr(mod, "http_get_json", http_get_json)
        data, error = fetch(url, timeout=self.timeout)
        if error is not None:
            log_event("resolution_failed", level=logging.ERROR, url=url, error=error)
            raise ResolutionError(f"{url}: {error}")
        return data

    def package_url(self, package_name: str) -> str:
        parts = urllib.parse.urlsplit(self.api_url)
        query = urllib.parse.parse_qsl(parts.query)
        query.append(("package", package_name))
        return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(query)))

    def list_installable_packages(self) -> List[str]:
        """Return the names of every package the service can install."""
        data = self._get(self.api_url)
        if not isinstance(data, list):
            raise ResolutionError(f"{self.api_url}: expected a list of packages")
        names = [
            entry["name"]
            for entry in data
            if isinstance(entry, dict) and isinstance(entry.get("name"), str)
        ]
        log_event("packages_listed", url=self.api_url, count=len(names))
        return names

    def resolve_latest(self, package_name: str) -> ReleaseInfo:
        """Return the latest :class:`ReleaseInfo` for ``package_name``."""
        url = self.package_url(package_name)
        data = self._get(url)
        version, source_url, news = _release_fields(data)
        if not version or not source_url:
            raise ResolutionError(f"{url}: release is missing version or url")
        log_event("release_resolved", package=package_name, latest=version, url=source_url)
        return ReleaseInfo(version=version, source_url=source_url, changelog_text=news)


def _release_fields(data: Any) -> Tuple[Optional[str], Optional[str], str]:
    if not isinstance(data, dict):
        return None, None, ""
    version = data.get("version")
    url = data.get("url")
    news = data.get("news")
    version = str(version).strip() if isinstance(version, (str, int, float)) else None
    url = url.strip() if isinstance(url, str) else None
    return version, url, news if isinstance(news, str) else ""


__all__ = ["ReleaseInfo", "VersionResolver"]
