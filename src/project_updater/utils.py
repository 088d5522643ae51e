"""Utility helpers for the project updater.

Small, dependency-free helpers used across the tool:
 - Version discovery for the installed/package build
 - Lightweight HTTP JSON fetch with short timeouts
 - Discovery of the ``git`` executable and a thin ``git clone`` wrapper

Helpers either return benign values or raise with a clear message when
continuing would be misleading (e.g., ``git`` missing during a download).
"""

from __future__ import annotations
import json
import shutil
import subprocess
import sys
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, List, Optional, Tuple

from importlib.metadata import PackageNotFoundError, version as pkg_version


def get_version() -> str:
    """Return the tool version string.

    Lookup order (first match wins):
    1) ``importlib.metadata.version('project-updater')`` (installed package)
    2) ``project.version`` from ``pyproject.toml`` (source checkout)
    3) Fallback ``"0.0.0+unknown"``
    """
    pv = getattr(sys.modules.get("project_updater_cli"), "pkg_version", pkg_version)
    try:
        return pv("project-updater")
    except PackageNotFoundError:
        pass

    pyproj = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproj.exists():
        try:
            text = pyproj.read_text(encoding="utf-8")
            try:
                import tomllib  # type: ignore

                ver = (tomllib.loads(text).get("project") or {}).get("version")
                if isinstance(ver, str) and ver:
                    return ver
            except ImportError:
                import re

                m = re.search(r"(?ms)^\[project\].*?^version\s*=\s*\"([^\"]+)\"", text)
                if m:
                    return m.group(1)
        except (OSError, ValueError):
            pass

    return "0.0.0+unknown"


def http_get_json(url: str, timeout: float = 10.0) -> Tuple[Any, Optional[str]]:
    """Fetch and decode a small JSON document.

    Returns ``(data, None)`` on success. On any failure (non-2xx status,
    transport error, undecodable body) returns ``(None, error)`` where
    ``error`` is a short message such as ``"HTTP 404: Not Found"``.
    """
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:
            return json.loads(resp.read().decode("utf-8", errors="replace")), None
    except urllib.error.HTTPError as e:
        return None, f"HTTP {e.code}: {e.reason}"
    except Exception as e:
        return None, str(e)


def find_git_cmd() -> Optional[List[str]]:
    """Locate the ``git`` executable; ``None`` when it is not on PATH."""
    for name in ("git", "git.exe"):
        if shutil.which(name):
            return [name]
    return None


def git_clone(url: str, dest: Path) -> None:
    """Clone ``url`` into ``dest`` using the system ``git``.

    Raises ``FileNotFoundError`` when git is unavailable and
    ``subprocess.CalledProcessError`` when the clone fails.
    """
    finder = getattr(sys.modules.get("project_updater_cli"), "find_git_cmd", find_git_cmd)
    cmd = finder()
    if not cmd:
        raise FileNotFoundError("git executable not found on PATH")
    subprocess.run(
        cmd + ["clone", "--quiet", url, str(dest)],
        check=True,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
    )


__all__ = [
    "get_version",
    "http_get_json",
    "pkg_version",
    "find_git_cmd",
    "git_clone",
]
