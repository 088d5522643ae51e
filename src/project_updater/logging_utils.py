"""Logging configuration helpers (human + JSON + file).

Centralizes lightweight logging setup for the updater:
 - Plain human-readable logs to stderr
 - Optional JSON lines to stdout for piping/collection
 - Optional file logs

Configuration is idempotent so tests and repeated calls do not stack
handlers, and logging never interrupts the update flow.
"""

from __future__ import annotations
import json
import logging
import sys
from typing import Optional

# Structured fields copied into JSON records when passed via ``extra=...``.
_STRUCTURED_FIELDS = (
    "event",
    "package",
    "version",
    "latest",
    "branch",
    "path",
    "url",
    "error_type",
)

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


class JSONFormatter(logging.Formatter):
    """Minimal JSON formatter emitting ``level``, ``message`` and set fields."""

    def format(self, record):
        payload = {
            "level": record.levelname,
            "message": record.getMessage(),
        }
        for k in _STRUCTURED_FIELDS:
            if hasattr(record, k):
                payload[k] = getattr(record, k)
        return json.dumps(payload)


def configure_logging(
    verbose: bool,
    log_file: Optional[str] = None,
    log_json: bool = False,
    log_level: Optional[str] = None,
) -> None:
    """Configure the root logger according to CLI flags.

    Parameters
    - ``verbose``: ``DEBUG`` when ``True`` (unless ``log_level`` overrides),
      otherwise ``WARNING``.
    - ``log_file``: Optional path to tee plain-text logs to.
    - ``log_json``: Also emit JSON lines to stdout.
    - ``log_level``: Explicit level name (debug, info, warning, error).

    Handlers added by an earlier call are removed and closed first.
    """
    if log_level:
        level = _LEVELS.get(log_level.lower(), logging.WARNING)
    else:
        level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger()
    logger.setLevel(level)

    for h in list(logger.handlers):
        if getattr(h, "_added_by_configure_logging", False):
            logger.removeHandler(h)
            h.close()

    fmt = "%(levelname)s: %(message)s"
    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(fmt))
    setattr(stream, "_added_by_configure_logging", True)
    logger.addHandler(stream)

    if log_json:
        json_handler = logging.StreamHandler(sys.stdout)
        json_handler.setFormatter(JSONFormatter())
        setattr(json_handler, "_added_by_configure_logging", True)
        logger.addHandler(json_handler)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(logging.Formatter(fmt))
        setattr(fh, "_added_by_configure_logging", True)
        logger.addHandler(fh)

    for handler in logger.handlers:
        handler.setLevel(level)


def log_event(event: str, level: int = logging.INFO, **fields) -> None:
    """Emit a structured event log at the given level.

    Common ``fields`` include ``package``, ``version``, ``latest``,
    ``branch``, ``path`` and ``error_type``. Never raises.
    """
    try:
        logging.getLogger("project_updater").log(
            level, event, extra={"event": event, **fields}
        )
    except Exception:
        pass


__all__ = ["configure_logging", "log_event", "JSONFormatter"]
