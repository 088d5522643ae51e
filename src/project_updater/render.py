"""Changelog rendering for the terminal."""

from __future__ import annotations
import unicodedata
from typing import List, Mapping, Sequence

from .changelog import ChangeKind, ChangeRecord
from .ui import c, BOLD, GREEN, RED, YELLOW, CYAN

KIND_LABEL_KEYS = {
    ChangeKind.ADDED: "actionAdded",
    ChangeKind.REMOVED: "actionRemoved",
    ChangeKind.FIXED: "actionFixed",
    ChangeKind.NOTE: "notes",
}

_KIND_COLORS = {
    ChangeKind.ADDED: GREEN,
    ChangeKind.REMOVED: RED,
    ChangeKind.FIXED: YELLOW,
    ChangeKind.NOTE: CYAN,
}


def _width(s: str) -> int:
    # East Asian wide characters take two terminal cells
    return sum(2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1 for ch in s)


def _pad(s: str, width: int) -> str:
    return s + " " * max(0, width - _width(s))


def render_changelog(records: Sequence[ChangeRecord], messages: Mapping[str, str]) -> str:
    """Return ``records`` as a two-column table (kind label, description).

    Rows keep the order of ``records``; an empty sequence renders the
    ``changelogEmpty`` message instead of a table.
    """
    if not records:
        return messages["changelogEmpty"]
    head = (messages["kindHeader"], messages["descriptionHeader"])
    rows = [(messages[KIND_LABEL_KEYS[r.kind]], r.description) for r in records]
    w0 = max(_width(x) for x in [head[0]] + [r[0] for r in rows])
    w1 = max(_width(x) for x in [head[1]] + [r[1] for r in rows])
    rule = f"+-{'-' * w0}-+-{'-' * w1}-+"
    lines: List[str] = [
        rule,
        f"| {c(_pad(head[0], w0), BOLD)} | {c(_pad(head[1], w1), BOLD)} |",
        rule,
    ]
    for record, (label, desc) in zip(records, rows):
        lines.append(
            f"| {c(_pad(label, w0), _KIND_COLORS[record.kind])} | {_pad(desc, w1)} |"
        )
    lines.append(rule)
    return "\n".join(lines)


__all__ = ["render_changelog", "KIND_LABEL_KEYS"]
