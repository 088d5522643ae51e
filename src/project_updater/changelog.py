"""Changelog classification parser.

Release notes arrive as one blob where each entry starts with a sentinel
character::

    +Added something -Removed something ·Fixed something |A note

:func:`parse` turns that blob into :class:`ChangeRecord` items grouped as
Added, Removed, Fixed, then Note, keeping input order inside each
group. Anything before the first sentinel, and any segment that does not
start with a known sentinel, is dropped.

A ``#`` also ends the current entry and the text after it is discarded, so
``+Fix crash reported in issue #42`` keeps only ``Fix crash reported in
issue``. A hyphen inside a description starts a new Removed entry, so
``+auto-update`` yields an Added ``auto`` and a Removed ``update``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class ChangeKind(Enum):
    ADDED = "+"
    REMOVED = "-"
    FIXED = "·"
    NOTE = "|"


# Render order; Enum iteration order matches it.
KIND_ORDER = tuple(ChangeKind)
SENTINELS = frozenset(kind.value for kind in ChangeKind)
# Headings end the current entry; the segment they start is discarded.
FOREIGN_MARKERS = frozenset("#")
BOUNDARIES = SENTINELS | FOREIGN_MARKERS


@dataclass(frozen=True)
class ChangeRecord:
    kind: ChangeKind
    description: str


def split_segments(text: str) -> List[str]:
    """Split ``text`` immediately before every entry marker.

    When ``text`` does not start with a marker, the first element is the
    text before the first marker. Segments are returned untrimmed.
    """
    segments: List[str] = []
    start = 0
    for pos, ch in enumerate(text):
        if ch in BOUNDARIES and pos > start:
            segments.append(text[start:pos])
            start = pos
    segments.append(text[start:])
    return segments


def parse(text: str) -> List[ChangeRecord]:
    """Return the categorized entries of a changelog blob."""
    groups: Dict[ChangeKind, List[ChangeRecord]] = {kind: [] for kind in KIND_ORDER}
    for segment in split_segments(text or ""):
        segment = segment.strip()
        if not segment or segment[0] not in SENTINELS:
            # leading text without a sentinel, or an unknown marker
            continue
        kind = ChangeKind(segment[0])
        groups[kind].append(ChangeRecord(kind, segment[1:].strip()))
    return [record for kind in KIND_ORDER for record in groups[kind]]


__all__ = ["ChangeKind", "ChangeRecord", "KIND_ORDER", "SENTINELS", "FOREIGN_MARKERS", "split_segments", "parse"]
