"""Data models for the diff pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class LineType(str, Enum):
    CONTEXT = "context"
    REMOVED = "removed"
    ADDED = "added"

    @property
    def prefix(self) -> bytes:
        return _PREFIXES[self]


_PREFIXES = {
    LineType.CONTEXT: b" ",
    LineType.REMOVED: b"-",
    LineType.ADDED: b"+",
}


class DiffMode(str, Enum):
    """Engine state: equal lines (skip), inside a hunk (diff), trailing context."""

    SKIP = "skip"
    DIFF = "diff"
    CONTEXT = "context"


@dataclass(frozen=True, slots=True)
class LineRecord:
    """One numbered line of an input stream, terminator excluded."""

    line_no: int
    content: bytes


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single tagged body line of a hunk."""

    line_type: LineType
    content: bytes


@dataclass(frozen=True)
class HunkHeader:
    """Hunk header; counts stay None until the patcher fills them in.

    Unpatched starts are the first line the hunk touches on each side.
    """

    old_start: int
    new_start: int
    old_count: Optional[int] = None
    new_count: Optional[int] = None

    @property
    def is_patched(self) -> bool:
        return self.old_count is not None and self.new_count is not None


@dataclass
class DiffStats:
    """Summary of a completed diff run."""

    old_path: str = ""
    new_path: str = ""
    hunks: int = 0
    insertions: int = 0
    deletions: int = 0
    context_lines: int = 0
    old_lines: int = 0
    new_lines: int = 0
    headers_patched: bool = True
    peak_buffered: int = 0  # most records either reader held at once
    duration_ms: float = 0.0

    @property
    def changed(self) -> bool:
        return bool(self.insertions or self.deletions)

    def record(self, item: "HunkHeader | DiffLine") -> None:
        if isinstance(item, HunkHeader):
            self.hunks += 1
            if not item.is_patched:
                self.headers_patched = False
        elif item.line_type is LineType.ADDED:
            self.insertions += 1
        elif item.line_type is LineType.REMOVED:
            self.deletions += 1
        else:
            self.context_lines += 1
