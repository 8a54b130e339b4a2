"""Unified diff renderer — file header, hunk headers and body lines as bytes."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Optional

from udiff.diff.engine import DiffItem
from udiff.diff.models import HunkHeader

_PLACEHOLDER = "?"


def format_timestamp(mtime_ns: int) -> str:
    """``YYYY-MM-DD HH:MM:SS.nnnnnnnnn +0000`` for an mtime in nanoseconds.

    The clock is local time; the offset is always written as +0000.
    """
    seconds, nanos = divmod(mtime_ns, 1_000_000_000)
    stamp = datetime.fromtimestamp(seconds).strftime("%Y-%m-%d %H:%M:%S")
    return f"{stamp}.{nanos:09d} +0000"


def file_header(old_path: str, new_path: str) -> bytes:
    """The ``---`` / ``+++`` lines. Raises OSError if a path cannot be stat-ed."""
    old_stamp = format_timestamp(os.stat(old_path).st_mtime_ns)
    new_stamp = format_timestamp(os.stat(new_path).st_mtime_ns)
    return (
        f"--- {old_path}\t{old_stamp}\n"
        f"+++ {new_path}\t{new_stamp}\n"
    ).encode("utf-8", "surrogateescape")


def _count(value: Optional[int]) -> str:
    return _PLACEHOLDER if value is None else str(value)


def render_header(header: HunkHeader) -> bytes:
    return (
        f"@@ -{header.old_start},{_count(header.old_count)} "
        f"+{header.new_start},{_count(header.new_count)} @@\n"
    ).encode("ascii")


def render(item: DiffItem) -> bytes:
    """Serialise one pipeline item, terminator included."""
    if isinstance(item, HunkHeader):
        return render_header(item)
    return item.line_type.prefix + item.content + b"\n"
