"""Heading patcher — fills in hunk header counts one hunk at a time."""

from __future__ import annotations

from dataclasses import replace
from typing import Generator, Iterable, List, Optional

from udiff.diff.engine import DiffItem
from udiff.diff.models import DiffLine, HunkHeader, LineType
from udiff.diff.reader import DEFAULT_MAX_LOOKAHEAD


class HeadingPatcher:
    """Buffer each hunk until its end is known, then emit it with real counts.

    A hunk that grows past ``max_lookahead`` items makes the patcher give up:
    the buffer is flushed with placeholder counts and everything after it
    passes through untouched.
    """

    def __init__(self, items: Iterable[DiffItem], *, max_lookahead: int = DEFAULT_MAX_LOOKAHEAD) -> None:
        self._items = items
        self.max_lookahead = max_lookahead
        self.gave_up = False
        self._header: Optional[HunkHeader] = None
        self._buffer: List[DiffLine] = []
        self._blank = 0
        self._deleted = 0
        self._inserted = 0

    def _reset(self, header: Optional[HunkHeader]) -> None:
        self._header = header
        self._buffer = []
        self._blank = self._deleted = self._inserted = 0

    def _count(self, line: DiffLine) -> None:
        if line.line_type is LineType.REMOVED:
            self._deleted += 1
        elif line.line_type is LineType.ADDED:
            self._inserted += 1
        else:
            self._blank += 1

    def _flush(self, *, patch: bool = True) -> Generator[DiffItem, None, None]:
        if self._header is not None:
            if patch:
                old_count = self._blank + self._deleted
                new_count = self._blank + self._inserted
                # An empty side is anchored at the line before the hunk
                yield replace(
                    self._header,
                    old_start=self._header.old_start - (old_count == 0),
                    new_start=self._header.new_start - (new_count == 0),
                    old_count=old_count,
                    new_count=new_count,
                )
            else:
                yield self._header
        yield from self._buffer

    def _buffered(self) -> int:
        return len(self._buffer) + (1 if self._header is not None else 0)

    def run(self) -> Generator[DiffItem, None, None]:
        """Yield the engine's items with every header patched."""
        items = iter(self._items)
        for item in items:
            if isinstance(item, HunkHeader):
                yield from self._flush()
                self._reset(item)
                continue

            if self._buffered() >= self.max_lookahead:
                self.gave_up = True
                yield from self._flush(patch=False)
                self._reset(None)
                yield item
                yield from items
                return

            self._count(item)
            self._buffer.append(item)

        yield from self._flush()
        self._reset(None)
