"""Diff engine — bounded-lookahead, lock-step line diff.

Walks two LineReaders together. Equal lines are either trailing context of
the previous hunk or kept in a small rolling pre-context window. On a
mismatch the engine searches each side's upcoming lines for the other
side's current line and marks the shorter run as inserted or deleted. When
neither side finds a match within the lookahead bound the pair is treated
as a one-for-one substitution, so memory never grows past the bound.

Headers are yielded with unknown counts and start at the first line the
hunk touches on each side; HeadingPatcher fills in the counts.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Generator, Optional, Tuple

from udiff.diff.models import DiffLine, DiffMode, HunkHeader, LineRecord, LineType
from udiff.diff.reader import LineReader

DEFAULT_MAX_CONTEXT = 3

DiffItem = HunkHeader | DiffLine

_Pair = Tuple[LineRecord, LineRecord]


class DiffEngine:
    """Produce hunk headers and tagged lines for two line readers.

    Usage::

        engine = DiffEngine(LineReader(old_fh), LineReader(new_fh))
        for item in engine.run():
            ...
    """

    def __init__(
        self,
        old: LineReader,
        new: LineReader,
        *,
        max_context: int = DEFAULT_MAX_CONTEXT,
    ) -> None:
        self._old = old
        self._new = new
        self.max_context = max_context
        self.mode = DiffMode.SKIP
        self._context_left = 0
        self._pre_context: Deque[_Pair] = deque(maxlen=max_context)

    # --- mode transitions ---

    def _enter_context(self) -> None:
        self.mode = DiffMode.CONTEXT
        self._context_left = self.max_context

    def _enter_skip(self) -> None:
        self.mode = DiffMode.SKIP
        self._context_left = 0

    def _enter_diff(self) -> None:
        self.mode = DiffMode.DIFF

    # --- hunk framing ---

    def _open_hunk(
        self, old_start: int, new_start: int
    ) -> Generator[DiffItem, None, None]:
        """Yield a placeholder header followed by the buffered pre-context."""
        if self._pre_context:
            first_old, first_new = self._pre_context[0]
            old_start, new_start = first_old.line_no, first_new.line_no
        yield HunkHeader(old_start=old_start, new_start=new_start)
        for old_rec, _ in self._pre_context:
            yield DiffLine(LineType.CONTEXT, old_rec.content)
        self._pre_context.clear()

    def _on_match(self, old_rec: LineRecord, new_rec: LineRecord) -> Optional[DiffLine]:
        if self.mode is DiffMode.DIFF:
            self._enter_context()
        if self.mode is DiffMode.CONTEXT:
            if self._context_left:
                self._context_left -= 1
                return DiffLine(LineType.CONTEXT, old_rec.content)
            self._enter_skip()
        self._pre_context.append((old_rec, new_rec))
        return None

    # --- resynchronisation ---

    def _resync(
        self, old_rec: LineRecord, new_rec: LineRecord
    ) -> Generator[DiffLine, None, None]:
        in_new = self._new.find(old_rec.content)
        in_old = self._old.find(new_rec.content)

        if in_new is None and in_old is None:
            yield DiffLine(LineType.REMOVED, old_rec.content)
            yield DiffLine(LineType.ADDED, new_rec.content)
            return

        # Old side wins ties so deletions come before insertions
        if in_new is None or (in_old is not None and in_old <= in_new):
            yield DiffLine(LineType.REMOVED, old_rec.content)
            self._new.push_back(new_rec)
            yield from self._take(self._old, in_old, LineType.REMOVED)
        else:
            yield DiffLine(LineType.ADDED, new_rec.content)
            self._old.push_back(old_rec)
            yield from self._take(self._new, in_new, LineType.ADDED)

    @staticmethod
    def _take(
        reader: LineReader, count: int, line_type: LineType
    ) -> Generator[DiffLine, None, None]:
        for _ in range(count):
            record = reader.next()
            if record is None:
                break
            yield DiffLine(line_type, record.content)

    # --- main loop ---

    def run(self) -> Generator[DiffItem, None, None]:
        """Yield HunkHeader / DiffLine items until both inputs are drained."""
        old, new = self._old, self._new

        while old.has_next() and new.has_next():
            old_rec = old.next()
            new_rec = new.next()

            if old_rec.content == new_rec.content:  # type: ignore[union-attr]
                line = self._on_match(old_rec, new_rec)
                if line is not None:
                    yield line
                continue

            if self.mode is DiffMode.SKIP:
                yield from self._open_hunk(old_rec.line_no, new_rec.line_no)
            self._enter_diff()
            yield from self._resync(old_rec, new_rec)

        yield from self._drain()

    def _drain(self) -> Generator[DiffItem, None, None]:
        old, new = self._old, self._new
        old_left, new_left = old.has_next(), new.has_next()
        if not (old_left or new_left):
            self._enter_skip()
            return

        if self.mode is DiffMode.SKIP:
            # An exhausted side starts just past its last line
            old_start = old.peek().line_no if old_left else old.line_no + 1  # type: ignore[union-attr]
            new_start = new.peek().line_no if new_left else new.line_no + 1  # type: ignore[union-attr]
            yield from self._open_hunk(old_start, new_start)

        self._enter_diff()
        while old.has_next():
            yield DiffLine(LineType.REMOVED, old.next().content)  # type: ignore[union-attr]
        while new.has_next():
            yield DiffLine(LineType.ADDED, new.next().content)  # type: ignore[union-attr]
        self._enter_skip()
