"""Line reader — lazily splits a byte stream into numbered lines.

Keeps a bounded deque of pending records so the engine can look ahead for a
resynchronisation point and push speculatively read lines back. Reads are
chunked but lines are split off one at a time, on demand, so the deque never
holds more than ``max_lookahead`` records plus one pushed back.
"""

from __future__ import annotations

from collections import deque
from typing import BinaryIO, Deque, Optional

from udiff.diff.models import LineRecord

DEFAULT_MAX_LOOKAHEAD = 10_000
DEFAULT_CHUNK_SIZE = 8192

_NEWLINE = b"\n"


class LineReader:
    """Numbered, pushback-capable view over a binary stream.

    Usage::

        reader = LineReader(fh)
        while reader.has_next():
            record = reader.next()
    """

    def __init__(
        self,
        stream: BinaryIO,
        *,
        max_lookahead: int = DEFAULT_MAX_LOOKAHEAD,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._stream = stream
        self.max_lookahead = max_lookahead
        self._chunk_size = chunk_size
        self._buffer: Deque[LineRecord] = deque()
        self._carry = b""
        self._pos = 0
        self._drained = False  # stream returned b""
        self._eof = False  # no further records
        self._produced = 0
        self._peak = 0

    @property
    def line_no(self) -> int:
        """Number of records tokenized from the stream so far."""
        return self._produced

    @property
    def peak_buffered(self) -> int:
        """Most records held at once for lookahead or pushback."""
        return self._peak

    def _fill(self) -> None:
        """Tokenize one more record, reading a chunk only when the carry has no line."""
        while not self._eof:
            end = self._carry.find(_NEWLINE, self._pos)
            if end != -1:
                self._append(self._carry[self._pos:end])
                self._pos = end + 1
                return
            if self._drained:
                if self._pos < len(self._carry):
                    self._append(self._carry[self._pos:])
                self._carry, self._pos = b"", 0
                self._eof = True
                return
            chunk = self._stream.read(self._chunk_size)
            self._carry = self._carry[self._pos:] + chunk
            self._pos = 0
            self._drained = not chunk

    def _append(self, content: bytes) -> None:
        self._produced += 1
        self._buffer.append(LineRecord(line_no=self._produced, content=content))
        self._peak = max(self._peak, len(self._buffer))

    def has_next(self) -> bool:
        while not self._buffer and not self._eof:
            self._fill()
        return bool(self._buffer)

    def next(self) -> Optional[LineRecord]:
        """Pop the earliest pending record, or None at end of stream."""
        if not self.has_next():
            return None
        return self._buffer.popleft()

    def peek(self) -> Optional[LineRecord]:
        """Return the earliest pending record without consuming it."""
        if not self.has_next():
            return None
        return self._buffer[0]

    def push_back(self, record: LineRecord) -> None:
        """Return a consumed record to the front of the buffer."""
        self._buffer.appendleft(record)
        self._peak = max(self._peak, len(self._buffer))

    def find(self, content: bytes) -> Optional[int]:
        """Offset of the first pending record equal to *content*.

        Scans at most ``max_lookahead`` records, reading more of the stream
        as needed. Nothing is consumed.
        """
        idx = 0
        while idx < self.max_lookahead:
            while idx >= len(self._buffer) and not self._eof:
                self._fill()
            if idx >= len(self._buffer):
                return None
            if self._buffer[idx].content == content:
                return idx
            idx += 1
        return None
