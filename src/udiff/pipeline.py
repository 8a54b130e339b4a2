"""Diff pipeline — opens both inputs and streams the rendered diff.

Reader → engine → patcher → renderer, pulled lazily one item at a time.
I/O errors (OSError) propagate to the caller; nothing is retried.
"""

from __future__ import annotations

import time
from typing import Iterator, Optional

from udiff.config.schema import UdiffConfig
from udiff.diff.engine import DiffEngine, DiffItem
from udiff.diff.models import DiffStats
from udiff.diff.patcher import HeadingPatcher
from udiff.diff.reader import LineReader
from udiff.output.unified import file_header, render


def build_pipeline(old: LineReader, new: LineReader, config: UdiffConfig) -> Iterator[DiffItem]:
    """Compose engine and (optionally) patcher over two readers."""
    engine = DiffEngine(old, new, max_context=config.diff.max_context)
    if not config.output.patch_headers:
        return engine.run()
    return HeadingPatcher(engine.run(), max_lookahead=config.diff.max_lookahead).run()


def diff_files(
    old_path: str,
    new_path: str,
    config: UdiffConfig,
    stats: Optional[DiffStats] = None,
) -> Iterator[bytes]:
    """Yield the unified diff of *old_path* against *new_path* as bytes."""
    start = time.perf_counter()
    header = file_header(old_path, new_path)
    if stats is not None:
        stats.old_path, stats.new_path = old_path, new_path
        stats.headers_patched = config.output.patch_headers

    with open(old_path, "rb") as old_fh, open(new_path, "rb") as new_fh:
        old = LineReader(
            old_fh,
            max_lookahead=config.diff.max_lookahead,
            chunk_size=config.diff.chunk_size,
        )
        new = LineReader(
            new_fh,
            max_lookahead=config.diff.max_lookahead,
            chunk_size=config.diff.chunk_size,
        )
        items = build_pipeline(old, new, config)

        yield header
        for item in items:
            if stats is not None:
                stats.record(item)
            yield render(item)

        if stats is not None:
            stats.old_lines = old.line_no
            stats.new_lines = new.line_no
            stats.peak_buffered = max(old.peak_buffered, new.peak_buffered)
            stats.duration_ms = (time.perf_counter() - start) * 1000
