"""Shared test fixtures — in-memory readers, diff runners, sample files."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, List

import pytest

from udiff.diff.engine import DiffEngine
from udiff.diff.patcher import HeadingPatcher
from udiff.diff.reader import LineReader
from udiff.output.unified import render


def _as_bytes(lines: List[str]) -> bytes:
    return b"".join(line.encode() + b"\n" for line in lines)


@pytest.fixture
def make_reader() -> Callable[..., LineReader]:
    """Build a LineReader over raw bytes or a list of str lines."""

    def _make(data, **kwargs) -> LineReader:
        if isinstance(data, list):
            data = _as_bytes(data)
        return LineReader(io.BytesIO(data), **kwargs)

    return _make


@pytest.fixture
def run_diff(make_reader) -> Callable[..., List[str]]:
    """Diff two lists of lines and return the rendered hunk lines (no file header)."""

    def _run(
        old: List[str],
        new: List[str],
        *,
        max_context: int = 3,
        max_lookahead: int = 10_000,
        patch: bool = True,
    ) -> List[str]:
        old_r = make_reader(old, max_lookahead=max_lookahead)
        new_r = make_reader(new, max_lookahead=max_lookahead)
        items = DiffEngine(old_r, new_r, max_context=max_context).run()
        if patch:
            items = HeadingPatcher(items).run()
        return b"".join(render(item) for item in items).decode().splitlines()

    return _run


@pytest.fixture
def sample_files(tmp_path: Path):
    """Write an old/new pair differing in one line."""

    def _write(old: str = "a\nb\nc\n", new: str = "a\nx\nc\n"):
        old_path = tmp_path / "old.txt"
        new_path = tmp_path / "new.txt"
        old_path.write_bytes(old.encode())
        new_path.write_bytes(new.encode())
        return old_path, new_path

    return _write
