"""Diff core — line reader, engine, heading patcher, models."""

from udiff.diff.engine import DiffEngine, DiffItem
from udiff.diff.models import DiffLine, DiffMode, DiffStats, HunkHeader, LineRecord, LineType
from udiff.diff.patcher import HeadingPatcher
from udiff.diff.reader import LineReader

__all__ = [
    "DiffEngine",
    "DiffItem",
    "DiffLine",
    "DiffMode",
    "DiffStats",
    "HeadingPatcher",
    "HunkHeader",
    "LineReader",
    "LineRecord",
    "LineType",
]
