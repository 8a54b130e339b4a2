"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field

from udiff.diff.engine import DEFAULT_MAX_CONTEXT
from udiff.diff.reader import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_LOOKAHEAD


@dataclass
class DiffConfig:
    max_lookahead: int = DEFAULT_MAX_LOOKAHEAD  # lines buffered per side while resynchronising
    max_context: int = DEFAULT_MAX_CONTEXT
    chunk_size: int = DEFAULT_CHUNK_SIZE  # bytes per read() call


@dataclass
class OutputConfig:
    patch_headers: bool = True
    exit_code: bool = False  # exit 1 when differences are found, like diff(1)


@dataclass
class UdiffConfig:
    diff: DiffConfig = field(default_factory=DiffConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
