"""JSON statistics report for scripted callers."""

from __future__ import annotations

import json
from typing import Any, Dict

from udiff.diff.models import DiffStats


def to_dict(stats: DiffStats) -> Dict[str, Any]:
    """Convert DiffStats to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "old": {"path": stats.old_path, "lines": stats.old_lines},
        "new": {"path": stats.new_path, "lines": stats.new_lines},
        "changed": stats.changed,
        "hunks": stats.hunks,
        "insertions": stats.insertions,
        "deletions": stats.deletions,
        "context_lines": stats.context_lines,
        "headers_patched": stats.headers_patched,
        "peak_buffered": stats.peak_buffered,
        "duration_ms": stats.duration_ms,
    }


def render(stats: DiffStats) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(stats), indent=2)
