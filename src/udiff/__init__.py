"""udiff — streaming, bounded-memory unified diff for very large files."""

__version__ = "0.1.0"
