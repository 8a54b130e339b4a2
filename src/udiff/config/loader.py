"""Load and merge configuration from .udiff.toml and UDIFF_* env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from udiff.config.schema import DiffConfig, OutputConfig, UdiffConfig

CONFIG_FILENAME = ".udiff.toml"


class ConfigError(Exception):
    """Raised when config is malformed, unreadable or out of range."""


def find_config_file(cwd: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = cwd / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.get(section, {}).items() if k in valid_fields}
    return cls(**filtered)


def _env_int(name: str) -> Optional[int]:
    val = os.environ.get(name)
    if not val:
        return None
    try:
        return int(val)
    except ValueError:
        return None


def _merge_env_overrides(cfg: UdiffConfig) -> None:
    """Apply UDIFF_* environment variable overrides."""
    if (val := _env_int("UDIFF_MAX_LOOKAHEAD")) is not None:
        cfg.diff.max_lookahead = val
    if (val := _env_int("UDIFF_MAX_CONTEXT")) is not None:
        cfg.diff.max_context = val
    if (val := _env_int("UDIFF_CHUNK_SIZE")) is not None:
        cfg.diff.chunk_size = val
    if os.environ.get("UDIFF_PATCH_HEADERS") == "0":
        cfg.output.patch_headers = False
    if os.environ.get("UDIFF_EXIT_CODE") == "1":
        cfg.output.exit_code = True


def validate(cfg: UdiffConfig) -> UdiffConfig:
    """Reject values the pipeline cannot run with."""
    checks = (
        ("max_lookahead", cfg.diff.max_lookahead, 1),
        ("max_context", cfg.diff.max_context, 0),
        ("chunk_size", cfg.diff.chunk_size, 1),
    )
    for name, value, minimum in checks:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"diff.{name} must be an integer, got {value!r}")
        if value < minimum:
            raise ConfigError(f"diff.{name} must be >= {minimum}, got {value}")
    return cfg


def load_config(
    cwd: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> UdiffConfig:
    """Load, validate, and return a UdiffConfig."""
    config_path = find_config_file(cwd or Path.cwd(), config_override)

    if config_path is None:
        cfg = UdiffConfig()
    else:
        raw = _parse_toml(config_path)
        try:
            cfg = UdiffConfig(
                diff=_build_section(raw, DiffConfig, "diff"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except (TypeError, AttributeError) as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    return validate(cfg)
