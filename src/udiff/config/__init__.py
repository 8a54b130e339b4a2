"""Configuration loading and schema."""

from udiff.config.loader import ConfigError, load_config, validate
from udiff.config.schema import DiffConfig, OutputConfig, UdiffConfig

__all__ = [
    "ConfigError",
    "DiffConfig",
    "OutputConfig",
    "UdiffConfig",
    "load_config",
    "validate",
]
