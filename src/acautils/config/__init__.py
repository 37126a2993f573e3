"""Configuration loading, schema, and defaults."""

from acautils.config.loader import ConfigError, load_config
from acautils.config.schema import AcaConfig

__all__ = [
    "AcaConfig",
    "ConfigError",
    "load_config",
]
