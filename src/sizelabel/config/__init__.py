"""Configuration loading, schema, and defaults."""

from sizelabel.config.loader import ConfigError, load_config, parse_sizes, require_github
from sizelabel.config.schema import LabelerConfig

__all__ = [
    "ConfigError",
    "LabelerConfig",
    "load_config",
    "parse_sizes",
    "require_github",
]
