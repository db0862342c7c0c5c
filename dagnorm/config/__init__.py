"""Configuration schema and loading for dagnorm."""

from .loader import ConfigSource, load_normalize_config
from .schema import DEFAULT_MAX_DEPTH, NormalizeConfig

__all__ = [
    "ConfigSource",
    "DEFAULT_MAX_DEPTH",
    "NormalizeConfig",
    "load_normalize_config",
]
