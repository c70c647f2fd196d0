"""Configuration for skiller"""

from .schema import SkillerConfig, SearchConfig, CommandConfig
from .loader import load_config, ConfigValidator, settings_path

__all__ = [
    "SkillerConfig",
    "SearchConfig",
    "CommandConfig",
    "load_config",
    "ConfigValidator",
    "settings_path",
]
