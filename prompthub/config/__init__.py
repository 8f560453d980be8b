"""Configuration for prompthub"""

from .loader import load_config, default_config_path
from .schema import Config, StorageConfig, GitConfig, HttpConfig, LoggingConfig
from .validator import ConfigValidator

__all__ = [
    "Config",
    "StorageConfig",
    "GitConfig",
    "HttpConfig",
    "LoggingConfig",
    "ConfigValidator",
    "load_config",
    "default_config_path",
]
