"""Configuration management for stream selection.

Configuration is loaded with precedence handling:
1. Explicit arguments (highest priority)
2. Environment variables (STREAMSEL_*)
3. Config file (~/.streamsel/config.toml)
4. Default values (lowest priority)
"""

from stream_selection.config.env import EnvReader
from stream_selection.config.loader import (
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
    load_toml_file,
)
from stream_selection.config.models import (
    CapabilitiesConfig,
    LoggingConfig,
    SelectionConfig,
    StreamSelectionConfig,
)

__all__ = [
    # Models
    "CapabilitiesConfig",
    "LoggingConfig",
    "SelectionConfig",
    "StreamSelectionConfig",
    # Loader
    "EnvReader",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "load_toml_file",
]
