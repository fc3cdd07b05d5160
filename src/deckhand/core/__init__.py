"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- Console management (Rich)
"""

# Configuration
from .config import (
    Config,
    LoggingConfig,
    MusicConfig,
    PlayerConfig,
    UIConfig,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
    ensure_directories,
)

# Console
from .console import get_console, print_error, safe_print

__all__ = [
    # Config
    "Config",
    "LoggingConfig",
    "MusicConfig",
    "PlayerConfig",
    "UIConfig",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    "ensure_directories",
    # Console
    "get_console",
    "print_error",
    "safe_print",
]
