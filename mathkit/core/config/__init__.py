"""
Configuration management for mathkit.

This module provides centralized configuration management with validation,
type checking, and environment variable support, plus loaders for JSON and
YAML configuration files.
"""

from .settings import (
    FittingConfig,
    GeometryConfig,
    get_config,
    set_config,
    reset_config,
    update_config,
    get_geometry_config,
    load_config_from_env,
    validate_against_schema,
    CONFIG_SCHEMA,
)
from .loader import (
    ConfigLoader,
    JSONConfigLoader,
    YAMLConfigLoader,
    get_config_loader,
    load_config_file,
)

__all__ = [
    # Configuration classes
    "FittingConfig",
    "GeometryConfig",
    # Global config functions
    "get_config",
    "set_config",
    "reset_config",
    "update_config",
    "get_geometry_config",
    "load_config_from_env",
    "validate_against_schema",
    "CONFIG_SCHEMA",
    # Loader classes
    "ConfigLoader",
    "JSONConfigLoader",
    "YAMLConfigLoader",
    "get_config_loader",
    "load_config_file",
]
