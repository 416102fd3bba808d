"""
Configuration settings and management for mathkit.

This module provides centralized configuration management with validation,
type checking, and environment variable support. All configuration classes
use dataclasses for clean, type-safe configuration handling.
"""

import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from pathlib import Path
import logging

from ..base.exceptions import ConfigurationError


# Global configuration instances
_global_config: Optional["FittingConfig"] = None
_global_geometry_config: Optional["GeometryConfig"] = None

VALID_DECOMPOSITIONS = ["LU", "QR", "CHOLESKY", "SVD"]
VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class FittingConfig:
    """Main configuration for least-squares problems and optimizers.

    Holds the default limits and thresholds used when a problem or an
    optimizer is built without explicit values.
    """

    # Limits
    max_evaluations: int = 1000
    max_iterations: int = 1000

    # Convergence
    relative_threshold: float = 1e-10
    absolute_threshold: float = 1e-10

    # Covariance and normal equations
    singularity_threshold: float = 1e-11
    decomposition: str = "QR"

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    def __post_init__(self):
        """Post-initialization validation and setup."""
        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        self.decomposition = self.decomposition.upper()
        self.validate()

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises
        ------
        ConfigurationError
            If any configuration parameter is invalid
        """
        errors = []

        if self.max_evaluations <= 0:
            errors.append("max_evaluations must be positive")

        if self.max_iterations <= 0:
            errors.append("max_iterations must be positive")

        if self.relative_threshold < 0:
            errors.append("relative_threshold must be non-negative")

        if self.absolute_threshold < 0:
            errors.append("absolute_threshold must be non-negative")

        if self.singularity_threshold < 0:
            errors.append("singularity_threshold must be non-negative")

        if self.decomposition.upper() not in VALID_DECOMPOSITIONS:
            errors.append(f"decomposition must be one of {VALID_DECOMPOSITIONS}")

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of {VALID_LOG_LEVELS}")

        if errors:
            raise ConfigurationError(f"Configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary.

        Returns
        -------
        dict
            Dictionary representation of configuration
        """
        result = {}
        for key, value in self.__dict__.items():
            if isinstance(value, Path):
                result[key] = str(value)
            else:
                result[key] = value
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FittingConfig":
        """Create configuration from dictionary.

        Raises
        ------
        ConfigurationError
            If the dictionary holds unknown keys
        """
        data = dict(data)
        unknown = [key for key in data if key not in cls.__dataclass_fields__]
        if unknown:
            raise ConfigurationError(f"Unknown configuration parameters: {unknown}")

        if data.get('log_file') is not None:
            data['log_file'] = Path(data['log_file'])

        return cls(**data)

    def update(self, **kwargs) -> None:
        """Update configuration parameters.

        Raises
        ------
        ConfigurationError
            If unknown parameter or validation fails
        """
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ConfigurationError(f"Unknown configuration parameter: {key}",
                                         parameter=key)

        if self.log_file is not None:
            self.log_file = Path(self.log_file)
        self.decomposition = self.decomposition.upper()
        self.validate()

    def get_log_level(self) -> int:
        """Get the logging level as an integer constant."""
        return getattr(logging, self.log_level.upper())


@dataclass
class GeometryConfig:
    """Configuration for space partitioning geometry.

    ``tolerance`` is the distance below which two points are considered
    identical; ``parallel_threshold`` is the offset below which two
    parallel hyperplanes are considered to coincide.
    """

    tolerance: float = 1e-10
    parallel_threshold: float = 1e-10

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Validate geometry configuration.

        Raises
        ------
        ConfigurationError
            If any configuration parameter is invalid
        """
        errors = []

        if self.tolerance <= 0:
            errors.append("tolerance must be positive")

        if self.parallel_threshold <= 0:
            errors.append("parallel_threshold must be positive")

        if errors:
            raise ConfigurationError(f"Geometry configuration validation failed: {'; '.join(errors)}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {key: value for key, value in self.__dict__.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeometryConfig":
        """Create from dictionary representation."""
        return cls(**data)


def get_config() -> FittingConfig:
    """Get the global fitting configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = FittingConfig()
    return _global_config


def set_config(config: FittingConfig) -> None:
    """Set the global fitting configuration instance.

    Raises
    ------
    TypeError
        If config is not a FittingConfig instance
    """
    global _global_config
    if not isinstance(config, FittingConfig):
        raise TypeError("config must be a FittingConfig instance")
    config.validate()
    _global_config = config


def reset_config() -> None:
    """Reset both global configurations to defaults."""
    global _global_config, _global_geometry_config
    _global_config = FittingConfig()
    _global_geometry_config = GeometryConfig()


def update_config(**kwargs) -> None:
    """Update global fitting configuration parameters."""
    config = get_config()
    config.update(**kwargs)


def get_geometry_config() -> GeometryConfig:
    """Get the global geometry configuration instance."""
    global _global_geometry_config
    if _global_geometry_config is None:
        _global_geometry_config = GeometryConfig()
    return _global_geometry_config


def load_config_from_env() -> FittingConfig:
    """Load fitting configuration from environment variables.

    Returns
    -------
    FittingConfig
        Configuration loaded from environment
    """
    config = FittingConfig()

    env_mapping = {
        'MATHKIT_MAX_EVALUATIONS': 'max_evaluations',
        'MATHKIT_MAX_ITERATIONS': 'max_iterations',
        'MATHKIT_SINGULARITY_THRESHOLD': 'singularity_threshold',
        'MATHKIT_DECOMPOSITION': 'decomposition',
        'MATHKIT_LOG_LEVEL': 'log_level',
        'MATHKIT_LOG_FILE': 'log_file',
    }

    updates = {}
    for env_var, attr_name in env_mapping.items():
        if env_var in os.environ:
            value = os.environ[env_var]

            if attr_name == 'log_file':
                if value:
                    updates[attr_name] = Path(value)
            elif attr_name in ['max_evaluations', 'max_iterations']:
                try:
                    updates[attr_name] = int(value)
                except ValueError as e:
                    raise ConfigurationError(f"Invalid integer in {env_var}: {value!r}",
                                             parameter=attr_name, cause=e)
            elif attr_name == 'singularity_threshold':
                try:
                    updates[attr_name] = float(value)
                except ValueError as e:
                    raise ConfigurationError(f"Invalid float in {env_var}: {value!r}",
                                             parameter=attr_name, cause=e)
            else:
                updates[attr_name] = value

    if updates:
        config.update(**updates)
        logging.info(f"Updated configuration from environment variables: {list(updates.keys())}")

    return config


# Configuration schema for validation
CONFIG_SCHEMA = {
    'fitting': {
        'required': [],
        'types': {
            'max_evaluations': int,
            'max_iterations': int,
            'relative_threshold': (int, float),
            'absolute_threshold': (int, float),
            'singularity_threshold': (int, float),
            'decomposition': str,
            'log_level': str,
            'log_file': (str, Path, type(None)),
        },
        'validators': {
            'max_evaluations': lambda x: x > 0,
            'max_iterations': lambda x: x > 0,
            'singularity_threshold': lambda x: x >= 0,
            'decomposition': lambda x: x.upper() in VALID_DECOMPOSITIONS,
        }
    },
    'geometry': {
        'required': [],
        'types': {
            'tolerance': (int, float),
            'parallel_threshold': (int, float),
        },
        'validators': {
            'tolerance': lambda x: x > 0,
            'parallel_threshold': lambda x: x > 0,
        }
    },
}


def validate_against_schema(section: str, data: Dict[str, Any]) -> List[str]:
    """Check a raw configuration section against ``CONFIG_SCHEMA``.

    Returns
    -------
    list
        Validation error messages, empty if the section is valid
    """
    if section not in CONFIG_SCHEMA:
        raise ConfigurationError(f"Unknown configuration section: {section}")

    schema = CONFIG_SCHEMA[section]
    errors = [f"Missing required parameter: {key}"
              for key in schema['required'] if key not in data]

    for key, value in data.items():
        expected = schema['types'].get(key)
        if expected is None:
            errors.append(f"Unknown parameter: {key}")
            continue
        if not isinstance(value, expected):
            errors.append(f"{key} has invalid type {type(value).__name__}")
            continue
        validator = schema['validators'].get(key)
        if validator is not None and not validator(value):
            errors.append(f"{key} has invalid value {value!r}")

    return errors
