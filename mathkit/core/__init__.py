"""
Core infrastructure shared by the numerical subsystems.

Contains the exception hierarchy, configuration management and the
linear algebra helpers used by the least-squares framework.
"""

from .base import MathKitError
from .config import get_config, FittingConfig, GeometryConfig

__all__ = [
    "MathKitError",
    "get_config",
    "FittingConfig",
    "GeometryConfig",
]
