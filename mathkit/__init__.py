"""
mathkit: least-squares fitting and binary space partitioning geometry.
"""

__version__ = "0.1.0"
__author__ = "mathkit developers"
__email__ = "mathkit@example.com"

from mathkit.core.base.exceptions import MathKitError
from mathkit.core.config import get_config, get_geometry_config, FittingConfig, GeometryConfig
from mathkit.fitting.leastsquares import (
    LeastSquaresBuilder,
    LeastSquaresFactory,
    GaussNewtonOptimizer,
)
from mathkit.geometry.partitioning import RegionFactory
from mathkit.geometry.euclidean import IntervalsSet, PolygonsSet

# Public API
__all__ = [
    "__version__",
    "MathKitError",
    "get_config",
    "get_geometry_config",
    "FittingConfig",
    "GeometryConfig",
    "LeastSquaresBuilder",
    "LeastSquaresFactory",
    "GaussNewtonOptimizer",
    "RegionFactory",
    "IntervalsSet",
    "PolygonsSet",
]


def get_version():
    """Get the version string."""
    return __version__


def get_info():
    """Get package information."""
    return {
        "version": __version__,
        "author": __author__,
        "email": __email__,
    }
