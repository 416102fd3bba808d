"""
Utility modules for mathkit.
"""

from .log_manager import (
    JSONFormatter,
    PerformanceLogger,
    create_formatter,
    setup_logging,
)

__all__ = [
    "JSONFormatter",
    "PerformanceLogger",
    "create_formatter",
    "setup_logging",
]
