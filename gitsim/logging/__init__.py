"""
Logging infrastructure for the simulator.

Provides structured logging and decorators for operation tracking.
"""

from .logger import (
    GitSimLogger,
    get_gitsim_logger,
    initialize_logging,
    get_logger_instance,
    log_operation,
)

from .decorators import track_operation

__all__ = [
    # Logger
    "GitSimLogger",
    "get_gitsim_logger",
    "initialize_logging",
    "get_logger_instance",
    "log_operation",
    # Decorators
    "track_operation",
]
