"""
Logging infrastructure for the simulator.

Provides structured logging with:
- Component-specific bound loggers
- Console output and optional rotating log files
- A dedicated operations log for the git operations engine
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from loguru import logger


class GitSimLogger:
    """
    Logger setup for the simulator.

    Features:
    - Structured logging with context
    - Log rotation and retention
    - Per-component file filtering
    """

    def __init__(
        self,
        log_dir: Optional[Path] = None,
        rotation: str = "10 MB",
        retention: str = "1 week",
        level: str = "INFO",
        format_string: Optional[str] = None,
        enable_file_logging: bool = False,
        enable_console_logging: bool = True,
    ):
        """
        Replace loguru's default sink with the simulator's sinks.

        Args:
            log_dir: Where file sinks write (defaults to ./logs)
            rotation: Loguru rotation policy for file sinks
            retention: Loguru retention policy for file sinks
            level: Minimum level for the console and main file sink
            format_string: Override for the record format
            enable_file_logging: Write gitsim.log, operations.log and errors.log
            enable_console_logging: Write records to stderr
        """
        self.log_dir = log_dir or Path("logs")
        self.rotation = rotation
        self.retention = retention
        self.level = level

        self.format_string = format_string or (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{extra[component]}</cyan> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )

        # loguru ships a stderr sink at DEBUG; drop it
        logger.remove()
        logger.configure(extra={"component": "system"})

        if enable_console_logging:
            logger.add(
                sys.stderr,
                format=self.format_string,
                level=level,
                colorize=True,
            )

        if enable_file_logging:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._add_file_handlers()

        self.logger = logger.bind(component="system")

    def _add_file_handlers(self) -> None:
        """Add file handlers for the main log, operations and errors."""
        sinks = [
            ("gitsim.log", self.level, None),
            ("operations.log", "DEBUG", _component_filter("operations")),
            ("errors.log", "ERROR", None),
        ]
        for filename, sink_level, record_filter in sinks:
            logger.add(
                self.log_dir / filename,
                format=self.format_string,
                level=sink_level,
                rotation=self.rotation,
                retention=self.retention,
                filter=record_filter,
            )


def _component_filter(component: str) -> Callable[[Dict[str, Any]], bool]:
    return lambda record: record["extra"].get("component") == component


def get_gitsim_logger(component: str = "system") -> Any:
    """
    Get a component-specific logger.

    Example:
        >>> log = get_gitsim_logger("operations")
        >>> log.info("Created commit", commit_id="a1b2c3d")
    """
    return logger.bind(component=component)


def log_operation(logger_instance: Any, operation: str, **kwargs: Any) -> None:
    """
    Log a git operation event.

    Args:
        logger_instance: Logger to use
        operation: Operation name (e.g., "commit", "rebase_aborted")
        **kwargs: Additional context
    """
    logger_instance.debug(
        f"Operation: {operation}",
        operation=operation,
        timestamp=datetime.utcnow().isoformat(),
        **kwargs,
    )


# Global logger instance
_gitsim_logger: Optional[GitSimLogger] = None


def initialize_logging(
    log_dir: Optional[Path] = None, level: str = "INFO", **kwargs: Any
) -> GitSimLogger:
    """
    Initialize the logging system.

    Called once by the CLI before any command runs.

    Args:
        log_dir: Directory for log files
        level: Default log level
        **kwargs: Additional configuration for GitSimLogger

    Returns:
        Configured GitSimLogger instance
    """
    global _gitsim_logger
    _gitsim_logger = GitSimLogger(log_dir=log_dir, level=level, **kwargs)
    return _gitsim_logger


def get_logger_instance() -> Optional[GitSimLogger]:
    """Return the logger set up by initialize_logging, if any."""
    return _gitsim_logger
