"""
Configuration management for gitsim.

This module provides centralized configuration for all simulator components:
- Display attributes (branch palette, node spacing)
- Undo/redo history capacity
- Saved-state storage
- Logging settings
"""

import os
from typing import List, Literal, cast

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


DEFAULT_BRANCH_COLORS = [
    "#58a6ff",
    "#a371f7",
    "#3fb950",
    "#f78166",
    "#d29922",
    "#db61a2",
    "#79c0ff",
    "#7ee787",
]


class DisplayConfig(BaseModel):
    """Display attributes stored on commits and branches."""

    node_radius: int = Field(default=16, gt=0, description="Commit node radius")
    node_spacing_x: int = Field(
        default=100, gt=0, description="Horizontal distance between columns"
    )
    node_spacing_y: int = Field(
        default=70, gt=0, description="Vertical distance between branch rows"
    )
    start_x: int = Field(default=80, ge=0, description="X offset of column 0")
    start_y: int = Field(default=60, ge=0, description="Y offset of row 0")
    branch_colors: List[str] = Field(
        default_factory=lambda: list(DEFAULT_BRANCH_COLORS),
        description="Palette cycled through by branch creation order",
    )

    @field_validator("branch_colors")
    @classmethod
    def palette_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("branch_colors must contain at least one color")
        return value


class HistoryConfig(BaseModel):
    """Configuration for the undo/redo timeline."""

    limit: int = Field(
        default=50, gt=0, description="Maximum number of snapshots kept for undo"
    )


class StorageConfig(BaseModel):
    """Configuration for saved simulator state."""

    state_file: str = Field(
        default="gitsim_state.json", description="Path of the saved-state file"
    )
    version: int = Field(default=1, gt=0, description="Envelope format version")
    autosave: bool = Field(
        default=True, description="Save after every successful operation"
    )


class SessionConfig(BaseModel):
    """Configuration for the interactive session."""

    fresh_commit_ttl_seconds: float = Field(
        default=1.5,
        ge=0.0,
        description="How long newly created commits are reported as fresh",
    )


class LogConfig(BaseModel):
    """Configuration for logging system."""

    level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", description="Logging level"
    )
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> | "
        "<level>{message}</level>",
        description="Log message format",
    )
    rotation: str = Field(default="10 MB", description="Log file rotation size")
    retention: str = Field(default="1 week", description="Log file retention period")
    log_dir: str = Field(default="logs", description="Directory for log files")
    enable_file_logging: bool = Field(
        default=False, description="Whether to enable file logging"
    )
    enable_console_logging: bool = Field(
        default=True, description="Whether to enable console logging"
    )


class Config(BaseModel):
    """Main configuration object for the simulator."""

    display: DisplayConfig = Field(default_factory=DisplayConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LogConfig = Field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "Config":
        """Create configuration from environment variables."""
        return cls(
            history=HistoryConfig(limit=int(os.getenv("GITSIM_HISTORY_LIMIT", "50"))),
            storage=StorageConfig(
                state_file=os.getenv("GITSIM_STATE_FILE", "gitsim_state.json"),
                autosave=os.getenv("GITSIM_AUTOSAVE", "true").lower()
                in ("1", "true", "yes"),
            ),
            session=SessionConfig(
                fresh_commit_ttl_seconds=float(
                    os.getenv("GITSIM_FRESH_COMMIT_TTL", "1.5")
                )
            ),
            logging=LogConfig(
                level=cast(
                    Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                    os.getenv("GITSIM_LOG_LEVEL", "INFO"),
                ),
                log_dir=os.getenv("GITSIM_LOG_DIR", "logs"),
            ),
        )


# Global configuration instance
config = Config.from_env()
