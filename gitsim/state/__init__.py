"""
Repository state model and its transactional manager.
"""

from .models import (
    Branch,
    Commit,
    RemoteCommit,
    RemoteState,
    RepositoryState,
    StashEntry,
    TutorialCursor,
    create_initial_state,
    remote_from_local,
    utc_timestamp,
)
from .manager import StateManager

__all__ = [
    "Branch",
    "Commit",
    "RemoteCommit",
    "RemoteState",
    "RepositoryState",
    "StashEntry",
    "TutorialCursor",
    "create_initial_state",
    "remote_from_local",
    "utc_timestamp",
    "StateManager",
]
