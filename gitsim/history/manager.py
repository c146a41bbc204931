"""
Undo/redo timeline of full repository snapshots.
"""

from typing import List, Optional

from gitsim.logging import get_gitsim_logger
from gitsim.state.models import RepositoryState

log = get_gitsim_logger("history")


class HistoryManager:
    """
    Bounded past/future stacks of RepositoryState snapshots.

    The top of the past stack is always the current state; the seed snapshot
    is never undone past. Everything stored or handed out is a deep copy.
    """

    def __init__(self, limit: int = 50):
        """
        Initialize the history.

        Args:
            limit: Maximum number of snapshots in the past stack
        """
        self._past: List[RepositoryState] = []
        self._future: List[RepositoryState] = []
        self.limit = limit

    def record(self, snapshot: RepositoryState) -> None:
        """Push a snapshot after a forward action; invalidates redo."""
        self._past.append(snapshot.copy())
        if len(self._past) > self.limit:
            self._past.pop(0)
        self._future = []

    def can_undo(self) -> bool:
        return len(self._past) > 1

    def can_redo(self) -> bool:
        return len(self._future) > 0

    def undo(self, current_snapshot: RepositoryState) -> Optional[RepositoryState]:
        """
        Step back one snapshot.

        Args:
            current_snapshot: The live state, saved for redo

        Returns:
            The previous snapshot, or None if there is nothing to undo
        """
        if not self.can_undo():
            return None
        self._past.pop()
        self._future.append(current_snapshot.copy())
        log.debug("Undo", past=len(self._past), future=len(self._future))
        return self._past[-1].copy()

    def redo(self, current_snapshot: RepositoryState) -> Optional[RepositoryState]:
        """
        Step forward one snapshot.

        Returns:
            The next snapshot, or None if there is nothing to redo
        """
        if not self.can_redo():
            return None
        next_snapshot = self._future.pop()
        self._past.append(next_snapshot)
        if len(self._past) > self.limit:
            self._past.pop(0)
        log.debug("Redo", past=len(self._past), future=len(self._future))
        return next_snapshot.copy()

    def seed(self, initial_snapshot: RepositoryState) -> None:
        """Reset the timeline to a single baseline snapshot."""
        self._past = [initial_snapshot.copy()]
        self._future = []

    @property
    def past_size(self) -> int:
        return len(self._past)

    @property
    def future_size(self) -> int:
        return len(self._future)
