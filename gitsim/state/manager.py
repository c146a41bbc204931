"""
Owner of the single authoritative repository state.

All changes go through ``mutate`` transactions: the mutator works on a
private deep copy and either returns an aborted result (the copy is
discarded) or any other result (the copy becomes the new state and
subscribers receive a snapshot).
"""

from typing import Callable, List, Optional

from gitsim.logging import get_gitsim_logger
from gitsim.results import OperationResult

from .models import RepositoryState

Listener = Callable[[RepositoryState], None]
Mutator = Callable[[RepositoryState], Optional[OperationResult]]

log = get_gitsim_logger("state")


class StateManager:
    """
    Transactional holder of a RepositoryState.

    Readers only ever see deep copies, so no caller can alias the live state.
    """

    def __init__(self, initial_state: RepositoryState):
        self._state = initial_state.copy()
        self._listeners: List[Listener] = []

    def get_state(self) -> RepositoryState:
        """Deep copy of the current state."""
        return self._state.copy()

    def get_snapshot(self) -> RepositoryState:
        """Deep copy of the current state, for history and renderers."""
        return self._state.copy()

    def replace_state(self, next_state: RepositoryState, notify: bool = True) -> None:
        """
        Install a whole new state (reset, undo, redo, load).

        Raises:
            StateError: If the new state violates a structural invariant
        """
        next_state.ensure_valid()
        self._state = next_state.copy()
        log.debug("State replaced", commits=len(self._state.commits))
        if notify:
            self._notify()

    def mutate(self, mutator: Mutator) -> OperationResult:
        """
        Run ``mutator`` against a draft copy as one all-or-nothing transaction.

        Args:
            mutator: Receives the draft, may modify it freely, returns a result

        Returns:
            The mutator's result (an empty successful result if it returned None)
        """
        draft = self._state.copy()
        result = mutator(draft) or OperationResult()

        if result.abort:
            log.debug("Transaction aborted", error=result.error)
            return result

        self._state = draft
        self._notify()
        return result

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every change.

        Returns:
            Callable that unregisters the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.get_state())
