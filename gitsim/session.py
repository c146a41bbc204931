"""
Interactive simulator session.

Wires the state manager, operations engine, undo/redo history, tutorial
engine and optional saved-state storage together. User intents arrive as
command names plus arguments; after every successful operation the session
records history, saves, marks fresh commits and evaluates tutorial progress.
"""

import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from gitsim.config import Config, config as default_config
from gitsim.errors import UnknownCommandError
from gitsim.history import HistoryManager
from gitsim.logging import get_gitsim_logger
from gitsim.operations import ConflictPreview, GitOperations
from gitsim.persistence import StateStorage
from gitsim.results import OperationResult
from gitsim.state import RepositoryState, StateManager, create_initial_state
from gitsim.tutorial import StepProgress, TutorialEngine, TutorialStart

log = get_gitsim_logger("session")


class FreshCommits:
    """
    Short-lived side table of recently created commit ids.

    Renderers use it to animate new nodes. It is never serialized and never
    consulted by graph algorithms.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._expires: Dict[str, float] = {}

    def mark(self, commit_ids: Iterable[str]) -> None:
        deadline = self._clock() + self.ttl_seconds
        for commit_id in commit_ids:
            self._expires[commit_id] = deadline

    def expire(self) -> None:
        now = self._clock()
        self._expires = {cid: t for cid, t in self._expires.items() if t > now}

    def is_fresh(self, commit_id: str) -> bool:
        self.expire()
        return commit_id in self._expires

    def active(self) -> Set[str]:
        self.expire()
        return set(self._expires)

    def clear(self) -> None:
        self._expires = {}


@dataclass
class ActionOutcome:
    """Result of one dispatched intent."""

    result: OperationResult
    progress: Optional[StepProgress] = None
    new_commits: List[str] = field(default_factory=list)


class Simulator:
    """
    One simulator session.

    Example:
        >>> sim = Simulator()
        >>> sim.run("branch", "feature").result.command
        'git checkout -b feature'
    """

    def __init__(
        self,
        cfg: Optional[Config] = None,
        storage: Optional[StateStorage] = None,
        tutorial_engine: Optional[TutorialEngine] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the session.

        Args:
            cfg: Configuration (defaults to the global config)
            storage: Saved-state storage; the saved state is restored if valid
            tutorial_engine: Engine to use (a default one over the built-in catalog)
            clock: Time source for the fresh-commit table
        """
        self.config = cfg or default_config
        self.storage = storage

        initial = storage.load_state() if storage is not None else None
        if initial is None:
            initial = create_initial_state(self.config)
        else:
            log.info("Restored saved state", commits=len(initial.commits))

        self.state_manager = StateManager(initial)
        self.operations = GitOperations(self.state_manager, self.config)
        self.history = HistoryManager(limit=self.config.history.limit)
        self.history.seed(self.state_manager.get_snapshot())
        self.tutorials = tutorial_engine or TutorialEngine()
        self.fresh = FreshCommits(self.config.session.fresh_commit_ttl_seconds, clock)

        self._actions: Dict[str, Callable[..., OperationResult]] = {
            "commit": self.operations.commit,
            "branch": self.operations.branch,
            "checkout": self.operations.checkout,
            "merge": self.operations.merge,
            "rebase": self.operations.rebase,
            "cherry-pick": self.operations.cherry_pick,
            "stash-save": self.operations.stash_save,
            "stash-apply": self.operations.stash_apply,
            "stash-pop": self.operations.stash_pop,
            "stash-drop": self.operations.stash_drop,
            "fetch": self.operations.fetch,
            "push": self.operations.push,
            "pull": self.operations.pull,
            "remote-commit": self.operations.remote_commit,
            "resolve-conflict": self.operations.resolve_conflict,
        }

    @property
    def state(self) -> RepositoryState:
        """Snapshot of the current repository state."""
        return self.state_manager.get_snapshot()

    @property
    def actions(self) -> List[str]:
        return sorted(self._actions) + ["reset"]

    def subscribe(self, listener: Callable[[RepositoryState], None]) -> Callable[[], None]:
        return self.state_manager.subscribe(listener)

    def run(self, action: str, *args: Any, **kwargs: Any) -> ActionOutcome:
        """
        Dispatch one intent.

        Args:
            action: Command name, e.g. "commit", "branch", "stash-pop"
            *args: Positional arguments of the operation
            **kwargs: Keyword arguments of the operation

        Returns:
            ActionOutcome with the operation result and tutorial progress

        Raises:
            UnknownCommandError: If ``action`` names no operation
        """
        if action == "reset":
            return ActionOutcome(result=self.reset())

        handler = self._actions.get(action)
        if handler is None:
            raise UnknownCommandError(action)

        before = {commit.id for commit in self.state_manager.get_snapshot().commits}
        result = handler(*args, **kwargs)
        if result.abort:
            return ActionOutcome(result=result)

        snapshot = self.state_manager.get_snapshot()
        new_commits = [c.id for c in snapshot.commits if c.id not in before]
        self.fresh.mark(new_commits)

        progress = self.tutorials.evaluate(snapshot)
        if progress is not None:
            snapshot.tutorial = self.tutorials.cursor
            self.state_manager.replace_state(snapshot, notify=False)

        self.history.record(snapshot)
        self._autosave(snapshot)
        return ActionOutcome(result=result, progress=progress, new_commits=new_commits)

    def preview_conflict(self, source_branch: str) -> ConflictPreview:
        return self.operations.preview_conflict(source_branch)

    def undo(self) -> OperationResult:
        """Restore the previous snapshot."""
        previous = self.history.undo(self.state_manager.get_snapshot())
        if previous is None:
            return OperationResult.failure("Nothing to undo.")
        self.state_manager.replace_state(previous)
        self._autosave(previous)
        return OperationResult.success("undo", "git reset --hard HEAD@{1}", full_render=True)

    def redo(self) -> OperationResult:
        """Restore the snapshot undone most recently."""
        following = self.history.redo(self.state_manager.get_snapshot())
        if following is None:
            return OperationResult.failure("Nothing to redo.")
        self.state_manager.replace_state(following)
        self._autosave(following)
        return OperationResult.success("redo", "git reflog", full_render=True)

    def reset(self) -> OperationResult:
        """Start over from a fresh repository; history and tutorial are reset."""
        result = self.operations.reset_all()
        self.tutorials.stop()
        self.fresh.clear()
        snapshot = self.state_manager.get_snapshot()
        self.history.seed(snapshot)
        self._autosave(snapshot)
        return result

    def start_tutorial(self, tutorial_id: str) -> TutorialStart:
        started = self.tutorials.start(tutorial_id)
        if started.ok:
            self._mirror_tutorial_cursor()
        return started

    def stop_tutorial(self) -> None:
        self.tutorials.stop()
        self._mirror_tutorial_cursor()

    def _mirror_tutorial_cursor(self) -> None:
        snapshot = self.state_manager.get_snapshot()
        snapshot.tutorial = self.tutorials.cursor
        self.state_manager.replace_state(snapshot, notify=False)
        self._autosave(snapshot)

    def _autosave(self, snapshot: RepositoryState) -> None:
        if self.storage is not None and self.config.storage.autosave:
            self.storage.save_state(snapshot)
