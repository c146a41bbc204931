"""
Tutorial progress tracking.

The engine holds the active tutorial and a step cursor. After each
operation it is handed the latest repository snapshot; when the current
step's predicate holds, the cursor advances by exactly one step.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from gitsim.logging import get_gitsim_logger
from gitsim.state.models import RepositoryState, TutorialCursor

from .catalog import TUTORIALS, Tutorial, TutorialStep, find_tutorial
from .checks import CHECKS, Check, get_check

log = get_gitsim_logger("tutorial")


@dataclass
class TutorialStart:
    """Outcome of ``TutorialEngine.start``."""

    tutorial: Optional[Tutorial] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class StepProgress:
    """A step was completed; ``next_step`` is None when the tutorial is done."""

    completed_step: str
    next_step: Optional[TutorialStep]

    @property
    def finished(self) -> bool:
        return self.next_step is None


class TutorialEngine:
    """
    Per-tutorial step cursor.

    Progress is monotonic: steps are never skipped and never re-evaluated
    once passed.
    """

    def __init__(
        self,
        tutorials: Optional[List[Tutorial]] = None,
        checks: Optional[Dict[Tuple[str, str], Check]] = None,
    ):
        self.tutorials = tutorials if tutorials is not None else TUTORIALS
        self.checks = checks if checks is not None else CHECKS
        self.active_id: Optional[str] = None
        self.step_index = 0

    def start(self, tutorial_id: str) -> TutorialStart:
        """
        Activate a tutorial from its first step.

        Returns:
            TutorialStart with the tutorial, or an error if the id is unknown
        """
        tutorial = find_tutorial(tutorial_id, self.tutorials)
        if tutorial is None:
            return TutorialStart(error="Tutorial not found.")
        self.active_id = tutorial_id
        self.step_index = 0
        log.info(f"Started tutorial {tutorial_id}")
        return TutorialStart(tutorial=tutorial)

    def stop(self) -> None:
        self.active_id = None
        self.step_index = 0

    def get_active_tutorial(self) -> Optional[Tutorial]:
        if not self.active_id:
            return None
        return find_tutorial(self.active_id, self.tutorials)

    @property
    def current_step(self) -> Optional[TutorialStep]:
        tutorial = self.get_active_tutorial()
        return tutorial.step_at(self.step_index) if tutorial else None

    @property
    def cursor(self) -> TutorialCursor:
        """The cursor as stored (informationally) in repository state."""
        return TutorialCursor(active_id=self.active_id, step_index=self.step_index)

    def evaluate(self, state: RepositoryState) -> Optional[StepProgress]:
        """
        Check the current step against ``state``.

        Returns:
            StepProgress if the step was completed, otherwise None
        """
        tutorial = self.get_active_tutorial()
        if tutorial is None:
            return None

        step = tutorial.step_at(self.step_index)
        if step is None:
            return None

        check = get_check(tutorial.id, step.id, self.checks)
        if check is None or not check(state):
            return None

        self.step_index += 1
        progress = StepProgress(
            completed_step=step.id, next_step=tutorial.step_at(self.step_index)
        )
        log.info(
            f"Completed step {step.id}",
            tutorial=tutorial.id,
            finished=progress.finished,
        )
        return progress
