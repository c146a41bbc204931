"""
Built-in guided tutorials.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TutorialStep:
    """One instruction of a tutorial."""

    id: str
    description: str


@dataclass(frozen=True)
class Tutorial:
    """A named, ordered sequence of steps."""

    id: str
    title: str
    steps: List[TutorialStep] = field(default_factory=list)

    def step_at(self, index: int) -> Optional[TutorialStep]:
        if 0 <= index < len(self.steps):
            return self.steps[index]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "steps": [{"id": s.id, "description": s.description} for s in self.steps],
        }


TUTORIALS: List[Tutorial] = [
    Tutorial(
        id="feature-flow",
        title="Feature Branch Flow",
        steps=[
            TutorialStep("create-feature", 'Create a branch named "feature".'),
            TutorialStep("feature-commits", 'Make 3 commits on "feature".'),
            TutorialStep("checkout-main", 'Switch back to "main".'),
            TutorialStep("merge-feature", 'Merge "feature" into "main".'),
        ],
    ),
    Tutorial(
        id="rebase-flow",
        title="Rebase Practice",
        steps=[
            TutorialStep("create-refactor", 'Create a branch named "refactor".'),
            TutorialStep("refactor-commits", 'Make 2 commits on "refactor".'),
            TutorialStep("checkout-main-again", 'Switch back to "main".'),
            TutorialStep("main-commit", 'Make 1 commit on "main".'),
            TutorialStep(
                "rebase-refactor", 'Switch to "refactor" and rebase onto "main".'
            ),
        ],
    ),
    Tutorial(
        id="cherry-pick-flow",
        title="Cherry-pick a Hotfix",
        steps=[
            TutorialStep("cp-create-hotfix", 'Create a branch named "hotfix".'),
            TutorialStep("cp-hotfix-commits", 'Make 2 commits on "hotfix".'),
            TutorialStep("cp-checkout-main", 'Switch back to "main".'),
            TutorialStep(
                "cp-cherry-pick", 'Cherry-pick a commit from "hotfix" onto "main".'
            ),
        ],
    ),
    Tutorial(
        id="stash-flow",
        title="Stash Workflow",
        steps=[
            TutorialStep("st-commit-first", 'Make a commit on "main".'),
            TutorialStep("st-stash-save", "Save changes to the stash."),
            TutorialStep("st-create-bugfix", 'Create a branch named "bugfix".'),
            TutorialStep("st-bugfix-commit", 'Make a commit on "bugfix".'),
            TutorialStep("st-checkout-main-back", 'Switch back to "main".'),
            TutorialStep("st-stash-pop", "Pop the stash to restore your saved work."),
        ],
    ),
    Tutorial(
        id="remote-collab",
        title="Remote Collaboration",
        steps=[
            TutorialStep("rc-push-main", 'Push "main" to the remote.'),
            TutorialStep(
                "rc-simulate-remote",
                "Simulate a remote commit (another developer pushes).",
            ),
            TutorialStep("rc-pull-changes", 'Pull remote changes into "main".'),
            TutorialStep("rc-local-commit", 'Make a local commit on "main".'),
            TutorialStep("rc-push-again", "Push your new commit to the remote."),
        ],
    ),
]


def find_tutorial(tutorial_id: str, tutorials: Optional[List[Tutorial]] = None) -> Optional[Tutorial]:
    for tutorial in tutorials if tutorials is not None else TUTORIALS:
        if tutorial.id == tutorial_id:
            return tutorial
    return None
