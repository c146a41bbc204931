"""
Canned teaching content: sample commit messages, conflict examples and the
explanation shown after each operation.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

COMMIT_MESSAGES: List[str] = [
    "Initial commit",
    "Add feature implementation",
    "Fix bug in authentication",
    "Update dependencies",
    "Refactor database queries",
    "Add unit tests",
    "Improve error handling",
    "Update documentation",
    "Optimize performance",
    "Add input validation",
    "Fix memory leak",
    "Update API endpoints",
    "Add caching layer",
    "Fix CSS styling issues",
    "Add logging functionality",
]


@dataclass(frozen=True)
class ConflictExample:
    """Two versions of the same snippet, as shown in the conflict demo."""

    current: str
    incoming: str


CONFLICT_EXAMPLES: List[ConflictExample] = [
    ConflictExample(
        current='function greet(name) {\n  return "Hello, " + name;\n}',
        incoming="function greet(name) {\n  return `Welcome, ${name}!`;\n}",
    ),
    ConflictExample(
        current='const API_URL = "http://localhost:3000";',
        incoming='const API_URL = "https://api.example.com";',
    ),
    ConflictExample(
        current="button {\n  color: blue;\n  padding: 10px;\n}",
        incoming="button {\n  color: green;\n  padding: 12px 20px;\n}",
    ),
]


@dataclass(frozen=True)
class Explanation:
    icon: str
    text: str


EXPLANATIONS: Dict[str, Explanation] = {
    "welcome": Explanation(
        "TIP",
        "Welcome! This simulator helps you understand Git concepts. Make commits, "
        "create feature branches and try the tutorials for guided workflows.",
    ),
    "commit": Explanation(
        "OK",
        "Commit created! A commit is a snapshot of your code at a point in time. "
        "Each commit has a unique hash and points to its parent, forming a chain.",
    ),
    "branch": Explanation(
        "BR",
        "Branch created! A branch is just a lightweight pointer to a commit. "
        "Creating one is nearly instant because Git copies no files.",
    ),
    "checkout": Explanation(
        "SW",
        "Switched branches! HEAD tells Git which branch you're on. Switching "
        "moves HEAD and updates your working directory to that branch's tip.",
    ),
    "merge": Explanation(
        "MG",
        "Merge complete! A merge commit has two parents, combining the history "
        "of both branches.",
    ),
    "conflict": Explanation(
        "WARN",
        "Merge conflict resolved! Conflicts happen when both branches modify the "
        "same lines. Git marks the file with <<<<<<< / ======= / >>>>>>> markers "
        "and asks you to resolve it manually.",
    ),
    "rebase": Explanation(
        "RB",
        "Rebase complete! Rebase replays your commits on top of the target branch "
        "as brand-new commits, producing a linear history. Never rebase commits "
        "that have been pushed to a shared remote.",
    ),
    "cherry-pick": Explanation(
        "CP",
        "Cherry-pick complete! The changes of a single commit were copied onto "
        "your current branch as a new commit with a different hash.",
    ),
    "stash-save": Explanation(
        "ST",
        "Changes stashed! The stash is a LIFO stack of saved, uncommitted work.",
    ),
    "stash-apply": Explanation(
        "ST",
        "Stash applied! The entry stays on the stack so you can apply it again.",
    ),
    "stash-pop": Explanation(
        "ST",
        "Stash popped! Like apply followed by drop: the entry was removed.",
    ),
    "stash-drop": Explanation(
        "ST",
        "Stash dropped. The top entry was removed without applying it.",
    ),
    "fetch": Explanation(
        "RF",
        "Fetch complete! git fetch downloads remote commits but does not modify "
        "your local branches; it only updates remote-tracking branches like "
        "origin/main.",
    ),
    "push": Explanation(
        "RP",
        "Push complete! Your local commits were uploaded to the remote. If the "
        "remote has diverged you must pull first.",
    ),
    "pull": Explanation(
        "RL",
        "Pull complete! git pull is git fetch followed by git merge.",
    ),
    "undo": Explanation(
        "UN",
        "Undo complete! The previous state was restored. In real Git you'd use "
        "git reset, git revert or git reflog.",
    ),
    "redo": Explanation(
        "RE",
        "Redo complete! The next state was restored. git reflog can recover "
        "almost any previous state.",
    ),
    "tutorial": Explanation(
        "GO",
        "Tutorial mode active. Each step is checked automatically as you work.",
    ),
    "conflict-setup": Explanation(
        "TIP",
        "Tip: to see a conflict demo, create a branch, add commits to both "
        "branches, then merge with the conflict demo.",
    ),
}


def describe(tag: Optional[str], data: Optional[Mapping[str, Any]] = None) -> str:
    """
    Explanation text for a result tag.

    Merge results carrying ``source`` and ``target`` get a specific sentence.
    Unknown tags yield an empty string.
    """
    data = data or {}
    if tag == "merge" and data.get("source") and data.get("target"):
        return (
            f"Merge complete! Branch {data['source']} has been merged into "
            f"{data['target']}. The merge commit has two parents, combining both "
            "branches' history."
        )
    explanation = EXPLANATIONS.get(tag or "")
    if explanation is None:
        return ""
    return explanation.text
