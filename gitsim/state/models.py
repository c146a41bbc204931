"""
Repository state representation.

Defines the commit graph, branches, stash, simulated remote and tutorial
cursor. Every record serializes to the camelCase dictionaries used in the
saved-state envelope.
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from gitsim.config import Config, config as default_config
from gitsim.errors import StateError
from gitsim.graph.ancestry import index_commits
from gitsim.graph.hashing import generate_hash
from gitsim.graph.layout import create_position


def utc_timestamp() -> str:
    """Current instant as ISO-8601."""
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Commit:
    """
    A node of the local commit graph.

    Attributes:
        id: Opaque 7-character hex identifier
        message: Commit message
        branch: Branch the commit was created on (its display lane)
        parents: 0 (root), 1, or 2 (merge) parent ids
        timestamp: Creation instant, ISO-8601
        col, row, x, y: Display position
        is_merge: Two-parent merge commit
        merge_source: Branch merged in (``origin/<b>`` for pulls)
        is_remote: Imported from the remote by a pull
        rebased_from: Id of the original commit this one replays
    """

    id: str
    message: str
    branch: str
    parents: List[str] = field(default_factory=list)
    timestamp: str = field(default_factory=utc_timestamp)
    col: int = 0
    row: int = 0
    x: int = 0
    y: int = 0
    is_merge: bool = False
    merge_source: Optional[str] = None
    is_remote: bool = False
    rebased_from: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert commit to dictionary for serialization."""
        data: Dict[str, Any] = {
            "id": self.id,
            "message": self.message,
            "branch": self.branch,
            "parents": list(self.parents),
            "timestamp": self.timestamp,
            "col": self.col,
            "row": self.row,
            "x": self.x,
            "y": self.y,
            "isMerge": self.is_merge,
        }
        if self.merge_source is not None:
            data["mergeSource"] = self.merge_source
        if self.is_remote:
            data["isRemote"] = True
        if self.rebased_from is not None:
            data["rebasedFrom"] = self.rebased_from
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Commit":
        """Create commit from dictionary."""
        return cls(
            id=data["id"],
            message=data["message"],
            branch=data["branch"],
            parents=list(data.get("parents", [])),
            timestamp=data.get("timestamp", ""),
            col=data.get("col", 0),
            row=data.get("row", 0),
            x=data.get("x", 0),
            y=data.get("y", 0),
            is_merge=bool(data.get("isMerge", False)),
            merge_source=data.get("mergeSource"),
            is_remote=bool(data.get("isRemote", False)),
            rebased_from=data.get("rebasedFrom"),
        )


@dataclass
class RemoteCommit:
    """A node of the remote graph; no display position."""

    id: str
    message: str
    branch: str
    parents: List[str] = field(default_factory=list)
    timestamp: str = field(default_factory=utc_timestamp)

    @classmethod
    def from_commit(cls, commit: Commit) -> "RemoteCommit":
        return cls(
            id=commit.id,
            message=commit.message,
            branch=commit.branch,
            parents=list(commit.parents),
            timestamp=commit.timestamp,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "message": self.message,
            "branch": self.branch,
            "parents": list(self.parents),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteCommit":
        return cls(
            id=data["id"],
            message=data["message"],
            branch=data["branch"],
            parents=list(data.get("parents", [])),
            timestamp=data.get("timestamp", ""),
        )


@dataclass
class Branch:
    """
    A named, movable pointer to a commit.

    ``row`` is the creation-order index, used for the lane and the palette.
    ``created_from`` and ``created_at`` record the fork point.
    """

    name: str
    head: str
    color: str
    row: int
    created_from: Optional[str] = None
    created_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "head": self.head,
            "color": self.color,
            "row": self.row,
        }
        if self.created_from is not None:
            data["createdFrom"] = self.created_from
        if self.created_at is not None:
            data["createdAt"] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Branch":
        return cls(
            name=data["name"],
            head=data["head"],
            color=data.get("color", ""),
            row=data.get("row", 0),
            created_from=data.get("createdFrom"),
            created_at=data.get("createdAt"),
        )


@dataclass
class StashEntry:
    """A saved-but-uncommitted placeholder."""

    id: str
    message: str
    created_at: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "message": self.message, "createdAt": self.created_at}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StashEntry":
        return cls(
            id=data["id"],
            message=data["message"],
            created_at=data.get("createdAt", ""),
        )


@dataclass
class RemoteState:
    """The simulated ``origin``: an independent commit/branch graph."""

    commits: List[RemoteCommit] = field(default_factory=list)
    branches: Dict[str, Branch] = field(default_factory=dict)

    def has_commit(self, commit_id: str) -> bool:
        return any(commit.id == commit_id for commit in self.commits)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commits": [commit.to_dict() for commit in self.commits],
            "branches": {name: branch.to_dict() for name, branch in self.branches.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RemoteState":
        return cls(
            commits=[RemoteCommit.from_dict(c) for c in data.get("commits", [])],
            branches={
                name: Branch.from_dict(b) for name, b in data.get("branches", {}).items()
            },
        )


@dataclass
class TutorialCursor:
    """Informational copy of the tutorial engine's cursor."""

    active_id: Optional[str] = None
    step_index: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"activeId": self.active_id, "stepIndex": self.step_index}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TutorialCursor":
        return cls(active_id=data.get("activeId"), step_index=data.get("stepIndex", 0))


@dataclass
class RepositoryState:
    """
    Complete simulator state at a point in time.

    This is the unit of transactions, history snapshots and persistence.
    ``commits`` only ever grows, in creation order. ``stash[0]`` is the top
    of the stash.
    """

    commits: List[Commit]
    branches: Dict[str, Branch]
    current_branch: str
    commit_counter: int = 0
    branch_counter: int = 0
    stash: List[StashEntry] = field(default_factory=list)
    remote: RemoteState = field(default_factory=RemoteState)
    remote_tracking: Dict[str, str] = field(default_factory=dict)
    tutorial: TutorialCursor = field(default_factory=TutorialCursor)

    def get_commit(self, commit_id: Optional[str]) -> Optional[Commit]:
        """Return the local commit with the given id, or None."""
        for commit in self.commits:
            if commit.id == commit_id:
                return commit
        return None

    def has_commit(self, commit_id: str) -> bool:
        return self.get_commit(commit_id) is not None

    @property
    def current_head(self) -> Optional[str]:
        """Head of the checked-out branch."""
        branch = self.branches.get(self.current_branch)
        return branch.head if branch else None

    def copy(self) -> "RepositoryState":
        """Deep, independent copy."""
        return copy.deepcopy(self)

    def validate(self) -> List[str]:
        """
        Check structural invariants.

        Returns:
            List of problems, empty when the state is consistent
        """
        problems: List[str] = []
        local = index_commits(self.commits)
        remote = index_commits(self.remote.commits)

        if self.current_branch not in self.branches:
            problems.append(f"current branch '{self.current_branch}' does not exist")
        for branch in self.branches.values():
            if branch.head not in local:
                problems.append(f"branch '{branch.name}' points to unknown commit {branch.head}")
        for branch in self.remote.branches.values():
            if branch.head not in remote:
                problems.append(
                    f"remote branch '{branch.name}' points to unknown commit {branch.head}"
                )
        for graph_name, graph in (("local", local), ("remote", remote)):
            for commit in graph.values():
                for parent_id in commit.parents:
                    if parent_id not in graph:
                        problems.append(
                            f"{graph_name} commit {commit.id} has dangling parent {parent_id}"
                        )
        return problems

    def ensure_valid(self) -> None:
        """Raise StateError when ``validate`` reports problems."""
        problems = self.validate()
        if problems:
            raise StateError("Invalid repository state: " + "; ".join(problems), problems)

    def to_dict(self) -> Dict[str, Any]:
        """Convert state to dictionary for serialization."""
        return {
            "commits": [commit.to_dict() for commit in self.commits],
            "branches": {name: branch.to_dict() for name, branch in self.branches.items()},
            "currentBranch": self.current_branch,
            "commitCounter": self.commit_counter,
            "branchCounter": self.branch_counter,
            "stash": [entry.to_dict() for entry in self.stash],
            "remote": self.remote.to_dict(),
            "remoteTracking": dict(self.remote_tracking),
            "tutorial": self.tutorial.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RepositoryState":
        """Create state from dictionary."""
        return cls(
            commits=[Commit.from_dict(c) for c in data["commits"]],
            branches={name: Branch.from_dict(b) for name, b in data["branches"].items()},
            current_branch=data["currentBranch"],
            commit_counter=data.get("commitCounter", 0),
            branch_counter=data.get("branchCounter", 0),
            stash=[StashEntry.from_dict(s) for s in data.get("stash", [])],
            remote=RemoteState.from_dict(data.get("remote") or {}),
            remote_tracking=dict(data.get("remoteTracking", {})),
            tutorial=TutorialCursor.from_dict(data.get("tutorial") or {}),
        )


def remote_from_local(state: RepositoryState) -> RemoteState:
    """Mirror the local graph into a fresh remote."""
    return RemoteState(
        commits=[RemoteCommit.from_commit(commit) for commit in state.commits],
        branches={
            branch.name: Branch(
                name=branch.name, head=branch.head, color=branch.color, row=branch.row
            )
            for branch in state.branches.values()
        },
    )


def create_initial_state(cfg: Optional[Config] = None) -> RepositoryState:
    """
    Build the starting repository.

    One root commit on ``main``, mirrored to the remote, with
    ``origin/main`` tracking it.
    """
    cfg = cfg or default_config
    position = create_position(0, 0, cfg.display)
    root = Commit(
        id=generate_hash(),
        message="Initial commit",
        branch="main",
        parents=[],
        col=position.col,
        row=position.row,
        x=position.x,
        y=position.y,
    )
    state = RepositoryState(
        commits=[root],
        branches={
            "main": Branch(
                name="main", head=root.id, color=cfg.display.branch_colors[0], row=0
            )
        },
        current_branch="main",
        commit_counter=1,
        branch_counter=1,
    )
    state.remote = remote_from_local(state)
    state.remote_tracking = {"origin/main": root.id}
    return state
