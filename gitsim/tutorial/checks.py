"""
Step predicates for the built-in tutorials.

Each predicate is a pure function of a RepositoryState. The registry is keyed
by ``(tutorial_id, step_id)`` and kept apart from the engine so predicates
can be swapped or tested in isolation.
"""

from typing import Callable, Dict, Optional, Tuple

from gitsim.graph.ancestry import get_branch_commits
from gitsim.state.models import RepositoryState

Check = Callable[[RepositoryState], bool]


def branch_exists(name: str) -> Check:
    return lambda state: name in state.branches


def branch_has_commits(name: str, count: int) -> Check:
    """At least ``count`` commits were created in the lane of ``name``."""
    return lambda state: len(get_branch_commits(state.commits, name)) >= count


def on_branch(name: str) -> Check:
    return lambda state: state.current_branch == name


def head_merged_from(branch: str, source: str) -> Check:
    """The head of ``branch`` is a merge commit of ``source``."""

    def check(state: RepositoryState) -> bool:
        target = state.branches.get(branch)
        commit = state.get_commit(target.head) if target else None
        return bool(commit and commit.is_merge and commit.merge_source == source)

    return check


def has_rebased_commit(branch: str) -> Check:
    return lambda state: any(
        commit.branch == branch and commit.rebased_from for commit in state.commits
    )


def has_commit_with_prefix(branch: str, prefix: str) -> Check:
    return lambda state: any(
        commit.branch == branch and commit.message.startswith(prefix)
        for commit in state.commits
    )


def _remote_head(state: RepositoryState, name: str) -> Optional[str]:
    branch = state.remote.branches.get(name)
    return branch.head if branch else None


def _local_head(state: RepositoryState, name: str) -> Optional[str]:
    branch = state.branches.get(name)
    return branch.head if branch else None


def remote_in_sync(name: str) -> Check:
    return lambda state: _remote_head(state, name) == _local_head(state, name)


def remote_out_of_sync(name: str) -> Check:
    return lambda state: _remote_head(state, name) != _local_head(state, name)


def remote_head_present_locally(name: str) -> Check:
    return lambda state: state.has_commit(_remote_head(state, name) or "")


def stash_popped_onto(branch: str) -> Check:
    prefixed = has_commit_with_prefix(branch, "WIP (stash):")
    return lambda state: not state.stash and prefixed(state)


CHECKS: Dict[Tuple[str, str], Check] = {
    ("feature-flow", "create-feature"): branch_exists("feature"),
    ("feature-flow", "feature-commits"): branch_has_commits("feature", 3),
    ("feature-flow", "checkout-main"): on_branch("main"),
    ("feature-flow", "merge-feature"): head_merged_from("main", "feature"),
    ("rebase-flow", "create-refactor"): branch_exists("refactor"),
    ("rebase-flow", "refactor-commits"): branch_has_commits("refactor", 2),
    ("rebase-flow", "checkout-main-again"): on_branch("main"),
    ("rebase-flow", "main-commit"): branch_has_commits("main", 2),
    ("rebase-flow", "rebase-refactor"): has_rebased_commit("refactor"),
    ("cherry-pick-flow", "cp-create-hotfix"): branch_exists("hotfix"),
    ("cherry-pick-flow", "cp-hotfix-commits"): branch_has_commits("hotfix", 2),
    ("cherry-pick-flow", "cp-checkout-main"): on_branch("main"),
    ("cherry-pick-flow", "cp-cherry-pick"): has_commit_with_prefix("main", "Cherry-pick:"),
    ("stash-flow", "st-commit-first"): branch_has_commits("main", 2),
    ("stash-flow", "st-stash-save"): lambda state: len(state.stash) >= 1,
    ("stash-flow", "st-create-bugfix"): branch_exists("bugfix"),
    ("stash-flow", "st-bugfix-commit"): branch_has_commits("bugfix", 1),
    ("stash-flow", "st-checkout-main-back"): on_branch("main"),
    ("stash-flow", "st-stash-pop"): stash_popped_onto("main"),
    ("remote-collab", "rc-push-main"): remote_in_sync("main"),
    ("remote-collab", "rc-simulate-remote"): remote_out_of_sync("main"),
    ("remote-collab", "rc-pull-changes"): remote_head_present_locally("main"),
    ("remote-collab", "rc-local-commit"): remote_out_of_sync("main"),
    ("remote-collab", "rc-push-again"): remote_in_sync("main"),
}


def get_check(
    tutorial_id: str, step_id: str, registry: Optional[Dict[Tuple[str, str], Check]] = None
) -> Optional[Check]:
    """Look up the predicate for one step, None if the step has none."""
    return (CHECKS if registry is None else registry).get((tutorial_id, step_id))
