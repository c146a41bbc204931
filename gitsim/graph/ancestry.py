"""
Ancestry algorithms over a commit graph.

All functions accept any sequence of commit-like records exposing ``id`` and
``parents`` (local commits and the slimmer remote commits both qualify).
Missing or None ids are treated as dead ends, never as errors.
"""

from collections import deque
from typing import Dict, List, Optional, Protocol, Sequence, Set, TypeVar


class CommitLike(Protocol):
    id: str
    parents: List[str]


C = TypeVar("C", bound=CommitLike)


def index_commits(commits: Sequence[C]) -> Dict[str, C]:
    """Map commit id to commit record."""
    return {commit.id: commit for commit in commits}


def get_commit_by_id(commits: Sequence[C], commit_id: Optional[str]) -> Optional[C]:
    """Return the commit with the given id, or None."""
    for commit in commits:
        if commit.id == commit_id:
            return commit
    return None


def collect_ancestors(commits: Sequence[CommitLike], start_id: Optional[str]) -> Set[str]:
    """
    Collect every commit id reachable from ``start_id`` through parent links.

    The result includes ``start_id`` itself (when it is not None), so a root
    commit yields a singleton set. Ids that do not resolve are kept in the
    result but not expanded.

    Args:
        commits: Commit records of one graph
        start_id: Commit to start from

    Returns:
        Set of ancestor ids, inclusive
    """
    by_id = index_commits(commits)
    visited: Set[str] = set()
    stack = [start_id]
    while stack:
        current_id = stack.pop()
        if not current_id or current_id in visited:
            continue
        visited.add(current_id)
        commit = by_id.get(current_id)
        if commit is not None:
            stack.extend(commit.parents)
    return visited


def is_ancestor(
    commits: Sequence[CommitLike], ancestor_id: Optional[str], descendant_id: Optional[str]
) -> bool:
    """True iff ``ancestor_id`` is reachable from ``descendant_id`` (inclusive)."""
    return ancestor_id in collect_ancestors(commits, descendant_id)


def find_common_ancestor(
    commits: Sequence[CommitLike], commit_a_id: Optional[str], commit_b_id: Optional[str]
) -> Optional[str]:
    """
    Find a common ancestor of two commits.

    Walks breadth-first over the ancestry of ``commit_b_id`` and returns the
    first id that is also an ancestor of ``commit_a_id``. With several merge
    paths this is not necessarily the lowest common ancestor.

    Returns:
        A common ancestor id, or None when the histories are disjoint
    """
    ancestors_a = collect_ancestors(commits, commit_a_id)
    by_id = index_commits(commits)
    seen: Set[str] = set()
    queue = deque([commit_b_id])
    while queue:
        current_id = queue.popleft()
        if not current_id or current_id in seen:
            continue
        seen.add(current_id)
        if current_id in ancestors_a:
            return current_id
        commit = by_id.get(current_id)
        if commit is not None:
            queue.extend(commit.parents)
    return None


def first_parent_chain(commits: Sequence[C], head_id: Optional[str]) -> List[C]:
    """
    List commits along first-parent links, newest first.

    Stops at a root commit or at a parent that does not resolve.
    """
    by_id = index_commits(commits)
    chain: List[C] = []
    seen: Set[str] = set()
    current = by_id.get(head_id) if head_id else None
    while current is not None and current.id not in seen:
        chain.append(current)
        seen.add(current.id)
        if not current.parents:
            break
        current = by_id.get(current.parents[0])
    return chain


def get_branch_commits(commits: Sequence[C], branch_name: str) -> List[C]:
    """Commits created on (displayed in the lane of) ``branch_name``."""
    return [commit for commit in commits if getattr(commit, "branch", None) == branch_name]
