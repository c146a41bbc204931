"""
Helpers for moving commits between the local graph and the simulated remote.
"""

from typing import Dict, List, Set

from gitsim.config import DisplayConfig
from gitsim.graph.ancestry import collect_ancestors
from gitsim.graph.layout import create_position, next_column
from gitsim.state.models import Commit, RemoteCommit, RepositoryState

# Upper bound on readiness passes when ordering imported commits
MAX_IMPORT_PASSES = 1000


def order_by_readiness(pending: Dict[str, RemoteCommit], known_ids: Set[str]) -> List[RemoteCommit]:
    """
    Order commits so that every commit follows all of its parents.

    Repeatedly scans ``pending`` and places each commit whose parents are all
    in ``known_ids`` or already placed. The scan stops after
    ``MAX_IMPORT_PASSES`` passes or once a pass places nothing; commits whose
    parents never become available are left out.
    """
    remaining = dict(pending)
    placed_ids: Set[str] = set()
    ordered: List[RemoteCommit] = []
    passes = 0
    while remaining and passes < MAX_IMPORT_PASSES:
        passes += 1
        progress = False
        for commit_id, commit in list(remaining.items()):
            if all(p in known_ids or p in placed_ids for p in commit.parents):
                ordered.append(commit)
                placed_ids.add(commit_id)
                del remaining[commit_id]
                progress = True
        if not progress:
            break
    return ordered


def import_remote_commits(
    draft: RepositoryState,
    remote_head_id: str,
    branch_name: str,
    display: DisplayConfig,
) -> List[Commit]:
    """
    Copy the remote commits reachable from ``remote_head_id`` that the local
    graph lacks.

    Imported commits keep their ids, messages, parents and timestamps, are
    laid out in the lane of ``branch_name`` and flagged ``is_remote``.

    Returns:
        The imported commits, parents first
    """
    local_ids = {commit.id for commit in draft.commits}
    if remote_head_id in local_ids:
        return []

    remote_by_id = {commit.id: commit for commit in draft.remote.commits}
    pending: Dict[str, RemoteCommit] = {}
    stack = [remote_head_id]
    while stack:
        current_id = stack.pop()
        if not current_id or current_id in local_ids or current_id in pending:
            continue
        commit = remote_by_id.get(current_id)
        if commit is None:
            continue
        pending[current_id] = commit
        stack.extend(p for p in commit.parents if p and p not in local_ids)

    row = draft.branches[branch_name].row
    imported: List[Commit] = []
    for remote_commit in order_by_readiness(pending, local_ids):
        position = create_position(next_column(draft.commits), row, display)
        commit = Commit(
            id=remote_commit.id,
            message=remote_commit.message,
            branch=branch_name,
            parents=list(remote_commit.parents),
            timestamp=remote_commit.timestamp,
            col=position.col,
            row=position.row,
            x=position.x,
            y=position.y,
            is_remote=True,
        )
        draft.commits.append(commit)
        imported.append(commit)
    return imported


def export_local_commits(draft: RepositoryState, local_head_id: str) -> List[RemoteCommit]:
    """
    Copy every ancestor of ``local_head_id`` missing from the remote graph.

    Commits are sent in local creation order, which always places parents
    before children.

    Returns:
        The commits appended to the remote
    """
    ancestors = collect_ancestors(draft.commits, local_head_id)
    remote_ids = {commit.id for commit in draft.remote.commits}
    sent: List[RemoteCommit] = []
    for commit in draft.commits:
        if commit.id in ancestors and commit.id not in remote_ids:
            remote_commit = RemoteCommit.from_commit(commit)
            draft.remote.commits.append(remote_commit)
            remote_ids.add(commit.id)
            sent.append(remote_commit)
    return sent
