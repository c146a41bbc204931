"""
Git operations engine.

Provides commit, branch, checkout, merge, rebase, cherry-pick, stash and
remote synchronization operations over a StateManager.
"""

from .engine import GitOperations, create_commit_on_branch
from .conflict import ConflictPreview, RESOLUTIONS
from .remote import export_local_commits, import_remote_commits, order_by_readiness

__all__ = [
    "GitOperations",
    "create_commit_on_branch",
    "ConflictPreview",
    "RESOLUTIONS",
    "export_local_commits",
    "import_remote_commits",
    "order_by_readiness",
]
