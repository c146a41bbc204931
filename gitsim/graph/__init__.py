"""
Identifier and graph utilities.

Pure functions, no state: hash generation, ancestry traversal, branch-name
validation and layout helpers.
"""

from .hashing import generate_hash, random_from
from .ancestry import (
    collect_ancestors,
    find_common_ancestor,
    first_parent_chain,
    get_branch_commits,
    get_commit_by_id,
    index_commits,
    is_ancestor,
)
from .naming import BranchNameValidation, validate_branch_name
from .layout import Position, branch_color, create_position, next_column, palette_color

__all__ = [
    "generate_hash",
    "random_from",
    "collect_ancestors",
    "find_common_ancestor",
    "first_parent_chain",
    "get_branch_commits",
    "get_commit_by_id",
    "index_commits",
    "is_ancestor",
    "BranchNameValidation",
    "validate_branch_name",
    "Position",
    "branch_color",
    "create_position",
    "next_column",
    "palette_color",
]
