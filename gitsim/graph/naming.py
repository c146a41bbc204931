"""Branch-name validation following git's ref-name rules (simplified)."""

import re
from dataclasses import dataclass
from typing import Container, Optional

BRANCH_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._/-]*$")


@dataclass(frozen=True)
class BranchNameValidation:
    """Outcome of a branch-name check."""

    valid: bool
    error: str = ""


def validate_branch_name(
    name: Optional[str], branches: Container[str]
) -> BranchNameValidation:
    """
    Check a proposed branch name.

    Rules are applied in order and the first failure is reported. Never
    raises; the reason is returned in ``error``.

    Args:
        name: Proposed branch name
        branches: Existing branch names

    Returns:
        BranchNameValidation with ``valid`` and a human-readable ``error``
    """
    if not name:
        return BranchNameValidation(False, "Branch name cannot be empty.")

    if name in branches:
        return BranchNameValidation(False, "Branch already exists.")

    if not BRANCH_NAME_PATTERN.match(name):
        return BranchNameValidation(
            False, 'Use letters, numbers, ".", "_", "-" and "/".'
        )

    if name.endswith("/") or name.endswith(".lock"):
        return BranchNameValidation(
            False, 'Branch name cannot end with "/" or ".lock".'
        )

    if ".." in name or "//" in name or "@{" in name:
        return BranchNameValidation(
            False, 'Branch name cannot contain "..", "//", or "@{".'
        )

    if name.startswith("-"):
        return BranchNameValidation(False, 'Branch name cannot start with "-".')

    return BranchNameValidation(True)
