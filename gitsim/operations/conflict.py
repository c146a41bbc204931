"""
Cosmetic merge-conflict demo.

No text is merged: the preview shows a canned pair of snippets and any
resolution simply performs the normal merge.
"""

from dataclasses import dataclass

from gitsim.content import CONFLICT_EXAMPLES
from gitsim.graph.hashing import random_from

RESOLUTIONS = ("current", "incoming", "both")


@dataclass(frozen=True)
class ConflictPreview:
    """What the conflict dialog displays before the user picks a side."""

    source_branch: str
    target_branch: str
    current: str
    incoming: str


def build_preview(source_branch: str, target_branch: str) -> ConflictPreview:
    example = random_from(CONFLICT_EXAMPLES)
    return ConflictPreview(
        source_branch=source_branch,
        target_branch=target_branch,
        current=example.current,
        incoming=example.incoming,
    )
