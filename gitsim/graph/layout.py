"""Position and color helpers for commits and branches."""

from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence

from gitsim.config import DisplayConfig


@dataclass(frozen=True)
class Position:
    """Grid cell of a commit plus its pixel anchor."""

    col: int
    row: int
    x: int
    y: int


def create_position(col: int, row: int, display: Optional[DisplayConfig] = None) -> Position:
    """Place a commit at ``col`` (creation order) and ``row`` (branch lane)."""
    display = display or DisplayConfig()
    return Position(
        col=col,
        row=row,
        x=display.start_x + col * display.node_spacing_x,
        y=display.start_y + row * display.node_spacing_y,
    )


def max_column(columns: Iterable[Optional[int]]) -> int:
    """Largest column in use, 0 for an empty graph."""
    return max((col or 0 for col in columns), default=0)


def next_column(commits: Sequence) -> int:
    """Column for the next commit appended to ``commits``."""
    return max_column(getattr(commit, "col", 0) for commit in commits) + 1


def palette_color(row: int, palette: List[str]) -> str:
    return palette[row % len(palette)]


def branch_color(branches: Mapping[str, object], branch_name: str, palette: List[str]) -> str:
    """
    Color of a branch by its position in branch creation order.

    Unknown names fall back to the last slot, like a branch appended now.
    """
    names = list(branches)
    index = names.index(branch_name) if branch_name in names else len(names)
    return palette_color(index, palette)
