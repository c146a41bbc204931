"""
Undo/redo history of repository snapshots.
"""

from .manager import HistoryManager

__all__ = ["HistoryManager"]
