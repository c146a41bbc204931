"""
Saved-state persistence in a versioned JSON envelope.
"""

from .storage import STORAGE_VERSION, StateStorage

__all__ = ["STORAGE_VERSION", "StateStorage"]
