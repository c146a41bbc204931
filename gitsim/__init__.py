"""
gitsim - Git Workflow Simulator

An in-memory commit-graph engine for teaching branching, merging, rebasing,
cherry-picking, stashing and remote synchronization.
"""

__version__ = "0.1.0"

# Configuration is available at top level for convenience
from gitsim.config import config

__all__ = ["config", "__version__"]
