"""
Guided tutorials: catalog, step predicates and the progress engine.
"""

from .catalog import TUTORIALS, Tutorial, TutorialStep, find_tutorial
from .checks import CHECKS, Check, get_check
from .engine import StepProgress, TutorialEngine, TutorialStart

__all__ = [
    "TUTORIALS",
    "Tutorial",
    "TutorialStep",
    "find_tutorial",
    "CHECKS",
    "Check",
    "get_check",
    "StepProgress",
    "TutorialEngine",
    "TutorialStart",
]
