"""Engine modules for the Gourmet Muse integration.

Contains pure computation engines:
- progression_engine: Badge rule evaluation, level math and challenge progress
"""

from .progression_engine import ProgressionEngine, RuleHandler

__all__ = [
    "ProgressionEngine",
    "RuleHandler",
]
