"""Manager modules for the Gourmet Muse integration.

Managers own state and side effects (storage, events, entity updates) and
delegate pure computation to the engines.
"""

from .base_manager import BaseManager
from .progression_manager import ProgressionManager

__all__ = ["BaseManager", "ProgressionManager"]
