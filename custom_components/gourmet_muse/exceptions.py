"""Exceptions raised by the Gourmet Muse integration.

Unknown* errors are rejected caller input and propagate to the service
caller. Persistence* errors are raised inside the storage layer and always
absorbed there with a safe fallback.
"""

from __future__ import annotations

from homeassistant.exceptions import HomeAssistantError, ServiceValidationError

from . import const


class GourmetMuseError(HomeAssistantError):
    """Base class for Gourmet Muse errors."""


class UnknownRecipeError(GourmetMuseError, ServiceValidationError):
    """Raised when a recipe id does not resolve in the catalog."""

    def __init__(self, recipe_id: str) -> None:
        """Initialize UnknownRecipeError.

        Args:
            recipe_id: The id that failed to resolve
        """
        self.recipe_id = recipe_id
        super().__init__(const.ERROR_RECIPE_NOT_FOUND_FMT.format(recipe_id))


class UnknownBadgeError(GourmetMuseError, ServiceValidationError):
    """Raised when a badge id does not resolve in the catalog."""

    def __init__(self, badge_id: str) -> None:
        self.badge_id = badge_id
        super().__init__(const.ERROR_BADGE_NOT_FOUND_FMT.format(badge_id))


class UnknownChallengeError(GourmetMuseError, ServiceValidationError):
    """Raised when a challenge id does not resolve in the catalog."""

    def __init__(self, challenge_id: str) -> None:
        self.challenge_id = challenge_id
        super().__init__(const.ERROR_CHALLENGE_NOT_FOUND_FMT.format(challenge_id))


class PersistenceWriteFailedError(GourmetMuseError):
    """Raised when a single durable save attempt fails.

    Attributes:
        version: Version stamp of the payload that failed to write
    """

    def __init__(self, version: int, reason: Exception) -> None:
        self.version = version
        self.reason = reason
        super().__init__(f"Failed to save progress version {version}: {reason}")


class PersistenceReadCorruptError(GourmetMuseError):
    """Raised when stored progress data cannot be decoded."""
