# File: services.py
"""Defines custom services for the Gourmet Muse integration.

These services expose the progression engine to scripts, automations and
dashboards. Mutating services optionally return the updated progress
snapshot; the get_* services only return data.
"""

from __future__ import annotations

import voluptuous as vol
from homeassistant.core import (
    HomeAssistant,
    ServiceCall,
    ServiceResponse,
    SupportsResponse,
)
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from . import const
from .coordinator import GourmetMuseDataCoordinator
from .managers import ProgressionManager

# --- Service Schemas ---
COMPLETE_RECIPE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_RECIPE_ID): cv.string,
    }
)

UNLOCK_BADGE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_BADGE_ID): cv.string,
    }
)

JOIN_CHALLENGE_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_CHALLENGE_ID): cv.string,
    }
)

GET_CHALLENGE_PROGRESS_SCHEMA = vol.Schema(
    {
        vol.Required(const.FIELD_CHALLENGE_ID): cv.string,
    }
)

LEAVE_CHALLENGE_SCHEMA = vol.Schema({})

RESET_PROGRESS_SCHEMA = vol.Schema({})

GET_PROGRESS_SCHEMA = vol.Schema({})


def _get_manager(hass: HomeAssistant, service: str) -> ProgressionManager:
    """Return the progression manager of the (single) configured entry."""
    entries = hass.data.get(const.DOMAIN, {})
    if not entries:
        const.LOGGER.warning("WARNING: %s: %s", service, const.MSG_NO_ENTRY_FOUND)
        raise HomeAssistantError(const.MSG_NO_ENTRY_FOUND)
    entry_data = next(iter(entries.values()))
    coordinator: GourmetMuseDataCoordinator = entry_data[const.COORDINATOR]
    return coordinator.progression_manager


def async_setup_services(hass: HomeAssistant):
    """Register Gourmet Muse services."""

    async def handle_complete_recipe(call: ServiceCall) -> ServiceResponse:
        """Handle completing a recipe."""
        manager = _get_manager(hass, const.SERVICE_COMPLETE_RECIPE)
        recipe_id = call.data[const.FIELD_RECIPE_ID]
        state = await manager.async_complete_recipe(recipe_id)
        return state.as_dict()

    async def handle_unlock_badge(call: ServiceCall) -> ServiceResponse:
        """Handle unlocking a badge from an external trigger."""
        manager = _get_manager(hass, const.SERVICE_UNLOCK_BADGE)
        badge_id = call.data[const.FIELD_BADGE_ID]
        state = await manager.async_force_unlock(badge_id)
        return state.as_dict()

    async def handle_join_challenge(call: ServiceCall) -> ServiceResponse:
        """Handle joining a challenge."""
        manager = _get_manager(hass, const.SERVICE_JOIN_CHALLENGE)
        challenge_id = call.data[const.FIELD_CHALLENGE_ID]
        state = await manager.async_join_challenge(challenge_id)
        return state.as_dict()

    async def handle_leave_challenge(call: ServiceCall) -> ServiceResponse:
        """Handle leaving the joined challenge."""
        manager = _get_manager(hass, const.SERVICE_LEAVE_CHALLENGE)
        state = await manager.async_leave_challenge()
        return state.as_dict()

    async def handle_reset_progress(call: ServiceCall) -> ServiceResponse:
        """Handle resetting all progress."""
        manager = _get_manager(hass, const.SERVICE_RESET_PROGRESS)
        const.LOGGER.info(
            "INFO: Reset Progress requested by user '%s'", call.context.user_id
        )
        state = await manager.async_reset()
        return state.as_dict()

    async def handle_get_progress(call: ServiceCall) -> ServiceResponse:
        """Return the progress snapshot with level details."""
        manager = _get_manager(hass, const.SERVICE_GET_PROGRESS)
        response = manager.state.as_dict()
        response[const.ATTR_POINTS_TO_NEXT_LEVEL] = manager.points_to_next_level()
        response[const.ATTR_LEVEL_PROGRESS] = manager.level_progress()
        return response

    async def handle_get_challenge_progress(call: ServiceCall) -> ServiceResponse:
        """Return progress details for one challenge."""
        manager = _get_manager(hass, const.SERVICE_GET_CHALLENGE_PROGRESS)
        challenge_id = call.data[const.FIELD_CHALLENGE_ID]
        return {
            const.ATTR_CHALLENGE_ID: challenge_id,
            const.ATTR_CHALLENGE_PROGRESS: manager.get_challenge_progress(challenge_id),
            const.ATTR_CHALLENGE_COMPLETED: manager.is_challenge_completed(challenge_id),
            const.ATTR_CHALLENGE_DAYS_REMAINING: manager.challenge_days_remaining(
                challenge_id
            ),
            const.ATTR_CHALLENGE_TIME_PROGRESS: manager.challenge_time_progress(
                challenge_id
            ),
        }

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_COMPLETE_RECIPE,
        handle_complete_recipe,
        schema=COMPLETE_RECIPE_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_UNLOCK_BADGE,
        handle_unlock_badge,
        schema=UNLOCK_BADGE_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_JOIN_CHALLENGE,
        handle_join_challenge,
        schema=JOIN_CHALLENGE_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_LEAVE_CHALLENGE,
        handle_leave_challenge,
        schema=LEAVE_CHALLENGE_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_RESET_PROGRESS,
        handle_reset_progress,
        schema=RESET_PROGRESS_SCHEMA,
        supports_response=SupportsResponse.OPTIONAL,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GET_PROGRESS,
        handle_get_progress,
        schema=GET_PROGRESS_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )

    hass.services.async_register(
        const.DOMAIN,
        const.SERVICE_GET_CHALLENGE_PROGRESS,
        handle_get_challenge_progress,
        schema=GET_CHALLENGE_PROGRESS_SCHEMA,
        supports_response=SupportsResponse.ONLY,
    )


async def async_unload_services(hass: HomeAssistant):
    """Unregister Gourmet Muse services when unloading the integration."""
    services = [
        const.SERVICE_COMPLETE_RECIPE,
        const.SERVICE_UNLOCK_BADGE,
        const.SERVICE_JOIN_CHALLENGE,
        const.SERVICE_LEAVE_CHALLENGE,
        const.SERVICE_RESET_PROGRESS,
        const.SERVICE_GET_PROGRESS,
        const.SERVICE_GET_CHALLENGE_PROGRESS,
    ]

    for service in services:
        if hass.services.has_service(const.DOMAIN, service):
            hass.services.async_remove(const.DOMAIN, service)
