# File: config_flow.py
"""Config flow for the Gourmet Muse integration.

Setup is a single confirmation step; only one instance is allowed because the
integration tracks the progression of a single user.
"""

from __future__ import annotations

from typing import Any

import voluptuous as vol
from homeassistant import config_entries

from . import const


class GourmetMuseConfigFlow(config_entries.ConfigFlow, domain=const.DOMAIN):
    """Config Flow for Gourmet Muse."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        """Confirm setup of the integration."""
        if self._async_current_entries():
            return self.async_abort(reason=const.TRANS_KEY_ERROR_SINGLE_INSTANCE)

        if user_input is not None:
            const.LOGGER.info("INFO: Creating %s entry", const.GOURMET_MUSE_TITLE)
            return self.async_create_entry(title=const.GOURMET_MUSE_TITLE, data={})

        return self.async_show_form(step_id="user", data_schema=vol.Schema({}))
