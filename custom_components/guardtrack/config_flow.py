"""Config flow for GuardTrack integration."""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Mapping, Optional

import aiohttp
import homeassistant.helpers.config_validation as cv
import voluptuous as vol

from homeassistant import config_entries

from .api import AuthenticationError, GuardTrackApi
from .const import (
    CONF_BASE_URL,
    CONF_DEVICE_ID,
    CONF_EMAIL,
    CONF_ENTRY_NAME,
    CONF_GUID,
    CONF_PASSWORD,
    DEFAULT_BASE_URL,
    DOMAIN,
)
from .requests import ApiResponseError

# Email validator that checks if the string is not empty and contains '@'
email_validator = vol.All(cv.string, vol.Length(min=1), vol.Match(r"^[^@]+@[^@]+\.[^@]+$"))

_LOGGER = logging.getLogger(__name__)
CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_ENTRY_NAME, default='My GuardTrack device'): cv.string,
        vol.Required(CONF_BASE_URL, default=DEFAULT_BASE_URL): cv.string,
        vol.Required(CONF_EMAIL, default=''): cv.string,
        vol.Required(CONF_PASSWORD, default=''): cv.string,
        vol.Required(CONF_DEVICE_ID, default=''): cv.string,
    }
)
REAUTH_SCHEMA = vol.Schema({vol.Required(CONF_PASSWORD): cv.string})


async def _validate_credentials(base_url: str, email: str, password: str) -> str | None:
    """Try to log in. Returns an error key, or None when the credentials work."""
    api = GuardTrackApi(base_url, email, password)
    try:
        await api.login()
    except AuthenticationError:
        return "invalid_auth"
    except (ApiResponseError, aiohttp.ClientError, TimeoutError) as e:
        _LOGGER.warning("Cannot reach GuardTrack API at %s: %s", base_url, e)
        return "cannot_connect"
    return None


class GuardTrackFlow(config_entries.ConfigFlow, domain=DOMAIN):
    VERSION = 1

    data: Optional[Dict[str, Any]]

    async def async_step_user(self, user_input: Optional[Dict[str, Any]] = None):
        errors: Dict[str, str] = {}
        if user_input is not None:
            self.data = dict(user_input)
            if not self.data.get(CONF_ENTRY_NAME):
                errors['base'] = 'entry_name_required'
            elif not self.data.get(CONF_EMAIL):
                errors['base'] = 'email_required'
            elif not self.data.get(CONF_PASSWORD):
                errors['base'] = 'password_required'
            elif not self.data.get(CONF_DEVICE_ID):
                errors['base'] = 'device_id_required'
            else:
                try:
                    email_validator(self.data[CONF_EMAIL])
                except vol.Invalid:
                    errors['base'] = 'invalid_email'

            if not errors:
                await self.async_set_unique_id(f"{DOMAIN}_{self.data[CONF_DEVICE_ID]}")
                self._abort_if_unique_id_configured()
                error = await _validate_credentials(
                    self.data[CONF_BASE_URL], self.data[CONF_EMAIL], self.data[CONF_PASSWORD]
                )
                if error:
                    errors['base'] = error
                else:
                    self.data[CONF_GUID] = str(uuid.uuid4())
                    return self.async_create_entry(title=self.data[CONF_ENTRY_NAME], data=self.data)

        return self.async_show_form(step_id="user", data_schema=CONFIG_SCHEMA, errors=errors)

    async def async_step_reauth(self, entry_data: Mapping[str, Any]):
        """The session expired; ask for the password again."""
        return await self.async_step_reauth_confirm()

    async def async_step_reauth_confirm(self, user_input: Optional[Dict[str, Any]] = None):
        errors: Dict[str, str] = {}
        entry = self.hass.config_entries.async_get_entry(self.context["entry_id"])
        if user_input is not None:
            if not user_input.get(CONF_PASSWORD):
                errors['base'] = 'password_required'
            else:
                error = await _validate_credentials(
                    entry.data.get(CONF_BASE_URL, DEFAULT_BASE_URL),
                    entry.data[CONF_EMAIL],
                    user_input[CONF_PASSWORD],
                )
                if error:
                    errors['base'] = error
                else:
                    self.hass.config_entries.async_update_entry(
                        entry, data={**entry.data, CONF_PASSWORD: user_input[CONF_PASSWORD]}
                    )
                    await self.hass.config_entries.async_reload(entry.entry_id)
                    return self.async_abort(reason="reauth_successful")

        return self.async_show_form(step_id="reauth_confirm", data_schema=REAUTH_SCHEMA, errors=errors)
