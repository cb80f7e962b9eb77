import logging

import aiohttp
from homeassistant import config_entries, core
from homeassistant.const import Platform
from homeassistant.exceptions import ConfigEntryAuthFailed, ConfigEntryNotReady

from .api import AuthenticationError, GuardTrackApi
from .const import CONF_BASE_URL, CONF_EMAIL, CONF_PASSWORD, DEFAULT_BASE_URL, DOMAIN
from .coordinator import GuardTrackCoordinator
from .requests import ApiResponseError

PLATFORMS: list[Platform] = [
    Platform.DEVICE_TRACKER,
    Platform.SENSOR,
    Platform.BINARY_SENSOR,
    Platform.SWITCH,
    Platform.BUTTON,
]
_LOGGER = logging.getLogger(__name__)


async def async_setup(hass: core.HomeAssistant, config: dict) -> bool:
    """Set up the integration."""
    hass.data.setdefault(DOMAIN, {})
    return True


async def async_setup_entry(
    hass: core.HomeAssistant, entry: config_entries.ConfigEntry
) -> bool:
    """Set up platform from a ConfigEntry."""
    api = GuardTrackApi(
        entry.data.get(CONF_BASE_URL, DEFAULT_BASE_URL),
        entry.data[CONF_EMAIL],
        entry.data[CONF_PASSWORD],
    )
    try:
        await api.login()
    except AuthenticationError as exc:
        raise ConfigEntryAuthFailed(f"GuardTrack rejected the credentials: {exc}") from exc
    except (ApiResponseError, aiohttp.ClientError, TimeoutError) as exc:
        raise ConfigEntryNotReady(f"Cannot reach the GuardTrack API: {exc}") from exc

    coordinator = GuardTrackCoordinator(hass, entry, api)
    entry.runtime_data = coordinator

    # The timer must not outlive the entry, including when platform setup fails
    coordinator.async_start_polling()
    try:
        await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)
    except Exception:
        coordinator.async_stop_polling()
        raise
    entry.async_on_unload(coordinator.async_stop_polling)
    return True


async def async_unload_entry(
    hass: core.HomeAssistant, entry: config_entries.ConfigEntry
) -> bool:
    """Unload a config entry."""
    unloaded = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)
    if unloaded:
        await entry.runtime_data.async_shutdown()
    return unloaded
