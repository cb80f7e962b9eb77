"""
Unit tests for __init__.py async_setup_entry / async_unload_entry.

Coverage:
- rejected credentials -> ConfigEntryAuthFailed, coordinator never created
- unreachable API      -> ConfigEntryNotReady, coordinator never created
- success              -> runtime_data set, polling started, stop registered on unload
- platform forwarding fails -> polling stopped again, error propagates
- unload               -> platforms unloaded, coordinator shut down
"""

from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
from homeassistant.exceptions import ConfigEntryAuthFailed, ConfigEntryNotReady

from custom_components.guardtrack import PLATFORMS, async_setup_entry, async_unload_entry
from custom_components.guardtrack.api import AuthenticationError

from .test_common import make_config_entry


def _make_hass() -> MagicMock:
    hass = MagicMock()
    hass.config_entries.async_forward_entry_setups = AsyncMock()
    hass.config_entries.async_unload_platforms = AsyncMock(return_value=True)
    return hass


def _patch_api(login_side_effect=None):
    api = MagicMock()
    api.login = AsyncMock(side_effect=login_side_effect)
    return patch("custom_components.guardtrack.GuardTrackApi", return_value=api)


class TestAsyncSetupEntry(unittest.IsolatedAsyncioTestCase):

    async def test_rejected_credentials_raise_auth_failed(self):
        entry = make_config_entry()
        with _patch_api(AuthenticationError("bad")), patch(
            "custom_components.guardtrack.GuardTrackCoordinator"
        ) as coordinator_cls:
            with self.assertRaises(ConfigEntryAuthFailed):
                await async_setup_entry(_make_hass(), entry)

        coordinator_cls.assert_not_called()

    async def test_unreachable_api_raises_not_ready(self):
        for error in (aiohttp.ClientConnectionError("down"), TimeoutError()):
            entry = make_config_entry()
            with _patch_api(error), patch(
                "custom_components.guardtrack.GuardTrackCoordinator"
            ) as coordinator_cls:
                with self.assertRaises(ConfigEntryNotReady):
                    await async_setup_entry(_make_hass(), entry)
            coordinator_cls.assert_not_called()

    async def test_success_starts_polling(self):
        hass = _make_hass()
        entry = make_config_entry()
        with _patch_api() as api_cls, patch(
            "custom_components.guardtrack.GuardTrackCoordinator"
        ) as coordinator_cls:
            result = await async_setup_entry(hass, entry)

        self.assertTrue(result)
        api_cls.assert_called_once_with(
            "https://backend.example.com/api/v1", "test@example.com", "secret"
        )
        coordinator = coordinator_cls.return_value
        self.assertIs(entry.runtime_data, coordinator)
        coordinator.async_start_polling.assert_called_once()
        hass.config_entries.async_forward_entry_setups.assert_awaited_once_with(entry, PLATFORMS)
        entry.async_on_unload.assert_any_call(coordinator.async_stop_polling)
        # Reauth reloads the entry itself; an update listener would reload it twice
        entry.add_update_listener.assert_not_called()

    async def test_forwarding_failure_stops_polling(self):
        hass = _make_hass()
        hass.config_entries.async_forward_entry_setups = AsyncMock(side_effect=RuntimeError("boom"))
        entry = make_config_entry()
        with _patch_api(), patch(
            "custom_components.guardtrack.GuardTrackCoordinator"
        ) as coordinator_cls:
            with self.assertRaises(RuntimeError):
                await async_setup_entry(hass, entry)

        coordinator_cls.return_value.async_stop_polling.assert_called_once()


class TestAsyncUnloadEntry(unittest.IsolatedAsyncioTestCase):

    async def test_unload_shuts_down_coordinator(self):
        hass = _make_hass()
        entry = make_config_entry()
        entry.runtime_data.async_shutdown = AsyncMock()

        self.assertTrue(await async_unload_entry(hass, entry))
        entry.runtime_data.async_shutdown.assert_awaited_once()

    async def test_failed_unload_keeps_coordinator(self):
        hass = _make_hass()
        hass.config_entries.async_unload_platforms = AsyncMock(return_value=False)
        entry = make_config_entry()
        entry.runtime_data.async_shutdown = AsyncMock()

        self.assertFalse(await async_unload_entry(hass, entry))
        entry.runtime_data.async_shutdown.assert_not_awaited()


class TestPackageLayout(unittest.TestCase):

    def test_custom_components_is_a_namespace_package(self):
        import custom_components

        self.assertIsNone(getattr(custom_components, "__file__", None))
