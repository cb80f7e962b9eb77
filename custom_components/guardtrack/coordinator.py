"""
DataUpdateCoordinator for the GuardTrack integration.

Responsibilities:
- Own the GuardTrackApi instance for the lifetime of a config entry.
- Drive poll ticks through PollingScheduler (polling.py) every POLL_INTERVAL
  seconds, plus manual refreshes.
- Apply StatusFetcher results (status_fetcher.py) to the MonitorData snapshot,
  discarding results of stopped runs and stale overlapping polls.
- Route commands through CommandDispatcher (command_dispatcher.py) and keep
  the busy state visible to entities.
"""
from __future__ import annotations

import dataclasses
import logging

from homeassistant.components import persistent_notification
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import ConfigEntryAuthFailed
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed

from .alert_pager import AlertPager
from .api import GuardTrackApi
from .command_dispatcher import CommandDispatcher, CommandResult
from .const import (
    ALERTS_PAGE_SIZE,
    CONF_DEVICE_ID,
    CONF_GUID,
    DOMAIN,
    MESSAGE_FETCH_FAILED,
    MESSAGE_MISSING_DEVICE_ID,
    POLL_INTERVAL,
    VERSION,
)
from .coordinator_data import MonitorData
from .derived_state import arm_command
from .errors import FetchError, MissingIdentifierError, UnauthorizedError
from .polling import PollingScheduler
from .status_fetcher import fetch_all

__all__ = ["GuardTrackCoordinator", "MonitorData"]

_LOGGER = logging.getLogger(__name__)


class GuardTrackCoordinator(DataUpdateCoordinator[MonitorData]):
    """
    Coordinator for one tracked device.

    Home Assistant's own interval is disabled; PollingScheduler owns the
    timer so that stopping it is immediate and results of a stopped run can
    be recognised and dropped.
    """

    def __init__(self, hass: HomeAssistant, config_entry: ConfigEntry, api: GuardTrackApi) -> None:
        super().__init__(
            hass,
            _LOGGER,
            config_entry=config_entry,
            name=DOMAIN,
            update_interval=None,
        )
        self.api = api
        self.device_id: str | None = config_entry.data.get(CONF_DEVICE_ID) or None
        self._guid = config_entry.data.get(CONF_GUID) or config_entry.entry_id

        self._scheduler = PollingScheduler(POLL_INTERVAL)
        self._pager = AlertPager(ALERTS_PAGE_SIZE)
        self._dispatcher = CommandDispatcher(
            api, notify=self._notify, on_change=self._on_command_change
        )

        # Request sequence numbers for the stale-response guard
        self._poll_seq = 0
        self._applied_seq = 0

        # Snapshot starts empty; entities stay unavailable until the first poll lands
        self.data = MonitorData()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def polling(self) -> bool:
        return self._scheduler.active

    @callback
    def async_start_polling(self) -> None:
        if not self._scheduler.active:
            self._scheduler.start(self.async_poll)

    @callback
    def async_stop_polling(self) -> None:
        self._scheduler.stop()

    async def async_shutdown(self) -> None:
        """Stop polling and release HA-side resources."""
        self.async_stop_polling()
        await super().async_shutdown()

    # ------------------------------------------------------------------
    # Poll tick
    # ------------------------------------------------------------------

    async def async_poll(self) -> None:
        """Fetch status + alerts once and apply the outcome if it is still wanted."""
        generation = self._scheduler.generation
        self._poll_seq += 1
        seq = self._poll_seq

        try:
            result = await fetch_all(self.api, self.device_id)
        except FetchError as exc:
            if self._claim(generation, seq):
                self._apply_failure(exc)
            else:
                _LOGGER.debug("Discarding failed poll #%s: %s", seq, exc)
            return

        if not self._claim(generation, seq):
            _LOGGER.debug("Discarding poll #%s, polling stopped or a newer poll landed", seq)
            return

        self._pager.reset()
        status = result.status if result.status is not None else self.data.status
        self.async_set_updated_data(
            dataclasses.replace(
                self.data,
                status=status,
                alerts=result.alerts,
                alerts_page=self._pager.page,
                loading=False,
                error=None,
                auth_failed=False,
            )
        )

    def _claim(self, generation: int, seq: int) -> bool:
        """Accept a poll outcome only for the current run and only if nothing newer was applied."""
        if not self._scheduler.is_current(generation) or seq <= self._applied_seq:
            return False
        self._applied_seq = seq
        return True

    def _apply_failure(self, exc: FetchError) -> None:
        if isinstance(exc, UnauthorizedError):
            _LOGGER.error("GuardTrack session expired, starting re-authentication: %s", exc)
            self._scheduler.stop()
            self.data = dataclasses.replace(
                self.data, loading=False, refreshing=False, error=None, auth_failed=True
            )
            self.config_entry.async_start_reauth(self.hass)
            self.async_set_update_error(exc)
            return

        if isinstance(exc, MissingIdentifierError):
            _LOGGER.error("No device id configured for %s", self._guid)
            self._scheduler.stop()
            message = MESSAGE_MISSING_DEVICE_ID
        else:
            _LOGGER.warning("Failed to load device data for %s: %s", self.device_id, exc)
            message = MESSAGE_FETCH_FAILED

        self.data = dataclasses.replace(self.data, loading=False, error=message)
        self.async_set_update_error(exc)

    # ------------------------------------------------------------------
    # Manual refresh
    # ------------------------------------------------------------------

    async def async_refresh_now(self) -> None:
        """Pull-to-refresh: run a tick now, flagging `refreshing` meanwhile."""
        if not self._scheduler.active:
            _LOGGER.debug("Refresh requested while polling is stopped")
            return
        self._set_local(refreshing=True)
        try:
            await self._scheduler.refresh_now()
        finally:
            self._set_local(refreshing=False)

    async def _async_update_data(self) -> MonitorData:
        """Entry point for HA's update_entity service."""
        await self.async_refresh_now()
        if self.data.auth_failed:
            raise ConfigEntryAuthFailed("GuardTrack session expired")
        if self.data.error:
            raise UpdateFailed(self.data.error)
        return self.data

    # ------------------------------------------------------------------
    # Write path - commands and alert paging (called from entities)
    # ------------------------------------------------------------------

    async def async_send_command(self, command: str) -> CommandResult | None:
        """
        Send a command to the device.

        Does NOT trigger a refresh; the next scheduled poll reconciles state.
        """
        return await self._dispatcher.send(self.device_id, command)

    async def async_toggle_arm(self, should_arm: bool) -> CommandResult | None:
        return await self.async_send_command(arm_command(should_arm))

    @callback
    def async_load_more_alerts(self) -> None:
        """Expose the next page of the already fetched alert list."""
        self._pager.show_more()
        self._set_local(alerts_page=self._pager.page)

    @callback
    def _on_command_change(self) -> None:
        self._set_local(sending=self._dispatcher.in_flight)

    @callback
    def _notify(self, title: str, message: str) -> None:
        persistent_notification.async_create(
            self.hass,
            message,
            title=f"GuardTrack: {title}",
            notification_id=f"{DOMAIN}_{self._guid}_command",
        )

    @callback
    def _set_local(self, **changes) -> None:
        """Apply a client-side change and push it to entities."""
        self.data = dataclasses.replace(self.data, **changes)
        self.async_update_listeners()

    # ------------------------------------------------------------------
    # Entity helper - device info dict
    # ------------------------------------------------------------------

    @property
    def guid(self) -> str:
        return self._guid

    def get_device_info(self) -> dict:
        """Return the HA DeviceInfo dict for the tracked device."""
        status = self.data.status
        name = (status.name if status is not None else None) or self.device_id or "GuardTrack device"
        return {
            "identifiers": {(DOMAIN, f"{self._guid}_{self.device_id}")},
            "name": name,
            "manufacturer": "GuardTrack",
            "model": "Tracker",
            "sw_version": VERSION,
        }
