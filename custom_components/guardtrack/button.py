"""
Platform for one-shot actions: device commands, manual refresh and alert paging.
"""
from __future__ import annotations

from homeassistant.components.button import ButtonEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .const import COMMAND_BUZZ, COMMAND_REQUEST_POSITION
from .coordinator import GuardTrackCoordinator
from .entity import GuardTrackControlEntity, GuardTrackEntity


class GuardTrackCommandButton(GuardTrackControlEntity, ButtonEntity):
    """Sends a fixed command to the device."""

    def __init__(self, coordinator: GuardTrackCoordinator, command: str, name: str, icon: str) -> None:
        super().__init__(coordinator, f"command_{command.lower()}")
        self._command = command
        self._busy_commands = (command,)
        self._attr_name = name
        self._idle_icon = icon

    @property
    def icon(self) -> str:
        return "mdi:timer-sand" if self.busy else self._idle_icon

    async def async_press(self) -> None:
        await self.coordinator.async_send_command(self._command)


class GuardTrackRefreshButton(GuardTrackEntity, ButtonEntity):
    """Fetch status and alerts right now."""

    _attr_name = "Refresh"
    _attr_icon = "mdi:refresh"

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "refresh")

    @property
    def available(self) -> bool:
        # Stays usable after a failed poll so the user can retry
        return self.coordinator.polling

    async def async_press(self) -> None:
        await self.coordinator.async_refresh_now()


class GuardTrackLoadMoreAlertsButton(GuardTrackEntity, ButtonEntity):
    """Show the next page of the alert history."""

    _attr_name = "Load more alerts"
    _attr_icon = "mdi:chevron-down"

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "load_more_alerts")

    @property
    def available(self) -> bool:
        return super().available and self.coordinator.data.has_more_alerts

    async def async_press(self) -> None:
        self.coordinator.async_load_more_alerts()


async def async_setup_entry(hass: HomeAssistant, config_entry: ConfigEntry, async_add_entities) -> None:
    coordinator: GuardTrackCoordinator = config_entry.runtime_data
    async_add_entities([
        GuardTrackCommandButton(coordinator, COMMAND_BUZZ, "Buzz alarm", "mdi:bullhorn"),
        GuardTrackCommandButton(coordinator, COMMAND_REQUEST_POSITION, "Request position", "mdi:crosshairs-gps"),
        GuardTrackRefreshButton(coordinator),
        GuardTrackLoadMoreAlertsButton(coordinator),
    ])
