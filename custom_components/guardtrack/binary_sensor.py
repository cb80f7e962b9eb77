"""
Platform for the connectivity sensor and the poll problem sensor.
"""
from __future__ import annotations

from homeassistant.components.binary_sensor import BinarySensorDeviceClass, BinarySensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .coordinator import GuardTrackCoordinator
from .entity import GuardTrackEntity


class GuardTrackOnlineSensor(GuardTrackEntity, BinarySensorEntity):
    """On while the backend reports the device online."""

    _attr_name = "Online"
    _attr_device_class = BinarySensorDeviceClass.CONNECTIVITY

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "online")

    @property
    def is_on(self) -> bool:
        return self.coordinator.data.derived.online

    @property
    def extra_state_attributes(self) -> dict:
        return {"last_seen": self.coordinator.data.derived.last_seen}


class GuardTrackProblemSensor(GuardTrackEntity, BinarySensorEntity):
    """
    On while the last poll failed. The user-facing message and the loading and
    refreshing flags are attributes.

    Stays available when polls fail or polling has stopped, so the error
    remains visible after the other entities go unavailable.
    """

    _attr_name = "Problem"
    _attr_device_class = BinarySensorDeviceClass.PROBLEM

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "problem")

    @property
    def available(self) -> bool:
        return True

    @property
    def is_on(self) -> bool:
        return self.coordinator.data.error is not None

    @property
    def extra_state_attributes(self) -> dict:
        data = self.coordinator.data
        return {
            "error": data.error,
            "loading": data.loading,
            "refreshing": data.refreshing,
            "session_expired": data.auth_failed,
        }


async def async_setup_entry(hass: HomeAssistant, config_entry: ConfigEntry, async_add_entities) -> None:
    coordinator: GuardTrackCoordinator = config_entry.runtime_data
    async_add_entities([
        GuardTrackOnlineSensor(coordinator),
        GuardTrackProblemSensor(coordinator),
    ])
