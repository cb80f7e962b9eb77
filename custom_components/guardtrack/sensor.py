"""
Platform for text sensors: last seen, last reported status and alert history.
"""
from __future__ import annotations

from homeassistant.components.sensor import SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .coordinator import GuardTrackCoordinator
from .entity import GuardTrackEntity


class GuardTrackLastSeenSensor(GuardTrackEntity, SensorEntity):
    """Human readable recency, e.g. "45s ago"."""

    _attr_name = "Last seen"
    _attr_icon = "mdi:clock-outline"

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "last_seen")

    @property
    def native_value(self) -> str:
        return self.coordinator.data.derived.last_seen


class GuardTrackStatusSensor(GuardTrackEntity, SensorEntity):
    """Status string last reported by the device (ARMED, DISARMED, ...)."""

    _attr_name = "Status"

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "status")

    @property
    def native_value(self) -> str | None:
        status = self.coordinator.data.status
        return status.last_status if status is not None else None

    @property
    def icon(self) -> str:
        if self.coordinator.data.derived.armed:
            return "mdi:shield-lock"
        return "mdi:shield-off-outline"


class GuardTrackAlertsSensor(GuardTrackEntity, SensorEntity):
    """
    Number of alerts in the history. The visible newest-first slice is
    exposed as attributes and grows with the "Load more alerts" button.
    """

    _attr_name = "Alerts"
    _attr_icon = "mdi:bell"
    # The visible slice grows with every "Load more" press
    _unrecorded_attributes = frozenset({"alerts"})

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "alerts")

    @property
    def native_value(self) -> int:
        return len(self.coordinator.data.alerts)

    @property
    def extra_state_attributes(self) -> dict:
        data = self.coordinator.data
        return {
            "alerts": [alert.as_dict() for alert in data.visible_alerts],
            "page": data.alerts_page,
            "has_more": data.has_more_alerts,
        }


async def async_setup_entry(hass: HomeAssistant, config_entry: ConfigEntry, async_add_entities) -> None:
    coordinator: GuardTrackCoordinator = config_entry.runtime_data
    async_add_entities([
        GuardTrackLastSeenSensor(coordinator),
        GuardTrackStatusSensor(coordinator),
        GuardTrackAlertsSensor(coordinator),
    ])
