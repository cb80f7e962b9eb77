"""
Platform for the device location.
"""
from __future__ import annotations

import logging

from homeassistant.components.device_tracker import SourceType
from homeassistant.components.device_tracker.config_entry import TrackerEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .coordinator import GuardTrackCoordinator
from .entity import GuardTrackEntity

_LOGGER = logging.getLogger(__name__)


class GuardTrackLocation(GuardTrackEntity, TrackerEntity):
    """Last reported GPS position of the device."""

    _attr_name = "Location"
    _attr_icon = "mdi:map-marker"

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "gps")

    @property
    def latitude(self) -> float | None:
        status = self.coordinator.data.status
        return status.lat if status is not None and status.has_location else None

    @property
    def longitude(self) -> float | None:
        status = self.coordinator.data.status
        return status.lon if status is not None and status.has_location else None

    @property
    def source_type(self) -> SourceType:
        return SourceType.GPS

    @property
    def extra_state_attributes(self) -> dict:
        status = self.coordinator.data.status
        return {"last_status": status.last_status if status is not None else None}


async def async_setup_entry(hass: HomeAssistant, config_entry: ConfigEntry, async_add_entities) -> None:
    coordinator: GuardTrackCoordinator = config_entry.runtime_data
    _LOGGER.debug("Adding location tracker for device %s", coordinator.device_id)
    async_add_entities([GuardTrackLocation(coordinator)])
