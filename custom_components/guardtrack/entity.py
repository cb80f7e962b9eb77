"""
Base entity shared by all GuardTrack platforms.
"""
from __future__ import annotations

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .coordinator import GuardTrackCoordinator


class GuardTrackEntity(CoordinatorEntity[GuardTrackCoordinator]):
    """Entity bound to the single device of a config entry."""

    _attr_has_entity_name = True

    def __init__(self, coordinator: GuardTrackCoordinator, key: str) -> None:
        super().__init__(coordinator)
        self._attr_unique_id = f"guardtrack_{coordinator.guid}_{coordinator.device_id}_{key}"

    @property
    def device_info(self) -> DeviceInfo:
        return DeviceInfo(**self.coordinator.get_device_info())

    @property
    def available(self) -> bool:
        """Unavailable until the first snapshot and whenever the last poll failed."""
        return super().available and self.coordinator.data.status is not None


class GuardTrackControlEntity(GuardTrackEntity):
    """Entity that sends commands; disabled while the device is offline."""

    # Commands that mark this control busy while in flight
    _busy_commands: tuple[str, ...] = ()

    @property
    def available(self) -> bool:
        return super().available and self.coordinator.data.derived.controls_enabled

    @property
    def busy(self) -> bool:
        return self.coordinator.data.sending in self._busy_commands

    @property
    def extra_state_attributes(self) -> dict:
        return {"busy": self.busy, "command_in_flight": self.coordinator.data.sending}

