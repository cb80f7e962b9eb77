"""
Platform for the arm/disarm toggle.
"""
from __future__ import annotations

import logging

from homeassistant.components.switch import SwitchDeviceClass, SwitchEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .coordinator import GuardTrackCoordinator
from .const import ARM_COMMANDS
from .entity import GuardTrackControlEntity

_LOGGER = logging.getLogger(__name__)


class GuardTrackArmSwitch(GuardTrackControlEntity, SwitchEntity):
    """
    On while the device reports ARMED.

    Turning it on or off sends ARM/DISARM; the state itself only changes once
    a later poll reports the new device status.
    """

    _attr_name = "Armed"
    _attr_device_class = SwitchDeviceClass.SWITCH
    _busy_commands = ARM_COMMANDS

    def __init__(self, coordinator: GuardTrackCoordinator) -> None:
        super().__init__(coordinator, "armed")

    @property
    def is_on(self) -> bool:
        return self.coordinator.data.derived.armed

    @property
    def icon(self) -> str:
        if self.busy:
            return "mdi:timer-sand"
        return "mdi:lock" if self.is_on else "mdi:lock-open-variant"

    async def async_turn_on(self, **kwargs) -> None:
        await self.coordinator.async_toggle_arm(True)

    async def async_turn_off(self, **kwargs) -> None:
        await self.coordinator.async_toggle_arm(False)


async def async_setup_entry(hass: HomeAssistant, config_entry: ConfigEntry, async_add_entities) -> None:
    coordinator: GuardTrackCoordinator = config_entry.runtime_data
    _LOGGER.debug("Adding arm switch for device %s", coordinator.device_id)
    async_add_entities([GuardTrackArmSwitch(coordinator)])
