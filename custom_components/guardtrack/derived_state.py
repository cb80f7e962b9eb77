"""
Display values derived from the latest DeviceStatus.

Pure functions, recomputed on every render.
"""
from __future__ import annotations

import dataclasses
import math

from .const import COMMAND_ARM, COMMAND_DISARM, STATUS_ARMED
from .models import DeviceStatus

NEVER_SEEN = "never"


def is_online(status: DeviceStatus | None) -> bool:
    return status.online if status is not None else False


def is_armed(status: DeviceStatus | None) -> bool:
    # Exact, case-sensitive match
    return status is not None and status.last_status == STATUS_ARMED


def format_last_seen(seconds: float | None) -> str:
    """Render seconds since the device was last seen as "45s ago", "3m ago", "2h ago" or "never"."""
    if seconds is None:
        return NEVER_SEEN
    if seconds < 60:
        return f"{math.floor(seconds)}s ago"
    if seconds < 3600:
        return f"{math.floor(seconds / 60)}m ago"
    return f"{math.floor(seconds / 3600)}h ago"


def arm_command(should_arm: bool) -> str:
    return COMMAND_ARM if should_arm else COMMAND_DISARM


@dataclasses.dataclass(frozen=True)
class DerivedState:
    online: bool
    armed: bool
    last_seen: str

    @property
    def controls_enabled(self) -> bool:
        """Toggle and command controls are usable only while the device is online."""
        return self.online


def project(status: DeviceStatus | None) -> DerivedState:
    return DerivedState(
        online=is_online(status),
        armed=is_armed(status),
        last_seen=format_last_seen(status.seconds_since_seen if status is not None else None),
    )
