"""
MonitorData - immutable snapshot of everything the entities render.

This is a pure data module with no HA or network dependencies.
"""
from __future__ import annotations

import dataclasses

from .alert_pager import slice_alerts
from .const import ALERTS_PAGE_SIZE
from .derived_state import DerivedState, project
from .models import Alert, DeviceStatus


@dataclasses.dataclass(frozen=True)
class MonitorData:
    """
    Typed, copy-on-write snapshot of the device screen.

    Always replace via dataclasses.replace() - never mutate in place.
    """

    # Last successful status snapshot, None before the first load
    status: DeviceStatus | None = None

    # Full alert history, newest-first
    alerts: list[Alert] = dataclasses.field(default_factory=list)

    # "Show more" page counter, >= 1
    alerts_page: int = 1

    # True only until the first poll tick completes
    loading: bool = True

    # True while a manual refresh is running
    refreshing: bool = False

    # Name of the command awaiting a response
    sending: str | None = None

    # User-facing fetch error, None when the last poll succeeded
    error: str | None = None

    # Session expired; the re-authentication flow has been started
    auth_failed: bool = False

    @property
    def visible_alerts(self) -> list[Alert]:
        return slice_alerts(self.alerts, self.alerts_page, ALERTS_PAGE_SIZE)

    @property
    def has_more_alerts(self) -> bool:
        return len(self.alerts) > len(self.visible_alerts)

    @property
    def derived(self) -> DerivedState:
        return project(self.status)
