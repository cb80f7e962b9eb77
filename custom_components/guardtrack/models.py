"""
Domain models for the GuardTrack integration.

Pure data classes for the device status snapshot and the alert history.
No HTTP or Home Assistant dependencies.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any

_LOGGER = logging.getLogger(__name__)


def _to_float(value: Any) -> float | None:
    """Return value as float, or None when it is missing or not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _coordinate_pair(lat: Any, lon: Any) -> tuple[float | None, float | None]:
    """Latitude and longitude are only meaningful together."""
    lat_f, lon_f = _to_float(lat), _to_float(lon)
    if lat_f is None or lon_f is None:
        return None, None
    return lat_f, lon_f


@dataclasses.dataclass(frozen=True)
class DeviceStatus:
    """Current status of the tracked device, replaced wholesale on every poll."""

    device_id: str
    name: str | None = None
    online: bool = False
    seconds_since_seen: float | None = None
    last_status: str | None = None
    lat: float | None = None
    lon: float | None = None

    @property
    def has_location(self) -> bool:
        return self.lat is not None and self.lon is not None

    @classmethod
    def from_json(cls, data: dict, device_id: str) -> "DeviceStatus":
        """Build a status from the backend payload, falling back to the requested id."""
        seconds = _to_float(data.get("seconds_since_seen"))
        if seconds is not None and seconds < 0:
            seconds = 0.0
        lat, lon = _coordinate_pair(data.get("lat"), data.get("lon"))
        last_status = data.get("last_status")
        return cls(
            device_id=str(data.get("device_id") or data.get("id") or device_id),
            name=data.get("name") or None,
            online=bool(data.get("online", False)),
            seconds_since_seen=seconds,
            last_status=str(last_status) if last_status is not None else None,
            lat=lat,
            lon=lon,
        )


@dataclasses.dataclass(frozen=True)
class Alert:
    """Single entry of the device alert history."""

    id: Any
    status: str | None = None
    created_at: str | None = None
    lat: float | None = None
    lon: float | None = None

    @classmethod
    def from_json(cls, data: dict) -> "Alert":
        lat, lon = _coordinate_pair(data.get("lat"), data.get("lon"))
        return cls(
            id=data.get("id"),
            status=data.get("status"),
            created_at=data.get("created_at"),
            lat=lat,
            lon=lon,
        )

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)


def parse_status(raw: Any, device_id: str) -> DeviceStatus | None:
    """Return a DeviceStatus for a well-formed payload, None otherwise."""
    if not isinstance(raw, dict):
        _LOGGER.debug("Ignoring malformed status payload for device %s: %s", device_id, raw)
        return None
    return DeviceStatus.from_json(raw, device_id)


def parse_alerts(raw: Any) -> list[Alert] | None:
    """Return the alerts in backend order, or None when the payload is not an array."""
    if not isinstance(raw, list):
        _LOGGER.debug("Alerts payload is not an array: %s", raw)
        return None
    alerts = []
    for item in raw:
        if not isinstance(item, dict):
            _LOGGER.debug("Skipping malformed alert entry: %s", item)
            continue
        alerts.append(Alert.from_json(item))
    return alerts
