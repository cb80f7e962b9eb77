"""
Coordinated fetch of device status and alert history.

Issues both requests concurrently and either returns a complete FetchResult
or raises a classified FetchError. Nothing is stored here; the caller decides
whether to apply the result.
"""
from __future__ import annotations

import asyncio
import dataclasses
import logging

from .const import HTTP_UNAUTHORIZED
from .errors import MissingIdentifierError, TransientFetchError, UnauthorizedError
from .models import Alert, DeviceStatus
from .requests import ApiResponseError

_LOGGER = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class FetchResult:
    """Outcome of one successful poll tick."""

    # None when the backend returned a malformed status payload
    status: DeviceStatus | None
    # Newest-first
    alerts: list[Alert] = dataclasses.field(default_factory=list)


async def fetch_all(api, device_id: str | None) -> FetchResult:
    """
    Fetch current status and alerts for device_id.

    The alert list is reversed so the most recently added entry comes first;
    a non-array alerts payload counts as no alerts.

    Raises:
        MissingIdentifierError: device_id is empty, no request is made
        UnauthorizedError: either request was answered with HTTP 401
        TransientFetchError: any other failure
    """
    if not device_id:
        raise MissingIdentifierError("Device ID is missing")

    try:
        status, alerts = await asyncio.gather(
            api.get_device_current_status(device_id),
            api.get_device_alerts(device_id),
        )
    except ApiResponseError as exc:
        if exc.status == HTTP_UNAUTHORIZED:
            raise UnauthorizedError(f"Session expired for device {device_id}") from exc
        raise TransientFetchError(f"Backend answered HTTP {exc.status}") from exc
    except Exception as exc:  # noqa: BLE001
        raise TransientFetchError(f"Failed to load device data: {exc}") from exc

    newest_first = list(reversed(alerts)) if isinstance(alerts, list) else []
    _LOGGER.debug(
        "Fetched status for %s (online=%s) and %s alerts",
        device_id, getattr(status, "online", None), len(newest_first),
    )
    return FetchResult(status=status, alerts=newest_first)
