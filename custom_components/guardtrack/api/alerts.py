"""
Alert history endpoint of the GuardTrack backend.
"""
from __future__ import annotations

from custom_components.guardtrack.requests import make_request
from custom_components.guardtrack.models import Alert, parse_alerts


async def fetch_device_alerts(base_url: str, device_id: str, headers: dict) -> list[Alert] | None:
    """
    Fetch the alert history of one device in backend order.

    Returns None when the payload is not an array.

    Corresponding CURL command:
    curl -X 'GET' '<base_url>/devices/<DeviceID>/alerts'
    """
    url = f"{base_url}/devices/{device_id}/alerts"
    raw_json = await make_request("GET", url, headers)
    return parse_alerts(raw_json)
