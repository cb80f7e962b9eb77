"""
Device status and command endpoints of the GuardTrack backend.
"""
from __future__ import annotations

import logging

from custom_components.guardtrack.requests import make_request
from custom_components.guardtrack.models import DeviceStatus, parse_status

_LOGGER = logging.getLogger(__name__)


async def fetch_device_status(base_url: str, device_id: str, headers: dict) -> DeviceStatus | None:
    """
    Fetch the current status of one device.

    Returns None when the payload is not a JSON object.

    Corresponding CURL command:
    curl -X 'GET' '<base_url>/devices/<DeviceID>/status'
    """
    url = f"{base_url}/devices/{device_id}/status"
    raw_json = await make_request("GET", url, headers)
    return parse_status(raw_json, device_id)


async def post_device_command(base_url: str, device_id: str, command: str, headers: dict):
    """
    Send a named command to the device. Returns the backend acknowledgement.

    Corresponding CURL command:
    curl -X 'POST' '<base_url>/devices/<DeviceID>/commands' -d '{"command": "BUZZ"}'
    """
    url = f"{base_url}/devices/{device_id}/commands"
    ack = await make_request("POST", url, headers, payload={"command": command})
    _LOGGER.debug("Command %s accepted for device %s: %s", command, device_id, ack)
    return ack
