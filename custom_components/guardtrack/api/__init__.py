"""
GuardTrackApi - thin client bundling credentials, token and endpoint helpers.
"""
from __future__ import annotations

import logging

from .alerts import fetch_device_alerts
from .auth import AuthenticationError, get_login_token, get_standard_headers
from .devices import fetch_device_status, post_device_command
from ..models import Alert, DeviceStatus

__all__ = ["AuthenticationError", "GuardTrackApi"]

_LOGGER = logging.getLogger(__name__)


class GuardTrackApi:
    """Client for one GuardTrack account."""

    def __init__(self, base_url: str, email: str, password: str) -> None:
        self.base_url = base_url.rstrip("/")
        self.email = email
        self.password = password
        self.token: str | None = None

    async def login(self) -> None:
        """Obtain a fresh bearer token. Raises AuthenticationError on bad credentials."""
        self.token = await get_login_token(self.base_url, self.email, self.password)

    @property
    def headers(self) -> dict:
        return get_standard_headers(self.token or "")

    async def get_device_current_status(self, device_id: str) -> DeviceStatus | None:
        return await fetch_device_status(self.base_url, device_id, self.headers)

    async def get_device_alerts(self, device_id: str) -> list[Alert] | None:
        return await fetch_device_alerts(self.base_url, device_id, self.headers)

    async def send_command(self, device_id: str, command: str):
        return await post_device_command(self.base_url, device_id, command, self.headers)
