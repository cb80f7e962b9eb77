"""
Authentication against the GuardTrack backend.

Responsible for:
- Obtaining a bearer token via the login endpoint
- Building the standard authorization headers used by all API calls
"""
from __future__ import annotations

import logging

from custom_components.guardtrack.requests import make_request, ApiResponseError

_LOGGER = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Credentials were rejected by the backend."""


async def get_login_token(base_url: str, email: str, password: str) -> str:
    """
    Obtain a bearer token from the GuardTrack backend.

    Corresponding CURL command:
    curl -X 'POST' '<base_url>/auth/login' \\
      -H 'Content-Type: application/json' \\
      -d '{"email": "EMAIL", "password": "PASSWORD"}'
    """
    url = f"{base_url}/auth/login"
    headers = {"accept": "application/json"}
    try:
        json_response = await make_request(
            "POST", url, headers, payload={"email": email, "password": password}
        )
    except ApiResponseError as e:
        if e.status in (400, 401, 403):
            raise AuthenticationError(e.detail or f"Login rejected (HTTP {e.status})") from e
        raise

    token = json_response.get("access_token") if isinstance(json_response, dict) else None
    if not token:
        raise AuthenticationError("Login response did not contain an access token")
    _LOGGER.debug("Obtained login token for %s", email)
    return token


def get_standard_headers(token: str) -> dict:
    """Build the HTTP headers used by all authenticated requests."""
    return {
        "accept": "application/json",
        "Authorization": f"Bearer {token}",
    }
