"""
Low-level HTTP request helpers for the GuardTrack backend.
This module handles all HTTP requests with retry-on-timeout and error responses.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import aiohttp

from .const import REQUEST_ATTEMPTS, REQUEST_TIMEOUT

_LOGGER = logging.getLogger(__name__)


class ApiResponseError(Exception):
    """Exception raised when the backend answers with a non-2xx status."""

    def __init__(self, status: int, body: Any = None):
        self.status = status
        self.body = body
        super().__init__(f"HTTP {status}: {body}")

    @property
    def detail(self) -> str | None:
        """Server-provided error message, if the body carries one."""
        if isinstance(self.body, dict):
            detail = self.body.get("detail")
            if isinstance(detail, str) and detail:
                return detail
        return None


async def make_request(
    method: str,
    url: str,
    headers: dict,
    payload: dict | None = None,
    params: dict | None = None,
    timeout: int = REQUEST_TIMEOUT,
    max_attempts: int = REQUEST_ATTEMPTS,
):
    """
    Make an HTTP request with automatic retry on timeout.

    Args:
        method: HTTP method (GET, POST, PUT, ...)
        url: Target URL for the request
        headers: HTTP headers dictionary
        payload: JSON payload for POST/PUT requests (optional)
        params: URL query parameters (optional)
        timeout: Base timeout in seconds (multiplied by attempt number for each retry)
        max_attempts: Maximum number of attempts

    Returns:
        Parsed JSON response, or None for an empty body

    Raises:
        asyncio.TimeoutError: If all attempts time out
        ApiResponseError: If the backend answers with an error status
        aiohttp.ClientError: For connection level failures
    """
    method = method.upper()

    for attempt in range(max_attempts):
        timeout_config = aiohttp.ClientTimeout(total=timeout * (attempt + 1))
        try:
            async with aiohttp.ClientSession(timeout=timeout_config) as session:
                async with session.request(
                    method, url, headers=headers, json=payload, params=params
                ) as response:
                    return await _process_response(response, url)
        except (asyncio.TimeoutError, TimeoutError):
            if attempt < max_attempts - 1:
                _LOGGER.debug("Timeout on %s %s (attempt %s), retrying", method, url, attempt + 1)
                continue
            _LOGGER.warning(
                "Timeout on %s request to %s after %s attempts", method, url, max_attempts
            )
            raise

    return None


async def _process_response(response, url: str):
    """
    Extract the JSON body of a response.

    Raises ApiResponseError for any non-2xx status, with the decoded JSON body
    when there is one and the raw text otherwise.
    """
    content_type = response.headers.get("Content-Type", "")

    if 200 <= response.status < 300:
        if "application/json" in content_type:
            return await response.json()
        text = await response.text()
        if text:
            _LOGGER.debug(
                "Non-JSON success response from %s (status %s): %s",
                url, response.status, text[:200],
            )
        return None

    if "application/json" in content_type:
        try:
            body = await response.json()
        except (aiohttp.ContentTypeError, ValueError) as e:
            _LOGGER.error("Failed to parse error response from %s: %s", url, e)
            body = None
    else:
        body = await response.text()
        _LOGGER.debug(
            "Non-JSON error response from %s: status %s, body preview: %s",
            url, response.status, body[:200],
        )
    raise ApiResponseError(response.status, body)
