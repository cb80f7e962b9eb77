"""
Error taxonomy for the GuardTrack integration.

Fetch errors are the only exceptions that leave status_fetcher.fetch_all();
the coordinator turns each of them into screen state.
"""
from __future__ import annotations


class GuardTrackError(Exception):
    """Base class for all GuardTrack errors."""


class FetchError(GuardTrackError):
    """A poll tick could not produce a snapshot."""


class MissingIdentifierError(FetchError):
    """No device id is configured, nothing was requested."""


class UnauthorizedError(FetchError):
    """The backend rejected the session (HTTP 401)."""


class TransientFetchError(FetchError):
    """Any other fetch failure; the next poll tick retries."""


class CommandFailure(GuardTrackError):
    """A device command was rejected or could not be delivered."""

    def __init__(self, command: str, message: str) -> None:
        self.command = command
        self.message = message
        super().__init__(f"{command}: {message}")
