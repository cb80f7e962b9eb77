"""
CommandDispatcher - sends named device commands and tracks the one in flight.

No HA dependencies; the user-visible acknowledgement goes through the
injected notify callback.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Callable

from .const import (
    MESSAGE_COMMAND_BUSY,
    MESSAGE_COMMAND_FAILED,
    MESSAGE_COMMAND_SENT,
)
from .errors import CommandFailure
from .requests import ApiResponseError

_LOGGER = logging.getLogger(__name__)

# notify(title, message)
NotifyCallback = Callable[[str, str], None]


@dataclasses.dataclass(frozen=True)
class CommandResult:
    command: str
    success: bool
    message: str
    ack: object = None
    error: CommandFailure | None = None


class CommandDispatcher:
    """
    Sends one command at a time to the backend.

    `in_flight` names the command awaiting a response and is cleared when
    the call finishes, whatever its outcome. A second command requested while
    one is in flight is refused without contacting the backend.
    """

    def __init__(self, api, notify: NotifyCallback, on_change: Callable[[], None] | None = None) -> None:
        self._api = api
        self._notify = notify
        self._on_change = on_change
        self.in_flight: str | None = None

    async def send(self, device_id: str | None, command: str) -> CommandResult | None:
        """
        Send `command` to `device_id` and surface the outcome.

        Returns None without doing anything when device_id is unknown.
        Never raises for backend or network failures.
        """
        if not device_id:
            _LOGGER.debug("Command %s ignored, no device id", command)
            return None

        if self.in_flight is not None:
            message = MESSAGE_COMMAND_BUSY.format(busy=self.in_flight, command=command)
            return self._fail(command, message)

        self._set_in_flight(command)
        try:
            _LOGGER.debug("Sending command %s to device %s", command, device_id)
            ack = await self._api.send_command(device_id, command)
        except ApiResponseError as exc:
            return self._fail(command, exc.detail or MESSAGE_COMMAND_FAILED)
        except Exception as exc:  # noqa: BLE001
            _LOGGER.debug("Command %s raised %r", command, exc)
            return self._fail(command, MESSAGE_COMMAND_FAILED)
        finally:
            self._set_in_flight(None)

        message = MESSAGE_COMMAND_SENT.format(command=command)
        self._notify("Success", message)
        return CommandResult(command=command, success=True, message=message, ack=ack)

    def _fail(self, command: str, message: str) -> CommandResult:
        error = CommandFailure(command, message)
        _LOGGER.error("Command %s failed: %s", command, message)
        self._notify("Error", message)
        return CommandResult(command=command, success=False, message=message, error=error)

    def _set_in_flight(self, command: str | None) -> None:
        self.in_flight = command
        if self._on_change is not None:
            self._on_change()
