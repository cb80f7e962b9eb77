"""
Tests for CommandDispatcher: acknowledgements, failure messages, in-flight
tracking and the single-command guard.
"""

from __future__ import annotations

import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock

import aiohttp

from custom_components.guardtrack.command_dispatcher import CommandDispatcher
from custom_components.guardtrack.errors import CommandFailure
from custom_components.guardtrack.requests import ApiResponseError

from .test_common import make_api


def _make_dispatcher(api=None):
    api = api or make_api()
    notify = MagicMock()
    on_change = MagicMock()
    return CommandDispatcher(api, notify=notify, on_change=on_change), api, notify, on_change


class TestCommandDispatcher(unittest.IsolatedAsyncioTestCase):

    async def test_success_notifies_with_command_name(self):
        dispatcher, api, notify, _ = _make_dispatcher()

        result = await dispatcher.send("dev-1", "BUZZ")

        api.send_command.assert_awaited_once_with("dev-1", "BUZZ")
        notify.assert_called_once_with("Success", 'Command "BUZZ" sent successfully')
        self.assertTrue(result.success)
        self.assertEqual(result.ack, {"ok": True})

    async def test_missing_device_id_is_noop(self):
        dispatcher, api, notify, on_change = _make_dispatcher()

        result = await dispatcher.send(None, "BUZZ")

        self.assertIsNone(result)
        api.send_command.assert_not_called()
        notify.assert_not_called()
        on_change.assert_not_called()

    async def test_failure_uses_server_detail(self):
        api = make_api()
        api.send_command = AsyncMock(side_effect=ApiResponseError(409, {"detail": "Device is offline"}))
        dispatcher, _, notify, _ = _make_dispatcher(api)

        result = await dispatcher.send("dev-1", "ARM")

        notify.assert_called_once_with("Error", "Device is offline")
        self.assertFalse(result.success)
        self.assertIsInstance(result.error, CommandFailure)
        self.assertEqual(result.error.command, "ARM")

    async def test_failure_without_detail_uses_fallback(self):
        api = make_api()
        api.send_command = AsyncMock(side_effect=ApiResponseError(500, "<html>"))
        dispatcher, _, notify, _ = _make_dispatcher(api)

        await dispatcher.send("dev-1", "ARM")

        notify.assert_called_once_with("Error", "Failed to send command")

    async def test_network_failure_uses_fallback(self):
        api = make_api()
        api.send_command = AsyncMock(side_effect=aiohttp.ClientConnectionError("down"))
        dispatcher, _, notify, _ = _make_dispatcher(api)

        result = await dispatcher.send("dev-1", "REQUEST_POSITION")

        notify.assert_called_once_with("Error", "Failed to send command")
        self.assertFalse(result.success)

    async def test_in_flight_set_during_call(self):
        seen = []
        dispatcher, api, _, _ = _make_dispatcher()

        async def capture(device_id, command):
            seen.append(dispatcher.in_flight)

        api.send_command = AsyncMock(side_effect=capture)

        await dispatcher.send("dev-1", "BUZZ")

        self.assertEqual(seen, ["BUZZ"])
        self.assertIsNone(dispatcher.in_flight)

    async def test_in_flight_cleared_after_failure(self):
        api = make_api()
        api.send_command = AsyncMock(side_effect=RuntimeError("boom"))
        dispatcher, _, _, on_change = _make_dispatcher(api)

        await dispatcher.send("dev-1", "BUZZ")

        self.assertIsNone(dispatcher.in_flight)
        self.assertEqual(on_change.call_count, 2)

    async def test_in_flight_cleared_after_cancellation(self):
        dispatcher, api, _, _ = _make_dispatcher()
        api.send_command = AsyncMock(side_effect=asyncio.CancelledError())

        with self.assertRaises(asyncio.CancelledError):
            await dispatcher.send("dev-1", "BUZZ")

        self.assertIsNone(dispatcher.in_flight)

    async def test_second_command_refused_while_busy(self):
        gate = asyncio.Event()
        dispatcher, api, notify, _ = _make_dispatcher()

        async def slow(device_id, command):
            await gate.wait()

        api.send_command = AsyncMock(side_effect=slow)

        first = asyncio.ensure_future(dispatcher.send("dev-1", "ARM"))
        await asyncio.sleep(0)
        second = await dispatcher.send("dev-1", "BUZZ")
        gate.set()
        await first

        self.assertFalse(second.success)
        api.send_command.assert_awaited_once_with("dev-1", "ARM")
        self.assertEqual(notify.call_args_list[0].args[0], "Error")
        self.assertEqual(notify.call_args_list[1].args[0], "Success")

    async def test_unknown_commands_are_sent(self):
        dispatcher, api, _, _ = _make_dispatcher()

        await dispatcher.send("dev-1", "SELF_DESTRUCT")

        api.send_command.assert_awaited_once_with("dev-1", "SELF_DESTRUCT")
