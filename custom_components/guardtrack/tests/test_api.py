"""
Tests for the HTTP layer: response processing, endpoint helpers and GuardTrackApi.
"""

from __future__ import annotations

import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from custom_components.guardtrack.api import AuthenticationError, GuardTrackApi
from custom_components.guardtrack.models import DeviceStatus
from custom_components.guardtrack.requests import ApiResponseError, _process_response

BASE_URL = "https://backend.example.com/api/v1"


def _make_response(status: int, content_type: str = "application/json", json=None, text: str = ""):
    response = MagicMock()
    response.status = status
    response.headers = {"Content-Type": content_type}
    response.json = AsyncMock(return_value=json)
    response.text = AsyncMock(return_value=text)
    return response


class TestProcessResponse(unittest.IsolatedAsyncioTestCase):

    async def test_success_returns_json(self):
        result = await _process_response(_make_response(200, json={"online": True}), "url")
        self.assertEqual(result, {"online": True})

    async def test_created_counts_as_success(self):
        result = await _process_response(_make_response(201, json={"queued": True}), "url")
        self.assertEqual(result, {"queued": True})

    async def test_empty_success_body_is_none(self):
        result = await _process_response(_make_response(204, content_type=""), "url")
        self.assertIsNone(result)

    async def test_error_with_json_body(self):
        with self.assertRaises(ApiResponseError) as ctx:
            await _process_response(_make_response(401, json={"detail": "Token expired"}), "url")
        self.assertEqual(ctx.exception.status, 401)
        self.assertEqual(ctx.exception.detail, "Token expired")

    async def test_error_with_html_body(self):
        with self.assertRaises(ApiResponseError) as ctx:
            await _process_response(_make_response(502, content_type="text/html", text="<h1>Bad</h1>"), "url")
        self.assertEqual(ctx.exception.status, 502)
        self.assertIsNone(ctx.exception.detail)


class TestApiResponseError(unittest.TestCase):

    def test_detail_requires_non_empty_string(self):
        self.assertIsNone(ApiResponseError(400, {"detail": ""}).detail)
        self.assertIsNone(ApiResponseError(422, {"detail": [{"msg": "bad"}]}).detail)
        self.assertIsNone(ApiResponseError(500, None).detail)
        self.assertEqual(ApiResponseError(400, {"detail": "Nope"}).detail, "Nope")


class TestGuardTrackApi(unittest.IsolatedAsyncioTestCase):

    async def test_login_stores_token(self):
        api = GuardTrackApi(BASE_URL + "/", "a@b.cd", "pw")
        with patch(
            "custom_components.guardtrack.api.auth.make_request",
            new=AsyncMock(return_value={"access_token": "tok"}),
        ) as request:
            await api.login()

        self.assertEqual(api.token, "tok")
        self.assertEqual(api.headers["Authorization"], "Bearer tok")
        method, url, _ = request.await_args.args
        self.assertEqual((method, url), ("POST", BASE_URL + "/auth/login"))
        self.assertEqual(request.await_args.kwargs["payload"], {"email": "a@b.cd", "password": "pw"})

    async def test_login_rejected(self):
        api = GuardTrackApi(BASE_URL, "a@b.cd", "wrong")
        with patch(
            "custom_components.guardtrack.api.auth.make_request",
            new=AsyncMock(side_effect=ApiResponseError(401, {"detail": "Bad credentials"})),
        ):
            with self.assertRaises(AuthenticationError):
                await api.login()

    async def test_login_without_token(self):
        api = GuardTrackApi(BASE_URL, "a@b.cd", "pw")
        with patch(
            "custom_components.guardtrack.api.auth.make_request",
            new=AsyncMock(return_value={"user": "x"}),
        ):
            with self.assertRaises(AuthenticationError):
                await api.login()

    async def test_login_server_error_propagates(self):
        api = GuardTrackApi(BASE_URL, "a@b.cd", "pw")
        with patch(
            "custom_components.guardtrack.api.auth.make_request",
            new=AsyncMock(side_effect=ApiResponseError(500)),
        ):
            with self.assertRaises(ApiResponseError):
                await api.login()

    async def test_get_device_current_status(self):
        api = GuardTrackApi(BASE_URL, "a@b.cd", "pw")
        api.token = "tok"
        with patch(
            "custom_components.guardtrack.api.devices.make_request",
            new=AsyncMock(return_value={"online": True, "last_status": "ARMED"}),
        ) as request:
            status = await api.get_device_current_status("dev-1")

        self.assertIsInstance(status, DeviceStatus)
        self.assertTrue(status.online)
        self.assertEqual(request.await_args.args[1], BASE_URL + "/devices/dev-1/status")

    async def test_get_device_alerts(self):
        api = GuardTrackApi(BASE_URL, "a@b.cd", "pw")
        with patch(
            "custom_components.guardtrack.api.alerts.make_request",
            new=AsyncMock(return_value=[{"id": 1}, {"id": 2}]),
        ):
            alerts = await api.get_device_alerts("dev-1")

        self.assertEqual([a.id for a in alerts], [1, 2])

    async def test_send_command_posts_name(self):
        api = GuardTrackApi(BASE_URL, "a@b.cd", "pw")
        with patch(
            "custom_components.guardtrack.api.devices.make_request",
            new=AsyncMock(return_value={"ok": True}),
        ) as request:
            ack = await api.send_command("dev-1", "BUZZ")

        self.assertEqual(ack, {"ok": True})
        self.assertEqual(request.await_args.args[:2], ("POST", BASE_URL + "/devices/dev-1/commands"))
        self.assertEqual(request.await_args.kwargs["payload"], {"command": "BUZZ"})
