import asyncio
import json
from urllib.parse import parse_qs

import httpx
import pytest

from aquabot.schemas.vk import LongPollServer
from aquabot.services.vk_service import VkService


def _service(handler) -> VkService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VkService("token", "123", base_url="https://vk.test/method", client=client)


def _form(request: httpx.Request) -> dict:
    return {key: values[0] for key, values in parse_qs(request.content.decode()).items()}


class TestGetLongPollServer:
    def test_success(self):
        def handler(request):
            assert request.url.path == "/method/groups.getLongPollServer"
            assert request.url.params["group_id"] == "123"
            assert request.url.params["access_token"] == "token"
            return httpx.Response(200, json={"response": {"server": "https://lp.test", "key": "k", "ts": 10}})

        result = asyncio.run(_service(handler).get_long_poll_server())
        assert result.ok is True
        assert result.value == LongPollServer(server="https://lp.test", key="k", ts="10")

    def test_vk_error_body(self):
        def handler(request):
            return httpx.Response(200, json={"error": {"error_code": 5, "error_msg": "User authorization failed"}})

        result = asyncio.run(_service(handler).get_long_poll_server())
        assert result.ok is False
        assert result.error_code == "vk_error"
        assert "authorization" in result.error

    def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        result = asyncio.run(_service(handler).get_long_poll_server())
        assert result.error_code == "transport_error"


class TestCheck:
    def test_parses_updates(self):
        def handler(request):
            assert request.url.params["act"] == "a_check"
            assert request.url.params["ts"] == "10"
            assert request.url.params["wait"] == "25"
            return httpx.Response(200, json={"ts": "11", "updates": [{"type": "message_new", "object": {}}]})

        descriptor = LongPollServer(server="https://lp.test", key="k", ts="10")
        poll = asyncio.run(_service(handler).check(descriptor))
        assert poll.ts == "11"
        assert poll.failed is None
        assert len(poll.updates) == 1

    def test_bad_body_raises_value_error(self):
        def handler(request):
            return httpx.Response(200, json={"updates": "nope"})

        descriptor = LongPollServer(server="https://lp.test", key="k", ts="10")
        with pytest.raises(ValueError):
            asyncio.run(_service(handler).check(descriptor))


class TestSendMessage:
    def test_sends_keyboard_as_json(self):
        seen = {}

        def handler(request):
            seen.update(_form(request))
            return httpx.Response(200, json={"response": 1})

        keyboard = {"one_time": True, "buttons": [[{"action": {"type": "text", "label": "🔙 Назад"}}]]}
        sent = asyncio.run(_service(handler).send_message(42, "Привет", keyboard, peer_id=42))

        assert sent is True
        assert seen["user_id"] == "42"
        assert "peer_id" not in seen
        assert seen["message"] == "Привет"
        assert json.loads(seen["keyboard"]) == keyboard
        assert "🔙 Назад" in seen["keyboard"]
        assert seen["random_id"].isdigit()

    def test_uses_peer_id_for_conversations(self):
        seen = {}

        def handler(request):
            seen.update(_form(request))
            return httpx.Response(200, json={"response": 1})

        asyncio.run(_service(handler).send_message(42, "hi", peer_id=2000000001))
        assert seen["peer_id"] == "2000000001"
        assert "user_id" not in seen
        assert "keyboard" not in seen

    def test_vk_error_returns_false(self):
        def handler(request):
            return httpx.Response(200, json={"error": {"error_code": 901}})

        assert asyncio.run(_service(handler).send_message(42, "hi")) is False

    def test_http_error_returns_false(self):
        def handler(request):
            return httpx.Response(502)

        assert asyncio.run(_service(handler).send_message(42, "hi")) is False


class TestAnswerEvent:
    def test_acknowledges_callback(self):
        seen = {}

        def handler(request):
            seen["path"] = request.url.path
            seen.update(_form(request))
            return httpx.Response(200, json={"response": 1})

        assert asyncio.run(_service(handler).answer_event("evt", 42)) is True
        assert seen["path"] == "/method/messages.sendMessageEventAnswer"
        assert seen["event_id"] == "evt"
        assert seen["peer_id"] == "42"
