"""
Tests for the client chat session
"""

from unittest.mock import AsyncMock, MagicMock, call

import aiohttp
import pytest

from growsmart.client.chat_session import (
    API_KEY_REQUIRED_CONTENT,
    ChatSession,
    Sender,
    build_welcome_message,
)
from growsmart.client.config_store import ClientConfigStore
from growsmart.client.notices import NoticeVariant
from growsmart.modules.advisory_chat.domain.models.chat import UserContext
from growsmart.shared.core.exceptions import ExternalAPIError
from growsmart.shared.infrastructure.external_apis.api_client import APIClient

LONG_ANSWER = (
    "For rice, apply 120 kg nitrogen per hectare in three splits: at transplanting, "
    "at active tillering and at panicle initiation."
)


@pytest.fixture
def config(tmp_path):
    store = ClientConfigStore(tmp_path / "config.json")
    store.set_api_key("sk-or-v1-farmer")
    store.set_selected_model("qwen/qwen-2.5-7b-instruct:free")
    return store


@pytest.fixture
def api_client():
    mock_client = MagicMock()
    mock_client.post = AsyncMock()
    return mock_client


@pytest.fixture
def sleep():
    return AsyncMock()


@pytest.fixture
def context():
    return UserContext(district="Thanjavur", state="Tamil Nadu", crop_types=["rice"], preferred_language="tamil")


@pytest.fixture
def session(api_client, config, context, sleep):
    return ChatSession(api_client, config=config, user_context=context, full_name="Meena Kumar", sleep=sleep)


class TestWelcomeMessage:
    """Personalised greeting"""

    def test_mentions_name_location_and_crops(self, context):
        text = build_welcome_message(context, "Meena Kumar")

        assert "AI Farm Assistant** Meena!" in text
        assert "I see you're from Thanjavur, Tamil Nadu." in text
        assert "I see you grow rice." in text

    def test_generic_without_profile(self):
        text = build_welcome_message(None)

        assert "AI Farm Assistant**!" in text
        assert "I see you" not in text

    def test_session_starts_with_welcome(self, session):
        assert len(session.messages) == 1
        assert session.messages[0].id == "1"
        assert session.messages[0].sender == Sender.BOT


class TestSendMessage:
    """Sending questions and rendering replies"""

    async def test_blank_input_is_ignored(self, session, api_client):
        assert await session.send_message("   ") is None

        assert len(session.messages) == 1
        api_client.post.assert_not_awaited()

    async def test_missing_api_key_short_circuits(self, api_client, tmp_path, sleep):
        session = ChatSession(api_client, config=ClientConfigStore(tmp_path / "empty.json"), sleep=sleep)

        reply = await session.send_message("How much urea for rice?")

        assert reply.content == API_KEY_REQUIRED_CONTENT
        assert [m.sender for m in session.messages] == [Sender.BOT, Sender.USER, Sender.BOT]
        api_client.post.assert_not_awaited()
        assert session.is_loading is False

    async def test_successful_answer(self, session, api_client):
        api_client.post.return_value = {"response": LONG_ANSWER, "model": "qwen/qwen-2.5-7b-instruct:free"}

        reply = await session.send_message("How much nitrogen for rice?")

        assert reply.content == LONG_ANSWER
        assert reply.sender == Sender.BOT
        assert not any(m.id.startswith("loading") for m in session.messages)
        assert session.notices[-1].title == "✅ Response Generated"
        assert session.is_loading is False

    async def test_request_payload(self, session, api_client):
        api_client.post.return_value = {"response": "Short answer"}

        await session.send_message("Best time to sow?")

        endpoint = api_client.post.await_args.args[0]
        payload = api_client.post.await_args.kwargs["data"]
        assert endpoint == "chat"
        assert payload["message"] == "Best time to sow?"
        assert payload["apiKey"] == "sk-or-v1-farmer"
        assert payload["model"] == "qwen/qwen-2.5-7b-instruct:free"
        assert payload["userContext"]["district"] == "Thanjavur"

    async def test_short_answer_has_no_notice(self, session, api_client):
        api_client.post.return_value = {"response": "Use compost."}

        await session.send_message("Soil tip?")

        assert session.notices == []

    async def test_user_message_shown_as_is(self, session, api_client):
        api_client.post.return_value = {"userMessage": "💳 **Insufficient Credits**"}

        reply = await session.send_message("Hello")

        assert reply.content == "💳 **Insufficient Credits**"
        assert session.notices == []

    async def test_retries_then_shows_timeout_guidance(self, session, api_client, sleep):
        api_client.post.side_effect = ExternalAPIError("Failed to fetch from growsmart: Cannot connect to host")

        reply = await session.send_message("Is it going to rain?")

        assert api_client.post.await_count == 3
        assert sleep.await_args_list == [call(1), call(2)]
        assert "Connection Timeout" in reply.content
        assert session.notices[-1].title == "⏱️ Timeout Error"
        assert session.notices[-1].variant == NoticeVariant.DESTRUCTIVE
        assert not any(m.id.startswith("loading") for m in session.messages)

    async def test_recovers_on_second_attempt(self, session, api_client, sleep):
        api_client.post.side_effect = [
            ExternalAPIError("Failed to fetch from growsmart: Connection reset by peer"),
            {"response": "Recovered answer"},
        ]

        reply = await session.send_message("Pest control for cotton?")

        assert reply.content == "Recovered answer"
        assert sleep.await_args_list == [call(1)]

    async def test_empty_response_is_reported(self, session, api_client):
        api_client.post.return_value = {"response": "   "}

        reply = await session.send_message("Hello")

        assert session.notices[-1].title == "Chat Error"
        assert "Empty response received from AI service" in reply.content

    async def test_no_data_is_reported(self, session, api_client):
        api_client.post.return_value = None

        reply = await session.send_message("Hello")

        assert "No response data received from AI service" in reply.content


class TestChatSessionOverHttp:
    """A real APIClient against canned HTTP responses"""

    @pytest.fixture
    def http_client(self):
        return APIClient(base_url="https://growsmart.test/api/v1", api_name="growsmart")

    @pytest.fixture
    def http_session(self, http_client, config, context, sleep):
        return ChatSession(http_client, config=config, user_context=context, sleep=sleep)

    async def test_error_status_is_not_retried(self, http_session, http_client, aiohttp_session, sleep):
        http_client.session = aiohttp_session(
            status=429,
            text='{"error": {"code": "RATE_LIMIT_EXCEEDED", "message": "Too many requests"}}',
        )

        reply = await http_session.send_message("Fertilizer for rice?")

        assert http_client.session.request.call_count == 1
        sleep.assert_not_awaited()
        assert "Too many requests" in reply.content
        assert "growsmart (429)" not in reply.content
        assert http_session.notices[-1].title == "Chat Error"

    async def test_server_error_message_is_classified(self, http_session, http_client, aiohttp_session):
        http_client.session = aiohttp_session(status=401, text='{"error": {"message": "Invalid API key"}}')

        reply = await http_session.send_message("Hello")

        assert http_session.notices[-1].title == "🔑 API Key Error"
        assert "Invalid API key" in reply.content
        assert http_client.session.request.call_count == 1

    async def test_validation_error_body_is_shown(self, http_session, http_client, aiohttp_session, sleep):
        http_client.session = aiohttp_session(
            status=422,
            text='{"error": {"code": "VALIDATION_ERROR", "message": "Request validation failed"}}',
        )

        reply = await http_session.send_message("Hello")

        assert "Request validation failed" in reply.content
        assert http_client.session.request.call_count == 1
        sleep.assert_not_awaited()

    async def test_connection_failure_is_retried(self, http_session, http_client, aiohttp_session, sleep):
        http_client.session = aiohttp_session()
        http_client.session.request.side_effect = aiohttp.ClientConnectionError("Cannot connect to host")

        reply = await http_session.send_message("Is it going to rain?")

        assert http_client.session.request.call_count == 3
        assert sleep.await_args_list == [call(1), call(2)]
        assert "Connection Timeout" in reply.content

    async def test_answer_after_success(self, http_session, http_client, aiohttp_session):
        http_client.session = aiohttp_session(json_body={"response": "Use compost.", "model": "m"})

        reply = await http_session.send_message("Soil tip?")

        assert reply.content == "Use compost."
        assert http_client.session.request.call_args.kwargs["json"]["apiKey"] == "sk-or-v1-farmer"
