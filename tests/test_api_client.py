"""
Tests for the shared API client and the provider clients
"""

import asyncio

import aiohttp
import pytest

from growsmart.modules.advisory_chat.domain.models.chat import ChatMessage, ChatRole
from growsmart.modules.advisory_chat.infrastructure.external.openrouter_client import (
    OpenRouterClient,
    extract_completion_content,
)
from growsmart.modules.plant_identification.infrastructure.external.plant_id_client import (
    PlantIdClient,
    to_data_url,
)
from growsmart.shared.core.exceptions import (
    APIAuthenticationError,
    APIQuotaExceededError,
    APIRateLimitError,
    APITimeoutError,
    ExternalAPIError,
    ModelNotFoundError,
)
from growsmart.shared.infrastructure.external_apis.api_client import (
    APIClient,
    cleanup_api_clients,
    get_all_client_stats,
    get_registered_client,
    register_api_client,
)

OPENROUTER_URL = "https://openrouter.test/api/v1"
MESSAGES = [ChatMessage(role=ChatRole.USER, content="Fertilizer for rice?")]


@pytest.fixture
def openrouter():
    return OpenRouterClient(base_url=OPENROUTER_URL, http_referer="https://growsmart.test", app_title="GrowSmart AI")


class TestOpenRouterClient:
    """Chat completion requests"""

    async def test_completion_request(self, openrouter, aiohttp_session):
        openrouter.session = aiohttp_session(json_body={"choices": [{"message": {"content": "Urea"}}]})

        data = await openrouter.create_completion("sk-user", "qwen/qwen-2.5-7b-instruct:free", MESSAGES, top_p=0.9)

        assert data["choices"][0]["message"]["content"] == "Urea"
        kwargs = openrouter.session.request.call_args.kwargs
        assert kwargs["method"] == "POST"
        assert kwargs["url"] == f"{OPENROUTER_URL}/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer sk-user"
        assert kwargs["headers"]["HTTP-Referer"] == "https://growsmart.test"
        assert kwargs["headers"]["X-Title"] == "GrowSmart AI"
        assert kwargs["headers"]["User-Agent"] == "GrowSmart-AI/1.0"
        assert kwargs["json"] == {
            "model": "qwen/qwen-2.5-7b-instruct:free",
            "messages": [{"role": "user", "content": "Fertilizer for rice?"}],
            "temperature": 0.7,
            "max_tokens": 1000,
            "stream": False,
            "top_p": 0.9,
        }

    async def test_title_override(self, openrouter, aiohttp_session):
        openrouter.session = aiohttp_session(json_body={})

        await openrouter.create_completion("sk-user", "m", MESSAGES, title="GrowSmart AI Direct Test")

        assert openrouter.session.request.call_args.kwargs["headers"]["X-Title"] == "GrowSmart AI Direct Test"
        assert "top_p" not in openrouter.session.request.call_args.kwargs["json"]

    @pytest.mark.parametrize("status, error_type", [
        (401, APIAuthenticationError),
        (403, APIAuthenticationError),
        (402, APIQuotaExceededError),
        (429, APIRateLimitError),
    ])
    async def test_status_mapping(self, openrouter, aiohttp_session, status, error_type):
        openrouter.session = aiohttp_session(status=status)

        with pytest.raises(error_type):
            await openrouter.create_completion("sk-user", "m", MESSAGES)

    @pytest.mark.parametrize("status, error_type", [
        (401, APIAuthenticationError),
        (402, APIQuotaExceededError),
        (429, APIRateLimitError),
    ])
    async def test_status_errors_keep_body(self, openrouter, aiohttp_session, status, error_type):
        openrouter.session = aiohttp_session(status=status, text='{"error": {"message": "Provider says no"}}')

        with pytest.raises(error_type) as exc_info:
            await openrouter.create_completion("sk-user", "m", MESSAGES)

        assert exc_info.value.api_status_code == status
        assert exc_info.value.details["api_response"] == {"error": {"message": "Provider says no"}}

    async def test_unknown_model(self, openrouter, aiohttp_session):
        openrouter.session = aiohttp_session(status=404)

        with pytest.raises(ModelNotFoundError) as exc_info:
            await openrouter.create_completion("sk-user", "no/such-model", MESSAGES)

        assert exc_info.value.details["model"] == "no/such-model"

    async def test_server_error_keeps_body(self, openrouter, aiohttp_session):
        openrouter.session = aiohttp_session(status=500, text='{"error": {"message": "upstream down"}}')

        with pytest.raises(ExternalAPIError) as exc_info:
            await openrouter.create_completion("sk-user", "m", MESSAGES)

        assert exc_info.value.api_status_code == 500
        assert exc_info.value.details["api_response"] == {"error": {"message": "upstream down"}}

    async def test_connection_failure(self, openrouter, aiohttp_session):
        openrouter.session = aiohttp_session()
        openrouter.session.request.side_effect = aiohttp.ClientConnectionError("connection refused")

        with pytest.raises(ExternalAPIError, match="Failed to fetch from openrouter"):
            await openrouter.create_completion("sk-user", "m", MESSAGES)

    async def test_timeout(self, openrouter, aiohttp_session):
        openrouter.session = aiohttp_session()
        openrouter.session.request.side_effect = asyncio.TimeoutError()

        with pytest.raises(APITimeoutError):
            await openrouter.create_completion("sk-user", "m", MESSAGES)

    async def test_stats_and_error_history(self, openrouter, aiohttp_session):
        openrouter.session = aiohttp_session(status=500, text="oops")

        with pytest.raises(ExternalAPIError):
            await openrouter.create_completion("sk-user", "m", MESSAGES)

        stats = openrouter.get_stats()
        assert stats["total_requests"] == 1
        assert stats["failed_requests"] == 1
        assert stats["error_rate"] == 100
        assert openrouter.get_recent_errors()[0]["error_type"] == "ExternalAPIError"


class TestExtractCompletionContent:
    """choices[0].message.content"""

    def test_strips_content(self):
        assert extract_completion_content({"choices": [{"message": {"content": "  Use compost.\n"}}]}) == "Use compost."

    @pytest.mark.parametrize("data", [
        None,
        "text",
        {},
        {"choices": []},
        {"choices": ["oops"]},
        {"choices": [{"message": None}]},
        {"choices": [{"message": {"content": 42}}]},
        {"choices": [{"message": {"content": "   "}}]},
    ])
    def test_malformed(self, data):
        assert extract_completion_content(data) is None


class TestPlantIdClient:
    """Plant.id requests"""

    async def test_identify_payload_and_key(self, aiohttp_session):
        client = PlantIdClient(api_key="pid-key", base_url="https://plant.test/v3/identification")
        client.session = aiohttp_session(json_body={"result": {}})

        await client.identify(b"\x89PNG", "image/png")

        kwargs = client.session.request.call_args.kwargs
        assert kwargs["url"] == "https://plant.test/v3/identification"
        assert kwargs["headers"]["Api-Key"] == "pid-key"
        assert "Authorization" not in kwargs["headers"]
        assert kwargs["json"]["images"] == [to_data_url(b"\x89PNG", "image/png")]
        assert kwargs["json"]["similar_images"] is True

    def test_data_url(self):
        assert to_data_url(b"abc", "image/jpeg") == "data:image/jpeg;base64,YWJj"

    def test_configured(self):
        assert PlantIdClient(api_key="pid-key").configured is True
        assert PlantIdClient(api_key="  ").configured is False


class TestApiClient:
    """Generic behaviour"""

    async def test_upload_file_sends_multipart(self, aiohttp_session):
        client = APIClient(base_url="https://api.test/api/v1/", api_name="growsmart")
        client.session = aiohttp_session(json_body={"plantName": "Rose"})

        data = await client.upload_file("plants/identify", b"img", "rose.png", field_name="image", content_type="image/png")

        assert data == {"plantName": "Rose"}
        kwargs = client.session.request.call_args.kwargs
        assert kwargs["url"] == "https://api.test/api/v1/plants/identify"
        assert isinstance(kwargs["data"], aiohttp.FormData)
        assert "Content-Type" not in kwargs["headers"]

    async def test_client_error_body_is_decoded(self, aiohttp_session):
        client = APIClient(base_url="https://api.test/api/v1", api_name="growsmart")
        client.session = aiohttp_session(status=400, text='{"error": {"message": "No image provided"}}')

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.post("plants/identify", data={})

        assert exc_info.value.details["api_response"]["error"]["message"] == "No image provided"

    async def test_registry(self):
        client = register_api_client(APIClient(base_url="https://api.test", api_name="registry-test"))

        assert get_registered_client("registry-test") is client
        assert "registry-test" in get_all_client_stats()

        await cleanup_api_clients()

        assert get_registered_client("registry-test") is None
