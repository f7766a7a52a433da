"""
Test configuration and fixtures
"""

import io
import os

# Settings are cached on first use, so the environment is fixed before the app import
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["LOG_FORMAT"] = "text"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OPENROUTER_API_KEY"] = "sk-or-v1-test-server-key-0123456789abcdef"
os.environ["PLANT_ID_API_KEY"] = "test-plant-id-key"
os.environ.pop("SUPABASE_URL", None)
os.environ.pop("SUPABASE_ANON_KEY", None)

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from PIL import Image  # noqa: E402

from growsmart.main import app  # noqa: E402
from growsmart.modules.advisory_chat.presentation.dependencies import (  # noqa: E402
    get_openrouter_client,
)
from growsmart.modules.plant_identification.presentation.dependencies import (  # noqa: E402
    get_identification_repository,
    get_plant_id_client,
)
from growsmart.shared.core.dependencies import (  # noqa: E402
    CurrentUser,
    get_current_user,
    get_optional_user,
)

SERVER_KEY = os.environ["OPENROUTER_API_KEY"]


@pytest.fixture(scope="function")
def client():
    """Create a test client and reset dependency overrides afterwards"""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def test_user():
    return CurrentUser(user_id="user-123", email="farmer@example.com")


@pytest.fixture
def authenticated(test_user):
    """Resolve every request to test_user"""
    app.dependency_overrides[get_current_user] = lambda: test_user
    app.dependency_overrides[get_optional_user] = lambda: test_user
    return test_user


@pytest.fixture
def openrouter_client():
    """OpenRouter client whose completions are mocked"""
    mock_client = MagicMock()
    mock_client.api_name = "openrouter"
    mock_client.create_completion = AsyncMock()
    app.dependency_overrides[get_openrouter_client] = lambda: mock_client
    return mock_client


@pytest.fixture
def plant_id_client():
    """Configured Plant.id client whose identify call is mocked"""
    mock_client = MagicMock()
    mock_client.api_name = "plant_id"
    mock_client.configured = True
    mock_client.identify = AsyncMock()
    app.dependency_overrides[get_plant_id_client] = lambda: mock_client
    return mock_client


@pytest.fixture
def identification_repository():
    """History repository with async create/list_for_user"""
    repository = MagicMock()
    repository.create = AsyncMock(side_effect=lambda record: record)
    repository.list_for_user = AsyncMock(return_value=[])
    app.dependency_overrides[get_identification_repository] = lambda: repository
    return repository


@pytest.fixture
def png_bytes():
    """A small valid PNG image"""
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color=(34, 139, 34)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def completion():
    """Build an OpenRouter completion body"""

    def _completion(content, model="meta-llama/llama-3.2-3b-instruct:free"):
        return {
            "id": "gen-123",
            "model": model,
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
            "usage": {"prompt_tokens": 120, "completion_tokens": 45, "total_tokens": 165},
        }

    return _completion


@pytest.fixture
def supabase_client():
    """
    Supabase client whose query builder chain returns itself.

    Set ``supabase_client.query.execute.return_value`` to control results.
    """
    mock_client = MagicMock()
    query = MagicMock()
    for method in ("select", "insert", "update", "eq", "order", "limit"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=[])
    mock_client.table.return_value = query
    mock_client.query = query
    return mock_client


@pytest.fixture
def aiohttp_session():
    """
    Build an aiohttp session whose request() yields one canned response.

    Assign the result to ``APIClient.session`` to run a real client
    without a network.
    """

    def _session(status=200, json_body=None, text="", headers=None):
        response = MagicMock()
        response.status = status
        response.headers = headers or {}
        response.json = AsyncMock(return_value=json_body)
        response.text = AsyncMock(return_value=text)

        session = MagicMock()
        session.close = AsyncMock()
        session.request.return_value.__aenter__.return_value = response
        session.request.return_value.__aexit__.return_value = False
        return session

    return _session
