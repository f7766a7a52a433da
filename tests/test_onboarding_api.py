"""
Tests for language onboarding
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from growsmart.main import app
from growsmart.modules.onboarding.domain.models.language import SUPPORTED_LANGUAGES, get_language
from growsmart.modules.onboarding.infrastructure.database.profile_repository_impl import ProfileRepositoryImpl
from growsmart.modules.onboarding.presentation.dependencies import get_profile_repository

LANGUAGE_URL = "/api/v1/onboarding/language"


@pytest.fixture
def profile_repository():
    repository = MagicMock()
    repository.update_preferred_language = AsyncMock(return_value=True)
    app.dependency_overrides[get_profile_repository] = lambda: repository
    return repository


class TestLanguages:
    """Supported language list"""

    def test_lists_all_languages(self, client):
        response = client.get("/api/v1/onboarding/languages")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == len(SUPPORTED_LANGUAGES) == 14
        assert data["languages"][0]["code"] == "english"
        assert {"tamil", "hindi"} <= {language["code"] for language in data["languages"]}

    def test_get_language_is_case_insensitive(self):
        assert get_language(" Tamil ").native_name == "தமிழ்"
        assert get_language("klingon") is None
        assert get_language(None) is None


class TestSetPreferredLanguage:
    """PUT /api/v1/onboarding/language"""

    def test_requires_authentication(self, client, profile_repository):
        response = client.put(LANGUAGE_URL, json={"language": "tamil"})

        assert response.status_code == 401
        profile_repository.update_preferred_language.assert_not_awaited()

    def test_stores_language(self, client, authenticated, profile_repository):
        response = client.put(LANGUAGE_URL, json={"language": "hindi"})

        assert response.status_code == 200
        data = response.json()
        assert data["preferred_language"] == "hindi"
        assert data["language"]["native_name"] == "हिंदी"
        profile_repository.update_preferred_language.assert_awaited_once_with(authenticated.user_id, "hindi")

    def test_unsupported_language(self, client, authenticated, profile_repository):
        response = client.put(LANGUAGE_URL, json={"language": "klingon"})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["field"] == "language"
        profile_repository.update_preferred_language.assert_not_awaited()

    def test_missing_profile(self, client, authenticated, profile_repository):
        profile_repository.update_preferred_language.return_value = False

        response = client.put(LANGUAGE_URL, json={"language": "tamil"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"


class TestProfileRepository:
    """Supabase update of profiles.preferred_language"""

    async def test_updates_profile_row(self, supabase_client):
        supabase_client.query.execute.return_value = MagicMock(data=[{"id": "user-123"}])

        updated = await ProfileRepositoryImpl(supabase_client).update_preferred_language("user-123", "tamil")

        assert updated is True
        supabase_client.table.assert_called_with("profiles")
        supabase_client.query.update.assert_called_once_with({"preferred_language": "tamil"})
        supabase_client.query.eq.assert_called_once_with("id", "user-123")

    async def test_no_row_updated(self, supabase_client):
        assert await ProfileRepositoryImpl(supabase_client).update_preferred_language("ghost", "tamil") is False
