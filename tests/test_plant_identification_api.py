"""
Tests for the plant identification endpoints
"""

from datetime import datetime, timezone

from growsmart.modules.plant_identification.domain.models.plant import IdentificationRecord
from growsmart.modules.plant_identification.domain.services.identification_service import (
    NOT_CONFIGURED_MESSAGE,
    NOT_IDENTIFIED_MESSAGE,
    SERVICE_ERROR_MESSAGE,
)
from growsmart.shared.core.exceptions import APIQuotaExceededError, ExternalAPIError

IDENTIFY_URL = "/api/v1/plants/identify"
HISTORY_URL = "/api/v1/plants/history"

TOMATO_RESPONSE = {
    "result": {"classification": {"suggestions": [
        {"name": "Solanum lycopersicum", "probability": 0.934, "details": {"scientific_name": "Solanum lycopersicum"}},
        {"name": "Solanum pimpinellifolium", "probability": 0.031},
    ]}},
}


def _upload(png_bytes, filename="tomato.png"):
    return {"image": (filename, png_bytes, "image/png")}


class TestIdentifyPlant:
    """POST /api/v1/plants/identify"""

    def test_identifies_plant(self, client, plant_id_client, identification_repository, png_bytes):
        plant_id_client.identify.return_value = TOMATO_RESPONSE

        response = client.post(IDENTIFY_URL, files=_upload(png_bytes))

        assert response.status_code == 200
        data = response.json()
        assert data["plantName"] == "Solanum lycopersicum"
        assert data["confidence"] == 93
        assert data["scientificName"] == "Solanum lycopersicum"
        assert data["careInstructions"].startswith("Tomatoes require full sun")
        assert data["healthStatus"] == "93% identification confidence"
        assert len(data["allPredictions"]) == 2

    def test_sends_detected_mime_type(self, client, plant_id_client, identification_repository, png_bytes):
        plant_id_client.identify.return_value = TOMATO_RESPONSE

        client.post(IDENTIFY_URL, files=_upload(png_bytes, filename="photo.bin"))

        image_data, mime_type = plant_id_client.identify.await_args.args
        assert image_data == png_bytes
        assert mime_type == "image/png"

    def test_anonymous_identification_is_not_saved(
        self, client, plant_id_client, identification_repository, png_bytes
    ):
        plant_id_client.identify.return_value = TOMATO_RESPONSE

        client.post(IDENTIFY_URL, files=_upload(png_bytes))

        identification_repository.create.assert_not_awaited()

    def test_signed_in_identification_is_saved(
        self, client, authenticated, plant_id_client, identification_repository, png_bytes
    ):
        plant_id_client.identify.return_value = TOMATO_RESPONSE

        client.post(IDENTIFY_URL, files=_upload(png_bytes))

        record = identification_repository.create.await_args.args[0]
        assert record.user_id == authenticated.user_id
        assert record.plant_name == "Solanum lycopersicum"
        assert record.confidence_score == 93

    def test_failed_history_save_still_answers(
        self, client, authenticated, plant_id_client, identification_repository, png_bytes
    ):
        plant_id_client.identify.return_value = TOMATO_RESPONSE
        identification_repository.create.side_effect = RuntimeError("database down")

        response = client.post(IDENTIFY_URL, files=_upload(png_bytes))

        assert response.status_code == 200
        assert response.json()["plantName"] == "Solanum lycopersicum"

    def test_no_image(self, client, plant_id_client, identification_repository):
        response = client.post(IDENTIFY_URL)

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "No image provided"
        plant_id_client.identify.assert_not_awaited()

    def test_not_an_image(self, client, plant_id_client, identification_repository):
        response = client.post(IDENTIFY_URL, files={"image": ("notes.txt", b"just some text", "text/plain")})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILE_TYPE"
        plant_id_client.identify.assert_not_awaited()

    def test_image_too_large(self, client, plant_id_client, identification_repository):
        oversized = b"\x89PNG" + b"0" * (10 * 1024 * 1024)

        response = client.post(IDENTIFY_URL, files={"image": ("big.png", oversized, "image/png")})

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"
        plant_id_client.identify.assert_not_awaited()

    def test_not_configured(self, client, plant_id_client, identification_repository, png_bytes):
        plant_id_client.configured = False

        response = client.post(IDENTIFY_URL, files=_upload(png_bytes))

        assert response.status_code == 500
        assert response.json()["error"]["message"] == NOT_CONFIGURED_MESSAGE

    def test_provider_error(self, client, plant_id_client, identification_repository, png_bytes):
        plant_id_client.identify.side_effect = APIQuotaExceededError("plant_id")

        response = client.post(IDENTIFY_URL, files=_upload(png_bytes))

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "PLANT_IDENTIFICATION_ERROR"
        assert error["message"] == SERVICE_ERROR_MESSAGE

    def test_connection_failure(self, client, plant_id_client, identification_repository, png_bytes):
        plant_id_client.identify.side_effect = ExternalAPIError("Failed to fetch from plant_id: Cannot connect")

        response = client.post(IDENTIFY_URL, files=_upload(png_bytes))

        assert response.status_code == 500
        assert response.json()["error"]["message"] == SERVICE_ERROR_MESSAGE

    def test_nothing_identified(self, client, plant_id_client, identification_repository, png_bytes):
        plant_id_client.identify.return_value = {"result": {"classification": {"suggestions": []}}}

        response = client.post(IDENTIFY_URL, files=_upload(png_bytes))

        assert response.status_code == 500
        assert response.json()["error"]["message"] == NOT_IDENTIFIED_MESSAGE


class TestIdentificationHistory:
    """GET /api/v1/plants/history"""

    def test_requires_authentication(self, client, identification_repository):
        response = client.get(HISTORY_URL)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    def test_lists_saved_identifications(self, client, authenticated, identification_repository):
        identification_repository.list_for_user.return_value = [
            IdentificationRecord(
                id="rec-1",
                user_id=authenticated.user_id,
                plant_name="Ocimum basilicum",
                confidence_score=81,
                care_instructions="Basil loves warm weather and full sun.",
                health_status="81% identification confidence",
                created_at=datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc),
            ),
        ]

        response = client.get(HISTORY_URL, params={"limit": 10})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["plant_name"] == "Ocimum basilicum"
        assert "user_id" not in data["items"][0]
        identification_repository.list_for_user.assert_awaited_once_with(authenticated.user_id, limit=10)

    def test_limit_is_bounded(self, client, authenticated, identification_repository):
        response = client.get(HISTORY_URL, params={"limit": 500})

        assert response.status_code == 422
