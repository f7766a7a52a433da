# 📄 File: growsmart/modules/plant_identification/domain/services/identification_service.py
# 🧭 Purpose (Layman Explanation):
# Looks at a farmer's plant photo, asks Plant.id what it is, reads the best answer from
# whatever format came back, adds care tips and remembers the result for signed-in farmers.
# 🧪 Purpose (Technical Summary):
# Plant identification use case: image validation, Plant.id call, response parsing across the
# v2 (suggestions), v3 (result.classification.suggestions) and PlantNet (results) shapes,
# care-guide lookup and best-effort history persistence.
# 🔗 Dependencies:
# - plant_identification.infrastructure.external.plant_id_client
# - plant_identification.domain.repositories.plant_identification_repository
# - growsmart.shared.utils.validators (Pillow)
# 🔄 Connected Modules / Calls From:
# - plant_identification.presentation.api.v1.plants

import math
from typing import Any, Dict, List, Optional

from growsmart.shared.core.exceptions import (
    ConfigurationError,
    ExternalAPIError,
    PlantIdentificationError,
    ValidationError,
)
from growsmart.shared.utils.logging import get_logger
from growsmart.shared.utils.validators import MAX_IMAGE_SIZE, detect_image_mime, validate_image_size

from ..models.plant import IdentificationRecord, PlantIdentification
from ..repositories.plant_identification_repository import PlantIdentificationRepository
from ...infrastructure.external.plant_id_client import PlantIdClient
from .care_guide import generate_care_instructions

logger = get_logger(__name__)

UNKNOWN_PLANT = "Unknown Plant"
NOT_CONFIGURED_MESSAGE = "Plant identification service is not configured. Please contact support."
SERVICE_ERROR_MESSAGE = "Plant identification service error. Please try again."
NOT_IDENTIFIED_MESSAGE = "Could not identify the plant. Please try a clearer image with better lighting."
MAX_PREDICTIONS = 3


def to_percent(probability: Any) -> int:
    """Probability in [0, 1] as a whole percentage, halves rounding up"""
    try:
        value = float(probability or 0)
    except (TypeError, ValueError):
        value = 0.0
    return int(math.floor(value * 100 + 0.5))


def _first(items: Any) -> Optional[Dict[str, Any]]:
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return None


def parse_identification(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Read the best match out of a provider response.

    Returns:
        Dict with plant_name, confidence, scientific_name and all_predictions,
        or None when the response holds no match
    """
    suggestion = _first(data.get('suggestions'))
    if suggestion is not None:
        details = suggestion.get('plant_details') or {}
        return {
            'plant_name': suggestion.get('plant_name') or UNKNOWN_PLANT,
            'confidence': to_percent(suggestion.get('probability')),
            'scientific_name': details.get('scientific_name') or '',
            'all_predictions': data['suggestions'][:MAX_PREDICTIONS],
        }

    classification = (data.get('result') or {}).get('classification') or {}
    suggestion = _first(classification.get('suggestions'))
    if suggestion is not None:
        details = suggestion.get('details') or {}
        return {
            'plant_name': suggestion.get('name') or UNKNOWN_PLANT,
            'confidence': to_percent(suggestion.get('probability')),
            'scientific_name': details.get('scientific_name') or suggestion.get('name') or '',
            'all_predictions': classification['suggestions'][:MAX_PREDICTIONS],
        }

    best = _first(data.get('results'))
    if best is not None:
        species = best.get('species') or {}
        return {
            'plant_name': (
                species.get('scientificNameWithoutAuthor')
                or species.get('scientificName')
                or UNKNOWN_PLANT
            ),
            'confidence': to_percent(best.get('score')),
            'scientific_name': species.get('scientificName') or '',
            'all_predictions': [],
        }

    return None


class PlantIdentificationService:
    """Identify plants from photos and keep per-user history."""

    def __init__(
        self,
        client: PlantIdClient,
        repository: Optional[PlantIdentificationRepository] = None,
        max_image_size: int = MAX_IMAGE_SIZE,
    ):
        self.client = client
        self.repository = repository
        self.max_image_size = max_image_size

    async def identify(
        self,
        image_data: bytes,
        filename: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> PlantIdentification:
        """
        Identify the plant in an uploaded image.

        Args:
            image_data: Uploaded bytes
            filename: Original filename, used in error details
            user_id: Authenticated caller; when set the result is saved to history

        Raises:
            ConfigurationError: Plant.id key missing
            ValidationError: No image data
            FileTooLargeError: Image above the size limit
            InvalidFileTypeError: Bytes are not a readable image
            PlantIdentificationError: Provider failure or no match
        """
        if not self.client.configured:
            logger.error("❌ Plant.id API key not configured")
            raise ConfigurationError(NOT_CONFIGURED_MESSAGE, setting="PLANT_ID_API_KEY")

        if not image_data:
            raise ValidationError("No image provided", field="image")

        validate_image_size(len(image_data), self.max_image_size, filename)
        mime_type = detect_image_mime(image_data, filename)

        logger.info(
            f"🌱 Processing image: {filename}, size: {len(image_data)} bytes",
            extra={'mime_type': mime_type},
        )

        try:
            data = await self.client.identify(image_data, mime_type)
        except ExternalAPIError as e:
            logger.error(f"Plant.id API error: {e.message}", extra={'details': e.details})
            raise PlantIdentificationError(
                SERVICE_ERROR_MESSAGE,
                provider=self.client.api_name,
                details={'api_status_code': e.api_status_code},
            )

        parsed = parse_identification(data) if isinstance(data, dict) else None
        if parsed is None:
            logger.error("No plant identification results found")
            raise PlantIdentificationError(NOT_IDENTIFIED_MESSAGE, provider=self.client.api_name)

        result = PlantIdentification(
            care_instructions=generate_care_instructions(parsed['plant_name']),
            health_status=f"{parsed['confidence']}% identification confidence",
            **parsed,
        )
        logger.info(f"✅ Plant identified: {result.plant_name} ({result.confidence}% confidence)")

        if user_id:
            await self._save_history(user_id, result)

        return result

    async def _save_history(self, user_id: str, result: PlantIdentification) -> None:
        if self.repository is None:
            return
        try:
            await self.repository.create(IdentificationRecord.from_identification(user_id, result))
        except Exception as e:
            logger.warning(f"Failed to save identification to history: {e}", extra={'user_id': user_id})

    async def get_history(self, user_id: str, limit: int = 50) -> List[IdentificationRecord]:
        """Saved identifications for a user, newest first"""
        if self.repository is None:
            return []
        return await self.repository.list_for_user(user_id, limit=limit)
