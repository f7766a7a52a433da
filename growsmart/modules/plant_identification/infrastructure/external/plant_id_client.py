# 📄 File: growsmart/modules/plant_identification/infrastructure/external/plant_id_client.py
# 🧭 Purpose (Layman Explanation):
# Sends a plant photo to the Plant.id recognition service and brings back its best guesses.
# 🧪 Purpose (Technical Summary):
# Plant.id identification client on top of the shared APIClient: Api-Key header auth and the
# JSON body with a base64 data URL image, similar images and common-name details.
# 🔗 Dependencies:
# - aiohttp (through APIClient), base64
# - growsmart.shared.infrastructure.external_apis.api_client
# 🔄 Connected Modules / Calls From:
# - plant_identification.domain.services.identification_service
# - plant_identification.presentation.dependencies, growsmart.main (lifespan registration)

import base64
from typing import Any, Dict, Optional

from growsmart.shared.config.settings import get_settings
from growsmart.shared.infrastructure.external_apis.api_client import APIClient
from growsmart.shared.utils.logging import get_logger

logger = get_logger(__name__)

PLANT_ID_API_NAME = "plant_id"


def to_data_url(image_data: bytes, mime_type: str = "image/jpeg") -> str:
    encoded = base64.b64encode(image_data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class PlantIdClient(APIClient):
    """Client for the Plant.id identification endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        settings = get_settings()
        # Plant.id authenticates with Api-Key, not a bearer token
        super().__init__(
            base_url=base_url or settings.PLANT_ID_API_URL,
            api_name=PLANT_ID_API_NAME,
            timeout=timeout or settings.EXTERNAL_API_TIMEOUT,
        )
        self.plant_id_key = api_key if api_key is not None else settings.PLANT_ID_API_KEY

    @property
    def configured(self) -> bool:
        return bool(self.plant_id_key and self.plant_id_key.strip())

    def _get_default_headers(self) -> Dict[str, str]:
        headers = super()._get_default_headers()
        if self.plant_id_key:
            headers['Api-Key'] = self.plant_id_key
        return headers

    async def identify(self, image_data: bytes, mime_type: str = "image/jpeg") -> Dict[str, Any]:
        """
        Identify the plant in an image.

        Args:
            image_data: Raw image bytes
            mime_type: MIME type used in the data URL

        Returns:
            Dict: Raw Plant.id response body
        """
        payload = {
            'images': [to_data_url(image_data, mime_type)],
            'similar_images': True,
            'plant_details': ['common_names'],
        }

        logger.info(
            "Calling Plant.id API...",
            extra={'image_bytes': len(image_data), 'mime_type': mime_type},
        )
        return await self.post('', data=payload)
