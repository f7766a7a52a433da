# 📄 File: growsmart/client/plant_scan.py
# 🧭 Purpose (Layman Explanation):
# The farmer's side of plant scanning: checks the photo isn't too big, sends it for
# identification and turns the answer into easy care cards and tips.
# 🧪 Purpose (Technical Summary):
# Client plant-scan flow: 10 MB pre-check before any request, multipart upload of field "image"
# to /plants/identify, server error extraction and mapping of the body onto PlantResult,
# with notices for every outcome.
# 🔗 Dependencies:
# - growsmart.shared.infrastructure.external_apis.api_client
# - growsmart.shared.utils.validators, plant_identification care_advice
# 🔄 Connected Modules / Calls From:
# Scripts and tools embedding plant identification

import mimetypes
from typing import List, Optional

from growsmart.modules.plant_identification.domain.models.plant import PlantResult
from growsmart.modules.plant_identification.domain.services.care_advice import build_plant_result
from growsmart.shared.core.exceptions import ExternalAPIError, FileTooLargeError
from growsmart.shared.infrastructure.external_apis.api_client import APIClient
from growsmart.shared.utils.logging import get_logger
from growsmart.shared.utils.validators import MAX_IMAGE_SIZE, validate_image_size

from .error_guidance import server_error_message
from .notices import Notice, NoticeVariant

logger = get_logger(__name__)

IDENTIFY_ENDPOINT = "plants/identify"


class PlantScanner:
    """Identify plant photos through the Grow Smart API."""

    def __init__(self, client: APIClient, max_image_size: int = MAX_IMAGE_SIZE):
        self.client = client
        self.max_image_size = max_image_size
        self.is_analyzing = False
        self.notices: List[Notice] = []
        self.result: Optional[PlantResult] = None

    def _fail(self, title: str, description: str) -> None:
        self.notices.append(Notice(title=title, description=description, variant=NoticeVariant.DESTRUCTIVE))

    async def scan(
        self,
        image_data: bytes,
        filename: str = "plant.jpg",
        content_type: Optional[str] = None,
    ) -> Optional[PlantResult]:
        """
        Identify a plant photo.

        Returns:
            PlantResult on success, None when the scan failed (see ``notices``)
        """
        try:
            validate_image_size(len(image_data), self.max_image_size, filename)
        except FileTooLargeError as e:
            self._fail("File too large", f"{e.message}.")
            return None

        content_type = content_type or mimetypes.guess_type(filename)[0] or "image/jpeg"
        self.is_analyzing = True
        try:
            logger.info("Sending plant identification request...", extra={'image_bytes': len(image_data)})
            data = await self.client.upload_file(
                IDENTIFY_ENDPOINT,
                file_data=image_data,
                filename=filename,
                field_name="image",
                content_type=content_type,
            )
        except ExternalAPIError as e:
            message = server_error_message(e)
            if message:
                logger.warning(f"Plant identification error: {message}")
                self._fail("Identification Failed", message)
            else:
                logger.error(f"Plant identification request failed: {e.message}")
                self._fail(
                    "Connection Error",
                    "Failed to connect to plant identification service. "
                    "Please check your internet connection.",
                )
            return None
        finally:
            self.is_analyzing = False

        if not isinstance(data, dict):
            self._fail("Analysis Failed", "An unexpected error occurred. Please try again with a clearer image.")
            return None

        if data.get("error"):
            error = data["error"]
            self._fail("Identification Failed", error.get("message") if isinstance(error, dict) else str(error))
            return None

        if not data.get("plantName"):
            self._fail(
                "No Plant Identified",
                "Could not identify the plant in the image. Please try a clearer photo.",
            )
            return None

        try:
            self.result = build_plant_result(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Plant identification response could not be read: {e}")
            self._fail("Analysis Failed", "An unexpected error occurred. Please try again with a clearer image.")
            return None

        self.notices.append(Notice(
            title="Plant Identified!",
            description=f"{self.result.name} identified with {self.result.confidence}% confidence.",
        ))
        return self.result
