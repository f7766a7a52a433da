# 📄 File: growsmart/modules/plant_identification/presentation/api/v1/plants.py
# 🧭 Purpose (Layman Explanation):
# The web doors for plant photos: upload a picture to learn what plant it is and how to care for
# it, and look back at the plants you identified before.
#
# 🧪 Purpose (Technical Summary):
# FastAPI plant identification endpoints: multipart upload proxied to Plant.id with optional
# history persistence, and the authenticated history listing.
#
# 🔗 Dependencies:
# - FastAPI router, File/UploadFile, slowapi limiter
# - plant_identification.domain.services.identification_service
# - growsmart.shared.core.dependencies (optional/required user)
#
# 🔄 Connected Modules / Calls From:
# - growsmart.api.v1.router (router inclusion)
# - growsmart.client.plant_scan (POST /plants/identify)

"""
Plant Identification API Endpoints

Endpoints:
- POST /identify: Identify the plant in an uploaded image (field "image")
- GET /history: List the caller's saved identifications
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile

from growsmart.shared.config.settings import get_settings
from growsmart.shared.core.dependencies import CurrentUser, get_current_user, get_optional_user
from growsmart.shared.core.rate_limiter import limiter
from growsmart.shared.utils.logging import get_logger

from growsmart.modules.plant_identification.domain.services.identification_service import (
    PlantIdentificationService,
)
from growsmart.modules.plant_identification.presentation.api.schemas.plant_schemas import (
    IdentificationHistoryItem,
    IdentificationHistoryResponse,
    PlantIdentificationResponse,
)
from growsmart.modules.plant_identification.presentation.dependencies import (
    get_identification_service,
)

logger = get_logger(__name__)
settings = get_settings()

plants_router = APIRouter()


@plants_router.post(
    "/identify",
    response_model=PlantIdentificationResponse,
    summary="Identify a plant from a photo",
    description="Upload a plant photo as multipart field 'image' and get its name and care advice",
    responses={
        200: {"description": "Plant identified"},
        400: {"description": "No image provided or file is not an image"},
        413: {"description": "Image larger than the upload limit"},
        429: {"description": "Rate limit exceeded"},
        500: {"description": "Service not configured, provider error or no plant identified"},
    },
)
@limiter.limit(settings.PLANT_ID_RATE_LIMIT)
async def identify_plant(
    request: Request,
    image: Optional[UploadFile] = File(None, description="Plant photo"),
    current_user: Optional[CurrentUser] = Depends(get_optional_user),
    service: PlantIdentificationService = Depends(get_identification_service),
) -> PlantIdentificationResponse:
    """
    Identify the plant in an uploaded image.

    Signed-in callers also get the result saved to their history; a failed
    save does not fail the request.
    """
    image_data = await image.read() if image is not None else b""
    filename = image.filename if image is not None else None

    result = await service.identify(
        image_data,
        filename=filename,
        user_id=current_user.user_id if current_user else None,
    )
    return PlantIdentificationResponse.from_domain(result)


@plants_router.get(
    "/history",
    response_model=IdentificationHistoryResponse,
    summary="List identification history",
    description="Saved plant identifications of the authenticated user, newest first",
    responses={
        200: {"description": "Saved identifications"},
        401: {"description": "Authentication required"},
    },
)
async def get_identification_history(
    limit: int = Query(50, ge=1, le=200, description="Maximum number of records"),
    current_user: CurrentUser = Depends(get_current_user),
    service: PlantIdentificationService = Depends(get_identification_service),
) -> IdentificationHistoryResponse:
    records = await service.get_history(current_user.user_id, limit=limit)
    items = [IdentificationHistoryItem.from_domain(record) for record in records]
    return IdentificationHistoryResponse(items=items, total=len(items))
