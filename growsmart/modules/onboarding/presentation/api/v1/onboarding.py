# 📄 File: growsmart/modules/onboarding/presentation/api/v1/onboarding.py
# 🧭 Purpose (Layman Explanation):
# The web doors for the welcome screen: show the languages a farmer can choose and remember
# the one they pick.
#
# 🧪 Purpose (Technical Summary):
# FastAPI onboarding endpoints: public language catalogue and authenticated preferred-language
# update on the caller's profile.
#
# 🔗 Dependencies:
# - FastAPI router
# - onboarding.domain.services.onboarding_service
# - growsmart.shared.core.dependencies (get_current_user)
#
# 🔄 Connected Modules / Calls From:
# - growsmart.api.v1.router (router inclusion)

from fastapi import APIRouter, Depends

from growsmart.shared.core.dependencies import CurrentUser, get_current_user

from growsmart.modules.onboarding.domain.services.onboarding_service import OnboardingService
from growsmart.modules.onboarding.presentation.api.schemas.onboarding_schemas import (
    LanguageListResponse,
    LanguageUpdateRequest,
    LanguageUpdateResponse,
)
from growsmart.modules.onboarding.presentation.dependencies import get_onboarding_service

onboarding_router = APIRouter()


@onboarding_router.get(
    "/languages",
    response_model=LanguageListResponse,
    summary="List supported languages",
)
async def list_languages() -> LanguageListResponse:
    languages = OnboardingService.list_languages()
    return LanguageListResponse(languages=languages, total=len(languages))


@onboarding_router.put(
    "/language",
    response_model=LanguageUpdateResponse,
    summary="Set preferred language",
    responses={
        400: {"description": "Unsupported language"},
        401: {"description": "Authentication required"},
        404: {"description": "Profile not found"},
    },
)
async def set_preferred_language(
    payload: LanguageUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: OnboardingService = Depends(get_onboarding_service),
) -> LanguageUpdateResponse:
    language = await service.set_preferred_language(current_user.user_id, payload.language)
    return LanguageUpdateResponse(preferred_language=language.code, language=language)
