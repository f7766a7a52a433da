"""
Language onboarding API schemas.
"""

from typing import List

from pydantic import BaseModel, Field

from growsmart.modules.onboarding.domain.models.language import Language


class LanguageListResponse(BaseModel):
    languages: List[Language]
    total: int


class LanguageUpdateRequest(BaseModel):
    language: str = Field(..., min_length=1, max_length=32, description="Language code, e.g. 'tamil'")


class LanguageUpdateResponse(BaseModel):
    preferred_language: str
    language: Language
