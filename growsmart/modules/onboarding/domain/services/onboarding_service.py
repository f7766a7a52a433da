"""
Language onboarding service.
Lists the supported languages and stores the one a farmer picks.
"""

from typing import List

from growsmart.shared.core.exceptions import NotFoundError, ValidationError
from growsmart.shared.utils.logging import get_logger

from ..models.language import SUPPORTED_LANGUAGES, Language, get_language
from ..repositories.profile_repository import ProfileRepository

logger = get_logger(__name__)


class OnboardingService:
    def __init__(self, profiles: ProfileRepository):
        self.profiles = profiles

    @staticmethod
    def list_languages() -> List[Language]:
        return list(SUPPORTED_LANGUAGES)

    async def set_preferred_language(self, user_id: str, code: str) -> Language:
        """
        Validate and store a user's preferred language.

        Raises:
            ValidationError: Unknown language code
            NotFoundError: The user has no profile row
        """
        language = get_language(code)
        if language is None:
            raise ValidationError(
                f"Unsupported language: {code}",
                field="language",
                value=code,
                constraint="one of " + ", ".join(l.code for l in SUPPORTED_LANGUAGES),
            )

        updated = await self.profiles.update_preferred_language(user_id, language.code)
        if not updated:
            raise NotFoundError("Profile not found", resource_type="profile", resource_id=user_id)

        logger.info(f"🌐 User {user_id} selected {language.name}")
        return language
