# 📄 File: growsmart/modules/onboarding/domain/repositories/profile_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines how the farmer's chosen language is saved on their profile.
# 🧪 Purpose (Technical Summary):
# Repository interface for the profile fields touched during onboarding.
# 🔗 Dependencies:
# typing, abc
# 🔄 Connected Modules / Calls From:
# onboarding_service.py, infrastructure.database.profile_repository_impl

from abc import ABC, abstractmethod


class ProfileRepository(ABC):
    """Repository interface for onboarding profile updates."""

    @abstractmethod
    async def update_preferred_language(self, user_id: str, language_code: str) -> bool:
        """
        Store the preferred language on the user's profile.

        Returns:
            True if a profile row was updated, False if the user has no profile

        Raises:
            RepositoryError: If the update fails
        """
        pass
