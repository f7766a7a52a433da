# 📄 File: growsmart/modules/onboarding/infrastructure/database/profile_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves the language a farmer picked onto their profile in the database.
#
# 🧪 Purpose (Technical Summary):
# Supabase (PostgREST) implementation of the onboarding ProfileRepository over the profiles table.
#
# 🔗 Dependencies:
# - supabase client, postgrest APIError
# - onboarding.domain.repositories.profile_repository (interface)
#
# 🔄 Connected Modules / Calls From:
# - onboarding.presentation.dependencies (repository injection)

import logging
from typing import Optional

from postgrest.exceptions import APIError
from supabase import Client

from growsmart.shared.core.dependencies import get_database
from growsmart.shared.core.exceptions import RepositoryError

from growsmart.modules.onboarding.domain.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)

TABLE_NAME = "profiles"


class ProfileRepositoryImpl(ProfileRepository):
    """Supabase implementation of the onboarding ProfileRepository."""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_database()
        return self._client

    async def update_preferred_language(self, user_id: str, language_code: str) -> bool:
        try:
            response = (
                self.client.table(TABLE_NAME)
                .update({"preferred_language": language_code})
                .eq("id", user_id)
                .execute()
            )
        except APIError as e:
            logger.error(f"Failed to update preferred language for user {user_id}: {e}")
            raise RepositoryError(
                f"Failed to update preferred language: {e.message}",
                operation="update",
                entity="profile",
            )

        updated = bool(response.data)
        if updated:
            logger.info(f"Preferred language for user {user_id} set to {language_code}")
        return updated
