# 📄 File: growsmart/modules/plant_identification/infrastructure/database/plant_identification_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Stores each plant a signed-in farmer identifies so they can look back at their scans later.
#
# 🧪 Purpose (Technical Summary):
# Supabase (PostgREST) implementation of PlantIdentificationRepository over the
# plant_identifications table.
#
# 🔗 Dependencies:
# - supabase client, postgrest APIError
# - plant_identification.domain.repositories.plant_identification_repository (interface)
#
# 🔄 Connected Modules / Calls From:
# - plant_identification.presentation.dependencies (repository injection)

"""
Plant Identification Repository Implementation

Maps IdentificationRecord entities onto rows of the plant_identifications table.
"""

import logging
from typing import List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from growsmart.shared.core.dependencies import get_database
from growsmart.shared.core.exceptions import RepositoryError

from growsmart.modules.plant_identification.domain.models.plant import IdentificationRecord
from growsmart.modules.plant_identification.domain.repositories.plant_identification_repository import (
    PlantIdentificationRepository,
)

logger = logging.getLogger(__name__)

TABLE_NAME = "plant_identifications"


class PlantIdentificationRepositoryImpl(PlantIdentificationRepository):
    """Supabase implementation of the PlantIdentificationRepository interface."""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_database()
        return self._client

    async def create(self, record: IdentificationRecord) -> IdentificationRecord:
        try:
            response = self.client.table(TABLE_NAME).insert(record.to_insert()).execute()
        except APIError as e:
            logger.error(f"Failed to save plant identification for user {record.user_id}: {e}")
            raise RepositoryError(
                f"Failed to save plant identification: {e.message}",
                operation="create",
                entity="plant_identification",
            )

        rows = response.data or []
        logger.info(f"Saved plant identification '{record.plant_name}' for user {record.user_id}")
        return IdentificationRecord.model_validate(rows[0]) if rows else record

    async def list_for_user(self, user_id: str, limit: int = 50) -> List[IdentificationRecord]:
        try:
            response = (
                self.client.table(TABLE_NAME)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
        except APIError as e:
            logger.error(f"Failed to load plant identifications for user {user_id}: {e}")
            raise RepositoryError(
                f"Failed to load plant identifications: {e.message}",
                operation="list",
                entity="plant_identification",
            )

        return [IdentificationRecord.model_validate(row) for row in response.data or []]
