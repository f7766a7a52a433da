# 📄 File: growsmart/modules/farm_analytics/infrastructure/database/farm_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Reads and writes a farmer's season records and activity log in the database.
#
# 🧪 Purpose (Technical Summary):
# Supabase (PostgREST) implementations of FarmRecordRepository and FarmActivityRepository over
# the farm_records and farm_activities tables.
#
# 🔗 Dependencies:
# - supabase client, postgrest APIError
# - farm_analytics.domain.repositories.farm_repository (interfaces)
#
# 🔄 Connected Modules / Calls From:
# - farm_analytics.presentation.dependencies (repository injection)

import logging
from typing import List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from growsmart.shared.core.dependencies import get_database
from growsmart.shared.core.exceptions import RepositoryError

from growsmart.modules.farm_analytics.domain.models.farm import FarmActivity, FarmRecord
from growsmart.modules.farm_analytics.domain.repositories.farm_repository import (
    FarmActivityRepository,
    FarmRecordRepository,
)

logger = logging.getLogger(__name__)


class _SupabaseRepository:
    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_database()
        return self._client

    def _select_for_user(self, table: str, user_id: str, order_by: str, entity: str) -> list:
        try:
            response = (
                self.client.table(table)
                .select("*")
                .eq("user_id", user_id)
                .order(order_by, desc=True)
                .execute()
            )
        except APIError as e:
            logger.error(f"Failed to load {table} for user {user_id}: {e}")
            raise RepositoryError(f"Failed to load {entity} data: {e.message}", operation="list", entity=entity)
        return response.data or []


class FarmRecordRepositoryImpl(_SupabaseRepository, FarmRecordRepository):
    """Supabase implementation of FarmRecordRepository."""

    TABLE_NAME = "farm_records"

    async def create(self, record: FarmRecord) -> FarmRecord:
        try:
            response = self.client.table(self.TABLE_NAME).insert(record.to_insert()).execute()
        except APIError as e:
            logger.error(f"Failed to create farm record for user {record.user_id}: {e}")
            raise RepositoryError(
                f"Failed to create farm record: {e.message}",
                operation="create",
                entity="farm_record",
            )

        rows = response.data or []
        logger.info(f"Created {record.crop_type} farm record for user {record.user_id}")
        return FarmRecord.model_validate(rows[0]) if rows else record

    async def list_for_user(self, user_id: str) -> List[FarmRecord]:
        rows = self._select_for_user(self.TABLE_NAME, user_id, "planting_date", "farm_record")
        return [FarmRecord.model_validate(row) for row in rows]


class FarmActivityRepositoryImpl(_SupabaseRepository, FarmActivityRepository):
    """Supabase implementation of FarmActivityRepository."""

    TABLE_NAME = "farm_activities"

    async def list_for_user(self, user_id: str) -> List[FarmActivity]:
        rows = self._select_for_user(self.TABLE_NAME, user_id, "activity_date", "farm_activity")
        return [FarmActivity.model_validate(row) for row in rows]
