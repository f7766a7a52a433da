# 📄 File: growsmart/modules/farm_analytics/domain/repositories/farm_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the rules for saving and finding a farmer's season records and farm activities.
# 🧪 Purpose (Technical Summary):
# Repository interfaces for FarmRecord and FarmActivity entities following the Repository pattern.
# 🔗 Dependencies:
# Domain models (FarmRecord, FarmActivity), typing, abc
# 🔄 Connected Modules / Calls From:
# analytics_service.py, infrastructure.database.farm_repository_impl

from abc import ABC, abstractmethod
from typing import List

from ..models.farm import FarmActivity, FarmRecord


class FarmRecordRepository(ABC):
    """Repository interface for farm records."""

    @abstractmethod
    async def create(self, record: FarmRecord) -> FarmRecord:
        """
        Create a farm record.

        Raises:
            RepositoryError: If the insert fails
        """
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[FarmRecord]:
        """Farm records of a user ordered by planting date, latest first."""
        pass


class FarmActivityRepository(ABC):
    """Repository interface for farm activities."""

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[FarmActivity]:
        """Farm activities of a user ordered by activity date, latest first."""
        pass
