# 📄 File: growsmart/modules/plant_identification/domain/repositories/plant_identification_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the rules for saving and finding a farmer's past plant scans.
# 🧪 Purpose (Technical Summary):
# Repository interface for plant identification history records following the Repository pattern.
# 🔗 Dependencies:
# Domain models (IdentificationRecord), typing, abc
# 🔄 Connected Modules / Calls From:
# identification_service.py, infrastructure.database.plant_identification_repository_impl

from abc import ABC, abstractmethod
from typing import List

from ..models.plant import IdentificationRecord


class PlantIdentificationRepository(ABC):
    """
    Repository interface for plant identification history.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain records, not raw rows
    """

    @abstractmethod
    async def create(self, record: IdentificationRecord) -> IdentificationRecord:
        """
        Save an identification.

        Raises:
            RepositoryError: If the insert fails
        """
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str, limit: int = 50) -> List[IdentificationRecord]:
        """
        Saved identifications for a user, newest first.

        Raises:
            RepositoryError: If the query fails
        """
        pass
