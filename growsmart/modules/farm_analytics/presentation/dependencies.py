"""
Farm analytics dependencies.
"""

from fastapi import Depends

from ..domain.repositories.farm_repository import FarmActivityRepository, FarmRecordRepository
from ..domain.services.analytics_service import FarmAnalyticsService
from ..infrastructure.database.farm_repository_impl import (
    FarmActivityRepositoryImpl,
    FarmRecordRepositoryImpl,
)


def get_farm_record_repository() -> FarmRecordRepository:
    return FarmRecordRepositoryImpl()


def get_farm_activity_repository() -> FarmActivityRepository:
    return FarmActivityRepositoryImpl()


def get_analytics_service(
    records: FarmRecordRepository = Depends(get_farm_record_repository),
    activities: FarmActivityRepository = Depends(get_farm_activity_repository),
) -> FarmAnalyticsService:
    return FarmAnalyticsService(records, activities)
