# 📄 File: growsmart/modules/farm_analytics/presentation/api/v1/analytics.py
# 🧭 Purpose (Layman Explanation):
# The web doors of the farm analytics page: list and add season records, see the activity log
# and get the profit and yield summary.
#
# 🧪 Purpose (Technical Summary):
# FastAPI farm analytics endpoints, all scoped to the authenticated user.
#
# 🔗 Dependencies:
# - FastAPI router
# - farm_analytics.domain.services.analytics_service
# - growsmart.shared.core.dependencies (get_current_user)
#
# 🔄 Connected Modules / Calls From:
# - growsmart.api.v1.router (router inclusion)

"""
Farm Analytics API Endpoints

Endpoints:
- GET /records: List farm records, latest planting first
- POST /records: Create a farm record
- GET /activities: List farm activities, latest first
- GET /summary: Profit, revenue, cost, yield efficiency, per-crop and per-month figures
"""

from fastapi import APIRouter, Depends, status

from growsmart.shared.core.dependencies import CurrentUser, get_current_user

from growsmart.modules.farm_analytics.domain.models.farm import AnalyticsSummary, FarmRecord
from growsmart.modules.farm_analytics.domain.services.analytics_service import FarmAnalyticsService
from growsmart.modules.farm_analytics.presentation.api.schemas.analytics_schemas import (
    FarmActivityListResponse,
    FarmRecordCreateRequest,
    FarmRecordListResponse,
)
from growsmart.modules.farm_analytics.presentation.dependencies import get_analytics_service

analytics_router = APIRouter()


@analytics_router.get(
    "/records",
    response_model=FarmRecordListResponse,
    summary="List farm records",
    responses={401: {"description": "Authentication required"}},
)
async def list_farm_records(
    current_user: CurrentUser = Depends(get_current_user),
    service: FarmAnalyticsService = Depends(get_analytics_service),
) -> FarmRecordListResponse:
    records = await service.list_records(current_user.user_id)
    return FarmRecordListResponse(items=records, total=len(records))


@analytics_router.post(
    "/records",
    response_model=FarmRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Create a farm record",
    responses={
        401: {"description": "Authentication required"},
        422: {"description": "Invalid record data"},
    },
)
async def create_farm_record(
    payload: FarmRecordCreateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    service: FarmAnalyticsService = Depends(get_analytics_service),
) -> FarmRecord:
    return await service.create_record(payload.to_domain(current_user.user_id))


@analytics_router.get(
    "/activities",
    response_model=FarmActivityListResponse,
    summary="List farm activities",
    responses={401: {"description": "Authentication required"}},
)
async def list_farm_activities(
    current_user: CurrentUser = Depends(get_current_user),
    service: FarmAnalyticsService = Depends(get_analytics_service),
) -> FarmActivityListResponse:
    activities = await service.list_activities(current_user.user_id)
    return FarmActivityListResponse(items=activities, total=len(activities))


@analytics_router.get(
    "/summary",
    response_model=AnalyticsSummary,
    summary="Farm analytics summary",
    responses={401: {"description": "Authentication required"}},
)
async def get_analytics_summary(
    current_user: CurrentUser = Depends(get_current_user),
    service: FarmAnalyticsService = Depends(get_analytics_service),
) -> AnalyticsSummary:
    return await service.get_summary(current_user.user_id)
