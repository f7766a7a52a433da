# 📄 File: growsmart/modules/farm_analytics/domain/services/analytics_service.py
# 🧭 Purpose (Layman Explanation):
# Adds up a farmer's seasons to show total profit, money spent and earned, how well harvests
# matched expectations, and which crops and months did best.
# 🧪 Purpose (Technical Summary):
# Farm analytics use case: record/activity listing and creation through the repositories plus
# the pure summarize() aggregation (totals, mean yield efficiency, per-crop and per-month profit).
# 🔗 Dependencies:
# farm_analytics.domain.models.farm, farm_analytics.domain.repositories
# 🔄 Connected Modules / Calls From:
# farm_analytics.presentation.api.v1.analytics

from collections import OrderedDict
from typing import List, Sequence

from growsmart.shared.utils.logging import get_logger

from ..models.farm import (
    AnalyticsSummary,
    CropPerformance,
    FarmActivity,
    FarmRecord,
    MonthlyProfit,
)
from ..repositories.farm_repository import FarmActivityRepository, FarmRecordRepository

logger = get_logger(__name__)


def _amount(value) -> float:
    return float(value or 0)


def average_yield_efficiency(records: Sequence[FarmRecord]) -> float:
    """
    Mean of actual/expected yield as a percentage.

    Only records with both a non-zero expected and actual yield count;
    0 when none do.
    """
    efficiencies = [
        record.actual_yield / record.expected_yield * 100
        for record in records
        if record.expected_yield and record.actual_yield
    ]
    if not efficiencies:
        return 0.0
    return sum(efficiencies) / len(efficiencies)


def crop_performance(records: Sequence[FarmRecord]) -> List[CropPerformance]:
    """Profit, revenue and record count per crop, in first-seen order"""
    by_crop: "OrderedDict[str, CropPerformance]" = OrderedDict()
    for record in records:
        entry = by_crop.setdefault(record.crop_type, CropPerformance(crop=record.crop_type))
        entry.profit += _amount(record.profit)
        entry.revenue += _amount(record.revenue)
        entry.count += 1
    return list(by_crop.values())


def monthly_profit(records: Sequence[FarmRecord]) -> List[MonthlyProfit]:
    """Profit per harvest month labelled like 'Jan 2024'; records without a harvest date are skipped"""
    by_month: "OrderedDict[str, MonthlyProfit]" = OrderedDict()
    for record in records:
        if not record.harvest_date:
            continue
        label = record.harvest_date.strftime("%b %Y")
        entry = by_month.setdefault(label, MonthlyProfit(month=label))
        entry.profit += _amount(record.profit)
    return list(by_month.values())


def summarize(records: Sequence[FarmRecord], activities: Sequence[FarmActivity] = ()) -> AnalyticsSummary:
    return AnalyticsSummary(
        total_profit=sum(_amount(r.profit) for r in records),
        total_revenue=sum(_amount(r.revenue) for r in records),
        total_cost=sum(_amount(r.investment_cost) for r in records),
        avg_yield_efficiency=average_yield_efficiency(records),
        crop_performance=crop_performance(records),
        monthly_profit=monthly_profit(records),
        record_count=len(records),
        activity_count=len(activities),
    )


class FarmAnalyticsService:
    """Farm records, activities and their summary for one user."""

    def __init__(self, records: FarmRecordRepository, activities: FarmActivityRepository):
        self.records = records
        self.activities = activities

    async def list_records(self, user_id: str) -> List[FarmRecord]:
        return await self.records.list_for_user(user_id)

    async def create_record(self, record: FarmRecord) -> FarmRecord:
        created = await self.records.create(record)
        logger.log_business_event(
            "farm_record_created",
            f"Farm record created for {record.crop_type}",
            entity_id=created.id,
            entity_type="farm_record",
            extra={'user_id': record.user_id, 'crop_type': record.crop_type},
        )
        return created

    async def list_activities(self, user_id: str) -> List[FarmActivity]:
        return await self.activities.list_for_user(user_id)

    async def get_summary(self, user_id: str) -> AnalyticsSummary:
        records = await self.records.list_for_user(user_id)
        activities = await self.activities.list_for_user(user_id)
        return summarize(records, activities)
