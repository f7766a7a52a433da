# 📄 File: growsmart/modules/farm_analytics/domain/models/farm.py
# 🧭 Purpose (Layman Explanation):
# Describes a farmer's season records (what was planted, costs, harvest and profit), the
# day-to-day farm activities, and the summary numbers shown on the analytics page.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for farm records, farm activities and the aggregated analytics summary.
# 🔗 Dependencies:
# pydantic, typing, enum, datetime
# 🔄 Connected Modules / Calls From:
# analytics_service.py, farm repositories, analytics_schemas.py

from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CropType(str, Enum):
    """Crops a farm record can be created for"""
    RICE = "rice"
    WHEAT = "wheat"
    MAIZE = "maize"
    COTTON = "cotton"
    SUGARCANE = "sugarcane"
    VEGETABLES = "vegetables"
    FRUITS = "fruits"


class FarmRecord(BaseModel):
    """Row of the farm_records table"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    user_id: str
    crop_type: str
    field_size: Optional[float] = None
    planting_date: Optional[date] = None
    harvest_date: Optional[date] = None
    expected_yield: Optional[float] = None
    actual_yield: Optional[float] = None
    investment_cost: Optional[float] = None
    revenue: Optional[float] = None
    profit: Optional[float] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    def to_insert(self) -> Dict[str, Any]:
        """Columns written on insert, dates as ISO strings"""
        return self.model_dump(mode="json", exclude={"id", "created_at"}, exclude_none=True)


class FarmActivity(BaseModel):
    """Row of the farm_activities table"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    user_id: Optional[str] = None
    farm_record_id: Optional[str] = None
    activity_type: str
    activity_date: Optional[date] = None
    description: Optional[str] = None
    cost: Optional[float] = None
    created_at: Optional[datetime] = None


class CropPerformance(BaseModel):
    crop: str
    profit: float = 0
    revenue: float = 0
    count: int = 0


class MonthlyProfit(BaseModel):
    month: str
    profit: float = 0


class AnalyticsSummary(BaseModel):
    """Aggregated figures over a farmer's records and activities"""
    total_profit: float = 0
    total_revenue: float = 0
    total_cost: float = 0
    avg_yield_efficiency: float = 0
    crop_performance: List[CropPerformance] = Field(default_factory=list)
    monthly_profit: List[MonthlyProfit] = Field(default_factory=list)
    record_count: int = 0
    activity_count: int = 0
