# 📄 File: growsmart/modules/farm_analytics/presentation/api/schemas/analytics_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes the form a farmer fills in to add a season record and the lists and totals the
# analytics page receives.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the farm analytics endpoints.
#
# 🔗 Dependencies:
# - pydantic
# - farm_analytics.domain.models.farm
#
# 🔄 Connected Modules / Calls From:
# - farm_analytics.presentation.api.v1.analytics

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from growsmart.modules.farm_analytics.domain.models.farm import (
    CropType,
    FarmActivity,
    FarmRecord,
)


class FarmRecordCreateRequest(BaseModel):
    """New farm record."""
    crop_type: CropType
    field_size: float = Field(..., gt=0, description="Field size in acres")
    planting_date: date
    harvest_date: Optional[date] = None
    expected_yield: Optional[float] = Field(None, ge=0)
    investment_cost: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = Field(None, max_length=2000)

    @model_validator(mode="after")
    def harvest_after_planting(self) -> "FarmRecordCreateRequest":
        if self.harvest_date and self.harvest_date < self.planting_date:
            raise ValueError("Harvest date cannot be before planting date")
        return self

    def to_domain(self, user_id: str) -> FarmRecord:
        return FarmRecord(user_id=user_id, **self.model_dump(mode="json"))


class FarmRecordListResponse(BaseModel):
    items: List[FarmRecord]
    total: int


class FarmActivityListResponse(BaseModel):
    items: List[FarmActivity]
    total: int
