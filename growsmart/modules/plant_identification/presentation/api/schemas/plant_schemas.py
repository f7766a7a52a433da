# 📄 File: growsmart/modules/plant_identification/presentation/api/schemas/plant_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the app gets back after a plant photo is identified and what a saved scan
# looks like in the history list.
#
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas for the identify and history endpoints, serialised with the
# camelCase keys the clients expect.
#
# 🔗 Dependencies:
# - pydantic
# - plant_identification.domain.models.plant
#
# 🔄 Connected Modules / Calls From:
# - plant_identification.presentation.api.v1.plants

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from growsmart.modules.plant_identification.domain.models.plant import (
    IdentificationRecord,
    PlantIdentification,
)


class PlantIdentificationResponse(BaseModel):
    """Identification result returned by POST /plants/identify."""
    model_config = ConfigDict(populate_by_name=True)

    plant_name: str = Field(..., alias="plantName")
    confidence: int
    scientific_name: str = Field("", alias="scientificName")
    care_instructions: str = Field(..., alias="careInstructions")
    health_status: str = Field(..., alias="healthStatus")
    all_predictions: List[Dict[str, Any]] = Field(default_factory=list, alias="allPredictions")

    @classmethod
    def from_domain(cls, result: PlantIdentification) -> "PlantIdentificationResponse":
        return cls(**result.model_dump())


class IdentificationHistoryItem(BaseModel):
    """One saved identification."""
    id: Optional[str] = None
    plant_name: str
    confidence_score: Optional[int] = None
    care_instructions: Optional[str] = None
    health_status: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_domain(cls, record: IdentificationRecord) -> "IdentificationHistoryItem":
        return cls(**record.model_dump(exclude={"user_id"}))


class IdentificationHistoryResponse(BaseModel):
    """Saved identifications, newest first."""
    items: List[IdentificationHistoryItem]
    total: int
