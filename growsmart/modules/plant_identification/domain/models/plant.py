# 📄 File: growsmart/modules/plant_identification/domain/models/plant.py
# 🧭 Purpose (Layman Explanation):
# Describes what we know after a plant photo is identified: its name, how sure we are, how to
# care for it, and the history of plants a farmer has scanned before.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for plant identification: the provider-independent identification
# result, persisted history rows and the structured care view built by the client.
# 🔗 Dependencies:
# pydantic, typing, enum, datetime
# 🔄 Connected Modules / Calls From:
# identification_service.py, care_advice.py, plant_identification_repository.py,
# plant_schemas.py, growsmart.client.plant_scan

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlantHealth(str, Enum):
    """Health categories shown for an identified plant"""
    HEALTHY = "healthy"
    DISEASED = "diseased"
    PEST = "pest"
    NUTRIENT_DEFICIENCY = "nutrient-deficiency"


class PlantIdentification(BaseModel):
    """Best match for an uploaded photo"""
    plant_name: str
    confidence: int = Field(..., ge=0, le=100)
    scientific_name: str = ""
    care_instructions: str
    health_status: str
    all_predictions: List[Dict[str, Any]] = Field(default_factory=list)


class IdentificationRecord(BaseModel):
    """Row of the plant_identifications table"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    user_id: str
    plant_name: str
    confidence_score: Optional[int] = None
    care_instructions: Optional[str] = None
    health_status: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_identification(cls, user_id: str, result: PlantIdentification) -> "IdentificationRecord":
        return cls(
            user_id=user_id,
            plant_name=result.plant_name,
            confidence_score=result.confidence,
            care_instructions=result.care_instructions,
            health_status=result.health_status,
        )

    def to_insert(self) -> Dict[str, Any]:
        """Columns written on insert; id and created_at come from the database"""
        return self.model_dump(exclude={"id", "created_at"})


class PlantCare(BaseModel):
    """Care advice split by topic"""
    watering: str
    sunlight: str
    fertilizer: str
    pruning: str


class PlantResult(BaseModel):
    """Structured view of an identification, as presented to the farmer"""
    name: str
    confidence: int
    scientific_name: Optional[str] = None
    health: PlantHealth
    care: PlantCare
    issues: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
