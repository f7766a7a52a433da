# 📄 File: growsmart/modules/advisory_chat/domain/models/chat.py
# 🧭 Purpose (Layman Explanation):
# Describes the pieces of a farming conversation: who the farmer is (where they farm, what they grow)
# and what the AI answered back.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for the advisory chat: farmer context forwarded with each question,
# OpenRouter message/completion shapes and the reply returned to callers.
# 🔗 Dependencies:
# pydantic, typing, enum
# 🔄 Connected Modules / Calls From:
# prompts.py, chat_service.py, direct_test_service.py, openrouter_client.py, chat_schemas.py

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRole(str, Enum):
    """Roles understood by the chat completion API"""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Single message sent to the completion API"""
    model_config = ConfigDict(use_enum_values=True)

    role: ChatRole
    content: str


class UserContext(BaseModel):
    """
    Farmer profile facts forwarded with a chat message.

    Every field is optional; the advisor prompt only mentions what is known.
    """
    model_config = ConfigDict(extra="ignore")

    location: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    crop_types: List[str] = Field(default_factory=list)
    soil_type: Optional[str] = None
    region_type: Optional[str] = None
    preferred_language: Optional[str] = None
    role: Optional[str] = None

    @field_validator("crop_types", mode="before")
    @classmethod
    def split_crop_types(cls, v: Union[None, str, List[str]]) -> List[str]:
        """Accept a comma separated string as well as a list"""
        if v is None:
            return []
        if isinstance(v, str):
            return [crop.strip() for crop in v.split(",") if crop.strip()]
        return [str(crop).strip() for crop in v if str(crop).strip()]

    @property
    def language(self) -> str:
        return (self.preferred_language or "english").strip().lower() or "english"

    def describe(self) -> List[str]:
        """Human readable lines describing the farmer, skipping unknown facts"""
        lines = []
        place = ", ".join(part for part in (self.location, self.district, self.state) if part)
        if place:
            lines.append(f"Location: {place}")
        if self.crop_types:
            lines.append(f"Crops grown: {', '.join(self.crop_types)}")
        if self.soil_type:
            lines.append(f"Soil type: {self.soil_type}")
        if self.region_type:
            lines.append(f"Region type: {self.region_type}")
        if self.role:
            lines.append(f"Role: {self.role}")
        return lines


class ChatReply(BaseModel):
    """
    Outcome of a chat request.

    Exactly one of ``response`` (the model's answer) or ``user_message``
    (preformatted guidance for a handled failure) is set.
    """
    response: Optional[str] = None
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
    user_message: Optional[str] = None
