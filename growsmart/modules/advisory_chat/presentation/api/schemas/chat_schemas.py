# 📄 File: growsmart/modules/advisory_chat/presentation/api/schemas/chat_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what a chat question must look like when it arrives and what the answer looks like
# when it leaves, so the app and the server speak the same language.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the chat and direct-test endpoints. Field names follow
# the camelCase wire format (apiKey, userContext, userMessage) through aliases.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - advisory_chat.domain.models.chat (UserContext, ChatReply)
#
# 🔄 Connected Modules / Calls From:
# - advisory_chat.presentation.api.v1.chat

"""
Advisory Chat API Schemas

Request Schemas:
- ChatRequest: farmer question with optional model, key and profile context
- DirectTestRequest: direct-test question and language

Response Schemas:
- ChatResponse: model answer, or userMessage guidance for handled failures
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from growsmart.modules.advisory_chat.domain.models.chat import ChatReply, UserContext


class ChatRequest(BaseModel):
    """Chat question sent by the client."""
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1, description="Farmer's question")
    model: Optional[str] = Field(None, description="OpenRouter model id")
    api_key: Optional[str] = Field(None, alias="apiKey", description="Caller's OpenRouter key")
    user_context: Optional[UserContext] = Field(None, alias="userContext")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be blank")
        return v.strip()

    @field_validator("model")
    @classmethod
    def blank_model_is_default(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v


class ChatResponse(BaseModel):
    """
    Chat answer.

    ``response``/``model``/``usage`` on success, ``userMessage`` on handled errors.
    """
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    response: Optional[str] = None
    model: Optional[str] = None
    usage: Optional[Dict[str, Any]] = None
    user_message: Optional[str] = Field(None, alias="userMessage")

    @classmethod
    def from_reply(cls, reply: ChatReply) -> "ChatResponse":
        return cls(
            response=reply.response,
            model=reply.model,
            usage=reply.usage,
            user_message=reply.user_message,
        )


class DirectTestRequest(BaseModel):
    """Direct-test input."""
    question: Optional[str] = None
    language: Optional[str] = None
