# 📄 File: growsmart/client/chat_session.py
# 🧭 Purpose (Layman Explanation):
# The farmer's side of a chat with the AI advisor: it keeps the conversation, shows a "thinking"
# message, retries when the connection hiccups and explains clearly what to do when something
# goes wrong.
# 🧪 Purpose (Technical Summary):
# Client chat session over the Grow Smart API. Keeps the message list and loading flag,
# short-circuits without a stored API key, posts to /chat through retry_with_backoff
# (3 attempts, 1s/2s backoff, 30s per-attempt timeout, only timeouts and connection failures
# retried) and renders answers, userMessage guidance, the server's own error message
# or classified error guidance plus notices.
# 🔗 Dependencies:
# - growsmart.shared.infrastructure.external_apis (APIClient, retry_with_backoff)
# - growsmart.client.config_store, growsmart.client.error_guidance
# 🔄 Connected Modules / Calls From:
# Scripts and tools embedding the advisor chat

import asyncio
import itertools
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from growsmart.modules.advisory_chat.domain.models.chat import UserContext
from growsmart.shared.core.exceptions import ExternalAPIError, GrowSmartException
from growsmart.shared.infrastructure.external_apis.api_client import APIClient
from growsmart.shared.infrastructure.external_apis.retry import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TIMEOUT_SECONDS,
    is_transient_error,
    retry_with_backoff,
)
from growsmart.shared.utils.logging import get_logger

from .config_store import ClientConfigStore
from .error_guidance import classify_chat_error, server_error_message
from .notices import Notice, NoticeVariant

logger = get_logger(__name__)

CHAT_ENDPOINT = "chat"
LONG_RESPONSE_LENGTH = 100

API_KEY_REQUIRED_CONTENT = (
    "🔑 **API Key Required**\n\n"
    "Please configure your OpenRouter API key to start chatting with the AI.\n\n"
    "**Steps:**\n"
    "1. Open Settings (⚙️)\n"
    "2. Enter your OpenRouter API key\n"
    "3. Save and fetch models\n"
    "4. Select a model and start chatting!"
)

LOADING_CONTENT = (
    "🤖 **Processing your request...**\n\n"
    "⚡ Connecting to AI farm expert\n"
    "🧠 Analyzing your agricultural question\n"
    "📊 Preparing comprehensive response"
)

RETRY_CONTENT = (
    "🔄 **Retry Attempt {attempt}/{max_attempts}**\n\n"
    "⚡ Reconnecting to AI service\n"
    "🧠 Processing your question\n"
    "📊 Please wait a moment..."
)


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


class SessionMessage(BaseModel):
    id: str
    content: str
    sender: Sender
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatResponseError(GrowSmartException):
    """The chat endpoint answered without a usable response."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=502, error_code="CHAT_RESPONSE_ERROR")


def build_welcome_message(context: Optional[UserContext], full_name: Optional[str] = None) -> str:
    """Welcome text personalised with the farmer's name, place and crops."""
    context = context or UserContext()
    user_name = f" {full_name.split()[0]}" if full_name and full_name.strip() else ""
    location = (
        f" I see you're from {context.district}, {context.state}."
        if context.district and context.state else ""
    )
    crops = ", ".join(context.crop_types)
    crop_info = f" I see you grow {crops}." if crops else ""

    return (
        f"🌱 Welcome to your **AI Farm Assistant**{user_name}!{location}{crop_info}\n\n"
        "I'm your personalized agricultural assistant, ready to help with:\n\n"
        f"🌾 **Crop Management** - Planting, growing, and harvesting advice specific to your {crops or 'crops'}\n"
        f"🦠 **Disease & Pest Control** - Identify and treat plant issues in your {context.region_type or 'region'}\n"
        "🌡️ **Weather & Climate** - Local seasonal planning and adaptation\n"
        f"🌿 **Sustainable Practices** - Eco-friendly farming methods for {context.soil_type or 'your soil type'}\n"
        "💰 **Market Insights** - Current pricing and market trends\n\n"
        "I can provide advice specific to your location, crops, and farming conditions. "
        "What agricultural challenge can I help you solve today?"
    )


class ChatSession:
    """
    One farmer's conversation with the advisor.

    ``messages`` always starts with the welcome message. At most one request
    is in flight; ``is_loading`` is True while it runs.
    """

    def __init__(
        self,
        client: APIClient,
        config: Optional[ClientConfigStore] = None,
        user_context: Optional[UserContext] = None,
        full_name: Optional[str] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.config = config or ClientConfigStore()
        self.user_context = user_context
        self.max_attempts = max_attempts
        self.timeout_seconds = timeout_seconds
        self._sleep = sleep
        self._ids = itertools.count(1)

        self.is_loading = False
        self.notices: List[Notice] = []
        self.messages: List[SessionMessage] = [
            SessionMessage(id="1", content=build_welcome_message(user_context, full_name), sender=Sender.BOT)
        ]
        next(self._ids)

    def _append(self, content: str, sender: Sender = Sender.BOT, message_id: Optional[str] = None) -> SessionMessage:
        message = SessionMessage(id=message_id or str(next(self._ids)), content=content, sender=sender)
        self.messages.append(message)
        return message

    def _remove(self, message_id: str) -> None:
        self.messages = [m for m in self.messages if m.id != message_id]

    def _notify(self, title: str, description: str, variant: NoticeVariant = NoticeVariant.DEFAULT) -> None:
        self.notices.append(Notice(title=title, description=description, variant=variant))

    def _payload(self, message: str, api_key: str, model: str) -> Dict[str, Any]:
        return {
            "message": message,
            "model": model,
            "apiKey": api_key,
            "userContext": self.user_context.model_dump() if self.user_context else None,
        }

    async def send_message(self, text: str) -> Optional[SessionMessage]:
        """
        Send a question and append the bot's reply.

        Blank input is ignored. Without a stored API key the "API Key
        Required" guidance is appended and no request is made.

        Returns:
            The bot message appended for this question, or None for blank input
        """
        if not text or not text.strip():
            return None

        self._append(text, sender=Sender.USER)
        self.is_loading = True
        loading_id = f"loading-{next(self._ids)}"

        try:
            api_key = self.config.get_api_key()
            model = self.config.get_selected_model()

            if not api_key or not api_key.strip():
                logger.info("Chat message not sent: no OpenRouter API key configured")
                return self._append(API_KEY_REQUIRED_CONTENT)

            loading = self._append(LOADING_CONTENT, message_id=loading_id)

            def on_retry(attempt: int) -> None:
                loading.content = RETRY_CONTENT.format(attempt=attempt, max_attempts=self.max_attempts)

            payload = self._payload(text, api_key, model)
            logger.info(
                "🚀 Starting chat request",
                extra={'model': model, 'message_preview': text[:50]},
            )
            data = await retry_with_backoff(
                lambda: self.client.post(CHAT_ENDPOINT, data=payload),
                max_attempts=self.max_attempts,
                timeout_seconds=self.timeout_seconds,
                sleep=self._sleep,
                on_retry=on_retry,
                retry_if=is_transient_error,
            )
            self._remove(loading_id)

            return self._handle_response(data)

        except Exception as e:
            self._remove(loading_id)
            logger.error(f"💥 Chat request failed: {e}")
            error: Exception = e
            if isinstance(e, ExternalAPIError):
                message = server_error_message(e)
                if message:
                    error = ChatResponseError(message)
            guidance = classify_chat_error(error)
            self._notify(guidance.title, guidance.description, NoticeVariant.DESTRUCTIVE)
            return self._append(guidance.content)

        finally:
            self.is_loading = False

    def _handle_response(self, data: Any) -> SessionMessage:
        if not data or not isinstance(data, dict):
            raise ChatResponseError("No response data received from AI service")

        if data.get("userMessage"):
            return self._append(data["userMessage"])

        response = data.get("response")
        if not isinstance(response, str) or not response.strip():
            raise ChatResponseError("Empty response received from AI service")

        message = self._append(response)
        logger.info(
            "🎉 Added AI response",
            extra={'response_length': len(response), 'model': data.get('model')},
        )
        if len(response) > LONG_RESPONSE_LENGTH:
            self._notify("✅ Response Generated", "Got expert agricultural advice from your AI assistant!")
        return message
