# 📄 File: growsmart/modules/advisory_chat/domain/services/chat_service.py
# 🧭 Purpose (Layman Explanation):
# This is the farming advisor's brain: it picks which API key to use, asks the AI the farmer's
# question with their farm details attached, and turns any provider problem into friendly advice
# on what to do next.
# 🧪 Purpose (Technical Summary):
# Chat use case. Resolves the OpenRouter key (caller key, then server key), builds the
# personalised [system, user] conversation, calls OpenRouter and maps provider exceptions and
# malformed completions onto preformatted userMessage guidance.
# 🔗 Dependencies:
# - advisory_chat.infrastructure.external.openrouter_client
# - advisory_chat.domain.services.prompts
# - growsmart.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# - advisory_chat.presentation.api.v1.chat (POST /chat)

from typing import Optional

from growsmart.shared.config.settings import Settings, get_settings
from growsmart.shared.core.exceptions import (
    APIAuthenticationError,
    APIQuotaExceededError,
    APIRateLimitError,
    APITimeoutError,
    ExternalAPIError,
    ModelNotFoundError,
)
from growsmart.shared.utils.logging import get_logger

from ..models.chat import ChatReply, UserContext
from ...infrastructure.external.openrouter_client import (
    OpenRouterClient,
    extract_completion_content,
)
from .prompts import build_chat_messages

logger = get_logger(__name__)

API_KEY_REQUIRED_MESSAGE = (
    "🔑 **API Key Required**\n\n"
    "Please configure your OpenRouter API key to start chatting with the AI.\n\n"
    "**Steps:**\n"
    "1. Open Settings (⚙️)\n"
    "2. Enter your OpenRouter API key\n"
    "3. Save and select a model\n"
    "4. Ask your farming question again!"
)

INVALID_KEY_MESSAGE = (
    "🔑 **Invalid API Key**\n\n"
    "OpenRouter rejected the API key (401). Please check the key in Settings, "
    "generate a new one if needed and save it again."
)

INSUFFICIENT_CREDITS_MESSAGE = (
    "💳 **Insufficient Credits**\n\n"
    "Your OpenRouter account is out of credits (402).\n\n"
    "**Solutions:**\n"
    "1. 💰 Add credits to your OpenRouter account\n"
    "2. 🆓 Switch to a free model in Settings"
)

RATE_LIMITED_MESSAGE = (
    "⏰ **Too Many Requests**\n\n"
    "The AI service is receiving too many requests right now (429). "
    "Please wait a minute and try again, or switch to a different model."
)

MODEL_UNAVAILABLE_MESSAGE = (
    "🔍 **Model Unavailable**\n\n"
    "The selected model `{model}` is not available (404). "
    "Please choose another model in Settings."
)

TIMEOUT_MESSAGE = (
    "🕐 **Connection Timeout**\n\n"
    "The AI service took too long to respond. Try a simpler question, "
    "switch to a faster model or try again in a few moments."
)

SERVICE_ERROR_MESSAGE = (
    "🚨 **AI Service Error**\n\n"
    "The AI service could not answer right now. Please try again in a moment "
    "or try a different model."
)

EMPTY_RESPONSE_MESSAGE = (
    "🤔 **Empty Response**\n\n"
    "The AI model returned an empty answer. Please rephrase your question "
    "or try a different model."
)


class ChatService:
    """
    Answers farmer questions through OpenRouter.

    Every handled failure produces a ChatReply carrying ``user_message``
    instead of raising, so the endpoint can always answer with 200.
    """

    def __init__(self, client: OpenRouterClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()

    def resolve_api_key(self, api_key: Optional[str]) -> Optional[str]:
        """Caller key when non-blank, otherwise the server key"""
        if api_key and api_key.strip():
            return api_key.strip()
        if self.settings.openrouter_configured:
            return self.settings.OPENROUTER_API_KEY.strip()
        return None

    async def ask(
        self,
        message: str,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        user_context: Optional[UserContext] = None,
    ) -> ChatReply:
        """
        Send a question to the advisor model.

        Args:
            message: The farmer's question
            model: OpenRouter model id, defaults to OPENROUTER_DEFAULT_MODEL
            api_key: Caller's OpenRouter key
            user_context: Farmer profile facts used to personalise the prompt

        Returns:
            ChatReply with either the answer or preformatted guidance
        """
        model = model or self.settings.OPENROUTER_DEFAULT_MODEL
        key = self.resolve_api_key(api_key)
        if not key:
            logger.warning("Chat request rejected: no OpenRouter API key available")
            return ChatReply(user_message=API_KEY_REQUIRED_MESSAGE)

        context = user_context or UserContext()
        messages = build_chat_messages(message, context)

        logger.info(
            f"🤖 Chat request for model {model}",
            extra={'model': model, 'language': context.language, 'message_length': len(message)},
        )

        try:
            data = await self.client.create_completion(
                api_key=key,
                model=model,
                messages=messages,
                temperature=self.settings.CHAT_TEMPERATURE,
                max_tokens=self.settings.CHAT_MAX_TOKENS,
            )
        except APIAuthenticationError as e:
            logger.warning(f"OpenRouter rejected API key: {e.message}")
            return ChatReply(user_message=INVALID_KEY_MESSAGE)
        except APIQuotaExceededError as e:
            logger.warning(f"OpenRouter credits exhausted: {e.message}")
            return ChatReply(user_message=INSUFFICIENT_CREDITS_MESSAGE)
        except APIRateLimitError as e:
            logger.warning(f"OpenRouter rate limited: {e.message}")
            return ChatReply(user_message=RATE_LIMITED_MESSAGE)
        except ModelNotFoundError as e:
            logger.warning(f"OpenRouter model not found: {e.message}")
            return ChatReply(user_message=MODEL_UNAVAILABLE_MESSAGE.format(model=model))
        except APITimeoutError as e:
            logger.warning(f"OpenRouter request timed out: {e.message}")
            return ChatReply(user_message=TIMEOUT_MESSAGE)
        except ExternalAPIError as e:
            logger.error(f"OpenRouter request failed: {e.message}", extra={'details': e.details})
            return ChatReply(user_message=SERVICE_ERROR_MESSAGE)

        content = extract_completion_content(data)
        if not content:
            logger.warning(f"Empty or malformed completion from {model}")
            return ChatReply(user_message=EMPTY_RESPONSE_MESSAGE)

        answered_model = data.get('model') or model
        logger.info(
            f"✅ Chat answered by {answered_model}",
            extra={'model': answered_model, 'response_length': len(content)},
        )
        return ChatReply(response=content, model=answered_model, usage=data.get('usage'))
