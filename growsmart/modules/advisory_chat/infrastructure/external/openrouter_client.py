# 📄 File: growsmart/modules/advisory_chat/infrastructure/external/openrouter_client.py
# 🧭 Purpose (Layman Explanation):
# This file is the messenger that carries a farmer's question to the OpenRouter AI service
# and brings the written answer back.
# 🧪 Purpose (Technical Summary):
# OpenRouter chat-completions client built on the shared APIClient. Adds the OpenRouter
# attribution headers, sends a per-request bearer key and maps 404 onto ModelNotFoundError.
# 🔗 Dependencies:
# - aiohttp (through APIClient)
# - growsmart.shared.infrastructure.external_apis.api_client
# - growsmart.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# - advisory_chat.domain.services.chat_service / direct_test_service
# - advisory_chat.presentation.dependencies (provider lookup)
# - growsmart.main (registered in lifespan)

from typing import Any, Dict, List, Optional

import aiohttp

from growsmart.shared.config.settings import get_settings
from growsmart.shared.core.exceptions import ModelNotFoundError
from growsmart.shared.infrastructure.external_apis.api_client import APIClient
from growsmart.shared.utils.logging import get_logger

from ...domain.models.chat import ChatMessage

logger = get_logger(__name__)

OPENROUTER_API_NAME = "openrouter"
COMPLETIONS_ENDPOINT = "chat/completions"


class OpenRouterClient(APIClient):
    """
    Client for the OpenRouter chat-completions API.

    The API key is supplied per request because callers may bring their
    own key; the server key is only a fallback chosen by the services.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        http_referer: Optional[str] = None,
        app_title: Optional[str] = None,
    ):
        settings = get_settings()
        super().__init__(
            base_url=base_url or settings.OPENROUTER_API_URL,
            api_name=OPENROUTER_API_NAME,
            timeout=timeout or settings.EXTERNAL_API_TIMEOUT,
        )
        self.http_referer = http_referer or settings.OPENROUTER_HTTP_REFERER
        self.app_title = app_title or settings.OPENROUTER_APP_TITLE

    def _get_default_headers(self) -> Dict[str, str]:
        headers = super()._get_default_headers()
        headers.update({
            'HTTP-Referer': self.http_referer,
            'X-Title': self.app_title,
            'User-Agent': 'GrowSmart-AI/1.0',
        })
        return headers

    async def _handle_response_status(self, response: aiohttp.ClientResponse):
        if response.status == 404:
            raise ModelNotFoundError(self.api_name)
        await super()._handle_response_status(response)

    async def create_completion(
        self,
        api_key: str,
        model: str,
        messages: List[ChatMessage],
        temperature: float = 0.7,
        max_tokens: int = 1000,
        top_p: Optional[float] = None,
        title: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Request a chat completion.

        Args:
            api_key: OpenRouter key sent as the bearer token
            model: Model identifier, e.g. 'meta-llama/llama-3.2-3b-instruct:free'
            messages: Conversation to complete
            temperature: Sampling temperature
            max_tokens: Upper bound on generated tokens
            top_p: Nucleus sampling cut-off, omitted when None
            title: Overrides the X-Title attribution header

        Returns:
            Dict: Raw completion body

        Raises:
            APIAuthenticationError: Key rejected (401/403)
            APIQuotaExceededError: Credits exhausted (402)
            APIRateLimitError: Throttled (429)
            ModelNotFoundError: Unknown model (404)
            APITimeoutError: No answer within the client timeout
            ExternalAPIError: Any other provider or network failure
        """
        payload: Dict[str, Any] = {
            'model': model,
            'messages': [message.model_dump() for message in messages],
            'temperature': temperature,
            'max_tokens': max_tokens,
            'stream': False,
        }
        if top_p is not None:
            payload['top_p'] = top_p

        headers = {'Authorization': f'Bearer {api_key}'}
        if title:
            headers['X-Title'] = title

        logger.debug(
            f"Requesting completion from {model}",
            extra={'model': model, 'message_count': len(messages)},
        )

        try:
            return await self.post(COMPLETIONS_ENDPOINT, data=payload, headers=headers)
        except ModelNotFoundError:
            raise ModelNotFoundError(self.api_name, model=model)


def extract_completion_content(data: Any) -> Optional[str]:
    """
    Pull ``choices[0].message.content`` out of a completion body.

    Returns:
        The stripped content, or None when the body is malformed or the content is blank
    """
    if not isinstance(data, dict):
        return None

    choices = data.get('choices')
    if not isinstance(choices, list) or not choices:
        return None

    first = choices[0]
    message = first.get('message') if isinstance(first, dict) else None
    content = message.get('content') if isinstance(message, dict) else None

    if not isinstance(content, str):
        return None

    content = content.strip()
    return content or None
