"""
Advisory chat dependencies.
Resolve the shared OpenRouter client and build the chat services per request.
"""

from fastapi import Depends

from growsmart.shared.infrastructure.external_apis.api_client import (
    get_registered_client,
    register_api_client,
)

from ..domain.services.chat_service import ChatService
from ..domain.services.direct_test_service import DirectTestService
from ..infrastructure.external.openrouter_client import OPENROUTER_API_NAME, OpenRouterClient


def get_openrouter_client() -> OpenRouterClient:
    """Client registered at startup, or a new one registered on first use."""
    client = get_registered_client(OPENROUTER_API_NAME)
    if client is None:
        client = register_api_client(OpenRouterClient())
    return client


def get_chat_service(client: OpenRouterClient = Depends(get_openrouter_client)) -> ChatService:
    return ChatService(client)


def get_direct_test_service(
    client: OpenRouterClient = Depends(get_openrouter_client),
) -> DirectTestService:
    return DirectTestService(client)
