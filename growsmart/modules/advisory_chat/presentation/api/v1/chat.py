# 📄 File: growsmart/modules/advisory_chat/presentation/api/v1/chat.py
# 🧭 Purpose (Layman Explanation):
# The web doors for talking to the farming AI: one for normal questions and one that quickly
# checks whether the free AI models are answering at all.
#
# 🧪 Purpose (Technical Summary):
# FastAPI chat endpoints. POST /chat proxies a question to OpenRouter and always answers 200
# with either {response, model, usage} or {userMessage}. POST /chat/direct-test runs the
# multi-model check and mirrors its success/failure report.
#
# 🔗 Dependencies:
# - FastAPI router, slowapi limiter
# - advisory_chat.domain.services (ChatService, DirectTestService)
# - advisory_chat.presentation.api.schemas.chat_schemas
#
# 🔄 Connected Modules / Calls From:
# - growsmart.api.v1.router (router inclusion)
# - growsmart.client.chat_session (POST /chat)

"""
Advisory Chat API Endpoints

Endpoints:
- POST /chat: Ask the farming advisor a question
- POST /chat/direct-test: Try the free OpenRouter models in order
"""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from growsmart.shared.config.settings import get_settings
from growsmart.shared.core.exceptions import ConfigurationError
from growsmart.shared.core.rate_limiter import limiter
from growsmart.shared.utils.logging import get_logger

from growsmart.modules.advisory_chat.domain.services.chat_service import ChatService
from growsmart.modules.advisory_chat.domain.services.direct_test_service import DirectTestService
from growsmart.modules.advisory_chat.presentation.api.schemas.chat_schemas import (
    ChatRequest,
    ChatResponse,
    DirectTestRequest,
)
from growsmart.modules.advisory_chat.presentation.dependencies import (
    get_chat_service,
    get_direct_test_service,
)

logger = get_logger(__name__)
settings = get_settings()

chat_router = APIRouter()


@chat_router.post(
    "",
    response_model=ChatResponse,
    response_model_exclude_none=True,
    response_model_by_alias=True,
    summary="Ask the farming advisor",
    description="Forward a farming question to OpenRouter, personalised with the farmer's context",
    responses={
        200: {"description": "Model answer, or userMessage guidance for handled provider failures"},
        422: {"description": "Missing or blank message"},
        429: {"description": "Rate limit exceeded"},
    },
)
@limiter.limit(settings.AI_CHAT_RATE_LIMIT)
async def chat(
    request: Request,
    payload: ChatRequest,
    service: ChatService = Depends(get_chat_service),
) -> ChatResponse:
    """
    Answer a farmer's question.

    Provider failures (invalid key, no credits, rate limiting, unknown model,
    timeout, empty completion) are reported through ``userMessage`` with
    status 200 so the client can show the guidance as a chat message.
    """
    reply = await service.ask(
        message=payload.message,
        model=payload.model,
        api_key=payload.api_key,
        user_context=payload.user_context,
    )
    return ChatResponse.from_reply(reply)


@chat_router.post(
    "/direct-test",
    summary="Try free OpenRouter models",
    description="Try each configured free model in turn and report the first useful answer",
    responses={
        200: {"description": "First successful answer, or the aggregated failure report"},
        500: {"description": "OpenRouter not configured or unexpected failure"},
    },
)
@limiter.limit(settings.AI_CHAT_RATE_LIMIT)
async def direct_test(
    request: Request,
    service: DirectTestService = Depends(get_direct_test_service),
) -> Any:
    """
    Run the direct OpenRouter test.

    The body is optional; an unparsable body uses the default rice
    fertilizer question in English.
    """
    test_request = await _read_direct_test_request(request)

    try:
        return await service.run(question=test_request.question, language=test_request.language)
    except ConfigurationError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": e.message},
        )
    except Exception as e:
        logger.error(f"🚨 CRITICAL ERROR in direct test: {e}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "success": False,
                "error": "Critical function error",
                "details": str(e),
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
        )


async def _read_direct_test_request(request: Request) -> DirectTestRequest:
    try:
        body: Dict[str, Any] = await request.json()
        return DirectTestRequest.model_validate(body)
    except ValueError:
        logger.info("Direct test body missing or invalid, using defaults")
        return DirectTestRequest()
