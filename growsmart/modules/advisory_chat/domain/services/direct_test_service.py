# 📄 File: growsmart/modules/advisory_chat/domain/services/direct_test_service.py
# 🧭 Purpose (Layman Explanation):
# A quick health check for the AI service: it asks the same farming question to several free
# AI models one after another and reports the first one that gives a real answer.
# 🧪 Purpose (Technical Summary):
# Direct-test use case. Walks OPENROUTER_DIRECT_TEST_MODELS with the server key, logs a
# diagnosis for each failing status, and returns either the first successful answer with
# debug data or an aggregated failure report.
# 🔗 Dependencies:
# - advisory_chat.infrastructure.external.openrouter_client
# - advisory_chat.domain.services.prompts
# 🔄 Connected Modules / Calls From:
# - advisory_chat.presentation.api.v1.chat (POST /chat/direct-test)

import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from growsmart.shared.config.settings import Settings, get_settings
from growsmart.shared.core.exceptions import ConfigurationError, ExternalAPIError
from growsmart.shared.utils.logging import get_logger

from ..models.chat import ChatMessage, ChatRole
from ...infrastructure.external.openrouter_client import (
    OpenRouterClient,
    extract_completion_content,
)
from .prompts import DEFAULT_LANGUAGE, build_direct_test_prompt

logger = get_logger(__name__)

DEFAULT_QUESTION = "What fertilizer is best for rice farming?"
DIRECT_TEST_TITLE = "GrowSmart AI Direct Test"
MIN_RESPONSE_LENGTH = 5
# create_completion raises for every non-2xx status and OpenRouter answers
# completions with 200, so a returned body always reports this status
COMPLETION_OK_STATUS = 200
KEY_PREVIEW_LENGTH = 25

STATUS_DIAGNOSES = {
    401: "🚨 AUTHENTICATION ERROR - Invalid API key",
    402: "💳 PAYMENT REQUIRED - Credits exhausted or billing issue",
    429: "⏰ RATE LIMITED - Too many requests",
    404: "🔍 MODEL NOT FOUND - Model may not exist or be unavailable",
}


class DirectTestService:
    """Check OpenRouter by trying each configured free model in order."""

    def __init__(self, client: OpenRouterClient, settings: Optional[Settings] = None):
        self.client = client
        self.settings = settings or get_settings()

    @property
    def models(self) -> List[str]:
        return list(self.settings.OPENROUTER_DIRECT_TEST_MODELS)

    async def run(
        self,
        question: Optional[str] = None,
        language: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Run the direct test.

        Args:
            question: Farming question to ask, defaults to a rice fertilizer question
            language: english, tamil or hindi; anything else uses the english prompt

        Returns:
            Dict: success report for the first model that answered, otherwise a
            failure report listing every model tested

        Raises:
            ConfigurationError: If the server has no OpenRouter key
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        question = question or DEFAULT_QUESTION
        language = language or DEFAULT_LANGUAGE

        if not self.settings.openrouter_configured:
            logger.error("OPENROUTER_API_KEY is not configured")
            raise ConfigurationError("OpenRouter is not configured", setting="OPENROUTER_API_KEY")

        api_key = self.settings.OPENROUTER_API_KEY.strip()
        models = self.models
        messages = [
            ChatMessage(role=ChatRole.USER, content=build_direct_test_prompt(question, language)),
        ]

        logger.info(
            "=== OPENROUTER DIRECT API TEST ===",
            extra={'question': question, 'language': language, 'models': models},
        )

        for index, model in enumerate(models):
            logger.info(f"--- ATTEMPT {index + 1}: Testing {model} ---")
            start_time = time.time()

            try:
                data = await self.client.create_completion(
                    api_key=api_key,
                    model=model,
                    messages=messages,
                    temperature=0.7,
                    max_tokens=300,
                    top_p=0.9,
                    title=DIRECT_TEST_TITLE,
                )
            except ExternalAPIError as e:
                self._log_failure(model, e)
                continue

            duration_ms = int((time.time() - start_time) * 1000)
            answer = extract_completion_content(data)

            if answer and len(answer) > MIN_RESPONSE_LENGTH:
                logger.info(
                    f"✅ SUCCESS with {model}!",
                    extra={'duration_ms': duration_ms, 'usage': data.get('usage')},
                )
                return {
                    'success': True,
                    'response': answer,
                    'model': model,
                    'language': language,
                    'question': question,
                    'timestamp': timestamp,
                    'duration_ms': duration_ms,
                    'usage': data.get('usage'),
                    'status': 'openrouter_success',
                    'debug': {
                        'attempt': index + 1,
                        'total_attempts': len(models),
                        'api_status': COMPLETION_OK_STATUS,
                        'response_length': len(answer),
                    },
                }

            logger.warning(f"❌ Model {model} returned empty or invalid response: {answer!r}")

        logger.warning("🚨 ALL MODELS FAILED - Returning detailed error report")
        return {
            'success': False,
            'error': 'All OpenRouter models failed',
            'api_key_used': api_key[:KEY_PREVIEW_LENGTH] + '...',
            'models_tested': models,
            'timestamp': timestamp,
            'recommendation': 'Check API key validity, billing status, and model availability',
            'fallback_available': True,
        }

    @staticmethod
    def _log_failure(model: str, error: ExternalAPIError) -> None:
        status_code = error.api_status_code
        if status_code is None:
            logger.error(f"❌ Network error with {model}: {error.message}")
            return

        logger.error(
            f"❌ Model {model} failed with status {status_code}",
            extra={'details': error.details},
        )
        diagnosis = STATUS_DIAGNOSES.get(status_code)
        if diagnosis:
            logger.error(diagnosis)
