"""
Chat error classification.
Turns a failed chat request into a notice title, a short description and
troubleshooting content shown as a bot message, and reads the message out
of an error body the API answered with.
"""

from typing import Any, NamedTuple, Optional, Union

from growsmart.shared.core.exceptions import ExternalAPIError


class ErrorGuidance(NamedTuple):
    title: str
    description: str
    content: str


TIMEOUT_MARKERS = ("timeout", "failed to fetch", "cannot connect")
API_KEY_MARKERS = ("api key", "401")
CREDITS_MARKERS = ("credits", "402")


def _timeout_guidance(message: str) -> ErrorGuidance:
    return ErrorGuidance(
        title="⏱️ Timeout Error",
        description="The request took too long to complete",
        content=(
            "🕐 **Connection Timeout**\n\n"
            "The AI service is taking longer than expected to respond.\n\n"
            "**What to try:**\n"
            "1. ✅ Check your internet connection\n"
            "2. 🔄 Try asking a simpler question\n"
            "3. ⚙️ Switch to a faster AI model in Settings\n"
            "4. 🔄 Try again in a few moments\n\n"
            "*The service may be experiencing high demand.*"
        ),
    )


def _api_key_guidance(message: str) -> ErrorGuidance:
    return ErrorGuidance(
        title="🔑 API Key Error",
        description="Authentication failed",
        content=(
            "🔑 **Authentication Problem**\n\n"
            f"{message}\n\n"
            "**Solutions:**\n"
            "1. ⚙️ Check your API key in Settings\n"
            "2. 🆕 Generate a new API key if needed\n"
            "3. 💳 Verify your OpenRouter account has credits\n"
            "4. 🔄 Try saving your API key again"
        ),
    )


def _credits_guidance(message: str) -> ErrorGuidance:
    return ErrorGuidance(
        title="💳 Credits Error",
        description="Insufficient account credits",
        content=(
            "💳 **Insufficient Credits**\n\n"
            "Your OpenRouter account is out of credits.\n\n"
            "**Solutions:**\n"
            "1. 💰 Add credits to your OpenRouter account\n"
            "2. 🆓 Switch to a free model\n"
            "3. ⏳ Wait for free tier reset\n"
            "4. 📞 Contact OpenRouter support"
        ),
    )


def _generic_guidance(message: str) -> ErrorGuidance:
    return ErrorGuidance(
        title="Chat Error",
        description="An unexpected error occurred",
        content=(
            "🚨 **System Error**\n\n"
            f"{message}\n\n"
            "**Troubleshooting:**\n"
            "1. 🌐 Check your internet connection\n"
            "2. ⚙️ Verify your API key in Settings\n"
            "3. 🔄 Try a different AI model\n"
            "4. ⏳ Wait a moment and try again\n"
            "5. 📞 Contact support if issue persists"
        ),
    )


def classify_chat_error(error: Union[BaseException, str]) -> ErrorGuidance:
    """
    Pick guidance by substring of the error message.

    Matching is case-insensitive and checked in order: timeout or
    connection failures, then API key problems, then missing credits.
    Anything else gets generic troubleshooting.
    """
    message = str(error) or error.__class__.__name__
    lowered = message.lower()

    if any(marker in lowered for marker in TIMEOUT_MARKERS):
        return _timeout_guidance(message)
    if any(marker in lowered for marker in API_KEY_MARKERS):
        return _api_key_guidance(message)
    if any(marker in lowered for marker in CREDITS_MARKERS):
        return _credits_guidance(message)
    return _generic_guidance(message)


def server_error_message(error: ExternalAPIError) -> Optional[str]:
    """Message of an error body returned by the API, if any"""
    body: Any = error.details.get("api_response")
    if not isinstance(body, dict):
        return None
    inner = body.get("error")
    if isinstance(inner, dict):
        return inner.get("message")
    if isinstance(inner, str):
        return inner
    return None
