# 📄 File: growsmart/client/__init__.py
# 🧭 Purpose (Layman Explanation):
# The toolkit for talking to Grow Smart AI from a Python program: chat with the advisor,
# scan plants and remember your settings.
# 🧪 Purpose (Technical Summary):
# Python client package exposing the config store, chat session and plant scanner.
# 🔗 Dependencies:
# growsmart.shared.infrastructure.external_apis
# 🔄 Connected Modules / Calls From:
# External scripts and tools

from .chat_session import ChatSession, SessionMessage, Sender
from .config_store import API_KEY_KEY, DEFAULT_MODEL, SELECTED_MODEL_KEY, ClientConfigStore
from .error_guidance import ErrorGuidance, classify_chat_error
from .notices import Notice, NoticeVariant
from .plant_scan import PlantScanner

__all__ = [
    "ChatSession",
    "SessionMessage",
    "Sender",
    "ClientConfigStore",
    "API_KEY_KEY",
    "SELECTED_MODEL_KEY",
    "DEFAULT_MODEL",
    "ErrorGuidance",
    "classify_chat_error",
    "Notice",
    "NoticeVariant",
    "PlantScanner",
]
