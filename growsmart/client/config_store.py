# 📄 File: growsmart/client/config_store.py
# 🧭 Purpose (Layman Explanation):
# Remembers the farmer's OpenRouter API key and the AI model they picked, so they don't have to
# type them again every time.
# 🧪 Purpose (Technical Summary):
# JSON-file key/value store for client settings under the fixed keys "openRouterKey" and
# "selectedModel"; the selected model falls back to the default free model.
# 🔗 Dependencies:
# json, pathlib, os
# 🔄 Connected Modules / Calls From:
# growsmart.client.chat_session

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

API_KEY_KEY = "openRouterKey"
SELECTED_MODEL_KEY = "selectedModel"
DEFAULT_MODEL = "meta-llama/llama-3.2-3b-instruct:free"
DEFAULT_CONFIG_PATH = Path.home() / ".growsmart" / "config.json"


class ClientConfigStore:
    """
    Persisted client configuration.

    Values are read from disk on every access so several sessions sharing
    one file see each other's changes.
    """

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path or os.environ.get("GROWSMART_CONFIG", DEFAULT_CONFIG_PATH))

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable client config {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def get(self, key: str) -> Optional[str]:
        value = self._load().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def get_api_key(self) -> Optional[str]:
        return self.get(API_KEY_KEY)

    def set_api_key(self, api_key: str) -> None:
        self.set(API_KEY_KEY, api_key)

    def get_selected_model(self) -> str:
        return self.get(SELECTED_MODEL_KEY) or DEFAULT_MODEL

    def set_selected_model(self, model: str) -> None:
        self.set(SELECTED_MODEL_KEY, model)
