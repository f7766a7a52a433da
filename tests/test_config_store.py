"""
Tests for the persisted client configuration
"""

import json

from growsmart.client.config_store import (
    API_KEY_KEY,
    DEFAULT_MODEL,
    SELECTED_MODEL_KEY,
    ClientConfigStore,
)


class TestClientConfigStore:
    """Reading and writing the fixed configuration keys"""

    def test_missing_file_has_no_key_and_default_model(self, tmp_path):
        store = ClientConfigStore(tmp_path / "config.json")

        assert store.get_api_key() is None
        assert store.get_selected_model() == DEFAULT_MODEL

    def test_values_are_stored_under_fixed_keys(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        store = ClientConfigStore(path)

        store.set_api_key("sk-or-v1-user")
        store.set_selected_model("google/gemma-2-9b-it:free")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {
            API_KEY_KEY: "sk-or-v1-user",
            SELECTED_MODEL_KEY: "google/gemma-2-9b-it:free",
        }

    def test_stores_share_the_same_file(self, tmp_path):
        path = tmp_path / "config.json"
        ClientConfigStore(path).set_api_key("sk-shared")

        assert ClientConfigStore(path).get_api_key() == "sk-shared"

    def test_unreadable_file_is_treated_as_empty(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        store = ClientConfigStore(path)

        assert store.get_api_key() is None
        assert store.get_selected_model() == DEFAULT_MODEL

    def test_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env-config.json"
        monkeypatch.setenv("GROWSMART_CONFIG", str(path))

        ClientConfigStore().set_api_key("sk-env")

        assert json.loads(path.read_text(encoding="utf-8"))[API_KEY_KEY] == "sk-env"
