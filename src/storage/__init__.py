"""Settings persistence for the caller of the vector store client.

The client never reads settings from shared state; the UI loads them from
here and passes them into every operation.
"""

from src.storage.settings_store import STORAGE_KEY, KeyValueStore, SettingsStore

__all__ = ["STORAGE_KEY", "KeyValueStore", "SettingsStore"]
