"""Settings persistence over a key-value store.

Settings are kept as a JSON string under a single namespaced key. The
backing store is anything with ``get`` and item assignment: a plain dict in
tests, NiceGUI's per-browser ``app.storage.user`` in the UI.
"""

import json
import logging
from typing import Any, Protocol

from src.models.schemas import Settings

logger = logging.getLogger(__name__)

STORAGE_KEY = "kb-settings"


class KeyValueStore(Protocol):
    """Minimal mapping interface used for persistence."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def __setitem__(self, key: str, value: Any) -> None: ...


class SettingsStore:
    """Loads and saves Settings under a fixed key."""

    def __init__(self, store: KeyValueStore, key: str = STORAGE_KEY) -> None:
        self._store = store
        self._key = key

    def load(self) -> Settings:
        """Read persisted settings.

        Missing, corrupt or non-object data yields default settings.
        Individual missing fields take their defaults.
        """
        raw = self._store.get(self._key)
        if not raw:
            return Settings()

        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Discarding unreadable settings under {self._key!r}")
            return Settings()
        if not isinstance(parsed, dict):
            return Settings()

        defaults = Settings()
        return Settings(
            api_key=_str_field(parsed.get("apiKey"), defaults.api_key),
            model=_str_field(parsed.get("model"), defaults.model),
            vector_store_id=_str_field(parsed.get("vectorStoreId"), defaults.vector_store_id),
        )

    def save(self, settings: Settings) -> None:
        """Persist settings as JSON with camelCase keys."""
        self._store[self._key] = settings.model_dump_json(by_alias=True)


def _str_field(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default
