"""Local persistence for the in-progress timer"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

from pydantic import ValidationError

from .models.tracker_state import PersistedTrackerState, TrackerState

logger = logging.getLogger(__name__)

TRACKER_STATE_KEY = "bt_tracker_state"


class KeyValueStore(Protocol):
    """String key/value store with local-storage semantics"""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryKeyValueStore:
    """Process-local store, mainly for tests"""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileKeyValueStore:
    """
    Keeps every key in a single JSON document on disk.

    Writes go to a sibling temp file first and are moved into place, so a
    crash mid-write leaves the previous document intact.
    """

    def __init__(self, path: Path | str):
        self._path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable store {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write_all(self, items: Dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(items, f)
        os.replace(tmp_path, self._path)

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)


class TrackerStateStore:
    """Loads and saves the timer under a single key"""

    def __init__(self, store: KeyValueStore, key: str = TRACKER_STATE_KEY):
        self._store = store
        self._key = key

    def load(self) -> Optional[TrackerState]:
        """Return the persisted state, or None when nothing usable is stored"""
        try:
            raw = self._store.get_item(self._key)
        except OSError as e:
            logger.warning(f"Could not read timer state: {e}")
            return None

        if raw is None:
            return None

        try:
            record = PersistedTrackerState.model_validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding malformed timer state: {e}")
            return None

        return record.to_state()

    def save(self, state: TrackerState, now_ms: int) -> bool:
        """
        Persist state. Failures are logged and reported as False; the caller
        keeps its in-memory state either way.
        """
        record = PersistedTrackerState.from_state(state, now_ms)
        try:
            self._store.set_item(self._key, record.model_dump_json(by_alias=True))
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Timer state not persisted: {e}")
            return False
        return True

    def clear(self) -> bool:
        try:
            self._store.remove_item(self._key)
        except OSError as e:
            logger.warning(f"Timer state not cleared: {e}")
            return False
        return True
