# ABOUTME: Load-once / save-on-change bridge between the tracker record and a durable key-value slot.
# ABOUTME: Storage failures are logged and recovered from; they never reach the caller.

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from src.models import STORAGE_KEY, PersistedState

logger = logging.getLogger(__name__)


class Storage(Protocol):
    """String key-value store holding the durable slot."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-process storage, lost when the process exits."""

    def __init__(self, items: dict[str, str] | None = None):
        self.items = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value


class FileStorage:
    """Storage keeping each key in its own `<key>.json` file under a directory.

    Writes go through a temporary file and an atomic replace so a crash mid-write never
    leaves a truncated slot behind.
    """

    def __init__(self, directory: Path | str):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self.path_for(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class PersistenceGateway:
    """Holds the in-memory PersistedState and mirrors it to one storage slot.

    `load()` runs once at startup and always leaves the gateway ready, falling back to
    defaults on any failure. `update_state()` re-persists the full record on every change.
    """

    def __init__(self, storage: Storage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key
        self.state = PersistedState()
        self.ready = False

    def load(self) -> PersistedState:
        if self.ready:
            return self.state
        try:
            raw = self.storage.get_item(self.key)
            if raw:
                self.state = merge_with_defaults(json.loads(raw))
        except Exception as e:
            logger.warning("Failed to load state from %r, using defaults: %s", self.key, e)
            self.state = PersistedState()
        finally:
            self.ready = True
        self._persist()
        return self.state

    def update_state(self, **changes) -> PersistedState:
        """Merge `changes` into the current record and persist the result.

        Raises ValidationError for values the record cannot hold; nothing is changed then.
        """
        merged = self.state.model_dump()
        merged.update(changes)
        self.state = PersistedState.model_validate(merged)
        self._persist()
        return self.state

    def _persist(self) -> None:
        try:
            self.storage.set_item(self.key, self.state.model_dump_json(by_alias=True))
        except Exception as e:
            logger.warning("Failed to persist state to %r: %s", self.key, e)


def merge_with_defaults(stored: dict) -> PersistedState:
    """Build a PersistedState from a stored record, defaulting every falsy field.

    A stored 0 for the goal or the progress counts as unset and comes back as the default.
    """
    defaults = PersistedState()
    values = {}
    for name, field in PersistedState.model_fields.items():
        value = stored.get(field.alias or name)
        values[name] = value if value else getattr(defaults, name)
    return PersistedState.model_validate(values)
