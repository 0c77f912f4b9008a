"""
Save Stores - Where SaveData is kept.

Stores follow the game's save lifecycle: a store only has data while a save
is open. When no save is open, load() returns None and the live phase skips
everything that needs persisted state.

Implementations:
- MemorySaveStore: for tests
- JsonSaveStore: one JSON file per game save, next to the mod
"""

from __future__ import annotations
from abc import ABC, abstractmethod
import json
import logging
import os
from pathlib import Path

from ..errors import DataIntegrityError
from .save_data import SaveData

logger = logging.getLogger(__name__)


class PersistenceProvider(ABC):
    """Abstract access to the open save's client data."""

    @abstractmethod
    def load(self) -> SaveData | None:
        """The open save's data, or None if no save is open."""
        pass

    @abstractmethod
    def save(self, data: SaveData):
        """Persist data after a mutation."""
        pass


class MemorySaveStore(PersistenceProvider):
    """Keeps SaveData in memory. Set data to None to simulate no open save."""

    def __init__(self, data: SaveData | None = None):
        self.data = data
        self.writes = 0

    def load(self) -> SaveData | None:
        return self.data

    def save(self, data: SaveData):
        self.data = data
        self.writes += 1


class JsonSaveStore(PersistenceProvider):
    """
    File-based save store.

    Usage:
        store = JsonSaveStore(save_dir="~/.apsync/saves")

        # When the game loads a save
        store.open("DS30000.sl2")

        data = store.load()  # Loaded on first access, then cached
        data.items_granted += 1
        store.save(data)

        # When the game returns to the main menu
        store.close()
    """

    def __init__(self, save_dir: str | Path | None = None):
        if save_dir is None:
            save_dir = Path.home() / ".apsync" / "saves"
        self.save_dir = Path(save_dir).expanduser()
        self.save_dir.mkdir(parents=True, exist_ok=True)

        self._name: str | None = None
        self._data: SaveData | None = None

    def open(self, save_name: str):
        """Select the active save. Data is read lazily on the next load()."""
        if save_name != self._name:
            self._name = save_name
            self._data = None

    def close(self):
        self._name = None
        self._data = None

    def load(self) -> SaveData | None:
        if self._name is None:
            return None
        if self._data is None:
            self._data = self._read(self._get_path(self._name))
        return self._data

    def save(self, data: SaveData):
        if self._name is None:
            raise RuntimeError("No save is open")
        self._data = data

        path = self._get_path(self._name)
        tmp = path.with_suffix(".tmp")
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data.to_dict(), f, indent=2)
        os.replace(tmp, path)

    def _get_path(self, save_name: str) -> Path:
        return self.save_dir / f"{Path(save_name).stem}.apsave.json"

    def _read(self, path: Path) -> SaveData:
        """Read save data, starting fresh if the file doesn't exist yet."""
        if not path.exists():
            logger.info("No client data for %s, starting fresh", path.name)
            return SaveData()

        try:
            with open(path, encoding="utf-8") as f:
                return SaveData.from_dict(json.load(f))
        except (TypeError, ValueError) as e:
            raise DataIntegrityError(f"Client data in {path} is corrupt: {e}")
