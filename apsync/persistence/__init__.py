"""Persistence - Client data stored alongside each game save."""

from .save_data import SaveData
from .store import PersistenceProvider, MemorySaveStore, JsonSaveStore

__all__ = [
    "SaveData",
    "PersistenceProvider",
    "MemorySaveStore",
    "JsonSaveStore",
]
