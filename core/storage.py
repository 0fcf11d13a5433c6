# core/storage.py

from abc import ABC, abstractmethod
from typing import Dict, Optional

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .config import Settings, settings


class StorageError(Exception):
    """Raised when the underlying storage medium cannot be read or written."""


class KeyValueStorage(ABC):
    """A string-keyed, string-valued persistent mapping."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove_item(self, key: str) -> None:
        ...

    def contains_item(self, key: str) -> bool:
        return self.get_item(key) is not None


class InMemoryStorage(KeyValueStorage):
    """Process-local storage. Used for tests and demo runs."""

    def __init__(self):
        self._items: Dict[str, str] = {}

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def contains_item(self, key: str) -> bool:
        return key in self._items


class MongoStorage(KeyValueStorage):
    """Stores each key as one document: {"key": ..., "value": ...}."""

    def __init__(self, collection=None, db_name: str = settings.mongo_db_name, collection_name: str = "kv_store"):
        if collection is None:
            self.client = MongoClient(settings.final_mongo_uri)
            collection = self.client[db_name][collection_name]
        self.collection = collection
        self.collection.create_index("key", unique=True)
        print("---MONGO STORAGE: Connected to MongoDB---")

    def get_item(self, key: str) -> Optional[str]:
        try:
            doc = self.collection.find_one({"key": key})
        except PyMongoError as e:
            raise StorageError(f"read failed for {key}: {e}") from e
        if doc:
            return doc.get("value")
        return None

    def set_item(self, key: str, value: str) -> None:
        try:
            # Single-document replace keeps every write atomic.
            self.collection.replace_one({"key": key}, {"key": key, "value": value}, upsert=True)
        except PyMongoError as e:
            raise StorageError(f"write failed for {key}: {e}") from e

    def remove_item(self, key: str) -> None:
        try:
            self.collection.delete_one({"key": key})
        except PyMongoError as e:
            raise StorageError(f"delete failed for {key}: {e}") from e


def create_storage(config: Settings = settings) -> KeyValueStorage:
    """Builds the storage backend named in the configuration."""
    if config.storage_backend == "memory":
        return InMemoryStorage()
    if config.storage_backend == "mongo":
        return MongoStorage(db_name=config.mongo_db_name)
    raise ValueError(f"Unknown storage backend: {config.storage_backend}")
