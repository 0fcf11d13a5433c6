from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError

from core.config import Settings
from core.profile_manager import ProfileManager
from core.storage import InMemoryStorage, MongoStorage, StorageError, create_storage


def test_in_memory_storage_basic_operations():
    storage = InMemoryStorage()
    assert storage.get_item("k") is None
    assert not storage.contains_item("k")

    storage.set_item("k", "v1")
    storage.set_item("k", "v2")
    assert storage.get_item("k") == "v2"
    assert storage.contains_item("k")

    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_mongo_storage_uses_single_document_per_key():
    collection = MagicMock()
    storage = MongoStorage(collection=collection)
    collection.create_index.assert_called_once_with("key", unique=True)

    storage.set_item("sk_user_u1", '{"a": 1}')
    collection.replace_one.assert_called_once_with(
        {"key": "sk_user_u1"}, {"key": "sk_user_u1", "value": '{"a": 1}'}, upsert=True
    )

    collection.find_one.return_value = {"_id": "x", "key": "sk_user_u1", "value": '{"a": 1}'}
    assert storage.get_item("sk_user_u1") == '{"a": 1}'
    collection.find_one.assert_called_with({"key": "sk_user_u1"})

    collection.find_one.return_value = None
    assert storage.get_item("missing") is None
    assert not storage.contains_item("missing")

    storage.remove_item("sk_user_u1")
    collection.delete_one.assert_called_once_with({"key": "sk_user_u1"})


def test_mongo_errors_are_wrapped():
    collection = MagicMock()
    collection.find_one.side_effect = PyMongoError("down")
    collection.replace_one.side_effect = PyMongoError("down")
    storage = MongoStorage(collection=collection)

    with pytest.raises(StorageError):
        storage.get_item("k")
    with pytest.raises(StorageError):
        storage.set_item("k", "v")


def test_profile_reads_fail_open_when_storage_is_down(make_profile):
    collection = MagicMock()
    collection.find_one.side_effect = PyMongoError("down")
    manager = ProfileManager(MongoStorage(collection=collection))

    assert manager.get_profile("u1") is None
    assert manager.profile_exists("u1") is False


def test_profile_round_trip_through_mongo_documents(make_profile):
    documents = {}
    collection = MagicMock()
    collection.replace_one.side_effect = lambda query, doc, upsert: documents.__setitem__(query["key"], doc)
    collection.find_one.side_effect = lambda query: documents.get(query["key"])
    manager = ProfileManager(MongoStorage(collection=collection))

    manager.save_profile(make_profile("u1"))

    assert manager.get_profile("u1").soil_type == "Alluvial"


def test_create_storage_memory_backend():
    assert isinstance(create_storage(Settings(storage_backend="memory")), InMemoryStorage)
