"""Unit tests for choosing a record store from its URL."""

import pytest

from doc_finder.adapters.mongo_store import MongoRecordStore
from doc_finder.adapters.record_store import InMemoryRecordStore
from doc_finder.adapters.sqlite_store import SqliteRecordStore
from doc_finder.adapters.store_factory import create_record_store
from doc_finder.exceptions import ConfigurationError, ErrorCode


class TestCreateRecordStore:
    def test_memory(self):
        assert isinstance(create_record_store("memory://"), InMemoryRecordStore)

    def test_sqlite(self):
        assert isinstance(create_record_store("sqlite:///docs.db"), SqliteRecordStore)

    def test_scheme_is_case_insensitive(self):
        assert isinstance(create_record_store("SQLite:///docs.db"), SqliteRecordStore)

    def test_mongo_uses_database_override(self):
        store = create_record_store("mongodb://localhost:27017", mongo_database="override")
        assert isinstance(store, MongoRecordStore)
        assert store.default_database == "override"

    @pytest.mark.parametrize("url", ["postgres://localhost/db", "docs.db", ""])
    def test_unsupported_url(self, url):
        with pytest.raises(ConfigurationError) as exc_info:
            create_record_store(url)
        assert exc_info.value.code is ErrorCode.CONFIGURATION
