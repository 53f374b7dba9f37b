"""Store factory for choosing a record store backend from its URL."""

from doc_finder.adapters.record_store import AbstractRecordStore, InMemoryRecordStore
from doc_finder.adapters.sqlite_store import SqliteRecordStore
from doc_finder.exceptions import ConfigurationError


def create_record_store(url: str, *, mongo_database: str | None = None) -> AbstractRecordStore:
    """Create an unconnected record store suited to ``url``.

    The caller still has to ``await store.connect(url)``.
    """
    scheme = url.partition("://")[0].lower()
    if scheme == "memory":
        return InMemoryRecordStore()
    if scheme == "sqlite":
        return SqliteRecordStore()
    if scheme == "mongodb":
        # Imported lazily so motor is only loaded when a Mongo store is used.
        from doc_finder.adapters.mongo_store import DEFAULT_DATABASE, MongoRecordStore

        return MongoRecordStore(mongo_database or DEFAULT_DATABASE)
    raise ConfigurationError(f"Unsupported store URL: {url}")
