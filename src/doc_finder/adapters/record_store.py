"""Record store abstraction and in-memory implementation.

The store persists plain ``dict`` records in named collections. Queries are
equality filters: a record matches when every key of the filter is present
with an equal value, and ``{}`` matches every record.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
import copy
import logging
from typing import Any

from doc_finder.exceptions import StoreFailureError


logger = logging.getLogger(__name__)

NOISE_WORDS_COLLECTION = "noiseWords"
DOCUMENTS_COLLECTION = "textDocuments"

Record = dict[str, Any]


def record_matches(record: Mapping[str, Any], query_filter: Mapping[str, Any]) -> bool:
    """Return True if ``record`` satisfies the equality filter."""
    return all(key in record and record[key] == value for key, value in query_filter.items())


class AbstractRecordStore(ABC):
    """Abstract record store used by the indexer, search and autocomplete."""

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @abstractmethod
    async def connect(self, url: str) -> None:
        """Acquire the connection identified by ``url``."""
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        raise NotImplementedError

    @abstractmethod
    async def find_records(self, collection: str, query_filter: Mapping[str, Any]) -> list[Record]:
        """Return every record of ``collection`` matching ``query_filter``."""
        raise NotImplementedError

    @abstractmethod
    async def insert_record(self, collection: str, record: Mapping[str, Any]) -> None:
        """Append a new record to ``collection``."""
        raise NotImplementedError

    @abstractmethod
    async def update_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> None:
        """Overwrite ``fields`` on the first record matching ``query_filter``."""
        raise NotImplementedError

    @abstractmethod
    async def drop_all(self) -> None:
        """Remove every collection and record."""
        raise NotImplementedError

    async def upsert_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        record: Mapping[str, Any],
    ) -> None:
        """Insert ``record`` if nothing matches ``query_filter``, else replace it.

        This default is a read followed by a write; two overlapping calls for
        the same key race and the last write wins. Backends with a native
        upsert override it.
        """
        existing = await self.find_records(collection, query_filter)
        if existing:
            await self.update_record(collection, query_filter, record)
        else:
            await self.insert_record(collection, record)


class InMemoryRecordStore(AbstractRecordStore):
    """Record store kept in process memory.

    Used for tests and for ``memory://`` URLs. Records are copied on the way
    in and out so callers never share state with the store.
    """

    def __init__(self) -> None:
        self._collections: dict[str, list[Record]] = {}
        self._connected = False
        self.url: str | None = None

    @property
    def connected(self) -> bool:
        return self._connected

    async def connect(self, url: str) -> None:
        self.url = url
        self._connected = True
        logger.debug("In-memory record store opened for %s", url)

    async def close(self) -> None:
        self._connected = False

    def _require_connection(self) -> None:
        if not self._connected:
            raise StoreFailureError("record store is not connected")

    async def find_records(self, collection: str, query_filter: Mapping[str, Any]) -> list[Record]:
        self._require_connection()
        records = self._collections.get(collection, [])
        return [copy.deepcopy(record) for record in records if record_matches(record, query_filter)]

    async def insert_record(self, collection: str, record: Mapping[str, Any]) -> None:
        self._require_connection()
        self._collections.setdefault(collection, []).append(copy.deepcopy(dict(record)))

    async def update_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> None:
        self._require_connection()
        for record in self._collections.get(collection, []):
            if record_matches(record, query_filter):
                record.update(copy.deepcopy(dict(fields)))
                return

    async def upsert_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        record: Mapping[str, Any],
    ) -> None:
        # No await between lookup and write, so this cannot interleave.
        self._require_connection()
        records = self._collections.setdefault(collection, [])
        for index, existing in enumerate(records):
            if record_matches(existing, query_filter):
                records[index] = copy.deepcopy(dict(record))
                return
        records.append(copy.deepcopy(dict(record)))

    async def drop_all(self) -> None:
        self._require_connection()
        self._collections.clear()

    def count(self, collection: str) -> int:
        """Number of records in ``collection`` (for tests)."""
        return len(self._collections.get(collection, []))
