"""MongoDB-backed record store using motor."""

from collections.abc import Mapping
import logging
from typing import Any
from urllib.parse import urlparse

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from doc_finder.adapters.record_store import AbstractRecordStore, Record
from doc_finder.exceptions import StoreFailureError


logger = logging.getLogger(__name__)

DEFAULT_DATABASE = "docfinder"

# Records handed back to callers never expose Mongo's internal id.
_PROJECTION = {"_id": 0}


def database_name_from_url(url: str, default: str = DEFAULT_DATABASE) -> str:
    """Return the database named in ``mongodb://host:port/DB`` or ``default``."""
    name = urlparse(url).path.lstrip("/")
    return name or default


class MongoRecordStore(AbstractRecordStore):
    """Record store persisted in a MongoDB database.

    Each logical collection maps onto a Mongo collection of the same name.
    """

    def __init__(self, database_name: str = DEFAULT_DATABASE) -> None:
        self.default_database = database_name
        self.database_name: str | None = None
        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None

    async def connect(self, url: str) -> None:
        database_name = database_name_from_url(url, self.default_database)
        try:
            client = AsyncIOMotorClient(url)
        except PyMongoError as exc:
            logger.error("Invalid MongoDB URL %s: %s", url, exc)
            raise StoreFailureError(f"cannot connect to {url}: {exc}") from exc

        try:
            await client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            logger.error("Failed to connect to MongoDB at %s: %s", url, exc)
            raise StoreFailureError(f"cannot connect to {url}: {exc}") from exc

        self._client = client
        self._db = client[database_name]
        self.database_name = database_name
        logger.info("Connected to MongoDB database %s", database_name)

    async def close(self) -> None:
        client, self._client = self._client, None
        self._db = None
        if client is not None:
            client.close()
            logger.info("Disconnected from MongoDB")

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise StoreFailureError("record store is not connected")
        return self._db

    async def find_records(self, collection: str, query_filter: Mapping[str, Any]) -> list[Record]:
        try:
            cursor = self.db[collection].find(dict(query_filter), _PROJECTION)
            return await cursor.to_list(length=None)
        except PyMongoError as exc:
            logger.error("MongoDB find on %s failed: %s", collection, exc)
            raise StoreFailureError(f"find on {collection} failed: {exc}") from exc

    async def insert_record(self, collection: str, record: Mapping[str, Any]) -> None:
        try:
            # insert_one adds _id to the mapping it is given
            await self.db[collection].insert_one(dict(record))
        except PyMongoError as exc:
            logger.error("MongoDB insert into %s failed: %s", collection, exc)
            raise StoreFailureError(f"insert into {collection} failed: {exc}") from exc

    async def update_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        fields: Mapping[str, Any],
    ) -> None:
        try:
            await self.db[collection].update_one(dict(query_filter), {"$set": dict(fields)})
        except PyMongoError as exc:
            logger.error("MongoDB update on %s failed: %s", collection, exc)
            raise StoreFailureError(f"update on {collection} failed: {exc}") from exc

    async def upsert_record(
        self,
        collection: str,
        query_filter: Mapping[str, Any],
        record: Mapping[str, Any],
    ) -> None:
        try:
            await self.db[collection].replace_one(dict(query_filter), dict(record), upsert=True)
        except PyMongoError as exc:
            logger.error("MongoDB upsert on %s failed: %s", collection, exc)
            raise StoreFailureError(f"upsert on {collection} failed: {exc}") from exc

    async def drop_all(self) -> None:
        if self._client is None or self.database_name is None:
            raise StoreFailureError("record store is not connected")
        try:
            await self._client.drop_database(self.database_name)
        except PyMongoError as exc:
            logger.error("MongoDB drop of %s failed: %s", self.database_name, exc)
            raise StoreFailureError(f"drop of {self.database_name} failed: {exc}") from exc
        logger.info("Dropped MongoDB database %s", self.database_name)
