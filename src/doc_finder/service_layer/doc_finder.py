"""DocFinder - the public entry point tying the use cases to one store.

A DocFinder owns exactly one record store handle. The store is connected
by ``init()`` and released by ``close()``; using the instance as an async
context manager does both and guarantees release on every exit path::

    async with DocFinder("sqlite:///docs.db") as finder:
        await finder.add_noise_words("a an the")
        await finder.add_content("intro", "The cat sat.")
        results = await finder.find(await finder.words("the cat"))
"""

import logging
from typing import Self

from doc_finder.adapters.record_store import DOCUMENTS_COLLECTION, AbstractRecordStore
from doc_finder.adapters.store_factory import create_record_store
from doc_finder.config import Settings
from doc_finder.domain.model import IndexedDocument, SearchResult
from doc_finder.exceptions import NotFoundError
from doc_finder.observability.context import operation_context
from doc_finder.observability.logging import configure_logging
from doc_finder.search.analyzers import NoiseWordFilter
from doc_finder.search.completion import complete as complete_prefix
from doc_finder.search.engine import find as find_terms
from doc_finder.service_layer import indexer


logger = logging.getLogger(__name__)

DEFAULT_STORE_URL = "memory://"


def strip_extension(name: str) -> str:
    """Drop everything from the first ``.`` unless the name starts with it."""
    index = name.find(".")
    return name[:index] if index > 0 else name


class DocFinder:
    """Document indexing and keyword search over a record store."""

    def __init__(
        self,
        store_url: str = DEFAULT_STORE_URL,
        *,
        store: AbstractRecordStore | None = None,
        mongo_database: str | None = None,
    ):
        """Create an unconnected finder.

        Args:
            store_url: URL of the record store (memory://, sqlite:///..., mongodb://...)
            store: Pre-built store to use instead of one derived from ``store_url``
            mongo_database: Database name for Mongo URLs that do not name one
        """
        self.store_url = store_url
        self.store = store or create_record_store(store_url, mongo_database=mongo_database)
        self._noise_filter = NoiseWordFilter()

    @classmethod
    def from_settings(cls, settings: Settings, *, configure_logs: bool = True) -> Self:
        """Build a finder from settings, installing its log handler unless told not to."""
        if configure_logs:
            configure_logging(settings.log_level, json_output=settings.log_json)
        return cls(settings.store_url, mongo_database=settings.mongo_database)

    async def __aenter__(self) -> Self:
        await self.init()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def init(self) -> None:
        """Connect the record store. Must be awaited before any other call."""
        await self.store.connect(self.store_url)
        logger.info("DocFinder ready on %s", self.store_url)

    async def close(self) -> None:
        """Release the record store connection."""
        await self.store.close()
        logger.info("DocFinder closed %s", self.store_url)

    async def clear(self) -> None:
        """Remove every document and the noise-word record."""
        with operation_context("clear"):
            await self.store.drop_all()
            logger.info("Cleared store %s", self.store_url)

    async def words(self, text: str) -> list[str]:
        """Return the normalized non-noise words of ``text``.

        Raises:
            PreconditionMissingError: if no noise words were added yet.
        """
        with operation_context("words"):
            noise_words = await indexer.load_noise_words(self.store)
            return self._noise_filter.words(text, noise_words.data)

    async def add_noise_words(self, text: str) -> None:
        """Replace the noise words with the words of ``text``. Idempotent."""
        with operation_context("add_noise_words"):
            await indexer.add_noise_words(self.store, text)

    async def add_content(self, name: str, content: str) -> None:
        """Index document ``name`` with ``content``. Idempotent."""
        with operation_context("add_content"):
            await indexer.add_content(self.store, name, content)

    async def doc_content(self, name: str) -> str:
        """Return the original text of document ``name``.

        A file extension on ``name`` is ignored, so ``"intro.txt"`` returns
        the document added as ``"intro"``.

        Raises:
            NotFoundError: if no such document exists.
        """
        with operation_context("doc_content"):
            records = await self.store.find_records(DOCUMENTS_COLLECTION, {"name": strip_extension(name)})
            if not records:
                raise NotFoundError(name)
            return IndexedDocument.from_record(records[0]).original_text

    async def find(self, terms: list[str]) -> list[SearchResult]:
        """Return documents matching any of the normalized ``terms``, best first."""
        with operation_context("find"):
            return await find_terms(self.store, terms)

    async def complete(self, text: str) -> list[str]:
        """Return sorted completions of the last word of ``text``."""
        with operation_context("complete"):
            return await complete_prefix(self.store, text)
