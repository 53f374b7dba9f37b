"""Indexing use cases - noise words and documents.

Both writes are idempotent upserts keyed by record name: repeating a call
with the same arguments leaves the store unchanged.
"""

import logging
import re

from doc_finder.adapters.record_store import (
    DOCUMENTS_COLLECTION,
    NOISE_WORDS_COLLECTION,
    AbstractRecordStore,
)
from doc_finder.domain.model import NOISE_WORDS_KEY, IndexedDocument, NoiseWords
from doc_finder.exceptions import PreconditionMissingError
from doc_finder.search.analyzers import fold_noise_text, normalize


logger = logging.getLogger(__name__)

_LINE_BREAKS_RE = re.compile(r"\n+")


def normalize_line(line: str) -> str:
    """Normalize every single-space separated word of ``line``, keeping positions."""
    return " ".join(normalize(word) for word in line.split(" "))


def build_document(name: str, content: str) -> IndexedDocument:
    """Split ``content`` into lines and pair each with its normalized form."""
    original_lines = _LINE_BREAKS_RE.split(content)
    return IndexedDocument(
        name=name,
        original_text=content,
        original_lines=original_lines,
        normalized_lines=[normalize_line(line) for line in original_lines],
    )


async def add_content(store: AbstractRecordStore, name: str, content: str) -> IndexedDocument:
    """Index ``content`` under ``name``, replacing any previous document."""
    document = build_document(name, content)
    await store.upsert_record(DOCUMENTS_COLLECTION, {"name": name}, document.to_record())
    logger.debug("Indexed document %s (%d lines)", name, len(document.original_lines))
    return document


async def add_noise_words(store: AbstractRecordStore, text: str) -> NoiseWords:
    """Replace the noise-word record with the words of ``text``."""
    noise_words = NoiseWords(data=fold_noise_text(text))
    await store.upsert_record(NOISE_WORDS_COLLECTION, {"name": NOISE_WORDS_KEY}, noise_words.to_record())
    logger.debug("Stored %d characters of noise words", len(noise_words.data))
    return noise_words


async def load_noise_words(store: AbstractRecordStore) -> NoiseWords:
    """Return the current noise-word record.

    Raises:
        PreconditionMissingError: if noise words were never added.
    """
    records = await store.find_records(NOISE_WORDS_COLLECTION, {"name": NOISE_WORDS_KEY})
    if not records:
        raise PreconditionMissingError("no noise words have been added")
    return NoiseWords.from_record(records[0])
