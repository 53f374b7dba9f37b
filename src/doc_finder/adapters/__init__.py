"""Adapters layer - record store implementations.

Abstracts persistence of noise-word and document records behind a small
find / insert / update / drop interface.
"""

from .record_store import (
    DOCUMENTS_COLLECTION,
    NOISE_WORDS_COLLECTION,
    AbstractRecordStore,
    InMemoryRecordStore,
)
from .sqlite_store import SqliteRecordStore
from .store_factory import create_record_store


__all__ = [
    "DOCUMENTS_COLLECTION",
    "NOISE_WORDS_COLLECTION",
    "AbstractRecordStore",
    "InMemoryRecordStore",
    "SqliteRecordStore",
    "create_record_store",
]
