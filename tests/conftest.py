"""Shared test fixtures and configuration."""

import logging
import os

import pytest

from doc_finder.adapters.record_store import InMemoryRecordStore
from doc_finder.service_layer.doc_finder import DocFinder


# Test environment that overrides every config value read from DOC_FINDER_*
TEST_ENV = {
    "DOC_FINDER_STORE_URL": "memory://",
    "DOC_FINDER_MONGO_DATABASE": "docfinder_test",
    "DOC_FINDER_LOG_LEVEL": "info",
    "DOC_FINDER_LOG_JSON": "true",
}

for key, value in TEST_ENV.items():
    os.environ[key] = value


NOISE_TEXT = "a\nan\nand\nthe\nof\nis"


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Reset DOC_FINDER_* variables to test defaults for each test."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
async def memory_store():
    """Connected in-memory record store."""
    store = InMemoryRecordStore()
    await store.connect("memory://")
    yield store
    await store.close()


@pytest.fixture
async def finder():
    """Connected DocFinder backed by an in-memory store."""
    async with DocFinder("memory://") as doc_finder:
        yield doc_finder


@pytest.fixture
async def seeded_finder(finder):
    """DocFinder with noise words and a few small documents."""
    await finder.add_noise_words(NOISE_TEXT)
    await finder.add_content("pets", "The cat sat on the mat.\nA dog's bone\nthe cat ran")
    await finder.add_content("zoo", "Cats and dogs\nA Cat is not a dog")
    await finder.add_content("farm", "cows and sheep\n\n\nhorses graze")
    return finder
