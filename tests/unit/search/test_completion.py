"""Unit tests for prefix autocompletion."""

import pytest

from doc_finder.search.completion import build_completion_pattern, complete, completion_prefix
from doc_finder.service_layer.indexer import add_content


class TestCompletionPrefix:
    @pytest.mark.parametrize(
        "text", ["", "he said hi.", "trailing space ", "digits 42", "dash-", "he said hi\n", "hi\t"]
    )
    def test_no_prefix_for_non_alphabetic_ending(self, text):
        assert completion_prefix(text) is None

    def test_last_word_is_prefix(self):
        assert completion_prefix("the quick Bro") == "Bro"

    def test_single_word(self):
        assert completion_prefix("ca") == "ca"

    def test_prefix_keeps_inner_punctuation(self):
        assert completion_prefix("see dog's") == "dog's"


class TestBuildCompletionPattern:
    def test_matches_words_starting_with_prefix(self):
        pattern = build_completion_pattern("ca")
        assert pattern.findall("cat scat cable ca") == ["cat", "cable", "ca"]

    def test_is_case_sensitive(self):
        pattern = build_completion_pattern("ca")
        assert pattern.findall("Cat cat") == ["cat"]


class TestComplete:
    @pytest.mark.asyncio
    async def test_non_alphabetic_ending_returns_empty(self, memory_store):
        await add_content(memory_store, "d", "he said hi. hi hello")
        assert await complete(memory_store, "he said hi.") == []

    @pytest.mark.asyncio
    async def test_trailing_newline_returns_empty(self, memory_store):
        await add_content(memory_store, "d", "he said hi hello")
        assert await complete(memory_store, "he said hi\n") == []

    @pytest.mark.asyncio
    async def test_deduplicates_and_sorts_case_sensitively(self, memory_store):
        await add_content(memory_store, "one", "Cat cats cat")
        await add_content(memory_store, "two", "cat catalog\ncats")

        assert await complete(memory_store, "the cat") == ["cat", "catalog", "cats"]
        assert await complete(memory_store, "C") == ["Cat"]

    @pytest.mark.asyncio
    async def test_uppercase_sorts_before_lowercase(self, memory_store):
        await add_content(memory_store, "mixed", "Dog dog Doge doghouse")
        assert await complete(memory_store, "Do") == ["Dog", "Doge"]
        assert await complete(memory_store, "D") == ["Dog", "Doge"]
        assert await complete(memory_store, "do") == ["dog", "doghouse"]

    @pytest.mark.asyncio
    async def test_matches_against_raw_text(self, memory_store):
        await add_content(memory_store, "d", "Rock'n'roll rocks")
        assert await complete(memory_store, "Ro") == ["Rock"]

    @pytest.mark.asyncio
    async def test_no_documents(self, memory_store):
        assert await complete(memory_store, "any") == []
