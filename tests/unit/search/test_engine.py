"""Unit tests for ranked multi-term search."""

import pytest

from doc_finder.adapters.record_store import DOCUMENTS_COLLECTION
from doc_finder.domain.model import IndexedDocument, SearchResult
from doc_finder.search.engine import build_terms_pattern, find, rank_results, score_document
from doc_finder.service_layer.indexer import add_content, build_document


class TestBuildTermsPattern:
    def test_matches_whole_words(self):
        pattern = build_terms_pattern(["cat"])
        assert len(pattern.findall("cat cats concat cat")) == 2

    def test_alternation_of_terms(self):
        pattern = build_terms_pattern(["cat", "dog"])
        assert pattern.findall("dog cat bird") == ["dog", "cat"]

    def test_empty_terms_match_nothing(self):
        pattern = build_terms_pattern([])
        assert pattern.search("anything at all") is None
        assert pattern.search("") is None

    def test_empty_strings_are_ignored(self):
        pattern = build_terms_pattern(["", "cat"])
        assert pattern.findall("a cat") == ["cat"]

    def test_terms_are_escaped(self):
        pattern = build_terms_pattern(["c.t"])
        assert pattern.search("cat") is None


class TestScoreDocument:
    def test_counts_all_matches_and_keeps_first_line(self):
        document = build_document("pets", "cat sat\ncat ran")
        result = score_document(document, build_terms_pattern(["cat"]))
        assert result == SearchResult(name="pets", score=2, snippet="cat sat\n")

    def test_line_with_several_matches_is_captured_once(self):
        document = build_document("d", "intro\ncat and dog and cat\ndog again")
        result = score_document(document, build_terms_pattern(["cat", "dog"]))
        assert result is not None
        assert result.score == 4
        assert result.snippet == "cat and dog and cat\n"

    def test_snippet_is_original_text(self):
        document = build_document("d", "nothing here\nThe Cat's toy!")
        result = score_document(document, build_terms_pattern(["cat"]))
        assert result is not None
        assert result.snippet == "The Cat's toy!\n"

    def test_no_match_returns_none(self):
        document = build_document("d", "just birds")
        assert score_document(document, build_terms_pattern(["cat"])) is None

    def test_noise_words_in_content_still_match(self):
        document = build_document("d", "the cat")
        result = score_document(document, build_terms_pattern(["the"]))
        assert result is not None
        assert result.score == 1


class TestRankResults:
    def test_score_descending_then_name_ascending(self):
        results = [
            SearchResult(name="b", score=3, snippet="x\n"),
            SearchResult(name="a", score=3, snippet="x\n"),
            SearchResult(name="c", score=1, snippet="x\n"),
        ]
        ranked = rank_results(results)
        assert [(r.name, r.score) for r in ranked] == [("a", 3), ("b", 3), ("c", 1)]

    def test_empty(self):
        assert rank_results([]) == []


class TestFind:
    @pytest.mark.asyncio
    async def test_find_ranks_stored_documents(self, memory_store):
        await add_content(memory_store, "b", "cat cat cat")
        await add_content(memory_store, "a", "cat\ncat\ncat")
        await add_content(memory_store, "c", "one cat")
        await add_content(memory_store, "d", "no felines")

        results = await find(memory_store, ["cat"])

        assert [(r.name, r.score) for r in results] == [("a", 3), ("b", 3), ("c", 1)]
        assert results[0].snippet == "cat\n"

    @pytest.mark.asyncio
    async def test_empty_terms_return_nothing(self, memory_store):
        await add_content(memory_store, "a", "cat")
        assert await find(memory_store, []) == []

    @pytest.mark.asyncio
    async def test_no_documents(self, memory_store):
        assert await find(memory_store, ["cat"]) == []

    @pytest.mark.asyncio
    async def test_reads_records_written_directly(self, memory_store):
        document = IndexedDocument(
            name="raw",
            original_text="Hello World",
            original_lines=["Hello World"],
            normalized_lines=["hello world"],
        )
        await memory_store.insert_record(DOCUMENTS_COLLECTION, document.to_record())

        results = await find(memory_store, ["world"])

        assert results == [SearchResult(name="raw", score=1, snippet="Hello World\n")]
