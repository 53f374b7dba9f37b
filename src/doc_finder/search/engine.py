"""Ranked multi-term search over normalized document lines.

Every call scans all stored documents; there is no inverted index. A
document's score is the number of whole-word matches of any term across all
of its normalized lines, and its snippet is the original text of the first
line that matched.
"""

from collections.abc import Iterable, Sequence
import functools
import logging
import re

from doc_finder.adapters.record_store import DOCUMENTS_COLLECTION, AbstractRecordStore
from doc_finder.domain.model import IndexedDocument, SearchResult, compare_results


logger = logging.getLogger(__name__)

# Compiles but can never match; used for an empty term list.
_MATCH_NOTHING = re.compile(r"(?!)")


def build_terms_pattern(terms: Sequence[str]) -> re.Pattern[str]:
    """Build ``\\bterm1\\b|\\bterm2\\b|...`` for the given terms."""
    alternatives = [rf"\b{re.escape(term)}\b" for term in terms if term]
    if not alternatives:
        return _MATCH_NOTHING
    return re.compile("|".join(alternatives), re.ASCII)


def score_document(document: IndexedDocument, pattern: re.Pattern[str]) -> SearchResult | None:
    """Score one document against ``pattern``; None if nothing matched."""
    score = 0
    snippet = ""
    for index, line in enumerate(document.normalized_lines):
        matches = sum(1 for _ in pattern.finditer(line))
        if not matches:
            continue
        if score == 0:
            snippet = document.original_lines[index] + "\n"
        score += matches
    if score == 0:
        return None
    return SearchResult(name=document.name, score=score, snippet=snippet)


def rank_results(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Sort by descending score, then by collated name."""
    return sorted(results, key=functools.cmp_to_key(compare_results))


async def find(store: AbstractRecordStore, terms: Sequence[str]) -> list[SearchResult]:
    """Return ranked results for already-normalized, non-noise ``terms``."""
    pattern = build_terms_pattern(terms)
    if pattern is _MATCH_NOTHING:
        return []

    records = await store.find_records(DOCUMENTS_COLLECTION, {})
    results = []
    for record in records:
        result = score_document(IndexedDocument.from_record(record), pattern)
        if result is not None:
            results.append(result)

    logger.debug("find %s matched %d of %d documents", list(terms), len(results), len(records))
    return rank_results(results)
