"""Domain layer - pure value types with no store dependencies."""

from doc_finder.domain.model import (
    NOISE_WORDS_KEY,
    IndexedDocument,
    NoiseWords,
    SearchResult,
    compare_results,
)


__all__ = [
    "NOISE_WORDS_KEY",
    "IndexedDocument",
    "NoiseWords",
    "SearchResult",
    "compare_results",
]
