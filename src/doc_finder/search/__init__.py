"""Normalization, search and autocompletion."""

from doc_finder.search.analyzers import NoiseWordFilter, normalize, parse_noise_words, stem
from doc_finder.search.completion import complete, completion_prefix
from doc_finder.search.engine import build_terms_pattern, find, rank_results, score_document


__all__ = [
    "NoiseWordFilter",
    "build_terms_pattern",
    "complete",
    "completion_prefix",
    "find",
    "normalize",
    "parse_noise_words",
    "rank_results",
    "score_document",
    "stem",
]
