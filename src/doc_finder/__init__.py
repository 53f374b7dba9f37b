"""doc-finder: document indexing and keyword search."""

from doc_finder.domain.model import SearchResult, compare_results
from doc_finder.exceptions import (
    ConfigurationError,
    DocFinderError,
    ErrorCode,
    NotFoundError,
    PreconditionMissingError,
    StoreFailureError,
)
from doc_finder.search.analyzers import normalize, stem
from doc_finder.service_layer.doc_finder import DocFinder


__all__ = [
    "ConfigurationError",
    "DocFinder",
    "DocFinderError",
    "ErrorCode",
    "NotFoundError",
    "PreconditionMissingError",
    "SearchResult",
    "StoreFailureError",
    "compare_results",
    "normalize",
    "stem",
]
