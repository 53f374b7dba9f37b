"""Service layer - indexing use cases and the DocFinder entry point."""

from .doc_finder import DocFinder, strip_extension
from .indexer import add_content, add_noise_words, build_document, load_noise_words


__all__ = [
    "DocFinder",
    "add_content",
    "add_noise_words",
    "build_document",
    "load_noise_words",
    "strip_extension",
]
