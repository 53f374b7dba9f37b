"""Error kinds surfaced by doc-finder operations.

Every error carries a stable ``code`` so callers can branch on the kind of
failure without matching on messages.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Stable identifiers for the failure kinds."""

    NOT_FOUND = "NOT_FOUND"
    STORE_FAILURE = "STORE_FAILURE"
    PRECONDITION_MISSING = "PRECONDITION_MISSING"
    CONFIGURATION = "CONFIGURATION"


class DocFinderError(Exception):
    """Base error for the doc-finder package."""

    code: ErrorCode

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(DocFinderError):
    """Raised when a document lookup misses."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, name: str) -> None:
        super().__init__(f"doc {name} not found")
        self.name = name


class StoreFailureError(DocFinderError):
    """Raised when the underlying record store fails.

    The backend exception, if any, is chained as ``__cause__``.
    """

    code = ErrorCode.STORE_FAILURE


class PreconditionMissingError(DocFinderError):
    """Raised when an operation needs state that was never created."""

    code = ErrorCode.PRECONDITION_MISSING


class ConfigurationError(DocFinderError):
    """Raised for unsupported or malformed configuration values."""

    code = ErrorCode.CONFIGURATION
