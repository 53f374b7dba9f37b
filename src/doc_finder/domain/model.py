"""Domain model - indexed documents, noise words and search results.

The domain layer has no dependencies on the record store. Records coming
from a store are converted with ``from_record`` and written back with
``to_record``.
"""

from collections.abc import Mapping
from typing import Any, Self
import unicodedata

from pydantic import BaseModel, ConfigDict, Field


NOISE_WORDS_KEY = "noise-words"


class IndexedDocument(BaseModel):
    """A named document in both its original and normalized line forms.

    ``normalized_lines[i]`` is the normalization of ``original_lines[i]``;
    noise words are kept, only queries are filtered.
    """

    name: str
    original_text: str
    original_lines: list[str] = Field(default_factory=list)
    normalized_lines: list[str] = Field(default_factory=list)

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        return cls(
            name=record["name"],
            original_text=record["original_text"],
            original_lines=list(record.get("original_lines", [])),
            normalized_lines=list(record.get("normalized_lines", [])),
        )

    def to_record(self) -> dict[str, Any]:
        return self.model_dump()


class NoiseWords(BaseModel):
    """The single process-wide noise-word record."""

    name: str = NOISE_WORDS_KEY
    data: str = ""

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> Self:
        return cls(name=record.get("name", NOISE_WORDS_KEY), data=record.get("data", ""))

    def to_record(self) -> dict[str, Any]:
        return self.model_dump()


class SearchResult(BaseModel):
    """Value object for one matching document.

    ``score`` counts every match of every term across the document and
    ``snippet`` is the earliest original line holding a match.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    score: int = Field(ge=1)
    snippet: str

    def __str__(self) -> str:
        return f"{self.name}: {self.score}\n{self.snippet}"


def collation_key(name: str) -> tuple[str, str, str]:
    """Sort key ordering names the way a root-locale collator does.

    Letters compare first with case and accents ignored, then accents break
    ties, then case, with lowercase before uppercase. The result does not
    depend on the process locale.
    """
    folded = name.casefold()
    decomposed = unicodedata.normalize("NFD", folded)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base, decomposed, name.swapcase()


def compare_results(result1: SearchResult, result2: SearchResult) -> int:
    """Compare result1 with result2 for ranking.

    Higher scores compare lower; if scores are equal, the name that collates
    first compares lower.
    """
    if result1.score != result2.score:
        return result2.score - result1.score
    key1, key2 = collation_key(result1.name), collation_key(result2.name)
    return (key1 > key2) - (key1 < key2)
