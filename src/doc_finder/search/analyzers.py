"""Word normalization and noise-word filtering.

Normalization is deliberately simple: lowercase, drop a possessive ``'s``
and keep only ASCII letters. The same function is used when indexing
document lines and when turning query text into search terms.
"""

from __future__ import annotations

import re


_POSSESSIVE_RE = re.compile(r"'s$")
_NON_ALPHA_RE = re.compile(r"[^a-z]")


def stem(word: str) -> str:
    """Place-holder stemmer: removes a trailing ``'s`` and nothing else."""
    return _POSSESSIVE_RE.sub("", word)


def normalize(word: str) -> str:
    """Lowercase, stem and strip every character outside ``[a-z]``."""
    return _NON_ALPHA_RE.sub("", stem(word.lower()))


def fold_noise_text(text: str) -> str:
    """Fold raw noise-word text into the stored form (one line, lowercase)."""
    return text.replace("\n", " ").lower()


def parse_noise_words(data: str) -> frozenset[str]:
    """Split stored noise-word text into its set of standalone words."""
    return frozenset(data.split())


class NoiseWordFilter:
    """Classifies query tokens against the current noise-word text.

    The parsed set is cached per distinct noise-word text, so callers can
    hand in the freshly loaded record on every call and only pay for
    parsing when the record actually changed.
    """

    def __init__(self) -> None:
        self._source: str | None = None
        self._words: frozenset[str] = frozenset()

    def noise_words(self, data: str) -> frozenset[str]:
        if data != self._source:
            self._words = parse_noise_words(data)
            self._source = data
        return self._words

    def words(self, text: str, data: str) -> list[str]:
        """Return the normalized non-noise words of ``text`` in order.

        Duplicates are kept. Tokens that normalize to nothing are dropped.
        """
        noise = self.noise_words(data)
        terms = []
        for token in text.split():
            if token.lower() in noise:
                continue
            term = normalize(token)
            if term:
                terms.append(term)
        return terms
