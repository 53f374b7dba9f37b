"""Prefix autocompletion over the raw text of stored documents."""

import logging
import re

from doc_finder.adapters.record_store import DOCUMENTS_COLLECTION, AbstractRecordStore


logger = logging.getLogger(__name__)

_ALPHA_END_RE = re.compile(r"[A-Za-z]\Z")


def completion_prefix(text: str) -> str | None:
    """Return the trailing partial word of ``text``, or None.

    None means no completion applies: the text is empty or does not end
    with an ASCII letter.
    """
    if not _ALPHA_END_RE.search(text):
        return None
    return text.split()[-1]


def build_completion_pattern(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(prefix)}\w*\b", re.ASCII)


async def complete(store: AbstractRecordStore, text: str) -> list[str]:
    """Return every distinct word in stored documents completing ``text``.

    Matching is case-sensitive against the original text and results are in
    code-point order, so uppercase words sort before lowercase ones.
    """
    prefix = completion_prefix(text)
    if prefix is None:
        return []

    pattern = build_completion_pattern(prefix)
    completions: set[str] = set()
    for record in await store.find_records(DOCUMENTS_COLLECTION, {}):
        completions.update(pattern.findall(record["original_text"]))

    logger.debug("complete %r found %d completions", prefix, len(completions))
    return sorted(completions)
