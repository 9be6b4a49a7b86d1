"""Text helpers for query terms, word tokenization and snippets."""

from __future__ import annotations

import re
from typing import Iterator, List, Optional, Sequence

MIN_TERM_LENGTH = 3
AD_PREAMBLE_CHARS = 2000
BOUNDARY_SEARCH_CHARS = 100
ELLIPSIS = "..."

_WORD_RE = re.compile(r"\w+", re.UNICODE)
_TIMESTAMP_RE = re.compile(r"\((\d{2}:\d{2}:\d{2})\)")


def split_query_terms(query: str) -> List[str]:
    """Lower-case a query and keep whitespace-separated terms longer than two chars."""
    return [term for term in query.lower().split() if len(term) >= MIN_TERM_LENGTH]


def iter_words(text: str) -> Iterator[str]:
    """Yield lower-cased words, splitting on anything that is not a word character."""
    for match in _WORD_RE.finditer(text):
        yield match.group(0).lower()


def find_first_match(text: str, terms: Sequence[str]) -> int:
    """Return the smallest offset at which any term occurs, or -1.

    Matching is case-insensitive. Offsets index into ``text`` itself, since
    lower-casing can change the length of non-ASCII strings.
    """
    best = -1
    for term in terms:
        if not term:
            continue
        match = re.search(re.escape(term), text, re.IGNORECASE)
        if match and (best == -1 or match.start() < best):
            best = match.start()
    return best


def extract_snippet(text: str, terms: Sequence[str], target_length: int = 500) -> str:
    """Cut an excerpt of roughly ``target_length`` characters around the first match.

    Without a match the excerpt starts after the sponsor preamble that opens
    most transcripts. Windows that start mid-text snap forward to a nearby
    line break.
    """
    position = find_first_match(text, terms)

    if position == -1:
        start = min(AD_PREAMBLE_CHARS, len(text))
        return text[start : start + target_length] + ELLIPSIS

    half = target_length // 2
    start = max(0, position - half)
    end = min(len(text), position + half)

    snippet = text[start:end]

    if start > 0:
        newline = snippet.find("\n")
        if newline != -1 and newline < BOUNDARY_SEARCH_CHARS:
            snippet = snippet[newline + 1 :]
        snippet = ELLIPSIS + snippet

    if end < len(text):
        snippet = snippet + ELLIPSIS

    return snippet.strip()


def extract_timestamp(text: str) -> Optional[str]:
    """Parse a speaker timestamp, e.g. ``Lenny (00:03:42):`` -> ``00:03:42``."""
    match = _TIMESTAMP_RE.search(text)
    return match.group(1) if match else None


def timestamp_before(text: str, position: int) -> Optional[str]:
    """Return the last speaker timestamp that starts at or before ``position``."""
    if position < 0:
        return None
    latest = None
    for match in _TIMESTAMP_RE.finditer(text):
        if match.start() > position:
            break
        latest = match.group(1)
    return latest
