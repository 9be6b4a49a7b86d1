"""In-memory forward (prefix) index over document fields.

Every word is indexed under each of its prefixes, so a query word matches any
indexed word that starts with it. Each posting keeps the best position bucket
of the document for that prefix; buckets drive the order in which documents
come back from a field, earliest mentions first.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple

from podsearch.models import Document
from podsearch.utils.text import iter_words

LOGGER = logging.getLogger(__name__)

DEFAULT_FIELDS: Tuple[str, ...] = ("identity", "text")

Postings = Dict[str, int]


def position_bucket(resolution: int, length: int, position: int) -> int:
    """Scale a word position into one of ``resolution`` buckets."""
    if position == 0 or resolution <= 1:
        return 0
    if length <= resolution:
        return position
    return int((resolution - 1) / length * position + 1)


class ForwardIndex:
    """Prefix index keyed by field, then prefix, then document identity."""

    def __init__(self, fields: Sequence[str] = DEFAULT_FIELDS, *, resolution: int = 9) -> None:
        self.fields = tuple(fields)
        self.resolution = resolution
        self._tables: Dict[str, Dict[str, Postings]] = {name: {} for name in self.fields}
        self._order: Dict[str, int] = {}

    @classmethod
    def from_documents(
        cls,
        documents: Iterable[Document],
        fields: Sequence[str] = DEFAULT_FIELDS,
        *,
        resolution: int = 9,
    ) -> "ForwardIndex":
        index = cls(fields, resolution=resolution)
        # Later documents replace earlier ones sharing an identity
        unique: Dict[str, Document] = {}
        for document in documents:
            unique[document.identity] = document
        for document in unique.values():
            index.add(document.identity, {name: getattr(document, name) for name in index.fields})
        LOGGER.debug("Indexed %d documents across fields %s", len(unique), index.fields)
        return index

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, key: object) -> bool:
        return key in self._order

    def add(self, key: str, values: Mapping[str, str]) -> None:
        """Index one document. Keys must be unique within the index."""
        if key in self._order:
            raise ValueError(f"Document already indexed: {key}")
        self._order[key] = len(self._order)

        for name in self.fields:
            words = list(iter_words(values.get(name) or ""))
            first_bucket: Dict[str, int] = {}
            for position, word in enumerate(words):
                if word not in first_bucket:
                    first_bucket[word] = position_bucket(self.resolution, len(words), position)

            table = self._tables[name]
            for word, bucket in first_bucket.items():
                for end in range(1, len(word) + 1):
                    postings = table.setdefault(word[:end], {})
                    previous = postings.get(key)
                    if previous is None or bucket < previous:
                        postings[key] = bucket

    def search_field(self, name: str, query: str, *, limit: int) -> List[str]:
        """Return identities whose ``name`` field prefix-matches every query word."""
        words = list(dict.fromkeys(iter_words(query)))
        if not words or limit <= 0:
            return []

        table = self._tables[name]
        scores: Dict[str, int] | None = None
        for word in words:
            postings = table.get(word)
            if not postings:
                return []
            if scores is None:
                scores = dict(postings)
            else:
                scores = {key: score + postings[key] for key, score in scores.items() if key in postings}
            if not scores:
                return []

        ranked = sorted(scores, key=lambda key: (scores[key], self._order[key]))
        return ranked[:limit]

    def search(self, query: str, *, limit: int) -> List[Tuple[str, List[str]]]:
        """Search every field, returning ``(field, identities)`` pairs in field order."""
        return [(name, self.search_field(name, query, limit=limit)) for name in self.fields]
