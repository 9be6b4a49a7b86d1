"""Keyword search over the transcript corpus."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from podsearch.config import DEFAULT_LIMIT, DEFAULT_RESOLUTION, DEFAULT_SNIPPET_CHARS
from podsearch.errors import IndexNotInitializedError
from podsearch.index.forward_index import ForwardIndex
from podsearch.models import Document, SearchResult
from podsearch.utils.text import (
    extract_snippet,
    find_first_match,
    split_query_terms,
    timestamp_before,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _Snapshot:
    documents: Tuple[Document, ...]
    store: Dict[str, Document]
    index: ForwardIndex


class Searcher:
    """High-level API over an immutable, in-memory transcript corpus.

    The corpus, the document store and the forward index are swapped together
    as one snapshot, so queries never observe a half-built index.
    """

    def __init__(
        self,
        *,
        snippet_chars: int = DEFAULT_SNIPPET_CHARS,
        resolution: int = DEFAULT_RESOLUTION,
        default_limit: int = DEFAULT_LIMIT,
    ) -> None:
        self.snippet_chars = snippet_chars
        self.resolution = resolution
        self.default_limit = default_limit
        self._snapshot: Optional[_Snapshot] = None
        self._lock = threading.Lock()

    @property
    def is_initialized(self) -> bool:
        return self._snapshot is not None

    @property
    def document_count(self) -> int:
        snapshot = self._snapshot
        return len(snapshot.documents) if snapshot is not None else 0

    def initialize(self, documents: Sequence[Document]) -> None:
        """Index ``documents``, discarding any previous corpus entirely."""
        snapshot = self._build(documents)
        with self._lock:
            self._snapshot = snapshot

    def initialize_once(self, loader: Callable[[], Sequence[Document]]) -> bool:
        """Load and index the corpus unless that already happened.

        Returns True when this call built the index.
        """
        if self._snapshot is not None:
            return False
        with self._lock:
            if self._snapshot is not None:
                return False
            self._snapshot = self._build(loader())
            return True

    def _build(self, documents: Sequence[Document]) -> _Snapshot:
        documents = tuple(documents)
        store = {document.identity: document for document in documents}
        index = ForwardIndex.from_documents(documents, resolution=self.resolution)
        LOGGER.info("Search index initialized with %d episodes.", len(documents))
        return _Snapshot(documents=documents, store=store, index=index)

    def _require_snapshot(self) -> _Snapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise IndexNotInitializedError()
        return snapshot

    def search(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
        snapshot = self._require_snapshot()
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            limit = self.default_limit

        terms = split_query_terms(query)
        seen: Set[str] = set()
        results: List[SearchResult] = []

        # Over-fetch so that duplicates across fields do not starve the limit
        for field_name, identities in snapshot.index.search(query, limit=limit * 2):
            LOGGER.debug("Field %s returned %d matches", field_name, len(identities))
            for identity in identities:
                if identity in seen:
                    continue
                seen.add(identity)

                document = snapshot.store.get(identity)
                if document is None:
                    continue
                results.append(self._make_result(document, terms, len(results) + 1))
                if len(results) >= limit:
                    return results

        # Literal substring pass catches matches the prefix index cannot see
        if terms:
            for document in snapshot.documents:
                # Skip documents shadowed by a later one with the same identity
                if document.identity in seen or snapshot.store.get(document.identity) is not document:
                    continue
                lowered = document.text.lower()
                if not any(term in lowered for term in terms):
                    continue
                seen.add(document.identity)
                results.append(self._make_result(document, terms, len(results) + 1))
                if len(results) >= limit:
                    break

        return results

    def _make_result(self, document: Document, terms: Sequence[str], rank: int) -> SearchResult:
        position = find_first_match(document.text, terms)
        return SearchResult(
            identity=document.identity,
            snippet=extract_snippet(document.text, terms, self.snippet_chars),
            rank=rank,
            timestamp=timestamp_before(document.text, position),
        )

    def get_document(self, identity_query: str) -> Optional[Document]:
        """Resolve a guest name by exact, then partial, case-insensitive match."""
        snapshot = self._require_snapshot()
        needle = identity_query.lower()

        for document in snapshot.documents:
            if document.identity.lower() == needle:
                return document

        for document in snapshot.documents:
            if needle in document.identity.lower():
                return document

        return None

    def list_identities(self) -> List[str]:
        snapshot = self._require_snapshot()
        return sorted(document.identity for document in snapshot.documents)
