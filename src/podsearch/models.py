"""Core podsearch data models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True, slots=True)
class Document:
    """A single transcript keyed by the guest identity taken from its filename."""

    identity: str
    text: str
    source_path: Path


@dataclass(slots=True)
class SearchResult:
    """One deduplicated search hit.

    ``rank`` is the 1-based position in which the hit was discovered, not a
    similarity score.
    """

    identity: str
    snippet: str
    rank: int
    timestamp: Optional[str] = None
