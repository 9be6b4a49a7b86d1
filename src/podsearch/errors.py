"""Exception types raised by podsearch."""

from __future__ import annotations

from typing import Any


class PodsearchError(Exception):
    """Base class for podsearch failures."""

    error_code: str = "PODSEARCH_ERR"

    def __init__(self, message: str, *, context: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class CorpusLoadError(PodsearchError):
    """The transcript directory is missing, unreadable or empty."""

    error_code = "PODSEARCH_LOAD"


class IndexNotInitializedError(PodsearchError):
    """A query arrived before the search index was built."""

    error_code = "PODSEARCH_UNINITIALIZED"

    def __init__(self, message: str = "Search index not initialized") -> None:
        super().__init__(message)


class UnknownToolError(PodsearchError):
    """A tool call named a tool that does not exist."""

    error_code = "PODSEARCH_UNKNOWN_TOOL"
