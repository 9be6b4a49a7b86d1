"""Agent-facing tools wrapping the searcher.

Each tool validates its arguments with pydantic, calls the searcher and
renders a plain-text response. Failures never escape ``TranscriptTools.call``;
they are returned as error responses so that one bad call cannot affect the
next one.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from podsearch.config import DEFAULT_LIMIT
from podsearch.errors import UnknownToolError
from podsearch.index.search import Searcher

LOGGER = logging.getLogger(__name__)

MAX_SUGGESTIONS = 5


class SearchTranscriptsRequest(BaseModel):
    query: str = Field(
        description="The search query - use keywords related to the topic you want insights on"
    )
    limit: int = Field(
        default=DEFAULT_LIMIT,
        description="Maximum number of results to return (default: 10)",
    )

    @field_validator("limit", mode="before")
    @classmethod
    def _default_limit(cls, value: Any) -> Any:
        if value is None or isinstance(value, bool):
            return DEFAULT_LIMIT
        try:
            number = int(value)
        except (TypeError, ValueError):
            return DEFAULT_LIMIT
        return number if number > 0 else DEFAULT_LIMIT


class GetEpisodeRequest(BaseModel):
    guest: str = Field(description="The name of the guest (e.g., 'Shreyas Doshi', 'Julie Zhuo')")


class ListEpisodesRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")


class ToolResponse(BaseModel):
    text: str
    is_error: bool = False


class ToolSpec(BaseModel):
    name: str
    description: str
    input_schema: Dict[str, Any]


def suggest_identities(
    query: str, identities: Sequence[str], limit: int = MAX_SUGGESTIONS
) -> List[str]:
    """Identities containing the first word of ``query``, case-insensitively."""
    words = query.lower().split(" ")
    first = words[0] if words else ""
    return [identity for identity in identities if first in identity.lower()][:limit]


def format_search_results(query: str, results: Sequence[Any]) -> str:
    if not results:
        return f'No results found for "{query}". Try different keywords.'

    sections = [
        f"## {position}. {result.identity}\n\n{result.snippet}\n"
        for position, result in enumerate(results, start=1)
    ]
    body = "\n---\n\n".join(sections)
    return f'Found {len(results)} relevant episodes for "{query}":\n\n{body}'


class TranscriptTools:
    """Dispatches tool calls against a single shared searcher."""

    def __init__(self, searcher: Searcher) -> None:
        self.searcher = searcher
        self._handlers: Dict[str, tuple[type[BaseModel], Callable[[Any], str], str]] = {
            "search_transcripts": (
                SearchTranscriptsRequest,
                self._search_transcripts,
                "Search across all podcast transcripts for insights on a topic. "
                "Returns relevant excerpts from episodes with guest names. "
                "Use this to find what product leaders and experts have said about "
                "specific topics like pricing, growth, product management, hiring, etc.",
            ),
            "get_episode": (
                GetEpisodeRequest,
                self._get_episode,
                "Get the full transcript for a specific episode by guest name. "
                "Use this when you want to dive deeper into a specific conversation.",
            ),
            "list_episodes": (
                ListEpisodesRequest,
                self._list_episodes,
                "List all available episodes/guests in the podcast archive. "
                "Use this to see what guests and topics are available to search.",
            ),
        }

    def list_tools(self) -> List[ToolSpec]:
        return [
            ToolSpec(name=name, description=description, input_schema=model.model_json_schema())
            for name, (model, _, description) in self._handlers.items()
        ]

    def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResponse:
        try:
            if name not in self._handlers:
                raise UnknownToolError(f"Unknown tool: {name}")
            model, handler, _ = self._handlers[name]
            request = model.model_validate(dict(arguments or {}))
            return ToolResponse(text=handler(request))
        except ValidationError as exc:
            LOGGER.warning("Invalid arguments for %s: %s", name, exc)
            return ToolResponse(text=f"Error: invalid arguments for {name}: {exc}", is_error=True)
        except Exception as exc:
            LOGGER.exception("Tool %s failed", name)
            return ToolResponse(text=f"Error: {exc}", is_error=True)

    def _search_transcripts(self, request: SearchTranscriptsRequest) -> str:
        results = self.searcher.search(request.query, request.limit)
        return format_search_results(request.query, results)

    def _get_episode(self, request: GetEpisodeRequest) -> str:
        document = self.searcher.get_document(request.guest)
        if document is None:
            suggestions = suggest_identities(request.guest, self.searcher.list_identities())
            hint = f" Did you mean: {', '.join(suggestions)}?" if suggestions else ""
            return f'Episode with guest "{request.guest}" not found.{hint}'
        return f"# Episode: {document.identity}\n\n{document.text}"

    def _list_episodes(self, request: ListEpisodesRequest) -> str:
        identities = self.searcher.list_identities()
        return f"# Available Episodes ({len(identities)} total)\n\n" + "\n".join(identities)
