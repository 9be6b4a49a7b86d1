"""FastAPI application serving transcript search over HTTP."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional

from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from podsearch.config import AppConfig
from podsearch.index.search import Searcher
from podsearch.ingestion.transcript_loader import load_transcripts
from podsearch.models import SearchResult
from podsearch.tools import ToolResponse, ToolSpec, TranscriptTools, suggest_identities

LOGGER = logging.getLogger(__name__)


class SearchPayload(BaseModel):
    query: str
    limit: Optional[int] = None


class EpisodePayload(BaseModel):
    identity: str
    text: str


def _resolve_transcripts_dir(config: AppConfig) -> Path:
    return config.resolve_transcripts_dir(Path.cwd())


def _build_searcher(config: AppConfig) -> Searcher:
    return Searcher(**config.searcher_options())


def create_app(searcher: Searcher | None = None, config: AppConfig | None = None) -> FastAPI:
    """Build the web app around one searcher.

    Without an injected searcher the corpus is loaded from the configured
    directory during startup; a load failure aborts startup.
    """
    config = config or AppConfig()
    searcher = searcher or _build_searcher(config)
    tools = TranscriptTools(searcher)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
        if not searcher.is_initialized:
            transcripts_dir = _resolve_transcripts_dir(config)
            await asyncio.to_thread(
                searcher.initialize_once, lambda: load_transcripts(transcripts_dir)
            )
        yield

    app = FastAPI(title="podsearch", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.searcher = searcher
    app.state.tools = tools

    @app.get("/health")
    async def health(request: Request) -> Dict[str, Any]:
        return {"status": "ok", "episodes": request.app.state.searcher.document_count}

    @app.get("/tools")
    async def list_tools(request: Request) -> Dict[str, List[ToolSpec]]:
        return {"tools": request.app.state.tools.list_tools()}

    @app.post("/tools/{name}")
    async def call_tool(
        name: str, request: Request, arguments: Optional[Dict[str, Any]] = Body(default=None)
    ) -> ToolResponse:
        return await asyncio.to_thread(request.app.state.tools.call, name, arguments)

    @app.post("/search")
    async def search_transcripts(
        payload: SearchPayload, request: Request
    ) -> Dict[str, List[SearchResult]]:
        current: Searcher = request.app.state.searcher
        if not current.is_initialized:
            raise HTTPException(status_code=503, detail="Search index not initialized")
        results = await asyncio.to_thread(current.search, payload.query, payload.limit)
        return {"results": results}

    @app.get("/episodes")
    async def list_episodes(request: Request) -> Dict[str, Any]:
        current: Searcher = request.app.state.searcher
        if not current.is_initialized:
            raise HTTPException(status_code=503, detail="Search index not initialized")
        identities = current.list_identities()
        return {"episodes": identities, "count": len(identities)}

    @app.get("/episodes/{guest}")
    async def get_episode(guest: str, request: Request) -> EpisodePayload:
        current: Searcher = request.app.state.searcher
        if not current.is_initialized:
            raise HTTPException(status_code=503, detail="Search index not initialized")
        document = current.get_document(guest)
        if document is None:
            suggestions = suggest_identities(guest, current.list_identities())
            raise HTTPException(
                status_code=404,
                detail={"message": f'Episode with guest "{guest}" not found.', "suggestions": suggestions},
            )
        return EpisodePayload(identity=document.identity, text=document.text)

    return app


app = create_app()
