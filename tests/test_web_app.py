"""Tests for the FastAPI web application."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from podsearch.config import AppConfig
from podsearch.index.search import Searcher
from podsearch.web.app import create_app


@pytest.fixture
def client(searcher: Searcher) -> TestClient:
    return TestClient(create_app(searcher))


class TestHealthEndpoint:
    """Tests for GET /health."""

    def test_health(self, client: TestClient) -> None:
        """Reports the number of loaded episodes."""
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "episodes": 4}

    def test_health_uninitialized(self) -> None:
        """Reports zero episodes before loading."""
        response = TestClient(create_app(Searcher())).get("/health")

        assert response.json()["episodes"] == 0


class TestStartup:
    """Tests for corpus loading at startup."""

    def test_loads_corpus_on_startup(self, transcripts_dir: Path) -> None:
        """The configured directory is indexed when the app starts."""
        app = create_app(config=AppConfig(transcripts_dir=transcripts_dir))

        with TestClient(app) as client:
            response = client.get("/health")

        assert response.json()["episodes"] == 4


class TestToolEndpoints:
    """Tests for the /tools endpoints."""

    def test_list_tools(self, client: TestClient) -> None:
        """Lists the three tools."""
        response = client.get("/tools")

        assert response.status_code == 200
        names = [tool["name"] for tool in response.json()["tools"]]
        assert names == ["search_transcripts", "get_episode", "list_episodes"]

    def test_call_search(self, client: TestClient) -> None:
        """Returns formatted search results."""
        response = client.post("/tools/search_transcripts", json={"query": "pricing"})

        assert response.status_code == 200
        body = response.json()
        assert body["is_error"] is False
        assert "## 1. Jane Doe" in body["text"]

    def test_call_without_body(self, client: TestClient) -> None:
        """Tools without arguments accept an empty request body."""
        response = client.post("/tools/list_episodes")

        assert response.status_code == 200
        assert response.json()["text"].startswith("# Available Episodes (4 total)")

    def test_call_unknown_tool(self, client: TestClient) -> None:
        """Unknown tools are error responses, not HTTP failures."""
        response = client.post("/tools/nope", json={})

        assert response.status_code == 200
        assert response.json() == {"text": "Error: Unknown tool: nope", "is_error": True}

    def test_call_uninitialized(self) -> None:
        """Tool calls before loading report the uninitialized index."""
        client = TestClient(create_app(Searcher()))

        response = client.post("/tools/list_episodes", json={})

        assert response.json()["is_error"] is True


class TestSearchEndpoint:
    """Tests for POST /search."""

    def test_search(self, client: TestClient) -> None:
        """Returns structured results in discovery order."""
        response = client.post("/search", json={"query": "grow"})

        assert response.status_code == 200
        results = response.json()["results"]
        assert [r["identity"] for r in results] == ["Brian Chesky", "Shreyas Doshi"]
        assert [r["rank"] for r in results] == [1, 2]
        assert results[0]["timestamp"] == "00:02:30"

    def test_search_non_positive_limit(self, client: TestClient) -> None:
        """Non-positive limits fall back to the default."""
        response = client.post("/search", json={"query": "lenny", "limit": 0})

        assert len(response.json()["results"]) == 3

    def test_search_empty_query(self, client: TestClient) -> None:
        """An empty query returns no results."""
        response = client.post("/search", json={"query": ""})

        assert response.status_code == 200
        assert response.json() == {"results": []}

    def test_search_uninitialized(self) -> None:
        """Returns 503 before the index exists."""
        client = TestClient(create_app(Searcher()))

        response = client.post("/search", json={"query": "pricing"})

        assert response.status_code == 503

    def test_search_runs_off_event_loop(self, searcher: Searcher) -> None:
        """The synchronous search is handed to a worker thread."""
        client = TestClient(create_app(searcher))

        with patch("podsearch.web.app.asyncio.to_thread", new=AsyncMock(return_value=[])) as mock_thread:
            response = client.post("/search", json={"query": "pricing", "limit": 3})

        assert response.status_code == 200
        assert response.json() == {"results": []}
        mock_thread.assert_awaited_once_with(searcher.search, "pricing", 3)


class TestEpisodeEndpoints:
    """Tests for the /episodes endpoints."""

    def test_list_episodes(self, client: TestClient) -> None:
        """Lists sorted guests with a count."""
        response = client.get("/episodes")

        assert response.json() == {
            "episodes": ["Brian Chesky", "Jane Doe", "Julie Zhuo", "Shreyas Doshi"],
            "count": 4,
        }

    def test_get_episode(self, client: TestClient) -> None:
        """Resolves partial guest names."""
        response = client.get("/episodes/julie")

        assert response.status_code == 200
        assert response.json()["identity"] == "Julie Zhuo"
        assert "feedback" in response.json()["text"]

    def test_get_episode_not_found(self, client: TestClient) -> None:
        """Returns 404 with suggestions."""
        response = client.get("/episodes/Jane Smith")

        assert response.status_code == 404
        assert response.json()["detail"]["suggestions"] == ["Jane Doe"]
