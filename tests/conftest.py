"""Shared fixtures for podsearch tests."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from podsearch.index.search import Searcher
from podsearch.models import Document


def make_document(identity: str, text: str) -> Document:
    return Document(identity=identity, text=text, source_path=Path(f"/transcripts/{identity}.txt"))


@pytest.fixture
def corpus() -> List[Document]:
    return [
        make_document(
            "Jane Doe",
            "Lenny (00:00:05):\nWelcome to the show.\n\n"
            "Jane Doe (00:01:10):\nMy view is that pricing strategy is about value capture.\n",
        ),
        make_document(
            "Brian Chesky",
            "Lenny (00:00:03):\nToday we talk about design.\n\n"
            "Brian Chesky (00:02:30):\nGrowth came from founder mode and product-led growth.\n",
        ),
        make_document(
            "Julie Zhuo",
            "Julie Zhuo (00:00:10):\nManagers should give feedback every week.\n\n"
            "Lenny (00:05:00):\nHow do you think about hiring?\n",
        ),
        make_document(
            "Shreyas Doshi",
            "Shreyas Doshi (00:00:12):\nThe LNO framework helps prioritization.\n"
            "We mentioned sub-growthy ideas once.\n",
        ),
    ]


@pytest.fixture
def searcher(corpus: List[Document]) -> Searcher:
    engine = Searcher()
    engine.initialize(corpus)
    return engine


@pytest.fixture
def transcripts_dir(tmp_path: Path, corpus: List[Document]) -> Path:
    directory = tmp_path / "transcripts"
    directory.mkdir()
    for document in corpus:
        (directory / f"{document.identity}.txt").write_text(document.text, encoding="utf-8")
    return directory
