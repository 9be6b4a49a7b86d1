"""Utility helpers for working with transcript files."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

TRANSCRIPT_SUFFIX = ".txt"


def iter_transcript_paths(directory: Path) -> Iterator[Path]:
    """Yield plain-text transcripts directly inside ``directory``, sorted by name."""
    for item in sorted(directory.iterdir()):
        if item.is_file() and item.suffix.lower() == TRANSCRIPT_SUFFIX:
            yield item


def identity_from_path(path: Path) -> str:
    """Strip the extension from a transcript filename and nothing else."""
    return path.stem
