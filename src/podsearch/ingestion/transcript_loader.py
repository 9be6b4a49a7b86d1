"""Transcript loading.

Transcripts are plain UTF-8 text files, one per guest. The directory is
expected to be populated before the loader runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from podsearch.errors import CorpusLoadError
from podsearch.models import Document
from podsearch.utils.files import identity_from_path, iter_transcript_paths

LOGGER = logging.getLogger(__name__)


def load_transcript(path: Path) -> Document:
    """Read a single transcript file into a document."""
    text = path.read_text(encoding="utf-8")
    return Document(identity=identity_from_path(path), text=text, source_path=path)


def load_transcripts(directory: Path) -> List[Document]:
    """Load every transcript in ``directory``.

    Raises:
        CorpusLoadError: if the directory is missing, unreadable or holds no
            transcripts.
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise CorpusLoadError(
            f"Transcripts directory not found: {directory}",
            context={"path": str(directory)},
        )

    try:
        paths = list(iter_transcript_paths(directory))
        if not paths:
            raise CorpusLoadError(
                f"No transcripts found in {directory}",
                context={"path": str(directory)},
            )

        LOGGER.info("Loading %d transcripts from %s...", len(paths), directory)
        documents = [load_transcript(path) for path in paths]
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.error("Error loading transcripts: %s", exc)
        raise CorpusLoadError(
            f"Failed to read transcripts from {directory}: {exc}",
            context={"path": str(directory)},
        ) from exc

    LOGGER.info("Loaded %d episodes successfully.", len(documents))
    return documents
