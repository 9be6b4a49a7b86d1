"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_LIMIT = 10
DEFAULT_SNIPPET_CHARS = 600
DEFAULT_RESOLUTION = 9

# Checked in order; the first existing directory wins
TRANSCRIPT_DIR_CANDIDATES = (Path("data/transcripts"), Path("transcripts"))


def find_transcripts_dir() -> Path:
    """Pick the first candidate transcripts directory that exists locally."""
    for candidate in TRANSCRIPT_DIR_CANDIDATES:
        if candidate.is_dir():
            return candidate
    return TRANSCRIPT_DIR_CANDIDATES[-1]


@dataclass(slots=True)
class AppConfig:
    transcripts_dir: Path = field(default_factory=find_transcripts_dir)
    snippet_chars: int = DEFAULT_SNIPPET_CHARS
    default_limit: int = DEFAULT_LIMIT
    resolution: int = DEFAULT_RESOLUTION

    @classmethod
    def from_options(cls, transcripts_dir: Path | None = None, **overrides: int) -> "AppConfig":
        """Build a config from CLI-style options where ``None`` means the default."""
        if transcripts_dir is None:
            return cls(**overrides)
        return cls(transcripts_dir=Path(transcripts_dir), **overrides)

    def resolve_transcripts_dir(self, base_dir: Path | None = None) -> Path:
        directory = Path(self.transcripts_dir).expanduser()
        if directory.is_absolute() or base_dir is None:
            return directory
        return base_dir / directory

    def searcher_options(self) -> dict[str, int]:
        """Keyword arguments for constructing a ``Searcher``."""
        return {
            "snippet_chars": self.snippet_chars,
            "resolution": self.resolution,
            "default_limit": self.default_limit,
        }
