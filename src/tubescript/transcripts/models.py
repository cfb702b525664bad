"""Value objects produced by transcript retrieval."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import overload

from ..types import TranscriptSnippetData


@dataclass(frozen=True, slots=True)
class TranslationLanguage:
    """A language a caption track can be machine-translated into."""

    language: str
    language_code: str


@dataclass(frozen=True, slots=True)
class FetchedTranscriptSnippet:
    """Single timed line of a transcript."""

    text: str
    start: float  # seconds
    duration: float  # seconds


@dataclass(frozen=True, slots=True)
class FetchedTranscript:
    """Snippets of one fetched transcript, in document (chronological) order."""

    snippets: tuple[FetchedTranscriptSnippet, ...]
    video_id: str
    language: str
    language_code: str
    is_generated: bool

    def __iter__(self) -> Iterator[FetchedTranscriptSnippet]:
        return iter(self.snippets)

    def __len__(self) -> int:
        return len(self.snippets)

    @overload
    def __getitem__(self, index: int) -> FetchedTranscriptSnippet: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[FetchedTranscriptSnippet, ...]: ...

    def __getitem__(
        self, index: int | slice
    ) -> FetchedTranscriptSnippet | tuple[FetchedTranscriptSnippet, ...]:
        return self.snippets[index]

    def to_raw_data(self) -> list[TranscriptSnippetData]:
        return [
            {"text": snippet.text, "start": snippet.start, "duration": snippet.duration}
            for snippet in self.snippets
        ]


__all__ = ["FetchedTranscript", "FetchedTranscriptSnippet", "TranslationLanguage"]
