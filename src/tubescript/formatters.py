"""Render fetched transcripts as text, JSON, CSV or subtitle files."""

from __future__ import annotations

import csv
import json
import pprint
from abc import ABC, abstractmethod
from collections.abc import Sequence
from io import StringIO
from typing import Any, ClassVar

from .errors import UnknownFormatterType
from .transcripts.models import FetchedTranscript, FetchedTranscriptSnippet


def _split_milliseconds(seconds: float) -> tuple[int, int, int, int]:
    total_ms = round(seconds * 1000)
    hours, remainder = divmod(total_ms, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, milliseconds = divmod(remainder, 1000)
    return hours, minutes, secs, milliseconds


def srt_timestamp(seconds: float) -> str:
    """
    Convert seconds to SRT timestamp format (HH:MM:SS,mmm).

    Args:
        seconds: Time in seconds

    Returns:
        str: Formatted timestamp in SRT format
    """
    hours, minutes, secs, milliseconds = _split_milliseconds(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{milliseconds:03d}"


def vtt_timestamp(seconds: float) -> str:
    """
    Convert seconds to WebVTT timestamp format (HH:MM:SS.mmm).

    Args:
        seconds: Time in seconds

    Returns:
        str: Formatted timestamp in WebVTT format
    """
    hours, minutes, secs, milliseconds = _split_milliseconds(seconds)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}.{milliseconds:03d}"


class Formatter(ABC):
    """Turns fetched transcripts into a string representation."""

    @abstractmethod
    def format_transcript(self, transcript: FetchedTranscript, **kwargs: Any) -> str:
        """Format a single transcript."""

    @abstractmethod
    def format_transcripts(
        self, transcripts: Sequence[FetchedTranscript], **kwargs: Any
    ) -> str:
        """Format several transcripts into one document."""


class PrettyPrintFormatter(Formatter):
    def format_transcript(self, transcript: FetchedTranscript, **kwargs: Any) -> str:
        return pprint.pformat(transcript.to_raw_data(), **kwargs)

    def format_transcripts(
        self, transcripts: Sequence[FetchedTranscript], **kwargs: Any
    ) -> str:
        return pprint.pformat(
            [transcript.to_raw_data() for transcript in transcripts], **kwargs
        )


class JSONFormatter(Formatter):
    """Compact JSON by default; pass ``indent`` for indented output."""

    def format_transcript(self, transcript: FetchedTranscript, **kwargs: Any) -> str:
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(transcript.to_raw_data(), **kwargs)

    def format_transcripts(
        self, transcripts: Sequence[FetchedTranscript], **kwargs: Any
    ) -> str:
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(
            [transcript.to_raw_data() for transcript in transcripts], **kwargs
        )


class TextFormatter(Formatter):
    """Plain text, one snippet per line."""

    def format_transcript(self, transcript: FetchedTranscript, **kwargs: Any) -> str:
        return "\n".join(snippet.text for snippet in transcript)

    def format_transcripts(
        self, transcripts: Sequence[FetchedTranscript], **kwargs: Any
    ) -> str:
        return "\n\n\n".join(
            self.format_transcript(transcript, **kwargs) for transcript in transcripts
        )


class CSVFormatter(Formatter):
    def format_transcript(self, transcript: FetchedTranscript, **kwargs: Any) -> str:
        output = StringIO()
        writer = csv.DictWriter(output, fieldnames=["start", "duration", "text"])
        writer.writeheader()
        writer.writerows(transcript.to_raw_data())
        return output.getvalue()

    def format_transcripts(
        self, transcripts: Sequence[FetchedTranscript], **kwargs: Any
    ) -> str:
        return "\n".join(
            self.format_transcript(transcript, **kwargs) for transcript in transcripts
        )


class _TimedTextFormatter(Formatter):
    """Base for subtitle formats made of one cue block per snippet."""

    def format_transcript(self, transcript: FetchedTranscript, **kwargs: Any) -> str:
        cues = [self._format_cue(snippet) for snippet in transcript.snippets]
        return self._format_document(cues)

    def format_transcripts(
        self, transcripts: Sequence[FetchedTranscript], **kwargs: Any
    ) -> str:
        return "\n\n".join(
            self.format_transcript(transcript, **kwargs) for transcript in transcripts
        )

    def _format_cue(self, snippet: FetchedTranscriptSnippet) -> str:
        start = self._format_timestamp(snippet.start)
        end = self._format_timestamp(snippet.start + snippet.duration)
        return f"{start} --> {end}\n{snippet.text}"

    @abstractmethod
    def _format_timestamp(self, seconds: float) -> str: ...

    @abstractmethod
    def _format_document(self, cues: list[str]) -> str: ...


class WebVTTFormatter(_TimedTextFormatter):
    def _format_timestamp(self, seconds: float) -> str:
        return vtt_timestamp(seconds)

    def _format_document(self, cues: list[str]) -> str:
        if not cues:
            return "WEBVTT\n"
        return "WEBVTT\n\n" + "\n\n".join(cues) + "\n"


class SRTFormatter(_TimedTextFormatter):
    def _format_timestamp(self, seconds: float) -> str:
        return srt_timestamp(seconds)

    def _format_document(self, cues: list[str]) -> str:
        if not cues:
            return ""
        numbered = (f"{index}\n{cue}" for index, cue in enumerate(cues, 1))
        return "\n\n".join(numbered) + "\n"


class FormatterLoader:
    """Look up formatters by the names used on the command line."""

    TYPES: ClassVar[dict[str, type[Formatter]]] = {
        "pretty": PrettyPrintFormatter,
        "json": JSONFormatter,
        "text": TextFormatter,
        "csv": CSVFormatter,
        "webvtt": WebVTTFormatter,
        "srt": SRTFormatter,
    }

    def load(self, formatter_type: str = "pretty") -> Formatter:
        try:
            return self.TYPES[formatter_type]()
        except KeyError as exc:
            supported = ", ".join(sorted(self.TYPES))
            raise UnknownFormatterType(
                f"Unknown formatter type {formatter_type!r}; supported types: {supported}"
            ) from exc


__all__ = [
    "CSVFormatter",
    "Formatter",
    "FormatterLoader",
    "JSONFormatter",
    "PrettyPrintFormatter",
    "SRTFormatter",
    "TextFormatter",
    "WebVTTFormatter",
    "srt_timestamp",
    "vtt_timestamp",
]
