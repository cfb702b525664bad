"""Transcript catalog retrieval, transcript handles and fetched results."""

from .fetcher import TranscriptListFetcher
from .models import FetchedTranscript, FetchedTranscriptSnippet, TranslationLanguage
from .transcript import Transcript, TranscriptList, build_transcript_list

__all__ = [
    "FetchedTranscript",
    "FetchedTranscriptSnippet",
    "Transcript",
    "TranscriptList",
    "TranscriptListFetcher",
    "TranslationLanguage",
    "build_transcript_list",
]
