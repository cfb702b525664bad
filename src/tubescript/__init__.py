"""Retrieve transcripts and subtitles of YouTube videos."""

from .api import YouTubeTranscriptApi
from .errors import (
    AgeRestricted,
    CouldNotRetrieveTranscript,
    ErrorKind,
    FailedToCreateConsentCookie,
    InvalidProxyConfig,
    InvalidVideoId,
    IpBlocked,
    NoTranscriptFound,
    NotTranslatable,
    PoTokenRequired,
    RequestBlocked,
    TranscriptsDisabled,
    TranslationLanguageNotAvailable,
    TubescriptError,
    UnknownFormatterType,
    VideoUnavailable,
    VideoUnplayable,
    YouTubeDataUnparsable,
    YouTubeRequestFailed,
)
from .proxies import ProxyConfig
from .transcripts import (
    FetchedTranscript,
    FetchedTranscriptSnippet,
    Transcript,
    TranscriptList,
    TranslationLanguage,
)

__version__ = "1.0.0"

__all__ = [
    "AgeRestricted",
    "CouldNotRetrieveTranscript",
    "ErrorKind",
    "FailedToCreateConsentCookie",
    "FetchedTranscript",
    "FetchedTranscriptSnippet",
    "InvalidProxyConfig",
    "InvalidVideoId",
    "IpBlocked",
    "NoTranscriptFound",
    "NotTranslatable",
    "PoTokenRequired",
    "ProxyConfig",
    "RequestBlocked",
    "Transcript",
    "TranscriptList",
    "TranscriptsDisabled",
    "TranslationLanguage",
    "TranslationLanguageNotAvailable",
    "TubescriptError",
    "UnknownFormatterType",
    "VideoUnavailable",
    "VideoUnplayable",
    "YouTubeDataUnparsable",
    "YouTubeRequestFailed",
    "YouTubeTranscriptApi",
    "__version__",
]
