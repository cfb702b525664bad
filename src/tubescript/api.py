"""Public entry point for retrieving YouTube transcripts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from .http import create_session
from .transcripts.fetcher import TranscriptListFetcher

if TYPE_CHECKING:
    import requests

    from .proxies import ProxyConfig
    from .transcripts.models import FetchedTranscript
    from .transcripts.transcript import TranscriptList

logger = logging.getLogger(__name__)


class YouTubeTranscriptApi:
    """Fetch transcripts, or list the available ones, for YouTube videos.

    An instance owns one HTTP session. Cookie consent given while fetching is
    stored on that session, so use one instance per thread when fetching
    several videos concurrently.
    """

    def __init__(
        self,
        proxy_config: ProxyConfig | None = None,
        http_client: requests.Session | None = None,
    ) -> None:
        """
        Initialize the API.

        Args:
            proxy_config: Proxy routing, connection and retry settings
            http_client: Preconfigured session to use instead of a fresh one. When
                given, proxy settings are not applied to it but the blocked-request
                retry policy of ``proxy_config`` still is.
        """
        self._http_client = http_client or create_session(proxy_config)
        self._fetcher = TranscriptListFetcher(self._http_client, proxy_config=proxy_config)

    def fetch(
        self,
        video_id: str,
        languages: Iterable[str] = ("en",),
        preserve_formatting: bool = False,
    ) -> FetchedTranscript:
        """Fetch the transcript of ``video_id`` in the first available language.

        Shortcut for ``list(video_id).find_transcript(languages).fetch(...)``.

        Args:
            video_id: The video id, not the URL
            languages: Language codes in descending priority
            preserve_formatting: Keep the snippet text exactly as delivered

        Returns:
            FetchedTranscript: The fetched snippets plus language metadata
        """
        transcript = self.list(video_id).find_transcript(languages)
        logger.info(
            "Selected %s transcript (%s) for %s",
            transcript.language_code,
            "generated" if transcript.is_generated else "manually created",
            video_id,
        )
        return transcript.fetch(preserve_formatting=preserve_formatting)

    def list(self, video_id: str) -> TranscriptList:
        """Return the catalog of transcripts available for ``video_id``."""

        return self._fetcher.fetch(video_id)


__all__ = ["YouTubeTranscriptApi"]
