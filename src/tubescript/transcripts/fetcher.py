"""Retrieval of a video's transcript catalog from YouTube.

The catalog is obtained in four dependent steps:

1. Fetch the watch page, giving cookie consent once if YouTube asks for it.
2. Extract the Innertube API key embedded in the page.
3. Call the Innertube player endpoint with that key.
4. Check the reported playability and read the caption tracks.

Any ``RequestBlocked`` raised along the way restarts the whole chain when a
proxy configuration allows retries.
"""

from __future__ import annotations

import html
import logging
import re
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
)

from ..constants import INNERTUBE_API_URL, WATCH_URL, innertube_context
from ..errors import (
    AgeRestricted,
    FailedToCreateConsentCookie,
    InvalidVideoId,
    IpBlocked,
    RequestBlocked,
    TranscriptsDisabled,
    VideoUnavailable,
    VideoUnplayable,
    YouTubeDataUnparsable,
)
from ..http import translate_request_errors
from ..types import CaptionsJson, InnertubeData, PlayabilityStatusData
from .transcript import TranscriptList, build_transcript_list

if TYPE_CHECKING:
    import requests

    from ..proxies import ProxyConfig

logger = logging.getLogger(__name__)

_API_KEY_RE = re.compile(r'"INNERTUBE_API_KEY":\s*"([a-zA-Z0-9_-]+)"')
_CONSENT_VALUE_RE = re.compile(r'name="v" value="(.*?)"')
CONSENT_FORM_MARKER = 'action="https://consent.youtube.com/s"'
RECAPTCHA_MARKER = 'class="g-recaptcha"'
CONSENT_COOKIE_DOMAIN = ".youtube.com"


class PlayabilityStatus(StrEnum):
    OK = "OK"
    ERROR = "ERROR"
    LOGIN_REQUIRED = "LOGIN_REQUIRED"


class PlayabilityFailedReason(StrEnum):
    BOT_DETECTED = "Sign in to confirm you're not a bot"
    AGE_RESTRICTED = "This video may be inappropriate for some users."
    VIDEO_UNAVAILABLE = "This video is unavailable"


def _normalise_reason(reason: str) -> str:
    # YouTube alternates between typographic and ASCII apostrophes
    return reason.replace("’", "'").strip()


def extract_innertube_api_key(page_html: str, video_id: str) -> str:
    """Return the Innertube API key embedded in the watch page.

    Raises:
        IpBlocked: If YouTube served a captcha instead of the page
        YouTubeDataUnparsable: If the key is missing for any other reason
    """
    match = _API_KEY_RE.search(page_html)
    if match:
        return match.group(1)
    if RECAPTCHA_MARKER in page_html:
        raise IpBlocked(video_id)
    raise YouTubeDataUnparsable(video_id)


def assert_playability(
    playability_status_data: PlayabilityStatusData | None, video_id: str
) -> None:
    """Raise the error matching a non-playable status; return for playable videos."""

    if playability_status_data is None:
        return

    status = playability_status_data.status
    if not status or status == PlayabilityStatus.OK:
        return

    reason = playability_status_data.reason
    normalised_reason = _normalise_reason(reason or "")

    if status == PlayabilityStatus.LOGIN_REQUIRED:
        if normalised_reason == PlayabilityFailedReason.BOT_DETECTED:
            raise RequestBlocked(video_id)
        if normalised_reason == PlayabilityFailedReason.AGE_RESTRICTED:
            raise AgeRestricted(video_id)

    if (
        status == PlayabilityStatus.ERROR
        and normalised_reason == PlayabilityFailedReason.VIDEO_UNAVAILABLE
    ):
        if video_id.startswith(("http://", "https://")):
            raise InvalidVideoId(video_id)
        raise VideoUnavailable(video_id)

    raise VideoUnplayable(video_id, reason, playability_status_data.sub_reasons)


def extract_captions_json(innertube_data: InnertubeData, video_id: str) -> CaptionsJson:
    """Validate playability and return the caption track catalog.

    Raises:
        TranscriptsDisabled: If the response lists no caption tracks
    """
    assert_playability(innertube_data.playability_status, video_id)

    captions = innertube_data.captions
    captions_json = captions.player_captions_tracklist_renderer if captions else None
    if captions_json is None or not captions_json.caption_tracks:
        raise TranscriptsDisabled(video_id)

    return captions_json


class TranscriptListFetcher:
    """Drives the page → API key → Innertube → captions chain for one session."""

    def __init__(
        self,
        http_client: requests.Session,
        proxy_config: ProxyConfig | None = None,
    ) -> None:
        self._http_client = http_client
        self._proxy_config = proxy_config

    def fetch(self, video_id: str) -> TranscriptList:
        captions_json = self._fetch_captions_json(video_id)
        return build_transcript_list(self._http_client, video_id, captions_json)

    def _max_attempts(self) -> int:
        if self._proxy_config is None:
            return 1
        return max(1, self._proxy_config.retries_when_blocked)

    def _fetch_captions_json(self, video_id: str) -> CaptionsJson:
        retrying = Retrying(
            retry=retry_if_exception_type(RequestBlocked),
            stop=stop_after_attempt(self._max_attempts()),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(self._fetch_captions_json_once, video_id)

    def _fetch_captions_json_once(self, video_id: str) -> CaptionsJson:
        page_html = self._fetch_video_html(video_id)
        api_key = extract_innertube_api_key(page_html, video_id)
        innertube_data = self._fetch_innertube_data(video_id, api_key)
        return extract_captions_json(innertube_data, video_id)

    def _create_consent_cookie(self, page_html: str, video_id: str) -> None:
        match = _CONSENT_VALUE_RE.search(page_html)
        if match is None:
            raise FailedToCreateConsentCookie(video_id)
        self._http_client.cookies.set(
            "CONSENT", f"YES+{match.group(1)}", domain=CONSENT_COOKIE_DOMAIN
        )

    def _fetch_video_html(self, video_id: str) -> str:
        page_html = self._fetch_html(video_id)
        if CONSENT_FORM_MARKER in page_html:
            logger.info("Consent interstitial served for %s, giving consent", video_id)
            self._create_consent_cookie(page_html, video_id)
            page_html = self._fetch_html(video_id)
            if CONSENT_FORM_MARKER in page_html:
                raise FailedToCreateConsentCookie(video_id)
        return page_html

    def _fetch_html(self, video_id: str) -> str:
        logger.debug("Fetching watch page for %s", video_id)
        with translate_request_errors(video_id):
            response = self._http_client.get(WATCH_URL.format(video_id=video_id))
            response.raise_for_status()
        return html.unescape(response.text)

    def _fetch_innertube_data(self, video_id: str, api_key: str) -> InnertubeData:
        logger.debug("Requesting Innertube player data for %s", video_id)
        payload: dict[str, Any] = {"context": innertube_context(), "videoId": video_id}
        with translate_request_errors(video_id):
            response = self._http_client.post(
                INNERTUBE_API_URL.format(api_key=api_key), json=payload
            )
            response.raise_for_status()

        try:
            return InnertubeData.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.debug("Innertube response for %s is not usable: %s", video_id, exc)
            raise YouTubeDataUnparsable(video_id) from exc


__all__ = [
    "PlayabilityFailedReason",
    "PlayabilityStatus",
    "TranscriptListFetcher",
    "assert_playability",
    "extract_captions_json",
    "extract_innertube_api_key",
]
