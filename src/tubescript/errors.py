"""Exception hierarchy describing why a transcript could not be retrieved.

Every retrieval failure derives from :class:`CouldNotRetrieveTranscript` and
carries the video id plus a human readable cause. The ``kind`` class attribute
gives callers a stable tag to build retry policies on without matching on
class names or message text.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from enum import StrEnum

from .constants import WATCH_URL


class ErrorKind(StrEnum):
    """Stable identifiers for each retrieval failure."""

    IP_BLOCKED = "ip_blocked"
    REQUEST_BLOCKED = "request_blocked"
    VIDEO_UNAVAILABLE = "video_unavailable"
    INVALID_VIDEO_ID = "invalid_video_id"
    AGE_RESTRICTED = "age_restricted"
    VIDEO_UNPLAYABLE = "video_unplayable"
    TRANSCRIPTS_DISABLED = "transcripts_disabled"
    DATA_UNPARSABLE = "data_unparsable"
    NO_TRANSCRIPT_FOUND = "no_transcript_found"
    TRANSLATION_LANGUAGE_NOT_AVAILABLE = "translation_language_not_available"
    NOT_TRANSLATABLE = "not_translatable"
    FAILED_TO_CREATE_CONSENT_COOKIE = "failed_to_create_consent_cookie"
    PO_TOKEN_REQUIRED = "po_token_required"
    REQUEST_FAILED = "request_failed"


RETRYABLE_KINDS = frozenset({ErrorKind.IP_BLOCKED, ErrorKind.REQUEST_BLOCKED})


class TubescriptError(Exception):
    """Base class for every error raised by this package."""


class InvalidProxyConfig(TubescriptError, ValueError):
    """Raised when proxy settings cannot be interpreted."""


class UnknownFormatterType(TubescriptError, ValueError):
    """Raised when an output format name is not registered."""


class CouldNotRetrieveTranscript(TubescriptError):
    """Raised when any stage of transcript retrieval fails for a video."""

    kind: ErrorKind
    CAUSE_MESSAGE = ""
    ERROR_MESSAGE = "Could not retrieve a transcript for the video {url}!"
    CAUSE_MESSAGE_INTRO = " This is most likely caused by:\n\n{cause}"

    def __init__(self, video_id: str) -> None:
        self.video_id = video_id
        super().__init__(self._build_error_message())

    @property
    def cause(self) -> str:
        return self.CAUSE_MESSAGE

    @property
    def is_retryable(self) -> bool:
        return getattr(self, "kind", None) in RETRYABLE_KINDS

    def _build_error_message(self) -> str:
        message = self.ERROR_MESSAGE.format(url=WATCH_URL.format(video_id=self.video_id))
        cause = self.cause
        if cause:
            message += self.CAUSE_MESSAGE_INTRO.format(cause=cause)
        return message

    def __str__(self) -> str:
        return self._build_error_message()

    def __reduce__(self) -> tuple[Any, ...]:
        return type(self), self._constructor_args()

    def _constructor_args(self) -> tuple[Any, ...]:
        return (self.video_id,)


class YouTubeDataUnparsable(CouldNotRetrieveTranscript):
    kind = ErrorKind.DATA_UNPARSABLE
    CAUSE_MESSAGE = (
        "The data required to fetch the transcript is not parsable. This should "
        "not happen and usually means YouTube changed the structure of its pages "
        "or API responses."
    )
    ISSUE_REFERRAL = (
        "\n\nIf you are sure that a transcript should be retrievable, please open "
        "an issue on the tubescript issue tracker. Include the video ID, the "
        "tubescript version you are using and the information needed to "
        "replicate the error, and check that no open issue already describes it."
    )

    def _build_error_message(self) -> str:
        return super()._build_error_message() + self.ISSUE_REFERRAL


class YouTubeRequestFailed(CouldNotRetrieveTranscript):
    kind = ErrorKind.REQUEST_FAILED
    CAUSE_MESSAGE = "Request to YouTube failed: {reason}"

    def __init__(self, video_id: str, error: BaseException | str) -> None:
        self.reason = str(error) or type(error).__name__
        super().__init__(video_id)

    def _constructor_args(self) -> tuple[Any, ...]:
        # Rebuilt from the reason text, not the transport exception
        return (self.video_id, self.reason)

    @property
    def cause(self) -> str:
        return self.CAUSE_MESSAGE.format(reason=self.reason)


class VideoUnavailable(CouldNotRetrieveTranscript):
    kind = ErrorKind.VIDEO_UNAVAILABLE
    CAUSE_MESSAGE = "The video is no longer available"


class InvalidVideoId(CouldNotRetrieveTranscript):
    kind = ErrorKind.INVALID_VIDEO_ID
    CAUSE_MESSAGE = (
        "You provided an invalid video id. Make sure you are using the video id "
        "and NOT the url!\n\n"
        'Do NOT run: `YouTubeTranscriptApi().fetch("https://www.youtube.com/watch?v=1234")`\n'
        'Instead run: `YouTubeTranscriptApi().fetch("1234")`'
    )


class VideoUnplayable(CouldNotRetrieveTranscript):
    kind = ErrorKind.VIDEO_UNPLAYABLE
    CAUSE_MESSAGE = "The video is unplayable for the following reason: {reason}"
    SUBREASON_MESSAGE = "\n\nAdditional Details:\n{sub_reasons}"

    def __init__(
        self, video_id: str, reason: str | None, sub_reasons: Sequence[str] = ()
    ) -> None:
        self.reason = reason
        self.sub_reasons = list(sub_reasons)
        super().__init__(video_id)

    def _constructor_args(self) -> tuple[Any, ...]:
        return (self.video_id, self.reason, tuple(self.sub_reasons))

    @property
    def cause(self) -> str:
        reason = "No reason specified!" if self.reason is None else self.reason
        if self.sub_reasons:
            sub_reasons = "\n".join(f" - {sub_reason}" for sub_reason in self.sub_reasons)
            reason += self.SUBREASON_MESSAGE.format(sub_reasons=sub_reasons)
        return self.CAUSE_MESSAGE.format(reason=reason)


class TranscriptsDisabled(CouldNotRetrieveTranscript):
    kind = ErrorKind.TRANSCRIPTS_DISABLED
    CAUSE_MESSAGE = "Subtitles are disabled for this video"


class NoTranscriptFound(CouldNotRetrieveTranscript):
    kind = ErrorKind.NO_TRANSCRIPT_FOUND
    CAUSE_MESSAGE = (
        "No transcripts were found for any of the requested language codes: "
        "{requested_language_codes}\n\n{transcript_data}"
    )

    def __init__(
        self,
        video_id: str,
        requested_language_codes: Sequence[str],
        transcript_data: object,
    ) -> None:
        self.requested_language_codes = list(requested_language_codes)
        self.transcript_data = transcript_data
        super().__init__(video_id)

    def _constructor_args(self) -> tuple[Any, ...]:
        # Carries the rendered catalog, not the catalog itself
        return (self.video_id, tuple(self.requested_language_codes), str(self.transcript_data))

    @property
    def cause(self) -> str:
        return self.CAUSE_MESSAGE.format(
            requested_language_codes=", ".join(self.requested_language_codes),
            transcript_data=str(self.transcript_data),
        )


class TranslationLanguageNotAvailable(CouldNotRetrieveTranscript):
    kind = ErrorKind.TRANSLATION_LANGUAGE_NOT_AVAILABLE
    CAUSE_MESSAGE = "The requested translation language is not available"


class NotTranslatable(CouldNotRetrieveTranscript):
    kind = ErrorKind.NOT_TRANSLATABLE
    CAUSE_MESSAGE = "The requested language is not translatable"


class FailedToCreateConsentCookie(CouldNotRetrieveTranscript):
    kind = ErrorKind.FAILED_TO_CREATE_CONSENT_COOKIE
    CAUSE_MESSAGE = "Failed to automatically give consent to saving cookies"


class IpBlocked(CouldNotRetrieveTranscript):
    kind = ErrorKind.IP_BLOCKED
    CAUSE_MESSAGE = (
        "YouTube is blocking requests from your IP. This usually is due to one of "
        "the following reasons:\n"
        "- You have done too many requests and your IP has been blocked by YouTube\n"
        "- You are doing requests from an IP belonging to a cloud provider (like AWS, "
        "Google Cloud Platform, Azure, etc.). Unfortunately, most IPs from cloud "
        "providers are blocked by YouTube.\n\n"
        "Consider routing requests through a rotating residential proxy and setting "
        "retries_when_blocked on the ProxyConfig."
    )


class RequestBlocked(CouldNotRetrieveTranscript):
    kind = ErrorKind.REQUEST_BLOCKED
    CAUSE_MESSAGE = (
        "YouTube rejected the request and asked to sign in to confirm you are not "
        "a bot. Retrying through a different IP address usually resolves this."
    )


class AgeRestricted(CouldNotRetrieveTranscript):
    kind = ErrorKind.AGE_RESTRICTED
    CAUSE_MESSAGE = (
        "This video is age-restricted. Therefore, you are unable to retrieve "
        "transcripts for it without authenticating yourself."
    )


class PoTokenRequired(CouldNotRetrieveTranscript):
    kind = ErrorKind.PO_TOKEN_REQUIRED
    CAUSE_MESSAGE = (
        "The requested video cannot be retrieved without a PO Token. YouTube only "
        "serves this caption track to clients that prove their origin."
    )


__all__ = [
    "RETRYABLE_KINDS",
    "AgeRestricted",
    "CouldNotRetrieveTranscript",
    "ErrorKind",
    "FailedToCreateConsentCookie",
    "InvalidProxyConfig",
    "InvalidVideoId",
    "IpBlocked",
    "NoTranscriptFound",
    "NotTranslatable",
    "PoTokenRequired",
    "RequestBlocked",
    "TranscriptsDisabled",
    "TranslationLanguageNotAvailable",
    "TubescriptError",
    "UnknownFormatterType",
    "VideoUnavailable",
    "VideoUnplayable",
    "YouTubeDataUnparsable",
    "YouTubeRequestFailed",
]
