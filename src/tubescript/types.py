"""Schema for the parts of the Innertube player response that the pipeline reads.

YouTube does not document this payload, so every field is optional and unknown
fields are ignored. A payload that cannot be validated against these models is
reported as :class:`~tubescript.errors.YouTubeDataUnparsable` by the fetcher.
"""

from __future__ import annotations

from typing import TypedDict

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Innertube Player Response Models (Pydantic)
# =============================================================================


class _InnertubeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TextRun(_InnertubeModel):
    text: str = ""


class RunsText(_InnertubeModel):
    """Display text delivered either as ``runs`` or as ``simpleText``."""

    runs: list[TextRun] = Field(default_factory=list)
    simple_text: str | None = Field(default=None, alias="simpleText")

    @property
    def text(self) -> str:
        if self.runs:
            return self.runs[0].text
        return self.simple_text or ""


class CaptionTrack(_InnertubeModel):
    """Raw caption track entry; consumed while building a transcript list."""

    base_url: str = Field(alias="baseUrl")
    name: RunsText = Field(default_factory=RunsText)
    language_code: str = Field(alias="languageCode")
    kind: str | None = None
    is_translatable: bool = Field(default=False, alias="isTranslatable")

    @property
    def is_generated(self) -> bool:
        return self.kind == "asr"


class TranslationLanguagePayload(_InnertubeModel):
    language_code: str = Field(alias="languageCode")
    language_name: RunsText = Field(default_factory=RunsText, alias="languageName")


class CaptionsJson(_InnertubeModel):
    """``playerCaptionsTracklistRenderer`` block of the player response."""

    caption_tracks: list[CaptionTrack] = Field(default_factory=list, alias="captionTracks")
    translation_languages: list[TranslationLanguagePayload] = Field(
        default_factory=list, alias="translationLanguages"
    )


class Captions(_InnertubeModel):
    player_captions_tracklist_renderer: CaptionsJson | None = Field(
        default=None, alias="playerCaptionsTracklistRenderer"
    )


class PlayerErrorMessageRenderer(_InnertubeModel):
    subreason: RunsText | None = None


class ErrorScreen(_InnertubeModel):
    player_error_message_renderer: PlayerErrorMessageRenderer | None = Field(
        default=None, alias="playerErrorMessageRenderer"
    )


class PlayabilityStatusData(_InnertubeModel):
    """Platform-reported playability of a video."""

    status: str | None = None
    reason: str | None = None
    error_screen: ErrorScreen | None = Field(default=None, alias="errorScreen")

    @property
    def sub_reasons(self) -> list[str]:
        renderer = self.error_screen.player_error_message_renderer if self.error_screen else None
        if renderer is None or renderer.subreason is None:
            return []
        return [run.text for run in renderer.subreason.runs]


class InnertubeData(_InnertubeModel):
    playability_status: PlayabilityStatusData | None = Field(
        default=None, alias="playabilityStatus"
    )
    captions: Captions | None = None


# =============================================================================
# Produced Data
# =============================================================================


class TranscriptSnippetData(TypedDict):
    """Flat record handed to formatters for each snippet."""

    text: str
    start: float
    duration: float


__all__ = [
    "CaptionTrack",
    "Captions",
    "CaptionsJson",
    "ErrorScreen",
    "InnertubeData",
    "PlayabilityStatusData",
    "PlayerErrorMessageRenderer",
    "RunsText",
    "TextRun",
    "TranscriptSnippetData",
    "TranslationLanguagePayload",
]
