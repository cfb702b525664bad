"""Per-language transcript handles and the per-video transcript catalog."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING

from ..errors import (
    NoTranscriptFound,
    NotTranslatable,
    PoTokenRequired,
    TranslationLanguageNotAvailable,
)
from ..http import translate_request_errors
from .models import FetchedTranscript, TranslationLanguage
from .parser import parse_timed_text

if TYPE_CHECKING:
    import requests

    from ..types import CaptionsJson

logger = logging.getLogger(__name__)

PO_TOKEN_MARKER = "&exp=xpe"
SRV3_FORMAT_SUFFIX = "&fmt=srv3"


class Transcript:
    """Handle on one caption track of a video.

    Nothing is downloaded until :meth:`fetch` is called. Each call issues a new
    request and returns a new :class:`FetchedTranscript`.
    """

    def __init__(
        self,
        http_client: requests.Session,
        video_id: str,
        url: str,
        language: str,
        language_code: str,
        is_generated: bool,
        translation_languages: Sequence[TranslationLanguage],
    ) -> None:
        self._http_client = http_client
        self.video_id = video_id
        self._url = url
        self.language = language
        self.language_code = language_code
        self.is_generated = is_generated
        self.translation_languages = tuple(translation_languages)
        self._translation_languages_dict = {
            translation_language.language_code: translation_language.language
            for translation_language in self.translation_languages
        }

    @property
    def url(self) -> str:
        return self._url

    @property
    def is_translatable(self) -> bool:
        return len(self.translation_languages) > 0

    def fetch(self, preserve_formatting: bool = False) -> FetchedTranscript:
        """Download and parse the timed-text document of this track.

        Args:
            preserve_formatting: Keep snippet text exactly as delivered instead of
                decoding entities and normalising whitespace

        Returns:
            FetchedTranscript: Snippets in document order

        Raises:
            PoTokenRequired: If the track is only served to clients with a PO token
            IpBlocked: If YouTube answers with HTTP 429
            YouTubeRequestFailed: For any other transport failure
            YouTubeDataUnparsable: If the document cannot be parsed
        """
        if PO_TOKEN_MARKER in self._url:
            raise PoTokenRequired(self.video_id)

        logger.debug("Fetching %s transcript for %s", self.language_code, self.video_id)
        with translate_request_errors(self.video_id):
            response = self._http_client.get(self._url)
            response.raise_for_status()

        snippets = parse_timed_text(
            response.text,
            video_id=self.video_id,
            preserve_formatting=preserve_formatting,
        )
        return FetchedTranscript(
            snippets=tuple(snippets),
            video_id=self.video_id,
            language=self.language,
            language_code=self.language_code,
            is_generated=self.is_generated,
        )

    def translate(self, language_code: str) -> Transcript:
        """Return a handle on this track machine-translated into ``language_code``.

        The returned transcript cannot be translated any further.
        """
        if not self.is_translatable:
            raise NotTranslatable(self.video_id)

        if language_code not in self._translation_languages_dict:
            raise TranslationLanguageNotAvailable(self.video_id)

        return Transcript(
            self._http_client,
            self.video_id,
            f"{self._url}&tlang={language_code}",
            self._translation_languages_dict[language_code],
            language_code,
            True,
            (),
        )

    def __str__(self) -> str:
        translatable = "[TRANSLATABLE]" if self.is_translatable else ""
        return f'{self.language_code} ("{self.language}"){translatable}'

    def __repr__(self) -> str:
        return (
            f"Transcript(video_id={self.video_id!r}, language_code={self.language_code!r}, "
            f"is_generated={self.is_generated!r})"
        )


class TranscriptList:
    """Catalog of the transcripts available for one video.

    Iterating yields manually created transcripts first, then generated ones.
    """

    def __init__(
        self,
        video_id: str,
        manually_created_transcripts: Mapping[str, Transcript],
        generated_transcripts: Mapping[str, Transcript],
        translation_languages: Sequence[TranslationLanguage],
    ) -> None:
        self.video_id = video_id
        self._manually_created_transcripts = dict(manually_created_transcripts)
        self._generated_transcripts = dict(generated_transcripts)
        self._translation_languages = tuple(translation_languages)

    @property
    def translation_languages(self) -> tuple[TranslationLanguage, ...]:
        return self._translation_languages

    def __iter__(self) -> Iterator[Transcript]:
        snapshot = [
            *self._manually_created_transcripts.values(),
            *self._generated_transcripts.values(),
        ]
        return iter(snapshot)

    def __len__(self) -> int:
        return len(self._manually_created_transcripts) + len(self._generated_transcripts)

    def find_transcript(self, language_codes: Iterable[str]) -> Transcript:
        """Return the first transcript matching the preferred language codes.

        Codes are tried in order; for each code a manually created transcript is
        preferred over a generated one.

        Raises:
            NoTranscriptFound: If no code matches any transcript
        """
        return self._find_transcript(
            language_codes,
            [self._manually_created_transcripts, self._generated_transcripts],
        )

    def find_generated_transcript(self, language_codes: Iterable[str]) -> Transcript:
        return self._find_transcript(language_codes, [self._generated_transcripts])

    def find_manually_created_transcript(self, language_codes: Iterable[str]) -> Transcript:
        return self._find_transcript(language_codes, [self._manually_created_transcripts])

    def _find_transcript(
        self,
        language_codes: Iterable[str],
        transcript_dicts: Sequence[Mapping[str, Transcript]],
    ) -> Transcript:
        requested = list(language_codes)
        for language_code in requested:
            for transcript_dict in transcript_dicts:
                if language_code in transcript_dict:
                    return transcript_dict[language_code]

        raise NoTranscriptFound(self.video_id, requested, self)

    def __str__(self) -> str:
        return (
            f"For this video ({self.video_id}) transcripts are available in the "
            "following languages:\n\n"
            "(MANUALLY CREATED)\n"
            f"{self._render_transcripts(self._manually_created_transcripts.values())}\n\n"
            "(GENERATED)\n"
            f"{self._render_transcripts(self._generated_transcripts.values())}\n\n"
            "(TRANSLATION LANGUAGES)\n"
            f"{self._render_translation_languages()}"
        )

    @staticmethod
    def _render_transcripts(transcripts: Iterable[Transcript]) -> str:
        lines = [f" - {transcript}" for transcript in transcripts]
        return "\n".join(lines) if lines else "None"

    def _render_translation_languages(self) -> str:
        lines = [
            f' - {translation_language.language_code} ("{translation_language.language}")'
            for translation_language in self._translation_languages
        ]
        return "\n".join(lines) if lines else "None"


def build_transcript_list(
    http_client: requests.Session, video_id: str, captions_json: CaptionsJson
) -> TranscriptList:
    """Build the transcript catalog of a video from its captions payload.

    Tracks are split into manually created and generated ones. The srv3 format
    suffix is removed from every track URL so all tracks are served in the same
    timed-text format, and only translatable tracks share the video's list of
    translation languages.
    """
    translation_languages = tuple(
        TranslationLanguage(
            language=translation_language.language_name.text,
            language_code=translation_language.language_code,
        )
        for translation_language in captions_json.translation_languages
    )

    manually_created_transcripts: dict[str, Transcript] = {}
    generated_transcripts: dict[str, Transcript] = {}

    for caption in captions_json.caption_tracks:
        transcript_dict = (
            generated_transcripts if caption.is_generated else manually_created_transcripts
        )
        transcript_dict[caption.language_code] = Transcript(
            http_client,
            video_id,
            caption.base_url.replace(SRV3_FORMAT_SUFFIX, ""),
            caption.name.text,
            caption.language_code,
            caption.is_generated,
            translation_languages if caption.is_translatable else (),
        )

    logger.info(
        "Found %d manually created and %d generated transcripts for %s",
        len(manually_created_transcripts),
        len(generated_transcripts),
        video_id,
    )
    return TranscriptList(
        video_id,
        manually_created_transcripts,
        generated_transcripts,
        translation_languages,
    )


__all__ = ["Transcript", "TranscriptList", "build_transcript_list"]
