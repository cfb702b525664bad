"""Unit tests for transcript handles and the per-video catalog."""

from __future__ import annotations

import pytest

from fakes import (
    TIMED_TEXT,
    VIDEO_ID,
    FakeResponse,
    FakeSession,
    caption_track,
    player_response,
)
from tubescript.errors import (
    IpBlocked,
    NoTranscriptFound,
    NotTranslatable,
    PoTokenRequired,
    TranslationLanguageNotAvailable,
    YouTubeDataUnparsable,
)
from tubescript.transcripts.models import FetchedTranscript, TranslationLanguage
from tubescript.transcripts.transcript import (
    Transcript,
    TranscriptList,
    build_transcript_list,
)
from tubescript.types import CaptionsJson


def _captions(tracks=None, **kwargs) -> CaptionsJson:
    payload = player_response(tracks, **kwargs)
    return CaptionsJson.model_validate(
        payload["captions"]["playerCaptionsTracklistRenderer"]
    )


def _transcript_list(session: FakeSession | None = None) -> TranscriptList:
    return build_transcript_list(session or FakeSession([]), VIDEO_ID, _captions())


def _transcript(
    session: FakeSession,
    url: str = "https://www.youtube.com/api/timedtext?v=abc&lang=en",
    translation_languages: list[TranslationLanguage] | None = None,
) -> Transcript:
    return Transcript(
        session,
        VIDEO_ID,
        url,
        "English",
        "en",
        False,
        translation_languages or [],
    )


class TestBuildTranscriptList:
    def test_tracks_are_partitioned_by_kind(self) -> None:
        transcript_list = _transcript_list()

        transcripts = list(transcript_list)
        assert len(transcripts) == 4
        assert [(t.language_code, t.is_generated) for t in transcripts] == [
            ("de", False),
            ("en", False),
            ("en", True),
            ("hi", True),
        ]

    def test_iteration_is_restartable(self) -> None:
        transcript_list = _transcript_list()

        assert list(transcript_list) == list(transcript_list)

    def test_srv3_format_is_stripped_from_urls(self) -> None:
        transcript = _transcript_list().find_transcript(["de"])

        assert "&fmt=srv3" not in transcript.url
        assert transcript.url.endswith("&lang=de")

    def test_translation_languages_only_for_translatable_tracks(self) -> None:
        transcript_list = _transcript_list()

        german = transcript_list.find_transcript(["de"])
        hindi = transcript_list.find_transcript(["hi"])

        assert [lang.language_code for lang in german.translation_languages] == [
            "af",
            "fr",
            "es",
        ]
        assert german.translation_languages is transcript_list.find_transcript(
            ["en"]
        ).translation_languages
        assert hindi.translation_languages == ()
        assert hindi.is_translatable is False

    def test_simple_text_names_are_supported(self) -> None:
        track = caption_track("nl", "ignored")
        track["name"] = {"simpleText": "Dutch"}

        transcript_list = build_transcript_list(
            FakeSession([]), VIDEO_ID, _captions([track])
        )

        assert transcript_list.find_transcript(["nl"]).language == "Dutch"


class TestFindTranscript:
    def test_manual_preferred_over_generated(self) -> None:
        transcript = _transcript_list().find_transcript(["en"])

        assert transcript.is_generated is False
        assert transcript.language == "English"

    def test_language_priority_is_respected(self) -> None:
        transcript = _transcript_list().find_transcript(["zz", "hi", "de"])

        assert transcript.language_code == "hi"

    def test_find_generated_transcript(self) -> None:
        transcript = _transcript_list().find_generated_transcript(["de", "en"])

        assert transcript.language_code == "en"
        assert transcript.is_generated is True

    def test_find_manually_created_transcript(self) -> None:
        transcript_list = _transcript_list()

        with pytest.raises(NoTranscriptFound):
            transcript_list.find_manually_created_transcript(["hi"])
        assert transcript_list.find_manually_created_transcript(["hi", "de"]).language_code == "de"

    def test_no_transcript_found_lists_requested_and_available(self) -> None:
        transcript_list = _transcript_list()

        with pytest.raises(NoTranscriptFound) as exc_info:
            transcript_list.find_transcript(["xx", "yy"])

        error = exc_info.value
        message = str(error)
        assert error.requested_language_codes == ["xx", "yy"]
        assert error.transcript_data is transcript_list
        assert "xx, yy" in message
        for expected in (
            'de ("Deutsch")[TRANSLATABLE]',
            'en ("English")[TRANSLATABLE]',
            'en ("English (auto-generated)")[TRANSLATABLE]',
            'hi ("Hindi (auto-generated)")',
            'fr ("French")',
        ):
            assert expected in message

    def test_find_accepts_generators(self) -> None:
        transcript = _transcript_list().find_transcript(code for code in ["de"])

        assert transcript.language_code == "de"


class TestTranslate:
    def test_translate_appends_language_and_is_terminal(self) -> None:
        parent = _transcript_list().find_transcript(["de"])

        translated = parent.translate("fr")

        assert translated.url == parent.url + "&tlang=fr"
        assert translated.language == "French"
        assert translated.language_code == "fr"
        assert translated.is_generated is True
        assert translated.translation_languages == ()
        assert parent.language_code == "de"
        assert parent.is_generated is False
        with pytest.raises(NotTranslatable):
            translated.translate("es")

    def test_translation_languages_cannot_drift_from_lookup(self) -> None:
        languages = [TranslationLanguage("French", "fr")]
        transcript = _transcript(FakeSession([]), translation_languages=languages)

        languages.append(TranslationLanguage("Spanish", "es"))

        assert transcript.translation_languages == (TranslationLanguage("French", "fr"),)
        assert not hasattr(transcript.translation_languages, "append")
        with pytest.raises(TranslationLanguageNotAvailable):
            transcript.translate("es")

    def test_untranslatable_track(self) -> None:
        hindi = _transcript_list().find_transcript(["hi"])

        with pytest.raises(NotTranslatable):
            hindi.translate("fr")

    def test_unknown_translation_language(self) -> None:
        german = _transcript_list().find_transcript(["de"])

        with pytest.raises(TranslationLanguageNotAvailable):
            german.translate("xx")


class TestFetch:
    def test_fetch_parses_snippets(self) -> None:
        session = FakeSession([FakeResponse(text=TIMED_TEXT)])
        transcript = _transcript(session)

        fetched = transcript.fetch()

        assert isinstance(fetched, FetchedTranscript)
        assert fetched.video_id == VIDEO_ID
        assert fetched.language_code == "en"
        assert fetched.is_generated is False
        assert len(fetched) == 3
        assert fetched[1].text == "this is <i>not</i> the original transcript"
        assert fetched[2].start == pytest.approx(5.7)
        assert fetched[2].duration == pytest.approx(3.239)
        assert session.calls == [("GET", transcript.url, None)]

    def test_fetch_preserving_formatting(self) -> None:
        session = FakeSession([FakeResponse(text=TIMED_TEXT)])

        fetched = _transcript(session).fetch(preserve_formatting=True)

        assert fetched[1].text == "this is <i>not</i> the original transcript"

    def test_each_fetch_returns_a_new_result(self) -> None:
        session = FakeSession([FakeResponse(text=TIMED_TEXT), FakeResponse(text=TIMED_TEXT)])
        transcript = _transcript(session)

        first = transcript.fetch()
        second = transcript.fetch()

        assert first == second
        assert first is not second
        assert len(session.calls) == 2

    def test_po_token_marker_fails_without_request(self) -> None:
        session = FakeSession([])
        transcript = _transcript(
            session, url="https://www.youtube.com/api/timedtext?v=abc&exp=xpe&lang=en"
        )

        with pytest.raises(PoTokenRequired):
            transcript.fetch()
        assert session.calls == []

    def test_rate_limited_fetch_means_ip_blocked(self) -> None:
        session = FakeSession([FakeResponse(status_code=429)])

        with pytest.raises(IpBlocked):
            _transcript(session).fetch()

    def test_malformed_document_is_unparsable(self) -> None:
        session = FakeSession([FakeResponse(text="<transcript><text start=")])

        with pytest.raises(YouTubeDataUnparsable):
            _transcript(session).fetch()

    def test_to_raw_data(self) -> None:
        session = FakeSession([FakeResponse(text=TIMED_TEXT)])

        raw = _transcript(session).fetch().to_raw_data()

        assert raw[0] == {"text": "Hey, this is just a test", "start": 0.0, "duration": 1.54}


def test_transcript_string_rendering() -> None:
    session = FakeSession([])
    plain = _transcript(session)
    translatable = _transcript(
        session, translation_languages=[TranslationLanguage("French", "fr")]
    )

    assert str(plain) == 'en ("English")'
    assert str(translatable) == 'en ("English")[TRANSLATABLE]'
