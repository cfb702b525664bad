"""
Unit tests for the transcript formatters.

Tests use synthetic fetched transcripts; nothing here touches the network.
"""

import json

import pytest

from tubescript.errors import UnknownFormatterType
from tubescript.formatters import (
    CSVFormatter,
    FormatterLoader,
    JSONFormatter,
    PrettyPrintFormatter,
    SRTFormatter,
    TextFormatter,
    WebVTTFormatter,
    srt_timestamp,
    vtt_timestamp,
)
from tubescript.transcripts.models import FetchedTranscript, FetchedTranscriptSnippet


def _fetched(*snippets: tuple[str, float, float], video_id: str = "abc") -> FetchedTranscript:
    return FetchedTranscript(
        snippets=tuple(FetchedTranscriptSnippet(text, start, dur) for text, start, dur in snippets),
        video_id=video_id,
        language="English",
        language_code="en",
        is_generated=False,
    )


@pytest.fixture
def transcript() -> FetchedTranscript:
    return _fetched(
        ("Hello world", 0.0, 1.5),
        ("Second line", 1.5, 2.25),
    )


class TestTimestampFormatting:
    """Test timestamp formatting functions."""

    def test_vtt_timestamp_zero(self):
        """Test WebVTT timestamp formatting for zero seconds."""
        assert vtt_timestamp(0.0) == "00:00:00.000"

    def test_vtt_timestamp_hours(self):
        """Test WebVTT timestamp formatting with hours."""
        assert vtt_timestamp(3665.25) == "01:01:05.250"

    def test_srt_timestamp_basic(self):
        """Test SRT timestamp formatting for basic time."""
        assert srt_timestamp(125.5) == "00:02:05,500"

    def test_rounding_carries_into_seconds(self):
        """Test that milliseconds rounding up to 1000 carry over."""
        assert vtt_timestamp(59.9996) == "00:01:00.000"


class TestTextFormats:
    def test_text_formatter_joins_lines(self, transcript):
        assert TextFormatter().format_transcript(transcript) == "Hello world\nSecond line"

    def test_text_formatter_separates_transcripts(self, transcript):
        other = _fetched(("Other", 0.0, 1.0))

        output = TextFormatter().format_transcripts([transcript, other])

        assert output == "Hello world\nSecond line\n\n\nOther"

    def test_json_formatter_is_compact_by_default(self, transcript):
        output = JSONFormatter().format_transcript(transcript)

        assert "\n" not in output
        assert json.loads(output) == transcript.to_raw_data()

    def test_json_formatter_indent(self, transcript):
        output = JSONFormatter().format_transcript(transcript, indent=2)

        assert output.startswith("[\n  {")
        assert json.loads(output)[1]["duration"] == 2.25

    def test_json_formatter_multiple_transcripts(self, transcript):
        output = JSONFormatter().format_transcripts([transcript, transcript])

        assert len(json.loads(output)) == 2

    def test_pretty_print_formatter(self, transcript):
        output = PrettyPrintFormatter().format_transcript(transcript)

        assert "'text': 'Hello world'" in output

    def test_csv_formatter(self, transcript):
        output = CSVFormatter().format_transcript(transcript)
        lines = output.splitlines()

        assert lines[0] == "start,duration,text"
        assert lines[1] == "0.0,1.5,Hello world"


class TestSubtitleFormats:
    def test_webvtt_cues(self, transcript):
        output = WebVTTFormatter().format_transcript(transcript)

        assert output == (
            "WEBVTT\n\n"
            "00:00:00.000 --> 00:00:01.500\nHello world\n\n"
            "00:00:01.500 --> 00:00:03.750\nSecond line\n"
        )

    def test_webvtt_empty_transcript(self):
        assert WebVTTFormatter().format_transcript(_fetched()) == "WEBVTT\n"

    def test_srt_cues_are_numbered(self, transcript):
        output = SRTFormatter().format_transcript(transcript)

        assert output == (
            "1\n00:00:00,000 --> 00:00:01,500\nHello world\n\n"
            "2\n00:00:01,500 --> 00:00:03,750\nSecond line\n"
        )

    def test_srt_numbering_restarts_per_transcript(self, transcript):
        output = SRTFormatter().format_transcripts([transcript, _fetched(("Other", 0.0, 1.0))])

        assert output.endswith("\n\n1\n00:00:00,000 --> 00:00:01,000\nOther\n")
        assert output.count("2\n00:00:01,500") == 1


class TestFormatterLoader:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("pretty", PrettyPrintFormatter),
            ("json", JSONFormatter),
            ("text", TextFormatter),
            ("csv", CSVFormatter),
            ("webvtt", WebVTTFormatter),
            ("srt", SRTFormatter),
        ],
    )
    def test_load(self, name, expected):
        assert isinstance(FormatterLoader().load(name), expected)

    def test_unknown_type(self):
        with pytest.raises(UnknownFormatterType, match="Unknown formatter type"):
            FormatterLoader().load("docx")
