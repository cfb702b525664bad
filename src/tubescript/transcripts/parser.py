"""Timed-text XML parsing."""

from __future__ import annotations

import html
import logging
import re
import xml.etree.ElementTree as ET

from ..errors import YouTubeDataUnparsable
from .models import FetchedTranscriptSnippet

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r"\s+")


def clean_snippet_text(raw_text: str) -> str:
    """Decode entities, collapse whitespace runs to one space and trim."""

    return _WHITESPACE_RE.sub(" ", html.unescape(raw_text)).strip()


def parse_timed_text(
    xml_data: str, *, video_id: str, preserve_formatting: bool = False
) -> list[FetchedTranscriptSnippet]:
    """Parse a timed-text document into snippets, keeping document order.

    Args:
        xml_data: Body of the timed-text response
        video_id: Video the document belongs to, used for error reporting
        preserve_formatting: Keep the text content exactly as delivered

    Returns:
        list[FetchedTranscriptSnippet]: One snippet per ``<text>`` element

    Raises:
        YouTubeDataUnparsable: If the document or its timing attributes are malformed
    """
    try:
        root = ET.fromstring(xml_data)
    except ET.ParseError as exc:
        logger.debug("Timed-text XML for %s failed to parse: %s", video_id, exc)
        raise YouTubeDataUnparsable(video_id) from exc

    snippets: list[FetchedTranscriptSnippet] = []
    for element in root.iter("text"):
        raw_text = "".join(element.itertext())
        start_raw = element.get("start")
        if start_raw is None:
            raise YouTubeDataUnparsable(video_id)
        try:
            start = float(start_raw)
            duration = float(element.get("dur", "0"))
        except ValueError as exc:
            raise YouTubeDataUnparsable(video_id) from exc

        text = raw_text if preserve_formatting else clean_snippet_text(raw_text)
        snippets.append(FetchedTranscriptSnippet(text=text, start=start, duration=duration))

    return snippets


__all__ = ["clean_snippet_text", "parse_timed_text"]
