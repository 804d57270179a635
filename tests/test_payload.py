"""
test_payload.py — Tests for the timed-text payload parser.

Covers both the default <transcript> format and srv3 <timedtext>, order
preservation, missing durations, nested markup and malformed input.
"""

from __future__ import annotations

import pytest

from yt_caption_fetcher.errors import PayloadParseError
from yt_caption_fetcher.normalize import normalize
from yt_caption_fetcher.payload import CaptionSegment, parse_payload

# Segment text is entity-escaped inside the XML, the way YouTube serves it.
_SAMPLE_PAYLOAD = (
    "<transcript>"
    '<text start="0.0" dur="2.5">&lt;i&gt;Hello&lt;/i&gt;</text>'
    '<text start="2.5" dur="3.0">World &amp;amp; friends</text>'
    "</transcript>"
)


class TestParseTranscriptFormat:
    """Tests for <transcript><text start= dur=> documents."""

    def test_segments_in_order(self) -> None:
        segments = parse_payload(_SAMPLE_PAYLOAD)

        assert segments == [
            CaptionSegment(start=0.0, duration=2.5, text="<i>Hello</i>"),
            CaptionSegment(start=2.5, duration=3.0, text="World &amp; friends"),
        ]

    def test_parse_then_normalize(self) -> None:
        """Parsing then normalizing yields clean text with timing untouched."""
        segments = parse_payload(_SAMPLE_PAYLOAD)

        assert [normalize(s.text) for s in segments] == ["Hello", "World & friends"]
        assert [(s.start, s.duration) for s in segments] == [(0.0, 2.5), (2.5, 3.0)]

    def test_bytes_with_xml_declaration(self) -> None:
        body = b'<?xml version="1.0" encoding="utf-8" ?>' + _SAMPLE_PAYLOAD.encode("utf-8")
        assert len(parse_payload(body)) == 2

    def test_missing_duration_defaults_to_zero(self) -> None:
        segments = parse_payload('<transcript><text start="4.2">hi</text></transcript>')
        assert segments == [CaptionSegment(start=4.2, duration=0.0, text="hi")]

    def test_empty_duration_defaults_to_zero(self) -> None:
        segments = parse_payload('<transcript><text start="1" dur="">hi</text></transcript>')
        assert segments[0].duration == 0.0

    def test_zero_duration(self) -> None:
        segments = parse_payload('<transcript><text start="1" dur="0">hi</text></transcript>')
        assert segments[0].duration == 0.0

    def test_empty_text_element(self) -> None:
        segments = parse_payload('<transcript><text start="1" dur="1"/></transcript>')
        assert segments[0].text == ""

    def test_literal_nested_markup_keeps_its_text(self) -> None:
        """Unescaped inline tags are parsed as elements; their text is kept."""
        segments = parse_payload(
            '<transcript><text start="0" dur="1">say <i>hello</i> now</text></transcript>'
        )
        assert segments[0].text == "say hello now"

    def test_empty_transcript(self) -> None:
        assert parse_payload("<transcript></transcript>") == []

    def test_order_preserved_even_if_not_sorted(self) -> None:
        """Document order wins; the parser doesn't sort by start time."""
        segments = parse_payload(
            "<transcript>"
            '<text start="5" dur="1">b</text>'
            '<text start="1" dur="1">a</text>'
            "</transcript>"
        )
        assert [s.text for s in segments] == ["b", "a"]


class TestParseSrv3Format:
    """Tests for <timedtext format="3"> documents (millisecond timings)."""

    def test_milliseconds_converted(self) -> None:
        body = (
            '<timedtext format="3"><body>'
            '<p t="1500" d="2000">Hello</p>'
            '<p t="3500">there</p>'
            "</body></timedtext>"
        )
        assert parse_payload(body) == [
            CaptionSegment(start=1.5, duration=2.0, text="Hello"),
            CaptionSegment(start=3.5, duration=0.0, text="there"),
        ]

    def test_word_spans_joined(self) -> None:
        body = (
            '<timedtext format="3"><body>'
            '<p t="0" d="1000"><s>never</s><s t="300"> gonna</s></p>'
            "</body></timedtext>"
        )
        assert parse_payload(body)[0].text == "never gonna"


class TestParseErrors:
    """Malformed payloads raise PayloadParseError."""

    def test_not_xml(self) -> None:
        with pytest.raises(PayloadParseError):
            parse_payload("this is not xml")

    def test_truncated_xml(self) -> None:
        with pytest.raises(PayloadParseError):
            parse_payload('<transcript><text start="0" dur="1">cut off')

    def test_empty_body(self) -> None:
        with pytest.raises(PayloadParseError):
            parse_payload("")

    def test_unknown_root(self) -> None:
        with pytest.raises(PayloadParseError, match="unexpected root"):
            parse_payload("<html><body>Sorry</body></html>")

    def test_non_numeric_start(self) -> None:
        with pytest.raises(PayloadParseError, match="start"):
            parse_payload('<transcript><text start="abc" dur="1">x</text></transcript>')

    def test_http_status_is_502(self) -> None:
        with pytest.raises(PayloadParseError) as exc_info:
            parse_payload("<nope")
        assert exc_info.value.http_status == 502
