"""
payload.py — Parse the timed-text document fetched from a caption track URL.

Two XML shapes are understood:

    <transcript>                              (default, times in seconds)
      <text start="0.0" dur="2.5">Hello</text>
    </transcript>

    <timedtext format="3"><body>              (srv3, times in milliseconds)
      <p t="0" d="2500">Hello</p>
    </body></timedtext>

Segment text is returned *raw* — entities and inline markup are left for
normalize() to deal with.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from yt_caption_fetcher.errors import PayloadParseError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptionSegment:
    """
    One timed caption line.

    Attributes:
        start:    Offset from the start of the video, in seconds.
        duration: How long the line is shown, in seconds (0.0 if unknown).
        text:     The caption text (raw until normalized).
    """
    start: float
    duration: float
    text: str


def _seconds(elem: ET.Element, attr: str, scale: float = 1.0) -> float:
    """Read a numeric timing attribute; missing or empty means 0.0."""
    value = elem.get(attr)
    if value is None or not value.strip():
        return 0.0
    try:
        return float(value) / scale
    except ValueError:
        raise PayloadParseError(f"<{elem.tag}> has non-numeric {attr}={value!r}") from None


def _inner_text(elem: ET.Element) -> str:
    # itertext() keeps the text of nested elements such as <i>...</i> or <s>
    # word spans in srv3 documents.
    return "".join(elem.itertext())


def parse_payload(raw: str | bytes) -> list[CaptionSegment]:
    """
    Decode a timed-text document into caption segments, in document order.

    Args:
        raw: The response body from a caption track's base URL.

    Returns:
        A list of CaptionSegment, one per <text> (or srv3 <p>) element.

    Raises:
        PayloadParseError: The body isn't well-formed XML, has an unknown
                           root element, or carries a non-numeric timing.
    """
    try:
        root = ET.fromstring(raw)
    except ET.ParseError as exc:
        raise PayloadParseError(str(exc)) from exc

    if root.tag == "transcript":
        segments = [
            CaptionSegment(
                start=_seconds(elem, "start"),
                duration=_seconds(elem, "dur"),
                text=_inner_text(elem),
            )
            for elem in root.findall("text")
        ]
    elif root.tag == "timedtext":
        segments = [
            CaptionSegment(
                start=_seconds(elem, "t", scale=1000.0),
                duration=_seconds(elem, "d", scale=1000.0),
                text=_inner_text(elem),
            )
            for elem in root.findall("./body/p")
        ]
    else:
        raise PayloadParseError(f"unexpected root element <{root.tag}>")

    logger.debug("Parsed %d caption segments from <%s> payload", len(segments), root.tag)
    return segments
