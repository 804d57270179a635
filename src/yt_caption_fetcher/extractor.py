"""
extractor.py — High-level convenience layer over TranscriptClient.

Exposes the interface the CLI and the REST API are built on:

    1. Parsing YouTube URLs / IDs  → parse_video_id()
    2. Listing caption tracks      → list_tracks()
    3. Formatting output           → format_text(), format_json(), format_doc()
    4. One-call convenience        → extract()

Only single-video extraction is supported (no playlists).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from yt_caption_fetcher.catalog import CaptionTrack
from yt_caption_fetcher.client import Transcript, TranscriptClient
from yt_caption_fetcher.errors import VideoNotFoundError
from yt_caption_fetcher.payload import CaptionSegment

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Regex patterns that cover the most common YouTube URL shapes:
#   - https://www.youtube.com/watch?v=VIDEO_ID
#   - https://youtu.be/VIDEO_ID
#   - https://www.youtube.com/embed/VIDEO_ID
#   - https://www.youtube.com/shorts/VIDEO_ID
#   - https://www.youtube.com/v/VIDEO_ID
# Each pattern captures the 11-character video ID in group "id".
_URL_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"(?:https?://)?(?:www\.|m\.)?youtube\.com/watch\?.*v=(?P<id>[A-Za-z0-9_-]{11})"),
    re.compile(r"(?:https?://)?youtu\.be/(?P<id>[A-Za-z0-9_-]{11})"),
    re.compile(r"(?:https?://)?(?:www\.|m\.)?youtube\.com/(?:embed|shorts|v)/(?P<id>[A-Za-z0-9_-]{11})"),
]

# A bare video ID is exactly 11 characters from the base64url alphabet.
_BARE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{11}$")

FORMATS = ("text", "json", "doc")


# ---------------------------------------------------------------------------
# URL / ID parsing
# ---------------------------------------------------------------------------

def parse_video_id(url_or_id: str) -> str:
    """
    Extract a YouTube video ID from a URL string, or validate a raw 11-char ID.

    Args:
        url_or_id: A YouTube URL or a raw video ID.

    Returns:
        The 11-character video ID.

    Raises:
        VideoNotFoundError: If the string doesn't match any known format.
    """
    url_or_id = url_or_id.strip()

    # Try each URL pattern first (watch, short link, embed/shorts/v).
    for pattern in _URL_PATTERNS:
        match = pattern.search(url_or_id)
        if match:
            return match.group("id")

    # Fall back to treating the input as a bare ID.
    if _BARE_ID_PATTERN.match(url_or_id):
        return url_or_id

    # Nothing matched; the input isn't a recognisable YouTube reference.
    raise VideoNotFoundError(url_or_id)


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def format_text(transcript: Iterable[CaptionSegment]) -> str:
    """
    Convert transcript segments into plain text, one line per segment.

    Args:
        transcript: A Transcript, or any iterable of segments with .text.

    Returns:
        A single string with one transcript line per text line.
    """
    return "\n".join(segment.text for segment in transcript)


def format_json(transcript: Transcript) -> dict:
    """
    Build a structured JSON-serialisable dict from a transcript.

    Returns:
        A dict with keys: video_id, language_code, is_generated,
        segment_count, segments.  Each segment has: text, start, duration.
    """
    segments = transcript.to_raw_data()
    return {
        "video_id": transcript.video_id,
        "language_code": transcript.language_code,
        "is_generated": transcript.track.is_generated,
        "segment_count": len(segments),
        "segments": segments,
    }


def track_to_dict(track: CaptionTrack) -> dict:
    return {
        "language_code": track.language_code,
        "name": track.name,
        "kind": track.kind.value,
    }


# Paragraph boundary interval for the "doc" format.  A new paragraph starts
# whenever a segment starts this many seconds after the current paragraph.
_DOC_PARAGRAPH_INTERVAL_SECS = 30


def _seconds_to_mmss(seconds: float) -> str:
    """
    Convert a float timestamp (in seconds) to a MM:SS string.

    Values above 59:59 wrap naturally (e.g. 3661.0 → "61:01").
    """
    total = int(seconds)
    mins, secs = divmod(total, 60)
    return f"{mins:02d}:{secs:02d}"


def format_doc(transcript: Iterable[CaptionSegment]) -> str:
    """
    Convert transcript segments into a readable markdown document.

    Segments are joined with spaces into flowing paragraphs, with a new
    paragraph starting every ~30 seconds.  Each paragraph is prefixed with
    a bold **[MM:SS]** timestamp marking the start of that time window.

    Returns:
        A markdown string with timestamped paragraphs, or "" if the
        transcript has no segments.
    """
    paragraphs: list[str] = []
    current_texts: list[str] = []
    # Start time of the current paragraph; None until the first segment.
    paragraph_start: float | None = None

    for segment in transcript:
        # Lines that normalized down to nothing (e.g. a lone <br/>) add no text.
        if not segment.text:
            continue

        if paragraph_start is None:
            # Very first segment: begin the first paragraph.
            paragraph_start = segment.start
            current_texts.append(segment.text)
        elif segment.start - paragraph_start >= _DOC_PARAGRAPH_INTERVAL_SECS:
            # Time threshold crossed: flush the current paragraph and start
            # a new one.
            timestamp = _seconds_to_mmss(paragraph_start)
            paragraphs.append(f"**[{timestamp}]** {' '.join(current_texts)}")
            paragraph_start = segment.start
            current_texts = [segment.text]
        else:
            # Still within the same time window.
            current_texts.append(segment.text)

    # Flush the last paragraph (if any segments had text).
    if current_texts and paragraph_start is not None:
        timestamp = _seconds_to_mmss(paragraph_start)
        paragraphs.append(f"**[{timestamp}]** {' '.join(current_texts)}")

    return "\n\n".join(paragraphs)


# ---------------------------------------------------------------------------
# High-level convenience functions (main public API)
# ---------------------------------------------------------------------------

def list_tracks(url_or_id: str, *, client: TranscriptClient | None = None) -> list[CaptionTrack]:
    """
    List the caption tracks available for a video.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        client:    Optional TranscriptClient to reuse; a fresh one is
                   created (and closed) otherwise.
    """
    video_id = parse_video_id(url_or_id)
    # Same client handling as extract(): borrow or open-and-close.
    if client is not None:
        return client.list_transcripts(video_id)
    with TranscriptClient() as own_client:
        return own_client.list_transcripts(video_id)


def extract(
    url_or_id: str,
    language: str | None = None,
    fmt: str = "text",
    *,
    client: TranscriptClient | None = None,
) -> str | dict:
    """
    One-call interface: parse URL → fetch transcript → format output.

    Args:
        url_or_id: A YouTube URL or raw video ID.
        language:  Exact language code of the track to fetch (e.g. "de").
                   None takes the first track YouTube lists.
        fmt:       "text" for plain text, "json" for a dict with timestamps,
                   "doc" for a markdown document with timestamped paragraphs.
        client:    Optional TranscriptClient to reuse.

    Returns:
        A plain-text string (fmt="text"), a dict (fmt="json"), or a markdown
        string (fmt="doc").

    Raises:
        ValueError:      If fmt is not "text", "json", or "doc".
        TranscriptError: (or subclass) on any extraction failure.
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format {fmt!r}; expected 'text', 'json', or 'doc'")

    video_id = parse_video_id(url_or_id)

    # Reuse the caller's client (and its cookies) when given; otherwise open
    # a short-lived one for this single call.
    if client is not None:
        transcript = client.get_transcript(video_id, language)
    else:
        with TranscriptClient() as own_client:
            transcript = own_client.get_transcript(video_id, language)

    if fmt == "json":
        return format_json(transcript)

    if fmt == "doc":
        return format_doc(transcript)

    return format_text(transcript)
