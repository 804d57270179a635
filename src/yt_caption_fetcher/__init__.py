"""
yt_caption_fetcher — Fetch YouTube captions without an official transcript API.

Public API:
    TranscriptClient        The extraction pipeline (list / fetch transcripts).
    Transcript              Normalized caption segments of one track.
    CaptionTrack            One caption track offered for a video.
    CaptionSegment          One timed caption line.
    extract()               High-level one-call interface (URL → formatted output).
    list_tracks()           High-level track listing for a URL or ID.
    parse_video_id()        Parse a YouTube URL or validate a bare video ID.
    extract_credential()    Scrape the InnerTube API key from a watch page.
    decode_catalog()        Decode a player API response into a TrackCatalog.
    select_track()          Pick a track from a catalog by language code.
    parse_payload()         Parse a timed-text XML document.
    normalize()             Strip entities and markup from caption text.

Exception hierarchy (all importable from this package):
    TranscriptError                 Base exception for all errors.
    ├── TransportError              Network failure.
    │   ├── HTTPStatusError         Non-2xx response.
    │   └── ResponseDecodeError     Response body isn't JSON.
    ├── CredentialNotFoundError     No INNERTUBE_API_KEY in the page.
    ├── CatalogDecodeError          Player response isn't a JSON object.
    ├── VideoNotPlayableError       YouTube marks the video unplayable.
    ├── NoTracksAvailableError      Video has no caption tracks.
    ├── LanguageNotFoundError       Requested language not available.
    ├── PayloadParseError           Timed-text document is malformed.
    └── VideoNotFoundError          String isn't a YouTube URL or ID.

Usage:
    from yt_caption_fetcher import TranscriptClient

    with TranscriptClient() as client:
        transcript = client.get_transcript("dQw4w9WgXcQ", "en")
        print(transcript.text)
"""

from yt_caption_fetcher.catalog import (
    CaptionTrack,
    Playability,
    PlayabilityStatus,
    TrackCatalog,
    TrackKind,
    decode_catalog,
    select_track,
)
from yt_caption_fetcher.client import Stage, Transcript, TranscriptClient
from yt_caption_fetcher.config import ClientConfig, PlayerRequest
from yt_caption_fetcher.credential import extract_credential
from yt_caption_fetcher.errors import (
    CatalogDecodeError,
    CredentialNotFoundError,
    HTTPStatusError,
    LanguageNotFoundError,
    NoTracksAvailableError,
    PayloadParseError,
    ResponseDecodeError,
    TranscriptError,
    TransportError,
    VideoNotFoundError,
    VideoNotPlayableError,
)
from yt_caption_fetcher.extractor import extract, list_tracks, parse_video_id
from yt_caption_fetcher.normalize import normalize
from yt_caption_fetcher.payload import CaptionSegment, parse_payload
from yt_caption_fetcher.transport import Session

__all__ = [
    "TranscriptClient",
    "Transcript",
    "Stage",
    "Session",
    "ClientConfig",
    "PlayerRequest",
    "CaptionTrack",
    "CaptionSegment",
    "TrackCatalog",
    "TrackKind",
    "Playability",
    "PlayabilityStatus",
    "extract",
    "list_tracks",
    "parse_video_id",
    "extract_credential",
    "decode_catalog",
    "select_track",
    "parse_payload",
    "normalize",
    "TranscriptError",
    "TransportError",
    "HTTPStatusError",
    "ResponseDecodeError",
    "CredentialNotFoundError",
    "CatalogDecodeError",
    "VideoNotPlayableError",
    "NoTracksAvailableError",
    "LanguageNotFoundError",
    "PayloadParseError",
    "VideoNotFoundError",
]
