"""
client.py — The transcript extraction pipeline.

TranscriptClient chains the pieces together, one stage at a time:

    FETCH_PAGE          GET  /watch?v=<id>                     → HTML
    EXTRACT_CREDENTIAL  INNERTUBE_API_KEY from the HTML        → key
    FETCH_CATALOG       POST /youtubei/v1/player?key=<key>     → TrackCatalog
    SELECT_TRACK        pick a track by language code          → CaptionTrack
    FETCH_PAYLOAD       GET  <track.base_url>                  → XML
    PARSE_PAYLOAD       XML → CaptionSegment list
    NORMALIZE           strip entities/markup from each line   → Transcript

Each stage depends on the previous one, so they run strictly in sequence.
The first failure ends the run: the TranscriptError is re-raised unchanged
except that its `stage` attribute records where it happened.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from yt_caption_fetcher.catalog import CaptionTrack, TrackCatalog, decode_catalog, select_track
from yt_caption_fetcher.config import ClientConfig
from yt_caption_fetcher.credential import extract_credential
from yt_caption_fetcher.errors import TranscriptError
from yt_caption_fetcher.normalize import normalize_segments
from yt_caption_fetcher.payload import CaptionSegment, parse_payload
from yt_caption_fetcher.transport import Session

logger = logging.getLogger(__name__)


class Stage(str, enum.Enum):
    """The steps of a pipeline run, in order."""
    FETCH_PAGE = "fetch_page"
    EXTRACT_CREDENTIAL = "extract_credential"
    FETCH_CATALOG = "fetch_catalog"
    SELECT_TRACK = "select_track"
    FETCH_PAYLOAD = "fetch_payload"
    PARSE_PAYLOAD = "parse_payload"
    NORMALIZE = "normalize"


@dataclass(frozen=True)
class Transcript:
    """
    The normalized caption lines of one track, in chronological order.

    Iterating yields CaptionSegment objects (with .text, .start, .duration),
    so the formatters in extractor.py accept it directly.
    """
    video_id: str
    track: CaptionTrack
    segments: tuple[CaptionSegment, ...]

    def __iter__(self) -> Iterator[CaptionSegment]:
        return iter(self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    @property
    def language_code(self) -> str:
        return self.track.language_code

    @property
    def text(self) -> str:
        return "\n".join(seg.text for seg in self.segments)

    def to_raw_data(self) -> list[dict]:
        return [
            {"text": seg.text, "start": seg.start, "duration": seg.duration}
            for seg in self.segments
        ]


@contextmanager
def _stage(stage: Stage, video_id: str) -> Iterator[None]:
    try:
        yield
    except TranscriptError as exc:
        # Keep the innermost stage if an error somehow passes through two.
        if exc.stage is None:
            exc.stage = stage
        # Reporting the error is left to the caller.
        logger.debug("Transcript run for %s failed at %s: %s", video_id, stage.value, exc.message)
        raise


class TranscriptClient:
    """
    Fetch caption tracks and transcripts for YouTube videos.

    Usage:
        with TranscriptClient() as client:
            tracks = client.list_transcripts("dQw4w9WgXcQ")
            transcript = client.get_transcript("dQw4w9WgXcQ", "en")

    Args:
        session: Transport to use.  When omitted the client creates its own
                 and closes it in close(); a caller-supplied session is left
                 open for the caller to manage.
        config:  Platform URLs and InnerTube client identity.
    """

    def __init__(
        self,
        session: Session | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self._owns_session = session is None
        self.session = session if session is not None else Session()
        self.config = config or ClientConfig()

    def __enter__(self) -> TranscriptClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    # -- Pipeline ------------------------------------------------------------

    def fetch_catalog(self, video_id: str) -> TrackCatalog:
        """
        Run the pipeline up to FETCH_CATALOG and return the decoded catalog.

        The credential is scraped fresh on every call and never kept.
        """
        # The watch page also sets the session cookies the player API may check.
        with _stage(Stage.FETCH_PAGE, video_id):
            html = self.session.fetch_text(self.config.watch_url(video_id))

        with _stage(Stage.EXTRACT_CREDENTIAL, video_id):
            credential = extract_credential(html)

        # Decoding stays in this stage: a malformed response is a catalog
        # failure, not a selection failure.
        with _stage(Stage.FETCH_CATALOG, video_id):
            request = self.config.player_request(video_id)
            response = self.session.fetch_json(
                self.config.player_url(credential),
                method="POST",
                body=request.to_payload(),
            )
            return decode_catalog(response)

    def list_transcripts(self, video_id: str) -> list[CaptionTrack]:
        """
        List the caption tracks offered for a video, in platform order.

        Playability isn't checked here: listing only needs the catalog to
        decode.  A video without captions yields an empty list.
        """
        catalog = self.fetch_catalog(video_id)
        logger.info("Found %d caption track(s) for %s", len(catalog), video_id)
        return list(catalog.tracks)

    def get_transcript(self, video_id: str, language_code: str | None = None) -> Transcript:
        """
        Fetch one transcript, normalized to plain text.

        Args:
            video_id:      The 11-character YouTube video ID.
            language_code: Exact language code of the track to fetch.  None
                           or "" takes the first track YouTube lists.

        Raises:
            TranscriptError: (or subclass) from whichever stage failed, with
                             its `stage` attribute set.
        """
        catalog = self.fetch_catalog(video_id)

        # Playability is enforced here, so an unplayable video never gets as
        # far as a payload request.
        with _stage(Stage.SELECT_TRACK, video_id):
            track = select_track(catalog, language_code)

        with _stage(Stage.FETCH_PAYLOAD, video_id):
            # Raw bytes: the XML declaration, not the HTTP header, names the
            # charset of timed-text documents.
            body = self.session.fetch_bytes(track.base_url)

        with _stage(Stage.PARSE_PAYLOAD, video_id):
            raw_segments = parse_payload(body)

        with _stage(Stage.NORMALIZE, video_id):
            segments = normalize_segments(raw_segments)

        logger.info(
            "Fetched %d segment(s) for %s (%s, %s)",
            len(segments), video_id, track.language_code, track.kind.value,
        )
        return Transcript(video_id=video_id, track=track, segments=tuple(segments))
