"""
catalog.py — Decode the player API response into a caption track catalog.

The InnerTube `player` endpoint returns a large JSON document.  Only two
parts of it matter here:

    playabilityStatus.status / .reason
    captions.playerCaptionsTracklistRenderer.captionTracks[]

decode_catalog() pulls those out into typed, immutable records, and
select_track() picks one track by language code.
"""

from __future__ import annotations

import enum
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from yt_caption_fetcher.errors import (
    CatalogDecodeError,
    LanguageNotFoundError,
    NoTracksAvailableError,
    VideoNotPlayableError,
)

logger = logging.getLogger(__name__)

# The platform's "this video can be played" status string.
_STATUS_OK = "OK"

# `kind` value YouTube uses for automatic speech recognition tracks.
_KIND_ASR = "asr"


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

class TrackKind(str, enum.Enum):
    """Whether a caption track was uploaded by a person or generated by ASR."""
    MANUAL = "manual"
    AUTOMATIC = "automatic"


class PlayabilityStatus(str, enum.Enum):
    OK = "ok"
    UNPLAYABLE = "unplayable"


@dataclass(frozen=True)
class CaptionTrack:
    """
    A single language/kind variant of captions offered for a video.

    Attributes:
        base_url:      Platform-issued URL of the timed-text document.
                       Opaque and time-limited; fetch it soon.
        name:          Display name, e.g. "English (auto-generated)".
        language_code: BCP-47-ish code as YouTube reports it, e.g. "en", "pt-BR".
        kind:          TrackKind.MANUAL or TrackKind.AUTOMATIC.
    """
    base_url: str
    name: str
    language_code: str
    kind: TrackKind

    @property
    def is_generated(self) -> bool:
        return self.kind is TrackKind.AUTOMATIC


@dataclass(frozen=True)
class Playability:
    status: PlayabilityStatus
    reason: str | None = None
    raw_status: str = ""

    @property
    def is_ok(self) -> bool:
        return self.status is PlayabilityStatus.OK


@dataclass(frozen=True)
class TrackCatalog:
    """
    The caption tracks of one video plus its playability.

    If the video isn't playable the track list must not be used, whatever it
    contains; select_track() enforces this.
    """
    tracks: tuple[CaptionTrack, ...]
    playability: Playability

    def __len__(self) -> int:
        return len(self.tracks)

    @property
    def language_codes(self) -> list[str]:
        return [track.language_code for track in self.tracks]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _object(value: Any) -> Mapping[str, Any]:
    # The schema isn't guaranteed; a missing or oddly-typed section is empty.
    return value if isinstance(value, Mapping) else {}


def _track_name(name: Any) -> str:
    # Either {"simpleText": "..."} or {"runs": [{"text": "..."}, ...]}.
    name = _object(name)
    if isinstance(name.get("simpleText"), str):
        return name["simpleText"]
    runs = name.get("runs")
    if isinstance(runs, list):
        return "".join(str(_object(run).get("text", "")) for run in runs)
    return ""


def _decode_track(raw: Any) -> CaptionTrack | None:
    raw = _object(raw)
    base_url = raw.get("baseUrl")
    # Without a URL the track can never be fetched.
    if not isinstance(base_url, str) or not base_url:
        return None
    return CaptionTrack(
        base_url=base_url,
        name=_track_name(raw.get("name")),
        language_code=str(raw.get("languageCode", "")),
        kind=TrackKind.AUTOMATIC if raw.get("kind") == _KIND_ASR else TrackKind.MANUAL,
    )


def decode_catalog(data: bytes | str | Mapping[str, Any]) -> TrackCatalog:
    """
    Build a TrackCatalog from a player API response.

    Args:
        data: The raw JSON body (bytes or str) or an already-decoded dict.

    Returns:
        A TrackCatalog.  A response without a captions section decodes to an
        empty track list, not an error.

    Raises:
        CatalogDecodeError: The body isn't JSON, or isn't a JSON object.
    """
    # Raw bodies are decoded here; dicts from fetch_json pass straight through.
    if isinstance(data, (bytes, str)):
        try:
            data = json.loads(data)
        except ValueError as exc:
            raise CatalogDecodeError(str(exc)) from exc
    if not isinstance(data, Mapping):
        raise CatalogDecodeError(f"expected a JSON object, got {type(data).__name__}")

    # Playability first: an unplayable video may still list tracks.
    status_block = _object(data.get("playabilityStatus"))
    raw_status = str(status_block.get("status", ""))
    reason = status_block.get("reason")
    playability = Playability(
        status=PlayabilityStatus.OK if raw_status == _STATUS_OK else PlayabilityStatus.UNPLAYABLE,
        reason=reason if isinstance(reason, str) else None,
        raw_status=raw_status,
    )

    # Tracks live three levels down; any missing level means "no captions".
    renderer = _object(_object(data.get("captions")).get("playerCaptionsTracklistRenderer"))
    raw_tracks = renderer.get("captionTracks")
    if not isinstance(raw_tracks, list):
        raw_tracks = []

    tracks = []
    for raw in raw_tracks:
        track = _decode_track(raw)
        if track is None:
            logger.debug("Skipping caption track entry without a baseUrl: %r", raw)
            continue
        tracks.append(track)

    logger.debug(
        "Decoded catalog: playability=%s, %d track(s) [%s]",
        raw_status or "<missing>", len(tracks), ", ".join(t.language_code for t in tracks),
    )
    return TrackCatalog(tracks=tuple(tracks), playability=playability)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

def select_track(catalog: TrackCatalog, language_code: str | None = None) -> CaptionTrack:
    """
    Pick one caption track from the catalog.

    With no language code (None or ""), the first track is returned.  That is
    YouTube's own ordering, not a "default track" flag; no such flag is
    consulted.  With a code, the first track whose language_code is exactly
    equal (case-sensitive, no prefix matching) wins.

    Raises:
        VideoNotPlayableError:  The catalog's playability isn't OK, even if
                                tracks are listed.
        NoTracksAvailableError: The catalog has no tracks.
        LanguageNotFoundError:  No track has the requested code.
    """
    # Playability is checked before tracks, so a blocked video reports why.
    if not catalog.playability.is_ok:
        raise VideoNotPlayableError(catalog.playability.reason)
    if not catalog.tracks:
        raise NoTracksAvailableError()
    # No preference: take YouTube's first listed track.
    if not language_code:
        return catalog.tracks[0]
    for track in catalog.tracks:
        if track.language_code == language_code:
            return track
    # No exact match; report what was on offer.
    raise LanguageNotFoundError(language_code, available=catalog.language_codes)
