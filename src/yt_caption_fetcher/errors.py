"""
errors.py — Custom exception hierarchy for yt-caption-fetcher.

Every exception carries an `http_status` attribute so the FastAPI error
handler can translate library-level errors directly into the correct HTTP
response code without a separate mapping table.

The orchestrator also stamps a `stage` attribute onto any error that escapes
one of its pipeline stages, so callers can tell *where* a run failed without
the exception changing type.

Hierarchy:
    TranscriptError (base, 500)
    ├── TransportError (502)
    │   ├── HTTPStatusError (502)
    │   └── ResponseDecodeError (502)
    ├── CredentialNotFoundError (502)
    ├── CatalogDecodeError (502)
    ├── VideoNotPlayableError (403)
    ├── NoTracksAvailableError (404)
    ├── LanguageNotFoundError (404)
    ├── PayloadParseError (502)
    └── VideoNotFoundError (404)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from yt_caption_fetcher.client import Stage


# ---------------------------------------------------------------------------
# Base exception
# ---------------------------------------------------------------------------

class TranscriptError(Exception):
    """
    Root exception for all transcript-related errors.

    Attributes:
        message:     Human-readable description of what went wrong.
        http_status: Suggested HTTP status code for the API layer.
        stage:       The pipeline stage that raised it, or None when the
                     error was raised outside a TranscriptClient run.
    """

    def __init__(self, message: str, http_status: int = 500) -> None:
        super().__init__(message)
        self.message = message
        self.http_status = http_status
        self.stage: Stage | None = None


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class TransportError(TranscriptError):
    """
    Raised when an HTTP request could not be completed at all.

    Covers DNS failures, refused connections, TLS problems and timeouts.
    Maps to HTTP 502 because the failure is upstream of us.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message=message, http_status=502)


class HTTPStatusError(TransportError):
    """Raised when YouTube answers with a non-2xx status code."""

    def __init__(self, status_code: int, reason: str, url: str) -> None:
        status = f"{status_code} {reason}" if reason else str(status_code)
        super().__init__(f"Bad status HTTP {status} from {url}")
        self.status_code = status_code
        self.reason = reason
        self.url = url


class ResponseDecodeError(TransportError):
    """Raised when a response that should be JSON cannot be decoded."""

    def __init__(self, url: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"Invalid JSON in response from {url}{detail}")
        self.url = url


# ---------------------------------------------------------------------------
# Extraction pipeline errors
# ---------------------------------------------------------------------------

class CredentialNotFoundError(TranscriptError):
    """
    Raised when the watch page doesn't contain an INNERTUBE_API_KEY.

    Either YouTube changed the page markup or the page failed to render its
    config script block (consent walls and bot checks do this).
    """

    def __init__(self) -> None:
        super().__init__(
            message="Could not find INNERTUBE_API_KEY in the video page",
            http_status=502,
        )


class CatalogDecodeError(TranscriptError):
    """Raised when the player API response is not a JSON object."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Failed to decode player response: {reason}",
            http_status=502,
        )


class VideoNotPlayableError(TranscriptError):
    """
    Raised when YouTube marks the video as unplayable.

    The platform's own reason text ("Video unavailable", "Sign in to confirm
    your age", ...) is kept on the exception.  Maps to HTTP 403.
    """

    def __init__(self, reason: str | None = None) -> None:
        super().__init__(
            message=f"Video not playable: {reason or 'no reason given'}",
            http_status=403,
        )
        self.reason = reason


class NoTracksAvailableError(TranscriptError):
    """
    Raised when the video is playable but offers no caption tracks.

    Typical for music-only content or uploads where the creator disabled
    captions and no automatic ones were generated.  Maps to HTTP 404.
    """

    def __init__(self) -> None:
        super().__init__(
            message="No transcripts available for this video",
            http_status=404,
        )


class LanguageNotFoundError(TranscriptError):
    """
    Raised when the video has caption tracks, but none in the requested language.

    Matching is exact, so "en" does not match "en-GB".  The codes that *are*
    available are listed in the message to make the fix obvious.
    """

    def __init__(self, language_code: str, available: list[str] | None = None) -> None:
        message = f"Transcript for language '{language_code}' not found"
        if available:
            message += f" (available: {', '.join(available)})"
        super().__init__(message=message, http_status=404)
        self.language_code = language_code
        self.available = available or []


class PayloadParseError(TranscriptError):
    """Raised when the timed-text document for a track can't be parsed."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            message=f"Failed to parse transcript payload: {reason}",
            http_status=502,
        )


# ---------------------------------------------------------------------------
# Input errors
# ---------------------------------------------------------------------------

class VideoNotFoundError(TranscriptError):
    """
    Raised when a string can't be interpreted as a YouTube video reference.

    Possible causes: typo in the ID, or a URL from a different site.
    Maps to HTTP 404.
    """

    def __init__(self, video_id: str) -> None:
        super().__init__(
            message=f"Video not found: {video_id}",
            http_status=404,
        )
        self.video_id = video_id
