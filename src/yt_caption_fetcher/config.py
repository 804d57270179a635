"""
config.py — Fixed configuration for talking to YouTube's InnerTube API.

Nothing here is read from the environment or a file; the values are the
ones a desktop web client sends.  PlayerRequest replaces an ad-hoc nested
dict literal with an explicit record that renders the JSON body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

YOUTUBE_BASE_URL = "https://www.youtube.com"

# Client identity sent in the player request context.
WEB_CLIENT_NAME = "WEB"
WEB_CLIENT_VERSION = "2.20210721.00.00"

# Default per-request timeout (seconds) for the transport.
DEFAULT_TIMEOUT = 30.0

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept-Language": "en-US,en;q=0.8",
}


@dataclass(frozen=True)
class ClientConfig:
    """
    Where and as whom a TranscriptClient talks to YouTube.

    Attributes:
        base_url:       Scheme + host of the platform.
        client_name:    InnerTube client name.
        client_version: InnerTube client version string.
        hl:             Interface language sent to the API.
        gl:             Country sent to the API.
    """
    base_url: str = YOUTUBE_BASE_URL
    client_name: str = WEB_CLIENT_NAME
    client_version: str = WEB_CLIENT_VERSION
    hl: str = "en"
    gl: str = "US"

    def watch_url(self, video_id: str) -> str:
        return f"{self.base_url}/watch?v={video_id}"

    def player_url(self, credential: str) -> str:
        return f"{self.base_url}/youtubei/v1/player?key={credential}"

    def player_request(self, video_id: str) -> PlayerRequest:
        return PlayerRequest(
            video_id=video_id,
            client_name=self.client_name,
            client_version=self.client_version,
            hl=self.hl,
            gl=self.gl,
        )


@dataclass(frozen=True)
class PlayerRequest:
    """The body of a `youtubei/v1/player` POST."""
    video_id: str
    client_name: str = WEB_CLIENT_NAME
    client_version: str = WEB_CLIENT_VERSION
    hl: str = "en"
    gl: str = "US"

    def to_payload(self) -> dict[str, Any]:
        client = {
            "clientName": self.client_name,
            "clientVersion": self.client_version,
            "hl": self.hl,
            "gl": self.gl,
        }
        return {
            "context": {"client": client},
            "videoId": self.video_id,
        }
