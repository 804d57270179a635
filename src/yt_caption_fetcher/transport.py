"""
transport.py — Cookie-preserving HTTP session for the extraction pipeline.

YouTube may validate the InnerTube call against cookies set by the watch
page, so every request of one pipeline run must go through the same cookie
jar.  Session wraps a single `requests.Session` for that purpose.

The cookie jar is shared state: a per-instance lock makes each request
exclusive, so one Session can be shared between threads.  Nothing is
retried here; failures surface immediately as TransportError subclasses.
"""

from __future__ import annotations

import logging
import threading
from typing import Any
from urllib.parse import urlsplit

import requests

from yt_caption_fetcher.config import DEFAULT_HEADERS, DEFAULT_TIMEOUT
from yt_caption_fetcher.errors import HTTPStatusError, ResponseDecodeError, TransportError

logger = logging.getLogger(__name__)


def _redact(url: str) -> str:
    # Query strings carry the API key and signed caption parameters.
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


class Session:
    """
    A cookie-preserving HTTP session.

    Usage:
        with Session() as session:
            html = session.fetch_text("https://www.youtube.com/watch?v=...")

    Args:
        timeout: Per-request deadline in seconds, applied to every call.
        headers: Extra default headers merged over DEFAULT_HEADERS.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.timeout = timeout
        self._lock = threading.Lock()
        self._session = requests.Session()
        self._session.headers.update(DEFAULT_HEADERS)
        if headers:
            self._session.headers.update(headers)

    # -- Context manager -----------------------------------------------------

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Discard the connection pool and the cookie jar."""
        with self._lock:
            self._session.close()

    @property
    def cookies(self) -> requests.cookies.RequestsCookieJar:
        return self._session.cookies

    # -- Requests ------------------------------------------------------------

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        logger.debug("%s %s", method, _redact(url))
        try:
            # Held for the whole exchange: requests reads and writes the
            # cookie jar both before sending and after receiving.
            with self._lock:
                response = self._session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise TransportError(f"{method} {_redact(url)} failed: {exc}") from exc

        logger.debug("%s %s -> %d", method, _redact(url), response.status_code)
        # Anything outside 2xx is an error; redirects were already followed.
        if not 200 <= response.status_code < 300:
            raise HTTPStatusError(response.status_code, response.reason or "", _redact(url))
        return response

    def fetch_text(self, url: str) -> str:
        """GET `url` and return the decoded response body."""
        return self._request("GET", url).text

    def fetch_bytes(self, url: str) -> bytes:
        """
        GET `url` and return the undecoded response body.

        Used for XML documents: without a charset in Content-Type, requests
        would decode text/* bodies as ISO-8859-1, so the bytes go to the XML
        parser untouched and its own encoding declaration decides.
        """
        return self._request("GET", url).content

    def fetch_json(
        self,
        url: str,
        method: str = "POST",
        headers: dict[str, str] | None = None,
        body: Any = None,
    ) -> Any:
        """
        Send `body` as JSON and return the decoded JSON response.

        Raises:
            TransportError:      The request didn't complete.
            HTTPStatusError:     Non-2xx response.
            ResponseDecodeError: The response body isn't JSON.
        """
        # Caller headers (e.g. client name/version) go on top of the JSON type.
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)
        response = self._request(method, url, headers=request_headers, json=body)
        # A 2xx with an HTML or empty body is still a failure here.
        try:
            return response.json()
        except ValueError as exc:
            raise ResponseDecodeError(_redact(url), str(exc)) from exc
