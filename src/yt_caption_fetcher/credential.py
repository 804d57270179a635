"""
credential.py — Scrape the InnerTube API key from a YouTube watch page.

The key lives in the page's ytcfg JSON blob as `"INNERTUBE_API_KEY":"..."`.
It is short-lived and is scraped fresh for every video.  This module is the
only place that knows how to find it, so a different matching strategy only
needs to change extract_credential().
"""

from __future__ import annotations

import re

from yt_caption_fetcher.errors import CredentialNotFoundError

# Tolerates whitespace around the colon; the key can sit anywhere in the page.
_API_KEY_PATTERN = re.compile(r'"INNERTUBE_API_KEY"\s*:\s*"([^"]+)"')


def extract_credential(html: str) -> str:
    """
    Return the INNERTUBE_API_KEY value embedded in a watch page.

    Raises:
        CredentialNotFoundError: The key isn't in the page.
    """
    match = _API_KEY_PATTERN.search(html)
    if not match:
        raise CredentialNotFoundError()
    return match.group(1)
