"""
normalize.py — Turn raw caption text into clean plain text.

Caption lines arrive with HTML entities (`&amp;`, `&#39;`) and inline
formatting tags (`<i>`, `<font color=...>`, `<br/>`).  normalize() removes
both and trims the result.  It is pure and idempotent on clean text.
"""

from __future__ import annotations

import dataclasses
import html
import re
from collections.abc import Iterable

from yt_caption_fetcher.payload import CaptionSegment

# Anything from an opening angle bracket to the next closing one is markup.
_TAG_PATTERN = re.compile(r"<[^>]*>")


def normalize(raw: str) -> str:
    """
    Decode entities, strip markup tags, and trim surrounding whitespace.

    Entities are decoded *first* so that escaped markup such as
    `&lt;i&gt;Hello&lt;/i&gt;` is removed along with literal tags.  YouTube
    sometimes escapes twice (`&amp;#39;`), so decode+strip repeats until the
    text stops changing.  Every pass that changes the text shortens it, so
    the loop terminates, and the fixed point makes normalize() idempotent.

    Args:
        raw: Caption text exactly as it came out of the payload.

    Returns:
        The cleaned text, e.g. "<b>Hi &amp; bye</b>  " → "Hi & bye".
    """
    text = raw
    while True:
        cleaned = _TAG_PATTERN.sub("", html.unescape(text))
        if cleaned == text:
            break
        text = cleaned
    return text.strip()


def normalize_segments(segments: Iterable[CaptionSegment]) -> list[CaptionSegment]:
    """Return copies of `segments` with normalized text and unchanged timing."""
    return [dataclasses.replace(seg, text=normalize(seg.text)) for seg in segments]
