"""
api.py — FastAPI REST API for yt-caption-fetcher.

Endpoints:
    GET /tracks/{video_id}       — List the caption tracks of a video.
    GET /transcript/{video_id}   — Fetch a transcript (text, JSON or markdown doc).
    GET /health                  — Simple health-check for load balancers / monitoring.

Run with:
    uvicorn yt_caption_fetcher.api:app

The global exception handler catches any TranscriptError and converts it to
the appropriate HTTP response using the status code stored on the exception.
"""

from __future__ import annotations

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from yt_caption_fetcher.errors import TranscriptError
from yt_caption_fetcher.extractor import extract, list_tracks, parse_video_id, track_to_dict

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

app = FastAPI(
    title="YouTube Caption Fetcher API",
    description="List the caption tracks of YouTube videos and fetch their "
                "transcripts as plain text, structured JSON or markdown.",
    version="0.1.0",
)


# ---------------------------------------------------------------------------
# Global error handler
# ---------------------------------------------------------------------------

@app.exception_handler(TranscriptError)
async def transcript_error_handler(request: Request, exc: TranscriptError) -> JSONResponse:
    """
    Translate any TranscriptError (or subclass) into an HTTP error response.

    The http_status on the exception drives the response code; the pipeline
    stage that failed, if any, is reported alongside the message.
    """
    content = {"error": exc.message}
    if exc.stage is not None:
        content["stage"] = exc.stage.value
    return JSONResponse(status_code=exc.http_status, content=content)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

# The extraction endpoints are plain `def` so FastAPI runs the blocking
# HTTP calls in its threadpool instead of on the event loop.

@app.get("/tracks/{video_id}")
def get_tracks(video_id: str) -> JSONResponse:
    """
    List the caption tracks YouTube offers for a video, in platform order.

    Each track has `language_code`, `name` and `kind` ("manual" or
    "automatic").  A video without captions returns an empty list.
    """
    tracks = list_tracks(video_id)
    return JSONResponse(content={
        "video_id": parse_video_id(video_id),
        "tracks": [track_to_dict(track) for track in tracks],
    })


# response_model=None is required because we return different Response subclasses
# (PlainTextResponse or JSONResponse) depending on the format param.
@app.get("/transcript/{video_id}", response_model=None)
def get_transcript(
    video_id: str,
    format: str = Query(
        default="text",
        description="Output format: 'text' for plain transcript, 'json' for structured data with timestamps, 'doc' for readable markdown document.",
        pattern="^(text|json|doc)$",
    ),
    lang: str = Query(
        default="",
        description="Exact language code of the track (e.g. 'en', 'pt-BR'). Empty takes the first track listed.",
    ),
) -> PlainTextResponse | JSONResponse:
    """
    Fetch the transcript for a single YouTube video.

    **video_id** is the 11-character YouTube video identifier
    (e.g. `dQw4w9WgXcQ`).
    """
    result = extract(video_id, language=lang or None, fmt=format)

    if isinstance(result, dict):
        return JSONResponse(content=result)
    return PlainTextResponse(content=result)


@app.get("/health")
async def health() -> dict:
    """Returns HTTP 200 with {"status": "ok"}."""
    return {"status": "ok"}
