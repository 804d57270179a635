"""
cli.py — Command-line interface for yt-caption-fetcher.

Provides the `yt-captions` command (registered as a console script in
pyproject.toml):

    yt-captions VIDEO           List the caption tracks of a video.
    yt-captions VIDEO LANG      Print the transcript in language LANG.

Usage examples:
    yt-captions dQw4w9WgXcQ
    yt-captions "https://www.youtube.com/watch?v=dQw4w9WgXcQ" en
    yt-captions dQw4w9WgXcQ de --format json --output rick.json
"""

from __future__ import annotations

import json
import logging
import sys
from typing import NoReturn

import click

from yt_caption_fetcher.client import TranscriptClient
from yt_caption_fetcher.errors import TranscriptError
from yt_caption_fetcher.extractor import FORMATS, extract, list_tracks


def _fail(exc: TranscriptError) -> NoReturn:
    # A clean one-line message on stderr; the traceback isn't useful to end-users.
    where = f" (while {exc.stage.value.replace('_', ' ')})" if exc.stage else ""
    click.echo(f"Error: {exc.message}{where}", err=True)
    sys.exit(1)


@click.command()
@click.argument("video", metavar="URL_OR_ID")
@click.argument("language", metavar="[LANG]", required=False)
@click.option(
    "--format", "-f",
    "fmt",                           # avoid shadowing the builtin "format"
    type=click.Choice(FORMATS, case_sensitive=False),
    default="text",
    show_default=True,
    help="Transcript output: plain text, JSON with timestamps, or a markdown document.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the transcript to a file instead of stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Log each HTTP request and pipeline stage.")
@click.pass_context
def main(
    ctx: click.Context,
    video: str,
    language: str | None,
    fmt: str,
    output: str | None,
    verbose: bool,
) -> None:
    """
    Fetch YouTube captions.

    With only URL_OR_ID, list the available caption tracks.  With a LANG
    code as well (exact match, e.g. "en" or "pt-BR"), print that transcript.
    --format and --output only apply when LANG is given.
    """
    # --format and --output only mean something for a transcript.
    if language is None:
        if output is not None:
            raise click.UsageError("--output requires a LANG argument.", ctx=ctx)
        if ctx.get_parameter_source("fmt") is not click.core.ParameterSource.DEFAULT:
            raise click.UsageError("--format requires a LANG argument.", ctx=ctx)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with TranscriptClient() as client:
        # No language: list the tracks and stop.
        if language is None:
            try:
                tracks = list_tracks(video, client=client)
            except TranscriptError as exc:
                _fail(exc)

            if not tracks:
                click.echo("No transcripts found for this video.")
                return

            click.echo("Available transcripts:")
            for track in tracks:
                click.echo(
                    f"- Language: {track.language_code}, Name: {track.name}, "
                    f"Kind: {track.kind.value}"
                )
            return

        # Language given: fetch, format, and print or save the transcript.
        try:
            result = extract(video, language=language, fmt=fmt.lower(), client=client)
        except TranscriptError as exc:
            _fail(exc)

    # Serialise dict output to a JSON string for display / file writing.
    if isinstance(result, dict):
        text = json.dumps(result, indent=2, ensure_ascii=False)
    else:
        text = result

    if output:
        with open(output, "w", encoding="utf-8") as fh:
            fh.write(text)
            fh.write("\n")
        click.echo(f"Transcript written to {output}", err=True)
    else:
        click.echo(text)
