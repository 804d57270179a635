"""
test_cli.py — Tests for the `yt-captions` command.

Covers:
    - Track listing when only a video is given (and the empty case)
    - Transcript output in each format, to stdout and to --output files
    - Error reporting: message on stderr, stage context, exit code 1
"""

from __future__ import annotations

import json
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from yt_caption_fetcher.catalog import CaptionTrack, TrackKind
from yt_caption_fetcher.cli import main
from yt_caption_fetcher.client import Stage
from yt_caption_fetcher.errors import LanguageNotFoundError, VideoNotPlayableError


_TRACKS = [
    CaptionTrack(base_url="https://a.test/", name="English", language_code="en", kind=TrackKind.MANUAL),
    CaptionTrack(base_url="https://b.test/", name="Spanish (auto-generated)", language_code="es",
                 kind=TrackKind.AUTOMATIC),
]


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


# ---------------------------------------------------------------------------
# Listing tracks — `yt-captions VIDEO`
# ---------------------------------------------------------------------------

class TestListing:
    """Only a video argument: list caption tracks."""

    @patch("yt_caption_fetcher.cli.list_tracks")
    def test_lists_tracks(self, mock_list: MagicMock, runner: CliRunner) -> None:
        mock_list.return_value = _TRACKS

        result = runner.invoke(main, ["dQw4w9WgXcQ"])

        assert result.exit_code == 0
        assert result.output == (
            "Available transcripts:\n"
            "- Language: en, Name: English, Kind: manual\n"
            "- Language: es, Name: Spanish (auto-generated), Kind: automatic\n"
        )
        assert mock_list.call_args.args == ("dQw4w9WgXcQ",)

    @patch("yt_caption_fetcher.cli.list_tracks")
    def test_no_tracks(self, mock_list: MagicMock, runner: CliRunner) -> None:
        mock_list.return_value = []

        result = runner.invoke(main, ["dQw4w9WgXcQ"])

        assert result.exit_code == 0
        assert "No transcripts found" in result.output


# ---------------------------------------------------------------------------
# Fetching a transcript — `yt-captions VIDEO LANG`
# ---------------------------------------------------------------------------

class TestTranscript:
    """Video and language arguments: print the transcript."""

    @patch("yt_caption_fetcher.cli.extract")
    def test_text_to_stdout(self, mock_extract: MagicMock, runner: CliRunner) -> None:
        mock_extract.return_value = "Hello\nWorld & friends"

        result = runner.invoke(main, ["dQw4w9WgXcQ", "en"])

        assert result.exit_code == 0
        assert result.output == "Hello\nWorld & friends\n"
        assert mock_extract.call_args.kwargs["language"] == "en"
        assert mock_extract.call_args.kwargs["fmt"] == "text"

    @patch("yt_caption_fetcher.cli.extract")
    def test_json_format(self, mock_extract: MagicMock, runner: CliRunner) -> None:
        mock_extract.return_value = {"video_id": "dQw4w9WgXcQ", "segment_count": 0, "segments": []}

        result = runner.invoke(main, ["dQw4w9WgXcQ", "en", "--format", "JSON"])

        assert result.exit_code == 0
        assert json.loads(result.output)["video_id"] == "dQw4w9WgXcQ"
        assert mock_extract.call_args.kwargs["fmt"] == "json"

    @patch("yt_caption_fetcher.cli.extract")
    def test_output_file(self, mock_extract: MagicMock, runner: CliRunner, tmp_path) -> None:
        mock_extract.return_value = "**[00:00]** Hello"
        target = tmp_path / "out.md"

        result = runner.invoke(main, ["dQw4w9WgXcQ", "en", "-f", "doc", "-o", str(target)])

        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == "**[00:00]** Hello\n"
        assert "Transcript written to" in result.output


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    """TranscriptErrors become a one-line message and exit code 1."""

    @patch("yt_caption_fetcher.cli.extract")
    def test_language_not_found(self, mock_extract: MagicMock, runner: CliRunner) -> None:
        exc = LanguageNotFoundError("fr", ["en", "es"])
        exc.stage = Stage.SELECT_TRACK
        mock_extract.side_effect = exc

        result = runner.invoke(main, ["dQw4w9WgXcQ", "fr"])

        assert result.exit_code == 1
        assert "Error: Transcript for language 'fr' not found (available: en, es)" in result.output
        assert "(while select track)" in result.output

    @patch("yt_caption_fetcher.cli.list_tracks")
    def test_listing_error(self, mock_list: MagicMock, runner: CliRunner) -> None:
        mock_list.side_effect = VideoNotPlayableError("Video unavailable")

        result = runner.invoke(main, ["dQw4w9WgXcQ"])

        assert result.exit_code == 1
        assert "Video unavailable" in result.output

    def test_invalid_video(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["not a video"])

        assert result.exit_code == 1
        assert "Video not found" in result.output

    @patch("yt_caption_fetcher.cli.list_tracks")
    def test_format_without_language_rejected(self, mock_list: MagicMock, runner: CliRunner) -> None:
        result = runner.invoke(main, ["dQw4w9WgXcQ", "--format", "json"])

        assert result.exit_code == 2
        assert "--format requires a LANG argument" in result.output
        mock_list.assert_not_called()

    @patch("yt_caption_fetcher.cli.list_tracks")
    def test_output_without_language_rejected(self, mock_list: MagicMock, runner: CliRunner, tmp_path) -> None:
        result = runner.invoke(main, ["dQw4w9WgXcQ", "-o", str(tmp_path / "tracks.txt")])

        assert result.exit_code == 2
        assert "--output requires a LANG argument" in result.output
        mock_list.assert_not_called()

    def test_missing_argument(self, runner: CliRunner) -> None:
        result = runner.invoke(main, [])
        assert result.exit_code == 2
