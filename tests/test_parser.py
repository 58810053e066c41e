"""Tests for WebVTT parser and reconstructor."""

import pytest
from pathlib import Path
import tempfile

from vtt_translator.parser import parse_vtt, reconstruct_vtt, save_vtt, validate_vtt_file
from vtt_translator.models import VttCue


SAMPLE = """WEBVTT

00:00:01.000 --> 00:00:03.500
Hello world

00:00:04.000 --> 00:00:06.500
Goodbye world
see you
"""


class TestParseVtt:

    def test_parse_simple(self):
        cues = parse_vtt(SAMPLE)
        assert len(cues) == 2
        assert cues[0].start == "00:00:01.000"
        assert cues[0].end == "00:00:03.500"
        assert cues[0].text_lines == ["Hello world"]
        assert cues[1].text_lines == ["Goodbye world", "see you"]

    def test_indices_increase_from_zero(self):
        cues = parse_vtt(SAMPLE)
        assert [c.original_index for c in cues] == [0, 1]

    def test_parse_empty(self):
        assert parse_vtt("") == []
        assert parse_vtt("   \n\n  ") == []
        assert parse_vtt("WEBVTT\n\n") == []

    def test_missing_header(self):
        cues = parse_vtt("00:01.000 --> 00:02.000\nHi")
        assert len(cues) == 1
        assert cues[0].text_lines == ["Hi"]

    def test_header_ignored_anywhere(self):
        content = "00:01.000 --> 00:02.000\nHi\nWEBVTT\nthere"
        cues = parse_vtt(content)
        assert cues[0].text_lines == ["Hi", "there"]

    def test_cue_without_text_is_dropped(self):
        content = """WEBVTT

00:00:01.000 --> 00:00:02.000

00:00:02.000 --> 00:00:03.000
Second
"""
        cues = parse_vtt(content)
        assert len(cues) == 1
        assert cues[0].start == "00:00:02.000"
        assert cues[0].original_index == 0

    def test_trailing_cue_without_text_is_dropped(self):
        cues = parse_vtt("00:01 --> 00:02\nText\n00:03 --> 00:04\n")
        assert len(cues) == 1

    def test_text_before_first_timestamp_ignored(self):
        cues = parse_vtt("stray line\n00:01 --> 00:02\nText")
        assert cues[0].text_lines == ["Text"]

    def test_timestamps_are_opaque(self):
        cues = parse_vtt("not a time-->  also not  \nText")
        assert cues[0].start == "not a time"
        assert cues[0].end == "also not"

    def test_cue_settings_kept_in_end(self):
        cues = parse_vtt("00:01.000 --> 00:02.000 align:start\nText")
        assert cues[0].end == "00:02.000 align:start"

    def test_lines_are_trimmed(self):
        cues = parse_vtt("00:01 --> 00:02\n   padded   \n\n\n")
        assert cues[0].text_lines == ["padded"]

    def test_parse_windows_line_endings(self):
        content = "WEBVTT\r\n\r\n00:01.000 --> 00:02.000\r\nHello\r\n\r\n"
        cues = parse_vtt(content)
        assert len(cues) == 1
        assert cues[0].text_lines == ["Hello"]


class TestReconstructVtt:

    def test_reconstruct(self):
        cues = [
            VttCue("00:01.000", "00:02.000", ["Hello"], 0),
            VttCue("00:03.000", "00:04.000", ["two", "lines"], 1),
        ]
        expected = (
            "WEBVTT\n\n"
            "00:01.000 --> 00:02.000\nHello\n\n"
            "00:03.000 --> 00:04.000\ntwo\nlines"
        )
        assert reconstruct_vtt(cues) == expected

    def test_sorts_by_original_index(self):
        cues = [
            VttCue("b", "b", ["second"], 1),
            VttCue("a", "a", ["first"], 0),
        ]
        out = reconstruct_vtt(cues)
        assert out.index("first") < out.index("second")

    def test_input_not_reordered(self):
        cues = [VttCue("b", "b", ["second"], 1), VttCue("a", "a", ["first"], 0)]
        reconstruct_vtt(cues)
        assert cues[0].original_index == 1

    def test_empty(self):
        assert reconstruct_vtt([]) == "WEBVTT"

    def test_round_trip(self):
        cues = parse_vtt(SAMPLE)
        reparsed = parse_vtt(reconstruct_vtt(cues))
        assert reparsed == cues


class TestValidateVttFile:

    def test_nonexistent(self):
        error = validate_vtt_file(Path("/nonexistent/file.vtt"))
        assert "not found" in error

    def test_wrong_extension(self):
        with tempfile.NamedTemporaryFile(suffix=".srt") as f:
            error = validate_vtt_file(Path(f.name))
            assert "Invalid file extension" in error

    def test_empty_file(self):
        with tempfile.NamedTemporaryFile(suffix=".vtt") as f:
            assert validate_vtt_file(Path(f.name)) == "File is empty"

    def test_valid_file(self):
        with tempfile.NamedTemporaryFile(suffix=".vtt", delete=False) as f:
            f.write(b"WEBVTT")
            path = Path(f.name)

        try:
            assert validate_vtt_file(path) is None
        finally:
            path.unlink()


class TestSaveVtt:

    def test_save_and_reload(self):
        cues = [
            VttCue("00:01.000", "00:02.000", ["Hello"], 0),
            VttCue("00:03.000", "00:04.000", ["World"], 1),
        ]

        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "out.vtt"
            save_vtt(cues, path)
            reloaded = parse_vtt(path.read_text(encoding="utf-8"))

        assert len(reloaded) == 2
        assert reloaded[1].text_lines == ["World"]
