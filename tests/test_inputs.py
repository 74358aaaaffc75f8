"""Tests for input path enumeration (arguments first, then stdin)."""

from __future__ import annotations

import io
import os

import pytest

from swf2pdf.config import Config
from swf2pdf.inputs import InputEnumerator, strip_line_terminator


class TestStripLineTerminator:

    @pytest.mark.parametrize("line, expected", [
        ("a.swf\n", "a.swf"),
        ("a.swf\r\n", "a.swf"),
        ("a.swf\r", "a.swf"),
        ("a.swf", "a.swf"),
        ("\n", ""),
        ("a.swf\n\n", "a.swf\n"),
        (" spaced .swf \n", " spaced .swf "),
    ])
    def test_strips_one_terminator(self, line, expected):
        assert strip_line_terminator(line) == expected


class TestInputEnumerator:

    def test_explicit_paths_in_order(self):
        config = Config(inputs=("c.swf", "a.swf", "b.swf"))
        enum = InputEnumerator(config)
        assert list(enum) == ["c.swf", "a.swf", "b.swf"]
        assert enum.count == 3

    def test_stdin_ignored_without_flag(self):
        config = Config(inputs=("a.swf",))
        stdin = io.StringIO("x.swf\n")
        assert list(InputEnumerator(config, stdin)) == ["a.swf"]
        assert stdin.read() == "x.swf\n"

    def test_explicit_then_stdin(self):
        config = Config(inputs=("a.swf", "b.swf"), read_stdin=True)
        stdin = io.StringIO("c.swf\nd.swf\n")
        enum = InputEnumerator(config, stdin)
        assert list(enum) == ["a.swf", "b.swf", "c.swf", "d.swf"]
        assert enum.count == 4

    def test_stdin_only(self):
        config = Config(read_stdin=True)
        enum = InputEnumerator(config, io.StringIO("one.swf\ntwo.swf"))
        assert list(enum) == ["one.swf", "two.swf"]

    def test_empty_lines_are_yielded(self):
        config = Config(read_stdin=True)
        enum = InputEnumerator(config, io.StringIO("a.swf\n\nb.swf\n"))
        assert list(enum) == ["a.swf", "", "b.swf"]

    def test_empty_stdin(self):
        config = Config(read_stdin=True)
        enum = InputEnumerator(config, io.StringIO(""))
        assert list(enum) == []
        assert enum.count == 0

    def test_is_lazy(self):
        config = Config(inputs=("a.swf",), read_stdin=True)
        stdin = io.StringIO("b.swf\nc.swf\n")
        it = iter(InputEnumerator(config, stdin))
        assert next(it) == "a.swf"
        assert stdin.tell() == 0
        assert next(it) == "b.swf"

    def test_count_tracks_progress(self):
        enum = InputEnumerator(Config(inputs=("a.swf", "b.swf")))
        it = iter(enum)
        next(it)
        assert enum.count == 1

    def test_single_use(self):
        enum = InputEnumerator(Config(inputs=("a.swf",)))
        list(enum)
        with pytest.raises(RuntimeError):
            iter(enum)

    def test_stdin_flag_without_stream(self):
        enum = InputEnumerator(Config(read_stdin=True), None)
        with pytest.raises(ValueError):
            list(enum)

    def test_binary_stdin_is_fs_decoded(self):
        config = Config(read_stdin=True)
        stdin = io.BytesIO(b"a.swf\n\xff.swf\r\nb.swf")
        names = list(InputEnumerator(config, stdin))
        assert names == ["a.swf", os.fsdecode(b"\xff.swf"), "b.swf"]
        assert os.fsencode(names[1]) == b"\xff.swf"
