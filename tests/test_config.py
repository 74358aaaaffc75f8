"""Tests for the immutable run configuration."""

from __future__ import annotations

import dataclasses

import pytest

from swf2pdf.config import Config, ErrorMode


class TestErrorModeFromString:

    @pytest.mark.parametrize("value, expected", [
        ("fail", ErrorMode.FAIL),
        ("FAIL", ErrorMode.FAIL),
        ("s", ErrorMode.SKIP),
        ("Blank", ErrorMode.BLANK),
        ("bogus", ErrorMode.BLANK),
    ])
    def test_matches_first_letter(self, value, expected):
        assert ErrorMode.from_string(value) is expected

    @pytest.mark.parametrize("value", ["", "x", "quit", "1"])
    def test_unrecognized_returns_none(self, value):
        assert ErrorMode.from_string(value) is None


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert str(config.output) == "output.pdf"
        assert config.error_mode is ErrorMode.BLANK
        assert config.inputs == ()
        assert config.has_input_source is False

    def test_input_sources(self):
        assert Config(inputs=("a.swf",)).has_input_source is True
        assert Config(read_stdin=True).has_input_source is True

    def test_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Config().verbose = True  # type: ignore[misc]
