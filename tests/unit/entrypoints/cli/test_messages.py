"""Unit tests for :mod:`utharness.entrypoints.cli.helpers.messages`.

Checks that glyphs follow the *current* stderr encoding and that
``warn``/``success``/``error`` write styled lines to stderr only.
"""

import io
import sys

import click
import pytest

from utharness.entrypoints.cli.helpers.messages import (
    CAUTION,
    ERROR,
    SUCCESS,
    _supports_character,
    error,
    glyph,
    success,
    warn,
)

SET_YELLOW = "\x1b[33m"
SET_GREEN = "\x1b[32m"
SET_RED = "\x1b[31m"
SET_BOLD = "\x1b[1m"
RESET = "\x1b[0m"


class FakeTTY(io.StringIO):
    """A text stream that claims to be a TTY with a chosen encoding."""

    def __init__(self, encoding: str):
        super().__init__()
        self._encoding = encoding

    @property
    def encoding(self) -> str:
        """Declared character encoding."""
        return self._encoding

    def isatty(self) -> bool:
        """Report a TTY so Click keeps ANSI styles."""
        return True


@pytest.mark.parametrize(
    ("encoding", "expected"),
    [
        ("ascii", ("[!]", "[OK]", "[X]")),
        ("utf-8", ("⚠️", "✅", "❌")),
    ],
)
def test_glyphs_respect_stream_encoding(monkeypatch, encoding, expected):
    """Emoji are used only when stderr can encode them."""
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    assert (glyph(CAUTION), glyph(SUCCESS), glyph(ERROR)) == expected


def test_supports_character_requeries_stream_each_call(monkeypatch):
    """The stderr stream is looked up on every call."""
    encodings = iter(["ascii", "utf-8"])
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY(next(encodings)))

    assert _supports_character("⚠️") is False
    assert _supports_character("⚠️") is True


@pytest.mark.parametrize(
    ("encoding", "expected_glyph", "color_code", "func"),
    [
        ("ascii", "[!]", SET_YELLOW, warn),
        ("utf-8", "⚠️", SET_YELLOW, warn),
        ("ascii", "[OK]", SET_GREEN, success),
        ("utf-8", "✅", SET_GREEN, success),
        ("ascii", "[X]", SET_RED, error),
        ("utf-8", "❌", SET_RED, error),
    ],
)
def test_messages_emit_styled_stderr(monkeypatch, encoding, expected_glyph, color_code, func):
    """Each helper writes a bold, colored line with the right glyph."""
    stream = FakeTTY(encoding)
    monkeypatch.setattr(click, "get_text_stream", lambda name: stream)
    monkeypatch.setattr(sys, "stderr", stream, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("CLICOLOR", "1")

    func("danger!")

    out = stream.getvalue()
    assert expected_glyph in out
    assert SET_BOLD in out
    assert color_code in out
    assert RESET in out


def test_warn_writes_to_stderr_only(monkeypatch, capsys):
    """warn leaves stdout untouched."""
    monkeypatch.setattr(click, "get_text_stream", lambda name: FakeTTY("utf-8"))
    warn("danger!")
    captured = capsys.readouterr()
    assert "danger!" in captured.err
    assert captured.out == ""
