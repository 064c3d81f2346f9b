"""!
@brief Tests for token classification and the argument cursor.
"""

from __future__ import annotations

import pytest

from argdeck.tokens import (
    ArgumentCursor,
    TokenKind,
    classify,
    is_command,
    is_long_command,
    is_short_command,
)


@pytest.mark.parametrize(
    "token,expected",
    [
        ("--verbose", TokenKind.LONG),
        ("--out=file", TokenKind.LONG),
        ("--x", TokenKind.LONG),
        ("---", TokenKind.LONG),
        ("-v", TokenKind.SHORT),
        ("-abc", TokenKind.SHORT),
        ("-=", TokenKind.SHORT),
        ("--", TokenKind.POSITIONAL),
        ("-", TokenKind.POSITIONAL),
        ("", TokenKind.POSITIONAL),
        ("file.txt", TokenKind.POSITIONAL),
        ("a-b", TokenKind.POSITIONAL),
    ],
)
def test_classify(token: str, expected: TokenKind) -> None:
    assert classify(token) is expected


def test_predicates_agree_with_classify() -> None:
    assert is_long_command("--name")
    assert not is_long_command("-n")
    assert is_short_command("-n")
    assert not is_short_command("--name")
    assert is_command("-n") and is_command("--name")
    assert not is_command("name")


class TestArgumentCursor:
    """Tests for cursor advancement."""

    def test_consume_walks_tokens(self) -> None:
        cursor = ArgumentCursor(["a", "b"])
        assert len(cursor) == 2
        assert cursor.peek() == "a"
        assert cursor.consume() == "a"
        assert cursor.consume() == "b"
        assert cursor.exhausted
        assert cursor.consume() is None
        assert cursor.position == 2

    def test_consume_value_accepts_plain_token(self) -> None:
        cursor = ArgumentCursor(["file.txt", "next"])
        assert cursor.consume_value() == "file.txt"
        assert cursor.position == 1

    @pytest.mark.parametrize("token", ["-v", "--verbose", "--out=x"])
    def test_consume_value_refuses_commands(self, token: str) -> None:
        """A following flag is never swallowed as a value."""
        cursor = ArgumentCursor([token])
        assert cursor.consume_value() is None
        assert cursor.position == 0

    def test_consume_value_at_end(self) -> None:
        cursor = ArgumentCursor([])
        assert cursor.consume_value() is None
        assert cursor.exhausted

    def test_consume_value_accepts_lone_dash(self) -> None:
        cursor = ArgumentCursor(["-"])
        assert cursor.consume_value() == "-"
