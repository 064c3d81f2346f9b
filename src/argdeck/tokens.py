"""!
@brief Token classification and the cursor shared by the parse engine.
@details Tokens are classified purely by shape: ``--name[=value]`` is a long
command, ``-abc`` is a short command cluster, anything else (including a lone
``-`` or ``--``) is positional. :class:`ArgumentCursor` owns the read position
so long and short handling advance the same way when an option consumes its
value.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from .constants import LONG_PREFIX, SHORT_PREFIX

__all__ = [
    "ArgumentCursor",
    "TokenKind",
    "classify",
    "is_command",
    "is_long_command",
    "is_short_command",
]


class TokenKind(Enum):
    """!
    @brief Shape of a raw argument token.
    """

    LONG = "long"
    SHORT = "short"
    POSITIONAL = "positional"


def is_long_command(token: str) -> bool:
    return len(token) > 2 and token.startswith(LONG_PREFIX)


def is_short_command(token: str) -> bool:
    return len(token) > 1 and token[0] == SHORT_PREFIX and token[1] != SHORT_PREFIX


def is_command(token: str) -> bool:
    return is_long_command(token) or is_short_command(token)


def classify(token: str) -> TokenKind:
    """!
    @brief Classify ``token`` as a long command, a short cluster or a positional value.
    """

    if is_long_command(token):
        return TokenKind.LONG
    if is_short_command(token):
        return TokenKind.SHORT
    return TokenKind.POSITIONAL


class ArgumentCursor:
    """!
    @brief Forward-only cursor over the argument tokens.
    @details The executable name is not part of the cursor; callers pass
    ``argv[1:]``.
    """

    def __init__(self, tokens: Sequence[str]) -> None:
        self._tokens: List[str] = list(tokens)
        self._position = 0

    def __len__(self) -> int:
        return len(self._tokens)

    @property
    def position(self) -> int:
        return self._position

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._tokens)

    def peek(self) -> Optional[str]:
        if self.exhausted:
            return None
        return self._tokens[self._position]

    def consume(self) -> Optional[str]:
        """!
        @brief Return the next token and advance past it, or ``None`` at the end.
        """

        token = self.peek()
        if token is not None:
            self._position += 1
        return token

    def consume_value(self) -> Optional[str]:
        """!
        @brief Consume the next token as an option value.
        @details Returns ``None`` without advancing when no token is left or
        when the next token is itself a command; an option never swallows the
        following flag as its value.
        """

        token = self.peek()
        if token is None or is_command(token):
            return None
        self._position += 1
        return token
