"""!
@brief Option descriptors: command sets, kind, description and parse state.
@details An :class:`ArgumentOption` describes one option (``-v``,
``--verbose``...) and carries the state filled in by the most recent parse.
Command validation lives here so registration and the parser never see a
malformed command.
"""
from __future__ import annotations

import uuid
from typing import AbstractSet, Iterable, List

from .constants import (
    DELETE_CHARACTER_CODE,
    MAX_ID_ATTEMPTS,
    MIN_SHORT_COMMAND_CODE,
    SHORT_PREFIX,
    VALUE_SEPARATOR,
    OptionKind,
)

__all__ = [
    "ArgumentOption",
    "IdentifierExhaustedError",
    "generate_option_id",
    "is_valid_long_command",
    "is_valid_short_command",
]


class IdentifierExhaustedError(RuntimeError):
    """!
    @brief Raised when no unused option identifier could be drawn.
    """


def generate_option_id(taken: AbstractSet[str] = frozenset()) -> str:
    """!
    @brief Draw a random identifier that is not part of ``taken``.
    @param taken Identifiers already in use by the caller's scope.
    @return 32 hex character identifier.
    @throws IdentifierExhaustedError After ``MAX_ID_ATTEMPTS`` collisions.
    """

    for _ in range(MAX_ID_ATTEMPTS):
        candidate = uuid.uuid4().hex
        if candidate not in taken:
            return candidate
    raise IdentifierExhaustedError(f"No free option identifier after {MAX_ID_ATTEMPTS} attempts")


def is_valid_short_command(command: object) -> bool:
    """!
    @brief Check that ``command`` is a single printable non-space character.
    @details Control characters, Unicode spaces, the dash and DEL are rejected.
    """

    if not isinstance(command, str) or len(command) != 1:
        return False
    code = ord(command)
    if code < MIN_SHORT_COMMAND_CODE or code == DELETE_CHARACTER_CODE or command == SHORT_PREFIX:
        return False
    return command.isprintable() and not command.isspace()


def is_valid_long_command(command: object) -> bool:
    """!
    @brief Check that ``command`` is non-empty, does not start with a dash and has no ``=``.
    """

    if not isinstance(command, str) or not command:
        return False
    return not command.startswith(SHORT_PREFIX) and VALUE_SEPARATOR not in command


class ArgumentOption:
    """!
    @brief Registered metadata and runtime state for one option.
    @details ``was_set`` counts how many times the option matched during the
    last parse (``-vv`` counts twice) and ``value`` holds the last captured
    value for ``TAKES_VALUE`` options. Both are reset at the start of every
    parse so a descriptor can be reused.
    """

    def __init__(
        self,
        short_commands: Iterable[str] = (),
        long_commands: Iterable[str] = (),
        description: str = "",
        kind: OptionKind = OptionKind.NORMAL,
    ) -> None:
        self._id = generate_option_id()
        self._short_commands: set[str] = set()
        self._long_commands: set[str] = set()
        self.kind = kind
        self.description = description
        self._was_set = 0
        self._value = ""
        # A single string is a convenient spelling for several short commands: "vV".
        self.add_short_commands(short_commands)
        self.add_long_commands(long_commands)

    def __repr__(self) -> str:
        commands = [f"-{c}" for c in self.sorted_short_commands()]
        commands.extend(f"--{c}" for c in self.sorted_long_commands())
        return f"<ArgumentOption {' '.join(commands) or '(no commands)'} kind={self.kind.value}>"

    @property
    def id(self) -> str:
        return self._id

    def regenerate_id(self, taken: AbstractSet[str]) -> str:
        """!
        @brief Replace the identifier with one that is not in ``taken``.
        @return The new identifier.
        """

        self._id = generate_option_id(taken | {self._id})
        return self._id

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @property
    def short_commands(self) -> frozenset[str]:
        return frozenset(self._short_commands)

    @property
    def long_commands(self) -> frozenset[str]:
        return frozenset(self._long_commands)

    @property
    def has_commands(self) -> bool:
        return bool(self._short_commands or self._long_commands)

    def add_short_command(self, command: str) -> bool:
        """!
        @brief Add one short command character.
        @return True when inserted, False when invalid or already present.
        """

        if not is_valid_short_command(command) or command in self._short_commands:
            return False
        self._short_commands.add(command)
        return True

    def add_short_commands(self, commands: Iterable[str]) -> bool:
        """!
        @brief Add several short commands at once.
        @details Every command is validated first; a single invalid entry
        rejects the batch without touching the current set. Already present
        commands are merged silently.
        @return False if any command was invalid, otherwise True.
        """

        batch = list(commands)
        if not all(is_valid_short_command(command) for command in batch):
            return False
        self._short_commands.update(batch)
        return True

    def clear_short_commands(self) -> None:
        self._short_commands.clear()

    def add_long_command(self, command: str) -> bool:
        """!
        @brief Add one long command.
        @return True when inserted, False when invalid or already present.
        """

        if not is_valid_long_command(command) or command in self._long_commands:
            return False
        self._long_commands.add(command)
        return True

    def add_long_commands(self, commands: Iterable[str]) -> bool:
        """!
        @brief Add several long commands at once, validating the whole batch first.
        @details A bare string is one command, not a sequence of characters.
        @return False if any command was invalid, otherwise True.
        """

        batch = [commands] if isinstance(commands, str) else list(commands)
        if not all(is_valid_long_command(command) for command in batch):
            return False
        self._long_commands.update(batch)
        return True

    def clear_long_commands(self) -> None:
        self._long_commands.clear()

    def sorted_short_commands(self) -> List[str]:
        return sorted(self._short_commands)

    def sorted_long_commands(self) -> List[str]:
        return sorted(self._long_commands)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def set_description(self, description: str) -> None:
        self.description = description

    def set_kind(self, kind: OptionKind) -> None:
        self.kind = kind

    def get_kind(self) -> OptionKind:
        return self.kind

    @property
    def takes_value(self) -> bool:
        return self.kind.takes_value

    @property
    def is_informational(self) -> bool:
        return self.kind.is_informational

    # ------------------------------------------------------------------
    # Parse state
    # ------------------------------------------------------------------

    @property
    def was_set(self) -> int:
        return self._was_set

    @property
    def value(self) -> str:
        return self._value

    def get_value(self) -> str:
        return self._value

    def reset(self) -> None:
        """!
        @brief Forget the state captured by the previous parse.
        """

        self._was_set = 0
        self._value = ""

    def mark_set(self, value: str | None = None) -> None:
        """!
        @brief Record one match, capturing ``value`` when given.
        """

        self._was_set += 1
        if value is not None:
            self._value = value
