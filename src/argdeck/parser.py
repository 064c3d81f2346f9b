"""!
@brief Command-line parser: application info, registration, parse engine and queries.
@details :class:`CommandLineParser` wraps an :class:`~argdeck.registry.OptionRegistry`
and the argument vector it was built with. :meth:`CommandLineParser.parse`
walks the tokens once, left to right:

- ``--name`` / ``--name=value`` match a long command;
- ``-abc`` matches every character as a short command;
- everything else is collected verbatim as a positional value.

The first error stops the scan. Options matched before the failing token keep
their state; callers check the returned :class:`~argdeck.constants.ParseResult`
and read :meth:`CommandLineParser.error_text` for a printable message.

Example::

    parser = CommandLineParser(sys.argv, "tool", "1.0")
    verbose = ArgumentOption("v", ["verbose"], "Talk more")
    parser.add_argument_option(verbose)
    if not parser.parse().succeeded:
        print(parser.error_text(), file=sys.stderr)
"""
from __future__ import annotations

import sys
from typing import Iterable, List, Optional, Sequence

from . import help_text as renderer
from . import logging_ext
from .constants import LONG_PREFIX, SHORT_PREFIX, VALUE_SEPARATOR, ParseResult
from .option import ArgumentOption
from .registry import OptionRegistry, PositionalSpec
from .tokens import ArgumentCursor, TokenKind, classify

__all__ = ["ArgumentParseError", "CommandLineParser", "executable_name_from_path"]


class ArgumentParseError(Exception):
    """!
    @brief Raised for the first user-input error found while parsing.
    @details :meth:`CommandLineParser.parse` converts it into the returned
    result; :meth:`CommandLineParser.parse_or_raise` lets it propagate.
    """

    def __init__(self, result: ParseResult, command: str, *, short: bool = False) -> None:
        self.result = result
        self.command = command
        self.short = short
        self.message = renderer.render_error(result, command, short=short)
        super().__init__(self.message)


def executable_name_from_path(path: str) -> str:
    """!
    @brief Return the part of ``path`` after the last ``/`` or ``\\``.
    """

    cut = max(path.rfind("/"), path.rfind("\\"))
    return path[cut + 1 :]


class CommandLineParser:
    """!
    @brief Declares options and positional arguments and parses an argument vector.
    @details Not safe for concurrent parses: :meth:`parse` mutates the
    registered options and the positional value list. Use one instance per
    thread.
    """

    def __init__(
        self,
        argv: Optional[Sequence[str]] = None,
        app_name: str = "",
        app_version: str = "",
        app_description: str = "",
    ) -> None:
        self._argv: List[str] = list(sys.argv if argv is None else argv)
        self._executable_name = executable_name_from_path(self._argv[0]) if self._argv else ""
        self._app_name = app_name
        self._app_version = app_version
        self._app_description = app_description
        self._registry = OptionRegistry()
        self._positional_values: List[str] = []
        self._error_text = ""
        self._last_result: Optional[ParseResult] = None

    # ------------------------------------------------------------------
    # Application info
    # ------------------------------------------------------------------

    @property
    def executable_name(self) -> str:
        return self._executable_name

    @property
    def app_name(self) -> str:
        return self._app_name

    @property
    def app_version(self) -> str:
        return self._app_version

    @property
    def app_description(self) -> str:
        return self._app_description

    def set_app_info(self, name: str, version: str, description: str = "") -> None:
        self._app_name = name
        self._app_version = version
        self._app_description = description

    def set_app_name(self, name: str) -> None:
        self._app_name = name

    def set_app_version(self, version: str) -> None:
        self._app_version = version

    def set_app_description(self, description: str) -> None:
        self._app_description = description

    def set_arguments(self, argv: Sequence[str]) -> None:
        """!
        @brief Replace the argument vector used by the next :meth:`parse`.
        """

        self._argv = list(argv)
        self._executable_name = executable_name_from_path(self._argv[0]) if self._argv else ""

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    @property
    def registry(self) -> OptionRegistry:
        return self._registry

    def add_argument_option(self, option: ArgumentOption) -> bool:
        """!
        @brief Register ``option`` if it has a command and none of its commands is taken.
        @return True when added; False leaves the parser unchanged.
        """

        return self._registry.add_option(option)

    def add_argument_options(self, options: Iterable[ArgumentOption]) -> bool:
        """!
        @brief Register a batch of options; any collision rejects the whole batch.
        """

        return self._registry.add_options(options)

    def remove_argument_option(self, option: ArgumentOption) -> bool:
        return self._registry.remove_option(option)

    def clear_argument_options(self) -> None:
        self._registry.clear_options()

    def add_positional_argument(self, name: str, description: str, syntax: str = "") -> PositionalSpec:
        """!
        @brief Document a positional argument for the usage line and help table.
        @param syntax Replaces the default ``[name]`` rendering when given.
        """

        return self._registry.add_positional_argument(name, description, syntax)

    def clear_positional_arguments(self) -> None:
        self._registry.clear_positional_arguments()

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self._positional_values = []
        self._error_text = ""
        self._registry.reset_parse_state()

    def parse(self) -> ParseResult:
        """!
        @brief Parse the argument vector against the registered options.
        @details State from a previous parse is discarded first. The scan stops
        at the first error, whose description is then available from
        :meth:`error_text`.
        @returns ``ParseResult.PARSE_SUCCESSFUL`` or the kind of the first error.
        """

        failure = self._run()
        return failure.result if failure is not None else ParseResult.PARSE_SUCCESSFUL

    def parse_or_raise(self) -> None:
        """!
        @brief Parse like :meth:`parse` but raise :class:`ArgumentParseError` on failure.
        """

        failure = self._run()
        if failure is not None:
            raise failure

    def _run(self) -> Optional[ArgumentParseError]:
        self._reset()
        failure: Optional[ArgumentParseError] = None
        if len(self._argv) >= 2:
            try:
                self._scan(ArgumentCursor(self._argv[1:]))
            except ArgumentParseError as exc:
                failure = exc
                self._error_text = exc.message

        self._last_result = failure.result if failure is not None else ParseResult.PARSE_SUCCESSFUL
        self._log_outcome(self._last_result, failure)
        return failure

    def _scan(self, cursor: ArgumentCursor) -> None:
        token = cursor.consume()
        while token is not None:
            kind = classify(token)
            if kind is TokenKind.LONG:
                self._parse_long_command(token, cursor)
            elif kind is TokenKind.SHORT:
                self._parse_short_command(token, cursor)
            else:
                self._positional_values.append(token)
            token = cursor.consume()

    def _parse_long_command(self, token: str, cursor: ArgumentCursor) -> None:
        command, separator, inline_value = token[len(LONG_PREFIX) :].partition(VALUE_SEPARATOR)
        option = self._registry.find_long(command)
        if option is None:
            raise ArgumentParseError(ParseResult.INVALID_OPTION, command)

        if not option.takes_value:
            if separator:
                raise ArgumentParseError(ParseResult.VALUE_PASSED_TO_OPTION_THAT_DOES_NOT_TAKE_VALUE, command)
            option.mark_set()
            return

        value = inline_value if separator else cursor.consume_value()
        if not value and (separator or value is None):
            raise ArgumentParseError(ParseResult.NO_VALUE_WAS_PASSED_TO_OPTION, command)
        option.mark_set(value)

    def _parse_short_command(self, token: str, cursor: ArgumentCursor) -> None:
        cluster = token[len(SHORT_PREFIX) :]
        for command in cluster:
            option = self._registry.find_short(command)
            if option is None:
                raise ArgumentParseError(ParseResult.INVALID_OPTION, command, short=True)

            if not option.takes_value:
                option.mark_set()
                continue

            if len(cluster) > 1:
                raise ArgumentParseError(
                    ParseResult.OPTIONS_THAT_TAKES_VALUE_NEEDS_TO_BE_SET_SEPARATELY, command, short=True
                )
            value = cursor.consume_value()
            if value is None:
                raise ArgumentParseError(ParseResult.NO_VALUE_WAS_PASSED_TO_OPTION, command, short=True)
            option.mark_set(value)

    def _log_outcome(self, result: ParseResult, failure: Optional[ArgumentParseError]) -> None:
        human_logger = logging_ext.get_human_logger()
        machine_logger = logging_ext.get_machine_logger()
        if failure is None:
            human_logger.debug(
                "Parsed %d argument(s) for %s: %d positional value(s)",
                max(len(self._argv) - 1, 0),
                self._executable_name or "<unknown>",
                len(self._positional_values),
            )
        else:
            human_logger.info("Argument parsing failed: %s", failure.message)
        machine_logger.info(
            "parse",
            extra=logging_ext.build_event_extra(
                "parse",
                result=result.value,
                command=failure.command if failure is not None else None,
                positional_count=len(self._positional_values),
            ),
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def last_result(self) -> Optional[ParseResult]:
        return self._last_result

    def _lookup(self, command: str) -> Optional[ArgumentOption]:
        if len(command) == 1:
            option = self._registry.find_short(command)
            if option is not None:
                return option
        return self._registry.find_long(command)

    def was_set(self, command: str) -> int:
        """!
        @brief Return how many times the option owning ``command`` matched.
        @details A single character is looked up as a short command first and
        then as a long command; longer strings are long commands. Unknown
        commands report 0.
        """

        option = self._lookup(command)
        return option.was_set if option is not None else 0

    def was_set_short(self, command: str) -> int:
        option = self._registry.find_short(command)
        return option.was_set if option is not None else 0

    def was_set_long(self, command: str) -> int:
        option = self._registry.find_long(command)
        return option.was_set if option is not None else 0

    def get_value(self, command: str) -> str:
        option = self._lookup(command)
        return option.value if option is not None else ""

    def get_positional_arguments(self) -> List[str]:
        return list(self._positional_values)

    # ------------------------------------------------------------------
    # Text output
    # ------------------------------------------------------------------

    def version_text(self) -> str:
        return renderer.render_version(self._app_name, self._app_version)

    def help_text(self) -> str:
        return renderer.render_help(
            self._executable_name,
            self._app_description,
            self._registry.positional_specs,
            self._registry.options,
        )

    def error_text(self) -> str:
        return self._error_text
