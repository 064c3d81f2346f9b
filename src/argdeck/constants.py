"""!
@brief Enumerations and fixed text used across argdeck.
@details Parse results, option kinds, error message templates, and the help
layout strings are kept here so the parse engine and the renderer agree on a
single source of truth.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Final


class ParseResult(Enum):
    """!
    @brief Outcome of a single parse pass.
    """

    PARSE_SUCCESSFUL = "parse-successful"
    INVALID_OPTION = "invalid-option"
    VALUE_PASSED_TO_OPTION_THAT_DOES_NOT_TAKE_VALUE = "value-passed-to-option-that-does-not-take-value"
    NO_VALUE_WAS_PASSED_TO_OPTION = "no-value-was-passed-to-option"
    OPTIONS_THAT_TAKES_VALUE_NEEDS_TO_BE_SET_SEPARATELY = "options-that-takes-value-needs-to-be-set-separately"

    @property
    def succeeded(self) -> bool:
        return self is ParseResult.PARSE_SUCCESSFUL


class OptionKind(Enum):
    """!
    @brief Semantic kind of a registered option.
    @details Only ``TAKES_VALUE`` consumes a value token. ``HELP`` and
    ``VERSION`` behave like ``NORMAL`` while parsing and are listed in their
    own help section.
    """

    NORMAL = "normal"
    TAKES_VALUE = "takes-value"
    HELP = "help"
    VERSION = "version"

    @property
    def takes_value(self) -> bool:
        return self is OptionKind.TAKES_VALUE

    @property
    def is_informational(self) -> bool:
        return self in (OptionKind.HELP, OptionKind.VERSION)


LONG_PREFIX: Final[str] = "--"
SHORT_PREFIX: Final[str] = "-"
VALUE_SEPARATOR: Final[str] = "="

# Short commands must be printable, non-space and not the dash or DEL.
MIN_SHORT_COMMAND_CODE: Final[int] = 33
DELETE_CHARACTER_CODE: Final[int] = 127

MAX_ID_ATTEMPTS: Final[int] = 16

ERROR_TEMPLATES: Dict[ParseResult, str] = {
    ParseResult.INVALID_OPTION: "Option {prefix}{command} is invalid",
    ParseResult.VALUE_PASSED_TO_OPTION_THAT_DOES_NOT_TAKE_VALUE: (
        "Option {prefix}{command} received a value but it doesn't take any"
    ),
    ParseResult.NO_VALUE_WAS_PASSED_TO_OPTION: "Option {prefix}{command} takes a value but none was passed.",
    ParseResult.OPTIONS_THAT_TAKES_VALUE_NEEDS_TO_BE_SET_SEPARATELY: (
        "Options that takes a value needs to be set separately. Error with option: {prefix}{command}"
    ),
}

USAGE_PREFIX: Final[str] = "Usage: "
OPTIONS_MARKER: Final[str] = " [options]"
ARGUMENTS_HEADER: Final[str] = "\nArguments:\n"
HELP_OPTIONS_HEADER: Final[str] = "\nGetting help:\n"
OPTIONS_HEADER: Final[str] = "\nOptions:\n"
VALUE_PLACEHOLDER: Final[str] = "<value> "
LINE_INDENT: Final[str] = "   "
COLUMN_GAP: Final[str] = "  "
