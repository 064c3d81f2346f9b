"""!
@brief argdeck package root.
@details Declare options and positional arguments, parse a process argument
vector in a single pass, and render usage/help/version/error text.
"""

from .constants import OptionKind, ParseResult
from .option import ArgumentOption, IdentifierExhaustedError
from .parser import ArgumentParseError, CommandLineParser
from .registry import OptionRegistry, PositionalSpec
from .version import __version__

__all__ = [
    "ArgumentOption",
    "ArgumentParseError",
    "CommandLineParser",
    "IdentifierExhaustedError",
    "OptionKind",
    "OptionRegistry",
    "ParseResult",
    "PositionalSpec",
    "__version__",
    "constants",
    "help_text",
    "logging_ext",
    "main",
    "option",
    "parser",
    "registry",
    "tokens",
    "version",
]
