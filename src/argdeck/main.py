"""!
@brief ``argdeck`` console entry point.
@details A small self-hosted tool: it declares its own options with
:class:`~argdeck.parser.CommandLineParser`, parses the command line,
bootstraps logging through :mod:`argdeck.logging_ext` and prints a JSON report
of what was parsed. It doubles as a usage example for the library.
"""
from __future__ import annotations

import json
import logging
import os
import pathlib
import sys
from typing import Dict, Iterable, Optional

from . import logging_ext, version
from .constants import OptionKind
from .option import ArgumentOption
from .parser import CommandLineParser

PROGRAM_NAME = "argdeck"
PROGRAM_DESCRIPTION = "Parse the given arguments and print what was recognised as JSON."
LOGDIR_ENV_VAR = "ARGDECK_LOGDIR"

EXIT_OK = 0
EXIT_USAGE = 2


def build_parser(argv: Iterable[str]) -> tuple[CommandLineParser, Dict[str, ArgumentOption]]:
    """!
    @brief Create the parser for the ``argdeck`` command and its options.
    @param argv Full argument vector including the program name.
    @returns The parser and its options keyed by their primary long command.
    """

    parser = CommandLineParser(
        list(argv),
        app_name=PROGRAM_NAME,
        app_version=version.display_version(),
        app_description=PROGRAM_DESCRIPTION,
    )
    options = {
        "help": ArgumentOption("h", ["help"], "Show this help text and exit.", OptionKind.HELP),
        "version": ArgumentOption("V", ["version"], "Show the version and exit.", OptionKind.VERSION),
        "verbose": ArgumentOption("v", ["verbose"], "Increase log verbosity (repeatable)."),
        "quiet": ArgumentOption("q", ["quiet"], "Only log errors."),
        "json": ArgumentOption((), ["json"], "Mirror structured events to stdout."),
        "logdir": ArgumentOption(
            (), ["logdir"], f"Write log files to this directory (default: ${LOGDIR_ENV_VAR}).", OptionKind.TAKES_VALUE
        ),
    }
    parser.add_argument_options(options.values())
    parser.add_positional_argument("inputs", "Any number of free-standing values.", "[inputs...]")
    return parser, options


def _resolve_log_level(verbose: int, quiet: bool) -> int:
    if quiet:
        return logging.ERROR
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def _resolve_log_directory(candidate: str) -> Optional[pathlib.Path]:
    """!
    @brief Pick the log directory from ``--logdir`` or the environment.
    @returns ``None`` when neither is set, meaning logs go to stderr.
    """

    raw = candidate or os.environ.get(LOGDIR_ENV_VAR, "")
    if not raw:
        return None
    return pathlib.Path(raw).expanduser().resolve()


def build_report(parser: CommandLineParser, options: Dict[str, ArgumentOption]) -> Dict[str, object]:
    return {
        "program": parser.executable_name,
        "options": {
            name: {"was_set": option.was_set, "value": option.value}
            for name, option in options.items()
            if option.was_set
        },
        "positional": parser.get_positional_arguments(),
    }


def main(argv: Optional[Iterable[str]] = None) -> int:
    """!
    @brief Entry point for the ``argdeck`` console script.
    @param argv Arguments without the program name; defaults to ``sys.argv[1:]``.
    @returns Process exit code.
    """

    arguments = list(sys.argv[1:] if argv is None else argv)
    parser, options = build_parser([PROGRAM_NAME, *arguments])
    result = parser.parse()
    if not result.succeeded:
        print(parser.error_text(), file=sys.stderr)
        print(parser.help_text().splitlines()[0], file=sys.stderr)
        return EXIT_USAGE

    if options["help"].was_set:
        print(parser.help_text(), end="")
        return EXIT_OK
    if options["version"].was_set:
        print(parser.version_text())
        return EXIT_OK

    human_log, machine_log = logging_ext.setup_logging(
        _resolve_log_directory(options["logdir"].value),
        json_to_stdout=bool(options["json"].was_set),
        level=_resolve_log_level(options["verbose"].was_set, bool(options["quiet"].was_set)),
    )
    report = build_report(parser, options)
    human_log.info("Parsed %d positional value(s)", len(parser.get_positional_arguments()))
    machine_log.info("report", extra=logging_ext.build_event_extra("report", report=report))

    print(json.dumps(report, indent=2, sort_keys=True))
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover - manual invocation
    sys.exit(main())
