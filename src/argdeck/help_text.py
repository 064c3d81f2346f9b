"""!
@brief Usage, help, version and error text rendering.
@details Every function here is a pure string producer over registry data.

Help layout::

    Usage: tool [options] [input]

    Converts things.

    Arguments:
       [input]  File to read

    Getting help:
       -h --help   Show this help

    Options:
       -o <value>     Output file
       -v --verbose   Talk more

Option lines are column-aligned per section and sorted by the complete
rendered line, so the order does not depend on registration order.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from .constants import (
    ARGUMENTS_HEADER,
    COLUMN_GAP,
    ERROR_TEMPLATES,
    HELP_OPTIONS_HEADER,
    LINE_INDENT,
    LONG_PREFIX,
    OPTIONS_HEADER,
    OPTIONS_MARKER,
    SHORT_PREFIX,
    USAGE_PREFIX,
    VALUE_PLACEHOLDER,
    ParseResult,
)
from .option import ArgumentOption
from .registry import PositionalSpec

__all__ = [
    "render_description",
    "render_error",
    "render_help",
    "render_option_command",
    "render_option_group",
    "render_options_section",
    "render_positional_section",
    "render_usage",
    "render_version",
]


def render_usage(executable_name: str, has_options: bool, specs: Iterable[PositionalSpec]) -> str:
    parts = [USAGE_PREFIX, executable_name]
    if has_options:
        parts.append(OPTIONS_MARKER)
    for spec in specs:
        parts.append(" " + spec.rendered_name)
    parts.append("\n")
    return "".join(parts)


def render_description(description: str) -> str:
    if not description:
        return ""
    return f"\n{description}\n"


def render_positional_section(specs: Sequence[PositionalSpec]) -> str:
    """!
    @brief Render the ``Arguments:`` table, left-justified on the widest name.
    """

    if not specs:
        return ""
    width = max(len(spec.rendered_name) for spec in specs)
    lines = [f"{LINE_INDENT}{spec.rendered_name.ljust(width)}{COLUMN_GAP}{spec.description}\n" for spec in specs]
    return ARGUMENTS_HEADER + "".join(lines)


def render_option_command(option: ArgumentOption) -> str:
    """!
    @brief Render the command column of one option, e.g. ``"-o --out <value> "``.
    """

    parts: List[str] = [f"{SHORT_PREFIX}{command} " for command in option.sorted_short_commands()]
    parts.extend(f"{LONG_PREFIX}{command} " for command in option.sorted_long_commands())
    if option.takes_value:
        parts.append(VALUE_PLACEHOLDER)
    return "".join(parts)


def render_option_group(options: Sequence[ArgumentOption], header: str) -> str:
    if not options:
        return ""
    commands = [render_option_command(option) for option in options]
    width = max(len(command) for command in commands)
    lines = sorted(
        f"{LINE_INDENT}{command.ljust(width)}{COLUMN_GAP}{option.description}"
        for command, option in zip(commands, options)
    )
    return header + "".join(line + "\n" for line in lines)


def render_options_section(options: Iterable[ArgumentOption]) -> str:
    """!
    @brief Render help/version options and normal options as separate groups.
    """

    informational: List[ArgumentOption] = []
    normal: List[ArgumentOption] = []
    for option in options:
        (informational if option.is_informational else normal).append(option)
    return render_option_group(informational, HELP_OPTIONS_HEADER) + render_option_group(normal, OPTIONS_HEADER)


def render_version(app_name: str, app_version: str) -> str:
    return f"{app_name} {app_version}"


def render_help(
    executable_name: str,
    description: str,
    specs: Sequence[PositionalSpec],
    options: Sequence[ArgumentOption],
) -> str:
    text = render_usage(executable_name, bool(options), specs) + render_description(description)
    if specs:
        text += render_positional_section(specs)
    if options:
        text += render_options_section(options)
    return text


def render_error(result: ParseResult, command: str, *, short: bool = False) -> str:
    """!
    @brief Render the message for a failed parse.
    @param command The offending command without its dashes.
    @param short Whether ``command`` came from a short cluster.
    @return Empty string for a successful result.
    """

    template = ERROR_TEMPLATES.get(result)
    if template is None:
        return ""
    prefix = SHORT_PREFIX if short else LONG_PREFIX
    return template.format(prefix=prefix, command=command)
