"""!
@brief Tests for shared enumerations and package metadata.
"""
from __future__ import annotations

import re

from argdeck import __version__, constants, version
from argdeck.constants import OptionKind, ParseResult


def test_only_successful_result_succeeds() -> None:
    assert ParseResult.PARSE_SUCCESSFUL.succeeded
    assert [result for result in ParseResult if result.succeeded] == [ParseResult.PARSE_SUCCESSFUL]


def test_every_failure_has_an_error_template() -> None:
    failures = {result for result in ParseResult if not result.succeeded}
    assert set(constants.ERROR_TEMPLATES) == failures


def test_only_takes_value_kind_consumes_a_value() -> None:
    assert [kind for kind in OptionKind if kind.takes_value] == [OptionKind.TAKES_VALUE]
    assert {kind for kind in OptionKind if kind.is_informational} == {OptionKind.HELP, OptionKind.VERSION}


def test_version_metadata() -> None:
    assert re.fullmatch(r"\d+\.\d+\.\d+", __version__)
    assert version.build_info() == {"version": __version__, "build": version.__build__}
    assert version.display_version() == f"{__version__} ({version.__build__})"
