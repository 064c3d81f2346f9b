"""Integration tests for the ``argdeck`` console entry point."""
from __future__ import annotations

import json
import logging
import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from argdeck import logging_ext, main, version  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch) -> None:
    """!
    @brief Keep log files out of the working tree and drop handlers afterwards.
    """

    monkeypatch.delenv(main.LOGDIR_ENV_VAR, raising=False)
    yield
    for name in (logging_ext.HUMAN_LOGGER_NAME, logging_ext.MACHINE_LOGGER_NAME):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for flt in list(logger.filters):
            logger.removeFilter(flt)
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


def test_report_lists_options_and_positionals(capsys) -> None:
    assert main.main(["-vv", "alpha", "beta"]) == main.EXIT_OK
    report = json.loads(capsys.readouterr().out)
    assert report == {
        "options": {"verbose": {"value": "", "was_set": 2}},
        "positional": ["alpha", "beta"],
        "program": "argdeck",
    }


def test_help_prints_help_text(capsys) -> None:
    assert main.main(["--help"]) == main.EXIT_OK
    out = capsys.readouterr().out
    assert out.startswith("Usage: argdeck [options] [inputs...]\n")
    assert "\nGetting help:\n" in out
    assert "   -V --version   Show the version and exit.\n" in out
    assert "   --logdir <value>   Write log files" in out


def test_version_flag(capsys) -> None:
    assert main.main(["-V"]) == main.EXIT_OK
    assert capsys.readouterr().out == f"argdeck {version.__version__} ({version.__build__})\n"


def test_usage_error_exit_code(capsys) -> None:
    assert main.main(["--bogus"]) == main.EXIT_USAGE
    err = capsys.readouterr().err
    assert err.splitlines() == ["Option --bogus is invalid", "Usage: argdeck [options] [inputs...]"]


def test_missing_value_is_reported(capsys) -> None:
    assert main.main(["--logdir"]) == main.EXIT_USAGE
    assert "Option --logdir takes a value but none was passed." in capsys.readouterr().err


def test_logdir_option_writes_files(tmp_path, capsys) -> None:
    logdir = tmp_path / "logs"
    assert main.main(["--logdir", str(logdir), "-v", "input.txt"]) == main.EXIT_OK
    report = json.loads(capsys.readouterr().out)
    assert report["options"]["logdir"]["value"] == str(logdir)
    for handler in logging_ext.get_machine_logger().handlers:
        handler.flush()
    events = [
        json.loads(line)
        for line in (logdir / logging_ext.MACHINE_LOG_FILENAME).read_text(encoding="utf-8").splitlines()
    ]
    assert [entry["event"] for entry in events] == ["run_start", "report"]
    assert events[-1]["report"]["positional"] == ["input.txt"]


def test_logdir_from_environment(tmp_path, monkeypatch, capsys) -> None:
    monkeypatch.setenv(main.LOGDIR_ENV_VAR, str(tmp_path))
    assert main.main([]) == main.EXIT_OK
    capsys.readouterr()
    assert logging_ext.get_log_directory() == tmp_path.resolve()
    assert (tmp_path / logging_ext.HUMAN_LOG_FILENAME).exists()


@pytest.mark.parametrize(
    "verbose,quiet,expected",
    [(0, False, logging.WARNING), (1, False, logging.INFO), (3, False, logging.DEBUG), (2, True, logging.ERROR)],
)
def test_log_level_resolution(verbose: int, quiet: bool, expected: int) -> None:
    assert main._resolve_log_level(verbose, quiet) == expected


def test_build_parser_registers_every_option() -> None:
    parser, options = main.build_parser(["argdeck"])
    assert len(parser.registry) == len(options) == 6
    assert parser.registry.positional_specs[0].rendered_name == "[inputs...]"
