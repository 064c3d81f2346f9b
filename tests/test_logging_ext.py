"""!
@brief Tests for :mod:`argdeck.logging_ext`.
"""
from __future__ import annotations

import io
import json
import logging
import pathlib
import sys
from contextlib import redirect_stdout

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from argdeck import logging_ext, version  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_logging_state() -> None:
    """!
    @brief Reset logging between tests to avoid handler leakage.
    """

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


def _flush(logger: logging.Logger) -> None:
    for handler in logger.handlers:
        handler.flush()


def test_loggers_are_silent_before_setup() -> None:
    """!
    @brief Library use without setup must not emit "no handler" warnings.
    """

    human = logging_ext.get_human_logger()
    assert human.name == "argdeck.human"
    assert any(isinstance(handler, logging.NullHandler) for handler in human.handlers)


def test_setup_logging_creates_files_and_formats(tmp_path) -> None:
    """!
    @brief Setup with a directory writes the text log and the JSONL stream.
    """

    human_logger, machine_logger = logging_ext.setup_logging(tmp_path)
    human_logger.info("hello world")
    machine_logger.info("parse", extra=logging_ext.build_event_extra("parse", result="parse-successful"))
    _flush(human_logger)
    _flush(machine_logger)

    human_log = tmp_path / "argdeck.log"
    machine_log = tmp_path / "argdeck.jsonl"
    assert human_log.exists()
    assert machine_log.exists()

    human_text = human_log.read_text(encoding="utf-8")
    assert "hello world" in human_text
    assert "[human]" in human_text

    entries = [json.loads(line) for line in machine_log.read_text(encoding="utf-8").splitlines() if line.strip()]
    run_entry = entries[0]
    assert run_entry["event"] == "run_start"
    assert run_entry["run"]["version"] == version.__version__
    assert run_entry["channel"] == "machine"

    parse_entry = entries[-1]
    assert parse_entry["event"] == "parse"
    assert parse_entry["result"] == "parse-successful"
    assert parse_entry["message"] == "parse"

    assert logging_ext.get_log_directory() == tmp_path


def test_setup_without_directory_logs_to_stderr(capsys) -> None:
    human_logger, machine_logger = logging_ext.setup_logging(level=logging.INFO)
    human_logger.info("to stderr")
    machine_logger.info("ignored")
    captured = capsys.readouterr()
    assert "to stderr" in captured.err
    assert captured.out == ""
    assert logging_ext.get_log_directory() is None


def test_json_to_stdout_mirrors_machine_events(tmp_path) -> None:
    buffer = io.StringIO()
    with redirect_stdout(buffer):
        _, machine_logger = logging_ext.setup_logging(tmp_path, json_to_stdout=True)
        machine_logger.info("event", extra={"event": "custom", "data": {"x": object()}})
        _flush(machine_logger)

    lines = [json.loads(line) for line in buffer.getvalue().splitlines() if line.strip()]
    assert lines[0]["event"] == "run_start"
    custom = lines[-1]
    assert custom["event"] == "custom"
    assert custom["data"].startswith("{'x': <object object")


def test_run_metadata_is_recorded(tmp_path) -> None:
    logging_ext.setup_logging(tmp_path)
    metadata = logging_ext.get_run_metadata()
    assert metadata is not None
    assert len(str(metadata["run_id"])) == 32
    assert metadata["build"] == version.__build__
    assert metadata["logdir"] == str(tmp_path)


def test_build_event_extra() -> None:
    assert logging_ext.build_event_extra("parse", result="x", count=2) == {
        "event": "parse",
        "result": "x",
        "count": 2,
    }
