"""!
@brief Structured logging helpers for argdeck.
@details Two channels are provided: a human-readable text stream and a JSONL
event stream for tooling. Library modules only fetch the loggers through
:func:`get_human_logger` and :func:`get_machine_logger`; handlers are attached
by the host application through :func:`setup_logging`. Until then both
loggers carry a ``NullHandler`` and stay silent.
"""
from __future__ import annotations

import datetime as _dt
import json
import logging
import sys
import uuid
from logging import handlers
from pathlib import Path
from typing import Dict, Iterable, Mapping, Tuple

from . import version

HUMAN_LOGGER_NAME = "argdeck.human"
"""!
@brief Logger name for human-readable output.
"""

MACHINE_LOGGER_NAME = "argdeck.machine"
"""!
@brief Logger name for JSONL event output.
"""

HUMAN_LOG_FILENAME = "argdeck.log"
MACHINE_LOG_FILENAME = "argdeck.jsonl"

_STANDARD_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "message",
        "asctime",
        "channel",
        "taskName",
    }
)

_CURRENT_LOG_DIRECTORY: Path | None = None
_RUN_METADATA: Dict[str, object] | None = None

for _name in (HUMAN_LOGGER_NAME, MACHINE_LOGGER_NAME):
    logging.getLogger(_name).addHandler(logging.NullHandler())


class _ChannelFilter(logging.Filter):
    """!
    @brief Inject a fixed ``channel`` attribute on log records.
    @details Formatters rely on the attribute to label the stream without
    callers passing ``extra`` themselves.
    """

    def __init__(self, channel: str) -> None:
        super().__init__()
        self._channel = channel

    def filter(self, record: logging.LogRecord) -> bool:
        record.channel = self._channel
        return True


class _JsonLineFormatter(logging.Formatter):
    """!
    @brief Format ``LogRecord`` instances as single-line JSON objects.
    @details Standard metadata (timestamp, level, logger, message) is merged
    with any custom ``extra`` attributes. Values that are not JSON
    serializable are coerced to their ``repr``.
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - concise override
        moment = _dt.datetime.fromtimestamp(record.created, tz=_dt.timezone.utc)
        payload: Dict[str, object] = {
            "timestamp": moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "channel": getattr(record, "channel", "machine"),
        }

        payload.update(_extract_extras(record))
        try:
            return json.dumps(payload, ensure_ascii=False)
        except TypeError:
            sanitized = {key: _coerce_json(value) for key, value in payload.items()}
            return json.dumps(sanitized, ensure_ascii=False)


def _extract_extras(record: logging.LogRecord) -> Dict[str, object]:
    """!
    @brief Collect non-standard attributes from a log record.
    """

    return {key: value for key, value in record.__dict__.items() if key not in _STANDARD_RECORD_KEYS}


def _coerce_json(value: object) -> object:
    try:
        json.dumps(value)
    except TypeError:
        return repr(value)
    return value


def _configure_logger(
    logger: logging.Logger, formatter: logging.Formatter, handlers_to_add: Iterable[logging.Handler]
) -> None:
    """!
    @brief Reset a logger and attach the supplied handlers.
    """

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    for flt in list(logger.filters):
        logger.removeFilter(flt)
    attached = False
    for handler in handlers_to_add:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        attached = True
    if not attached:
        logger.addHandler(logging.NullHandler())
    logger.propagate = False


def build_event_extra(event: str, **data: object) -> Dict[str, object]:
    """!
    @brief Build the ``extra`` mapping for a machine-channel event.
    @param event Stable event name, e.g. ``"parse"``.
    @param data Additional fields merged into the JSON payload.
    """

    extra: Dict[str, object] = {"event": event}
    extra.update(data)
    return extra


def setup_logging(
    log_dir: Path | None = None,
    *,
    json_to_stdout: bool = False,
    level: int = logging.INFO,
) -> Tuple[logging.Logger, logging.Logger]:
    """!
    @brief Set up the human and machine loggers.
    @details With ``log_dir`` the directory is created and rotating files are
    configured for both streams. Without it the human channel writes to
    ``stderr`` and the machine channel is only attached to ``stdout`` when
    ``json_to_stdout`` is set.
    @returns The ``(human, machine)`` logger pair.
    """

    global _CURRENT_LOG_DIRECTORY

    human_logger = logging.getLogger(HUMAN_LOGGER_NAME)
    machine_logger = logging.getLogger(MACHINE_LOGGER_NAME)
    human_logger.setLevel(level)
    machine_logger.setLevel(level)

    human_formatter = logging.Formatter(
        "%(asctime)s %(levelname)-8s [%(channel)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    machine_formatter = _JsonLineFormatter()

    human_handlers: list[logging.Handler] = []
    machine_handlers: list[logging.Handler] = []
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        _CURRENT_LOG_DIRECTORY = log_dir
        human_handlers.append(
            handlers.RotatingFileHandler(
                log_dir / HUMAN_LOG_FILENAME,
                maxBytes=1_048_576,
                backupCount=5,
                encoding="utf-8",
            )
        )
        machine_handlers.append(
            handlers.RotatingFileHandler(
                log_dir / MACHINE_LOG_FILENAME,
                maxBytes=1_048_576,
                backupCount=5,
                encoding="utf-8",
            )
        )
    else:
        _CURRENT_LOG_DIRECTORY = None
        human_handlers.append(logging.StreamHandler(stream=sys.stderr))
    if json_to_stdout:
        machine_handlers.append(logging.StreamHandler(stream=sys.stdout))

    _configure_logger(human_logger, human_formatter, human_handlers)
    _configure_logger(machine_logger, machine_formatter, machine_handlers)

    human_logger.addFilter(_ChannelFilter("human"))
    machine_logger.addFilter(_ChannelFilter("machine"))

    _emit_run_metadata(human_logger, machine_logger)

    return human_logger, machine_logger


def get_human_logger() -> logging.Logger:
    """!
    @brief Retrieve the human-readable logger.
    """

    return logging.getLogger(HUMAN_LOGGER_NAME)


def get_machine_logger() -> logging.Logger:
    """!
    @brief Retrieve the machine/JSON logger.
    """

    return logging.getLogger(MACHINE_LOGGER_NAME)


def get_log_directory() -> Path | None:
    """!
    @brief Return the most recently configured log directory, if any.
    """

    return _CURRENT_LOG_DIRECTORY


def get_run_metadata() -> Mapping[str, object] | None:
    """!
    @brief Return the most recent run metadata payload.
    @details Contains ``run_id`` (UUID4 hex), ``timestamp`` in ISO-8601 UTC
    form, the package ``version``/``build``, the interpreter version and the
    log directory.
    """

    return dict(_RUN_METADATA) if _RUN_METADATA is not None else None


def _emit_run_metadata(human_logger: logging.Logger, machine_logger: logging.Logger) -> None:
    global _RUN_METADATA

    moment = _dt.datetime.now(tz=_dt.timezone.utc)
    _RUN_METADATA = {
        "run_id": uuid.uuid4().hex,
        "timestamp": moment.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        **version.build_info(),
        "python": sys.version.split()[0],
        "logdir": str(_CURRENT_LOG_DIRECTORY) if _CURRENT_LOG_DIRECTORY else None,
    }

    human_logger.debug(
        "argdeck %s starting, run %s",
        version.display_version(),
        _RUN_METADATA["run_id"],
    )
    if _CURRENT_LOG_DIRECTORY is not None:
        human_logger.info("Logs directory: %s", _CURRENT_LOG_DIRECTORY)

    machine_logger.info("run_start", extra=build_event_extra("run_start", run=dict(_RUN_METADATA)))
