"""!
@brief Release identifiers for argdeck.
@details ``pyproject.toml`` points setuptools at the same ``VERSION`` file that
is read here, so ``pip show argdeck``, ``argdeck --version`` and the
``run_start`` log event never disagree.
"""
from __future__ import annotations

from importlib import resources
from typing import Dict

__all__ = ["__version__", "__build__", "build_info", "display_version"]

_UNKNOWN_VERSION = "0.0.0"


def _read_version_file() -> str:
    """!
    @brief Return the stripped contents of ``argdeck/VERSION``.
    @details Falls back to ``0.0.0`` when the resource is missing, as happens
    when the sources are imported without ``package-data`` being installed.
    """

    resource = resources.files(__package__).joinpath("VERSION")
    try:
        text = resource.read_text(encoding="utf-8").strip()
    except FileNotFoundError:  # pragma: no cover - resource stripped from install
        return _UNKNOWN_VERSION
    return text or _UNKNOWN_VERSION


__version__ = _read_version_file()
# Release builds overwrite this marker; checkouts report "dev".
__build__ = "dev"


def build_info() -> Dict[str, str]:
    """!
    @brief Version and build marker as a mapping, for structured log events.
    """

    return {"version": __version__, "build": __build__}


def display_version() -> str:
    """!
    @brief Version as printed by ``argdeck --version``, e.g. ``0.3.0 (dev)``.
    """

    return f"{__version__} ({__build__})"
