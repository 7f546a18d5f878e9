"""Optional ``.env`` support for the CLI.

Purpose
-------
Let operators keep ``EVTSYSLOG_*`` settings in a ``.env`` file next to the
working directory during foreground runs. Loading is opt-in through
``--use-dotenv`` or :data:`DOTENV_ENV_VAR`.

Contents
--------
* :func:`enable_dotenv` - load the nearest ``.env`` without overriding the real environment.
* :func:`should_use_dotenv` - decide between the CLI flag and the environment toggle.
"""

from __future__ import annotations

import os
import threading
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

DOTENV_ENV_VAR = "EVTSYSLOG_USE_DOTENV"

_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_LOCK = threading.Lock()
_DOTENV_LOADED: Path | None = None


def enable_dotenv(search_from: str | os.PathLike[str] | None = None) -> Path | None:
    """Load the nearest ``.env`` file once and return its path.

    Parameters
    ----------
    search_from:
        Directory where the upward search starts; defaults to the current
        working directory.

    Returns
    -------
    Path | None
        The loaded file, or ``None`` when no ``.env`` exists.
    """

    global _DOTENV_LOADED
    with _DOTENV_LOCK:
        if _DOTENV_LOADED is not None:
            return _DOTENV_LOADED
        candidate = _find_dotenv(Path(search_from) if search_from is not None else None)
        if candidate is None:
            return None
        load_dotenv(candidate, override=False)
        _DOTENV_LOADED = candidate
        return candidate


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Return ``True`` when ``.env`` loading is requested.

    ``explicit`` (the CLI flag) wins over ``env_value``, which defaults to
    :data:`DOTENV_ENV_VAR`.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="on")
    True
    """

    if explicit is not None:
        return explicit
    value = env_value if env_value is not None else os.getenv(DOTENV_ENV_VAR)
    return value is not None and value.strip().lower() in _TRUTHY


def _find_dotenv(start: Path | None) -> Path | None:
    if start is None:
        found = find_dotenv(usecwd=True)
        return Path(found).resolve() if found else None
    for directory in (start.resolve(), *start.resolve().parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED
    with _DOTENV_LOCK:
        _DOTENV_LOADED = None


__all__ = ["DOTENV_ENV_VAR", "enable_dotenv", "should_use_dotenv"]
