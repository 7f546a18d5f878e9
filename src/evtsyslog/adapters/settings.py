"""Configuration store adapters.

Purpose
-------
Read the ``SyslogHost`` / ``SyslogPort`` values from wherever an operator put
them: the Windows registry, environment variables, or explicit overrides.

Contents
--------
* :data:`DEFAULT_REGISTRY_KEY` – ``HKLM`` sub key used by the installer.
* :class:`RegistrySettingsStore` – ``REG_SZ`` values below ``HKLM``.
* :class:`EnvironmentSettingsStore` – ``EVTSYSLOG_*`` variables.
* :class:`MappingSettingsStore` – fixed values (CLI flags, tests).
* :class:`ChainedSettingsStore` – first non-``None`` answer wins.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from typing import Any

from evtsyslog.application.ports.settings import SettingsStorePort

DEFAULT_REGISTRY_KEY = r"SOFTWARE\Evtsyslog"
ENV_PREFIX = "EVTSYSLOG_"

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def env_name_for(name: str, *, prefix: str = ENV_PREFIX) -> str:
    """Map a registry-style value name to its environment variable.

    Examples
    --------
    >>> env_name_for("SyslogHost")
    'EVTSYSLOG_SYSLOG_HOST'
    >>> env_name_for("SyslogPort", prefix="X_")
    'X_SYSLOG_PORT'
    """
    return prefix + _CAMEL_BOUNDARY.sub("_", name).upper()


class RegistrySettingsStore(SettingsStorePort):
    """Read string values from ``HKEY_LOCAL_MACHINE\\<key>``.

    Missing keys, missing values, and values that are not ``REG_SZ`` all read
    as ``None``.
    """

    def __init__(self, key: str = DEFAULT_REGISTRY_KEY, *, registry: Any | None = None) -> None:
        """Initialise the store; ``registry`` defaults to the ``winreg`` module."""
        self._key = key
        self._registry = registry

    @property
    def key(self) -> str:
        return self._key

    def read(self, name: str) -> str | None:
        registry = self._registry
        if registry is None:
            import winreg as registry  # noqa: PLC0415 - Windows only
        try:
            with registry.OpenKey(registry.HKEY_LOCAL_MACHINE, self._key) as handle:
                value, value_type = registry.QueryValueEx(handle, name)
        except OSError:
            return None
        if value_type != registry.REG_SZ or not isinstance(value, str):
            return None
        return value


class EnvironmentSettingsStore(SettingsStorePort):
    """Read values from ``EVTSYSLOG_SYSLOG_HOST``-style environment variables."""

    def __init__(self, *, prefix: str = ENV_PREFIX, environ: Mapping[str, str] | None = None) -> None:
        self._prefix = prefix
        self._environ = environ

    def read(self, name: str) -> str | None:
        environ = self._environ if self._environ is not None else os.environ
        value = environ.get(env_name_for(name, prefix=self._prefix))
        if value is None or not value.strip():
            return None
        return value


class MappingSettingsStore(SettingsStorePort):
    """Serve values from a fixed mapping; ``None`` entries count as absent."""

    def __init__(self, values: Mapping[str, str | None]) -> None:
        self._values = dict(values)

    def read(self, name: str) -> str | None:
        return self._values.get(name)


class ChainedSettingsStore(SettingsStorePort):
    """Consult several stores in order and return the first value found.

    Examples
    --------
    >>> store = ChainedSettingsStore(
    ...     MappingSettingsStore({"SyslogPort": None}),
    ...     MappingSettingsStore({"SyslogPort": "5140"}),
    ... )
    >>> store.read("SyslogPort"), store.read("SyslogHost")
    ('5140', None)
    """

    def __init__(self, *stores: SettingsStorePort) -> None:
        self._stores = stores

    def read(self, name: str) -> str | None:
        for store in self._stores:
            value = store.read(name)
            if value is not None:
                return value
        return None


__all__ = [
    "ChainedSettingsStore",
    "DEFAULT_REGISTRY_KEY",
    "ENV_PREFIX",
    "EnvironmentSettingsStore",
    "MappingSettingsStore",
    "RegistrySettingsStore",
    "env_name_for",
]
