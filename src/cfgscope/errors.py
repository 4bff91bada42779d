"""Exceptions raised where no cursor exists to carry a sticky error."""

from __future__ import annotations


class ConfigError(Exception):
    """Base class for cfgscope exceptions."""


class ConfigOpenError(ConfigError):
    """A configuration file could not be opened for reading."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not open '{path}': {reason}")
        self.path = path
        self.reason = reason
