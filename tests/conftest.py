"""Shared fixtures: configuration files written under tmp_path."""

from __future__ import annotations

import textwrap

import pytest

from cfgscope import Config


@pytest.fixture
def write_config(tmp_path):
    """Return a factory writing dedented *text* to a file and returning its path."""
    def _write(text: str, name: str = "test.conf"):
        path = tmp_path / name
        path.write_bytes(textwrap.dedent(text).encode("utf-8"))
        return path
    return _write


@pytest.fixture
def open_config(write_config):
    """Return a factory opening a Config on *text*; every cursor is closed afterwards."""
    opened: list[Config] = []

    def _open(text: str, name: str = "test.conf") -> Config:
        config = Config.open(write_config(text, name))
        opened.append(config)
        return config

    yield _open
    for config in opened:
        config.close()
