"""Reader layer: turns physical lines into classified configuration lines."""

from __future__ import annotations

from .config import Config
from .model import (
    MULTILINE_SENTINEL,
    WHITESPACE,
    ConfigLine,
    KeyValue,
    Section,
    SectionEnd,
)


# ---------------------------------------------------------------------------
# Line cleanup
# ---------------------------------------------------------------------------

def remove_comment(line: str) -> str:
    """Cut *line* at its last ``#``.  There is no escape for a literal ``#``."""
    index = line.rfind("#")
    if index < 0:
        return line
    return line[:index]


def _strip(text: str) -> str:
    return text.strip(WHITESPACE)


# ---------------------------------------------------------------------------
# read_line
# ---------------------------------------------------------------------------

def read_line(config: Config) -> ConfigLine | None:
    """Read the next non-blank line from *config* and classify it.

    Returns None at end of input or on error; ``config.error_message``
    tells the two apart.  Nothing is read once an error is set.
    """
    if config.error_message is not None:
        return None

    while True:
        raw = config.read_raw_line()
        if raw is None:
            return None
        line = _strip(remove_comment(raw))
        if line:
            break

    if line.endswith("{"):
        section = _parse_section(line)
        if section is None:
            config.set_error("Malformed section opening")
        return section

    if line == "}":
        return SectionEnd()

    key, equal, value = line.partition("=")
    if not equal:
        config.set_error("Expecting section or key=value")
        return None

    kv = _parse_key_value(config, key, value)
    if kv is None:
        config.set_error("Malformed key=value line")
    return kv


def _parse_section(line: str) -> Section | None:
    """Split ``name param {`` at the first space.  None if there is no space."""
    space = line.find(" ")
    if space < 0:
        return None
    name = _strip(line[:space])
    param = _strip(line[space + 1:-1])
    return Section(name=name, param=param)


def _parse_key_value(config: Config, key: str, value: str) -> KeyValue | None:
    key = _strip(key).replace(" ", "_")
    value = value.lstrip(WHITESPACE)

    if value == MULTILINE_SENTINEL:
        value = _parse_multiline(config)
        if value is None:
            return None

    return KeyValue(key=key, value=value)


# ---------------------------------------------------------------------------
# Multiline values
# ---------------------------------------------------------------------------

def _parse_multiline(config: Config) -> str | None:
    """Accumulate lines up to a closing ``'''`` line.

    Each line keeps its leading indentation and ends with a single ``\\n``.
    Comments are not stripped inside the value.
    """
    buffer = config.reset_buffer()

    while True:
        raw = config.read_raw_line()
        if raw is None:
            break
        if _strip(raw) == MULTILINE_SENTINEL:
            return buffer.getvalue()
        buffer.write(raw.rstrip(WHITESPACE))
        buffer.write("\n")

    config.set_error("Unexpected end of input while scanning multiline string")
    return None
