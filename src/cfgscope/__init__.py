"""cfgscope — streaming parser for nested section configuration files."""

from .config import Config
from .errors import ConfigError, ConfigOpenError
from .model import (
    DEFAULT_ENCODING,
    MAX_SECTION_DEPTH,
    MULTILINE_SENTINEL,
    ConfigLine,
    KeyValue,
    LineType,
    Section,
    SectionEnd,
)
from .reader import read_line
from .sections import isolate_section, iter_section, skip_section
from .values import parse_bool, parse_int, parse_long, parse_time_period

__all__ = [
    "Config",
    "ConfigError",
    "ConfigOpenError",
    "ConfigLine",
    "KeyValue",
    "LineType",
    "Section",
    "SectionEnd",
    "DEFAULT_ENCODING",
    "MAX_SECTION_DEPTH",
    "MULTILINE_SENTINEL",
    "read_line",
    "skip_section",
    "isolate_section",
    "iter_section",
    "parse_bool",
    "parse_int",
    "parse_long",
    "parse_time_period",
]
