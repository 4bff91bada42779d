"""Balanced-section navigation: skipping, isolating and walking section bodies.

All three operations start right after a ``Section`` line has been read and
track nesting with an explicit depth counter.  A body nested deeper than
``MAX_SECTION_DEPTH`` below the starting section is rejected.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .config import Config
from .errors import ConfigError
from .model import MAX_SECTION_DEPTH, ConfigLine, Section, SectionEnd
from .reader import read_line

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# skip
# ---------------------------------------------------------------------------

def skip_section(config: Config, line: ConfigLine) -> bool:
    """Discard the body of the section opened by *line*.

    Leaves *config* just past the matching ``}``.  Returns False when *line*
    is not a section start, when an error is already set, or when the input
    ends first; the last case records no error message.
    """
    if config.error_message is not None:
        return False
    if not isinstance(line, Section):
        return False
    return _find_section_end(config, 0)


def _find_section_end(config: Config, depth: int) -> bool:
    if depth > MAX_SECTION_DEPTH:
        config.set_error("Recursion level too deep")
        return False

    for line in config:
        if isinstance(line, Section):
            if not _find_section_end(config, depth + 1):
                return False
        elif isinstance(line, SectionEnd):
            return True

    return False


# ---------------------------------------------------------------------------
# isolate
# ---------------------------------------------------------------------------

def isolate_section(config: Config, line: ConfigLine) -> Config | None:
    """Open a second cursor bounded to the body of the section opened by *line*.

    The new cursor has its own file handle and reports end of input at the
    section's closing ``}``.  *config* is rewound to the start of the body
    with its line counter unchanged, so it can still walk or skip the
    section afterwards.

    Any failure records ``Unknown error while isolating section`` on *config*
    (unless an earlier error is already set) and returns None.
    """
    if config.error_message is not None:
        return None
    if not isinstance(line, Section):
        return None

    origin_line = config.line
    try:
        start = config.tell()
    except (OSError, ValueError):
        config.set_error("Could not obtain file position")
        return None

    isolated: Config | None = None
    ok = False

    if _find_section_end(config, 0):
        config.line = origin_line
        try:
            end = config.tell()
            isolated = Config.open(config.path, encoding=config.encoding)
            isolated.seek(start)
        except (OSError, ValueError, ConfigError) as exc:
            logger.debug("Could not isolate section %r: %s", line.name, exc)
        else:
            isolated.isolation_end = end
            ok = True

    try:
        config.seek(start)
    except (OSError, ValueError):
        config.set_error("Could not reset file position")
        ok = False

    if not ok or config.error_message is not None:
        config.set_error("Unknown error while isolating section")
        if isolated is not None:
            isolated.close()
        return None

    logger.debug(
        "Isolated section %s %s: bytes %d-%d of %s",
        line.name, line.param, start, end, config.path,
    )
    return isolated


# ---------------------------------------------------------------------------
# walk
# ---------------------------------------------------------------------------

def iter_section(config: Config) -> Iterator[ConfigLine]:
    """Yield every line of the current section body, nested sections included.

    Stops after consuming the section's own ``}``, which is not yielded.
    Stops early at end of input or on error, like :func:`skip_section`.
    """
    depth = 0
    for line in config:
        if isinstance(line, Section):
            depth += 1
            if depth > MAX_SECTION_DEPTH:
                config.set_error("Recursion level too deep")
                return
        elif isinstance(line, SectionEnd):
            if depth == 0:
                return
            depth -= 1
        yield line
