"""Config — the stream cursor every parsing operation runs against.

A ``Config`` wraps one open binary file handle.  Positions are byte offsets,
which is what lets :func:`cfgscope.sections.isolate_section` hand out a
second cursor bounded to one section of the same file.

Failures while reading are not raised.  The first one is recorded in
``error_message`` and every later read returns ``None``/``False`` without
touching the file; the cursor must then be closed and discarded.
"""

from __future__ import annotations

import io
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO

from .errors import ConfigOpenError
from .model import DEFAULT_ENCODING, ConfigLine

logger = logging.getLogger(__name__)


class Config:
    """Line cursor over a configuration file, optionally bounded to a byte range."""

    def __init__(
        self,
        path: str | Path,
        file: BinaryIO,
        encoding: str = DEFAULT_ENCODING,
    ) -> None:
        self.path = Path(path)
        self.encoding = encoding
        self.line = 0
        self.isolation_end = -1
        self.error_message: str | None = None
        self._file: BinaryIO | None = file
        self._buffer: io.StringIO | None = io.StringIO()

    @classmethod
    def open(cls, path: str | Path, *, encoding: str = DEFAULT_ENCODING) -> Config:
        """Open *path* for parsing.

        Raises:
            ConfigOpenError: the file could not be opened.
        """
        path = Path(path)
        try:
            file = path.open("rb")
        except OSError as exc:
            raise ConfigOpenError(str(path), exc.strerror or str(exc)) from exc
        logger.debug("Opened configuration file %s", path)
        return cls(path, file, encoding=encoding)

    def close(self) -> None:
        """Release the file handle and scratch buffer.  Safe to call twice."""
        if self._file is None:
            return
        self._file.close()
        self._file = None
        self._buffer = None
        logger.debug("Closed configuration file %s", self.path)

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> Config:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __iter__(self) -> Iterator[ConfigLine]:
        from .reader import read_line
        while True:
            line = read_line(self)
            if line is None:
                return
            yield line

    def __repr__(self) -> str:
        bound = f" end={self.isolation_end}" if self.isolation_end >= 0 else ""
        return f"<Config {str(self.path)!r} line={self.line}{bound}>"

    # -- Sticky error ---------------------------------------------------

    def set_error(self, message: str, *args: object) -> bool:
        """Record ``message % args`` unless an error is already set.

        Returns True only when this call's message was the one recorded.
        """
        if self.error_message is not None:
            return False
        self.error_message = message % args if args else message
        logger.debug("%s:%d: %s", self.path, self.line, self.error_message)
        return True

    # -- Stream primitives ----------------------------------------------

    def read_raw_line(self) -> str | None:
        """Read one physical line, terminator included.

        Returns None at end of file, once an error is set, or when the read
        ends at or past ``isolation_end``.
        """
        if self.error_message is not None or self._file is None:
            return None

        try:
            raw = self._file.readline()
        except OSError as exc:
            self.set_error("Could not read from file: %s", exc)
            return None
        if not raw:
            return None

        if self.isolation_end >= 0:
            try:
                position = self._file.tell()
            except OSError:
                self.set_error("Could not obtain file position")
                return None
            if position >= self.isolation_end:
                return None

        self.line += 1
        return raw.decode(self.encoding, errors="replace")

    def tell(self) -> int:
        if self._file is None:
            raise ValueError("I/O operation on closed config")
        return self._file.tell()

    def seek(self, offset: int) -> None:
        if self._file is None:
            raise ValueError("I/O operation on closed config")
        self._file.seek(offset)

    def reset_buffer(self) -> io.StringIO:
        """Empty the scratch buffer used to accumulate multiline values."""
        if self._buffer is None:
            raise ValueError("I/O operation on closed config")
        self._buffer.seek(0)
        self._buffer.truncate()
        return self._buffer

    # -- Parsing shortcuts ----------------------------------------------

    def read_line(self) -> ConfigLine | None:
        from .reader import read_line
        return read_line(self)

    def skip_section(self, line: ConfigLine) -> bool:
        from .sections import skip_section
        return skip_section(self, line)

    def isolate_section(self, line: ConfigLine) -> Config | None:
        from .sections import isolate_section
        return isolate_section(self, line)

    def iter_section(self) -> Iterator[ConfigLine]:
        from .sections import iter_section
        return iter_section(self)
