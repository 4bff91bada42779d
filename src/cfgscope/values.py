"""Scalar coercion helpers for raw configuration values."""

from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)


ONE_MINUTE = 60
ONE_HOUR = 60 * ONE_MINUTE
ONE_DAY = 24 * ONE_HOUR
ONE_WEEK = 7 * ONE_DAY
ONE_MONTH = 30 * ONE_DAY
ONE_YEAR = 365 * ONE_DAY

_MULTIPLIERS: dict[str, int] = {
    "s": 1,
    "m": ONE_MINUTE,
    "h": ONE_HOUR,
    "d": ONE_DAY,
    "w": ONE_WEEK,
    "M": ONE_MONTH,
    "y": ONE_YEAR,
}

_LONG_MIN = -(2 ** 63)
_LONG_MAX = 2 ** 63 - 1
_INT_MIN = -(2 ** 31)
_INT_MAX = 2 ** 31 - 1
_ULONG_MAX = 2 ** 64 - 1
_UINT_MOD = 2 ** 32

# strtol(value, &end, 0): sign, then hex, octal or decimal digits
_LONG_RE = re.compile(
    r"[ \t\n\r\x0b\x0c]*([+-]?)(?:0[xX]([0-9a-fA-F]+)|(0[0-7]*)|([1-9][0-9]*))"
)

# sscanf(str, "%u%c"): optionally signed run followed by any single character
_PERIOD_RE = re.compile(r"[ \t\n\r\x0b\x0c]*([+-]?)([0-9]+)(.)", re.DOTALL)


# ---------------------------------------------------------------------------
# Integers
# ---------------------------------------------------------------------------

def parse_long(value: str | None, default: int) -> int:
    """Parse *value* as a signed 64-bit integer with base auto-detection.

    Accepts ``0x`` hex and ``0`` octal prefixes.  Returns *default* for
    empty input, trailing garbage or out-of-range values.
    """
    if value is None:
        return default

    match = _LONG_RE.fullmatch(value)
    if match is None:
        return default

    sign, hex_digits, oct_digits, dec_digits = match.groups()
    if hex_digits is not None:
        parsed = int(hex_digits, 16)
    elif oct_digits is not None:
        parsed = int(oct_digits, 8)
    else:
        parsed = int(dec_digits, 10)
    if sign == "-":
        parsed = -parsed

    if not _LONG_MIN <= parsed <= _LONG_MAX:
        return default
    return parsed


def parse_int(value: str | None, default: int) -> int:
    """Like :func:`parse_long`, but *default* unless the result fits 32 bits."""
    parsed = parse_long(value, default)
    if not _INT_MIN <= parsed <= _INT_MAX:
        return default
    return parsed


# ---------------------------------------------------------------------------
# Booleans
# ---------------------------------------------------------------------------

def parse_bool(value: str | None, default: bool) -> bool:
    """Parse a boolean flag.

    ``true``/``on``/``yes`` and ``false``/``off``/``no`` are matched exactly
    (case-sensitive).  Anything else is read as an integer where non-zero
    means True, so ``"2"`` is True and unparseable text yields *default*.
    """
    if value is None:
        return default

    if value in ("true", "on", "yes"):
        return True
    if value in ("false", "off", "no"):
        return False

    return parse_int(value, int(default)) != 0


# ---------------------------------------------------------------------------
# Time periods
# ---------------------------------------------------------------------------

def parse_time_period(value: str | None, default: int) -> int:
    """Sum ``<number><suffix>`` runs such as ``1h30m`` into seconds.

    Suffixes: ``s m h d w M y``.  Unknown suffixes are skipped with a
    warning.  A zero total returns *default*, so an explicit ``0s`` cannot
    be told apart from unparseable input.

    After each run, scanning resumes past the first occurrence of the
    suffix character in the remaining text rather than past the run itself.
    Inputs whose suffix also appears earlier (e.g. a whitespace suffix after
    leading whitespace) are therefore rescanned from that earlier point.

    Arithmetic is unsigned 32-bit: a leading ``-`` and totals past
    ``2**32 - 1`` wrap around, so ``-5s`` is 4294967291 and ``200y`` is
    2012232704.
    """
    if value is None:
        return default

    total = 0
    pos = 0
    while pos < len(value):
        match = _PERIOD_RE.match(value, pos)
        if match is None:
            break

        sign, digits, multiplier = match.groups()
        period = int(digits)
        if period > _ULONG_MAX:
            period = _ULONG_MAX
        elif sign == "-":
            period = -period
        period %= _UINT_MOD
        if multiplier in _MULTIPLIERS:
            total = (total + period * _MULTIPLIERS[multiplier]) % _UINT_MOD
        else:
            logger.warning("Ignoring unknown multiplier: %s", multiplier)

        pos = value.index(multiplier, pos) + 1

    return total if total else default
