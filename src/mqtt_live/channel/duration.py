"""
Interval strings.

The backend keys each topic by the query interval, rendered the way Go's
`time.Duration.String()` renders it (`"1s"`, `"500ms"`, `"1m30s"`). Streaming
workers later parse the same segment back to drive their tick rate. Durations
are carried as integer nanoseconds throughout, so no precision is lost.
"""

from __future__ import annotations

import re
from typing import Final

from ..types import DurationError

NANOSECONDS_PER_MICROSECOND: Final = 1_000
NANOSECONDS_PER_MILLISECOND: Final = 1_000_000
NANOSECONDS_PER_SECOND: Final = 1_000_000_000
NANOSECONDS_PER_MINUTE: Final = 60 * NANOSECONDS_PER_SECOND
NANOSECONDS_PER_HOUR: Final = 60 * NANOSECONDS_PER_MINUTE

MAX_DURATION: Final = (1 << 63) - 1
"""Largest duration representable as a signed 64-bit nanosecond count."""

UNITS: Final[dict[str, int]] = {
    "ns": 1,
    "us": NANOSECONDS_PER_MICROSECOND,
    "µs": NANOSECONDS_PER_MICROSECOND,  # U+00B5 micro sign
    "μs": NANOSECONDS_PER_MICROSECOND,  # U+03BC Greek letter mu
    "ms": NANOSECONDS_PER_MILLISECOND,
    "s": NANOSECONDS_PER_SECOND,
    "m": NANOSECONDS_PER_MINUTE,
    "h": NANOSECONDS_PER_HOUR,
}
"""Unit suffixes accepted by `parse_duration`, in nanoseconds."""

_COMPONENT: Final = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")


def _split_fraction(value: int, precision: int) -> tuple[int, str]:
    """
    Split `value` into an integer part and a decimal suffix.

    `value` is read as a fixed-point number with `precision` decimal places.
    Trailing zeros are dropped, and so is the point when nothing remains.
    """
    scale = 10**precision
    whole, frac = divmod(value, scale)
    if frac == 0:
        return whole, ""
    return whole, "." + f"{frac:0{precision}d}".rstrip("0")


def format_duration(nanoseconds: int) -> str:
    """
    Render a duration like Go's `time.Duration.String()`.

    Examples::

        0                -> "0s"
        1_500            -> "1.5µs"
        500_000_000      -> "500ms"
        60_000_000_000   -> "1m0s"
        3_723_000_000_000 -> "1h2m3s"
    """
    if nanoseconds == 0:
        return "0s"

    sign = "-" if nanoseconds < 0 else ""
    u = abs(nanoseconds)

    # Sub-second values use the largest unit that keeps the integer part non-zero.
    if u < NANOSECONDS_PER_SECOND:
        if u < NANOSECONDS_PER_MICROSECOND:
            unit, precision = "ns", 0
        elif u < NANOSECONDS_PER_MILLISECOND:
            unit, precision = "µs", 3
        else:
            unit, precision = "ms", 6
        whole, frac = _split_fraction(u, precision)
        return f"{sign}{whole}{frac}{unit}"

    # Larger values are written as hours, minutes and fractional seconds.
    # Seconds are always present; minutes appear once there is at least one.
    total_seconds, frac = _split_fraction(u, 9)
    text = f"{total_seconds % 60}{frac}s"
    minutes = total_seconds // 60
    if minutes > 0:
        text = f"{minutes % 60}m{text}"
        hours = minutes // 60
        if hours > 0:
            text = f"{hours}h{text}"
    return sign + text


def parse_duration(text: str) -> int:
    """
    Parse a Go duration string into nanoseconds.

    Accepts a signed sequence of decimal numbers, each with an optional
    fraction and a mandatory unit suffix: `"300ms"`, `"-1.5h"`, `"2h45m"`.
    A bare `"0"` is also accepted.

    Raises:
        DurationError: If the string is malformed, uses an unknown unit, or
            overflows a signed 64-bit nanosecond count.
    """
    s = text
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]

    if s == "0":
        return 0
    if not s:
        raise DurationError(f"Invalid duration {text!r}")

    total = 0
    pos = 0
    while pos < len(s):
        match = _COMPONENT.match(s, pos)
        if match is None:
            raise DurationError(f"Invalid duration {text!r}")
        int_digits, frac_digits, unit = match.groups()

        if not int_digits and not frac_digits:
            raise DurationError(f"Invalid duration {text!r}")
        if not unit:
            raise DurationError(f"Missing unit in duration {text!r}")
        if unit not in UNITS:
            raise DurationError(f"Unknown unit {unit!r} in duration {text!r}")

        scale = UNITS[unit]
        value = int(int_digits or "0") * scale
        if frac_digits:
            value += int(frac_digits) * scale // 10 ** len(frac_digits)

        total += value
        if total > 1 << 63:
            raise DurationError(f"Duration {text!r} overflows")
        pos = match.end()

    if negative:
        return -total
    if total > MAX_DURATION:
        raise DurationError(f"Duration {text!r} overflows")
    return total
