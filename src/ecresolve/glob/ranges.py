# topmark:header:start
#
#   project      : ECResolve
#   file         : ranges.py
#   file_relpath : src/ecresolve/glob/ranges.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Regular expressions for inclusive integer intervals.

A section header such as ``[test{10..1000}.c]`` must match ``test10.c`` and
``test999.c`` but neither ``test9.c`` nor ``test1001.c``. Python's `re` has no
numeric comparison, so the interval is decomposed into digit-wise alternatives:

    * numbers are grouped by digit count (``10..99``, ``100..999``, ``1000..1000``);
    * within one digit count, the most significant digit is bounded first and the
      remaining positions are bounded recursively, collapsing full ``0..9`` spans
      into ``[0-9]{n}``;
    * negative intervals are mirrored onto the positive axis behind a literal ``-``;
    * intervals straddling zero are split into a negative branch, ``0`` and a
      positive branch.

Accepted numerals are canonical decimal strings: ``0``, or an optional ``-``
followed by a non-zero digit and further digits. Leading zeros (``007``) and
``-0`` never match.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ecresolve.errors import InvalidIntervalError


@dataclass(frozen=True)
class Interval:
    """Inclusive integer interval ``[start, end]`` from a ``{start..end}`` token."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidIntervalError(self.start, self.end)

    def contains(self, value: int) -> bool:
        """Return True if ``value`` lies within the interval."""
        return self.start <= value <= self.end

    def to_regex(self) -> str:
        """Return the unanchored regex source matching this interval."""
        return build_range_regex(self.start, self.end)


def build_range_regex(start: int, end: int) -> str:
    """Build a regex source matching the decimal numerals in ``[start, end]``.

    The result is unanchored and safe to embed in a larger expression: any
    top-level alternation is wrapped in a non-capturing group.

    Args:
        start (int): Lower bound (inclusive).
        end (int): Upper bound (inclusive).

    Returns:
        str: The regex source.

    Raises:
        InvalidIntervalError: If ``start > end``.
    """
    if start > end:
        raise InvalidIntervalError(start, end)
    if start == end:
        return re.escape(str(start))
    if end < 0:
        return "-" + _group(_positive_range(-end, -start))

    alternatives: list[str] = []
    if start < 0:
        alternatives.append("-" + _group(_positive_range(1, -start)))
    if start <= 0:
        alternatives.append("0")
    if end > 0:
        alternatives.append(_positive_range(max(start, 1), end))
    return _group("|".join(alternatives))


def compile_range(start: int, end: int) -> re.Pattern[str]:
    """Compile the matcher for ``[start, end]``; use it with `fullmatch`.

    Raises:
        InvalidIntervalError: If ``start > end``.
    """
    return re.compile(build_range_regex(start, end))


def _positive_range(lo: int, hi: int) -> str:
    """Alternatives for ``1 <= lo <= hi``, one group per digit count."""
    parts: list[str] = []
    for width in range(len(str(lo)), len(str(hi)) + 1):
        floor: int = max(lo, 10 ** (width - 1))
        ceil: int = min(hi, 10**width - 1)
        parts.append(_same_width(str(floor), str(ceil)))
    return "|".join(parts)


def _same_width(low: str, high: str) -> str:
    """Match fixed-width digit strings between ``low`` and ``high`` inclusive.

    Both strings have the same length and ``low <= high``. Inner positions may
    carry zeros (``"05"``) since the width is fixed by the caller.
    """
    if low == high:
        return low
    rest: int = len(low) - 1
    if rest == 0:
        return _digit_class(int(low), int(high))
    if low[0] == high[0]:
        return low[0] + _group(_same_width(low[1:], high[1:]))

    alternatives: list[str] = []
    first: int = int(low[0])
    last: int = int(high[0])
    upper: str | None = None

    if low[1:] != "0" * rest:
        alternatives.append(low[0] + _group(_same_width(low[1:], "9" * rest)))
        first += 1
    if high[1:] != "9" * rest:
        upper = high[0] + _group(_same_width("0" * rest, high[1:]))
        last -= 1
    if first <= last:
        alternatives.append(_digit_class(first, last) + _any_digits(rest))
    if upper is not None:
        alternatives.append(upper)
    return "|".join(alternatives)


def _digit_class(first: int, last: int) -> str:
    if first == last:
        return str(first)
    return f"[{first}-{last}]"


def _any_digits(count: int) -> str:
    return "[0-9]" if count == 1 else f"[0-9]{{{count}}}"


def _group(source: str) -> str:
    return f"(?:{source})" if "|" in source else source
