# topmark:header:start
#
#   project      : ECResolve
#   file         : errors.py
#   file_relpath : src/ecresolve/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for ECResolve.

Usage:
    Pattern errors are raised by the glob compiler and caught per section by
    the resolver; they never escape
    [`HierarchicalResolver.resolve`][ecresolve.resolver.HierarchicalResolver.resolve].
    Callers that want a non-raising API use
    [`try_compile_section_pattern`][ecresolve.glob.compiler.try_compile_section_pattern],
    which returns the error as a value.
"""

from __future__ import annotations


class EcresolveError(Exception):
    """Base class for all ECResolve errors."""


class InvalidPatternError(EcresolveError, ValueError):
    """A section header could not be compiled into a matcher.

    Attributes:
        pattern (str): The section header text.
        reason (str): Human-readable description of the problem.
        position (int | None): Offset of the offending character, when known.
    """

    def __init__(self, pattern: str, reason: str, position: int | None = None) -> None:
        self.pattern: str = pattern
        self.reason: str = reason
        self.position: int | None = position
        where: str = f" at offset {position}" if position is not None else ""
        super().__init__(f"Invalid section pattern {pattern!r}{where}: {reason}")


class InvalidIntervalError(InvalidPatternError):
    """A numeric range ``{start..end}`` is empty (``start > end``)."""

    def __init__(self, start: int, end: int, pattern: str | None = None) -> None:
        self.start: int = start
        self.end: int = end
        super().__init__(
            pattern if pattern is not None else f"{{{start}..{end}}}",
            f"range start {start} is greater than range end {end}",
        )
