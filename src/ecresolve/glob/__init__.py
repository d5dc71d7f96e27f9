# topmark:header:start
#
#   project      : ECResolve
#   file         : __init__.py
#   file_relpath : src/ecresolve/glob/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Section-header glob dialect: numeric ranges and pattern compilation."""

from __future__ import annotations

from ecresolve.glob.compiler import (
    CompiledPattern,
    CompileResult,
    MatchTarget,
    compile_section_pattern,
    matches_section,
    try_compile_section_pattern,
)
from ecresolve.glob.ranges import Interval, build_range_regex, compile_range

__all__ = [
    "CompileResult",
    "CompiledPattern",
    "Interval",
    "MatchTarget",
    "build_range_regex",
    "compile_range",
    "compile_section_pattern",
    "matches_section",
    "try_compile_section_pattern",
]
