# topmark:header:start
#
#   project      : ECResolve
#   file         : __init__.py
#   file_relpath : src/ecresolve/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ECResolve package.

ECResolve resolves the per-file properties declared in ``.editorconfig``-style
files: it compiles section globs (including ``{n1..n2}`` numeric ranges), walks
the directory hierarchy from a file up to the nearest ``root = true`` boundary,
and merges what it finds with nearest-directory precedence.

Typical use::

    from ecresolve import HierarchicalResolver

    resolver = HierarchicalResolver()
    props = resolver.resolve("/proj/docs/readme.md")
    props.get("indent_style")
"""

from __future__ import annotations

from ecresolve.cache import ResolutionCache
from ecresolve.config.settings import ResolverSettings
from ecresolve.constants import ECRESOLVE_VERSION
from ecresolve.errors import EcresolveError, InvalidIntervalError, InvalidPatternError
from ecresolve.glob.compiler import (
    CompiledPattern,
    CompileResult,
    MatchTarget,
    compile_section_pattern,
    matches_section,
    try_compile_section_pattern,
)
from ecresolve.glob.ranges import Interval, build_range_regex, compile_range
from ecresolve.io import FileSystem, LocalFileSystem, MemoryFileSystem
from ecresolve.parser import ConfigLevel, Section, coerce_value, load_config_file, parse_config_text
from ecresolve.resolver import HierarchicalResolver
from ecresolve.types import PropertyTable, PropertyValue, ResolvedProperties

__version__: str = ECRESOLVE_VERSION

__all__ = [
    "CompileResult",
    "CompiledPattern",
    "ConfigLevel",
    "EcresolveError",
    "FileSystem",
    "HierarchicalResolver",
    "Interval",
    "InvalidIntervalError",
    "InvalidPatternError",
    "LocalFileSystem",
    "MatchTarget",
    "MemoryFileSystem",
    "PropertyTable",
    "PropertyValue",
    "ResolutionCache",
    "ResolvedProperties",
    "ResolverSettings",
    "Section",
    "build_range_regex",
    "coerce_value",
    "compile_range",
    "compile_section_pattern",
    "load_config_file",
    "matches_section",
    "parse_config_text",
    "try_compile_section_pattern",
]
