# topmark:header:start
#
#   project      : ECResolve
#   file         : parser.py
#   file_relpath : src/ecresolve/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse one INI-like config file into a `ConfigLevel`.

Format:
    * Blank lines and lines starting with ``#`` or ``;`` are ignored.
    * ``[pattern]`` opens a section. The pattern is kept verbatim; it is
      compiled lazily and may fail on its own without affecting other sections.
    * ``key = value`` assigns into the open section, or into the global table
      before the first section header. Only the first ``=`` splits; the value
      may contain more.
    * Values ``true``/``false`` (any case) become booleans, base-10 numbers
      become ``int`` or ``float``, anything else stays a string.
    * Within a section a repeated key keeps the last value. Sections keep file
      order, which is also their precedence order (later wins).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Final

from ecresolve.config.logging import get_logger
from ecresolve.glob.compiler import try_compile_section_pattern

if TYPE_CHECKING:
    from pathlib import PurePath

    from ecresolve.config.logging import EcresolveLogger
    from ecresolve.config.settings import ResolverSettings
    from ecresolve.glob.compiler import CompileResult
    from ecresolve.io import FileSystem
    from ecresolve.types import PropertyTable, PropertyValue

logger: EcresolveLogger = get_logger(__name__)

_INT_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?\d+")
_FLOAT_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")

_COMMENT_PREFIXES: Final[tuple[str, ...]] = ("#", ";")


@dataclass
class Section:
    """A ``[pattern]`` block and the properties assigned inside it.

    Attributes:
        header (str): The pattern text between the brackets, trimmed.
        properties (PropertyTable): Assignments in this section (last one wins).
        lineno (int): 1-based line number of the header.
    """

    header: str
    properties: PropertyTable = field(default_factory=lambda: {})
    lineno: int = 0

    @cached_property
    def pattern(self) -> CompileResult:
        """Compiled matcher for `header`, or the error explaining why there is none."""
        return try_compile_section_pattern(self.header)


@dataclass
class ConfigLevel:
    """One directory's parsed config file.

    Attributes:
        global_properties (PropertyTable): Assignments before the first section.
        sections (list[Section]): Sections in file order.
        path (PurePath | None): Where the text came from, when known.
    """

    global_properties: PropertyTable = field(default_factory=lambda: {})
    sections: list[Section] = field(default_factory=lambda: [])
    path: PurePath | None = None

    def is_root(self, root_key: str) -> bool:
        """Return True if the global table sets ``root_key`` (any case) to boolean true."""
        wanted: str = root_key.lower()
        return any(
            key.lower() == wanted and value is True
            for key, value in self.global_properties.items()
        )


def coerce_value(raw: str) -> PropertyValue:
    """Type a raw property value.

    Args:
        raw (str): The trimmed value text.

    Returns:
        PropertyValue: ``bool`` for ``true``/``false`` (case-insensitive), ``int``
            or ``float`` for base-10 numbers, else the string unchanged.
    """
    lowered: str = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    try:
        if _INT_RE.fullmatch(raw):
            return int(raw)
        if _FLOAT_RE.fullmatch(raw):
            return float(raw)
    except (ValueError, OverflowError):
        # e.g. more digits than int() accepts; keep the text
        logger.debug("Keeping numeric-looking value as text: %.40r...", raw)
    return raw


def parse_config_text(text: str, *, source: PurePath | None = None) -> ConfigLevel:
    """Parse config file text.

    Args:
        text (str): The file contents (``\\n`` or ``\\r\\n`` line endings).
        source (PurePath | None): Optional origin, used for logging and stored on
            the result.

    Returns:
        ConfigLevel: Global properties and sections in file order.
    """
    level = ConfigLevel(path=source)
    current: PropertyTable = level.global_properties
    where: str = str(source) if source is not None else "<text>"

    if text.startswith("\ufeff"):
        text = text[1:]

    for lineno, raw_line in enumerate(text.split("\n"), start=1):
        line: str = raw_line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue

        if line.startswith("[") and line.endswith("]"):
            section = Section(header=line[1:-1].strip(), lineno=lineno)
            level.sections.append(section)
            current = section.properties
            continue

        key, sep, value = line.partition("=")
        key = key.strip()
        if not sep or not key:
            logger.debug("%s:%d: ignoring unrecognized line %r", where, lineno, raw_line)
            continue
        current[key] = coerce_value(value.strip())

    logger.trace(
        "Parsed %s: %d global properties, %d sections",
        where,
        len(level.global_properties),
        len(level.sections),
    )
    return level


def load_config_file(
    path: PurePath,
    fs: FileSystem,
    settings: ResolverSettings,
) -> ConfigLevel | None:
    """Read and parse the config file at ``path``.

    A missing or unreadable file is the normal "no configuration here" case and
    yields None.

    Args:
        path (PurePath): Location of the config file.
        fs (FileSystem): Filesystem capability used for the read.
        settings (ResolverSettings): Provides the text encoding.

    Returns:
        ConfigLevel | None: The parsed level, or None when there is nothing to read.
    """
    if not fs.is_file(path):
        return None
    try:
        text: str = fs.read_text(path, settings.encoding)
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable config file %s: %s", path, exc)
        return None
    logger.debug("Discovered config file: %s", path)
    return parse_config_text(text, source=path)
