# topmark:header:start
#
#   project      : ECResolve
#   file         : compiler.py
#   file_relpath : src/ecresolve/glob/compiler.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Compile section-header globs into anchored regular expressions.

Supported dialect (single left-to-right pass):

| Token            | Meaning                                                        |
|------------------|----------------------------------------------------------------|
| ``*``            | any run of characters except ``/``                             |
| ``**``           | any run of characters including ``/``; whole segments only     |
| ``?``            | exactly one character                                          |
| ``[abc]``        | one character from the class (``a-z`` ranges allowed)          |
| ``[!abc]``       | one character not in the class (never ``/``)                   |
| ``{a,b,c}``      | alternation; options are compiled recursively and trimmed      |
| ``{n1..n2}``     | an integer in the inclusive range (see `ecresolve.glob.ranges`)|
| ``/``            | path separator; switches matching to the config-relative path  |
| ``\\x``          | ``x`` as a literal                                             |

A pattern without ``/`` is matched against the file's basename. A pattern with a
``/`` anywhere is matched against the file's path relative to the directory that
holds the config file; a leading ``/`` only anchors the pattern there.

A numeric range only matches a maximal run of digits: it never matches when
another digit follows, so adjacent numeric tokens such as ``{1..3}{4..6}`` or
``{1..3}0`` match nothing. Range bounds are limited to 64 digits and braces to 64
levels of nesting.

Compilation is fail-closed: any malformed construct raises
[`InvalidPatternError`][ecresolve.errors.InvalidPatternError] and no matcher is
produced for the section.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING, Final, Union

from ecresolve.config.logging import get_logger
from ecresolve.errors import InvalidIntervalError, InvalidPatternError
from ecresolve.glob.ranges import build_range_regex

if TYPE_CHECKING:
    from ecresolve.config.logging import EcresolveLogger

logger: EcresolveLogger = get_logger(__name__)

_RANGE_RE: Final[re.Pattern[str]] = re.compile(r"\s*([+-]?\d+)\.\.([+-]?\d+)\s*")

# Limits that keep translation within the interpreter's recursion and int-parsing bounds
_MAX_BRACE_DEPTH: Final[int] = 64
_MAX_RANGE_DIGITS: Final[int] = 64

# Characters that need escaping inside a regex character class
_CLASS_SPECIALS: Final[frozenset[str]] = frozenset("\\]^-[")


class MatchTarget(Enum):
    """What a compiled section pattern is matched against."""

    BASENAME = "basename"
    CONFIG_RELATIVE = "config-relative"


@dataclass(frozen=True)
class CompiledPattern:
    """Immutable, reusable matcher for one section header.

    Attributes:
        source (str): The section header text as written.
        regex (re.Pattern[str]): The compiled expression (used with `fullmatch`).
        match_against (MatchTarget): Whether to test the basename or the
            config-relative path.
    """

    source: str
    regex: re.Pattern[str]
    match_against: MatchTarget

    def matches(self, basename: str, relative_path: str) -> bool:
        """Return True if the pattern accepts the file.

        Args:
            basename (str): Final path component of the file.
            relative_path (str): ``/``-separated path of the file relative to the
                directory containing the config file.

        Returns:
            bool: Whether the file is selected by this section.
        """
        target: str = basename if self.match_against is MatchTarget.BASENAME else relative_path
        return self.regex.fullmatch(target) is not None


# Tagged compile result: either a matcher or the reason there is none.
CompileResult = Union[CompiledPattern, InvalidPatternError]


@functools.lru_cache(maxsize=1024)
def compile_section_pattern(pattern: str) -> CompiledPattern:
    """Compile a section header into a `CompiledPattern`.

    Results are memoized per distinct pattern string.

    Args:
        pattern (str): The section header text (without the surrounding brackets).

    Returns:
        CompiledPattern: The matcher.

    Raises:
        InvalidPatternError: If the pattern is malformed.
    """
    body: str = pattern
    anchored: bool = body.startswith("/")
    if anchored:
        body = body[1:]

    translator = _Translator(pattern)
    source, has_separator = translator.translate(body, offset=len(pattern) - len(body))
    target: MatchTarget = (
        MatchTarget.CONFIG_RELATIVE if anchored or has_separator else MatchTarget.BASENAME
    )
    logger.trace("Compiled section %r -> %r (%s)", pattern, source, target.value)
    return CompiledPattern(
        source=pattern,
        regex=re.compile(source, re.DOTALL),
        match_against=target,
    )


def try_compile_section_pattern(pattern: str) -> CompileResult:
    """Compile ``pattern``, returning the error as a value instead of raising.

    Args:
        pattern (str): The section header text.

    Returns:
        CompileResult: A `CompiledPattern`, or the `InvalidPatternError` that
            explains why there is none.
    """
    try:
        return compile_section_pattern(pattern)
    except InvalidPatternError as exc:
        return exc


def matches_section(config_dir: str | PurePath, file_path: str | PurePath, section: str) -> bool:
    """Return True if ``section`` in a config under ``config_dir`` selects ``file_path``.

    Invalid patterns never match, and neither do files outside ``config_dir``.

    Args:
        config_dir (str | PurePath): Directory holding the config file.
        file_path (str | PurePath): Absolute path of the file being resolved.
        section (str): The section header text.

    Returns:
        bool: Whether the section applies to the file.
    """
    compiled: CompileResult = try_compile_section_pattern(section)
    if isinstance(compiled, InvalidPatternError):
        return False
    path = PurePath(file_path)
    try:
        relative: str = path.relative_to(PurePath(config_dir)).as_posix()
    except ValueError:
        return False
    return compiled.matches(path.name, relative)


class _Translator:
    """Glob-to-regex translation for one section header.

    The translator works on slices of the header (brace options are translated
    recursively) but always reports offsets and errors against the full header.
    """

    def __init__(self, pattern: str) -> None:
        self.pattern: str = pattern
        self._depth: int = 0

    def error(self, reason: str, position: int | None = None) -> InvalidPatternError:
        return InvalidPatternError(self.pattern, reason, position)

    def translate(
        self,
        text: str,
        *,
        offset: int = 0,
        starts_segment: bool = True,
        ends_segment: bool = True,
    ) -> tuple[str, bool]:
        """Translate ``text`` into regex source.

        Args:
            text (str): The slice of the header to translate.
            offset (int): Offset of ``text`` within the full header.
            starts_segment (bool): Whether ``text`` begins at a path-segment boundary.
            ends_segment (bool): Whether ``text`` ends at a path-segment boundary.

        Returns:
            tuple[str, bool]: The regex source, and whether a ``/`` was seen.
        """
        out: list[str] = []
        has_separator: bool = False
        i: int = 0
        n: int = len(text)

        while i < n:
            c: str = text[i]
            if c == "\\":
                if i + 1 >= n:
                    raise self.error("trailing escape character", offset + i)
                escaped: str = text[i + 1]
                has_separator = has_separator or escaped == "/"
                out.append(re.escape(escaped))
                i += 2
            elif c == "*":
                if i + 1 < n and text[i + 1] == "*":
                    source, i, crossed = self._double_star(
                        text, i, offset, starts_segment, ends_segment
                    )
                    out.append(source)
                    has_separator = has_separator or crossed
                else:
                    out.append("[^/]*")
                    i += 1
            elif c == "?":
                out.append(".")
                i += 1
            elif c == "[":
                source, i = self._char_class(text, i, offset)
                out.append(source)
            elif c == "{":
                close: int = self._matching_brace(text, i, offset)
                before: bool = (i == 0 and starts_segment) or (i > 0 and text[i - 1] == "/")
                after: bool = (close == n - 1 and ends_segment) or (
                    close + 1 < n and text[close + 1] == "/"
                )
                if self._depth >= _MAX_BRACE_DEPTH:
                    raise self.error("braces nested too deeply", offset + i)
                self._depth += 1
                try:
                    source, crossed = self._braces(
                        text[i + 1 : close],
                        offset + i + 1,
                        starts_segment=before,
                        ends_segment=after,
                    )
                finally:
                    self._depth -= 1
                out.append(source)
                has_separator = has_separator or crossed
                i = close + 1
            elif c == "/":
                out.append("/")
                has_separator = True
                i += 1
            else:
                out.append(re.escape(c))
                i += 1

        return "".join(out), has_separator

    def _double_star(
        self,
        text: str,
        i: int,
        offset: int,
        starts_segment: bool,
        ends_segment: bool,
    ) -> tuple[str, int, bool]:
        """Translate ``**`` at ``text[i]``; returns (source, next index, consumed '/')."""
        end: int = i + 2
        n: int = len(text)
        if end < n and text[end] == "*":
            raise self.error("'***' is not a valid wildcard", offset + i)
        before_ok: bool = (i == 0 and starts_segment) or (i > 0 and text[i - 1] == "/")
        after_ok: bool = (end == n and ends_segment) or (end < n and text[end] == "/")
        if not (before_ok and after_ok):
            raise self.error("'**' must be a whole path segment", offset + i)
        if end < n:
            # "**/" also matches nothing, so the separator is optional
            return "(?:.*/)?", end + 1, True
        return ".*", end, False

    def _char_class(self, text: str, i: int, offset: int) -> tuple[str, int]:
        """Translate ``[...]`` starting at ``text[i]``; returns (source, next index)."""
        j: int = i + 1
        n: int = len(text)
        negate: bool = j < n and text[j] == "!"
        if negate:
            j += 1

        members: list[str] = []
        while j < n and text[j] != "]":
            c: str = text[j]
            if c == "\\":
                if j + 1 >= n:
                    raise self.error("trailing escape character", offset + j)
                c = text[j + 1]
                j += 1
            members.append(c)
            j += 1
        if j >= n:
            raise self.error("unterminated character class", offset + i)
        if not members:
            raise self.error("empty character class", offset + i)

        parts: list[str] = []
        k: int = 0
        while k < len(members):
            # a-z when '-' sits between two members
            if k + 2 < len(members) and members[k + 1] == "-":
                lo, hi = members[k], members[k + 2]
                if lo > hi:
                    raise self.error(f"reversed range '{lo}-{hi}' in character class", offset + i)
                parts.append(f"{_class_char(lo)}-{_class_char(hi)}")
                k += 3
            else:
                parts.append(_class_char(members[k]))
                k += 1

        body: str = "".join(parts)
        source: str = f"[^/{body}]" if negate else f"[{body}]"
        return source, j + 1

    def _matching_brace(self, text: str, i: int, offset: int) -> int:
        """Return the index of the ``}`` closing the ``{`` at ``text[i]``."""
        depth: int = 0
        j: int = i
        n: int = len(text)
        while j < n:
            c: str = text[j]
            if c == "\\":
                j += 2
                continue
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
                if depth == 0:
                    return j
            j += 1
        raise self.error("unterminated brace", offset + i)

    def _braces(
        self,
        content: str,
        offset: int,
        *,
        starts_segment: bool,
        ends_segment: bool,
    ) -> tuple[str, bool]:
        """Translate the inside of a ``{...}`` group."""
        m: re.Match[str] | None = _RANGE_RE.fullmatch(content)
        if m is not None:
            for bound in (m.group(1), m.group(2)):
                if len(bound.lstrip("+-0")) > _MAX_RANGE_DIGITS:
                    raise self.error(
                        f"range bound exceeds {_MAX_RANGE_DIGITS} digits", offset - 1
                    )
            start, end = int(m.group(1)), int(m.group(2))
            try:
                source: str = build_range_regex(start, end)
            except InvalidIntervalError as exc:
                raise InvalidIntervalError(start, end, self.pattern) from exc
            # The numeral must not continue with further digits
            return f"(?:{source})(?![0-9])", False

        options: list[tuple[str, int]] = self._split_options(content, offset)
        if len(options) == 1:
            inner, crossed = self.translate(
                content, offset=offset, starts_segment=False, ends_segment=False
            )
            return re.escape("{") + inner + re.escape("}"), crossed

        sources: list[str] = []
        has_separator: bool = False
        for option, option_offset in options:
            stripped: str = option.strip()
            lead: int = len(option) - len(option.lstrip())
            source, crossed = self.translate(
                stripped,
                offset=option_offset + lead,
                starts_segment=starts_segment,
                ends_segment=ends_segment,
            )
            sources.append(source)
            has_separator = has_separator or crossed
        return "(?:" + "|".join(sources) + ")", has_separator

    def _split_options(self, content: str, offset: int) -> list[tuple[str, int]]:
        """Split brace content on top-level commas; returns (option, offset) pairs."""
        options: list[tuple[str, int]] = []
        depth: int = 0
        start: int = 0
        j: int = 0
        n: int = len(content)
        while j < n:
            c: str = content[j]
            if c == "\\":
                j += 2
                continue
            if c == "{":
                depth += 1
            elif c == "}":
                depth -= 1
            elif c == "," and depth == 0:
                options.append((content[start:j], offset + start))
                start = j + 1
            j += 1
        options.append((content[start:], offset + start))
        return options


def _class_char(c: str) -> str:
    return "\\" + c if c in _CLASS_SPECIALS else c
