# topmark:header:start
#
#   project      : ECResolve
#   file         : test_matches_section.py
#   file_relpath : tests/glob/test_matches_section.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Section matching from the point of view of a config file in ``/project``."""

from __future__ import annotations

from pathlib import PurePosixPath

import pytest

from ecresolve.glob.compiler import matches_section

CONFIG_DIR: PurePosixPath = PurePosixPath("/project")


@pytest.mark.parametrize(
    ("section", "file_path", "expected"),
    [
        ("*", "/project/subdir/file.cpp", True),
        ("*.cpp", "/project/subdir/file.cpp", True),
        ("subdir/*.c", "/project/subdir/file.c", True),
        ("subdir/*.c", "/project/subdir/file.cpp", False),
        ("subdir/*.c", "/other/subdir/file.c", False),
        ("????.cpp", "/project/subdir/file.cpp", True),
        ("????.cpp", "/project/subdir/x.cpp", False),
        ("*.{c, h, cpp}", "/project/subdir/a.c", True),
        ("*.{c, h, cpp}", "/project/subdir/d.cpp", True),
        ("*.{c, h, cpp}", "/project/a.c/other", False),
        ("src/{test, lib}/**", "/project/src/test/subdir/test.c", True),
        ("src/{test, lib}/**", "/project/src/other/test.cpp", False),
        ("src/{test, lib}/**", "/other/src/test/test.c", False),
        ("src/{test, lib}/**/*.{c, h, cpp}", "/project/src/lib/test.c", True),
        ("src/{test, lib}/**/*.{c, h, cpp}", "/project/src/test/subdir/test.hpp", False),
        ("test{10..1000}.c", "/project/subdir/test100.c", True),
        ("test{10..1000}.c", "/project/subdir/test1001.c", False),
        ("test{0..101}.c", "/project/subdir/test101.c", True),
        ("test{0..101}.c", "/project/subdir/test102.c", False),
        ("test{123..456}.c", "/project/subdir/test-123.c", False),
    ],
)
def test_matches_section(section: str, file_path: str, expected: bool) -> None:
    """Sections select files below the config directory by basename or relative path."""
    assert matches_section(CONFIG_DIR, file_path, section) is expected


def test_invalid_section_never_matches() -> None:
    """A malformed header is fail-closed."""
    assert matches_section(CONFIG_DIR, "/project/a.c", "[a") is False
    assert matches_section(CONFIG_DIR, "/project/a.c", "a.{c") is False


def test_accepts_string_config_dir() -> None:
    """Plain strings are accepted for both paths."""
    assert matches_section("/project", "/project/lib/x.h", "lib/*.h") is True
