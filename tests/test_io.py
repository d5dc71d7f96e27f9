# topmark:header:start
#
#   project      : ECResolve
#   file         : test_io.py
#   file_relpath : tests/test_io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the filesystem capabilities."""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import pytest

from ecresolve.io import FileSystem, LocalFileSystem, MemoryFileSystem

if TYPE_CHECKING:
    from pathlib import Path


def test_both_implementations_satisfy_the_protocol() -> None:
    assert isinstance(LocalFileSystem(), FileSystem)
    assert isinstance(MemoryFileSystem(), FileSystem)


def test_memory_filesystem_lifecycle() -> None:
    fs = MemoryFileSystem({"/p/.editorconfig": "k = 1\n"})
    path = PurePosixPath("/p/.editorconfig")

    assert fs.is_file(path)
    assert fs.read_text(path, "utf-8") == "k = 1\n"

    fs.mark_unreadable(path)
    assert fs.is_file(path)
    with pytest.raises(PermissionError):
        fs.read_text(path, "utf-8")

    fs.remove(path)
    assert not fs.is_file(path)
    with pytest.raises(FileNotFoundError):
        fs.read_text(path, "utf-8")


@pytest.mark.integration
def test_local_filesystem_preserves_line_endings(tmp_path: Path) -> None:
    target: Path = tmp_path / "cfg"
    target.write_bytes(b"a = 1\r\nb = 2\r\n")
    fs = LocalFileSystem()

    assert fs.is_file(target)
    assert not fs.is_file(tmp_path)
    assert not fs.is_file(tmp_path / "missing")
    assert fs.read_text(target, "utf-8") == "a = 1\r\nb = 2\r\n"
