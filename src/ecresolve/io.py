# topmark:header:start
#
#   project      : ECResolve
#   file         : io.py
#   file_relpath : src/ecresolve/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Filesystem read capability used by the resolver.

The resolver only needs two operations: "is there a regular file here?" and
"read this file as text". Parent and root detection are pure path operations
(``path.parent == path`` at the filesystem root) and need no I/O.

Implementations:
    * `LocalFileSystem`: the real filesystem, through `pathlib`.
    * `MemoryFileSystem`: a dict-backed tree for hosts that resolve unsaved
      buffers, and for tests.
"""

from __future__ import annotations

from pathlib import Path, PurePath
from threading import RLock
from typing import Protocol, runtime_checkable


@runtime_checkable
class FileSystem(Protocol):
    """Read-only filesystem operations required by the resolver."""

    def is_file(self, path: PurePath) -> bool:
        """Return True if ``path`` names an existing regular file."""
        ...

    def read_text(self, path: PurePath, encoding: str) -> str:
        """Return the decoded contents of ``path``.

        Raises:
            OSError: If the file is missing or unreadable.
            UnicodeDecodeError: If the contents are not valid in ``encoding``.
        """
        ...


class LocalFileSystem:
    """`FileSystem` backed by the local disk."""

    def is_file(self, path: PurePath) -> bool:
        try:
            return Path(path).is_file()
        except OSError:
            # e.g. permission denied on a parent directory
            return False

    def read_text(self, path: PurePath, encoding: str) -> str:
        # newline="" keeps "\r\n" intact; the parser splits both forms itself
        with open(Path(path), encoding=encoding, newline="") as fh:
            return fh.read()


class MemoryFileSystem:
    """In-memory `FileSystem` keyed by absolute POSIX-style paths.

    Paths registered with `mark_unreadable()` still report as files but raise
    `PermissionError` when read, mirroring a config file the process cannot open.
    """

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self._lock = RLock()
        self._files: dict[PurePath, str] = {}
        self._unreadable: set[PurePath] = set()
        for path, text in (files or {}).items():
            self.add(path, text)

    def add(self, path: str | PurePath, text: str) -> None:
        """Create or replace the file at ``path``."""
        with self._lock:
            self._files[PurePath(path)] = text

    def remove(self, path: str | PurePath) -> None:
        """Delete the file at ``path`` if present."""
        with self._lock:
            self._files.pop(PurePath(path), None)
            self._unreadable.discard(PurePath(path))

    def mark_unreadable(self, path: str | PurePath) -> None:
        """Make reads of ``path`` fail with `PermissionError`."""
        with self._lock:
            self._unreadable.add(PurePath(path))

    def is_file(self, path: PurePath) -> bool:
        with self._lock:
            return PurePath(path) in self._files

    def read_text(self, path: PurePath, encoding: str) -> str:
        key = PurePath(path)
        with self._lock:
            if key in self._unreadable:
                raise PermissionError(f"Permission denied: {key}")
            try:
                return self._files[key]
            except KeyError:
                raise FileNotFoundError(f"No such file: {key}") from None
