# topmark:header:start
#
#   project      : ECResolve
#   file         : resolver.py
#   file_relpath : src/ecresolve/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Hierarchical resolution of per-file properties.

Layered discovery semantics:
    * We walk from the file's directory up to the filesystem root, reading the
      config file (``.editorconfig`` by default) at each level if there is one.
    * Levels are visited **nearest → root-most**, and a key is only set when it
      is not already set, so the nearest directory wins.
    * Within one file, matching sections are applied in file order (later
      section wins) before the level is merged.
    * Global (sectionless) properties are merged separately with the same
      nearest-wins rule and only fill gaps left by section properties.
    * If a level sets ``root = true`` in its global table, the walk stops after
      that level. The root key itself is a directive, not a property, and is
      left out of the result.

Failure isolation:
    * A missing or unreadable config file skips that level.
    * An invalid section header skips that section.
    * `resolve()` always returns a (possibly empty) read-only mapping.
"""

from __future__ import annotations

import os
from pathlib import PurePath
from types import MappingProxyType
from typing import TYPE_CHECKING

from ecresolve.cache import ResolutionCache
from ecresolve.config.logging import get_logger
from ecresolve.config.settings import ResolverSettings
from ecresolve.errors import InvalidPatternError
from ecresolve.io import LocalFileSystem
from ecresolve.parser import load_config_file

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ecresolve.config.logging import EcresolveLogger
    from ecresolve.io import FileSystem
    from ecresolve.parser import ConfigLevel
    from ecresolve.types import PropertyTable, ResolvedProperties

logger: EcresolveLogger = get_logger(__name__)


class HierarchicalResolver:
    """Resolve the merged property table for files, with per-file memoization.

    All collaborators are injected; each resolver owns (or shares) an explicit
    cache that callers can invalidate when config files change on disk.
    """

    def __init__(
        self,
        settings: ResolverSettings | None = None,
        fs: FileSystem | None = None,
        cache: ResolutionCache[ResolvedProperties] | None = None,
    ) -> None:
        self.settings: ResolverSettings = settings if settings is not None else ResolverSettings()
        self.fs: FileSystem = fs if fs is not None else LocalFileSystem()
        self.cache: ResolutionCache[ResolvedProperties] = (
            cache if cache is not None else ResolutionCache()
        )

    def resolve(self, file_path: str | PurePath) -> ResolvedProperties:
        """Return the properties that apply to ``file_path``.

        The result is cached under the absolute path until invalidated.

        Args:
            file_path (str | PurePath): Path of the file; relative paths are made
                absolute against the current working directory.

        Returns:
            ResolvedProperties: A read-only mapping of property key to typed value.
        """
        path: PurePath = _absolute(file_path)
        return self.cache.get_or_compute(str(path), lambda: self._compute(path))

    def levels(self, file_path: str | PurePath) -> Iterator[tuple[PurePath, ConfigLevel]]:
        """Yield ``(directory, level)`` for each config file that applies, nearest first.

        The walk stops after a level marked as root, or at the filesystem root.
        Directories without a readable config file are skipped. Nothing is cached.

        Args:
            file_path (str | PurePath): Path of the file being resolved.

        Yields:
            tuple[PurePath, ConfigLevel]: Directory and its parsed config file.
        """
        directory: PurePath = _absolute(file_path).parent
        while True:
            level: ConfigLevel | None = load_config_file(
                directory / self.settings.config_filename, self.fs, self.settings
            )
            if level is not None:
                yield directory, level
                if level.is_root(self.settings.root_key):
                    logger.debug(
                        "Stopping upward config discovery at %s due to root=true", directory
                    )
                    return
            parent: PurePath = directory.parent
            if parent == directory:
                return
            directory = parent

    def invalidate(self, file_path: str | PurePath) -> bool:
        """Forget the cached result for one file.

        Returns:
            bool: True if an entry was removed.
        """
        return self.cache.invalidate(str(_absolute(file_path)))

    def invalidate_directory(self, directory: str | PurePath) -> int:
        """Forget cached results for every file under ``directory``.

        Returns:
            int: Number of entries removed.
        """
        return self.cache.invalidate_prefix(_absolute(directory))

    def invalidate_config(self, config_path: str | PurePath) -> int:
        """Forget cached results affected by a change to the config file at ``config_path``.

        Returns:
            int: Number of entries removed.
        """
        return self.invalidate_directory(_absolute(config_path).parent)

    def clear_cache(self) -> None:
        """Forget all cached results."""
        self.cache.clear()

    def _compute(self, path: PurePath) -> ResolvedProperties:
        global_merged: PropertyTable = {}
        section_merged: PropertyTable = {}
        root_key: str = self.settings.root_key.lower()

        for directory, level in self.levels(path):
            relative: str = path.relative_to(directory).as_posix()

            level_sections: PropertyTable = {}
            for section in level.sections:
                compiled = section.pattern
                if isinstance(compiled, InvalidPatternError):
                    logger.debug(
                        "%s:%d: skipping section: %s", level.path, section.lineno, compiled
                    )
                    continue
                matched: bool = compiled.matches(path.name, relative)
                logger.trace(
                    "Section [%s] in %s matches %s: %s",
                    section.header,
                    directory,
                    relative,
                    matched,
                )
                if matched:
                    # Later sections in the same file win
                    level_sections.update(section.properties)

            for key, value in level_sections.items():
                section_merged.setdefault(key, value)
            for key, value in level.global_properties.items():
                if key.lower() != root_key:
                    global_merged.setdefault(key, value)

        resolved: PropertyTable = {**global_merged, **section_merged}
        logger.debug("Resolved %d properties for %s", len(resolved), path)
        return MappingProxyType(resolved)


def _absolute(path: str | PurePath) -> PurePath:
    return PurePath(os.path.abspath(path))
