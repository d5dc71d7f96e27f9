# topmark:header:start
#
#   project      : ECResolve
#   file         : settings.py
#   file_relpath : src/ecresolve/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolver settings.

`ResolverSettings` is the single, immutable knob set consumed by the parser and
the hierarchical resolver. Hosts usually take the defaults (``.editorconfig``,
``root``, UTF-8); tooling can override them explicitly or through the
environment via [`ResolverSettings.from_env`][ecresolve.config.settings.ResolverSettings.from_env].
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ecresolve.config.logging import get_logger
from ecresolve.constants import (
    DEFAULT_CONFIG_FILENAME,
    DEFAULT_ENCODING,
    DEFAULT_ROOT_KEY,
    ENV_CONFIG_FILENAME,
    ENV_ENCODING,
    ENV_ROOT_KEY,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ecresolve.config.logging import EcresolveLogger

logger: EcresolveLogger = get_logger(__name__)


@dataclass(frozen=True)
class ResolverSettings:
    """Immutable settings for config discovery and parsing.

    Attributes:
        config_filename (str): File name looked up in every directory of the walk.
        root_key (str): Global key that stops the walk when set to ``true``.
            Compared case-insensitively.
        encoding (str): Text encoding used to read config files.
    """

    config_filename: str = DEFAULT_CONFIG_FILENAME
    root_key: str = DEFAULT_ROOT_KEY
    encoding: str = DEFAULT_ENCODING

    def __post_init__(self) -> None:
        if not self.config_filename or "/" in self.config_filename:
            raise ValueError(f"config_filename must be a bare file name: {self.config_filename!r}")
        if not self.root_key:
            raise ValueError("root_key must not be empty")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ResolverSettings:
        """Build settings from ``ECRESOLVE_*`` environment variables.

        Blank or missing variables fall back to the defaults.

        Args:
            environ (Mapping[str, str] | None): Environment to read; defaults to
                ``os.environ``.

        Returns:
            ResolverSettings: The resulting settings.
        """
        env: Mapping[str, str] = os.environ if environ is None else environ
        defaults = cls()

        def _pick(name: str, default: str) -> str:
            raw: str = env.get(name, "").strip()
            return raw or default

        settings = cls(
            config_filename=_pick(ENV_CONFIG_FILENAME, defaults.config_filename),
            root_key=_pick(ENV_ROOT_KEY, defaults.root_key),
            encoding=_pick(ENV_ENCODING, defaults.encoding),
        )
        logger.debug("Resolver settings from environment: %s", settings)
        return settings
