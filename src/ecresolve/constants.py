# topmark:header:start
#
#   project      : ECResolve
#   file         : constants.py
#   file_relpath : src/ecresolve/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ECResolve Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    ECRESOLVE_VERSION: str = get_version("ecresolve")
except PackageNotFoundError:  # running from a source checkout
    ECRESOLVE_VERSION = "0.0.0"

# Name of the per-directory configuration file looked up during the upward walk
DEFAULT_CONFIG_FILENAME: Final[str] = ".editorconfig"

# Reserved global key that marks a directory as the top of the hierarchy
DEFAULT_ROOT_KEY: Final[str] = "root"

DEFAULT_ENCODING: Final[str] = "utf-8"

# Environment variables
ENV_LOG_LEVEL: Final[str] = "ECRESOLVE_LOG_LEVEL"
ENV_CONFIG_FILENAME: Final[str] = "ECRESOLVE_CONFIG_FILENAME"
ENV_ROOT_KEY: Final[str] = "ECRESOLVE_ROOT_KEY"
ENV_ENCODING: Final[str] = "ECRESOLVE_ENCODING"
