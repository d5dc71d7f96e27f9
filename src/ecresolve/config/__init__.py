# topmark:header:start
#
#   project      : ECResolve
#   file         : __init__.py
#   file_relpath : src/ecresolve/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ambient configuration for ECResolve: logging setup and resolver settings."""

from __future__ import annotations

from ecresolve.config.settings import ResolverSettings

__all__ = ["ResolverSettings"]
