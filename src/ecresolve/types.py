# topmark:header:start
#
#   project      : ECResolve
#   file         : types.py
#   file_relpath : src/ecresolve/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared type aliases for property tables."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Union

# A coerced property value: booleans and numbers are typed at parse time,
# everything else stays a string.
PropertyValue = Union[str, bool, int, float]

# Mutable table built while parsing or merging.
PropertyTable = dict[str, PropertyValue]

# Read-only table handed out by the resolver.
ResolvedProperties = Mapping[str, PropertyValue]
